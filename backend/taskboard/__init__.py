"""Taskboard: task tracking API with AI task extraction."""

__version__ = "0.1.0"
