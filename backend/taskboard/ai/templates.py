"""Prompt templates for task extraction.

Templates are plain Jinja2 strings keyed by name. Rendering is strict, so a
missing variable fails loudly instead of leaving a hole in the prompt.
"""

from typing import Any

from jinja2 import BaseLoader, Environment, StrictUndefined

_jinja_env = Environment(loader=BaseLoader(), undefined=StrictUndefined)


def render_template(template_str: str, variables: dict[str, Any]) -> str:
    """Render one template string with ``variables``."""
    return _jinja_env.from_string(template_str).render(**variables)


TASK_FROM_NOTES = {
    "template_key": "task_from_notes",
    "display_name": "Extract Tasks from Notes",
    "system_prompt": """You are a task extraction assistant. Given meeting notes or any text, extract actionable tasks.

Return ONLY a valid JSON array of task objects. Each task must have:
- "title": string (required, concise task title)
- "description": string (required, detailed description)
- "tags": array of strings (e.g. ["meeting", "urgent"])
- "deadline": string or null (YYYY-MM-DD format if date is mentioned, otherwise null)
- "project": string (default "{{ default_project }}")
- "assignee": string (default "{{ default_assignee }}" if not specified)
- "status": string (one of {{ statuses | map('tojson') | join(', ') }}; default "{{ default_status }}")

Example output:
[{"title":"Review PR #123","description":"Code review for authentication module","tags":["review","urgent"],"deadline":"2025-02-25","project":"Backend","assignee":"{{ default_assignee }}","status":"{{ default_status }}"}]""",
    # Notes are embedded verbatim
    "user_prompt_template": "Extract tasks from these meeting notes:\n\n{{ notes }}",
}


DEFAULT_TEMPLATES = {
    "task_from_notes": TASK_FROM_NOTES,
}


def get_template(template_key: str) -> dict[str, str]:
    """Look up a template by key. Raises KeyError for unknown keys."""
    return DEFAULT_TEMPLATES[template_key]
