"""SQLAlchemy Base class and shared column types."""

import json

from sqlalchemy import Text
from sqlalchemy.engine import Dialect
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""


class JSONEncodedList(TypeDecorator):
    """List of strings stored as JSON text.

    Keeps element order. An empty column value reads back as an empty list.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: list[str] | None, dialect: Dialect) -> str:
        return json.dumps(list(value or []))

    def process_result_value(self, value: str | None, dialect: Dialect) -> list[str]:
        if not value:
            return []
        return json.loads(value)
