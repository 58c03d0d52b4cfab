"""Database package."""

from taskboard.db.base import Base, JSONEncodedList
from taskboard.db.session import Database, DBSession, get_db_session

__all__ = ["Base", "Database", "DBSession", "JSONEncodedList", "get_db_session"]
