"""Task and lookup models."""

from sqlalchemy import Boolean, Integer, String, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from taskboard.db.base import Base, JSONEncodedList

DEFAULT_PROJECT_ID = 1
DEFAULT_PROJECT_NAME = "General"
DEFAULT_ASSIGNEE_ID = 1
DEFAULT_ASSIGNEE_NAME = "Unassigned"


class Project(Base):
    """Named project a task is filed under."""

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)


class Assignee(Base):
    """Named person a task is assigned to."""

    __tablename__ = "assignees"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False, unique=True)


class Task(Base):
    """Tracked work item.

    project and assignee hold lookup names rather than foreign keys; they are
    checked against the lookup tables at write time.
    """

    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Basic info
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    tags: Mapped[list[str]] = mapped_column(JSONEncodedList, nullable=False)
    deadline: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Classification
    project: Mapped[str] = mapped_column(Text, nullable=False)
    assignee: Mapped[str] = mapped_column(Text, nullable=False)

    # Workflow
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="todo", server_default="todo"
    )  # todo, in_progress, done, blocked
    in_sprint: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )

    # Empty string means no notes
    notes: Mapped[str | None] = mapped_column(Text, nullable=True, default="", server_default="")
