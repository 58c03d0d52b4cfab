"""Startup schema step.

Creates missing tables, applies additive column changes to older task
tables, seeds the default lookup rows and backfills lookups from legacy
task data. Every step is idempotent.
"""

import structlog
from sqlalchemy import func, inspect, select, text
from sqlalchemy.exc import OperationalError, ProgrammingError
from sqlalchemy.ext.asyncio import AsyncConnection

from taskboard.db.base import Base
from taskboard.db.session import Database
from taskboard.models import (
    DEFAULT_ASSIGNEE_ID,
    DEFAULT_ASSIGNEE_NAME,
    DEFAULT_PROJECT_ID,
    DEFAULT_PROJECT_NAME,
    Assignee,
    Project,
    Task,
)

logger = structlog.get_logger()

# Columns added after the first release: name -> DDL fragment
ADDITIVE_TASK_COLUMNS = {
    "notes": "TEXT DEFAULT ''",
}

_ALREADY_PRESENT_MARKERS = ("duplicate column", "already exists")


async def init_schema(database: Database) -> None:
    """Bring the store up to the current schema."""
    async with database.engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    for column, ddl in ADDITIVE_TASK_COLUMNS.items():
        await _add_column_if_missing(database, "tasks", column, ddl)

    async with database.engine.begin() as conn:
        await _seed_default(conn, Project, DEFAULT_PROJECT_ID, DEFAULT_PROJECT_NAME)
        await _seed_default(conn, Assignee, DEFAULT_ASSIGNEE_ID, DEFAULT_ASSIGNEE_NAME)
        await _backfill_lookup(conn, Project, Task.project)
        await _backfill_lookup(conn, Assignee, Task.assignee)

    logger.info("Database schema ready", backend=database.url.get_backend_name())


async def _add_column_if_missing(
    database: Database, table: str, column: str, ddl: str
) -> None:
    async with database.engine.connect() as conn:
        existing = await conn.run_sync(
            lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns(table)}
        )
    if column in existing:
        return

    try:
        async with database.engine.begin() as conn:
            await conn.execute(text(f"ALTER TABLE {table} ADD COLUMN {column} {ddl}"))
    except (OperationalError, ProgrammingError) as e:
        # Another process may have added it between inspection and ALTER
        if not any(marker in str(e.orig).lower() for marker in _ALREADY_PRESENT_MARKERS):
            raise
        logger.debug("Column already present", table=table, column=column)
        return

    logger.info("Added column", table=table, column=column)


async def _seed_default(
    conn: AsyncConnection, model: type[Project] | type[Assignee], row_id: int, name: str
) -> None:
    table = model.__table__
    result = await conn.execute(
        select(table.c.id).where((table.c.id == row_id) | (table.c.name == name))
    )
    if result.first() is not None:
        return

    await conn.execute(table.insert().values(id=row_id, name=name))
    if conn.dialect.name == "postgresql":
        # Explicit ids do not advance the serial sequence
        await conn.execute(
            text(
                f"SELECT setval(pg_get_serial_sequence('{table.name}', 'id'), "
                f"(SELECT MAX(id) FROM {table.name}))"
            )
        )
    logger.info("Seeded default row", table=table.name, name=name)


async def _backfill_lookup(
    conn: AsyncConnection, model: type[Project] | type[Assignee], task_column
) -> None:
    table = model.__table__
    trimmed = func.trim(task_column)
    result = await conn.execute(select(trimmed).where(trimmed != "").distinct())
    names = {row[0] for row in result}
    if not names:
        return

    existing = {row[0] for row in await conn.execute(select(table.c.name))}
    missing = sorted(names - existing)
    if missing:
        await conn.execute(table.insert(), [{"name": name} for name in missing])
        logger.info("Backfilled lookup rows", table=table.name, count=len(missing))
