# tests/test_schema.py

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import inspect, text

from taskboard.config import Settings
from taskboard.db.schema import init_schema
from taskboard.db.session import Database

from .conftest import make_settings, running_app
from .fakes import FakeXAI

LEGACY_TASKS_DDL = """
CREATE TABLE tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT NOT NULL,
    tags TEXT NOT NULL,
    deadline TEXT,
    project TEXT NOT NULL,
    assignee TEXT NOT NULL,
    status VARCHAR(20) NOT NULL DEFAULT 'todo',
    in_sprint BOOLEAN NOT NULL DEFAULT 0
)
"""

LEGACY_ROWS = [
    ("Migrate CI", "[\"ops\"]", " Platform ", "Ada"),
    ("Fix login", "[]", "General", " Grace"),
    ("Write docs", "[]", "Platform", ""),
]


async def create_legacy_store(settings: Settings) -> None:
    """A tasks table from before notes and the lookup tables existed."""
    database = Database(settings)
    try:
        async with database.engine.begin() as conn:
            await conn.execute(text(LEGACY_TASKS_DDL))
            for title, tags, project, assignee in LEGACY_ROWS:
                await conn.execute(
                    text(
                        "INSERT INTO tasks (title, description, tags, project, assignee) "
                        "VALUES (:title, '', :tags, :project, :assignee)"
                    ),
                    {"title": title, "tags": tags, "project": project, "assignee": assignee},
                )
    finally:
        await database.close()


async def table_rows(database: Database, table: str) -> list[tuple]:
    async with database.engine.connect() as conn:
        result = await conn.execute(text(f"SELECT id, name FROM {table} ORDER BY id"))
        return [tuple(row) for row in result]


async def task_columns(database: Database) -> set[str]:
    async with database.engine.connect() as conn:
        return await conn.run_sync(
            lambda sync_conn: {c["name"] for c in inspect(sync_conn).get_columns("tasks")}
        )


@pytest.mark.asyncio
async def test_fresh_store_is_seeded(tmp_path: Path) -> None:
    database = Database(make_settings(tmp_path))
    try:
        await init_schema(database)

        assert (tmp_path / "tasks.db").exists()
        assert "notes" in await task_columns(database)
        assert await table_rows(database, "projects") == [(1, "General")]
        assert await table_rows(database, "assignees") == [(1, "Unassigned")]
    finally:
        await database.close()


@pytest.mark.asyncio
async def test_schema_step_is_idempotent(tmp_path: Path) -> None:
    database = Database(make_settings(tmp_path))
    try:
        await init_schema(database)
        await init_schema(database)
        await init_schema(database)

        assert await table_rows(database, "projects") == [(1, "General")]
        assert await table_rows(database, "assignees") == [(1, "Unassigned")]
    finally:
        await database.close()


@pytest.mark.asyncio
async def test_legacy_store_is_upgraded(tmp_path: Path) -> None:
    settings = make_settings(tmp_path)
    await create_legacy_store(settings)

    database = Database(settings)
    try:
        await init_schema(database)

        assert "notes" in await task_columns(database)

        projects = await table_rows(database, "projects")
        assert projects[0] == (1, "General")
        assert sorted(name for _, name in projects) == ["General", "Platform"]

        assignees = await table_rows(database, "assignees")
        assert assignees[0] == (1, "Unassigned")
        # Blank names are not backfilled
        assert sorted(name for _, name in assignees) == ["Ada", "Grace", "Unassigned"]

        # A second run adds nothing
        await init_schema(database)
        assert await table_rows(database, "projects") == projects
        assert await table_rows(database, "assignees") == assignees
    finally:
        await database.close()


@pytest.mark.asyncio
async def test_legacy_rows_are_served(tmp_path: Path) -> None:
    settings = make_settings(tmp_path)
    await create_legacy_store(settings)

    async with running_app(settings, FakeXAI()) as client:
        tasks = (await client.get("/tasks")).json()

        assert [t["title"] for t in tasks] == ["Migrate CI", "Fix login", "Write docs"]
        assert tasks[0]["tags"] == ["ops"]
        assert all(t["notes"] is None for t in tasks)
        assert all(t["status"] == "todo" and t["in_sprint"] is False for t in tasks)

        # Backfilled names are usable as references
        resp = await client.post(
            "/tasks",
            json={
                "title": "Rotate keys",
                "description": "",
                "tags": [],
                "project": "Platform",
                "assignee": "Grace",
            },
        )
        assert resp.status_code == 201

        # New ids continue after the seeded defaults
        resp = await client.post("/projects", json={"name": "Mobile"})
        assert resp.status_code == 201
        assert resp.json()["id"] > 2


@pytest.mark.asyncio
async def test_in_memory_store_serves_requests(tmp_path: Path) -> None:
    settings = make_settings(tmp_path).model_copy(update={"database_url": "sqlite::memory:"})

    async with running_app(settings, FakeXAI()) as client:
        resp = await client.post(
            "/tasks",
            json={
                "title": "Scratch",
                "description": "",
                "tags": [],
                "project": "General",
                "assignee": "Unassigned",
            },
        )
        assert resp.status_code == 201
        assert [t["title"] for t in (await client.get("/tasks")).json()] == ["Scratch"]

    assert list(tmp_path.iterdir()) == []


@pytest.mark.asyncio
@pytest.mark.parametrize("url", ["sqlite://tasks.db", "sqlite:tasks.db?mode=rwc"])
async def test_relative_sqlite_url_creates_file_in_working_dir(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, url: str
) -> None:
    monkeypatch.chdir(tmp_path)
    database = Database(make_settings(tmp_path / "unused").model_copy(update={"database_url": url}))
    try:
        assert not database.is_memory
        await init_schema(database)
    finally:
        await database.close()

    assert (tmp_path / "tasks.db").is_file()
    assert not (tmp_path / "unused").exists()
