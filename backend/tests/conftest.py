# tests/conftest.py

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import httpx
import pytest
import pytest_asyncio
from pydantic import SecretStr

from taskboard.ai.providers.xai import XAIProvider
from taskboard.config import Settings
from taskboard.db.schema import init_schema
from taskboard.main import create_app

from .fakes import FakeXAI


def make_settings(tmp_path: Path, api_key: str = "test-key") -> Settings:
    """
    Settings pointing at a throwaway SQLite file.

    Init kwargs win over the process environment, so a developer's own
    XAI_API_KEY or DATABASE_URL never leaks into tests.
    """
    return Settings(
        _env_file=None,
        data_dir=tmp_path,
        database_url=None,
        xai_api_key=SecretStr(api_key),
        log_level="WARNING",
    )


@asynccontextmanager
async def running_app(settings: Settings, fake: FakeXAI) -> AsyncIterator[httpx.AsyncClient]:
    """
    App wired to the fake xAI endpoint, served in-process.

    ASGITransport does not run the lifespan, so the schema step is invoked
    here directly.
    """
    provider = XAIProvider(
        api_key=settings.xai_api_key.get_secret_value() or "unused",
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(fake.handler)),
    )
    app = create_app(settings, ai_provider=provider)
    await init_schema(app.state.database)

    transport = httpx.ASGITransport(app=app)
    try:
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client
    finally:
        await app.state.database.close()


@pytest.fixture()
def fake_xai() -> FakeXAI:
    return FakeXAI()


@pytest.fixture()
def settings(tmp_path: Path) -> Settings:
    return make_settings(tmp_path)


@pytest_asyncio.fixture()
async def client(settings: Settings, fake_xai: FakeXAI) -> AsyncIterator[httpx.AsyncClient]:
    async with running_app(settings, fake_xai) as ac:
        yield ac


@pytest_asyncio.fixture()
async def client_without_ai(tmp_path: Path, fake_xai: FakeXAI) -> AsyncIterator[httpx.AsyncClient]:
    async with running_app(make_settings(tmp_path, api_key=""), fake_xai) as ac:
        yield ac
