from __future__ import annotations

from datetime import datetime, timezone

import pytest
from httpx import ASGITransport, AsyncClient

from leaguepanel.api import create_app
from leaguepanel.auth import StaticTokenGateway
from leaguepanel.config import Settings
from leaguepanel.context import AppContext
from leaguepanel.persistence import SQLiteDocumentStore


TOKEN = "test-token"
AUTH_HEADERS = {"Authorization": f"Bearer {TOKEN}"}
NOW = datetime(2024, 3, 5, 10, 30, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return NOW


def make_settings(db_path, **overrides) -> Settings:
    options = {
        "store_backend": "sqlite",
        "db_path": str(db_path),
        "base_path": "leagues/test",
        "auth_backend": "static",
        "static_tokens": {TOKEN: "tester"},
    }
    options.update(overrides)
    return Settings(**options)


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path) -> Settings:
    return make_settings(tmp_path / "league.sqlite")


@pytest.fixture
def store(settings) -> SQLiteDocumentStore:
    return SQLiteDocumentStore(settings.db_path)


@pytest.fixture
def context(settings, store) -> AppContext:
    return AppContext(
        settings=settings,
        store=store,
        auth=StaticTokenGateway(settings.static_tokens),
        clock=fixed_clock,
    )


@pytest.fixture
async def client(context):
    app = create_app(context)
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as async_client:
        async_client.app = app
        yield async_client
