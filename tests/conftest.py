from __future__ import annotations

import os
import sys
from collections.abc import AsyncIterator
from pathlib import Path

import pytest
from httpx import ASGITransport, AsyncClient

os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///default.db")

PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT))

# ruff: noqa: E402
from src.config.settings import Settings
from src.infrastructure.db.session import (
    SQLAlchemyUnitOfWork,
    create_engine,
    create_schema,
    create_session_factory,
)
from src.infrastructure.ledger.memory_store import InMemoryLedgerStore, InMemoryUnitOfWork
from src.interfaces.http.main import create_app


@pytest.fixture()
def test_settings(tmp_path) -> Settings:
    db_path = tmp_path / "ledger.db"
    return Settings.model_validate(
        {
            "database_url": f"sqlite+aiosqlite:///{db_path}",
            "log_level": "INFO",
            "environment": "test",
            "auto_create_schema": True,
            "seed_on_startup": False,
        }
    )


@pytest.fixture()
def memory_store() -> InMemoryLedgerStore:
    return InMemoryLedgerStore()


@pytest.fixture()
async def session_factory(test_settings: Settings):
    engine = create_engine(test_settings.database_url)
    await create_schema(engine)
    try:
        yield create_session_factory(engine)
    finally:
        await engine.dispose()


@pytest.fixture(params=["memory", "sqlalchemy"])
async def uow(request, memory_store: InMemoryLedgerStore, test_settings: Settings):
    """A unit of work over each world state backend."""
    if request.param == "memory":
        async with InMemoryUnitOfWork(memory_store) as memory_uow:
            yield memory_uow
        return
    engine = create_engine(test_settings.database_url)
    await create_schema(engine)
    try:
        async with SQLAlchemyUnitOfWork(create_session_factory(engine)) as sql_uow:
            yield sql_uow
    finally:
        await engine.dispose()


@pytest.fixture()
def app(test_settings: Settings, memory_store: InMemoryLedgerStore):
    return create_app(settings=test_settings, store=memory_store)


@pytest.fixture()
async def client(app) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
