from __future__ import annotations

from collections.abc import AsyncIterator

from fastapi import Request

from src.application.interfaces.unit_of_work import UnitOfWork
from src.config.settings import Settings, get_settings
from src.infrastructure.db.session import SQLAlchemyUnitOfWork
from src.infrastructure.ledger.memory_store import InMemoryUnitOfWork


def build_uow(app_state) -> UnitOfWork:
    store = getattr(app_state, "ledger_store", None)
    if store is not None:
        return InMemoryUnitOfWork(store)
    session_factory = getattr(app_state, "session_factory", None)
    if session_factory is None:
        raise RuntimeError("Session factory not configured")
    return SQLAlchemyUnitOfWork(session_factory)


async def get_uow(request: Request) -> AsyncIterator[UnitOfWork]:
    uow = build_uow(request.app.state)
    async with uow:
        yield uow


def get_app_settings() -> Settings:
    return get_settings()
