from __future__ import annotations

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from src.application.errors import StoreUnavailable
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.ports.ledger_store import LedgerStore


def create_engine(database_url: str) -> AsyncEngine:
    return create_async_engine(database_url, echo=False, future=True)


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    from src.infrastructure.db.base import Base
    from src.infrastructure.db.orm import world_state  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


class SQLAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session_factory: Callable[[], AsyncSession]) -> None:
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self.world_state: LedgerStore | None = None

    async def __aenter__(self) -> UnitOfWork:
        self.session = self._session_factory()
        from src.infrastructure.ledger.sqlalchemy_store import SQLAlchemyLedgerStore

        self.world_state = SQLAlchemyLedgerStore(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if not self.session:
            return
        try:
            if exc:
                await self.session.rollback()
        finally:
            await self.session.close()
            self.session = None
            self.world_state = None

    async def commit(self) -> None:
        if not self.session:
            return
        try:
            await self.session.commit()
        except SQLAlchemyError as exc:
            raise StoreUnavailable("Failed to commit world state") from exc

    async def rollback(self) -> None:
        if not self.session:
            return
        await self.session.rollback()
