from __future__ import annotations

import logging
from collections.abc import AsyncIterator

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.errors import StoreUnavailable
from src.domain.ports.ledger_store import LedgerStore
from src.infrastructure.db.orm.world_state import WorldStateORM

logger = logging.getLogger(__name__)


class SQLAlchemyLedgerStore(LedgerStore):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get(self, key: str) -> bytes | None:
        try:
            orm = await self.session.get(WorldStateORM, key)
        except SQLAlchemyError as exc:
            logger.error("World state read failed for key %s: %s", key, exc)
            raise StoreUnavailable("Failed to read world state") from exc
        return orm.value if orm else None

    async def put(self, key: str, value: bytes) -> None:
        try:
            orm = await self.session.get(WorldStateORM, key)
            if orm is None:
                self.session.add(WorldStateORM(key=key, value=value, version=1))
            else:
                orm.value = value
                orm.version = orm.version + 1
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("World state write failed for key %s: %s", key, exc)
            raise StoreUnavailable("Failed to write world state") from exc

    async def delete(self, key: str) -> None:
        try:
            orm = await self.session.get(WorldStateORM, key)
            if orm is None:
                return
            await self.session.delete(orm)
            await self.session.flush()
        except SQLAlchemyError as exc:
            logger.error("World state delete failed for key %s: %s", key, exc)
            raise StoreUnavailable("Failed to delete world state") from exc

    async def get_version(self, key: str) -> int | None:
        try:
            orm = await self.session.get(WorldStateORM, key)
        except SQLAlchemyError as exc:
            raise StoreUnavailable("Failed to read world state") from exc
        return orm.version if orm else None

    async def range_scan(self, start_key: str, end_key: str) -> AsyncIterator[tuple[str, bytes]]:
        stmt = select(WorldStateORM.key, WorldStateORM.value).order_by(WorldStateORM.key)
        if start_key:
            stmt = stmt.where(WorldStateORM.key >= start_key)
        if end_key:
            stmt = stmt.where(WorldStateORM.key < end_key)
        try:
            result = await self.session.stream(stmt)
        except SQLAlchemyError as exc:
            logger.error("World state range scan failed: %s", exc)
            raise StoreUnavailable("Failed to scan world state") from exc
        try:
            async for key, value in result:
                yield key, bytes(value)
        except SQLAlchemyError as exc:
            logger.error("World state range scan aborted: %s", exc)
            raise StoreUnavailable("Failed to scan world state") from exc
        finally:
            await result.close()
