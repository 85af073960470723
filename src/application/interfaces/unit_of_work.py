from __future__ import annotations

from typing import Protocol

from src.domain.ports.ledger_store import LedgerStore


class UnitOfWork(Protocol):
    world_state: LedgerStore

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(self, exc_type, exc, tb) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
