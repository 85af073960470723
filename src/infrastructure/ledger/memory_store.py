from __future__ import annotations

import bisect
from collections.abc import AsyncIterator
from contextlib import aclosing

from src.application.errors import StoreUnavailable
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.ports.ledger_store import LedgerStore


class InMemoryLedgerStore(LedgerStore):
    """Process-local world state used by tests and local runs."""

    def __init__(self, initial: dict[str, bytes] | None = None) -> None:
        self._data: dict[str, bytes] = dict(initial or {})
        self.available = True

    def _ensure_available(self) -> None:
        if not self.available:
            raise StoreUnavailable("In-memory ledger store is unavailable")

    async def get(self, key: str) -> bytes | None:
        self._ensure_available()
        return self._data.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._ensure_available()
        self._data[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self._ensure_available()
        self._data.pop(key, None)

    async def range_scan(self, start_key: str, end_key: str) -> AsyncIterator[tuple[str, bytes]]:
        self._ensure_available()
        # Point-in-time view: later writes do not leak into a running scan.
        snapshot = sorted(self._data.items())
        keys = [key for key, _ in snapshot]
        lo = bisect.bisect_left(keys, start_key) if start_key else 0
        hi = bisect.bisect_left(keys, end_key) if end_key else len(keys)
        for key, value in snapshot[lo:hi]:
            self._ensure_available()
            yield key, value

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return key in self._data


class StagedLedgerStore(LedgerStore):
    """Buffers writes over an :class:`InMemoryLedgerStore` until :meth:`apply`.

    Reads see the unit's own pending writes layered over the shared store.
    """

    def __init__(self, base: InMemoryLedgerStore) -> None:
        self._base = base
        # None marks a pending delete
        self._pending: dict[str, bytes | None] = {}

    @property
    def pending(self) -> int:
        return len(self._pending)

    async def get(self, key: str) -> bytes | None:
        if key in self._pending:
            self._base._ensure_available()
            return self._pending[key]
        return await self._base.get(key)

    async def put(self, key: str, value: bytes) -> None:
        self._base._ensure_available()
        self._pending[key] = bytes(value)

    async def delete(self, key: str) -> None:
        self._base._ensure_available()
        self._pending[key] = None

    async def range_scan(self, start_key: str, end_key: str) -> AsyncIterator[tuple[str, bytes]]:
        pending = {
            key: value
            for key, value in self._pending.items()
            if (not start_key or key >= start_key) and (not end_key or key < end_key)
        }
        staged = sorted(pending)
        i = 0
        async with aclosing(self._base.range_scan(start_key, end_key)) as scan:
            async for key, value in scan:
                while i < len(staged) and staged[i] < key:
                    if pending[staged[i]] is not None:
                        yield staged[i], pending[staged[i]]
                    i += 1
                if i < len(staged) and staged[i] == key:
                    i += 1
                    if pending[key] is not None:
                        yield key, pending[key]
                    continue
                yield key, value
        for key in staged[i:]:
            if pending[key] is not None:
                yield key, pending[key]

    async def apply(self) -> None:
        self._base._ensure_available()
        pending, self._pending = self._pending, {}
        for key, value in pending.items():
            if value is None:
                await self._base.delete(key)
            else:
                await self._base.put(key, value)

    def discard(self) -> None:
        self._pending = {}


class InMemoryUnitOfWork(UnitOfWork):
    def __init__(self, store: InMemoryLedgerStore) -> None:
        self._store = store
        self.world_state: StagedLedgerStore | None = None

    async def __aenter__(self) -> UnitOfWork:
        self.world_state = StagedLedgerStore(self._store)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        # Anything not committed is dropped, as when a session closes.
        if self.world_state is not None:
            self.world_state.discard()
        self.world_state = None

    async def commit(self) -> None:
        if self.world_state is None:
            return
        await self.world_state.apply()

    async def rollback(self) -> None:
        if self.world_state is None:
            return
        self.world_state.discard()
