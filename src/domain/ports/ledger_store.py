from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import AsyncIterator


class LedgerStore(ABC):
    """Ordered key-value world state.

    Keys are compared by code point. Backend failures surface as
    ``StoreUnavailable``.
    """

    @abstractmethod
    async def get(self, key: str) -> bytes | None: ...

    @abstractmethod
    async def put(self, key: str, value: bytes) -> None: ...

    @abstractmethod
    async def delete(self, key: str) -> None: ...

    @abstractmethod
    def range_scan(self, start_key: str, end_key: str) -> AsyncIterator[tuple[str, bytes]]:
        """Yield ``(key, value)`` pairs with ``start_key <= key < end_key`` in key order.

        An empty bound leaves that side of the range open, so ``("", "")``
        walks the whole keyspace. Implementations are async generators;
        callers close them with ``contextlib.aclosing``.
        """
