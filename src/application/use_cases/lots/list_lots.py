from __future__ import annotations

import json
import logging
from collections.abc import AsyncIterator, Iterable
from contextlib import aclosing
from dataclasses import dataclass
from typing import Any

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.codec.lot_record import RecordDecodeError, decode_record
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)


@dataclass(slots=True, frozen=True)
class DecodedRecord:
    lot: Lot
    # every stored field by wire name, including ones outside the lot schema
    wire: dict[str, Any]


@dataclass(slots=True, frozen=True)
class RawRecord:
    value: str


@dataclass(slots=True, frozen=True)
class LotEntry:
    key: str
    record: DecodedRecord | RawRecord


async def iter_entries(uow: UnitOfWork) -> AsyncIterator[LotEntry]:
    """Walk the whole keyspace in key order.

    Values that do not decode as lots are yielded as :class:`RawRecord`
    instead of failing the scan.
    """
    async with aclosing(uow.world_state.range_scan("", "")) as scan:
        async for key, value in scan:
            try:
                record: DecodedRecord | RawRecord = DecodedRecord(*decode_record(value))
            except RecordDecodeError:
                logger.warning("Entry %s is not a lot record; returning raw value", key)
                record = RawRecord(value.decode("utf-8", errors="replace"))
            yield LotEntry(key=key, record=record)


async def execute(uow: UnitOfWork) -> list[LotEntry]:
    async with aclosing(iter_entries(uow)) as entries:
        return [entry async for entry in entries]


def to_wire(entries: Iterable[LotEntry]) -> str:
    payload = []
    for entry in entries:
        if isinstance(entry.record, DecodedRecord):
            record = entry.record.wire
        else:
            record = entry.record.value
        payload.append({"Key": entry.key, "Record": record})
    return json.dumps(payload, separators=(",", ":"))
