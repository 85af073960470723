"""Persisted representation of a lot.

Records are stored as compact UTF-8 JSON objects using the ledger field
names (``LotID``, ``PropagationMethod``...) plus a ``docType`` tag so a scan
over a shared keyspace can tell lots apart from other record kinds.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.domain.models.lot import Lot

RECORD_TYPE = "lot"
# Tag written by earlier bootstrap tooling
LEGACY_RECORD_TYPES = frozenset({"asset"})


class RecordDecodeError(ValueError):
    def __init__(self, message: str, errors: list[dict[str, Any]]) -> None:
        super().__init__(message)
        self.errors = errors


class LotRecord(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow", strict=True)

    lot_id: str = Field(alias="LotID")
    propagation_method: str = Field(alias="PropagationMethod")
    propagation_date: str = Field(alias="PropagationDate")
    propagation_quantity: str = Field(alias="PropagationQuantity")
    owner: str | None = Field(default=None, alias="Owner")
    doc_type: str = Field(default=RECORD_TYPE, alias="docType")

    @field_validator("doc_type")
    @classmethod
    def ensure_lot_type(cls, value: str) -> str:
        if value != RECORD_TYPE and value not in LEGACY_RECORD_TYPES:
            raise ValueError(f"record type {value!r} is not a lot")
        return value

    @classmethod
    def from_domain(cls, lot: Lot) -> LotRecord:
        return cls(
            lot_id=lot.lot_id,
            propagation_method=lot.propagation_method,
            propagation_date=lot.propagation_date,
            propagation_quantity=lot.propagation_quantity,
            owner=lot.owner,
        )

    def to_domain(self) -> Lot:
        return Lot(
            lot_id=self.lot_id,
            propagation_method=self.propagation_method,
            propagation_date=self.propagation_date,
            propagation_quantity=self.propagation_quantity,
            owner=self.owner,
        )

    def to_wire(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True)
        if self.owner is None:
            data.pop("Owner", None)
        return data


def _parse(raw: bytes | str) -> LotRecord:
    try:
        return LotRecord.model_validate_json(raw)
    except ValidationError as exc:
        errors = exc.errors(include_url=False, include_context=False, include_input=False)
        raise RecordDecodeError("Stored value is not a valid lot record", errors) from exc


def encode_lot(lot: Lot) -> bytes:
    return LotRecord.from_domain(lot).model_dump_json(by_alias=True, exclude_none=True).encode(
        "utf-8"
    )


def decode_lot(raw: bytes | str) -> Lot:
    """Parse a stored value back into a :class:`Lot`.

    Raises :class:`RecordDecodeError` when the value is not a JSON object
    matching the lot schema, including records tagged with another
    ``docType``.
    """
    return _parse(raw).to_domain()


def decode_record(raw: bytes | str) -> tuple[Lot, dict[str, Any]]:
    """Like :func:`decode_lot`, also returning every stored field by wire name."""
    record = _parse(raw)
    return record.to_domain(), record.to_wire()


def with_owner(raw: bytes | str, new_owner: str) -> bytes:
    """Return the stored record with ``Owner`` replaced.

    Every other stored field is written back as it was, including fields the
    schema does not declare and a legacy ``docType``.
    """
    record = _parse(raw)
    record.owner = new_owner
    return record.model_dump_json(by_alias=True).encode("utf-8")
