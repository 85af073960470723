from __future__ import annotations

import json

import pytest

from src.domain.codec.lot_record import (
    RECORD_TYPE,
    RecordDecodeError,
    decode_lot,
    decode_record,
    encode_lot,
    with_owner,
)
from src.domain.models.lot import Lot


def test_encode_is_compact_and_tagged():
    lot = Lot.create(
        "001",
        propagation_method="Seed",
        propagation_date="2021-03-05",
        propagation_quantity="1 gram",
    )
    assert encode_lot(lot) == (
        b'{"LotID":"001","PropagationMethod":"Seed","PropagationDate":"2021-03-05",'
        b'"PropagationQuantity":"1 gram","docType":"lot"}'
    )


def test_owner_is_written_only_after_transfer():
    lot = Lot("002", "Propagated Cuttings", "2025-04-05", "25 plants")
    assert "Owner" not in json.loads(encode_lot(lot))

    wire = json.loads(encode_lot(lot.transfer_to("Greenhouse A")))
    assert wire["Owner"] == "Greenhouse A"
    assert wire["docType"] == RECORD_TYPE


def test_decode_restores_all_fields():
    lot = Lot("003", "Seed", "2050-06-09", "2 grams", owner="Nursery")
    assert decode_lot(encode_lot(lot)) == lot
    assert decode_lot(encode_lot(lot).decode("utf-8")) == lot


def test_decode_accepts_untagged_records_and_keeps_extras():
    raw = json.dumps(
        {
            "LotID": "004",
            "PropagationMethod": "Propagated Cuttings",
            "PropagationDate": "2100-01-10",
            "PropagationQuantity": "10 plants",
            "Notes": "north bench",
        }
    )
    lot, wire = decode_record(raw)
    assert lot.lot_id == "004"
    assert lot.owner is None
    assert wire["Notes"] == "north bench"
    assert wire["docType"] == RECORD_TYPE


def test_decode_accepts_asset_tagged_records():
    raw = (
        b'{"LotID":"001","PropagationMethod":"Seed","PropagationDate":"2021-03-05",'
        b'"PropagationQuantity":"1 gram","docType":"asset"}'
    )
    lot, wire = decode_record(raw)
    assert lot == Lot("001", "Seed", "2021-03-05", "1 gram")
    assert wire["docType"] == "asset"


@pytest.mark.parametrize(
    "raw",
    [
        b"not json",
        b"",
        b'["001"]',
        b'"just a string"',
        b'{"LotID":"005","PropagationMethod":"Seed","PropagationDate":"2121-09-05"}',
        b'{"LotID":5,"PropagationMethod":"Seed","PropagationDate":"x","PropagationQuantity":"y"}',
        b'{"LotID":"005","PropagationMethod":"Seed","PropagationDate":"2121-09-05",'
        b'"PropagationQuantity":"1.5 grams","docType":"invoice"}',
    ],
)
def test_decode_rejects_values_that_are_not_lots(raw):
    with pytest.raises(RecordDecodeError) as excinfo:
        decode_lot(raw)
    assert excinfo.value.errors


def test_propagation_date_is_not_validated():
    lot = Lot("X-1", "Seed", "sometime next spring", "a handful")
    assert decode_lot(encode_lot(lot)).propagation_date == "sometime next spring"


def test_decode_record_wire_uses_ledger_field_names():
    _, wire = decode_record(encode_lot(Lot("001", "Seed", "2021-03-05", "1 gram")))
    assert wire == {
        "LotID": "001",
        "PropagationMethod": "Seed",
        "PropagationDate": "2021-03-05",
        "PropagationQuantity": "1 gram",
        "docType": "lot",
    }


def test_with_owner_rewrites_only_the_owner():
    raw = json.dumps(
        {
            "LotID": "L1",
            "PropagationMethod": "Seed",
            "PropagationDate": "2024-01-01",
            "PropagationQuantity": "2 grams",
            "docType": "asset",
            "Notes": "keep me",
        }
    )
    wire = json.loads(with_owner(raw, "Bob"))
    assert wire == {
        "LotID": "L1",
        "PropagationMethod": "Seed",
        "PropagationDate": "2024-01-01",
        "PropagationQuantity": "2 grams",
        "Owner": "Bob",
        "docType": "asset",
        "Notes": "keep me",
    }


def test_with_owner_rejects_values_that_are_not_lots():
    with pytest.raises(RecordDecodeError):
        with_owner(b"{not json", "Bob")
