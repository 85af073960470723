from __future__ import annotations

import logging

from src.application.errors import DecodeError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots import read_lot
from src.domain.codec.lot_record import RecordDecodeError, with_owner

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, lot_id: str, new_owner: str) -> None:
    stored = await read_lot.execute(uow, lot_id)
    try:
        transferred = with_owner(stored, new_owner)
    except RecordDecodeError as exc:
        raise DecodeError(
            f"Lot {lot_id} is not a valid lot record",
            details={"lot_id": lot_id, "errors": exc.errors},
        ) from exc
    # Written back under the requested key even if the stored LotID differs.
    await uow.world_state.put(lot_id, transferred)
    await uow.commit()
    logger.info("Lot %s transferred to %s", lot_id, new_owner)
