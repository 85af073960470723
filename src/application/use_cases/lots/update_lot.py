from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots import lot_exists
from src.domain.codec.lot_record import encode_lot
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class UpdateLotInput:
    lot_id: str
    propagation_method: str
    propagation_date: str
    propagation_quantity: str


async def execute(uow: UnitOfWork, payload: UpdateLotInput) -> None:
    if not await lot_exists.execute(uow, payload.lot_id):
        raise NotFound(
            f"Lot {payload.lot_id} does not exist", details={"lot_id": payload.lot_id}
        )
    # Full replacement: a previously transferred owner is not carried over.
    updated = Lot.create(
        payload.lot_id,
        propagation_method=payload.propagation_method,
        propagation_date=payload.propagation_date,
        propagation_quantity=payload.propagation_quantity,
    )
    await uow.world_state.put(updated.lot_id, encode_lot(updated))
    await uow.commit()
    logger.info("Lot %s updated", updated.lot_id)
