from __future__ import annotations

import logging
from dataclasses import dataclass

from src.application.errors import ValidationError
from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.codec.lot_record import encode_lot
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class CreateLotInput:
    lot_id: str
    propagation_method: str
    propagation_date: str
    propagation_quantity: str


async def execute(uow: UnitOfWork, payload: CreateLotInput) -> str:
    if not payload.lot_id:
        raise ValidationError("Lot ID must not be empty")
    lot = Lot.create(
        payload.lot_id,
        propagation_method=payload.propagation_method,
        propagation_date=payload.propagation_date,
        propagation_quantity=payload.propagation_quantity,
    )
    # No existence check: creating an existing lot overwrites it.
    data = encode_lot(lot)
    await uow.world_state.put(lot.lot_id, data)
    await uow.commit()
    logger.info("Lot %s created", lot.lot_id)
    return data.decode("utf-8")
