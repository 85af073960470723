from __future__ import annotations

import logging

from src.application.interfaces.unit_of_work import UnitOfWork
from src.domain.codec.lot_record import encode_lot
from src.domain.models.lot import Lot

logger = logging.getLogger(__name__)

BOOTSTRAP_LOTS: tuple[Lot, ...] = (
    Lot("001", "Seed", "2021-03-05", "1 gram"),
    Lot("002", "Propagated Cuttings", "2025-04-05", "25 plants"),
    Lot("003", "Seed", "2050-06-09", "2 grams"),
    Lot("004", "Propagated Cuttings", "2100-01-10", "10 plants"),
    Lot("005", "Seed", "2121-09-05", "1.5 grams"),
)


async def execute(uow: UnitOfWork) -> list[Lot]:
    for lot in BOOTSTRAP_LOTS:
        await uow.world_state.put(lot.lot_id, encode_lot(lot))
        logger.info("Lot %s initialized", lot.lot_id)
    await uow.commit()
    return list(BOOTSTRAP_LOTS)
