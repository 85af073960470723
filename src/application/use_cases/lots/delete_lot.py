from __future__ import annotations

import logging

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots import lot_exists

logger = logging.getLogger(__name__)


async def execute(uow: UnitOfWork, lot_id: str) -> None:
    if not await lot_exists.execute(uow, lot_id):
        raise NotFound(f"Lot {lot_id} does not exist", details={"lot_id": lot_id})
    await uow.world_state.delete(lot_id)
    await uow.commit()
    logger.info("Lot %s deleted", lot_id)
