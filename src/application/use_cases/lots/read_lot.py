from __future__ import annotations

from src.application.errors import NotFound
from src.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, lot_id: str) -> str:
    value = await uow.world_state.get(lot_id)
    if not value:
        raise NotFound(f"Lot {lot_id} does not exist", details={"lot_id": lot_id})
    return value.decode("utf-8", errors="replace")
