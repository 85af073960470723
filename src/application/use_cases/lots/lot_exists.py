from __future__ import annotations

from src.application.interfaces.unit_of_work import UnitOfWork


async def execute(uow: UnitOfWork, lot_id: str) -> bool:
    value = await uow.world_state.get(lot_id)
    return bool(value)
