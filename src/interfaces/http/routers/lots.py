from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from src.application.interfaces.unit_of_work import UnitOfWork
from src.application.use_cases.lots import (
    create_lot,
    delete_lot,
    init_ledger,
    list_lots,
    lot_exists,
    read_lot,
    transfer_lot,
    update_lot,
)
from src.interfaces.http.deps import get_uow
from src.interfaces.http.schemas.lots import (
    LotCreate,
    LotExistsResponse,
    LotTransfer,
    LotUpdate,
)

router = APIRouter(prefix="/lots", tags=["lots"])
ledger_router = APIRouter(prefix="/ledger", tags=["ledger"])

JSON_MEDIA_TYPE = "application/json"


@ledger_router.post("/init", status_code=status.HTTP_204_NO_CONTENT)
async def init_ledger_route(*, uow: UnitOfWork = Depends(get_uow)) -> Response:
    await init_ledger.execute(uow)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get("/")
async def list_all_lots(*, uow: UnitOfWork = Depends(get_uow)) -> Response:
    entries = await list_lots.execute(uow)
    return Response(content=list_lots.to_wire(entries), media_type=JSON_MEDIA_TYPE)


@router.post("/", status_code=status.HTTP_201_CREATED)
async def create_lot_route(
    payload: LotCreate,
    *,
    uow: UnitOfWork = Depends(get_uow),
) -> Response:
    record = await create_lot.execute(
        uow,
        create_lot.CreateLotInput(
            lot_id=payload.lot_id,
            propagation_method=payload.propagation_method,
            propagation_date=payload.propagation_date,
            propagation_quantity=payload.propagation_quantity,
        ),
    )
    return Response(
        content=record, media_type=JSON_MEDIA_TYPE, status_code=status.HTTP_201_CREATED
    )


@router.get("/{lot_id}")
async def read_lot_route(lot_id: str, *, uow: UnitOfWork = Depends(get_uow)) -> Response:
    record = await read_lot.execute(uow, lot_id)
    return Response(content=record, media_type=JSON_MEDIA_TYPE)


@router.get("/{lot_id}/exists", response_model=LotExistsResponse)
async def lot_exists_route(lot_id: str, *, uow: UnitOfWork = Depends(get_uow)):
    return LotExistsResponse(exists=await lot_exists.execute(uow, lot_id))


@router.put("/{lot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def update_lot_route(
    lot_id: str,
    payload: LotUpdate,
    *,
    uow: UnitOfWork = Depends(get_uow),
) -> Response:
    await update_lot.execute(
        uow,
        update_lot.UpdateLotInput(
            lot_id=lot_id,
            propagation_method=payload.propagation_method,
            propagation_date=payload.propagation_date,
            propagation_quantity=payload.propagation_quantity,
        ),
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{lot_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_lot_route(lot_id: str, *, uow: UnitOfWork = Depends(get_uow)) -> Response:
    await delete_lot.execute(uow, lot_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{lot_id}/transfer", status_code=status.HTTP_204_NO_CONTENT)
async def transfer_lot_route(
    lot_id: str,
    payload: LotTransfer,
    *,
    uow: UnitOfWork = Depends(get_uow),
) -> Response:
    await transfer_lot.execute(uow, lot_id, payload.new_owner)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
