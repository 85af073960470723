from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class LotCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    lot_id: str = Field(alias="LotID")
    propagation_method: str = Field(alias="PropagationMethod")
    propagation_date: str = Field(alias="PropagationDate")
    propagation_quantity: str = Field(alias="PropagationQuantity")


class LotUpdate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    propagation_method: str = Field(alias="PropagationMethod")
    propagation_date: str = Field(alias="PropagationDate")
    propagation_quantity: str = Field(alias="PropagationQuantity")


class LotTransfer(BaseModel):
    new_owner: str


class LotExistsResponse(BaseModel):
    exists: bool
