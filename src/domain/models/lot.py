from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(slots=True, frozen=True)
class Lot:
    lot_id: str
    propagation_method: str
    propagation_date: str
    propagation_quantity: str
    owner: str | None = None

    @classmethod
    def create(
        cls,
        lot_id: str,
        *,
        propagation_method: str,
        propagation_date: str,
        propagation_quantity: str,
    ) -> Lot:
        # Fresh records never carry an owner; only a transfer assigns one.
        return cls(
            lot_id=lot_id,
            propagation_method=propagation_method,
            propagation_date=propagation_date,
            propagation_quantity=propagation_quantity,
        )

    def transfer_to(self, new_owner: str) -> Lot:
        return replace(self, owner=new_owner)
