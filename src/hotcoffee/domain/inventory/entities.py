from __future__ import annotations

import math
from dataclasses import dataclass, replace

from hotcoffee.domain.common.ids import IngredientId


@dataclass(frozen=True)
class InventoryItem:
    ingredient_id: IngredientId
    name: str
    quantity: float
    unit: str

    def __post_init__(self) -> None:
        if not self.ingredient_id:
            raise ValueError("ingredient ID cannot be empty")
        if not math.isfinite(self.quantity):
            raise ValueError("quantity must be a finite number")
        if self.quantity < 0:
            raise ValueError("quantity cannot be negative")
        if not self.unit:
            raise ValueError("unit cannot be empty")
        if not self.name:
            raise ValueError("name cannot be empty")

    def has_at_least(self, amount: float) -> bool:
        return self.quantity >= amount

    def deduct(self, amount: float) -> InventoryItem:
        if not self.has_at_least(amount):
            raise InsufficientQuantityError(
                f"not enough quantity of ID={self.ingredient_id}, "
                f"wanted {amount:g}, given {self.quantity:g}"
            )
        return replace(self, quantity=self.quantity - amount)


class InsufficientQuantityError(Exception):
    pass
