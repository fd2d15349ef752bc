from __future__ import annotations

import math
from dataclasses import dataclass, field

from hotcoffee.domain.common.ids import IngredientId, ProductId


@dataclass(frozen=True)
class RecipeLine:
    ingredient_id: IngredientId
    quantity: float

    def __post_init__(self) -> None:
        if not math.isfinite(self.quantity):
            raise ValueError("quantity must be a finite number")
        if self.quantity < 0:
            raise ValueError(f"item with quantity {self.quantity:g} is less than 0")


@dataclass(frozen=True)
class MenuItem:
    product_id: ProductId
    name: str
    description: str
    price: float
    ingredients: list[RecipeLine] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.product_id:
            raise ValueError("product ID cannot be empty")
        if not math.isfinite(self.price):
            raise ValueError("price must be a finite number")
        if self.price <= 0:
            raise ValueError("price cannot be negative or zero")
        if not self.description:
            raise ValueError("description cannot be empty")
        if not self.name:
            raise ValueError("name cannot be empty")
        if not self.ingredients:
            raise ValueError("number of ingredients cannot be less than 1")

        seen: set[str] = set()
        for line in self.ingredients:
            if line.ingredient_id in seen:
                raise ValueError(f"duplicated ingredient ID {line.ingredient_id}")
            seen.add(line.ingredient_id)

    def requirements(self, multiplier: float) -> dict[IngredientId, float]:
        """Ingredient amounts consumed by ``multiplier`` units of this item."""
        return {line.ingredient_id: line.quantity * multiplier for line in self.ingredients}


def merge_requirements(
    *requirements: dict[IngredientId, float],
) -> dict[IngredientId, float]:
    merged: dict[IngredientId, float] = {}
    for requirement in requirements:
        for ingredient_id, amount in requirement.items():
            merged[ingredient_id] = merged.get(ingredient_id, 0.0) + amount
    return merged
