from __future__ import annotations

from dataclasses import dataclass, field

from hotcoffee.domain.common.ids import ProductId
from hotcoffee.domain.menu.entities import RecipeLine


@dataclass(frozen=True)
class TotalSales:
    amount: float


@dataclass(frozen=True)
class PopularItem:
    product_id: ProductId
    name: str
    description: str
    price: float
    quantity: int
    ingredients: list[RecipeLine] = field(default_factory=list)
