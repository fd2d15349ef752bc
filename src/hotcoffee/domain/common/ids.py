from __future__ import annotations

from typing import NewType

IngredientId = NewType("IngredientId", str)
ProductId = NewType("ProductId", str)
OrderId = NewType("OrderId", str)
