from __future__ import annotations

from pydantic import BaseModel, Field


class InventoryRecord(BaseModel):
    ingredient_id: str
    name: str
    quantity: float
    unit: str


class RecipeLineRecord(BaseModel):
    ingredient_id: str
    quantity: float


class MenuItemRecord(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    ingredients: list[RecipeLineRecord] = Field(default_factory=list)


class OrderLineRecord(BaseModel):
    product_id: str
    quantity: int


class OrderRecord(BaseModel):
    order_id: str
    customer_name: str
    items: list[OrderLineRecord] = Field(default_factory=list)
    status: str
    created_at: str
