from __future__ import annotations

from pydantic import BaseModel


class InventoryItemRequest(BaseModel):
    ingredient_id: str
    name: str
    quantity: float
    unit: str


class RecipeLineRequest(BaseModel):
    ingredient_id: str
    quantity: float


class MenuItemRequest(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    ingredients: list[RecipeLineRequest]


class OrderLineRequest(BaseModel):
    product_id: str
    quantity: int


class PlaceOrderRequest(BaseModel):
    customer_name: str
    items: list[OrderLineRequest]


class ModifyOrderRequest(BaseModel):
    order_id: str | None = None
    customer_name: str | None = None
    items: list[OrderLineRequest] | None = None
    status: str | None = None
    created_at: str | None = None
