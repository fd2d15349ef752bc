from __future__ import annotations

from pydantic import BaseModel, Field


class InventoryItemResponse(BaseModel):
    ingredient_id: str
    name: str
    quantity: float
    unit: str


class RecipeLineResponse(BaseModel):
    ingredient_id: str
    quantity: float


class MenuItemResponse(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    ingredients: list[RecipeLineResponse] = Field(default_factory=list)


class OrderLineResponse(BaseModel):
    product_id: str
    quantity: int


class OrderResponse(BaseModel):
    order_id: str
    customer_name: str
    items: list[OrderLineResponse] = Field(default_factory=list)
    status: str
    created_at: str


class TotalSalesResponse(BaseModel):
    total_sales: float


class PopularItemResponse(BaseModel):
    product_id: str
    name: str
    description: str
    price: float
    ingredients: list[RecipeLineResponse] = Field(default_factory=list)
    quantity: int
