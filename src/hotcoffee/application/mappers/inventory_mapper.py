from __future__ import annotations

from hotcoffee.application.dto.requests import InventoryItemRequest
from hotcoffee.application.dto.responses import InventoryItemResponse
from hotcoffee.application.errors import ValidationFailedError
from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.inventory.entities import InventoryItem


def to_inventory_item(request_dto: InventoryItemRequest) -> InventoryItem:
    try:
        return InventoryItem(
            ingredient_id=IngredientId(request_dto.ingredient_id),
            name=request_dto.name,
            quantity=request_dto.quantity,
            unit=request_dto.unit,
        )
    except ValueError as exc:
        raise ValidationFailedError(str(exc)) from exc


def to_inventory_response(item: InventoryItem) -> InventoryItemResponse:
    return InventoryItemResponse(
        ingredient_id=str(item.ingredient_id),
        name=item.name,
        quantity=item.quantity,
        unit=item.unit,
    )
