from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hotcoffee.api.dependencies import inventory_cache
from hotcoffee.application.caches.inventory_cache import InventoryCache
from hotcoffee.application.dto.requests import InventoryItemRequest
from hotcoffee.application.dto.responses import InventoryItemResponse
from hotcoffee.application.errors import ValidationFailedError
from hotcoffee.application.mappers.inventory_mapper import (
    to_inventory_item,
    to_inventory_response,
)

router = APIRouter(prefix="/inventory", tags=["inventory"])


@router.post("", response_model=InventoryItemResponse, status_code=status.HTTP_201_CREATED)
def add_inventory_item(
    request_dto: InventoryItemRequest,
    cache: InventoryCache = Depends(inventory_cache),
) -> InventoryItemResponse:
    return to_inventory_response(cache.add(to_inventory_item(request_dto)))


@router.get("", response_model=list[InventoryItemResponse])
def list_inventory(cache: InventoryCache = Depends(inventory_cache)) -> list[InventoryItemResponse]:
    return [to_inventory_response(item) for item in cache.get_all()]


@router.get("/{ingredient_id}", response_model=InventoryItemResponse)
def get_inventory_item(
    ingredient_id: str,
    cache: InventoryCache = Depends(inventory_cache),
) -> InventoryItemResponse:
    return to_inventory_response(cache.get_by_id(ingredient_id))


@router.put("/{ingredient_id}", response_model=InventoryItemResponse)
def modify_inventory_item(
    ingredient_id: str,
    request_dto: InventoryItemRequest,
    cache: InventoryCache = Depends(inventory_cache),
) -> InventoryItemResponse:
    if request_dto.ingredient_id != ingredient_id:
        raise ValidationFailedError("ingredient_id does not match id")
    return to_inventory_response(cache.modify(to_inventory_item(request_dto)))


@router.delete("/{ingredient_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_inventory_item(
    ingredient_id: str,
    cache: InventoryCache = Depends(inventory_cache),
) -> Response:
    cache.delete(ingredient_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
