from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hotcoffee.api.dependencies import menu_cache
from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.dto.requests import MenuItemRequest
from hotcoffee.application.dto.responses import MenuItemResponse
from hotcoffee.application.errors import ValidationFailedError
from hotcoffee.application.mappers.menu_mapper import to_menu_item, to_menu_item_response

router = APIRouter(prefix="/menu", tags=["menu"])


@router.post("", response_model=MenuItemResponse, status_code=status.HTTP_201_CREATED)
def add_menu_item(
    request_dto: MenuItemRequest,
    cache: MenuCache = Depends(menu_cache),
) -> MenuItemResponse:
    return to_menu_item_response(cache.add(to_menu_item(request_dto)))


@router.get("", response_model=list[MenuItemResponse])
def list_menu(cache: MenuCache = Depends(menu_cache)) -> list[MenuItemResponse]:
    return [to_menu_item_response(item) for item in cache.get_all()]


@router.get("/{product_id}", response_model=MenuItemResponse)
def get_menu_item(product_id: str, cache: MenuCache = Depends(menu_cache)) -> MenuItemResponse:
    return to_menu_item_response(cache.get_by_id(product_id))


@router.put("/{product_id}", response_model=MenuItemResponse)
def modify_menu_item(
    product_id: str,
    request_dto: MenuItemRequest,
    cache: MenuCache = Depends(menu_cache),
) -> MenuItemResponse:
    if request_dto.product_id != product_id:
        raise ValidationFailedError("product_id does not match id")
    return to_menu_item_response(cache.modify(to_menu_item(request_dto)))


@router.delete("/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_menu_item(product_id: str, cache: MenuCache = Depends(menu_cache)) -> Response:
    cache.delete(product_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
