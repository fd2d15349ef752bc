from __future__ import annotations

from hotcoffee.application.dto.requests import MenuItemRequest
from hotcoffee.application.dto.responses import MenuItemResponse, RecipeLineResponse
from hotcoffee.application.errors import ValidationFailedError
from hotcoffee.domain.common.ids import IngredientId, ProductId
from hotcoffee.domain.menu.entities import MenuItem, RecipeLine


def to_menu_item(request_dto: MenuItemRequest) -> MenuItem:
    try:
        return MenuItem(
            product_id=ProductId(request_dto.product_id),
            name=request_dto.name,
            description=request_dto.description,
            price=request_dto.price,
            ingredients=[
                RecipeLine(
                    ingredient_id=IngredientId(line.ingredient_id),
                    quantity=line.quantity,
                )
                for line in request_dto.ingredients
            ],
        )
    except ValueError as exc:
        raise ValidationFailedError(str(exc)) from exc


def to_recipe_responses(lines: list[RecipeLine]) -> list[RecipeLineResponse]:
    return [
        RecipeLineResponse(ingredient_id=str(line.ingredient_id), quantity=line.quantity)
        for line in lines
    ]


def to_menu_item_response(item: MenuItem) -> MenuItemResponse:
    return MenuItemResponse(
        product_id=str(item.product_id),
        name=item.name,
        description=item.description,
        price=item.price,
        ingredients=to_recipe_responses(item.ingredients),
    )
