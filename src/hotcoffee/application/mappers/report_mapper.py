from __future__ import annotations

from hotcoffee.application.dto.responses import PopularItemResponse, TotalSalesResponse
from hotcoffee.application.mappers.menu_mapper import to_recipe_responses
from hotcoffee.domain.report.entities import PopularItem, TotalSales


def to_total_sales_response(total: TotalSales) -> TotalSalesResponse:
    return TotalSalesResponse(total_sales=total.amount)


def to_popular_item_responses(items: list[PopularItem]) -> list[PopularItemResponse]:
    return [
        PopularItemResponse(
            product_id=str(item.product_id),
            name=item.name,
            description=item.description,
            price=item.price,
            ingredients=to_recipe_responses(item.ingredients),
            quantity=item.quantity,
        )
        for item in items
    ]
