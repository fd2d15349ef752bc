from __future__ import annotations

from hotcoffee.application.dto.requests import ModifyOrderRequest, OrderLineRequest
from hotcoffee.application.dto.responses import OrderLineResponse, OrderResponse
from hotcoffee.application.errors import ValidationFailedError
from hotcoffee.domain.common.ids import ProductId
from hotcoffee.domain.order.entities import Order, OrderLine, OrderPatch


def to_order_lines(lines: list[OrderLineRequest]) -> list[OrderLine]:
    try:
        return [
            OrderLine(product_id=ProductId(line.product_id), quantity=line.quantity)
            for line in lines
        ]
    except ValueError as exc:
        raise ValidationFailedError(str(exc)) from exc


def to_order_patch(request_dto: ModifyOrderRequest) -> OrderPatch:
    return OrderPatch(
        order_id=request_dto.order_id,
        customer_name=request_dto.customer_name,
        items=to_order_lines(request_dto.items) if request_dto.items is not None else None,
        status=request_dto.status,
        created_at=request_dto.created_at,
    )


def to_order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        order_id=str(order.order_id),
        customer_name=order.customer_name,
        items=[
            OrderLineResponse(product_id=str(line.product_id), quantity=line.quantity)
            for line in order.items
        ],
        status=order.status,
        created_at=order.created_at,
    )
