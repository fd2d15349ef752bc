from __future__ import annotations

from fastapi import APIRouter, Depends, Response, status

from hotcoffee.api.dependencies import fulfillment_engine, order_cache
from hotcoffee.application.caches.order_cache import OrderCache
from hotcoffee.application.dto.requests import ModifyOrderRequest, PlaceOrderRequest
from hotcoffee.application.dto.responses import OrderResponse
from hotcoffee.application.mappers.order_mapper import (
    to_order_lines,
    to_order_patch,
    to_order_response,
)
from hotcoffee.application.use_cases.fulfillment import FulfillmentEngine
from hotcoffee.infrastructure.observability.otel import get_tracer

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED)
def place_order(
    request_dto: PlaceOrderRequest,
    engine: FulfillmentEngine = Depends(fulfillment_engine),
) -> OrderResponse:
    with get_tracer().start_as_current_span("fulfillment.create_order"):
        order = engine.create_order(
            customer_name=request_dto.customer_name,
            items=to_order_lines(request_dto.items),
        )
    return to_order_response(order)


@router.get("", response_model=list[OrderResponse])
def list_orders(cache: OrderCache = Depends(order_cache)) -> list[OrderResponse]:
    return [to_order_response(order) for order in cache.get_all()]


@router.get("/{order_id}", response_model=OrderResponse)
def get_order(order_id: str, cache: OrderCache = Depends(order_cache)) -> OrderResponse:
    return to_order_response(cache.get_by_id(order_id))


@router.put("/{order_id}", response_model=OrderResponse)
def modify_order(
    order_id: str,
    request_dto: ModifyOrderRequest,
    cache: OrderCache = Depends(order_cache),
) -> OrderResponse:
    return to_order_response(cache.modify(to_order_patch(request_dto), order_id))


@router.delete("/{order_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_order(order_id: str, cache: OrderCache = Depends(order_cache)) -> Response:
    cache.delete(order_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.post("/{order_id}/close", response_model=OrderResponse)
def close_order(
    order_id: str,
    engine: FulfillmentEngine = Depends(fulfillment_engine),
) -> OrderResponse:
    with get_tracer().start_as_current_span("fulfillment.close_order") as span:
        span.set_attribute("hotcoffee.order_id", order_id)
        order = engine.close_order(order_id)
    return to_order_response(order)
