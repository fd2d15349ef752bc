from __future__ import annotations

from datetime import datetime

from prometheus_client import Counter, Histogram

from hotcoffee.domain.order.entities import Order, OrderStatus

ORDERS_TOTAL = Counter(
    "hotcoffee_orders_total",
    "Total number of orders observed by status.",
    ["status"],
)

ORDER_TRANSITION_TOTAL = Counter(
    "hotcoffee_order_transition_total",
    "Total number of order lifecycle transitions.",
    ["from", "to"],
)

ORDER_TIME_TO_CLOSE_SECONDS = Histogram(
    "hotcoffee_order_time_to_close_seconds",
    "Time between order creation and closure.",
)

ORDER_CLOSE_ROLLBACK_TOTAL = Counter(
    "hotcoffee_order_close_rollback_total",
    "Total number of order closures whose inventory deduction was rolled back.",
)

INVENTORY_DEDUCTED_TOTAL = Counter(
    "hotcoffee_inventory_deducted_total",
    "Total amount deducted from inventory by ingredient.",
    ["ingredient_id"],
)

INSUFFICIENT_STOCK_TOTAL = Counter(
    "hotcoffee_insufficient_stock_total",
    "Total number of rejected deductions or checks due to insufficient stock.",
    ["ingredient_id"],
)


def record_order_status(order: Order) -> None:
    status = order.lifecycle_status()
    ORDERS_TOTAL.labels(status=status.value if status else "unknown").inc()


def record_transition(from_status: OrderStatus, to_status: OrderStatus) -> None:
    ORDER_TRANSITION_TOTAL.labels(**{"from": from_status.value, "to": to_status.value}).inc()


def record_time_to_close(order: Order, now: datetime | None = None) -> None:
    created_at = order.created_at_datetime()
    if created_at is None:
        return
    current = now or datetime.now()
    ORDER_TIME_TO_CLOSE_SECONDS.observe(max((current - created_at).total_seconds(), 0.0))


def record_close_rollback() -> None:
    ORDER_CLOSE_ROLLBACK_TOTAL.inc()


def record_inventory_deducted(ingredient_id: str, amount: float) -> None:
    if amount > 0:
        INVENTORY_DEDUCTED_TOTAL.labels(ingredient_id=ingredient_id).inc(amount)


def record_insufficient_stock(ingredient_id: str) -> None:
    INSUFFICIENT_STOCK_TOTAL.labels(ingredient_id=ingredient_id).inc()
