from __future__ import annotations

import re
from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum
from typing import Iterable

from hotcoffee.domain.common.ids import OrderId, ProductId

ORDER_ID_PREFIX = "order"
ORDER_ID_PATTERN = re.compile(rf"{ORDER_ID_PREFIX}([0-9]+)")
CREATED_AT_FORMAT = "%Y-%m-%d %H:%M:%S"

# Explicit status values accepted when an order is modified. Lifecycle checks
# compare case-insensitively against OrderStatus instead.
MODIFIABLE_STATUSES = ("Open", "Closed")


class OrderStatus(str, Enum):
    OPEN = "open"
    CLOSED = "closed"


@dataclass(frozen=True)
class OrderLine:
    product_id: ProductId
    quantity: int

    def __post_init__(self) -> None:
        if self.quantity < 1:
            raise ValueError(f"item with quantity {self.quantity} is less than 1")


@dataclass(frozen=True)
class Order:
    order_id: OrderId
    customer_name: str
    items: list[OrderLine]
    status: str
    created_at: str

    def lifecycle_status(self) -> OrderStatus | None:
        try:
            return OrderStatus(self.status.lower())
        except ValueError:
            return None

    @property
    def is_open(self) -> bool:
        return self.lifecycle_status() == OrderStatus.OPEN

    @property
    def is_closed(self) -> bool:
        return self.lifecycle_status() == OrderStatus.CLOSED

    def ensure_complete(self) -> None:
        if not self.items:
            raise ValueError("empty order")
        if not self.customer_name:
            raise ValueError("customer name cannot be empty")

        seen: set[str] = set()
        for line in self.items:
            if line.product_id in seen:
                raise ValueError("duplicated products in order")
            seen.add(line.product_id)

    def close(self) -> Order:
        if not self.is_open:
            raise OrderTransitionError("order is already closed")
        return replace(self, status=OrderStatus.CLOSED.value)

    def created_at_datetime(self) -> datetime | None:
        try:
            return datetime.strptime(self.created_at, CREATED_AT_FORMAT)
        except ValueError:
            return None


@dataclass(frozen=True)
class OrderPatch:
    """Fields supplied by a modification request; ``None`` means unset."""

    order_id: str | None = None
    customer_name: str | None = None
    items: list[OrderLine] | None = None
    status: str | None = None
    created_at: str | None = None


def create_open_order(
    order_id: OrderId,
    customer_name: str,
    items: list[OrderLine],
    now: datetime,
) -> Order:
    order = Order(
        order_id=order_id,
        customer_name=customer_name,
        items=items,
        status=OrderStatus.OPEN.value,
        created_at=now.strftime(CREATED_AT_FORMAT),
    )
    order.ensure_complete()
    return order


def apply_patch(existing: Order, patch: OrderPatch) -> Order:
    if patch.order_id is not None and patch.order_id != existing.order_id:
        raise ValueError("order with id does not match")
    if patch.status is not None and patch.status not in MODIFIABLE_STATUSES:
        raise ValueError('wrong order status (should be "Closed" or "Open")')
    if patch.created_at is not None and patch.created_at != existing.created_at:
        raise ValueError("modifying created time is not permitted")

    return Order(
        order_id=existing.order_id,
        customer_name=patch.customer_name or existing.customer_name,
        items=patch.items if patch.items is not None else existing.items,
        status=patch.status if patch.status is not None else existing.status,
        created_at=existing.created_at,
    )


def order_sequence(order_id: str) -> int:
    match = ORDER_ID_PATTERN.fullmatch(order_id)
    if match is None:
        raise ValueError(f"invalid ID format: {order_id!r}")
    return int(match.group(1))


def next_order_id(existing_ids: Iterable[str]) -> OrderId:
    last = 0
    for order_id in existing_ids:
        last = max(last, order_sequence(order_id))
    return OrderId(f"{ORDER_ID_PREFIX}{last + 1}")


class OrderTransitionError(Exception):
    pass
