from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from hotcoffee.application.errors import (
    ConflictError,
    InvalidOrderIdError,
    NothingToModifyError,
    NotFoundError,
    ValidationFailedError,
)
from hotcoffee.domain.common.ids import OrderId, ProductId
from hotcoffee.domain.order.entities import Order, OrderLine, OrderPatch


def _order(order_id: str = "order1", status: str = "open") -> Order:
    return Order(
        order_id=OrderId(order_id),
        customer_name="Alice",
        items=[OrderLine(ProductId("latte"), 1)],
        status=status,
        created_at="2024-05-01 09:30:00",
    )


def test_get_all_returns_empty_list_without_orders(orders) -> None:
    assert orders.get_all() == []


def test_insert_and_get_by_id(orders, order_repository) -> None:
    orders.insert(_order())

    assert orders.get_by_id("order1") == _order()
    assert order_repository.writes == 1


def test_insert_rejects_existing_id(orders) -> None:
    orders.insert(_order())

    with pytest.raises(ConflictError):
        orders.insert(_order())


def test_get_by_id_unknown_raises_not_found(orders) -> None:
    with pytest.raises(NotFoundError, match="order with ID order9 not found"):
        orders.get_by_id("order9")


def test_next_order_id_increments_highest_sequence(orders, order_repository) -> None:
    order_repository.items = [_order("order2"), _order("order5")]

    assert orders.next_order_id() == "order6"


def test_next_order_id_fails_on_malformed_stored_id(orders, order_repository) -> None:
    order_repository.items = [_order("order2"), _order("legacy-7")]

    with pytest.raises(InvalidOrderIdError):
        orders.next_order_id()


def test_validate_rejects_product_missing_from_menu(orders) -> None:
    order = Order(
        order_id=OrderId("order1"),
        customer_name="Alice",
        items=[OrderLine(ProductId("mocha"), 1)],
        status="open",
        created_at="2024-05-01 09:30:00",
    )

    with pytest.raises(NotFoundError, match="product ID=mocha"):
        orders.validate(order)


def test_modify_updates_supplied_fields(orders) -> None:
    orders.insert(_order())

    modified = orders.modify(OrderPatch(items=[OrderLine(ProductId("espresso"), 3)]), "order1")

    assert modified.items == [OrderLine(ProductId("espresso"), 3)]
    assert orders.get_by_id("order1").customer_name == "Alice"


def test_modify_without_changes_is_nothing_to_modify(orders, order_repository) -> None:
    orders.insert(_order())

    with pytest.raises(NothingToModifyError):
        orders.modify(OrderPatch(customer_name="Alice"), "order1")
    assert order_repository.writes == 1


@pytest.mark.parametrize(
    "patch",
    [
        OrderPatch(order_id="order2"),
        OrderPatch(status="pending"),
        OrderPatch(created_at="2020-01-01 00:00:00"),
    ],
)
def test_modify_rejects_invalid_patch(orders, patch: OrderPatch) -> None:
    orders.insert(_order())

    with pytest.raises(ValidationFailedError):
        orders.modify(patch, "order1")


def test_modify_rejects_unknown_product(orders) -> None:
    orders.insert(_order())

    with pytest.raises(NotFoundError):
        orders.modify(OrderPatch(items=[OrderLine(ProductId("mocha"), 1)]), "order1")


def test_delete_order(orders) -> None:
    orders.insert(_order())
    orders.delete("order1")

    assert orders.get_all() == []
