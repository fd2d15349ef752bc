from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.inventory.entities import InsufficientQuantityError, InventoryItem


def _item(quantity: float = 10) -> InventoryItem:
    return InventoryItem(
        ingredient_id=IngredientId("milk"),
        name="Milk",
        quantity=quantity,
        unit="ml",
    )


@pytest.mark.parametrize(
    ("fields", "message"),
    [
        ({"ingredient_id": ""}, "ingredient ID cannot be empty"),
        ({"quantity": float("nan")}, "quantity must be a finite number"),
        ({"quantity": float("inf")}, "quantity must be a finite number"),
        ({"quantity": -1}, "quantity cannot be negative"),
        ({"unit": ""}, "unit cannot be empty"),
        ({"name": ""}, "name cannot be empty"),
    ],
)
def test_inventory_item_rejects_invalid_fields(fields: dict, message: str) -> None:
    values = {"ingredient_id": "milk", "name": "Milk", "quantity": 1, "unit": "ml"}
    values.update(fields)
    with pytest.raises(ValueError, match=message):
        InventoryItem(**values)


def test_inventory_item_allows_zero_quantity() -> None:
    assert _item(quantity=0).quantity == 0


def test_deduct_returns_new_item_with_reduced_quantity() -> None:
    item = _item(quantity=10)

    deducted = item.deduct(4)

    assert deducted.quantity == 6
    assert item.quantity == 10


def test_deduct_to_exactly_zero_is_allowed() -> None:
    assert _item(quantity=3).deduct(3).quantity == 0


def test_deduct_more_than_available_fails() -> None:
    with pytest.raises(InsufficientQuantityError, match="wanted 11, given 10"):
        _item(quantity=10).deduct(11)
