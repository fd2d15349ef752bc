from __future__ import annotations

import sys
from datetime import datetime
from pathlib import Path
from typing import Generic, TypeVar

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from hotcoffee.application.caches.inventory_cache import InventoryCache
from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.caches.order_cache import OrderCache
from hotcoffee.application.errors import StoreUnavailableError
from hotcoffee.application.locking import CollectionLocks
from hotcoffee.application.use_cases.fulfillment import FulfillmentEngine
from hotcoffee.application.use_cases.reports import AggregationEngine
from hotcoffee.domain.common.ids import IngredientId, ProductId
from hotcoffee.domain.inventory.entities import InventoryItem
from hotcoffee.domain.menu.entities import MenuItem, RecipeLine

T = TypeVar("T")

FIXED_NOW = datetime(2024, 5, 1, 9, 30, 0)


class FakeRepository(Generic[T]):
    """In-memory collection store. ``fail_writes`` simulates an unwritable file."""

    def __init__(self, items: list[T] | None = None) -> None:
        self.items: list[T] = list(items or [])
        self.writes = 0
        self.fail_writes = False

    def read(self) -> list[T]:
        return list(self.items)

    def write(self, items: list[T]) -> None:
        if self.fail_writes:
            raise StoreUnavailableError("unable to write collection")
        self.items = list(items)
        self.writes += 1


def inventory_item(ingredient_id: str, quantity: float, unit: str = "g") -> InventoryItem:
    return InventoryItem(
        ingredient_id=IngredientId(ingredient_id),
        name=ingredient_id.replace("_", " ").title(),
        quantity=quantity,
        unit=unit,
    )


def menu_item(product_id: str, price: float, recipe: dict[str, float]) -> MenuItem:
    return MenuItem(
        product_id=ProductId(product_id),
        name=product_id.title(),
        description=f"{product_id} description",
        price=price,
        ingredients=[
            RecipeLine(ingredient_id=IngredientId(key), quantity=value)
            for key, value in recipe.items()
        ],
    )


@pytest.fixture
def locks() -> CollectionLocks:
    return CollectionLocks()


@pytest.fixture
def inventory_repository() -> FakeRepository[InventoryItem]:
    return FakeRepository(
        [
            inventory_item("espresso_shot", 10, unit="shots"),
            inventory_item("milk", 1000, unit="ml"),
            inventory_item("sugar", 100),
        ]
    )


@pytest.fixture
def menu_repository() -> FakeRepository[MenuItem]:
    return FakeRepository(
        [
            menu_item("latte", 3.5, {"espresso_shot": 1, "milk": 200}),
            menu_item("espresso", 2.0, {"espresso_shot": 1}),
            menu_item("sweet_latte", 4.0, {"espresso_shot": 1, "milk": 150, "sugar": 10}),
        ]
    )


@pytest.fixture
def order_repository() -> FakeRepository:
    return FakeRepository()


@pytest.fixture
def inventory(inventory_repository, locks) -> InventoryCache:
    return InventoryCache(repository=inventory_repository, locks=locks)


@pytest.fixture
def menu(menu_repository, locks, inventory) -> MenuCache:
    return MenuCache(repository=menu_repository, locks=locks, inventory=inventory)


@pytest.fixture
def orders(order_repository, locks, menu) -> OrderCache:
    return OrderCache(repository=order_repository, locks=locks, menu=menu)


@pytest.fixture
def engine(inventory, menu, orders, locks) -> FulfillmentEngine:
    return FulfillmentEngine(
        inventory=inventory,
        menu=menu,
        orders=orders,
        locks=locks,
        clock=lambda: FIXED_NOW,
    )


@pytest.fixture
def aggregation(orders, menu, locks) -> AggregationEngine:
    return AggregationEngine(orders=orders, menu=menu, locks=locks)
