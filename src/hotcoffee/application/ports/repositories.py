from __future__ import annotations

from typing import Protocol

from hotcoffee.domain.inventory.entities import InventoryItem
from hotcoffee.domain.menu.entities import MenuItem
from hotcoffee.domain.order.entities import Order


class InventoryRepository(Protocol):
    def read(self) -> list[InventoryItem]: ...

    def write(self, items: list[InventoryItem]) -> None: ...


class MenuRepository(Protocol):
    def read(self) -> list[MenuItem]: ...

    def write(self, items: list[MenuItem]) -> None: ...


class OrderRepository(Protocol):
    def read(self) -> list[Order]: ...

    def write(self, orders: list[Order]) -> None: ...


class CorruptRecordError(Exception):
    """A persisted record could not be turned into a valid entity."""
