from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from fastapi import Depends, Request

from hotcoffee.application.caches.inventory_cache import InventoryCache
from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.caches.order_cache import OrderCache
from hotcoffee.application.locking import CollectionLocks
from hotcoffee.application.ports.repositories import (
    InventoryRepository,
    MenuRepository,
    OrderRepository,
)
from hotcoffee.application.use_cases.fulfillment import FulfillmentEngine
from hotcoffee.application.use_cases.reports import AggregationEngine
from hotcoffee.infrastructure.storage.json_store import JsonFileRecordStore
from hotcoffee.infrastructure.storage.repositories.inventory_repo import JsonInventoryRepository
from hotcoffee.infrastructure.storage.repositories.menu_repo import JsonMenuRepository
from hotcoffee.infrastructure.storage.repositories.order_repo import JsonOrderRepository
from hotcoffee.infrastructure.storage.settings import INVENTORY_FILE, MENU_FILE, ORDERS_FILE


@dataclass(frozen=True)
class Storage:
    """Store handles and their locks, shared by every request of one app."""

    data_dir: Path
    inventory: InventoryRepository
    menu: MenuRepository
    orders: OrderRepository
    locks: CollectionLocks


def build_storage(data_dir: Path) -> Storage:
    return Storage(
        data_dir=data_dir,
        inventory=JsonInventoryRepository(JsonFileRecordStore(data_dir / INVENTORY_FILE)),
        menu=JsonMenuRepository(JsonFileRecordStore(data_dir / MENU_FILE)),
        orders=JsonOrderRepository(JsonFileRecordStore(data_dir / ORDERS_FILE)),
        locks=CollectionLocks(),
    )


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def inventory_cache(storage: Storage = Depends(get_storage)) -> InventoryCache:
    return InventoryCache(repository=storage.inventory, locks=storage.locks)


def menu_cache(
    storage: Storage = Depends(get_storage),
    inventory: InventoryCache = Depends(inventory_cache),
) -> MenuCache:
    return MenuCache(repository=storage.menu, locks=storage.locks, inventory=inventory)


def order_cache(
    storage: Storage = Depends(get_storage),
    menu: MenuCache = Depends(menu_cache),
) -> OrderCache:
    return OrderCache(repository=storage.orders, locks=storage.locks, menu=menu)


def fulfillment_engine(
    storage: Storage = Depends(get_storage),
    inventory: InventoryCache = Depends(inventory_cache),
    menu: MenuCache = Depends(menu_cache),
    orders: OrderCache = Depends(order_cache),
) -> FulfillmentEngine:
    return FulfillmentEngine(inventory=inventory, menu=menu, orders=orders, locks=storage.locks)


def aggregation_engine(
    storage: Storage = Depends(get_storage),
    menu: MenuCache = Depends(menu_cache),
    orders: OrderCache = Depends(order_cache),
) -> AggregationEngine:
    return AggregationEngine(orders=orders, menu=menu, locks=storage.locks)
