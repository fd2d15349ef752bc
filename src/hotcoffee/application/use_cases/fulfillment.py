from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable

from hotcoffee.application.caches.inventory_cache import InventoryCache
from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.caches.order_cache import OrderCache
from hotcoffee.application.errors import (
    NotFoundError,
    OrderAlreadyClosedError,
    StoreUnavailableError,
    ValidationFailedError,
)
from hotcoffee.application.locking import Collection, CollectionLocks
from hotcoffee.application.metrics.order_lifecycle import (
    record_close_rollback,
    record_order_status,
    record_time_to_close,
    record_transition,
)
from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.menu.entities import merge_requirements
from hotcoffee.domain.order.entities import (
    Order,
    OrderLine,
    OrderStatus,
    OrderTransitionError,
    create_open_order,
)

logger = logging.getLogger(__name__)

ALL_COLLECTIONS = (Collection.INVENTORY, Collection.MENU, Collection.ORDERS)


class FulfillmentEngine:
    """Creates and closes orders across the inventory, menu and order caches.

    Both operations run with all three collection locks held, so the
    sufficiency check, the deduction and the order write see one consistent
    state. Closing an order applies every ingredient deduction in a single
    inventory write and restores that write if the order cannot be saved.
    """

    def __init__(
        self,
        inventory: InventoryCache,
        menu: MenuCache,
        orders: OrderCache,
        locks: CollectionLocks,
        clock: Callable[[], datetime] = datetime.now,
    ) -> None:
        self._inventory = inventory
        self._menu = menu
        self._orders = orders
        self._locks = locks
        self._clock = clock

    def _requirements(self, order: Order) -> dict[IngredientId, float]:
        menu_items = {item.product_id: item for item in self._menu.load_all()}
        requirements = []
        for line in order.items:
            menu_item = menu_items.get(line.product_id)
            if menu_item is None:
                raise NotFoundError(f"item with product ID={line.product_id} not found")
            requirements.append(menu_item.requirements(line.quantity))
        return merge_requirements(*requirements)

    def create_order(self, customer_name: str, items: list[OrderLine]) -> Order:
        with self._locks.hold(*ALL_COLLECTIONS):
            order_id = self._orders.next_order_id()
            try:
                order = create_open_order(
                    order_id=order_id,
                    customer_name=customer_name,
                    items=items,
                    now=self._clock(),
                )
            except ValueError as exc:
                raise ValidationFailedError(str(exc)) from exc

            self._orders.validate(order)
            self._inventory.check_sufficient(self._requirements(order))
            self._orders.insert(order)

        record_order_status(order)
        logger.info("order_created", extra={"order_id": order.order_id})
        return order

    def close_order(self, order_id: str) -> Order:
        with self._locks.hold(*ALL_COLLECTIONS):
            order = self._orders.get_by_id(order_id)
            try:
                closed = order.close()
            except OrderTransitionError as exc:
                raise OrderAlreadyClosedError(str(exc)) from exc

            self._orders.validate(order)
            requirements = self._requirements(order)
            snapshot = self._inventory.deduct_many(requirements)
            try:
                self._orders.replace(closed)
            except StoreUnavailableError:
                logger.exception("order_close_rolled_back", extra={"order_id": order_id})
                self._inventory.restore(snapshot)
                record_close_rollback()
                raise

        record_transition(from_status=OrderStatus.OPEN, to_status=OrderStatus.CLOSED)
        record_order_status(closed)
        record_time_to_close(closed, now=self._clock())
        logger.info("order_closed", extra={"order_id": order_id})
        return closed
