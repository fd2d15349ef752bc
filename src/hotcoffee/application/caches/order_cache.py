from __future__ import annotations

import logging

from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.errors import (
    CollectionNotReadError,
    ConflictError,
    InvalidOrderIdError,
    NothingToModifyError,
    NotFoundError,
    ValidationFailedError,
)
from hotcoffee.application.locking import Collection, CollectionLocks
from hotcoffee.application.ports.repositories import CorruptRecordError, OrderRepository
from hotcoffee.domain.common.ids import OrderId
from hotcoffee.domain.order.entities import Order, OrderPatch, apply_patch, next_order_id

logger = logging.getLogger(__name__)


class OrderCache:
    def __init__(
        self,
        repository: OrderRepository,
        locks: CollectionLocks,
        menu: MenuCache,
    ) -> None:
        self._repository = repository
        self._locks = locks
        self._menu = menu

    def _load(self) -> tuple[list[Order], dict[str, int]]:
        try:
            orders = self._repository.read()
        except CorruptRecordError as exc:
            raise CollectionNotReadError(f"orders were not read: {exc}") from exc

        index: dict[str, int] = {}
        for position, order in enumerate(orders):
            if order.order_id in index:
                raise CollectionNotReadError(
                    f"orders were not read: duplicated order id {order.order_id}"
                )
            index[order.order_id] = position
        return orders, index

    def load_all(self) -> list[Order]:
        with self._locks.hold(Collection.ORDERS):
            orders, _ = self._load()
        return orders

    def get_all(self) -> list[Order]:
        return self.load_all()

    def get_by_id(self, order_id: str) -> Order:
        with self._locks.hold(Collection.ORDERS):
            orders, index = self._load()
        position = index.get(order_id)
        if position is None:
            raise NotFoundError(f"order with ID {order_id} not found")
        return orders[position]

    def next_order_id(self) -> OrderId:
        with self._locks.hold(Collection.ORDERS):
            orders, _ = self._load()
        try:
            return next_order_id(order.order_id for order in orders)
        except ValueError as exc:
            raise InvalidOrderIdError(str(exc)) from exc

    def validate(self, order: Order) -> None:
        """Check an order's own fields and that every product is on the menu."""
        try:
            order.ensure_complete()
        except ValueError as exc:
            raise ValidationFailedError(str(exc)) from exc

        menu_ids = {item.product_id for item in self._menu.load_all()}
        for line in order.items:
            if line.product_id not in menu_ids:
                raise NotFoundError(
                    f"item with product ID={line.product_id} not found",
                    details={"product_id": line.product_id},
                )

    def insert(self, order: Order) -> Order:
        with self._locks.hold(Collection.ORDERS):
            orders, index = self._load()
            if order.order_id in index:
                raise ConflictError(f"order with ID {order.order_id} already exists")
            orders.append(order)
            self._repository.write(orders)
        return order

    def replace(self, order: Order) -> Order:
        with self._locks.hold(Collection.ORDERS):
            orders, index = self._load()
            position = index.get(order.order_id)
            if position is None:
                raise NotFoundError(f"order with ID {order.order_id} not found")
            orders[position] = order
            self._repository.write(orders)
        return order

    def delete(self, order_id: str) -> None:
        with self._locks.hold(Collection.ORDERS):
            orders, index = self._load()
            position = index.get(order_id)
            if position is None:
                raise NotFoundError(f"order with ID {order_id} not found")
            del orders[position]
            self._repository.write(orders)

        logger.info("order_deleted", extra={"order_id": order_id})

    def modify(self, patch: OrderPatch, order_id: str) -> Order:
        with self._locks.hold(Collection.MENU, Collection.ORDERS):
            existing = self.get_by_id(order_id)
            try:
                modified = apply_patch(existing, patch)
            except ValueError as exc:
                raise ValidationFailedError(str(exc)) from exc
            if modified == existing:
                raise NothingToModifyError("nothing to modify")

            self.validate(modified)
            self.replace(modified)

        logger.info("order_modified", extra={"order_id": order_id})
        return modified
