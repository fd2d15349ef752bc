from __future__ import annotations

from hotcoffee.application.caches.menu_cache import MenuCache
from hotcoffee.application.caches.order_cache import OrderCache
from hotcoffee.application.errors import (
    NoOrdersError,
    NotFoundError,
    UnknownOrderStatusError,
    ValidationFailedError,
)
from hotcoffee.application.locking import Collection, CollectionLocks
from hotcoffee.domain.menu.entities import MenuItem
from hotcoffee.domain.order.entities import Order
from hotcoffee.domain.report.entities import PopularItem, TotalSales

DEFAULT_TOP_N = 3


def _ensure_known_status(order: Order) -> None:
    if not order.status:
        raise UnknownOrderStatusError(
            "order status cannot be empty",
            details={"order_id": order.order_id},
        )
    if order.lifecycle_status() is None:
        raise UnknownOrderStatusError(
            f"order {order.order_id} has unknown status {order.status!r}",
            details={"order_id": order.order_id, "status": order.status},
        )


def _resolve(menu_items: dict[str, MenuItem], product_id: str) -> MenuItem:
    menu_item = menu_items.get(product_id)
    if menu_item is None:
        raise NotFoundError(f"item with product ID={product_id} not found")
    return menu_item


class AggregationEngine:
    """Replays closed orders against the menu. Nothing is cached."""

    def __init__(self, orders: OrderCache, menu: MenuCache, locks: CollectionLocks) -> None:
        self._orders = orders
        self._menu = menu
        self._locks = locks

    def _snapshot(self) -> tuple[list[Order], dict[str, MenuItem]]:
        with self._locks.hold(Collection.MENU, Collection.ORDERS):
            orders = self._orders.load_all()
            menu_items = {item.product_id: item for item in self._menu.load_all()}
        if not orders:
            raise NoOrdersError("orders were not read: no orders in orders storage")
        return orders, menu_items

    def total_sales(self) -> TotalSales:
        orders, menu_items = self._snapshot()
        amount = 0.0
        for order in orders:
            _ensure_known_status(order)
            if not order.is_closed:
                continue
            for line in order.items:
                amount += _resolve(menu_items, line.product_id).price * line.quantity
        return TotalSales(amount=amount)

    def popular_items(self, top_n: int = DEFAULT_TOP_N) -> list[PopularItem]:
        if top_n < 1:
            raise ValidationFailedError("top_n must be >= 1")

        orders, menu_items = self._snapshot()
        sold: dict[str, int] = {}
        for order in orders:
            _ensure_known_status(order)
            if not order.is_closed:
                continue
            for line in order.items:
                sold[line.product_id] = sold.get(line.product_id, 0) + line.quantity

        ranked = sorted(sold.items(), key=lambda entry: (-entry[1], entry[0]))
        popular: list[PopularItem] = []
        for product_id, quantity in ranked[:top_n]:
            menu_item = _resolve(menu_items, product_id)
            popular.append(
                PopularItem(
                    product_id=menu_item.product_id,
                    name=menu_item.name,
                    description=menu_item.description,
                    price=menu_item.price,
                    quantity=quantity,
                    ingredients=list(menu_item.ingredients),
                )
            )
        return popular
