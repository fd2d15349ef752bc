from __future__ import annotations

from pydantic import ValidationError

from hotcoffee.application.ports.repositories import CorruptRecordError, OrderRepository
from hotcoffee.domain.common.ids import OrderId, ProductId
from hotcoffee.domain.order.entities import Order, OrderLine
from hotcoffee.infrastructure.storage.json_store import JsonFileRecordStore, Record
from hotcoffee.infrastructure.storage.records import OrderLineRecord, OrderRecord
from hotcoffee.infrastructure.storage.settings import ORDERS_FILE, get_data_dir


class JsonOrderRepository(OrderRepository):
    def __init__(self, store: JsonFileRecordStore | None = None) -> None:
        self._store = store or JsonFileRecordStore(get_data_dir() / ORDERS_FILE)

    def read(self) -> list[Order]:
        return [self._to_domain(record) for record in self._store.read()]

    def write(self, orders: list[Order]) -> None:
        self._store.write([self._to_record(order) for order in orders])

    @staticmethod
    def _to_domain(record: Record) -> Order:
        try:
            model = OrderRecord.model_validate(record)
            return Order(
                order_id=OrderId(model.order_id),
                customer_name=model.customer_name,
                items=[
                    OrderLine(product_id=ProductId(line.product_id), quantity=line.quantity)
                    for line in model.items
                ],
                status=model.status,
                created_at=model.created_at,
            )
        except (ValidationError, ValueError) as exc:
            raise CorruptRecordError(f"invalid order record: {exc}") from exc

    @staticmethod
    def _to_record(order: Order) -> Record:
        return OrderRecord(
            order_id=order.order_id,
            customer_name=order.customer_name,
            items=[
                OrderLineRecord(product_id=line.product_id, quantity=line.quantity)
                for line in order.items
            ],
            status=order.status,
            created_at=order.created_at,
        ).model_dump()
