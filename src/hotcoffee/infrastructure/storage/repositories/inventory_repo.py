from __future__ import annotations

from pydantic import ValidationError

from hotcoffee.application.ports.repositories import CorruptRecordError, InventoryRepository
from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.inventory.entities import InventoryItem
from hotcoffee.infrastructure.storage.json_store import JsonFileRecordStore, Record
from hotcoffee.infrastructure.storage.records import InventoryRecord
from hotcoffee.infrastructure.storage.settings import INVENTORY_FILE, get_data_dir


class JsonInventoryRepository(InventoryRepository):
    def __init__(self, store: JsonFileRecordStore | None = None) -> None:
        self._store = store or JsonFileRecordStore(get_data_dir() / INVENTORY_FILE)

    def read(self) -> list[InventoryItem]:
        return [self._to_domain(record) for record in self._store.read()]

    def write(self, items: list[InventoryItem]) -> None:
        self._store.write([self._to_record(item) for item in items])

    @staticmethod
    def _to_domain(record: Record) -> InventoryItem:
        try:
            model = InventoryRecord.model_validate(record)
            return InventoryItem(
                ingredient_id=IngredientId(model.ingredient_id),
                name=model.name,
                quantity=model.quantity,
                unit=model.unit,
            )
        except (ValidationError, ValueError) as exc:
            raise CorruptRecordError(f"invalid inventory record: {exc}") from exc

    @staticmethod
    def _to_record(item: InventoryItem) -> Record:
        return InventoryRecord(
            ingredient_id=item.ingredient_id,
            name=item.name,
            quantity=item.quantity,
            unit=item.unit,
        ).model_dump()
