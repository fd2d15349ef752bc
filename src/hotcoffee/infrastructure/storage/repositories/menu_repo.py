from __future__ import annotations

from pydantic import ValidationError

from hotcoffee.application.ports.repositories import CorruptRecordError, MenuRepository
from hotcoffee.domain.common.ids import IngredientId, ProductId
from hotcoffee.domain.menu.entities import MenuItem, RecipeLine
from hotcoffee.infrastructure.storage.json_store import JsonFileRecordStore, Record
from hotcoffee.infrastructure.storage.records import MenuItemRecord, RecipeLineRecord
from hotcoffee.infrastructure.storage.settings import MENU_FILE, get_data_dir


class JsonMenuRepository(MenuRepository):
    def __init__(self, store: JsonFileRecordStore | None = None) -> None:
        self._store = store or JsonFileRecordStore(get_data_dir() / MENU_FILE)

    def read(self) -> list[MenuItem]:
        return [self._to_domain(record) for record in self._store.read()]

    def write(self, items: list[MenuItem]) -> None:
        self._store.write([self._to_record(item) for item in items])

    @staticmethod
    def _to_domain(record: Record) -> MenuItem:
        try:
            model = MenuItemRecord.model_validate(record)
            return MenuItem(
                product_id=ProductId(model.product_id),
                name=model.name,
                description=model.description,
                price=model.price,
                ingredients=[
                    RecipeLine(
                        ingredient_id=IngredientId(line.ingredient_id),
                        quantity=line.quantity,
                    )
                    for line in model.ingredients
                ],
            )
        except (ValidationError, ValueError) as exc:
            raise CorruptRecordError(f"invalid menu record: {exc}") from exc

    @staticmethod
    def _to_record(item: MenuItem) -> Record:
        return MenuItemRecord(
            product_id=item.product_id,
            name=item.name,
            description=item.description,
            price=item.price,
            ingredients=[
                RecipeLineRecord(ingredient_id=line.ingredient_id, quantity=line.quantity)
                for line in item.ingredients
            ],
        ).model_dump()
