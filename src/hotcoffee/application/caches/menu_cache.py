from __future__ import annotations

import logging

from hotcoffee.application.caches.inventory_cache import InventoryCache
from hotcoffee.application.errors import (
    CollectionNotReadError,
    ConflictError,
    NothingToModifyError,
    NotFoundError,
    ValidationFailedError,
)
from hotcoffee.application.locking import Collection, CollectionLocks
from hotcoffee.application.ports.repositories import CorruptRecordError, MenuRepository
from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.menu.entities import MenuItem

logger = logging.getLogger(__name__)


class MenuCache:
    def __init__(
        self,
        repository: MenuRepository,
        locks: CollectionLocks,
        inventory: InventoryCache,
    ) -> None:
        self._repository = repository
        self._locks = locks
        self._inventory = inventory

    def _load(self) -> tuple[list[MenuItem], dict[str, int]]:
        try:
            items = self._repository.read()
        except CorruptRecordError as exc:
            raise CollectionNotReadError(f"menu was not read: {exc}") from exc

        index: dict[str, int] = {}
        for position, item in enumerate(items):
            if item.product_id in index:
                raise CollectionNotReadError(
                    f"menu was not read: duplicated product ID {item.product_id}"
                )
            index[item.product_id] = position
        return items, index

    def _ensure_ingredients_exist(self, item: MenuItem) -> None:
        known = {inventory_item.ingredient_id for inventory_item in self._inventory.load_all()}
        for line in item.ingredients:
            if line.ingredient_id not in known:
                raise ValidationFailedError(
                    f"ingredient {line.ingredient_id} does not exist in inventory",
                    details={"ingredient_id": line.ingredient_id},
                )

    def load_all(self) -> list[MenuItem]:
        with self._locks.hold(Collection.MENU):
            items, _ = self._load()
        return items

    def get_all(self) -> list[MenuItem]:
        return self.load_all()

    def get_by_id(self, product_id: str) -> MenuItem:
        with self._locks.hold(Collection.MENU):
            items, index = self._load()
        position = index.get(product_id)
        if position is None:
            raise NotFoundError(f"item with product ID={product_id} not found")
        return items[position]

    def add(self, item: MenuItem) -> MenuItem:
        with self._locks.hold(Collection.INVENTORY, Collection.MENU):
            items, index = self._load()
            if item.product_id in index:
                raise ConflictError(f"item with product ID={item.product_id} already exists")
            self._ensure_ingredients_exist(item)
            items.append(item)
            self._repository.write(items)

        logger.info("menu_item_added", extra={"product_id": item.product_id})
        return item

    def delete(self, product_id: str) -> None:
        with self._locks.hold(Collection.MENU):
            items, index = self._load()
            position = index.get(product_id)
            if position is None:
                raise NotFoundError(f"item with product ID={product_id} not found")
            del items[position]
            self._repository.write(items)

        logger.info("menu_item_deleted", extra={"product_id": product_id})

    def modify(self, item: MenuItem) -> MenuItem:
        with self._locks.hold(Collection.INVENTORY, Collection.MENU):
            items, index = self._load()
            position = index.get(item.product_id)
            if position is None:
                raise NotFoundError(f"item with product ID={item.product_id} not found")
            # Equality covers id, name, description, price and the ordered recipe.
            if items[position] == item:
                raise NothingToModifyError("nothing to modify")
            self._ensure_ingredients_exist(item)
            items[position] = item
            self._repository.write(items)

        logger.info("menu_item_modified", extra={"product_id": item.product_id})
        return item

    def requirements_for(self, product_id: str, multiplier: float) -> dict[IngredientId, float]:
        return self.get_by_id(product_id).requirements(multiplier)

    def deduct_by_recipe(self, product_id: str, multiplier: float) -> None:
        """Deduct ``multiplier`` servings of a product's recipe from inventory.

        All recipe lines go through a single inventory write, so a shortage in
        any ingredient leaves every ingredient untouched.
        """
        with self._locks.hold(Collection.INVENTORY, Collection.MENU):
            requirements = self.requirements_for(product_id, multiplier)
            self._inventory.deduct_many(requirements)

        logger.info(
            "recipe_deducted",
            extra={"product_id": product_id, "multiplier": multiplier},
        )
