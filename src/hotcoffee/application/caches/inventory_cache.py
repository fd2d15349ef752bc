from __future__ import annotations

import logging
from typing import Mapping

from hotcoffee.application.errors import (
    CollectionNotReadError,
    ConflictError,
    InsufficientStockError,
    NothingToModifyError,
    NotFoundError,
)
from hotcoffee.application.locking import Collection, CollectionLocks
from hotcoffee.application.metrics.order_lifecycle import (
    record_insufficient_stock,
    record_inventory_deducted,
)
from hotcoffee.application.ports.repositories import CorruptRecordError, InventoryRepository
from hotcoffee.domain.common.ids import IngredientId
from hotcoffee.domain.inventory.entities import InsufficientQuantityError, InventoryItem

logger = logging.getLogger(__name__)


class InventoryCache:
    """Validated view of the inventory collection.

    Nothing is kept between calls: every operation reloads the collection
    under the inventory lock, works on that snapshot and, for mutations,
    rewrites the whole collection before releasing the lock.
    """

    def __init__(self, repository: InventoryRepository, locks: CollectionLocks) -> None:
        self._repository = repository
        self._locks = locks

    def _load(self) -> tuple[list[InventoryItem], dict[str, int]]:
        try:
            items = self._repository.read()
        except CorruptRecordError as exc:
            raise CollectionNotReadError(f"inventory was not read: {exc}") from exc

        index: dict[str, int] = {}
        for position, item in enumerate(items):
            if item.ingredient_id in index:
                raise CollectionNotReadError(
                    f"inventory was not read: duplicated ingredient ID {item.ingredient_id}"
                )
            index[item.ingredient_id] = position
        return items, index

    def load_all(self) -> list[InventoryItem]:
        with self._locks.hold(Collection.INVENTORY):
            items, _ = self._load()
        return items

    def get_all(self) -> list[InventoryItem]:
        return self.load_all()

    def get_by_id(self, ingredient_id: str) -> InventoryItem:
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()
        position = index.get(ingredient_id)
        if position is None:
            raise NotFoundError(f"item with ingredient ID={ingredient_id} not found")
        return items[position]

    def add(self, item: InventoryItem) -> InventoryItem:
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()
            if item.ingredient_id in index:
                raise ConflictError(f"item with ingredient ID={item.ingredient_id} already exists")
            items.append(item)
            self._repository.write(items)

        logger.info("inventory_item_added", extra={"ingredient_id": item.ingredient_id})
        return item

    def delete(self, ingredient_id: str) -> None:
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()
            position = index.get(ingredient_id)
            if position is None:
                raise NotFoundError(f"item with ingredient ID={ingredient_id} not found")
            del items[position]
            self._repository.write(items)

        logger.info("inventory_item_deleted", extra={"ingredient_id": ingredient_id})

    def modify(self, item: InventoryItem) -> InventoryItem:
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()
            position = index.get(item.ingredient_id)
            if position is None:
                raise NotFoundError(f"item with ingredient ID={item.ingredient_id} not found")
            if items[position] == item:
                raise NothingToModifyError("nothing to modify")
            items[position] = item
            self._repository.write(items)

        logger.info("inventory_item_modified", extra={"ingredient_id": item.ingredient_id})
        return item

    def check_sufficient(self, requirements: Mapping[IngredientId, float]) -> None:
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()

        for ingredient_id, amount in requirements.items():
            position = index.get(ingredient_id)
            if position is None:
                raise NotFoundError(f"item with ingredient ID={ingredient_id} not found")
            item = items[position]
            if not item.has_at_least(amount):
                record_insufficient_stock(ingredient_id)
                raise InsufficientStockError(
                    f"not enough {ingredient_id} (required: {amount:.2f})",
                    ingredient_id=ingredient_id,
                    required=amount,
                    available=item.quantity,
                )

    def deduct(self, ingredient_id: IngredientId, amount: float) -> InventoryItem:
        with self._locks.hold(Collection.INVENTORY):
            self.deduct_many({ingredient_id: amount})
            return self.get_by_id(ingredient_id)

    def deduct_many(self, requirements: Mapping[IngredientId, float]) -> list[InventoryItem]:
        """Apply every deduction in one write, or none of them.

        Returns the collection as it was before the write so a caller can
        restore it if a later step of its own operation fails.
        """
        with self._locks.hold(Collection.INVENTORY):
            items, index = self._load()
            updated = list(items)
            for ingredient_id, amount in requirements.items():
                position = index.get(ingredient_id)
                if position is None:
                    raise NotFoundError(f"item with ingredient ID={ingredient_id} not found")
                current = updated[position]
                try:
                    updated[position] = current.deduct(amount)
                except InsufficientQuantityError as exc:
                    record_insufficient_stock(ingredient_id)
                    raise InsufficientStockError(
                        str(exc),
                        ingredient_id=ingredient_id,
                        required=amount,
                        available=current.quantity,
                    ) from exc
            self._repository.write(updated)

        for ingredient_id, amount in requirements.items():
            record_inventory_deducted(ingredient_id, amount)
        logger.info(
            "inventory_deducted",
            extra={"ingredients": {str(key): value for key, value in requirements.items()}},
        )
        return items

    def restore(self, snapshot: list[InventoryItem]) -> None:
        with self._locks.hold(Collection.INVENTORY):
            self._repository.write(list(snapshot))
        logger.warning("inventory_restored", extra={"items": len(snapshot)})
