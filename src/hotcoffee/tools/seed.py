from __future__ import annotations

from hotcoffee.domain.common.ids import IngredientId, ProductId
from hotcoffee.domain.inventory.entities import InventoryItem
from hotcoffee.domain.menu.entities import MenuItem, RecipeLine
from hotcoffee.infrastructure.storage.repositories.inventory_repo import JsonInventoryRepository
from hotcoffee.infrastructure.storage.repositories.menu_repo import JsonMenuRepository
from hotcoffee.infrastructure.storage.settings import ensure_storage, get_data_dir

INVENTORY = [
    InventoryItem(IngredientId("espresso_shot"), "Espresso Shot", 500, "shots"),
    InventoryItem(IngredientId("milk"), "Milk", 5000, "ml"),
    InventoryItem(IngredientId("flour"), "Flour", 10000, "g"),
    InventoryItem(IngredientId("blueberries"), "Blueberries", 2000, "g"),
    InventoryItem(IngredientId("sugar"), "Sugar", 5000, "g"),
]

MENU = [
    MenuItem(
        product_id=ProductId("latte"),
        name="Caffe Latte",
        description="Espresso with steamed milk",
        price=3.5,
        ingredients=[
            RecipeLine(IngredientId("espresso_shot"), 1),
            RecipeLine(IngredientId("milk"), 200),
        ],
    ),
    MenuItem(
        product_id=ProductId("muffin"),
        name="Blueberry Muffin",
        description="Freshly baked muffin with blueberries",
        price=2.0,
        ingredients=[
            RecipeLine(IngredientId("flour"), 100),
            RecipeLine(IngredientId("blueberries"), 20),
            RecipeLine(IngredientId("sugar"), 30),
        ],
    ),
    MenuItem(
        product_id=ProductId("espresso"),
        name="Espresso",
        description="Strong and bold coffee",
        price=2.5,
        ingredients=[RecipeLine(IngredientId("espresso_shot"), 1)],
    ),
]


def main() -> None:
    data_dir = get_data_dir()
    ensure_storage(data_dir)

    inventory_repository = JsonInventoryRepository()
    menu_repository = JsonMenuRepository()
    if inventory_repository.read() or menu_repository.read():
        print("data already present")
        return

    inventory_repository.write(INVENTORY)
    menu_repository.write(MENU)
    print("seed complete")


if __name__ == "__main__":
    main()
