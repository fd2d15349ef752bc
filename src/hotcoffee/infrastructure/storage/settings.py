from __future__ import annotations

import os
from pathlib import Path

INVENTORY_FILE = "inventory.json"
MENU_FILE = "menu_items.json"
ORDERS_FILE = "orders.json"
COLLECTION_FILES = (INVENTORY_FILE, MENU_FILE, ORDERS_FILE)

DEFAULT_DATA_DIR = "data"
PACKAGE_DIR = Path(__file__).resolve().parents[2]


class InvalidDataDirError(ValueError):
    pass


def get_data_dir() -> Path:
    return Path(os.getenv("HOTCOFFEE_DATA_DIR", DEFAULT_DATA_DIR)).resolve()


def validate_data_dir(raw_path: str, project_root: Path | None = None) -> Path:
    """Resolve a user supplied storage directory, refusing unsafe locations."""
    if ".." in Path(raw_path).parts:
        raise InvalidDataDirError("relative paths or directory traversal is not allowed")

    root = (project_root or Path.cwd()).resolve()
    path = Path(raw_path)
    resolved = (path if path.is_absolute() else root / path).resolve()

    if resolved == PACKAGE_DIR or PACKAGE_DIR in resolved.parents:
        raise InvalidDataDirError("path to storage directory is inside a program file")
    if resolved == root:
        raise InvalidDataDirError(
            "cannot create file directly inside the project root directory"
        )
    if root not in resolved.parents:
        raise InvalidDataDirError("path is outside of the project directory")
    return resolved


def ensure_storage(data_dir: Path) -> None:
    data_dir.mkdir(parents=True, exist_ok=True)
    for file_name in COLLECTION_FILES:
        (data_dir / file_name).touch(exist_ok=True)


def storage_ready(data_dir: Path) -> bool:
    return data_dir.is_dir() and os.access(data_dir, os.R_OK | os.W_OK)
