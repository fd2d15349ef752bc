from __future__ import annotations

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).resolve().parents[3] / "src"))

from hotcoffee.infrastructure.storage.settings import (
    COLLECTION_FILES,
    PACKAGE_DIR,
    InvalidDataDirError,
    ensure_storage,
    validate_data_dir,
)


def test_validate_data_dir_resolves_inside_project(tmp_path: Path) -> None:
    assert validate_data_dir("data", project_root=tmp_path) == (tmp_path / "data").resolve()


@pytest.mark.parametrize(
    ("raw_path", "message"),
    [
        ("../data", "directory traversal"),
        (".", "project root"),
        ("/", "outside of the project"),
    ],
)
def test_validate_data_dir_rejects_unsafe_paths(
    tmp_path: Path, raw_path: str, message: str
) -> None:
    with pytest.raises(InvalidDataDirError, match=message):
        validate_data_dir(raw_path, project_root=tmp_path)


def test_validate_data_dir_rejects_package_directory() -> None:
    with pytest.raises(InvalidDataDirError, match="program file"):
        validate_data_dir(str(PACKAGE_DIR / "data"), project_root=PACKAGE_DIR.parent)


def test_ensure_storage_creates_collection_files(tmp_path: Path) -> None:
    data_dir = tmp_path / "data"

    ensure_storage(data_dir)

    assert sorted(path.name for path in data_dir.iterdir()) == sorted(COLLECTION_FILES)
