from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any

from hotcoffee.application.errors import StoreUnavailableError

Record = dict[str, Any]


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-finite number {token} is not allowed")


class JsonFileRecordStore:
    """A whole collection persisted as one JSON array.

    ``write`` goes through a temporary file and ``os.replace`` so a reader
    never sees a partially written document.
    """

    def __init__(self, path: Path) -> None:
        self._path = Path(path)

    def read(self) -> list[Record]:
        try:
            raw = self._path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return []
        except OSError as exc:
            raise StoreUnavailableError(f"unable to open {self._path.name}: {exc}") from exc

        if not raw.strip():
            return []
        try:
            records = json.loads(raw, parse_constant=_reject_constant)
        except ValueError as exc:
            raise StoreUnavailableError(f"unable to read {self._path.name}: {exc}") from exc
        if not isinstance(records, list):
            raise StoreUnavailableError(f"{self._path.name} must contain a JSON array")
        return records

    def write(self, records: list[Record]) -> None:
        tmp_path = self._path.with_name(f"{self._path.name}.tmp")
        try:
            document = json.dumps(records, indent=4, allow_nan=False)
        except ValueError as exc:
            raise StoreUnavailableError(f"unable to encode {self._path.name}: {exc}") from exc
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(document, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as exc:
            raise StoreUnavailableError(f"unable to write {self._path.name}: {exc}") from exc
