from __future__ import annotations

import threading
from contextlib import contextmanager
from enum import IntEnum
from typing import Iterator


class Collection(IntEnum):
    # Acquisition order: lower values are always locked first.
    INVENTORY = 1
    MENU = 2
    ORDERS = 3


class LockOrderError(RuntimeError):
    pass


class CollectionLocks:
    """One lock per collection, guarding each reload-mutate-write span.

    ``hold`` is reentrant per thread: collections the calling thread already
    holds are skipped, and newly requested ones are acquired in ``Collection``
    order. Requesting a collection ranked below one already held would invert
    the order and raises ``LockOrderError``.
    """

    def __init__(self) -> None:
        self._locks = {collection: threading.RLock() for collection in Collection}
        self._local = threading.local()

    def _held(self) -> list[Collection]:
        held = getattr(self._local, "held", None)
        if held is None:
            held = []
            self._local.held = held
        return held

    def held_by_current_thread(self) -> tuple[Collection, ...]:
        return tuple(self._held())

    @contextmanager
    def hold(self, *collections: Collection) -> Iterator[None]:
        held = self._held()
        missing = sorted(set(collections) - set(held))
        if missing and held and missing[0] < max(held):
            raise LockOrderError(
                f"cannot lock {missing[0].name} while holding {max(held).name}"
            )

        acquired: list[Collection] = []
        try:
            for collection in missing:
                self._locks[collection].acquire()
                held.append(collection)
                acquired.append(collection)
            yield
        finally:
            for collection in reversed(acquired):
                held.remove(collection)
                self._locks[collection].release()
