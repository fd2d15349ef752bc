from __future__ import annotations

from typing import Any


class HotCoffeeError(Exception):
    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.details = details or {}


class NotFoundError(HotCoffeeError):
    pass


class NoOrdersError(NotFoundError):
    pass


class ConflictError(HotCoffeeError):
    pass


class CollectionNotReadError(ConflictError):
    pass


class InvalidOrderIdError(ConflictError):
    pass


class OrderAlreadyClosedError(ConflictError):
    pass


class ValidationFailedError(HotCoffeeError):
    pass


class UnknownOrderStatusError(ValidationFailedError):
    pass


class NothingToModifyError(HotCoffeeError):
    pass


class InsufficientStockError(HotCoffeeError):
    def __init__(self, message: str, ingredient_id: str, required: float, available: float) -> None:
        super().__init__(
            message,
            details={
                "ingredient_id": ingredient_id,
                "required": required,
                "available": available,
            },
        )
        self.ingredient_id = ingredient_id
        self.required = required
        self.available = available


class StoreUnavailableError(HotCoffeeError):
    pass
