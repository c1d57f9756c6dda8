# storefront/domain/results.py
from dataclasses import dataclass, field
from enum import Enum

from storefront.data.models.cart import CartModel


class FailureKind(str, Enum):
    DUPLICATE_ITEM = "DUPLICATE_ITEM"
    PRODUCT_NOT_FOUND = "PRODUCT_NOT_FOUND"
    ITEM_NOT_IN_CART = "ITEM_NOT_IN_CART"
    INSUFFICIENT_STOCK = "INSUFFICIENT_STOCK"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    CART_CONFLICT = "CART_CONFLICT"
    STORAGE_FAILURE = "STORAGE_FAILURE"


@dataclass(frozen=True)
class CartResult:
    """
    Outcome of a cart mutation.

    Either ``ok`` with the persisted cart in ``value``, or a failure with its
    ``failure`` kind and a short ``message`` safe to show to callers. For
    STORAGE_FAILURE the underlying exception is kept in ``error`` for logging
    and is never serialized.
    """

    ok: bool
    value: CartModel | None = None
    failure: FailureKind | None = None
    message: str | None = None
    error: Exception | None = field(default=None, repr=False, compare=False)

    @classmethod
    def success(cls, cart: CartModel) -> "CartResult":
        return cls(ok=True, value=cart)

    @classmethod
    def fail(cls, failure: FailureKind, message: str, error: Exception | None = None) -> "CartResult":
        return cls(ok=False, failure=failure, message=message, error=error)
