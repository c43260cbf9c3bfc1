# Overview: Error taxonomy shared by the POS services and the HTTP layer.

from __future__ import annotations


class PosError(Exception):
    """
    Base class for rejected POS operations.

    Every PosError is raised before anything is written, so the store is
    unchanged after the caller sees it.
    """
    kind = "PosError"
    http_status = 400

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        return {
            "error": self.message,
            "kind": self.kind,
            "details": self.details,
        }


class InvalidInput(PosError):
    """Malformed or out-of-range name, price, quantity or payment method."""
    kind = "InvalidInput"


class DuplicateProductName(InvalidInput):
    """Another product already uses this name (case-insensitive)."""
    kind = "DuplicateProductName"
    http_status = 409


class ProductNotFound(PosError):
    kind = "ProductNotFound"
    http_status = 404


class OutOfStock(PosError):
    """Product has zero stock left."""
    kind = "OutOfStock"
    http_status = 409


class InsufficientStock(PosError):
    """Requested quantity exceeds the product's current stock."""
    kind = "InsufficientStock"
    http_status = 409


class NoActiveShift(PosError):
    kind = "NoActiveShift"
    http_status = 409


class ShiftAlreadyActive(PosError):
    kind = "ShiftAlreadyActive"
    http_status = 409


class EmptyCart(PosError):
    kind = "EmptyCart"


class ConfirmationRequired(PosError):
    """A destructive operation was attempted without explicit confirmation."""
    kind = "ConfirmationRequired"
    http_status = 409
