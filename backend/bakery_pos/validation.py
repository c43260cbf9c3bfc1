from __future__ import annotations

import math
import re
from typing import Any

from .errors import InvalidInput
from .money_utils import Amount, normalize_amount
from .models.sales import PaymentMethod


# Maximum price: 999,999,999 (RWF has no minor unit)
# This prevents nonsensical prices from a stray keystroke
MAX_PRICE = 999_999_999

MAX_NAME_LENGTH = 255

# "1,000" / "1,000,000.50": comma groups thousands
_GROUPED_NUMBER = re.compile(r"^-?\d{1,3}(,\d{3})+(\.\d+)?$")
# "2,5" / "2,50": comma is the decimal separator
_DECIMAL_COMMA = re.compile(r"^-?\d+,\d{1,2}$")


def _coerce_int(field: str, value: Any) -> int:
    # Integers - strict validation to reject floats and scientific notation
    if isinstance(value, bool):
        raise InvalidInput(f"{field} must be an integer")
    if isinstance(value, int):
        return value
    # String input - must be plain digits (with optional leading minus)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidInput(f"{field} must be an integer")
        # Reject scientific notation (e.g., "1e15", "1E10")
        if "e" in stripped.lower():
            raise InvalidInput(f"{field} must be a plain integer (scientific notation not allowed)")
        # Reject decimal points (e.g., "12.5")
        if "." in stripped:
            raise InvalidInput(f"{field} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise InvalidInput(f"{field} must be an integer")
    # Reject floats explicitly, except whole numbers sent by JSON clients as 3.0
    if isinstance(value, float):
        if value.is_integer():
            return int(value)
        raise InvalidInput(f"{field} must be an integer, not a decimal")
    raise InvalidInput(f"{field} must be an integer")


def _coerce_number(field: str, value: Any) -> Amount:
    if isinstance(value, bool) or value is None:
        raise InvalidInput(f"{field} must be a number")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise InvalidInput(f"{field} must be a number")
        if _GROUPED_NUMBER.match(stripped):
            stripped = stripped.replace(",", "")
        elif _DECIMAL_COMMA.match(stripped):
            stripped = stripped.replace(",", ".")
        elif "," in stripped:
            raise InvalidInput(f"{field} must be a number", details={field: value})
        try:
            value = float(stripped)
        except ValueError:
            raise InvalidInput(f"{field} must be a number")
    if not isinstance(value, (int, float)):
        raise InvalidInput(f"{field} must be a number")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidInput(f"{field} must be a finite number")
    return normalize_amount(value)


def parse_name(value: Any) -> str:
    if value is None:
        raise InvalidInput("name is required")
    name = str(value).strip()
    if name == "":
        raise InvalidInput("name cannot be blank")
    if len(name) > MAX_NAME_LENGTH:
        raise InvalidInput(f"name exceeds max length {MAX_NAME_LENGTH}")
    return name


def parse_price(value: Any) -> Amount:
    price = _coerce_number("price", value)
    if price <= 0:
        raise InvalidInput("price must be > 0", details={"price": price})
    if price > MAX_PRICE:
        raise InvalidInput(f"price cannot exceed {MAX_PRICE:,}")
    return price


def parse_quantity(value: Any, *, allow_zero: bool) -> int:
    """
    Stock quantity.

    Creation/restock requires quantity > 0; an edit may set it to exactly 0.
    """
    if value is None:
        raise InvalidInput("quantity is required")
    quantity = _coerce_int("quantity", value)
    if allow_zero and quantity < 0:
        raise InvalidInput("quantity must be >= 0", details={"quantity": quantity})
    if not allow_zero and quantity <= 0:
        raise InvalidInput("quantity must be > 0", details={"quantity": quantity})
    return quantity


def parse_delta(value: Any) -> int:
    if value is None:
        raise InvalidInput("delta is required")
    delta = _coerce_int("delta", value)
    if delta == 0:
        raise InvalidInput("delta must be non-zero")
    return delta


def parse_product_id(value: Any) -> int:
    if value is None:
        raise InvalidInput("product_id is required")
    return _coerce_int("product_id", value)


def parse_payment_method(value: Any) -> PaymentMethod:
    if isinstance(value, PaymentMethod):
        return value
    if value is None:
        raise InvalidInput("payment_method is required")
    try:
        return PaymentMethod.parse(str(value))
    except ValueError:
        raise InvalidInput(
            "payment_method must be one of: cash, momo",
            details={"payment_method": value},
        )


def is_confirmed(value: Any) -> bool:
    """Confirmation flag from a JSON body or query string: true/1/yes/on."""
    if isinstance(value, bool):
        return value
    return str(value or "").strip().lower() in {"1", "true", "yes", "on"}
