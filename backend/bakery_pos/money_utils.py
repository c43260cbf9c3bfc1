# Overview: Helpers for plain-number money amounts (no minor unit, no currency math).

from __future__ import annotations

Amount = int | float


def normalize_amount(value: Amount) -> Amount:
    """Keep integral amounts as ints; round fractional ones to 2 decimals."""
    if isinstance(value, float):
        rounded = round(value, 2)
        if rounded.is_integer():
            return int(rounded)
        return rounded
    return value


def line_total(price: Amount, quantity: int) -> Amount:
    return normalize_amount(price * quantity)


def add_amounts(*values: Amount) -> Amount:
    total: Amount = 0
    for v in values:
        total = normalize_amount(total + v)
    return total


def format_money(value: Amount, currency: str) -> str:
    value = normalize_amount(value)
    if isinstance(value, int):
        return f"{value} {currency}"
    return f"{value:.2f} {currency}"
