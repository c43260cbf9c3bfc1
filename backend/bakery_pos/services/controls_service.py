# Overview: Derived UI-enablement state, recomputed from the cart and shift on every call.

from __future__ import annotations

from ..models import CartLine, Shift


def checkout_enabled(cart_lines: list[CartLine], active_shift: Shift | None) -> bool:
    return bool(cart_lines) and active_shift is not None


def derive_controls(cart_lines: list[CartLine], active_shift: Shift | None) -> dict:
    """
    Button/alert state for a front end.

    Pure function of its inputs; nothing here is stored.
    """
    return {
        "checkout_enabled": checkout_enabled(cart_lines, active_shift),
        "start_shift_enabled": active_shift is None,
        "end_shift_enabled": active_shift is not None,
        "shift_closed_alert": bool(cart_lines) and active_shift is None,
    }
