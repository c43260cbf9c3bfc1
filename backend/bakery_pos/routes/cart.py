# Overview: Flask API routes for the in-progress cart; parses input and returns JSON responses.

from flask import Blueprint, jsonify, request, current_app

from ..core import get_core
from ..errors import PosError
from ..validation import parse_product_id

cart_bp = Blueprint("cart", __name__, url_prefix="/api/cart")


def _cart_payload() -> dict:
    core = get_core()
    payload = core.cart.view()
    payload["controls"] = core.controls()
    return payload


@cart_bp.get("")
def get_cart():
    """Cart lines, running total and derived button state."""
    return jsonify(_cart_payload())


@cart_bp.post("/items")
def add_item_route():
    """
    Add one unit of a product to the cart.

    Request body: {"product_id": 1}
    """
    payload = request.get_json(silent=True) or {}

    try:
        product_id = parse_product_id(payload.get("product_id"))
        get_core().cart.add_item(product_id)
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to add cart item")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(_cart_payload()), 201


@cart_bp.patch("/items/<int:product_id>")
def change_quantity_route(product_id: int):
    """
    Adjust a line's quantity; the line is removed when it reaches zero.

    Request body: {"delta": 1}  (or -1)
    """
    payload = request.get_json(silent=True) or {}

    try:
        get_core().cart.change_quantity(product_id, payload.get("delta"))
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to change cart quantity")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(_cart_payload())


@cart_bp.delete("/items/<int:product_id>")
def remove_item_route(product_id: int):
    try:
        get_core().cart.remove_item(product_id)
    except Exception:
        current_app.logger.exception("Failed to remove cart item")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify(_cart_payload())
