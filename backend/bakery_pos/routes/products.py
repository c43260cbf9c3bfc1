# Overview: Flask API routes for the product catalog and stock; parses input and returns JSON responses.

# backend/bakery_pos/routes/products.py
"""
Product and stock routes.

CONFIRMATION: restocking an existing name and deleting a product are only
executed when the caller says so explicitly (confirm_restock / confirm).
Without it the route answers 409 so the front end can ask the user.
"""
from flask import Blueprint, jsonify, request, current_app

from ..core import get_core
from ..errors import ConfirmationRequired, PosError
from ..validation import is_confirmed, parse_name

products_bp = Blueprint("products", __name__, url_prefix="/api/products")


@products_bp.get("")
def list_products():
    """List all products with their low-stock flag, plus the current low-stock alert."""
    core = get_core()
    products = core.inventory.list_products()
    return jsonify({
        "items": [core.inventory.product_view(p) for p in products],
        "count": len(products),
        "low_stock_alert": core.reports.low_stock_alert(),
    })


@products_bp.get("/low-stock")
def list_low_stock():
    core = get_core()
    low = core.inventory.low_stock_products()
    return jsonify({
        "items": [core.inventory.product_view(p) for p in low],
        "count": len(low),
        "threshold": core.inventory.low_stock_threshold,
        "alert": core.reports.low_stock_alert(),
    })


@products_bp.get("/<int:product_id>")
def get_product(product_id: int):
    core = get_core()
    try:
        product = core.inventory.get_product(product_id)
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    return jsonify({"product": core.inventory.product_view(product)})


@products_bp.post("")
def add_or_restock_route():
    """
    Add a product, or restock an existing one with the same name.

    Request body:
    {
        "name": "Bread",
        "price": 1000,
        "quantity": 20,
        "image": "https://...",      (optional)
        "confirm_restock": true      (required when the name already exists)
    }
    """
    payload = request.get_json(silent=True) or {}
    core = get_core()

    try:
        name = parse_name(payload.get("name"))
        existing = core.inventory.find_by_name(name)
        if existing is not None and not is_confirmed(payload.get("confirm_restock")):
            raise ConfirmationRequired(
                "Item already exists. Confirm to add the quantity to its stock instead.",
                details={"product": existing.to_dict()},
            )

        product, created = core.inventory.add_or_restock(
            name,
            payload.get("price"),
            payload.get("quantity"),
            image=payload.get("image"),
        )
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to add product")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"product": core.inventory.product_view(product), "created": created}), 201 if created else 200


@products_bp.put("/<int:product_id>")
def edit_product_route(product_id: int):
    """
    Overwrite name, price and quantity of a product.

    Request body: {"name": "Bread", "price": 1200, "quantity": 0}
    """
    payload = request.get_json(silent=True) or {}
    core = get_core()

    try:
        product = core.inventory.edit(
            product_id,
            payload.get("name"),
            payload.get("price"),
            payload.get("quantity"),
        )
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to edit product")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"product": core.inventory.product_view(product)})


@products_bp.delete("/<int:product_id>")
def delete_product_route(product_id: int):
    """
    Permanently delete a product. Requires ?confirm=true (or {"confirm": true}).
    """
    payload = request.get_json(silent=True) or {}
    confirmed = is_confirmed(request.args.get("confirm")) or is_confirmed(payload.get("confirm"))

    try:
        if not confirmed:
            raise ConfirmationRequired(
                "Deleting a product cannot be undone. Confirm to proceed.",
                details={"product_id": product_id},
            )
        removed = get_core().inventory.remove(product_id)
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to delete product")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"deleted": removed.to_dict()})
