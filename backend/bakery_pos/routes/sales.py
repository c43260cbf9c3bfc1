# Overview: Flask API routes for checkout and the sales log; parses input and returns JSON responses.

# backend/bakery_pos/routes/sales.py
"""Checkout, receipts and sales summary routes"""

from flask import Blueprint, Response, jsonify, request, current_app

from ..core import get_core
from ..errors import PosError

sales_bp = Blueprint("sales", __name__, url_prefix="/api/sales")


@sales_bp.post("/checkout")
def checkout_route():
    """
    Check out the current cart.

    Request body: {"payment_method": "cash"}  (cash | momo)

    Returns the committed sale and its plain-text receipt.
    """
    payload = request.get_json(silent=True) or {}
    core = get_core()

    try:
        sale = core.sales.checkout(payload.get("payment_method"))
    except PosError as e:
        current_app.logger.warning("Checkout rejected: %s (%s)", e.message, e.kind)
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to check out")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({
        "sale": sale.to_dict(),
        "receipt": core.reports.receipt_text(sale),
        "low_stock_alert": core.reports.low_stock_alert(),
    }), 201


@sales_bp.get("")
def list_receipts_route():
    """
    List receipts, newest first.

    Query params:
    - date: YYYY-MM-DD (optional) - only sales from that UTC day
    """
    try:
        items = get_core().reports.receipts(request.args.get("date"))
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    return jsonify({"items": items, "count": len(items)})


@sales_bp.get("/summary")
def sales_summary_route():
    """
    Sales summary over an inclusive date range.

    Query params:
    - start: YYYY-MM-DD (optional)
    - end: YYYY-MM-DD (optional)
    """
    try:
        summary = get_core().reports.sales_summary(request.args.get("start"), request.args.get("end"))
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    return jsonify({"summary": summary})


@sales_bp.get("/<int:sale_id>")
def get_sale_route(sale_id: int):
    sale = get_core().sales.get_sale(sale_id)
    if sale is None:
        return jsonify({"error": "Sale not found", "kind": "NotFound", "details": {"sale_id": sale_id}}), 404
    return jsonify({"sale": sale.to_dict()})


@sales_bp.get("/<int:sale_id>/receipt")
def receipt_text_route(sale_id: int):
    """Plain-text receipt for copying or printing."""
    core = get_core()
    sale = core.sales.get_sale(sale_id)
    if sale is None:
        return jsonify({"error": "Sale not found", "kind": "NotFound", "details": {"sale_id": sale_id}}), 404
    return Response(core.reports.receipt_text(sale), mimetype="text/plain")
