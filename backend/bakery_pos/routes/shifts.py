# Overview: Flask API routes for shift lifecycle and summaries; parses input and returns JSON responses.

# backend/bakery_pos/routes/shifts.py
"""
Shift Management API Routes

DESIGN:
- Shift lifecycle: start -> end (closed shifts are immutable history)
- Ending a shift with items in the cart discards them; the caller must
  send confirm_discard_cart=true, otherwise the route answers 409 with the
  pending lines
- Summaries are read-only joins of a shift's sale ids against the sales log
"""

from flask import Blueprint, jsonify, request, current_app

from ..core import get_core
from ..errors import ConfirmationRequired, PosError
from ..validation import is_confirmed

shifts_bp = Blueprint("shifts", __name__, url_prefix="/api/shifts")


@shifts_bp.get("/active")
def get_active_shift():
    core = get_core()
    shift = core.shifts.active_shift()
    return jsonify({
        "shift": shift.to_dict() if shift else None,
        "controls": core.controls(),
    })


@shifts_bp.post("/start")
def start_shift_route():
    try:
        shift = get_core().shifts.start()
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to start shift")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"shift": shift.to_dict()}), 201


@shifts_bp.post("/end")
def end_shift_route():
    """
    Close the active shift.

    Request body (only needed when the cart is not empty):
    {"confirm_discard_cart": true}
    """
    payload = request.get_json(silent=True) or {}
    core = get_core()

    try:
        pending = core.cart.lines()
        if pending and core.shifts.active_shift() is not None and not is_confirmed(payload.get("confirm_discard_cart")):
            raise ConfirmationRequired(
                "You have items in the cart. Confirm to end the shift and discard them.",
                details={"cart": [line.to_dict() for line in pending]},
            )
        shift = core.shifts.end()
    except PosError as e:
        return jsonify(e.to_dict()), e.http_status
    except Exception:
        current_app.logger.exception("Failed to end shift")
        return jsonify({"error": "Internal server error"}), 500

    return jsonify({"shift": shift.to_dict(), "summary": core.shifts.summarize(shift)})


@shifts_bp.get("/current/summary")
def current_summary_route():
    summary = get_core().shifts.current_summary()
    if summary is None:
        return jsonify({"error": "No active shift", "kind": "NoActiveShift", "details": {}}), 404
    return jsonify({"summary": summary})


@shifts_bp.get("/last/summary")
def last_summary_route():
    summary = get_core().shifts.last_closed_summary()
    if summary is None:
        return jsonify({"error": "No shift history found", "kind": "NotFound", "details": {}}), 404
    return jsonify({"summary": summary})


@shifts_bp.get("/last/share")
def share_last_summary_route():
    """Plain-text summary of the last closed shift and a share link for it."""
    core = get_core()
    summary = core.shifts.last_closed_summary()
    if summary is None:
        return jsonify({"error": "No shift history found", "kind": "NotFound", "details": {}}), 404

    text = core.reports.shift_summary_text(summary)
    return jsonify({"text": text, "url": core.reports.share_url(text)})


@shifts_bp.get("/history")
def shift_history_route():
    history = get_core().shifts.history()
    return jsonify({
        "items": [s.to_dict() for s in reversed(history)],
        "count": len(history),
    })
