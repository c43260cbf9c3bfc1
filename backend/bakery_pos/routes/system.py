# backend/bakery_pos/routes/system.py
"""
System health endpoint.

Checks that the store is reachable and reports the collection sizes for
deployment debugging.
"""

import time
from flask import Blueprint, current_app

from ..core import get_core
from ..services.storage_service import PRODUCTS, SALES, SHIFT_HISTORY
from ..services.seed_service import is_initialized

system_bp = Blueprint("system", __name__)


def check_store_health() -> dict:
    """
    Check store connectivity and basic reads.

    Returns dict with status and details.
    """
    start_time = time.time()
    try:
        core = get_core()
        details = {
            "products": len(core.store.read(PRODUCTS, [])),
            "sales": len(core.store.read(SALES, [])),
            "closed_shifts": len(core.store.read(SHIFT_HISTORY, [])),
            "active_shift": core.shifts.active_shift() is not None,
            "initialized": is_initialized(core.store),
        }
        elapsed_ms = (time.time() - start_time) * 1000

        return {
            "status": "healthy",
            "latency_ms": round(elapsed_ms, 2),
            "details": details,
        }
    except Exception:
        elapsed_ms = (time.time() - start_time) * 1000
        current_app.logger.exception("Store health check failed")
        return {
            "status": "unhealthy",
            "latency_ms": round(elapsed_ms, 2),
            "error": "Store error"
        }


@system_bp.get("/health")
def health():
    store = check_store_health()
    status_code = 200 if store["status"] == "healthy" else 503
    return {"status": store["status"], "checks": {"store": store}}, status_code
