"""
Shift Management Service

WHY: Sales are only accepted inside a shift, and each shift accumulates its
own cash / mobile-money totals for end-of-day accountability.

DESIGN PRINCIPLES:
- One active shift at a time (the activeShift slot is empty or holds one shift)
- Closed shifts are appended to shiftHistory and never modified again
- Ending a shift discards any pending cart lines in the same write
- Summaries are derived by joining the shift's sale ids against the sales log

STATES:
- INACTIVE --start()--> ACTIVE
- ACTIVE --end()--> INACTIVE
"""

from __future__ import annotations

from flask import current_app

from ..errors import NoActiveShift, ShiftAlreadyActive
from ..models import Sale, SalesBreakdown, Shift
from bakery_pos.time_utils import to_utc_z, utcnow
from .concurrency import run_with_retry
from .storage_service import ACTIVE_SHIFT, CART, SALES, SHIFT_HISTORY, IdGenerator, PosStore, UnitOfWork


def load_active_shift(uow: UnitOfWork) -> Shift | None:
    data = uow.read(ACTIVE_SHIFT)
    return Shift.from_dict(data) if data else None


def require_active_shift(uow: UnitOfWork, action: str) -> Shift:
    shift = load_active_shift(uow)
    if shift is None:
        raise NoActiveShift(f"Start a shift before {action}")
    return shift


class ShiftManager:
    def __init__(self, store: PosStore, ids: IdGenerator):
        self.store = store
        self.ids = ids

    # =========================================================================
    # LIFECYCLE
    # =========================================================================

    def active_shift(self) -> Shift | None:
        data = self.store.read(ACTIVE_SHIFT)
        return Shift.from_dict(data) if data else None

    def history(self) -> list[Shift]:
        return [Shift.from_dict(s) for s in self.store.read(SHIFT_HISTORY, [])]

    def start(self) -> Shift:
        """
        Open a new shift.

        Raises:
            ShiftAlreadyActive: a shift is already open (left unchanged)
        """
        def _op():
            with self.store.unit_of_work() as uow:
                existing = load_active_shift(uow)
                if existing is not None:
                    raise ShiftAlreadyActive(
                        f"Shift {existing.id} is already active",
                        details={"shift_id": existing.id, "start_time": existing.start_time},
                    )

                shift = Shift(id=self.ids.next_id(uow), start_time=to_utc_z(utcnow()))
                uow.write(ACTIVE_SHIFT, shift.to_dict())
                return shift

        shift = run_with_retry(_op)
        current_app.logger.info("Shift %s started at %s", shift.id, shift.start_time)
        return shift

    def end(self) -> Shift:
        """
        Close the active shift and move it to history.

        Pending cart lines are discarded in the same write: a shift boundary
        closes the transaction. Callers confirm that with the user first.

        Raises:
            NoActiveShift: no shift is open
        """
        def _op():
            with self.store.unit_of_work() as uow:
                shift = require_active_shift(uow, "ending it")
                discarded = len(uow.read(CART, []))

                shift.end_time = to_utc_z(utcnow())
                history = uow.read(SHIFT_HISTORY, [])
                history.append(shift.to_dict())

                uow.write(SHIFT_HISTORY, history)
                uow.delete(ACTIVE_SHIFT)
                if discarded:
                    uow.write(CART, [])
                return shift, discarded

        shift, discarded = run_with_retry(_op)
        current_app.logger.info("Shift %s ended at %s with total %s", shift.id, shift.end_time, shift.total)
        if discarded:
            current_app.logger.warning("Shift %s ended with %s cart line(s) discarded", shift.id, discarded)
        return shift

    def record_sale_in(self, uow: UnitOfWork, sale: Sale) -> Shift:
        """Apply a sale to the active shift inside an existing unit of work."""
        shift = require_active_shift(uow, "recording sales")
        shift.apply_sale(sale)
        uow.write(ACTIVE_SHIFT, shift.to_dict())
        return shift

    def record_sale(self, sale: Sale) -> Shift:
        def _op():
            with self.store.unit_of_work() as uow:
                return self.record_sale_in(uow, sale)

        return run_with_retry(_op)

    # =========================================================================
    # SUMMARIES
    # =========================================================================

    def summarize(self, shift: Shift) -> dict:
        sale_ids = set(shift.sales)
        sales = [Sale.from_dict(s) for s in self.store.read(SALES, []) if s["id"] in sale_ids]

        breakdown = SalesBreakdown()
        for sale in sales:
            breakdown.add_sale(sale)

        return {
            "shift": shift.to_dict(),
            "status": "ACTIVE" if shift.is_active else "CLOSED",
            "sales_count": len(shift.sales),
            "total": shift.total,
            "cash_total": shift.cash_total,
            "momo_total": shift.momo_total,
            "items": breakdown.to_list(),
        }

    def current_summary(self) -> dict | None:
        shift = self.active_shift()
        if shift is None:
            return None
        return self.summarize(shift)

    def last_closed_summary(self) -> dict | None:
        history = self.history()
        if not history:
            return None
        return self.summarize(history[-1])
