# Overview: Application-owned container wiring the store and the POS managers together.

from __future__ import annotations

from flask import current_app

from .services.cart_service import CartManager
from .services.controls_service import derive_controls
from .services.inventory_service import InventoryLedger
from .services.reporting_service import ReportingService
from .services.sales_service import SaleProcessor
from .services.shift_service import ShiftManager
from .services.storage_service import IdGenerator, PosStore

EXTENSION_KEY = "bakery_pos"


class PosCore:
    """
    Explicit state container owned by the Flask app.

    Built once in create_app and stored in app.extensions; every manager
    receives the same store and id generator by reference.
    """

    def __init__(
        self,
        store: PosStore | None = None,
        ids: IdGenerator | None = None,
        *,
        currency: str = "RWF",
        low_stock_threshold: int = 5,
    ):
        self.store = store or PosStore()
        self.ids = ids or IdGenerator()
        self.inventory = InventoryLedger(self.store, self.ids, low_stock_threshold=low_stock_threshold)
        self.cart = CartManager(self.store)
        self.shifts = ShiftManager(self.store, self.ids)
        self.sales = SaleProcessor(self.store, self.ids, self.shifts)
        self.reports = ReportingService(self.inventory, self.sales, currency=currency)

    @classmethod
    def from_config(cls, config) -> "PosCore":
        return cls(
            currency=config.get("POS_CURRENCY", "RWF"),
            low_stock_threshold=int(config.get("POS_LOW_STOCK_THRESHOLD", 5)),
        )

    def controls(self) -> dict:
        return derive_controls(self.cart.lines(), self.shifts.active_shift())


def get_core() -> PosCore:
    return current_app.extensions[EXTENSION_KEY]
