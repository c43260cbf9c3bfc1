"""
Sale Processor - checkout of the persisted cart

WHY: Checkout is the only operation that touches every collection at once
(products, sales, activeShift, cart), so it owns the ordering and the
all-or-nothing write.

COMMIT ORDER (one unit of work, one commit):
1. decrement stock for every line
2. append the Sale to the sales log
3. record the Sale on the active shift
4. clear the cart
"""

from __future__ import annotations

from flask import current_app

from ..errors import EmptyCart, InsufficientStock, InvalidInput
from ..models import CartLine, Product, Sale, SaleItem
from ..validation import parse_payment_method
from bakery_pos.time_utils import date_part, parse_iso_date, to_utc_z, utcnow
from .cart_service import load_cart, save_cart
from .concurrency import run_with_retry
from .inventory_service import decrement_in, load_products, save_products
from .shift_service import ShiftManager, require_active_shift
from .storage_service import SALES, IdGenerator, PosStore


def _validate_on_hand(lines: list[CartLine], products: list[Product]) -> None:
    """
    Re-check every cart line against live stock (not the stock at add time).

    Raises InsufficientStock naming the first offending line. A product that
    was deleted after being added counts as zero stock.
    """
    on_hand = {p.id: p.quantity for p in products}
    for line in lines:
        available = on_hand.get(line.product_id, 0)
        if line.quantity > available:
            raise InsufficientStock(
                f"Not enough stock for {line.name}",
                details={
                    "product_id": line.product_id,
                    "name": line.name,
                    "requested_quantity": line.quantity,
                    "on_hand": available,
                },
            )


class SaleProcessor:
    def __init__(self, store: PosStore, ids: IdGenerator, shifts: ShiftManager):
        self.store = store
        self.ids = ids
        self.shifts = shifts

    def checkout(self, payment_method) -> Sale:
        """
        Turn the cart into a committed Sale.

        Raises:
            InvalidInput: unknown payment method
            NoActiveShift: no shift is open
            EmptyCart: cart has no lines
            InsufficientStock: a line exceeds current stock
        On any error nothing is written.
        """
        method = parse_payment_method(payment_method)

        def _op():
            with self.store.unit_of_work() as uow:
                shift = require_active_shift(uow, "making sales")

                lines = load_cart(uow)
                if not lines:
                    raise EmptyCart("Cart is empty")

                products = load_products(uow)
                _validate_on_hand(lines, products)

                items = tuple(SaleItem.from_cart_line(line) for line in lines)
                sale = Sale(
                    id=self.ids.next_id(uow),
                    date=to_utc_z(utcnow()),
                    items=items,
                    total=Sale.compute_total(items),
                    payment_method=method,
                    shift_id=shift.id,
                )

                for line in lines:
                    decrement_in(products, line.product_id, line.quantity)
                save_products(uow, products)

                sales = uow.read(SALES, [])
                sales.append(sale.to_dict())
                uow.write(SALES, sales)

                self.shifts.record_sale_in(uow, sale)

                save_cart(uow, [])
                return sale

        sale = run_with_retry(_op)
        current_app.logger.info(
            "Sale %s committed: %s items, total %s (%s), shift %s",
            sale.id, sale.item_count, sale.total, sale.payment_method.value, sale.shift_id,
        )
        return sale

    # =========================================================================
    # SALES LOG READS
    # =========================================================================

    def list_sales(self) -> list[Sale]:
        return [Sale.from_dict(s) for s in self.store.read(SALES, [])]

    def get_sale(self, sale_id: int) -> Sale | None:
        for data in self.store.read(SALES, []):
            if data["id"] == sale_id:
                return Sale.from_dict(data)
        return None

    def sales_between(self, start: str | None = None, end: str | None = None) -> list[Sale]:
        """
        Sales whose UTC calendar date falls in [start, end] ("YYYY-MM-DD", inclusive).

        Either bound may be omitted. Raises InvalidInput on a malformed date.
        """
        try:
            start_date = parse_iso_date(start)
            end_date = parse_iso_date(end)
        except ValueError:
            raise InvalidInput("dates must be YYYY-MM-DD", details={"start": start, "end": end})
        result = []
        for sale in self.list_sales():
            day = date_part(sale.date)
            if start_date and day < start_date.isoformat():
                continue
            if end_date and day > end_date.isoformat():
                continue
            result.append(sale)
        return result
