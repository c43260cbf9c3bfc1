# Overview: Service-layer read models for receipts, sales summaries, alerts and plain-text exports.

from __future__ import annotations

from urllib.parse import quote

from ..models import ItemBreakdown, PaymentMethod, Sale, SalesBreakdown
from ..money_utils import add_amounts, format_money
from bakery_pos.time_utils import parse_iso_datetime
from .inventory_service import InventoryLedger
from .sales_service import SaleProcessor

SHARE_BASE_URL = "https://wa.me/?text="


def _display_time(stamp: str | None) -> str:
    if not stamp:
        return "N/A"
    dt = parse_iso_datetime(stamp)
    return dt.strftime("%Y-%m-%d %H:%M:%S UTC")


class ReportingService:
    def __init__(self, inventory: InventoryLedger, sales: SaleProcessor, *, currency: str = "RWF"):
        self.inventory = inventory
        self.sales = sales
        self.currency = currency

    def format_amount(self, value) -> str:
        return format_money(value, self.currency)

    # =========================================================================
    # RECEIPTS & SUMMARIES
    # =========================================================================

    def receipts(self, date: str | None = None) -> list[dict]:
        """Sales on one calendar date (all sales if date is None), newest first."""
        sales = self.sales.sales_between(date, date) if date else self.sales.list_sales()
        ordered = sorted(sales, key=lambda s: (s.date, s.id), reverse=True)
        result = []
        for sale in ordered:
            data = sale.to_dict()
            data["item_count"] = sale.item_count
            result.append(data)
        return result

    def sales_summary(self, start: str | None = None, end: str | None = None) -> dict:
        """Totals and item breakdown over an inclusive date range."""
        sales = self.sales.sales_between(start, end)

        cash_total = add_amounts(*(s.total for s in sales if s.payment_method is PaymentMethod.CASH))
        momo_total = add_amounts(*(s.total for s in sales if s.payment_method is PaymentMethod.MOBILE_MONEY))

        breakdown = SalesBreakdown()
        for sale in sales:
            breakdown.add_sale(sale)

        return {
            "start": start,
            "end": end,
            "transaction_count": len(sales),
            "cash_total": cash_total,
            "momo_total": momo_total,
            "grand_total": add_amounts(cash_total, momo_total),
            "items": breakdown.to_list(),
        }

    def low_stock_alert(self) -> str | None:
        low = self.inventory.low_stock_products()
        if not low:
            return None
        if len(low) == 1:
            return f"Low stock alert: {low[0].name} has only {low[0].quantity} left!"
        listed = ", ".join(f"{p.name} ({p.quantity})" for p in low)
        return f"Low stock alert for {len(low)} items: {listed}"

    # =========================================================================
    # PLAIN-TEXT EXPORTS
    # =========================================================================

    def receipt_text(self, sale: Sale) -> str:
        lines = [
            f"Receipt #{sale.id}",
            f"Date: {_display_time(sale.date)}",
            f"Payment Method: {sale.payment_method.value.upper()}",
            f"Shift ID: {sale.shift_id or 'N/A'}",
            "",
            "Items:",
        ]
        for item in sale.items:
            lines.append(
                f"{item.name} - {item.quantity} x {self.format_amount(item.price)} = {self.format_amount(item.subtotal)}"
            )
        lines.append("")
        lines.append(f"Grand Total: {self.format_amount(sale.total)}")
        return "\n".join(lines)

    def shift_summary_text(self, summary: dict) -> str:
        """Message for sharing a shift summary (chat-style *bold* markers)."""
        shift = summary["shift"]
        lines = [
            "*Bakery Shift Summary*",
            "",
            f"*Shift ID:* {shift['id']}",
            f"*Start Time:* {_display_time(shift['startTime'])}",
            f"*End Time:* {_display_time(shift['endTime'])}",
            "",
            f"*Total Sales:* {self.format_amount(summary['total'])}",
            f"- Cash: {self.format_amount(summary['cash_total'])}",
            f"- MoMo: {self.format_amount(summary['momo_total'])}",
            f"*Transactions:* {summary['sales_count']}",
            "",
            "*Item Breakdown:*",
        ]
        for entry in summary["items"]:
            item = ItemBreakdown(**entry)
            lines.append(
                f"- {item.name}: {item.quantity} x {item.average_price:.2f} {self.currency} = {self.format_amount(item.total)}"
            )
        return "\n".join(lines) + "\n"

    @staticmethod
    def share_url(text: str) -> str:
        return SHARE_BASE_URL + quote(text, safe="")
