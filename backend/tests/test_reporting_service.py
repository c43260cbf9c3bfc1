from urllib.parse import unquote

from bakery_pos.models import CartLine, ItemBreakdown, Shift
from bakery_pos.services.controls_service import derive_controls
from bakery_pos.time_utils import date_part


def _sell(core, product, quantity, method):
    for _ in range(quantity):
        core.cart.add_item(product.id)
    return core.sales.checkout(method)


def test_receipts_are_newest_first_with_item_count(core, catalog, open_shift):
    first = _sell(core, catalog["Bread"], 2, "cash")
    second = _sell(core, catalog["Cake"], 1, "momo")

    receipts = core.reports.receipts()

    assert [r["id"] for r in receipts] == [second.id, first.id]
    assert receipts[1]["item_count"] == 2
    assert receipts[0]["paymentMethod"] == "momo"


def test_receipts_filtered_by_date(core, catalog, open_shift):
    sale = _sell(core, catalog["Bread"], 1, "cash")

    assert len(core.reports.receipts(date_part(sale.date))) == 1
    assert core.reports.receipts("2001-01-01") == []


def test_sales_summary(core, catalog, open_shift):
    _sell(core, catalog["Bread"], 2, "cash")
    _sell(core, catalog["Bread"], 1, "momo")
    _sell(core, catalog["Cake"], 1, "momo")

    summary = core.reports.sales_summary()

    assert summary["transaction_count"] == 3
    assert summary["cash_total"] == 2000
    assert summary["momo_total"] == 6000
    assert summary["grand_total"] == 8000
    assert summary["items"] == [
        {"name": "Bread", "quantity": 3, "total": 3000, "price": 1000},
        {"name": "Cake", "quantity": 1, "total": 5000, "price": 5000},
    ]


def test_low_stock_alert(core):
    assert core.reports.low_stock_alert() is None

    core.inventory.add_or_restock("Bread", 1000, 20)
    core.inventory.add_or_restock("Cake", 5000, 2)
    assert core.reports.low_stock_alert() == "Low stock alert: Cake has only 2 left!"

    core.inventory.add_or_restock("Cookie", 300, 1)
    assert core.reports.low_stock_alert() == "Low stock alert for 2 items: Cake (2), Cookie (1)"


def test_receipt_text(core, catalog, open_shift):
    sale = _sell(core, catalog["Bread"], 2, "momo")

    text = core.reports.receipt_text(sale)

    lines = text.split("\n")
    assert lines[0] == f"Receipt #{sale.id}"
    assert lines[1].startswith("Date: ") and lines[1].endswith(" UTC")
    assert "Payment Method: MOMO" in lines
    assert f"Shift ID: {open_shift.id}" in lines
    assert "Bread - 2 x 1000 RWF = 2000 RWF" in lines
    assert lines[-1] == "Grand Total: 2000 RWF"


def test_shift_summary_text_and_share_url(core, catalog, open_shift):
    _sell(core, catalog["Bread"], 3, "cash")
    _sell(core, catalog["Cake"], 1, "momo")
    core.shifts.end()
    summary = core.shifts.last_closed_summary()

    text = core.reports.shift_summary_text(summary)

    assert text.startswith("*Bakery Shift Summary*\n")
    assert f"*Shift ID:* {open_shift.id}" in text
    assert "*Total Sales:* 8000 RWF" in text
    assert "- Cash: 3000 RWF" in text
    assert "- MoMo: 5000 RWF" in text
    assert "*Transactions:* 2" in text
    assert "- Bread: 3 x 1000.00 RWF = 3000 RWF" in text
    assert text.endswith("\n")

    url = core.reports.share_url(text)
    assert url.startswith("https://wa.me/?text=")
    assert " " not in url and "\n" not in url
    assert unquote(url[len("https://wa.me/?text="):]) == text


def test_shift_summary_text_for_active_shift_has_no_end_time(core, open_shift):
    text = core.reports.shift_summary_text(core.shifts.current_summary())
    assert "*End Time:* N/A" in text
    assert "*Total Sales:* 0 RWF" in text


def test_derive_controls():
    line = CartLine(product_id=1, name="Bread", price=1000, quantity=1)
    shift = Shift(id=1, start_time="2026-01-01T08:00:00Z")

    assert derive_controls([], None) == {
        "checkout_enabled": False,
        "start_shift_enabled": True,
        "end_shift_enabled": False,
        "shift_closed_alert": False,
    }
    assert derive_controls([line], shift)["checkout_enabled"] is True
    assert derive_controls([], shift)["checkout_enabled"] is False
    assert derive_controls([line], None)["shift_closed_alert"] is True
    assert derive_controls([line], shift)["start_shift_enabled"] is False


def test_shift_summary_text_averages_price_edits_within_a_shift(core, catalog, open_shift):
    bread = catalog["Bread"]
    _sell(core, bread, 1, "cash")
    core.inventory.edit(bread.id, "Bread", 1500, 19)
    _sell(core, bread, 1, "cash")
    core.shifts.end()

    text = core.reports.shift_summary_text(core.shifts.last_closed_summary())

    assert "- Bread: 2 x 1250.00 RWF = 2500 RWF" in text


def test_item_breakdown_average_price():
    assert ItemBreakdown(name="Bread", quantity=3, total=3000).average_price == 1000
    assert ItemBreakdown(name="Bread").average_price == 0.0
