# Overview: Flask CLI command groups for bootstrap, inspection, and shift operations.

# backend/bakery_pos/cli.py
# Commands Legend (run from the backend directory):
# Prereqs:
# - Activate your virtualenv.
# - Set FLASK_APP to bakery_pos (PowerShell: $env:FLASK_APP="bakery_pos").
# - Use: python -m flask <group> <command> [options]
#
# System bootstrap/repair:
# - python -m flask system init-db
#   Create the pos_records table if it does not exist.
# - python -m flask system seed [--empty]
#   Seed the sample catalog once (or only set the initialized flag with --empty).
# - python -m flask system reset-db --yes
#   DEV/TEST only: drop and recreate all tables (deletes all data).
#
# Catalog inspection:
# - python -m flask products list
# - python -m flask products low-stock
#
# Shifts:
# - python -m flask shifts status
# - python -m flask shifts start
# - python -m flask shifts end [--yes]
#   --yes discards any items still in the cart.
# - python -m flask shifts summary [--last] [--share]
#
# Sales:
# - python -m flask sales receipts [--date 2026-01-31]
# - python -m flask sales receipt <sale_id>
# - python -m flask sales summary [--start 2026-01-01] [--end 2026-01-31]

import click
from flask.cli import with_appcontext

from .core import get_core
from .errors import PosError
from .extensions import db
from .services.seed_service import initialize_sample_data, is_initialized, mark_initialized


@click.group('system')
def system_group():
    """System bootstrap and repair commands."""


@system_group.command('init-db')
@with_appcontext
def init_db():
    """Create the store table (idempotent)."""
    db.create_all()
    click.echo("PASS Store schema ready.")


@system_group.command('seed')
@click.option('--empty', is_flag=True, help='Start from an empty catalog instead of the sample one')
@with_appcontext
def seed(empty):
    """Seed the sample bakery catalog exactly once."""
    core = get_core()
    if is_initialized(core.store):
        click.echo("WARN  Store already initialized, skipping...")
        return

    if empty:
        mark_initialized(core.store)
        click.echo("PASS Store marked initialized with an empty catalog")
        return

    initialize_sample_data(core.store, core.ids)
    for product in core.inventory.list_products():
        click.echo(f"PASS Seeded {product.name} (ID: {product.id}, Qty: {product.quantity})")


@system_group.command('reset-db')
@click.option('--yes', is_flag=True, help='Skip confirmation')
@with_appcontext
def reset_db(yes):
    """
    DANGER: Drop all tables and recreate schema.

    This will DELETE ALL DATA!
    """
    if not yes:
        click.confirm("WARN This will DELETE ALL DATA. Are you sure?", abort=True)

    click.echo("DELETE  Dropping all tables...")
    db.drop_all()

    click.echo("BUILD  Creating all tables...")
    db.create_all()

    click.echo("PASS Database reset complete. Run 'python -m flask system seed' to load sample products.")


@click.group('products')
def products_group():
    """Catalog inspection."""


def _print_products(products, threshold):
    click.echo("\n" + "="*70)
    click.echo(f"{'ID':<15} {'Name':<25} {'Price':<12} {'Qty':<8} {'Low'}")
    click.echo("="*70)
    for p in products:
        low = "LOW" if p.quantity < threshold else ""
        click.echo(f"{p.id:<15} {p.name:<25} {p.price:<12} {p.quantity:<8} {low}")
    click.echo("="*70 + "\n")


@products_group.command('list')
@with_appcontext
def list_products():
    """List all products."""
    core = get_core()
    products = core.inventory.list_products()
    if not products:
        click.echo("No products found.")
        return
    _print_products(products, core.inventory.low_stock_threshold)


@products_group.command('low-stock')
@with_appcontext
def low_stock():
    """List products below the low-stock threshold."""
    core = get_core()
    alert = core.reports.low_stock_alert()
    if alert is None:
        click.echo("PASS No products are low on stock.")
        return
    click.echo(f"WARN  {alert}")
    _print_products(core.inventory.low_stock_products(), core.inventory.low_stock_threshold)


@click.group('shifts')
def shifts_group():
    """Shift lifecycle and summaries."""


@shifts_group.command('status')
@with_appcontext
def shift_status():
    """Show the active shift, if any."""
    core = get_core()
    shift = core.shifts.active_shift()
    if shift is None:
        click.echo("No active shift.")
        return
    click.echo(f"ACTIVE Shift {shift.id} since {shift.start_time}")
    click.echo(f"   Sales: {len(shift.sales)}  Total: {core.reports.format_amount(shift.total)}")
    click.echo(f"   Cash: {core.reports.format_amount(shift.cash_total)}  MoMo: {core.reports.format_amount(shift.momo_total)}")


@shifts_group.command('start')
@with_appcontext
def start_shift():
    """Start a new shift."""
    try:
        shift = get_core().shifts.start()
    except PosError as e:
        click.echo(f"FAIL {e.message}")
        return
    click.echo(f"PASS Shift {shift.id} started at {shift.start_time}")


@shifts_group.command('end')
@click.option('--yes', is_flag=True, help='Discard pending cart items without asking')
@with_appcontext
def end_shift(yes):
    """End the active shift and print its summary."""
    core = get_core()
    pending = core.cart.lines()
    if pending and core.shifts.active_shift() is not None and not yes:
        click.confirm(
            f"WARN {len(pending)} item line(s) in the cart will be discarded. End the shift anyway?",
            abort=True,
        )

    try:
        shift = core.shifts.end()
    except PosError as e:
        click.echo(f"FAIL {e.message}")
        return

    click.echo(f"PASS Shift {shift.id} ended at {shift.end_time}")
    click.echo(core.reports.shift_summary_text(core.shifts.summarize(shift)))


@shifts_group.command('summary')
@click.option('--last', 'last', is_flag=True, help='Summarize the last closed shift instead of the active one')
@click.option('--share', is_flag=True, help='Also print a share link')
@with_appcontext
def shift_summary(last, share):
    """Print a shift summary."""
    core = get_core()
    summary = core.shifts.last_closed_summary() if last else core.shifts.current_summary()
    if summary is None:
        click.echo("FAIL No shift history found" if last else "FAIL No active shift")
        return

    text = core.reports.shift_summary_text(summary)
    click.echo(text)
    if share:
        click.echo(core.reports.share_url(text))


@click.group('sales')
def sales_group():
    """Receipts and sales reports."""


@sales_group.command('receipts')
@click.option('--date', 'date', default=None, help='Only sales on this UTC date (YYYY-MM-DD)')
@with_appcontext
def list_receipts(date):
    """List receipts, newest first."""
    try:
        receipts = get_core().reports.receipts(date)
    except PosError as e:
        click.echo(f"FAIL {e.message}")
        return

    if not receipts:
        click.echo("No receipts found.")
        return

    click.echo("\n" + "="*80)
    click.echo(f"{'ID':<15} {'Date':<22} {'Items':<7} {'Total':<12} {'Method':<8} {'Shift'}")
    click.echo("="*80)
    for r in receipts:
        click.echo(
            f"{r['id']:<15} {r['date']:<22} {r['item_count']:<7} {r['total']:<12} "
            f"{r['paymentMethod']:<8} {r['shiftId'] or '-'}"
        )
    click.echo("="*80 + "\n")


@sales_group.command('receipt')
@click.argument('sale_id', type=int)
@with_appcontext
def show_receipt(sale_id):
    """Print one receipt."""
    core = get_core()
    sale = core.sales.get_sale(sale_id)
    if sale is None:
        click.echo(f"FAIL Sale {sale_id} not found")
        return
    click.echo(core.reports.receipt_text(sale))


@sales_group.command('summary')
@click.option('--start', default=None, help='First UTC date (YYYY-MM-DD)')
@click.option('--end', default=None, help='Last UTC date (YYYY-MM-DD)')
@with_appcontext
def sales_summary(start, end):
    """Totals by payment method and item over a date range."""
    core = get_core()
    try:
        summary = core.reports.sales_summary(start, end)
    except PosError as e:
        click.echo(f"FAIL {e.message}")
        return

    money = core.reports.format_amount
    click.echo(f"Transactions: {summary['transaction_count']}")
    click.echo(f"Cash: {money(summary['cash_total'])}")
    click.echo(f"MoMo: {money(summary['momo_total'])}")
    click.echo(f"Grand Total: {money(summary['grand_total'])}")
    for item in summary["items"]:
        click.echo(f"- {item['name']}: {item['quantity']} = {money(item['total'])}")


def register_commands(app):
    """Register all CLI commands with Flask app."""
    app.cli.add_command(system_group)
    app.cli.add_command(products_group)
    app.cli.add_command(shifts_group)
    app.cli.add_command(sales_group)
