"""End-to-end scenarios and ledger invariants over mixed operation sequences."""

import random

import pytest

from bakery_pos.errors import InsufficientStock, NoActiveShift, PosError, ShiftAlreadyActive
from bakery_pos.money_utils import add_amounts


def test_scenario_cash_sale_of_two_breads(core):
    bread, _ = core.inventory.add_or_restock("Bread", 1000, 20)
    core.shifts.start()
    core.cart.add_item(bread.id)
    core.cart.add_item(bread.id)

    sale = core.sales.checkout("cash")

    shift = core.shifts.active_shift()
    assert sale.total == 2000
    assert core.inventory.get_product(bread.id).quantity == 18
    assert shift.cash_total == 2000
    assert shift.total == 2000
    assert core.cart.is_empty()


def test_scenario_no_shift_keeps_cart_empty(core):
    bread, _ = core.inventory.add_or_restock("Bread", 1000, 20)

    with pytest.raises(NoActiveShift):
        core.cart.add_item(bread.id)
    assert core.cart.lines() == []


def test_scenario_line_capped_at_stock(core):
    cake, _ = core.inventory.add_or_restock("Cake", 5000, 3)
    core.shifts.start()
    for _ in range(3):
        core.cart.add_item(cake.id)

    with pytest.raises(InsufficientStock):
        core.cart.change_quantity(cake.id, 1)
    assert core.cart.lines()[0].quantity == 3


def test_shift_start_and_end_failures_change_nothing(core):
    shift = core.shifts.start()
    before = core.store.dump()
    with pytest.raises(ShiftAlreadyActive):
        core.shifts.start()
    assert core.store.dump() == before
    assert core.shifts.active_shift().id == shift.id

    core.shifts.end()
    before = core.store.dump()
    with pytest.raises(NoActiveShift):
        core.shifts.end()
    assert core.store.dump() == before


@pytest.mark.parametrize("seed", [1, 7, 42])
def test_random_operation_sequences_keep_the_ledger_consistent(core, seed):
    rng = random.Random(seed)
    for name, price, quantity in [("Bread", 1000, 6), ("Cake", 5000, 2), ("Donut", 800, 4)]:
        core.inventory.add_or_restock(name, price, quantity)
    ids = [p.id for p in core.inventory.list_products()]

    for _ in range(120):
        op = rng.choice(["add", "add", "change", "checkout", "restock", "edit", "start", "end"])
        pid = rng.choice(ids)
        try:
            if op == "add":
                core.cart.add_item(pid)
            elif op == "change":
                core.cart.change_quantity(pid, rng.choice([-2, -1, 1, 2]))
            elif op == "checkout":
                core.sales.checkout(rng.choice(["cash", "momo"]))
            elif op == "restock":
                core.inventory.add_or_restock(core.inventory.get_product(pid).name, 1, rng.randint(1, 3))
            elif op == "edit":
                product = core.inventory.get_product(pid)
                core.inventory.edit(pid, product.name, product.price, rng.randint(0, 3))
            elif op == "start":
                core.shifts.start()
            else:
                core.shifts.end()
        except PosError:
            pass

        assert all(p.quantity >= 0 for p in core.inventory.list_products())

    sales = {s.id: s for s in core.sales.list_sales()}
    shifts = core.shifts.history()
    if core.shifts.active_shift() is not None:
        shifts.append(core.shifts.active_shift())
    for shift in shifts:
        assert shift.total == add_amounts(shift.cash_total, shift.momo_total)
        assert shift.total == add_amounts(*(sales[sid].total for sid in shift.sales))
    assert sum(len(s.sales) for s in shifts) == len(sales)
