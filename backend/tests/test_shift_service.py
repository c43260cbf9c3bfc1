import unittest

from bakery_pos import create_app
from bakery_pos.core import get_core
from bakery_pos.errors import NoActiveShift, ShiftAlreadyActive
from bakery_pos.extensions import db
from bakery_pos.models import PaymentMethod, PosRecord, Sale, SaleItem
from bakery_pos.services.storage_service import ACTIVE_SHIFT, SHIFT_HISTORY


class ShiftManagerTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.app = create_app({
            "TESTING": True,
            "SQLALCHEMY_DATABASE_URI": "sqlite:///:memory:",
            "POS_SEED_SAMPLE_DATA": False,
        })
        cls.ctx = cls.app.app_context()
        cls.ctx.push()
        db.create_all()

    @classmethod
    def tearDownClass(cls):
        db.session.remove()
        db.drop_all()
        cls.ctx.pop()

    def setUp(self):
        db.session.query(PosRecord).delete()
        db.session.commit()

        self.core = get_core()
        self.bread, _ = self.core.inventory.add_or_restock("Bread", 1000, 20)
        self.cake, _ = self.core.inventory.add_or_restock("Cake", 5000, 5)

    def _sell(self, product, quantity, method):
        for _ in range(quantity):
            self.core.cart.add_item(product.id)
        return self.core.sales.checkout(method)

    def test_start_opens_an_empty_shift(self):
        shift = self.core.shifts.start()

        self.assertTrue(shift.is_active)
        self.assertEqual(shift.sales, [])
        self.assertEqual((shift.total, shift.cash_total, shift.momo_total), (0, 0, 0))
        self.assertTrue(shift.start_time.endswith("Z"))
        self.assertEqual(self.core.shifts.active_shift(), shift)

    def test_start_twice_is_rejected(self):
        first = self.core.shifts.start()

        with self.assertRaises(ShiftAlreadyActive) as ctx:
            self.core.shifts.start()

        self.assertEqual(ctx.exception.details["shift_id"], first.id)
        self.assertEqual(self.core.shifts.active_shift().id, first.id)

    def test_end_without_active_shift(self):
        with self.assertRaises(NoActiveShift):
            self.core.shifts.end()
        self.assertEqual(self.core.shifts.history(), [])

    def test_end_moves_shift_to_history(self):
        started = self.core.shifts.start()

        ended = self.core.shifts.end()

        self.assertEqual(ended.id, started.id)
        self.assertIsNotNone(ended.end_time)
        self.assertFalse(ended.is_active)
        self.assertIsNone(self.core.shifts.active_shift())
        self.assertFalse(self.core.store.exists(ACTIVE_SHIFT))
        self.assertEqual([s.id for s in self.core.shifts.history()], [started.id])

    def test_end_discards_pending_cart(self):
        self.core.shifts.start()
        self.core.cart.add_item(self.bread.id)

        self.core.shifts.end()

        self.assertTrue(self.core.cart.is_empty())
        self.assertEqual(self.core.inventory.get_product(self.bread.id).quantity, 20)

    def test_history_keeps_closed_shifts_in_order(self):
        first = self.core.shifts.start()
        self.core.shifts.end()
        second = self.core.shifts.start()
        self.core.shifts.end()

        self.assertEqual([s.id for s in self.core.shifts.history()], [first.id, second.id])
        self.assertEqual(len(self.core.store.read(SHIFT_HISTORY)), 2)

    def test_sales_accumulate_per_payment_method(self):
        self.core.shifts.start()
        cash_sale = self._sell(self.bread, 2, "cash")
        momo_sale = self._sell(self.cake, 1, "momo")

        shift = self.core.shifts.active_shift()

        self.assertEqual(shift.sales, [cash_sale.id, momo_sale.id])
        self.assertEqual(shift.cash_total, 2000)
        self.assertEqual(shift.momo_total, 5000)
        self.assertEqual(shift.total, shift.cash_total + shift.momo_total)

    def _sale(self, sale_id, method, quantity=1):
        item = SaleItem(product_id=self.bread.id, name="Bread", price=1000, quantity=quantity)
        return Sale(
            id=sale_id,
            date="2026-01-01T09:00:00Z",
            items=(item,),
            total=item.subtotal,
            payment_method=method,
        )

    def test_record_sale_updates_active_shift(self):
        self.core.shifts.start()

        self.core.shifts.record_sale(self._sale(101, PaymentMethod.MOBILE_MONEY, quantity=2))
        shift = self.core.shifts.record_sale(self._sale(102, PaymentMethod.CASH))

        self.assertEqual(shift.sales, [101, 102])
        self.assertEqual(shift.momo_total, 2000)
        self.assertEqual(shift.cash_total, 1000)
        self.assertEqual(shift.total, 3000)
        self.assertEqual(self.core.shifts.active_shift(), shift)

    def test_record_sale_after_end_is_rejected(self):
        self.core.shifts.start()
        self.core.shifts.end()
        before = self.core.store.dump()

        with self.assertRaises(NoActiveShift):
            self.core.shifts.record_sale(self._sale(103, PaymentMethod.CASH))

        self.assertEqual(self.core.store.dump(), before)
        self.assertEqual(self.core.shifts.history()[0].sales, [])

    def test_current_summary(self):
        self.core.shifts.start()
        self._sell(self.bread, 2, PaymentMethod.CASH)
        self._sell(self.bread, 1, PaymentMethod.MOBILE_MONEY)

        summary = self.core.shifts.current_summary()

        self.assertEqual(summary["status"], "ACTIVE")
        self.assertEqual(summary["sales_count"], 2)
        self.assertEqual(summary["total"], 3000)
        self.assertEqual(summary["items"], [{"name": "Bread", "quantity": 3, "total": 3000, "price": 1000}])

    def test_summaries_when_nothing_exists(self):
        self.assertIsNone(self.core.shifts.current_summary())
        self.assertIsNone(self.core.shifts.last_closed_summary())

    def test_last_closed_summary_ignores_other_shifts_sales(self):
        self.core.shifts.start()
        self._sell(self.cake, 1, "cash")
        closed = self.core.shifts.end()
        self.core.shifts.start()
        self._sell(self.bread, 1, "cash")

        summary = self.core.shifts.last_closed_summary()

        self.assertEqual(summary["shift"]["id"], closed.id)
        self.assertEqual(summary["status"], "CLOSED")
        self.assertEqual([item["name"] for item in summary["items"]], ["Cake"])
        self.assertEqual(summary["cash_total"], 5000)
        self.assertEqual(summary["momo_total"], 0)


if __name__ == "__main__":
    unittest.main()
