from __future__ import annotations

from dataclasses import dataclass, field

from bakery_pos.money_utils import add_amounts
from .sales import PaymentMethod, Sale


@dataclass
class Shift:
    """
    Work shift.

    LIFECYCLE:
    - ACTIVE: end_time is None; held in the activeShift slot (at most one)
    - CLOSED: end_time set; appended to shiftHistory and never modified again

    INVARIANT: total == cash_total + momo_total == sum of its sales' totals.
    """
    id: int
    start_time: str
    end_time: str | None = None
    sales: list[int] = field(default_factory=list)
    cash_total: int | float = 0
    momo_total: int | float = 0
    total: int | float = 0

    @property
    def is_active(self) -> bool:
        return self.end_time is None

    def apply_sale(self, sale: Sale) -> None:
        self.sales.append(sale.id)
        self.total = add_amounts(self.total, sale.total)
        if sale.payment_method is PaymentMethod.CASH:
            self.cash_total = add_amounts(self.cash_total, sale.total)
        else:
            self.momo_total = add_amounts(self.momo_total, sale.total)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "sales": list(self.sales),
            "cashTotal": self.cash_total,
            "momoTotal": self.momo_total,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Shift":
        return cls(
            id=data["id"],
            start_time=data["startTime"],
            end_time=data.get("endTime"),
            sales=list(data.get("sales", [])),
            cash_total=data.get("cashTotal", 0),
            momo_total=data.get("momoTotal", 0),
            total=data.get("total", 0),
        )
