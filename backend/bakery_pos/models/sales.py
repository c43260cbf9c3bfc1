from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from bakery_pos.money_utils import add_amounts, line_total


class PaymentMethod(str, Enum):
    CASH = "cash"
    MOBILE_MONEY = "momo"

    @classmethod
    def parse(cls, value: str) -> "PaymentMethod":
        normalized = value.strip().lower().replace("_", "-")
        if normalized in {"momo", "mobile-money"}:
            return cls.MOBILE_MONEY
        return cls(normalized)


@dataclass
class CartLine:
    """
    Line of the in-progress transaction.

    price is a snapshot taken when the product was first added; later catalog
    price edits do not change it.
    """
    product_id: int
    name: str
    price: int | float
    quantity: int

    @property
    def subtotal(self) -> int | float:
        return line_total(self.price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        return cls(
            product_id=data["productId"],
            name=data["name"],
            price=data["price"],
            quantity=data["quantity"],
        )


@dataclass(frozen=True)
class SaleItem:
    product_id: int
    name: str
    price: int | float
    quantity: int

    @property
    def subtotal(self) -> int | float:
        return line_total(self.price, self.quantity)

    def to_dict(self) -> dict:
        return {
            "productId": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "SaleItem":
        return cls(
            product_id=data["productId"],
            name=data["name"],
            price=data["price"],
            quantity=data["quantity"],
        )

    @classmethod
    def from_cart_line(cls, line: CartLine) -> "SaleItem":
        return cls(product_id=line.product_id, name=line.name, price=line.price, quantity=line.quantity)


@dataclass(frozen=True)
class Sale:
    """
    Committed sale. Immutable; the sales log is append-only.

    Items carry name/price snapshots so a sale stays readable after the
    product is edited or deleted.
    """
    id: int
    date: str
    items: tuple[SaleItem, ...]
    total: int | float
    payment_method: PaymentMethod
    shift_id: int | None = None

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    @staticmethod
    def compute_total(items) -> int | float:
        return add_amounts(*(item.subtotal for item in items))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "date": self.date,
            "items": [item.to_dict() for item in self.items],
            "total": self.total,
            "paymentMethod": self.payment_method.value,
            "shiftId": self.shift_id,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Sale":
        return cls(
            id=data["id"],
            date=data["date"],
            items=tuple(SaleItem.from_dict(i) for i in data.get("items", [])),
            total=data["total"],
            payment_method=PaymentMethod.parse(data["paymentMethod"]),
            shift_id=data.get("shiftId"),
        )


@dataclass
class ItemBreakdown:
    """Per-item aggregate used by shift and date-range summaries."""
    name: str
    quantity: int = 0
    total: int | float = 0
    price: int | float | None = None

    @property
    def average_price(self) -> float:
        if not self.quantity:
            return 0.0
        return self.total / self.quantity

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "quantity": self.quantity,
            "total": self.total,
            "price": self.price,
        }


@dataclass
class SalesBreakdown:
    """Ordered item breakdown keyed by item name (first-seen order)."""
    items: dict[str, ItemBreakdown] = field(default_factory=dict)

    def add_sale(self, sale: Sale) -> None:
        for item in sale.items:
            entry = self.items.get(item.name)
            if entry is None:
                entry = ItemBreakdown(name=item.name, price=item.price)
                self.items[item.name] = entry
            entry.quantity += item.quantity
            entry.total = add_amounts(entry.total, item.subtotal)

    def to_list(self) -> list[dict]:
        return [entry.to_dict() for entry in self.items.values()]
