# Overview: Service-layer operations for the in-progress cart; validates every change against live stock.

from __future__ import annotations

from ..errors import InsufficientStock, OutOfStock, ProductNotFound
from ..models import CartLine
from ..money_utils import add_amounts
from ..validation import parse_delta
from .concurrency import run_with_retry
from .inventory_service import find_product, load_products
from .shift_service import require_active_shift
from .storage_service import CART, PRODUCTS, PosStore, UnitOfWork


def load_cart(uow: UnitOfWork) -> list[CartLine]:
    return [CartLine.from_dict(line) for line in uow.read(CART, [])]


def save_cart(uow: UnitOfWork, lines: list[CartLine]) -> None:
    uow.write(CART, [line.to_dict() for line in lines])


def _find_line(lines: list[CartLine], product_id: int) -> CartLine | None:
    for line in lines:
        if line.product_id == product_id:
            return line
    return None


class CartManager:
    """
    Lines of the transaction being built.

    The cart only stages quantities; stock is untouched until checkout.
    A line's quantity never exceeds its product's stock at the time the
    line was last changed (stock can still drop afterwards through an edit,
    which is why checkout re-validates).
    """

    def __init__(self, store: PosStore):
        self.store = store

    def lines(self) -> list[CartLine]:
        return [CartLine.from_dict(line) for line in self.store.read(CART, [])]

    def total(self) -> int | float:
        return add_amounts(*(line.subtotal for line in self.lines()))

    def is_empty(self) -> bool:
        return not self.store.read(CART, [])

    def add_item(self, product_id: int) -> CartLine:
        """
        Add one unit of a product.

        Raises:
            NoActiveShift: no shift is open
            ProductNotFound: unknown product_id
            OutOfStock: product has zero stock
            InsufficientStock: the line already holds all available stock
        """
        def _op():
            with self.store.unit_of_work() as uow:
                require_active_shift(uow, "making sales")

                product = find_product(load_products(uow), product_id)
                if product is None:
                    raise ProductNotFound(f"Product {product_id} not found", details={"product_id": product_id})
                if product.quantity <= 0:
                    raise OutOfStock(f"{product.name} is out of stock", details={"product_id": product.id})

                lines = load_cart(uow)
                line = _find_line(lines, product_id)
                if line is not None:
                    if line.quantity >= product.quantity:
                        raise InsufficientStock(
                            f"Not enough stock for {product.name}",
                            details={
                                "product_id": product.id,
                                "requested_quantity": line.quantity + 1,
                                "on_hand": product.quantity,
                            },
                        )
                    line.quantity += 1
                else:
                    line = CartLine(product_id=product.id, name=product.name, price=product.price, quantity=1)
                    lines.append(line)

                save_cart(uow, lines)
                return line

        return run_with_retry(_op)

    def change_quantity(self, product_id: int, delta) -> CartLine | None:
        """
        Adjust a line by delta.

        Returns the updated line, or None when the line was removed (resulting
        quantity <= 0) or was not in the cart. A line whose product has been
        deleted counts as zero stock, so it can only shrink.

        Raises:
            InsufficientStock: resulting quantity exceeds current stock (line unchanged)
        """
        delta = parse_delta(delta)

        def _op():
            with self.store.unit_of_work() as uow:
                lines = load_cart(uow)
                line = _find_line(lines, product_id)
                if line is None:
                    return None

                new_quantity = line.quantity + delta
                if new_quantity <= 0:
                    save_cart(uow, [other for other in lines if other.product_id != product_id])
                    return None

                product = find_product(load_products(uow), product_id)
                on_hand = product.quantity if product is not None else 0
                if new_quantity > on_hand:
                    raise InsufficientStock(
                        f"Not enough stock for {line.name}",
                        details={
                            "product_id": product_id,
                            "requested_quantity": new_quantity,
                            "on_hand": on_hand,
                        },
                    )

                line.quantity = new_quantity
                save_cart(uow, lines)
                return line

        return run_with_retry(_op)

    def remove_item(self, product_id: int) -> None:
        def _op():
            with self.store.unit_of_work() as uow:
                lines = load_cart(uow)
                remaining = [other for other in lines if other.product_id != product_id]
                if len(remaining) != len(lines):
                    save_cart(uow, remaining)

        run_with_retry(_op)

    def clear(self) -> None:
        self.store.write(CART, [])

    def view(self) -> dict:
        """Cart lines with live-stock flags and the running total."""
        products = {p["id"]: p for p in self.store.read(PRODUCTS, [])}
        lines = []
        for line in self.lines():
            product = products.get(line.product_id)
            data = line.to_dict()
            data["subtotal"] = line.subtotal
            data["available"] = product is not None
            data["exceeds_stock"] = product is None or line.quantity > product["quantity"]
            lines.append(data)
        return {
            "lines": lines,
            "total": add_amounts(*(entry["subtotal"] for entry in lines)),
        }
