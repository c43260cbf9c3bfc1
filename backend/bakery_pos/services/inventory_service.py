"""
Inventory Ledger Service

WHY: Single owner of product records and on-hand stock. Every other service
that needs stock reads it through here.

DESIGN PRINCIPLES:
- Product names are unique case-insensitively
- Restocking an existing name merges quantities (price untouched)
- Edit overwrites name/price/quantity unconditionally
- Stock only goes down through committed sales (decrement), never below zero
- Delete is permanent; past sales keep their own name/price snapshots
"""

from __future__ import annotations

from flask import current_app

from ..errors import DuplicateProductName, InsufficientStock, ProductNotFound
from ..models import Product
from ..validation import parse_name, parse_price, parse_quantity
from .concurrency import run_with_retry
from .storage_service import PRODUCTS, IdGenerator, PosStore, UnitOfWork

DEFAULT_LOW_STOCK_THRESHOLD = 5


def load_products(uow: UnitOfWork) -> list[Product]:
    return [Product.from_dict(p) for p in uow.read(PRODUCTS, [])]


def save_products(uow: UnitOfWork, products: list[Product]) -> None:
    uow.write(PRODUCTS, [p.to_dict() for p in products])


def find_product(products: list[Product], product_id: int) -> Product | None:
    for product in products:
        if product.id == product_id:
            return product
    return None


def decrement_in(products: list[Product], product_id: int, amount: int) -> Product:
    """
    Decrement one product inside an in-memory product list.

    Raises InsufficientStock (or ProductNotFound) without touching the list.
    """
    product = find_product(products, product_id)
    if product is None:
        raise ProductNotFound(f"Product {product_id} not found", details={"product_id": product_id})
    if amount > product.quantity:
        raise InsufficientStock(
            f"Not enough stock for {product.name}",
            details={
                "product_id": product.id,
                "requested_quantity": amount,
                "on_hand": product.quantity,
            },
        )
    product.quantity -= amount
    return product


class InventoryLedger:
    def __init__(self, store: PosStore, ids: IdGenerator, *, low_stock_threshold: int = DEFAULT_LOW_STOCK_THRESHOLD):
        self.store = store
        self.ids = ids
        self.low_stock_threshold = low_stock_threshold

    # =========================================================================
    # READS
    # =========================================================================

    def list_products(self) -> list[Product]:
        """Snapshot of the catalog in stored order."""
        return [Product.from_dict(p) for p in self.store.read(PRODUCTS, [])]

    def get_product(self, product_id: int) -> Product:
        product = find_product(self.list_products(), product_id)
        if product is None:
            raise ProductNotFound(f"Product {product_id} not found", details={"product_id": product_id})
        return product

    def find_by_name(self, name: str) -> Product | None:
        for product in self.list_products():
            if product.matches_name(name):
                return product
        return None

    def is_low_stock(self, product: Product) -> bool:
        return product.quantity < self.low_stock_threshold

    def low_stock_products(self) -> list[Product]:
        return [p for p in self.list_products() if self.is_low_stock(p)]

    def product_view(self, product: Product) -> dict:
        data = product.to_dict()
        data["low_stock"] = self.is_low_stock(product)
        return data

    # =========================================================================
    # WRITES
    # =========================================================================

    def add_or_restock(self, name, price, quantity, image: str | None = None) -> tuple[Product, bool]:
        """
        Add a new product, or restock an existing one with the same name.

        Returns (product, created). When a product with the same name
        (case-insensitive) exists its quantity grows by `quantity` and its
        price is left alone; the caller confirms this merge with the user.

        Raises:
            InvalidInput: blank name, price <= 0 or quantity <= 0
        """
        name = parse_name(name)
        price = parse_price(price)
        quantity = parse_quantity(quantity, allow_zero=False)

        def _op():
            with self.store.unit_of_work() as uow:
                products = load_products(uow)
                existing = next((p for p in products if p.matches_name(name)), None)
                if existing is not None:
                    existing.quantity += quantity
                    save_products(uow, products)
                    return existing, False

                product = Product(
                    id=self.ids.next_id(uow),
                    name=name,
                    price=price,
                    quantity=quantity,
                    image=(image or "").strip(),
                )
                products.append(product)
                save_products(uow, products)
                return product, True

        product, created = run_with_retry(_op)
        if created:
            current_app.logger.info("Product %s (%s) created with quantity %s", product.id, product.name, quantity)
        else:
            current_app.logger.info("Product %s (%s) restocked by %s", product.id, product.name, quantity)
        return product, created

    def edit(self, product_id: int, name, price, quantity) -> Product:
        """
        Overwrite name, price and quantity of a product.

        Zero quantity is allowed here (unlike creation).

        Raises:
            InvalidInput: blank name, price <= 0 or quantity < 0
            DuplicateProductName: another product already uses the name
            ProductNotFound: unknown product_id
        """
        name = parse_name(name)
        price = parse_price(price)
        quantity = parse_quantity(quantity, allow_zero=True)

        def _op():
            with self.store.unit_of_work() as uow:
                products = load_products(uow)
                product = find_product(products, product_id)
                if product is None:
                    raise ProductNotFound(f"Product {product_id} not found", details={"product_id": product_id})

                clash = next((p for p in products if p.id != product_id and p.matches_name(name)), None)
                if clash is not None:
                    raise DuplicateProductName(
                        f"Another product is already named '{clash.name}'",
                        details={"product_id": clash.id},
                    )

                product.name = name
                product.price = price
                product.quantity = quantity
                save_products(uow, products)
                return product

        return run_with_retry(_op)

    def remove(self, product_id: int) -> Product:
        """
        Permanently delete a product.

        No check against historical sales: they keep their own snapshots.
        Cart lines pointing at the product are left for checkout to reject.
        """
        def _op():
            with self.store.unit_of_work() as uow:
                products = load_products(uow)
                product = find_product(products, product_id)
                if product is None:
                    raise ProductNotFound(f"Product {product_id} not found", details={"product_id": product_id})
                save_products(uow, [p for p in products if p.id != product_id])
                return product

        removed = run_with_retry(_op)
        current_app.logger.info("Product %s (%s) deleted", removed.id, removed.name)
        return removed

    def decrement(self, product_id: int, amount: int) -> Product:
        """
        Take `amount` units out of stock.

        Raises InsufficientStock when amount exceeds the current quantity.
        """
        amount = parse_quantity(amount, allow_zero=False)

        def _op():
            with self.store.unit_of_work() as uow:
                products = load_products(uow)
                product = decrement_in(products, product_id, amount)
                save_products(uow, products)
                return product

        return run_with_retry(_op)
