# Overview: One-time sample catalog seeding guarded by the persisted "initialized" flag.

from __future__ import annotations

from flask import current_app

from ..models import Product
from .concurrency import run_with_retry
from .storage_service import INITIALIZED, PRODUCTS, IdGenerator, PosStore

SAMPLE_PRODUCTS = [
    Product(id=1, name="Bread", price=1000, quantity=20, image="https://via.placeholder.com/200?text=Bread"),
    Product(id=2, name="Croissant", price=1500, quantity=15, image="https://via.placeholder.com/200?text=Croissant"),
    Product(id=3, name="Cake", price=5000, quantity=5, image="https://via.placeholder.com/200?text=Cake"),
    Product(id=4, name="Donut", price=800, quantity=30, image="https://via.placeholder.com/200?text=Donut"),
    Product(id=5, name="Cookie", price=300, quantity=50, image="https://via.placeholder.com/200?text=Cookie"),
]


def is_initialized(store: PosStore) -> bool:
    return bool(store.read(INITIALIZED, False))


def initialize_sample_data(store: PosStore, ids: IdGenerator) -> bool:
    """
    Seed the sample catalog exactly once.

    Returns True if this call seeded, False if the store was already
    initialized. The sample replaces the products collection, so it only
    ever runs against a store that has never been initialized.
    """
    def _op():
        with store.unit_of_work() as uow:
            if uow.read(INITIALIZED, False):
                return False
            uow.write(PRODUCTS, [p.to_dict() for p in SAMPLE_PRODUCTS])
            ids.reserve(uow, max(p.id for p in SAMPLE_PRODUCTS))
            uow.write(INITIALIZED, True)
            return True

    seeded = run_with_retry(_op)
    if seeded:
        current_app.logger.info("Seeded %s sample products", len(SAMPLE_PRODUCTS))
    return seeded


def mark_initialized(store: PosStore) -> None:
    """Set the flag without seeding (start from an empty catalog)."""
    store.write(INITIALIZED, True)
