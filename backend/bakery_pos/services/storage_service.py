# Overview: Durable key-value store for POS collections with atomic units of work.

from __future__ import annotations

import copy
import time
from contextlib import contextmanager
from typing import Any, Iterator

from ..extensions import db
from ..models import PosRecord

"""
Store Invariants (authoritative)

- Each collection is one PosRecord row; its value is the JSON form of the
  whole collection.
- Writers go through a UnitOfWork: reads see earlier staged writes, and all
  staged writes are flushed in a single commit when the block exits cleanly.
- Any exception inside the block discards staged writes and rolls back, so a
  rejected operation leaves every collection untouched.
"""

PRODUCTS = "products"
CART = "cart"
SALES = "sales"
ACTIVE_SHIFT = "activeShift"
SHIFT_HISTORY = "shiftHistory"
ID_SEQUENCE = "idSequence"
INITIALIZED = "initialized"

COLLECTIONS = (PRODUCTS, CART, SALES, ACTIVE_SHIFT, SHIFT_HISTORY, ID_SEQUENCE, INITIALIZED)

_DELETED = object()


class UnitOfWork:
    """Read-modify-write session over the store; see PosStore.unit_of_work."""

    def __init__(self, store: "PosStore"):
        self._store = store
        self._staged: dict[str, Any] = {}

    def read(self, key: str, default: Any = None) -> Any:
        if key in self._staged:
            value = self._staged[key]
            if value is _DELETED:
                return copy.deepcopy(default)
            return copy.deepcopy(value)
        return self._store.read(key, default)

    def write(self, key: str, value: Any) -> None:
        self._staged[key] = copy.deepcopy(value)

    def delete(self, key: str) -> None:
        self._staged[key] = _DELETED

    @property
    def staged_keys(self) -> list[str]:
        return list(self._staged)

    def _flush(self) -> None:
        for key, value in self._staged.items():
            record = db.session.get(PosRecord, key)
            if value is _DELETED:
                if record is not None:
                    db.session.delete(record)
            elif record is None:
                db.session.add(PosRecord(key=key, value_json=value))
            else:
                record.value_json = value
        self._staged.clear()


class PosStore:
    """
    Key-value store of named POS collections.

    Values are returned as fresh deep copies; mutating a returned value
    never changes the store until it is written back through a UnitOfWork.
    """

    def read(self, key: str, default: Any = None) -> Any:
        record = db.session.get(PosRecord, key)
        if record is None or record.value_json is None:
            return copy.deepcopy(default)
        return copy.deepcopy(record.value_json)

    def exists(self, key: str) -> bool:
        return db.session.get(PosRecord, key) is not None

    @contextmanager
    def unit_of_work(self) -> Iterator[UnitOfWork]:
        uow = UnitOfWork(self)
        try:
            yield uow
            uow._flush()
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def write(self, key: str, value: Any) -> None:
        with self.unit_of_work() as uow:
            uow.write(key, value)

    def delete(self, key: str) -> None:
        with self.unit_of_work() as uow:
            uow.delete(key)

    def dump(self) -> dict[str, Any]:
        """Snapshot of every stored collection, keyed by collection name."""
        records = db.session.query(PosRecord).order_by(PosRecord.key.asc()).all()
        return {r.key: copy.deepcopy(r.value_json) for r in records}

    def wipe(self) -> None:
        """Delete every collection (including the initialization flag)."""
        db.session.query(PosRecord).delete()
        db.session.commit()


class IdGenerator:
    """
    Monotonic, time-based identifiers.

    next_id returns max(now in milliseconds, last issued + 1) and stages the
    new value in the caller's unit of work, so two ids issued within one
    clock tick still differ and an id is only consumed if its record commits.
    """

    def __init__(self, clock=None):
        self._clock = clock or (lambda: int(time.time() * 1000))

    def next_id(self, uow: UnitOfWork) -> int:
        last = uow.read(ID_SEQUENCE, 0) or 0
        candidate = max(int(self._clock()), int(last) + 1)
        uow.write(ID_SEQUENCE, candidate)
        return candidate

    def reserve(self, uow: UnitOfWork, floor: int) -> None:
        """Make sure future ids are issued above floor (used after seeding fixed ids)."""
        last = uow.read(ID_SEQUENCE, 0) or 0
        if floor > last:
            uow.write(ID_SEQUENCE, floor)
