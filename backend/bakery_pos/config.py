# backend/bakery_pos/config.py
from __future__ import annotations
import os


def _env_flag(name: str, default: bool) -> bool:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    # Optional "SECRET_KEY", with default dev key
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-secret-key-change-me")

    # SQLite DB stored in backend/instance/bakery_pos.sqlite3
    SQLALCHEMY_DATABASE_URI = os.environ.get(
        "DATABASE_URL", #optional alternative location
        "sqlite:///bakery_pos.sqlite3", #default local location
    )
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    # Display currency for receipts and shift summaries
    POS_CURRENCY = os.environ.get("POS_CURRENCY", "RWF")

    # Products strictly below this quantity are flagged as low stock
    POS_LOW_STOCK_THRESHOLD = int(os.environ.get("POS_LOW_STOCK_THRESHOLD", "5"))

    # Seed the sample bakery catalog on first start (guarded by a persisted flag)
    POS_SEED_SAMPLE_DATA = _env_flag("POS_SEED_SAMPLE_DATA", True)
