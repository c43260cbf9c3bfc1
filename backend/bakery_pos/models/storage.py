from __future__ import annotations

from ..extensions import db
from bakery_pos.time_utils import to_utc_z


class PosRecord(db.Model):
    """
    One named collection of the POS key-value store.

    KEYS: products, cart, sales, activeShift, shiftHistory, idSequence,
    initialized. value_json holds the whole collection as JSON, exactly as
    the services serialize it (camelCase field names).

    DESIGN: A business operation rewrites every collection it touches in
    one commit. version_id turns a concurrent writer into a StaleDataError
    instead of a silent lost update.
    """
    __tablename__ = "pos_records"

    key = db.Column(db.String(64), primary_key=True)
    value_json = db.Column(db.JSON, nullable=True)
    version_id = db.Column(db.Integer, nullable=False, default=1)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=db.func.now())
    updated_at = db.Column(
        db.DateTime(timezone=True),
        nullable=False,
        server_default=db.func.now(),
        onupdate=db.func.now(),
    )

    __mapper_args__ = {"version_id_col": version_id}

    def __repr__(self) -> str:
        return f"<PosRecord key={self.key!r} version_id={self.version_id}>"

    def to_dict(self) -> dict:
        return {
            "key": self.key,
            "value_json": self.value_json,
            "version_id": self.version_id,
            "created_at": to_utc_z(self.created_at),
            "updated_at": to_utc_z(self.updated_at),
        }
