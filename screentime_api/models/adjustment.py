from datetime import datetime

from screentime_api.extensions import db

# BIGINT ids do not autoincrement on sqlite
BigId = db.BigInteger().with_variant(db.Integer(), "sqlite")

# signed 8-bit range of an adjustment type's delta
ADJUSTMENT_MIN, ADJUSTMENT_MAX = -128, 127


class AdjustmentType(db.Model):
    """A named, reusable signed point value (e.g. "+15 for chores")."""

    __tablename__ = "adjustment_type"

    id = db.Column(BigId, primary_key=True)
    description = db.Column(db.String(255), nullable=False)
    adjustment = db.Column(db.SmallInteger, nullable=False)

    def to_dict(self):
        return {
            "id": self.id,
            "description": self.description,
            "adjustment": self.adjustment,
        }

    def __repr__(self):
        return f"<AdjustmentType {self.id} {self.adjustment:+d} {self.description!r}>"


class Adjustment(db.Model):
    """
    One application of an AdjustmentType at a point in time.

    Rows are append-only. `created` defaults to now on insert but may be
    backdated by the caller.
    """

    __tablename__ = "adjustment"

    id = db.Column(BigId, primary_key=True)
    adjustment_type_id = db.Column(
        BigId,
        db.ForeignKey("adjustment_type.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )
    created = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)
    comment = db.Column(db.String(255))

    adjustment_type = db.relationship("AdjustmentType", lazy="select")

    def to_dict(self):
        return {
            "id": self.id,
            "adjustment_type_id": self.adjustment_type_id,
            "created": self.created.isoformat() if self.created else None,
            "comment": self.comment,
        }

    def __repr__(self):
        return f"<Adjustment {self.id} type={self.adjustment_type_id} at {self.created}>"
