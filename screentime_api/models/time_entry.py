from datetime import datetime

from screentime_api.extensions import db
from screentime_api.models.adjustment import BigId

# minutes are an unsigned 16-bit quantity
TIME_MIN, TIME_MAX = 0, 65535


def format_minutes(minutes: int) -> str:
    """Render minutes as H:MM (hours unpadded, minutes always two digits)."""
    return f"{minutes // 60}:{minutes % 60:02d}"


class TimeEntry(db.Model):
    """An authoritative snapshot/reset of the tracked duration, in minutes."""

    __tablename__ = "time_entry"

    id = db.Column(BigId, primary_key=True)
    time = db.Column(db.Integer, nullable=False)
    created = db.Column(db.DateTime, default=datetime.utcnow, nullable=False, index=True)

    @property
    def time_formatted(self) -> str:
        return format_minutes(self.time)

    def to_dict(self):
        return {
            "id": self.id,
            "time": self.time,
            "created": self.created.isoformat() if self.created else None,
            "time_formatted": self.time_formatted,
        }

    def __str__(self):
        return self.time_formatted

    def __repr__(self):
        return f"<TimeEntry {self.id} {self.time_formatted} at {self.created}>"
