from datetime import datetime, timezone
from pydantic import Field, field_validator
from typing import Optional

from .base import BaseFlipperModel

MONTH_NAMES = [
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
]


def _parse_iso(date_string: str) -> datetime:
    return datetime.fromisoformat(date_string.replace("Z", "+00:00"))


def format_score_date(date_string: str) -> str:
    """Format an ISO date or timestamp as "Oct 10, '24".

    Timestamps are read in UTC so a score saved at midnight UTC shows the
    day it was saved, not the previous one. Date-only strings are used as-is.
    """
    parsed = _parse_iso(date_string)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return f"{MONTH_NAMES[parsed.month - 1]} {parsed.day}, '{parsed.year % 100:02d}"


class Score(BaseFlipperModel):
    """A single logged high score."""
    id: Optional[str] = None
    table_id: Optional[str] = None  # legacy link; new scores use table_name
    table_name: Optional[str] = None
    score: int = Field(..., ge=0)
    date: str
    photo_uri: Optional[str] = None
    venue_id: Optional[int] = None

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        try:
            _parse_iso(v)
        except ValueError:
            raise ValueError(f"Date {v!r} is not an ISO date or timestamp") from None
        return v

    def belongs_to(self, table_id: Optional[str], table_name: str) -> bool:
        """True if this score is filed under the given table (by id or name)."""
        if self.table_id is not None and self.table_id == table_id:
            return True
        if self.table_name is not None:
            return self.table_name.lower() == table_name.lower()
        return False

    def display_date(self) -> str:
        return format_score_date(self.date)
