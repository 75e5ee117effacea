from datetime import datetime
from pydantic import Field
from typing import List, Optional

from .base import BaseFlipperModel
from .score import Score


class Table(BaseFlipperModel):
    """A pinball machine that scores are grouped under."""
    id: str
    name: str = Field(..., min_length=1)
    year: Optional[int] = Field(None, ge=1930, le=2100)
    manufacturer: Optional[str] = None
    last_used_date: Optional[datetime] = None

    def matches_name(self, name: str) -> bool:
        return self.name.lower() == name.lower()


class TableWithScores(Table):
    """Table plus its best scores, highest first."""
    top_scores: List[Score] = Field(default_factory=list)

    @property
    def best_score(self) -> int:
        return self.top_scores[0].score if self.top_scores else 0
