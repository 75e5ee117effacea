from .base import BaseFlipperModel
from .score import Score, format_score_date
from .table import Table, TableWithScores
from .venue import ActiveVenue, PinballVenue
from .vision import VisionOutcome

__all__ = [
    "BaseFlipperModel",
    "Score",
    "format_score_date",
    "Table",
    "TableWithScores",
    "ActiveVenue",
    "PinballVenue",
    "VisionOutcome",
]
