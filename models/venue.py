from pydantic import Field

from .base import BaseFlipperModel


class ActiveVenue(BaseFlipperModel):
    """The venue the player is currently at."""
    id: int
    name: str


class PinballVenue(BaseFlipperModel):
    """A Pinball Map location with its distance from the player."""
    id: int
    name: str
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)
    machine_count: int = Field(0, ge=0)
    distance: float = Field(0.0, ge=0)  # kilometers; 0 for name searches
