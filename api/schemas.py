"""API request models.

Requests accept both camelCase (as the mobile app sends) and snake_case keys.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional


class CamelRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AddScoreRequest(CamelRequest):
    """Log a score. Untagged scores pick up the active venue, if any."""
    score: int = Field(..., ge=0)
    table_name: str = Field(..., min_length=1)
    date: Optional[str] = None  # defaults to now (UTC)
    photo_uri: Optional[str] = None
    venue_id: Optional[int] = None


class UpdateScoreRequest(CamelRequest):
    score: Optional[int] = Field(None, ge=0)
    table_name: Optional[str] = Field(None, min_length=1)
    date: Optional[str] = None
    photo_uri: Optional[str] = None


class CreateTableRequest(CamelRequest):
    name: str = Field(..., min_length=1)
    year: Optional[int] = Field(None, ge=1930, le=2100)
    manufacturer: Optional[str] = None


class SetActiveVenueRequest(CamelRequest):
    id: int
    name: str = Field(..., min_length=1)
