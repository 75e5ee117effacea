from pydantic import ConfigDict
from typing import Literal, Optional, Union

from .base import BaseFlipperModel


class VisionOutcome(BaseFlipperModel):
    """Result of analysing one scoreboard photo.

    Built once per analysis call and never mutated. When is_mock_data is
    True the values are a placeholder and `error` says why.
    """
    model_config = ConfigDict(frozen=True)

    score: Union[int, float]
    table_name: Optional[str] = None
    confidence: Literal[0, 1]
    manufacturer: Optional[str] = None
    is_mock_data: bool
    error: Optional[str] = None
