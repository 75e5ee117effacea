from .response_parser import extract_score_response, ExtractionResult
from .vision import analyze_image_bytes, analyze_photo, mock_outcome
from .exceptions import (
    ResponseExtractionError,
    EmptyInputError,
    NoJsonFoundError,
    MalformedJsonError,
    InvalidScoreTypeError,
)

__all__ = [
    "extract_score_response",
    "ExtractionResult",
    "analyze_photo",
    "analyze_image_bytes",
    "mock_outcome",
    "ResponseExtractionError",
    "EmptyInputError",
    "NoJsonFoundError",
    "MalformedJsonError",
    "InvalidScoreTypeError",
]
