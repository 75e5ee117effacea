"""Read the score JSON out of a vision model's free-form reply.

Models often wrap the answer in markdown fences or stray backticks and may
add prose around it. Each cleanup step is a no-op when its wrapper is absent.
"""

import json
import math
import re
from pydantic import ConfigDict
from typing import Optional, Union

from models.base import BaseFlipperModel
from llm.exceptions import (
    EmptyInputError,
    InvalidScoreTypeError,
    MalformedJsonError,
    NoJsonFoundError,
)

_FENCE_OPEN = re.compile(r"^```[\w+-]*[ \t]*\r?\n")
_FENCE_CLOSE = re.compile(r"\r?\n```$")
_LEADING_BACKTICKS = re.compile(r"^`+")
_TRAILING_BACKTICKS = re.compile(r"`+$")


class ExtractionResult(BaseFlipperModel):
    """Score and table name read from a model response."""
    model_config = ConfigDict(frozen=True)

    score: Union[int, float]
    table_name: Optional[str] = None


def _reject_constant(name: str):
    # NaN / Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"Non-standard JSON constant {name}")


def _strip_wrapping(text: str) -> str:
    text = _FENCE_OPEN.sub("", text, count=1)
    text = _FENCE_CLOSE.sub("", text, count=1)
    text = _LEADING_BACKTICKS.sub("", text, count=1)
    text = _TRAILING_BACKTICKS.sub("", text, count=1)
    return text.strip()


def _json_span(text: str) -> str:
    """First '{' through last '}'. Assumes one object; prose braces will confuse it."""
    start = text.find("{")
    if start == -1:
        raise NoJsonFoundError("No JSON object found in model response")
    end = text.rfind("}")
    if end < start:
        return text[start:]
    return text[start:end + 1]


def extract_score_response(raw: str) -> ExtractionResult:
    """Extract `{score, tableName}` from a raw model response.

    Args:
        raw: Full text content of the model's reply.

    Returns:
        ExtractionResult with the numeric score and the table name (or None).

    Raises:
        EmptyInputError: The response is empty or whitespace.
        NoJsonFoundError: The response contains no '{'.
        MalformedJsonError: The brace-delimited span does not parse.
        InvalidScoreTypeError: `score` is missing, not a number, or not finite.
    """
    text = raw.strip()
    if not text:
        raise EmptyInputError("Model response is empty")

    candidate = _json_span(_strip_wrapping(text))

    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as e:
        raise MalformedJsonError(f"Could not parse JSON from model response: {e}") from e

    if "score" not in parsed:
        raise InvalidScoreTypeError("Model response JSON has no score")
    score = parsed["score"]
    if isinstance(score, bool) or not isinstance(score, (int, float)):
        raise InvalidScoreTypeError(
            f"Score must be a number, got {type(score).__name__}: {score!r}"
        )
    if isinstance(score, float) and not math.isfinite(score):
        raise InvalidScoreTypeError(f"Score must be finite, got {score!r}")

    table_name = parsed.get("tableName")
    if not isinstance(table_name, str):
        table_name = None

    return ExtractionResult(score=score, table_name=table_name)
