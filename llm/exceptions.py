class ResponseExtractionError(ValueError):
    """Base for all failures reading a score out of a model response."""
    kind = "ResponseExtractionError"


class EmptyInputError(ResponseExtractionError):
    """Response had no content at all."""
    kind = "EmptyInput"


class NoJsonFoundError(ResponseExtractionError):
    """Response had text but no opening brace."""
    kind = "NoJsonFound"


class MalformedJsonError(ResponseExtractionError):
    """A brace-delimited span exists but is not valid JSON."""
    kind = "MalformedJson"


class InvalidScoreTypeError(ResponseExtractionError):
    """JSON parsed but `score` is missing or not a finite number."""
    kind = "InvalidScoreType"
