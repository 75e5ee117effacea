import json

import pytest

from llm.exceptions import (
    EmptyInputError,
    InvalidScoreTypeError,
    MalformedJsonError,
    NoJsonFoundError,
    ResponseExtractionError,
)
from llm.response_parser import ExtractionResult, extract_score_response


# ================================================================
# Fixtures
# ================================================================

VALID_CASES = [
    (121962080, "Guardians of the Galaxy"),
    (3542040, None),
    (2500000, "Medieval Madness"),
    (0, "Twilight Zone"),
    (1.5, "Fractional"),
    (42, "Table with {braces} in the name"),
    (99999999999, "Ünïcödé Tåble"),
]


def _json(score, table_name) -> str:
    return json.dumps({"score": score, "tableName": table_name})


WRAPPERS = [
    lambda s: s,
    lambda s: f"```json\n{s}\n```",
    lambda s: f"```\n{s}\n```",
    lambda s: f"`{s}`",
    lambda s: f"  \n```json\n{s}\n```\n  ",
]

PROSE = [
    ("Here is the score I read from the display:\n", ""),
    ("", "\nLet me know if you need anything else."),
    ("I can see a pinball machine. ", " The score is clearly visible."),
]


# ================================================================
# Properties
# ================================================================

@pytest.mark.parametrize("score,table_name", VALID_CASES)
def test_pure_json_passes_through(score, table_name):
    result = extract_score_response(_json(score, table_name))
    assert result == ExtractionResult(score=score, table_name=table_name)


@pytest.mark.parametrize("wrap", WRAPPERS)
@pytest.mark.parametrize("score,table_name", VALID_CASES)
def test_fence_and_backtick_wrapping_is_ignored(wrap, score, table_name):
    bare = extract_score_response(_json(score, table_name))
    assert extract_score_response(wrap(_json(score, table_name))) == bare


@pytest.mark.parametrize("before,after", PROSE)
@pytest.mark.parametrize("score,table_name", VALID_CASES[:3])
def test_surrounding_prose_is_ignored(before, after, score, table_name):
    bare = extract_score_response(_json(score, table_name))
    assert extract_score_response(before + _json(score, table_name) + after) == bare


def test_score_type_preserved():
    assert isinstance(extract_score_response('{"score": 10}').score, int)
    assert isinstance(extract_score_response('{"score": 10.0}').score, float)


# ================================================================
# Concrete scenarios
# ================================================================

def test_json_fence_with_language_tag():
    raw = '```json\n{"score": 121962080, "tableName": "Guardians of the Galaxy"}\n```'
    result = extract_score_response(raw)
    assert result.score == 121962080
    assert result.table_name == "Guardians of the Galaxy"


def test_explanation_then_fenced_json_with_null_table():
    raw = (
        "Looking at the image, the display shows a single player score. "
        "The machine title is not visible.\n\n"
        '```json\n{"score": 3542040, "tableName": null}\n```'
    )
    result = extract_score_response(raw)
    assert result.score == 3542040
    assert result.table_name is None


def test_single_backticks():
    result = extract_score_response('`{"score": 2500000, "tableName": "Medieval Madness"}`')
    assert result.score == 2500000
    assert result.table_name == "Medieval Madness"


def test_missing_table_name_is_none():
    assert extract_score_response('{"score": 1000}').table_name is None


def test_non_string_table_name_is_dropped():
    assert extract_score_response('{"score": 1000, "tableName": 42}').table_name is None
    assert extract_score_response('{"score": 1000, "tableName": {"a": 1}}').table_name is None


def test_internal_fences_are_left_alone():
    # only the outermost opener/closer is stripped; the span search still finds the object
    raw = 'Result:\n```json\n{"score": 7, "tableName": "X"}\n```\nDone.'
    assert extract_score_response(raw).score == 7


# ================================================================
# Failures
# ================================================================

@pytest.mark.parametrize("raw", ["", "   ", "\n\t\n"])
def test_empty_input(raw):
    with pytest.raises(EmptyInputError):
        extract_score_response(raw)


@pytest.mark.parametrize("raw", [
    "plain text, no braces at all",
    "}",
    "Sorry, I could not read the score from this image.",
    "```json\n```",
])
def test_no_json_found(raw):
    with pytest.raises(NoJsonFoundError):
        extract_score_response(raw)


@pytest.mark.parametrize("raw", [
    '{"score": 3542040, "tableName": "Incomplete',
    '{"score": 3542040, "tableName": "Trailing",}',
    "{score: 3542040}",
    '{"score": NaN}',
    '{"score": Infinity}',
    "} backwards {",
    "{}{}",
])
def test_malformed_json(raw):
    with pytest.raises(MalformedJsonError):
        extract_score_response(raw)


@pytest.mark.parametrize("raw", [
    '{"score": "3542040", "tableName": "Medieval Madness"}',
    '{"tableName": "Medieval Madness"}',
    '{"score": null, "tableName": "Medieval Madness"}',
    '{"score": true, "tableName": "Medieval Madness"}',
    '{"score": [1], "tableName": "Medieval Madness"}',
    '{"score": 1e999}',
])
def test_invalid_score_type(raw):
    with pytest.raises(InvalidScoreTypeError):
        extract_score_response(raw)


def test_error_kinds_and_base_class():
    cases = {
        "": "EmptyInput",
        "no braces": "NoJsonFound",
        "{oops": "MalformedJson",
        '{"score": "1"}': "InvalidScoreType",
    }
    for raw, kind in cases.items():
        with pytest.raises(ResponseExtractionError) as exc_info:
            extract_score_response(raw)
        assert exc_info.value.kind == kind
        assert str(exc_info.value)
        assert isinstance(exc_info.value, ValueError)


def test_deterministic():
    raw = 'The score is ```json\n{"score": 5, "tableName": "A"}\n```'
    assert extract_score_response(raw) == extract_score_response(raw)
    with pytest.raises(MalformedJsonError):
        extract_score_response("{bad")
    with pytest.raises(MalformedJsonError):
        extract_score_response("{bad")
