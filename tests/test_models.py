import pytest
from datetime import datetime, timezone
from pydantic import ValidationError

from models import (
    ActiveVenue,
    PinballVenue,
    Score,
    Table,
    TableWithScores,
    VisionOutcome,
    format_score_date,
)


# ================================================================
# Date formatting
# ================================================================

@pytest.mark.parametrize("iso,expected", [
    ("2024-10-10T12:00:00.000Z", "Oct 10, '24"),
    ("2024-01-05T12:00:00.000Z", "Jan 5, '24"),
    ("2024-12-25T12:00:00.000Z", "Dec 25, '24"),
    ("2025-03-15T12:00:00.000Z", "Mar 15, '25"),
    ("2024-10-10", "Oct 10, '24"),
    ("2005-07-04", "Jul 4, '05"),
])
def test_format_score_date(iso, expected):
    assert format_score_date(iso) == expected


def test_midnight_utc_stays_on_same_day():
    assert format_score_date("2024-10-10T00:00:00Z") == "Oct 10, '24"


def test_offset_timestamp_converted_to_utc():
    # 23:30 at UTC-5 is already the next day in UTC
    assert format_score_date("2024-10-10T23:30:00-05:00") == "Oct 11, '24"


# ================================================================
# Score
# ================================================================

def test_score_validation():
    s = Score(score=1000, table_name="Batman", date="2024-10-21")
    assert s.display_date() == "Oct 21, '24"
    assert s.venue_id is None

    with pytest.raises(ValidationError):
        Score(score=-1, date="2024-10-21")      # negative score

    with pytest.raises(ValidationError):
        Score(score=1, date="yesterday")         # not ISO


def test_invalid_date_error_is_not_chained():
    with pytest.raises(ValidationError) as exc_info:
        Score(score=1, date="yesterday")

    error = exc_info.value.errors()[0]["ctx"]["error"]
    assert "is not an ISO date" in str(error)
    assert error.__cause__ is None
    assert error.__suppress_context__ is True


def test_score_accepts_camel_case_records():
    s = Score.model_validate({
        "id": "1", "score": 50000, "tableName": "Medieval Madness",
        "date": "2025-01-10", "venueId": 1, "photoUri": "file://a.jpg",
    })
    assert s.table_name == "Medieval Madness"
    assert s.venue_id == 1
    assert s.photo_uri == "file://a.jpg"


def test_score_to_record_drops_unset_fields():
    record = Score(id="1", score=5, table_name="X", date="2024-10-10").to_record()
    assert record == {"id": "1", "score": 5, "tableName": "X", "date": "2024-10-10"}
    assert "venueId" not in record


def test_score_belongs_to():
    by_name = Score(score=1, table_name="Twilight Zone", date="2024-10-10")
    assert by_name.belongs_to("t1", "twilight zone")
    assert not by_name.belongs_to("t1", "Attack from Mars")

    by_id = Score(score=1, table_id="t1", date="2024-10-10")
    assert by_id.belongs_to("t1", "Anything")
    assert not by_id.belongs_to("t2", "Anything")


def test_score_update_field():
    s = Score(score=1, date="2024-10-10")
    assert s.update_field("score", 9999) is None
    assert s.score == 9999
    assert s.update_field("score", -5) is not None
    assert s.score == 9999


# ================================================================
# Table
# ================================================================

def test_table_validation():
    t = Table(id="1", name="Attack from Mars", manufacturer="Bally", year=1995)
    assert t.matches_name("attack from mars")

    with pytest.raises(ValidationError):
        Table(id="1", name="")

    with pytest.raises(ValidationError):
        Table(id="1", name="Future", year=3000)


def test_table_last_used_round_trips_as_iso():
    used = datetime(2025, 1, 1, tzinfo=timezone.utc)
    record = Table(id="1", name="X", last_used_date=used).to_record()
    assert record["lastUsedDate"].startswith("2025-01-01T00:00:00")
    assert Table.model_validate(record).last_used_date == used


def test_table_with_scores_best_score():
    t = TableWithScores(id="1", name="Batman", top_scores=[
        Score(score=157308820, date="2024-10-21"),
        Score(score=125000000, date="2024-10-20"),
    ])
    assert t.best_score == 157308820
    assert TableWithScores(id="2", name="Empty").best_score == 0


# ================================================================
# Venues
# ================================================================

def test_venue_models():
    v = ActiveVenue(id=123, name="Add-a-Ball")
    assert v.to_record() == {"id": 123, "name": "Add-a-Ball"}

    p = PinballVenue(id=1, name="Shorty's", latitude=47.61, longitude=-122.34,
                     machine_count=20, distance=0.3)
    assert p.to_record()["machineCount"] == 20

    with pytest.raises(ValidationError):
        PinballVenue(id=1, name="Nowhere", latitude=91, longitude=0)


# ================================================================
# VisionOutcome
# ================================================================

def test_vision_outcome_confidence_is_zero_or_one():
    VisionOutcome(score=1, confidence=1, is_mock_data=False)
    with pytest.raises(ValidationError):
        VisionOutcome(score=1, confidence=0.5, is_mock_data=False)


def test_vision_outcome_serializes_camel_case():
    outcome = VisionOutcome(score=1, table_name="X", confidence=1, is_mock_data=False)
    dumped = outcome.model_dump(by_alias=True)
    assert dumped["tableName"] == "X"
    assert dumped["isMockData"] is False
