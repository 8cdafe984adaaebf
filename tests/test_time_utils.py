from __future__ import annotations

from datetime import datetime, timezone

import pytest

from commit_audit.common.time_utils import parse_human_time, parse_timestamp

# Wednesday
NOW = datetime(2024, 9, 11, 15, 30, tzinfo=timezone.utc)


def test_parse_timestamp_handles_offsets_and_zulu() -> None:
    assert parse_timestamp("2015-08-21T10:16:59-04:00") == datetime(
        2015, 8, 21, 14, 16, 59, tzinfo=timezone.utc
    )
    assert parse_timestamp("2024-01-01T00:00:00.000Z") == datetime(
        2024, 1, 1, tzinfo=timezone.utc
    )
    assert parse_timestamp("2024-01-01T00:00:00").tzinfo is timezone.utc


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        ("now", NOW),
        ("today", datetime(2024, 9, 11, tzinfo=timezone.utc)),
        ("yesterday", datetime(2024, 9, 10, tzinfo=timezone.utc)),
        ("tomorrow", datetime(2024, 9, 12, tzinfo=timezone.utc)),
        ("-1 week", datetime(2024, 9, 4, 15, 30, tzinfo=timezone.utc)),
        ("-2 days", datetime(2024, 9, 9, 15, 30, tzinfo=timezone.utc)),
        ("+3 hours", datetime(2024, 9, 11, 18, 30, tzinfo=timezone.utc)),
        ("3 days ago", datetime(2024, 9, 8, 15, 30, tzinfo=timezone.utc)),
        ("1 month ago", datetime(2024, 8, 11, 15, 30, tzinfo=timezone.utc)),
        ("Last Monday", datetime(2024, 9, 9, tzinfo=timezone.utc)),
        ("last wednesday", datetime(2024, 9, 4, tzinfo=timezone.utc)),
        ("next monday", datetime(2024, 9, 16, tzinfo=timezone.utc)),
        ("this wednesday", datetime(2024, 9, 11, tzinfo=timezone.utc)),
    ],
)
def test_relative_phrases(text: str, expected: datetime) -> None:
    assert parse_human_time(text, now=NOW) == expected


def test_absolute_dates_go_through_dateutil() -> None:
    assert parse_human_time("Sep 1 2024 10:00", now=NOW) == datetime(
        2024, 9, 1, 10, 0, tzinfo=timezone.utc
    )


def test_unknown_phrase_raises() -> None:
    with pytest.raises(ValueError, match="Unrecognised date"):
        parse_human_time("the day after never", now=NOW)
