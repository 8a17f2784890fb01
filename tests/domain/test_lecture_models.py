from __future__ import annotations

from datetime import datetime, timezone

import pytest
from pydantic import ValidationError

from domain.models import (
    AbsoluteStart,
    Lecture,
    RelativeStart,
    ScheduleBounds,
    ScheduleDocument,
    elapsed_minutes,
)

CONFERENCE_DAY = datetime(2020, 3, 30, tzinfo=timezone.utc)


def test_start_kind_is_discriminated() -> None:
    payload = {
        "lectures": [
            {
                "lecture_id": "a",
                "duration": 45,
                "start": {"kind": "absolute", "instant": "2020-03-30T23:00:00Z"},
            },
            {"lecture_id": "b", "start": {"kind": "relative", "offset_minutes": 600}},
        ]
    }

    document = ScheduleDocument.model_validate(payload)

    assert isinstance(document.lectures[0].start, AbsoluteStart)
    assert isinstance(document.lectures[1].start, RelativeStart)
    assert document.lectures[1].duration == 0


def test_unknown_start_kind_is_rejected() -> None:
    with pytest.raises(ValidationError):
        Lecture.model_validate({"lecture_id": "a", "start": {"kind": "floating", "at": 1}})


def test_absolute_start_accepts_epoch_millis() -> None:
    millis = int(CONFERENCE_DAY.timestamp() * 1000) + 10 * 60 * 60 * 1000

    start = AbsoluteStart.model_validate({"instant": millis})

    assert start.instant == datetime(2020, 3, 30, 10, 0, tzinfo=timezone.utc)


def test_naive_instants_are_read_as_utc() -> None:
    start = AbsoluteStart(instant=datetime(2020, 3, 30, 10, 0))

    assert start.instant.tzinfo == timezone.utc
    assert start.schedule_minutes() == 600


def test_absolute_end_crosses_midnight() -> None:
    lecture = Lecture(
        lecture_id="late",
        start=AbsoluteStart(instant=datetime(2020, 3, 30, 23, 30, tzinfo=timezone.utc)),
        duration=45,
    )

    assert lecture.end.instant == datetime(2020, 3, 31, 0, 15, tzinfo=timezone.utc)
    assert lecture.end.schedule_minutes(CONFERENCE_DAY) == 24 * 60 + 15
    assert lecture.end.schedule_minutes() == 15


def test_elapsed_minutes_between_same_kinds() -> None:
    before = AbsoluteStart(instant=datetime(2020, 3, 30, 23, 45, tzinfo=timezone.utc))
    after = AbsoluteStart(instant=datetime(2020, 3, 31, 0, 15, tzinfo=timezone.utc))

    assert elapsed_minutes(before, after) == 30
    assert elapsed_minutes(after, before) == -30
    assert elapsed_minutes(RelativeStart(offset_minutes=1425), RelativeStart(offset_minutes=1455)) == 30


def test_elapsed_minutes_between_mixed_kinds_uses_schedule_minutes() -> None:
    dated = AbsoluteStart(instant=datetime(2020, 3, 31, 0, 5, tzinfo=timezone.utc))
    relative = RelativeStart(offset_minutes=1380)

    assert elapsed_minutes(relative, dated, ScheduleBounds(1380, 1445, CONFERENCE_DAY)) == 65


def test_mixed_kinds_without_day_start_roll_over_midnight() -> None:
    dated = AbsoluteStart(instant=datetime(2020, 3, 31, 0, 5, tzinfo=timezone.utc))
    relative = RelativeStart(offset_minutes=1380)
    bounds = ScheduleBounds(earliest_start=1380, latest_end=1445)

    assert bounds.schedule_minutes(dated) == 1445
    assert bounds.schedule_minutes(relative) == 1380
    assert elapsed_minutes(relative, dated, bounds) == 65


def test_lectures_are_hashable_and_frozen() -> None:
    lecture = Lecture(lecture_id="a", start=RelativeStart(offset_minutes=0), duration=10)

    assert {lecture: 1}[lecture] == 1
    with pytest.raises(ValidationError):
        lecture.duration = 20  # type: ignore[misc]


def test_duplicate_lecture_ids_are_rejected() -> None:
    payload = {
        "lectures": [
            {"lecture_id": "a", "start": {"kind": "relative", "offset_minutes": 0}},
            {"lecture_id": "a", "start": {"kind": "relative", "offset_minutes": 30}},
        ]
    }

    with pytest.raises(ValidationError, match="Duplicate lecture_id"):
        ScheduleDocument.model_validate(payload)
