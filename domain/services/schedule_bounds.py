from __future__ import annotations

from collections.abc import Iterable
from datetime import datetime, timezone

from domain.models import AbsoluteStart, Lecture, ScheduleBounds


def first_day_start(lectures: Iterable[Lecture]) -> datetime | None:
    """UTC midnight of the earliest lecture that carries a calendar date."""
    instants = [
        lecture.start.instant for lecture in lectures if isinstance(lecture.start, AbsoluteStart)
    ]
    if not instants:
        return None
    earliest = min(instants)
    return datetime(earliest.year, earliest.month, earliest.day, tzinfo=timezone.utc)


def build_schedule_bounds(
    lectures: Iterable[Lecture], day_start: datetime | None = None
) -> ScheduleBounds:
    items = list(lectures)
    if day_start is None:
        day_start = first_day_start(items)
    if not items:
        return ScheduleBounds(earliest_start=0, latest_end=0, day_start=day_start)

    starts = [lecture.start.schedule_minutes(day_start) for lecture in items]
    ends = [lecture.end.schedule_minutes(day_start) for lecture in items]
    return ScheduleBounds(
        earliest_start=min(starts),
        latest_end=max(ends),
        day_start=day_start,
    )
