from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Dict, List

from domain.models import Lecture, LayoutParams, ScheduleBounds, ScheduleDocument
from domain.ports.layout import ColumnLayoutCalculator
from domain.services.schedule_bounds import build_schedule_bounds

logger = logging.getLogger(__name__)

UNASSIGNED_ROOM = "unassigned"


@dataclass(frozen=True)
class ColumnLayout:
    room: str
    lectures: List[Lecture]
    params: Dict[Lecture, LayoutParams] = field(default_factory=dict)


@dataclass(frozen=True)
class ScheduleLayout:
    bounds: ScheduleBounds
    columns: List[ColumnLayout]
    column_height: float

    def column(self, room: str) -> ColumnLayout | None:
        return next((column for column in self.columns if column.room == room), None)

    def to_dict(self) -> dict:
        return {
            "bounds": {
                "earliest_start": self.bounds.earliest_start,
                "latest_end": self.bounds.latest_end,
                "day_start": self.bounds.day_start.isoformat() if self.bounds.day_start else None,
            },
            "column_height": self.column_height,
            "columns": [
                {
                    "room": column.room,
                    "lectures": [
                        {
                            "lecture_id": lecture.lecture_id,
                            "title": lecture.title,
                            "top_margin": column.params[lecture].top_margin,
                            "bottom_margin": column.params[lecture].bottom_margin,
                            "height": column.params[lecture].height,
                        }
                        for lecture in column.lectures
                    ],
                }
                for column in self.columns
            ],
        }


def group_lectures_by_room(
    lectures: Iterable[Lecture], bounds: ScheduleBounds
) -> Dict[str, List[Lecture]]:
    """Columns keyed by the room each lecture already carries.

    Rooms keep their first-appearance order; lectures inside a column are
    sorted by start (stable for equal starts).
    """
    columns: Dict[str, List[Lecture]] = {}
    for lecture in lectures:
        columns.setdefault(lecture.room or UNASSIGNED_ROOM, []).append(lecture)
    return {
        room: sorted(items, key=lambda lecture: bounds.schedule_minutes(lecture.start))
        for room, items in columns.items()
    }


def build_schedule_layout(
    document: ScheduleDocument, calculator: ColumnLayoutCalculator
) -> ScheduleLayout:
    bounds = build_schedule_bounds(document.lectures, day_start=document.day_start)
    columns: List[ColumnLayout] = []
    for room, lectures in group_lectures_by_room(document.lectures, bounds).items():
        params = calculator.calculate_layout_params(lectures, bounds)
        columns.append(ColumnLayout(room=room, lectures=lectures, params=params))
    logger.info(
        "Laid out %d lectures in %d columns (minutes %d..%d)",
        len(document.lectures),
        len(columns),
        bounds.earliest_start,
        bounds.latest_end,
    )
    return ScheduleLayout(
        bounds=bounds,
        columns=columns,
        column_height=calculator.calculate_column_height(bounds),
    )
