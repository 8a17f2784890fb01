from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from domain.models import (
    Lecture,
    LayoutParams,
    Margins,
    ScheduleBounds,
    elapsed_minutes,
)
from domain.ports.layout import ColumnLayoutCalculator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LayoutCalculatorConfig:
    scale_factor: float = 1.0  # display units per minute
    check_order: bool = False


def clamp_overlap(gap_minutes: int) -> int:
    """Overlap policy for neighbours in one column.

    A lecture that starts before its predecessor ends cuts the predecessor's
    footprint short: the gap collapses to zero instead of going negative.
    """
    return max(gap_minutes, 0)


class LayoutCalculator(ColumnLayoutCalculator):
    """Vertical margins for the lectures of a single room column.

    Lectures must already be sorted ascending by start, and ``bounds`` must
    describe the whole schedule, not just this column. Neither is validated;
    enable ``check_order`` to log descending neighbours.
    """

    def __init__(
        self,
        config: LayoutCalculatorConfig | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.config = config or LayoutCalculatorConfig()
        if self.config.scale_factor < 0:
            msg = f"scale_factor must be non-negative, got {self.config.scale_factor}"
            raise ValueError(msg)
        self.logger = log or logger

    def calculate_margins(
        self, lectures: Sequence[Lecture], bounds: ScheduleBounds
    ) -> dict[Lecture, Margins]:
        margins: dict[Lecture, Margins] = {}
        if not lectures:
            return margins
        if self.config.check_order:
            self._check_order(lectures, bounds)

        last_index = len(lectures) - 1
        for index, lecture in enumerate(lectures):
            top = 0
            if index == 0:
                top = self._first_top_margin(lecture, bounds)

            bottom = 0
            height = max(lecture.duration, 0)
            if index < last_index:
                following = lectures[index + 1]
                gap = elapsed_minutes(lecture.end, following.start, bounds)
                if gap < 0:
                    self.logger.debug(
                        "Lecture %s overlaps %s by %d minutes, clamping bottom margin",
                        lecture.lecture_id,
                        following.lecture_id,
                        -gap,
                    )
                    height = max(height + gap, 0)
                bottom = clamp_overlap(gap)

            margins[lecture] = Margins(top=top, bottom=bottom, height=height)
        return margins

    def calculate_layout_params(
        self, lectures: Sequence[Lecture], bounds: ScheduleBounds
    ) -> dict[Lecture, LayoutParams]:
        return {
            lecture: LayoutParams(
                top_margin=self.calculate_display_distance(margin.top),
                bottom_margin=self.calculate_display_distance(margin.bottom),
                height=self.calculate_display_distance(margin.height),
            )
            for lecture, margin in self.calculate_margins(lectures, bounds).items()
        }

    def calculate_display_distance(self, minutes: float) -> float:
        return minutes * self.config.scale_factor

    def calculate_column_height(self, bounds: ScheduleBounds) -> float:
        return self.calculate_display_distance(bounds.span_minutes())

    def _first_top_margin(self, lecture: Lecture, bounds: ScheduleBounds) -> int:
        top = bounds.schedule_minutes(lecture.start) - bounds.earliest_start
        if top < 0:
            self.logger.warning(
                "Lecture %s starts %d minutes before the schedule's earliest start, "
                "clamping top margin to 0",
                lecture.lecture_id,
                -top,
            )
            return 0
        return top

    def _check_order(self, lectures: Sequence[Lecture], bounds: ScheduleBounds) -> None:
        for previous, current in zip(lectures, lectures[1:]):
            if elapsed_minutes(previous.start, current.start, bounds) < 0:
                self.logger.warning(
                    "Lectures are not sorted by start: %s comes after %s",
                    current.lecture_id,
                    previous.lecture_id,
                )
