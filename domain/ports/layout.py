from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from domain.models import Lecture, LayoutParams, Margins, ScheduleBounds


class ColumnLayoutCalculator(Protocol):
    def calculate_margins(
        self, lectures: Sequence[Lecture], bounds: ScheduleBounds
    ) -> dict[Lecture, Margins]:
        ...

    def calculate_layout_params(
        self, lectures: Sequence[Lecture], bounds: ScheduleBounds
    ) -> dict[Lecture, LayoutParams]:
        ...

    def calculate_display_distance(self, minutes: float) -> float:
        ...

    def calculate_column_height(self, bounds: ScheduleBounds) -> float:
        ...
