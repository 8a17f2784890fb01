from __future__ import annotations

import os
from collections.abc import Callable, Generator
from datetime import datetime, timedelta, timezone
from itertools import count

import pytest

from domain.models import AbsoluteStart, Lecture, RelativeStart
from domain.services.calculate_layout_params import LayoutCalculator, LayoutCalculatorConfig

CONFERENCE_DAY = datetime(2020, 3, 30, tzinfo=timezone.utc)


def _clear_grid_env() -> None:
    for key in list(os.environ):
        if key.startswith("GRID_"):
            os.environ.pop(key, None)


_clear_grid_env()


@pytest.fixture(autouse=True)
def clear_grid_env() -> Generator[None, None, None]:
    _clear_grid_env()
    yield
    _clear_grid_env()


@pytest.fixture
def conference_day() -> datetime:
    return CONFERENCE_DAY


@pytest.fixture
def make_lecture() -> Callable[..., Lecture]:
    ids = count()

    def _make(
        start_time: int = 0,
        duration: int = 0,
        dated: bool = False,
        room: str = "",
    ) -> Lecture:
        if dated:
            start: AbsoluteStart | RelativeStart = AbsoluteStart(
                instant=CONFERENCE_DAY + timedelta(minutes=start_time)
            )
        else:
            start = RelativeStart(offset_minutes=start_time)
        return Lecture(
            lecture_id=str(next(ids)), start=start, duration=duration, room=room
        )

    return _make


@pytest.fixture
def calculator() -> LayoutCalculator:
    return LayoutCalculator(LayoutCalculatorConfig(scale_factor=1.0))
