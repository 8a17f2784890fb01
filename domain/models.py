from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Annotated, List, Literal, Optional, Set, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

MINUTES_PER_DAY = 24 * 60


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


class AbsoluteStart(BaseModel):
    """Calendar timestamp of a lecture that carries a known date."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["absolute"] = "absolute"
    instant: datetime

    @field_validator("instant", mode="before")
    @classmethod
    def accept_epoch_millis(cls, value: object) -> object:
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        return value

    @field_validator("instant", mode="after")
    @classmethod
    def normalize_timezone(cls, value: datetime) -> datetime:
        return _as_utc(value)

    def plus_minutes(self, minutes: int) -> AbsoluteStart:
        return AbsoluteStart(instant=self.instant + timedelta(minutes=minutes))

    def minutes_until(self, other: AbsoluteStart) -> int:
        return int((other.instant - self.instant).total_seconds() // 60)

    def schedule_minutes(self, day_start: Optional[datetime] = None) -> int:
        if day_start is None:
            return self.instant.hour * 60 + self.instant.minute
        return int((self.instant - _as_utc(day_start)).total_seconds() // 60)


class RelativeStart(BaseModel):
    """Monotonic minute offset from the schedule anchor; never wraps at midnight."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["relative"] = "relative"
    offset_minutes: int

    def plus_minutes(self, minutes: int) -> RelativeStart:
        return RelativeStart(offset_minutes=self.offset_minutes + minutes)

    def minutes_until(self, other: RelativeStart) -> int:
        return other.offset_minutes - self.offset_minutes

    def schedule_minutes(self, day_start: Optional[datetime] = None) -> int:
        return self.offset_minutes


StartPosition = Annotated[Union[AbsoluteStart, RelativeStart], Field(discriminator="kind")]


def elapsed_minutes(
    earlier: StartPosition, later: StartPosition, bounds: Optional[ScheduleBounds] = None
) -> int:
    """Minutes from ``earlier`` to ``later``.

    Positions of the same kind are subtracted directly. Mixed kinds are both
    projected onto the schedule minutes of ``bounds`` first so they are never
    compared raw.
    """
    if isinstance(earlier, AbsoluteStart) and isinstance(later, AbsoluteStart):
        return earlier.minutes_until(later)
    if isinstance(earlier, RelativeStart) and isinstance(later, RelativeStart):
        return earlier.minutes_until(later)
    if bounds is None:
        return later.schedule_minutes() - earlier.schedule_minutes()
    return bounds.schedule_minutes(later) - bounds.schedule_minutes(earlier)


class Lecture(BaseModel):
    model_config = ConfigDict(frozen=True)

    lecture_id: str = Field(..., min_length=1)
    start: StartPosition
    duration: int = 0
    title: str = ""
    room: str = ""

    @property
    def end(self) -> StartPosition:
        return self.start.plus_minutes(self.duration)


class ScheduleDocument(BaseModel):
    title: str = ""
    day_start: Optional[datetime] = None
    lectures: List[Lecture] = Field(default_factory=list)

    @field_validator("lectures", mode="after")
    @classmethod
    def ensure_unique_lecture_ids(cls, lectures: List[Lecture]) -> List[Lecture]:
        seen: Set[str] = set()
        for lecture in lectures:
            if lecture.lecture_id in seen:
                msg = f"Duplicate lecture_id found: {lecture.lecture_id}"
                raise ValueError(msg)
            seen.add(lecture.lecture_id)
        return lectures

    @field_validator("day_start", mode="after")
    @classmethod
    def normalize_day_start(cls, value: Optional[datetime]) -> Optional[datetime]:
        return _as_utc(value) if value is not None else None

    def to_schedule_dict(self) -> dict:
        return self.model_dump(mode="json")


@dataclass(frozen=True)
class ScheduleBounds:
    earliest_start: int
    latest_end: int
    day_start: Optional[datetime] = None

    def schedule_minutes(self, position: StartPosition) -> int:
        """Project ``position`` onto the minutes these bounds are measured in.

        Without a ``day_start`` dated lectures only know their minute of day;
        one that falls before ``earliest_start`` belongs to the following day.
        """
        minutes = position.schedule_minutes(self.day_start)
        if (
            self.day_start is None
            and isinstance(position, AbsoluteStart)
            and minutes < self.earliest_start
        ):
            minutes += MINUTES_PER_DAY
        return minutes

    def span_minutes(self) -> int:
        return max(self.latest_end - self.earliest_start, 0)


@dataclass(frozen=True)
class Margins:
    top: int
    bottom: int
    height: int = 0


@dataclass(frozen=True)
class LayoutParams:
    top_margin: float
    bottom_margin: float
    height: float
