"""Data models, input parsing and errors for the daily calendar."""

from __future__ import annotations

import datetime as dt
import re
from enum import StrEnum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict

TIME_FORMAT = "%H:%M"
ADJACENCY_MINUTES = 60
MAX_MEETINGS_PER_DAY = 5
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


class CalendarInputError(ValueError):
    """Caller passed input that violates the calendar contract."""


class InvalidTimeFormatError(CalendarInputError):
    """Time-of-day is not a well-formed 24-hour HH:MM string."""


class InvalidUserError(CalendarInputError):
    """User identifier is missing or blank."""


class InvalidMeetingTypeError(CalendarInputError):
    """Meeting type is not one of the known types."""


class MeetingType(StrEnum):
    """Kinds of meetings a slot can hold."""

    WORK = "work"
    PERSONAL = "personal"


class Outcome(StrEnum):
    """Why a calendar operation succeeded or was rejected."""

    SCHEDULED = "scheduled"
    REPLACED = "replaced"
    UNCHANGED = "unchanged"
    CANCELLED = "cancelled"
    CAPACITY_EXCEEDED = "capacity_exceeded"
    SLOT_CONFLICT = "slot_conflict"
    ADJACENT_CONFLICT = "adjacent_conflict"
    NOT_FOUND = "not_found"
    PROTECTED = "protected"


_SUCCESSES = frozenset({Outcome.SCHEDULED, Outcome.REPLACED, Outcome.UNCHANGED, Outcome.CANCELLED})


class Slot(BaseModel):
    """A single meeting occupying one time of day."""

    model_config = ConfigDict(frozen=True)

    time: dt.time
    type: MeetingType

    @property
    def label(self) -> str:
        """The HH:MM form of the slot time."""
        return format_time(self.time)


class ScheduleResult(BaseModel):
    """Result of a schedule or cancel attempt."""

    model_config = ConfigDict(frozen=True)

    outcome: Outcome
    slot: Optional[Slot] = None

    @property
    def ok(self) -> bool:
        return self.outcome in _SUCCESSES

    def __bool__(self) -> bool:
        return self.ok


def parse_time(value: Any) -> dt.time:
    """Parse a strict 24-hour ``HH:MM`` string.

    Raises:
        InvalidTimeFormatError: for anything that is not exactly two-digit
            hours 00-23, a colon and two-digit minutes 00-59.
    """
    if not isinstance(value, str):
        raise InvalidTimeFormatError(f"Time must be an HH:MM string, got {type(value).__name__}")
    match = _TIME_RE.match(value)
    if match is None:
        raise InvalidTimeFormatError(f"Time must be HH:MM (24-hour), got {value!r}")
    return dt.time(int(match.group(1)), int(match.group(2)))


def format_time(value: dt.time) -> str:
    return value.strftime(TIME_FORMAT)


def parse_meeting_type(value: Any) -> MeetingType:
    """Accept a MeetingType or its name/value in any case."""
    if isinstance(value, MeetingType):
        return value
    if isinstance(value, str):
        try:
            return MeetingType(value.strip().lower())
        except ValueError:
            pass
    raise InvalidMeetingTypeError(
        f"Meeting type must be one of {[t.name for t in MeetingType]}, got {value!r}"
    )


def validate_user(value: Any) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidUserError(f"User must be a non-empty string, got {value!r}")
    return value


def shift_within_day(value: dt.time, minutes: int) -> Optional[dt.time]:
    """Move a time of day by ``minutes``; None when it leaves the day."""
    total = value.hour * 60 + value.minute + minutes
    if total < 0 or total >= 24 * 60:
        return None
    return dt.time(total // 60, total % 60)
