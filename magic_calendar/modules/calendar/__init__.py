"""Daily meeting calendar with slot, adjacency and capacity rules."""

from magic_calendar.modules.calendar.models import (
    CalendarInputError,
    InvalidMeetingTypeError,
    InvalidTimeFormatError,
    InvalidUserError,
    MeetingType,
    Outcome,
    ScheduleResult,
    Slot,
)
from magic_calendar.modules.calendar.store import CalendarStore

__all__ = [
    "CalendarInputError",
    "CalendarStore",
    "InvalidMeetingTypeError",
    "InvalidTimeFormatError",
    "InvalidUserError",
    "MeetingType",
    "Outcome",
    "ScheduleResult",
    "Slot",
]
