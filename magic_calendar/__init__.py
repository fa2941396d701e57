"""Magic Calendar — per-user daily meeting scheduling."""

from magic_calendar.modules.calendar import (
    CalendarInputError,
    CalendarStore,
    InvalidMeetingTypeError,
    InvalidTimeFormatError,
    InvalidUserError,
    MeetingType,
    Outcome,
    ScheduleResult,
    Slot,
)

__version__ = "0.1.0"

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
