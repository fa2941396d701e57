"""In-memory calendar store enforcing the daily scheduling rules.

Each user owns one calendar for the day. Every operation on a user's
calendar runs under that user's lock, so concurrent callers for the same
user are serialized while different users never contend.
"""

from __future__ import annotations

import datetime as dt
import threading
from typing import Any, Optional

from magic_calendar.config import Settings, get_settings
from magic_calendar.logging_config import get_logger
from magic_calendar.modules.calendar.models import (
    CalendarInputError,
    ADJACENCY_MINUTES,
    MeetingType,
    Outcome,
    ScheduleResult,
    Slot,
    format_time,
    parse_meeting_type,
    parse_time,
    shift_within_day,
    validate_user,
)

logger = get_logger(__name__)


class _UserCalendar:
    """One user's meetings for the day. Callers must hold ``lock``."""

    __slots__ = ("lock", "slots", "stale")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.slots: dict[dt.time, MeetingType] = {}
        # Set once the store has dropped this calendar.
        self.stale = False

    def snapshot(self) -> list[Slot]:
        return [Slot(time=t, type=kind) for t, kind in sorted(self.slots.items())]


class CalendarStore:
    """Thread-safe mapping of users to their daily calendars."""

    def __init__(self, settings: Optional[Settings] = None) -> None:
        settings = settings or get_settings()
        self._max_meetings = settings.magic_calendar_max_meetings
        self._calendars: dict[str, _UserCalendar] = {}
        self._lock = threading.Lock()

    @property
    def max_meetings(self) -> int:
        return self._max_meetings

    # ── Public boolean API ───────────────────────────────────────────

    def schedule_meeting(self, user: str, time: str, type: MeetingType | str) -> bool:
        """Schedule a meeting; False when any scheduling rule rejects it."""
        return self.try_schedule(user, time, type).ok

    def cancel_meeting(self, user: str, time: str) -> bool:
        """Cancel a WORK meeting; False when absent or PERSONAL."""
        return self.try_cancel(user, time).ok

    def get_meetings(self, user: str) -> list[str]:
        """Return the user's scheduled times as HH:MM, earliest first."""
        return [slot.label for slot in self.get_schedule(user)]

    # ── Detailed API ─────────────────────────────────────────────────

    def try_schedule(self, user: str, time: str, type: MeetingType | str) -> ScheduleResult:
        """Schedule a meeting and report the outcome.

        Rules, in order:
            1. A user's first meeting is always accepted.
            2. A full calendar rejects everything, replacements included.
            3. An existing PERSONAL slot at the same time rejects everything.
               An existing WORK slot is upgraded by a PERSONAL request and left
               as is by a WORK request.
            4. A slot exactly one hour before or after the requested time
               rejects the request.

        The whole decision runs under the user's lock and only writes on
        success; a rejected upgrade leaves the WORK slot in place.
        """
        user, when, kind = self._validate(user, time, type=type)
        while True:
            calendar = self._get_or_create(user)
            with calendar.lock:
                if not calendar.stale:
                    return self._schedule_locked(calendar.slots, user, when, kind)

    def try_cancel(self, user: str, time: str) -> ScheduleResult:
        """Cancel the meeting at ``time`` and report the outcome."""
        user, when, _ = self._validate(user, time)
        while True:
            calendar = self._lookup(user)
            if calendar is None:
                return self._cancel_rejected(Outcome.NOT_FOUND, user, when, None)
            with calendar.lock:
                if calendar.stale:
                    continue
                existing = calendar.slots.get(when)
                if existing is MeetingType.WORK:
                    del calendar.slots[when]
                    logger.info("meeting_cancelled", user=user, time=format_time(when))
                    return ScheduleResult(outcome=Outcome.CANCELLED, slot=Slot(time=when, type=existing))
            outcome = Outcome.NOT_FOUND if existing is None else Outcome.PROTECTED
            return self._cancel_rejected(outcome, user, when, existing)

    def get_schedule(self, user: str) -> list[Slot]:
        """Return the user's slots with their types, earliest first."""
        user = validate_user(user)
        calendar = self._lookup(user)
        if calendar is None:
            return []
        with calendar.lock:
            return [] if calendar.stale else calendar.snapshot()

    def has_calendar(self, user: str) -> bool:
        return self._lookup(validate_user(user)) is not None

    def users(self) -> list[str]:
        with self._lock:
            return sorted(self._calendars)

    def clear(self) -> None:
        """Drop every user's calendar.

        Each calendar is marked stale under its own lock before the mapping
        is replaced, so a call already holding a reference retries against
        the new mapping instead of writing into a dropped calendar.
        """
        with self._lock:
            for calendar in self._calendars.values():
                with calendar.lock:
                    calendar.stale = True
            count = len(self._calendars)
            self._calendars = {}
        logger.info("calendar_store_cleared", users=count)

    # ── Internals ────────────────────────────────────────────────────

    def _schedule_locked(
        self, slots: dict[dt.time, MeetingType], user: str, when: dt.time, kind: MeetingType,
    ) -> ScheduleResult:
        requested = Slot(time=when, type=kind)

        if not slots:
            slots[when] = kind
            logger.info("meeting_scheduled", user=user, time=requested.label, type=kind.value, first=True)
            return ScheduleResult(outcome=Outcome.SCHEDULED, slot=requested)

        if len(slots) >= self._max_meetings:
            return self._reject(Outcome.CAPACITY_EXCEEDED, user, when, kind)

        existing = slots.get(when)
        if existing is MeetingType.PERSONAL:
            return self._reject(Outcome.SLOT_CONFLICT, user, when, kind)

        if self._has_neighbour(slots, when):
            return self._reject(Outcome.ADJACENT_CONFLICT, user, when, kind)

        if existing is MeetingType.WORK and kind is MeetingType.WORK:
            logger.debug("meeting_unchanged", user=user, time=requested.label)
            return ScheduleResult(outcome=Outcome.UNCHANGED, slot=requested)

        slots[when] = kind
        if existing is MeetingType.WORK:
            logger.info("meeting_replaced", user=user, time=requested.label, type=kind.value)
            return ScheduleResult(outcome=Outcome.REPLACED, slot=requested)

        logger.info("meeting_scheduled", user=user, time=requested.label, type=kind.value)
        return ScheduleResult(outcome=Outcome.SCHEDULED, slot=requested)

    @staticmethod
    def _cancel_rejected(
        outcome: Outcome, user: str, when: dt.time, existing: Optional[MeetingType],
    ) -> ScheduleResult:
        logger.debug("meeting_cancel_rejected", user=user, time=format_time(when), reason=outcome.value)
        slot = Slot(time=when, type=existing) if existing is not None else None
        return ScheduleResult(outcome=outcome, slot=slot)

    def _validate(
        self, user: Any, time: Any, type: Any = MeetingType.WORK,
    ) -> tuple[str, dt.time, MeetingType]:
        try:
            return validate_user(user), parse_time(time), parse_meeting_type(type)
        except CalendarInputError as exc:
            logger.warning("calendar_input_rejected", error=str(exc))
            raise

    def _lookup(self, user: str) -> Optional[_UserCalendar]:
        with self._lock:
            return self._calendars.get(user)

    def _get_or_create(self, user: str) -> _UserCalendar:
        with self._lock:
            calendar = self._calendars.get(user)
            if calendar is not None:
                return calendar
            calendar = _UserCalendar()
            self._calendars[user] = calendar
        logger.info("calendar_created", user=user)
        return calendar

    def _has_neighbour(self, slots: dict[dt.time, MeetingType], when: dt.time) -> bool:
        for offset in (ADJACENCY_MINUTES, -ADJACENCY_MINUTES):
            neighbour = shift_within_day(when, offset)
            if neighbour is not None and neighbour in slots:
                return True
        return False

    @staticmethod
    def _reject(outcome: Outcome, user: str, when: dt.time, kind: MeetingType) -> ScheduleResult:
        logger.debug(
            "meeting_rejected",
            user=user,
            time=format_time(when),
            type=kind.value,
            reason=outcome.value,
        )
        return ScheduleResult(outcome=outcome)
