"""Pydantic models for sleep API payloads."""

from datetime import datetime, time

from pydantic import BaseModel, Field

from stayfocus.domain.reminders import ALL_WEEKDAYS, DEFAULT_REMINDER_TIME, ReminderKind
from stayfocus.domain.sleep import MAX_QUALITY, MIN_QUALITY


class SleepSessionCreate(BaseModel):
    """Start a session, or log a finished one when ``end`` is given."""

    start: datetime
    end: datetime | None = None
    quality: int | None = Field(default=None, ge=MIN_QUALITY, le=MAX_QUALITY)


class SleepSessionClose(BaseModel):
    """Wake time and optional quality for an open session."""

    end: datetime
    quality: int | None = Field(default=None, ge=MIN_QUALITY, le=MAX_QUALITY)


class ReminderPayload(BaseModel):
    """Reminder schedule; weekdays use 0 for Sunday."""

    kind: ReminderKind = ReminderKind.BEDTIME
    remind_at: time = DEFAULT_REMINDER_TIME
    weekdays: list[int] = Field(default_factory=lambda: list(ALL_WEEKDAYS))
