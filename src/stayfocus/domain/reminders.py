"""Domain models for recurring sleep reminders."""

from dataclasses import dataclass
from datetime import time
from enum import StrEnum
from uuid import UUID

SUNDAY = 0
SATURDAY = 6
ALL_WEEKDAYS: tuple[int, ...] = (0, 1, 2, 3, 4, 5, 6)
WEEKEND: tuple[int, ...] = (SUNDAY, SATURDAY)
DEFAULT_REMINDER_TIME = time(22, 0)


class ReminderKind(StrEnum):
    """What the reminder prompts the user to do."""

    BEDTIME = "bedtime"
    WAKE_UP = "wake_up"


@dataclass(frozen=True)
class Reminder:
    """A reminder repeating at a local time on selected weekdays (0 = Sunday)."""

    id: UUID
    kind: ReminderKind
    time: time
    weekdays: tuple[int, ...]
    active: bool = True
