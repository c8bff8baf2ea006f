"""Recurring bedtime and wake-up reminders."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import time
from typing import Protocol
from uuid import UUID

from stayfocus.domain.errors import InvalidReminderError, ReminderNotFoundError
from stayfocus.domain.reminders import (
    ALL_WEEKDAYS,
    DEFAULT_REMINDER_TIME,
    SATURDAY,
    SUNDAY,
    Reminder,
    ReminderKind,
)

_logger = logging.getLogger(__name__)


class ReminderRepository(Protocol):
    """Persistence interface for reminders."""

    def list_reminders(self, user_id: UUID) -> list[Reminder]:
        """Return all reminders of a user."""

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> Reminder | None:
        """Return a reminder by id."""

    def create_reminder(
        self,
        user_id: UUID,
        kind: ReminderKind,
        remind_at: time,
        weekdays: tuple[int, ...],
    ) -> Reminder:
        """Create an active reminder and return it."""

    def update_reminder(self, reminder: Reminder) -> Reminder:
        """Persist all fields of an existing reminder."""

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> bool:
        """Delete a reminder; return False when nothing was deleted."""


@dataclass
class ReminderService:
    """Service for managing a user's reminders."""

    repository: ReminderRepository

    def list_reminders(self, user_id: UUID) -> list[Reminder]:
        """Return reminders grouped by kind, earliest time first."""
        return sorted(
            self.repository.list_reminders(user_id),
            key=lambda reminder: (reminder.kind != ReminderKind.BEDTIME, reminder.time),
        )

    def create_reminder(
        self,
        user_id: UUID,
        kind: ReminderKind = ReminderKind.BEDTIME,
        remind_at: time = DEFAULT_REMINDER_TIME,
        weekdays: Iterable[int] = ALL_WEEKDAYS,
    ) -> Reminder:
        """Create a new active reminder."""
        reminder = self.repository.create_reminder(
            user_id, ReminderKind(kind), remind_at, normalize_weekdays(weekdays)
        )
        _logger.info("Reminder created: user_id=%s id=%s", user_id, reminder.id)
        return reminder

    def update_reminder(
        self,
        user_id: UUID,
        reminder_id: UUID,
        kind: ReminderKind,
        remind_at: time,
        weekdays: Iterable[int],
    ) -> Reminder:
        """Replace the schedule of a reminder, keeping its active flag."""
        current = self._require(user_id, reminder_id)
        updated = Reminder(
            id=current.id,
            kind=ReminderKind(kind),
            time=remind_at,
            weekdays=normalize_weekdays(weekdays),
            active=current.active,
        )
        return self.repository.update_reminder(updated)

    def toggle_reminder(self, user_id: UUID, reminder_id: UUID) -> Reminder:
        """Flip a reminder between active and paused."""
        current = self._require(user_id, reminder_id)
        toggled = Reminder(
            id=current.id,
            kind=current.kind,
            time=current.time,
            weekdays=current.weekdays,
            active=not current.active,
        )
        _logger.info(
            "Reminder toggled: user_id=%s id=%s active=%s",
            user_id,
            reminder_id,
            toggled.active,
        )
        return self.repository.update_reminder(toggled)

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> None:
        """Delete a reminder."""
        if not self.repository.delete_reminder(user_id, reminder_id):
            raise ReminderNotFoundError(str(reminder_id))
        _logger.info("Reminder deleted: user_id=%s id=%s", user_id, reminder_id)

    def _require(self, user_id: UUID, reminder_id: UUID) -> Reminder:
        reminder = self.repository.get_reminder(user_id, reminder_id)
        if reminder is None:
            raise ReminderNotFoundError(str(reminder_id))
        return reminder


def normalize_weekdays(weekdays: Iterable[int]) -> tuple[int, ...]:
    """Return sorted unique weekdays (0 = Sunday), rejecting empty selections."""
    days = sorted(set(weekdays))
    if not days:
        raise InvalidReminderError("Select at least one day of the week")
    if days[0] < SUNDAY or days[-1] > SATURDAY:
        raise InvalidReminderError("Weekdays must be between 0 (Sunday) and 6")
    return tuple(days)
