"""Supabase repository for sleep reminders."""

from dataclasses import dataclass
from datetime import time
from uuid import UUID

from supabase import Client

from stayfocus.domain.reminders import Reminder, ReminderKind
from stayfocus.services.reminders import ReminderRepository

_COLUMNS = "id, kind, remind_at, weekdays, active"


@dataclass
class SupabaseReminderRepository(ReminderRepository):
    """Supabase implementation for reminders."""

    client: Client

    def list_reminders(self, user_id: UUID) -> list[Reminder]:
        """Return all reminders of a user."""
        response = (
            self.client.table("sleep_reminders")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .order("remind_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> Reminder | None:
        """Return a reminder owned by the user."""
        response = (
            self.client.table("sleep_reminders")
            .select(_COLUMNS)
            .eq("id", str(reminder_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def create_reminder(
        self,
        user_id: UUID,
        kind: ReminderKind,
        remind_at: time,
        weekdays: tuple[int, ...],
    ) -> Reminder:
        """Insert an active reminder."""
        response = (
            self.client.table("sleep_reminders")
            .insert(
                {
                    "user_id": str(user_id),
                    "kind": kind.value,
                    "remind_at": remind_at.strftime("%H:%M"),
                    "weekdays": list(weekdays),
                    "active": True,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create reminder")
        return _parse_row(response.data[0])

    def update_reminder(self, reminder: Reminder) -> Reminder:
        """Overwrite the stored fields of a reminder."""
        response = (
            self.client.table("sleep_reminders")
            .update(
                {
                    "kind": reminder.kind.value,
                    "remind_at": reminder.time.strftime("%H:%M"),
                    "weekdays": list(reminder.weekdays),
                    "active": reminder.active,
                }
            )
            .eq("id", str(reminder.id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update reminder")
        return _parse_row(response.data[0])

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> bool:
        """Delete a reminder row."""
        response = (
            self.client.table("sleep_reminders")
            .delete()
            .eq("id", str(reminder_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)


def _parse_row(row: dict[str, object]) -> Reminder:
    weekdays = row.get("weekdays") or []
    return Reminder(
        id=UUID(str(row["id"])),
        kind=ReminderKind(str(row["kind"])),
        time=time.fromisoformat(str(row["remind_at"])),
        weekdays=tuple(sorted(int(day) for day in weekdays)),
        active=bool(row.get("active", True)),
    )
