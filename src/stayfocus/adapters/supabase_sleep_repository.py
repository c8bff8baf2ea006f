"""Supabase repository for sleep sessions."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from stayfocus.domain.sleep import SleepSession
from stayfocus.services.sleep import SleepRepository

_COLUMNS = "id, started_at, ended_at, quality"


@dataclass
class SupabaseSleepRepository(SleepRepository):
    """Supabase implementation for sleep sessions."""

    client: Client

    def create_session(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime | None,
        quality: int | None,
    ) -> SleepSession:
        """Insert a session row and return it."""
        response = (
            self.client.table("sleep_sessions")
            .insert(
                {
                    "user_id": str(user_id),
                    "started_at": start.isoformat(),
                    "ended_at": end.isoformat() if end else None,
                    "quality": quality,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create sleep session")
        return _parse_row(response.data[0])

    def get_session(self, user_id: UUID, session_id: UUID) -> SleepSession | None:
        """Return a session owned by the user."""
        response = (
            self.client.table("sleep_sessions")
            .select(_COLUMNS)
            .eq("id", str(session_id))
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def get_open_session(self, user_id: UUID) -> SleepSession | None:
        """Return the most recent session without an end."""
        response = (
            self.client.table("sleep_sessions")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .is_("ended_at", "null")
            .order("started_at", desc=True)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def close_session(
        self, session_id: UUID, end: datetime, quality: int | None
    ) -> SleepSession:
        """Write the end and quality of a session."""
        response = (
            self.client.table("sleep_sessions")
            .update({"ended_at": end.isoformat(), "quality": quality})
            .eq("id", str(session_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to close sleep session")
        return _parse_row(response.data[0])

    def delete_session(self, user_id: UUID, session_id: UUID) -> bool:
        """Delete a session row."""
        response = (
            self.client.table("sleep_sessions")
            .delete()
            .eq("id", str(session_id))
            .eq("user_id", str(user_id))
            .execute()
        )
        return bool(response.data)

    def list_sessions(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[SleepSession]:
        """Return sessions overlapping the range, including open ones."""
        response = (
            self.client.table("sleep_sessions")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .lte("started_at", end.isoformat())
            .or_(f"ended_at.is.null,ended_at.gte.{start.isoformat()}")
            .order("started_at", desc=False)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]


def _parse_row(row: dict[str, object]) -> SleepSession:
    ended_raw = row.get("ended_at")
    quality_raw = row.get("quality")
    return SleepSession(
        id=UUID(str(row["id"])),
        start=datetime.fromisoformat(str(row["started_at"])),
        end=(
            datetime.fromisoformat(ended_raw)
            if isinstance(ended_raw, str) and ended_raw
            else None
        ),
        quality=int(quality_raw) if quality_raw is not None else None,
    )
