"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, time
from uuid import UUID, uuid4

import pytest

from stayfocus.config import Settings
from stayfocus.containers import AppContainer
from stayfocus.domain.reminders import Reminder, ReminderKind
from stayfocus.domain.sleep import SleepSession
from stayfocus.services.reminders import ReminderRepository, ReminderService
from stayfocus.services.sleep import SleepRepository, SleepService

FROZEN_NOW = datetime(2024, 1, 3, 12, 0, tzinfo=UTC)


@dataclass
class InMemorySleepRepository(SleepRepository):
    """In-memory sleep session repository for tests."""

    sessions: dict[UUID, tuple[UUID, SleepSession]] = field(default_factory=dict)

    def add(self, user_id: UUID, session: SleepSession) -> SleepSession:
        self.sessions[session.id] = (user_id, session)
        return session

    def create_session(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime | None,
        quality: int | None,
    ) -> SleepSession:
        session = SleepSession(id=uuid4(), start=start, end=end, quality=quality)
        return self.add(user_id, session)

    def get_session(self, user_id: UUID, session_id: UUID) -> SleepSession | None:
        entry = self.sessions.get(session_id)
        if entry is None or entry[0] != user_id:
            return None
        return entry[1]

    def get_open_session(self, user_id: UUID) -> SleepSession | None:
        for owner, session in self.sessions.values():
            if owner == user_id and session.is_open:
                return session
        return None

    def close_session(
        self, session_id: UUID, end: datetime, quality: int | None
    ) -> SleepSession:
        owner, session = self.sessions[session_id]
        closed = replace(session, end=end, quality=quality)
        self.sessions[session_id] = (owner, closed)
        return closed

    def delete_session(self, user_id: UUID, session_id: UUID) -> bool:
        if self.get_session(user_id, session_id) is None:
            return False
        del self.sessions[session_id]
        return True

    def list_sessions(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[SleepSession]:
        return [
            session
            for owner, session in self.sessions.values()
            if owner == user_id
            and session.start <= end
            and (session.end is None or session.end >= start)
        ]


@dataclass
class InMemoryReminderRepository(ReminderRepository):
    """In-memory reminder repository for tests."""

    reminders: dict[UUID, tuple[UUID, Reminder]] = field(default_factory=dict)

    def list_reminders(self, user_id: UUID) -> list[Reminder]:
        return [
            reminder
            for owner, reminder in self.reminders.values()
            if owner == user_id
        ]

    def get_reminder(self, user_id: UUID, reminder_id: UUID) -> Reminder | None:
        entry = self.reminders.get(reminder_id)
        if entry is None or entry[0] != user_id:
            return None
        return entry[1]

    def create_reminder(
        self,
        user_id: UUID,
        kind: ReminderKind,
        remind_at: time,
        weekdays: tuple[int, ...],
    ) -> Reminder:
        reminder = Reminder(id=uuid4(), kind=kind, time=remind_at, weekdays=weekdays)
        self.reminders[reminder.id] = (user_id, reminder)
        return reminder

    def update_reminder(self, reminder: Reminder) -> Reminder:
        owner, _ = self.reminders[reminder.id]
        self.reminders[reminder.id] = (owner, reminder)
        return reminder

    def delete_reminder(self, user_id: UUID, reminder_id: UUID) -> bool:
        if self.get_reminder(user_id, reminder_id) is None:
            return False
        del self.reminders[reminder_id]
        return True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        api_token="api-token",
        timezone="UTC",
    )


@pytest.fixture
def sleep_repository() -> InMemorySleepRepository:
    return InMemorySleepRepository()


@pytest.fixture
def reminder_repository() -> InMemoryReminderRepository:
    return InMemoryReminderRepository()


@pytest.fixture
def container(
    settings: Settings,
    sleep_repository: InMemorySleepRepository,
    reminder_repository: InMemoryReminderRepository,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        sleep_service=SleepService(sleep_repository, tz=UTC),
        reminder_service=ReminderService(reminder_repository),
        clock=lambda: FROZEN_NOW,
    )
