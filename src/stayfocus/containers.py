"""Dependency container wiring for the application."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from supabase import create_client

from stayfocus.adapters.supabase_reminder_repository import (
    SupabaseReminderRepository,
)
from stayfocus.adapters.supabase_sleep_repository import SupabaseSleepRepository
from stayfocus.config import Settings, resolve_timezone
from stayfocus.services.reminders import ReminderService
from stayfocus.services.sleep import SleepService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    sleep_service: SleepService
    reminder_service: ReminderService
    clock: Callable[[], datetime]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    tz = resolve_timezone(resolved_settings.timezone)
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    sleep_service = SleepService(
        repository=SupabaseSleepRepository(supabase_client),
        tz=tz,
        ideal_hours=resolved_settings.ideal_sleep_hours,
    )
    reminder_service = ReminderService(SupabaseReminderRepository(supabase_client))

    def clock() -> datetime:
        return datetime.now(tz=tz)

    return AppContainer(
        settings=resolved_settings,
        sleep_service=sleep_service,
        reminder_service=reminder_service,
        clock=clock,
    )
