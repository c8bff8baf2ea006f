"""Sleep session logging and weekly reports."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime, tzinfo
from fractions import Fraction
from typing import Protocol
from uuid import UUID

from stayfocus.domain.errors import (
    InvalidSleepSessionError,
    SleepSessionConflictError,
    SleepSessionNotFoundError,
)
from stayfocus.domain.sleep import MAX_QUALITY, MIN_QUALITY, SleepSession, WeekReport
from stayfocus.services.aggregation import IDEAL_SLEEP_HOURS, aggregate_week
from stayfocus.services.weeks import resolve_week

_logger = logging.getLogger(__name__)


class SleepRepository(Protocol):
    """Persistence interface for sleep sessions."""

    def create_session(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime | None,
        quality: int | None,
    ) -> SleepSession:
        """Create a session and return it."""

    def get_session(self, user_id: UUID, session_id: UUID) -> SleepSession | None:
        """Return a user's session by id."""

    def get_open_session(self, user_id: UUID) -> SleepSession | None:
        """Return the user's session that has no end yet, if any."""

    def close_session(
        self, session_id: UUID, end: datetime, quality: int | None
    ) -> SleepSession:
        """Set the end and quality of a session and return it."""

    def delete_session(self, user_id: UUID, session_id: UUID) -> bool:
        """Delete a session; return False when nothing was deleted."""

    def list_sessions(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[SleepSession]:
        """Return sessions overlapping the range, open sessions included."""


@dataclass
class SleepService:
    """Service for logging sleep and building week reports in one local zone."""

    repository: SleepRepository
    tz: tzinfo = UTC
    ideal_hours: float | Fraction = IDEAL_SLEEP_HOURS

    def start_session(
        self, user_id: UUID, start: datetime, quality: int | None = None
    ) -> SleepSession:
        """Open a new session; only one may be open per user."""
        _check_quality(quality)
        if self.repository.get_open_session(user_id) is not None:
            raise SleepSessionConflictError("A sleep session is already open")
        session = self.repository.create_session(
            user_id, self._localize(start), None, quality
        )
        _logger.info("Sleep session started: user_id=%s id=%s", user_id, session.id)
        return session

    def log_session(
        self,
        user_id: UUID,
        start: datetime,
        end: datetime,
        quality: int | None = None,
    ) -> SleepSession:
        """Record an already finished session."""
        _check_quality(quality)
        start, end = self._localize(start), self._localize(end)
        _check_interval(start, end)
        session = self.repository.create_session(user_id, start, end, quality)
        _logger.info("Sleep session logged: user_id=%s id=%s", user_id, session.id)
        return session

    def close_session(
        self,
        user_id: UUID,
        session_id: UUID,
        end: datetime,
        quality: int | None = None,
    ) -> SleepSession:
        """Set the wake time of an open session; sessions close only once."""
        _check_quality(quality)
        session = self.repository.get_session(user_id, session_id)
        if session is None:
            raise SleepSessionNotFoundError(str(session_id))
        if not session.is_open:
            raise SleepSessionConflictError("Sleep session is already closed")
        end = self._localize(end)
        _check_interval(session.start, end)
        closed = self.repository.close_session(session_id, end, quality)
        _logger.info("Sleep session closed: user_id=%s id=%s", user_id, session_id)
        return closed

    def delete_session(self, user_id: UUID, session_id: UUID) -> None:
        """Delete a session owned by the user."""
        if not self.repository.delete_session(user_id, session_id):
            raise SleepSessionNotFoundError(str(session_id))

    def get_week(
        self, user_id: UUID, reference: date | datetime, now: datetime
    ) -> WeekReport:
        """Return the aggregated week containing ``reference`` as seen at ``now``."""
        window = resolve_week(reference, tz=self.tz)
        sessions = self.repository.list_sessions(user_id, window.start, window.end)
        malformed = [session.id for session in sessions if not session.is_well_formed]
        if malformed:
            _logger.warning(
                "Skipping malformed sleep sessions: user_id=%s ids=%s",
                user_id,
                malformed,
            )
        days, statistics = aggregate_week(
            sessions, window, self._localize(now), ideal_hours=self.ideal_hours
        )
        return WeekReport(window=window, days=days, statistics=statistics)

    def _localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment.replace(tzinfo=self.tz)
        return moment.astimezone(self.tz)


def _check_quality(quality: int | None) -> None:
    if quality is not None and not MIN_QUALITY <= quality <= MAX_QUALITY:
        raise InvalidSleepSessionError(
            f"Quality must be between {MIN_QUALITY} and {MAX_QUALITY}"
        )


def _check_interval(start: datetime, end: datetime) -> None:
    if end <= start:
        raise InvalidSleepSessionError("Sleep session must end after it starts")
