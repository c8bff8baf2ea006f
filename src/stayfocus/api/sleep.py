"""Sleep session and weekly report endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from stayfocus.api.auth import require_api_token
from stayfocus.api.models import SleepSessionClose, SleepSessionCreate
from stayfocus.domain.sleep import round_for_display
from stayfocus.services.weeks import can_navigate_forward, next_week, previous_week

if TYPE_CHECKING:
    from stayfocus.containers import AppContainer
    from stayfocus.domain.sleep import DaySlot, SleepSession, WeekReport

router = APIRouter(
    prefix="/sleep", tags=["sleep"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/week")
async def get_week(
    user_id: UUID, request: Request, reference: date | None = None
) -> dict[str, object]:
    """Return the aggregated week containing ``reference`` (today by default)."""
    container: AppContainer = request.app.state.container
    now = container.clock()
    report = container.sleep_service.get_week(user_id, reference or now, now)
    return _serialize_report(report, can_navigate_forward(report.window, now))


@router.post("/{user_id}/sessions", status_code=status.HTTP_201_CREATED)
async def create_session(
    user_id: UUID, payload: SleepSessionCreate, request: Request
) -> dict[str, object]:
    """Start a session, or log a finished one."""
    container: AppContainer = request.app.state.container
    service = container.sleep_service
    if payload.end is None:
        session = service.start_session(user_id, payload.start, payload.quality)
    else:
        session = service.log_session(
            user_id, payload.start, payload.end, payload.quality
        )
    return _serialize_session(session)


@router.post("/{user_id}/sessions/{session_id}/close")
async def close_session(
    user_id: UUID, session_id: UUID, payload: SleepSessionClose, request: Request
) -> dict[str, object]:
    """Log the wake time of an open session."""
    container: AppContainer = request.app.state.container
    session = container.sleep_service.close_session(
        user_id, session_id, payload.end, payload.quality
    )
    return _serialize_session(session)


@router.delete(
    "/{user_id}/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_session(user_id: UUID, session_id: UUID, request: Request) -> Response:
    """Delete a session."""
    container: AppContainer = request.app.state.container
    container.sleep_service.delete_session(user_id, session_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _serialize_session(session: SleepSession) -> dict[str, object]:
    return {
        "id": str(session.id),
        "start": session.start.isoformat(),
        "end": session.end.isoformat() if session.end else None,
        "quality": session.quality,
    }


def _serialize_day(slot: DaySlot) -> dict[str, object]:
    return {
        "date": slot.day.isoformat(),
        "minutes_asleep": slot.minutes_asleep,
        "hours": round_for_display(slot.hours),
        "mean_quality": (
            float(slot.mean_quality) if slot.mean_quality is not None else None
        ),
    }


def _serialize_report(report: WeekReport, can_go_forward: bool) -> dict[str, object]:
    window = report.window
    statistics = report.statistics
    return {
        "week": {
            "start": window.start.isoformat(),
            "end": window.end.isoformat(),
            "previous_reference": previous_week(window).days[0].isoformat(),
            "next_reference": next_week(window).days[0].isoformat(),
            "can_go_forward": can_go_forward,
        },
        "days": [_serialize_day(slot) for slot in report.days],
        "statistics": {
            "mean_hours": statistics.display_mean_hours,
            "mean_quality": statistics.display_mean_quality,
            "best_day": _serialize_day(statistics.best_day)
            if statistics.best_day
            else None,
            "worst_day": _serialize_day(statistics.worst_day)
            if statistics.worst_day
            else None,
        },
    }
