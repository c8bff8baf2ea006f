"""Reminder endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response, status

from stayfocus.api.auth import require_api_token
from stayfocus.api.models import ReminderPayload

if TYPE_CHECKING:
    from stayfocus.containers import AppContainer
    from stayfocus.domain.reminders import Reminder

router = APIRouter(
    prefix="/sleep", tags=["reminders"], dependencies=[Depends(require_api_token)]
)


@router.get("/{user_id}/reminders")
async def list_reminders(user_id: UUID, request: Request) -> dict[str, object]:
    """Return the user's reminders, bedtime first."""
    container: AppContainer = request.app.state.container
    reminders = container.reminder_service.list_reminders(user_id)
    return {"reminders": [_serialize_reminder(reminder) for reminder in reminders]}


@router.post("/{user_id}/reminders", status_code=status.HTTP_201_CREATED)
async def create_reminder(
    user_id: UUID, payload: ReminderPayload, request: Request
) -> dict[str, object]:
    """Create an active reminder."""
    container: AppContainer = request.app.state.container
    reminder = container.reminder_service.create_reminder(
        user_id, payload.kind, payload.remind_at, payload.weekdays
    )
    return _serialize_reminder(reminder)


@router.put("/{user_id}/reminders/{reminder_id}")
async def update_reminder(
    user_id: UUID, reminder_id: UUID, payload: ReminderPayload, request: Request
) -> dict[str, object]:
    """Replace a reminder's schedule."""
    container: AppContainer = request.app.state.container
    reminder = container.reminder_service.update_reminder(
        user_id, reminder_id, payload.kind, payload.remind_at, payload.weekdays
    )
    return _serialize_reminder(reminder)


@router.post("/{user_id}/reminders/{reminder_id}/toggle")
async def toggle_reminder(
    user_id: UUID, reminder_id: UUID, request: Request
) -> dict[str, object]:
    """Pause or resume a reminder."""
    container: AppContainer = request.app.state.container
    reminder = container.reminder_service.toggle_reminder(user_id, reminder_id)
    return _serialize_reminder(reminder)


@router.delete(
    "/{user_id}/reminders/{reminder_id}", status_code=status.HTTP_204_NO_CONTENT
)
async def delete_reminder(
    user_id: UUID, reminder_id: UUID, request: Request
) -> Response:
    """Delete a reminder."""
    container: AppContainer = request.app.state.container
    container.reminder_service.delete_reminder(user_id, reminder_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


def _serialize_reminder(reminder: Reminder) -> dict[str, object]:
    return {
        "id": str(reminder.id),
        "kind": reminder.kind.value,
        "remind_at": reminder.time.strftime("%H:%M"),
        "weekdays": list(reminder.weekdays),
        "active": reminder.active,
    }
