"""Tests for sleep endpoints."""

from datetime import UTC, datetime
from uuid import uuid4

from fastapi.testclient import TestClient

from stayfocus.api.app import create_app
from stayfocus.domain.sleep import SleepSession

HEADERS = {"X-Api-Token": "api-token"}


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_sleep_endpoints_require_token(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(f"/sleep/{uuid4()}/week")

    assert response.status_code == 401


def test_week_endpoint_reports_days_and_statistics(
    container, sleep_repository
) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()
    sleep_repository.add(
        user_id,
        SleepSession(
            id=uuid4(),
            start=datetime(2024, 1, 1, 23, 0, tzinfo=UTC),
            end=datetime(2024, 1, 2, 7, 0, tzinfo=UTC),
            quality=5,
        ),
    )
    sleep_repository.add(
        user_id,
        SleepSession(
            id=uuid4(),
            start=datetime(2024, 1, 2, 22, 0, tzinfo=UTC),
            end=datetime(2024, 1, 3, 6, 30, tzinfo=UTC),
            quality=3,
        ),
    )

    response = client.get(f"/sleep/{user_id}/week", headers=HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert data["week"]["start"] == "2023-12-31T00:00:00+00:00"
    assert data["week"]["previous_reference"] == "2023-12-24"
    assert data["week"]["next_reference"] == "2024-01-07"
    assert data["week"]["can_go_forward"] is False
    assert [day["minutes_asleep"] for day in data["days"]] == [
        0,
        60,
        540,
        390,
        0,
        0,
        0,
    ]
    assert data["days"][2]["mean_quality"] == 4.0
    assert data["days"][2]["hours"] == 9.0
    assert data["statistics"]["mean_hours"] == 5.5
    assert data["statistics"]["mean_quality"] == 4.0
    assert data["statistics"]["best_day"]["date"] == "2024-01-02"
    assert data["statistics"]["worst_day"]["date"] == "2024-01-01"


def test_week_endpoint_accepts_past_reference(container) -> None:
    client = TestClient(create_app(container))

    response = client.get(
        f"/sleep/{uuid4()}/week",
        params={"reference": "2023-12-20"},
        headers=HEADERS,
    )

    assert response.status_code == 200
    data = response.json()
    assert data["week"]["start"].startswith("2023-12-17")
    assert data["week"]["can_go_forward"] is True
    assert data["statistics"] == {
        "mean_hours": 0.0,
        "mean_quality": None,
        "best_day": None,
        "worst_day": None,
    }


def test_session_lifecycle_endpoints(container) -> None:
    client = TestClient(create_app(container))
    user_id = uuid4()

    started = client.post(
        f"/sleep/{user_id}/sessions",
        json={"start": "2024-01-02T23:00:00+00:00"},
        headers=HEADERS,
    )
    assert started.status_code == 201
    session_id = started.json()["id"]
    assert started.json()["end"] is None

    conflict = client.post(
        f"/sleep/{user_id}/sessions",
        json={"start": "2024-01-03T01:00:00+00:00"},
        headers=HEADERS,
    )
    assert conflict.status_code == 409

    closed = client.post(
        f"/sleep/{user_id}/sessions/{session_id}/close",
        json={"end": "2024-01-03T07:00:00+00:00", "quality": 4},
        headers=HEADERS,
    )
    assert closed.status_code == 200
    assert closed.json()["quality"] == 4

    deleted = client.delete(f"/sleep/{user_id}/sessions/{session_id}", headers=HEADERS)
    assert deleted.status_code == 204

    missing = client.delete(f"/sleep/{user_id}/sessions/{session_id}", headers=HEADERS)
    assert missing.status_code == 404


def test_log_session_rejects_inverted_interval(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/sleep/{uuid4()}/sessions",
        json={
            "start": "2024-01-03T07:00:00+00:00",
            "end": "2024-01-02T23:00:00+00:00",
        },
        headers=HEADERS,
    )

    assert response.status_code == 422


def test_quality_out_of_range_is_rejected(container) -> None:
    client = TestClient(create_app(container))

    response = client.post(
        f"/sleep/{uuid4()}/sessions",
        json={"start": "2024-01-02T23:00:00+00:00", "quality": 9},
        headers=HEADERS,
    )

    assert response.status_code == 422
