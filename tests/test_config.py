"""Tests for configuration helpers."""

from zoneinfo import ZoneInfo

import pytest

from stayfocus.config import Settings, resolve_timezone


def test_settings_defaults(settings: Settings) -> None:
    assert settings.timezone == "UTC"
    assert settings.ideal_sleep_hours == 8.0


def test_resolve_timezone_known_zone() -> None:
    assert resolve_timezone("America/Sao_Paulo") == ZoneInfo("America/Sao_Paulo")


def test_resolve_timezone_blank_defaults_to_utc() -> None:
    assert resolve_timezone("  ") == ZoneInfo("UTC")


def test_resolve_timezone_unknown_zone() -> None:
    with pytest.raises(ValueError, match="Unknown timezone"):
        resolve_timezone("Mars/Olympus_Mons")
