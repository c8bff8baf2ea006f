"""Weekly sleep aggregation.

Sessions are clipped to each day of a week window so that a night that starts
before midnight is split between the two days it touches. Open sessions run
until the supplied ``now``; nothing here reads the clock.
"""

from collections.abc import Sequence
from datetime import UTC, date, datetime, timedelta, tzinfo
from fractions import Fraction

from stayfocus.domain.sleep import DaySlot, SleepSession, WeekStatistics, WeekWindow
from stayfocus.services.weeks import day_bounds

IDEAL_SLEEP_HOURS = 8

_MICROSECONDS_PER_MINUTE = 60_000_000

_Interval = tuple[datetime, datetime, int | None]


def aggregate_week(
    sessions: Sequence[SleepSession],
    window: WeekWindow,
    now: datetime,
    *,
    ideal_hours: float | Fraction = IDEAL_SLEEP_HOURS,
) -> tuple[list[DaySlot], WeekStatistics]:
    """Return per-day slots for ``window`` and the statistics derived from them.

    Sessions whose end is not after their start are skipped entirely. Naive
    timestamps are read in the window's zone; a naive window takes the zone of
    the first aware timestamp, so naive and aware inputs can be mixed.
    """
    zone = window.start.tzinfo or _first_zone(sessions, now)
    now = _localize(now, zone)
    intervals = _usable_intervals(sessions, now, zone)
    days = [_day_slot(day, intervals, zone) for day in window.days]
    return days, summarize_week(days, ideal_hours=ideal_hours)


def summarize_week(
    days: Sequence[DaySlot],
    *,
    ideal_hours: float | Fraction = IDEAL_SLEEP_HOURS,
) -> WeekStatistics:
    """Compute mean hours, mean quality and best/worst day over sleeping days."""
    sleeping = sorted((slot for slot in days if slot.minutes_asleep > 0), key=_by_day)
    if not sleeping:
        return WeekStatistics(mean_hours=Fraction(0))

    mean_hours = sum((slot.hours for slot in sleeping), Fraction(0)) / len(sleeping)
    qualities = [slot.mean_quality for slot in sleeping if slot.mean_quality is not None]
    mean_quality = (
        sum(qualities, Fraction(0)) / len(qualities) if qualities else None
    )

    ideal = Fraction(ideal_hours)

    def distance(slot: DaySlot) -> Fraction:
        return abs(slot.hours - ideal)

    # min/max keep the first of equal keys, so ties go to the earliest day.
    return WeekStatistics(
        mean_hours=mean_hours,
        mean_quality=mean_quality,
        best_day=min(sleeping, key=distance),
        worst_day=max(sleeping, key=distance),
    )


def _usable_intervals(
    sessions: Sequence[SleepSession], now: datetime, zone: tzinfo | None
) -> list[_Interval]:
    intervals: list[_Interval] = []
    for session in sessions:
        if not session.is_well_formed:
            continue
        start = _localize(session.start, zone)
        end = _localize(session.effective_end(now), zone)
        if end <= start:
            # Open session that starts after ``now``.
            continue
        intervals.append((start, end, session.quality))
    return intervals


def _day_slot(day: date, intervals: list[_Interval], zone: tzinfo | None) -> DaySlot:
    day_start, day_end = day_bounds(day, zone)
    asleep = timedelta(0)
    qualities: list[int] = []
    for start, end, quality in intervals:
        if end < day_start or start > day_end:
            continue
        clipped_start = max(start, day_start)
        clipped_end = min(end, day_end)
        if clipped_end > clipped_start:
            asleep += _elapsed(clipped_start, clipped_end)
        if quality is not None:
            qualities.append(quality)

    return DaySlot(
        day=day,
        minutes_asleep=_nearest_minute(asleep),
        mean_quality=Fraction(sum(qualities), len(qualities)) if qualities else None,
    )


def _nearest_minute(duration: timedelta) -> int:
    micros = duration // timedelta(microseconds=1)
    return max(0, (micros + _MICROSECONDS_PER_MINUTE // 2) // _MICROSECONDS_PER_MINUTE)


def _elapsed(start: datetime, end: datetime) -> timedelta:
    # Same-tzinfo subtraction ignores DST shifts, so measure in UTC.
    if start.tzinfo is not None and end.tzinfo is not None:
        return end.astimezone(UTC) - start.astimezone(UTC)
    return end - start


def _localize(moment: datetime, zone: tzinfo | None) -> datetime:
    if moment.tzinfo is None and zone is not None:
        return moment.replace(tzinfo=zone)
    return moment


def _by_day(slot: DaySlot) -> date:
    return slot.day


def _first_zone(sessions: Sequence[SleepSession], now: datetime) -> tzinfo | None:
    moments = [now]
    for session in sessions:
        moments.append(session.start)
        if session.end is not None:
            moments.append(session.end)
    return next((moment.tzinfo for moment in moments if moment.tzinfo is not None), None)
