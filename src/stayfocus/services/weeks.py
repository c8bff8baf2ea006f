"""Calendar week resolution and navigation."""

from datetime import date, datetime, time, timedelta, tzinfo

from stayfocus.domain.sleep import WeekWindow

SUNDAY = 0
DAYS_IN_WEEK = 7
END_OF_DAY = time(23, 59, 59, 999000)


def resolve_week(
    reference: date | datetime,
    tz: tzinfo | None = None,
    week_start: int = SUNDAY,
) -> WeekWindow:
    """Return the week containing ``reference``.

    ``week_start`` uses 0 for Sunday through 6 for Saturday. Aware datetimes are
    converted to ``tz`` before taking their calendar date; the window bounds
    carry ``tz`` (or the reference's own tzinfo when ``tz`` is omitted).
    """
    if isinstance(reference, datetime):
        if tz is not None and reference.tzinfo is not None:
            reference = reference.astimezone(tz)
        zone = tz if tz is not None else reference.tzinfo
        reference_day = reference.date()
    else:
        zone = tz
        reference_day = reference

    offset = (_weekday_from_sunday(reference_day) - week_start) % DAYS_IN_WEEK
    first_day = reference_day - timedelta(days=offset)
    days = tuple(first_day + timedelta(days=n) for n in range(DAYS_IN_WEEK))
    start, _ = day_bounds(days[0], zone)
    _, end = day_bounds(days[-1], zone)
    return WeekWindow(start=start, end=end, days=days)


def previous_week(window: WeekWindow) -> WeekWindow:
    """Return the week immediately before ``window``."""
    return _shift(window, -DAYS_IN_WEEK)


def next_week(window: WeekWindow) -> WeekWindow:
    """Return the week immediately after ``window``."""
    return _shift(window, DAYS_IN_WEEK)


def can_navigate_forward(window: WeekWindow, now: datetime) -> bool:
    """Return True when the following week has at least started by ``now``."""
    return now > window.end


def day_bounds(day: date, tz: tzinfo | None = None) -> tuple[datetime, datetime]:
    """Return local midnight and the last instant of ``day``."""
    return (
        datetime.combine(day, time.min, tzinfo=tz),
        datetime.combine(day, END_OF_DAY, tzinfo=tz),
    )


def _shift(window: WeekWindow, days: int) -> WeekWindow:
    first_day = window.days[0]
    return resolve_week(
        first_day + timedelta(days=days),
        tz=window.start.tzinfo,
        week_start=_weekday_from_sunday(first_day),
    )


def _weekday_from_sunday(day: date) -> int:
    return (day.weekday() + 1) % DAYS_IN_WEEK
