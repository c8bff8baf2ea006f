"""Domain models for sleep sessions and weekly summaries."""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal
from fractions import Fraction
from uuid import UUID

MIN_QUALITY = 1
MAX_QUALITY = 5


@dataclass(frozen=True)
class SleepSession:
    """A logged sleep interval; ``end`` is None while the sleeper is still in bed."""

    id: UUID
    start: datetime
    end: datetime | None = None
    quality: int | None = None

    @property
    def is_open(self) -> bool:
        """Return True when no wake time has been logged yet."""
        return self.end is None

    @property
    def is_well_formed(self) -> bool:
        """Return False for closed sessions that do not end after they start."""
        return self.end is None or self.end > self.start

    def effective_end(self, now: datetime) -> datetime:
        """Return the logged end, or ``now`` for an open session."""
        return self.end if self.end is not None else now


@dataclass(frozen=True)
class DaySlot:
    """Sleep totals for a single calendar day."""

    day: date
    minutes_asleep: int
    mean_quality: Fraction | None = None

    @property
    def hours(self) -> Fraction:
        return Fraction(self.minutes_asleep, 60)


@dataclass(frozen=True)
class WeekWindow:
    """A Sunday-start calendar week in local time."""

    start: datetime
    end: datetime
    days: tuple[date, ...]


@dataclass(frozen=True)
class WeekStatistics:
    """Week-level statistics derived from the day slots."""

    mean_hours: Fraction
    mean_quality: Fraction | None = None
    best_day: DaySlot | None = None
    worst_day: DaySlot | None = None

    @property
    def display_mean_hours(self) -> float:
        return round_for_display(self.mean_hours)

    @property
    def display_mean_quality(self) -> float | None:
        if self.mean_quality is None:
            return None
        return round_for_display(self.mean_quality)


@dataclass(frozen=True)
class WeekReport:
    """Everything a week view needs: the window, its days and statistics."""

    window: WeekWindow
    days: list[DaySlot]
    statistics: WeekStatistics


def round_for_display(value: Fraction | int, places: int = 1) -> float:
    """Round half-up to ``places`` decimals for reporting."""
    exact = Decimal(value.numerator) / Decimal(value.denominator)
    quantum = Decimal(1).scaleb(-places)
    return float(exact.quantize(quantum, rounding=ROUND_HALF_UP))
