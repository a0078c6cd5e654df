"""
Temporal and seasonality model.

Produces historically distributed timestamps:
- recency bias: days back = window * u ** (1 + 2 * bias), so higher bias
  pulls dates toward the reference date
- seasonality: dates falling in a low period are kept with probability equal
  to the period's multiplier, otherwise moved into the first two weeks of a
  random spike period
- regional business hours, with APAC wrapping across midnight UTC
- index-based boundary dates (leap days, year edges, US DST transitions)
  that override whatever the sampler would have produced; they are derived
  from the history window so any reference date yields in-window edges

Every sampled date lies in [window_start, current_date).
"""

from __future__ import annotations

import calendar
from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .sampling import WeightedSampler


@dataclass(frozen=True)
class SeasonalPeriod:
    """Recurring calendar window with a volume multiplier (>1 spike, <1 lull)."""

    reason: str
    start_month: int
    start_day: int
    end_month: int
    end_day: int
    multiplier: float

    def contains(self, day: date) -> bool:
        start = (self.start_month, self.start_day)
        end = (self.end_month, self.end_day)
        current = (day.month, day.day)
        if start <= end:
            return start <= current <= end
        # Window wraps over the year end
        return current >= start or current <= end


SPIKE_PERIODS: tuple[SeasonalPeriod, ...] = (
    SeasonalPeriod("post_holiday", 1, 2, 2, 15, 1.4),
    SeasonalPeriod("q1_reorg", 3, 1, 3, 31, 1.3),
    SeasonalPeriod("midyear_review", 6, 15, 7, 31, 1.25),
    SeasonalPeriod("policy_changes", 9, 1, 9, 30, 1.35),
    SeasonalPeriod("yearend_stress", 11, 15, 12, 20, 1.2),
)

LOW_PERIODS: tuple[SeasonalPeriod, ...] = (
    SeasonalPeriod("summer_lull", 7, 1, 8, 15, 0.7),
    SeasonalPeriod("holiday_break", 12, 21, 12, 31, 0.5),
)

BASE_MULTIPLIER = 1.0

# (edge case, first index, count)
EDGE_CASE_RANGES: tuple[tuple[str, int, int], ...] = (
    ("long", 100, 50),
    ("unicode", 200, 100),
    ("boundary_date", 500, 20),
    ("minimal", 1000, 10),
)

# Business hours in UTC: (start hour, end hour)
BUSINESS_HOURS_UTC: dict[str, tuple[int, int]] = {
    "AMERICAS": (13, 23),
    "EMEA": (7, 17),
    "APAC": (23, 9),
}


def edge_case_for(index: int) -> str | None:
    """Edge-case kind forced at a generation index, if any."""
    for kind, first, count in EDGE_CASE_RANGES:
        if first <= index < first + count:
            return kind
    return None


def nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """n-th occurrence (1-based) of a weekday (Monday=0) in a month."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def boundary_dates(start: date, end: date) -> list[date]:
    """
    Leap days, Jan 1 / Dec 31 and US DST transitions (second Sunday of
    March, first Sunday of November) in [start, end), chronologically.
    """
    found = []
    for year in range(start.year, end.year + 1):
        candidates = [
            date(year, 1, 1),
            nth_weekday(year, 3, calendar.SUNDAY, 2),
            nth_weekday(year, 11, calendar.SUNDAY, 1),
            date(year, 12, 31),
        ]
        if calendar.isleap(year):
            candidates.append(date(year, 2, 29))
        found.extend(d for d in candidates if start <= d < end)
    return sorted(found)


def seasonality(day: date) -> tuple[float, str | None]:
    """Multiplier and reason for a date; spike periods take precedence."""
    for period in SPIKE_PERIODS:
        if period.contains(day):
            return period.multiplier, period.reason
    for period in LOW_PERIODS:
        if period.contains(day):
            return period.multiplier, period.reason
    return BASE_MULTIPLIER, None


class TemporalEngine:
    """
    Timestamp generator bound to one phase's sampler.

    Args:
        sampler: Phase-scoped WeightedSampler
        current_date: Reference "now" (never exceeded)
        history_years: Length of the historical window
    """

    def __init__(
        self,
        sampler: WeightedSampler,
        current_date: datetime,
        history_years: int,
    ) -> None:
        self.sampler = sampler
        self.current_date = current_date
        self.history_days = 365 * history_years
        self.window_start = current_date - timedelta(days=self.history_days)
        self.boundary_dates = boundary_dates(self.window_start.date(), current_date.date())

    def boundary_date_for(self, index: int) -> date | None:
        """Edge date forced at a generation index, or None outside the boundary range."""
        if not self.boundary_dates:
            return None
        for kind, first, count in EDGE_CASE_RANGES:
            if kind == "boundary_date" and first <= index < first + count:
                return self.boundary_dates[(index - first) % len(self.boundary_dates)]
        return None

    def in_window(self, moment: datetime) -> bool:
        return self.window_start.date() <= moment.date() < self.current_date.date()

    def seasonality_multiplier(self, day: date) -> float:
        return seasonality(day)[0]

    def clamp(self, moment: datetime) -> datetime:
        return moment if moment <= self.current_date else self.current_date

    def sample_historical_date(self, recency_bias: float = 0.3) -> datetime:
        """
        Midnight of a day inside the history window, strictly before the
        reference date.
        """
        exponent = 1.0 + 2.0 * recency_bias
        fraction = self.sampler.random() ** exponent
        days_back = 1 + int((self.history_days - 1) * fraction)
        base = (self.current_date - timedelta(days=days_back)).replace(
            hour=0, minute=0, second=0, microsecond=0
        )
        return self.apply_seasonality(base)

    def apply_seasonality(self, moment: datetime) -> datetime:
        multiplier, _ = seasonality(moment.date())
        if multiplier >= BASE_MULTIPLIER:
            return moment
        if self.sampler.chance(multiplier / BASE_MULTIPLIER):
            return moment

        spike = self.sampler.choice(SPIKE_PERIODS)
        offset = self.sampler.randint(0, 13)
        shifted = datetime(moment.year, spike.start_month, spike.start_day) + timedelta(days=offset)
        if shifted.date() >= self.current_date.date():
            shifted = shifted.replace(year=shifted.year - 1)
        elif shifted.date() < self.window_start.date():
            shifted = shifted.replace(year=shifted.year + 1)
        # Near either window edge the spike may not fit; the lull date stays
        if not self.in_window(shifted):
            return moment
        return shifted

    def adjust_for_region(self, moment: datetime, region: str) -> datetime:
        """Move a timestamp into the region's business hours (UTC)."""
        if region not in BUSINESS_HOURS_UTC:
            raise ValueError(f"Unknown reporting region '{region}'")
        start, end = BUSINESS_HOURS_UTC[region]
        if start > end:
            # Window crosses midnight UTC: late evening or early morning
            hour = start if self.sampler.chance(0.5) else self.sampler.randint(0, end)
        else:
            hour = self.sampler.randint(start, end)
        minute = self.sampler.randint(0, 59)
        return moment.replace(hour=hour, minute=minute, second=0, microsecond=0)

    def days_ago(self, days: int) -> datetime:
        return self.current_date - timedelta(days=days)
