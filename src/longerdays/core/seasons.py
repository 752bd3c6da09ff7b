"""Solstices, equinoxes and the gaining/losing half-years.

Event instants come from the Meeus mean equinox polynomials (valid for years
1000-3000) truncated to second order. Every query runs against one ordered list
of candidate events spanning the previous, current and next calendar year, so
the year boundary is handled in a single place.
"""
from datetime import date, datetime, timedelta, timezone, tzinfo
from functools import lru_cache
from typing import List, Optional, Tuple, Union

from .daylight import local_midnight
from ..model.seasons import (
  EquinoxType,
  SeasonalYear,
  SeasonClassification,
  SolsticeType,
)

When = Union[date, datetime]

JD_UNIX_EPOCH = 2440587.5

# (constant, linear, quadratic) in Y = (year - 2000) / 1000
_JDE_TERMS = {
  EquinoxType.SPRING: (2451623.80984, 365242.37404, 0.05169),
  SolsticeType.SUMMER: (2451716.56767, 365241.62603, 0.00325),
  EquinoxType.FALL: (2451810.21715, 365242.01767, -0.11575),
  SolsticeType.WINTER: (2451900.05952, 365242.74049, -0.06223),
}


def julian_day_to_datetime(jd: float) -> datetime:
  return datetime(1970, 1, 1, tzinfo=timezone.utc) + timedelta(days=jd - JD_UNIX_EPOCH)


def event_jde(year: int, kind) -> float:
  a, b, c = _JDE_TERMS[kind]
  y = (year - 2000) / 1000.0
  return a + b * y + c * y * y


@lru_cache(maxsize=64)
def seasonal_year(year: int) -> SeasonalYear:
  return SeasonalYear(
    year=year,
    spring_equinox=julian_day_to_datetime(event_jde(year, EquinoxType.SPRING)),
    summer_solstice=julian_day_to_datetime(event_jde(year, SolsticeType.SUMMER)),
    fall_equinox=julian_day_to_datetime(event_jde(year, EquinoxType.FALL)),
    winter_solstice=julian_day_to_datetime(event_jde(year, SolsticeType.WINTER)),
  )


class SeasonalCalendar:
  """Season and countdown queries.

  A plain date is compared at calendar-day granularity in the calendar's
  timezone: the day an event falls on already belongs to the period that event
  starts. An aware datetime is compared as an instant.
  """

  def __init__(self, tz: tzinfo = timezone.utc):
    self.tz = tz

  def seasonal_year(self, year: int) -> SeasonalYear:
    return seasonal_year(year)

  def event_day(self, instant: datetime) -> date:
    return instant.astimezone(self.tz).date()

  def _year_of(self, when: When) -> int:
    if isinstance(when, datetime):
      if when.tzinfo is None or when.utcoffset() is None:
        raise ValueError(f"Naive datetime {when.isoformat()} is ambiguous; pass an aware datetime or a date")
      return when.astimezone(self.tz).year
    return when.year

  def _not_after(self, instant: datetime, when: When) -> bool:
    if isinstance(when, datetime):
      return instant <= when
    return self.event_day(instant) <= when

  def _candidates(self, when: When, kinds: Tuple[type, ...]) -> List[Tuple[datetime, object]]:
    year = self._year_of(when)
    events = []
    for y in (year - 1, year, year + 1):
      events.extend((t, k) for t, k in seasonal_year(y).events() if isinstance(k, kinds))
    return events

  def _latest_at_or_before(self, when: When, kinds) -> Tuple[datetime, object]:
    found = None
    for instant, kind in self._candidates(when, kinds):
      if self._not_after(instant, when):
        found = (instant, kind)
    # Previous year's events always precede when, so found is set
    return found

  def _earliest_after(self, when: When, kinds) -> Optional[Tuple[datetime, object]]:
    for instant, kind in self._candidates(when, kinds):
      if not self._not_after(instant, when):
        return instant, kind
    return None

  def _days_between(self, when: When, instant: datetime) -> int:
    start = when.astimezone(self.tz).date() if isinstance(when, datetime) else when
    return (self.event_day(instant) - start).days

  def most_recent_solstice(self, when: When) -> Tuple[datetime, SolsticeType]:
    return self._latest_at_or_before(when, (SolsticeType,))

  def next_solstice(self, when: When) -> Optional[Tuple[datetime, SolsticeType]]:
    return self._earliest_after(when, (SolsticeType,))

  def next_equinox(self, when: When) -> Optional[Tuple[datetime, EquinoxType]]:
    return self._earliest_after(when, (EquinoxType,))

  def classify(self, when: When) -> SeasonClassification:
    _, kind = self.most_recent_solstice(when)
    if kind is SolsticeType.WINTER:
      return SeasonClassification.GAINING_DAYLIGHT
    return SeasonClassification.LOSING_DAYLIGHT

  def days_until_solstice(self, when: When) -> Optional[Tuple[int, SolsticeType]]:
    nxt = self.next_solstice(when)
    if nxt is None:
      return None
    return self._days_between(when, nxt[0]), nxt[1]

  def days_until_equinox(self, when: When) -> Optional[Tuple[int, EquinoxType]]:
    nxt = self.next_equinox(when)
    if nxt is None:
      return None
    return self._days_between(when, nxt[0]), nxt[1]

  def days_since_solstice(self, when: When) -> int:
    instant, _ = self.most_recent_solstice(when)
    return -self._days_between(when, instant)

  def is_solstice(self, day: date) -> Optional[SolsticeType]:
    sy = seasonal_year(day.year)
    if self.event_day(sy.winter_solstice) == day:
      return SolsticeType.WINTER
    if self.event_day(sy.summer_solstice) == day:
      return SolsticeType.SUMMER
    return None

  def following_spring_equinox(self, when: When) -> datetime:
    """Spring equinox inside the gaining half-year that contains or follows when."""
    # Either way the next spring equinox falls in the year after the solstice
    start, _ = self.most_recent_solstice(when)
    return seasonal_year(start.year + 1).spring_equinox

  def peak_equinox(self, when: When) -> Tuple[datetime, EquinoxType]:
    """Equinox inside the half-year containing when: spring while gaining, fall while losing."""
    start, kind = self.most_recent_solstice(when)
    if kind is SolsticeType.WINTER:
      return seasonal_year(start.year + 1).spring_equinox, EquinoxType.SPRING
    return seasonal_year(start.year).fall_equinox, EquinoxType.FALL

  def half_year_bounds(self, when: When) -> Tuple[datetime, datetime]:
    start, _ = self.most_recent_solstice(when)
    end = self._earliest_after(start, (SolsticeType,))
    return start, end[0]

  def progress_through_half_year(self, when: When) -> float:
    start, end = self.half_year_bounds(when)
    if isinstance(when, datetime):
      instant = when
    else:
      instant = local_midnight(when, self.tz)
    total = (end - start).total_seconds()
    progress = (instant - start).total_seconds() / total
    return max(0.0, min(1.0, progress))

  def should_pause_for_summer(self, when: When, summer_mode_enabled: bool) -> bool:
    if not summer_mode_enabled:
      return False
    return self.classify(when) is SeasonClassification.LOSING_DAYLIGHT
