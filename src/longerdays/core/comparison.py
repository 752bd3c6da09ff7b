"""Daily change, cumulative change and velocity of daylight duration."""
from datetime import date, timedelta, timezone, tzinfo
from typing import List, Optional, Tuple
import logging

from .daylight import Daylight
from .seasons import SeasonalCalendar
from ..errors import MissingReferenceError, UndefinedCrossingError
from ..model.geo import GeoCoordinate
from ..model.snapshots import ComparisonOutcome, ComparisonResult, DaylightSnapshot

logger = logging.getLogger(__name__)


def _difference(earlier: date, later: date, coordinate: GeoCoordinate, tz: tzinfo) -> Optional[int]:
  daylight = Daylight(coordinate, tz)
  a = daylight.duration(earlier)
  b = daylight.duration(later)
  if a is None or b is None:
    return None
  return b - a


def daily_change_seconds(previous: date, current: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> Optional[int]:
  return _difference(previous, current, coordinate, tz)


def cumulative_change_seconds(since: date, to: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> Optional[int]:
  return _difference(since, to, coordinate, tz)


def daylight_velocity(day: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> Optional[int]:
  """Seconds per day, central difference over the day before and after."""
  change = _difference(day - timedelta(days=1), day + timedelta(days=1), coordinate, tz)
  if change is None:
    return None
  # Truncate toward zero like the stored whole-second durations
  return int(change / 2.0)


def recent_history(days: int, ending_on: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> List[Tuple[date, int]]:
  """(day, daily change) for the last `days` days, oldest first; unavailable days are skipped."""
  out = []
  for i in range(days - 1, -1, -1):
    target = ending_on - timedelta(days=i)
    change = daily_change_seconds(target - timedelta(days=1), target, coordinate, tz)
    if change is not None:
      out.append((target, change))
  return out


def velocity_fraction(velocity: int, peak: int) -> float:
  """Share of the peak rate reached, clamped to [0, 1]; 0 when the peak is zero."""
  if peak == 0:
    return 0.0
  return min(1.0, max(0.0, abs(velocity) / abs(peak)))


class DaylightComparisonEngine:
  """Builds a ComparisonResult for a day from optional cached snapshots.

  The engine never writes the snapshots back; when it had to recompute the
  solstice reference it hands the fresh snapshot to the caller in
  ComparisonOutcome.persist_solstice.
  """

  def __init__(self, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc, calendar: Optional[SeasonalCalendar] = None):
    self.coordinate = coordinate
    self.tz = tz
    self.calendar = calendar or SeasonalCalendar(tz)
    self.daylight = Daylight(coordinate, tz)

  def _snapshot(self, day: date, what: str) -> DaylightSnapshot:
    try:
      return self.daylight.require(day)
    except UndefinedCrossingError as e:
      raise MissingReferenceError(f"{what} daylight unavailable for {day.isoformat()}") from e

  def compare(
    self,
    today: date,
    yesterday: Optional[DaylightSnapshot] = None,
    solstice: Optional[DaylightSnapshot] = None,
  ) -> ComparisonOutcome:
    current = self._snapshot(today, "today's")

    prev_day = today - timedelta(days=1)
    if yesterday is not None and yesterday.day == prev_day:
      previous_seconds = yesterday.daylight_seconds
    else:
      logger.debug(f"No cached snapshot for {prev_day}, recomputing")
      previous_seconds = self._snapshot(prev_day, "yesterday's").daylight_seconds

    instant, solstice_type = self.calendar.most_recent_solstice(today)
    solstice_day = self.calendar.event_day(instant)
    persist = None
    if solstice is not None and solstice.day == solstice_day:
      solstice_seconds = solstice.daylight_seconds
    else:
      persist = self._snapshot(solstice_day, "solstice")
      solstice_seconds = persist.daylight_seconds
      logger.debug(f"Recomputed {solstice_type.value} solstice reference for {solstice_day}")

    result = ComparisonResult(
      daily_change_seconds=current.daylight_seconds - previous_seconds,
      cumulative_change_seconds=current.daylight_seconds - solstice_seconds,
      season=self.calendar.classify(today),
      reference_solstice_date=solstice_day,
      reference_solstice_type=solstice_type,
    )
    return ComparisonOutcome(result=result, persist_solstice=persist)

  def velocity(self, day: date) -> int:
    v = daylight_velocity(day, self.coordinate, self.tz)
    if v is None:
      raise MissingReferenceError(f"Velocity unavailable around {day.isoformat()}")
    return v

  def peak_velocity(self, day: date) -> Tuple[date, int]:
    """(equinox day, |velocity| on it) for the half-year containing day."""
    instant, _ = self.calendar.peak_equinox(day)
    peak_day = self.calendar.event_day(instant)
    return peak_day, abs(self.velocity(peak_day))
