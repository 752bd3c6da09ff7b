"""Milestone achievement state and projected dates for the gaining half-year."""
from datetime import date, timedelta, timezone, tzinfo
from typing import Callable, Iterable, Iterator, List, Optional, Tuple
import logging
import sys

from .comparison import cumulative_change_seconds, daylight_velocity
from .daylight import Daylight, seconds_after_midnight
from .seasons import SeasonalCalendar
from .timebase import day_span, walk_days
from ..errors import MissingReferenceError, ProjectionHorizonExceededError
from ..model.config import MilestoneSettings
from ..model.geo import GeoCoordinate
from ..model.milestones import Milestone, MilestoneType
from ..model.seasons import SeasonClassification
from ..model.snapshots import DaylightSnapshot

logger = logging.getLogger(__name__)

PEAK_SEARCH_DAYS = 10

_GAIN_HOURS = {
  MilestoneType.ONE_HOUR_GAINED: 1,
  MilestoneType.TWO_HOURS_GAINED: 2,
}


def sort_milestones(milestones: Iterable[Milestone]) -> List[Milestone]:
  """Achieved first (most recent first), then pending (soonest first)."""
  achieved = [m for m in milestones if m.is_achieved]
  pending = [m for m in milestones if not m.is_achieved]
  achieved.sort(key=lambda m: m.achieved_date, reverse=True)
  pending.sort(key=lambda m: m.days_until if m.days_until is not None else sys.maxsize)
  return achieved + pending


class MilestoneProjector:
  def __init__(
    self,
    coordinate: GeoCoordinate,
    tz: tzinfo = timezone.utc,
    settings: Optional[MilestoneSettings] = None,
    calendar: Optional[SeasonalCalendar] = None,
  ):
    self.coordinate = coordinate
    self.tz = tz
    self.settings = settings or MilestoneSettings()
    self.calendar = calendar or SeasonalCalendar(tz)
    self.daylight = Daylight(coordinate, tz)
    self._builders = {
      MilestoneType.TEN_HOURS_DAYLIGHT: self._ten_hours,
      MilestoneType.ONE_HOUR_GAINED: self._hours_gained,
      MilestoneType.TWO_HOURS_GAINED: self._hours_gained,
      MilestoneType.MORE_LIGHT_THAN_DARK: self._more_light_than_dark,
      MilestoneType.EARLIEST_SUNSET_BEHIND: self._earliest_sunset,
      MilestoneType.LATEST_SUNRISE_BEHIND: self._latest_sunrise,
      MilestoneType.PEAK_GAIN_RATE: self._peak_gain_rate,
    }

  def _snapshot(self, day: date) -> Optional[DaylightSnapshot]:
    return self.daylight.snapshot(day)

  def evaluations(self, start: date) -> Iterator[Tuple[int, date, Optional[DaylightSnapshot]]]:
    """Lazy (offset, day, snapshot) triples after start, bounded by the search window."""
    for offset, day in walk_days(start, self.settings.search_window_days):
      yield offset, day, self._snapshot(day)

  def _first_crossing(self, start: date, reached: Callable[[DaylightSnapshot], bool]) -> Tuple[int, date]:
    for offset, day, snap in self.evaluations(start):
      if snap is not None and reached(snap):
        return offset, day
    raise ProjectionHorizonExceededError(
      f"No crossing within {self.settings.search_window_days} days of {start.isoformat()}"
    )

  def _first_day_since(self, solstice_day: date, today: date, reached: Callable[[DaylightSnapshot], bool]) -> date:
    for day in day_span(solstice_day, today):
      snap = self._snapshot(day)
      if snap is not None and reached(snap):
        return day
    return today

  def update_milestones(self, today: date) -> List[Milestone]:
    if self.calendar.classify(today) is not SeasonClassification.GAINING_DAYLIGHT:
      return []
    instant, _ = self.calendar.most_recent_solstice(today)
    solstice_day = self.calendar.event_day(instant)
    milestones = []
    for kind in self.settings.enabled:
      try:
        milestones.append(self._builders[kind](kind, today, solstice_day))
      except (ProjectionHorizonExceededError, MissingReferenceError) as e:
        logger.debug(f"Milestone {kind.value} not determinable: {e}")
    return sort_milestones(milestones)

  def _ten_hours(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    threshold = self.settings.ten_hours_threshold_seconds
    current = self._snapshot(today)
    if current is None:
      raise MissingReferenceError(f"No daylight on {today.isoformat()}")

    def reached(s):
      return s.daylight_seconds >= threshold

    if reached(current):
      return Milestone.achieved(kind, self._first_day_since(solstice_day, today, reached))
    offset, day = self._first_crossing(today, reached)
    return Milestone.pending(kind, day, offset)

  def _hours_gained(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    target = _GAIN_HOURS[kind] * 3600
    cumulative = cumulative_change_seconds(solstice_day, today, self.coordinate, self.tz)
    if cumulative is None:
      raise MissingReferenceError(f"No cumulative change since {solstice_day.isoformat()}")

    if cumulative >= target:
      base = self._snapshot(solstice_day).daylight_seconds
      return Milestone.achieved(
        kind, self._first_day_since(solstice_day, today, lambda s: s.daylight_seconds - base >= target)
      )

    # Algebraic estimate from the smoothed velocity, not a walked search
    velocity = daylight_velocity(today, self.coordinate, self.tz)
    if velocity is None or velocity <= 0:
      raise ProjectionHorizonExceededError(f"Velocity {velocity} gives no estimate")
    days = (target - cumulative) // velocity
    if not 0 < days < self.settings.estimate_horizon_days:
      raise ProjectionHorizonExceededError(f"Estimate of {days} days outside horizon")
    return Milestone.pending(kind, today + timedelta(days=days), days)

  def _on_or_pending(self, kind: MilestoneType, today: date, event_day: date) -> Milestone:
    if today >= event_day:
      return Milestone.achieved(kind, event_day)
    return Milestone.pending(kind, event_day, (event_day - today).days)

  def _more_light_than_dark(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    equinox = self.calendar.following_spring_equinox(today)
    return self._on_or_pending(kind, today, self.calendar.event_day(equinox))

  def _peak_gain_rate(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    equinox_day = self.calendar.event_day(self.calendar.following_spring_equinox(today))
    window = timedelta(days=PEAK_SEARCH_DAYS)
    best = None
    for day in day_span(equinox_day - window, equinox_day + window):
      v = daylight_velocity(day, self.coordinate, self.tz)
      if v is not None and (best is None or v > best[0]):
        best = (v, day)
    if best is None:
      raise MissingReferenceError(f"No velocity around {equinox_day.isoformat()}")
    return self._on_or_pending(kind, today, best[1])

  def _clock_extremum(self, solstice_day: date, pick: Callable[[DaylightSnapshot], float]) -> date:
    window = timedelta(days=self.settings.extremum_window_days)
    best = None
    for day in day_span(solstice_day - window, solstice_day + window):
      snap = self._snapshot(day)
      if snap is None:
        continue
      value = pick(snap)
      if best is None or value < best[0]:
        best = (value, day)
    if best is None:
      raise MissingReferenceError(f"No sunrise/sunset near {solstice_day.isoformat()}")
    return best[1]

  def _earliest_sunset(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    day = self._clock_extremum(solstice_day, lambda s: seconds_after_midnight(s.sunset))
    return self._on_or_pending(kind, today, day)

  def _latest_sunrise(self, kind: MilestoneType, today: date, solstice_day: date) -> Milestone:
    day = self._clock_extremum(solstice_day, lambda s: -seconds_after_midnight(s.sunrise))
    return self._on_or_pending(kind, today, day)
