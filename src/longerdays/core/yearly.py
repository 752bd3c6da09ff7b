"""Whole-year daylight tables and the statistics drawn from them."""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import List, Optional

import numpy as np

from .comparison import daylight_velocity
from .daylight import calculate_daylight
from .seasons import SeasonalCalendar
from .timebase import Timebase
from ..io.schema import DaylightRow
from ..model.geo import GeoCoordinate

MONTH_NAMES = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]


def year_table(year: int, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> List[DaylightRow]:
  calendar = SeasonalCalendar(tz)
  rows = []
  prev = calculate_daylight(date(year, 1, 1) - timedelta(days=1), coordinate, tz)
  for d in Timebase(year).days():
    snap = calculate_daylight(d, coordinate, tz)
    change = snap.daylight_seconds - prev.daylight_seconds if snap and prev else None
    rows.append(DaylightRow(
      day=d,
      sunrise=snap.sunrise if snap else None,
      sunset=snap.sunset if snap else None,
      daylight_seconds=snap.daylight_seconds if snap else None,
      daily_change_seconds=change,
      velocity_seconds=daylight_velocity(d, coordinate, tz),
      season=calendar.classify(d).value,
    ))
    prev = snap
  return rows


@dataclass(frozen=True)
class MonthRow:
  month: str
  sunrise: datetime
  sunset: datetime
  daylight_seconds: int


@dataclass(frozen=True)
class YearStats:
  year: int
  shortest_day: Optional[date]
  shortest_seconds: Optional[int]
  longest_day: Optional[date]
  longest_seconds: Optional[int]
  mean_seconds: Optional[float]
  max_gain_seconds: Optional[int]
  max_loss_seconds: Optional[int]
  undefined_days: int


def year_stats(rows: List[DaylightRow]) -> YearStats:
  durations = np.array(
    [r.daylight_seconds if r.daylight_seconds is not None else np.nan for r in rows], dtype=float
  )
  changes = np.array(
    [r.daily_change_seconds if r.daily_change_seconds is not None else np.nan for r in rows], dtype=float
  )
  defined = ~np.isnan(durations)
  year = rows[0].day.year if rows else 0
  if not defined.any():
    return YearStats(year, None, None, None, None, None, None, None, len(rows))
  lo = int(np.nanargmin(durations))
  hi = int(np.nanargmax(durations))
  has_changes = not np.isnan(changes).all()
  return YearStats(
    year=year,
    shortest_day=rows[lo].day,
    shortest_seconds=int(durations[lo]),
    longest_day=rows[hi].day,
    longest_seconds=int(durations[hi]),
    mean_seconds=float(np.nanmean(durations)),
    max_gain_seconds=int(np.nanmax(changes)) if has_changes else None,
    max_loss_seconds=int(np.nanmin(changes)) if has_changes else None,
    undefined_days=int((~defined).sum()),
  )


def monthly_overview(year: int, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> List[MonthRow]:
  """Daylight on the 15th of each month; months without a sunrise are left out."""
  out = []
  for d in Timebase(year).mid_month_days():
    snap = calculate_daylight(d, coordinate, tz)
    if snap is None:
      continue
    out.append(MonthRow(MONTH_NAMES[d.month - 1], snap.sunrise, snap.sunset, snap.daylight_seconds))
  return out
