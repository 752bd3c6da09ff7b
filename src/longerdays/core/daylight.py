"""Sunrise, sunset and civil twilight from the NOAA solar position approximation."""
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional
import math

from ..errors import UndefinedCrossingError
from ..model.geo import GeoCoordinate
from ..model.snapshots import DaylightSnapshot

SUNRISE_ZENITH = 90.833  # geometric horizon plus refraction and solar radius
CIVIL_ZENITH = 96.0      # sun 6 degrees below the horizon


def utc_offset_minutes(day: date, tz: tzinfo) -> float:
  # Noon avoids the DST transition hour on changeover days
  offset = tz.utcoffset(datetime(day.year, day.month, day.day, 12))
  return offset.total_seconds() / 60.0 if offset is not None else 0.0


def local_midnight(day: date, tz: tzinfo) -> datetime:
  fixed = timezone(timedelta(minutes=utc_offset_minutes(day, tz)))
  return datetime(day.year, day.month, day.day, tzinfo=fixed)


def fractional_year(day: date) -> float:
  n = day.timetuple().tm_yday
  return 2.0 * math.pi / 365.0 * (n - 1)


def equation_of_time(gamma: float) -> float:
  """Apparent minus mean solar time, in minutes."""
  return 229.18 * (
    0.000075
    + 0.001868 * math.cos(gamma)
    - 0.032077 * math.sin(gamma)
    - 0.014615 * math.cos(2 * gamma)
    - 0.040849 * math.sin(2 * gamma)
  )


def solar_declination(gamma: float) -> float:
  """Declination in radians."""
  return (
    0.006918
    - 0.399912 * math.cos(gamma)
    + 0.070257 * math.sin(gamma)
    - 0.006758 * math.cos(2 * gamma)
    + 0.000907 * math.sin(2 * gamma)
    - 0.002697 * math.cos(3 * gamma)
    + 0.00148 * math.sin(3 * gamma)
  )


def hour_angle(latitude: float, declination: float, zenith: float) -> Optional[float]:
  """Hour angle in degrees at which the sun crosses zenith, None if it never does."""
  lat = math.radians(latitude)
  cos_lat = math.cos(lat)
  if abs(cos_lat) < 1e-12:
    # At the poles the sun circles at constant elevation all day
    return None
  cos_ha = math.cos(math.radians(zenith)) / (cos_lat * math.cos(declination)) - math.tan(lat) * math.tan(declination)
  if cos_ha > 1.0 or cos_ha < -1.0:
    return None
  return math.degrees(math.acos(cos_ha))


def sun_time(
  day: date,
  coordinate: GeoCoordinate,
  tz: tzinfo = timezone.utc,
  rising: bool = True,
  zenith: float = SUNRISE_ZENITH,
) -> Optional[datetime]:
  gamma = fractional_year(day)
  ha = hour_angle(coordinate.latitude, solar_declination(gamma), zenith)
  if ha is None:
    return None
  if rising:
    ha = -ha
  tz_minutes = utc_offset_minutes(day, tz)
  solar_noon = (720.0 - 4.0 * coordinate.longitude - equation_of_time(gamma) + tz_minutes) / 1440.0
  time_frac = solar_noon + ha * 4.0 / 1440.0
  return local_midnight(day, tz) + timedelta(seconds=time_frac * 86400.0)


def calculate_daylight(day: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> Optional[DaylightSnapshot]:
  sunrise = sun_time(day, coordinate, tz, rising=True)
  sunset = sun_time(day, coordinate, tz, rising=False)
  if sunrise is None or sunset is None:
    return None
  return DaylightSnapshot(
    day=day,
    sunrise=sunrise,
    sunset=sunset,
    daylight_seconds=int((sunset - sunrise).total_seconds()),
    civil_dawn=sun_time(day, coordinate, tz, rising=True, zenith=CIVIL_ZENITH),
    civil_dusk=sun_time(day, coordinate, tz, rising=False, zenith=CIVIL_ZENITH),
  )


def require_daylight(day: date, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc) -> DaylightSnapshot:
  snapshot = calculate_daylight(day, coordinate, tz)
  if snapshot is None:
    raise UndefinedCrossingError(
      f"No sunrise/sunset on {day.isoformat()} at ({coordinate.latitude}, {coordinate.longitude})"
    )
  return snapshot


def seconds_after_midnight(instant: datetime) -> float:
  """Local clock time of an instant, in seconds since its own midnight."""
  midnight = instant.replace(hour=0, minute=0, second=0, microsecond=0)
  return (instant - midnight).total_seconds()


class Daylight:
  """Daylight calculator bound to one location and timezone."""

  def __init__(self, coordinate: GeoCoordinate, tz: tzinfo = timezone.utc):
    self.coordinate = coordinate
    self.tz = tz

  def snapshot(self, day: date) -> Optional[DaylightSnapshot]:
    return calculate_daylight(day, self.coordinate, self.tz)

  def require(self, day: date) -> DaylightSnapshot:
    return require_daylight(day, self.coordinate, self.tz)

  def duration(self, day: date) -> Optional[int]:
    snap = self.snapshot(day)
    return snap.daylight_seconds if snap else None
