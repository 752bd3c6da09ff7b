"""Notification text, notification timing and the widget summary."""
from dataclasses import dataclass
from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Tuple
import logging

from .comparison import DaylightComparisonEngine
from .daylight import calculate_daylight, local_midnight
from .formatting import format_cumulative_change, format_daily_change
from .seasons import SeasonalCalendar
from ..errors import MissingReferenceError
from ..io.schema import WidgetSummary
from ..model.config import NotificationPreferences
from ..model.geo import GeoCoordinate
from ..model.seasons import SeasonClassification, SolsticeType
from ..model.snapshots import ComparisonResult

logger = logging.getLogger(__name__)

SOLSTICE_MESSAGES = {
  SolsticeType.WINTER: "Happy Winter Solstice! The shortest day is here - every day gets brighter from now on!",
  SolsticeType.SUMMER: "Happy Summer Solstice! The longest day of the year. Enjoy the light!",
}

SOLSTICE_EMOJI = {
  SolsticeType.WINTER: "\U0001F31F",
  SolsticeType.SUMMER: "☀️",
}

GAINING_EMOJI = "☀️"
LOSING_EMOJI = "\U0001F305"


@dataclass(frozen=True)
class Notice:
  title: str
  body: str


def _content_parts(comparison: ComparisonResult, prefs: NotificationPreferences) -> list[str]:
  parts = []
  if prefs.show_daily_change:
    parts.append(format_daily_change(comparison.daily_change_seconds))
  if prefs.show_change_since_solstice:
    parts.append(format_cumulative_change(
      comparison.cumulative_change_seconds, comparison.is_gaining, comparison.reference_solstice_type
    ))
  return parts


def build_notice(
  day: date,
  coordinate: GeoCoordinate,
  prefs: NotificationPreferences,
  comparison: Optional[ComparisonResult],
  tz: tzinfo = timezone.utc,
  calendar: Optional[SeasonalCalendar] = None,
) -> Optional[Notice]:
  """Notification for `day`; None when there is nothing to say."""
  calendar = calendar or SeasonalCalendar(tz)
  solstice = calendar.is_solstice(day)
  if solstice is not None:
    return Notice(SOLSTICE_EMOJI[solstice], SOLSTICE_MESSAGES[solstice])

  if comparison is None:
    # No comparison yet: fall back to today's plain duration
    snap = calculate_daylight(day, coordinate, tz)
    if snap is None:
      return None
    return Notice(f"{GAINING_EMOJI} Today's Daylight", f"You have {snap.formatted_duration} of daylight today.")

  parts = _content_parts(comparison, prefs)
  if not parts:
    return None
  emoji = GAINING_EMOJI if comparison.is_gaining else LOSING_EMOJI
  return Notice(f"{emoji} Daylight Update", " | ".join(parts))


def preview_message(
  day: date,
  coordinate: GeoCoordinate,
  prefs: NotificationPreferences,
  tz: tzinfo = timezone.utc,
) -> str:
  calendar = SeasonalCalendar(tz)
  solstice = calendar.is_solstice(day)
  if solstice is not None:
    return f"{SOLSTICE_EMOJI[solstice]} {SOLSTICE_MESSAGES[solstice]}"
  try:
    comparison = DaylightComparisonEngine(coordinate, tz, calendar).compare(day).result
  except MissingReferenceError as e:
    logger.debug(f"Preview without comparison: {e}")
    snap = calculate_daylight(day, coordinate, tz)
    if snap is None:
      return "Unable to calculate daylight information."
    return f"{GAINING_EMOJI} You have {snap.formatted_duration} of daylight today."
  parts = _content_parts(comparison, prefs)
  if not parts:
    return "No content selected."
  return " | ".join(parts)


def next_notification_time(
  now: datetime,
  coordinate: GeoCoordinate,
  prefs: NotificationPreferences,
  tz: tzinfo = timezone.utc,
  calendar: Optional[SeasonalCalendar] = None,
) -> Optional[Tuple[date, datetime]]:
  """(day the notice describes, instant to deliver it), or None while paused for summer."""
  calendar = calendar or SeasonalCalendar(tz)
  today = now.astimezone(tz).date()
  tomorrow = today + timedelta(days=1)

  if prefs.notify_at_sunrise:
    target = tomorrow
    snap = calculate_daylight(target, coordinate, tz)
    fire_at = snap.sunrise if snap else local_midnight(target, tz)
  else:
    clock = prefs.custom_notification_time
    at = timedelta(hours=clock.hour, minutes=clock.minute)
    fire_at = local_midnight(today, tz) + at
    target = today
    if fire_at <= now:
      target = tomorrow
      fire_at = local_midnight(tomorrow, tz) + at

  if calendar.should_pause_for_summer(target, prefs.pause_after_summer_solstice):
    return None
  return target, fire_at


def widget_summary(
  now: datetime,
  coordinate: GeoCoordinate,
  tz: tzinfo = timezone.utc,
  calendar: Optional[SeasonalCalendar] = None,
) -> WidgetSummary:
  """Widget payload; unavailable changes are reported as zero, matching the widget's display."""
  calendar = calendar or SeasonalCalendar(tz)
  today = now.astimezone(tz).date()
  instant, _ = calendar.most_recent_solstice(today)
  try:
    result = DaylightComparisonEngine(coordinate, tz, calendar).compare(today).result
    daily, cumulative = result.daily_change_seconds, result.cumulative_change_seconds
  except MissingReferenceError as e:
    logger.debug(f"Widget summary without comparison: {e}")
    daily, cumulative = 0, 0
  return WidgetSummary(
    last_updated=now,
    latitude=coordinate.latitude,
    longitude=coordinate.longitude,
    location_name=coordinate.name or "",
    cumulative_change_seconds=cumulative,
    daily_change_seconds=daily,
    is_gaining_daylight=calendar.classify(today) is SeasonClassification.GAINING_DAYLIGHT,
    solstice_label=calendar.event_day(instant).strftime("%b %d").replace(" 0", " "),
    progress=calendar.progress_through_half_year(today),
  )
