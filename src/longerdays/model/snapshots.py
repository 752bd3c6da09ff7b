from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from .seasons import SeasonClassification, SolsticeType


@dataclass(frozen=True)
class DaylightSnapshot:
  """Sunrise, sunset and twilight for one calendar day at one location.

  daylight_seconds is sunset - sunrise truncated to whole seconds. Civil dawn and
  dusk are absent when the sun never gets 6 degrees below the horizon.
  """
  day: date
  sunrise: datetime
  sunset: datetime
  daylight_seconds: int
  civil_dawn: Optional[datetime] = None
  civil_dusk: Optional[datetime] = None

  @property
  def daylight_minutes(self) -> int:
    return self.daylight_seconds // 60

  @property
  def formatted_duration(self) -> str:
    hours = self.daylight_seconds // 3600
    minutes = (self.daylight_seconds % 3600) // 60
    if hours > 0:
      return f"{hours} hr {minutes} min"
    return f"{minutes} min"


@dataclass(frozen=True)
class ComparisonResult:
  daily_change_seconds: int
  cumulative_change_seconds: int
  season: SeasonClassification
  reference_solstice_date: date
  reference_solstice_type: SolsticeType

  @property
  def is_gaining(self) -> bool:
    return self.season is SeasonClassification.GAINING_DAYLIGHT


@dataclass(frozen=True)
class ComparisonOutcome:
  """A comparison plus the solstice snapshot the caller should persist, if any."""
  result: ComparisonResult
  persist_solstice: Optional[DaylightSnapshot] = None
