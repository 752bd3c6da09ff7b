from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class SolsticeType(str, Enum):
  WINTER = "winter"
  SUMMER = "summer"

  @property
  def label(self) -> str:
    return f"{self.value} solstice"

  @property
  def nominal_date(self) -> str:
    return "Dec 21" if self is SolsticeType.WINTER else "Jun 21"


class EquinoxType(str, Enum):
  SPRING = "spring"
  FALL = "fall"

  @property
  def label(self) -> str:
    return f"{self.value} equinox"


class SeasonClassification(str, Enum):
  GAINING_DAYLIGHT = "gaining_daylight"  # winter solstice -> summer solstice
  LOSING_DAYLIGHT = "losing_daylight"    # summer solstice -> winter solstice


@dataclass(frozen=True)
class SeasonalYear:
  """The four cardinal solar instants of one calendar year, all in UTC."""
  year: int
  spring_equinox: datetime
  summer_solstice: datetime
  fall_equinox: datetime
  winter_solstice: datetime

  def events(self):
    """(instant, kind) pairs in chronological order."""
    return [
      (self.spring_equinox, EquinoxType.SPRING),
      (self.summer_solstice, SolsticeType.SUMMER),
      (self.fall_equinox, EquinoxType.FALL),
      (self.winter_solstice, SolsticeType.WINTER),
    ]
