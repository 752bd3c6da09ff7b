from dataclasses import dataclass
from datetime import date
from enum import Enum
from typing import Optional


class MilestoneType(str, Enum):
  TEN_HOURS_DAYLIGHT = "ten_hours"
  ONE_HOUR_GAINED = "one_hour_gained"
  TWO_HOURS_GAINED = "two_hours_gained"
  MORE_LIGHT_THAN_DARK = "more_light_than_dark"
  EARLIEST_SUNSET_BEHIND = "earliest_sunset_behind"
  LATEST_SUNRISE_BEHIND = "latest_sunrise_behind"
  PEAK_GAIN_RATE = "peak_gain_rate"

  @property
  def title(self) -> str:
    return _TITLES[self]

  @property
  def description(self) -> str:
    return _DESCRIPTIONS[self]


_TITLES = {
  MilestoneType.TEN_HOURS_DAYLIGHT: "10 hours of daylight",
  MilestoneType.ONE_HOUR_GAINED: "1 hour gained",
  MilestoneType.TWO_HOURS_GAINED: "2 hours gained",
  MilestoneType.MORE_LIGHT_THAN_DARK: "More light than dark",
  MilestoneType.EARLIEST_SUNSET_BEHIND: "Earliest sunset behind us",
  MilestoneType.LATEST_SUNRISE_BEHIND: "Latest sunrise behind us",
  MilestoneType.PEAK_GAIN_RATE: "Peak daylight gain rate",
}

_DESCRIPTIONS = {
  MilestoneType.TEN_HOURS_DAYLIGHT: "A meaningful threshold of daylight",
  MilestoneType.ONE_HOUR_GAINED: "60 minutes more than the solstice",
  MilestoneType.TWO_HOURS_GAINED: "120 minutes more than the solstice",
  MilestoneType.MORE_LIGHT_THAN_DARK: "Spring equinox - equal day and night",
  MilestoneType.EARLIEST_SUNSET_BEHIND: "Sunsets getting later each day",
  MilestoneType.LATEST_SUNRISE_BEHIND: "Sunrises getting earlier each day",
  MilestoneType.PEAK_GAIN_RATE: "Gaining daylight at maximum speed",
}


@dataclass(frozen=True)
class Milestone:
  type: MilestoneType
  is_achieved: bool
  achieved_date: Optional[date] = None
  target_date: Optional[date] = None
  days_until: Optional[int] = None

  def __post_init__(self):
    if self.is_achieved:
      if self.achieved_date is None or self.target_date is not None or self.days_until is not None:
        raise ValueError(f"{self.type.value}: achieved milestones carry only achieved_date")
    else:
      if self.achieved_date is not None or self.target_date is None or self.days_until is None:
        raise ValueError(f"{self.type.value}: pending milestones need target_date and days_until")
      if self.days_until < 0:
        raise ValueError(f"{self.type.value}: days_until must be non-negative, got {self.days_until}")

  @property
  def id(self) -> str:
    return self.type.value

  @classmethod
  def achieved(cls, kind: MilestoneType, on: date) -> "Milestone":
    return cls(type=kind, is_achieved=True, achieved_date=on)

  @classmethod
  def pending(cls, kind: MilestoneType, target: date, days_until: int) -> "Milestone":
    return cls(type=kind, is_achieved=False, target_date=target, days_until=days_until)
