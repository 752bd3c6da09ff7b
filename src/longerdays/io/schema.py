from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel

from ..core.formatting import format_time_change
from ..model.snapshots import DaylightSnapshot


class SnapshotRecord(BaseModel):
  day: date
  sunrise: datetime
  sunset: datetime
  daylight_seconds: int
  civil_dawn: Optional[datetime] = None
  civil_dusk: Optional[datetime] = None

  @classmethod
  def from_snapshot(cls, snap: DaylightSnapshot) -> "SnapshotRecord":
    return cls(
      day=snap.day,
      sunrise=snap.sunrise,
      sunset=snap.sunset,
      daylight_seconds=snap.daylight_seconds,
      civil_dawn=snap.civil_dawn,
      civil_dusk=snap.civil_dusk,
    )

  def to_snapshot(self) -> DaylightSnapshot:
    return DaylightSnapshot(
      day=self.day,
      sunrise=self.sunrise,
      sunset=self.sunset,
      daylight_seconds=self.daylight_seconds,
      civil_dawn=self.civil_dawn,
      civil_dusk=self.civil_dusk,
    )


class DaylightRow(BaseModel):
  day: date
  sunrise: Optional[datetime]
  sunset: Optional[datetime]
  daylight_seconds: Optional[int]
  daily_change_seconds: Optional[int]
  velocity_seconds: Optional[int]
  season: str


class WidgetSummary(BaseModel):
  last_updated: datetime
  latitude: float
  longitude: float
  location_name: str
  cumulative_change_seconds: int
  daily_change_seconds: int
  is_gaining_daylight: bool
  solstice_label: str
  progress: float

  @property
  def cumulative_formatted(self) -> str:
    return format_time_change(self.cumulative_change_seconds)

  @property
  def daily_formatted(self) -> str:
    sign = "+" if self.daily_change_seconds >= 0 else "-"
    return f"{sign}{format_time_change(self.daily_change_seconds)}"
