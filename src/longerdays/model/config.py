from datetime import time, tzinfo
from pathlib import Path
from typing import List, Optional

import pytz
import yaml
from pydantic import BaseModel, Field

from .geo import GeoCoordinate
from .milestones import MilestoneType

DEFAULTS_PATH = Path(__file__).parent.parent / "config" / "defaults.yaml"


class LocationConfig(BaseModel):
  latitude: float
  longitude: float
  name: str = ""
  timezone: str = "UTC"

  def coordinate(self) -> GeoCoordinate:
    return GeoCoordinate(self.latitude, self.longitude, self.name or None)

  def tzinfo(self) -> tzinfo:
    return pytz.timezone(self.timezone)


class NotificationPreferences(BaseModel):
  notify_at_sunrise: bool = True
  custom_notification_time: time = time(7, 0)
  show_daily_change: bool = True
  show_change_since_solstice: bool = True
  pause_after_summer_solstice: bool = False

  def has_content(self) -> bool:
    # At least one content option must stay enabled
    return self.show_daily_change or self.show_change_since_solstice


class MilestoneSettings(BaseModel):
  search_window_days: int = 180
  estimate_horizon_days: int = 365
  extremum_window_days: int = 45
  ten_hours_threshold_seconds: int = 10 * 3600
  enabled: List[MilestoneType] = Field(default_factory=lambda: list(MilestoneType))


class AppConfig(BaseModel):
  location: Optional[LocationConfig] = None
  preferences: NotificationPreferences = Field(default_factory=NotificationPreferences)
  milestones: MilestoneSettings = Field(default_factory=MilestoneSettings)
  store_path: Optional[str] = None


def _merge(base: dict, override: dict) -> dict:
  out = dict(base)
  for k, v in override.items():
    if isinstance(v, dict) and isinstance(out.get(k), dict):
      out[k] = _merge(out[k], v)
    else:
      out[k] = v
  return out


def load_config(path: Optional[str] = None) -> AppConfig:
  """Package defaults overlaid with an optional user YAML file."""
  cfg = yaml.safe_load(DEFAULTS_PATH.read_text(encoding="utf-8")) or {}
  if path:
    user = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    cfg = _merge(cfg, user)
  config = AppConfig(**cfg)
  if not config.preferences.has_content():
    raise ValueError("Enable show_daily_change or show_change_since_solstice; a notification needs content")
  return config
