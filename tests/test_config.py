from datetime import time

import pytest

from longerdays.errors import OutOfBoundsInputError
from longerdays.model.config import AppConfig, LocationConfig, NotificationPreferences, load_config
from longerdays.model.milestones import MilestoneType


def test_defaults():
  cfg = load_config()
  assert cfg.location.name == "Minneapolis"
  assert cfg.location.tzinfo().zone == "America/Chicago"
  assert cfg.preferences.custom_notification_time == time(7, 0)
  assert cfg.preferences.notify_at_sunrise
  assert cfg.milestones.search_window_days == 180
  assert set(cfg.milestones.enabled) == set(MilestoneType)
  assert cfg.store_path is None


def test_user_file_overrides_defaults(tmp_path):
  path = tmp_path / "user.yaml"
  path.write_text(
    "location:\n"
    "  latitude: 59.33\n"
    "  longitude: 18.07\n"
    "  name: Stockholm\n"
    "  timezone: Europe/Stockholm\n"
    "preferences:\n"
    "  pause_after_summer_solstice: true\n"
    "milestones:\n"
    "  enabled: [ten_hours, more_light_than_dark]\n"
  )
  cfg = load_config(str(path))
  assert cfg.location.coordinate().latitude == pytest.approx(59.33)
  assert cfg.preferences.pause_after_summer_solstice
  assert cfg.preferences.show_daily_change
  assert cfg.milestones.enabled == [MilestoneType.TEN_HOURS_DAYLIGHT, MilestoneType.MORE_LIGHT_THAN_DARK]
  assert cfg.milestones.extremum_window_days == 45


def test_location_validation_happens_at_coordinate():
  loc = LocationConfig(latitude=123.0, longitude=0.0)
  with pytest.raises(OutOfBoundsInputError):
    loc.coordinate()


def test_preferences_content():
  assert NotificationPreferences().has_content()
  assert not NotificationPreferences(show_daily_change=False, show_change_since_solstice=False).has_content()
  assert AppConfig().location is None


def test_config_without_notification_content_is_rejected(tmp_path):
  path = tmp_path / "silent.yaml"
  path.write_text(
    "preferences:\n"
    "  show_daily_change: false\n"
    "  show_change_since_solstice: false\n"
  )
  with pytest.raises(ValueError, match="notification needs content"):
    load_config(str(path))
