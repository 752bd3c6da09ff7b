from datetime import date, timezone

import pytest
from fastapi.testclient import TestClient

from longerdays.api import DaylightRestAPI
from longerdays.model.geo import GeoCoordinate
from longerdays.service import LongerDays

MINNEAPOLIS = GeoCoordinate(44.9778, -93.2650, "Minneapolis")


def _client(coordinate=MINNEAPOLIS):
  service = LongerDays(coordinate=coordinate, tz=timezone.utc)
  return service, TestClient(DaylightRestAPI(service).app)


def test_health_and_config():
  _, client = _client()
  assert client.get("/health").json() == {"status": "ok"}
  cfg = client.get("/api/config").json()
  assert cfg["location_name"] == "Minneapolis"
  assert cfg["latitude"] == 44.9778


def test_daylight():
  _, client = _client()
  resp = client.get("/api/daylight", params={"day": "2024-12-21"})
  assert resp.status_code == 200
  body = resp.json()
  assert abs(body["daylight_seconds"] / 60 - 526) <= 10
  assert body["formatted_duration"].startswith("8 hr")


def test_daylight_errors():
  _, client = _client()
  polar = client.get("/api/daylight", params={"day": "2025-01-10", "lat": 80, "lon": 0})
  assert polar.status_code == 404
  assert client.get("/api/daylight", params={"lat": 95, "lon": 0}).status_code == 422
  assert client.get("/api/daylight", params={"lat": 45}).status_code == 400


def test_changes():
  _, client = _client()
  daily = client.get("/api/change/daily", params={"previous": "2025-01-20", "current": "2025-01-21"}).json()
  assert daily["seconds"] > 0
  cumulative = client.get("/api/change/cumulative", params={"since": "2024-12-21", "to": "2024-12-21"}).json()
  assert cumulative["seconds"] == 0
  velocity = client.get("/api/velocity", params={"day": "2025-03-20"}).json()
  assert velocity["seconds_per_day"] > 120
  assert velocity["peak_day"] == "2025-03-20"
  assert velocity["fraction_of_peak"] == 1.0


def test_comparison_persists_solstice():
  service, client = _client()
  resp = client.get("/api/comparison", params={"day": "2025-01-21"})
  assert resp.status_code == 200
  body = resp.json()
  assert body["season"] == "gaining_daylight"
  assert body["reference_solstice_date"] == "2024-12-21"
  assert body["reference_solstice_type"] == "winter"
  assert body["cumulative_change_seconds"] > 1200
  assert service.store.solstice.day.isoformat() == "2024-12-21"


def test_comparison_unavailable():
  _, client = _client(GeoCoordinate(80.0, 0.0))
  resp = client.get("/api/comparison", params={"day": "2025-01-10"})
  assert resp.status_code == 404
  assert resp.json()["detail"] == "comparison unavailable"


def test_seasons():
  _, client = _client()
  year = client.get("/api/seasons/2025").json()
  assert year["winter_solstice"].startswith("2025-12-21")
  assert client.get("/api/seasons/500").status_code == 422
  season = client.get("/api/season", params={"day": "2025-01-21"}).json()
  assert season["season"] == "gaining_daylight"
  assert season["days_until_equinox"] == {"days": 58, "type": "spring"}
  assert season["days_since_solstice"] == 31
  assert 0.0 < season["progress"] < 0.5


def test_milestones():
  _, client = _client()
  assert client.get("/api/milestones", params={"day": "2025-07-15"}).json() == []
  items = client.get("/api/milestones", params={"day": "2025-01-21"}).json()
  ids = [m["id"] for m in items]
  assert "more_light_than_dark" in ids
  assert all(m["title"] for m in items)


def test_history_and_widget():
  _, client = _client()
  history = client.get("/api/history", params={"days": 3, "day": "2025-01-21"}).json()
  assert [row["day"] for row in history] == ["2025-01-19", "2025-01-20", "2025-01-21"]
  assert client.get("/api/history", params={"days": 0}).status_code == 422
  widget = client.get("/api/widget").json()
  assert "solstice_label" in widget
  assert "daily_formatted" in widget


def test_unavailable_values_are_not_found():
  _, client = _client()
  polar = {"lat": 80, "lon": 0}
  daily = client.get("/api/change/daily", params={"previous": "2025-01-09", "current": "2025-01-10", **polar})
  assert daily.status_code == 404
  assert daily.json()["detail"] == "comparison unavailable"
  cumulative = client.get("/api/change/cumulative", params={"since": "2024-12-21", "to": "2025-01-10", **polar})
  assert cumulative.status_code == 404
  velocity = client.get("/api/velocity", params={"day": "2025-01-10", **polar})
  assert velocity.status_code == 404


def test_velocity_against_fall_peak():
  _, client = _client()
  body = client.get("/api/velocity", params={"day": "2025-08-01"}).json()
  assert body["seconds_per_day"] < 0
  assert body["peak_day"] == "2025-09-22"
  assert body["peak_seconds_per_day"] > 120
  assert 0.0 < body["fraction_of_peak"] < 1.0


def test_notification_preview():
  _, client = _client()
  body = client.get("/api/notification/preview", params={"day": "2025-01-21"}).json()
  assert " | " in body["message"]
  solstice = client.get("/api/notification/preview", params={"day": "2024-12-21"}).json()
  assert "Winter Solstice" in solstice["message"]


def test_reset_snapshots():
  service, client = _client()
  client.get("/api/comparison", params={"day": "2025-01-21"})
  assert service.store.solstice is not None
  assert client.delete("/api/snapshots").json() == {"status": "cleared"}
  assert service.store.solstice is None


@pytest.mark.parametrize("day,peak_day", [
  (date(2025, 1, 21), date(2025, 3, 20)),
  (date(2025, 8, 1), date(2025, 9, 22)),
])
def test_report_peak_rate(day, peak_day):
  service = LongerDays(coordinate=MINNEAPOLIS, tz=timezone.utc)
  report = service.report(day)
  assert report.peak_day == peak_day
  assert report.peak_velocity_seconds > 120
  assert 0.0 < report.velocity_fraction < 1.0


def test_report_without_peak_at_pole():
  report = LongerDays(coordinate=GeoCoordinate(90.0, 0.0), tz=timezone.utc).report(date(2025, 1, 21))
  assert report.peak_day is None
  assert report.velocity_fraction is None
