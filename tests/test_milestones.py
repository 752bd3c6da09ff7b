from datetime import date, timedelta

import pytest

from longerdays.core.milestones import MilestoneProjector, sort_milestones
from longerdays.model.config import MilestoneSettings
from longerdays.model.geo import GeoCoordinate
from longerdays.model.milestones import Milestone, MilestoneType

MINNEAPOLIS = GeoCoordinate(44.9778, -93.2650, "Minneapolis")


def _by_type(milestones):
  return {m.type: m for m in milestones}


def _assert_ordered(milestones):
  flags = [m.is_achieved for m in milestones]
  assert flags == sorted(flags, reverse=True)
  achieved = [m.achieved_date for m in milestones if m.is_achieved]
  pending = [m.days_until for m in milestones if not m.is_achieved]
  assert achieved == sorted(achieved, reverse=True)
  assert pending == sorted(pending)


@pytest.mark.parametrize("day", [date(2025, 6, 21), date(2025, 7, 15), date(2025, 12, 20)])
def test_no_milestones_while_losing(day):
  assert MilestoneProjector(MINNEAPOLIS).update_milestones(day) == []


def test_month_after_solstice():
  today = date(2025, 1, 21)
  milestones = MilestoneProjector(MINNEAPOLIS).update_milestones(today)
  _assert_ordered(milestones)
  found = _by_type(milestones)

  ten = found[MilestoneType.TEN_HOURS_DAYLIGHT]
  assert not ten.is_achieved
  assert date(2025, 2, 1) <= ten.target_date <= date(2025, 2, 20)
  assert ten.days_until == (ten.target_date - today).days

  one = found[MilestoneType.ONE_HOUR_GAINED]
  assert not one.is_achieved
  assert 0 < one.days_until < 30
  assert found[MilestoneType.TWO_HOURS_GAINED].days_until > one.days_until

  equal = found[MilestoneType.MORE_LIGHT_THAN_DARK]
  assert equal.target_date == date(2025, 3, 20)
  assert equal.days_until == 58

  assert found[MilestoneType.EARLIEST_SUNSET_BEHIND].achieved_date < date(2024, 12, 21)
  assert found[MilestoneType.LATEST_SUNRISE_BEHIND].is_achieved
  peak = found[MilestoneType.PEAK_GAIN_RATE]
  assert abs((peak.target_date - date(2025, 3, 20)).days) <= 10


def test_spring_achievements():
  milestones = MilestoneProjector(MINNEAPOLIS).update_milestones(date(2025, 4, 15))
  _assert_ordered(milestones)
  found = _by_type(milestones)
  ten = found[MilestoneType.TEN_HOURS_DAYLIGHT]
  assert ten.is_achieved
  assert ten.achieved_date.month == 2
  one = found[MilestoneType.ONE_HOUR_GAINED]
  assert one.is_achieved
  assert date(2025, 1, 15) <= one.achieved_date <= date(2025, 2, 15)
  assert found[MilestoneType.TWO_HOURS_GAINED].achieved_date > one.achieved_date
  assert found[MilestoneType.MORE_LIGHT_THAN_DARK].achieved_date == date(2025, 3, 20)
  assert all(m.is_achieved for m in milestones)


def test_year_end_uses_following_equinox():
  found = _by_type(MilestoneProjector(MINNEAPOLIS).update_milestones(date(2024, 12, 28)))
  assert found[MilestoneType.MORE_LIGHT_THAN_DARK].target_date == date(2025, 3, 20)


def test_crossing_beyond_window_is_omitted():
  settings = MilestoneSettings(search_window_days=5, enabled=[MilestoneType.TEN_HOURS_DAYLIGHT])
  assert MilestoneProjector(MINNEAPOLIS, settings=settings).update_milestones(date(2025, 1, 1)) == []


def test_equator_has_no_gain_estimate():
  found = _by_type(MilestoneProjector(GeoCoordinate(0.0, 0.0)).update_milestones(date(2025, 2, 1)))
  assert MilestoneType.ONE_HOUR_GAINED not in found
  assert found[MilestoneType.TEN_HOURS_DAYLIGHT].is_achieved


def test_polar_night_skips_undeterminable():
  settings = MilestoneSettings(enabled=[MilestoneType.TEN_HOURS_DAYLIGHT, MilestoneType.ONE_HOUR_GAINED])
  assert MilestoneProjector(GeoCoordinate(80.0, 0.0), settings=settings).update_milestones(date(2025, 1, 10)) == []


def test_sort_milestones():
  items = [
    Milestone.pending(MilestoneType.TWO_HOURS_GAINED, date(2025, 3, 1), 30),
    Milestone.achieved(MilestoneType.EARLIEST_SUNSET_BEHIND, date(2024, 12, 10)),
    Milestone.pending(MilestoneType.ONE_HOUR_GAINED, date(2025, 2, 5), 5),
    Milestone.achieved(MilestoneType.LATEST_SUNRISE_BEHIND, date(2025, 1, 3)),
  ]
  ordered = sort_milestones(items)
  assert [m.type for m in ordered] == [
    MilestoneType.LATEST_SUNRISE_BEHIND,
    MilestoneType.EARLIEST_SUNSET_BEHIND,
    MilestoneType.ONE_HOUR_GAINED,
    MilestoneType.TWO_HOURS_GAINED,
  ]


def test_milestone_state_is_exclusive():
  with pytest.raises(ValueError):
    Milestone(MilestoneType.ONE_HOUR_GAINED, True, achieved_date=date(2025, 1, 1), target_date=date(2025, 2, 1))
  with pytest.raises(ValueError):
    Milestone(MilestoneType.ONE_HOUR_GAINED, False, target_date=date(2025, 2, 1))
  with pytest.raises(ValueError):
    Milestone.pending(MilestoneType.ONE_HOUR_GAINED, date(2025, 2, 1), -1)
  m = Milestone.pending(MilestoneType.ONE_HOUR_GAINED, date(2025, 2, 1), 3)
  assert m.id == "one_hour_gained"
  assert m.type.title == "1 hour gained"
  assert m.target_date - timedelta(days=3) == date(2025, 1, 29)
