"""Coordinator that ties the daylight engines to one configured location."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from typing import List, Optional, Tuple
import logging

from .core import comparison
from .core.comparison import DaylightComparisonEngine, velocity_fraction
from .core.daylight import Daylight
from .core.milestones import MilestoneProjector
from .core.notices import Notice, build_notice, next_notification_time, preview_message, widget_summary
from .core.seasons import SeasonalCalendar
from .errors import MissingReferenceError
from .io.schema import WidgetSummary
from .model.config import AppConfig
from .model.geo import GeoCoordinate
from .model.milestones import Milestone
from .model.seasons import EquinoxType, SeasonalYear, SeasonClassification, SolsticeType
from .model.snapshots import ComparisonResult, DaylightSnapshot
from .runtime import SnapshotStore

logger = logging.getLogger(__name__)


@dataclass
class DailyReport:
    """Everything the main screen shows for one day."""
    day: date
    snapshot: Optional[DaylightSnapshot]
    comparison: Optional[ComparisonResult]
    velocity_seconds: Optional[int]
    peak_day: Optional[date]
    peak_velocity_seconds: Optional[int]
    velocity_fraction: Optional[float]
    season: SeasonClassification
    progress: float
    days_since_solstice: int
    days_until_equinox: Optional[Tuple[int, EquinoxType]]
    days_until_solstice: Optional[Tuple[int, SolsticeType]]
    milestones: List[Milestone] = field(default_factory=list)


class LongerDays:
    """Daylight tracking for one location, backed by a snapshot store."""

    def __init__(
        self,
        config: Optional[AppConfig] = None,
        coordinate: Optional[GeoCoordinate] = None,
        tz: Optional[tzinfo] = None,
        store: Optional[SnapshotStore] = None,
    ):
        """Initialize the coordinator.

        Args:
            config: Application config (default: built-in defaults without a location)
            coordinate: Location override; required when config has no location
            tz: Timezone override (default: the config location's zone, else UTC)
            store: Snapshot store (default: one at config.store_path, else in-memory)
        """
        self.config = config or AppConfig()
        location = self.config.location
        if coordinate is None:
            if location is None:
                raise ValueError("A coordinate is required when the config has no location")
            coordinate = location.coordinate()
        self.coordinate = coordinate
        self.tz = tz or (location.tzinfo() if location else timezone.utc)
        self.store = store or SnapshotStore(self.config.store_path)

        self.calendar = SeasonalCalendar(self.tz)
        self.daylight = Daylight(self.coordinate, self.tz)
        self.comparison_engine = DaylightComparisonEngine(self.coordinate, self.tz, self.calendar)
        self.projector = MilestoneProjector(self.coordinate, self.tz, self.config.milestones, self.calendar)

        logger.info(
            f"Tracking daylight at ({self.coordinate.latitude}, {self.coordinate.longitude}) in {self.tz}"
        )

    # Solar position

    def calculate_daylight(self, day: date) -> Optional[DaylightSnapshot]:
        return self.daylight.snapshot(day)

    # Comparisons

    def daily_change_seconds(self, previous: date, current: date) -> Optional[int]:
        return comparison.daily_change_seconds(previous, current, self.coordinate, self.tz)

    def cumulative_change_seconds(self, since: date, to: date) -> Optional[int]:
        return comparison.cumulative_change_seconds(since, to, self.coordinate, self.tz)

    def daylight_velocity(self, day: date) -> Optional[int]:
        return comparison.daylight_velocity(day, self.coordinate, self.tz)

    def peak_velocity(self, day: date) -> Optional[Tuple[date, int]]:
        """Peak rate of change for the half-year containing day.

        Returns:
            (equinox day, seconds per day), or None if the equinox has no velocity
        """
        try:
            return self.comparison_engine.peak_velocity(day)
        except MissingReferenceError as e:
            logger.debug(f"Peak velocity unavailable for {day}: {e}")
            return None

    def recent_history(self, days: int, ending_on: date) -> List[Tuple[date, int]]:
        return comparison.recent_history(days, ending_on, self.coordinate, self.tz)

    def compare(self, today: date) -> ComparisonResult:
        """Compare today against the stored references, persisting a fresh solstice reference.

        Raises:
            MissingReferenceError: If today, yesterday or the solstice has no daylight
        """
        outcome = self.comparison_engine.compare(today, self.store.yesterday, self.store.solstice)
        if self.store.apply(outcome):
            logger.info(f"Stored new solstice reference for {outcome.result.reference_solstice_date}")
        return outcome.result

    # Seasons

    def seasonal_year(self, year: int) -> SeasonalYear:
        return self.calendar.seasonal_year(year)

    def classify(self, day: date) -> SeasonClassification:
        return self.calendar.classify(day)

    def most_recent_solstice(self, day: date) -> Tuple[date, SolsticeType]:
        instant, kind = self.calendar.most_recent_solstice(day)
        return self.calendar.event_day(instant), kind

    def days_until_equinox(self, day: date) -> Optional[Tuple[int, EquinoxType]]:
        return self.calendar.days_until_equinox(day)

    def days_until_solstice(self, day: date) -> Optional[Tuple[int, SolsticeType]]:
        return self.calendar.days_until_solstice(day)

    def progress_through_half_year(self, day: date) -> float:
        return self.calendar.progress_through_half_year(day)

    # Milestones

    def update_milestones(self, day: date) -> List[Milestone]:
        return self.projector.update_milestones(day)

    # Aggregates

    def report(self, day: date) -> DailyReport:
        """Build the full daily report for day.

        Args:
            day: Calendar day in the tracked timezone

        Returns:
            DailyReport; numbers that cannot be computed are None
        """
        try:
            result = self.compare(day)
        except MissingReferenceError as e:
            logger.warning(f"Comparison unavailable for {day}: {e}")
            result = None

        velocity = self.daylight_velocity(day)
        peak = self.peak_velocity(day)
        fraction = None
        if velocity is not None and peak is not None:
            fraction = velocity_fraction(velocity, peak[1])

        return DailyReport(
            day=day,
            snapshot=self.calculate_daylight(day),
            comparison=result,
            velocity_seconds=velocity,
            peak_day=peak[0] if peak else None,
            peak_velocity_seconds=peak[1] if peak else None,
            velocity_fraction=fraction,
            season=self.classify(day),
            progress=self.progress_through_half_year(day),
            days_since_solstice=self.calendar.days_since_solstice(day),
            days_until_equinox=self.days_until_equinox(day),
            days_until_solstice=self.days_until_solstice(day),
            milestones=self.update_milestones(day),
        )

    def next_notification(self, now: datetime) -> Optional[Tuple[datetime, Notice]]:
        """Work out the next notification and record today's snapshot.

        Args:
            now: Current aware datetime

        Returns:
            (delivery instant, notice), or None when paused or there is nothing to say
        """
        prefs = self.config.preferences
        scheduled = next_notification_time(now, self.coordinate, prefs, self.tz, self.calendar)
        if scheduled is None:
            logger.info("Notifications paused for summer")
            return None
        target, fire_at = scheduled

        try:
            result = self.compare(target)
        except MissingReferenceError as e:
            logger.debug(f"Notification without comparison: {e}")
            result = None
        notice = build_notice(target, self.coordinate, prefs, result, self.tz, self.calendar)
        if notice is None:
            return None

        today = now.astimezone(self.tz).date()
        snap = self.calculate_daylight(today)
        if snap is not None:
            self.store.store_daylight(snap)
        return fire_at, notice

    def widget(self, now: datetime) -> WidgetSummary:
        return widget_summary(now, self.coordinate, self.tz, self.calendar)

    def preview(self, day: date) -> str:
        """Text the notification for day would carry with the current preferences."""
        return preview_message(day, self.coordinate, self.config.preferences, self.tz)

    def reset_references(self) -> None:
        """Forget the stored "yesterday" and solstice snapshots, e.g. after a location change."""
        self.store.clear()
        logger.info("Cleared stored daylight references")
