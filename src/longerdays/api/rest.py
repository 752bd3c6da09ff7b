"""REST API exposing the daylight core to the notification scheduler, UI and widget."""

from dataclasses import asdict
from datetime import date, datetime
from typing import Any, Dict, Optional
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .. import __version__
from ..core import comparison, daylight
from ..core.comparison import DaylightComparisonEngine
from ..core.milestones import MilestoneProjector
from ..errors import MissingReferenceError, OutOfBoundsInputError
from ..model.geo import GeoCoordinate
from ..service import LongerDays

logger = logging.getLogger(__name__)


def _snapshot_dict(snap) -> Dict[str, Any]:
    data = asdict(snap)
    data["formatted_duration"] = snap.formatted_duration
    return data


class DaylightRestAPI:
    """HTTP surface over a LongerDays coordinator."""

    def __init__(self, service: LongerDays):
        """Initialize REST API.

        Args:
            service: Coordinator bound to the tracked location
        """
        self.service = service
        self.app = FastAPI(
            title="LongerDays API",
            description="Daylight change, seasons and milestones for one location",
            version=__version__,
        )
        self._setup_error_handlers()
        self._setup_routes()

    def _today(self) -> date:
        return datetime.now(self.service.tz).date()

    def _coordinate(self, lat: Optional[float], lon: Optional[float]) -> GeoCoordinate:
        if lat is None and lon is None:
            return self.service.coordinate
        if lat is None or lon is None:
            raise HTTPException(status_code=400, detail="lat and lon must be given together")
        return GeoCoordinate(lat, lon)

    def _setup_error_handlers(self) -> None:
        """Map core errors to HTTP responses."""

        @self.app.exception_handler(OutOfBoundsInputError)
        async def out_of_bounds(request: Request, exc: OutOfBoundsInputError):
            return JSONResponse(status_code=422, content={"detail": str(exc)})

        @self.app.exception_handler(MissingReferenceError)
        async def missing_reference(request: Request, exc: MissingReferenceError):
            return JSONResponse(status_code=404, content={"detail": "comparison unavailable", "reason": str(exc)})

    def _setup_routes(self) -> None:
        """Setup all API routes."""
        service = self.service

        @self.app.get("/api/")
        async def api_discovery():
            """API discovery endpoint."""
            return {"message": "API running.", "version": __version__}

        @self.app.get("/api/config")
        async def get_config():
            """Get the tracked location."""
            return {
                "location_name": service.coordinate.name or "",
                "latitude": service.coordinate.latitude,
                "longitude": service.coordinate.longitude,
                "time_zone": str(service.tz),
            }

        @self.app.get("/api/daylight")
        async def get_daylight(day: Optional[date] = None, lat: Optional[float] = None, lon: Optional[float] = None):
            """Sunrise, sunset and twilight for a day."""
            day = day or self._today()
            snap = daylight.calculate_daylight(day, self._coordinate(lat, lon), service.tz)
            if snap is None:
                raise HTTPException(status_code=404, detail="No sunrise/sunset on this day")
            return _snapshot_dict(snap)

        @self.app.get("/api/change/daily")
        async def get_daily_change(previous: date, current: date, lat: Optional[float] = None, lon: Optional[float] = None):
            """Change in daylight between two days."""
            seconds = comparison.daily_change_seconds(previous, current, self._coordinate(lat, lon), service.tz)
            if seconds is None:
                raise MissingReferenceError(f"No daily change between {previous} and {current}")
            return {"previous": previous, "current": current, "seconds": seconds}

        @self.app.get("/api/change/cumulative")
        async def get_cumulative_change(since: date, to: date, lat: Optional[float] = None, lon: Optional[float] = None):
            """Change in daylight since a reference day."""
            seconds = comparison.cumulative_change_seconds(since, to, self._coordinate(lat, lon), service.tz)
            if seconds is None:
                raise MissingReferenceError(f"No cumulative change between {since} and {to}")
            return {"since": since, "to": to, "seconds": seconds}

        @self.app.get("/api/velocity")
        async def get_velocity(day: Optional[date] = None, lat: Optional[float] = None, lon: Optional[float] = None):
            """Rate of change of daylight and how it compares with the half-year's peak rate."""
            day = day or self._today()
            coordinate = self._coordinate(lat, lon)
            if coordinate is service.coordinate:
                engine = service.comparison_engine
            else:
                engine = DaylightComparisonEngine(coordinate, service.tz, service.calendar)
            seconds = engine.velocity(day)
            peak_day, peak_seconds = engine.peak_velocity(day)
            return {
                "day": day,
                "seconds_per_day": seconds,
                "peak_day": peak_day,
                "peak_seconds_per_day": peak_seconds,
                "fraction_of_peak": comparison.velocity_fraction(seconds, peak_seconds),
            }

        @self.app.get("/api/comparison")
        async def get_comparison(day: Optional[date] = None):
            """Daily and cumulative change against the stored references."""
            return asdict(service.compare(day or self._today()))

        @self.app.get("/api/seasons/{year}")
        async def get_seasonal_year(year: int):
            """Solstice and equinox instants for a year."""
            if not 1000 <= year <= 3000:
                raise HTTPException(status_code=422, detail="Year must be 1000 to 3000")
            return asdict(service.seasonal_year(year))

        @self.app.get("/api/season")
        async def get_season(day: Optional[date] = None):
            """Season, countdowns and progress through the half-year."""
            day = day or self._today()
            solstice_day, solstice_type = service.most_recent_solstice(day)
            equinox = service.days_until_equinox(day)
            solstice = service.days_until_solstice(day)
            return {
                "day": day,
                "season": service.classify(day),
                "most_recent_solstice": {"day": solstice_day, "type": solstice_type},
                "days_since_solstice": service.calendar.days_since_solstice(day),
                "days_until_equinox": {"days": equinox[0], "type": equinox[1]} if equinox else None,
                "days_until_solstice": {"days": solstice[0], "type": solstice[1]} if solstice else None,
                "progress": service.progress_through_half_year(day),
            }

        @self.app.get("/api/milestones")
        async def get_milestones(day: Optional[date] = None, lat: Optional[float] = None, lon: Optional[float] = None):
            """Ordered milestones for the gaining half-year."""
            day = day or self._today()
            coordinate = self._coordinate(lat, lon)
            if coordinate is service.coordinate:
                milestones = service.update_milestones(day)
            else:
                projector = MilestoneProjector(coordinate, service.tz, service.config.milestones)
                milestones = projector.update_milestones(day)
            return [
                {**asdict(m), "id": m.id, "title": m.type.title, "description": m.type.description}
                for m in milestones
            ]

        @self.app.get("/api/history")
        async def get_history(days: int = 7, day: Optional[date] = None):
            """Daily change for the last few days."""
            if not 1 <= days <= 60:
                raise HTTPException(status_code=422, detail="days must be 1 to 60")
            rows = service.recent_history(days, day or self._today())
            return [{"day": d, "change_seconds": s} for d, s in rows]

        @self.app.get("/api/widget")
        async def get_widget():
            """Widget summary for right now."""
            summary = service.widget(datetime.now(service.tz))
            return {
                **summary.model_dump(),
                "cumulative_formatted": summary.cumulative_formatted,
                "daily_formatted": summary.daily_formatted,
            }

        @self.app.get("/api/notification/preview")
        async def get_notification_preview(day: Optional[date] = None):
            """Notification text for a day under the configured preferences."""
            day = day or self._today()
            return {"day": day, "message": service.preview(day)}

        @self.app.delete("/api/snapshots")
        async def reset_snapshots():
            """Forget the stored yesterday and solstice references."""
            service.reset_references()
            return {"status": "cleared"}

        @self.app.get("/health")
        async def health():
            """Health check endpoint."""
            return {"status": "ok"}
