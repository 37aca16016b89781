"""GTFS feed consistency validator."""

import logging

from stop_timetables.gtfs.models import Feed, ValidationReport

logger = logging.getLogger(__name__)


class FeedValidator:
    """Validate a parsed feed before schedules are built from it."""

    def __init__(self, feed: Feed) -> None:
        """Initialize validator with a parsed feed."""
        self.feed = feed
        self.errors: list[str] = []
        self.warnings: list[str] = []

    def validate(self) -> ValidationReport:
        """Run all validation checks."""
        logger.info("Validating GTFS feed")

        self._validate_stops()
        self._validate_routes()
        self._validate_calendars()
        self._validate_trips()
        self._validate_stop_times()

        valid = len(self.errors) == 0

        stats = {
            "stops": len(self.feed.stops),
            "routes": len(self.feed.routes),
            "trips": len(self.feed.trips),
            "stop_times": sum(len(trip.stop_times) for trip in self.feed.trips.values()),
            "calendars": len(self.feed.calendars),
        }

        report = ValidationReport(
            valid=valid,
            errors=self.errors.copy(),
            warnings=self.warnings.copy(),
            stats=stats,
        )

        if not valid:
            logger.error(f"Validation failed with {len(self.errors)} errors")
        elif self.warnings:
            logger.warning(f"Validation passed with {len(self.warnings)} warnings")
        else:
            logger.info("Validation passed")

        return report

    def _validate_stops(self) -> None:
        for stop in self.feed.stops.values():
            if not stop.name:
                self.warnings.append(f"Stop {stop.stop_id} has empty name")

    def _validate_routes(self) -> None:
        if not self.feed.routes:
            self.errors.append("No routes found in GTFS data")

    def _validate_calendars(self) -> None:
        for cal in self.feed.calendars.values():
            if cal.start_date > cal.end_date:
                self.errors.append(
                    f"Calendar {cal.service_id} ends before it starts: "
                    f"{cal.start_date} > {cal.end_date}"
                )

    def _validate_trips(self) -> None:
        """Validate trips reference valid routes and calendars."""
        for trip in self.feed.trips.values():
            if trip.route_id not in self.feed.routes:
                self.errors.append(
                    f"Trip {trip.trip_id} references non-existent route {trip.route_id}"
                )
            if trip.service_id not in self.feed.calendars:
                self.errors.append(
                    f"Trip {trip.trip_id} references service {trip.service_id} "
                    f"with no calendar entry"
                )
            if not trip.stop_times:
                self.warnings.append(f"Trip {trip.trip_id} has no stop times")

    def _validate_stop_times(self) -> None:
        missing_arrivals = 0
        for trip in self.feed.trips.values():
            for st in trip.stop_times:
                if st.stop_id not in self.feed.stops:
                    self.errors.append(
                        f"Stop time for trip {trip.trip_id} references non-existent stop {st.stop_id}"
                    )
                if st.arrival_time is None:
                    missing_arrivals += 1

        if missing_arrivals:
            self.warnings.append(f"{missing_arrivals} stop times have no arrival time")
