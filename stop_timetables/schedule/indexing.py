"""Reverse index from stop to the trips visiting it."""

import logging
from dataclasses import dataclass, field

from stop_timetables.gtfs.models import Feed, Route, StopTime, Trip

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StopVisit:
    """A trip of a route calling at a stop."""

    route: Route
    trip: Trip
    stop_time: StopTime


@dataclass
class StopIndex:
    """Stop id -> visits, ordered routes -> trips -> stop times."""

    visits: dict[str, list[StopVisit]] = field(default_factory=dict)

    def visits_for(self, stop_id: str) -> list[StopVisit]:
        return self.visits.get(stop_id, [])


def build_stop_index(feed: Feed) -> StopIndex:
    """Walk every route, its trips and their stop times once."""
    logger.info("Building stop index")

    trips_by_route: dict[str, list[Trip]] = {}
    for trip in feed.trips.values():
        if trip.route_id not in trips_by_route:
            trips_by_route[trip.route_id] = []
        trips_by_route[trip.route_id].append(trip)

    index = StopIndex()
    visit_count = 0

    for route in feed.routes.values():
        for trip in trips_by_route.get(route.route_id, []):
            for st in trip.stop_times:
                if st.stop_id not in index.visits:
                    index.visits[st.stop_id] = []
                index.visits[st.stop_id].append(StopVisit(route=route, trip=trip, stop_time=st))
                visit_count += 1

    logger.info(f"Built index with {visit_count} visits across {len(index.visits)} stops")

    return index
