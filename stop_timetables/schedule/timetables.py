"""Departure boards across all configured stops."""

import logging
from datetime import date

from stop_timetables.gtfs.models import ConfiguredStop, Departure
from stop_timetables.schedule.query import get_next_departures

logger = logging.getLogger(__name__)


def collect_departures(
    stops: list[ConfiguredStop],
    on_date: date,
    weekday: int,
    unknown_last: bool = False,
) -> list[Departure]:
    """Query each stop independently, keeping the configured stop order."""
    departures: list[Departure] = []

    for stop in stops:
        records = get_next_departures(stop.schedule, on_date, weekday, unknown_last)
        logger.debug(f"{stop.name}: {len(records)} departures on {on_date}")
        departures.append(Departure(stop=stop, departures=records))

    return departures
