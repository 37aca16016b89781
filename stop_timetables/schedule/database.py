"""Per-stop schedule construction."""

import logging

from stop_timetables.gtfs.models import (
    ConfiguredStop,
    Feed,
    MissingServiceCalendarError,
    ScheduleRecord,
    ServiceCalendar,
    Stop,
    StopSchedule,
)
from stop_timetables.schedule.indexing import StopIndex, build_stop_index

logger = logging.getLogger(__name__)


def build_stop_schedule(feed: Feed, stop: Stop, index: StopIndex | None = None) -> StopSchedule:
    """
    Collect every trip of every route calling at stop.

    One record is produced per stop time referencing the stop. A trip whose
    service has no calendar aborts the whole schedule.

    Args:
        feed: Parsed GTFS feed
        stop: Stop to build the schedule for
        index: Stop index of the same feed, built on demand when omitted

    Returns:
        StopSchedule of the stop
    """
    if index is None:
        index = build_stop_index(feed)

    records: list[ScheduleRecord] = []

    for visit in index.visits_for(stop.stop_id):
        try:
            calendar = feed.get_calendar(visit.trip.service_id)
        except MissingServiceCalendarError as e:
            raise MissingServiceCalendarError(e.service_id, visit.trip.trip_id) from None

        records.append(
            ScheduleRecord(
                route=visit.route.route_short_name,
                trip=visit.trip.service_id,
                calendar=ServiceCalendar.from_calendar(calendar),
                stop_time=visit.stop_time.arrival_time,
                stop=stop.name,
            )
        )

    logger.debug(f"Stop {stop.stop_id} ({stop.name}): {len(records)} records")

    return StopSchedule(records=records)


def build_stop_schedules(
    feed: Feed, stops: list[Stop], index: StopIndex | None = None
) -> list[ConfiguredStop]:
    """Build the schedules of all chosen stops from one shared index."""
    logger.info(f"Building schedules for {len(stops)} stops")

    if index is None:
        index = build_stop_index(feed)

    configured: list[ConfiguredStop] = []
    for stop in stops:
        schedule = build_stop_schedule(feed, stop, index)
        configured.append(ConfiguredStop(stop_id=stop.stop_id, name=stop.name, schedule=schedule))
        logger.info(f"Stop {stop.name} has {len(schedule)} records in database")

    return configured
