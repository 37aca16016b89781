"""Departure queries over a stop schedule."""

from collections.abc import Callable
from datetime import date

from stop_timetables.gtfs.models import WEEKDAYS, ScheduleRecord, StopSchedule


def _stop_time_key(unknown_last: bool) -> Callable[[ScheduleRecord], tuple[bool, int]]:
    # False < True, so the flag decides which side records without a time land on
    if unknown_last:
        return lambda r: (r.stop_time is None, r.stop_time or 0)
    return lambda r: (r.stop_time is not None, r.stop_time or 0)


def get_next_departures(
    schedule: StopSchedule,
    on_date: date,
    weekday: int,
    unknown_last: bool = False,
) -> list[ScheduleRecord]:
    """
    Return records whose service runs on on_date, ordered by time of day.

    A record matches when on_date lies within its calendar's inclusive range
    and the calendar runs on weekday (0 is Monday). Records without a known
    time sort first unless unknown_last is set. A weekday outside 0..6
    matches nothing.
    """
    if not 0 <= weekday < len(WEEKDAYS):
        return []

    matching = [
        r
        for r in schedule.records
        if r.calendar.covers(on_date) and r.calendar.runs_on_weekday(weekday)
    ]

    # list.sort is stable: equal times keep feed order
    matching.sort(key=_stop_time_key(unknown_last))

    return matching
