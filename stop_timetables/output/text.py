"""Plain-text departure board."""

from stop_timetables.gtfs.models import Departure

NO_DEPARTURES = "No departures"


def format_time_of_day(seconds: int) -> str:
    """Format seconds since midnight as HH:MM, wrapping past midnight."""
    hours = (seconds // 3600) % 24
    minutes = (seconds % 3600) // 60
    return f"{hours:02d}:{minutes:02d}"


def render_departures(departures: list[Departure], limit: int | None = None) -> str:
    """
    Render one section per stop: name, underline, then route, service and time.

    A negative limit is treated as no limit.
    """
    lines: list[str] = []

    for departure in departures:
        name = departure.stop.name
        lines.append(name)
        lines.append("-" * len(name))

        rows = [
            f"{record.route} {record.trip} {format_time_of_day(record.stop_time)}"
            for record in departure.departures
            if record.stop_time is not None
        ]
        if limit is not None and limit >= 0:
            rows = rows[:limit]

        lines.extend(rows or [NO_DEPARTURES])
        lines.append("")

    return "\n".join(lines).rstrip("\n")
