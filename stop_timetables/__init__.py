"""Stop Timetables - Scheduled departures from chosen stops of a GTFS feed."""

from stop_timetables.api import get_departures, setup, validate
from stop_timetables.version import VERSION

__version__ = VERSION
__all__ = ["VERSION", "get_departures", "setup", "validate"]
