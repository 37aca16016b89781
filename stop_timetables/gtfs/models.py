"""Data models for GTFS feeds and stop schedules."""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path

WEEKDAYS = ("monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday")


class MissingServiceCalendarError(LookupError):
    """A trip references a service id with no calendar entry in the feed."""

    def __init__(self, service_id: str, trip_id: str | None = None) -> None:
        self.service_id = service_id
        self.trip_id = trip_id
        message = f"No calendar found for service {service_id!r}"
        if trip_id is not None:
            message += f" (referenced by trip {trip_id!r})"
        super().__init__(message)


@dataclass(frozen=True)
class Stop:
    """GTFS stop."""

    stop_id: str
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class Route:
    """GTFS route."""

    route_id: str
    route_short_name: str
    route_long_name: str = ""
    route_type: int = 3


@dataclass(frozen=True)
class StopTime:
    """GTFS stop time."""

    trip_id: str
    stop_id: str
    arrival_time: int | None  # seconds since midnight, None when not given
    departure_time: int | None
    stop_sequence: int


@dataclass(frozen=True)
class Trip:
    """GTFS trip with its stop times ordered by stop_sequence."""

    trip_id: str
    route_id: str
    service_id: str
    stop_times: tuple[StopTime, ...] = ()


@dataclass(frozen=True)
class Calendar:
    """GTFS calendar entry."""

    service_id: str
    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: date
    end_date: date


@dataclass
class Feed:
    """Parsed GTFS feed keyed by entity id."""

    routes: dict[str, Route] = field(default_factory=dict)
    trips: dict[str, Trip] = field(default_factory=dict)
    stops: dict[str, Stop] = field(default_factory=dict)
    calendars: dict[str, Calendar] = field(default_factory=dict)

    def get_calendar(self, service_id: str) -> Calendar:
        """Look up the calendar of a service, raising if the feed has none."""
        try:
            return self.calendars[service_id]
        except KeyError:
            raise MissingServiceCalendarError(service_id) from None


@dataclass(frozen=True)
class ServiceCalendar:
    """Weekdays and inclusive date range a service runs on."""

    monday: bool
    tuesday: bool
    wednesday: bool
    thursday: bool
    friday: bool
    saturday: bool
    sunday: bool
    start_date: date
    end_date: date

    @classmethod
    def from_calendar(cls, cal: Calendar) -> "ServiceCalendar":
        return cls(
            monday=cal.monday,
            tuesday=cal.tuesday,
            wednesday=cal.wednesday,
            thursday=cal.thursday,
            friday=cal.friday,
            saturday=cal.saturday,
            sunday=cal.sunday,
            start_date=cal.start_date,
            end_date=cal.end_date,
        )

    def runs_on_weekday(self, weekday: int) -> bool:
        """Return the flag for weekday, 0 being Monday as in date.weekday()."""
        return bool(getattr(self, WEEKDAYS[weekday]))

    def covers(self, on_date: date) -> bool:
        return self.start_date <= on_date <= self.end_date


@dataclass(frozen=True)
class ScheduleRecord:
    """One visit of a trip to the scheduled stop."""

    route: str  # route short name
    trip: str  # service id of the trip
    calendar: ServiceCalendar
    stop_time: int | None  # arrival, seconds since midnight
    stop: str


@dataclass
class StopSchedule:
    """All schedule records of a single stop, in feed traversal order."""

    records: list[ScheduleRecord] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.records)


@dataclass
class ConfiguredStop:
    """Stop chosen by the user together with its prebuilt schedule."""

    stop_id: str
    name: str
    schedule: StopSchedule = field(default_factory=StopSchedule)


@dataclass
class Departure:
    """Departures of one configured stop for a query."""

    stop: ConfiguredStop
    departures: list[ScheduleRecord] = field(default_factory=list)


@dataclass
class AppConfig:
    """Configuration persisted between runs."""

    data_file_url: str
    data_file_path: Path
    stops: list[ConfiguredStop] = field(default_factory=list)


@dataclass
class ValidationReport:
    """Report from validation process."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    stats: dict[str, int] = field(default_factory=dict)
