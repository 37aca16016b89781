"""GTFS data reader and normalizer."""

import csv
import io
import logging
import zipfile
from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path

from stop_timetables.gtfs.models import Calendar, Feed, Route, Stop, StopTime, Trip

logger = logging.getLogger(__name__)


class GTFSReader:
    """Read and normalize a GTFS feed from a directory or a zip archive."""

    def __init__(self, gtfs_path: str) -> None:
        """Initialize reader with GTFS directory or zip path."""
        self.gtfs_path = Path(gtfs_path)
        if self.gtfs_path.is_dir():
            self.is_archive = False
        elif self.gtfs_path.is_file() and zipfile.is_zipfile(self.gtfs_path):
            self.is_archive = True
        else:
            raise ValueError(f"GTFS path not found or not a directory/zip archive: {gtfs_path}")

        # Data storage
        self.stops: list[Stop] = []
        self.routes: list[Route] = []
        self.trips: list[Trip] = []
        self.stop_times: list[StopTime] = []
        self.calendar: list[Calendar] = []

    def read_all(self) -> None:
        """Read all GTFS files."""
        logger.info(f"Reading GTFS data from {self.gtfs_path}")
        self.read_stops()
        self.read_routes()
        self.read_calendar()
        self.read_trips()
        self.read_stop_times()
        logger.info(
            f"Loaded {len(self.stops)} stops, {len(self.routes)} routes, "
            f"{len(self.trips)} trips, {len(self.stop_times)} stop_times, "
            f"{len(self.calendar)} calendar entries"
        )

    def build_feed(self) -> Feed:
        """Assemble the parsed tables into a Feed with stop times attached to trips."""
        stop_times_by_trip: dict[str, list[StopTime]] = {}
        for st in self.stop_times:
            if st.trip_id not in stop_times_by_trip:
                stop_times_by_trip[st.trip_id] = []
            stop_times_by_trip[st.trip_id].append(st)

        trips: dict[str, Trip] = {}
        for trip in self.trips:
            trips[trip.trip_id] = Trip(
                trip_id=trip.trip_id,
                route_id=trip.route_id,
                service_id=trip.service_id,
                stop_times=tuple(stop_times_by_trip.get(trip.trip_id, ())),
            )

        return Feed(
            routes={route.route_id: route for route in self.routes},
            trips=trips,
            stops={stop.stop_id: stop for stop in self.stops},
            calendars={cal.service_id: cal for cal in self.calendar},
        )

    def _exists(self, name: str) -> bool:
        if self.is_archive:
            with zipfile.ZipFile(self.gtfs_path) as archive:
                return name in archive.namelist()
        return (self.gtfs_path / name).exists()

    @contextmanager
    def _open(self, name: str) -> Iterator[io.TextIOBase]:
        if self.is_archive:
            with (
                zipfile.ZipFile(self.gtfs_path) as archive,
                archive.open(name) as raw,
                io.TextIOWrapper(raw, encoding="utf-8-sig", newline="") as f,
            ):
                yield f
        else:
            with open(self.gtfs_path / name, encoding="utf-8-sig", newline="") as f:
                yield f

    def _require(self, name: str) -> None:
        if not self._exists(name):
            raise FileNotFoundError(f"Required file not found: {self.gtfs_path / name}")

    def read_calendar(self) -> None:
        """Read calendar.txt."""
        if not self._exists("calendar.txt"):
            logger.warning("calendar.txt not found, no trip will have a service calendar")
            return

        with self._open("calendar.txt") as f:
            reader = csv.DictReader(f)
            for row in reader:
                calendar = Calendar(
                    service_id=row["service_id"],
                    monday=row["monday"] == "1",
                    tuesday=row["tuesday"] == "1",
                    wednesday=row["wednesday"] == "1",
                    thursday=row["thursday"] == "1",
                    friday=row["friday"] == "1",
                    saturday=row["saturday"] == "1",
                    sunday=row["sunday"] == "1",
                    start_date=self._parse_date(row["start_date"]),
                    end_date=self._parse_date(row["end_date"]),
                )
                self.calendar.append(calendar)

    def read_stops(self) -> None:
        """Read stops.txt."""
        self._require("stops.txt")

        with self._open("stops.txt") as f:
            reader = csv.DictReader(f)
            for row in reader:
                stop = Stop(stop_id=row["stop_id"], name=row.get("stop_name", ""))
                self.stops.append(stop)

        # Sort by stop_id for a stable order
        self.stops.sort(key=lambda s: s.stop_id)

    def read_routes(self) -> None:
        """Read routes.txt."""
        self._require("routes.txt")

        with self._open("routes.txt") as f:
            reader = csv.DictReader(f)
            for row in reader:
                route = Route(
                    route_id=row["route_id"],
                    route_short_name=row.get("route_short_name", ""),
                    route_long_name=row.get("route_long_name", ""),
                    route_type=int(row.get("route_type") or 3),
                )
                self.routes.append(route)

        self.routes.sort(key=lambda r: r.route_id)

    def read_trips(self) -> None:
        """Read trips.txt."""
        self._require("trips.txt")

        with self._open("trips.txt") as f:
            reader = csv.DictReader(f)
            for row in reader:
                trip = Trip(
                    trip_id=row["trip_id"],
                    route_id=row["route_id"],
                    service_id=row["service_id"],
                )
                self.trips.append(trip)

        self.trips.sort(key=lambda t: t.trip_id)

    def read_stop_times(self) -> None:
        """Read stop_times.txt and normalize times."""
        self._require("stop_times.txt")

        stop_times_raw: list[StopTime] = []
        with self._open("stop_times.txt") as f:
            reader = csv.DictReader(f)
            for row in reader:
                stop_time = StopTime(
                    trip_id=row["trip_id"],
                    stop_id=row["stop_id"],
                    arrival_time=self._parse_time(row.get("arrival_time", "")),
                    departure_time=self._parse_time(row.get("departure_time", "")),
                    stop_sequence=int(row["stop_sequence"]),
                )
                stop_times_raw.append(stop_time)

        # Sort by trip_id, then stop_sequence for normalization
        stop_times_raw.sort(key=lambda st: (st.trip_id, st.stop_sequence))
        self.stop_times = stop_times_raw

    @staticmethod
    def _parse_time(time_str: str | None) -> int | None:
        """Parse HH:MM:SS to seconds since midnight, supporting >24h.

        Empty values are allowed for intermediate stops and yield None.
        """
        if time_str is None or not time_str.strip():
            return None

        parts = time_str.strip().split(":")
        if len(parts) != 3:
            raise ValueError(f"Invalid time format: {time_str}")

        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2])

        return hours * 3600 + minutes * 60 + seconds

    @staticmethod
    def _parse_date(date_str: str) -> date:
        """Parse a GTFS YYYYMMDD date."""
        try:
            return datetime.strptime(date_str.strip(), "%Y%m%d").date()
        except ValueError:
            raise ValueError(f"Invalid date format: {date_str}") from None


def load_feed(gtfs_path: str) -> Feed:
    """Read a GTFS directory or archive into a Feed."""
    reader = GTFSReader(gtfs_path)
    reader.read_all()
    return reader.build_feed()
