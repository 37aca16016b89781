"""Pytest configuration and fixtures."""

import zipfile
from collections.abc import Callable
from datetime import date
from pathlib import Path

import pytest

from stop_timetables.gtfs.models import Feed, ScheduleRecord, ServiceCalendar, StopSchedule
from stop_timetables.gtfs.reader import load_feed


@pytest.fixture
def gtfs_minimal() -> Path:
    """Path to minimal GTFS fixture."""
    return Path(__file__).parent / "fixtures" / "gtfs_minimal"


@pytest.fixture
def gtfs_edgecases() -> Path:
    """Path to edge cases GTFS fixture."""
    return Path(__file__).parent / "fixtures" / "gtfs_edgecases"


@pytest.fixture
def gtfs_minimal_zip(gtfs_minimal: Path, tmp_path: Path) -> Path:
    """Minimal fixture packed into a zip archive."""
    archive_path = tmp_path / "gtfs_minimal.zip"
    with zipfile.ZipFile(archive_path, "w") as archive:
        for file_path in sorted(gtfs_minimal.iterdir()):
            archive.write(file_path, arcname=file_path.name)
    return archive_path


@pytest.fixture
def minimal_feed(gtfs_minimal: Path) -> Feed:
    """Parsed minimal fixture."""
    return load_feed(str(gtfs_minimal))


@pytest.fixture
def conf_dir(tmp_path: Path) -> Path:
    """Temporary configuration directory."""
    return tmp_path / "config"


def make_calendar(
    days: str,
    start: date = date(2020, 1, 1),
    end: date = date(2020, 12, 31),
) -> ServiceCalendar:
    """Calendar active on the days marked "1" in a Mon..Sun mask such as "1111100"."""
    flags = [c == "1" for c in days]
    return ServiceCalendar(*flags, start_date=start, end_date=end)


@pytest.fixture
def calendar_factory() -> Callable[..., ServiceCalendar]:
    return make_calendar


@pytest.fixture
def weekday_calendar() -> ServiceCalendar:
    return make_calendar("1111100")


@pytest.fixture
def weekend_calendar() -> ServiceCalendar:
    return make_calendar("0000011")


@pytest.fixture
def sample_schedule(
    weekday_calendar: ServiceCalendar, weekend_calendar: ServiceCalendar
) -> StopSchedule:
    """Route A at 08:00 on weekdays, B daily with no time, C at 07:00 on weekends."""
    return StopSchedule(
        records=[
            ScheduleRecord("A", "WK", weekday_calendar, 28800, "Main Square"),
            ScheduleRecord("B", "DAILY", make_calendar("1111111"), None, "Main Square"),
            ScheduleRecord("C", "WE", weekend_calendar, 25200, "Main Square"),
        ]
    )
