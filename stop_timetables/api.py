"""Public API for stop-timetables."""

import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path

from stop_timetables.config import save_config
from stop_timetables.feed_source import retrieve_data_file
from stop_timetables.gtfs.models import AppConfig, Departure, ValidationReport
from stop_timetables.gtfs.reader import load_feed
from stop_timetables.gtfs.validator import FeedValidator
from stop_timetables.schedule.database import build_stop_schedules
from stop_timetables.schedule.indexing import build_stop_index
from stop_timetables.schedule.timetables import collect_departures
from stop_timetables.wizard import StopWizard

logger = logging.getLogger(__name__)


def setup(
    source: str,
    conf_dir: Path,
    input_func: Callable[[str], str] = input,
    output_func: Callable[[str], None] = print,
) -> AppConfig:
    """
    Retrieve a feed, let the user choose stops and persist their schedules.

    Args:
        source: URL or local path of the GTFS feed
        conf_dir: Configuration directory
        input_func: Prompt function used by the wizard
        output_func: Output function used by the wizard

    Returns:
        The saved AppConfig
    """
    logger.info(f"Setting up configuration in {conf_dir}")
    start_time = datetime.now()

    data_file_path = retrieve_data_file(source, conf_dir)
    feed = load_feed(str(data_file_path))

    index = build_stop_index(feed)
    stops = StopWizard(feed, input_func, output_func, index=index).run()

    config = AppConfig(
        data_file_url=source,
        data_file_path=data_file_path,
        stops=build_stop_schedules(feed, stops, index),
    )
    save_config(config, conf_dir)

    elapsed = (datetime.now() - start_time).total_seconds()
    logger.info(f"Setup completed in {elapsed:.2f}s")

    return config


def get_departures(
    config: AppConfig,
    when: datetime | None = None,
    unknown_last: bool = False,
) -> list[Departure]:
    """Departures of every configured stop on the date of when (default: now)."""
    if when is None:
        when = datetime.now()

    logger.info(f"Querying departures for {when:%Y-%m-%d %H:%M}")
    on_date = when.date()
    return collect_departures(config.stops, on_date, on_date.weekday(), unknown_last)


def validate(input_path: str) -> ValidationReport:
    """Validate a GTFS directory or archive."""
    return FeedValidator(load_feed(input_path)).validate()
