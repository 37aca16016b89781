"""Persisted configuration: feed location and configured stop schedules."""

import logging
import os
from datetime import date
from pathlib import Path
from typing import Any

import yaml

from stop_timetables.gtfs.models import (
    WEEKDAYS,
    AppConfig,
    ConfiguredStop,
    ScheduleRecord,
    ServiceCalendar,
    StopSchedule,
)
from stop_timetables.version import CONFIG_SCHEMA_VERSION

logger = logging.getLogger(__name__)

CONF_DIR = "stop-timetables"
CONF_FILE = "config.yaml"


def default_config_dir() -> Path:
    """Return $XDG_CONFIG_HOME/stop-timetables, or ~/.config/stop-timetables."""
    base = os.environ.get("XDG_CONFIG_HOME")
    root = Path(base) if base else Path.home() / ".config"
    return root / CONF_DIR


def config_file_path(conf_dir: Path) -> Path:
    return conf_dir / CONF_FILE


def _calendar_to_dict(cal: ServiceCalendar) -> dict[str, Any]:
    data: dict[str, Any] = {day: getattr(cal, day) for day in WEEKDAYS}
    data["start_date"] = cal.start_date.isoformat()
    data["end_date"] = cal.end_date.isoformat()
    return data


def _parse_date(value: Any) -> date:
    # safe_load already turns unquoted ISO dates into date objects
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


def _calendar_from_dict(data: dict[str, Any]) -> ServiceCalendar:
    return ServiceCalendar(
        **{day: bool(data[day]) for day in WEEKDAYS},
        start_date=_parse_date(data["start_date"]),
        end_date=_parse_date(data["end_date"]),
    )


def config_to_dict(config: AppConfig) -> dict[str, Any]:
    """Convert configuration to plain YAML-serializable data."""
    return {
        "schema_version": CONFIG_SCHEMA_VERSION,
        "data_file_url": config.data_file_url,
        "data_file_path": str(config.data_file_path),
        "stops": [
            {
                "id": stop.stop_id,
                "name": stop.name,
                "records": [
                    {
                        "route": r.route,
                        "trip": r.trip,
                        "calendar": _calendar_to_dict(r.calendar),
                        "stop_time": r.stop_time,
                        "stop": r.stop,
                    }
                    for r in stop.schedule.records
                ],
            }
            for stop in config.stops
        ],
    }


def config_from_dict(data: dict[str, Any]) -> AppConfig:
    """Rebuild configuration from data produced by config_to_dict."""
    try:
        stops = [
            ConfiguredStop(
                stop_id=str(stop["id"]),
                name=stop["name"],
                schedule=StopSchedule(
                    records=[
                        ScheduleRecord(
                            route=str(r["route"]),
                            trip=str(r["trip"]),
                            calendar=_calendar_from_dict(r["calendar"]),
                            stop_time=r.get("stop_time"),
                            stop=r["stop"],
                        )
                        for r in stop.get("records") or []
                    ]
                ),
            )
            for stop in data.get("stops") or []
        ]
        return AppConfig(
            data_file_url=data["data_file_url"],
            data_file_path=Path(data["data_file_path"]),
            stops=stops,
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ValueError(f"Malformed configuration: {e}") from e


def save_config(config: AppConfig, conf_dir: Path) -> Path:
    """Serialize configuration to config.yaml inside conf_dir."""
    conf_dir.mkdir(parents=True, exist_ok=True)
    path = config_file_path(conf_dir)

    with open(path, "w", encoding="utf-8") as f:
        yaml.safe_dump(config_to_dict(config), f, sort_keys=False, allow_unicode=True)

    logger.info(f"Wrote configuration to {path}")
    return path


def load_config(conf_dir: Path) -> AppConfig:
    """Load configuration from config.yaml inside conf_dir."""
    path = config_file_path(conf_dir)
    if not path.exists():
        raise FileNotFoundError(f"Configuration not found: {path}")

    with open(path, encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Malformed configuration: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Malformed configuration: {path}")

    version = data.get("schema_version", CONFIG_SCHEMA_VERSION)
    if version != CONFIG_SCHEMA_VERSION:
        logger.warning(
            f"Configuration schema version {version} differs from {CONFIG_SCHEMA_VERSION}"
        )

    config = config_from_dict(data)

    for stop in config.stops:
        logger.info(f"Stop {stop.name} has {len(stop.schedule)} records in database")

    return config
