"""End-to-end tests."""

from datetime import datetime
from pathlib import Path

from stop_timetables import get_departures, setup, validate
from stop_timetables.config import load_config
from stop_timetables.output.text import render_departures


def scripted(answers: list[str]):
    remaining = iter(answers)
    return lambda prompt: next(remaining)


def test_end_to_end_zip(gtfs_minimal_zip: Path, conf_dir: Path) -> None:
    """Test complete flow on a zipped feed."""
    config = setup(
        str(gtfs_minimal_zip),
        conf_dir,
        input_func=scripted(["Main", "0", "y", "Depot", "0", "n"]),
        output_func=lambda line: None,
    )

    assert [stop.stop_id for stop in config.stops] == ["A", "D"]
    assert len(config.stops[0].schedule) == 3
    assert config.data_file_path == conf_dir / "data_file.gtfs"

    # Reload from disk and query a Sunday
    loaded = load_config(conf_dir)
    departures = get_departures(loaded, datetime(2020, 12, 6, 16, 0))

    assert render_departures(departures).splitlines() == [
        "Main Square",
        "-----------",
        "2 WE 07:15",
        "",
        "Depot",
        "-----",
        "No departures",
    ]


def test_end_to_end_validate(gtfs_minimal_zip: Path) -> None:
    report = validate(str(gtfs_minimal_zip))

    assert report.valid
    assert report.stats["trips"] == 3
