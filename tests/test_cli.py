"""Tests for CLI."""

import subprocess
import sys
from pathlib import Path


def run_cli(*args: str, stdin: str | None = None) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "stop_timetables.cli", *args],
        input=stdin,
        capture_output=True,
        text=True,
    )


def test_cli_init_and_show(gtfs_minimal: Path, conf_dir: Path) -> None:
    """Test choosing a stop and showing its departures."""
    result = run_cli(
        "--config-dir",
        str(conf_dir),
        "init",
        "--source",
        str(gtfs_minimal),
        stdin="Station\n0\nn\n",
    )

    assert result.returncode == 0, result.stderr
    assert "Configuration saved!" in result.stdout
    assert "Station: 3 records" in result.stdout
    assert (conf_dir / "config.yaml").exists()

    result = run_cli("--config-dir", str(conf_dir), "show", "--date", "2020-12-07")

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["Station", "-------", "1 WK 08:10"]


def test_cli_show_weekend(gtfs_minimal: Path, conf_dir: Path) -> None:
    run_cli(
        "--config-dir",
        str(conf_dir),
        "init",
        "--source",
        str(gtfs_minimal),
        stdin="Depot\n0\nn\n",
    )

    result = run_cli("--config-dir", str(conf_dir), "show", "--date", "2020-12-06")

    assert result.returncode == 0
    assert "No departures" in result.stdout


def test_cli_show_without_config(conf_dir: Path) -> None:
    result = run_cli("--config-dir", str(conf_dir), "show")

    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_show_negative_limit(conf_dir: Path) -> None:
    result = run_cli("--config-dir", str(conf_dir), "show", "--limit=-1")

    assert result.returncode == 2
    assert "must not be negative" in result.stderr


def test_cli_init_inconsistent_feed(gtfs_edgecases: Path, conf_dir: Path) -> None:
    """Test a missing service calendar aborts setup with a message naming it."""
    result = run_cli(
        "--config-dir",
        str(conf_dir),
        "init",
        "--source",
        str(gtfs_edgecases),
        stdin="Alpha\n0\nn\n",
    )

    assert result.returncode == 1
    assert "MISSING" in result.stderr
    assert not (conf_dir / "config.yaml").exists()


def test_cli_validate_basic(gtfs_minimal: Path) -> None:
    """Test CLI validate command."""
    result = run_cli("validate", "--input", str(gtfs_minimal))

    assert result.returncode == 0
    assert "Validation successful" in result.stdout


def test_cli_validate_failure(gtfs_edgecases: Path) -> None:
    result = run_cli("validate", "--input", str(gtfs_edgecases))

    assert result.returncode == 1
    assert "Validation failed" in result.stdout


def test_cli_validate_invalid_input() -> None:
    """Test CLI with invalid input."""
    result = run_cli("validate", "--input", "/nonexistent/path")

    assert result.returncode == 1
    assert "Error" in result.stdout or "Error" in result.stderr


def test_cli_version() -> None:
    """Test CLI version flag."""
    result = run_cli("--version")

    assert result.returncode == 0
    assert "0.1.0" in result.stdout


def test_cli_help() -> None:
    """Test CLI help."""
    result = run_cli("--help")

    assert result.returncode == 0
    assert "init" in result.stdout
    assert "show" in result.stdout
    assert "validate" in result.stdout


def test_cli_no_command() -> None:
    result = run_cli()

    assert result.returncode == 1
