"""Retrieval of the GTFS data file into the configuration directory."""

import logging
import os
import shutil
from pathlib import Path

import requests

logger = logging.getLogger(__name__)

DATA_FILE_NAME = "data_file.gtfs"
DOWNLOAD_TIMEOUT = 120
CHUNK_SIZE = 8192


def is_remote(path_or_url: str) -> bool:
    return path_or_url.startswith("http")


def download_data_file(url: str, destination: Path) -> None:
    """Stream url into destination."""
    logger.info(f"Downloading {url}")
    with requests.get(url, timeout=DOWNLOAD_TIMEOUT, stream=True) as response:
        response.raise_for_status()
        with open(destination, "wb") as f:
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                f.write(chunk)
    logger.info(f"Downloaded {destination.stat().st_size:,} bytes to {destination}")


def _remove(path: Path) -> None:
    if path.is_dir():
        shutil.rmtree(path)
    elif path.exists():
        path.unlink()


def retrieve_data_file(path_or_url: str, conf_dir: Path) -> Path:
    """
    Download or copy (depending on the origin) the data file into conf_dir.

    The new feed is staged next to the stored one and only replaces it once
    complete, so a failed retrieval keeps the previous feed.

    Args:
        path_or_url: HTTP(S) URL or local path of the GTFS feed
        conf_dir: Configuration directory, created when missing

    Returns:
        Path of the stored data file
    """
    conf_dir.mkdir(parents=True, exist_ok=True)
    destination = conf_dir / DATA_FILE_NAME
    staging = conf_dir / f"{DATA_FILE_NAME}.part"

    source: Path | None = None
    if not is_remote(path_or_url):
        source = Path(path_or_url).expanduser()
        if not source.exists():
            raise FileNotFoundError(f"Data file not found: {source}")
        if source.resolve() == destination.resolve():
            logger.info(f"{source} is already the stored data file")
            return destination

    _remove(staging)
    try:
        if source is None:
            download_data_file(path_or_url, staging)
        elif source.is_dir():
            shutil.copytree(source, staging)
        else:
            shutil.copyfile(source, staging)
    except BaseException:
        _remove(staging)
        raise

    # A previous feed may have been a file or an unpacked directory
    if destination.is_dir() or staging.is_dir():
        _remove(destination)
    os.replace(staging, destination)

    if source is not None:
        logger.info(f"Copied {source} to {destination}")

    return destination
