"""Configuration for the zip finder.

Centralises logging setup and the loading of environment variables from
``.env`` files. Dataset settings (``ZIPFINDER_DATASET_URL``,
``ZIPFINDER_TIMEOUT``, ``ZIPFINDER_CACHE_PATH``) are read from the
environment once this module has been imported.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

ENV_FILE = os.getenv("ZIPFINDER_ENV_FILE", ".env")
LOG_LEVEL_ENV = "ZIPFINDER_LOG_LEVEL"
LOG_FORMAT_ENV = "ZIPFINDER_LOG_FORMAT"
DATASET_URL_ENV = "ZIPFINDER_DATASET_URL"
TIMEOUT_ENV = "ZIPFINDER_TIMEOUT"
CACHE_PATH_ENV = "ZIPFINDER_CACHE_PATH"

DEFAULT_DATASET_URL = (
    "https://raw.githubusercontent.com/OpenDataDE/State-zip-code-GeoJSON/master/"
    "nc_north_carolina_zip_codes_geo.min.json"
)
DEFAULT_TIMEOUT = 30.0
_DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def load_environment(path: os.PathLike[str] | str = ENV_FILE, *, override: bool = False) -> dict[str, str]:
    """Load environment variables from a ``.env`` file.

    Each line must follow the ``KEY=value`` format. Blank lines and
    comments starting with ``#`` are ignored.

    Args:
        path: Path to the ``.env`` file.
        override: When ``True`` replaces variables already present in
            ``os.environ``.

    Returns:
        A dictionary with the variables that were read.
    """

    env_path = Path(path)
    if not env_path.exists():
        return {}

    loaded: dict[str, str] = {}

    for raw_line in env_path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue

        if "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip("\"'")

        if not key:
            continue

        if override or key not in os.environ:
            os.environ[key] = value

        loaded[key] = value

    return loaded


def _resolve_log_level(level: str | int) -> int:
    if isinstance(level, int):
        return level

    level_name = level.upper()
    return getattr(logging, level_name, logging.INFO)


def configure_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Configure application logging.

    Args:
        level: Logging level (``INFO``, ``DEBUG``, ...). When ``None`` the
            value of ``ZIPFINDER_LOG_LEVEL`` is used, falling back to
            ``INFO``.
        fmt: Log record format. When ``None`` uses ``ZIPFINDER_LOG_FORMAT``
            or the default format.
    """

    level_value = _resolve_log_level(level or os.getenv(LOG_LEVEL_ENV, "INFO"))
    fmt_value = fmt or os.getenv(LOG_FORMAT_ENV, _DEFAULT_LOG_FORMAT)

    root_logger = logging.getLogger()

    if root_logger.handlers:
        root_logger.setLevel(level_value)
        for handler in root_logger.handlers:
            handler.setLevel(level_value)
            handler.setFormatter(logging.Formatter(fmt_value))
        return

    logging.basicConfig(level=level_value, format=fmt_value)


def dataset_url() -> str:
    return os.getenv(DATASET_URL_ENV) or DEFAULT_DATASET_URL


def dataset_timeout() -> float:
    raw = os.getenv(TIMEOUT_ENV)
    if not raw:
        return DEFAULT_TIMEOUT
    try:
        return float(raw)
    except ValueError:
        logging.getLogger(__name__).warning(
            "Ignoring invalid %s=%r, using %s seconds", TIMEOUT_ENV, raw, DEFAULT_TIMEOUT
        )
        return DEFAULT_TIMEOUT


def dataset_cache_path() -> Path | None:
    raw = os.getenv(CACHE_PATH_ENV)
    return Path(raw) if raw else None


ENV_VARS = load_environment()

__all__ = [
    "DEFAULT_DATASET_URL",
    "DEFAULT_TIMEOUT",
    "ENV_VARS",
    "ENV_FILE",
    "configure_logging",
    "dataset_cache_path",
    "dataset_timeout",
    "dataset_url",
    "load_environment",
]
