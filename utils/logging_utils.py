"""
Central logging configuration for the ecowatter service.

Usage
-----
In the entrypoint (``run_server.py`` or the ASGI app factory):

    from utils.logging_utils import setup_logging

    setup_logging(level="INFO", job_name="ecowatter")

In a module:

    from utils.logging_utils import get_tagged_logger

    logger = get_tagged_logger(__name__, tag="sync_loop")
    logger.info("Updating signals...")

Every record carries ``job_name`` and ``tag`` so the sync thread and the
request handlers can be told apart in a single stream. Records emitted before
``setup_logging()`` runs still get timestamps and levels from the bootstrap
config below.
"""

from __future__ import annotations

import logging
import logging.config
from typing import Any, Mapping, Optional


# ---------------------------------------------------------------------------
# Minimal bootstrap config (early logs)
# ---------------------------------------------------------------------------

BOOTSTRAP_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
BOOTSTRAP_DATEFMT = "%Y-%m-%d %H:%M:%S"

logging.basicConfig(
    level=logging.INFO,
    format=BOOTSTRAP_FORMAT,
    datefmt=BOOTSTRAP_DATEFMT,
)


# ---------------------------------------------------------------------------
# Defaults for full configuration
# ---------------------------------------------------------------------------

DEFAULT_LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(job_name)s | %(tag)s | %(threadName)s | %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
DEFAULT_JOB_NAME = "ecowatter"

_CONFIGURED: bool = False


# ---------------------------------------------------------------------------
# Filters to enrich log records
# ---------------------------------------------------------------------------

class MaxLevelFilter(logging.Filter):
    """Allow only records up to (and including) `max_level`.

    Routes DEBUG/INFO to stdout while WARNING+ go to stderr.
    """

    def __init__(self, max_level: int) -> None:
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        return record.levelno <= self.max_level


class EnsureTagFilter(logging.Filter):
    """
    Ensure every LogRecord has a `tag` attribute.

    Records coming through a tagged LoggerAdapter already have one. Others
    (uvicorn, requests, urllib3) get the last segment of their logger name,
    e.g. "uvicorn.access" -> "access".
    """

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "tag"):
            logger_name = getattr(record, "name", "")
            record.tag = logger_name.split(".")[-1] if logger_name else "-"
        return True


class JobNameFilter(logging.Filter):
    """Inject a `job_name` attribute into every LogRecord (defaults to "-")."""

    def __init__(self, job_name: Optional[str] = None) -> None:
        super().__init__()
        self._job_name = job_name or "-"

    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        if not hasattr(record, "job_name"):
            record.job_name = self._job_name
        return True


# ---------------------------------------------------------------------------
# Config builder and setup function
# ---------------------------------------------------------------------------


def build_logging_config(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = DEFAULT_JOB_NAME,
) -> Mapping[str, Any]:
    """
    Build a dictConfig-style logging configuration.

    Parameters
    ----------
    level:
        Root logger level (e.g., "DEBUG", "INFO", logging.INFO).
    log_format:
        Formatter pattern for log messages.
    date_format:
        Formatter pattern for timestamps.
    job_name:
        Logical name of the process, used for the `job_name` field.

    Returns
    -------
    dict suitable for logging.config.dictConfig().
    """
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "ensure_tag": {"()": EnsureTagFilter},
            "job_name": {"()": JobNameFilter, "job_name": job_name},
            "stdout_max_info": {
                "()": MaxLevelFilter,
                "max_level": logging.INFO,
            },
        },
        "formatters": {
            "standard": {
                "format": log_format,
                "datefmt": date_format,
            },
        },
        "handlers": {
            "stdout": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name", "stdout_max_info"],
                "level": "DEBUG",
                "stream": "ext://sys.stdout",
            },
            "stderr": {
                "class": "logging.StreamHandler",
                "formatter": "standard",
                "filters": ["ensure_tag", "job_name"],
                "level": "WARNING",
                "stream": "ext://sys.stderr",
            },
        },
        "loggers": {
            # one line per upstream connection is too chatty at INFO every few seconds
            "urllib3": {"level": "WARNING"},
        },
        "root": {
            "level": level,
            "handlers": ["stdout", "stderr"],
        },
    }


def setup_logging(
    *,
    level: str | int = "INFO",
    log_format: str = DEFAULT_LOG_FORMAT,
    date_format: str = DEFAULT_DATE_FORMAT,
    job_name: Optional[str] = DEFAULT_JOB_NAME,
    override_existing: bool = False,
) -> None:
    """
    Configure application-wide logging once per process.

    Parameters
    ----------
    level:
        Root logger level (e.g., "DEBUG", "INFO").
    log_format:
        Formatter pattern; by default includes job_name, tag and thread name.
    date_format:
        Timestamp format for `asctime`.
    job_name:
        Logical name for this process. Appears in `%(job_name)s`.
    override_existing:
        If False (default), calling setup_logging() multiple times is a no-op
        after the first. If True, the configuration is reapplied each time.
    """
    global _CONFIGURED

    if _CONFIGURED and not override_existing:
        return

    config_dict = build_logging_config(
        level=level,
        log_format=log_format,
        date_format=date_format,
        job_name=job_name,
    )
    logging.config.dictConfig(config_dict)
    _CONFIGURED = True


# ---------------------------------------------------------------------------
# Logger helpers
# ---------------------------------------------------------------------------


def get_tagged_logger(
    name: str,
    *,
    tag: Optional[str] = None,
) -> logging.LoggerAdapter:
    """
    Return a LoggerAdapter that always carries a `tag` field.

    If `tag` is omitted it defaults to the last segment of `name`,
    e.g. "app.sync_loop" -> "sync_loop".
    """
    base_logger = logging.getLogger(name)
    if tag is None:
        tag = name.split(".")[-1]
    return logging.LoggerAdapter(base_logger, {"tag": tag})


def mask_secret(value: Optional[str], *, visible: int = 4) -> str:
    """Return a log-safe rendition of a token, keeping only its last characters.

    Examples
    --------
    - "abcdefghijkl" -> "***ijkl"
    - "abc" -> "***"
    - "" or None -> ""
    """
    if not value:
        return ""
    if len(value) <= visible * 2:
        return "***"
    return f"***{value[-visible:]}"
