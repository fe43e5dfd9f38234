"""
schemadoc Logging Utilities - Session-Based Debug & Audit Logging

Overview:
---------
Centralised logging configuration for schema generation runs.  Provides
session-based file logging with unique identifiers, configurable verbosity
and structured output for debugging specification loading, type resolution
and schema emission.

Log Location:
-------------
- Default: ~/.schemadoc/logs/
- Each CLI run creates a timestamped log file with session ID
- A symlink 'schemadoc.log' always points to the latest session
- Can be overridden via SCHEMADOC_LOG_DIR environment variable

Log File Format:
----------------
- schemadoc_YYYYMMDD_HHMMSS_<session_id>.log  (per-session files)
- schemadoc.log (symlink to latest)

Log Levels:
-----------
- DEBUG: Resolver decisions, emitted schema documents
- INFO: Specification summaries, generation start/finish
- WARNING: Unresolvable descriptors, dangling references
- ERROR: Load and validation failures

Usage:
------
    from schemadoc.utils.logging import get_logger, setup_logging

    # Call once at startup (CLI entry point)
    log_file = setup_logging(level="DEBUG")

    # Get logger in any module
    logger = get_logger(__name__)
    logger.info("Generating schemas...")
"""

from __future__ import annotations

import logging
import os
import sys
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

# ============================================================================
# Constants
# ============================================================================

DEFAULT_LOG_DIR = Path.home() / ".schemadoc" / "logs"
DEFAULT_LOG_LEVEL = "INFO"
SYMLINK_NAME = "schemadoc.log"
ROOT_LOGGER = "schemadoc"

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# File logging includes line numbers
FILE_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(session_id)s | %(name)s:%(lineno)d | %(message)s"

_logging_initialised = False
_log_file_path: Optional[Path] = None
_session_id: Optional[str] = None


# ============================================================================
# Session ID Filter / Formatter
# ============================================================================

class SessionIdFilter(logging.Filter):
    """Add session_id to all log records."""

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id

    def filter(self, record: logging.LogRecord) -> bool:
        record.session_id = self.session_id  # type: ignore[attr-defined]
        return True


class SessionFormatter(logging.Formatter):
    """Formatter that adds session_id, defaulting to 'N/A' if not present."""

    def format(self, record: logging.LogRecord) -> str:
        if not hasattr(record, "session_id"):
            record.session_id = _session_id or "N/A"  # type: ignore[attr-defined]
        return super().format(record)


# ============================================================================
# Setup Functions
# ============================================================================

def generate_session_id() -> str:
    """Generate a short unique session ID (6 characters)."""
    return uuid.uuid4().hex[:6]


def get_log_directory() -> Path:
    """Get the log directory, respecting SCHEMADOC_LOG_DIR."""
    env_log_dir = os.getenv("SCHEMADOC_LOG_DIR")
    if env_log_dir:
        return Path(env_log_dir)
    return DEFAULT_LOG_DIR


def generate_log_filename(session_id: str) -> str:
    """Generate a timestamped log filename with session ID."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"schemadoc_{timestamp}_{session_id}.log"


def setup_logging(
    level: Optional[str] = None,
    log_dir: Optional[Path] = None,
    console_output: bool = False,
    quiet: bool = False,
) -> Path:
    """
    Initialise schemadoc logging with a session log file and optional console output.

    Parameters
    ----------
    level : str, optional
        DEBUG, INFO, WARNING or ERROR.  Defaults to SCHEMADOC_LOG_LEVEL or INFO.
    log_dir : Path, optional
        Directory for log files.  Defaults to :func:`get_log_directory`.
    console_output : bool
        Also log to stderr.
    quiet : bool
        Suppress console output entirely.

    Returns
    -------
    Path
        Path to the log file being written to.
    """
    global _logging_initialised, _log_file_path, _session_id

    _session_id = generate_session_id()

    if level is None:
        level = os.getenv("SCHEMADOC_LOG_LEVEL", DEFAULT_LOG_LEVEL)
    log_level = getattr(logging, level.upper(), logging.INFO)

    if log_dir is None:
        log_dir = get_log_directory()
    log_dir.mkdir(parents=True, exist_ok=True)

    log_file = log_dir / generate_log_filename(_session_id)
    _log_file_path = log_file

    root = logging.getLogger(ROOT_LOGGER)
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for f in root.filters[:]:
        root.removeFilter(f)

    root.setLevel(log_level)
    root.addFilter(SessionIdFilter(_session_id))

    # No rotation: each session gets its own file
    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(log_level)
    file_handler.setFormatter(SessionFormatter(FILE_LOG_FORMAT, LOG_DATE_FORMAT))
    root.addHandler(file_handler)

    if console_output and not quiet:
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        console_handler.setFormatter(SessionFormatter(LOG_FORMAT, LOG_DATE_FORMAT))
        root.addHandler(console_handler)

    root.propagate = False

    symlink_path = log_dir / SYMLINK_NAME
    try:
        if symlink_path.is_symlink() or symlink_path.exists():
            symlink_path.unlink()
        symlink_path.symlink_to(log_file.name)
    except OSError:
        # Symlinks need extra privileges on some platforms; the log file itself is enough.
        root.debug("Could not update %s symlink", symlink_path)

    _logging_initialised = True

    root.info("=" * 80)
    root.info("schemadoc logging session started")
    root.info(f"  Session ID: {_session_id}")
    root.info(f"  Log file: {log_file}")
    root.info(f"  Log level: {level.upper()}")
    root.info("=" * 80)

    return log_file


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger under the ``schemadoc`` namespace.

    Unlike library modules (which use ``logging.getLogger(__name__)`` and
    stay silent until configured), this helper initialises logging with
    defaults on first use.
    """
    if not _logging_initialised:
        setup_logging()
    if name.startswith(ROOT_LOGGER):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def get_current_log_file() -> Optional[Path]:
    """Return the path to the current log file, if logging is initialised."""
    return _log_file_path


def get_session_id() -> Optional[str]:
    """Return the current session ID, if logging is initialised."""
    return _session_id


# ============================================================================
# Structured Helpers
# ============================================================================

def log_generation_start(
    logger: logging.Logger,
    source: str,
    services: int,
    structs: int,
    enums: int,
) -> None:
    """Log the start of a generation run."""
    logger.info("-" * 60)
    logger.info("GENERATION START")
    logger.info(f"  Source: {source}")
    logger.info(f"  Services: {services}")
    logger.info(f"  Structs: {structs}")
    logger.info(f"  Enums: {enums}")
    logger.info("-" * 60)


def log_generation_complete(
    logger: logging.Logger,
    source: str,
    success: bool,
    schemas: Optional[int] = None,
    output: Optional[str] = None,
    total_duration: Optional[float] = None,
) -> None:
    """Log a generation summary."""
    logger.info("-" * 60)
    logger.info(f"GENERATION {'SUCCEEDED' if success else 'FAILED'}")
    logger.info(f"  Source: {source}")
    if schemas is not None:
        logger.info(f"  Schemas: {schemas}")
    if output:
        logger.info(f"  Output: {output}")
    if total_duration is not None:
        logger.info(f"  Duration: {total_duration:.3f}s")
    logger.info("-" * 60)


def log_schema_info(
    logger: logging.Logger,
    schema_id: str,
    schema_json: str,
    truncate_at: int = 1500,
) -> None:
    """Log an emitted schema document at DEBUG level."""
    if len(schema_json) > truncate_at:
        display_schema = schema_json[:truncate_at] + f"... [TRUNCATED, {len(schema_json)} chars total]"
    else:
        display_schema = schema_json

    logger.debug(f"SCHEMA ({schema_id}):\n{display_schema}")
