"""
schemadoc utilities - cross-cutting helpers shared by the CLI and library.
"""

from .logging import (
    get_current_log_file,
    get_logger,
    get_session_id,
    log_generation_complete,
    log_generation_start,
    log_schema_info,
    setup_logging,
)

__all__ = [
    "setup_logging",
    "get_logger",
    "get_current_log_file",
    "get_session_id",
    "log_generation_start",
    "log_generation_complete",
    "log_schema_info",
]
