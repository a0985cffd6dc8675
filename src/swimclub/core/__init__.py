"""Core SwimClub utilities.

This module exports core utilities for use throughout the application.
"""

from swimclub.core.config import Settings, get_settings
from swimclub.core.logging import (
    bind_correlation_id,
    clear_context,
    configure_logging,
    get_logger,
    mask_token,
)

__all__ = [
    "Settings",
    "get_settings",
    "configure_logging",
    "get_logger",
    "bind_correlation_id",
    "clear_context",
    "mask_token",
]
