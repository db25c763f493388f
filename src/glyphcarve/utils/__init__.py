"""Utility functions for glyphcarve.

This module provides:

- Logging setup and configuration
- Per-glyph progress and statistics tracking
"""

from glyphcarve.utils.logging import (
    CarveLogger,
    CarveStats,
    configure_logging,
)

__all__ = [
    "CarveLogger",
    "CarveStats",
    "configure_logging",
]
