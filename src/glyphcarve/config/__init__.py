"""Configuration management for glyphcarve.

This module provides configuration management using Pydantic models.
Configuration can be provided via CLI arguments or defaults.

Key classes:
- GeometryConfig: Predicate and flattening tolerances
- CarveConfig: Quad carving recursion limits
- LayoutConfig: Text layout and splitting settings
- RingConfig: Ring geometry and text wrapping
- LoggingConfig: Logging settings
- GlyphCarveSettings: Main application settings
"""

from glyphcarve.config.settings import (
    CarveConfig,
    GeometryConfig,
    GlyphCarveSettings,
    LayoutConfig,
    LoggingConfig,
    RingConfig,
    get_default_settings,
)

__all__ = [
    "CarveConfig",
    "GeometryConfig",
    "GlyphCarveSettings",
    "LayoutConfig",
    "LoggingConfig",
    "RingConfig",
    "get_default_settings",
]
