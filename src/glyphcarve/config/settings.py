"""Configuration settings for Glyphcarve."""

from pathlib import Path

from pydantic import BaseModel, Field


class GeometryConfig(BaseModel):
    """Configuration for geometric predicates and outline flattening.

    Tolerances are absolute, in the units of the shapes they are applied to,
    except ``point_merge_tolerance`` which is relative to the cell size.
    """

    ray_extent: float = Field(
        default=1e9,
        gt=0.0,
        description="X coordinate standing in for +infinity in point-in-polygon ray casts",
    )
    point_merge_tolerance: float = Field(
        default=1e-9,
        ge=0.0,
        le=1e-3,
        description="Distance (relative to cell size) under which intersection points coincide",
    )
    bezier_flatten_tolerance: float = Field(
        default=1.0,
        ge=0.01,
        le=50.0,
        description="Maximum deviation from the true curve when flattening outlines (font units)",
    )

    def merge_distance(self, cell_size: float) -> float:
        """Absolute merge distance for a cell of the given size.

        Args:
            cell_size: Larger of the cell's width and height

        Returns:
            Distance below which two points are treated as one
        """
        return self.point_merge_tolerance * cell_size


class CarveConfig(BaseModel):
    """Configuration for recursive quad carving."""

    max_depth: int = Field(
        default=8,
        ge=1,
        le=20,
        description="Maximum subdivision depth before cells are classified by their center",
    )
    min_cell_size: float = Field(
        default=1e-6,
        ge=0.0,
        description="Cells smaller than this are never subdivided",
    )


class LayoutConfig(BaseModel):
    """Configuration for laying out glyphs of a text string."""

    scale: float = Field(
        default=0.1,
        gt=0.0,
        le=10.0,
        description="Radial scale applied to glyph outlines (font units to model units)",
    )
    split: bool = Field(
        default=True,
        description="Split every glyph at its horizontal midpoint before carving",
    )
    margin: float = Field(
        default=1.0,
        ge=0.0,
        description="Material left around each glyph's bounding box (model units)",
    )
    letter_spacing: float = Field(
        default=0.0,
        description="Extra horizontal gap between consecutive glyphs (model units)",
    )
    elevation: float = Field(
        default=0.0,
        description="Height at which the flat polygons are embedded in 3D",
    )
    tilt: float = Field(
        default=0.0,
        ge=-1.5,
        le=1.5,
        description="Glyph rotation about the z axis at its line position (radians, flat only)",
    )


class RingConfig(BaseModel):
    """Configuration for wrapping carved text around a ring.

    The ring is a hollow cylinder standing on y = 0 with its axis along y.
    Its walls are approximated by ``sides`` flat panels.
    """

    enabled: bool = Field(
        default=False,
        description="Build the ring and wrap the carved text around its outer wall",
    )
    outer_radius: float = Field(
        default=1.2,
        gt=0.0,
        description="Radius of the outer wall",
    )
    inner_radius: float = Field(
        default=1.0,
        gt=0.0,
        description="Radius of the inner wall (must be less than the outer radius)",
    )
    height: float = Field(
        default=0.8,
        gt=0.0,
        description="Height of the ring; the carved text is scaled to fit it",
    )
    sides: int = Field(
        default=32,
        ge=3,
        le=1024,
        description="Number of flat panels around the ring",
    )
    texture_repeats: int = Field(
        default=8,
        ge=1,
        description="How many times the texture repeats around the ring",
    )


class LoggingConfig(BaseModel):
    """Logging configuration."""

    log_file: Path | None = Field(
        default=None,
        description="Path to log file",
    )
    log_level: str = Field(
        default="WARNING",
        description="Console log level",
    )
    file_log_level: str = Field(
        default="DEBUG",
        description="File log level (more verbose)",
    )


class GlyphCarveSettings(BaseModel):
    """Main application settings."""

    geometry: GeometryConfig = Field(default_factory=GeometryConfig)
    carve: CarveConfig = Field(default_factory=CarveConfig)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)
    ring: RingConfig = Field(default_factory=RingConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)


def get_default_settings() -> GlyphCarveSettings:
    """Get default application settings."""
    return GlyphCarveSettings()
