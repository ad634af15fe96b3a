"""Mapping between render-pixel space and output-point space."""

from __future__ import annotations

import math
from dataclasses import dataclass

from .raster_errors import DegenerateSurface
from .raster_settings import PageGeometry


@dataclass(slots=True, frozen=True)
class CoordinateMapper:
    """Width-locked transform from surface pixels to page points.

    The surface is scaled so its full width fills the usable page width, so a
    single factor converts both axes.

    Args:
        width: Surface width in pixels.
        height: Surface height in pixels.
        scale: Points per surface pixel.

    Example:
        >>> mapper = CoordinateMapper.for_surface(
        ...     width=1000, height=3000, geometry=PageGeometry(600, 800, 50)
        ... )
        >>> mapper.to_point(1000)
        500.0
        >>> mapper.to_pixel(250.0)
        500.0
    """

    width: int
    height: int
    scale: float

    @classmethod
    def for_surface(
        cls, *, width: int, height: int, geometry: PageGeometry
    ) -> "CoordinateMapper":
        """Return the mapper for a surface rendered at ``width`` x ``height``.

        Args:
            width: Surface width in pixels.
            height: Surface height in pixels.
            geometry: Output page geometry.
        Returns:
            CoordinateMapper for the run.
        Raises:
            DegenerateSurface: When either dimension is zero.
        """

        if width <= 0 or height <= 0:
            raise DegenerateSurface(f"Surface has no area ({width}x{height} px)")
        return cls(width=width, height=height, scale=geometry.usable_width / width)

    @property
    def total_points(self) -> float:
        """Return the surface height in points."""

        return self.height * self.scale

    def to_point(self, pixel_y: float) -> float:
        """Return ``pixel_y`` converted to points."""

        return pixel_y * self.scale

    def to_pixel(self, point_y: float) -> float:
        """Return ``point_y`` converted to surface pixels."""

        return point_y / self.scale

    def pixel_row(self, point_y: float) -> int:
        """Return the whole pixel row nearest to ``point_y``, clamped to the surface.

        Args:
            point_y: Position in points.
        Returns:
            Row index in ``[0, height]``.
        """

        row = math.floor(self.to_pixel(point_y) + 0.5)
        return max(0, min(self.height, row))
