"""Data structures for raster pagination planning and output."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from typing import List

from PIL import Image


@dataclass(slots=True)
class ProtectedRegion:
    """Point-space span that should stay on a single page.

    Args:
        start: Top edge in points.
        end: Bottom edge in points.
    """

    start: float
    end: float

    @property
    def height(self) -> float:
        """Return the region height in points."""

        return self.end - self.start

    def intersects(self, *, start: float, end: float) -> bool:
        """Return True when the region overlaps the span ``[start, end)``."""

        return self.start < end and self.end > start

    def inside(self, *, start: float, end: float) -> bool:
        """Return True when the region lies wholly within ``[start, end]``."""

        return self.start >= start and self.end <= end


@dataclass(slots=True)
class Boundaries:
    """Break candidates and protected regions for one surface, in points.

    Args:
        candidates: Ascending, deduplicated positions where a page may end.
        regions: Protected regions ordered by start.
    """

    candidates: List[float] = field(default_factory=list)
    regions: List[ProtectedRegion] = field(default_factory=list)


@dataclass(slots=True)
class PageBreak:
    """Point-space span chosen for one page."""

    start: float
    end: float


@dataclass(slots=True)
class Page:
    """A page-sized raster fragment cut from the surface.

    Args:
        index: Zero-based page index.
        source_y_start: First pixel row taken from the surface.
        source_y_end: Pixel row after the last one taken from the surface.
        render_height_points: Height to draw the fragment at, in points.
        image: Independent copy of the surface strip.
        point_start: Top of the strip in points.
        point_end: Bottom of the strip in points.
    """

    index: int
    source_y_start: int
    source_y_end: int
    render_height_points: float
    image: Image.Image
    point_start: float
    point_end: float

    @property
    def pixel_height(self) -> int:
        """Return the number of surface rows in the fragment."""

        return self.source_y_end - self.source_y_start

    def encode(self, *, image_format: str = "PNG", quality: int = 95) -> bytes:
        """Return the fragment encoded with Pillow.

        Args:
            image_format: Pillow format name (``"PNG"`` or ``"JPEG"``).
            quality: Encoder quality for lossy formats.
        Returns:
            Encoded image bytes.
        """

        image = self.image
        if image_format.upper() == "JPEG" and image.mode not in {"RGB", "L"}:
            image = image.convert("RGB")
        buf = io.BytesIO()
        if image_format.upper() == "JPEG":
            image.save(buf, format="JPEG", quality=quality)
        else:
            image.save(buf, format=image_format)
        return buf.getvalue()
