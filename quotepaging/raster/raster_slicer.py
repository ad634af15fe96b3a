"""Cut page-sized strips out of the rendered surface."""

from __future__ import annotations

import logging

from PIL import Image

from .raster_constants import EPSILON
from .raster_coords import CoordinateMapper
from .raster_errors import BreakSelectionDefect, SliceExtractionFailure
from .raster_types import Page, PageBreak

logger = logging.getLogger(__name__)


def slice_page(
    *,
    surface: Image.Image,
    page_break: PageBreak,
    mapper: CoordinateMapper,
    index: int,
) -> Page:
    """Return the strip of ``surface`` covered by ``page_break``.

    Args:
        surface: Rendered surface; left unchanged.
        page_break: Point-space span of the page.
        mapper: Coordinate mapper for the surface.
        index: Zero-based page index.
    Returns:
        Page holding an independent copy of the strip.
    Raises:
        BreakSelectionDefect: When the span maps to no pixel rows.
        SliceExtractionFailure: When Pillow cannot copy the strip.
    """

    y_start = mapper.pixel_row(page_break.start)
    if page_break.end >= mapper.total_points - EPSILON:
        y_end = mapper.height
    else:
        y_end = mapper.pixel_row(page_break.end)
    return slice_rows(
        surface=surface, y_start=y_start, y_end=y_end, mapper=mapper, index=index
    )


def slice_rows(
    *,
    surface: Image.Image,
    y_start: int,
    y_end: int,
    mapper: CoordinateMapper,
    index: int,
) -> Page:
    """Return the pixel rows ``[y_start, y_end)`` of ``surface`` as a Page.

    Args:
        surface: Rendered surface; left unchanged.
        y_start: First row to copy.
        y_end: Row after the last one to copy.
        mapper: Coordinate mapper for the surface.
        index: Zero-based page index.
    Returns:
        Page holding an independent copy of the rows.
    """

    if y_end - y_start <= 0:
        raise BreakSelectionDefect(
            f"Page {index} maps to an empty slice (rows {y_start}-{y_end})"
        )
    try:
        strip = surface.crop((0, y_start, mapper.width, y_end))
        strip.load()
    except (OSError, ValueError) as exc:
        raise SliceExtractionFailure(
            f"Could not copy rows {y_start}-{y_end} for page {index}"
        ) from exc
    logger.debug("Sliced page %d from rows %d-%d", index, y_start, y_end)
    return Page(
        index=index,
        source_y_start=y_start,
        source_y_end=y_end,
        render_height_points=mapper.to_point(y_end - y_start),
        image=strip,
        point_start=mapper.to_point(y_start),
        point_end=mapper.to_point(y_end),
    )
