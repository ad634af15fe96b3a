"""Derive break candidates and protected regions from measured elements."""

from __future__ import annotations

import logging
from typing import Iterable, List, Sequence

from ..models import ContentElement, elements_of_kind
from .raster_constants import EPSILON
from .raster_coords import CoordinateMapper
from .raster_settings import PaginationSettings
from .raster_types import Boundaries, ProtectedRegion

logger = logging.getLogger(__name__)


def extract_boundaries(
    *,
    elements: Sequence[ContentElement | None],
    mapper: CoordinateMapper,
    settings: PaginationSettings,
    layout_height: float | None = None,
) -> Boundaries:
    """Return point-space break candidates and protected regions.

    Args:
        elements: Measured elements; ``None`` entries are skipped.
        mapper: Coordinate mapper for the surface.
        settings: Extraction rules and tunables.
        layout_height: Document height in the units the elements were measured
            in. Defaults to the surface height in pixels.
    Returns:
        Boundaries with ascending candidates and start-ordered regions.

    Example:
        >>> from quotepaging.raster.raster_settings import PageGeometry
        >>> mapper = CoordinateMapper.for_surface(
        ...     width=500, height=2000, geometry=PageGeometry(600, 800, 50)
        ... )
        >>> rows = [ContentElement("row", 100, 400), ContentElement("row", 400, 650)]
        >>> extract_boundaries(elements=rows, mapper=mapper, settings=PaginationSettings()).candidates
        [400.0, 650.0]
    """

    ratio = _layout_ratio(layout_height=layout_height, surface_height=mapper.height)
    measurable = [
        element for element in elements if element is not None and element.height > 0
    ]
    pixel_edges: List[float] = []
    for kind in sorted(settings.candidate_bottom_kinds):
        pixel_edges.extend(
            element.bottom * ratio for element in elements_of_kind(measurable, kind)
        )
    for kind in sorted(settings.candidate_top_kinds):
        pixel_edges.extend(
            element.top * ratio for element in elements_of_kind(measurable, kind)
        )
    candidates = _candidates(pixel_edges=pixel_edges, mapper=mapper)
    regions = _regions(
        elements=[el for el in measurable if el.kind in settings.protected_kinds],
        ratio=ratio,
        mapper=mapper,
    )
    logger.debug(
        "Extracted %d break candidates and %d protected regions",
        len(candidates),
        len(regions),
    )
    return Boundaries(candidates=candidates, regions=regions)


def _layout_ratio(*, layout_height: float | None, surface_height: int) -> float:
    """Return render pixels per layout unit.

    Args:
        layout_height: Document height in layout units, if known.
        surface_height: Surface height in pixels.
    Returns:
        Conversion ratio; 1.0 when the layout height is unknown.
    """

    if not layout_height or layout_height <= 0:
        return 1.0
    return surface_height / layout_height


def _candidates(*, pixel_edges: Iterable[float], mapper: CoordinateMapper) -> List[float]:
    """Return interior, deduplicated, ascending candidates in points.

    Args:
        pixel_edges: Edge positions in render pixels.
        mapper: Coordinate mapper for the surface.
    Returns:
        Sorted candidate positions in points.
    """

    total = mapper.total_points
    result: List[float] = []
    for edge in sorted(max(0.0, edge) for edge in pixel_edges):
        point = mapper.to_point(edge)
        if point <= 0 or point >= total:
            continue
        if result and point - result[-1] < EPSILON:
            continue
        result.append(point)
    return result


def _regions(
    *,
    elements: Sequence[ContentElement],
    ratio: float,
    mapper: CoordinateMapper,
) -> List[ProtectedRegion]:
    """Return protected regions for elements that lie on the surface.

    Args:
        elements: Elements of protected kinds.
        ratio: Render pixels per layout unit.
        mapper: Coordinate mapper for the surface.
    Returns:
        Regions in points, ordered by start.
    """

    regions: List[ProtectedRegion] = []
    for element in elements:
        start = max(0.0, element.top * ratio)
        end = max(0.0, element.bottom * ratio)
        if end <= start:
            continue
        if end > mapper.height + EPSILON:
            logger.debug(
                "Dropping %s region ending below the surface (%.1f > %d px)",
                element.kind,
                end,
                mapper.height,
            )
            continue
        regions.append(
            ProtectedRegion(start=mapper.to_point(start), end=mapper.to_point(end))
        )
    regions.sort(key=lambda region: (region.start, region.end))
    return regions
