"""Break selection: decide where each page ends in point space."""

from __future__ import annotations

import logging
from bisect import bisect_right
from dataclasses import dataclass
from typing import Iterator, Sequence

from .raster_constants import DEBUG_PAGINATION, EPSILON
from .raster_settings import PaginationSettings
from .raster_types import Boundaries, PageBreak, ProtectedRegion

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class _BreakWindow:
    """Fixed inputs for one break decision."""

    cursor: float
    total: float
    usable_height: float

    @property
    def ideal_end(self) -> float:
        """Return the page end when no adjustment is applied."""

        return self.cursor + self.usable_height


def _debug(*, msg: str) -> None:
    """Log break-selection debug output when enabled.

    Args:
        msg: Message to log.
    Returns:
        None.
    """

    if DEBUG_PAGINATION:
        logger.debug(msg)


def iter_breaks(
    *,
    total: float,
    usable_height: float,
    boundaries: Boundaries,
    settings: PaginationSettings,
) -> Iterator[PageBreak]:
    """Yield page spans from the top of the surface to ``total``.

    Args:
        total: Surface height in points.
        usable_height: Maximum content height per page, in points.
        boundaries: Break candidates and protected regions.
        settings: Break-selection tunables.
    Returns:
        Iterator of contiguous PageBreak spans covering ``[0, total]``.

    Example:
        >>> spans = iter_breaks(
        ...     total=1500.0,
        ...     usable_height=700.0,
        ...     boundaries=Boundaries(),
        ...     settings=PaginationSettings(),
        ... )
        >>> [(span.start, span.end) for span in spans]
        [(0.0, 700.0), (700.0, 1400.0), (1400.0, 1500.0)]
    """

    cursor = 0.0
    while cursor < total - EPSILON:
        end = select_break(
            cursor=cursor,
            total=total,
            usable_height=usable_height,
            boundaries=boundaries,
            settings=settings,
        )
        yield PageBreak(start=cursor, end=end)
        cursor = end


def select_break(
    *,
    cursor: float,
    total: float,
    usable_height: float,
    boundaries: Boundaries,
    settings: PaginationSettings,
) -> float:
    """Return the end of the page that starts at ``cursor``.

    Args:
        cursor: Start of the unpaged content, in points.
        total: Surface height in points.
        usable_height: Maximum content height per page, in points.
        boundaries: Break candidates and protected regions.
        settings: Break-selection tunables.
    Returns:
        Page end in points, greater than ``cursor`` and at most ``total``.
    """

    window = _BreakWindow(cursor=cursor, total=total, usable_height=usable_height)
    page_end = _snapped_end(
        window=window, candidates=boundaries.candidates, settings=settings
    )
    region = _blocking_region(
        regions=boundaries.regions, window=window, page_end=page_end
    )
    if region is not None:
        page_end = _region_override(
            window=window, region=region, page_end=page_end, settings=settings
        )
    if page_end - cursor < settings.min_slice_height:
        _debug(msg=f"slice {cursor:.1f}->{page_end:.1f} below floor, using full page")
        page_end = window.ideal_end
    page_end = min(page_end, total)
    page_end = _guard_tail(
        window=window, page_end=page_end, regions=boundaries.regions, settings=settings
    )
    _debug(msg=f"page {cursor:.1f}->{page_end:.1f} (ideal {window.ideal_end:.1f})")
    return page_end


def _nearest_candidate(
    *, candidates: Sequence[float], cursor: float, ideal_end: float
) -> float | None:
    """Return the greatest candidate in ``(cursor, ideal_end]``.

    Args:
        candidates: Ascending candidate positions.
        cursor: Page start.
        ideal_end: Unadjusted page end.
    Returns:
        Candidate position or None.
    """

    idx = bisect_right(candidates, ideal_end) - 1
    if idx >= 0 and candidates[idx] > cursor:
        return candidates[idx]
    return None


def _snapped_end(
    *,
    window: _BreakWindow,
    candidates: Sequence[float],
    settings: PaginationSettings,
) -> float:
    """Return the page end after snapping to a nearby break candidate.

    Args:
        window: Current break window.
        candidates: Ascending candidate positions.
        settings: Break-selection tunables.
    Returns:
        Candidate position when it lies within the snap threshold of the ideal
        end, else the ideal end.
    """

    candidate = _nearest_candidate(
        candidates=candidates, cursor=window.cursor, ideal_end=window.ideal_end
    )
    if candidate is not None and window.ideal_end - candidate <= settings.snap_threshold:
        return candidate
    return window.ideal_end


def _blocking_region(
    *,
    regions: Sequence[ProtectedRegion],
    window: _BreakWindow,
    page_end: float,
) -> ProtectedRegion | None:
    """Return the first region that overlaps the page but is not already on it.

    Args:
        regions: Regions ordered by start.
        window: Current break window.
        page_end: Tentative page end.
    Returns:
        Region to act on, or None.
    """

    for region in regions:
        if not region.intersects(start=window.cursor, end=window.ideal_end):
            continue
        if region.inside(start=window.cursor, end=page_end):
            continue
        return region
    return None


def _region_override(
    *,
    window: _BreakWindow,
    region: ProtectedRegion,
    page_end: float,
    settings: PaginationSettings,
) -> float:
    """Return the page end adjusted to keep ``region`` intact where possible.

    Args:
        window: Current break window.
        region: Region overlapping the page.
        page_end: Page end after snapping.
        settings: Break-selection tunables.
    Returns:
        Adjusted page end.
    """

    cursor = window.cursor
    starts_late = region.start - cursor >= window.usable_height / 2
    if window.ideal_end - region.start <= settings.snap_threshold and starts_late:
        _debug(msg=f"deferring region {region.start:.1f}-{region.end:.1f}")
        return min(page_end, region.start)
    if region.end - cursor <= window.usable_height:
        _debug(msg=f"pulling region {region.start:.1f}-{region.end:.1f} onto page")
        return max(page_end, region.end)
    if (
        region.height <= window.usable_height
        and region.start - cursor >= settings.min_slice_height
    ):
        _debug(msg=f"moving region {region.start:.1f}-{region.end:.1f} to next page")
        return region.start
    _debug(msg=f"region {region.start:.1f}-{region.end:.1f} taller than a page, splitting")
    return window.ideal_end


def _bisected_fitting_region(
    *, regions: Sequence[ProtectedRegion], position: float, usable_height: float
) -> ProtectedRegion | None:
    """Return the first region that fits on a page and ``position`` cuts through."""

    for region in regions:
        if region.start < position < region.end and region.height <= usable_height:
            return region
    return None


def _guard_tail(
    *,
    window: _BreakWindow,
    page_end: float,
    regions: Sequence[ProtectedRegion],
    settings: PaginationSettings,
) -> float:
    """Return a page end that does not leave a final page below the floor.

    Args:
        window: Current break window.
        page_end: Page end clamped to the surface.
        regions: Regions ordered by start.
        settings: Break-selection tunables.
    Returns:
        Page end, possibly absorbing or enlarging the remaining tail.
    """

    tail = window.total - page_end
    if tail <= EPSILON or tail >= settings.min_slice_height:
        return page_end
    if window.total - window.cursor <= window.usable_height + EPSILON:
        return window.total
    pulled = window.total - settings.min_slice_height
    if pulled - window.cursor < settings.min_slice_height:
        return page_end
    region = _bisected_fitting_region(
        regions=regions, position=pulled, usable_height=window.usable_height
    )
    if region is None:
        return pulled
    # Break above the region instead, keeping both sides above the floor.
    start = region.start
    if (
        start - window.cursor >= settings.min_slice_height
        and window.total - start >= settings.min_slice_height
        and _bisected_fitting_region(
            regions=regions, position=start, usable_height=window.usable_height
        )
        is None
    ):
        _debug(msg=f"tail guard moving break to region start {start:.1f}")
        return start
    return page_end
