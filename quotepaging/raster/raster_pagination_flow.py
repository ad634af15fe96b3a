"""Pagination flow orchestration for rendered documents."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Iterable, Iterator, List, Protocol

from PIL import Image

from ..models import RenderedDocument
from .raster_boundaries import extract_boundaries
from .raster_breaks import iter_breaks
from .raster_constants import EPSILON
from .raster_coords import CoordinateMapper
from .raster_errors import BreakSelectionDefect, PaginationError
from .raster_settings import (
    BATCH_PROFILE,
    PREVIEW_PROFILE,
    ExportProfile,
    PageGeometry,
    PaginationSettings,
)
from .raster_slicer import slice_page, slice_rows
from .raster_types import Boundaries, Page

logger = logging.getLogger(__name__)


class _ProgressTracker(Protocol):
    """Protocol for document pagination progress updates."""

    def update(self, n: int | float = 1) -> object:
        """Advance the progress tracker by ``n``."""


@dataclass(slots=True)
class DocumentPages:
    """Pagination outcome for one document of a batch.

    Args:
        name: Document name.
        pages: Pages in order; empty when pagination failed.
        error: Failure raised while paginating, if any.
    """

    name: str
    pages: List[Page] = field(default_factory=list)
    error: PaginationError | None = None

    @property
    def ok(self) -> bool:
        """Return True when the document paginated successfully."""

        return self.error is None


def iter_pages(
    *,
    surface: Image.Image,
    boundaries: Boundaries,
    geometry: PageGeometry,
    settings: PaginationSettings,
    mapper: CoordinateMapper | None = None,
) -> Iterator[Page]:
    """Yield pages cut from ``surface`` from top to bottom.

    Args:
        surface: Rendered surface.
        boundaries: Break candidates and protected regions in points.
        geometry: Output page geometry.
        settings: Break-selection tunables.
        mapper: Mapper built for ``surface``; created when omitted.
    Returns:
        Iterator of Page fragments.
    Raises:
        DegenerateSurface: When the surface has no area.
        BreakSelectionDefect: When even the remaining surface is empty.
        SliceExtractionFailure: When a strip cannot be copied.
    """

    mapper = mapper or CoordinateMapper.for_surface(
        width=surface.width, height=surface.height, geometry=geometry
    )
    if mapper.total_points <= geometry.usable_height + EPSILON:
        yield slice_rows(
            surface=surface, y_start=0, y_end=mapper.height, mapper=mapper, index=0
        )
        return
    next_row = 0
    breaks = iter_breaks(
        total=mapper.total_points,
        usable_height=geometry.usable_height,
        boundaries=boundaries,
        settings=settings,
    )
    for index, page_break in enumerate(breaks):
        try:
            page = slice_page(
                surface=surface, page_break=page_break, mapper=mapper, index=index
            )
        except BreakSelectionDefect as exc:
            logger.warning("%s; slicing the remaining surface as one page", exc)
            yield slice_rows(
                surface=surface,
                y_start=next_row,
                y_end=mapper.height,
                mapper=mapper,
                index=index,
            )
            return
        next_row = page.source_y_end
        yield page


def paginate_surface(
    *,
    surface: Image.Image,
    boundaries: Boundaries,
    geometry: PageGeometry,
    settings: PaginationSettings,
    mapper: CoordinateMapper | None = None,
) -> List[Page]:
    """Paginate a surface into an ordered list of pages.

    Args:
        surface: Rendered surface.
        boundaries: Break candidates and protected regions in points.
        geometry: Output page geometry.
        settings: Break-selection tunables.
        mapper: Mapper built for ``surface``; created when omitted.
    Returns:
        List of Page fragments covering the whole surface.
    """

    pages = list(
        iter_pages(
            surface=surface,
            boundaries=boundaries,
            geometry=geometry,
            settings=settings,
            mapper=mapper,
        )
    )
    logger.info(
        "Paginated %dx%d surface into %d page(s)",
        surface.width,
        surface.height,
        len(pages),
    )
    return pages


def paginate_document(
    *,
    document: RenderedDocument,
    profile: ExportProfile = PREVIEW_PROFILE,
) -> List[Page]:
    """Paginate a rendered document using its measured elements.

    Args:
        document: Document surface and elements.
        profile: Export profile providing geometry and tunables.
    Returns:
        List of Page fragments.

    Example:
        >>> pages = paginate_document(
        ...     document=RenderedDocument("q-1", Image.new("RGB", (600, 400), "white"))
        ... )
        >>> len(pages)
        1
    """

    mapper = CoordinateMapper.for_surface(
        width=document.surface.width,
        height=document.surface.height,
        geometry=profile.geometry,
    )
    boundaries = extract_boundaries(
        elements=document.elements,
        mapper=mapper,
        settings=profile.settings,
        layout_height=document.layout_height,
    )
    return paginate_surface(
        surface=document.surface,
        boundaries=boundaries,
        geometry=profile.geometry,
        settings=profile.settings,
        mapper=mapper,
    )


def iter_document_pages(
    *,
    documents: Iterable[RenderedDocument],
    profile: ExportProfile = BATCH_PROFILE,
    progress: _ProgressTracker | None = None,
) -> Iterator[DocumentPages]:
    """Paginate documents one at a time, yielding each outcome.

    Args:
        documents: Documents in export order; may be produced lazily.
        profile: Export profile providing geometry and tunables.
        progress: Optional progress tracker advanced once per document.
    Returns:
        Iterator of DocumentPages in input order.
    """

    for document in documents:
        try:
            result = DocumentPages(
                name=document.name,
                pages=paginate_document(document=document, profile=profile),
            )
        except PaginationError as exc:
            logger.warning("Pagination failed for %s: %s", document.name, exc)
            result = DocumentPages(name=document.name, error=exc)
        if progress is not None:
            progress.update(1)
        yield result


def paginate_documents(
    *,
    documents: Iterable[RenderedDocument],
    profile: ExportProfile = BATCH_PROFILE,
    progress: _ProgressTracker | None = None,
) -> List[DocumentPages]:
    """Paginate several documents sequentially.

    Args:
        documents: Documents in export order.
        profile: Export profile providing geometry and tunables.
        progress: Optional progress tracker advanced once per document.
    Returns:
        List of DocumentPages in input order.
    """

    return list(
        iter_document_pages(documents=documents, profile=profile, progress=progress)
    )
