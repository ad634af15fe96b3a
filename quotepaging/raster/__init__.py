"""Split rendered documents into page-sized raster fragments."""

from __future__ import annotations

from .raster_boundaries import extract_boundaries
from .raster_breaks import iter_breaks, select_break
from .raster_coords import CoordinateMapper
from .raster_errors import (
    BreakSelectionDefect,
    DegenerateSurface,
    PaginationError,
    SliceExtractionFailure,
)
from .raster_pagination import (
    DocumentPages,
    iter_document_pages,
    iter_pages,
    paginate_document,
    paginate_documents,
    paginate_surface,
)
from .raster_settings import (
    BATCH_PROFILE,
    PREVIEW_PROFILE,
    PROFILES,
    ExportProfile,
    PageGeometry,
    PaginationSettings,
    page_geometry,
)
from .raster_slicer import slice_page
from .raster_types import Boundaries, Page, PageBreak, ProtectedRegion

__all__ = [
    "BATCH_PROFILE",
    "Boundaries",
    "BreakSelectionDefect",
    "CoordinateMapper",
    "DegenerateSurface",
    "DocumentPages",
    "ExportProfile",
    "PREVIEW_PROFILE",
    "PROFILES",
    "Page",
    "PageBreak",
    "PageGeometry",
    "PaginationError",
    "PaginationSettings",
    "ProtectedRegion",
    "SliceExtractionFailure",
    "extract_boundaries",
    "iter_breaks",
    "iter_document_pages",
    "iter_pages",
    "page_geometry",
    "paginate_document",
    "paginate_documents",
    "paginate_surface",
    "select_break",
    "slice_page",
]
