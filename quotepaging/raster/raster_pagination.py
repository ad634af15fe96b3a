"""Public pagination helpers for raster output."""

from __future__ import annotations

from .raster_pagination_flow import (
    DocumentPages,
    iter_document_pages,
    iter_pages,
    paginate_document,
    paginate_documents,
    paginate_surface,
)

__all__ = [
    "DocumentPages",
    "iter_document_pages",
    "iter_pages",
    "paginate_document",
    "paginate_documents",
    "paginate_surface",
]
