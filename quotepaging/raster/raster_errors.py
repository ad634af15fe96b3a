"""Errors raised while paginating a rendered surface."""

from __future__ import annotations


class PaginationError(Exception):
    """Base class for pagination failures surfaced to the export routine."""


class DegenerateSurface(PaginationError):
    """Raised when the surface has zero width or height."""


class BreakSelectionDefect(PaginationError):
    """Raised when a selected break maps to a non-positive slice height."""


class SliceExtractionFailure(PaginationError):
    """Raised when copying a strip out of the surface fails."""
