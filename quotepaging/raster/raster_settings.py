"""Page geometry, tunables, and export profiles for raster pagination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Tuple

from reportlab.lib.pagesizes import A4, LEGAL, LETTER

from ..models import CLOSING, FOOTER, ROW, TERMS
from .raster_constants import (
    BATCH_MARGIN,
    DEFAULT_MIN_SLICE_HEIGHT,
    DEFAULT_SNAP_THRESHOLD,
    PREVIEW_MARGIN,
)

PAGE_SIZES: Dict[str, Tuple[float, float]] = {
    "a4": A4,
    "letter": LETTER,
    "legal": LEGAL,
}


@dataclass(slots=True)
class PageGeometry:
    """Output page size and margin in points.

    Example:
        >>> geometry = PageGeometry(page_width=600, page_height=800, margin=50)
        >>> geometry.usable_height
        700
    """

    page_width: float = A4[0]
    page_height: float = A4[1]
    margin: float = PREVIEW_MARGIN

    def __post_init__(self) -> None:
        if self.margin < 0:
            raise ValueError(f"margin must be non-negative, got {self.margin}")
        if self.usable_width <= 0 or self.usable_height <= 0:
            raise ValueError(
                f"margin {self.margin} leaves no usable area on a "
                f"{self.page_width}x{self.page_height} page"
            )

    @property
    def usable_width(self) -> float:
        """Return the width available for content inside margins.

        Returns:
            Width in points.
        """

        return self.page_width - 2 * self.margin

    @property
    def usable_height(self) -> float:
        """Return the height available for content inside margins.

        Returns:
            Height in points.
        """

        return self.page_height - 2 * self.margin


@dataclass(slots=True)
class PaginationSettings:
    """Break-selection tunables and boundary extraction rules.

    Args:
        snap_threshold: Distance in points from the ideal page end within which
            a natural break is preferred over a raw height cut.
        min_slice_height: Point-space floor below which a computed page is
            rejected.
        candidate_bottom_kinds: Element kinds whose bottom edge is a break
            candidate.
        candidate_top_kinds: Element kinds whose top edge is a break candidate.
        protected_kinds: Element kinds that become protected regions.
    """

    snap_threshold: float = DEFAULT_SNAP_THRESHOLD
    min_slice_height: float = DEFAULT_MIN_SLICE_HEIGHT
    candidate_bottom_kinds: FrozenSet[str] = frozenset({ROW})
    candidate_top_kinds: FrozenSet[str] = frozenset({FOOTER})
    protected_kinds: FrozenSet[str] = frozenset({TERMS, CLOSING, FOOTER})

    def __post_init__(self) -> None:
        if self.snap_threshold < 0:
            raise ValueError(
                f"snap_threshold must be non-negative, got {self.snap_threshold}"
            )
        if self.min_slice_height < 0:
            raise ValueError(
                f"min_slice_height must be non-negative, got {self.min_slice_height}"
            )


@dataclass(slots=True)
class ExportProfile:
    """Settings shared by one export call site.

    Args:
        name: Profile label.
        geometry: Output page geometry.
        settings: Break-selection tunables.
        image_format: Pillow format name used to encode fragments.
        quality: Encoder quality for lossy formats.
    """

    name: str
    geometry: PageGeometry = field(default_factory=PageGeometry)
    settings: PaginationSettings = field(default_factory=PaginationSettings)
    image_format: str = "PNG"
    quality: int = 95

    @property
    def extension(self) -> str:
        """Return the file extension matching ``image_format``."""

        return "jpg" if self.image_format.upper() == "JPEG" else self.image_format.lower()


PREVIEW_PROFILE = ExportProfile(
    name="preview",
    geometry=PageGeometry(margin=PREVIEW_MARGIN),
)
BATCH_PROFILE = ExportProfile(
    name="batch",
    geometry=PageGeometry(margin=BATCH_MARGIN),
    image_format="JPEG",
    quality=70,
)
PROFILES: Dict[str, ExportProfile] = {
    PREVIEW_PROFILE.name: PREVIEW_PROFILE,
    BATCH_PROFILE.name: BATCH_PROFILE,
}


def page_geometry(*, size: str = "a4", margin: float = PREVIEW_MARGIN) -> PageGeometry:
    """Return geometry for a named page size.

    Args:
        size: Key of ``PAGE_SIZES`` (case-insensitive).
        margin: Margin on every side, in points.
    Returns:
        PageGeometry for the size.

    Example:
        >>> page_geometry(size="letter", margin=36).page_width
        612.0
    """

    try:
        width, height = PAGE_SIZES[size.lower()]
    except KeyError:
        raise ValueError(
            f"Unknown page size {size!r}; expected one of {', '.join(sorted(PAGE_SIZES))}"
        ) from None
    return PageGeometry(page_width=width, page_height=height, margin=margin)
