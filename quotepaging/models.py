"""
Typed containers for rendered quotation documents.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

from PIL import Image

ROW = "row"
FOOTER = "footer"
TERMS = "terms"
CLOSING = "closing"
HEADER = "header"
NOTE = "note"

ELEMENT_KINDS = frozenset({ROW, FOOTER, TERMS, CLOSING, HEADER, NOTE})


@dataclass(slots=True)
class ContentElement:
    """A measured block that was composed into the rendered surface.

    Attributes:
        kind: One of ``ELEMENT_KINDS`` (e.g. ``"row"`` for a table row).
        top: Top edge in layout units, relative to the document top.
        bottom: Bottom edge in layout units, relative to the document top.
    """

    kind: str
    top: float
    bottom: float

    @property
    def height(self) -> float:
        """Return the measured height in layout units."""

        return self.bottom - self.top


@dataclass(slots=True)
class RenderedDocument:
    """A whole quotation rendered onto one continuous surface.

    Attributes:
        name: Label used for logging and output file names.
        surface: Full-resolution rendering of the document.
        elements: Measured sub-elements; ``None`` entries mark blocks that were
            not rendered and are skipped.
        layout_height: Height of the document in layout units. When set, element
            extents are rescaled by ``surface.height / layout_height``.
    """

    name: str
    surface: Image.Image
    elements: Sequence[ContentElement | None] = field(default_factory=list)
    layout_height: float | None = None


def elements_of_kind(
    elements: Sequence[ContentElement | None], kind: str
) -> List[ContentElement]:
    """Return the present elements matching ``kind`` in their original order.

    Example:
        >>> elements_of_kind([ContentElement("row", 0, 10), None], "row")
        [ContentElement(kind='row', top=0, bottom=10)]
    """

    return [element for element in elements if element is not None and element.kind == kind]
