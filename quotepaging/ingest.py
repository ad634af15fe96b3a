"""
Helpers that load rendered documents and their element sidecars from disk.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Callable, Iterator, List, Mapping, Sequence, Tuple

from PIL import Image

from .models import ELEMENT_KINDS, ContentElement, RenderedDocument

SIDECAR_SUFFIX = ".elements.json"


def sidecar_path(image_path: Path) -> Path:
    """Return the default element sidecar path for ``image_path``.

    Example:
        >>> sidecar_path(Path("out/quote-17.png")).name
        'quote-17.elements.json'
    """

    return image_path.with_name(image_path.stem + SIDECAR_SUFFIX)


def parse_elements(payload: Mapping) -> Tuple[List[ContentElement], float | None]:
    """Return elements and layout height from a decoded sidecar.

    Args:
        payload: Decoded JSON object with ``elements`` and optional
            ``layout_height``.
    Returns:
        Tuple of (elements, layout_height).
    Raises:
        ValueError: When an entry is not an object, its kind is unknown, or
            it lacks edges.
    """

    if not isinstance(payload, Mapping):
        raise ValueError("Element sidecar must be a JSON object")
    elements: List[ContentElement] = []
    for entry in payload.get("elements", []):
        if not isinstance(entry, Mapping):
            raise ValueError(f"Element entry {entry!r} is not an object")
        kind = str(entry.get("kind", "")).lower()
        if kind not in ELEMENT_KINDS:
            raise ValueError(
                f"Unknown element kind {kind!r}; expected one of {', '.join(sorted(ELEMENT_KINDS))}"
            )
        try:
            top, bottom = float(entry["top"]), float(entry["bottom"])
        except KeyError as exc:
            raise ValueError(f"Element {entry!r} is missing {exc.args[0]!r}") from None
        except TypeError as exc:
            raise ValueError(f"Element {entry!r} has a non-numeric edge") from exc
        elements.append(ContentElement(kind=kind, top=top, bottom=bottom))
    layout_height = payload.get("layout_height")
    return elements, float(layout_height) if layout_height is not None else None


def load_document(
    *, image_path: Path, elements_path: Path | None = None
) -> RenderedDocument:
    """Load a rendered surface and its measured elements.

    Args:
        image_path: Rendered document image.
        elements_path: Element sidecar; defaults to ``<stem>.elements.json``
            beside the image when that file exists.
    Returns:
        RenderedDocument named after the image stem.
    """

    with Image.open(image_path) as opened:
        surface = opened.copy()
    elements: List[ContentElement] = []
    layout_height = None
    path = elements_path or sidecar_path(image_path)
    if elements_path is not None or path.exists():
        payload = json.loads(path.read_text())
        elements, layout_height = parse_elements(payload)
    return RenderedDocument(
        name=image_path.stem,
        surface=surface,
        elements=elements,
        layout_height=layout_height,
    )


def iter_documents(
    *,
    image_paths: Sequence[Path],
    on_error: Callable[[Path, Exception], None] | None = None,
) -> Iterator[RenderedDocument]:
    """Yield documents one at a time so only one surface is held at once.

    Args:
        image_paths: Rendered document images.
        on_error: Called with the path and error for an input that cannot be
            loaded; that input is then skipped. Errors propagate when omitted.
    Returns:
        Iterator of RenderedDocument.
    Raises:
        OSError: When an image cannot be read and no ``on_error`` is given.
        ValueError: When a sidecar is malformed and no ``on_error`` is given.
    """

    for image_path in image_paths:
        try:
            document = load_document(image_path=image_path)
        except (OSError, ValueError) as exc:
            if on_error is None:
                raise
            on_error(image_path, exc)
            continue
        yield document
