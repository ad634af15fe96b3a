"""
Command line driver: paginate rendered quotation images into page fragments.
"""

from __future__ import annotations

import argparse
import logging
from dataclasses import replace
from pathlib import Path
from typing import List, Sequence

from tqdm import tqdm

from .ingest import iter_documents
from .raster.raster_constants import DEBUG_PAGINATION
from .raster.raster_pagination import DocumentPages, iter_document_pages
from .raster.raster_settings import PAGE_SIZES, PROFILES, ExportProfile, page_geometry

logger = logging.getLogger(__name__)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the pagination driver."""

    parser = argparse.ArgumentParser(
        description="Split rendered quotation images into page-sized fragments."
    )
    parser.add_argument(
        "images",
        nargs="+",
        type=Path,
        help="Rendered document images; <stem>.elements.json sidecars are used when present.",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=Path("output/pages"),
        help="Directory into which page fragments are written.",
    )
    parser.add_argument(
        "--profile",
        choices=sorted(PROFILES),
        default="preview",
        help="Export profile supplying margin and fragment encoding.",
    )
    parser.add_argument(
        "--page-size",
        choices=sorted(PAGE_SIZES),
        default="a4",
        help="Output page size.",
    )
    parser.add_argument(
        "--margin",
        type=float,
        default=None,
        help="Page margin in points (defaults to the profile margin).",
    )
    parser.add_argument(
        "--snap-threshold",
        type=float,
        default=None,
        help="Distance in points within which a row boundary is preferred.",
    )
    parser.add_argument(
        "--min-slice-height",
        type=float,
        default=None,
        help="Smallest page height in points that may be emitted.",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log each break decision.",
    )
    return parser.parse_args(argv)


def _resolve_profile(*, args: argparse.Namespace) -> ExportProfile:
    """Return the selected profile with CLI overrides applied.

    Args:
        args: Parsed CLI arguments.
    Returns:
        ExportProfile for the run.
    """

    base = PROFILES[args.profile]
    margin = base.geometry.margin if args.margin is None else args.margin
    settings = base.settings
    if args.snap_threshold is not None:
        settings = replace(settings, snap_threshold=args.snap_threshold)
    if args.min_slice_height is not None:
        settings = replace(settings, min_slice_height=args.min_slice_height)
    return replace(
        base,
        geometry=page_geometry(size=args.page_size, margin=margin),
        settings=settings,
    )


def write_pages(
    *, result: DocumentPages, output_dir: Path, profile: ExportProfile
) -> List[Path]:
    """Write each page of ``result`` as ``<name>-p<N>.<ext>``.

    Args:
        result: Paginated document.
        output_dir: Destination directory.
        profile: Export profile supplying the encoding.
    Returns:
        Written file paths in page order.
    """

    written: List[Path] = []
    for page in result.pages:
        path = output_dir / f"{result.name}-p{page.index + 1}.{profile.extension}"
        path.write_bytes(
            page.encode(image_format=profile.image_format, quality=profile.quality)
        )
        written.append(path)
    return written


def main(argv: Sequence[str] | None = None) -> int:
    """Paginate every image argument and write its fragments.

    Returns:
        Exit status: 0 when every document paginated, else 1.

    Example:
        >>> main(["quote.png", "-o", "output/pages"])  # doctest: +SKIP
        0
    """

    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose or DEBUG_PAGINATION else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        profile = _resolve_profile(args=args)
    except ValueError as exc:
        logger.error("Invalid page settings: %s", exc)
        return 2
    args.output_dir.mkdir(parents=True, exist_ok=True)
    failed: List[str] = []
    with tqdm(total=len(args.images), desc="Paginating", unit="doc") as progress:

        def skip_unreadable(path: Path, exc: Exception) -> None:
            logger.warning("Could not load %s: %s", path, exc)
            failed.append(path.stem)
            progress.update(1)

        results = iter_document_pages(
            documents=iter_documents(
                image_paths=args.images, on_error=skip_unreadable
            ),
            profile=profile,
            progress=progress,
        )
        for result in results:
            if not result.ok:
                failed.append(result.name)
                continue
            written = write_pages(
                result=result, output_dir=args.output_dir, profile=profile
            )
            logger.info("%s: wrote %d page(s)", result.name, len(written))
    if failed:
        logger.error("Pagination failed for: %s", ", ".join(failed))
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
