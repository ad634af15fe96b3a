"""Shared fixtures for pagination tests."""

import pytest
from PIL import Image

from quotepaging.raster.raster_settings import PageGeometry, PaginationSettings


def striped_surface(width: int, height: int) -> Image.Image:
    """Return an RGB surface whose row ``y`` is coloured by ``y``.

    Red holds ``y % 256`` and green ``y // 256``, so any row of a slice can be
    traced back to its source row.
    """
    column = Image.new("RGB", (1, height))
    column.putdata([(y % 256, (y // 256) % 256, 0) for y in range(height)])
    return column.resize((width, height), Image.Resampling.NEAREST)


def source_row(image: Image.Image, y: int) -> int:
    """Return the surface row encoded in row ``y`` of ``image``."""
    red, green, _ = image.getpixel((0, y))
    return green * 256 + red


@pytest.fixture
def geometry():
    """600x800 pt page with 50 pt margins: 500 pt wide, 700 pt tall usable area."""
    return PageGeometry(page_width=600, page_height=800, margin=50)


@pytest.fixture
def settings():
    return PaginationSettings()
