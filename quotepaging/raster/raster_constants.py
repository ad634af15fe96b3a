"""Shared constants for raster pagination."""

from __future__ import annotations

import os

EPSILON = 1e-4
DEFAULT_SNAP_THRESHOLD = 120.0
DEFAULT_MIN_SLICE_HEIGHT = 40.0
PREVIEW_MARGIN = 40.0
BATCH_MARGIN = 24.0
DEBUG_PAGINATION = os.getenv("DEBUG_PAGINATION", "0") not in {
    "",
    "0",
    "false",
    "False",
}
