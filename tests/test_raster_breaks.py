"""Tests for page break selection in point space."""

import random

import pytest

from quotepaging.raster.raster_breaks import iter_breaks, select_break
from quotepaging.raster.raster_settings import PaginationSettings
from quotepaging.raster.raster_types import Boundaries, ProtectedRegion

USABLE = 700.0


def _spans(total, candidates=(), regions=(), settings=None):
    breaks = iter_breaks(
        total=total,
        usable_height=USABLE,
        boundaries=Boundaries(candidates=list(candidates), regions=list(regions)),
        settings=settings or PaginationSettings(),
    )
    return [(span.start, span.end) for span in breaks]


def test_plain_height_cuts_without_boundaries():
    assert _spans(1500.0) == [(0.0, 700.0), (700.0, 1400.0), (1400.0, 1500.0)]


def test_snaps_to_row_boundary_near_page_end():
    spans = _spans(1500.0, candidates=[300.0, 650.0])
    assert spans[0] == (0.0, 650.0)
    assert spans[1] == (650.0, 1350.0)
    assert spans[-1][1] == 1500.0


def test_ignores_row_boundary_far_from_page_end():
    spans = _spans(1500.0, candidates=[10.0])
    assert spans[0] == (0.0, 700.0)


def test_snap_uses_greatest_candidate_within_page():
    spans = _spans(1500.0, candidates=[600.0, 690.0, 720.0])
    assert spans[0] == (0.0, 690.0)


def test_late_region_is_deferred_to_next_page():
    spans = _spans(1500.0, regions=[ProtectedRegion(680.0, 760.0)])
    assert spans[0] == (0.0, 680.0)
    assert spans[1] == (680.0, 1380.0)


def test_region_starting_near_page_end_trims_page():
    spans = _spans(1500.0, regions=[ProtectedRegion(650.0, 720.0)])
    assert spans[0] == (0.0, 650.0)


def test_region_that_fits_extends_past_row_boundary():
    spans = _spans(
        1500.0, candidates=[650.0], regions=[ProtectedRegion(200.0, 690.0)]
    )
    assert spans[0] == (0.0, 690.0)


def test_region_that_fits_a_page_moves_whole_to_next_page():
    spans = _spans(1500.0, regions=[ProtectedRegion(400.0, 900.0)])
    assert spans == [(0.0, 400.0), (400.0, 1100.0), (1100.0, 1500.0)]


def test_region_wholly_on_page_needs_no_adjustment():
    spans = _spans(1500.0, regions=[ProtectedRegion(100.0, 200.0)])
    assert spans[0] == (0.0, 700.0)


def test_oversized_region_is_split_at_page_height():
    spans = _spans(1500.0, regions=[ProtectedRegion(0.0, 900.0)])
    assert spans == [(0.0, 700.0), (700.0, 1400.0), (1400.0, 1500.0)]


def test_minimum_slice_guard_discards_tiny_page():
    settings = PaginationSettings(snap_threshold=1000.0)
    spans = _spans(1500.0, candidates=[20.0], settings=settings)
    assert spans[0] == (0.0, 700.0)


def test_short_tail_is_enlarged_to_the_floor():
    spans = _spans(1410.0)
    assert spans == [(0.0, 700.0), (700.0, 1370.0), (1370.0, 1410.0)]


def test_short_tail_is_absorbed_when_it_fits():
    spans = _spans(1390.0, candidates=[1370.0])
    assert spans == [(0.0, 700.0), (700.0, 1390.0)]


def test_short_tail_breaks_above_region_the_floor_would_cut():
    spans = _spans(1405.0, regions=[ProtectedRegion(1000.0, 1390.0)])
    assert spans == [(0.0, 700.0), (700.0, 1000.0), (1000.0, 1405.0)]


def test_short_tail_with_touching_regions_keeps_both_whole():
    end = select_break(
        cursor=3388.1,
        total=4093.0,
        usable_height=USABLE,
        boundaries=Boundaries(
            regions=[
                ProtectedRegion(3388.1, 3678.0),
                ProtectedRegion(3678.0, 4076.0),
            ]
        ),
        settings=PaginationSettings(),
    )
    assert end == 3678.0


def test_select_break_never_passes_surface_end():
    end = select_break(
        cursor=1400.0,
        total=1500.0,
        usable_height=USABLE,
        boundaries=Boundaries(),
        settings=PaginationSettings(),
    )
    assert end == 1500.0


def test_break_sequence_is_lazy():
    breaks = iter_breaks(
        total=10_000.0,
        usable_height=USABLE,
        boundaries=Boundaries(),
        settings=PaginationSettings(),
    )
    first = next(breaks)
    assert (first.start, first.end) == (0.0, 700.0)


def _random_layout(seed):
    rng = random.Random(seed)
    total = rng.uniform(800.0, 4000.0)
    candidates = sorted({rng.uniform(1.0, total - 1.0) for _ in range(rng.randint(0, 40))})
    regions = []
    y = rng.uniform(0.0, 300.0)
    while True:
        height = rng.uniform(50.0, 300.0)
        if y + height > total:
            break
        regions.append(ProtectedRegion(y, y + height))
        y += height + rng.uniform(100.0, 600.0)
    return total, candidates, regions


@pytest.mark.parametrize("seed", range(25))
def test_break_properties_hold_for_varied_layouts(seed):
    total, candidates, regions = _random_layout(seed)
    settings = PaginationSettings()
    spans = _spans(total, candidates, regions, settings)

    assert spans[0][0] == 0.0
    assert spans[-1][1] == pytest.approx(total)
    for (_, end), (start, _) in zip(spans, spans[1:]):
        assert end == start
    for start, end in spans:
        assert end - start <= USABLE + 1e-6
    for start, end in spans[:-1]:
        assert end - start >= settings.min_slice_height
    for region in regions:
        assert any(start <= region.start and region.end <= end for start, end in spans)


def test_break_selection_is_deterministic():
    total, candidates, regions = _random_layout(7)
    assert _spans(total, candidates, regions) == _spans(total, candidates, regions)
