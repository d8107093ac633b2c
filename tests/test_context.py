import random

import pytest

from searcher.context import build_ranges, range_indexes
from searcher.models import ContextRange


def _windows_union(matches, line_count, before, after):
    covered = set()
    for m in matches:
        covered.update(range(max(0, m - before), min(line_count - 1, m + after) + 1))
    return covered


def test_touching_windows_merge():
    assert build_ranges([0, 3], line_count=4, before=1, after=1) == [ContextRange(0, 3)]


def test_separate_windows_stay_apart():
    assert build_ranges([1, 8], line_count=10, before=1, after=1) == [ContextRange(0, 2), ContextRange(7, 9)]


def test_overlapping_windows_merge():
    assert build_ranges([2, 4], line_count=10, before=2, after=2) == [ContextRange(0, 6)]


def test_windows_are_clamped_to_file():
    assert build_ranges([0], line_count=3, before=5, after=0) == [ContextRange(0, 0)]
    assert build_ranges([2], line_count=3, before=0, after=5) == [ContextRange(2, 2)]


def test_asymmetric_windows():
    assert build_ranges([5], line_count=20, before=3, after=1) == [ContextRange(2, 6)]


def test_zero_context_gives_one_line_per_match():
    matches = [1, 2, 5, 9]
    ranges = build_ranges(matches, line_count=10, before=0, after=0)

    assert all(r.start == r.end for r in ranges)
    assert [r.start for r in ranges] == matches


def test_no_matches_or_empty_file():
    assert build_ranges([], line_count=10, before=2, after=2) == []
    assert build_ranges([0], line_count=0, before=2, after=2) == []


def test_negative_window_rejected():
    with pytest.raises(ValueError):
        build_ranges([1], line_count=5, before=-1, after=0)


@pytest.mark.parametrize("seed", range(25))
def test_ranges_cover_exactly_the_union_of_windows(seed):
    rng = random.Random(seed)
    line_count = rng.randint(1, 60)
    matches = sorted(rng.sample(range(line_count), rng.randint(1, line_count)))
    before = rng.randint(0, 4)
    after = rng.randint(0, 4)

    ranges = build_ranges(matches, line_count=line_count, before=before, after=after)

    for r in ranges:
        assert 0 <= r.start <= r.end < line_count
    for left, right in zip(ranges, ranges[1:]):
        assert right.start > left.end
        if before or after:
            assert right.start > left.end + 1

    emitted = range_indexes(ranges)
    assert len(emitted) == len(set(emitted))
    assert set(emitted) == _windows_union(matches, line_count, before, after)
