"""Tests for solopdf.core.pdf.selection: page selection resolution."""

import pytest

from solopdf.core.pdf import PAGE_SENTINELS, resolve_pages
from solopdf.errors import NoValidPagesError


@pytest.mark.parametrize(
    ("spec", "expected"),
    [
        ("all", [1, 2, 3]),
        ("even", [2]),
        ("odd", [1, 3]),
        ("first", [1]),
        ("last", [3]),
        ("ALL", [1, 2, 3]),
        (" odd ", [1, 3]),
        ("1,99,3,0,-1", [1, 3]),
        ("3, 1, 3", [1, 3]),
        ("2,x,3", [2, 3]),
        ("1,,2", [1, 2]),
    ],
)
def test_three_page_selection(spec, expected):
    assert resolve_pages(spec, 3) == expected


@pytest.mark.parametrize("spec", ["", "   ", "0", "99", "abc", "0,-1,4", ","])
def test_empty_selection_raises(spec):
    with pytest.raises(NoValidPagesError) as exc_info:
        resolve_pages(spec, 3)
    assert exc_info.value.page_count == 3


def test_iterable_selection_sorted_and_unique():
    assert resolve_pages([3, 1, 1, 2], 3) == [1, 2, 3]


def test_iterable_drops_out_of_range_and_non_int():
    assert resolve_pages([0, 2, 5, -1, "3", 1.0, True], 3) == [2]


def test_even_on_single_page_document():
    with pytest.raises(NoValidPagesError):
        resolve_pages("even", 1)


def test_last_on_empty_document():
    with pytest.raises(NoValidPagesError):
        resolve_pages("last", 0)


def test_result_is_subset_of_document():
    pages = resolve_pages("1,2,3,4,5,6,7,8,9,10", 4)
    assert pages == [1, 2, 3, 4]


@pytest.mark.parametrize("sentinel", PAGE_SENTINELS)
def test_every_sentinel_resolves(sentinel):
    assert resolve_pages(sentinel, 4)
