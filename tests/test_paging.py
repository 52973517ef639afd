"""Tests for page windowing and clamping."""

import pytest

from trade_console.models.core import PageConfig
from trade_console.services.paging import clamp_page, paginate, total_pages_for


def test_total_pages() -> None:
    assert total_pages_for(0, 10) == 1
    assert total_pages_for(10, 10) == 1
    assert total_pages_for(11, 10) == 2
    assert total_pages_for(23, 10) == 3


def test_clamp_page() -> None:
    assert clamp_page(0, 3) == 1
    assert clamp_page(-4, 3) == 1
    assert clamp_page(5, 3) == 3
    assert clamp_page(2, 3) == 2


def test_page_beyond_end_clamps_to_last_page() -> None:
    rows = list(range(1, 24))
    result = paginate(rows, PageConfig(page_size=10, current_page=5))
    assert result["total_pages"] == 3
    assert result["current_page"] == 3
    assert result["visible_rows"] == [21, 22, 23]
    assert (result["start_index"], result["end_index"]) == (20, 23)


def test_middle_page() -> None:
    result = paginate(list(range(25)), PageConfig(page_size=10, current_page=2))
    assert result["visible_rows"] == list(range(10, 20))


def test_empty_sequence_is_page_one_of_one() -> None:
    result = paginate([], PageConfig(page_size=25, current_page=4))
    assert result["total_pages"] == 1
    assert result["current_page"] == 1
    assert result["visible_rows"] == []


@pytest.mark.parametrize("size", [0, -10, True, "10"])
def test_invalid_page_size_rejected(size) -> None:
    with pytest.raises(ValueError):
        paginate([1, 2, 3], PageConfig(page_size=size, current_page=1))


@pytest.mark.parametrize("count,size", [(23, 10), (20, 10), (1, 25), (0, 10), (101, 50)])
def test_pages_concatenate_to_the_whole_sequence(count, size) -> None:
    rows = list(range(count))
    first = paginate(rows, PageConfig(page_size=size, current_page=1))
    pages = [
        paginate(rows, PageConfig(page_size=size, current_page=n))["visible_rows"]
        for n in range(1, first["total_pages"] + 1)
    ]
    assert [r for page in pages for r in page] == rows
