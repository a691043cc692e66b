"""Tests for page slicing."""

import pytest

from app.services.pagination import page_window, paginate


def test_first_page() -> None:
    page = paginate(list(range(20)), page=1, page_size=9)

    assert page.items == list(range(9))
    assert page.info.total_pages == 3
    assert page.info.first_item == 1
    assert page.info.last_item == 9


def test_last_page_is_clamped() -> None:
    page = paginate(list(range(20)), page=3, page_size=9)

    assert page.items == [18, 19]
    assert page.info.first_item == 19
    assert page.info.last_item == 20


def test_page_past_the_end_is_empty() -> None:
    page = paginate(list(range(9)), page=5, page_size=9)

    assert page.items == []
    assert page.info.total_pages == 1
    assert page.info.first_item == 0
    assert page.info.last_item == 0


def test_empty_sequence() -> None:
    page = paginate([], page=1, page_size=9)

    assert page.items == []
    assert page.info.total_pages == 0
    assert page.info.page_numbers == []


@pytest.mark.parametrize("length", [0, 1, 8, 9, 10, 27, 100])
@pytest.mark.parametrize("page_size", [1, 9, 50])
def test_pages_partition_the_sequence(length, page_size) -> None:
    items = list(range(length))
    first = paginate(items, 1, page_size)

    rebuilt = []
    for number in range(1, first.info.total_pages + 1):
        rebuilt.extend(paginate(items, number, page_size).items)

    assert rebuilt == items


@pytest.mark.parametrize(("page", "page_size"), [(0, 9), (-1, 9), (1, 0)])
def test_invalid_arguments(page, page_size) -> None:
    with pytest.raises(ValueError):
        paginate([1, 2, 3], page, page_size)


@pytest.mark.parametrize(
    ("current", "total", "expected"),
    [
        (1, 3, [1, 2, 3]),
        (1, 10, [1, 2, 3, 4, 5]),
        (3, 10, [1, 2, 3, 4, 5]),
        (4, 10, [2, 3, 4, 5, 6]),
        (8, 10, [6, 7, 8, 9, 10]),
        (10, 10, [6, 7, 8, 9, 10]),
        (1, 0, []),
    ],
)
def test_page_window(current, total, expected) -> None:
    assert page_window(current, total) == expected
