import pytest

from burpp.services.search.pagination import offset_for, paginate

ITEMS = list(range(25))


def test_first_page_of_25_with_limit_12():
    page = paginate(ITEMS, page=1, limit=12)
    assert page.items == list(range(12))
    assert page.total == 25
    assert page.has_more is True


def test_second_page_has_more():
    page = paginate(ITEMS, page=2, limit=12)
    assert page.items == list(range(12, 24))
    assert page.has_more is True


def test_last_page_returns_remainder():
    page = paginate(ITEMS, page=3, limit=12)
    assert page.items == [24]
    assert page.has_more is False


def test_page_past_the_end_is_empty():
    page = paginate(ITEMS, page=5, limit=12)
    assert page.items == []
    assert page.total == 25
    assert page.has_more is False


def test_offset_for_is_one_based():
    assert offset_for(1, 12) == 0
    assert offset_for(3, 12) == 24


@pytest.mark.parametrize("page,limit", [(0, 12), (1, 0)])
def test_rejects_non_positive_arguments(page, limit):
    with pytest.raises(ValueError):
        paginate(ITEMS, page=page, limit=limit)
