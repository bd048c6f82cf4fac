import random

import pytest

from freelist_lab.dlist import DList, SortMethod


def ascending(a, b):
    if a < b:
        return 1
    if a > b:
        return -1
    return 0


def by_key(a, b):
    return ascending(a[0], b[0])


def build(values, compare=ascending):
    lst = DList(compare)
    for v in values:
        lst.insert(v)
    return lst


def test_empty_list():
    lst = DList(ascending)
    assert len(lst) == 0
    assert lst.front() is None and lst.back() is None
    assert lst.remove() is None
    assert lst.is_sorted


def test_insert_appends_and_marks_unsorted():
    lst = build([3, 1, 2])
    assert list(lst) == [3, 1, 2]
    assert not lst.is_sorted
    assert lst.front().item == 3
    assert lst.back().item == 2


def test_insert_before_node():
    lst = build([1, 3])
    lst.insert(2, before=lst.back())
    lst.insert(0, before=lst.front())
    assert list(lst) == [0, 1, 2, 3]
    lst.validate()


def test_insert_sorted_orders_items():
    lst = DList(ascending)
    for v in [5, 1, 4, 2, 3]:
        lst.insert_sorted(v)
    assert list(lst) == [1, 2, 3, 4, 5]
    assert lst.is_sorted
    lst.validate()


def test_insert_sorted_places_after_equals():
    lst = DList(by_key)
    for item in [(1, "a"), (2, "b"), (1, "c"), (1, "d")]:
        lst.insert_sorted(item)
    assert list(lst) == [(1, "a"), (1, "c"), (1, "d"), (2, "b")]


def test_insert_sorted_on_unsorted_raises():
    lst = build([2, 1])
    with pytest.raises(ValueError):
        lst.insert_sorted(3)


def test_remove_head_tail_middle():
    lst = build([1, 2, 3, 4])
    middle = lst.front().next
    assert lst.remove(middle) == 2
    assert lst.remove(lst.back()) == 4
    assert lst.remove() == 1
    assert list(lst) == [3]
    lst.validate()
    assert lst.remove() == 3
    assert len(lst) == 0
    lst.validate()


def test_remove_foreign_node_raises():
    a = build([1])
    b = build([2])
    with pytest.raises(ValueError):
        a.remove(b.front())


def test_find():
    lst = build([7, 3, 9])
    node = lst.find(3)
    assert node.item == 3
    assert lst.find(4) is None


@pytest.mark.parametrize("method", list(SortMethod))
def test_sort_methods(method):
    rng = random.Random(2)
    values = [rng.randrange(50) for _ in range(200)]
    lst = build(values)
    lst.sort(method)
    assert list(lst) == sorted(values)
    assert len(lst) == len(values)
    assert lst.is_sorted


@pytest.mark.parametrize("method", [1, 2, 3, 4])
def test_sort_accepts_int_codes(method):
    lst = build([4, 3, 2, 1])
    lst.sort(method)
    assert list(lst) == [1, 2, 3, 4]


@pytest.mark.parametrize("method", list(SortMethod))
def test_sort_small_lists(method):
    empty = DList(ascending)
    empty.sort(method)
    assert list(empty) == []
    single = build([5])
    single.sort(method)
    assert list(single) == [5]


@pytest.mark.parametrize("method", list(SortMethod))
def test_sort_descending_input(method):
    values = list(range(100, 0, -1))
    lst = build(values)
    lst.sort(method)
    assert list(lst) == sorted(values)


def test_insertion_sort_is_stable():
    items = [(2, "a"), (1, "b"), (2, "c"), (1, "d")]
    lst = build(items, by_key)
    lst.sort(SortMethod.INSERTION)
    assert list(lst) == [(1, "b"), (1, "d"), (2, "a"), (2, "c")]


def test_sorted_list_accepts_insert_sorted():
    lst = build([3, 1, 2])
    lst.sort(SortMethod.MERGE)
    lst.insert_sorted(0)
    assert list(lst) == [0, 1, 2, 3]


def test_invalid_sort_method():
    lst = build([1, 2])
    with pytest.raises(ValueError):
        lst.sort(9)


def test_validate_detects_disorder():
    lst = build([2, 1])
    lst.is_sorted = True
    with pytest.raises(ValueError):
        lst.validate()


def test_nodes_usable_after_sort():
    lst = build([3, 1, 2])
    lst.sort(SortMethod.MERGE)
    assert lst.remove(lst.find(2)) == 2
    assert list(lst) == [1, 3]