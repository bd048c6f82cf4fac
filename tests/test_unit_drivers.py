import io

import pytest

from freelist_lab.mem import Allocator
from freelist_lab.unit_drivers import run_unit_driver


def _run(number, **kwargs):
    allocator = Allocator(**kwargs)
    out = io.StringIO()
    addresses = run_unit_driver(number, allocator, out)
    return allocator, out.getvalue(), addresses


def test_driver_0_reports_message_and_frees_everything():
    allocator, text, addresses = _run(0)
    assert ":hello world 15c:" in text
    assert "string length=15" in text
    assert "----- Begin unit test driver 0 -----" in text
    assert len(addresses) == 1
    assert allocator.stats().all_memory_free


def test_driver_1_prints_chunk_size():
    _, text, _ = _run(1, unit_size=8)
    assert "The size of chunk_t is 8 bytes" in text
    assert "third and fourth free of p=" in text


@pytest.mark.parametrize("number", [1, 2, 4])
@pytest.mark.parametrize("unit_size", [8, 16])
def test_drivers_return_all_memory(number, unit_size):
    allocator, text, addresses = _run(number, unit_size=unit_size)
    assert len(addresses) == len(set(addresses))
    assert allocator.stats().all_memory_free
    assert "----- End unit test driver 1 -----" in text


@pytest.mark.parametrize("number", [1, 2, 4])
def test_drivers_with_coalescing_merge_back(number):
    allocator, _, _ = _run(number, unit_size=8, coalescing=True)
    stats = allocator.stats()
    assert stats.all_memory_free
    assert stats.chunks == 1


def test_driver_3_keeps_second_block():
    allocator, text, addresses = _run(3)
    assert len(addresses) == 3
    assert not allocator.stats().all_memory_free
    assert "third free" not in text
    allocator.free(addresses[1])
    assert allocator.stats().all_memory_free


def test_allocation_lines_show_addresses():
    _, text, addresses = _run(2)
    for address in addresses:
        assert f"p={address:#x}" in text


def test_first_fit_and_best_fit_both_complete():
    for policy in ("first", "best"):
        allocator, _, addresses = _run(4, search_policy=policy)
        assert len(set(addresses)) == 3
        assert allocator.stats().all_memory_free


@pytest.mark.parametrize("number", [-1, 5, 42])
def test_unknown_driver_rejected(number):
    with pytest.raises(ValueError):
        run_unit_driver(number, Allocator(), io.StringIO())