import io

import pytest

from freelist_lab.equilibrium import DriverParams, run_equilibrium
from freelist_lab.mem import Allocator
from freelist_lab.rand48 import Rand48


def _params(**changes):
    base = dict(warm_up=10, trials=60, avg_num_ints=8, range_ints=4)
    base.update(changes)
    return DriverParams(**base)


def _run(params, allocator=None, seed=54321):
    out = io.StringIO()
    if allocator is None and not params.sys_malloc:
        allocator = Allocator()
    report = run_equilibrium(params, allocator, Rand48(seed), out)
    return report, out.getvalue(), allocator


def test_default_params_follow_the_driver():
    params = DriverParams()
    assert params.seed == 54321
    assert params.warm_up == 1000
    assert params.trials == 100000
    assert params.avg_num_ints == 128
    assert params.range_ints == 127
    assert params.unit_driver == -1


def test_every_allocation_is_freed():
    report, _, allocator = _run(_params())
    assert report.allocations == report.frees
    assert report.allocations >= 10
    assert allocator.stats().all_memory_free


@pytest.mark.parametrize("coalescing", [False, True])
def test_cleanup_returns_all_memory(coalescing):
    report, _, _ = _run(_params(), Allocator(coalescing=coalescing))
    assert report.cleanup_stats is not None
    assert report.cleanup_stats.all_memory_free


def test_sizes_stay_in_range():
    params = _params()
    report, _, _ = _run(params)
    low = params.avg_num_ints - params.range_ints
    high = params.avg_num_ints + params.range_ints
    assert all(low <= size <= high for size in report.sizes)


def test_same_seed_gives_same_run():
    first, _, _ = _run(_params(), seed=7)
    second, _, _ = _run(_params(), seed=7)
    assert first.sizes == second.sizes
    assert first.frees == second.frees


def test_output_phases_in_order():
    _, text, _ = _run(_params())
    positions = [
        text.index("Mem_alloc and Mem_free from mem.c"),
        text.index("After warmup"),
        text.index("After exercise, time="),
        text.index("After cleanup"),
        text.index("----- End of equilibrium test -----"),
    ]
    assert positions == sorted(positions)


def test_verbose_prints_free_list():
    _, text, _ = _run(_params(verbose=True))
    assert "p=0x0, size=0," in text


def test_system_malloc_mode_has_no_stats():
    report, text, _ = _run(_params(sys_malloc=True))
    assert "system malloc and free" in text
    assert report.warmup_stats is None
    assert report.allocations == report.frees


@pytest.mark.parametrize(
    "changes",
    [dict(avg_num_ints=4, range_ints=4), dict(avg_num_ints=0, range_ints=0),
     dict(range_ints=-1)],
)
def test_invalid_sizes_rejected(changes):
    with pytest.raises(ValueError, match="average array size must be positive"):
        _run(_params(**changes))


def test_warmup_stats_show_memory_in_use():
    report, _, _ = _run(_params(trials=0))
    assert report.warmup_stats is not None
    assert not report.warmup_stats.all_memory_free
    assert report.frees == 10