"""Exercise an allocator with random allocations and frees in equilibrium."""

from __future__ import annotations

import itertools
import time
from dataclasses import dataclass, field
from typing import Optional, TextIO

from freelist_lab.dlist import DList, ListNode
from freelist_lab.mem import Allocator, MemStats
from freelist_lab.rand48 import Rand48
from freelist_lab.report import format_free_list, format_stats

INT_SIZE = 4


@dataclass
class DriverParams:
    """Settings for the test drivers."""

    seed: int = 54321
    verbose: bool = False
    equilibrium_test: bool = False
    warm_up: int = 1000
    trials: int = 100000
    avg_num_ints: int = 128
    range_ints: int = 127
    sys_malloc: bool = False
    unit_driver: int = -1


@dataclass
class EquilibriumReport:
    """What happened during one equilibrium run."""

    warmup_stats: Optional[MemStats] = None
    exercise_stats: Optional[MemStats] = None
    cleanup_stats: Optional[MemStats] = None
    elapsed_ms: float = 0.0
    allocations: int = 0
    frees: int = 0
    sizes: list[int] = field(default_factory=list)


@dataclass
class _IntArray:
    address: int
    values: list[int]


def _compare_arrays(a: _IntArray, b: _IntArray) -> int:
    if a.values[0] < b.values[0]:
        return 1
    if a.values[0] > b.values[0]:
        return -1
    return 0


class _Exerciser:
    def __init__(
        self, params: DriverParams, allocator: Optional[Allocator], rng: Rand48
    ) -> None:
        self.params = params
        self.allocator = None if params.sys_malloc else allocator
        if self.allocator is None and not params.sys_malloc:
            raise ValueError("an allocator is required unless sys_malloc is set")
        self.rng = rng
        self.range_num_ints = 2 * params.range_ints + 1
        self.min_num_ints = params.avg_num_ints - params.range_ints
        self.max_num_ints = params.avg_num_ints + params.range_ints
        self.live: set[int] = set()
        self.addresses = itertools.count(1)
        self.report = EquilibriumReport()

    def random_size(self) -> int:
        return int(self.rng.random() * self.range_num_ints) + self.min_num_ints

    def allocate(self) -> _IntArray:
        size = self.random_size()
        if self.allocator is None:
            address = next(self.addresses)
        else:
            address = self.allocator.alloc(size * INT_SIZE)
        if address in self.live:
            raise RuntimeError(f"address {address:#x} handed out twice")
        self.live.add(address)
        self.report.allocations += 1
        self.report.sizes.append(size)
        return _IntArray(address, [size, *range(1, size)])

    def release(self, array: _IntArray) -> None:
        size = array.values[0]
        if not self.min_num_ints <= size <= self.max_num_ints:
            raise RuntimeError(f"array size {size} out of range")
        if array.values[1:] != list(range(1, size)):
            raise RuntimeError(f"array at {array.address:#x} was corrupted")
        self.live.discard(array.address)
        if self.allocator is not None:
            self.allocator.free(array.address)
        self.report.frees += 1

    def snapshot(self, out: TextIO) -> Optional[MemStats]:
        if self.allocator is None:
            return None
        out.write(format_stats(self.allocator))
        if self.params.verbose:
            out.write(format_free_list(self.allocator))
        return self.allocator.stats()


def _node_at(arrays: DList, position: int) -> ListNode:
    node = arrays.front()
    for _ in range(position):
        node = node.next
    return node


def run_equilibrium(
    params: DriverParams,
    allocator: Optional[Allocator],
    rng: Rand48,
    out: TextIO,
) -> EquilibriumReport:
    """Warm up, run the equilibrium trials, then free everything.

    Writes progress to ``out`` and returns a summary of the run.
    """
    out.write("\nEquilibrium test driver using ")
    if params.sys_malloc:
        out.write("system malloc and free\n")
    else:
        out.write("Mem_alloc and Mem_free from mem.c\n")
    out.write(f"  Trials in equilibrium: {params.trials}\n")
    out.write(f"  Warmup allocations: {params.warm_up}\n")
    out.write(f"  Average array size: {params.avg_num_ints}\n")
    out.write(f"  Range for average array size: {params.range_ints}\n")

    if (
        params.avg_num_ints - params.range_ints < 1
        or params.avg_num_ints < 1
        or params.range_ints < 0
    ):
        raise ValueError(
            "The average array size must be positive and greater than the range"
        )

    driver = _Exerciser(params, allocator, rng)
    arrays = DList(_compare_arrays)

    for _ in range(params.warm_up):
        arrays.insert(driver.allocate())
    out.write("After warmup\n")
    driver.report.warmup_stats = driver.snapshot(out)

    start = time.process_time()
    for _ in range(params.trials):
        if rng.random() < 0.5:
            arrays.insert(driver.allocate())
        elif len(arrays) > 0:
            position = int(rng.random() * len(arrays))
            driver.release(arrays.remove(_node_at(arrays, position)))
    elapsed = 1000.0 * (time.process_time() - start)
    driver.report.elapsed_ms = elapsed
    out.write(f"After exercise, time={elapsed:g}\n")
    driver.report.exercise_stats = driver.snapshot(out)

    while len(arrays) > 0:
        driver.release(arrays.remove())

    out.write("After cleanup\n")
    driver.report.cleanup_stats = driver.snapshot(out)
    out.write("----- End of equilibrium test -----\n\n")
    return driver.report