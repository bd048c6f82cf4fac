"""A simulated page-backed heap with a circular free list of chunks.

Memory is handed out in units the size of a chunk header. Every block,
free or allocated, begins with one header unit. The free list starts at
a zero-sized dummy block that can never be allocated. Fresh memory is
taken from a simulated break in whole pages.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

PAGE_SIZE = 4096
DUMMY_ADDRESS = 0
HEAP_BASE = 0x10000


class SearchPolicy(Enum):
    """How a free block is chosen for a request."""

    FIRST_FIT = "first"
    BEST_FIT = "best"


class RovingPolicy(Enum):
    """Where a search of the free list begins."""

    ROVER = "rove"
    HEAD = "head"


@dataclass(frozen=True)
class FreeBlock:
    """One entry of the free list as seen from outside.

    ``size`` is in units; ``address``, ``end`` and ``next`` are byte
    addresses, ``next`` being the address of the following block.
    """

    address: int
    size: int
    end: int
    next: int


@dataclass(frozen=True)
class MemStats:
    """Summary of the free list, sizes in bytes."""

    chunks: int
    min_bytes: float
    max_bytes: float
    average_bytes: float
    total_bytes: int
    sbrk_calls: int
    pages_requested: int

    @property
    def all_memory_free(self) -> bool:
        """True when every requested page is back in the free list."""
        return self.total_bytes == self.pages_requested * PAGE_SIZE


@dataclass
class _Block:
    address: int
    units: int


class Allocator:
    """Allocate and free memory from a simulated heap."""

    def __init__(
        self,
        search_policy: SearchPolicy | str = SearchPolicy.FIRST_FIT,
        roving_policy: RovingPolicy | str = RovingPolicy.ROVER,
        coalescing: bool = False,
        unit_size: int = 16,
    ) -> None:
        if unit_size <= 0 or PAGE_SIZE % unit_size != 0:
            raise ValueError(f"unit size must divide the page size: {unit_size}")
        self.search_policy = SearchPolicy(search_policy)
        self.roving_policy = RovingPolicy(roving_policy)
        self.coalescing = bool(coalescing)
        self.unit_size = unit_size
        self._dummy = _Block(DUMMY_ADDRESS, 0)
        self._free: list[_Block] = [self._dummy]
        self._rover: Optional[_Block] = None
        self._allocated: dict[int, int] = {}
        self._brk = HEAP_BASE
        self._sbrk_calls = 0
        self._pages = 0
        self._initialized = False

    @property
    def page_units(self) -> int:
        """Number of units in one page."""
        return PAGE_SIZE // self.unit_size

    @property
    def initialized(self) -> bool:
        """True once the first page has been requested."""
        return self._initialized

    def _end(self, block: _Block) -> int:
        return block.address + block.units * self.unit_size

    def alloc(self, nbytes: int) -> int:
        """Return the address of ``nbytes`` of fresh memory."""
        if nbytes <= 0:
            raise ValueError(f"allocation size must be positive: {nbytes}")
        nunits = -(-nbytes // self.unit_size) + 1
        if not self._initialized:
            pages = 1 if nunits <= self.page_units else nunits // self.page_units + 1
            self._initialized = True
            self._morecore(pages)
        index = self._search(nunits)
        if index is None:
            self._morecore(nunits // self.page_units + 1)
            index = self._search(nunits)
            if index is None:
                raise MemoryError("new pages did not satisfy the request")
        return self._take(index, nunits)

    def free(self, address: Optional[int]) -> None:
        """Return memory obtained from :meth:`alloc`; None is ignored."""
        if address is None:
            return
        units = self._allocated.pop(address, None)
        if units is None:
            raise ValueError(f"address {address:#x} is not allocated")
        block = _Block(address - self.unit_size, units)
        if self.coalescing:
            self._insert_ordered(block)
        else:
            self._free.insert(1, block)

    def free_blocks(self) -> list[FreeBlock]:
        """The free list in list order, starting with the dummy block."""
        count = len(self._free)
        return [
            FreeBlock(
                address=block.address,
                size=block.units,
                end=self._end(block),
                next=self._free[(i + 1) % count].address,
            )
            for i, block in enumerate(self._free)
        ]

    def stats(self) -> MemStats:
        """Summarise the free list, leaving out the dummy block."""
        sizes = [block.units * self.unit_size for block in self._free[1:]]
        if not sizes:
            return MemStats(0, 0.0, 0.0, 0.0, 0, self._sbrk_calls, self._pages)
        return MemStats(
            chunks=len(sizes),
            min_bytes=float(min(sizes)),
            max_bytes=float(max(sizes)),
            average_bytes=sum(sizes) / len(sizes),
            total_bytes=sum(sizes),
            sbrk_calls=self._sbrk_calls,
            pages_requested=self._pages,
        )

    def _morecore(self, pages: int) -> None:
        block = _Block(self._brk, pages * self.page_units)
        self._brk += pages * PAGE_SIZE
        self._sbrk_calls += 1
        self._pages += pages
        if self.coalescing:
            self._insert_ordered(block)
        else:
            self._free.append(block)

    def _search_order(self) -> list[int]:
        count = len(self._free)
        start = 1
        if self.roving_policy is RovingPolicy.ROVER and self._rover is not None:
            start = next(
                (i for i, b in enumerate(self._free) if b is self._rover and i > 0), 1
            )
        return list(range(start, count)) + list(range(1, start))

    def _search(self, nunits: int) -> Optional[int]:
        fits = [i for i in self._search_order() if self._free[i].units >= nunits]
        if not fits:
            return None
        if self.search_policy is SearchPolicy.FIRST_FIT:
            return fits[0]
        return min(fits, key=lambda i: self._free[i].units)

    def _take(self, index: int, nunits: int) -> int:
        block = self._free[index]
        if block.units == nunits:
            del self._free[index]
            if len(self._free) == 1:
                self._rover = None
            else:
                self._rover = self._free[index if index < len(self._free) else 1]
            address = block.address
        else:
            block.units -= nunits
            address = self._end(block)
            self._rover = block
        user = address + self.unit_size
        self._allocated[user] = nunits
        return user

    def _insert_ordered(self, block: _Block) -> None:
        free = self._free
        i = next(
            (j for j in range(1, len(free)) if free[j].address > block.address),
            len(free),
        )
        free.insert(i, block)
        if i + 1 < len(free) and self._end(block) == free[i + 1].address:
            following = free.pop(i + 1)
            block.units += following.units
            if self._rover is following:
                self._rover = block
        if i - 1 >= 1 and self._end(free[i - 1]) == block.address:
            previous = free[i - 1]
            previous.units += block.units
            del free[i]
            if self._rover is block:
                self._rover = previous