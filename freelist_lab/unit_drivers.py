"""Scripted allocate/free sequences that exercise an allocator step by step."""

from __future__ import annotations

from typing import Callable, TextIO

from freelist_lab.mem import Allocator
from freelist_lab.report import format_free_list, format_stats

_MESSAGE = "hello world 15c"
_INIT_SIZE_FREE_LIST = 512
_END_BANNER = "\n----- End unit test driver 1 -----\n"


class _Session:
    """Shared plumbing for the drivers: allocate, free and report."""

    def __init__(self, allocator: Allocator, out: TextIO) -> None:
        self.allocator = allocator
        self.out = out
        self.addresses: list[int] = []

    @property
    def unit(self) -> int:
        return self.allocator.unit_size

    def write(self, text: str) -> None:
        self.out.write(text)

    def show(self) -> None:
        self.write(format_free_list(self.allocator))

    def stats(self) -> None:
        self.write(format_stats(self.allocator))

    def chunk_size(self) -> None:
        self.write(f"The size of chunk_t is {self.unit} bytes\n")

    def alloc(self, nbytes: int, ordinal: str, trailing_space: bool = False) -> int:
        address = self.allocator.alloc(nbytes)
        self.addresses.append(address)
        space = " " if trailing_space else ""
        self.write(f"{ordinal} allocation of {nbytes} bytes p={address:#x}{space}\n")
        self.show()
        return address

    def free(self, address: int) -> None:
        self.allocator.free(address)


def _driver_0(session: _Session) -> None:
    session.write("\n----- Begin unit test driver 0 -----\n")
    address = session.allocator.alloc(len(_MESSAGE) + 1)
    session.addresses.append(address)
    session.write(f"string length={len(_MESSAGE)}\n:{_MESSAGE}:\n")
    session.write("\nFree list after first allocation\n")
    session.show()
    session.free(address)
    session.write("\nFree list after first free\n")
    session.show()
    session.stats()
    session.write("\n----- End unit test driver 0 -----\n")


def _driver_1(session: _Session) -> None:
    session.chunk_size()
    unit = session.unit
    bytes_1 = 99 * unit
    p1 = session.alloc(bytes_1, "first", trailing_space=True)
    bytes_2 = 49 * unit
    p2 = session.alloc(bytes_2, "second")
    bytes_3 = (_INIT_SIZE_FREE_LIST - bytes_1 // unit - bytes_2 // unit - 3) * unit
    p3 = session.alloc(bytes_3, "third")
    p4 = session.alloc(127 * unit, "fourth")

    session.write(f"first free of p={p1:#x} \n")
    session.free(p1)
    session.show()
    session.write(f"second free of p={p3:#x} \n")
    session.free(p3)
    session.show()
    session.write(f"third and fourth free of p={p2:#x} and {p4:#x}\n")
    session.free(p2)
    session.free(p4)
    session.show()
    session.stats()
    session.write(_END_BANNER)


def _three_blocks(session: _Session, sizes: tuple[int, int, int], free_all: bool) -> None:
    session.chunk_size()
    unit = session.unit
    p1 = session.alloc(sizes[0] * unit, "first", trailing_space=True)
    p2 = session.alloc(sizes[1] * unit, "second")
    p3 = session.alloc(sizes[2] * unit, "fourth")

    session.write(f"first free of p={p1:#x} \n")
    session.free(p1)
    session.show()
    session.write(f"second free of p={p3:#x} \n")
    session.free(p3)
    session.show()
    if free_all:
        session.write(f"third free of p={p2:#x} ")
        session.free(p2)
        session.show()
        session.stats()
    session.write(_END_BANNER)


def _driver_2(session: _Session) -> None:
    _three_blocks(session, (511, 511, 511), free_all=True)


def _driver_3(session: _Session) -> None:
    _three_blocks(session, (599, 119, 19), free_all=False)


def _driver_4(session: _Session) -> None:
    _three_blocks(session, (19, 119, 599), free_all=True)


_DRIVERS: dict[int, Callable[[_Session], None]] = {
    0: _driver_0,
    1: _driver_1,
    2: _driver_2,
    3: _driver_3,
    4: _driver_4,
}


def run_unit_driver(number: int, allocator: Allocator, out: TextIO) -> list[int]:
    """Run unit driver ``number`` (0 to 4) against ``allocator``.

    Progress and free-list reports go to ``out``. Returns the addresses
    handed out, in the order they were allocated. Driver 3 leaves its
    second allocation in use; all other drivers free everything.
    """
    try:
        driver = _DRIVERS[number]
    except KeyError:
        raise ValueError(f"no unit driver numbered {number}") from None
    session = _Session(allocator, out)
    driver(session)
    return session.addresses