# freelist_lab

A small toolkit for experimenting with classic data-structure exercises:

- `freelist_lab.dlist`: `DList`, a two-way linked list with unsorted
  insertion (`insert`), in-order insertion (`insert_sorted`), lookup (`find`),
  removal (`remove`), a consistency check (`validate`) and four sorting
  methods chosen with `SortMethod`: `INSERTION`, `SELECTION`,
  `RECURSIVE_SELECTION` and `MERGE`.
- `freelist_lab.rand48`: `Rand48`, a reproducible 48-bit linear congruential
  generator returning floats in [0, 1).
- `freelist_lab.wifi`: `WifiRecord` and `WifiDatabase`, a sorted list of
  records keyed by Ethernet address (optionally size-limited) plus an
  unbounded FIFO queue; `format_record` and `read_record` render and prompt
  for single records.
- `freelist_lab.mem`: `Allocator`, a simulated page-based free-list memory
  allocator with first-fit or best-fit search (`SearchPolicy`), a search start
  at the rover or the head (`RovingPolicy`) and optional coalescing.
  `free_blocks()` lists the free list as `FreeBlock` entries and `stats()`
  summarises it as `MemStats`.
- `freelist_lab.report`: `format_free_list` and `format_stats`, text reports
  on an allocator.
- `freelist_lab.equilibrium` and `freelist_lab.unit_drivers`:
  `run_equilibrium` and `run_unit_driver`, drivers that exercise an
  allocator and report on its free list.

## Installation

```
pip install .
```

Tests need the `test` extra: `pip install .[test]`, then run `pytest`.

## Command

Exercise the allocator:

```
freelist-lab4 -u 0
freelist-lab4 -e -w 1000 -t 100000 -f best -c
```

Options:

- `-u N` run unit driver N (0 to 4)
- `-e` run the equilibrium driver
- `-w N` warm-up allocations (default 1000)
- `-t N` trials in equilibrium (default 100000)
- `-a N` average array size in integers (default 128)
- `-r N` range around the average size (default 127)
- `-s N` random seed (default 54321)
- `-f best|first` search policy (first by default)
- `-h rove|head` where a search starts (rove by default)
- `-c` coalesce freed blocks
- `-v` print the free list after each phase
- `-d` run the equilibrium driver without the simulated allocator

Unknown options print a usage summary and exit with status 1.

## Library use

```python
from freelist_lab.mem import Allocator, SearchPolicy, RovingPolicy

allocator = Allocator(SearchPolicy.FIRST_FIT, RovingPolicy.ROVER, False, 8)
address = allocator.alloc(100)
allocator.free(address)
print(allocator.stats())
```

```python
from freelist_lab.wifi import WifiDatabase
from freelist_lab.dlist import SortMethod

db = WifiDatabase(limit=10)
db.add(42)            # "Inserted"
db.add(42)            # "Updated"
for address in (5, 3, 9):
    db.add_tail(address)
db.sort_queue(SortMethod.MERGE)
print(db.format_queue())
```

## What it does not do

There is no command for driving a `WifiDatabase` from a script of text
commands, nor one for generating such scripts; the WiFi record lists and the
list sorting methods are available only as library calls.