"""Command-line front end for the allocator unit and equilibrium drivers."""

from __future__ import annotations

import getopt
import re
import sys
from typing import NamedTuple, Optional

from freelist_lab.equilibrium import DriverParams, run_equilibrium
from freelist_lab.mem import Allocator, RovingPolicy, SearchPolicy
from freelist_lab.rand48 import Rand48
from freelist_lab.unit_drivers import run_unit_driver

_SHORT_OPTIONS = "w:t:s:a:r:f:h:u:cdve"
_INT = re.compile(r"\s*([+-]?\d+)")

_USAGE = """\
Lab4 command line options
General options ---------
  -v        turn on verbose prints (default off)
  -s 54321  seed for random number generator
  -c        turn on coalescing (default off)
  -f best|first
            search policy to find memory block (first by default)
  -h rove|head
            roving policy for starting search location (rove by default)
  -u 0      run unit test driver
  -e        run equilibrium test driver

Options for equilibrium test driver ---------
  -w 1000   number of warmup allocations
  -t 100000 number of trials in equilibrium
  -a 128    average size of interger array
  -r 127    range for average size of array
  -d        use system malloc/free instead of MP4 versions
"""


class _UsageError(ValueError):
    """An option that was not recognised or lacked its argument."""


class _Options(NamedTuple):
    params: DriverParams
    search_policy: SearchPolicy
    roving_policy: RovingPolicy
    coalescing: bool
    extra: list[str]


def _atoi(text: str) -> int:
    match = _INT.match(text)
    return int(match.group(1)) if match else 0


def _unknown_option_message(opt: str) -> str:
    if opt and opt.isprintable():
        return f"Unknown option {opt}."
    code = ord(opt) if opt else 0
    return f"Unknown option character `\\x{code:x}'."


def parse_args(argv: list[str]) -> _Options:
    """Parse command-line options into driver settings and allocator policy.

    Raises ValueError for an invalid policy name, and a ValueError subclass
    for an unknown option or a missing option argument.
    """
    try:
        pairs, extra = getopt.gnu_getopt(list(argv), _SHORT_OPTIONS)
    except getopt.GetoptError as error:
        raise _UsageError(_unknown_option_message(error.opt)) from None

    params = DriverParams()
    search_policy = SearchPolicy.FIRST_FIT
    roving_policy = RovingPolicy.ROVER
    coalescing = False

    for option, value in pairs:
        match option:
            case "-u":
                params.unit_driver = _atoi(value)
            case "-w":
                params.warm_up = _atoi(value)
            case "-t":
                params.trials = _atoi(value)
            case "-s":
                params.seed = _atoi(value)
            case "-a":
                params.avg_num_ints = _atoi(value)
            case "-r":
                params.range_ints = _atoi(value)
            case "-d":
                params.sys_malloc = True
            case "-v":
                params.verbose = True
            case "-e":
                params.equilibrium_test = True
            case "-c":
                coalescing = True
            case "-f":
                if value == "best":
                    search_policy = SearchPolicy.BEST_FIT
                elif value == "first":
                    search_policy = SearchPolicy.FIRST_FIT
                else:
                    raise ValueError(f"invalid search policy: {value}")
            case "-h":
                if value == "rove":
                    roving_policy = RovingPolicy.ROVER
                elif value == "head":
                    roving_policy = RovingPolicy.HEAD
                else:
                    raise ValueError(f"invalid roving policy: {value}")

    return _Options(params, search_policy, roving_policy, coalescing, list(extra))


def _policy_line(options: _Options) -> str:
    search = (
        "Best-fit search policy"
        if options.search_policy is SearchPolicy.BEST_FIT
        else "First-fit search policy"
    )
    roving = (
        " starting at rover"
        if options.roving_policy is RovingPolicy.ROVER
        else " starting at head"
    )
    coalesce = " using coalescing" if options.coalescing else " without coalescing"
    return search + roving + coalesce


def main(argv: Optional[list[str]] = None) -> int:
    """Run the drivers chosen on the command line; return the exit status."""
    args = sys.argv[1:] if argv is None else argv
    out = sys.stdout
    try:
        options = parse_args(args)
    except _UsageError as error:
        sys.stderr.write(f"{error}\n")
        out.write(_USAGE)
        return 1
    except ValueError as error:
        sys.stderr.write(f"{error}\n")
        return 1

    for argument in options.extra:
        out.write(f"Non-option argument {argument}\n")

    params = options.params
    out.write(f"Seed: {params.seed}\n")
    rng = Rand48(params.seed)
    out.write(_policy_line(options) + "\n")

    allocator = Allocator(
        search_policy=options.search_policy,
        roving_policy=options.roving_policy,
        coalescing=options.coalescing,
    )

    if 0 <= params.unit_driver <= 4:
        run_unit_driver(params.unit_driver, allocator, out)

    if params.equilibrium_test:
        try:
            run_equilibrium(params, allocator, rng, out)
        except ValueError as error:
            out.write(f"{error}\n")
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())