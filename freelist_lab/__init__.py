"""Linked lists, sorting experiments and a simulated free-list allocator."""

__version__ = "0.1.0"
__all__ = [
    "dlist",
    "rand48",
    "wifi",
    "mem",
    "report",
    "equilibrium",
    "unit_drivers",
    "lab4",
]