"""WiFi records kept in a bounded sorted list and an unbounded FIFO queue."""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Iterator, Optional, TextIO

from freelist_lab.dlist import DList, ListNode, SortMethod

_INT = re.compile(r"\s*([+-]?\d+)")
_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


class Privacy(IntEnum):
    """Link privacy mode."""

    NONE = 0
    WEP = 1
    WPA = 2
    WPA2 = 3

    @property
    def label(self) -> str:
        return "none" if self is Privacy.NONE else self.name


@dataclass
class WifiRecord:
    """What is known about one mobile station."""

    eth_address: int
    ip_address: int = 0
    access_point: int = 0
    authenticated: bool = False
    privacy: Privacy = Privacy.NONE
    standard_letter: int = 0
    band: float = 0.0
    channel: int = 0
    data_rate: float = 0.0
    time_received: int = 0


def compare_records(a: WifiRecord, b: WifiRecord) -> int:
    """Order by Ethernet address, smallest first: 1, -1 or 0."""
    if a.eth_address < b.eth_address:
        return 1
    if a.eth_address > b.eth_address:
        return -1
    return 0


def format_record(record: WifiRecord) -> str:
    """Render one record on a single line."""
    letter = chr(ord("a") + record.standard_letter)
    auth = "T" if record.authenticated else "F"
    return (
        f"eth: {record.eth_address}, MIP: {record.ip_address}, "
        f"AID: {record.access_point}, Auth: {auth}, "
        f"Pri: {record.privacy.label}, L: {letter}, B: {record.band:g}, "
        f"C: {record.channel}, R: {record.data_rate:g} "
        f"Time: {record.time_received}"
    )


def _scan_int(line: str) -> int:
    match = _INT.match(line)
    return int(match.group(1)) if match else 0


def _scan_float(line: str) -> float:
    match = _FLOAT.match(line)
    return float(match.group(1)) if match else 0.0


def _scan_word(line: str) -> str:
    words = line.split()
    return words[0] if words else ""


def read_record(stream: TextIO, out: TextIO) -> WifiRecord:
    """Prompt on ``out`` and read a record's fields from ``stream``.

    Missing or malformed answers fall back to acceptable defaults. The
    Ethernet address is not asked for and is left at 0.
    """

    def ask(prompt: str) -> str:
        out.write(prompt)
        return stream.readline()

    ip_address = _scan_int(ask("IP address:"))
    access_point = _scan_int(ask("Access point IP address:"))
    authenticated = _scan_word(ask("Authenticated (T/F):")) in ("T", "t")
    privacy_word = _scan_word(ask("Privacy (none|WEP|WPA|WPA2):"))
    privacy = {
        "WEP": Privacy.WEP,
        "WPA": Privacy.WPA,
        "WPA2": Privacy.WPA2,
    }.get(privacy_word, Privacy.NONE)
    line = ask("Standard letter (a b e g h n s):")
    letter = line[0] if line else "a"
    if not "a" <= letter <= "z":
        letter = "a"
    band = _scan_float(ask("Band (2.4|5.0):"))
    channel = _scan_int(ask("Channel:"))
    data_rate = _scan_float(ask("Data rate:"))
    time_received = _scan_int(ask("Time received (int):"))
    out.write("\n")
    return WifiRecord(
        eth_address=0,
        ip_address=ip_address,
        access_point=access_point,
        authenticated=authenticated,
        privacy=privacy,
        standard_letter=ord(letter) - ord("a"),
        band=band,
        channel=channel,
        data_rate=data_rate,
        time_received=time_received,
    )


def _walk(dlist: DList) -> Iterator[ListNode]:
    node = dlist.front()
    while node is not None:
        following = node.next
        yield node
        node = following


def _format_list(dlist: DList, title: str) -> str:
    if len(dlist) == 0:
        return f"{title} empty\n\n"
    lines = [f"{title} with {len(dlist)} records"]
    lines.extend(
        f"{number}: {format_record(record)}"
        for number, record in enumerate(dlist, start=1)
    )
    return "\n".join(lines) + "\n\n"


class WifiDatabase:
    """A sorted, size-limited record list plus an unsorted FIFO queue.

    ``limit`` bounds the sorted list; None leaves it unbounded.
    """

    def __init__(self, limit: Optional[int] = None) -> None:
        self.limit = limit
        self.records = DList(compare_records)
        self.queue = DList(compare_records)

    def add(self, eth_address: int) -> str:
        """Add or replace a record: returns "Inserted", "Updated" or "Rejected"."""
        record = WifiRecord(eth_address)
        node = self.records.find(record)
        if node is not None:
            node.item = record
            return "Updated"
        if self.limit is not None and len(self.records) >= self.limit:
            return "Rejected"
        self.records.insert_sorted(record)
        return "Inserted"

    def lookup(self, eth_address: int) -> Optional[WifiRecord]:
        """Return the sorted-list record with this address, if any."""
        node = self.records.find(WifiRecord(eth_address))
        return None if node is None else node.item

    def remove(self, eth_address: int) -> Optional[WifiRecord]:
        """Remove and return the sorted-list record with this address."""
        node = self.records.find(WifiRecord(eth_address))
        return None if node is None else self.records.remove(node)

    def stats(self) -> tuple[int, int]:
        """Return (records in sorted list, records in queue)."""
        return len(self.records), len(self.queue)

    def add_tail(self, eth_address: int) -> WifiRecord:
        """Append a new record to the queue and return it."""
        record = WifiRecord(eth_address)
        self.queue.insert(record)
        return record

    def remove_head(self) -> Optional[WifiRecord]:
        """Remove and return the record at the head of the queue."""
        return self.queue.remove()

    def drop_max(self) -> Optional[tuple[int, int]]:
        """Remove every queued record with the largest address.

        Returns (address, copies removed), or None if the queue is empty.
        """
        if len(self.queue) == 0:
            return None
        largest = max(record.eth_address for record in self.queue)
        doomed = [n for n in _walk(self.queue) if n.item.eth_address == largest]
        for node in doomed:
            self.queue.remove(node)
        return largest, len(doomed)

    def format_sorted(self) -> str:
        """Render the sorted list."""
        return _format_list(self.records, "List")

    def format_queue(self) -> str:
        """Render the queue."""
        return _format_list(self.queue, "Queue")

    def sort_queue(self, method: SortMethod | int) -> None:
        """Sort the queue in place by address with the chosen algorithm."""
        self.queue.sort(method)


__all__ = [
    "Privacy",
    "WifiRecord",
    "WifiDatabase",
    "compare_records",
    "format_record",
    "read_record",
    "replace",
]