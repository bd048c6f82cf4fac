"""A two-way linked list with sorted insertion and several sort algorithms."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from enum import IntEnum
from typing import Any, Optional

Compare = Callable[[Any, Any], int]


class SortMethod(IntEnum):
    """Algorithms available to :meth:`DList.sort`."""

    INSERTION = 1
    SELECTION = 2
    RECURSIVE_SELECTION = 3
    MERGE = 4


class ListNode:
    """A position in a :class:`DList`, holding one item."""

    __slots__ = ("item", "prev", "next", "_owner")

    def __init__(self, item: Any, owner: "DList") -> None:
        self.item = item
        self.prev: Optional[ListNode] = None
        self.next: Optional[ListNode] = None
        self._owner: Optional[DList] = owner

    def __repr__(self) -> str:
        return f"ListNode({self.item!r})"


class DList:
    """Doubly linked list ordered by a three-way ``compare`` function.

    ``compare(a, b)`` returns 1 if ``a`` belongs closer to the front than
    ``b``, -1 if ``b`` does, and 0 if they rank equally.
    """

    def __init__(self, compare: Compare) -> None:
        self.compare = compare
        self._head: Optional[ListNode] = None
        self._tail: Optional[ListNode] = None
        self._size = 0
        self.is_sorted = True

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Any]:
        for node in self._nodes():
            yield node.item

    def __repr__(self) -> str:
        return f"DList({list(self)!r})"

    def _nodes(self) -> Iterator[ListNode]:
        node = self._head
        while node is not None:
            following = node.next
            yield node
            node = following

    def front(self) -> Optional[ListNode]:
        """Return the first node, or None if the list is empty."""
        return self._head

    def back(self) -> Optional[ListNode]:
        """Return the last node, or None if the list is empty."""
        return self._tail

    def _check_owner(self, node: ListNode) -> None:
        if node._owner is not self:
            raise ValueError("node does not belong to this list")

    def _link_before(self, node: ListNode, before: Optional[ListNode]) -> None:
        if before is None:
            node.prev = self._tail
            node.next = None
            if self._tail is None:
                self._head = node
            else:
                self._tail.next = node
            self._tail = node
        else:
            node.next = before
            node.prev = before.prev
            if before.prev is None:
                self._head = node
            else:
                before.prev.next = node
            before.prev = node
        self._size += 1

    def insert(self, item: Any, before: Optional[ListNode] = None) -> ListNode:
        """Insert ``item`` in front of ``before``; at the tail if it is None.

        The list is marked unsorted afterwards.
        """
        if before is not None:
            self._check_owner(before)
        node = ListNode(item, self)
        self._link_before(node, before)
        self.is_sorted = False
        return node

    def insert_sorted(self, item: Any) -> ListNode:
        """Insert ``item`` in order, after all items that rank equal to it."""
        if not self.is_sorted:
            raise ValueError("insert_sorted called on an unsorted list")
        position = next(
            (n for n in self._nodes() if self.compare(item, n.item) == 1), None
        )
        node = ListNode(item, self)
        self._link_before(node, position)
        return node

    def remove(self, node: Optional[ListNode] = None) -> Any:
        """Unlink ``node`` (the head if None) and return its item.

        Returns None if the list is empty.
        """
        if self._size == 0:
            return None
        if node is None:
            node = self._head
        self._check_owner(node)
        if node.prev is None:
            self._head = node.next
        else:
            node.prev.next = node.next
        if node.next is None:
            self._tail = node.prev
        else:
            node.next.prev = node.prev
        node.prev = node.next = None
        node._owner = None
        self._size -= 1
        return node.item

    def find(self, item: Any) -> Optional[ListNode]:
        """Return the first node whose item ranks equal to ``item``."""
        return next(
            (n for n in self._nodes() if self.compare(item, n.item) == 0), None
        )

    def sort(self, method: SortMethod | int = SortMethod.MERGE) -> None:
        """Sort the list in place with the chosen algorithm."""
        method = SortMethod(method)
        if method is SortMethod.INSERTION:
            self._insertion_sort()
        elif method is SortMethod.SELECTION:
            self._selection_sort()
        elif method is SortMethod.RECURSIVE_SELECTION:
            self._recursive_selection_sort()
        else:
            self._merge_sort()
        self.is_sorted = True
        self.validate()

    def _insertion_sort(self) -> None:
        ordered = DList(self.compare)
        while self._size:
            ordered.insert_sorted(self.remove())
        self._adopt(ordered)

    def _adopt(self, other: "DList") -> None:
        self._head, self._tail, self._size = other._head, other._tail, other._size
        for node in self._nodes():
            node._owner = self
        other._head = other._tail = None
        other._size = 0

    def _find_max(self, start: ListNode) -> ListNode:
        best = start
        node = start.next
        while node is not None:
            if self.compare(node.item, best.item) == 1:
                best = node
            node = node.next
        return best

    def _selection_sort(self) -> None:
        for node in self._nodes():
            best = self._find_max(node)
            node.item, best.item = best.item, node.item

    def _recursive_selection_sort(self) -> None:
        def place(start: Optional[ListNode]) -> Optional[ListNode]:
            if start is None or start.next is None:
                return None
            best = self._find_max(start)
            start.item, best.item = best.item, start.item
            return start.next

        start = self._head
        while start is not None:
            start = place(start)

    def _merge_sort(self) -> None:
        nodes = self._merge_nodes(list(self._nodes()))
        self._head = self._tail = None
        self._size = 0
        for node in nodes:
            self._link_before(node, None)

    def _merge_nodes(self, nodes: list[ListNode]) -> list[ListNode]:
        if len(nodes) <= 1:
            return nodes
        middle = len(nodes) // 2
        left = self._merge_nodes(nodes[:middle])
        right = self._merge_nodes(nodes[middle:])
        merged: list[ListNode] = []
        i = j = 0
        while i < len(left) and j < len(right):
            outcome = self.compare(left[i].item, right[j].item)
            if outcome == -1:
                merged.append(right[j])
                j += 1
            elif outcome == 1:
                merged.append(left[i])
                i += 1
            else:
                merged.extend((left[i], right[j]))
                i += 1
                j += 1
        merged.extend(left[i:])
        merged.extend(right[j:])
        return merged

    def validate(self) -> None:
        """Check links, size and (if sorted) order; raise ValueError if broken."""
        if self._head is None or self._tail is None:
            if not (self._head is None and self._tail is None and self._size == 0):
                raise ValueError("empty list has inconsistent head, tail or size")
            return
        if self._head.prev is not None:
            raise ValueError("head has a predecessor")
        if self._tail.next is not None:
            raise ValueError("tail has a successor")
        count = 0
        node: Optional[ListNode] = self._head
        while node is not None:
            if node.next is not None:
                if node.next.prev is not node:
                    raise ValueError("broken back link")
            elif node is not self._tail:
                raise ValueError("last node is not the tail")
            count += 1
            if count > self._size:
                raise ValueError("list holds more nodes than its size")
            node = node.next
        if count != self._size:
            raise ValueError("size does not match the number of nodes")
        if self.is_sorted:
            node = self._head
            while node.next is not None:
                if self.compare(node.item, node.next.item) == -1:
                    raise ValueError("sorted list is out of order")
                node = node.next