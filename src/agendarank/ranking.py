"""
Ranked list
===========

A singly linked list of ``SongRecord`` objects kept in ascending ``rank``
order at all times. Records arrive one at a time from the CSV readers, in no
particular order, and each one is placed with a linear walk (insertion sort
built up incrementally). That is O(k) per insert and O(n^2) for a whole run,
which is fine for playlist-sized inputs.

Placement rule: a new record goes *before* the first node whose rank is
greater than or equal to its own. Among equal ranks the newest record
therefore comes first.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass

from .models import SongRecord


@dataclass
class Node:
    """One link of the ranked list."""
    record: SongRecord
    next: Node | None = None


def insert_inorder(head: Node | None, node: Node) -> Node:
    """Link ``node`` into the list starting at ``head`` and return the head.

    The returned head differs from ``head`` when the new node becomes first.
    """
    rank = node.record.rank
    if head is None or head.record.rank >= rank:
        node.next = head
        return node

    # prev trails the first node with rank >= the new rank
    prev = head
    while prev.next is not None and prev.next.record.rank < rank:
        prev = prev.next
    node.next = prev.next
    prev.next = node
    return head


class RankedList:
    """Ordered collection of songs, ascending by rank.

    Only ``insert`` (and ``extend``, which calls it) can add records, so the
    list is sorted after every call.
    """

    def __init__(self, records: Iterable[SongRecord] = ()):
        self._head: Node | None = None
        self._size = 0
        self.extend(records)

    def insert(self, record: SongRecord) -> "RankedList":
        """Insert one record in rank order. Returns self for chaining."""
        self._head = insert_inorder(self._head, Node(record))
        self._size += 1
        return self

    def extend(self, records: Iterable[SongRecord]) -> "RankedList":
        for record in records:
            self.insert(record)
        return self

    def take(self, n: int) -> Iterator[SongRecord]:
        """Lazily yield the first ``min(n, len(self))`` records.

        Every call starts a new walk from the head and never modifies the
        list. ``n <= 0`` yields nothing.
        """
        current = self._head
        count = 0
        while current is not None and count < n:
            yield current.record
            current = current.next
            count += 1

    def __iter__(self) -> Iterator[SongRecord]:
        return self.take(self._size)

    def __len__(self) -> int:
        return self._size

    def __bool__(self) -> bool:
        return self._head is not None

    def __repr__(self) -> str:
        ranks = ", ".join(f"{r.rank:g}" for r in self.take(5))
        more = ", ..." if self._size > 5 else ""
        return f"RankedList([{ranks}{more}])"
