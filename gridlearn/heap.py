"""A max-heap of candidate neighbours ordered by distance."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class HeapNode:
    """A candidate point with its distance and source row."""

    value: tuple[float, ...] = ()
    length: float = 0.0
    src_row: int = 0


class MaxHeap:
    """Binary max-heap keyed on ``HeapNode.length``."""

    def __init__(self) -> None:
        self._tree: list[HeapNode] = []

    def maximum(self) -> HeapNode:
        """Return the node with the greatest length, or an empty node."""
        return self._tree[0] if self._tree else HeapNode()

    def extract_max(self) -> None:
        """Remove the node with the greatest length; does nothing when empty."""
        tree = self._tree
        if not tree:
            return
        last = tree.pop()
        if not tree:
            return
        tree[0] = last

        i = 0
        size = len(tree)
        while True:
            left, right = 2 * i + 1, 2 * i + 2
            if left >= size:
                break
            largest = left if tree[left].length > tree[i].length else i
            if right < size and tree[right].length > tree[largest].length:
                largest = right
            if largest == i:
                break
            tree[largest], tree[i] = tree[i], tree[largest]
            i = largest

    def insert(self, value: Sequence[float], length: float, src_row: int) -> None:
        """Add a node holding a copy of ``value``."""
        tree = self._tree
        tree.append(HeapNode(tuple(value), length, src_row))
        i = len(tree) - 1
        while i > 0:
            parent = (i - 1) // 2
            if tree[parent].length >= tree[i].length:
                break
            tree[parent], tree[i] = tree[i], tree[parent]
            i = parent

    def __len__(self) -> int:
        return len(self._tree)