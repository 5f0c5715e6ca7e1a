"""A k-d tree for nearest-neighbour search."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from gridlearn.heap import MaxHeap

Distance = Callable[[Sequence[float], Sequence[float]], float]

_LEAF = -1
_EMPTY = -2


@dataclass
class _Node:
    feature: int
    value: tuple[float, ...] = ()
    src_row: int = 0
    left: _Node | None = None
    right: _Node | None = None


class KDTree:
    """A k-d tree built over rows of equal length."""

    def __init__(self) -> None:
        self._root: _Node | None = None
        self._data: list[tuple[float, ...]] = []

    def build(self, data: Sequence[Sequence[float]]) -> None:
        """Build the tree over ``data``; row numbers index into it."""
        rows = [tuple(float(x) for x in row) for row in data]
        if not rows:
            raise ValueError("no input data")
        size = len(rows[0])
        if any(len(row) != size for row in rows):
            raise ValueError("amounts of features are not the same")

        self._data = rows
        if len(rows) == 1:
            self._root = self._leaf(0)
        else:
            self._root = self._build(list(range(len(rows))), 0)

    def _leaf(self, row: int) -> _Node:
        return _Node(_LEAF, self._data[row], row)

    def _build(self, indices: list[int], feature: int) -> _Node:
        data = self._data
        order = sorted(indices, key=lambda r: data[r][feature])
        count = len(order)
        middle = count // 2

        split = middle
        pivot = data[order[middle]][feature]
        for pos in range(middle + 1, count):
            if data[order[pos]][feature] != pivot:
                break
            split = pos

        next_feature = (feature + 1) % len(data[order[0]])
        node = _Node(feature, data[order[split]], order[split])

        if split == 1:
            node.left = self._leaf(order[0])
        else:
            node.left = self._build(order[:split], next_feature)

        if split == count - 2:
            node.right = self._leaf(order[split + 1])
        elif split != count - 1:
            node.right = self._build(order[split + 1 :], next_feature)
        else:
            node.right = _Node(_EMPTY)
        return node

    def search(
        self, k: int, distance: Distance, target: Sequence[float]
    ) -> tuple[list[int], list[float]]:
        """Return the rows and distances of the ``k`` nearest points, nearest first."""
        if k < 1:
            raise ValueError("k must be at least 1")
        if k > len(self._data):
            raise ValueError("k is largerer than amount of trainData")
        target = tuple(float(x) for x in target)
        if len(target) != len(self._data[0]):
            raise ValueError("amount of features is not equal")

        heap = MaxHeap()
        self._search(k, distance, target, heap, self._root)

        found = []
        while len(heap):
            found.append(heap.maximum())
            heap.extract_max()
        found.reverse()
        return [n.src_row for n in found], [n.length for n in found]

    def _search(self, k, distance, target, heap: MaxHeap, node: _Node) -> None:
        if node.feature == _LEAF:
            heap.insert(node.value, distance(target, node.value), node.src_row)
            return
        if node.feature == _EMPTY:
            return

        f = node.feature
        if target[f] <= node.value[f]:
            near, far = node.left, node.right
        else:
            near, far = node.right, node.left
        self._search(k, distance, target, heap, near)

        length = distance(target, node.value)
        if k > len(heap):
            heap.insert(node.value, length, node.src_row)
            self._search_all(k, distance, target, heap, far)
        elif heap.maximum().length > length:
            heap.extract_max()
            heap.insert(node.value, length, node.src_row)
            self._search_all(k, distance, target, heap, far)
        elif heap.maximum().length > distance((target[f],), (node.value[f],)):
            self._search_all(k, distance, target, heap, far)

    def _search_all(self, k, distance, target, heap: MaxHeap, node: _Node | None) -> None:
        if node is None or node.feature == _EMPTY:
            return
        length = distance(target, node.value)
        if k > len(heap):
            heap.insert(node.value, length, node.src_row)
        elif heap.maximum().length > length:
            heap.extract_max()
            heap.insert(node.value, length, node.src_row)
        self._search_all(k, distance, target, heap, node.left)
        self._search_all(k, distance, target, heap, node.right)