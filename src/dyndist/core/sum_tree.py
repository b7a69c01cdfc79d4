"""Binary sum tree for O(log n) weight update and proportional lookup."""

from __future__ import annotations

from typing import Iterable

import numpy as np


def _leaf_capacity(n: int) -> int:
    """Smallest power of two >= *n* (1 for an empty or single-leaf tree)."""
    capacity = 1
    while capacity < n:
        capacity *= 2
    return capacity


class SumTree:
    """A perfect binary tree over a flat array where each leaf holds a
    weight and each internal node stores the sum of its two children.

    Leaf *i* is stored at tree index ``i + capacity - 1``; the padding
    leaves past ``size`` are zeros.  Supports O(log n) update and
    cumulative-probe lookup, O(1) total.
    """

    def __init__(self, weights: Iterable[float] = ()) -> None:
        values = np.asarray(
            weights if isinstance(weights, np.ndarray) else list(weights),
            dtype=np.float64,
        )
        if values.ndim != 1:
            raise ValueError(f"weights must be a 1D sequence, got shape {values.shape}")
        if not np.all(np.isfinite(values)) or np.any(values < 0.0):
            raise ValueError("weights must be finite and non-negative")

        self._size = len(values)
        self.capacity = _leaf_capacity(self._size)
        self._first_leaf = self.capacity - 1
        self._tree = np.zeros(2 * self.capacity - 1, dtype=np.float64)
        self._tree[self._first_leaf : self._first_leaf + self._size] = values
        self._build()

    def _build(self) -> None:
        # level by level, each parent gets exactly one addition of its children
        start = self._first_leaf
        while start > 0:
            parent = (start - 1) // 2
            children = self._tree[start : 2 * start + 1]
            self._tree[parent:start] = children[0::2] + children[1::2]
            start = parent

    # ── public API ────────────────────────────────────────────────────────

    def update(self, index: int, weight: float) -> None:
        """Set leaf *index* to *weight* and recompute its ancestors."""
        assert 0 <= index < self._size, f"index {index} out of range"
        assert 0.0 <= weight < np.inf, f"invalid weight {weight}"

        tree = self._tree
        idx = index + self._first_leaf
        tree[idx] = weight
        while idx > 0:
            idx = (idx - 1) // 2
            left = 2 * idx + 1
            tree[idx] = tree[left] + tree[left + 1]

    def find(self, probe: float) -> int:
        """Return the leaf whose cumulative interval ``[C[i], C[i] + w[i])``
        contains *probe*.

        Zero-weight leaves are never returned while any leaf is non-zero.
        Probes below zero resolve to the first non-zero leaf and probes at
        or above :meth:`sum` to the last non-zero leaf.
        """
        if probe < 0.0:
            probe = 0.0

        tree = self._tree
        idx = 0
        while idx < self._first_leaf:
            left = 2 * idx + 1
            right = left + 1
            if probe < tree[left]:
                idx = left
            elif tree[right] > 0.0:
                probe -= tree[left]
                idx = right
            else:
                # overshoot: nothing to the right, stay on the last real interval
                idx = left
        return idx - self._first_leaf

    def sum(self) -> float:
        """Sum of all weights (root value)."""
        return float(self._tree[0])

    @property
    def size(self) -> int:
        return self._size

    @property
    def leaves(self) -> np.ndarray:
        """Read-only view of the stored weights."""
        view = self._tree[self._first_leaf : self._first_leaf + self._size]
        view.flags.writeable = False
        return view

    def copy(self) -> SumTree:
        """Independent copy with its own node storage."""
        return self.__copy__()

    def __copy__(self) -> SumTree:
        clone = SumTree.__new__(SumTree)
        clone.__dict__.update(self.__dict__)
        clone._tree = self._tree.copy()
        return clone

    def __deepcopy__(self, memo: dict) -> SumTree:
        return self.__copy__()

    def __len__(self) -> int:
        return self._size

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SumTree):
            return NotImplemented
        return self._size == other._size and bool(np.array_equal(self.leaves, other.leaves))

    def __repr__(self) -> str:
        return f"SumTree({self.leaves.tolist()!r})"
