"""Categorical distribution over indices with dynamically updatable weights."""

from __future__ import annotations

from typing import Iterable, Protocol

import numpy as np

from dyndist.core.weights import WeightBag


class UniformSource(Protocol):
    """Anything with a ``random()`` method returning a float in [0, 1).

    Both :class:`numpy.random.Generator` and :class:`random.Random` qualify.
    """

    def random(self) -> float: ...


class CategoricalSampler:
    """Draws index *i* with probability ``w[i] / sum(w)``.

    The weights live in a :class:`WeightBag` (the *parameter*) that the
    sampler owns.  Change them through :meth:`update`; each update and each
    draw costs O(log n).  The sampler keeps no random state of its own, the
    generator is supplied per draw.
    """

    def __init__(self, weights: WeightBag | Iterable[float] = ()) -> None:
        self._param = weights if isinstance(weights, WeightBag) else WeightBag(weights)

    # ── parameter ─────────────────────────────────────────────────────────

    @property
    def param(self) -> WeightBag:
        return self._param

    @param.setter
    def param(self, weights: WeightBag | Iterable[float]) -> None:
        self._param = weights if isinstance(weights, WeightBag) else WeightBag(weights)

    def update(self, index: int, weight: float) -> None:
        """Set the weight of *index*."""
        self._param.update(index, weight)

    def sum(self) -> float:
        return self._param.sum()

    def min(self) -> int:
        return 0

    def max(self) -> int:
        return len(self._param) - 1

    def reset(self) -> None:
        """No-op: draws are independent of each other."""

    # ── sampling ──────────────────────────────────────────────────────────

    def draw(self, rng: UniformSource) -> int:
        """Draw one index.

        Never returns an index whose weight is zero.  The result is
        undefined when :meth:`sum` is zero.
        """
        probe = rng.random() * self._param.sum()
        return self._param.find(probe)

    __call__ = draw

    # ── value semantics ───────────────────────────────────────────────────

    def copy(self) -> CategoricalSampler:
        return CategoricalSampler(self._param.copy())

    def __copy__(self) -> CategoricalSampler:
        return self.copy()

    def __deepcopy__(self, memo: dict) -> CategoricalSampler:
        return self.copy()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoricalSampler):
            return NotImplemented
        return self._param == other._param

    def __repr__(self) -> str:
        return f"CategoricalSampler({self._param.data.tolist()!r})"

    def dumps(self) -> str:
        return self._param.dumps()

    @classmethod
    def loads(cls, text: str) -> CategoricalSampler:
        return cls(WeightBag.loads(text))


def naive_draw(weights: np.ndarray, rng: np.random.Generator) -> int:
    """O(n) reference draw by cumulative sum and binary search.

    Used as a baseline to compare against :class:`CategoricalSampler`.
    Like :meth:`CategoricalSampler.draw` it needs a positive total; an empty
    or all-zero *weights* raises :class:`IndexError`.
    """
    cumulative = np.cumsum(weights)
    total = float(cumulative[-1])
    idx = int(np.searchsorted(cumulative, rng.random() * total, side="right"))
    # rounding can push the probe onto the total
    return min(idx, int(np.flatnonzero(weights)[-1]))
