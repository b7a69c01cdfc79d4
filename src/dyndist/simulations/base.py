"""Abstract Gillespie simulation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

import numpy as np

from dyndist.core.sampler import CategoricalSampler, naive_draw

METHODS = ("tree", "naive")


class BaseSimulation(ABC):
    """Continuous-time Markov chain advanced one reaction at a time.

    Subclasses set up ``self.species`` and ``self.sampler`` (one weight per
    reaction, equal to its current rate) and implement :meth:`_fire`.
    """

    def __init__(self, rng: np.random.Generator, method: str = "tree") -> None:
        if method not in METHODS:
            raise ValueError(f"Unknown draw method '{method}'. Available: {', '.join(METHODS)}")
        self.rng = rng
        self.method = method
        self.time = 0.0
        self.steps = 0
        self.species = np.zeros(0, dtype=np.int64)
        self.sampler = CategoricalSampler()

    @abstractmethod
    def _fire(self, reaction: int) -> None:
        """Apply *reaction* to ``self.species`` and refresh affected rates."""

    def step(self) -> bool:
        """Advance by one reaction.

        Returns False without changing state when no reaction can fire.
        """
        total = self.sampler.sum()
        if total == 0:
            return False

        self.time += self.rng.exponential(1.0 / total)
        if self.method == "naive":
            reaction = naive_draw(self.sampler.param.data, self.rng)
        else:
            reaction = self.sampler.draw(self.rng)
        self._fire(reaction)
        self.steps += 1
        return True

    @property
    def population(self) -> int:
        return int(self.species.sum())

    def summary(self) -> dict[str, Any]:
        return {
            "steps": self.steps,
            "time": float(self.time),
            "population": self.population,
            "sum": self.sampler.sum(),
        }
