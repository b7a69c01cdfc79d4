"""Circular reaction network ``0 -> 1 -> ... -> N-1 -> 0``."""

from __future__ import annotations

import numpy as np

from dyndist.core.sampler import CategoricalSampler
from dyndist.simulations import register
from dyndist.simulations.base import BaseSimulation


@register("circular")
class CircularSimulation(BaseSimulation):
    """*N* species on a ring; reaction *i* turns one unit of species *i*
    into species ``(i + 1) % N`` at rate ``base_rate * species[i]``.

    Only two rates change per step, so the total population is conserved
    and each step costs O(log N).
    """

    def __init__(
        self,
        rng: np.random.Generator,
        num_species: int = 100_000,
        base_rate: float = 0.1,
        initial_count: int = 5,
        method: str = "tree",
    ) -> None:
        super().__init__(rng, method=method)
        if num_species < 1:
            raise ValueError(f"num_species must be positive, got {num_species}")
        self.num_species = num_species
        self.base_rate = base_rate

        self.species = np.zeros(num_species, dtype=np.int64)
        self.species[0] = initial_count
        self.sampler = CategoricalSampler(base_rate * self.species.astype(np.float64))

    def _fire(self, reaction: int) -> None:
        reactant = reaction
        product = (reaction + 1) % self.num_species
        self.species[reactant] -= 1
        self.species[product] += 1

        self.sampler.update(reactant, self.base_rate * float(self.species[reactant]))
        self.sampler.update(product, self.base_rate * float(self.species[product]))
