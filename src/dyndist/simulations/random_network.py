"""Random catalytic reaction network ``R + C -> P + C``."""

from __future__ import annotations

import numpy as np

from dyndist.core.sampler import CategoricalSampler
from dyndist.simulations import register
from dyndist.simulations.base import BaseSimulation


def random_reactions(
    rng: np.random.Generator, num_species: int, num_reactions: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray, np.ndarray]:
    """Draw ``(reactant, catalyst, product, base_rate)`` arrays.

    Species are uniform, base rates log-normal.  Self-catalytic reactions
    (reactant == catalyst) are rejected and redrawn.
    """
    reactant = np.empty(0, dtype=np.int64)
    catalyst = np.empty(0, dtype=np.int64)
    product = np.empty(0, dtype=np.int64)
    base_rate = np.empty(0, dtype=np.float64)

    while len(reactant) < num_reactions:
        batch = num_reactions - len(reactant)
        r = rng.integers(0, num_species, size=batch)
        c = rng.integers(0, num_species, size=batch)
        p = rng.integers(0, num_species, size=batch)
        k = rng.lognormal(size=batch)

        keep = r != c
        reactant = np.concatenate([reactant, r[keep]])
        catalyst = np.concatenate([catalyst, c[keep]])
        product = np.concatenate([product, p[keep]])
        base_rate = np.concatenate([base_rate, k[keep]])

    return reactant, catalyst, product, base_rate


@register("random_network")
class RandomNetworkSimulation(BaseSimulation):
    """Mass-action network of random catalytic reactions.

    Each species keeps the list of reactions whose rate depends on it, so a
    step only refreshes those.  Update cost grows with the density of the
    dependency graph: fewer species for the same number of reactions means
    more rates touched per step.
    """

    def __init__(
        self,
        rng: np.random.Generator,
        num_species: int = 1_000_000,
        num_reactions: int = 1_000_000,
        method: str = "tree",
    ) -> None:
        super().__init__(rng, method=method)
        if num_species < 2:
            raise ValueError(f"num_species must be at least 2, got {num_species}")

        self.species = 1 + rng.poisson(1.0, size=num_species).astype(np.int64)
        self.reactant, self.catalyst, self.product, self.base_rate = random_reactions(
            rng, num_species, num_reactions
        )

        # species -> reactions whose rate it enters
        self.dependencies: list[list[int]] = [[] for _ in range(num_species)]
        for rx, (r, c) in enumerate(zip(self.reactant.tolist(), self.catalyst.tolist())):
            self.dependencies[r].append(rx)
            self.dependencies[c].append(rx)

        rates = self.base_rate * (self.species[self.reactant] * self.species[self.catalyst])
        self.sampler = CategoricalSampler(rates)

    def rate(self, reaction: int) -> float:
        return float(
            self.base_rate[reaction]
            * (self.species[self.reactant[reaction]] * self.species[self.catalyst[reaction]])
        )

    def _fire(self, reaction: int) -> None:
        reactant = self.reactant[reaction]
        product = self.product[reaction]
        self.species[reactant] -= 1
        self.species[product] += 1

        for dep in self.dependencies[reactant]:
            self.sampler.update(dep, self.rate(dep))
        for dep in self.dependencies[product]:
            self.sampler.update(dep, self.rate(dep))
