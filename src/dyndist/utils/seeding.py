"""Random generator construction."""

from __future__ import annotations

import random

import numpy as np


def seed_everything(seed: int) -> None:
    """Seed the global Python and NumPy generators."""
    random.seed(seed)
    np.random.seed(seed)


def make_rng(seed: int | None = None) -> np.random.Generator:
    """PCG64 generator; draws are reproducible for a fixed *seed*."""
    return np.random.default_rng(seed)
