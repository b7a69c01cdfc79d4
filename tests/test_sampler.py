"""Tests for the categorical sampler."""

from __future__ import annotations

import copy
import random

import numpy as np
import pytest

from dyndist.core.sampler import CategoricalSampler, naive_draw
from dyndist.core.weights import WeightBag


def test_default_constructible() -> None:
    sampler = CategoricalSampler()
    assert sampler.sum() == 0.0
    assert len(sampler.param) == 0
    assert sampler == CategoricalSampler()


def test_bounds_and_sum() -> None:
    sampler = CategoricalSampler([1.0, 2.0, 3.0])
    assert sampler.min() == 0
    assert sampler.max() == 2
    assert sampler.sum() == 6.0


def test_takes_ownership_of_bag() -> None:
    bag = WeightBag([1.0, 2.0])
    sampler = CategoricalSampler(bag)
    assert sampler.param is bag
    sampler.update(0, 5.0)
    assert bag[0] == 5.0


def test_param_round_trip() -> None:
    sampler = CategoricalSampler([1.0, 2.0])
    other = CategoricalSampler()
    other.param = sampler.param.copy()
    assert other == sampler

    other.param = [4.0, 0.0, 1.0]
    assert other.max() == 2
    assert other.sum() == 5.0
    assert other != sampler


def test_equality() -> None:
    assert CategoricalSampler([1.0, 2.0]) == CategoricalSampler([1.0, 2.0])
    assert CategoricalSampler([1.0, 2.0]) != CategoricalSampler([2.0, 1.0])
    assert CategoricalSampler([1.0, 2.0]) != CategoricalSampler([1.0, 2.0, 0.0])


def test_copy_is_independent() -> None:
    sampler = CategoricalSampler([1.0, 2.0])
    for clone in (sampler.copy(), copy.copy(sampler), copy.deepcopy(sampler)):
        assert clone == sampler
        assert clone.param is not sampler.param
        clone.update(1, 0.0)
        assert clone != sampler
        assert sampler.param[1] == 2.0


def test_reset_is_noop() -> None:
    sampler = CategoricalSampler([1.0, 2.0])
    sampler.reset()
    assert sampler == CategoricalSampler([1.0, 2.0])


def test_serialization_round_trip() -> None:
    sampler = CategoricalSampler([0.5, 0.0, 1.5])
    assert CategoricalSampler.loads(sampler.dumps()) == sampler


def test_draw_is_in_range(rng: np.random.Generator) -> None:
    sampler = CategoricalSampler([1.0, 2.0, 3.0])
    for _ in range(100):
        assert sampler.min() <= sampler.draw(rng) <= sampler.max()


def test_empirical_distribution(rng: np.random.Generator) -> None:
    weights = [1.0, 0.0, 2.0, 3.0, 4.0]
    total = sum(weights)
    sampler = CategoricalSampler(weights)

    n_samples = 10000
    histogram = np.zeros(len(weights))
    for _ in range(n_samples):
        histogram[sampler(rng)] += total / n_samples

    for i in range(sampler.min(), sampler.max() + 1):
        assert histogram[i] == pytest.approx(weights[i], rel=0.1)
    # zero weight must never be drawn, exactly
    assert histogram[1] == 0


def test_dynamic_switch(rng: np.random.Generator) -> None:
    sampler = CategoricalSampler([1.0, 0.0])
    assert [sampler.draw(rng) for _ in range(3)] == [0, 0, 0]

    sampler.update(0, 0.0)
    sampler.update(1, 1.0)
    assert [sampler.draw(rng) for _ in range(3)] == [1, 1, 1]


def test_works_with_stdlib_random() -> None:
    sampler = CategoricalSampler([0.0, 3.0, 0.0])
    gen = random.Random(7)
    assert {sampler.draw(gen) for _ in range(50)} == {1}


class _FixedSource:
    def __init__(self, value: float) -> None:
        self.value = value

    def random(self) -> float:
        return self.value


def test_draw_maps_uniform_to_cumulative_interval() -> None:
    sampler = CategoricalSampler([1.0, 0.0, 2.0, 3.0])
    assert sampler.draw(_FixedSource(0.0)) == 0
    assert sampler.draw(_FixedSource(1.0 / 6.0)) == 2
    assert sampler.draw(_FixedSource(0.5)) == 3
    assert sampler.draw(_FixedSource(np.nextafter(1.0, 0.0))) == 3


def test_draw_is_reproducible() -> None:
    weights = np.arange(20, dtype=np.float64)
    a = CategoricalSampler(weights)
    b = CategoricalSampler(weights)
    rng_a = np.random.default_rng(123)
    rng_b = np.random.default_rng(123)
    assert [a.draw(rng_a) for _ in range(200)] == [b.draw(rng_b) for _ in range(200)]


def test_naive_draw_skips_zero_weights(rng: np.random.Generator) -> None:
    weights = np.array([0.0, 1.0, 0.0, 2.0, 0.0])
    draws = {naive_draw(weights, rng) for _ in range(500)}
    assert draws == {1, 3}


def test_naive_draw_needs_positive_total(rng: np.random.Generator) -> None:
    with pytest.raises(IndexError):
        naive_draw(np.zeros(3), rng)
    with pytest.raises(IndexError):
        naive_draw(np.zeros(0), rng)
