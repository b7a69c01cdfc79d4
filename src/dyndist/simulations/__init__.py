"""Simulation registry — register and create simulations by name."""

from __future__ import annotations

from typing import Any, Callable, Type

from dyndist.simulations.base import BaseSimulation

_REGISTRY: dict[str, Type[BaseSimulation]] = {}


def register(name: str) -> Callable:
    """Decorator to register a simulation class under *name*."""

    def wrapper(cls: Type[BaseSimulation]) -> Type[BaseSimulation]:
        if name in _REGISTRY:
            raise ValueError(f"Simulation '{name}' is already registered")
        _REGISTRY[name] = cls
        return cls

    return wrapper


def create_simulation(name: str, **kwargs: Any) -> BaseSimulation:
    """Instantiate a registered simulation by name."""
    if name not in _REGISTRY:
        available = ", ".join(sorted(_REGISTRY)) or "(none)"
        raise ValueError(f"Unknown simulation '{name}'. Available: {available}")
    return _REGISTRY[name](**kwargs)


def available_simulations() -> list[str]:
    """Return sorted list of registered simulation names."""
    return sorted(_REGISTRY)


# imported for their @register side effect
from dyndist.simulations import circular, random_network  # noqa: E402, F401
