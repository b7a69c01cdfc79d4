"""Layered YAML configuration for simulation runs."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml


def load_yaml(path: str | Path) -> dict[str, Any]:
    """Load a YAML file and return its contents as a dict."""
    with open(path) as f:
        return yaml.safe_load(f) or {}


def deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge *override* into *base* (returns a new dict)."""
    merged = base.copy()
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def apply_overrides(config: dict, overrides: list[str]) -> dict:
    """Apply dot-notation overrides like ``simulation.num_species=1000``.

    Values are parsed as YAML scalars, so ``"false"`` becomes ``False`` and
    ``"1e-3"`` becomes ``0.001``.
    """
    for override in overrides:
        if "=" not in override:
            raise ValueError(f"Override must be key=value, got: {override!r}")
        key_path, raw_value = override.split("=", 1)
        if not key_path:
            raise ValueError(f"Override has an empty key: {override!r}")
        value = yaml.safe_load(raw_value)
        keys = key_path.split(".")
        node = config
        for k in keys[:-1]:
            node = node.setdefault(k, {})
            if not isinstance(node, dict):
                raise ValueError(f"Cannot set {key_path!r}: {k!r} is not a mapping")
        node[keys[-1]] = value
    return config


def load_config(
    default_path: str | Path = "configs/default.yaml",
    simulation_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> dict[str, Any]:
    """Build a config by merging: default → simulation → CLI overrides."""
    config = load_yaml(default_path)
    if simulation_path:
        config = deep_merge(config, load_yaml(simulation_path))
    if overrides:
        config = apply_overrides(config, overrides)
    return config


def simulation_kwargs(config: dict) -> dict[str, Any]:
    """Constructor arguments for the configured simulation (all keys of the
    ``simulation`` section except ``type``)."""
    return {k: v for k, v in config["simulation"].items() if k != "type"}
