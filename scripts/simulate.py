#!/usr/bin/env python3
"""Run a Gillespie simulation driven by the dynamic categorical sampler."""

from __future__ import annotations

import argparse

from dyndist.simulations import available_simulations, create_simulation
from dyndist.simulations.runner import run
from dyndist.utils.config import load_config, simulation_kwargs
from dyndist.utils.seeding import make_rng, seed_everything


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Run a stochastic reaction-network simulation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
examples:
  python scripts/simulate.py
  python scripts/simulate.py --simulation configs/simulations/random_network.yaml
  python scripts/simulate.py --set simulation.method=naive --set run.max_steps=10000
  python scripts/simulate.py --set mlflow.enabled=true
""",
    )
    parser.add_argument(
        "--config",
        default="configs/default.yaml",
        help="Path to base config (default: configs/default.yaml)",
    )
    parser.add_argument(
        "--simulation", default=None, help="Path to simulation config override"
    )
    parser.add_argument(
        "--set",
        action="append",
        default=[],
        dest="overrides",
        metavar="KEY=VALUE",
        help="Override config values (e.g. --set simulation.num_species=1000)",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)

    config = load_config(
        default_path=args.config,
        simulation_path=args.simulation,
        overrides=args.overrides,
    )

    seed_everything(config["seed"])
    rng = make_rng(config["seed"])
    sim_type = config["simulation"]["type"]
    print(f"Simulation: {sim_type} (available: {', '.join(available_simulations())})")
    print(f"Draw method: {config['simulation'].get('method', 'tree')}")

    simulation = create_simulation(sim_type, rng=rng, **simulation_kwargs(config))
    result = run(simulation, config)

    if result["extinct"]:
        print(f"Stopped after {result['steps']} reactions (no reaction can fire)")
    else:
        print(f"Stopped after {result['steps']} reactions")
    print(f"Simulated time: {result['time']:.6g}")
    print(f"Population: {result['population']}")
    print(f"Wall time: {result['wall_time']:.2f}s")


if __name__ == "__main__":
    main()
