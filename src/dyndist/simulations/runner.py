"""Main loop for Gillespie simulations."""

from __future__ import annotations

import time
from contextlib import nullcontext
from typing import Any

from tqdm import tqdm

from dyndist.simulations.base import BaseSimulation
from dyndist.utils.logging import ExperimentLogger


def run(simulation: BaseSimulation, config: dict) -> dict[str, Any]:
    """Step *simulation* until ``run.max_steps`` or extinction.

    Returns the simulation summary plus ``wall_time`` (seconds) and
    ``extinct`` (True if no reaction could fire before the step limit).
    The MLflow run, when enabled, is ended even if a step raises.
    """
    run_cfg = config["run"]
    mlflow_cfg = config.get("mlflow", {})
    log_freq = run_cfg.get("log_freq", 0)

    # ── logger ────────────────────────────────────────────────────────────
    if mlflow_cfg.get("enabled", False):
        tracking = ExperimentLogger(
            experiment_name=mlflow_cfg["experiment_name"],
            tracking_uri=mlflow_cfg["tracking_uri"],
        )
    else:
        tracking = nullcontext()

    with tracking as logger:
        if logger is not None:
            logger.log_params(config)

        # ── simulation ────────────────────────────────────────────────────
        extinct = False
        start = time.perf_counter()
        with tqdm(
            range(1, run_cfg["max_steps"] + 1),
            desc="Simulating",
            disable=not run_cfg.get("progress", True),
        ) as pbar:
            for step in pbar:
                if not simulation.step():
                    extinct = True
                    break

                if log_freq and step % log_freq == 0:
                    if logger is not None:
                        logger.log_metrics(
                            {"sim/time": simulation.time, "sim/sum": simulation.sampler.sum()},
                            step=step,
                        )
                    pbar.set_postfix(time=f"{simulation.time:.4g}")

        result = simulation.summary()
        result["wall_time"] = time.perf_counter() - start
        result["extinct"] = extinct

        if logger is not None:
            logger.log_metrics(
                {f"final/{k}": float(v) for k, v in result.items()},
                step=simulation.steps,
            )
    return result
