"""MLflow run tracking for simulations."""

from __future__ import annotations

from typing import Any

import mlflow


class ExperimentLogger:
    """One MLflow run per simulation.

    Used as a context manager by the runner so the run is closed even when
    a simulation step raises.
    """

    def __init__(self, experiment_name: str, tracking_uri: str = "mlruns"):
        mlflow.set_tracking_uri(tracking_uri)
        mlflow.set_experiment(experiment_name)
        self.run = mlflow.start_run()

    def log_params(self, params: dict[str, Any], prefix: str = "") -> None:
        """Log a (possibly nested) config dict as flat parameters."""
        items = list(self._flatten(params, prefix).items())
        # MLflow accepts at most 100 params per call
        for i in range(0, len(items), 100):
            mlflow.log_params(dict(items[i : i + 100]))

    def log_metrics(self, metrics: dict[str, float], step: int | None = None) -> None:
        mlflow.log_metrics(metrics, step=step)

    def end(self) -> None:
        mlflow.end_run()

    def __enter__(self) -> ExperimentLogger:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.end()

    @staticmethod
    def _flatten(d: dict, prefix: str = "") -> dict[str, str]:
        """Flatten ``{"simulation": {"type": "circular"}}`` into
        ``{"simulation.type": "circular"}``."""
        items: dict[str, str] = {}
        for k, v in d.items():
            key = f"{prefix}.{k}" if prefix else k
            if isinstance(v, dict):
                items.update(ExperimentLogger._flatten(v, key))
            else:
                items[key] = str(v)
        return items
