"""Run summary written next to the loss history."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Mapping, Sequence

import numpy as np

from ..core.network import Network
from ..core.types import RunResult, Vector


def max_abs_error(outputs: Sequence[Vector], targets: Sequence[Vector]) -> float:
    """Largest elementwise distance between any output and its target."""

    if not outputs:
        return 0.0
    return float(max(np.max(np.abs(np.asarray(y) - np.asarray(t))) for y, t in zip(outputs, targets)))


def write_run_summary(
    path: str | Path,
    *,
    config: Mapping[str, object],
    dataset: Mapping[str, object],
    network: Network,
    result: RunResult,
    inputs: Sequence[Vector],
    initial: Sequence[Vector],
    final: Sequence[Vector],
    targets: Sequence[Vector],
) -> Path:
    """Record the resolved config, the trained layer stack and each sample's
    output before and after training."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    samples = [
        {
            "input": np.asarray(x).tolist(),
            "before": np.asarray(y0).tolist(),
            "after": np.asarray(y1).tolist(),
            "target": np.asarray(t).tolist(),
        }
        for x, y0, y1, t in zip(inputs, initial, final, targets)
    ]
    summary = {
        "config": config,
        "dataset": dict(dataset),
        "network": {
            "layers": [repr(layer) for layer in network.layers],
            "parameter_count": network.parameter_count(),
        },
        "result": {
            "steps": result.steps,
            "iterations": result.iterations,
            "final_loss": result.final_loss,
        },
        "max_abs_error": {
            "before": max_abs_error(initial, targets),
            "after": max_abs_error(final, targets),
        },
        "samples": samples,
    }
    path.write_text(json.dumps(summary, indent=2))
    return path


__all__ = ["max_abs_error", "write_run_summary"]
