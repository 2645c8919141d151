"""Headless loss and prediction figures."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import numpy as np

from ..core.types import Vector


def plot_run(
    run_dir: str | Path,
    losses: Sequence[float],
    outputs: Sequence[Vector],
    targets: Sequence[Vector],
) -> Path | None:
    """Save ``run.png``: the loss per iteration and each sample's trained output.

    Returns ``None`` when there is no loss history to draw.
    """

    if not losses:
        return None
    import matplotlib

    matplotlib.use("Agg", force=True)
    import matplotlib.pyplot as plt  # imported lazily for headless safety

    run_dir = Path(run_dir)
    run_dir.mkdir(parents=True, exist_ok=True)
    fig, (loss_ax, pred_ax) = plt.subplots(1, 2, figsize=(10, 4))
    loss_ax.semilogy(np.arange(1, len(losses) + 1), losses)
    loss_ax.set_xlabel("Iteration")
    loss_ax.set_ylabel("Mean sample loss")

    flat_out = np.concatenate([np.asarray(y).ravel() for y in outputs])
    flat_target = np.concatenate([np.asarray(t).ravel() for t in targets])
    positions = np.arange(flat_out.size)
    pred_ax.bar(positions - 0.2, flat_target, width=0.4, label="target")
    pred_ax.bar(positions + 0.2, flat_out, width=0.4, label="output")
    pred_ax.set_xlabel("Sample")
    pred_ax.legend()

    plot_path = run_dir / "run.png"
    fig.tight_layout()
    fig.savefig(plot_path)
    plt.close(fig)
    return plot_path


__all__ = ["plot_run"]
