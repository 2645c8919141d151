"""Loss history recorders for training runs."""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Mapping, Sequence


class LossLog:
    """Iteration callback that appends one JSON line per completed pass.

    Each record carries the mean sample loss, its change from the previous
    pass and the best loss seen so far.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text("")
        self._previous: float | None = None
        self.best: float | None = None

    def on_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        loss = float(metrics["loss"])
        delta = None if self._previous is None else loss - self._previous
        self.best = loss if self.best is None else min(self.best, loss)
        self._previous = loss
        record = {"iteration": int(epoch), "loss": loss, "delta": delta, "best": self.best}
        with self.path.open("a", encoding="utf-8") as handle:
            handle.write(json.dumps(record) + "\n")


def write_loss_table(path: str | Path, losses: Sequence[float]) -> Path:
    """Write ``iteration,loss`` rows for a finished run."""

    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="") as handle:
        writer = csv.writer(handle)
        writer.writerow(["iteration", "loss"])
        writer.writerows((idx, float(loss)) for idx, loss in enumerate(losses, start=1))
    return path


__all__ = ["LossLog", "write_loss_table"]
