"""Core typing contracts for scarecrow."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Sequence

import numpy as np

from .errors import ShapeMismatch

Array = np.ndarray
Vector = np.ndarray


def as_vector(values, width: int | None = None, *, name: str = "vector") -> Vector:
    """Return ``values`` as a 1-D ``float64`` vector, checking its width."""

    vec = np.asarray(values, dtype=np.float64)
    if vec.ndim != 1:
        raise ShapeMismatch(f"{name} must be one-dimensional, got shape {vec.shape}")
    if width is not None and vec.shape[0] != width:
        raise ShapeMismatch(f"{name} has length {vec.shape[0]}, expected {width}")
    return vec


@dataclass(frozen=True)
class TrainingSet:
    """Parallel input and target vectors, iterated in stored order."""

    inputs: Sequence[Vector]
    targets: Sequence[Vector]

    def __post_init__(self) -> None:
        if len(self.inputs) != len(self.targets):
            raise ShapeMismatch(
                f"{len(self.inputs)} inputs but {len(self.targets)} targets"
            )
        object.__setattr__(
            self, "inputs", tuple(as_vector(x, name="input") for x in self.inputs)
        )
        object.__setattr__(
            self, "targets", tuple(as_vector(t, name="target") for t in self.targets)
        )

    def __len__(self) -> int:
        return len(self.inputs)

    def __iter__(self):
        return iter(zip(self.inputs, self.targets))


@dataclass(frozen=True)
class RunResult:
    """Summary returned by :meth:`scarecrow.training.trainer.SGDTrainer.train`."""

    steps: int
    iterations: int
    losses: List[float] = field(default_factory=list)

    @property
    def final_loss(self) -> float | None:
        return self.losses[-1] if self.losses else None
