"""Loss registry used by the SGD trainer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Iterable

import numpy as np

from ..core.errors import InvalidConfiguration
from ..core.types import Vector

LossFn = Callable[[Vector, Vector], tuple[float, Vector]]


@dataclass(frozen=True)
class Loss:
    """Loss wrapper returning both the scalar loss and dL/dy."""

    name: str
    fn: LossFn

    def __call__(self, predictions: Vector, targets: Vector) -> tuple[float, Vector]:
        return self.fn(predictions, targets)


class LossRegistry:
    """Central registry for loss functions."""

    def __init__(self) -> None:
        self._registry: Dict[str, Loss] = {}

    def register(self, name: str, fn: LossFn) -> None:
        self._registry[name] = Loss(name, fn)

    def names(self) -> Iterable[str]:
        return sorted(self._registry)

    def resolve(self, name: str | Loss) -> Loss:
        if isinstance(name, Loss):
            return name
        if name not in self._registry:
            available = ", ".join(sorted(self._registry))
            raise InvalidConfiguration(f"Unknown loss {name!r}. Available losses: {available}")
        return self._registry[name]


REGISTRY = LossRegistry()


def _mse(pred: Vector, target: Vector) -> tuple[float, Vector]:
    # The factor of 2 from d/dy (y - t)**2 is folded into the learning rate.
    diff = pred - target
    loss = float(np.mean(np.square(diff)))
    return loss, diff


def _squared_error(pred: Vector, target: Vector) -> tuple[float, Vector]:
    diff = pred - target
    loss = float(np.sum(np.square(diff)))
    return loss, 2.0 * diff


def _mae(pred: Vector, target: Vector) -> tuple[float, Vector]:
    diff = pred - target
    loss = float(np.mean(np.abs(diff)))
    return loss, np.sign(diff)


REGISTRY.register("mse", _mse)
REGISTRY.register("squared_error", _squared_error)
REGISTRY.register("mae", _mae)

__all__ = ["Loss", "LossRegistry", "REGISTRY"]
