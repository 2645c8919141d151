"""Per-sample stochastic gradient descent over a fixed training set."""

from __future__ import annotations

import math
from numbers import Integral, Real
from typing import List, Mapping, Sequence

import numpy as np

from ..core.errors import InvalidConfiguration
from ..core.network import Network
from ..core.types import RunResult, TrainingSet, Vector, as_vector
from .losses import REGISTRY as LOSS_REGISTRY
from .losses import Loss


class SGDTrainer:
    """Run ``iterations`` passes of forward/backward over every training pair.

    There is no convergence check: the loop always runs the configured
    number of iterations. After each iteration the mean sample loss is handed
    to ``callbacks`` (objects with ``on_epoch(epoch, metrics)`` or plain
    callables).
    """

    def __init__(
        self,
        iterations: int,
        learning_rate: float,
        *,
        loss: str | Loss = "mse",
        callbacks: Sequence[object] | None = None,
    ) -> None:
        if isinstance(iterations, bool) or not isinstance(iterations, Integral):
            raise InvalidConfiguration(f"iterations must be an integer, got {iterations!r}")
        if iterations < 0:
            raise InvalidConfiguration(f"iterations must be non-negative, got {iterations}")
        if isinstance(learning_rate, bool) or not isinstance(learning_rate, Real):
            raise InvalidConfiguration(f"learning_rate must be a number, got {learning_rate!r}")
        if not math.isfinite(learning_rate) or learning_rate <= 0:
            raise InvalidConfiguration(
                f"learning_rate must be positive and finite, got {learning_rate}"
            )
        self._iterations = int(iterations)
        self._learning_rate = float(learning_rate)
        self._loss = LOSS_REGISTRY.resolve(loss)
        self.callbacks = list(callbacks or [])

    @property
    def iterations(self) -> int:
        return self._iterations

    @property
    def learning_rate(self) -> float:
        return self._learning_rate

    @property
    def loss(self) -> Loss:
        return self._loss

    def train(
        self,
        network: Network,
        inputs: Sequence[Vector] | TrainingSet,
        targets: Sequence[Vector] | None = None,
    ) -> RunResult:
        """Fit ``network`` to the input/target pairs, mutating it in place."""

        data = self._resolve_data(network, inputs, targets)
        losses: List[float] = []
        for epoch in range(1, self._iterations + 1):
            epoch_losses: List[float] = []
            for x, t in data:
                y = network.forward(x)
                loss_value, grad = self._loss(y, t)
                epoch_losses.append(loss_value)
                network.backward(grad, self._learning_rate)
            mean_loss = float(np.mean(epoch_losses)) if epoch_losses else 0.0
            losses.append(mean_loss)
            self._emit_epoch(epoch, {"loss": mean_loss})
        return RunResult(
            steps=self._iterations * len(data),
            iterations=self._iterations,
            losses=losses,
        )

    # ------------------------------------------------------------------
    # Internal helpers

    @staticmethod
    def _resolve_data(
        network: Network,
        inputs: Sequence[Vector] | TrainingSet,
        targets: Sequence[Vector] | None,
    ) -> TrainingSet:
        if isinstance(inputs, TrainingSet):
            if targets is not None:
                raise TypeError("targets must be omitted when passing a TrainingSet")
            data = inputs
        else:
            if targets is None:
                raise TypeError("targets are required alongside inputs")
            data = TrainingSet(inputs=list(inputs), targets=list(targets))
        for idx, (x, t) in enumerate(data):
            as_vector(x, network.input_width, name=f"input {idx}")
            as_vector(t, network.output_width, name=f"target {idx}")
        return data

    def _emit_epoch(self, epoch: int, metrics: Mapping[str, float]) -> None:
        for callback in self.callbacks:
            if hasattr(callback, "on_epoch"):
                callback.on_epoch(epoch, metrics)  # type: ignore[attr-defined]
            elif callable(callback):
                callback(epoch, metrics)


__all__ = ["SGDTrainer"]
