"""Layer implementations composing a scarecrow network."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Dict, Mapping, Protocol, runtime_checkable

import numpy as np

from . import activations
from .errors import InvalidConfiguration, ShapeMismatch
from .types import Array, Vector, as_vector


@runtime_checkable
class Layer(Protocol):
    """Capability set shared by every layer a network can hold."""

    input_width: int
    output_width: int

    def output(self, inputs: Vector) -> Vector:
        """Return the forward transform of ``inputs`` without mutating state."""

    def input_gradient(self, inputs: Vector, output_gradient: Vector) -> Vector:
        """Return dL/d(inputs) given the forward ``inputs`` and dL/d(output)."""

    def update(
        self, inputs: Vector, output_gradient: Vector, learning_rate: float
    ) -> None:
        """Apply one gradient-descent step in place."""


def _check_widths(input_width: int, output_width: int) -> None:
    for label, width in (("input", input_width), ("output", output_width)):
        if width <= 0:
            raise ShapeMismatch(f"Dense {label} width must be positive, got {width}")


def _make_rng(rng: np.random.Generator | int | None) -> np.random.Generator:
    if isinstance(rng, np.random.Generator):
        return rng
    return np.random.default_rng(rng)


class Dense:
    """Fully-connected affine layer ``y = W x + b``.

    ``weights`` has shape ``(output_width, input_width)``; ``bias`` has
    ``output_width`` entries. Both are copied on construction and only ever
    mutated through :meth:`update`.
    """

    def __init__(self, weights, bias) -> None:
        W = np.array(weights, dtype=np.float64, copy=True)
        if W.ndim != 2:
            raise ShapeMismatch(f"Dense weights must be 2-D, got shape {W.shape}")
        _check_widths(W.shape[1], W.shape[0])
        b = np.array(bias, dtype=np.float64, copy=True)
        if b.shape != (W.shape[0],):
            raise ShapeMismatch(
                f"Dense bias has shape {b.shape}, expected ({W.shape[0]},)"
            )
        self._weights = W
        self._bias = b

    @classmethod
    def random(
        cls,
        input_width: int,
        output_width: int,
        rng: np.random.Generator | int | None = None,
        *,
        scale: float = 1.0,
    ) -> "Dense":
        """Draw every parameter independently from ``N(0, scale**2)``."""

        _check_widths(input_width, output_width)
        gen = _make_rng(rng)
        weights = gen.standard_normal((output_width, input_width)) * scale
        bias = gen.standard_normal(output_width) * scale
        return cls(weights, bias)

    @classmethod
    def uniform(cls, value: float, input_width: int, output_width: int) -> "Dense":
        """Fill every weight and bias with the constant ``value``."""

        _check_widths(input_width, output_width)
        weights = np.full((output_width, input_width), float(value))
        bias = np.full(output_width, float(value))
        return cls(weights, bias)

    @property
    def input_width(self) -> int:
        return int(self._weights.shape[1])

    @property
    def output_width(self) -> int:
        return int(self._weights.shape[0])

    @property
    def weights(self) -> Array:
        return self._weights.copy()

    @property
    def bias(self) -> Array:
        return self._bias.copy()

    def output(self, inputs: Vector) -> Vector:
        x = as_vector(inputs, self.input_width, name="Dense input")
        return self._weights @ x + self._bias

    def input_gradient(self, inputs: Vector, output_gradient: Vector) -> Vector:
        as_vector(inputs, self.input_width, name="Dense input")
        grad = as_vector(output_gradient, self.output_width, name="Dense output gradient")
        return self._weights.T @ grad

    def update(
        self, inputs: Vector, output_gradient: Vector, learning_rate: float
    ) -> None:
        x = as_vector(inputs, self.input_width, name="Dense input")
        grad = as_vector(output_gradient, self.output_width, name="Dense output gradient")
        self._weights -= learning_rate * np.outer(grad, x)
        self._bias -= learning_rate * grad

    def state_dict(self) -> Mapping[str, Array]:
        return {"weights": self.weights, "bias": self.bias}

    def parameter_count(self) -> int:
        return int(self._weights.size + self._bias.size)

    def __repr__(self) -> str:
        return f"Dense({self.input_width} -> {self.output_width})"


@dataclass(frozen=True)
class _Elementwise:
    """Parameter-free elementwise transform of a fixed ``size``."""

    size: int

    def __post_init__(self) -> None:
        if int(self.size) <= 0:
            raise ShapeMismatch(f"{type(self).__name__} size must be positive, got {self.size}")

    @property
    def input_width(self) -> int:
        return self.size

    @property
    def output_width(self) -> int:
        return self.size

    def _forward(self, x: Array) -> Array:  # pragma: no cover - abstract
        raise NotImplementedError

    def _local_gradient(self, x: Array, y: Array) -> Array:  # pragma: no cover - abstract
        raise NotImplementedError

    def output(self, inputs: Vector) -> Vector:
        x = as_vector(inputs, self.size, name=f"{type(self).__name__} input")
        return self._forward(x)

    def input_gradient(self, inputs: Vector, output_gradient: Vector) -> Vector:
        x = as_vector(inputs, self.size, name=f"{type(self).__name__} input")
        grad = as_vector(
            output_gradient, self.size, name=f"{type(self).__name__} output gradient"
        )
        return grad * self._local_gradient(x, self._forward(x))

    def update(
        self, inputs: Vector, output_gradient: Vector, learning_rate: float
    ) -> None:
        return None


@dataclass(frozen=True)
class Hyperbolic(_Elementwise):
    """``tanh`` activation; dy/dx = 1 - y**2."""

    def _forward(self, x: Array) -> Array:
        return activations.tanh(x)

    def _local_gradient(self, x: Array, y: Array) -> Array:
        return activations.tanh_deriv(y)


@dataclass(frozen=True)
class Sigmoid(_Elementwise):
    """Logistic activation; dy/dx = y (1 - y)."""

    def _forward(self, x: Array) -> Array:
        return activations.sigmoid(x)

    def _local_gradient(self, x: Array, y: Array) -> Array:
        return activations.sigmoid_deriv(y)


@dataclass(frozen=True)
class Rectified(_Elementwise):
    """ReLU activation; dy/dx is the unit step of the input."""

    def _forward(self, x: Array) -> Array:
        return activations.relu(x)

    def _local_gradient(self, x: Array, y: Array) -> Array:
        return activations.relu_deriv(x)


_ACTIVATIONS: Dict[str, Callable[[int], _Elementwise]] = {
    "tanh": Hyperbolic,
    "hyperbolic": Hyperbolic,
    "sigmoid": Sigmoid,
    "relu": Rectified,
    "rectified": Rectified,
}


def build_layer(
    config: Mapping[str, object], rng: np.random.Generator | int | None = None
) -> Layer:
    """Build a layer from a config mapping such as ``{"type": "dense", "in": 2, "out": 6}``."""

    kind = str(config.get("type", "")).lower()
    if kind == "dense":
        try:
            d_in = int(config["in"])  # type: ignore[arg-type]
            d_out = int(config["out"])  # type: ignore[arg-type]
        except KeyError as exc:
            raise InvalidConfiguration(f"Dense layer config missing {exc}") from exc
        if "value" in config:
            return Dense.uniform(float(config["value"]), d_in, d_out)  # type: ignore[arg-type]
        scale = float(config.get("scale", 1.0))  # type: ignore[arg-type]
        return Dense.random(d_in, d_out, rng, scale=scale)
    if kind in _ACTIVATIONS:
        if "size" not in config:
            raise InvalidConfiguration(f"{kind} layer config requires `size`")
        return _ACTIVATIONS[kind](int(config["size"]))  # type: ignore[arg-type]
    available = ", ".join(sorted({"dense", *_ACTIVATIONS}))
    raise InvalidConfiguration(f"Unknown layer type {kind!r}. Available layers: {available}")


__all__ = [
    "Layer",
    "Dense",
    "Hyperbolic",
    "Sigmoid",
    "Rectified",
    "build_layer",
]
