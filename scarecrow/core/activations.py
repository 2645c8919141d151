"""Elementwise activation functions and their derivatives."""

from __future__ import annotations

import numpy as np

from .types import Array


def tanh(x: Array) -> Array:
    """Return the hyperbolic tangent of ``x``."""

    return np.tanh(x)


def tanh_deriv(y: Array) -> Array:
    """Derivative of ``tanh`` expressed through its output ``y``."""

    return 1.0 - y * y


def sigmoid(x: Array) -> Array:
    """Return the logistic sigmoid of ``x``."""

    return 1.0 / (1.0 + np.exp(-x))


def sigmoid_deriv(y: Array) -> Array:
    """Derivative of the sigmoid expressed through its output ``y``."""

    return y * (1.0 - y)


def relu(x: Array) -> Array:
    """Return the ReLU activation."""

    return np.maximum(x, 0.0)


def relu_deriv(x: Array) -> Array:
    return (x > 0).astype(np.float64)


__all__ = ["tanh", "tanh_deriv", "sigmoid", "sigmoid_deriv", "relu", "relu_deriv"]
