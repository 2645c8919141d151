"""scarecrow public API."""

from .core import activations  # noqa: F401
from .core.errors import InvalidConfiguration, NetworkStateError, ShapeMismatch
from .core.layers import Dense, Hyperbolic, Layer, Rectified, Sigmoid, build_layer
from .core.network import Network
from .core.types import RunResult, TrainingSet
from .training.pipelines import load_preset, presets, run_pipeline
from .training.trainer import SGDTrainer

__all__ = [
    "Dense",
    "Hyperbolic",
    "InvalidConfiguration",
    "Layer",
    "Network",
    "NetworkStateError",
    "Rectified",
    "RunResult",
    "SGDTrainer",
    "ShapeMismatch",
    "Sigmoid",
    "TrainingSet",
    "activations",
    "build_layer",
    "load_preset",
    "presets",
    "run_pipeline",
]
