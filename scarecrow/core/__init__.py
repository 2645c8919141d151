"""Core numerical primitives for scarecrow."""

from . import activations, errors, layers, network, types

__all__ = ["activations", "errors", "layers", "network", "types"]
