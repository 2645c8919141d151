"""Ordered layer stack with an explicit forward-input cache."""

from __future__ import annotations

from typing import Iterable, Iterator, List, Mapping, Sequence, Tuple

from .errors import NetworkStateError, ShapeMismatch
from .layers import Dense, Layer
from .types import Array, Vector, as_vector


class Network:
    """Feed-forward composition of layers.

    The layer sequence is fixed at construction. :meth:`forward` fills the
    cache of per-layer inputs and :meth:`backward` consumes it, so every
    backward pass pairs with exactly one preceding forward pass.
    """

    def __init__(self, layers: Iterable[Layer]) -> None:
        stack: Tuple[Layer, ...] = tuple(layers)
        if not stack:
            raise ShapeMismatch("Network requires at least one layer")
        for idx, layer in enumerate(stack):
            if not isinstance(layer, Layer):
                raise TypeError(
                    f"Layer {idx} ({type(layer).__name__}) does not implement "
                    "output/input_gradient/update"
                )
        for idx, (prev, nxt) in enumerate(zip(stack[:-1], stack[1:])):
            if prev.output_width != nxt.input_width:
                raise ShapeMismatch(
                    f"Layer {idx} outputs {prev.output_width} values but layer "
                    f"{idx + 1} expects {nxt.input_width}"
                )
        self._layers = stack
        self._cache: List[Vector] | None = None

    @property
    def layers(self) -> Tuple[Layer, ...]:
        return self._layers

    @property
    def input_width(self) -> int:
        return self._layers[0].input_width

    @property
    def output_width(self) -> int:
        return self._layers[-1].output_width

    def __len__(self) -> int:
        return len(self._layers)

    def __iter__(self) -> Iterator[Layer]:
        return iter(self._layers)

    def forward(self, inputs: Vector) -> Vector:
        """Run every layer in order, caching each layer's input for backward."""

        x = as_vector(inputs, self.input_width, name="Network input")
        cache: List[Vector] = []
        for layer in self._layers:
            cache.append(x)
            x = layer.output(x)
        self._cache = cache
        return x

    def output(self, inputs: Vector) -> Vector:
        """Inference-only pass; the forward cache is left untouched."""

        x = as_vector(inputs, self.input_width, name="Network input")
        for layer in self._layers:
            x = layer.output(x)
        return x

    def predict(self, inputs: Sequence[Vector]) -> List[Vector]:
        return [self.output(x) for x in inputs]

    def backward(self, output_gradient: Vector, learning_rate: float) -> None:
        """Propagate ``output_gradient`` in reverse, updating each layer.

        Each layer is updated first, then asked for the gradient handed to
        the layer before it. The gradient leaving the first layer is dropped.
        """

        if self._cache is None:
            raise NetworkStateError("backward() called without a preceding forward()")
        grad = as_vector(output_gradient, self.output_width, name="Output gradient")
        cache, self._cache = self._cache, None
        for layer, inputs in zip(reversed(self._layers), reversed(cache)):
            layer.update(inputs, grad, learning_rate)
            grad = layer.input_gradient(inputs, grad)

    def state_dict(self) -> Mapping[str, Array]:
        state: dict[str, Array] = {}
        for idx, layer in enumerate(self._layers):
            if isinstance(layer, Dense):
                state[f"{idx}.weights"] = layer.weights
                state[f"{idx}.bias"] = layer.bias
        return state

    def parameter_count(self) -> int:
        return int(sum(getattr(layer, "parameter_count", lambda: 0)() for layer in self._layers))

    def __repr__(self) -> str:
        inner = ", ".join(repr(layer) for layer in self._layers)
        return f"Network([{inner}])"


__all__ = ["Network"]
