"""Dataset registry and metadata contracts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, MutableMapping

from ..core.errors import InvalidConfiguration
from ..core.types import TrainingSet


@dataclass(frozen=True)
class DatasetSpec:
    """Description of a dataset registered in the system.

    Attributes
    ----------
    name:
        Registry key the dataset was built from.
    training_set:
        The input/target pairs, in the order the trainer visits them.
    provenance:
        Free-form metadata recorded in run summaries.
    """

    name: str
    training_set: TrainingSet
    provenance: Dict[str, Any] = field(default_factory=dict)

    @property
    def d_in(self) -> int:
        return int(self.training_set.inputs[0].shape[0])

    @property
    def d_out(self) -> int:
        return int(self.training_set.targets[0].shape[0])


DatasetFactory = Callable[..., DatasetSpec]


_REGISTRY: MutableMapping[str, DatasetFactory] = {}


def register_dataset(
    name: str | None = None,
    factory: DatasetFactory | None = None,
) -> Callable[[DatasetFactory], DatasetFactory] | DatasetFactory:
    """Register a dataset factory.

    ``register_dataset`` can be used both as a decorator::

        @register_dataset("xor")
        def make_xor(**kwargs):
            ...

    or directly::

        register_dataset("xor", make_xor)
    """

    def _decorator(func: DatasetFactory) -> DatasetFactory:
        _REGISTRY[str(name or func.__name__)] = func
        return func

    if factory is not None:
        return _decorator(factory)
    if name is None:
        raise TypeError("register_dataset requires a name when used without a decorator")
    return _decorator


def get_dataset(name: str, **options: Any) -> DatasetSpec:
    """Return the :class:`DatasetSpec` for ``name``."""

    if name not in _REGISTRY:
        available = ", ".join(available_datasets())
        raise InvalidConfiguration(f"Unknown dataset {name!r}. Available datasets: {available}")
    spec = _REGISTRY[name](**options)
    if len(spec.training_set) == 0:
        raise InvalidConfiguration(f"Dataset {name!r} produced no samples")
    return spec


def available_datasets() -> Iterable[str]:
    """Return the sorted list of available dataset identifiers."""

    return sorted(_REGISTRY)


__all__ = [
    "DatasetSpec",
    "available_datasets",
    "get_dataset",
    "register_dataset",
]
