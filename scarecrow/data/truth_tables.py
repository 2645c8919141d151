"""Two-input boolean truth tables."""

from __future__ import annotations

import itertools
from typing import Callable

from ..core.types import TrainingSet
from .registry import DatasetSpec, register_dataset


def truth_table(name: str, gate: Callable[[int, int], int]) -> DatasetSpec:
    """Enumerate ``(0,0), (0,1), (1,0), (1,1)`` with targets ``gate(a, b)``."""

    rows = list(itertools.product((0, 1), repeat=2))
    inputs = [[float(a), float(b)] for a, b in rows]
    targets = [[float(gate(a, b))] for a, b in rows]
    return DatasetSpec(
        name=name,
        training_set=TrainingSet(inputs=inputs, targets=targets),
        provenance={"type": "truth_table", "gate": name, "rows": len(rows)},
    )


@register_dataset("xor")
def make_xor(**_: object) -> DatasetSpec:
    return truth_table("xor", lambda a, b: a ^ b)


@register_dataset("and")
def make_and(**_: object) -> DatasetSpec:
    return truth_table("and", lambda a, b: a & b)


@register_dataset("or")
def make_or(**_: object) -> DatasetSpec:
    return truth_table("or", lambda a, b: a | b)


__all__ = ["truth_table", "make_xor", "make_and", "make_or"]
