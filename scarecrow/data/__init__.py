"""Training-set registry for scarecrow."""

from . import truth_tables  # noqa: F401 - registers the built-in gates
from .registry import DatasetSpec, available_datasets, get_dataset, register_dataset

__all__ = ["DatasetSpec", "available_datasets", "get_dataset", "register_dataset"]
