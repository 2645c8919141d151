"""Training loops, losses and config-driven pipelines."""

from .losses import REGISTRY as LOSSES
from .trainer import SGDTrainer

__all__ = ["LOSSES", "SGDTrainer"]
