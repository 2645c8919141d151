"""Exception types raised by the scarecrow engine."""

from __future__ import annotations


class ShapeMismatch(ValueError):
    """A vector or layer width does not match what the receiver expects."""


class InvalidConfiguration(ValueError):
    """A trainer or pipeline was configured with unusable values."""


class NetworkStateError(RuntimeError):
    """``backward`` was called without a matching ``forward`` pass."""


__all__ = ["ShapeMismatch", "InvalidConfiguration", "NetworkStateError"]
