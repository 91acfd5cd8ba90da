"""Common type helpers for dynwarp.

This module defines the small enumerations exchanged between the warping
routines and the exception raised when a caller breaks an input contract.
"""

from __future__ import annotations

from enum import Enum
from numbers import Integral
from typing import Any


class ContractViolation(ValueError):
    """Raised when inputs to a warping routine are inconsistent."""


class Norm(str, Enum):
    """Norm used to measure the pointwise mismatch between samples."""

    L2 = "L2"
    L1 = "L1"

    @classmethod
    def coerce(cls, value: Any) -> "Norm":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().upper())
            except ValueError:
                pass
        raise ContractViolation(f"norm type is not defined: {value!r}")


class Direction(str, Enum):
    """Direction of error accumulation.

    ``SYMMETRIC`` accumulates in both directions and combines the two
    distance surfaces to smooth the result.
    """

    FORWARD = "forward"
    BACKWARD = "backward"
    SYMMETRIC = "symmetric"

    @classmethod
    def coerce(cls, value: Any) -> "Direction":
        """Return the direction for ``value``.

        Besides enum members and their names, the integers ``1``, ``-1`` and
        ``0`` are accepted for forward, backward and symmetric accumulation.
        """

        if isinstance(value, cls):
            return value
        if isinstance(value, bool):
            raise ContractViolation(f"direction must be forward, backward or symmetric, got {value!r}")
        if isinstance(value, Integral):
            legacy = {1: cls.FORWARD, -1: cls.BACKWARD, 0: cls.SYMMETRIC}
            if int(value) in legacy:
                return legacy[int(value)]
        if isinstance(value, str):
            key = value.strip().lower()
            if key in {"1", "+1", "-1", "0"}:
                return cls.coerce(int(key))
            try:
                return cls(key)
            except ValueError:
                pass
        raise ContractViolation(f"direction must be forward, backward or symmetric, got {value!r}")

    @property
    def step(self) -> int:
        """Time step of a single directional sweep (``+1`` or ``-1``)."""

        if self is Direction.SYMMETRIC:
            raise ContractViolation("symmetric accumulation has no single time step")
        return 1 if self is Direction.FORWARD else -1


__all__ = ["ContractViolation", "Norm", "Direction"]
