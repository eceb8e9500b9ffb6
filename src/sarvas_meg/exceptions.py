"""
Exceptions raised by the Sarvas MEG solver.

Malformed inputs (wrong shape, non-numeric or non-finite entries) are
reported by the coordinate layer as plain ``ValueError``/``TypeError``.
"""

from __future__ import annotations

import numpy as np


class MEGSolverError(Exception):
    """Base class for solver errors."""


class DipoleNotBoundError(MEGSolverError, RuntimeError):
    """A field was requested before any dipole was bound to the solver."""

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__(
            f"{operation}() called before bind(); bind a dipole first"
        )


class FieldSingularityError(MEGSolverError, ArithmeticError):
    """
    The evaluation point lies on a singular locus of the closed-form field.

    Attributes
    ----------
    point : np.ndarray
        The offending evaluation point, shape (3,).
    field : str
        Which field was being evaluated ("total" or "primary").
    """

    def __init__(self, point: np.ndarray, field: str, reason: str) -> None:
        self.point = np.array(point, copy=True)
        self.field = field
        self.reason = reason
        super().__init__(
            f"{field} field is singular at {self.point.tolist()}: {reason}"
        )
