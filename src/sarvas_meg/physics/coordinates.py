"""
Coordinate Module - Fixed-Size 3-Vectors for Field Computations

A Coordinate is a float64 numpy array of shape (3,) with its writeable flag
cleared. It stands for a spatial position (m) or a vector quantity (dipole
moment, magnetic field). No unit system is enforced; callers keep units
consistent.

Value Semantics
---------------
``as_coordinate`` always returns a fresh, read-only copy. Arrays stored on a
solver or a dipole therefore cannot be changed through a reference held by the
caller, and arrays handed back to the caller cannot change solver state.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

from .constants import FIELD_DTYPE


def as_coordinate(
    values: Sequence[float] | np.ndarray,
    name: str = "coordinate",
    dtype: type = FIELD_DTYPE,
) -> np.ndarray:
    """
    Normalize a length-3 sequence into a read-only Coordinate.

    Parameters
    ----------
    values : array_like
        Three real numbers (list, tuple or array of shape (3,)).
    name : str, optional
        Name used in error messages.
    dtype : numpy dtype, optional
        Floating point type of the result. Default is float64.

    Returns
    -------
    np.ndarray
        Read-only copy with shape (3,).

    Raises
    ------
    TypeError
        If the entries are not real numbers.
    ValueError
        If the input does not hold exactly three entries, or holds
        non-finite entries.

    Examples
    --------
    >>> c = as_coordinate([0.0, 0.0, 0.07])
    >>> c.shape
    (3,)
    >>> c.flags.writeable
    False
    """
    try:
        raw = np.asarray(values)
    except ValueError as e:
        raise ValueError(f"{name} must have shape (3,), got ragged input {values!r}") from e

    # strings, bools and objects would otherwise be coerced by the float cast
    if raw.dtype.kind not in "iuf":
        raise TypeError(
            f"{name} must contain real numbers, got dtype {raw.dtype} from {values!r}"
        )

    coord = np.array(raw, dtype=dtype, copy=True)

    if coord.shape != (3,):
        raise ValueError(f"{name} must have shape (3,), got {coord.shape}")
    if not np.all(np.isfinite(coord)):
        raise ValueError(f"{name} must be finite, got {coord.tolist()}")

    coord.setflags(write=False)
    return coord

