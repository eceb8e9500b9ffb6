"""
Dipole Module - Point Current Dipole Records

A Dipole is an immutable (position, moment) pair. The alternate constructors
normalize the raw layouts callers tend to hold (flat 6-vectors, paired arrays,
nested lists) into the canonical record before it reaches the solver. All
shape and type validation happens here, never in the solver.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from .coordinates import as_coordinate


@dataclass(frozen=True, eq=False)
class Dipole:
    """
    Point current dipole.

    Attributes
    ----------
    position : np.ndarray
        Dipole location, shape (3,), read-only.
    moment : np.ndarray
        Dipole moment, shape (3,), read-only.

    Examples
    --------
    >>> d = Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0])
    >>> d.position.tolist()
    [0.0, 0.0, 0.07]
    >>> Dipole.from_array([0, 0, 0.07, 1, 0, 0]) == d
    True
    """

    position: np.ndarray
    moment: np.ndarray

    def __post_init__(self) -> None:
        # frozen dataclass: bypass __setattr__ to store the normalized copies
        object.__setattr__(self, "position", as_coordinate(self.position, "position"))
        object.__setattr__(self, "moment", as_coordinate(self.moment, "moment"))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Dipole):
            return NotImplemented
        return bool(
            np.array_equal(self.position, other.position)
            and np.array_equal(self.moment, other.moment)
        )

    def __hash__(self) -> int:
        return hash((tuple(self.position.tolist()), tuple(self.moment.tolist())))

    def __repr__(self) -> str:
        return f"Dipole(position={self.position.tolist()}, moment={self.moment.tolist()})"

    @classmethod
    def from_array(cls, values: Sequence[float] | np.ndarray) -> "Dipole":
        """
        Build a dipole from a flat ``[px, py, pz, mx, my, mz]`` vector.

        Raises
        ------
        ValueError
            If ``values`` does not hold exactly six entries.
        """
        flat = np.asarray(values)
        if flat.shape != (6,):
            raise ValueError(f"dipole array must have shape (6,), got {flat.shape}")
        return cls(flat[:3], flat[3:])

    @classmethod
    def from_arrays(
        cls,
        position: Sequence[float] | np.ndarray,
        moment: Sequence[float] | np.ndarray,
    ) -> "Dipole":
        """Build a dipole from separate position and moment 3-vectors."""
        return cls(position, moment)

    @classmethod
    def from_list(cls, values: Sequence[Sequence[float]]) -> "Dipole":
        """Build a dipole from a nested ``[[px, py, pz], [mx, my, mz]]`` list."""
        if len(values) != 2:
            raise ValueError(
                f"dipole list must hold [position, moment], got {len(values)} entries"
            )
        return cls(values[0], values[1])

    def to_array(self) -> np.ndarray:
        """Return the flat ``[px, py, pz, mx, my, mz]`` representation."""
        return np.concatenate([self.position, self.moment])
