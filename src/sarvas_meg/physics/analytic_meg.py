"""
Analytic MEG Module - Sarvas Forward Solution for Spherical Conductors

Computes the magnetic field of a point current dipole inside a spherically
symmetric, piecewise isotropic volume conductor, observed at an external
sensor (coil) location.

Mathematical Foundation
-----------------------
Sarvas, J. (1987). Basic mathematical and electromagnetic concepts of the
biomagnetic inverse problem. Phys. Med. Biol. 32(1), section 4.

With all positions taken relative to the sphere center:

    R  = coil position,   R0 = dipole position,   m = dipole moment
    A  = R - R0,          r = |R|,                a = |A|

    F      = a * (r*a + r^2 - R0.R)
    grad_F = (a^2/r + A.R/a + 2*(a + r)) * R - (a + 2*r + A.R/a) * R0

    B_total   = s * (F * (m x R0) - ((m x R0).R) * grad_F) / F^2
    B_primary = s * m x (R - R0) / |R - R0|^3

where s is the caller-supplied scaling factor. The secondary field is
reported as B_primary - B_total.

Unit Convention
---------------
The formula is unit agnostic. Passing ``scaling_factor=MU0_OVER_4PI_T_M_A``
with positions in m and moments in A*m yields fields in Tesla.

Singularity Handling
--------------------
F vanishes on the segment joining the sphere center and the dipole, and the
primary field diverges at the dipole position. Both raise
``FieldSingularityError`` instead of returning inf/NaN.

Thread Safety
-------------
Queries do not mutate the solver and may run concurrently once ``bind()`` has
returned. ``bind()`` replaces the bound state in a single assignment, but a
query racing a bind may see either dipole; callers sharing one solver across
threads must serialize binds against queries.
"""

from __future__ import annotations

import logging
from typing import Any, Sequence

import numpy as np

from sarvas_meg.exceptions import DipoleNotBoundError, FieldSingularityError

from .constants import (
    DEFAULT_SCALING_FACTOR,
    DEFAULT_SPHERE_CENTER_M,
    FIELD_DTYPE,
    SINGULARITY_RTOL,
)
from .coordinates import as_coordinate
from .dipole import Dipole

logger = logging.getLogger(__name__)

ArrayLike3 = Sequence[float] | np.ndarray


class AnalyticSolutionMEG:
    """
    Sarvas MEG forward solver for a single sphere configuration.

    The sphere center and scaling factor are fixed at construction. A dipole
    must be bound with ``bind()`` before any field is evaluated; binding a new
    dipole replaces the previous one entirely.

    Parameters
    ----------
    sphere_center : array_like
        Center of the conducting sphere, shape (3,), in the same frame as
        all dipoles and coil positions.
    scaling_factor : float, optional
        Gain applied to every field output (unit conversion or calibration).
        Default is 1.0.
    singularity_rtol : float, optional
        Relative threshold on F used to detect the singular locus of the
        total field. Default is 1e-12.

    Examples
    --------
    >>> solver = AnalyticSolutionMEG([0.0, 0.0, 0.0])
    >>> solver.bind(Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0]))
    >>> B = solver.total_field([0.0, 0.1, 0.0])
    >>> B.shape
    (3,)
    >>> Bz = solver.total_field([0.0, 0.1, 0.0], direction=[0.0, 0.0, 1.0])
    >>> bool(Bz < 0)
    True
    """

    # Precision is a type-level choice; subclass to change it
    dtype = FIELD_DTYPE

    def __init__(
        self,
        sphere_center: ArrayLike3 = DEFAULT_SPHERE_CENTER_M,
        scaling_factor: float = DEFAULT_SCALING_FACTOR,
        singularity_rtol: float = SINGULARITY_RTOL,
    ) -> None:
        scaling_factor = float(scaling_factor)
        if not np.isfinite(scaling_factor):
            raise ValueError(f"scaling_factor must be finite, got {scaling_factor}")
        if not singularity_rtol >= 0:
            raise ValueError(f"singularity_rtol must be >= 0, got {singularity_rtol}")

        self._sphere_center = as_coordinate(sphere_center, "sphere_center", self.dtype)
        self._scaling_factor = scaling_factor
        self._singularity_rtol = float(singularity_rtol)

        # (dipole, R0, moment); None until the first bind()
        self._bound: tuple[Dipole, np.ndarray, np.ndarray] | None = None

        logger.debug(
            "Created solver: center=%s, scaling_factor=%g",
            self._sphere_center.tolist(),
            self._scaling_factor,
        )

    @classmethod
    def from_config(cls, config: dict[str, Any]) -> "AnalyticSolutionMEG":
        """
        Build a solver from the ``solver`` section of a loaded configuration.

        Missing keys fall back to the package defaults.

        Raises
        ------
        ValueError
            If the ``solver`` section is present but is not a mapping.
        """
        section = config.get("solver") or {}
        if not isinstance(section, dict):
            raise ValueError(
                f"config section 'solver' must be a mapping, got {type(section).__name__}"
            )
        return cls(
            sphere_center=section.get("sphere_center_m", DEFAULT_SPHERE_CENTER_M),
            scaling_factor=section.get("scaling_factor", DEFAULT_SCALING_FACTOR),
            singularity_rtol=section.get("singularity_rtol", SINGULARITY_RTOL),
        )

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(sphere_center={self._sphere_center.tolist()}, "
            f"scaling_factor={self._scaling_factor!r}, dipole={self.dipole!r})"
        )

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def sphere_center(self) -> np.ndarray:
        return self._sphere_center

    @property
    def scaling_factor(self) -> float:
        return self._scaling_factor

    @property
    def singularity_rtol(self) -> float:
        return self._singularity_rtol

    @property
    def is_bound(self) -> bool:
        return self._bound is not None

    @property
    def dipole(self) -> Dipole | None:
        """The last bound dipole, or None."""
        return self._bound[0] if self._bound is not None else None

    def bind(self, dipole: Dipole) -> None:
        """
        Bind the dipole subsequent field queries are evaluated for.

        Stores the dipole position relative to the sphere center and a copy
        of its moment. Replaces any previously bound dipole.
        """
        if not isinstance(dipole, Dipole):
            raise TypeError(f"bind() expects a Dipole, got {type(dipole).__name__}")

        relative_position = dipole.position.astype(self.dtype) - self._sphere_center
        relative_position.setflags(write=False)
        moment = dipole.moment.astype(self.dtype)
        moment.setflags(write=False)

        self._bound = (dipole, relative_position, moment)
        logger.debug("Bound %r", dipole)

    def bind_arrays(self, position: ArrayLike3, moment: ArrayLike3) -> None:
        """Shorthand for ``bind(Dipole(position, moment))``."""
        self.bind(Dipole(position, moment))

    def _require_bound(self, operation: str) -> tuple[np.ndarray, np.ndarray]:
        bound = self._bound
        if bound is None:
            raise DipoleNotBoundError(operation)
        return bound[1], bound[2]

    def _project(
        self, field: np.ndarray, direction: ArrayLike3 | None
    ) -> np.ndarray | float:
        if direction is None:
            return field
        direction = as_coordinate(direction, "direction", self.dtype)
        return float(np.dot(field, direction))

    # -------------------------------------------------------------------------
    # Fields
    # -------------------------------------------------------------------------

    def total_field(
        self, point: ArrayLike3, direction: ArrayLike3 | None = None
    ) -> np.ndarray | float:
        """
        Total (primary + volume current) magnetic field at a coil position.

        Parameters
        ----------
        point : array_like
            Evaluation point, shape (3,).
        direction : array_like, optional
            If given, return the dot product of the field with this vector.
            It is not normalized; its length acts as a gain.

        Returns
        -------
        np.ndarray or float
            Field vector of shape (3,), or its projection onto ``direction``.

        Raises
        ------
        DipoleNotBoundError
            If no dipole has been bound.
        FieldSingularityError
            If the point lies on the segment between the sphere center and
            the dipole, where F = 0.
        """
        R0, moment = self._require_bound("total_field")
        point = as_coordinate(point, "point", self.dtype)

        R = point - self._sphere_center
        A = R - R0
        r = float(np.linalg.norm(R))
        a = float(np.linalg.norm(A))

        if r == 0.0:
            self._singular(point, "total", "point coincides with the sphere center")
        if a == 0.0:
            self._singular(point, "total", "point coincides with the dipole")

        R0_dot_R = float(np.dot(R0, R))
        F = a * (r * a + r * r - R0_dot_R)
        if abs(F) <= self._singularity_rtol * a * (r * a + r * r + abs(R0_dot_R)):
            self._singular(point, "total", f"F={F:.3e} vanishes")

        A_dot_R = float(np.dot(A, R))
        grad_F = (a * a / r + A_dot_R / a + 2 * (a + r)) * R - (
            a + 2 * r + A_dot_R / a
        ) * R0

        m_x_R0 = np.cross(moment, R0)
        field = (
            self._scaling_factor
            * (F * m_x_R0 - float(np.dot(m_x_R0, R)) * grad_F)
            / (F * F)
        )

        if not np.all(np.isfinite(field)):
            self._singular(point, "total", "result is not finite")
        return self._project(field, direction)

    def primary_field(
        self, point: ArrayLike3, direction: ArrayLike3 | None = None
    ) -> np.ndarray | float:
        """
        Free-space magnetic field of the dipole at a coil position.

        Independent of the sphere center once positions are fixed in the
        absolute frame.

        Raises
        ------
        DipoleNotBoundError
            If no dipole has been bound.
        FieldSingularityError
            If the point coincides with the dipole position.
        """
        R0, moment = self._require_bound("primary_field")
        point = as_coordinate(point, "point", self.dtype)

        diff = (point - self._sphere_center) - R0
        diff_norm = float(np.linalg.norm(diff))
        if diff_norm == 0.0:
            self._singular(point, "primary", "point coincides with the dipole")

        field = self._scaling_factor * np.cross(moment, diff / diff_norm**3)

        if not np.all(np.isfinite(field)):
            self._singular(point, "primary", "result is not finite")
        return self._project(field, direction)

    def secondary_field(
        self, point: ArrayLike3, direction: ArrayLike3 | None = None
    ) -> np.ndarray | float:
        """
        Volume current contribution, reported as ``primary - total``.

        Note the sign: this is the negative of the "total - primary"
        convention common in the MEG literature. It is kept so that outputs
        match existing consumers of this solver.
        """
        if direction is None:
            return self.primary_field(point) - self.total_field(point)
        return self.primary_field(point, direction) - self.total_field(point, direction)

    def _singular(self, point: np.ndarray, field: str, reason: str) -> None:
        logger.debug("Singular %s field at %s: %s", field, point.tolist(), reason)
        raise FieldSingularityError(point, field, reason)
