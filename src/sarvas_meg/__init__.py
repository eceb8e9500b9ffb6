"""
Sarvas MEG - Analytic MEG Forward Solution in Spherical Conductors

This package contains:
- Physics: the Sarvas closed-form solver, dipole records and 3-vector helpers
- Validation: configuration and sensor placement checks
- Config: YAML configuration loading

Usage:
    # After installing with: pip install -e .
    from sarvas_meg import AnalyticSolutionMEG, Dipole

    solver = AnalyticSolutionMEG(sphere_center=[0.0, 0.0, 0.0])
    solver.bind(Dipole([0.0, 0.0, 0.07], [1.0, 0.0, 0.0]))
    B = solver.total_field([0.0, 0.1, 0.0])
"""

from sarvas_meg.exceptions import (
    DipoleNotBoundError,
    FieldSingularityError,
    MEGSolverError,
)
from sarvas_meg.physics.analytic_meg import AnalyticSolutionMEG
from sarvas_meg.physics.dipole import Dipole

__version__ = "0.1.0"
__all__ = [
    "AnalyticSolutionMEG",
    "Dipole",
    "MEGSolverError",
    "DipoleNotBoundError",
    "FieldSingularityError",
]
