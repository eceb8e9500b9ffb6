"""
Physical Constants for Sarvas MEG Forward Solutions

All constants include units in their names where a unit applies.
"""

from __future__ import annotations

import numpy as np

# Electromagnetic Constants
VACUUM_PERMEABILITY_H_M: float = 1.25663706212e-6  # H/m (henries per meter)

# mu_0 / (4 * pi). Passing this as the scaling factor turns the bare Sarvas
# expression into Tesla for positions in m and moments in A*m.
MU0_OVER_4PI_T_M_A: float = 1e-7

# =============================================================================
# Solver Defaults
# =============================================================================

DEFAULT_SCALING_FACTOR: float = 1.0
DEFAULT_SPHERE_CENTER_M: tuple[float, float, float] = (0.0, 0.0, 0.0)

# Relative threshold on the Sarvas auxiliary quantity F below which the
# evaluation point is treated as lying on the singular locus
SINGULARITY_RTOL: float = 1e-12

# Floating point type used for every coordinate and field vector
FIELD_DTYPE = np.float64
