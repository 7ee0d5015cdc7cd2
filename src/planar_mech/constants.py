# MIT License (see LICENSE)
"""
Numeric and physical defaults used throughout the package.

Tolerances follow the usual "approximately equal" convention for float64:
a relative tolerance of sqrt(machine epsilon) and a small absolute floor so
that entries expected to be exactly zero (the bottom row of a homogeneous
matrix, off-diagonal terms of R^T R) still compare as equal.
"""
from __future__ import annotations

import numpy as np

# Relative tolerance for group-membership and round-trip checks.
DEFAULT_RTOL: float = float(np.sqrt(np.finfo(np.float64).eps))

# Absolute tolerance floor for entries that should be zero.
DEFAULT_ATOL: float = 1e-9

# Standard gravitational acceleration magnitude [m/s²].
STANDARD_GRAVITY: float = 9.81

# Angular step used to approximate a circle by a polygon [rad].
CIRCLE_VERTEX_STEP: float = np.pi / 8
