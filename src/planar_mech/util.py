# MIT License (see LICENSE)
"""
Small numeric helpers shared by the geometry and kinematics modules.

Includes array conversion, the tolerance configuration hook, and a few
matrix utilities (identity, SVD orthogonalization, saturation).
"""
from __future__ import annotations
import os

import numpy as np

from .constants import DEFAULT_ATOL, DEFAULT_RTOL


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Accepts tuples, lists, numpy arrays and the package's value types
    (which implement ``__array__``).
    """
    return np.array(x, dtype=np.float64)


def tolerances() -> tuple[float, float]:
    """
    Return the (rtol, atol) pair used for approximate comparisons.

    Overridable through the PLANAR_MECH_RTOL / PLANAR_MECH_ATOL environment
    variables, e.g. when working with poorly conditioned input matrices.
    """
    rtol = float(os.environ.get("PLANAR_MECH_RTOL", DEFAULT_RTOL))
    atol = float(os.environ.get("PLANAR_MECH_ATOL", DEFAULT_ATOL))
    return rtol, atol


def approx_equal(a, b) -> bool:
    """Element-wise approximate equality using the configured tolerances."""
    rtol, atol = tolerances()
    return bool(np.allclose(a, b, rtol=rtol, atol=atol))


def eye(n: int) -> np.ndarray:
    """An n×n float64 identity matrix."""
    return np.eye(n, dtype=np.float64)


def orthogonalize(X: np.ndarray) -> np.ndarray:
    """
    Return the orthogonal matrix closest to X (Frobenius norm).

    Computed from the SVD X = U Σ Vᵗ as U Vᵗ. Useful to re-project a rotation
    block that has drifted after many compositions. Empty input is returned
    as an empty array of the same shape.
    """
    X = f64(X)
    if X.size == 0:
        return np.empty_like(X)
    U, _, Vt = np.linalg.svd(X)
    return U @ Vt


def sat(x: float, lims: tuple[float, float]) -> float:
    """Clamp x to the closed interval [lims[0], lims[1]]."""
    lo, hi = lims
    if x < lo:
        return lo
    if x > hi:
        return hi
    return x
