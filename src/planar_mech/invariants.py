# MIT License (see LICENSE)
"""
System-level mechanical quantities for collections of bodies.

Used for checking poses and state produced by forward kinematics. All
functions are pure reads and accept any iterable of bodies:

    T = Σ (½ m |v|² + ½ I ω²)
    V = Σ m g y
    P = Σ m v
"""
from __future__ import annotations
from typing import Iterable

import numpy as np

from .body import RigidBody
from .constants import STANDARD_GRAVITY


def kinetic_energy(bodies: Iterable[RigidBody]) -> float:
    """
    Total kinetic energy of a system of bodies.

    Args:
        bodies: Rigid bodies.

    Returns:
        Kinetic energy in Joules.
    """
    return float(sum(b.kinetic_energy() for b in bodies))


def potential_energy(bodies: Iterable[RigidBody], g: float = STANDARD_GRAVITY) -> float:
    """Total gravitational potential energy, increasing with height."""
    return float(sum(b.potential_energy(g) for b in bodies))


def total_energy(bodies: Iterable[RigidBody], g: float = STANDARD_GRAVITY) -> float:
    """Kinetic plus potential energy."""
    return float(sum(b.energy(g) for b in bodies))


def linear_momentum(bodies: Iterable[RigidBody]) -> np.ndarray:
    """
    Total linear momentum P = Σ m v.

    Returns:
        Momentum vector [Px, Py] in kg·m/s.
    """
    p = np.zeros(2, dtype=np.float64)
    for b in bodies:
        p += b.mass * b.velocity.linear.to_array()
    return p
