# MIT License (see LICENSE)
"""
Exception types raised by the kinematics core.

Two kinds are enough for the whole package:
    - InvalidArgument: malformed input detected at construction or call time
      (bad dimensions, non-group-member matrices, duplicate ids, broken tree
      invariants, wrong-length coordinate vectors).
    - NotFound: lookup of an id (or parent/child edge) that is not registered.

Both derive from builtin exceptions so existing ``except ValueError`` or
``except LookupError`` handlers keep working.
"""
from __future__ import annotations


class KinematicsError(Exception):
    """Base class for every error raised by planar_mech."""


class InvalidArgument(KinematicsError, ValueError):
    """An argument violates a construction rule or a structural invariant."""


class NotFound(KinematicsError, LookupError):
    """A body, joint, mechanism or joint link does not exist."""
