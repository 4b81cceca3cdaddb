"""Decompose a pCDM orientation into the strike and dip of its three PTDs.

A pCDM is three mutually orthogonal point tensile dislocations that are
rotated as a rigid unit. Before rotation, the dislocations are normal to
the x, y and z axes. After rotation, the normal of the i-th dislocation
is the i-th column of the rotation matrix, from which the strike and dip
of that dislocation's plane follow.
"""

from typing import NamedTuple

import numpy as np
import numpy.typing as npt
import scipy as sp


class PlaneOrientation(NamedTuple):
    """Orientation of a single point tensile dislocation plane."""

    strike: float
    """The strike of the plane (degrees)."""
    dip: float
    """The dip of the plane (radians)."""


def rotation_matrix(rotation: npt.ArrayLike) -> np.ndarray:
    """Build the rotation matrix for clockwise rotations about the x, y and z axes.

    Parameters
    ----------
    rotation : array-like
        Clockwise rotations about the x, y and z axes (degrees).

    Returns
    -------
    np.ndarray
        The (3 x 3) matrix R = Rz(-wz) Ry(-wy) Rx(-wx), where each factor
        is a right-handed rotation about the named axis. The angles are
        negated because the rotations are clockwise.
    """
    omega_x, omega_y, omega_z = np.radians(np.asarray(rotation, dtype=np.float64))
    Rotation = sp.spatial.transform.Rotation
    composed = (
        Rotation.from_euler("z", -omega_z)
        * Rotation.from_euler("y", -omega_y)
        * Rotation.from_euler("x", -omega_x)
    )
    return composed.as_matrix()


def axis_orientation(normal: npt.ArrayLike) -> PlaneOrientation:
    """Compute the strike and dip of a plane from a rotated axis.

    Parameters
    ----------
    normal : array-like
        A column of the rotation matrix, i.e. the rotated axis that the
        dislocation is normal to.

    Returns
    -------
    PlaneOrientation
        The strike (degrees) and dip (radians). If the axis is vertical,
        the strike is undefined and 0 is returned.
    """
    normal = np.asarray(normal, dtype=np.float64)
    # (-R[1, i], R[0, i]) is the horizontal strike direction of the plane.
    if np.hypot(normal[0], normal[1]) == 0:
        strike = 0.0
    else:
        strike = float(np.degrees(np.arctan2(-normal[1], normal[0])))
    dip = float(np.arccos(np.clip(normal[2], -1.0, 1.0)))
    return PlaneOrientation(strike, dip)


def pcdm_plane_orientations(
    rotation: npt.ArrayLike,
) -> tuple[PlaneOrientation, PlaneOrientation, PlaneOrientation]:
    """Compute the strike and dip of the three dislocations of a pCDM.

    Parameters
    ----------
    rotation : array-like
        Clockwise rotations about the x, y and z axes (degrees).

    Returns
    -------
    tuple[PlaneOrientation, PlaneOrientation, PlaneOrientation]
        The orientation of the dislocations initially normal to the x, y
        and z axes respectively.
    """
    matrix = rotation_matrix(rotation)
    return tuple(axis_orientation(matrix[:, axis]) for axis in range(3))
