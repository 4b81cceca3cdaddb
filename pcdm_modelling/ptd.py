"""Surface displacement of a point tensile dislocation (PTD) in an elastic half-space.

References
----------
.. [0] Okada, Y. (1985). Surface deformation due to shear and tensile
       faults in a half-space. Bulletin of the Seismological Society of
       America, 75(4), 1135-1154.
.. [1] Nikkhoo, M., Walter, T. R., Lundgren, P. R., & Prats-Iraola, P.
       (2017). Compound dislocation models (CDMs) for volcano deformation
       analyses. Geophysical Journal International, 208(2), 877-894.
"""

import numpy as np
import numpy.typing as npt


def strike_rotation_matrix(strike: float) -> np.ndarray:
    """Build the 2D rotation aligning the strike frame with the coordinate axes.

    Parameters
    ----------
    strike : float
        The strike of the dislocation plane (degrees).

    Returns
    -------
    np.ndarray
        A (2 x 2) rotation matrix by beta = strike - 90 degrees.
    """
    beta = np.radians(strike - 90)
    return np.array(
        [
            [np.cos(beta), -np.sin(beta)],
            [np.sin(beta), np.cos(beta)],
        ]
    )


def ptd_surface_displacement(
    x: npt.ArrayLike,
    y: npt.ArrayLike,
    xy0: npt.ArrayLike,
    depth: float,
    strike: float,
    dip: float,
    potency: float,
    nu: float,
) -> npt.NDArray[np.float64]:
    """Compute surface displacements for a point tensile dislocation [0]_.

    Parameters
    ----------
    x : array-like
        Easting of the observation points.
    y : array-like
        Northing of the observation points. Must have the same length
        as `x`.
    xy0 : array-like
        Easting and northing of the dislocation.
    depth : float
        Depth of the dislocation (positive down).
    strike : float
        Strike of the dislocation plane (degrees).
    dip : float
        Dip of the dislocation plane (radians).
    potency : float
        Potency of the dislocation (length^3). For a PTD the seismic
        moment is potency times the shear modulus.
    nu : float
        Poisson's ratio of the half-space.

    Returns
    -------
    np.ndarray
        A (3 x n) array with the east, north and vertical displacement
        of each observation point, in the unit of the coordinates.

    Notes
    -----
    Inputs are not validated. An observation point coinciding with a
    source at zero depth is a singularity of the solution and yields
    non-finite displacements for that point only.

    References
    ----------
    .. [0] Okada, Y. (1985). Surface deformation due to shear and
           tensile faults in a half-space. Bulletin of the
           Seismological Society of America, 75(4), 1135-1154.
    """
    xy = np.vstack(
        [np.asarray(x, dtype=np.float64), np.asarray(y, dtype=np.float64)]
    ) - np.asarray(xy0, dtype=np.float64).reshape(2, 1)

    rotation = strike_rotation_matrix(strike)
    ax, ay = rotation @ xy

    d = depth
    ax_sq = ax**2
    ay_sq = ay**2
    sin_dip = np.sin(dip)
    sin_dip_sq = sin_dip**2
    nu_scaled = 1 - 2 * nu

    # Singular points are allowed to produce nan or inf.
    with np.errstate(divide="ignore", invalid="ignore"):
        r = np.sqrt(ax_sq + ay_sq + d**2)
        q = ay * sin_dip - d * np.cos(dip)

        r_cb = r**3
        rd = r + d
        rd_sq = rd**2
        rd_cb = rd**3

        i1 = nu_scaled * ay * (1 / r / rd_sq - ax_sq * (3 * r + d) / r_cb / rd_cb)
        i2 = nu_scaled * ax * (1 / r / rd_sq - ay_sq * (3 * r + d) / r_cb / rd_cb)
        i3 = nu_scaled * ax / r_cb - i2
        i5 = nu_scaled * (1 / r / rd - ax_sq * (2 * r + d) / r_cb / rd_sq)

        q_term = 3 * q**2 / r**5
        scale = potency / 2 / np.pi

        ue_rotated = scale * (ax * q_term - i3 * sin_dip_sq)
        un_rotated = scale * (ay * q_term - i1 * sin_dip_sq)
        uv = scale * (d * q_term - i5 * sin_dip_sq)

        ue, un = rotation.T @ np.vstack([ue_rotated, un_rotated])
    return np.vstack([ue, un, uv])
