"""Observation grids for evaluating surface displacements."""

import numpy as np


def axis_values(minimum: float, step: float, maximum: float) -> np.ndarray:
    """Evenly spaced values from `minimum` to `maximum` inclusive.

    Parameters
    ----------
    minimum : float
        The first value.
    step : float
        The spacing between values. Must be positive.
    maximum : float
        The last value. It is included if it lies within 1e-4 steps of
        a grid value.

    Returns
    -------
    np.ndarray
        The values `minimum + i * step` that do not exceed `maximum`.

    Raises
    ------
    ValueError
        If `step` is not positive.
    """
    if not step > 0:
        raise ValueError(f"Grid step must be positive, got {step}.")
    count = int(np.floor((maximum - minimum + step * 1e-4) / step)) + 1
    # Multiplying instead of accumulating avoids drift in the last values.
    return minimum + np.arange(max(count, 0)) * step


def regular_grid(
    x_min: float,
    x_step: float,
    x_max: float,
    y_min: float,
    y_step: float,
    y_max: float,
) -> tuple[np.ndarray, np.ndarray]:
    """Build the observation coordinates of a regular grid.

    Points are ordered with x varying slowest, so point `i * ny + j`
    has coordinates (x[i], y[j]).

    Parameters
    ----------
    x_min : float
        The smallest x value.
    x_step : float
        Spacing in the x direction.
    x_max : float
        The largest x value.
    y_min : float
        The smallest y value.
    y_step : float
        Spacing in the y direction.
    y_max : float
        The largest y value.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The x and y coordinates of every grid point.
    """
    x_values = axis_values(x_min, x_step, x_max)
    y_values = axis_values(y_min, y_step, y_max)
    x, y = np.meshgrid(x_values, y_values, indexing="ij")
    return x.ravel(), y.ravel()
