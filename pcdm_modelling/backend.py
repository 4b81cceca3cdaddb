"""Surface displacements of a point Compound Dislocation Model (pCDM).

A pCDM is composed of three mutually orthogonal point tensile
dislocations (PTDs) in an elastic half-space, rotated as a rigid unit.
The displacement at each observation point is the sum of the three PTD
contributions. The `PCDMBackend` class wraps this computation in a small
state machine that tracks whether stored results are valid for the
current inputs.

Based on the work and MATLAB scripts of Mehdi Nikkhoo [0]_.

Classes
-------
SolverState:
    The states of a `PCDMBackend`.

DisplacementField:
    East, north and vertical displacement of each observation point.

PCDMBackend:
    A pCDM solver for a set of observation coordinates.

Functions
---------
pcdm_displacement(x, y, parameters)
    Compute the displacement field in one call, raising on invalid input.

References
----------
.. [0] Nikkhoo, M., Walter, T. R., Lundgren, P. R., & Prats-Iraola, P.
       (2017). Compound dislocation models (CDMs) for volcano deformation
       analyses. Geophysical Journal International, 208(2), 877-894.

Example
-------
>>> backend = PCDMBackend()
>>> backend.set_horizontal_coords(x, y)
>>> backend.set_parameters(ModelParameters(source, poissons_ratio=0.25))
>>> backend.run()
<SolverState.RESULTS_READY: 4>
>>> field = backend.take_results()
"""

import warnings
from collections.abc import Callable
from enum import Enum, auto
from typing import NamedTuple, Optional

import numpy as np
import numpy.typing as npt
import pandas as pd

from pcdm_modelling import orientation, ptd
from pcdm_modelling.parameters import ModelParameters


class SolverState(Enum):
    """Enumeration of pCDM solver states."""

    UNINITIALIZED = auto()
    PARAMETERS_CHANGED = auto()
    INVALID_PARAMETERS = auto()
    RESULTS_READY = auto()


class DisplacementField(NamedTuple):
    """Surface displacement of each observation point.

    Each component has one value per observation point, in the order
    the points were given.
    """

    east: npt.NDArray[np.float64]
    """East displacement."""
    north: npt.NDArray[np.float64]
    """North displacement."""
    vertical: npt.NDArray[np.float64]
    """Vertical displacement (positive up)."""

    def to_dataframe(self) -> pd.DataFrame:
        """Convert the displacement field into a dataframe.

        Returns
        -------
        pd.DataFrame
            A dataframe with columns 'ue', 'un' and 'uv'.
        """
        return pd.DataFrame({"ue": self.east, "un": self.north, "uv": self.vertical})


StateCallback = Callable[[SolverState], None]


class PCDMBackend:
    """Solver for the surface displacements of a pCDM source.

    Inputs are set with `set_horizontal_coords` and `set_parameters`,
    and `run` computes the displacement field. Invalid input never
    raises; it moves the solver into `SolverState.INVALID_PARAMETERS`
    and sets `error_message`. Stored results are cleared whenever the
    solver leaves `SolverState.RESULTS_READY`.

    Parameters
    ----------
    on_state_changed : Callable[[SolverState], None], optional
        Called with the new state after every state change. It is not
        called if a transition leaves the state unchanged.
    """

    def __init__(self, on_state_changed: Optional[StateCallback] = None) -> None:
        self._on_state_changed = on_state_changed
        self._state = SolverState.UNINITIALIZED
        self._x = np.empty(0)
        self._y = np.empty(0)
        self._parameters: Optional[ModelParameters] = None
        self._results: Optional[DisplacementField] = None
        self._error_message: Optional[str] = None

    @property
    def state(self) -> SolverState:  # numpydoc ignore=RT01
        """SolverState: The current state of the solver."""
        return self._state

    @property
    def error_message(self) -> Optional[str]:  # numpydoc ignore=RT01
        """Optional[str]: Why the solver is in the invalid state, if it is."""
        return self._error_message

    @property
    def parameters(self) -> Optional[ModelParameters]:  # numpydoc ignore=RT01
        """Optional[ModelParameters]: The current model parameters."""
        return self._parameters

    @property
    def horizontal_coords(self) -> tuple[np.ndarray, np.ndarray]:  # numpydoc ignore=RT01
        """tuple[np.ndarray, np.ndarray]: The observation coordinates (x, y)."""
        return self._x, self._y

    def _set_state(self, state: SolverState, error_message: Optional[str] = None):
        if state != SolverState.RESULTS_READY:
            self._results = None
        self._error_message = error_message
        if state == self._state:
            return
        self._state = state
        if self._on_state_changed:
            self._on_state_changed(state)

    def _coordinate_error(self) -> Optional[str]:
        if len(self._x) != len(self._y):
            return "Input X, Y must have same size."
        if len(self._x) == 0:
            return "No input coordinates set."
        return None

    def set_horizontal_coords(self, x: npt.ArrayLike, y: npt.ArrayLike) -> None:
        """Set the observation coordinates.

        Replaces any previously set coordinates and invalidates stored
        results.

        Parameters
        ----------
        x : array-like
            Easting of the observation points.
        y : array-like
            Northing of the observation points.
        """
        self._x = np.array(x, dtype=np.float64).ravel()
        self._y = np.array(y, dtype=np.float64).ravel()
        if len(self._x) != len(self._y):
            message = self._coordinate_error()
            warnings.warn(message)
            self._set_state(SolverState.INVALID_PARAMETERS, message)
            return
        self._set_state(SolverState.PARAMETERS_CHANGED)

    def set_parameters(self, parameters: ModelParameters) -> None:
        """Set the source parameters and Poisson's ratio.

        Does nothing if `parameters` equals (approximately) the current
        parameters. Otherwise stored results are invalidated.

        Parameters
        ----------
        parameters : ModelParameters
            The new model parameters.
        """
        if self._parameters is not None and self._parameters == parameters:
            return
        self._parameters = parameters
        error_message = parameters.validation_error()
        if error_message:
            self._set_state(SolverState.INVALID_PARAMETERS, error_message)
            return
        self._set_state(SolverState.PARAMETERS_CHANGED)

    def run(self) -> SolverState:
        """Compute the displacement field for the current inputs.

        Does nothing if the parameters are invalid or the results are
        already available.

        Returns
        -------
        SolverState
            The state after running, `SolverState.RESULTS_READY` on success.
        """
        if self._state in (SolverState.INVALID_PARAMETERS, SolverState.RESULTS_READY):
            return self._state

        coordinate_error = self._coordinate_error()
        if coordinate_error:
            warnings.warn(coordinate_error)
            self._set_state(SolverState.INVALID_PARAMETERS, coordinate_error)
            return self._state

        if self._parameters is None:
            self._set_state(
                SolverState.INVALID_PARAMETERS, "No source parameters set."
            )
            return self._state
        parameter_error = self._parameters.validation_error()
        if parameter_error:
            self._set_state(SolverState.INVALID_PARAMETERS, parameter_error)
            return self._state

        source = self._parameters.source
        displacement = np.zeros((3, len(self._x)))
        for plane, potency in zip(
            orientation.pcdm_plane_orientations(source.rotation), source.potencies
        ):
            # A zero potency has no contribution, and its plane orientation
            # may be degenerate.
            if potency == 0:
                continue
            displacement += ptd.ptd_surface_displacement(
                self._x,
                self._y,
                source.horizontal_position,
                source.depth,
                plane.strike,
                plane.dip,
                potency,
                self._parameters.poissons_ratio,
            )

        self._results = DisplacementField(*displacement)
        self._set_state(SolverState.RESULTS_READY)
        return self._state

    def results(self) -> DisplacementField:
        """Return the computed displacement field.

        Returns
        -------
        DisplacementField
            The east, north and vertical displacements.

        Raises
        ------
        RuntimeError
            If the results are not ready.
        """
        if self._state != SolverState.RESULTS_READY or self._results is None:
            raise RuntimeError(
                f"Results are not available in solver state {self._state.name}."
            )
        return self._results

    def take_results(self) -> DisplacementField:
        """Hand the computed displacement field over to the caller.

        The solver drops its reference to the results and returns to
        `SolverState.PARAMETERS_CHANGED`, so `run` must be called again
        before results can be read.

        Returns
        -------
        DisplacementField
            The east, north and vertical displacements.

        Raises
        ------
        RuntimeError
            If the results are not ready.
        """
        results = self.results()
        self._set_state(SolverState.PARAMETERS_CHANGED)
        return results


def pcdm_displacement(
    x: npt.ArrayLike, y: npt.ArrayLike, parameters: ModelParameters
) -> DisplacementField:
    """Compute the surface displacement of a pCDM source.

    Parameters
    ----------
    x : array-like
        Easting of the observation points.
    y : array-like
        Northing of the observation points.
    parameters : ModelParameters
        The source parameters and Poisson's ratio.

    Returns
    -------
    DisplacementField
        The east, north and vertical displacement of each point.

    Raises
    ------
    ValueError
        If the coordinates or parameters are invalid.
    """
    backend = PCDMBackend()
    with warnings.catch_warnings():
        warnings.simplefilter("ignore")
        backend.set_horizontal_coords(x, y)
        backend.set_parameters(parameters)
        backend.run()
    if backend.state != SolverState.RESULTS_READY:
        raise ValueError(backend.error_message)
    return backend.take_results()
