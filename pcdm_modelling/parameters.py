"""Parameters describing a point Compound Dislocation Model (pCDM) source.

Classes
-------
PointSourceParameters:
    Position, depth, orientation and potencies of a single pCDM source.

ModelParameters:
    A point source together with the Poisson's ratio of the surrounding medium.
"""

import dataclasses
from collections.abc import Sequence
from typing import Optional, Self

import numpy as np

# Poisson's ratio of a Poisson solid, used when no ratio is given.
DEFAULT_POISSONS_RATIO = 0.25

# Parameter sets closer than this (relative and absolute) compare equal.
EQUALITY_TOLERANCE = 4 * np.finfo(np.float64).eps

POTENCY_SIGN_MESSAGE = "Potencies (DV x, y, z) must have the same sign."
NEGATIVE_DEPTH_MESSAGE = "Depth must be a positive value."


def _float_tuple(values: Sequence[float], length: int, name: str) -> tuple[float, ...]:
    """Normalise a sequence of numbers into a tuple of floats.

    Parameters
    ----------
    values : Sequence[float]
        The values to normalise.
    length : int
        The expected number of values.
    name : str
        The parameter name, used in the error message.

    Returns
    -------
    tuple[float, ...]
        The values as a tuple of python floats.

    Raises
    ------
    ValueError
        If the number of values is not `length`.
    """
    normalised = tuple(float(value) for value in values)
    if len(normalised) != length:
        raise ValueError(
            f"{name} must have exactly {length} components, got {len(normalised)}."
        )
    return normalised


def _approx_equal(a: Sequence[float], b: Sequence[float]) -> bool:
    return bool(
        np.allclose(a, b, rtol=EQUALITY_TOLERANCE, atol=EQUALITY_TOLERANCE)
    )


@dataclasses.dataclass(frozen=True, eq=False)
class PointSourceParameters:
    """A representation of a single pCDM source.

    Attributes
    ----------
    horizontal_position : tuple[float, float]
        Easting and northing of the source, in the same coordinate
        system and unit as the observation coordinates.
    depth : float
        Depth of the source below the surface (positive down).
    rotation : tuple[float, float, float]
        Clockwise rotation about the x, y and z axes (degrees).
    potencies : tuple[float, float, float]
        Potencies of the point tensile dislocations that are normal to
        the x, y and z axes before the rotation is applied. Potency has
        the unit of volume (length^3).
    """

    horizontal_position: tuple[float, float] = (0.0, 0.0)
    depth: float = 0.0
    rotation: tuple[float, float, float] = (0.0, 0.0, 0.0)
    potencies: tuple[float, float, float] = (0.0, 0.0, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(
            self,
            "horizontal_position",
            _float_tuple(self.horizontal_position, 2, "horizontal_position"),
        )
        object.__setattr__(self, "depth", float(self.depth))
        object.__setattr__(self, "rotation", _float_tuple(self.rotation, 3, "rotation"))
        object.__setattr__(
            self, "potencies", _float_tuple(self.potencies, 3, "potencies")
        )

    def validation_error(self) -> Optional[str]:
        """Explain why the parameters are invalid.

        Returns
        -------
        Optional[str]
            A user friendly message describing the first problem
            found, or None if the parameters are valid.
        """
        potencies = np.asarray(self.potencies)
        if not (np.all(potencies >= 0) or np.all(potencies <= 0)):
            return POTENCY_SIGN_MESSAGE
        if not self.depth >= 0:
            return NEGATIVE_DEPTH_MESSAGE
        return None

    def is_valid(self) -> bool:
        """bool: True if the potencies share a sign and the depth is non-negative."""
        return self.validation_error() is None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PointSourceParameters):
            return NotImplemented
        return (
            _approx_equal(self.horizontal_position, other.horizontal_position)
            and _approx_equal([self.depth], [other.depth])
            and _approx_equal(self.rotation, other.rotation)
            and _approx_equal(self.potencies, other.potencies)
        )

    def to_dict(self) -> dict:
        """Convert the parameters into a JSON serialisable dictionary.

        Returns
        -------
        dict
            A dictionary with keys 'horizontal_coordinate', 'depth',
            'rotation' and 'potencies'.
        """
        return {
            "horizontal_coordinate": list(self.horizontal_position),
            "depth": self.depth,
            "rotation": list(self.rotation),
            "potencies": list(self.potencies),
        }

    @classmethod
    def from_dict(cls, parameters: dict) -> Self:
        """Construct point source parameters from a dictionary.

        Parameters
        ----------
        parameters : dict
            A dictionary in the format produced by `to_dict`.

        Returns
        -------
        PointSourceParameters
            The point source parameters.
        """
        return cls(
            horizontal_position=parameters["horizontal_coordinate"],
            depth=parameters["depth"],
            rotation=parameters["rotation"],
            potencies=parameters["potencies"],
        )


@dataclasses.dataclass(frozen=True, eq=False)
class ModelParameters:
    """A point source and the Poisson's ratio of the half-space it sits in.

    The Poisson's ratio is a property of the medium, so it is shared by
    every source evaluated against the same observation coordinates.
    """

    source: PointSourceParameters
    poissons_ratio: float = DEFAULT_POISSONS_RATIO

    def __post_init__(self) -> None:
        object.__setattr__(self, "poissons_ratio", float(self.poissons_ratio))

    def validation_error(self) -> Optional[str]:  # numpydoc ignore=RT01
        """Optional[str]: The source validation message, or None if valid."""
        return self.source.validation_error()

    def is_valid(self) -> bool:  # numpydoc ignore=RT01
        """bool: True if the source parameters are valid."""
        return self.source.is_valid()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelParameters):
            return NotImplemented
        return self.source == other.source and _approx_equal(
            [self.poissons_ratio], [other.poissons_ratio]
        )
