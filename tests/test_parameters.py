import itertools

import numpy as np
import pytest
from hypothesis import given
from hypothesis import strategies as st

from pcdm_modelling import parameters
from pcdm_modelling.parameters import ModelParameters, PointSourceParameters


def source(
    depth: float = 1.0, potencies: tuple[float, float, float] = (1.0, 1.0, 1.0)
) -> PointSourceParameters:
    """Create point source parameters with default position and rotation."""
    return PointSourceParameters(
        horizontal_position=(0.0, 0.0),
        depth=depth,
        rotation=(0.0, 0.0, 0.0),
        potencies=potencies,
    )


@given(
    positive=st.floats(1e-12, 1e6),
    negative=st.floats(-1e6, -1e-12),
    other=st.floats(-1e6, 1e6),
    order=st.sampled_from(list(itertools.permutations(range(3)))),
)
def test_mixed_sign_potencies_are_invalid(
    positive: float, negative: float, other: float, order: tuple[int, int, int]
):
    """Check that potencies with mixed signs are always rejected."""
    values = [positive, negative, other]
    potencies = tuple(values[i] for i in order)
    point_source = source(potencies=potencies)
    assert not point_source.is_valid()
    assert point_source.validation_error() == parameters.POTENCY_SIGN_MESSAGE


@given(
    potencies=st.tuples(
        st.floats(0, 1e6), st.floats(0, 1e6), st.floats(0, 1e6)
    ),
    sign=st.sampled_from([1, -1]),
    depth=st.floats(0, 1e4),
)
def test_uniform_sign_potencies_are_valid(
    potencies: tuple[float, float, float], sign: int, depth: float
):
    """Check that potencies sharing a sign (zeros included) are accepted."""
    point_source = source(depth=depth, potencies=tuple(sign * p for p in potencies))
    assert point_source.is_valid()
    assert point_source.validation_error() is None


@given(depth=st.floats(-1e4, -1e-12))
def test_negative_depth_is_invalid(depth: float):
    point_source = source(depth=depth)
    assert not point_source.is_valid()
    assert point_source.validation_error() == parameters.NEGATIVE_DEPTH_MESSAGE


def test_potency_sign_checked_before_depth():
    point_source = source(depth=-1.0, potencies=(1.0, -1.0, 0.0))
    assert point_source.validation_error() == parameters.POTENCY_SIGN_MESSAGE


def test_nan_depth_is_invalid():
    assert not source(depth=np.nan).is_valid()


def test_sequences_are_normalised():
    """Sequences of any kind are stored as tuples of floats."""
    point_source = PointSourceParameters(
        horizontal_position=np.array([1, 2]),
        depth=3,
        rotation=[4, 5, 6],
        potencies=(7, 8, 9),
    )
    assert point_source.horizontal_position == (1.0, 2.0)
    assert isinstance(point_source.depth, float)
    assert point_source.rotation == (4.0, 5.0, 6.0)
    assert point_source.potencies == (7.0, 8.0, 9.0)


@pytest.mark.parametrize(
    "field, value",
    [
        ("horizontal_position", (1.0, 2.0, 3.0)),
        ("rotation", (1.0, 2.0)),
        ("potencies", (1.0,)),
    ],
)
def test_wrong_component_count_raises(field: str, value: tuple):
    with pytest.raises(ValueError, match=field):
        PointSourceParameters(**{field: value})


def test_parameters_are_immutable():
    point_source = source()
    with pytest.raises(AttributeError):
        point_source.depth = 2.0


@given(value=st.floats(1e-3, 1e3))
def test_equality_tolerates_drift(value: float):
    """Parameters differing by a rounding error compare equal."""
    a = PointSourceParameters((value, -value), value, (value, 0, 0), (value, value, 0))
    drifted = np.nextafter(value, np.inf)
    b = PointSourceParameters(
        (drifted, -drifted), drifted, (drifted, 0, 0), (drifted, drifted, 0)
    )
    assert a == b
    assert ModelParameters(a, 0.25) == ModelParameters(b, np.nextafter(0.25, 1))


@pytest.mark.parametrize(
    "other",
    [
        PointSourceParameters((0.5, -0.25), 2.75, (5, -8, 30), (0.00144, 0.00128, 0.00073)),
        PointSourceParameters((0.5, -0.26), 2.75, (5, -8, 30), (0.00144, 0.00128, 0.00072)),
        PointSourceParameters((0.5, -0.25), 2.7501, (5, -8, 30), (0.00144, 0.00128, 0.00072)),
        PointSourceParameters((0.5, -0.25), 2.75, (5, -8, 31), (0.00144, 0.00128, 0.00072)),
    ],
)
def test_equality_detects_changes(other: PointSourceParameters):
    reference = PointSourceParameters(
        (0.5, -0.25), 2.75, (5, -8, 30), (0.00144, 0.00128, 0.00072)
    )
    assert reference != other
    assert ModelParameters(reference) != ModelParameters(other)


def test_poissons_ratio_affects_equality():
    assert ModelParameters(source(), 0.25) != ModelParameters(source(), 0.3)
    assert ModelParameters(source()).poissons_ratio == parameters.DEFAULT_POISSONS_RATIO


def test_model_parameters_delegate_validation():
    invalid = ModelParameters(source(depth=-1.0))
    assert not invalid.is_valid()
    assert invalid.validation_error() == parameters.NEGATIVE_DEPTH_MESSAGE
    assert ModelParameters(source()).is_valid()


def test_dict_round_trip():
    point_source = PointSourceParameters(
        (0.5, -0.25), 2.75, (5, -8, 30), (0.00144, 0.00128, 0.00072)
    )
    as_dict = point_source.to_dict()
    assert as_dict == {
        "horizontal_coordinate": [0.5, -0.25],
        "depth": 2.75,
        "rotation": [5.0, -8.0, 30.0],
        "potencies": [0.00144, 0.00128, 0.00072],
    }
    assert PointSourceParameters.from_dict(as_dict) == point_source
