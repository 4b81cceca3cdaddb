"""This module provides functions for reading and writing coordinate and displacement files.

Both formats are space separated tables with a single header line.

Coordinate files have the columns

    X Y

and displacement files have the columns

    ue un uv

with one row per observation point, in observation point order.

Functions
---------
write_coordinates(coordinates_ffp, x, y)
    Write observation coordinates to a file.
read_coordinates(coordinates_ffp)
    Read observation coordinates from a file.
write_displacements(displacement_ffp, field)
    Write a displacement field to a file.
read_displacements(displacement_ffp)
    Read a displacement field from a file.
"""

from pathlib import Path

import numpy as np
import numpy.typing as npt
import pandas as pd

from pcdm_modelling.backend import DisplacementField

COORDINATE_COLUMNS = ["X", "Y"]
DISPLACEMENT_COLUMNS = ["ue", "un", "uv"]


class DisplacementFileError(ValueError):
    """Error for reading coordinate or displacement files."""

    pass


def _write_table(table: pd.DataFrame, filepath: Path) -> None:
    filepath.parent.mkdir(parents=True, exist_ok=True)
    table.to_csv(filepath, sep=" ", index=False, float_format="%.17g")


def _read_table(filepath: Path, columns: list[str]) -> pd.DataFrame:
    """Read a space separated table and check its columns.

    Parameters
    ----------
    filepath : Path
        The path to the file.
    columns : list[str]
        The columns the file must contain.

    Returns
    -------
    pd.DataFrame
        The table restricted to `columns`, as float64.

    Raises
    ------
    DisplacementFileError
        If a column is missing or contains non-numeric values.
    """
    table = pd.read_csv(filepath, sep=r"\s+", float_precision="round_trip")
    missing = [column for column in columns if column not in table.columns]
    if missing:
        raise DisplacementFileError(
            f"{filepath} is missing the column(s): {', '.join(missing)}"
        )
    try:
        return table[columns].astype(np.float64)
    except ValueError as e:
        raise DisplacementFileError(f"{filepath} contains non-numeric values") from e


def write_coordinates(
    coordinates_ffp: Path, x: npt.ArrayLike, y: npt.ArrayLike
) -> None:
    """Write observation coordinates to a file.

    Parameters
    ----------
    coordinates_ffp : Path
        The path to write to. Parent directories are created if they do
        not exist.
    x : array-like
        Easting of the observation points.
    y : array-like
        Northing of the observation points.
    """
    _write_table(
        pd.DataFrame({"X": np.asarray(x), "Y": np.asarray(y)}), coordinates_ffp
    )


def read_coordinates(coordinates_ffp: Path) -> tuple[np.ndarray, np.ndarray]:
    """Read observation coordinates from a file.

    Parameters
    ----------
    coordinates_ffp : Path
        The path to the coordinates file.

    Returns
    -------
    tuple[np.ndarray, np.ndarray]
        The x and y coordinates.
    """
    table = _read_table(coordinates_ffp, COORDINATE_COLUMNS)
    return table["X"].to_numpy(), table["Y"].to_numpy()


def write_displacements(displacement_ffp: Path, field: DisplacementField) -> None:
    """Write a displacement field to a file.

    Parameters
    ----------
    displacement_ffp : Path
        The path to write to. Parent directories are created if they do
        not exist.
    field : DisplacementField
        The displacement field to write.
    """
    _write_table(field.to_dataframe(), displacement_ffp)


def read_displacements(displacement_ffp: Path) -> DisplacementField:
    """Read a displacement field from a file.

    Parameters
    ----------
    displacement_ffp : Path
        The path to the displacement file.

    Returns
    -------
    DisplacementField
        The displacement field stored in the file.
    """
    table = _read_table(displacement_ffp, DISPLACEMENT_COLUMNS)
    return DisplacementField(
        *(table[column].to_numpy() for column in DISPLACEMENT_COLUMNS)
    )
