"""Compute the surface displacement of a pCDM source at observation coordinates."""

from pathlib import Path
from typing import Annotated

import typer

from pcdm_modelling import displacement_files
from pcdm_modelling.backend import PCDMBackend, SolverState
from pcdm_modelling.parameters import (
    DEFAULT_POISSONS_RATIO,
    ModelParameters,
    PointSourceParameters,
)


def compute_displacement(
    coordinates_ffp: Annotated[
        Path,
        typer.Argument(
            help="Coordinates file (columns X Y).",
            exists=True,
            readable=True,
            dir_okay=False,
        ),
    ],
    output_ffp: Annotated[
        Path,
        typer.Argument(
            help="Output displacement file (columns ue un uv).",
            writable=True,
            dir_okay=False,
        ),
    ],
    depth: Annotated[float, typer.Option(help="Source depth (positive down).")],
    easting: Annotated[float, typer.Option(help="Source easting.")] = 0.0,
    northing: Annotated[float, typer.Option(help="Source northing.")] = 0.0,
    rotation: Annotated[
        tuple[float, float, float],
        typer.Option(help="Clockwise rotation about the x, y and z axes (degrees)."),
    ] = (0.0, 0.0, 0.0),
    potencies: Annotated[
        tuple[float, float, float],
        typer.Option(help="Potencies of the x, y and z dislocations (length^3)."),
    ] = (0.0, 0.0, 0.0),
    poissons_ratio: Annotated[
        float, typer.Option(help="Poisson's ratio of the half-space.")
    ] = DEFAULT_POISSONS_RATIO,
):
    """Compute the surface displacement of a pCDM source at observation coordinates."""
    x, y = displacement_files.read_coordinates(coordinates_ffp)

    backend = PCDMBackend()
    backend.set_horizontal_coords(x, y)
    backend.set_parameters(
        ModelParameters(
            PointSourceParameters(
                horizontal_position=(easting, northing),
                depth=depth,
                rotation=rotation,
                potencies=potencies,
            ),
            poissons_ratio=poissons_ratio,
        )
    )
    if backend.run() != SolverState.RESULTS_READY:
        typer.echo(f"Cannot compute displacement: {backend.error_message}", err=True)
        raise typer.Exit(code=1)

    displacement_files.write_displacements(output_ffp, backend.take_results())


def main():
    typer.run(compute_displacement)


if __name__ == "__main__":
    main()
