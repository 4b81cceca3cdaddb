"""pCDM Modelling

The pcdm_modelling package computes surface deformation caused by a
point Compound Dislocation Model (pCDM) source in an elastic half-space.
A pCDM is three mutually orthogonal point tensile dislocations (PTDs)
with independent potencies, rotated as a rigid unit. It is used to
approximate volumetric sources of arbitrary shape, such as volcanic
reservoirs.

Source Parameters
-----------------

A source is described by `pcdm_modelling.parameters.PointSourceParameters`
(position, depth, rotation and potencies). Together with the Poisson's
ratio of the medium it forms `pcdm_modelling.parameters.ModelParameters`.

Displacement
------------

- `pcdm_modelling.ptd` contains the analytic surface displacement of a
  single PTD (Okada, 1985).
- `pcdm_modelling.orientation` turns the source rotation into the strike
  and dip of each PTD.
- `pcdm_modelling.backend` combines the two in the `PCDMBackend` solver,
  which tracks whether its results are valid for the current inputs.

Files
-----

- `pcdm_modelling.grid` builds regular observation grids.
- `pcdm_modelling.displacement_files` reads and writes coordinate and
  displacement tables."""
