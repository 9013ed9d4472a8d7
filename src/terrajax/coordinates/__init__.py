"""Coordinate transformations.

This sub-module provides functions for converting between geodetic
``[lon, lat, alt]`` and Earth-Centered Earth-Fixed ``[x, y, z]``
coordinates for two reference-body models:

- **Sphere**: exact closed-form transforms on a perfect sphere
- **Ellipsoid**: exact forward transform and single-pass Bowring inverse
  on an oblate ellipsoid of revolution

The ``sphere_*`` and ``ellipsoid_*`` kernels work on separate components;
the ``position_*`` functions work on ``(..., 3)`` arrays and dispatch on
the body type.
"""

from .ellipsoid import (
    ellipsoid_ecef_to_geodetic,
    ellipsoid_geodetic_to_ecef,
)
from .geodetic import (
    kernels_for,
    position_ecef_to_geodetic,
    position_geodetic_to_ecef,
    positions_ecef_to_geodetic_soa,
    positions_geodetic_to_ecef_soa,
)
from .sphere import (
    sphere_ecef_to_geodetic,
    sphere_geodetic_to_ecef,
)

__all__ = [
    "sphere_geodetic_to_ecef",
    "sphere_ecef_to_geodetic",
    "ellipsoid_geodetic_to_ecef",
    "ellipsoid_ecef_to_geodetic",
    "kernels_for",
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "positions_geodetic_to_ecef_soa",
    "positions_ecef_to_geodetic_soa",
]
