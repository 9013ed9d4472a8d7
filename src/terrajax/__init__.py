"""
terrajax converts between geodetic and Earth-Centered Earth-Fixed coordinates
on spherical and ellipsoidal reference bodies, implemented in JAX.
"""

from .constants import (
    WGS84_a,
    WGS84_b,
    WGS84_f,
)

from .config import set_dtype, get_dtype, get_roundtrip_tolerance

from .bodies import (
    Sphere,
    Ellipsoid,
    WGS84_SPHERE,
    WGS84_ELLIPSOID,
)

from .coordinates import (
    sphere_geodetic_to_ecef,
    sphere_ecef_to_geodetic,
    ellipsoid_geodetic_to_ecef,
    ellipsoid_ecef_to_geodetic,
    position_geodetic_to_ecef,
    position_ecef_to_geodetic,
    positions_geodetic_to_ecef_soa,
    positions_ecef_to_geodetic_soa,
)

from .conversions import (
    geodetic_to_ecef_inplace,
    geodetic_to_ecef_into,
    geodetic_to_ecef_soa,
    geodetic_to_ecef_aos,
    ecef_to_geodetic_inplace,
    ecef_to_geodetic_into,
    ecef_to_geodetic_soa,
    ecef_to_geodetic_aos,
)

__all__ = [
    # Constants
    "WGS84_a",
    "WGS84_b",
    "WGS84_f",
    # Config
    "set_dtype",
    "get_dtype",
    "get_roundtrip_tolerance",
    # Bodies
    "Sphere",
    "Ellipsoid",
    "WGS84_SPHERE",
    "WGS84_ELLIPSOID",
    # Coordinates
    "sphere_geodetic_to_ecef",
    "sphere_ecef_to_geodetic",
    "ellipsoid_geodetic_to_ecef",
    "ellipsoid_ecef_to_geodetic",
    "position_geodetic_to_ecef",
    "position_ecef_to_geodetic",
    "positions_geodetic_to_ecef_soa",
    "positions_ecef_to_geodetic_soa",
    # Conversions
    "geodetic_to_ecef_inplace",
    "geodetic_to_ecef_into",
    "geodetic_to_ecef_soa",
    "geodetic_to_ecef_aos",
    "ecef_to_geodetic_inplace",
    "ecef_to_geodetic_into",
    "ecef_to_geodetic_soa",
    "ecef_to_geodetic_aos",
]
