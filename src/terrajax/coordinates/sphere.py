"""Spherical reference-body transformation kernels.

Converts between geodetic components ``(lon, lat, alt)`` and ECEF
components ``(x, y, z)`` for a body modelled as a perfect sphere.  On a
sphere the geodetic and geocentric latitudes coincide, so both directions
are exact closed-form expressions.

The kernels are element-wise: every argument may be a scalar or an array
and the three components broadcast against each other.  Each element is
computed independently of every other, so the kernels can be wrapped in
``jax.jit`` or ``jax.vmap`` or evaluated over disjoint slices of a batch.

All inputs and outputs use radians and the linear unit of the sphere's
radius (metres for Earth).

References:
    1. O. Montenbruck and E. Gill, *Satellite Orbits: Models, Methods
       and Applications*, Springer, 2012, Sec. 5.3.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from terrajax.bodies import Sphere
from terrajax.config import get_dtype


def sphere_geodetic_to_ecef(
    lon: ArrayLike,
    lat: ArrayLike,
    alt: ArrayLike,
    sphere: Sphere,
) -> tuple[Array, Array, Array]:
    """Convert geodetic components to ECEF components on a sphere.

    .. math::

        n = r + h, \\quad
        x = n \\cos\\phi \\cos\\lambda, \\quad
        y = n \\cos\\phi \\sin\\lambda, \\quad
        z = n \\sin\\phi

    Args:
        lon: Longitude in *rad*.
        lat: Latitude in *rad*.
        alt: Altitude above the sphere surface in *m*.
        sphere: Reference sphere.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: ECEF ``(x, y, z)`` in *m*.

    Example:
        >>> from terrajax.bodies import Sphere
        >>> from terrajax.coordinates import sphere_geodetic_to_ecef
        >>> x, y, z = sphere_geodetic_to_ecef(0.0, 0.0, 0.0, Sphere(6378137.0))
        >>> float(x)
        6378137.0
    """
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)
    alt = jnp.asarray(alt, dtype=dtype)

    n = jnp.asarray(sphere.radius, dtype=dtype) + alt
    cos_lat = jnp.cos(lat)

    x = n * cos_lat * jnp.cos(lon)
    y = n * cos_lat * jnp.sin(lon)
    z = n * jnp.sin(lat)

    return x, y, z


def sphere_ecef_to_geodetic(
    x: ArrayLike,
    y: ArrayLike,
    z: ArrayLike,
    sphere: Sphere,
) -> tuple[Array, Array, Array]:
    """Convert ECEF components to geodetic components on a sphere.

    Altitude is recovered as ``p / cos(lat) - r`` with
    ``p = sqrt(x^2 + y^2)``.  On the polar axis (``p = 0``) the longitude
    is whatever ``atan2(0, 0)`` yields (``0`` under IEEE semantics); it is
    not special-cased.

    Args:
        x: ECEF x-component in *m*.
        y: ECEF y-component in *m*.
        z: ECEF z-component in *m*.
        sphere: Reference sphere.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: Geodetic
            ``(lon, lat, alt)``, angles in *rad*, altitude in *m*.
    """
    dtype = get_dtype()
    x = jnp.asarray(x, dtype=dtype)
    y = jnp.asarray(y, dtype=dtype)
    z = jnp.asarray(z, dtype=dtype)

    p = jnp.sqrt(x * x + y * y)
    lon = jnp.arctan2(y, x)
    lat = jnp.arctan2(z, p)
    alt = p / jnp.cos(lat) - jnp.asarray(sphere.radius, dtype=dtype)

    return lon, lat, alt
