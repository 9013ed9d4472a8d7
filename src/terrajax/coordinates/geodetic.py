"""Geodetic coordinate transformations for any supported reference body.

Converts between geodetic coordinates ``[longitude, latitude, altitude]``
and Earth-Centered Earth-Fixed (ECEF) Cartesian coordinates ``[x, y, z]``,
dispatching on the reference-body type to the spherical or ellipsoidal
kernels.

Array functions operate on the trailing axis, so a single coordinate of
shape ``(3,)`` and an array-of-structures batch of shape ``(N, 3)`` go
through the same call.  Structure-of-arrays batches use the ``*_soa``
variants, which take and return the three components separately.

All inputs and outputs use SI base units (metres, radians) unless
``use_degrees=True``.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from terrajax.bodies import WGS84_ELLIPSOID, Ellipsoid, Sphere
from terrajax.config import get_dtype
from terrajax.coordinates.ellipsoid import (
    ellipsoid_ecef_to_geodetic,
    ellipsoid_geodetic_to_ecef,
)
from terrajax.coordinates.sphere import (
    sphere_ecef_to_geodetic,
    sphere_geodetic_to_ecef,
)


def kernels_for(body):
    """Return the ``(forward, inverse)`` kernel pair for a reference body.

    Args:
        body: A :class:`~terrajax.bodies.Sphere` or
            :class:`~terrajax.bodies.Ellipsoid`.

    Returns:
        tuple: ``(geodetic_to_ecef, ecef_to_geodetic)`` component kernels.

    Raises:
        TypeError: If *body* is not a supported reference-body type.
    """
    if isinstance(body, Ellipsoid):
        return ellipsoid_geodetic_to_ecef, ellipsoid_ecef_to_geodetic
    if isinstance(body, Sphere):
        return sphere_geodetic_to_ecef, sphere_ecef_to_geodetic
    raise TypeError(
        f"Unsupported reference body {type(body).__name__}. "
        f"Must be a Sphere or an Ellipsoid"
    )


def position_geodetic_to_ecef(
    x_geod: ArrayLike,
    body: Sphere | Ellipsoid = WGS84_ELLIPSOID,
    use_degrees: bool = False,
) -> Array:
    """Convert geodetic position(s) to ECEF Cartesian coordinates.

    Args:
        x_geod: Geodetic coordinates ``[lon, lat, alt]``, shape ``(3,)`` or
            ``(..., 3)``.  Longitude and latitude in *rad* (or *deg* if
            ``use_degrees=True``), altitude in *m* above the body surface.
        body: Reference body. Defaults to the WGS84 ellipsoid.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        jax.Array: ECEF position(s) ``[x, y, z]`` in *m*, same shape as
            ``x_geod``.

    Example:
        >>> import jax.numpy as jnp
        >>> from terrajax.bodies import Sphere
        >>> from terrajax.coordinates import position_geodetic_to_ecef
        >>> x_ecef = position_geodetic_to_ecef(jnp.zeros(3), Sphere(6378137.0))
        >>> float(x_ecef[0])
        6378137.0
    """
    forward, _ = kernels_for(body)
    x_geod = jnp.asarray(x_geod, dtype=get_dtype())

    lon = x_geod[..., 0]
    lat = x_geod[..., 1]
    alt = x_geod[..., 2]

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    x, y, z = forward(lon, lat, alt, body)

    return jnp.stack([x, y, z], axis=-1)


def position_ecef_to_geodetic(
    x_ecef: ArrayLike,
    body: Sphere | Ellipsoid = WGS84_ELLIPSOID,
    use_degrees: bool = False,
) -> Array:
    """Convert ECEF Cartesian position(s) to geodetic coordinates.

    Args:
        x_ecef: ECEF position(s) ``[x, y, z]`` in *m*, shape ``(3,)`` or
            ``(..., 3)``.
        body: Reference body. Defaults to the WGS84 ellipsoid.
        use_degrees: If ``True``, return longitude and latitude in degrees.

    Returns:
        jax.Array: Geodetic coordinates ``[lon, lat, alt]``, same shape as
            ``x_ecef``.  Longitude and latitude in *rad* (or *deg*),
            altitude in *m* above the body surface.

    Example:
        >>> import jax.numpy as jnp
        >>> from terrajax.constants import WGS84_a
        >>> from terrajax.coordinates import position_ecef_to_geodetic
        >>> geod = position_ecef_to_geodetic(jnp.array([WGS84_a, 0.0, 0.0]))
        >>> abs(float(geod[2])) < 1.0  # altitude ~ 0
        True
    """
    _, inverse = kernels_for(body)
    x_ecef = jnp.asarray(x_ecef, dtype=get_dtype())

    lon, lat, alt = inverse(x_ecef[..., 0], x_ecef[..., 1], x_ecef[..., 2], body)

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return jnp.stack([lon, lat, alt], axis=-1)


def positions_geodetic_to_ecef_soa(
    lon: ArrayLike,
    lat: ArrayLike,
    alt: ArrayLike,
    body: Sphere | Ellipsoid = WGS84_ELLIPSOID,
    use_degrees: bool = False,
) -> tuple[Array, Array, Array]:
    """Convert a structure-of-arrays batch of geodetic coordinates to ECEF.

    Args:
        lon: Longitudes, shape ``(N,)``, in *rad* (or *deg*).
        lat: Latitudes, shape ``(N,)``, in *rad* (or *deg*).
        alt: Altitudes, shape ``(N,)``, in *m*.
        body: Reference body. Defaults to the WGS84 ellipsoid.
        use_degrees: If ``True``, interpret longitude and latitude as degrees.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: ECEF ``(x, y, z)`` arrays
            in *m*.
    """
    forward, _ = kernels_for(body)
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)

    if use_degrees:
        lon = jnp.deg2rad(lon)
        lat = jnp.deg2rad(lat)

    return forward(lon, lat, alt, body)


def positions_ecef_to_geodetic_soa(
    x: ArrayLike,
    y: ArrayLike,
    z: ArrayLike,
    body: Sphere | Ellipsoid = WGS84_ELLIPSOID,
    use_degrees: bool = False,
) -> tuple[Array, Array, Array]:
    """Convert a structure-of-arrays batch of ECEF coordinates to geodetic.

    Args:
        x: ECEF x-components, shape ``(N,)``, in *m*.
        y: ECEF y-components, shape ``(N,)``, in *m*.
        z: ECEF z-components, shape ``(N,)``, in *m*.
        body: Reference body. Defaults to the WGS84 ellipsoid.
        use_degrees: If ``True``, return longitude and latitude in degrees.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: Geodetic
            ``(lon, lat, alt)`` arrays.
    """
    _, inverse = kernels_for(body)
    lon, lat, alt = inverse(x, y, z, body)

    if use_degrees:
        lon = jnp.rad2deg(lon)
        lat = jnp.rad2deg(lat)

    return lon, lat, alt
