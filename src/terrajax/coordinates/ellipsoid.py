"""Ellipsoidal reference-body transformation kernels.

Converts between geodetic components ``(lon, lat, alt)`` and ECEF
components ``(x, y, z)`` for a body modelled as an oblate ellipsoid of
revolution with semi-major axis ``a`` and semi-minor axis ``b``.

The forward transformation is exact.  The inverse uses Bowring's
closed-form approximation evaluated in a single pass: the parametric
latitude seeds one evaluation of the latitude formula and no further
refinement is applied.  The result is exact for points on the ellipsoid
surface and degrades slowly with altitude and with flattening.

Like the spherical kernels, these are element-wise over broadcastable
scalar or array components with no cross-element dependency.

References:
    1. B. R. Bowring, *Transformation from spatial to geographical
       coordinates*, Survey Review 23(181), 1976, pp. 323-327.
    2. NIMA Technical Report TR8350.2, *Department of Defense World Geodetic
       System 1984*.
"""

from __future__ import annotations

import jax.numpy as jnp
from jax import Array
from jax.typing import ArrayLike

from terrajax.bodies import Ellipsoid
from terrajax.config import get_dtype


def ellipsoid_geodetic_to_ecef(
    lon: ArrayLike,
    lat: ArrayLike,
    alt: ArrayLike,
    ellipsoid: Ellipsoid,
) -> tuple[Array, Array, Array]:
    """Convert geodetic components to ECEF components on an ellipsoid.

    Uses the prime vertical radius of curvature:

    .. math::

        N = \\frac{a^2}{\\sqrt{a^2 \\cos^2 \\phi + b^2 \\sin^2 \\phi}}

    with ``x = (N + h) cos(lat) cos(lon)``, ``y = (N + h) cos(lat) sin(lon)``
    and ``z = ((b^2 / a^2) N + h) sin(lat)``.

    Args:
        lon: Longitude in *rad*.
        lat: Geodetic latitude in *rad*.
        alt: Altitude above the ellipsoid in *m*.
        ellipsoid: Reference ellipsoid.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: ECEF ``(x, y, z)`` in *m*.

    Example:
        >>> from terrajax.bodies import WGS84_ELLIPSOID
        >>> from terrajax.coordinates import ellipsoid_geodetic_to_ecef
        >>> x, y, z = ellipsoid_geodetic_to_ecef(0.0, 0.0, 0.0, WGS84_ELLIPSOID)
        >>> round(float(x))  # WGS84_a on the equator
        6378137
    """
    dtype = get_dtype()
    lon = jnp.asarray(lon, dtype=dtype)
    lat = jnp.asarray(lat, dtype=dtype)
    alt = jnp.asarray(alt, dtype=dtype)

    a = jnp.asarray(ellipsoid.major, dtype=dtype)
    b = jnp.asarray(ellipsoid.minor, dtype=dtype)
    a2 = a * a
    b2 = b * b

    sin_lat = jnp.sin(lat)
    cos_lat = jnp.cos(lat)

    N = a2 / jnp.sqrt(a2 * cos_lat * cos_lat + b2 * sin_lat * sin_lat)
    n_cos_lat = (N + alt) * cos_lat

    x = n_cos_lat * jnp.cos(lon)
    y = n_cos_lat * jnp.sin(lon)
    z = ((b2 / a2) * N + alt) * sin_lat

    return x, y, z


def ellipsoid_ecef_to_geodetic(
    x: ArrayLike,
    y: ArrayLike,
    z: ArrayLike,
    ellipsoid: Ellipsoid,
) -> tuple[Array, Array, Array]:
    """Convert ECEF components to geodetic components on an ellipsoid.

    Single-pass Bowring approximation:

    .. math::

        \\theta = \\operatorname{atan2}(z a, p b), \\quad
        \\phi = \\operatorname{atan2}(z + e'^2 b \\sin^3\\theta,
                                      p - e^2 a \\cos^3\\theta)

    where ``p = sqrt(x^2 + y^2)``, ``e^2 = (a^2 - b^2) / a^2`` and
    ``e'^2 = (a^2 - b^2) / b^2``.  Altitude is ``p / cos(lat) - N`` with
    ``N = a / sqrt(1 - e^2 sin^2 lat)``.

    On the polar axis (``p = 0``) the longitude is whatever
    ``atan2(0, 0)`` yields; it is not special-cased.

    Args:
        x: ECEF x-component in *m*.
        y: ECEF y-component in *m*.
        z: ECEF z-component in *m*.
        ellipsoid: Reference ellipsoid.

    Returns:
        tuple[jax.Array, jax.Array, jax.Array]: Geodetic
            ``(lon, lat, alt)``, angles in *rad*, altitude in *m*.
    """
    dtype = get_dtype()
    x = jnp.asarray(x, dtype=dtype)
    y = jnp.asarray(y, dtype=dtype)
    z = jnp.asarray(z, dtype=dtype)

    a = jnp.asarray(ellipsoid.major, dtype=dtype)
    b = jnp.asarray(ellipsoid.minor, dtype=dtype)
    a2 = a * a
    b2 = b * b
    e2 = (a2 - b2) / a2
    ep2 = (a2 - b2) / b2

    p = jnp.sqrt(x * x + y * y)
    lon = jnp.arctan2(y, x)

    # Parametric latitude
    theta = jnp.arctan2(z * a, p * b)
    sin_theta = jnp.sin(theta)
    cos_theta = jnp.cos(theta)
    sin3_theta = sin_theta * sin_theta * sin_theta
    cos3_theta = cos_theta * cos_theta * cos_theta

    lat = jnp.arctan2(z + ep2 * b * sin3_theta, p - e2 * a * cos3_theta)

    sin_lat = jnp.sin(lat)
    N = a / jnp.sqrt(1.0 - e2 * sin_lat * sin_lat)
    alt = p / jnp.cos(lat) - N

    return lon, lat, alt
