"""Conversions that write into caller-owned coordinate containers.

The functions in :mod:`terrajax.coordinates` return new JAX arrays.  The
functions here instead overwrite containers the caller already holds,
which is how coordinates stored in mutable numpy arrays, lists, or record
objects are converted without reallocating them.

Four call conventions are provided for each direction:

- ``*_inplace(coord, body)``: read one triple, then overwrite it.
- ``*_into(dst, src, body)``: read ``src``, write ``dst``.
- ``*_soa(dst, src, num_coords, body)``: structure-of-arrays batch.
- ``*_aos(dst, src, num_coords, body)``: array-of-structures batch.

Container access is duck-typed.  A single triple is accessed by index
(``c[0]``, ``c[1]``, ``c[2]``) when it supports item access, otherwise by
its ``x``, ``y`` and ``z`` attributes.  Geodetic triples use the same
slots for ``lon``, ``lat`` and ``alt``.  A structure-of-arrays container
exposes its three columns as ``x``, ``y`` and ``z`` attributes (or as
items ``0``, ``1``, ``2``, e.g. a ``(3, N)`` numpy array).  An
array-of-structures container is an indexable sequence of triples, an
``(N, 3)`` numpy array, or a structured numpy array of shape ``(N,)``
whose first three fields hold the components.

Arithmetic runs in the module-wide dtype from :func:`terrajax.config.get_dtype`,
not in the dtype of the buffers.  The default is ``float32``, so float64
buffers are converted in single precision unless
``set_dtype(jnp.float64)`` is called first.

Preconditions are the caller's responsibility and are only checked by
``assert`` statements, which vanish under ``python -O``:

- ``dst`` is not ``None``.
- ``dst`` is not ``src``.  Partial overlap of distinct containers is not
  detected.
- ``num_coords`` does not exceed the length of any column or sequence.

Violating them is not reported as a geometric error.  Other misuse, or
any misuse with assertions disabled, surfaces as whatever the container
raises (``IndexError``, ``TypeError`` for an immutable destination, a
numpy broadcast ``ValueError``), unchanged.
Batch outputs are computed for every element before any element is
written.
"""

from __future__ import annotations

import logging

import jax
import numpy as np

from terrajax.bodies import Ellipsoid, Sphere
from terrajax.coordinates.geodetic import kernels_for

logger = logging.getLogger(__name__)


# ──────────────────────────────────────────────
# Container access
# ──────────────────────────────────────────────


def _read_triple(coord):
    if hasattr(coord, "__getitem__"):
        return coord[0], coord[1], coord[2]
    return coord.x, coord.y, coord.z


def _write_triple(coord, c0, c1, c2) -> None:
    if hasattr(coord, "__setitem__"):
        coord[0] = c0
        coord[1] = c1
        coord[2] = c2
    else:
        coord.x = c0
        coord.y = c1
        coord.z = c2


def _columns(soa):
    if hasattr(soa, "x"):
        return soa.x, soa.y, soa.z
    return soa[0], soa[1], soa[2]


def _store_column(column, values: np.ndarray, num_coords: int) -> None:
    if isinstance(column, np.ndarray):
        column[:num_coords] = values
    else:
        column[:num_coords] = values.tolist()


def _record_fields(arr):
    names = arr.dtype.names
    return arr[names[0]], arr[names[1]], arr[names[2]]


def _is_record_array(arr) -> bool:
    return isinstance(arr, np.ndarray) and arr.dtype.names is not None


def _gather_aos(src, num_coords: int):
    if _is_record_array(src):
        c0, c1, c2 = _record_fields(src)
        return c0[:num_coords], c1[:num_coords], c2[:num_coords]
    if isinstance(src, (np.ndarray, jax.Array)) and src.ndim == 2:
        return src[:num_coords, 0], src[:num_coords, 1], src[:num_coords, 2]
    rows = [_read_triple(src[i]) for i in range(num_coords)]
    if not rows:
        return (), (), ()
    c0, c1, c2 = zip(*rows)
    return c0, c1, c2


def _scatter_aos(dst, num_coords: int, c0, c1, c2) -> None:
    c0 = np.asarray(c0)
    c1 = np.asarray(c1)
    c2 = np.asarray(c2)
    if _is_record_array(dst):
        d0, d1, d2 = _record_fields(dst)
        d0[:num_coords] = c0
        d1[:num_coords] = c1
        d2[:num_coords] = c2
        return
    if isinstance(dst, np.ndarray) and dst.ndim == 2:
        dst[:num_coords, 0] = c0
        dst[:num_coords, 1] = c1
        dst[:num_coords, 2] = c2
        return
    for i in range(num_coords):
        _write_triple(dst[i], c0[i].item(), c1[i].item(), c2[i].item())


# ──────────────────────────────────────────────
# Single coordinate
# ──────────────────────────────────────────────


def _convert_single(coord_dst, coord_src, kernel, body) -> None:
    c0, c1, c2 = kernel(*_read_triple(coord_src), body)
    _write_triple(coord_dst, float(c0), float(c1), float(c2))


def geodetic_to_ecef_inplace(coord, body: Sphere | Ellipsoid) -> None:
    """Convert one geodetic coordinate to ECEF, overwriting it.

    All three geodetic components are read before any ECEF component is
    written.

    Args:
        coord: Mutable triple holding ``[lon, lat, alt]`` (*rad*, *rad*,
            *m*); receives ``[x, y, z]`` in *m*.
        body: Reference sphere or ellipsoid.

    Example:
        >>> from terrajax.bodies import Sphere
        >>> from terrajax.conversions import geodetic_to_ecef_inplace
        >>> coord = [0.0, 0.0, 0.0]
        >>> geodetic_to_ecef_inplace(coord, Sphere(6378137.0))
        >>> coord
        [6378137.0, 0.0, 0.0]
    """
    assert coord is not None, "coord is None"
    forward, _ = kernels_for(body)
    _convert_single(coord, coord, forward, body)


def geodetic_to_ecef_into(dst, src, body: Sphere | Ellipsoid) -> None:
    """Convert one geodetic coordinate to ECEF, writing into ``dst``.

    ``dst`` and ``src`` must not be the same container.

    Args:
        dst: Mutable triple receiving ``[x, y, z]`` in *m*.
        src: Triple holding ``[lon, lat, alt]`` (*rad*, *rad*, *m*).
        body: Reference sphere or ellipsoid.
    """
    assert dst is not None, "dst is None"
    assert dst is not src, "dst and src must not alias"
    forward, _ = kernels_for(body)
    _convert_single(dst, src, forward, body)


def ecef_to_geodetic_inplace(coord, body: Sphere | Ellipsoid) -> None:
    """Convert one ECEF coordinate to geodetic, overwriting it.

    Args:
        coord: Mutable triple holding ``[x, y, z]`` in *m*; receives
            ``[lon, lat, alt]`` (*rad*, *rad*, *m*).
        body: Reference sphere or ellipsoid.
    """
    assert coord is not None, "coord is None"
    _, inverse = kernels_for(body)
    _convert_single(coord, coord, inverse, body)


def ecef_to_geodetic_into(dst, src, body: Sphere | Ellipsoid) -> None:
    """Convert one ECEF coordinate to geodetic, writing into ``dst``.

    ``dst`` and ``src`` must not be the same container.

    Args:
        dst: Mutable triple receiving ``[lon, lat, alt]`` (*rad*, *rad*, *m*).
        src: Triple holding ``[x, y, z]`` in *m*.
        body: Reference sphere or ellipsoid.
    """
    assert dst is not None, "dst is None"
    assert dst is not src, "dst and src must not alias"
    _, inverse = kernels_for(body)
    _convert_single(dst, src, inverse, body)


# ──────────────────────────────────────────────
# Structure-of-arrays batches
# ──────────────────────────────────────────────


def _convert_soa(dst, src, num_coords: int, kernel, body) -> None:
    assert dst is not None, "dst is None"
    assert dst is not src, "dst and src must not alias"
    s0, s1, s2 = _columns(src)
    d0, d1, d2 = _columns(dst)
    assert all(
        len(column) >= num_coords for column in (s0, s1, s2, d0, d1, d2)
    ), "num_coords exceeds a column length"
    c0, c1, c2 = kernel(s0[:num_coords], s1[:num_coords], s2[:num_coords], body)
    _store_column(d0, np.asarray(c0), num_coords)
    _store_column(d1, np.asarray(c1), num_coords)
    _store_column(d2, np.asarray(c2), num_coords)


def geodetic_to_ecef_soa(dst, src, num_coords: int, body: Sphere | Ellipsoid) -> None:
    """Convert a structure-of-arrays batch of geodetic coordinates to ECEF.

    Element ``i`` of ``dst`` is computed from element ``i`` of ``src`` only,
    for ``i`` in ``range(num_coords)``.

    Args:
        dst: Columns receiving ECEF ``x``, ``y``, ``z`` in *m*.
        src: Geodetic columns, ``x`` = longitude (*rad*), ``y`` = latitude
            (*rad*), ``z`` = altitude (*m*).
        num_coords: Number of coordinates to convert.
        body: Reference sphere or ellipsoid.
    """
    forward, _ = kernels_for(body)
    logger.debug(
        "Converting %d geodetic coordinates to ECEF (SoA, %s)",
        num_coords, type(body).__name__,
    )
    _convert_soa(dst, src, num_coords, forward, body)


def ecef_to_geodetic_soa(dst, src, num_coords: int, body: Sphere | Ellipsoid) -> None:
    """Convert a structure-of-arrays batch of ECEF coordinates to geodetic.

    Args:
        dst: Columns receiving geodetic ``x`` = longitude (*rad*),
            ``y`` = latitude (*rad*), ``z`` = altitude (*m*).
        src: ECEF columns ``x``, ``y``, ``z`` in *m*.
        num_coords: Number of coordinates to convert.
        body: Reference sphere or ellipsoid.
    """
    _, inverse = kernels_for(body)
    logger.debug(
        "Converting %d ECEF coordinates to geodetic (SoA, %s)",
        num_coords, type(body).__name__,
    )
    _convert_soa(dst, src, num_coords, inverse, body)


# ──────────────────────────────────────────────
# Array-of-structures batches
# ──────────────────────────────────────────────


def _convert_aos(dst, src, num_coords: int, kernel, body) -> None:
    assert dst is not None, "dst is None"
    assert dst is not src, "dst and src must not alias"
    assert len(src) >= num_coords, "num_coords exceeds the length of src"
    assert len(dst) >= num_coords, "num_coords exceeds the length of dst"
    c0, c1, c2 = kernel(*_gather_aos(src, num_coords), body)
    _scatter_aos(dst, num_coords, c0, c1, c2)


def geodetic_to_ecef_aos(dst, src, num_coords: int, body: Sphere | Ellipsoid) -> None:
    """Convert an array-of-structures batch of geodetic coordinates to ECEF.

    Args:
        dst: Sequence of mutable triples (or an ``(N, 3)`` array) receiving
            ``[x, y, z]`` in *m*.
        src: Sequence of ``[lon, lat, alt]`` triples (*rad*, *rad*, *m*).
        num_coords: Number of coordinates to convert.
        body: Reference sphere or ellipsoid.

    Example:
        >>> import numpy as np
        >>> from terrajax.bodies import WGS84_ELLIPSOID
        >>> from terrajax.conversions import geodetic_to_ecef_aos
        >>> geod = np.zeros((4, 3))
        >>> ecef = np.empty_like(geod)
        >>> geodetic_to_ecef_aos(ecef, geod, len(geod), WGS84_ELLIPSOID)
        >>> np.round(ecef[:, 0]).tolist()
        [6378137.0, 6378137.0, 6378137.0, 6378137.0]
    """
    forward, _ = kernels_for(body)
    logger.debug(
        "Converting %d geodetic coordinates to ECEF (AoS, %s)",
        num_coords, type(body).__name__,
    )
    _convert_aos(dst, src, num_coords, forward, body)


def ecef_to_geodetic_aos(dst, src, num_coords: int, body: Sphere | Ellipsoid) -> None:
    """Convert an array-of-structures batch of ECEF coordinates to geodetic.

    Args:
        dst: Sequence of mutable triples (or an ``(N, 3)`` array) receiving
            ``[lon, lat, alt]`` (*rad*, *rad*, *m*).
        src: Sequence of ``[x, y, z]`` triples in *m*.
        num_coords: Number of coordinates to convert.
        body: Reference sphere or ellipsoid.
    """
    _, inverse = kernels_for(body)
    logger.debug(
        "Converting %d ECEF coordinates to geodetic (AoS, %s)",
        num_coords, type(body).__name__,
    )
    _convert_aos(dst, src, num_coords, inverse, body)
