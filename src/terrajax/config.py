"""Module-wide floating-point precision configuration.

Provides ``set_dtype`` and ``get_dtype`` to control the float dtype used
throughout terrajax.  The default is ``jnp.float32`` for GPU/TPU
compatibility.  Switching to ``jnp.float64`` automatically enables
JAX's 64-bit mode (``jax_enable_x64``).

Call ``set_dtype`` **before** any JIT compilation, just like JAX's own
``jax.config.update("jax_enable_x64", True)``.  Under JIT, ``get_dtype()``
runs during tracing and its result is baked into the compiled program.
JAX retraces when input dtypes change, so passing float64 inputs after
``set_dtype(jnp.float64)`` triggers a correct retrace.

Reference-body parameters are cast to the active dtype inside every
transform, so a single :class:`~terrajax.bodies.Ellipsoid` instance serves
both single- and double-precision conversions.
"""

from __future__ import annotations

import logging

import jax
import jax.numpy as jnp

logger = logging.getLogger(__name__)

_VALID_DTYPES = (jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64)

_dtype = jnp.float32


def set_dtype(dtype) -> None:
    """Set the module-wide float dtype for terrajax.

    Must be called **before** any ``jax.jit`` compilation.  In eager mode
    the change takes effect immediately.  Under JIT, ``get_dtype()`` runs
    during tracing and its value is baked into the compiled program.

    If *dtype* is ``jnp.float64``, JAX's 64-bit mode is automatically
    enabled via ``jax.config.update("jax_enable_x64", True)``.

    Args:
        dtype: One of ``jnp.float16``, ``jnp.bfloat16``, ``jnp.float32``,
            or ``jnp.float64``.

    Raises:
        ValueError: If *dtype* is not a supported float type.
    """
    global _dtype
    if dtype not in _VALID_DTYPES:
        raise ValueError(
            f"Unsupported dtype {dtype}. Must be one of: "
            f"jnp.float16, jnp.bfloat16, jnp.float32, jnp.float64"
        )
    if dtype == jnp.float64:
        jax.config.update("jax_enable_x64", True)
    _dtype = dtype
    logger.debug("terrajax float dtype set to %s", jnp.dtype(dtype).name)


def get_dtype():
    """Return the current module-wide float dtype.

    Returns:
        The active float dtype (default ``jnp.float32``).
    """
    return _dtype


def get_roundtrip_tolerance() -> tuple[float, float]:
    """Return the dtype-adaptive tolerance for geodetic/ECEF round trips.

    The tolerance applies to Earth-sized bodies (lengths of order 1e7 m)
    and scales with the precision of the configured float dtype:

    - ``float16``:  0.1 rad, 1e5 m
    - ``bfloat16``: 0.1 rad, 1e5 m
    - ``float32``:  1e-5 rad, 5.0 m
    - ``float64``:  1e-9 rad, 1e-5 m

    Returns:
        tuple[float, float]: ``(angle_tol, length_tol)`` in *rad* and *m*.
    """
    if _dtype == jnp.float64:
        return 1e-9, 1e-5
    if _dtype == jnp.float32:
        return 1e-5, 5.0
    # float16 and bfloat16
    return 1e-1, 1e5
