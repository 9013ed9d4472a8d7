"""Reference-body models approximating a planet.

Provides the two body models used by the coordinate transformations:

- :class:`Sphere`: a perfect sphere defined by its radius.
- :class:`Ellipsoid`: an oblate ellipsoid of revolution defined by its
  semi-major (equatorial) and semi-minor (polar) axes.

Both types are :class:`~typing.NamedTuple` instances, which JAX treats as
pytrees automatically, so they can be passed straight into ``jax.jit``,
``jax.vmap`` and ``jax.lax`` control flow.

Neither type validates its parameters.  Negative or degenerate radii and
axes are accepted as given and propagate to ``nan``/``inf`` through the
transform formulas.
"""

from __future__ import annotations

from typing import NamedTuple

from terrajax.constants import WGS84_a, WGS84_b


class Sphere(NamedTuple):
    """Body approximated as a perfect sphere.

    Attributes:
        radius: Radius of the sphere. Units: *m* (or any linear unit, as
            long as altitudes and ECEF coordinates use the same one).
    """

    radius: float


class Ellipsoid(NamedTuple):
    """Body approximated as an oblate ellipsoid of revolution.

    The polar axis of the ellipsoid is aligned with the ECEF z-axis.
    ``major >= minor`` is expected but not enforced.

    Attributes:
        major: Semi-major (equatorial) axis. Units: *m*
        minor: Semi-minor (polar) axis. Units: *m*
    """

    major: float
    minor: float

    @classmethod
    def from_flattening(cls, major: float, flattening: float) -> Ellipsoid:
        """Build an ellipsoid from its semi-major axis and flattening.

        Args:
            major: Semi-major axis. Units: *m*
            flattening: Flattening ``f = (a - b) / a``. Units: *dimensionless*

        Returns:
            Ellipsoid: Ellipsoid with ``minor = major * (1 - flattening)``.

        Example:
            >>> from terrajax.bodies import Ellipsoid
            >>> e = Ellipsoid.from_flattening(6378137.0, 1.0 / 298.257223563)
            >>> round(e.minor, 3)
            6356752.314
        """
        return cls(major, major * (1.0 - flattening))

    @property
    def flattening(self):
        """Flattening ``f = (a - b) / a``. Units: *dimensionless*"""
        return (self.major - self.minor) / self.major

    @property
    def eccentricity_squared(self):
        """First eccentricity squared ``e^2 = (a^2 - b^2) / a^2``."""
        a2 = self.major * self.major
        b2 = self.minor * self.minor
        return (a2 - b2) / a2

    @property
    def second_eccentricity_squared(self):
        """Second eccentricity squared ``e'^2 = (a^2 - b^2) / b^2``."""
        a2 = self.major * self.major
        b2 = self.minor * self.minor
        return (a2 - b2) / b2


# Sphere with radius equal to the WGS84 semi-major axis
WGS84_SPHERE = Sphere(WGS84_a)

# WGS84 reference ellipsoid
WGS84_ELLIPSOID = Ellipsoid(WGS84_a, WGS84_b)
