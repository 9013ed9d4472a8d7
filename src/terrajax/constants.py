"""
The `constants` module defines the reference-body parameters used by terrajax.
"""

# Earth Constants
"""
Earth's semi-major axis as defined by the WGS84 geodetic system. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_a = 6378137.0  # WGS-84 semi-major axis

"""
Earth's ellipsoidal flattening.  WGS84 Value.

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_f = 1.0 / 298.257223563  # WGS-84 flattening

"""
Earth's semi-minor (polar) axis derived from the WGS84 semi-major axis and
flattening. [m]

References:

1. NIMA Technical Report TR8350.2
"""
WGS84_b = WGS84_a * (1.0 - WGS84_f)  # ~6356752.314245 m
