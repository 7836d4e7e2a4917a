"""
The `constants` module defines the mathematical, geodetic and geomagnetic
constants used by the field models.
"""

from jax.numpy import pi as PI

# Mathematical Constants
"""
Constant to convert degrees to radians. Equal to 2pi/360. Units: *rad/deg*
"""
DEG2RAD = 2.0 * PI / 360.0

"""
Constant to convert radians to degrees. Equal to 360/2pi. Units: *deg/rad*
"""
RAD2DEG = 360.0 / (PI * 2.0)

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

# Geomagnetic Constants
"""
Reference radius of the IGRF spherical harmonic expansion. [km]

References:

1. P. Alken et al., *International Geomagnetic Reference Field: the
thirteenth generation*, Earth, Planets and Space 73, 2021.
"""
IGRF_REFERENCE_RADIUS = 6371.2  # [km] mean Earth radius of the expansion

"""
Square of the equatorial radius of the ellipsoid used to convert geodetic
to geocentric coordinates in IGRF synthesis. [km^2]
"""
IGRF_A2 = 40680631.6  # [km^2] 6378.137^2, WGS-84

"""
Square of the polar radius of the ellipsoid used to convert geodetic to
geocentric coordinates in IGRF synthesis. [km^2]
"""
IGRF_B2 = 40408296.0  # [km^2] 6356.752^2, WGS-84

"""
Smallest geocentric radius accepted by the field synthesis: the radius of
the core-mantle boundary, below which the potential field representation
does not apply. [km]
"""
MIN_GEOCENTRIC_RADIUS = 3485.0  # [km]

"""
Vacuum permeability divided by 4pi. [T m/A]
"""
MU0_4PI = 1.0e-7
