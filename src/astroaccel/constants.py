"""
The `constants` module defines the physical constants used as defaults by the environment models.
"""

# Physical Constants
"""
Astronomical Unit. Equal to the mean distance of the Earth from the sun.
TDB-compatible value. Units: *m*

References:

1. P. Gerard and B. Luzum, *IERS Technical Note 36*, 2010
"""
AU = 1.49597870700e11  # [m] Astronomical Unit IAU 2010

# Earth Constants
"""
Earth's equatorial radius. [m]

References:

1. GGM05s Gravity Model
"""
R_EARTH = 6.378136300e6  # [m] GGM05s Value

"""
Earth's Gravitational constant [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_EARTH = 3.986004415e14  # [m^3/s^2] GGM05s Value

"""
Earth axial rotation rate. [rad/s]

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 222, 2010
"""
OMEGA_EARTH = 7.292115146706979e-5  # [rad/s] Taken from Vallado 4th Ed page 222

"""
Atmospheric density at sea level used by the exponential atmosphere. [kg/m^3]

References:

1. D. Vallado, *Fundamentals of Astrodynamics and Applications (4th Ed.)*, p. 567, 2010
"""
RHO0_EARTH = 1.225  # [kg/m^3]

"""
Scale height used by the exponential atmosphere. [m]
"""
H_EARTH = 7.2497e3  # [m]

# Sun Constants
"""
Gravitational constant of the Sun. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_SUN = 132712440041.939400 * 1e9  # Gravitational constant of the Sun

"""
Nominal solar radiation pressure at 1 AU. [N/m^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
P_SUN = 4.560e-6  # [N/m^2] (~1367 W/m^2) Solar radiation pressure at 1 AU

# Celestial Constants - from JPL DE430 Ephemerides
"""
Gravitational constant of the Moon. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_MOON = 4902.800066 * 1e9

"""
Gravitational constant of Jupiter system. [m^3/s^2]

References:

1. O. Montenbruck, and E. Gill, *Satellite Orbits: Models, Methods and
Applications*, 2012.
"""
GM_JUPITER = 126712767.863 * 1e9

"""
Standard gravitational acceleration, used to convert specific impulse to
exhaust velocity. [m/s^2]
"""
G0 = 9.80665  # [m/s^2]
