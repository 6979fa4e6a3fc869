"""
Environment and perturbation models
===================================

Closed-form environment models and perturbing accelerations for a spacecraft
near a central body:

- atmospheric_density : 1976 Standard Atmosphere curve fit [kg/m³]
- debye_length : tabulated plasma Debye length [m]
- atmospheric_drag : drag acceleration [km/s²]
- zonal_term, zonal_perturbation : J2-J6 gravity harmonics [km/s²]
- solar_radiation_pressure : SRP acceleration [km/s²]

Positions are in km and velocities in km/s, spacecraft areas in m² and
masses in kg. The drag, density and zonal models default to Earth.

Invalid inputs return NaN (or a NaN vector) and issue an
OrbitalDomainWarning, see apsis.utils.
"""

import numpy as np
from .bodies import EARTH, BodyParams
from .utils import domain_violation, nan_vector

# Solar radiation constants
SOLAR_FLUX = 1372.5398      # W/m² at 1 AU
SPEED_OF_LIGHT = 2.997e8    # m/s
RADIATION_PRESSURE_COEFF = 1.3

# Density curve fit: log10(rho) polynomial in (alt - center)/scale, highest power first
_DENSITY_CENTER = 526.8000      # km
_DENSITY_SCALE = 292.8563       # km
_DENSITY_POLY = (0.34047, -0.5889, -0.5269, 1.0036, 0.60713, -2.3024, -12.575)
_DENSITY_FIT_CEILING = 1000.0   # km, exponential tail above

# Debye length table, 200-2000 km every 50 km
_DEBYE_ALT = np.arange(200.0, 2001.0, 50.0)   # km
_DEBYE_LENGTH = np.array([
    5.64e-03, 3.92e-03, 3.24e-03, 3.59e-03, 4.04e-03, 4.28e-03, 4.54e-03,
    5.30e-03, 6.55e-03, 7.30e-03, 8.31e-03, 8.38e-03, 8.45e-03, 9.84e-03,
    1.22e-02, 1.37e-02, 1.59e-02, 1.75e-02, 1.95e-02, 2.09e-02, 2.25e-02,
    2.25e-02, 2.25e-02, 2.47e-02, 2.76e-02, 2.76e-02, 2.76e-02, 2.76e-02,
    2.76e-02, 2.76e-02, 2.76e-02, 3.21e-02, 3.96e-02, 3.96e-02, 3.96e-02,
    3.96e-02, 3.96e-02])   # m
_DEBYE_FLAT_CEILING = 30000.0   # km
_DEBYE_CEILING = 35000.0        # km


def atmospheric_density(alt):
    """
    Atmospheric density from a curve fit to the U.S. Standard Atmosphere 1976.

    Below 1000 km the log of density is a 6th order polynomial in a
    normalized altitude; above it density decays exponentially. Any altitude
    is accepted but accuracy is only claimed for 100-1000 km. Earth only.

    Parameters
    ----------
    alt : float
        Altitude [km]

    Returns
    -------
    float
        Density [kg/m³]
    """
    if alt > _DENSITY_FIT_CEILING:
        # smooth exponential drop-off
        return float(10.0**(-7e-05*alt - 14.464))
    x = (alt - _DENSITY_CENTER) / _DENSITY_SCALE
    return float(10.0**np.polyval(_DENSITY_POLY, x))


def debye_length(alt):
    """
    Debye length at a given altitude.

    Linear interpolation of tabulated values between 200 and 2000 km; the
    2000 km value is held up to 30000 km, then a linear ramp to 35000 km
    (GEO). Values above 1000 km are highly speculative.

    Parameters
    ----------
    alt : float
        Altitude [km], 200 <= alt <= 35000

    Returns
    -------
    float
        Debye length [m], or NaN outside the valid range
    """
    if alt < _DEBYE_ALT[0] or alt > _DEBYE_CEILING:
        domain_violation("debye_length", "alt", alt, "in the range [200, 35000] km")
        return np.nan
    if alt > _DEBYE_FLAT_CEILING:
        return float(0.1*alt - 2999.7)
    # np.interp clamps to the last sample above 2000 km
    return float(np.interp(alt, _DEBYE_ALT, _DEBYE_LENGTH))


def atmospheric_drag(drag_coeff, area, mass, r, v, body: BodyParams = EARTH):
    """
    Inertial atmospheric drag acceleration.

    a = -1/2 rho (Cd A / m) v² along the velocity, with rho from
    atmospheric_density at the current altitude. The atmosphere is assumed
    not to rotate.

    Parameters
    ----------
    drag_coeff : float
        Drag coefficient
    area : float
        Cross-sectional area [m²]
    mass : float
        Spacecraft mass [kg]
    r : array-like
        Inertial position [km]
    v : array-like
        Inertial velocity [km/s]
    body : BodyParams, optional
        Central body supplying the reference radius (default EARTH)

    Returns
    -------
    np.ndarray
        Drag acceleration [km/s²]; NaN vector if r lies inside the body
    """
    r = np.asarray(r, dtype=float)
    v = np.asarray(v, dtype=float)
    r_mag = np.linalg.norm(r)
    v_mag = np.linalg.norm(v)
    alt = r_mag - body.radius
    if alt <= 0:
        domain_violation("atmospheric_drag", "r", np.array2string(r),
                         f"a position with positive altitude above {body.name or 'the body'}")
        return nan_vector()
    if v_mag == 0:
        return np.zeros(3)
    density = atmospheric_density(alt)
    # magnitude in km/s², velocity converted to m/s for the density units
    ad = (-0.5 * density * (drag_coeff*area/mass) * (v_mag*1000.)**2) / 1000.
    return ad * v / v_mag


def zonal_term(r, degree, body: BodyParams = EARTH):
    """
    Acceleration due to a single zonal harmonic J_n, 2 <= n <= 6.

    Parameters
    ----------
    r : array-like
        Body-fixed position [km]; only z along the spin axis matters
    degree : int
        Harmonic degree n
    body : BodyParams, optional
        Central body (default EARTH)

    Returns
    -------
    np.ndarray
        Acceleration [km/s²]; NaN vector for an unsupported degree
    """
    if degree not in _ZONAL_TERMS:
        domain_violation("zonal_term", "degree", degree, "2 <= degree <= 6")
        return nan_vector()
    if degree > body.max_degree:
        domain_violation("zonal_term", "degree", degree,
                         f"at most {body.max_degree} for {body.name or 'this body'}")
        return nan_vector()
    r = np.asarray(r, dtype=float)
    r_mag = np.linalg.norm(r)
    x, y, z = r / r_mag
    coeff, shape = _ZONAL_TERMS[degree]
    scale = coeff * body.J(degree) * (body.mu/r_mag**2) * (body.radius/r_mag)**degree
    return scale * shape(x, y, z)


def zonal_perturbation(r, degree, body: BodyParams = EARTH):
    """
    Total zonal harmonic perturbation from J2 up to J_degree.

    Terms are accumulated in increasing degree, so degree 3 is J2 + J3 and
    degree 6 is J2 + ... + J6.

    Parameters
    ----------
    r : array-like
        Body-fixed position [km]
    degree : int
        Highest harmonic degree to include, 2 <= degree <= 6
    body : BodyParams, optional
        Central body (default EARTH)

    Returns
    -------
    np.ndarray
        Acceleration [km/s²]; NaN vector for an unsupported degree
    """
    if degree not in _ZONAL_TERMS:
        domain_violation("zonal_perturbation", "degree", degree, "2 <= degree <= 6")
        return nan_vector()
    if degree > body.max_degree:
        domain_violation("zonal_perturbation", "degree", degree,
                         f"at most {body.max_degree} for {body.name or 'this body'}")
        return nan_vector()
    total = np.zeros(3)
    for n in range(2, degree + 1):
        total = total + zonal_term(r, n, body)
    return total


def solar_radiation_pressure(area, mass, sun_vec):
    """
    Inertial solar radiation pressure acceleration.

    Flux falls off with the square of the Sun distance; the acceleration is
    along the Sun-body line with the same components as sun_vec.
    Equations from Earth Planets and Space, Vol. 51, 1999, pp. 979-986.

    Parameters
    ----------
    area : float
        Sun-facing cross-sectional area [m²]
    mass : float
        Spacecraft mass [kg]
    sun_vec : array-like
        Position vector from the Sun to the orbiting planet [AU]

    Returns
    -------
    np.ndarray
        Acceleration [km/s²]
    """
    sun_vec = np.asarray(sun_vec, dtype=float)
    sun_dist = np.linalg.norm(sun_vec)
    scale = (-RADIATION_PRESSURE_COEFF*area*SOLAR_FLUX) / (mass*SPEED_OF_LIGHT*sun_dist**3) / 1000.
    return scale * sun_vec


# closed-form zonal terms: degree -> (coefficient, direction polynomial in unit vector)
_ZONAL_TERMS = {
    2: (-3./2., lambda x, y, z: np.array([
        (1 - 5*z**2)*x,
        (1 - 5*z**2)*y,
        (3 - 5*z**2)*z])),
    3: (1./2., lambda x, y, z: np.array([
        5*(7*z**3 - 3*z)*x,
        5*(7*z**3 - 3*z)*y,
        -3*(10*z**2 - (35./3.)*z**4 - 1)])),
    4: (5./8., lambda x, y, z: np.array([
        (3 - 42*z**2 + 63*z**4)*x,
        (3 - 42*z**2 + 63*z**4)*y,
        (15 - 70*z**2 + 63*z**4)*z])),
    5: (1./8., lambda x, y, z: np.array([
        3*(35*z - 210*z**3 + 231*z**5)*x,
        3*(35*z - 210*z**3 + 231*z**5)*y,
        -(15 - 315*z**2 + 945*z**4 - 693*z**6)])),
    6: (-1./16., lambda x, y, z: np.array([
        (35 - 945*z**2 + 3465*z**4 - 3003*z**6)*x,
        (35 - 945*z**2 + 3465*z**4 - 3003*z**6)*y,
        -(3003*z**6 - 4851*z**4 + 2205*z**2 - 245)*z])),
}
