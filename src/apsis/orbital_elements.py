'''Classical orbital element record and conversions to and from a
Cartesian position/velocity state'''

import numpy as np
from enum import Enum
from .config import config
from .bodies import EARTH
from .utils import validation_error
from . import anomalies


# define an enumerated list of orbit regimes
class OrbitRegime(Enum):
    CIRCULAR = 'circular'                            # e = 0, a > 0
    ELLIPTIC = 'elliptic'                            # 0 < e < 1, a > 0
    RECTILINEAR_ELLIPTIC = 'rectilinear_elliptic'    # e = 1, a > 0, nu = E
    PARABOLIC = 'parabolic'                          # e = 1, a = -rp
    HYPERBOLIC = 'hyperbolic'                        # e > 1, a < 0
    RECTILINEAR_HYPERBOLIC = 'rectilinear_hyperbolic'  # e = 1, a < 0, nu = H
    RECTILINEAR_PARABOLIC = 'rectilinear_parabolic'    # e = 1, a = -r0, nu = D, r = r0 D²

    @property
    def is_rectilinear(self):
        return self in (OrbitRegime.RECTILINEAR_ELLIPTIC,
                        OrbitRegime.RECTILINEAR_HYPERBOLIC,
                        OrbitRegime.RECTILINEAR_PARABOLIC)

    @property
    def is_closed(self):
        return self in (OrbitRegime.CIRCULAR, OrbitRegime.ELLIPTIC,
                        OrbitRegime.RECTILINEAR_ELLIPTIC)


def classify_regime(a, e):
    """
    Classify an (a, e) pair by the legacy element convention.

    e == 1 with a > 0 is the rectilinear ellipse (anomaly field holds the
    eccentric anomaly); e == 1 with a <= 0 is the parabola, a carrying the
    negative periapsis radius. The rectilinear hyperbola and the radial
    parabola cannot be told apart from the parabola this way and need an
    explicit regime.
    """
    if e == 1:
        return OrbitRegime.RECTILINEAR_ELLIPTIC if a > 0 else OrbitRegime.PARABOLIC
    if e <= config.DEGENERACY_TOLERANCE:
        return OrbitRegime.CIRCULAR
    if e < 1:
        return OrbitRegime.ELLIPTIC
    return OrbitRegime.HYPERBOLIC


#define basic orbital element class
class OrbitalElements:
    """
    Classical orbital elements [a, e, i, Ω, ω, ν] of a two-body orbit

    The anomaly field ν is the true anomaly except for rectilinear orbits,
    where it holds the eccentric (elliptic) or hyperbolic anomaly, or for a
    radial parabola the parameter D with r = |a| D². For the parabolic regime
    a holds the negative periapsis radius. The regime is
    classified from (a, e) unless given explicitly.
    OrbitalElements is immutable, extract elements using numpy methods and create a
    new instance to change
    """
    # Default gravitational parameter (Earth)
    DEFAULT_MU = EARTH.mu  # km³/s²

    _NAMES = ('a', 'e', 'i', 'omega', 'w', 'nu')

    # ========== CONSTRUCTION ==========
    def __init__(self, elements=None, regime=None, validate=True, **kwargs):
        """
        Create orbital elements.

        Can be called in two ways:

        1. Array-based:
        OrbitalElements([7000, 0.01, 0.5, 0, 0, 0])

        2. Named parameters:
        OrbitalElements(a=7000, e=0.01, i=0.5, omega=0, w=0, nu=0)

        Parameters
        ----------
        elements : array-like, optional
            6-element array [a, e, i, Ω, ω, ν]
        regime : OrbitRegime or str, optional
            Orbit regime; classified from (a, e) if omitted
        validate : bool, optional
            Whether to validate elements (default True)
        **kwargs : dict
            Named parameters a, e, i, omega (RAAN), w (argument of
            periapsis), nu (anomaly)
        """
        if elements is not None:
            self.elements = np.array(elements, dtype=float)
        elif kwargs:
            self.elements = self._from_named_params(kwargs)
        else:
            raise ValueError(
                "Must provide either an elements array [a, e, i, omega, w, nu] "
                "or named parameters (a, e, i, omega, w, nu)"
            )
        if self.elements.shape != (6,):
            raise ValueError("Orbital elements must be 6-element vector")
        # Ensure immutability of elements array
        self.elements.flags.writeable = False

        if regime is None:
            self._regime = classify_regime(self.elements[0], self.elements[1])
        else:
            self._regime = self._parse_regime(regime)
        # run validation checks on input parameters (if not flagged otherwise)
        if validate:
            self._validate()

    @classmethod
    def from_state(cls, r, v, mu=None):
        """
        Create orbital elements from an inertial position/velocity state.

        Args:
            r: position vector [km]
            v: velocity vector [km/s]
            mu: Gravitational parameter (optional, defaults to Earth)

        Returns:
            OrbitalElements instance
        """
        return state_to_elements(cls.DEFAULT_MU if mu is None else mu, r, v)

    @classmethod
    def from_mean_anomaly(cls, a, e, i, omega, w, M, validate=True):
        """
        Create orbital elements from a mean (or mean hyperbolic) anomaly.

        Solves Kepler's equation for the true anomaly. Only circular,
        elliptic and hyperbolic orbits are supported; other eccentricities
        yield a NaN anomaly and a domain warning.
        """
        nu = anomalies.mean_to_true(M, e)
        return cls([a, e, i, omega, w, nu], validate=validate)

    @classmethod
    def from_numpy(cls, array, validate=True):
        """
        Create list of OrbitalElements from NumPy array.

        Parameters
        ----------
        array : np.ndarray
            Array of shape (n_orbits, 6)
        validate: bool, optional, defaults to True

        Returns
        -------
        list of OrbitalElements
        """
        array = np.asarray(array)
        if array.ndim != 2 or array.shape[1] != 6:
            raise ValueError(f"Array must have shape (n, 6), got {array.shape}")
        return [cls(row, validate=validate) for row in array]

    # ========== VALIDATION ==========
    def _validate(self):
        """Check if elements are consistent with their regime
        Failures are reported through validation_error, so they warn by
        default and raise under config.STRICT_VALIDATION
        """
        if not np.all(np.isfinite(self.elements)):
            validation_error("Elements contain NaN or Inf", stacklevel=4)
            return
        a, e, i, omega, w, nu = self.elements
        regime = self._regime
        if e < 0:
            validation_error(f"Eccentricity must be non-negative, got e={e}",
                             stacklevel=4)
        if i < 0 or i > np.pi:
            validation_error(f"Inclination out of range [0, pi], got i={i}",
                             stacklevel=4)
        if regime in (OrbitRegime.CIRCULAR, OrbitRegime.ELLIPTIC):
            if e >= 1 or a <= 0:
                validation_error(f"{regime.value.capitalize()} orbit requires "
                                 f"0 <= e < 1 and a > 0, got a={a}, e={e}",
                                 stacklevel=4)
        elif regime == OrbitRegime.HYPERBOLIC:
            if e <= 1 or a >= 0:
                validation_error(f"Hyperbolic orbit requires e > 1 and a < 0, "
                                 f"got a={a}, e={e}", stacklevel=4)
            elif 1 + e*np.cos(nu) <= 0:
                validation_error(f"True anomaly nu={nu} lies beyond the "
                                 f"asymptotes of the hyperbola (e={e})",
                                 stacklevel=4)
        else:
            if e != 1:
                validation_error(f"{regime.value.capitalize()} orbit requires "
                                 f"e = 1, got e={e}", stacklevel=4)
            positive = regime == OrbitRegime.RECTILINEAR_ELLIPTIC
            if (positive and a <= 0) or (not positive and a >= 0):
                sign = "a > 0" if positive else "a < 0"
                validation_error(f"{regime.value.capitalize()} orbit requires "
                                 f"{sign}, got a={a}", stacklevel=4)

    # ========== STATE CONVERSIONS ==========
    def to_state(self, mu=None):
        """
        Convert to inertial position and velocity vectors.

        Returns
        -------
        r, v : np.ndarray
            Position [km] and velocity [km/s]
        """
        return elements_to_state(self.DEFAULT_MU if mu is None else mu, self)

    def to_cartesian(self, mu=None):
        """Cartesian state as one array [x, y, z, vx, vy, vz]"""
        return np.concatenate(self.to_state(mu))

    # ========== PROPERTY ACCESS ==========
    @property
    def a(self):
        """Semi-major axis [km] (negative periapsis radius for parabolas)"""
        return self.elements[0]

    @property
    def e(self):
        """Eccentricity"""
        return self.elements[1]

    @property
    def i(self):
        """Inclination [rad]"""
        return self.elements[2]

    @property
    def omega(self):
        """Right ascension of the ascending node [rad]"""
        return self.elements[3]

    @property
    def w(self):
        """Argument of periapsis [rad]"""
        return self.elements[4]

    @property
    def nu(self):
        """Anomaly [rad]: true, or eccentric/hyperbolic for rectilinear orbits"""
        return self.elements[5]

    @property
    def regime(self):
        """Orbit regime (OrbitRegime)"""
        return self._regime

    # ========== ORBITAL PROPERTIES ==========
    @property
    def semi_latus_rectum(self):
        """Semi-latus rectum p [km]; zero for rectilinear orbits"""
        a, e = self.elements[0], self.elements[1]
        if self._regime.is_rectilinear:
            return 0.0
        if self._regime == OrbitRegime.PARABOLIC:
            return -2*a
        return a*(1 - e**2)

    @property
    def periapsis_radius(self):
        """Periapsis radius [km]"""
        a, e = self.elements[0], self.elements[1]
        if self._regime == OrbitRegime.PARABOLIC:
            return -a
        if self._regime.is_rectilinear:
            return 0.0
        return a*(1 - e)

    @property
    def mean_anomaly(self):
        """
        Mean anomaly [rad] matching the anomaly field

        Elliptic orbits give M, hyperbolic ones the mean hyperbolic anomaly N,
        parabolas Barker's tan(ν/2) + tan³(ν/2)/3 and radial parabolas D³/3.
        """
        e, nu = self.elements[1], self.elements[5]
        if self._regime == OrbitRegime.RECTILINEAR_ELLIPTIC:
            return nu - np.sin(nu)
        if self._regime == OrbitRegime.RECTILINEAR_HYPERBOLIC:
            return np.sinh(nu) - nu
        if self._regime == OrbitRegime.PARABOLIC:
            D = np.tan(nu/2)
            return D + D**3/3
        if self._regime == OrbitRegime.RECTILINEAR_PARABOLIC:
            return nu**3/3
        return anomalies.true_to_mean(nu, e)

    def specific_energy(self, mu=None):
        """Calculate specific orbital energy (energy per unit mass)"""
        mu = self.DEFAULT_MU if mu is None else mu
        if self._regime in (OrbitRegime.PARABOLIC,
                            OrbitRegime.RECTILINEAR_PARABOLIC):
            return 0.0
        return -mu / (2 * self.elements[0])

    def specific_angular_momentum(self, mu=None):
        """
        Calculate specific angular momentum magnitude

        Returns h = sqrt(mu * p)
        """
        mu = self.DEFAULT_MU if mu is None else mu
        return np.sqrt(mu * self.semi_latus_rectum)

    def orbital_period(self, mu=None):
        """
        Calculate orbital period

        Returns period in seconds (only for closed orbits)
        """
        if not self._regime.is_closed:
            raise ValueError("Orbital period undefined for parabolic/hyperbolic orbits")
        mu = self.DEFAULT_MU if mu is None else mu
        return 2 * np.pi * np.sqrt(self.elements[0]**3 / mu)

    def mean_motion(self, mu=None):
        """
        Calculate mean motion (n = √(μ/|a|³))

        Returns
        -------
        float
            Mean motion [rad/s]

        Raises
        ------
        ValueError
            If called on a parabolic orbit
        """
        if self._regime in (OrbitRegime.PARABOLIC,
                            OrbitRegime.RECTILINEAR_PARABOLIC):
            raise ValueError("Mean motion undefined for parabolic orbits")
        mu = self.DEFAULT_MU if mu is None else mu
        return np.sqrt(mu / abs(self.elements[0])**3)

    # ========== BATCH OPERATIONS ==========
    class Batch:
        """
        Batch operations on collections of OrbitalElements.

        All methods accept a list of OrbitalElements and return
        a list of OrbitalElements or computed values.
        """
        @staticmethod
        def to_cartesian(orbits, mu=None):
            """Cartesian states of multiple orbits, shape (n, 6)"""
            return np.array([o.to_cartesian(mu) for o in orbits])

        @staticmethod
        def mean_anomaly(orbits):
            """Get mean anomalies for multiple orbits"""
            return np.array([o.mean_anomaly for o in orbits])

        @staticmethod
        def to_numpy(orbits):
            """
            Convert list of OrbitalElements to NumPy array.

            Returns
            -------
            np.ndarray
                Array of shape (n_orbits, 6); regimes are not included
            """
            return np.array([o.elements for o in orbits])

        @staticmethod
        def to_dataframe(orbits, index=None):
            """
            Convert list of OrbitalElements to pandas DataFrame.

            Parameters
            ----------
            orbits : list of OrbitalElements
                List of orbital elements
            index : array-like, optional
                Index for the DataFrame (e.g., time values).
                If None, uses integer index.

            Returns
            -------
            pd.DataFrame
                Columns ['a', 'e', 'i', 'omega', 'w', 'nu', 'regime']

            Raises
            ------
            ValueError
                If index length doesn't match number of orbits
            """
            # pandas isn't needed unless this function is used
            try:
                import pandas as pd
            except ImportError:
                raise ImportError("pandas required for to_dataframe()")
            columns = list(OrbitalElements._NAMES) + ['regime']
            # check for empty list input and return empty DataFrame
            if not orbits:
                return pd.DataFrame(columns=columns)

            # Validate index length
            if index is not None:
                if len(index) != len(orbits):
                    raise ValueError(
                        f"Index length ({len(index)}) must match "
                        f"number of orbits ({len(orbits)})"
                    )

            df = pd.DataFrame(np.array([o.elements for o in orbits]),
                              columns=columns[:6], index=index)
            df['regime'] = [o.regime.value for o in orbits]
            return df

    # ========== SPECIAL METHODS ==========
    def __len__(self):
        #Length of element vector (always 6)
        return 6

    def __getitem__(self, key):
        #Allow indexing like orbit[0]
        return self.elements[key]

    def __iter__(self):
        #Allow iteration over elements
        return iter(self.elements)

    def __repr__(self):
        #Machine-readable representation
        return f"OrbitalElements({self.elements.tolist()}, {self._regime})"

    def __str__(self):
        #Human-readable representation
        a, e, i, omega, w, nu = self.elements
        if self._regime == OrbitRegime.RECTILINEAR_ELLIPTIC:
            anom = "E    "
        elif self._regime == OrbitRegime.RECTILINEAR_HYPERBOLIC:
            anom = "H    "
        elif self._regime == OrbitRegime.RECTILINEAR_PARABOLIC:
            anom = "D    "
        else:
            anom = "ν    "
        return (f"Keplerian Elements ({self._regime.value}):\n"
                f"  a     = {a:12.4f} km\n"
                f"  e     = {e:12.6f}\n"
                f"  i     = {np.degrees(i):12.4f}°\n"
                f"  RAAN  = {np.degrees(omega):12.4f}°\n"
                f"  ω     = {np.degrees(w):12.4f}°\n"
                f"  {anom} = {np.degrees(nu):12.4f}°")

    def __eq__(self, other):
        #Check equality with tolerance
        if not isinstance(other, OrbitalElements):
            return False
        return (self._regime == other._regime and
                np.allclose(self.elements, other.elements,
                            rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL))

    def __hash__(self):
        #Hash with rounding to match equality
        rounded = tuple(round(float(x), config.HASH_DECIMALS) for x in self.elements)
        return hash((self._regime, rounded))

    # ========== STATIC METHODS ==========
    @staticmethod
    def _parse_regime(regime):
        """Convert string or enum to OrbitRegime enum"""
        if isinstance(regime, OrbitRegime):
            return regime
        elif isinstance(regime, str):
            try:
                return OrbitRegime(regime.lower())
            except ValueError:
                raise ValueError(f"Unknown orbit regime '{regime}'. "
                                 f"Use: {[r.value for r in OrbitRegime]}")
        else:
            raise TypeError(f"regime must be OrbitRegime or str, "
                            f"got {type(regime)}")

    @staticmethod
    def _from_named_params(kwargs):
        """Convert named parameters to elements array"""
        missing = [k for k in OrbitalElements._NAMES if k not in kwargs]
        if missing:
            raise ValueError(
                f"Could not build elements from parameters: {list(kwargs.keys())}\n"
                f"Missing: {missing}; "
                f"Keplerian requires: {list(OrbitalElements._NAMES)}"
            )
        return np.array([kwargs[k] for k in OrbitalElements._NAMES], dtype=float)


# ========== CONVERSION FUNCTIONS ==========
def _perifocal_to_inertial(omega, i, w):
    """DCM from the perifocal frame to the inertial frame, R3(Ω) R1(i) R3(ω)"""
    # rotation about z-axis by RAAN
    R3_omega = np.array([
        [np.cos(omega), -np.sin(omega), 0],
        [np.sin(omega),  np.cos(omega), 0],
        [0,              0,             1]
    ])
    # rotation about x-axis by inclination
    R1_i = np.array([
        [1,  0,          0         ],
        [0,  np.cos(i), -np.sin(i) ],
        [0,  np.sin(i),  np.cos(i) ]
    ])
    # rotation about z-axis by argument of periapsis
    R3_w = np.array([
        [np.cos(w), -np.sin(w), 0],
        [np.sin(w),  np.cos(w), 0],
        [0,          0,         1]
    ])
    return R3_omega @ R1_i @ R3_w


def elements_to_state(mu, elements):
    """
    Convert classical orbital elements to inertial position and velocity.

    Handles every regime:
        circular:               e = 0           a > 0
        elliptical-2D:          0 < e < 1       a > 0
        elliptical-1D:          e = 1           a > 0     nu = Ecc. Anom.
        parabolic:              e = 1           a = -rp
        hyperbolic:             e > 1           a < 0
        hyperbolic-1D:          e = 1           a < 0     nu = Hyp. Anom.
                                                          (explicit regime)
        parabolic-1D:           e = 1           a = -r0   nu = D, r = r0 D²
                                                          (explicit regime)

    Parameters
    ----------
    mu : float
        Gravitational parameter [km³/s²]
    elements : OrbitalElements or array-like
        [a, e, i, Ω, ω, ν]; arrays are classified by the (a, e) convention

    Returns
    -------
    r, v : np.ndarray
        Inertial position [km] and velocity [km/s]
    """
    if not isinstance(elements, OrbitalElements):
        elements = OrbitalElements(elements, validate=False)
    a, e, i, omega, w, nu = elements.elements
    regime = elements.regime
    DCM = _perifocal_to_inertial(omega, i, w)

    if regime.is_rectilinear:
        # motion along the line of apsides
        ir = DCM[:, 0]
        if regime == OrbitRegime.RECTILINEAR_ELLIPTIC:
            r_mag = a*(1 - e*np.cos(nu))
            outbound = np.sin(nu) > 0
            v_mag = np.sqrt(2*mu/r_mag - mu/a)
        elif regime == OrbitRegime.RECTILINEAR_PARABOLIC:
            # zero energy, a holds the reference radius
            r_mag = -a*nu**2
            outbound = nu > 0
            v_mag = np.sqrt(2*mu/r_mag)
        else:
            r_mag = a*(1 - e*np.cosh(nu))
            outbound = nu > 0
            v_mag = np.sqrt(2*mu/r_mag - mu/a)
        if not outbound:
            v_mag = -v_mag
        return r_mag*ir, v_mag*ir

    # find semi-latus rectum
    if regime == OrbitRegime.PARABOLIC:
        p = -2*a
    else:
        p = a*(1 - e**2)
    # find position in perifocal frame
    r_mag = p / (1 + e*np.cos(nu))
    rvec = np.array([r_mag*np.cos(nu), r_mag*np.sin(nu), 0])
    # find velocity in perifocal frame
    vvec = np.array([-np.sqrt(mu/p) * np.sin(nu),
                     np.sqrt(mu/p) * (e + np.cos(nu)), 0])
    # rotate from perifocal frame to inertial frame
    return DCM @ rvec, DCM @ vvec


def state_to_elements(mu, r, v):
    """
    Convert an inertial position/velocity state to classical orbital elements.

    Degenerate geometry is resolved rather than rejected:
        - parabolic (|2 - r v²/μ| <= tol): a = -rp, e = 1
        - rectilinear (|h| <= tol |r||v|): the perifocal frame is built from
          the radial direction and whichever of z, y is less parallel to it;
          e = 1 and nu holds the eccentric (2/r > v²/μ) or hyperbolic anomaly;
          at escape speed a = -r and nu = ±1 is the parabolic parameter D
        - circular (e <= tol): the radial direction replaces the eccentricity
          vector, so nu = 0 and ω carries the argument of latitude
        - equatorial: Ω = 0 and ω is measured from the x-axis

    tol is config.DEGENERACY_TOLERANCE.

    Parameters
    ----------
    mu : float
        Gravitational parameter [km³/s²]
    r, v : array-like
        Inertial position [km] and velocity [km/s], r nonzero

    Returns
    -------
    OrbitalElements
        With an explicit regime
    """
    tol = config.DEGENERACY_TOLERANCE
    rvec = np.asarray(r, dtype=float)
    vvec = np.asarray(v, dtype=float)
    r_mag = np.linalg.norm(rvec)
    v_mag = np.linalg.norm(vvec)
    ir = rvec / r_mag

    # angular momentum and (scaled) eccentricity vectors
    hvec = np.cross(rvec, vvec)
    h = np.linalg.norm(hvec)
    cvec = np.cross(vvec, hvec) - mu*ir
    e = np.linalg.norm(cvec) / mu
    # inverse semi-major axis from the energy equation
    ai = 2/r_mag - np.dot(vvec, vvec)/mu

    rectilinear = h <= tol*r_mag*v_mag
    parabolic = abs(ai)*r_mag <= tol

    if parabolic and rectilinear:
        # radial escape: the current radius scales r = |a| D²
        a = -r_mag
    elif parabolic:
        # a is not defined for parabola, so -rp is returned instead
        a = -h**2/(2*mu)
        e = 1.0
    else:
        a = 1/ai

    if rectilinear:
        e = 1.0
        ie = ir
        # ih and ip are arbitrary
        ih = np.cross(ie, [0.0, 0.0, 1.0])
        ip = np.cross(ie, [0.0, 1.0, 0.0])
        if np.linalg.norm(ih) > np.linalg.norm(ip):
            ih = ih / np.linalg.norm(ih)
        else:
            ih = ip / np.linalg.norm(ip)
        ip = np.cross(ih, ie)
    else:
        ih = hvec / h
        if e > tol:
            ie = cvec / np.linalg.norm(cvec)
        else:
            # circular orbit: any ie perpendicular to ih will do
            ie = ir
        ip = np.cross(ih, ie)

    # 3-1-3 orbit plane orientation angles
    i = np.arccos(np.clip(ih[2], -1.0, 1.0))
    if np.hypot(ih[0], ih[1]) <= config.SNAP_TO_EQUATORIAL:
        omega = 0.0
        w = np.arctan2(ih[2]*ie[1], ie[0])
    else:
        omega = np.arctan2(ih[0], -ih[1])
        w = np.arctan2(ie[2], ip[2])

    if rectilinear:
        if parabolic:
            regime = OrbitRegime.RECTILINEAR_PARABOLIC
            nu = -1.0 if np.dot(rvec, vvec) < 0 else 1.0
        elif ai > 0:
            regime = OrbitRegime.RECTILINEAR_ELLIPTIC
            nu = np.arccos(np.clip(1 - r_mag*ai, -1.0, 1.0))
            if np.dot(rvec, vvec) < 0:
                nu = 2*np.pi - nu
        else:
            regime = OrbitRegime.RECTILINEAR_HYPERBOLIC
            nu = np.arccosh(max(1 - r_mag*ai, 1.0))
            if np.dot(rvec, vvec) < 0:
                nu = -nu
    else:
        nu = np.arctan2(np.dot(np.cross(ie, ir), ih), np.dot(ie, ir))
        if parabolic:
            regime = OrbitRegime.PARABOLIC
        elif e <= tol:
            regime = OrbitRegime.CIRCULAR
        elif e < 1:
            regime = OrbitRegime.ELLIPTIC
        else:
            regime = OrbitRegime.HYPERBOLIC

    return OrbitalElements([a, e, i, omega, w, nu], regime=regime, validate=False)


# short aliases
elem2rv = elements_to_state
rv2elem = state_to_elements
