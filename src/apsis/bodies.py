"""
Central Body Parameters
=======================

Immutable gravitational and geometric parameters for central bodies, with
predefined instances for common Solar System bodies.

The perturbation and drag models default to ``EARTH``; pass a different
``BodyParams`` to evaluate them about another body.

Examples
--------
>>> from apsis import EARTH, BodyParams
>>> EARTH.J(2)
0.001082616
>>> vesta = BodyParams(mu=17.8, radius=262.7, name='Vesta')
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class BodyParams:
    """
    Immutable parameters for a celestial body.

    Attributes
    ----------
    mu : float
        Gravitational parameter [km³/s²]
    radius : float
        Equatorial radius [km]
    zonal : tuple of float, optional
        Unnormalized zonal harmonic coefficients in increasing degree,
        starting at J2: (J2, J3, J4, ...) [dimensionless]
        Required for the zonal perturbation model
    rotation_rate : float, optional
        Angular rotation rate [rad/s]
    name : str, optional
        Body identifier
    """
    mu: float
    radius: float
    zonal: Tuple[float, ...] = ()
    rotation_rate: Optional[float] = None
    name: Optional[str] = None

    def __post_init__(self):
        #Validate parameters
        if self.mu <= 0:
            raise ValueError(f"Gravitational parameter must be positive, got {self.mu}")
        if self.radius <= 0:
            raise ValueError(f"Radius must be positive, got {self.radius}")
        for degree, coeff in enumerate(self.zonal, start=2):
            if abs(coeff) > 1:
                raise ValueError(f"J{degree} coefficient seems unrealistic: {coeff}")
        # normalise list input so the dataclass stays hashable
        object.__setattr__(self, 'zonal', tuple(float(c) for c in self.zonal))

    @property
    def max_degree(self) -> int:
        """Highest zonal degree available (1 if no coefficients are known)"""
        return len(self.zonal) + 1

    @property
    def J2(self) -> Optional[float]:
        """J2 zonal harmonic coefficient, or None if unknown"""
        return self.zonal[0] if self.zonal else None

    def J(self, degree: int) -> float:
        """
        Zonal harmonic coefficient of the given degree.

        Raises
        ------
        ValueError
            If the coefficient is not available for this body
        """
        if degree < 2 or degree > self.max_degree:
            raise ValueError(
                f"J{degree} not available for {self.name or 'body'}; "
                f"known degrees are 2..{self.max_degree}")
        return self.zonal[degree - 2]


"""
Predefined Solar System bodies
Earth values follow the constants used by the zonal perturbation, drag and
density models (EGM-96 style unnormalized J2-J6, km units).
Other bodies from Vallado, Fundamentals of Astrodynamics, Fifth Edition,
2022, Appendix D.
"""
EARTH = BodyParams(
    mu=398600.436,
    radius=6378.1366,
    zonal=(1082.616e-6, -2.53881e-6, -1.65597e-6, -0.15e-6, 0.57e-6),
    rotation_rate=7.2921150e-5,
    name='Earth'
)

MOON = BodyParams(
    mu=4.902799e3,
    radius=1738.0,
    zonal=(2.027e-4,),
    rotation_rate=2.661700e-6,
    name='Moon'
)

MARS = BodyParams(
    mu=4.305e4,
    radius=3397.2,
    zonal=(1.964e-3,),
    rotation_rate=7.0882181e-5,
    name='Mars'
)

SUN = BodyParams(
    mu=1.32712428e11,
    radius=6.96e5,
    name='Sun'
)
