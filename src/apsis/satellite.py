'''Satellite physical properties for the non-gravitational force models'''

import numpy as np
from typing import Optional
from .bodies import EARTH, BodyParams
from .config import config
from .environment import atmospheric_drag, solar_radiation_pressure


class Satellite:
    """
    Represents a satellite's physical properties for perturbation modeling.

    Parameters
    ----------
    mass : float
        Satellite mass [kg]
    drag_coeff : float
        Dimensionless drag coefficient (typically 2.0-2.5 for satellites)
    cross_section : float
        Reference cross-sectional area for drag [m^2]
    srp_area : float, optional
        Sun-facing area for solar radiation pressure [m^2].
        Defaults to cross_section
    name : str, optional
        Satellite identifier
    """

    def __init__(
        self,
        mass: float,
        drag_coeff: float,
        cross_section: float,
        srp_area: Optional[float] = None,
        name: Optional[str] = None
    ):
        # Validate inputs
        if mass <= 0:
            raise ValueError(f"Mass must be positive, got {mass}")
        if drag_coeff <= 0:
            raise ValueError(f"Drag coefficient must be positive, got {drag_coeff}")
        if cross_section <= 0:
            raise ValueError(f"Cross-sectional area must be positive, "
                             f"got {cross_section}")
        if srp_area is not None and srp_area <= 0:
            raise ValueError(f"SRP area must be positive, got {srp_area}")

        self._mass = float(mass)
        self._drag_coeff = float(drag_coeff)
        self._cross_section = float(cross_section)
        self._srp_area = self._cross_section if srp_area is None else float(srp_area)
        self._name = name

    @property
    def mass(self) -> float:
        """Satellite mass [kg]"""
        return self._mass

    @property
    def drag_coeff(self) -> float:
        """Drag coefficient (dimensionless)"""
        return self._drag_coeff

    @property
    def cross_section(self) -> float:
        """Reference cross-sectional area [m^2]"""
        return self._cross_section

    @property
    def srp_area(self) -> float:
        """Sun-facing area for solar radiation pressure [m^2]"""
        return self._srp_area

    @property
    def ballistic_coefficient(self) -> float:
        """Ballistic coefficient Cd * A / m [m^2/kg]"""
        return self._drag_coeff * self._cross_section / self._mass

    @property
    def name(self) -> Optional[str]:
        """Satellite identifier"""
        return self._name

    # ========== FORCE MODELS ==========
    def drag_acceleration(self, r, v, body: BodyParams = EARTH) -> np.ndarray:
        """Atmospheric drag acceleration [km/s^2] at position r [km], velocity v [km/s]"""
        return atmospheric_drag(self._drag_coeff, self._cross_section,
                                self._mass, r, v, body)

    def srp_acceleration(self, sun_vec) -> np.ndarray:
        """Solar radiation pressure acceleration [km/s^2], sun_vec in AU"""
        return solar_radiation_pressure(self._srp_area, self._mass, sun_vec)

    def __repr__(self) -> str:
        name_str = f"'{self.name}'" if self.name else "unnamed"
        return (f"Satellite({name_str}, mass={self.mass:.2f} kg, "
                f"Cd={self.drag_coeff:.2f}, A={self.cross_section:.2f} m²)")

    def __eq__(self, other) -> bool:
        if not isinstance(other, Satellite):
            return NotImplemented

        values = np.array([self.mass, self.drag_coeff, self.cross_section, self.srp_area])
        others = np.array([other.mass, other.drag_coeff, other.cross_section, other.srp_area])
        return (np.allclose(values, others, rtol=config.EQUALITY_RTOL,
                            atol=config.EQUALITY_ATOL) and
                self.name == other.name)

    def __hash__(self) -> int:
        # Round to tolerance for hashing (similar to OrbitalElements)
        rounded = tuple(round(x, config.HASH_DECIMALS) for x in
                        (self.mass, self.drag_coeff, self.cross_section, self.srp_area))
        return hash((rounded, self.name))
