"""
Apsis: Orbital Element Conversions and Perturbation Models

A Python package for converting between classical orbital elements and
Cartesian state across every orbit regime, solving Kepler's equation, and
evaluating the dominant non-Keplerian accelerations near a central body.
"""

# Configuration
from .config import config, temp_config

# Core classes
from .orbital_elements import OrbitalElements, OrbitalElements as OE
from .orbital_elements import OrbitRegime, classify_regime
from .orbital_elements import elements_to_state, state_to_elements
from .bodies import BodyParams
from .satellite import Satellite, Satellite as Sat

# Anomaly conversions
from .anomalies import (
    KeplerSolution,
    eccentric_to_true, true_to_eccentric,
    eccentric_to_mean, mean_to_eccentric,
    true_to_hyperbolic, hyperbolic_to_true,
    hyperbolic_to_mean, mean_to_hyperbolic,
    true_to_mean, mean_to_true,
)

# Environment and perturbation models
from .environment import (
    atmospheric_density, debye_length, atmospheric_drag,
    zonal_term, zonal_perturbation, solar_radiation_pressure,
)

# Orbit geometry plots
from .plotting import sample_orbit, plot_orbits, add_orbit_to_plot

# Commonly-used celestial bodies
from .bodies import EARTH, MOON, MARS, SUN

# Diagnostics
from .utils import OrbitalDomainWarning, ConvergenceWarning

# Package metadata
__version__ = "0.1.0"

# Define what gets imported with "from apsis import *"
__all__ = [
    # Configuration
    "config",
    "temp_config",
    # Classes
    "OrbitalElements",
    "OrbitRegime",
    "BodyParams",
    "Satellite",
    "KeplerSolution",
    # Abbreviations
    "OE",
    "Sat",
    # State/element conversions
    "classify_regime",
    "elements_to_state",
    "state_to_elements",
    # Anomalies
    "eccentric_to_true",
    "true_to_eccentric",
    "eccentric_to_mean",
    "mean_to_eccentric",
    "true_to_hyperbolic",
    "hyperbolic_to_true",
    "hyperbolic_to_mean",
    "mean_to_hyperbolic",
    "true_to_mean",
    "mean_to_true",
    # Environment
    "atmospheric_density",
    "debye_length",
    "atmospheric_drag",
    "zonal_term",
    "zonal_perturbation",
    "solar_radiation_pressure",
    # Plotting
    "sample_orbit",
    "plot_orbits",
    "add_orbit_to_plot",
    # Constants
    "EARTH",
    "MOON",
    "MARS",
    "SUN",
    # Warnings
    "OrbitalDomainWarning",
    "ConvergenceWarning",
]
