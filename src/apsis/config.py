"""
Global Configuration for Apsis Package
======================================

This module provides package-wide configuration settings that users can modify
to control numerical tolerances, solver limits and validation behavior.

Examples
--------
View current configuration:

>>> import apsis
>>> print(apsis.config)

Modify settings:

>>> apsis.config.MAX_ITERATIONS = 500  # Allow the Kepler solvers more steps
>>> apsis.config.STRICT_VALIDATION = True  # Raise on invalid input

Reset to defaults:

>>> apsis.config.reset()

Temporarily modify settings:

>>> with apsis.temp_config(ANOMALY_TOLERANCE=1e-10):
...     # Looser solver tolerance for this block only
...     E = apsis.mean_to_eccentric(1.0, 0.3)

Notes
-----
These settings affect package-wide behavior. Modifying them will impact
all subsequent operations until changed again or reset.
"""

from dataclasses import dataclass
from contextlib import contextmanager
import math


@dataclass
class ApsisConfig:
    """
    Global configuration for Apsis package.

    Attributes
    ----------
    EQUALITY_RTOL : float
        Relative tolerance for floating-point equality comparisons.
        Default: 1e-12 (approximately millimeter-level at LEO distances)
    EQUALITY_ATOL : float
        Absolute tolerance for floating-point equality comparisons.
        Default: 1e-14
    HASH_DECIMALS : int
        Number of decimal places for rounding when computing hash values.
        Automatically computed to preserve hash contract
    ANOMALY_TOLERANCE : float
        Newton-Raphson step size below which the mean anomaly solvers
        are considered converged.
        Default: 1e-13
    MAX_ITERATIONS : int
        Hard cap on Newton-Raphson iterations. Reaching it issues a
        ConvergenceWarning and the last estimate is returned.
        Default: 200
    DEGENERACY_TOLERANCE : float
        Dimensionless threshold used to detect parabolic, rectilinear
        and circular motion when converting a state to elements.
        Default: 1e-12
    SNAP_TO_EQUATORIAL : float
        Orbit normals whose in-plane (x, y) component falls below this
        threshold are treated as equatorial; the node is then fixed at 0.
        Default: 1e-10
    STRICT_VALIDATION : bool
        If True, domain violations raise ValueError.
        If False, they return NaN and issue an OrbitalDomainWarning.
        Default: False
    """

    # Numerical tolerance for equality comparisons
    EQUALITY_RTOL: float = 1e-12
    EQUALITY_ATOL: float = 1e-14

    # Iterative solvers
    ANOMALY_TOLERANCE: float = 1e-13
    MAX_ITERATIONS: int = 200

    # Degenerate geometry thresholds
    DEGENERACY_TOLERANCE: float = 1e-12
    SNAP_TO_EQUATORIAL: float = 1e-10

    # Validation behavior
    STRICT_VALIDATION: bool = False

    @property
    def HASH_DECIMALS(self) -> int:
        """
        Compute hash rounding decimals from equality tolerance.

        The hash rounding must be coarse enough that if two values
        are equal (within EQUALITY_ATOL), they hash to the same value.

        Formula: HASH_DECIMALS = -floor(log10(ATOL)) - 2
        The -2 provides safety margin (2 orders of magnitude).

        Returns
        -------
        int
            Number of decimal places for hash rounding
        """
        magnitude = -math.floor(math.log10(self.EQUALITY_ATOL))
        return max(magnitude - 2, 0)  # At least 0 decimals

    def reset(self):
        """
        Reset all configuration values to package defaults.

        Examples
        --------
        >>> import apsis
        >>> apsis.config.MAX_ITERATIONS = 10  # Modify
        >>> apsis.config.reset()  # Back to defaults
        >>> apsis.config.MAX_ITERATIONS
        200
        """
        defaults = ApsisConfig()
        for key in self.__dataclass_fields__:
            setattr(self, key, getattr(defaults, key))

    def __repr__(self):
        """Return formatted string showing all configuration values."""
        lines = ["ApsisConfig:"]
        lines.append("  Numerical Tolerances:")
        lines.append(f"    EQUALITY_RTOL = {self.EQUALITY_RTOL}")
        lines.append(f"    EQUALITY_ATOL = {self.EQUALITY_ATOL}")
        lines.append(f"    HASH_DECIMALS = {self.HASH_DECIMALS}")
        lines.append("  Solvers:")
        lines.append(f"    ANOMALY_TOLERANCE = {self.ANOMALY_TOLERANCE}")
        lines.append(f"    MAX_ITERATIONS = {self.MAX_ITERATIONS}")
        lines.append("  Degenerate Geometry:")
        lines.append(f"    DEGENERACY_TOLERANCE = {self.DEGENERACY_TOLERANCE}")
        lines.append(f"    SNAP_TO_EQUATORIAL = {self.SNAP_TO_EQUATORIAL}")
        lines.append("  Behavior:")
        lines.append(f"    STRICT_VALIDATION = {self.STRICT_VALIDATION}")
        return "\n".join(lines)


# Global configuration instance
config = ApsisConfig()


@contextmanager
def temp_config(**kwargs):
    """
    Context manager for temporarily modifying configuration values.

    Configuration is automatically restored when the context exits,
    even if an exception occurs.

    Parameters
    ----------
    **kwargs
        Configuration attributes to temporarily modify.

    Examples
    --------
    >>> import apsis
    >>> with apsis.temp_config(STRICT_VALIDATION=True):
    ...     apsis.eccentric_to_true(1.0, 1.5)  # Raises ValueError
    >>> # Original config restored here
    >>> apsis.config.STRICT_VALIDATION
    False

    Raises
    ------
    AttributeError
        If an invalid configuration attribute is specified.
    """
    old_values = {}
    for key, value in kwargs.items():
        if not hasattr(config, key):
            raise AttributeError(
                f"ApsisConfig has no attribute '{key}'. "
                f"Valid attributes: {list(config.__dataclass_fields__.keys())}"
            )
        old_values[key] = getattr(config, key)
        setattr(config, key, value)

    try:
        yield config
    finally:
        for key, value in old_values.items():
            setattr(config, key, value)
