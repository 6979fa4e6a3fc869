"""
Utility functions and warning categories for the Apsis package.
"""

import warnings
from typing import Type
import numpy as np
from .config import config


class OrbitalDomainWarning(UserWarning):
    """Issued when an input lies outside the valid domain of a formula."""


class ConvergenceWarning(RuntimeWarning):
    """Issued when an iterative solver reaches its iteration cap."""


def validation_error(message: str, error_class: Type[Exception] = ValueError,
                     warning_class: Type[Warning] = OrbitalDomainWarning,
                     stacklevel: int = 2):
    """
    Raise error or warn based on config.STRICT_VALIDATION.

    This function provides consistent validation behavior across the package.
    When STRICT_VALIDATION is True, raises the specified exception.
    When False (default), issues a warning instead.

    Parameters
    ----------
    message : str
        Validation error message
    error_class : Type[Exception], optional
        Exception class to raise if STRICT_VALIDATION is True.
        Default: ValueError
    warning_class : Type[Warning], optional
        Warning category to issue if STRICT_VALIDATION is False.
        Default: OrbitalDomainWarning
    stacklevel : int, optional
        Passed through to warnings.warn (default 2, the caller)

    Raises
    ------
    Exception (of type error_class)
        If config.STRICT_VALIDATION is True

    Warns
    -----
    OrbitalDomainWarning
        If config.STRICT_VALIDATION is False

    Examples
    --------
    >>> from apsis.utils import validation_error
    >>> from apsis import config
    >>> config.STRICT_VALIDATION = True
    >>> validation_error("Invalid value")  # Raises ValueError

    >>> config.STRICT_VALIDATION = False
    >>> validation_error("Invalid value")  # Issues warning
    """
    if config.STRICT_VALIDATION:
        raise error_class(message)
    else:
        warnings.warn(message, warning_class, stacklevel=stacklevel)


def domain_violation(operation: str, name: str, value, valid_range: str):
    """
    Report an input outside the valid domain of an operation.

    The message names the operation, the offending value and the valid
    range. Callers return NaN (or a NaN vector) after this unless
    STRICT_VALIDATION turned it into an exception.
    """
    shown = value if isinstance(value, str) else f"{value:g}"
    validation_error(
        f"{operation}() received {name} = {shown}. "
        f"The value of {name} should be {valid_range}.",
        stacklevel=4,
    )


def nan_vector() -> np.ndarray:
    """Length-3 vector of NaNs used as the vector error sentinel"""
    return np.full(3, np.nan)
