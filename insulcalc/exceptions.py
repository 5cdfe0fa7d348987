"""Insulcalc Exception Hierarchy.

This module provides the exception hierarchy raised by the insulation sizing
engine. Every validation failure is raised immediately at the function
boundary with a descriptive message and a context dictionary, so callers can
present the error verbatim to the end user.

Exception Hierarchy:
    InsulcalcException (base)
    ├── InputValidationError
    │   ├── InvalidEmissivity
    │   ├── InvalidGeometry
    │   ├── InvalidConductivity
    │   ├── InvalidCoefficient
    │   ├── InvalidHumidity
    │   └── UnreachableTarget
    └── CatalogError
        └── InvalidMaterial

Non-fatal anomalies (critical diameter, exhausted thickness search) are not
exceptions; they are returned as diagnostics on the result objects.

Example:
    >>> from insulcalc.exceptions import InvalidEmissivity
    >>> raise InvalidEmissivity(
    ...     message="Emissivity -0.1 is outside [0, 1]",
    ...     context={"emissivity": -0.1}
    ... )
"""

import json
import re
from datetime import datetime
from typing import Any, Dict, Optional


# ==============================================================================
# Base Exception
# ==============================================================================

class InsulcalcException(Exception):
    """Base exception for all insulcalc errors.

    Attributes:
        message: Human-readable error message
        error_code: Unique error identifier (e.g., "IC_INPUT_INVALID_EMISSIVITY")
        context: Dictionary with error-specific details
        timestamp: When the error occurred
    """

    ERROR_PREFIX = "IC"

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        """Initialize exception with rich context.

        Args:
            message: Human-readable error message
            error_code: Unique error identifier (auto-generated if not provided)
            context: Dictionary with error-specific details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.timestamp = datetime.now()

    def _generate_error_code(self) -> str:
        """Generate error code from the class name.

        Returns:
            Error code like "IC_INPUT_INVALID_HUMIDITY"
        """
        error_type = re.sub(r'(?<!^)(?=[A-Z])', '_', self.__class__.__name__).upper()
        return f"{self.ERROR_PREFIX}_{error_type}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization."""
        return {
            "error_type": self.__class__.__name__,
            "error_code": self.error_code,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
        }

    def to_json(self) -> str:
        """Convert exception to JSON string."""
        return json.dumps(self.to_dict(), indent=2, default=str)

    def __str__(self) -> str:
        return f"[{self.error_code}] - {self.message}"

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message='{self.message}', "
            f"error_code='{self.error_code}')"
        )


# ==============================================================================
# Input Validation Exceptions
# ==============================================================================

class InputValidationError(InsulcalcException):
    """Calculation input failed validation.

    Raised when a parameter record does not describe a physically
    meaningful configuration.
    """
    ERROR_PREFIX = "IC_INPUT"

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        invalid_fields: Optional[Dict[str, str]] = None,
    ):
        """Initialize validation error.

        Args:
            message: Error message
            context: Error context
            invalid_fields: Dictionary of field_name -> reason
        """
        if invalid_fields:
            context = context or {}
            context["invalid_fields"] = invalid_fields
        super().__init__(message, context=context)


class InvalidEmissivity(InputValidationError):
    """Surface emissivity outside [0, 1]."""


class InvalidGeometry(InputValidationError):
    """Non-positive length, area or diameter, or outer bore not above inner bore.

    Example:
        >>> raise InvalidGeometry(
        ...     message="Pipe length must be positive",
        ...     invalid_fields={"length_m": "must be > 0"}
        ... )
    """


class InvalidConductivity(InputValidationError):
    """Non-positive thermal conductivity supplied to the resistance solver."""


class InvalidCoefficient(InputValidationError):
    """Non-positive surface coefficient h supplied to the resistance solver."""


class InvalidHumidity(InputValidationError):
    """Relative humidity is out of range or yields a dew point at or above ambient."""


class UnreachableTarget(InputValidationError):
    """Dew point plus margin lies above ambient; no thickness can satisfy it."""


# ==============================================================================
# Catalog Exceptions
# ==============================================================================

class CatalogError(InsulcalcException):
    """Base exception for material and stock catalog errors."""
    ERROR_PREFIX = "IC_CATALOG"


class InvalidMaterial(CatalogError):
    """Material definition is malformed (empty or non-positive conductivity table)."""


# ==============================================================================
# Utilities
# ==============================================================================

def format_exception_chain(exc: Exception) -> str:
    """Format exception chain for logging/display.

    Args:
        exc: Exception to format

    Returns:
        Formatted string with full exception chain
    """
    lines = []
    current = exc

    while current is not None:
        if isinstance(current, InsulcalcException):
            lines.append(str(current))
            lines.append(f"  Context: {current.context}")
        else:
            lines.append(f"{type(current).__name__}: {current}")
        current = getattr(current, "__cause__", None)

    return "\n".join(lines)


__all__ = [
    "InsulcalcException",
    "InputValidationError",
    "InvalidEmissivity",
    "InvalidGeometry",
    "InvalidConductivity",
    "InvalidCoefficient",
    "InvalidHumidity",
    "UnreachableTarget",
    "CatalogError",
    "InvalidMaterial",
    "format_exception_chain",
]
