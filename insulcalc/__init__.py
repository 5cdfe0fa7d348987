"""
Insulcalc - Thermal Insulation Sizing Engine

Deterministic calculations for technical insulation of pipes and sheets:

- Surface heat transfer coefficient by four correlation families
- Heat loss, thermal transmittance, reduction against bare surfaces and
  energy cost
- Minimum insulation thickness against surface condensation, rounded to a
  stocked nominal size
- Material conductivity interpolation and stock catalogs

Example:
    >>> from insulcalc import compute_condensation
    >>> result = compute_condensation({
    ...     "ambient_temp_c": 25, "medium_temp_c": -5,
    ...     "relative_humidity_pct": 60, "outer_diameter_mm": 22,
    ... })
    >>> print(result.nominal_thickness_mm)
"""

from .config import InsulcalcConfig, get_config, reset_config, set_config
from .engine import compute_condensation, compute_h, compute_heat_loss
from .exceptions import (
    CatalogError,
    InputValidationError,
    InsulcalcException,
    InvalidCoefficient,
    InvalidConductivity,
    InvalidEmissivity,
    InvalidGeometry,
    InvalidHumidity,
    InvalidMaterial,
    UnreachableTarget,
)
from .materials import MATERIALS, SHEET_MATERIALS, MaterialSpec, interpolate_lambda
from .models import (
    CalculationDirection,
    CalculationResult,
    CondensationParams,
    CondensationResult,
    Diagnostic,
    DiagnosticCode,
    GeometryKind,
    HeatLossParams,
    HMode,
    Orientation,
    ThermalInputs,
)

__version__ = "1.0.0"

__all__ = [
    # Entry points
    "compute_h",
    "compute_heat_loss",
    "compute_condensation",
    # Models
    "ThermalInputs",
    "HeatLossParams",
    "CondensationParams",
    "CalculationResult",
    "CondensationResult",
    "Diagnostic",
    "DiagnosticCode",
    "GeometryKind",
    "HMode",
    "Orientation",
    "CalculationDirection",
    # Materials
    "MaterialSpec",
    "MATERIALS",
    "SHEET_MATERIALS",
    "interpolate_lambda",
    # Configuration
    "InsulcalcConfig",
    "get_config",
    "set_config",
    "reset_config",
    # Exceptions
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
]
