"""
Insulcalc Calculators

Deterministic calculations for insulation sizing. Every calculator class
returns its result together with a SHA-256 provenance record.

Available Calculators:
- HeatLossCalculator: Heat loss, reduction and cost of insulated pipes and
  sheets against an uninsulated baseline
- CondensationCalculator: Dew point, minimum thickness against surface
  condensation and nominal stocked thickness

Standalone functions:
- estimate_h: Surface heat transfer coefficient by correlation family
- pipe_network / sheet_network: Series resistance networks
- dew_point: Magnus dew point
- flowing_fluid_temperature / static_fluid_temperature / freezing_time_hours
"""

from .provenance import (
    ProvenanceTracker,
    ProvenanceRecord,
    CalculationStep,
)

from .heat_transfer import (
    ESTIMATORS,
    estimate_h,
    standard_h,
    kflex_h,
    advanced_pipe_h,
    advanced_sheet_h,
    radiative_coefficient,
    linearised_radiative_coefficient,
)

from .resistance import (
    ResistanceNetwork,
    pipe_network,
    sheet_network,
    bare_pipe_resistance,
    bare_sheet_resistance,
    heat_flow,
    network_surface_temperature,
    surface_temperature,
)

from .heat_loss import (
    HeatLossCalculator,
    pipe_lambda_reference_temperature,
    recommend_thickness_by_heat_loss,
)

from .condensation import (
    CondensationCalculator,
    ScanOutcome,
    dew_point,
    check_target,
    minimum_pipe_thickness,
    minimum_sheet_thickness,
)

from .fluid_temperature import (
    flowing_fluid_temperature,
    static_fluid_temperature,
    freezing_time_hours,
)

__all__ = [
    # Provenance
    "ProvenanceTracker",
    "ProvenanceRecord",
    "CalculationStep",
    # Surface coefficient
    "ESTIMATORS",
    "estimate_h",
    "standard_h",
    "kflex_h",
    "advanced_pipe_h",
    "advanced_sheet_h",
    "radiative_coefficient",
    "linearised_radiative_coefficient",
    # Resistance
    "ResistanceNetwork",
    "pipe_network",
    "sheet_network",
    "bare_pipe_resistance",
    "bare_sheet_resistance",
    "heat_flow",
    "network_surface_temperature",
    "surface_temperature",
    # Heat loss
    "HeatLossCalculator",
    "pipe_lambda_reference_temperature",
    "recommend_thickness_by_heat_loss",
    # Condensation
    "CondensationCalculator",
    "ScanOutcome",
    "dew_point",
    "check_target",
    "minimum_pipe_thickness",
    "minimum_sheet_thickness",
    # Fluid temperature
    "flowing_fluid_temperature",
    "static_fluid_temperature",
    "freezing_time_hours",
]

__version__ = "1.0.0"
