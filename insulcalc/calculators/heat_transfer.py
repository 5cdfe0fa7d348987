# -*- coding: utf-8 -*-
"""
Surface Heat Transfer Coefficient Estimators

Combined (convective + radiative) outer surface coefficient h in W/(m2*K)
for four correlation families:

    STANDARD        Generic natural convection with exact grey-body
                    radiation, capped and scaled by a 0.75 safety factor.
    KFLEX           K-FLEX pipe correlation with outer diameter correction
                    and an optional condensation recalibration.
    ADVANCED_PIPE   Reference-diameter pipe correlation, convection
                    rounded up to 1e-3.
    ADVANCED_SHEET  Planar correlation with an ambient dependent convection
                    coefficient and a linearised radiation coefficient.

Every estimator rejects an emissivity outside [0, 1] before computing
anything, and returns h rounded to three decimals.

Formulas:
    Natural convection:   h_c = C * dT^n
    Grey-body radiation:  h_r = eps * sigma * (Ts^4 - Ta^4) / (Ts - Ta)
    Linearised radiation: h_r = 4 * eps * sigma * T_mean^3
"""

import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Callable, Dict, Optional, Union

from ..exceptions import InvalidEmissivity
from ..models import HMode, Orientation, ThermalInputs

logger = logging.getLogger(__name__)

# =============================================================================
# CONSTANTS
# =============================================================================

STEFAN_BOLTZMANN = 5.67e-8  # W/(m2*K4)
KELVIN_OFFSET = 273.15

# STANDARD
STANDARD_CONVECTION_COEFF = 1.32
STANDARD_CONVECTION_EXP = 0.33
STANDARD_CONVECTION_FLOOR = 1.0 / 0.13  # surface resistance 0.13 m2K/W
STANDARD_RADIATION_CAP = 6.5
SAFETY_FACTOR = 0.75
SURFACE_ESTIMATE_FRACTION = 0.3
SURFACE_DELTA_WARNING_K = 500.0

# KFLEX / ADVANCED_PIPE
HORIZONTAL_COEFF = 1.646
VERTICAL_COEFF = 1.8
HORIZONTAL_EXP = 0.33
VERTICAL_EXP = 0.25
CONDENSATION_REFERENCE_DT = 30.0
HORIZONTAL_CONDENSATION_SLOPE = 0.0057
VERTICAL_CONDENSATION_SLOPE = 0.0063
HORIZONTAL_CONDENSATION_MIN = 1.44
VERTICAL_CONDENSATION_MIN = 1.58
KFLEX_REFERENCE_DIAMETER_M = 0.043
KFLEX_DIAMETER_EXP = 0.10
KFLEX_CONDENSATION_DIAMETER_EXP = 0.15
ADVANCED_REF_SLOPE = 0.000955
ADVANCED_REF_INTERCEPT = 0.0244
ADVANCED_DIAMETER_EXP = 0.474
ADVANCED_RADIATION_OFFSET_K = 0.75

# ADVANCED_SHEET
SHEET_REFERENCE_AMBIENT_C = 20.0
SHEET_AMBIENT_SLOPE = 0.017
SHEET_CONVECTION_FLOOR = 7.6923
SHEET_RADIATION_BASE = 2.628
SHEET_RADIATION_SLOPE = 0.0295
SHEET_RADIATION_REFERENCE_C = 25.0
SHEET_RADIATION_MIN_MEAN_C = 10.0
SHEET_RADIATION_FLOOR = 1.4


def _round3(value: float) -> float:
    """Round half up to three decimals."""
    return float(Decimal(str(value)).quantize(Decimal("0.001"), rounding=ROUND_HALF_UP))


def _ceil3(value: float) -> float:
    return math.ceil(value * 1000.0) / 1000.0


def _validate_emissivity(emissivity: float) -> None:
    if not 0.0 <= emissivity <= 1.0:
        raise InvalidEmissivity(
            message=f"Emissivity {emissivity} is outside [0, 1]",
            context={"emissivity": emissivity},
        )


def _convective_delta(inputs: ThermalInputs) -> float:
    """Medium to ambient difference, floored at 1 K."""
    return max(abs(inputs.medium_temp_c - inputs.ambient_temp_c), 1.0)


# =============================================================================
# RADIATION
# =============================================================================

def radiative_coefficient(emissivity: float, surface_temp_c: float, ambient_temp_c: float) -> float:
    """
    Exact grey-body radiative coefficient between a surface and its surroundings.

    Falls back to the linearised form 4*eps*sigma*T_mean^3 when the two
    temperatures are within 0.01 K of each other.
    """
    ts = surface_temp_c + KELVIN_OFFSET
    ta = ambient_temp_c + KELVIN_OFFSET
    if abs(ts - ta) < 0.01:
        t_mean = (ts + ta) / 2.0
        return 4.0 * emissivity * STEFAN_BOLTZMANN * t_mean ** 3
    return emissivity * STEFAN_BOLTZMANN * (ts ** 4 - ta ** 4) / (ts - ta)


def linearised_radiative_coefficient(emissivity: float, mean_temp_c: float) -> float:
    """4*eps*sigma*T^3 at a mean temperature in C."""
    return 4.0 * emissivity * STEFAN_BOLTZMANN * (mean_temp_c + KELVIN_OFFSET) ** 3


# =============================================================================
# ESTIMATORS
# =============================================================================

def standard_h(inputs: ThermalInputs) -> float:
    """Generic correlation with exact radiation and safety factor."""
    _validate_emissivity(inputs.emissivity)
    ambient = inputs.ambient_temp_c
    surface = inputs.surface_temp_c
    if surface is None:
        surface = ambient + SURFACE_ESTIMATE_FRACTION * (inputs.medium_temp_c - ambient)

    if abs(surface - ambient) > SURFACE_DELTA_WARNING_K:
        logger.warning(
            "Surface to ambient difference %.1fK is outside the usual range of the "
            "standard correlation", abs(surface - ambient),
        )

    delta_t = _convective_delta(inputs)
    h_conv = max(STANDARD_CONVECTION_COEFF * delta_t ** STANDARD_CONVECTION_EXP,
                 STANDARD_CONVECTION_FLOOR)
    h_rad = min(radiative_coefficient(inputs.emissivity, surface, ambient),
                STANDARD_RADIATION_CAP)

    h = h_conv + h_rad
    if inputs.apply_safety_factor:
        h *= SAFETY_FACTOR
    return _round3(h)


def _pipe_convection_base(inputs: ThermalInputs, delta_t: float, for_condensation: bool = False) -> float:
    horizontal = inputs.orientation is Orientation.HORIZONTAL
    if for_condensation:
        shift = delta_t - CONDENSATION_REFERENCE_DT
        if horizontal:
            coeff = max(HORIZONTAL_COEFF - HORIZONTAL_CONDENSATION_SLOPE * shift,
                        HORIZONTAL_CONDENSATION_MIN)
        else:
            coeff = max(VERTICAL_COEFF - VERTICAL_CONDENSATION_SLOPE * shift,
                        VERTICAL_CONDENSATION_MIN)
    else:
        coeff = HORIZONTAL_COEFF if horizontal else VERTICAL_COEFF
    exponent = HORIZONTAL_EXP if horizontal else VERTICAL_EXP
    return coeff * delta_t ** exponent


def _insulated_outer_diameter_m(inputs: ThermalInputs) -> Optional[float]:
    """Outer diameter of the insulated pipe in m, when the geometry is known."""
    diameter = inputs.outer_diameter_mm
    thickness = inputs.insulation_thickness_mm
    if diameter is None or thickness is None or diameter <= 0 or thickness < 0:
        return None
    return (diameter + 2.0 * thickness) / 1000.0


def kflex_h(inputs: ThermalInputs) -> float:
    """K-FLEX pipe correlation."""
    _validate_emissivity(inputs.emissivity)
    delta_t = _convective_delta(inputs)
    h_conv = _pipe_convection_base(inputs, delta_t, inputs.for_condensation)

    outer_m = _insulated_outer_diameter_m(inputs)
    if outer_m is not None:
        exponent = KFLEX_CONDENSATION_DIAMETER_EXP if inputs.for_condensation else KFLEX_DIAMETER_EXP
        h_conv *= (KFLEX_REFERENCE_DIAMETER_M / outer_m) ** exponent

    mean_c = (inputs.ambient_temp_c + inputs.medium_temp_c) / 2.0
    h_rad = linearised_radiative_coefficient(inputs.emissivity, mean_c)
    return _round3(h_conv + h_rad)


def advanced_pipe_h(inputs: ThermalInputs) -> float:
    """Reference-diameter pipe correlation."""
    _validate_emissivity(inputs.emissivity)
    delta_t = _convective_delta(inputs)
    h_conv = _pipe_convection_base(inputs, delta_t)

    outer_m = _insulated_outer_diameter_m(inputs)
    if outer_m is not None:
        reference_m = ADVANCED_REF_SLOPE * inputs.outer_diameter_mm + ADVANCED_REF_INTERCEPT
        h_conv *= (reference_m / outer_m) ** ADVANCED_DIAMETER_EXP
    h_conv = _ceil3(h_conv)

    mean_c = (inputs.ambient_temp_c + inputs.medium_temp_c) / 2.0
    h_rad = linearised_radiative_coefficient(
        inputs.emissivity, mean_c + ADVANCED_RADIATION_OFFSET_K
    )
    return _round3(h_conv + h_rad)


def advanced_sheet_h(inputs: ThermalInputs) -> float:
    """Planar correlation for sheets."""
    _validate_emissivity(inputs.emissivity)
    ambient = inputs.ambient_temp_c
    delta_t = _convective_delta(inputs)

    if ambient >= SHEET_REFERENCE_AMBIENT_C:
        coeff = STANDARD_CONVECTION_COEFF
    else:
        coeff = STANDARD_CONVECTION_COEFF - SHEET_AMBIENT_SLOPE * (SHEET_REFERENCE_AMBIENT_C - ambient)
    h_conv = max(coeff * delta_t ** STANDARD_CONVECTION_EXP, SHEET_CONVECTION_FLOOR)

    mean_c = (ambient + inputs.medium_temp_c) / 2.0
    if mean_c >= SHEET_RADIATION_MIN_MEAN_C:
        rad_coeff = SHEET_RADIATION_BASE - SHEET_RADIATION_SLOPE * (SHEET_RADIATION_REFERENCE_C - mean_c)
    else:
        rad_coeff = SHEET_RADIATION_FLOOR
    h_rad = inputs.emissivity * max(rad_coeff, SHEET_RADIATION_FLOOR)

    return _round3((h_conv + h_rad) * SAFETY_FACTOR)


ESTIMATORS: Dict[HMode, Callable[[ThermalInputs], float]] = {
    HMode.STANDARD: standard_h,
    HMode.KFLEX: kflex_h,
    HMode.ADVANCED_PIPE: advanced_pipe_h,
    HMode.ADVANCED_SHEET: advanced_sheet_h,
}


def estimate_h(inputs: ThermalInputs, mode: Optional[Union[HMode, str]] = None) -> float:
    """
    Surface coefficient for the selected correlation.

    Args:
        inputs: Thermal inputs
        mode: Correlation; defaults to ``inputs.mode``

    Returns:
        h in W/(m2*K), rounded to three decimals

    Raises:
        InvalidEmissivity: If emissivity is outside [0, 1]
        ValueError: If the mode is unknown
    """
    selected = HMode(mode) if mode is not None else inputs.mode
    h = ESTIMATORS[selected](inputs)
    logger.debug(
        "h[%s] = %.3f W/m2K (ambient=%.2fC, medium=%.2fC, eps=%.2f)",
        selected.value, h, inputs.ambient_temp_c, inputs.medium_temp_c, inputs.emissivity,
    )
    return h


__all__ = [
    "STEFAN_BOLTZMANN",
    "KELVIN_OFFSET",
    "ESTIMATORS",
    "radiative_coefficient",
    "linearised_radiative_coefficient",
    "standard_h",
    "kflex_h",
    "advanced_pipe_h",
    "advanced_sheet_h",
    "estimate_h",
]
