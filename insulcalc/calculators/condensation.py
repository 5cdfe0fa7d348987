# -*- coding: utf-8 -*-
"""
Condensation Avoidance Calculator

Minimum insulation thickness keeping the outer surface of a cold pipe or
sheet above the dew point of the surrounding air, and the stocked
(nominal) thickness covering it.

Dew point (Magnus formula):
    gamma = ln(RH / 100) + 17.62 * T / (243.12 + T)
    T_dew = 243.12 * gamma / (17.62 - gamma)

Thickness search:
    Linear scan from one step up to the ceiling. For each thickness the
    resistance network (without pipe wall) gives
        q = (T_medium - T_amb) / R_total
        T_surface = T_medium - q * R_ins
    and the first thickness with T_surface >= T_dew + margin is minimal.

Nominal thickness:
    Smallest stocked size >= margin_factor * minimum, else the largest size.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..catalogs import (
    find_tube,
    format_tube_name,
    nominal_thickness,
    pipe_thickness_ladder,
    sheet_thickness_ladder,
)
from ..config import get_config
from ..exceptions import InvalidCoefficient, InvalidHumidity, UnreachableTarget
from ..materials import MATERIALS, SHEET_MATERIALS, interpolate_lambda
from ..models import (
    CondensationParams,
    CondensationResult,
    Diagnostic,
    DiagnosticCode,
    GeometryKind,
)
from .heat_transfer import estimate_h
from .provenance import ProvenanceRecord, ProvenanceTracker
from .resistance import network_surface_temperature, pipe_network, sheet_network, validate_pipe

logger = logging.getLogger(__name__)

MAGNUS_A = 17.62
MAGNUS_B = 243.12  # C

# Insulation thickness assumed when estimating h for a pipe before sizing
TYPICAL_PIPE_INSULATION_MM = 9.0


def dew_point(temperature_c: float, relative_humidity_pct: float) -> float:
    """
    Dew point of moist air by the Magnus formula.

    Raises:
        InvalidHumidity: If RH is not in (0, 100]
    """
    if relative_humidity_pct is None or not 0.0 < relative_humidity_pct <= 100.0:
        raise InvalidHumidity(
            message=f"Relative humidity must be in (0, 100], got {relative_humidity_pct}",
            invalid_fields={"relative_humidity_pct": "must be in (0, 100]"},
        )
    gamma = (
        math.log(relative_humidity_pct / 100.0)
        + MAGNUS_A * temperature_c / (MAGNUS_B + temperature_c)
    )
    return MAGNUS_B * gamma / (MAGNUS_A - gamma)


def check_target(ambient_temp_c: float, dew_point_c: float, margin_c: float) -> float:
    """
    Surface temperature target, validated against ambient.

    Raises:
        InvalidHumidity: Dew point at or above ambient
        UnreachableTarget: Dew point plus margin above ambient
    """
    if dew_point_c >= ambient_temp_c:
        raise InvalidHumidity(
            message=(
                f"Dew point {dew_point_c:.2f}C is not below ambient {ambient_temp_c:.2f}C; "
                "check relative humidity"
            ),
            context={"dew_point_c": dew_point_c, "ambient_temp_c": ambient_temp_c},
        )
    target = dew_point_c + margin_c
    if target > ambient_temp_c:
        raise UnreachableTarget(
            message=(
                f"Required surface temperature {target:.2f}C exceeds ambient "
                f"{ambient_temp_c:.2f}C; no insulation thickness can reach it"
            ),
            context={
                "dew_point_c": dew_point_c,
                "margin_c": margin_c,
                "ambient_temp_c": ambient_temp_c,
            },
        )
    return target


@dataclass(frozen=True)
class ScanOutcome:
    """Result of a thickness scan."""
    thickness_mm: float
    surface_temp_c: float
    iterations: int
    exhausted: bool


def _scan(surface_at, target_c: float, step_mm: float, ceiling_mm: float) -> ScanOutcome:
    count = max(int(round(ceiling_mm / step_mm)), 1)
    thickness = surface = None
    for i in range(1, count + 1):
        thickness = round(i * step_mm, 6)
        surface = surface_at(thickness)
        if surface >= target_c:
            return ScanOutcome(thickness, surface, i, exhausted=False)
    return ScanOutcome(thickness, surface, count, exhausted=True)


def minimum_pipe_thickness(
    outer_diameter_mm: float,
    ambient_temp_c: float,
    medium_temp_c: float,
    target_surface_temp_c: float,
    conductivity_w_mk: float,
    h: float,
    step_mm: Optional[float] = None,
    ceiling_mm: Optional[float] = None
) -> ScanOutcome:
    """Scan pipe insulation thicknesses until the surface target is met."""
    config = get_config()
    step_mm = step_mm or config.pipe_search_step_mm
    ceiling_mm = ceiling_mm or config.pipe_search_ceiling_mm

    def surface_at(thickness_mm: float) -> float:
        network = pipe_network(outer_diameter_mm, thickness_mm, conductivity_w_mk, h)
        return network_surface_temperature(medium_temp_c, ambient_temp_c, network)

    return _scan(surface_at, target_surface_temp_c, step_mm, ceiling_mm)


def minimum_sheet_thickness(
    ambient_temp_c: float,
    medium_temp_c: float,
    target_surface_temp_c: float,
    conductivity_w_mk: float,
    h: float,
    step_mm: Optional[float] = None,
    ceiling_mm: Optional[float] = None
) -> ScanOutcome:
    """Scan sheet thicknesses (per m2) until the surface target is met."""
    config = get_config()
    step_mm = step_mm or config.sheet_search_step_mm
    ceiling_mm = ceiling_mm or config.sheet_search_ceiling_mm

    def surface_at(thickness_mm: float) -> float:
        network = sheet_network(thickness_mm, 1.0, conductivity_w_mk, h)
        return network_surface_temperature(medium_temp_c, ambient_temp_c, network)

    return _scan(surface_at, target_surface_temp_c, step_mm, ceiling_mm)


class CondensationCalculator:
    """
    Minimum and nominal insulation thickness against surface condensation.

    Example:
        >>> calculator = CondensationCalculator()
        >>> params = CondensationParams(
        ...     ambient_temp_c=25.0, medium_temp_c=-5.0,
        ...     relative_humidity_pct=60.0, outer_diameter_mm=22.0
        ... )
        >>> result, provenance = calculator.calculate(params)
        >>> print(result.minimum_thickness_mm, result.nominal_thickness_mm)
    """

    VERSION = "1.0.0"
    NAME = "CondensationCalculator"

    def __init__(self):
        self._tracker: Optional[ProvenanceTracker] = None

    def calculate(self, params: CondensationParams) -> Tuple[CondensationResult, ProvenanceRecord]:
        """
        Size insulation so the surface stays above the dew point.

        Raises:
            InvalidHumidity: RH missing or out of range, or dew point >= ambient
            UnreachableTarget: Dew point plus margin above ambient
            InvalidGeometry: Non-positive pipe diameter
            InvalidEmissivity: Emissivity outside [0, 1]
        """
        config = get_config()
        self._tracker = ProvenanceTracker(
            calculator_name=self.NAME,
            calculator_version=self.VERSION,
            metadata={"geometry": params.geometry.value},
        )
        self._tracker.set_inputs(params.model_dump(mode="json"))

        is_pipe = params.geometry is GeometryKind.PIPE
        if is_pipe:
            validate_pipe(params.outer_diameter_mm)
        if params.h is not None and params.h <= 0:
            raise InvalidCoefficient(
                message=f"Surface coefficient must be positive, got {params.h}",
                context={"h_w_m2k": params.h},
            )

        # Step 1: dew point and surface target, before any search
        dew = dew_point(params.ambient_temp_c, params.relative_humidity_pct)
        target = check_target(params.ambient_temp_c, dew, config.condensation_margin_c)
        self._tracker.add_step(
            step_number=1,
            description="Dew point and required surface temperature",
            operation="magnus",
            inputs={
                "ambient_temp_c": params.ambient_temp_c,
                "relative_humidity_pct": params.relative_humidity_pct,
                "margin_c": config.condensation_margin_c,
            },
            output_value=target,
            output_name="target_surface_temp_c",
            formula="T_dew = 243.12 * g / (17.62 - g), g = ln(RH/100) + 17.62*T/(243.12+T)",
        )

        # Step 2: surface coefficient and conductivity
        h = self._surface_coefficient(params, is_pipe)
        t_mean = (params.ambient_temp_c + params.medium_temp_c) / 2.0
        catalog = MATERIALS if is_pipe else SHEET_MATERIALS
        conductivity = interpolate_lambda(t_mean, params.material, catalog)
        self._tracker.add_step(
            step_number=2,
            description="Surface coefficient and conductivity at the mean temperature",
            operation="interpolate",
            inputs={"t_mean_c": t_mean, "material": params.material, "h_w_m2k": h},
            output_value=conductivity,
            output_name="lambda_w_mk",
        )

        # Step 3: thickness scan
        if is_pipe:
            outcome = minimum_pipe_thickness(
                params.outer_diameter_mm, params.ambient_temp_c, params.medium_temp_c,
                target, conductivity, h,
            )
            ladder = pipe_thickness_ladder(params.outer_diameter_mm)
        else:
            outcome = minimum_sheet_thickness(
                params.ambient_temp_c, params.medium_temp_c, target, conductivity, h,
            )
            ladder = sheet_thickness_ladder()
        self._tracker.add_step(
            step_number=3,
            description="Minimum thickness by linear scan",
            operation="scan",
            inputs={"target_surface_temp_c": target, "iterations": outcome.iterations},
            output_value=outcome.thickness_mm,
            output_name="minimum_thickness_mm",
            formula="first s with T_medium - q * R_ins >= T_dew + margin",
        )

        diagnostics: List[Diagnostic] = []
        if outcome.exhausted:
            message = (
                f"No thickness up to {outcome.thickness_mm}mm keeps the surface above "
                f"{target:.2f}C; reporting the search ceiling"
            )
            logger.warning(message)
            diagnostics.append(Diagnostic(
                code=DiagnosticCode.SEARCH_EXHAUSTED,
                message=message,
                context={
                    "ceiling_mm": outcome.thickness_mm,
                    "surface_temp_c": outcome.surface_temp_c,
                    "target_surface_temp_c": target,
                },
            ))

        # Step 4: stock rounding
        nominal = nominal_thickness(outcome.thickness_mm, ladder, config.nominal_margin_factor)
        self._tracker.add_step(
            step_number=4,
            description="Nominal stocked thickness",
            operation="select",
            inputs={
                "minimum_thickness_mm": outcome.thickness_mm,
                "margin_factor": config.nominal_margin_factor,
                "ladder_mm": list(ladder),
            },
            output_value=nominal,
            output_name="nominal_thickness_mm",
            formula="min{s in ladder : s >= factor * s_min}, else max(ladder)",
        )

        result = CondensationResult(
            geometry=params.geometry,
            dew_point_c=dew,
            target_surface_temp_c=target,
            minimum_thickness_mm=outcome.thickness_mm,
            nominal_thickness_mm=nominal,
            surface_temp_c=outcome.surface_temp_c,
            lambda_w_mk=conductivity,
            h_w_m2k=h,
            ladder_mm=list(ladder),
            designation=self._designation(params, nominal),
            guaranteed=not outcome.exhausted,
            diagnostics=diagnostics,
        )
        self._tracker.set_outputs(result.model_dump(mode="json", exclude={"provenance_hash"}))
        provenance = self._tracker.finalize()
        if config.enable_provenance:
            result = result.model_copy(update={"provenance_hash": provenance.provenance_hash})

        logger.debug(
            "Condensation: dew=%.2fC min=%.1fmm nominal=%smm after %d steps",
            dew, outcome.thickness_mm, nominal, outcome.iterations,
        )
        return result, provenance

    @staticmethod
    def _surface_coefficient(params: CondensationParams, is_pipe: bool) -> float:
        if params.h is not None:
            return params.h
        if is_pipe and params.insulation_thickness_mm is None:
            return estimate_h(params.thermal_inputs(
                insulation_thickness_mm=TYPICAL_PIPE_INSULATION_MM
            ))
        return estimate_h(params.thermal_inputs())

    @staticmethod
    def _designation(params: CondensationParams, nominal_mm: float) -> str:
        if params.geometry is GeometryKind.SHEET:
            return f"{params.material} sheet {nominal_mm:g}mm"
        tube = find_tube(params.outer_diameter_mm)
        if tube is None:
            return f"{params.material} {params.outer_diameter_mm:g}mm x {nominal_mm:g}mm"
        return f"{params.material} {format_tube_name(tube)} x {nominal_mm:g}mm"


__all__ = [
    "MAGNUS_A",
    "MAGNUS_B",
    "TYPICAL_PIPE_INSULATION_MM",
    "ScanOutcome",
    "dew_point",
    "check_target",
    "minimum_pipe_thickness",
    "minimum_sheet_thickness",
    "CondensationCalculator",
]
