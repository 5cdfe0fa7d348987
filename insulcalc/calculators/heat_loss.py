# -*- coding: utf-8 -*-
"""
Insulated Heat Loss Calculator

Heat loss through insulated pipes and sheets, compared with an uninsulated
baseline of the same geometry.

Calculation chain:
    1. Surface coefficient h (caller override or correlation)
    2. Conductivity at the reference temperature
       pipe:  T_lambda = T_amb + 0.533 * (T_medium - T_amb) + 21
       sheet: arithmetic mean of ambient and medium
    3. Series resistance network and heat flow |dT| / R_total
    4. Uninsulated baseline (bare h, small-bore boost for pipes)
    5. Reduction, transmittance, cost and surface temperature
    6. Optional stocked thickness meeting a heat-loss target

When the insulated resistance does not exceed the bare resistance the
insulation is below the critical radius; a ``critical_diameter``
diagnostic is attached to the result and logged.

Example:
    >>> calculator = HeatLossCalculator()
    >>> params = HeatLossParams(
    ...     ambient_temp_c=20.0, medium_temp_c=80.0,
    ...     outer_diameter_mm=42.0, insulation_thickness_mm=19.0, length_m=10.0
    ... )
    >>> result, provenance = calculator.calculate(params)
    >>> print(f"Heat loss: {result.heat_loss_w:.1f} W")
"""

import logging
import math
from typing import List, Optional, Sequence, Tuple

from ..catalogs import pipe_thickness_ladder, rokaflex_dimension
from ..config import get_config
from ..economics import annual_cost, annual_savings, cost_per_hour
from ..exceptions import InputValidationError, InvalidCoefficient, InvalidGeometry
from ..materials import MATERIALS, SHEET_MATERIALS, interpolate_lambda
from ..models import (
    CalculationResult,
    Diagnostic,
    DiagnosticCode,
    GeometryKind,
    HeatLossParams,
    PipeGeometry,
    SheetGeometry,
)
from .heat_transfer import estimate_h
from .provenance import ProvenanceRecord, ProvenanceTracker
from .resistance import (
    ResistanceNetwork,
    bare_pipe_resistance,
    bare_sheet_resistance,
    heat_flow,
    pipe_network,
    sheet_network,
    surface_temperature,
    validate_pipe,
)

logger = logging.getLogger(__name__)

# Calibrated pipe conductivity reference temperature
LAMBDA_REFERENCE_FACTOR = 0.533
LAMBDA_REFERENCE_OFFSET_C = 21.0

ZERO_DELTA_T = 1e-10


def pipe_lambda_reference_temperature(ambient_temp_c: float, medium_temp_c: float) -> float:
    """Calibrated temperature at which pipe insulation conductivity is read."""
    return (
        ambient_temp_c
        + LAMBDA_REFERENCE_FACTOR * (medium_temp_c - ambient_temp_c)
        + LAMBDA_REFERENCE_OFFSET_C
    )


def recommend_thickness_by_heat_loss(
    ambient_temp_c: float,
    medium_temp_c: float,
    outer_diameter_mm: float,
    h: float,
    material: str = "ROKAFLEX ST",
    target_w_per_m: Optional[float] = None,
    ladder: Optional[Sequence[float]] = None,
    wall_thickness_mm: float = 0.0
) -> float:
    """
    First stocked pipe thickness whose per-metre loss meets the target.

    Conductivity is read at the ambient temperature. Returns the largest
    ladder size when no size meets the target.
    """
    if target_w_per_m is None:
        target_w_per_m = get_config().target_heat_loss_w_per_m
    sizes = sorted(ladder) if ladder else list(pipe_thickness_ladder(outer_diameter_mm))
    conductivity = interpolate_lambda(ambient_temp_c, material, MATERIALS)
    delta_t = medium_temp_c - ambient_temp_c

    for thickness in sizes:
        network = pipe_network(
            outer_diameter_mm, thickness, conductivity, h, wall_thickness_mm
        )
        q = heat_flow(delta_t, network.total)
        logger.debug("Recommendation: %smm -> %.2f W/m (target %.2f)", thickness, q, target_w_per_m)
        if q <= target_w_per_m:
            return thickness
    return sizes[-1]


class HeatLossCalculator:
    """
    Heat loss of an insulated pipe or sheet against its bare baseline.

    The calculator is deterministic: identical parameters produce identical
    results and provenance hashes.
    """

    VERSION = "1.0.0"
    NAME = "HeatLossCalculator"

    def __init__(self):
        self._tracker: Optional[ProvenanceTracker] = None

    def calculate(self, params: HeatLossParams) -> Tuple[CalculationResult, ProvenanceRecord]:
        """
        Compute heat loss, reduction and cost.

        Args:
            params: Heat-loss parameter record

        Returns:
            Tuple of (CalculationResult, ProvenanceRecord)

        Raises:
            InvalidGeometry: Non-positive length, area, diameter or thickness
            InvalidEmissivity: Emissivity outside [0, 1]
            InvalidCoefficient: Non-positive h override
        """
        self._tracker = ProvenanceTracker(
            calculator_name=self.NAME,
            calculator_version=self.VERSION,
            metadata={"geometry": params.geometry.value, "mode": params.mode.value},
        )
        self._tracker.set_inputs(params.model_dump(mode="json"))

        self._validate_inputs(params)

        if params.geometry is GeometryKind.PIPE:
            result = self._calculate_pipe(params, params.to_geometry())
        else:
            result = self._calculate_sheet(params, params.to_geometry())

        self._tracker.set_outputs(result.model_dump(mode="json", exclude={"provenance_hash"}))
        provenance = self._tracker.finalize()
        if get_config().enable_provenance:
            result = result.model_copy(update={"provenance_hash": provenance.provenance_hash})
        return result, provenance

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _validate_inputs(self, params: HeatLossParams) -> None:
        if params.insulation_thickness_mm is None or params.insulation_thickness_mm <= 0:
            raise InvalidGeometry(
                message=f"Insulation thickness must be positive, got {params.insulation_thickness_mm}",
                invalid_fields={"insulation_thickness_mm": "must be > 0"},
            )
        if params.geometry is GeometryKind.PIPE:
            if params.length_m <= 0:
                raise InvalidGeometry(
                    message=f"Pipe length must be positive, got {params.length_m}",
                    invalid_fields={"length_m": "must be > 0"},
                )
            validate_pipe(params.outer_diameter_mm, params.wall_thickness_mm)
        else:
            if params.area_m2 <= 0:
                raise InvalidGeometry(
                    message=f"Sheet area must be positive, got {params.area_m2}",
                    invalid_fields={"area_m2": "must be > 0"},
                )
            if params.height_m <= 0:
                raise InvalidGeometry(
                    message=f"Sheet height must be positive, got {params.height_m}",
                    invalid_fields={"height_m": "must be > 0"},
                )
        if params.h is not None and params.h <= 0:
            raise InvalidCoefficient(
                message=f"Surface coefficient must be positive, got {params.h}",
                context={"h_w_m2k": params.h},
            )
        if params.operating_hours < 0:
            raise InputValidationError(
                message=f"Operating hours must be non-negative, got {params.operating_hours}",
                invalid_fields={"operating_hours": "must be >= 0"},
            )

    # =========================================================================
    # PIPE
    # =========================================================================

    def _calculate_pipe(self, params: HeatLossParams, pipe: PipeGeometry) -> CalculationResult:
        config = get_config()
        diameter = pipe.outer_diameter_mm
        thickness = pipe.insulation_thickness_mm
        length = pipe.length_m
        wall = pipe.wall_thickness_mm

        h = self._surface_coefficient(params)

        t_lambda = pipe_lambda_reference_temperature(params.ambient_temp_c, params.medium_temp_c)
        conductivity = interpolate_lambda(t_lambda, params.material, MATERIALS)
        self._tracker.add_step(
            step_number=2,
            description="Insulation conductivity at the calibrated reference temperature",
            operation="interpolate",
            inputs={"t_lambda_c": t_lambda, "material": params.material},
            output_value=conductivity,
            output_name="lambda_w_mk",
            formula="T_lambda = T_amb + 0.533 * (T_medium - T_amb) + 21",
        )

        network = pipe_network(
            diameter, thickness, conductivity, h, wall,
            config.steel_conductivity_w_mk,
        )
        delta_t = params.medium_temp_c - params.ambient_temp_c
        q_insulated = heat_flow(delta_t, network.total)
        self._record_network(network, q_insulated, "q_insulated_w_per_m")

        h_bare = estimate_h(params.thermal_inputs(insulation_thickness_mm=0.0))
        if config.small_bore_boost_enabled:
            h_bare *= (config.small_bore_reference_mm / diameter) ** config.small_bore_boost_power
        r_bare = bare_pipe_resistance(
            diameter, h_bare, wall, config.steel_conductivity_w_mk
        )
        q_bare = heat_flow(delta_t, r_bare)
        self._tracker.add_step(
            step_number=4,
            description="Uninsulated baseline with small-bore boost",
            operation="divide",
            inputs={"h_bare": h_bare, "r_bare": r_bare, "delta_t": delta_t},
            output_value=q_bare,
            output_name="q_bare_w_per_m",
            formula="q_bare = |dT| / (R_wall + 1 / (h_bare * 2 * pi * r_o))",
        )

        diagnostics = self._critical_diameter_check(network.total, r_bare, diameter, thickness)

        tariff = params.tariff_per_kwh or 0.0
        hourly = cost_per_hour(q_insulated, length, tariff)
        outer_area = math.pi * (diameter + 2.0 * thickness) / 1000.0 * length
        signed_loss = math.copysign(q_insulated, delta_t) * length

        recommended = None
        if params.recommend_by_heat_loss:
            recommended = recommend_thickness_by_heat_loss(
                params.ambient_temp_c, params.medium_temp_c, diameter, h,
                params.material, params.target_heat_loss_w_per_m,
                wall_thickness_mm=wall,
            )

        return CalculationResult(
            geometry=GeometryKind.PIPE,
            mode=params.mode,
            mean_lambda_w_mk=conductivity,
            thermal_transmittance=self._transmittance(q_insulated, delta_t),
            heat_loss_w=q_insulated * length,
            heat_loss_per_unit_w=q_insulated,
            uninsulated_heat_loss_w=q_bare * length,
            decrease_pct=self._decrease(q_bare, q_insulated),
            cost_per_hour=hourly,
            annual_cost=annual_cost(hourly, params.operating_hours),
            annual_savings=annual_savings(
                q_bare * length, q_insulated * length,
                tariff, params.operating_hours,
            ),
            h_w_m2k=h,
            h_uninsulated_w_m2k=h_bare,
            r_wall=network.wall,
            r_insulation=network.insulation,
            r_convection=network.convection,
            r_total=network.total,
            r_uninsulated=r_bare,
            surface_temp_c=surface_temperature(params.ambient_temp_c, signed_loss, h, outer_area),
            nominal_dimension_mm=rokaflex_dimension(diameter, thickness),
            recommended_thickness_mm=recommended,
            diagnostics=diagnostics,
        )

    # =========================================================================
    # SHEET
    # =========================================================================

    def _calculate_sheet(self, params: HeatLossParams, sheet: SheetGeometry) -> CalculationResult:
        area = sheet.area_m2
        thickness = sheet.insulation_thickness_mm

        h = self._surface_coefficient(params)

        t_mean = (params.ambient_temp_c + params.medium_temp_c) / 2.0
        conductivity = interpolate_lambda(t_mean, params.material, SHEET_MATERIALS)
        self._tracker.add_step(
            step_number=2,
            description="Insulation conductivity at the mean temperature",
            operation="interpolate",
            inputs={"t_mean_c": t_mean, "material": params.material},
            output_value=conductivity,
            output_name="lambda_w_mk",
            formula="T_mean = (T_amb + T_medium) / 2",
        )

        network = sheet_network(thickness, area, conductivity, h)
        delta_t = params.medium_temp_c - params.ambient_temp_c
        q_insulated = heat_flow(delta_t, network.total)
        self._record_network(network, q_insulated, "q_insulated_w")

        h_bare = estimate_h(params.thermal_inputs(insulation_thickness_mm=0.0))
        r_bare = bare_sheet_resistance(area, h_bare)
        q_bare = heat_flow(delta_t, r_bare)
        self._tracker.add_step(
            step_number=4,
            description="Uninsulated baseline",
            operation="divide",
            inputs={"h_bare": h_bare, "r_bare": r_bare, "delta_t": delta_t},
            output_value=q_bare,
            output_name="q_bare_w",
            formula="Q_bare = |dT| * h_bare * A",
        )

        diagnostics = self._critical_diameter_check(network.total, r_bare, None, thickness)

        tariff = params.tariff_per_kwh or 0.0
        hourly = cost_per_hour(q_insulated, 1.0, tariff)

        return CalculationResult(
            geometry=GeometryKind.SHEET,
            mode=params.mode,
            mean_lambda_w_mk=conductivity,
            thermal_transmittance=self._transmittance(q_insulated / area, delta_t),
            heat_loss_w=q_insulated,
            heat_loss_per_unit_w=q_insulated / area,
            uninsulated_heat_loss_w=q_bare,
            decrease_pct=self._decrease(q_bare, q_insulated),
            cost_per_hour=hourly,
            annual_cost=annual_cost(hourly, params.operating_hours),
            annual_savings=annual_savings(q_bare, q_insulated, tariff, params.operating_hours),
            h_w_m2k=h,
            h_uninsulated_w_m2k=h_bare,
            r_wall=network.wall,
            r_insulation=network.insulation,
            r_convection=network.convection,
            r_total=network.total,
            r_uninsulated=r_bare,
            surface_temp_c=surface_temperature(
                params.ambient_temp_c, math.copysign(q_insulated, delta_t), h, area
            ),
            diagnostics=diagnostics,
        )

    # =========================================================================
    # SHARED STEPS
    # =========================================================================

    def _surface_coefficient(self, params: HeatLossParams) -> float:
        if params.h is not None:
            h = params.h
            operation = "override"
        else:
            h = estimate_h(params.thermal_inputs())
            operation = f"correlation:{params.mode.value}"
        self._tracker.add_step(
            step_number=1,
            description="Outer surface heat transfer coefficient",
            operation=operation,
            inputs={
                "ambient_temp_c": params.ambient_temp_c,
                "medium_temp_c": params.medium_temp_c,
                "emissivity": params.emissivity,
            },
            output_value=h,
            output_name="h_w_m2k",
            formula="h = h_conv + h_rad",
        )
        return h

    def _record_network(self, network: ResistanceNetwork, q: float, output_name: str) -> None:
        self._tracker.add_step(
            step_number=3,
            description="Series resistance network and heat flow",
            operation="divide",
            inputs={
                "r_wall": network.wall,
                "r_insulation": network.insulation,
                "r_convection": network.convection,
                "unit": network.unit,
            },
            output_value=q,
            output_name=output_name,
            formula="q = |dT| / (R_wall + R_ins + R_conv)",
        )

    def _critical_diameter_check(
        self,
        r_total: float,
        r_bare: float,
        diameter_mm: Optional[float],
        thickness_mm: float
    ) -> List[Diagnostic]:
        if r_total > r_bare:
            return []
        message = (
            f"Insulated resistance {r_total:.4f} does not exceed bare resistance "
            f"{r_bare:.4f}; insulation increases heat loss below the critical diameter"
        )
        logger.warning(message)
        return [
            Diagnostic(
                code=DiagnosticCode.CRITICAL_DIAMETER,
                message=message,
                context={
                    "r_total": r_total,
                    "r_bare": r_bare,
                    "outer_diameter_mm": diameter_mm,
                    "insulation_thickness_mm": thickness_mm,
                },
            )
        ]

    @staticmethod
    def _transmittance(q_per_unit: float, delta_t: float) -> float:
        if abs(delta_t) < ZERO_DELTA_T:
            return 0.0
        return q_per_unit / abs(delta_t)

    @staticmethod
    def _decrease(q_bare: float, q_insulated: float) -> float:
        if q_bare <= 0:
            return 0.0
        return (q_bare - q_insulated) / q_bare * 100.0


__all__ = [
    "HeatLossCalculator",
    "pipe_lambda_reference_temperature",
    "recommend_thickness_by_heat_loss",
]
