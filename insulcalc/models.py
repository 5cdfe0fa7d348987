# -*- coding: utf-8 -*-
"""
Insulcalc Data Models

Pydantic v2 models for the parameter records accepted by the engine entry
points and the result records they return. Parameter records are flat: the
thermal inputs shared by every calculation are declared once on
``ThermalInputs`` and extended by the heat-loss and condensation records.

Models:
    - Enums: Orientation, CalculationDirection, HMode, GeometryKind,
             DiagnosticCode
    - Geometry: PipeGeometry, SheetGeometry
    - Parameters: ThermalInputs, HeatLossParams, CondensationParams
    - Results: Diagnostic, CalculationResult, CondensationResult

Range checks that map to engine error types (emissivity, geometry,
humidity) are performed by the calculators, not by pydantic, so callers
always receive the documented exception classes.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enumerations
# =============================================================================


class Orientation(str, Enum):
    """Pipe axis or sheet plane orientation."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"


class CalculationDirection(str, Enum):
    """Whether heat is released outward (inside) or inward (outside)."""
    INSIDE = "inside"
    OUTSIDE = "outside"


class HMode(str, Enum):
    """Surface coefficient correlation family."""
    STANDARD = "standard"
    KFLEX = "kflex"
    ADVANCED_PIPE = "advanced_pipe"
    ADVANCED_SHEET = "advanced_sheet"


class GeometryKind(str, Enum):
    """Insulated object geometry."""
    PIPE = "pipe"
    SHEET = "sheet"


class DiagnosticCode(str, Enum):
    """Non-fatal anomalies returned alongside results."""
    CRITICAL_DIAMETER = "critical_diameter"
    SEARCH_EXHAUSTED = "search_exhausted"


# =============================================================================
# Geometry
# =============================================================================


class PipeGeometry(BaseModel):
    """Cylindrical geometry; diameters and thicknesses in mm, length in m."""

    kind: GeometryKind = GeometryKind.PIPE
    outer_diameter_mm: float = Field(..., description="Pipe outer diameter (mm)")
    wall_thickness_mm: float = Field(default=0.0, description="Pipe wall thickness (mm)")
    insulation_thickness_mm: float = Field(default=0.0, description="Insulation thickness (mm)")
    length_m: float = Field(default=1.0, description="Pipe length (m)")

    model_config = {"frozen": True, "extra": "forbid"}


class SheetGeometry(BaseModel):
    """Planar geometry; thickness in mm, area in m2, height in m."""

    kind: GeometryKind = GeometryKind.SHEET
    insulation_thickness_mm: float = Field(default=0.0, description="Insulation thickness (mm)")
    area_m2: float = Field(default=1.0, description="Heat exchange area (m2)")
    height_m: float = Field(
        default=1.0, description="Characteristic height, convection correlation only (m)"
    )

    model_config = {"frozen": True, "extra": "forbid"}


Geometry = Union[PipeGeometry, SheetGeometry]


# =============================================================================
# Parameter records
# =============================================================================


class ThermalInputs(BaseModel):
    """
    Inputs of the surface coefficient estimators.

    ``surface_temp_c`` is only read by the standard correlation; when it is
    omitted the surface is estimated at 30% of the way from ambient to medium.
    ``outer_diameter_mm`` and ``insulation_thickness_mm`` enable the
    diameter corrections of the pipe correlations.
    """

    ambient_temp_c: float = Field(..., description="Ambient air temperature (C)")
    medium_temp_c: float = Field(..., description="Medium temperature (C)")
    surface_temp_c: Optional[float] = Field(None, description="Insulation surface temperature (C)")
    emissivity: float = Field(default=0.93, description="Surface emissivity (0..1)")
    orientation: Orientation = Field(default=Orientation.HORIZONTAL)
    direction: CalculationDirection = Field(default=CalculationDirection.INSIDE)
    mode: HMode = Field(default=HMode.STANDARD, description="Surface coefficient correlation")
    relative_humidity_pct: Optional[float] = Field(None, description="Relative humidity (%)")
    tariff_per_kwh: Optional[float] = Field(None, description="Energy tariff per kWh")
    apply_safety_factor: bool = Field(
        default=True, description="Scale the standard correlation by 0.75"
    )
    for_condensation: bool = Field(
        default=False, description="Use the condensation recalibration of the K-FLEX correlation"
    )
    outer_diameter_mm: Optional[float] = Field(None, description="Pipe outer diameter (mm)")
    insulation_thickness_mm: Optional[float] = Field(None, description="Insulation thickness (mm)")

    model_config = {"extra": "forbid"}

    def thermal_inputs(self, **overrides: Any) -> ThermalInputs:
        """The ThermalInputs subset of this record, with optional overrides."""
        data = {name: getattr(self, name) for name in ThermalInputs.model_fields}
        data.update(overrides)
        return ThermalInputs(**data)


class HeatLossParams(ThermalInputs):
    """Flat parameter record of a heat-loss calculation."""

    geometry: GeometryKind = Field(default=GeometryKind.PIPE)
    wall_thickness_mm: float = Field(default=0.0, description="Pipe wall thickness (mm)")
    length_m: float = Field(default=1.0, description="Pipe length (m)")
    area_m2: float = Field(default=1.0, description="Sheet area (m2)")
    height_m: float = Field(default=1.0, description="Sheet characteristic height (m)")
    material: str = Field(default="ROKAFLEX ST", description="Insulation material")
    h: Optional[float] = Field(None, description="Surface coefficient override (W/(m2*K))")
    recommend_by_heat_loss: bool = Field(
        default=False, description="Also pick a stocked thickness meeting a heat-loss target"
    )
    target_heat_loss_w_per_m: Optional[float] = Field(
        None, description="Heat-loss target of the recommendation (W/m)"
    )
    operating_hours: float = Field(default=8760.0, description="Operating hours per year")

    def to_geometry(self) -> Geometry:
        """Geometry value object described by this record."""
        if self.geometry is GeometryKind.PIPE:
            return PipeGeometry(
                outer_diameter_mm=self.outer_diameter_mm if self.outer_diameter_mm is not None else 0.0,
                wall_thickness_mm=self.wall_thickness_mm,
                insulation_thickness_mm=self.insulation_thickness_mm or 0.0,
                length_m=self.length_m,
            )
        return SheetGeometry(
            insulation_thickness_mm=self.insulation_thickness_mm or 0.0,
            area_m2=self.area_m2,
            height_m=self.height_m,
        )


class CondensationParams(ThermalInputs):
    """
    Flat parameter record of a condensation (dew point) calculation.

    Pipes default to the K-FLEX correlation with its condensation
    recalibration; sheets default to the planar correlation.
    """

    mode: HMode = Field(default=HMode.KFLEX, description="Surface coefficient correlation")
    for_condensation: bool = Field(
        default=True, description="Use the condensation recalibration of the K-FLEX correlation"
    )
    geometry: GeometryKind = Field(default=GeometryKind.PIPE)
    area_m2: float = Field(default=1.0, description="Sheet area (m2)")
    height_m: float = Field(default=1.0, description="Sheet characteristic height (m)")
    material: str = Field(default="ROKAFLEX ST", description="Insulation material")
    h: Optional[float] = Field(None, description="Surface coefficient override (W/(m2*K))")

    @model_validator(mode="before")
    @classmethod
    def default_mode_for_geometry(cls, data: Any) -> Any:
        """Select the planar correlation for sheets unless a mode is given."""
        if isinstance(data, dict) and data.get("mode") is None:
            geometry = data.get("geometry", GeometryKind.PIPE)
            if GeometryKind(geometry) is GeometryKind.SHEET:
                data = {**data, "mode": HMode.ADVANCED_SHEET}
        return data


# =============================================================================
# Results
# =============================================================================


class Diagnostic(BaseModel):
    """A non-fatal anomaly the caller may flag or ignore."""

    code: DiagnosticCode
    message: str
    context: Dict[str, Any] = Field(default_factory=dict)

    model_config = {"frozen": True}


class CalculationResult(BaseModel):
    """
    Heat-loss calculation result.

    Per-unit quantities are per metre of pipe, or per m2 of sheet.
    Thermal transmittance is W/(m*K) for pipes and W/(m2*K) for sheets.
    """

    geometry: GeometryKind
    mode: HMode
    mean_lambda_w_mk: float
    thermal_transmittance: float
    heat_loss_w: float
    heat_loss_per_unit_w: float
    uninsulated_heat_loss_w: float
    decrease_pct: float
    cost_per_hour: float
    annual_cost: float
    annual_savings: float
    h_w_m2k: float
    h_uninsulated_w_m2k: float
    r_wall: float
    r_insulation: float
    r_convection: float
    r_total: float
    r_uninsulated: float
    surface_temp_c: float
    nominal_dimension_mm: Optional[float] = None
    recommended_thickness_mm: Optional[float] = None
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    provenance_hash: str = ""

    @property
    def has_warnings(self) -> bool:
        return bool(self.diagnostics)


class CondensationResult(BaseModel):
    """
    Condensation avoidance result.

    ``guaranteed`` is False when the thickness scan reached its ceiling
    without satisfying the dew point margin; the ceiling is then reported
    as a best-effort minimum thickness.
    """

    geometry: GeometryKind
    dew_point_c: float
    target_surface_temp_c: float
    minimum_thickness_mm: float
    nominal_thickness_mm: float
    surface_temp_c: float
    lambda_w_mk: float
    h_w_m2k: float
    ladder_mm: List[float]
    designation: str
    guaranteed: bool = True
    diagnostics: List[Diagnostic] = Field(default_factory=list)
    provenance_hash: str = ""

    @property
    def has_warnings(self) -> bool:
        return bool(self.diagnostics)


__all__ = [
    "Orientation",
    "CalculationDirection",
    "HMode",
    "GeometryKind",
    "DiagnosticCode",
    "PipeGeometry",
    "SheetGeometry",
    "Geometry",
    "ThermalInputs",
    "HeatLossParams",
    "CondensationParams",
    "Diagnostic",
    "CalculationResult",
    "CondensationResult",
]
