# -*- coding: utf-8 -*-
"""
Thermal Resistance Networks

Series resistance networks for insulated pipes (per unit length, m*K/W)
and sheets (K/W), plus the heat flow and surface temperature relations
built on them.

Pipe:
    R_wall = ln(r_o / r_i) / (2 * pi * lambda_steel)     (0 when no wall)
    R_ins  = ln(r_ins / r_o) / (2 * pi * lambda)
    R_conv = 1 / (h * 2 * pi * r_ins)

Sheet:
    R_ins  = s / (lambda * A)
    R_conv = 1 / (h * A)
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import get_config
from ..exceptions import InvalidCoefficient, InvalidConductivity, InvalidGeometry

logger = logging.getLogger(__name__)

PIPE_UNIT = "m*K/W"
SHEET_UNIT = "K/W"


@dataclass(frozen=True)
class ResistanceNetwork:
    """
    Wall, insulation and surface resistances in series.

    Every resistance is positive except the wall, which is exactly 0 when
    the pipe wall is not modelled.
    """
    wall: float
    insulation: float
    convection: float
    unit: str = PIPE_UNIT

    def __post_init__(self):
        if self.wall < 0 or self.insulation <= 0 or self.convection <= 0:
            raise InvalidGeometry(
                message="Resistance network requires positive insulation and surface terms",
                context={
                    "wall": self.wall,
                    "insulation": self.insulation,
                    "convection": self.convection,
                },
            )

    @property
    def total(self) -> float:
        return self.wall + self.insulation + self.convection


# =============================================================================
# VALIDATION
# =============================================================================

def _check_conductivity(conductivity: float) -> None:
    if conductivity <= 0:
        raise InvalidConductivity(
            message=f"Thermal conductivity must be positive, got {conductivity}",
            context={"conductivity_w_mk": conductivity},
        )


def _check_coefficient(h: float) -> None:
    if h <= 0:
        raise InvalidCoefficient(
            message=f"Surface coefficient must be positive, got {h}",
            context={"h_w_m2k": h},
        )


def validate_pipe(outer_diameter_mm: float, wall_thickness_mm: float = 0.0) -> None:
    """Raise InvalidGeometry unless the pipe bore is physically meaningful."""
    if outer_diameter_mm is None or outer_diameter_mm <= 0:
        raise InvalidGeometry(
            message=f"Pipe outer diameter must be positive, got {outer_diameter_mm}",
            invalid_fields={"outer_diameter_mm": "must be > 0"},
        )
    if wall_thickness_mm < 0:
        raise InvalidGeometry(
            message=f"Wall thickness must be non-negative, got {wall_thickness_mm}",
            invalid_fields={"wall_thickness_mm": "must be >= 0"},
        )
    if 2.0 * wall_thickness_mm >= outer_diameter_mm:
        raise InvalidGeometry(
            message=(
                f"Outer diameter {outer_diameter_mm}mm must exceed the inner bore "
                f"left by a {wall_thickness_mm}mm wall"
            ),
            invalid_fields={"wall_thickness_mm": "2 * wall must be < outer diameter"},
        )


def _check_thickness(insulation_thickness_mm: float) -> None:
    if insulation_thickness_mm is None or insulation_thickness_mm <= 0:
        raise InvalidGeometry(
            message=f"Insulation thickness must be positive, got {insulation_thickness_mm}",
            invalid_fields={"insulation_thickness_mm": "must be > 0"},
        )


# =============================================================================
# PIPE
# =============================================================================

def pipe_wall_resistance(
    outer_diameter_mm: float,
    wall_thickness_mm: float,
    steel_conductivity_w_mk: Optional[float] = None
) -> float:
    """Conductive resistance of the pipe wall per metre; 0 without a wall."""
    if wall_thickness_mm <= 0:
        return 0.0
    if steel_conductivity_w_mk is None:
        steel_conductivity_w_mk = get_config().steel_conductivity_w_mk
    r_outer = outer_diameter_mm / 2000.0
    r_inner = r_outer - wall_thickness_mm / 1000.0
    return math.log(r_outer / r_inner) / (2.0 * math.pi * steel_conductivity_w_mk)


def pipe_network(
    outer_diameter_mm: float,
    insulation_thickness_mm: float,
    conductivity_w_mk: float,
    h: float,
    wall_thickness_mm: float = 0.0,
    steel_conductivity_w_mk: Optional[float] = None
) -> ResistanceNetwork:
    """
    Per-metre resistance network of an insulated pipe.

    Raises:
        InvalidGeometry: Non-positive diameter or thickness, negative wall
        InvalidConductivity: Non-positive conductivity
        InvalidCoefficient: Non-positive h
    """
    validate_pipe(outer_diameter_mm, wall_thickness_mm)
    _check_thickness(insulation_thickness_mm)
    _check_conductivity(conductivity_w_mk)
    _check_coefficient(h)

    r_outer = outer_diameter_mm / 2000.0
    r_insulated = r_outer + insulation_thickness_mm / 1000.0
    return ResistanceNetwork(
        wall=pipe_wall_resistance(outer_diameter_mm, wall_thickness_mm, steel_conductivity_w_mk),
        insulation=math.log(r_insulated / r_outer) / (2.0 * math.pi * conductivity_w_mk),
        convection=1.0 / (h * 2.0 * math.pi * r_insulated),
        unit=PIPE_UNIT,
    )


def bare_pipe_resistance(
    outer_diameter_mm: float,
    h_bare: float,
    wall_thickness_mm: float = 0.0,
    steel_conductivity_w_mk: Optional[float] = None
) -> float:
    """Per-metre resistance of the uninsulated pipe: wall plus bare surface."""
    validate_pipe(outer_diameter_mm, wall_thickness_mm)
    _check_coefficient(h_bare)
    r_outer = outer_diameter_mm / 2000.0
    return (
        pipe_wall_resistance(outer_diameter_mm, wall_thickness_mm, steel_conductivity_w_mk)
        + 1.0 / (h_bare * 2.0 * math.pi * r_outer)
    )


# =============================================================================
# SHEET
# =============================================================================

def _check_area(area_m2: float) -> None:
    if area_m2 is None or area_m2 <= 0:
        raise InvalidGeometry(
            message=f"Area must be positive, got {area_m2}",
            invalid_fields={"area_m2": "must be > 0"},
        )


def sheet_network(
    insulation_thickness_mm: float,
    area_m2: float,
    conductivity_w_mk: float,
    h: float
) -> ResistanceNetwork:
    """Resistance network of an insulated plane surface."""
    _check_thickness(insulation_thickness_mm)
    _check_area(area_m2)
    _check_conductivity(conductivity_w_mk)
    _check_coefficient(h)
    return ResistanceNetwork(
        wall=0.0,
        insulation=(insulation_thickness_mm / 1000.0) / (conductivity_w_mk * area_m2),
        convection=1.0 / (h * area_m2),
        unit=SHEET_UNIT,
    )


def bare_sheet_resistance(area_m2: float, h_bare: float) -> float:
    _check_area(area_m2)
    _check_coefficient(h_bare)
    return 1.0 / (h_bare * area_m2)


# =============================================================================
# HEAT FLOW
# =============================================================================

def heat_flow(delta_t: float, total_resistance: float) -> float:
    """Magnitude of the heat flow |dT| / R through a network."""
    if total_resistance <= 0:
        raise InvalidGeometry(
            message=f"Total resistance must be positive, got {total_resistance}",
            context={"total_resistance": total_resistance},
        )
    return abs(delta_t) / total_resistance


def network_surface_temperature(
    medium_temp_c: float,
    ambient_temp_c: float,
    network: ResistanceNetwork
) -> float:
    """
    Outer insulation surface temperature from the network.

    T_s = T_medium - q * (R_wall + R_ins), with the signed flow
    q = (T_medium - T_ambient) / R_total.
    """
    q = (medium_temp_c - ambient_temp_c) / network.total
    return medium_temp_c - q * (network.wall + network.insulation)


def surface_temperature(
    ambient_temp_c: float,
    heat_loss_w: float,
    h: float,
    area_m2: float
) -> float:
    """
    Surface temperature from a known heat loss: T_amb + Q / (h * A).

    For pipes pass A = pi * D * L of the insulated outer surface.
    """
    _check_coefficient(h)
    _check_area(area_m2)
    return ambient_temp_c + heat_loss_w / (h * area_m2)


__all__ = [
    "ResistanceNetwork",
    "validate_pipe",
    "pipe_wall_resistance",
    "pipe_network",
    "bare_pipe_resistance",
    "sheet_network",
    "bare_sheet_resistance",
    "heat_flow",
    "network_surface_temperature",
    "surface_temperature",
]
