# -*- coding: utf-8 -*-
"""
Insulation Material Catalog and Conductivity Interpolator

Static, read-only catalog of insulation materials with temperature dependent
thermal conductivity tables, plus the piecewise-linear lookup used by every
calculator in the engine.

This module provides:
- MaterialSpec: immutable material definition (lambda table, vapour
  resistance, density and service temperature range)
- MATERIALS / SHEET_MATERIALS: catalogs for pipe sections and sheets
- interpolate_lambda(): conductivity at a temperature with the conservative
  0.036 W/(m*K) fallback outside every table bracket
- Cladding types and their surface emissivities

Reference data: manufacturer datasheets for ROKAFLEX ST elastomeric foam.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, Optional, Tuple, Union

from .config import get_config
from .exceptions import InvalidMaterial

logger = logging.getLogger(__name__)

DEFAULT_CONDUCTIVITY_W_MK = 0.036


# =============================================================================
# MATERIAL SPECIFICATION
# =============================================================================

@dataclass(frozen=True)
class MaterialSpec:
    """
    Immutable insulation material definition.

    Attributes:
        name: Catalog identifier (e.g. "ROKAFLEX ST")
        conductivity_table: Temperature (C) -> lambda (W/(m*K)); any order
        vapour_resistance: Water vapour diffusion resistance factor mu,
            either a single value or a (min, max) range
        density_range_kg_m3: Optional (min, max) density
        temperature_range_c: Optional (min, max) service temperature
    """
    name: str
    conductivity_table: Mapping[float, float]
    vapour_resistance: Optional[Union[float, Tuple[float, float]]] = None
    density_range_kg_m3: Optional[Tuple[float, float]] = None
    temperature_range_c: Optional[Tuple[float, float]] = None
    _breakpoints: Tuple[Tuple[float, float], ...] = field(
        init=False, repr=False, compare=False
    )

    def __post_init__(self):
        if not self.conductivity_table:
            raise InvalidMaterial(
                message=f"Material '{self.name}' has an empty conductivity table",
                context={"material": self.name},
            )
        for temp, value in self.conductivity_table.items():
            if value <= 0:
                raise InvalidMaterial(
                    message=(
                        f"Material '{self.name}' has non-positive conductivity "
                        f"{value} at {temp}C"
                    ),
                    context={"material": self.name, "temperature_c": temp},
                )
        breakpoints = tuple(
            sorted((float(t), float(v)) for t, v in self.conductivity_table.items())
        )
        object.__setattr__(self, "_breakpoints", breakpoints)
        object.__setattr__(
            self, "conductivity_table", MappingProxyType(dict(breakpoints))
        )

    @property
    def breakpoints(self) -> Tuple[Tuple[float, float], ...]:
        """Table breakpoints sorted by ascending temperature."""
        return self._breakpoints

    def conductivity_at(self, temperature_c: float) -> Optional[float]:
        """
        Linear interpolation between the bracketing breakpoints.

        Returns None when the temperature lies outside every bracket so the
        caller can apply its fallback.
        """
        points = self._breakpoints
        for (t0, l0), (t1, l1) in zip(points, points[1:]):
            if t0 <= temperature_c <= t1:
                return l0 + (l1 - l0) * (temperature_c - t0) / (t1 - t0)
        return None


# =============================================================================
# CATALOGS
# =============================================================================

_ROKAFLEX_LAMBDA = {-20: 0.032, 0: 0.034, 20: 0.036, 40: 0.038, 60: 0.040}

MATERIALS: Mapping[str, MaterialSpec] = MappingProxyType({
    "ROKAFLEX ST": MaterialSpec(
        name="ROKAFLEX ST",
        conductivity_table=_ROKAFLEX_LAMBDA,
        vapour_resistance=(2000.0, 8000.0),
        density_range_kg_m3=(41.0, 60.0),
    ),
})

SHEET_MATERIALS: Mapping[str, MaterialSpec] = MappingProxyType({
    "ROKAFLEX ST": MaterialSpec(
        name="ROKAFLEX ST",
        conductivity_table=_ROKAFLEX_LAMBDA,
        vapour_resistance=7000.0,
        temperature_range_c=(-200.0, 110.0),
    ),
})


def get_material(
    name: str,
    catalog: Optional[Mapping[str, MaterialSpec]] = None
) -> Optional[MaterialSpec]:
    """Look up a material by name; None on a miss."""
    return (catalog if catalog is not None else MATERIALS).get(name)


def interpolate_lambda(
    temperature_c: float,
    material: Union[str, MaterialSpec],
    catalog: Optional[Mapping[str, MaterialSpec]] = None,
) -> float:
    """
    Thermal conductivity of a material at a temperature.

    For temperatures inside the table range the result is the linear
    interpolation between the bracketing breakpoints. Outside every bracket,
    and for unknown materials, the configured default conductivity
    (0.036 W/(m*K)) is returned instead of extrapolating.

    Args:
        temperature_c: Reference temperature (C)
        material: Catalog name or a MaterialSpec
        catalog: Catalog to search when material is a name (pipe catalog
            by default)

    Returns:
        Conductivity in W/(m*K)
    """
    default = get_config().default_conductivity_w_mk
    spec = material if isinstance(material, MaterialSpec) else get_material(material, catalog)
    if spec is None:
        logger.debug("Material %r not in catalog, using default lambda %.4f", material, default)
        return default

    value = spec.conductivity_at(temperature_c)
    if value is None:
        logger.debug(
            "Temperature %.2fC outside %s table, using default lambda %.4f",
            temperature_c, spec.name, default,
        )
        return default
    return value


# =============================================================================
# CLADDING
# =============================================================================

class CladdingType(str, Enum):
    """Cladding options for sheet insulation."""
    NONE = ""
    STD = "STD"
    AF = "AF"
    AG = "AG"
    SA = "SA"


CLADDING_EMISSIVITY: Mapping[CladdingType, float] = MappingProxyType({
    CladdingType.NONE: 0.93,  # bare rubber
    CladdingType.STD: 0.93,
    CladdingType.AF: 0.05,    # aluminium foil
    CladdingType.AG: 0.05,    # aluminium foil + PVC
    CladdingType.SA: 0.93,    # self-adhesive layer
})


def emissivity_for_cladding(cladding: Union[str, CladdingType]) -> float:
    """Surface emissivity of a cladding code; raises ValueError on unknown codes."""
    return CLADDING_EMISSIVITY[CladdingType(cladding)]


__all__ = [
    "DEFAULT_CONDUCTIVITY_W_MK",
    "MaterialSpec",
    "MATERIALS",
    "SHEET_MATERIALS",
    "get_material",
    "interpolate_lambda",
    "CladdingType",
    "CLADDING_EMISSIVITY",
    "emissivity_for_cladding",
]
