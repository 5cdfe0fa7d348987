# -*- coding: utf-8 -*-
"""
Stock and Geometry Catalogs

Read-only reference data for stocked insulation products and the utility
lookups built on it:

- Tube sizes (copper and steel) with the insulation thicknesses stocked for
  each outer diameter and the metres supplied per carton
- Sheet roll areas per thickness and roll width
- Stock ladder selection and nominal thickness rounding
- ROKAFLEX nominal dimension designation for a (pipe, thickness) pair

Steel outer diameters follow EN 10220 / ISO 4200.
"""

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Sequence, Tuple

from .exceptions import CatalogError, InputValidationError

logger = logging.getLogger(__name__)

DEFAULT_THICKNESS_LADDER_MM: Tuple[int, ...] = (6, 9, 13, 19, 25, 32)


class TubeMaterial(str, Enum):
    """Pipe material families in the tube catalog."""
    COPPER = "copper"
    STEEL = "steel"


@dataclass(frozen=True)
class TubeSize:
    """
    One catalog tube size.

    Attributes:
        material: Copper or steel
        dn: Nominal diameter designation (e.g. "DN15")
        inch: Inch designation (e.g. '1/2"')
        outer_diameter_mm: Outer diameter (mm)
        stock_thicknesses: Insulation thickness (mm) -> metres per carton;
            empty when no pipe sections are stocked for this size
    """
    material: TubeMaterial
    dn: str
    inch: str
    outer_diameter_mm: float
    stock_thicknesses: Mapping[int, int] = field(default_factory=dict)

    @property
    def ladder(self) -> Tuple[int, ...]:
        """Stocked thicknesses in ascending order."""
        return tuple(sorted(self.stock_thicknesses))


def _tube(material, dn, inch, mm, stock):
    return TubeSize(material, dn, inch, mm, MappingProxyType(dict(stock)))


_CU = TubeMaterial.COPPER
_ST = TubeMaterial.STEEL

TUBE_SIZES: Tuple[TubeSize, ...] = (
    _tube(_CU, "DN8", '1/4"', 6, {6: 486, 9: 342, 13: 216}),
    _tube(_CU, "DN8", '5/16"', 8, {6: 432, 9: 306, 13: 198}),
    _tube(_CU, "DN10", '3/8"', 10, {6: 378, 9: 270, 13: 180}),
    _tube(_CU, "DN15", '1/2"', 12, {6: 342, 9: 234, 13: 162}),
    _tube(_CU, "DN15", '5/8"', 15, {6: 270, 9: 198, 13: 144}),
    _tube(_CU, "DN20", '3/4"', 18, {6: 234, 9: 180, 13: 126, 19: 72, 25: 56}),
    _tube(_CU, "DN20", '7/8"', 22, {6: 198, 9: 162, 13: 108, 19: 72, 25: 48, 32: 32}),
    _tube(_CU, "DN25", '1"', 25, {6: 164, 9: 134, 13: 96, 19: 66, 25: 44, 32: 28}),
    _tube(_CU, "DN25", '1 1/8"', 28, {6: 132, 9: 108, 13: 84, 19: 60, 25: 40, 32: 24}),
    _tube(_CU, "DN32", '1 3/8"', 35, {6: 120, 9: 96, 13: 72, 19: 48, 25: 32, 32: 24}),
    _tube(_CU, "DN40", '1 5/8"', 42, {6: 108, 9: 88, 13: 56, 19: 40, 25: 24, 32: 22}),
    _tube(_ST, "DN6", '1/8"', 10.2, {}),
    _tube(_ST, "DN8", '1/4"', 13.5, {}),
    _tube(_ST, "DN10", '3/8"', 17.2, {}),
    _tube(_ST, "DN15", '1/2"', 21.3, {6: 342, 9: 234, 13: 162}),
    _tube(_ST, "DN20", '3/4"', 26.9, {6: 234, 9: 180, 13: 126, 19: 72, 25: 56}),
    _tube(_ST, "DN25", '1"', 33.7, {6: 164, 9: 134, 13: 96, 19: 66, 25: 44, 32: 28}),
    _tube(_ST, "DN32", '1 1/4"', 42.4, {6: 108, 9: 88, 13: 56, 19: 40, 25: 24, 32: 22}),
    _tube(_ST, "DN40", '1 1/2"', 48.3, {9: 80, 13: 48, 19: 32, 25: 24, 32: 18}),
    _tube(_ST, "DN50", '2"', 60.3, {9: 56, 13: 40, 19: 32, 25: 18, 32: 14}),
    _tube(_ST, "DN65", '2 1/2"', 76.1, {9: 48, 13: 36, 19: 24, 25: 18, 32: 12}),
    _tube(_ST, "DN80", '3"', 88.9, {9: 42, 13: 30, 19: 24, 25: 16, 32: 12}),
    _tube(_ST, "DN100", '4"', 114.3, {9: 28, 13: 24, 19: 16, 25: 12, 32: 8}),
)

# Roll area (m2 per roll) by thickness (mm) and roll width
SHEET_ROLL_AREA_M2: Mapping[str, Mapping[int, float]] = MappingProxyType({
    "1m": MappingProxyType({
        6: 30, 9: 20, 10: 20, 13: 14, 19: 10, 25: 8, 32: 6, 40: 4, 50: 4,
    }),
    "1.2m": MappingProxyType({
        6: 36, 9: 24, 10: 24, 13: 16.8, 19: 12, 25: 9.6, 32: 7.2, 40: 4.8, 50: 4.8,
    }),
})

SHEET_THICKNESS_LADDER_MM: Tuple[int, ...] = tuple(sorted(SHEET_ROLL_AREA_M2["1m"]))

# Pipe outer diameters (mm) with a nominal ROKAFLEX designation, and the
# insulation thicknesses offered for each
_NOMINAL_DIMENSIONS: Dict[int, Tuple[int, ...]] = {
    6: (6, 9, 13), 8: (6, 9, 13), 10: (6, 9, 13), 12: (6, 9, 13),
    15: (6, 9, 13), 18: (6, 9, 13, 19, 25),
    22: (6, 9, 13, 19, 25, 32), 25: (6, 9, 13, 19, 25, 32),
    28: (6, 9, 13, 19, 25, 32), 35: (6, 9, 13, 19, 25, 32),
    42: (6, 9, 13, 19, 25, 32),
    48: (9, 13, 19, 25, 32), 54: (9, 13, 19, 25, 32), 60: (9, 13, 19, 25, 32),
    76: (9, 13, 19, 25, 32), 89: (9, 13, 19, 25, 32), 114: (9, 13, 19, 25, 32),
}
ROKAFLEX_DIMENSIONS: Mapping[Tuple[float, float], int] = MappingProxyType({
    (float(d), float(t)): d
    for d, thicknesses in _NOMINAL_DIMENSIONS.items()
    for t in thicknesses
})


# =============================================================================
# LOOKUPS
# =============================================================================

def find_tube(outer_diameter_mm: float) -> Optional[TubeSize]:
    """First catalog tube whose outer diameter matches exactly."""
    for size in TUBE_SIZES:
        if size.outer_diameter_mm == outer_diameter_mm:
            return size
    return None


def format_tube_name(size: TubeSize) -> str:
    """
    Display name of a tube size.

    Copper sizes omit the DN: ``1/2" ( Cu ) - 12mm``.
    Steel sizes lead with it and use a decimal comma: ``DN15 - 1/2" (St) - 21,3mm``.
    """
    mm = f"{size.outer_diameter_mm:g}".replace(".", ",")
    if size.material is TubeMaterial.COPPER:
        return f"{size.inch} ( Cu ) - {mm}mm"
    return f"{size.dn} - {size.inch} (St) - {mm}mm"


def pipe_thickness_ladder(outer_diameter_mm: float) -> Tuple[int, ...]:
    """Stocked thicknesses for a pipe, or the default ladder when none are listed."""
    tube = find_tube(outer_diameter_mm)
    if tube is None or not tube.stock_thicknesses:
        return DEFAULT_THICKNESS_LADDER_MM
    return tube.ladder


def sheet_thickness_ladder() -> Tuple[int, ...]:
    """Stocked sheet thicknesses."""
    return SHEET_THICKNESS_LADDER_MM or DEFAULT_THICKNESS_LADDER_MM


def select_stock_thickness(target_mm: float, ladder: Sequence[float]) -> float:
    """
    Smallest listed size >= target, else the largest listed size.

    An empty ladder falls back to the default ladder.
    """
    sizes = sorted(ladder) if ladder else list(DEFAULT_THICKNESS_LADDER_MM)
    for size in sizes:
        if size >= target_mm:
            return size
    return sizes[-1]


def nominal_thickness(
    minimum_mm: float,
    ladder: Sequence[float],
    margin_factor: float = 1.2
) -> float:
    """Stocked thickness covering the minimum thickness plus margin."""
    # 6 decimals absorbs float noise such as 5.0 * 1.2 = 6.000000000000001
    target = round(minimum_mm * margin_factor, 6)
    selected = select_stock_thickness(target, ladder)
    logger.debug(
        "Nominal thickness: minimum=%.2fmm target=%.2fmm selected=%smm",
        minimum_mm, target, selected,
    )
    return selected


def rokaflex_dimension(tube_diameter_mm: float, insulation_thickness_mm: float) -> float:
    """Nominal ROKAFLEX bore for a pipe/thickness pair; the pipe diameter if unlisted."""
    return ROKAFLEX_DIMENSIONS.get(
        (float(tube_diameter_mm), float(insulation_thickness_mm)), tube_diameter_mm
    )


def rolls_required(area_m2: float, thickness_mm: int, roll_width: str = "1m") -> int:
    """
    Number of sheet rolls covering an area.

    Raises:
        InputValidationError: If the area is negative
        CatalogError: If the roll width or thickness is not stocked
    """
    if area_m2 < 0:
        raise InputValidationError(
            message=f"Area must be non-negative, got {area_m2}",
            invalid_fields={"area_m2": "must be >= 0"},
        )
    rolls = SHEET_ROLL_AREA_M2.get(roll_width)
    if rolls is None or thickness_mm not in rolls:
        raise CatalogError(
            message=f"No {roll_width} roll stocked at {thickness_mm}mm",
            context={"roll_width": roll_width, "thickness_mm": thickness_mm},
        )
    roll_area = rolls[thickness_mm]
    return math.ceil(area_m2 / roll_area)


def list_tube_names() -> List[str]:
    """Display names of every catalog tube, in catalog order."""
    return [format_tube_name(size) for size in TUBE_SIZES]


__all__ = [
    "DEFAULT_THICKNESS_LADDER_MM",
    "TubeMaterial",
    "TubeSize",
    "TUBE_SIZES",
    "SHEET_ROLL_AREA_M2",
    "SHEET_THICKNESS_LADDER_MM",
    "ROKAFLEX_DIMENSIONS",
    "find_tube",
    "format_tube_name",
    "pipe_thickness_ladder",
    "sheet_thickness_ladder",
    "select_stock_thickness",
    "nominal_thickness",
    "rokaflex_dimension",
    "rolls_required",
    "list_tube_names",
]
