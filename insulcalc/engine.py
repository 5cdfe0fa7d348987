# -*- coding: utf-8 -*-
"""
Insulcalc Engine Entry Points

Plain data-in/data-out functions wrapping the calculators:

- compute_h(params) -> float
- compute_heat_loss(params) -> CalculationResult
- compute_condensation(params) -> CondensationResult

Each accepts either the pydantic parameter model or a flat ``dict`` that
is validated into it. Every call is timed and counted in the prometheus
metrics; failures are counted under their error code and re-raised
unchanged.

Example:
    >>> from insulcalc import compute_heat_loss
    >>> result = compute_heat_loss({
    ...     "ambient_temp_c": 20, "medium_temp_c": 80,
    ...     "outer_diameter_mm": 42, "insulation_thickness_mm": 19,
    ...     "length_m": 10, "tariff_per_kwh": 0.12,
    ... })
    >>> print(f"{result.heat_loss_w:.1f} W, {result.decrease_pct:.0f}% saved")
"""

import logging
import time
from typing import Any, Dict, Type, TypeVar, Union

from pydantic import BaseModel

from .calculators.condensation import CondensationCalculator
from .calculators.heat_loss import HeatLossCalculator
from .calculators.heat_transfer import estimate_h
from .exceptions import InsulcalcException
from .metrics import record_calculation, record_diagnostic, record_scan
from .models import (
    CalculationResult,
    CondensationParams,
    CondensationResult,
    HeatLossParams,
    ThermalInputs,
)

logger = logging.getLogger(__name__)

ParamsT = TypeVar("ParamsT", bound=BaseModel)


def _coerce(params: Union[BaseModel, Dict[str, Any]], model: Type[ParamsT]) -> ParamsT:
    if isinstance(params, model):
        return params
    if isinstance(params, BaseModel):
        return model.model_validate(params.model_dump())
    return model.model_validate(params)


def _run(operation: str, func, *args):
    start = time.perf_counter()
    try:
        result = func(*args)
    except InsulcalcException as exc:
        record_calculation(operation, exc.error_code, time.perf_counter() - start)
        logger.debug("%s failed: %s", operation, exc)
        raise
    record_calculation(operation, "success", time.perf_counter() - start)
    return result


def compute_h(params: Union[ThermalInputs, Dict[str, Any]]) -> float:
    """
    Surface heat transfer coefficient in W/(m2*K).

    The correlation is selected by ``params.mode`` (STANDARD by default).

    Raises:
        InvalidEmissivity: Emissivity outside [0, 1]
    """
    inputs = _coerce(params, ThermalInputs)
    return _run("compute_h", estimate_h, inputs)


def compute_heat_loss(params: Union[HeatLossParams, Dict[str, Any]]) -> CalculationResult:
    """
    Heat loss of an insulated pipe or sheet.

    Raises:
        InvalidGeometry, InvalidEmissivity, InvalidCoefficient
    """
    inputs = _coerce(params, HeatLossParams)
    result, _ = _run("compute_heat_loss", HeatLossCalculator().calculate, inputs)
    for diagnostic in result.diagnostics:
        record_diagnostic(diagnostic.code.value)
    logger.info(
        "Heat loss [%s/%s]: %.2f W, reduction %.1f%%",
        result.geometry.value, result.mode.value, result.heat_loss_w, result.decrease_pct,
    )
    return result


def compute_condensation(params: Union[CondensationParams, Dict[str, Any]]) -> CondensationResult:
    """
    Minimum and nominal insulation thickness against surface condensation.

    Raises:
        InvalidHumidity, UnreachableTarget, InvalidGeometry, InvalidEmissivity
    """
    inputs = _coerce(params, CondensationParams)
    result, provenance = _run("compute_condensation", CondensationCalculator().calculate, inputs)
    for step in provenance.steps:
        if step.operation == "scan":
            record_scan(result.geometry.value, step.inputs["iterations"])
    for diagnostic in result.diagnostics:
        record_diagnostic(diagnostic.code.value)
    logger.info(
        "Condensation [%s]: dew point %.2fC, minimum %.1fmm, nominal %smm%s",
        result.geometry.value, result.dew_point_c, result.minimum_thickness_mm,
        result.nominal_thickness_mm, "" if result.guaranteed else " (not guaranteed)",
    )
    return result


__all__ = [
    "compute_h",
    "compute_heat_loss",
    "compute_condensation",
]
