# -*- coding: utf-8 -*-
"""
Energy Cost Helpers

Converts heat losses into running cost using the caller's energy tariff
(currency per kWh). Currency is opaque to the engine.
"""

HOURS_PER_YEAR = 8760.0


def cost_per_hour(heat_loss_w: float, length_m: float = 1.0, tariff_per_kwh: float = 0.0) -> float:
    """
    Energy cost of a heat loss sustained for one hour.

    Formula:
        cost = (heat_loss * length) / 1000 * tariff

    Args:
        heat_loss_w: Heat loss in W per metre (pipes) or W (sheets)
        length_m: Pipe length; 1 for sheets
        tariff_per_kwh: Energy tariff per kWh

    Returns:
        Cost per hour in tariff currency
    """
    return (heat_loss_w * length_m) / 1000.0 * tariff_per_kwh


def annual_cost(hourly_cost: float, operating_hours: float = HOURS_PER_YEAR) -> float:
    """Yearly cost for a number of operating hours (continuous operation by default)."""
    if operating_hours < 0:
        raise ValueError(f"Operating hours must be non-negative, got {operating_hours}")
    return hourly_cost * operating_hours


def annual_savings(
    bare_heat_loss_w: float,
    insulated_heat_loss_w: float,
    tariff_per_kwh: float,
    operating_hours: float = HOURS_PER_YEAR
) -> float:
    """Yearly cost avoided by insulating, from bare and insulated heat losses in W."""
    saved_w = bare_heat_loss_w - insulated_heat_loss_w
    return annual_cost(cost_per_hour(saved_w, 1.0, tariff_per_kwh), operating_hours)
