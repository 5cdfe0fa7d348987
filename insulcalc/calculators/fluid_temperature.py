# -*- coding: utf-8 -*-
"""
Fluid Temperature and Freezing Time

Temperature drop of a fluid in an insulated pipe and the time before a
stagnant fluid starts to freeze (ISO 12241 relations).

    Flowing fluid outlet temperature:
        T_f = T_e + (T_i - T_e) * exp(-k * L / (c_p * rho * v * pi * d^2 / 4))
    Static fluid temperature after time t:
        T_f = T_e + (T_i - T_e) * exp(-k * L * t / (c_p * m))
    Freezing time (h):
        t = (m * c_p * (T_i - T_fr) / (k * L * (T_fr - T_e)) + x * m * dH / Q) / 3600

k is the linear thermal transmittance in W/(m*K), e.g. the
``thermal_transmittance`` of a pipe heat-loss result.
"""

import logging
import math

from ..exceptions import InputValidationError

logger = logging.getLogger(__name__)


def _require_positive(**values: float) -> None:
    invalid = {name: "must be > 0" for name, value in values.items() if value is None or value <= 0}
    if invalid:
        raise InputValidationError(
            message=f"Physical parameters must be positive: {', '.join(sorted(invalid))}",
            context={name: values[name] for name in invalid},
            invalid_fields=invalid,
        )


def flowing_fluid_temperature(
    inlet_temp_c: float,
    ambient_temp_c: float,
    transmittance_w_mk: float,
    length_m: float,
    specific_heat_j_kgk: float,
    density_kg_m3: float,
    velocity_m_s: float,
    inner_diameter_m: float
) -> float:
    """Outlet temperature of a fluid flowing through an insulated pipe."""
    _require_positive(
        transmittance_w_mk=transmittance_w_mk,
        length_m=length_m,
        specific_heat_j_kgk=specific_heat_j_kgk,
        density_kg_m3=density_kg_m3,
        velocity_m_s=velocity_m_s,
        inner_diameter_m=inner_diameter_m,
    )
    capacity_flow = (
        specific_heat_j_kgk * density_kg_m3 * velocity_m_s
        * math.pi * inner_diameter_m ** 2 / 4.0
    )
    decay = math.exp(-transmittance_w_mk * length_m / capacity_flow)
    return ambient_temp_c + (inlet_temp_c - ambient_temp_c) * decay


def static_fluid_temperature(
    initial_temp_c: float,
    ambient_temp_c: float,
    transmittance_w_mk: float,
    length_m: float,
    time_s: float,
    specific_heat_j_kgk: float,
    mass_kg: float
) -> float:
    """Temperature of a stagnant fluid after cooling for ``time_s`` seconds."""
    _require_positive(
        transmittance_w_mk=transmittance_w_mk,
        length_m=length_m,
        specific_heat_j_kgk=specific_heat_j_kgk,
        mass_kg=mass_kg,
    )
    if time_s < 0:
        raise InputValidationError(
            message=f"Time must be non-negative, got {time_s}",
            invalid_fields={"time_s": "must be >= 0"},
        )
    decay = math.exp(-transmittance_w_mk * length_m * time_s / (specific_heat_j_kgk * mass_kg))
    return ambient_temp_c + (initial_temp_c - ambient_temp_c) * decay


def freezing_time_hours(
    initial_temp_c: float,
    freezing_temp_c: float,
    ambient_temp_c: float,
    transmittance_w_mk: float,
    length_m: float,
    mass_kg: float,
    specific_heat_j_kgk: float,
    frozen_fraction: float,
    latent_heat_j_kg: float,
    heat_flow_w: float
) -> float:
    """
    Hours until a stagnant fluid reaches its freezing point and the given
    fraction of it has frozen.

    Args:
        initial_temp_c: Fluid temperature at standstill
        freezing_temp_c: Freezing point of the fluid
        ambient_temp_c: Ambient temperature, below the freezing point
        transmittance_w_mk: Linear thermal transmittance k
        length_m: Pipe length
        mass_kg: Fluid mass in the pipe
        specific_heat_j_kgk: Fluid specific heat
        frozen_fraction: Acceptable frozen fraction x (0..1)
        latent_heat_j_kg: Latent heat of fusion
        heat_flow_w: Heat flow during freezing Q

    Raises:
        InputValidationError: Non-positive physical parameters, or an
            ambient temperature not below the freezing point
    """
    _require_positive(
        transmittance_w_mk=transmittance_w_mk,
        length_m=length_m,
        mass_kg=mass_kg,
        specific_heat_j_kgk=specific_heat_j_kgk,
        latent_heat_j_kg=latent_heat_j_kg,
        heat_flow_w=heat_flow_w,
    )
    if not 0.0 <= frozen_fraction <= 1.0:
        raise InputValidationError(
            message=f"Frozen fraction must be in [0, 1], got {frozen_fraction}",
            invalid_fields={"frozen_fraction": "must be in [0, 1]"},
        )
    if freezing_temp_c <= ambient_temp_c:
        raise InputValidationError(
            message=(
                f"Ambient {ambient_temp_c}C must be below the freezing point "
                f"{freezing_temp_c}C for the fluid to freeze"
            ),
            context={"ambient_temp_c": ambient_temp_c, "freezing_temp_c": freezing_temp_c},
        )

    cooling_s = (
        mass_kg * specific_heat_j_kgk * (initial_temp_c - freezing_temp_c)
        / (transmittance_w_mk * length_m * (freezing_temp_c - ambient_temp_c))
    )
    freezing_s = frozen_fraction * mass_kg * latent_heat_j_kg / heat_flow_w
    hours = (cooling_s + freezing_s) / 3600.0
    logger.debug("Freezing time: cooling=%.0fs freezing=%.0fs total=%.2fh", cooling_s, freezing_s, hours)
    return hours


__all__ = [
    "flowing_fluid_temperature",
    "static_fluid_temperature",
    "freezing_time_hours",
]
