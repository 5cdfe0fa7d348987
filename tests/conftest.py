# -*- coding: utf-8 -*-
"""Pytest configuration and shared fixtures."""

import pytest

from insulcalc.config import InsulcalcConfig, reset_config, set_config
from insulcalc.models import CondensationParams, HeatLossParams, ThermalInputs


@pytest.fixture(autouse=True)
def default_config():
    """Run every test against the built-in defaults, independent of the environment."""
    config = InsulcalcConfig()
    set_config(config)
    yield config
    reset_config()


@pytest.fixture
def still_air_inputs():
    """Surface, medium and ambient at the same temperature."""
    return ThermalInputs(
        ambient_temp_c=20.0,
        medium_temp_c=20.0,
        surface_temp_c=20.0,
        emissivity=0.9,
    )


@pytest.fixture
def hot_pipe_params():
    """Heating pipe: 42 mm copper, 19 mm insulation, 10 m run."""
    return HeatLossParams(
        ambient_temp_c=20.0,
        medium_temp_c=80.0,
        outer_diameter_mm=42.0,
        insulation_thickness_mm=19.0,
        length_m=10.0,
        tariff_per_kwh=0.1,
    )


@pytest.fixture
def cold_pipe_params():
    """Chilled water pipe in humid air."""
    return CondensationParams(
        ambient_temp_c=25.0,
        medium_temp_c=-5.0,
        relative_humidity_pct=60.0,
        outer_diameter_mm=22.0,
    )
