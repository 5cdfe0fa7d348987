# -*- coding: utf-8 -*-
"""Tests for fluid temperature and freezing time helpers."""

import math

import pytest

from insulcalc.calculators.fluid_temperature import (
    flowing_fluid_temperature,
    freezing_time_hours,
    static_fluid_temperature,
)
from insulcalc.exceptions import InputValidationError


class TestFlowingFluid:

    def test_outlet_temperature(self):
        capacity = 4190.0 * 1000.0 * 0.5 * math.pi * 0.02 ** 2 / 4
        expected = 20.0 + 60.0 * math.exp(-0.2 * 100.0 / capacity)
        result = flowing_fluid_temperature(80.0, 20.0, 0.2, 100.0, 4190.0, 1000.0, 0.5, 0.02)
        assert result == pytest.approx(expected)
        assert 20.0 < result < 80.0

    def test_long_pipe_approaches_ambient(self):
        result = flowing_fluid_temperature(80.0, 20.0, 0.2, 1e7, 4190.0, 1000.0, 0.5, 0.02)
        assert result == pytest.approx(20.0, abs=1e-6)

    def test_non_positive_velocity(self):
        with pytest.raises(InputValidationError) as exc_info:
            flowing_fluid_temperature(80.0, 20.0, 0.2, 100.0, 4190.0, 1000.0, 0.0, 0.02)
        assert "velocity_m_s" in exc_info.value.context["invalid_fields"]


class TestStaticFluid:

    def test_no_time_elapsed(self):
        assert static_fluid_temperature(60.0, 10.0, 0.2, 10.0, 0.0, 4190.0, 3.0) == pytest.approx(60.0)

    def test_cooling(self):
        expected = 10.0 + 50.0 * math.exp(-0.2 * 10.0 * 3600.0 / (4190.0 * 3.0))
        assert static_fluid_temperature(60.0, 10.0, 0.2, 10.0, 3600.0, 4190.0, 3.0) == pytest.approx(expected)

    def test_negative_time(self):
        with pytest.raises(InputValidationError):
            static_fluid_temperature(60.0, 10.0, 0.2, 10.0, -1.0, 4190.0, 3.0)


class TestFreezingTime:

    def test_freezing_time(self):
        cooling = 3.0 * 4190.0 * (10.0 - 0.0) / (0.2 * 10.0 * (0.0 - (-10.0)))
        freezing = 0.5 * 3.0 * 334000.0 / 20.0
        expected = (cooling + freezing) / 3600.0
        result = freezing_time_hours(10.0, 0.0, -10.0, 0.2, 10.0, 3.0, 4190.0, 0.5, 334000.0, 20.0)
        assert result == pytest.approx(expected)

    def test_ambient_above_freezing(self):
        with pytest.raises(InputValidationError):
            freezing_time_hours(10.0, 0.0, 5.0, 0.2, 10.0, 3.0, 4190.0, 0.5, 334000.0, 20.0)

    def test_invalid_fraction(self):
        with pytest.raises(InputValidationError):
            freezing_time_hours(10.0, 0.0, -10.0, 0.2, 10.0, 3.0, 4190.0, 1.5, 334000.0, 20.0)

    def test_non_positive_mass(self):
        with pytest.raises(InputValidationError):
            freezing_time_hours(10.0, 0.0, -10.0, 0.2, 10.0, 0.0, 4190.0, 0.5, 334000.0, 20.0)
