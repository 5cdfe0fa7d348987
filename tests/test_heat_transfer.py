# -*- coding: utf-8 -*-
"""Tests for the surface heat transfer coefficient estimators."""

import logging
import math

import pytest

from insulcalc.calculators.heat_transfer import (
    ESTIMATORS,
    advanced_pipe_h,
    advanced_sheet_h,
    estimate_h,
    kflex_h,
    linearised_radiative_coefficient,
    radiative_coefficient,
    standard_h,
)
from insulcalc.exceptions import InvalidEmissivity
from insulcalc.models import HMode, Orientation, ThermalInputs


def _inputs(**overrides):
    data = {"ambient_temp_c": 20.0, "medium_temp_c": 20.0, "emissivity": 0.0}
    data.update(overrides)
    return ThermalInputs(**data)


class TestEmissivityValidation:
    """Every correlation rejects emissivity outside [0, 1]."""

    @pytest.mark.parametrize("mode", list(HMode))
    @pytest.mark.parametrize("emissivity", [-0.1, 1.01])
    def test_invalid_emissivity_raises(self, mode, emissivity):
        with pytest.raises(InvalidEmissivity) as exc_info:
            estimate_h(_inputs(emissivity=emissivity), mode)
        assert exc_info.value.context["emissivity"] == emissivity

    @pytest.mark.parametrize("mode", list(HMode))
    def test_boundaries_accepted(self, mode):
        assert estimate_h(_inputs(emissivity=0.0), mode) > 0
        assert estimate_h(_inputs(emissivity=1.0), mode) > 0


class TestRadiation:

    def test_exact_form_matches_factorisation(self):
        ts, ta = 80.0 + 273.15, 20.0 + 273.15
        expected = 0.9 * 5.67e-8 * (ts ** 2 + ta ** 2) * (ts + ta)
        assert radiative_coefficient(0.9, 80.0, 20.0) == pytest.approx(expected)

    def test_equal_temperatures_use_linearised_form(self):
        assert radiative_coefficient(0.9, 20.0, 20.0) == pytest.approx(
            linearised_radiative_coefficient(0.9, 20.0)
        )


class TestStandard:
    """Tests for the standard correlation."""

    def test_zero_delta_uses_floor_and_linearised_radiation(self, still_air_inputs):
        """Convection floor 1/0.13 plus 4*eps*sigma*T^3, times 0.75."""
        h_rad = 4 * 0.9 * 5.67e-8 * 293.15 ** 3
        expected = (1 / 0.13 + h_rad) * 0.75
        assert standard_h(still_air_inputs) == pytest.approx(expected, abs=1e-3)
        assert standard_h(still_air_inputs) == pytest.approx(9.626, abs=1e-3)

    def test_safety_factor_toggle(self, still_air_inputs):
        with_factor = standard_h(still_air_inputs)
        without = standard_h(still_air_inputs.model_copy(update={"apply_safety_factor": False}))
        assert without == pytest.approx(with_factor / 0.75, abs=2e-3)

    def test_radiation_capped(self):
        """Very hot surfaces saturate at the 6.5 W/m2K radiation cap."""
        hot = dict(ambient_temp_c=20.0, medium_temp_c=600.0, surface_temp_c=500.0)
        assert standard_h(_inputs(emissivity=1.0, **hot)) == standard_h(_inputs(emissivity=0.95, **hot))

    def test_surface_estimate_when_absent(self):
        estimated = standard_h(_inputs(medium_temp_c=80.0, emissivity=0.9))
        explicit = standard_h(_inputs(medium_temp_c=80.0, emissivity=0.9, surface_temp_c=38.0))
        assert estimated == explicit

    def test_large_surface_difference_warns(self, caplog):
        with caplog.at_level(logging.WARNING, logger="insulcalc.calculators.heat_transfer"):
            standard_h(_inputs(medium_temp_c=700.0, surface_temp_c=600.0, emissivity=0.9))
        assert any("standard correlation" in r.getMessage() for r in caplog.records)

    def test_rounded_to_three_decimals(self):
        h = standard_h(_inputs(medium_temp_c=73.3, emissivity=0.87))
        assert h == round(h, 3)


class TestKflex:
    """Tests for the K-FLEX pipe correlation."""

    def test_floor_delta_horizontal(self):
        assert kflex_h(_inputs()) == pytest.approx(1.646)

    def test_floor_delta_vertical(self):
        assert kflex_h(_inputs(orientation=Orientation.VERTICAL)) == pytest.approx(1.8)

    def test_convection_power_law(self):
        expected = 1.646 * 30 ** 0.33
        assert kflex_h(_inputs(medium_temp_c=50.0)) == pytest.approx(expected, abs=1e-3)

    def test_condensation_coefficient_at_reference_delta(self):
        """At dT = 30 K the recalibrated coefficient equals the base one."""
        base = kflex_h(_inputs(medium_temp_c=-10.0))
        assert kflex_h(_inputs(medium_temp_c=-10.0, for_condensation=True)) == base

    def test_condensation_coefficient_floor(self):
        expected = 1.44 * 100 ** 0.33
        h = kflex_h(_inputs(medium_temp_c=-80.0, for_condensation=True))
        assert h == pytest.approx(expected, abs=1e-3)

    def test_reference_diameter_is_neutral(self):
        """25 mm pipe with 9 mm insulation has the 43 mm reference outer diameter."""
        bare = kflex_h(_inputs(medium_temp_c=50.0))
        corrected = kflex_h(_inputs(medium_temp_c=50.0, outer_diameter_mm=25.0,
                                    insulation_thickness_mm=9.0))
        assert corrected == bare

    def test_larger_outer_diameter_lowers_h(self):
        small = kflex_h(_inputs(medium_temp_c=50.0, outer_diameter_mm=22.0, insulation_thickness_mm=9.0))
        large = kflex_h(_inputs(medium_temp_c=50.0, outer_diameter_mm=114.3, insulation_thickness_mm=32.0))
        assert large < small

    def test_linearised_radiation_at_mean(self):
        rad = 4 * 0.93 * 5.67e-8 * (35.0 + 273.15) ** 3
        expected = 1.646 * 30 ** 0.33 + rad
        assert kflex_h(_inputs(medium_temp_c=50.0, emissivity=0.93)) == pytest.approx(expected, abs=1e-3)


class TestAdvancedPipe:

    def test_floor_delta(self):
        assert advanced_pipe_h(_inputs()) == pytest.approx(1.646, abs=1.5e-3)

    def test_reference_diameter_correction_rounded_up(self):
        d_ref = 0.000955 * 22.0 + 0.0244
        factor = (d_ref / 0.048) ** 0.474
        expected = math.ceil(1.646 * factor * 1000) / 1000
        h = advanced_pipe_h(_inputs(outer_diameter_mm=22.0, insulation_thickness_mm=13.0))
        assert h == pytest.approx(expected, abs=1e-9)

    def test_radiation_offset(self):
        rad = 4 * 0.9 * 5.67e-8 * (20.75 + 273.15) ** 3
        assert advanced_pipe_h(_inputs(emissivity=0.9)) == pytest.approx(1.646 + rad, abs=2e-3)

    @pytest.mark.parametrize("orientation", [Orientation.HORIZONTAL, Orientation.VERTICAL])
    def test_condensation_flag_has_no_effect(self, orientation):
        cold = dict(
            ambient_temp_c=25.0, medium_temp_c=-40.0, emissivity=0.93,
            outer_diameter_mm=22.0, insulation_thickness_mm=9.0, orientation=orientation,
        )
        assert advanced_pipe_h(_inputs(for_condensation=True, **cold)) == advanced_pipe_h(
            _inputs(for_condensation=False, **cold)
        )

    def test_condensation_flag_still_recalibrates_kflex(self):
        cold = dict(
            ambient_temp_c=25.0, medium_temp_c=-40.0, emissivity=0.93,
            outer_diameter_mm=22.0, insulation_thickness_mm=9.0,
        )
        assert kflex_h(_inputs(for_condensation=True, **cold)) != kflex_h(_inputs(**cold))


class TestAdvancedSheet:

    def test_cold_ambient_no_radiation(self):
        assert advanced_sheet_h(_inputs(ambient_temp_c=10.0, medium_temp_c=10.0)) == pytest.approx(5.769)

    def test_radiation_coefficient_above_threshold(self):
        h = advanced_sheet_h(_inputs(ambient_temp_c=10.0, medium_temp_c=10.0, emissivity=1.0))
        assert h == pytest.approx(7.408)

    def test_radiation_floor_below_threshold(self):
        h = advanced_sheet_h(_inputs(ambient_temp_c=5.0, medium_temp_c=5.0, emissivity=1.0))
        assert h == pytest.approx(6.819)


class TestDispatch:

    def test_every_mode_registered(self):
        assert set(ESTIMATORS) == set(HMode)

    def test_default_mode_is_standard(self, still_air_inputs):
        assert estimate_h(still_air_inputs) == standard_h(still_air_inputs)

    def test_mode_by_name(self):
        assert estimate_h(_inputs(), "kflex") == kflex_h(_inputs())

    def test_unknown_mode(self):
        with pytest.raises(ValueError):
            estimate_h(_inputs(), "bogus")
