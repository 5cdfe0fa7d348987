# -*- coding: utf-8 -*-
"""Tests for thermal resistance networks."""

import math

import pytest

from insulcalc.calculators.resistance import (
    ResistanceNetwork,
    bare_pipe_resistance,
    bare_sheet_resistance,
    heat_flow,
    network_surface_temperature,
    pipe_network,
    pipe_wall_resistance,
    sheet_network,
    surface_temperature,
)
from insulcalc.exceptions import InvalidCoefficient, InvalidConductivity, InvalidGeometry


class TestPipeNetwork:
    """Tests for cylindrical networks."""

    def test_resistances(self):
        network = pipe_network(22.0, 13.0, 0.036, 10.0)
        assert network.wall == 0.0
        assert network.insulation == pytest.approx(math.log(24 / 11) / (2 * math.pi * 0.036))
        assert network.convection == pytest.approx(1 / (10.0 * 2 * math.pi * 0.024))
        assert network.total == pytest.approx(network.wall + network.insulation + network.convection)
        assert network.unit == "m*K/W"

    def test_wall_resistance(self):
        network = pipe_network(21.3, 13.0, 0.036, 10.0, wall_thickness_mm=2.0)
        expected = math.log(10.65 / 8.65) / (2 * math.pi * 50.0)
        assert network.wall == pytest.approx(expected)
        assert pipe_wall_resistance(21.3, 2.0) == pytest.approx(expected)

    def test_thicker_insulation_raises_resistance(self):
        thin = pipe_network(22.0, 9.0, 0.036, 10.0)
        thick = pipe_network(22.0, 19.0, 0.036, 10.0)
        assert thick.insulation > thin.insulation
        assert thick.convection < thin.convection

    @pytest.mark.parametrize("kwargs", [
        {"outer_diameter_mm": 0.0},
        {"outer_diameter_mm": -22.0},
        {"insulation_thickness_mm": 0.0},
        {"wall_thickness_mm": -1.0},
        {"wall_thickness_mm": 11.0},
    ])
    def test_invalid_geometry(self, kwargs):
        args = {"outer_diameter_mm": 22.0, "insulation_thickness_mm": 13.0,
                "conductivity_w_mk": 0.036, "h": 10.0}
        args.update(kwargs)
        with pytest.raises(InvalidGeometry):
            pipe_network(**args)

    def test_invalid_conductivity(self):
        with pytest.raises(InvalidConductivity):
            pipe_network(22.0, 13.0, 0.0, 10.0)

    def test_invalid_coefficient(self):
        with pytest.raises(InvalidCoefficient):
            pipe_network(22.0, 13.0, 0.036, -1.0)

    def test_bare_pipe(self):
        assert bare_pipe_resistance(22.0, 10.0) == pytest.approx(1 / (10.0 * 2 * math.pi * 0.011))


class TestSheetNetwork:

    def test_resistances(self):
        network = sheet_network(20.0, 2.0, 0.04, 8.0)
        assert network.insulation == pytest.approx(0.25)
        assert network.convection == pytest.approx(0.0625)
        assert network.total == pytest.approx(0.3125)
        assert network.unit == "K/W"

    def test_invalid_area(self):
        with pytest.raises(InvalidGeometry):
            sheet_network(20.0, 0.0, 0.04, 8.0)

    def test_bare_sheet(self):
        assert bare_sheet_resistance(2.0, 8.0) == pytest.approx(0.0625)


class TestHeatFlow:

    def test_magnitude(self):
        assert heat_flow(-30.0, 0.5) == pytest.approx(60.0)
        assert heat_flow(30.0, 0.5) == pytest.approx(60.0)

    def test_zero_delta(self):
        assert heat_flow(0.0, 0.5) == 0.0

    def test_non_positive_resistance(self):
        with pytest.raises(InvalidGeometry):
            heat_flow(10.0, 0.0)

    def test_network_surface_temperature_hot(self):
        network = sheet_network(20.0, 2.0, 0.04, 8.0)
        assert network_surface_temperature(80.0, 20.0, network) == pytest.approx(32.0)

    def test_network_surface_temperature_cold(self):
        network = sheet_network(20.0, 2.0, 0.04, 8.0)
        assert network_surface_temperature(-10.0, 20.0, network) == pytest.approx(14.0)

    def test_surface_temperature_from_heat_loss(self):
        assert surface_temperature(20.0, 100.0, 10.0, 2.0) == pytest.approx(25.0)

    def test_network_rejects_missing_insulation(self):
        with pytest.raises(InvalidGeometry):
            ResistanceNetwork(wall=0.0, insulation=0.0, convection=0.1)
