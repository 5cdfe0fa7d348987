# -*- coding: utf-8 -*-
"""Tests for stock catalogs and ladder selection."""

import pytest

from insulcalc.catalogs import (
    DEFAULT_THICKNESS_LADDER_MM,
    SHEET_THICKNESS_LADDER_MM,
    TUBE_SIZES,
    TubeMaterial,
    find_tube,
    format_tube_name,
    list_tube_names,
    nominal_thickness,
    pipe_thickness_ladder,
    rokaflex_dimension,
    rolls_required,
    select_stock_thickness,
    sheet_thickness_ladder,
)
from insulcalc.exceptions import CatalogError, InputValidationError


class TestTubeCatalog:
    """Tests for tube lookup and naming."""

    def test_find_copper_tube(self):
        tube = find_tube(22)
        assert tube.material is TubeMaterial.COPPER
        assert tube.inch == '7/8"'

    def test_find_missing_tube(self):
        assert find_tube(23.5) is None

    def test_format_copper_name(self):
        assert format_tube_name(find_tube(12)) == '1/2" ( Cu ) - 12mm'

    def test_format_steel_name_uses_decimal_comma(self):
        assert format_tube_name(find_tube(21.3)) == 'DN15 - 1/2" (St) - 21,3mm'

    def test_list_tube_names(self):
        names = list_tube_names()
        assert len(names) == len(TUBE_SIZES)
        assert 'DN100 - 4" (St) - 114,3mm' in names


class TestLadders:
    """Tests for stock ladders."""

    def test_pipe_ladder_from_stock(self):
        assert pipe_thickness_ladder(22) == (6, 9, 13, 19, 25, 32)
        assert pipe_thickness_ladder(48.3) == (9, 13, 19, 25, 32)

    def test_pipe_without_stock_uses_default(self):
        assert pipe_thickness_ladder(10.2) == DEFAULT_THICKNESS_LADDER_MM

    def test_unknown_pipe_uses_default(self):
        assert pipe_thickness_ladder(999) == DEFAULT_THICKNESS_LADDER_MM

    def test_sheet_ladder(self):
        assert sheet_thickness_ladder() == SHEET_THICKNESS_LADDER_MM
        assert sheet_thickness_ladder() == (6, 9, 10, 13, 19, 25, 32, 40, 50)


class TestStockSelection:
    """Tests for stock rounding."""

    @pytest.mark.parametrize("target,expected", [
        (0.5, 6), (6, 6), (6.01, 9), (10, 13), (32, 32), (40, 32),
    ])
    def test_select_stock_thickness(self, target, expected):
        assert select_stock_thickness(target, DEFAULT_THICKNESS_LADDER_MM) == expected

    def test_empty_ladder_uses_default(self):
        assert select_stock_thickness(10, ()) == 13

    def test_nominal_applies_margin(self):
        """7.6 mm * 1.2 = 9.12 mm rounds up to 13 mm."""
        assert nominal_thickness(7.6, DEFAULT_THICKNESS_LADDER_MM) == 13

    def test_nominal_absorbs_float_noise(self):
        """5 mm * 1.2 is exactly the 6 mm stock size."""
        assert nominal_thickness(5.0, DEFAULT_THICKNESS_LADDER_MM) == 6

    def test_nominal_beyond_ladder_returns_largest(self):
        assert nominal_thickness(30.0, DEFAULT_THICKNESS_LADDER_MM) == 32


class TestUtilities:
    """Tests for dimension and roll helpers."""

    def test_rokaflex_dimension_listed(self):
        assert rokaflex_dimension(22, 13) == 22

    def test_rokaflex_dimension_unlisted_returns_pipe(self):
        assert rokaflex_dimension(23, 13) == 23
        assert rokaflex_dimension(48, 6) == 48

    @pytest.mark.parametrize("area,thickness,width,expected", [
        (25.0, 13, "1m", 2),
        (28.0, 13, "1m", 2),
        (28.1, 13, "1m", 3),
        (25.0, 13, "1.2m", 2),
        (0.0, 19, "1m", 0),
    ])
    def test_rolls_required(self, area, thickness, width, expected):
        assert rolls_required(area, thickness, width) == expected

    def test_rolls_required_negative_area(self):
        with pytest.raises(InputValidationError) as exc_info:
            rolls_required(-1.0, 13)
        assert "area_m2" in exc_info.value.context["invalid_fields"]

    def test_rolls_required_unstocked_thickness(self):
        with pytest.raises(CatalogError) as exc_info:
            rolls_required(10.0, 7)
        assert exc_info.value.context == {"roll_width": "1m", "thickness_mm": 7}

    def test_rolls_required_unstocked_width(self):
        with pytest.raises(CatalogError):
            rolls_required(10.0, 13, "3m")
