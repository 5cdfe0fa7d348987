# -*- coding: utf-8 -*-
"""Tests for InsulcalcConfig and the configuration singleton."""

import pytest

from insulcalc.config import InsulcalcConfig, get_config, reset_config, set_config


class TestInsulcalcConfig:

    def test_defaults(self):
        config = InsulcalcConfig()
        assert config.default_conductivity_w_mk == 0.036
        assert config.condensation_margin_c == 0.4
        assert config.nominal_margin_factor == 1.2
        assert config.pipe_search_step_mm == 0.1
        assert config.pipe_search_ceiling_mm == 100.0
        assert config.sheet_search_step_mm == 1.0
        assert config.sheet_search_ceiling_mm == 50.0
        assert config.target_heat_loss_w_per_m == 15.0
        assert config.small_bore_boost_enabled is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("INSULCALC_CONDENSATION_MARGIN_C", "0.5")
        monkeypatch.setenv("INSULCALC_ENABLE_METRICS", "false")
        monkeypatch.setenv("INSULCALC_SMALL_BORE_BOOST_ENABLED", "YES")
        config = InsulcalcConfig.from_env()
        assert config.condensation_margin_c == 0.5
        assert config.enable_metrics is False
        assert config.small_bore_boost_enabled is True

    def test_invalid_number_falls_back(self, monkeypatch, caplog):
        monkeypatch.setenv("INSULCALC_PIPE_SEARCH_STEP_MM", "fine")
        config = InsulcalcConfig.from_env()
        assert config.pipe_search_step_mm == 0.1
        assert "INSULCALC_PIPE_SEARCH_STEP_MM" in caplog.text


class TestSingleton:

    def test_set_and_get(self):
        custom = InsulcalcConfig(condensation_margin_c=1.0)
        set_config(custom)
        assert get_config() is custom

    def test_reset_reloads_from_env(self, monkeypatch):
        monkeypatch.setenv("INSULCALC_NOMINAL_MARGIN_FACTOR", "1.5")
        reset_config()
        assert get_config().nominal_margin_factor == pytest.approx(1.5)
        assert get_config() is get_config()
