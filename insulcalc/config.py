# -*- coding: utf-8 -*-
"""
Insulcalc Engine Configuration

Centralized configuration for the insulation sizing engine covering:
- Material fallbacks (default conductivity, pipe wall conductivity)
- Condensation search (margin, scan step and ceiling per geometry)
- Nominal sizing (margin factor applied before stock rounding)
- Uninsulated baseline calibration (small-bore boost)
- Thickness recommendation by heat loss (target W/m)
- Observability toggles (metrics, provenance)

All settings can be overridden via environment variables with the
``INSULCALC_`` prefix (e.g. ``INSULCALC_CONDENSATION_MARGIN_C``).

Example:
    >>> from insulcalc.config import get_config
    >>> cfg = get_config()
    >>> print(cfg.condensation_margin_c, cfg.pipe_search_ceiling_mm)
"""

from __future__ import annotations

import logging
import os
import threading
from dataclasses import dataclass
from typing import Any, Optional

logger = logging.getLogger(__name__)

_ENV_PREFIX = "INSULCALC_"


@dataclass
class InsulcalcConfig:
    """Complete configuration for the insulation sizing engine.

    Attributes:
        default_conductivity_w_mk: Conductivity returned on a catalog miss or
            when the temperature falls outside every table bracket.
        steel_conductivity_w_mk: Conductivity of the pipe wall.
        condensation_margin_c: Required surface temperature margin above the
            dew point.
        nominal_margin_factor: Multiplier applied to the minimum thickness
            before rounding to a stocked size.
        pipe_search_step_mm: Thickness increment of the pipe scan.
        pipe_search_ceiling_mm: Last thickness tried by the pipe scan.
        sheet_search_step_mm: Thickness increment of the sheet scan.
        sheet_search_ceiling_mm: Last thickness tried by the sheet scan.
        small_bore_boost_enabled: Whether to boost the bare-pipe coefficient
            for small diameters.
        small_bore_reference_mm: Reference diameter of the boost.
        small_bore_boost_power: Exponent of the boost.
        target_heat_loss_w_per_m: Default target of the heat-loss
            thickness recommendation.
        enable_metrics: Whether to record prometheus metrics.
        enable_provenance: Whether to attach provenance hashes to results.
    """

    # -- Materials -----------------------------------------------------------
    default_conductivity_w_mk: float = 0.036
    steel_conductivity_w_mk: float = 50.0

    # -- Condensation search -------------------------------------------------
    condensation_margin_c: float = 0.4
    nominal_margin_factor: float = 1.2
    pipe_search_step_mm: float = 0.1
    pipe_search_ceiling_mm: float = 100.0
    sheet_search_step_mm: float = 1.0
    sheet_search_ceiling_mm: float = 50.0

    # -- Uninsulated baseline ------------------------------------------------
    small_bore_boost_enabled: bool = True
    small_bore_reference_mm: float = 25.0
    small_bore_boost_power: float = 0.2

    # -- Recommendation ------------------------------------------------------
    target_heat_loss_w_per_m: float = 15.0

    # -- Observability -------------------------------------------------------
    enable_metrics: bool = True
    enable_provenance: bool = True

    @classmethod
    def from_env(cls) -> InsulcalcConfig:
        """Build an InsulcalcConfig from environment variables.

        Every field can be overridden via ``INSULCALC_<FIELD_UPPER>``.
        Boolean values accept ``true/1/yes`` (case-insensitive).

        Returns:
            Populated InsulcalcConfig instance.
        """
        prefix = _ENV_PREFIX

        def _env(name: str, default: Any = None) -> Optional[str]:
            return os.environ.get(f"{prefix}{name}", default)

        def _bool(name: str, default: bool) -> bool:
            val = _env(name)
            if val is None:
                return default
            return val.lower() in ("true", "1", "yes")

        def _float(name: str, default: float) -> float:
            val = _env(name)
            if val is None:
                return default
            try:
                return float(val)
            except ValueError:
                logger.warning(
                    "Invalid number for %s%s=%s, using default %s",
                    prefix, name, val, default,
                )
                return default

        config = cls(
            default_conductivity_w_mk=_float(
                "DEFAULT_CONDUCTIVITY_W_MK", cls.default_conductivity_w_mk,
            ),
            steel_conductivity_w_mk=_float(
                "STEEL_CONDUCTIVITY_W_MK", cls.steel_conductivity_w_mk,
            ),
            condensation_margin_c=_float(
                "CONDENSATION_MARGIN_C", cls.condensation_margin_c,
            ),
            nominal_margin_factor=_float(
                "NOMINAL_MARGIN_FACTOR", cls.nominal_margin_factor,
            ),
            pipe_search_step_mm=_float("PIPE_SEARCH_STEP_MM", cls.pipe_search_step_mm),
            pipe_search_ceiling_mm=_float(
                "PIPE_SEARCH_CEILING_MM", cls.pipe_search_ceiling_mm,
            ),
            sheet_search_step_mm=_float("SHEET_SEARCH_STEP_MM", cls.sheet_search_step_mm),
            sheet_search_ceiling_mm=_float(
                "SHEET_SEARCH_CEILING_MM", cls.sheet_search_ceiling_mm,
            ),
            small_bore_boost_enabled=_bool(
                "SMALL_BORE_BOOST_ENABLED", cls.small_bore_boost_enabled,
            ),
            small_bore_reference_mm=_float(
                "SMALL_BORE_REFERENCE_MM", cls.small_bore_reference_mm,
            ),
            small_bore_boost_power=_float(
                "SMALL_BORE_BOOST_POWER", cls.small_bore_boost_power,
            ),
            target_heat_loss_w_per_m=_float(
                "TARGET_HEAT_LOSS_W_PER_M", cls.target_heat_loss_w_per_m,
            ),
            enable_metrics=_bool("ENABLE_METRICS", cls.enable_metrics),
            enable_provenance=_bool("ENABLE_PROVENANCE", cls.enable_provenance),
        )

        logger.info(
            "InsulcalcConfig loaded: margin=%.2fC, nominal_factor=%.2f, "
            "pipe_scan=%.1f/%.0fmm, sheet_scan=%.1f/%.0fmm, metrics=%s",
            config.condensation_margin_c,
            config.nominal_margin_factor,
            config.pipe_search_step_mm,
            config.pipe_search_ceiling_mm,
            config.sheet_search_step_mm,
            config.sheet_search_ceiling_mm,
            config.enable_metrics,
        )
        return config


# ---------------------------------------------------------------------------
# Thread-safe singleton accessor
# ---------------------------------------------------------------------------

_config_instance: Optional[InsulcalcConfig] = None
_config_lock = threading.Lock()


def get_config() -> InsulcalcConfig:
    """Return the singleton InsulcalcConfig, creating from env if needed."""
    global _config_instance
    if _config_instance is None:
        with _config_lock:
            if _config_instance is None:
                _config_instance = InsulcalcConfig.from_env()
    return _config_instance


def set_config(config: InsulcalcConfig) -> None:
    """Replace the singleton InsulcalcConfig (useful for testing).

    Args:
        config: New configuration to install.
    """
    global _config_instance
    with _config_lock:
        _config_instance = config
    logger.info("InsulcalcConfig replaced programmatically")


def reset_config() -> None:
    """Reset the singleton (primarily for test teardown)."""
    global _config_instance
    with _config_lock:
        _config_instance = None


__all__ = [
    "InsulcalcConfig",
    "get_config",
    "set_config",
    "reset_config",
]
