from __future__ import annotations

import logging
import os
import warnings
from pathlib import Path

# Choose a backend before importing pyplot to avoid GUI deps on headless runs
if "MPLBACKEND" not in os.environ:
    os.environ["MPLBACKEND"] = "Agg"

import arviz as az  # noqa: E402
from loguru import logger  # noqa: E402
from matplotlib import pyplot as plt  # noqa: E402

from core.settings import settings  # noqa: E402

SAMPLER_LOGGERS = ("pymc", "pytensor")


def _interval_key() -> str:
    # older ArviZ releases only know stats.hdi_prob
    return "stats.ci_prob" if "stats.ci_prob" in az.rcParams else "stats.hdi_prob"


def apply_global_settings() -> None:
    """
    Apply global runtime config:
      - matplotlib and ArviZ plotting defaults
      - PyMC / PyTensor log verbosity
      - output directories
      - warnings filtering
    Safe to call multiple times.
    """

    # --- Matplotlib defaults ---
    try:
        if getattr(settings, "MPL_FIGSIZE", None):
            plt.rcParams["figure.figsize"] = settings.MPL_FIGSIZE
        if getattr(settings, "MPL_DPI", None):
            plt.rcParams["figure.dpi"] = settings.MPL_DPI
    except Exception as e:
        logger.warning(f"Matplotlib configuration failed: {e}")

    # --- ArviZ defaults ---
    # intervals drawn by ArviZ match the ones in the report tables
    az.rcParams[_interval_key()] = settings.CREDIBLE_LEVEL
    az.rcParams["plot.max_subplots"] = settings.ARVIZ_MAX_SUBPLOTS

    # --- Sampler logging ---
    for name in SAMPLER_LOGGERS:
        logging.getLogger(name).setLevel(settings.SAMPLER_LOG_LEVEL)

    # artifact + report directories
    for directory in (settings.ARTIFACT_DIR, settings.REPORT_DIR):
        Path(directory).mkdir(parents=True, exist_ok=True)

    # --- Warnings ---
    if settings.IGNORE_DEPRECATION_WARNINGS:
        warnings.filterwarnings("ignore", category=DeprecationWarning)
    if settings.IGNORE_FUTURE_WARNINGS:
        warnings.filterwarnings("ignore", category=FutureWarning)

    logger.info(
        f"Environment initialized: {settings.CREDIBLE_LEVEL:.0%} intervals, "
        f"sampler log level {settings.SAMPLER_LOG_LEVEL}, seed={settings.SEED}"
    )
