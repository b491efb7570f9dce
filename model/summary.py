from __future__ import annotations

import numpy as np
import pandas as pd
from scipy.special import expit

from application.preprocessing.schema import FLAVOR_LEVELS, INTERCEPT, REFERENCE_FLAVOR, coef_name


def inv_logit(x):
    return expit(x)


def category_probabilities(draws: pd.DataFrame) -> pd.DataFrame:
    """
    P(vegetarian | flavor) for every draw.
    The reference flavor uses the intercept alone; the others add their offset.
    """
    intercept = draws[INTERCEPT].to_numpy()
    probs = {REFERENCE_FLAVOR: inv_logit(intercept)}
    for level in FLAVOR_LEVELS[1:]:
        probs[level] = inv_logit(intercept + draws[coef_name(level)].to_numpy())
    return pd.DataFrame(probs, index=draws.index)


def odds_ratios(draws: pd.DataFrame) -> pd.DataFrame:
    """Odds of a vegetarian dish relative to the reference flavor."""
    return pd.DataFrame(
        {f"{level} vs {REFERENCE_FLAVOR}": np.exp(draws[coef_name(level)].to_numpy()) for level in FLAVOR_LEVELS[1:]},
        index=draws.index,
    )


def summarize_draws(frame: pd.DataFrame, level: float = 0.95) -> pd.DataFrame:
    """Posterior mean, sd and equal-tailed credible interval, one row per column."""
    tail = (1.0 - level) / 2.0
    values = frame.to_numpy()
    return pd.DataFrame(
        {
            "mean": values.mean(axis=0),
            "sd": values.std(axis=0, ddof=1),
            "lower": np.quantile(values, tail, axis=0),
            "upper": np.quantile(values, 1.0 - tail, axis=0),
        },
        index=frame.columns,
    )
