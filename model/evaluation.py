from __future__ import annotations

from collections.abc import Mapping
from pathlib import Path

import arviz as az
import numpy as np
import pandas as pd
import pymc as pm
import seaborn as sns
from matplotlib import pyplot as plt

from application.preprocessing import FLAVOR_COL, FLAVOR_LEVELS, RESPONSE_COL

from .inference import FitResult, extract_draws


def posterior_predictive_check(fit: FitResult, df: pd.DataFrame, out_path: Path | None = None) -> pd.DataFrame:
    """
    Compare the observed vegetarian share per flavor with the posterior predictive share.
    Optionally saves ArviZ's PPC plot.
    """
    with fit.model:
        pm.sample_posterior_predictive(
            fit.idata, extend_inferencedata=True, random_seed=fit.sampler.seed, progressbar=False
        )

    if out_path is not None:
        az.plot_ppc(fit.idata, var_names=[RESPONSE_COL], num_pp_samples=200)
        plt.tight_layout()
        plt.savefig(out_path)
        plt.close("all")

    # (chain, draw, dish) -> (sample, dish)
    pp = fit.idata.posterior_predictive[RESPONSE_COL].stack(sample=("chain", "draw")).transpose("sample", "dish")
    pp_values = pp.values
    flavors = df[FLAVOR_COL].to_numpy()

    rows = []
    for level in FLAVOR_LEVELS:
        mask = flavors == level
        if not mask.any():
            continue
        share = pp_values[:, mask].mean(axis=1)
        rows.append(
            {
                FLAVOR_COL: level,
                "observed": float(df.loc[mask, RESPONSE_COL].mean()),
                "predicted_mean": float(share.mean()),
                "predicted_lower": float(np.quantile(share, 0.025)),
                "predicted_upper": float(np.quantile(share, 0.975)),
            }
        )
    return pd.DataFrame(rows).set_index(FLAVOR_COL)


def plot_posterior_densities(fits: Mapping[str, FitResult], coef: str, out_path: Path) -> Path:
    """Overlay one coefficient's posterior across prior scenarios."""
    fig, ax = plt.subplots()
    for name, fit in fits.items():
        label = f"{name}: prior {fit.priors.for_coef(coef)}"
        sns.kdeplot(extract_draws(fit)[coef], ax=ax, label=label, fill=True, alpha=0.3)
    ax.set_xlabel(coef)
    ax.set_title(f"Posterior of {coef} by prior")
    ax.legend()
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    return out_path


def plot_category_probabilities(probs: pd.DataFrame, out_path: Path) -> Path:
    """Posterior P(vegetarian | flavor) as overlaid histograms."""
    long = probs.melt(var_name=FLAVOR_COL, value_name="P(vegetarian)")
    fig, ax = plt.subplots()
    sns.histplot(
        long, x="P(vegetarian)", hue=FLAVOR_COL, bins=50, stat="density", common_norm=False, element="step", ax=ax
    )
    ax.set_xlim(0, 1)
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    return out_path
