from __future__ import annotations

from pathlib import Path

import numpy as np
import seaborn as sns
from matplotlib import pyplot as plt

from core.settings import settings

from .priors import DEFAULT_PRIOR, NormalPrior
from .summary import inv_logit


def simulate_prior_predictive(
    prior: NormalPrior,
    intercept_prior: NormalPrior = DEFAULT_PRIOR,
    n: int = 4000,
    seed: int | None = None,
) -> np.ndarray:
    """
    Implied P(vegetarian) for a flavor whose offset follows `prior`:
    draw intercept and offset from their priors and push the sum through the inverse logit.
    """
    rng = np.random.default_rng(settings.SEED if seed is None else seed)
    intercept = rng.normal(intercept_prior.mu, intercept_prior.sigma, size=n)
    offset = rng.normal(prior.mu, prior.sigma, size=n)
    return inv_logit(intercept + offset)


def plot_prior_predictive(probs: np.ndarray, out_path: Path, title: str | None = None) -> Path:
    """Save a histogram of prior-predictive probabilities."""
    fig, ax = plt.subplots()
    sns.histplot(probs, bins=40, stat="density", ax=ax)
    ax.set_xlim(0, 1)
    ax.set_xlabel("P(vegetarian)")
    ax.set_title(title or "Prior predictive distribution")
    fig.tight_layout()
    fig.savefig(out_path)
    plt.close(fig)
    return out_path
