from __future__ import annotations

from dataclasses import dataclass

import arviz as az
import numpy as np
import pandas as pd
import pymc as pm
from loguru import logger

from application.preprocessing import INTERCEPT, RESPONSE_COL, build_design_matrix
from core.settings import settings

from .priors import PriorSpec


@dataclass(frozen=True)
class SamplerConfig:
    draws: int = 2000
    tune: int = 1000
    chains: int = 4
    max_treedepth: int = 12
    target_accept: float = 0.9
    seed: int = 33
    cores: int = 1

    @classmethod
    def from_settings(cls, **overrides) -> SamplerConfig:
        params = {
            "draws": settings.DRAWS,
            "tune": settings.TUNE,
            "chains": settings.CHAINS,
            "max_treedepth": settings.MAX_TREEDEPTH,
            "target_accept": settings.TARGET_ACCEPT,
            "seed": settings.SEED,
            "cores": settings.CORES,
        }
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)


@dataclass(frozen=True)
class Diagnostics:
    divergences: int
    treedepth_hits: int
    max_r_hat: float
    min_ess_bulk: float

    @property
    def ok(self) -> bool:
        return self.divergences == 0 and self.treedepth_hits == 0 and self.max_r_hat < 1.01

    def as_dict(self) -> dict[str, float]:
        return {
            "divergences": self.divergences,
            "treedepth_hits": self.treedepth_hits,
            "max_r_hat": self.max_r_hat,
            "min_ess_bulk": self.min_ess_bulk,
        }


@dataclass
class FitResult:
    idata: az.InferenceData
    model: pm.Model
    coef_names: list[str]
    priors: PriorSpec
    sampler: SamplerConfig
    diagnostics: Diagnostics


def build_model(df: pd.DataFrame, priors: PriorSpec) -> tuple[pm.Model, list[str]]:
    """Bernoulli-logit regression of the vegetarian flag on the flavor profile."""
    X, offset_names = build_design_matrix(df)
    coef_names = [INTERCEPT] + offset_names
    priors.validate(coef_names)

    coords = {"coef": offset_names, "dish": np.arange(len(df))}
    with pm.Model(coords=coords) as model:
        x = pm.Data("X", X, dims=("dish", "coef"))
        p0 = priors.for_coef(INTERCEPT)
        intercept = pm.Normal(INTERCEPT, mu=p0.mu, sigma=p0.sigma)
        beta = pm.Normal(
            "beta",
            mu=np.array([priors.for_coef(n).mu for n in offset_names]),
            sigma=np.array([priors.for_coef(n).sigma for n in offset_names]),
            dims="coef",
        )
        pm.Bernoulli(
            RESPONSE_COL,
            logit_p=intercept + pm.math.dot(x, beta),
            observed=df[RESPONSE_COL].to_numpy(),
            dims="dish",
        )
    return model, coef_names


def compute_diagnostics(idata: az.InferenceData) -> Diagnostics:
    stats = idata.sample_stats
    divergences = int(stats["diverging"].sum().values)
    treedepth_hits = int(stats["reached_max_treedepth"].sum().values) if "reached_max_treedepth" in stats else 0
    summary = az.summary(idata, var_names=[INTERCEPT, "beta"], kind="diagnostics")
    return Diagnostics(
        divergences=divergences,
        treedepth_hits=treedepth_hits,
        max_r_hat=float(summary["r_hat"].max()),
        min_ess_bulk=float(summary["ess_bulk"].min()),
    )


def fit_logistic_model(df: pd.DataFrame, priors: PriorSpec, sampler: SamplerConfig | None = None) -> FitResult:
    sampler = sampler or SamplerConfig.from_settings()
    model, coef_names = build_model(df, priors)
    logger.info(f"Fitting logistic model with priors: {priors.as_dict(coef_names)}")

    with model:
        step = pm.NUTS(max_treedepth=sampler.max_treedepth, target_accept=sampler.target_accept)
        idata = pm.sample(
            draws=sampler.draws,
            tune=sampler.tune,
            chains=sampler.chains,
            cores=sampler.cores,
            step=step,
            random_seed=sampler.seed,
            progressbar=False,
            return_inferencedata=True,
        )

    diagnostics = compute_diagnostics(idata)
    # separation makes some of these expected; report them, do not refit
    if diagnostics.divergences:
        logger.warning(f"{diagnostics.divergences} divergent transitions after tuning")
    if diagnostics.treedepth_hits:
        logger.warning(f"Max tree depth {sampler.max_treedepth} reached {diagnostics.treedepth_hits} times")
    if diagnostics.max_r_hat >= 1.01:
        logger.warning(f"max r_hat={diagnostics.max_r_hat:.3f}; chains may not have mixed")
    logger.info(f"Sampler diagnostics: {diagnostics.as_dict()}")

    return FitResult(
        idata=idata,
        model=model,
        coef_names=coef_names,
        priors=priors,
        sampler=sampler,
        diagnostics=diagnostics,
    )


def extract_draws(fit: FitResult) -> pd.DataFrame:
    """One row per (chain, draw), one column per coefficient."""
    posterior = fit.idata.posterior
    intercept = posterior[INTERCEPT].stack(sample=("chain", "draw"))
    beta = posterior["beta"].stack(sample=("chain", "draw")).transpose("sample", "coef")
    draws = pd.DataFrame(beta.values, columns=list(beta["coef"].values))
    draws.insert(0, INTERCEPT, intercept.values)
    return draws[fit.coef_names]
