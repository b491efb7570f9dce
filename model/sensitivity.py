from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

import mlflow
import pandas as pd
from loguru import logger

from application.preprocessing import SWEET_COEF
from core.settings import settings

from .inference import FitResult, SamplerConfig, extract_draws, fit_logistic_model
from .priors import SCENARIOS, SENSITIVITY_SCENARIOS, NormalPrior
from .summary import category_probabilities, summarize_draws


@dataclass
class SensitivityResult:
    scenario: str
    fit: FitResult
    coef_summary: pd.DataFrame
    prob_summary: pd.DataFrame

    @property
    def prior(self) -> NormalPrior:
        return self.fit.priors.for_coef(SWEET_COEF)


def _tracking_enabled() -> bool:
    return bool(settings.MLFLOW_TRACKING_URI)


def _log_scenario(result: SensitivityResult, coef: str) -> None:
    row = result.coef_summary.loc[coef]
    prior = result.fit.priors.for_coef(coef)
    with mlflow.start_run(run_name=f"prior-{result.scenario}", nested=True):
        mlflow.set_tags({"run_type": "sensitivity", "scenario": result.scenario})
        mlflow.log_params(
            {
                "prior_mu": prior.mu,
                "prior_sigma": prior.sigma,
                "draws": result.fit.sampler.draws,
                "tune": result.fit.sampler.tune,
                "chains": result.fit.sampler.chains,
                "max_treedepth": result.fit.sampler.max_treedepth,
            }
        )
        mlflow.log_metrics(
            {
                "posterior_mean": float(row["mean"]),
                "posterior_sd": float(row["sd"]),
                "shift": float(row["mean"] - prior.mu),
                **{k: float(v) for k, v in result.fit.diagnostics.as_dict().items()},
            }
        )
        summary_path = Path(settings.ARTIFACT_DIR, f"summary_{result.scenario}.csv")
        summary_path.parent.mkdir(parents=True, exist_ok=True)
        pd.concat([result.coef_summary, result.prob_summary]).to_csv(summary_path)
        mlflow.log_artifact(str(summary_path), artifact_path="tables")


def run_scenario(df: pd.DataFrame, scenario: str, sampler: SamplerConfig | None = None) -> SensitivityResult:
    if scenario not in SCENARIOS:
        raise KeyError(f"Unknown prior scenario '{scenario}'. Valid scenarios: {sorted(SCENARIOS)}")
    fit = fit_logistic_model(df, SCENARIOS[scenario], sampler)
    draws = extract_draws(fit)
    return SensitivityResult(
        scenario=scenario,
        fit=fit,
        coef_summary=summarize_draws(draws),
        prob_summary=summarize_draws(category_probabilities(draws)),
    )


def run_sensitivity(
    df: pd.DataFrame,
    scenarios: Iterable[str] = SENSITIVITY_SCENARIOS,
    sampler: SamplerConfig | None = None,
    coef: str = SWEET_COEF,
) -> dict[str, SensitivityResult]:
    """Refit the model once per prior scenario."""
    scenarios = list(scenarios)
    unknown = [s for s in scenarios if s not in SCENARIOS]
    if unknown:
        raise KeyError(f"Unknown prior scenario(s) {unknown}. Valid scenarios: {sorted(SCENARIOS)}")

    if _tracking_enabled():
        mlflow.set_tracking_uri(settings.MLFLOW_TRACKING_URI)

    results: dict[str, SensitivityResult] = {}
    for scenario in scenarios:
        logger.info(f"Sensitivity scenario '{scenario}': {coef} ~ {SCENARIOS[scenario].for_coef(coef)}")
        result = run_scenario(df, scenario, sampler)
        results[scenario] = result
        if _tracking_enabled():
            _log_scenario(result, coef)
    return results


def compare_scenarios(results: dict[str, SensitivityResult], coef: str = SWEET_COEF) -> pd.DataFrame:
    """
    Prior vs posterior of `coef` across scenarios.
    Under separation the posterior follows the prior: `shift` stays small.
    """
    rows = []
    for name, result in results.items():
        prior = result.fit.priors.for_coef(coef)
        post = result.coef_summary.loc[coef]
        sweet = result.prob_summary.loc["sweet"]
        rows.append(
            {
                "scenario": name,
                "prior_mu": prior.mu,
                "prior_sigma": prior.sigma,
                "post_mean": post["mean"],
                "post_sd": post["sd"],
                "shift": post["mean"] - prior.mu,
                "p_sweet_mean": sweet["mean"],
                "p_sweet_lower": sweet["lower"],
                "p_sweet_upper": sweet["upper"],
                "divergences": result.fit.diagnostics.divergences,
            }
        )
    return pd.DataFrame(rows).set_index("scenario")
