from __future__ import annotations

import contextlib
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import mlflow
from loguru import logger

from application.dataset import category_counts, prepare_dishes, resolve_dataset
from application.preprocessing import INTERCEPT, SWEET_COEF
from application.reporting import render_report
from core.settings import settings
from model import (
    DEFAULT_PRIOR,
    SCENARIOS,
    SENSITIVITY_SCENARIOS,
    PriorSpec,
    SamplerConfig,
    category_probabilities,
    chi_squared_test,
    compare_scenarios,
    extract_draws,
    fit_logistic_model,
    odds_ratios,
    plot_category_probabilities,
    plot_posterior_densities,
    plot_prior_predictive,
    posterior_predictive_check,
    run_sensitivity,
    simulate_prior_predictive,
    summarize_draws,
)


def _tracking_run():
    if not settings.MLFLOW_TRACKING_URI:
        return contextlib.nullcontext()
    mlflow.set_tracking_uri(settings.MLFLOW_TRACKING_URI)
    mlflow.set_experiment(settings.MLFLOW_EXPERIMENT_NAME)
    return mlflow.start_run(run_name="flavor-diet-report")


def report_pipeline(
    data_path: str | None = None,
    priors: PriorSpec | None = None,
    scenarios: Sequence[str] = SENSITIVITY_SCENARIOS,
    sampler: SamplerConfig | None = None,
    out_dir: str | Path | None = None,
    posterior_predictive: bool = True,
) -> dict[str, Any]:
    """
    load -> prepare -> prior predictive -> fit -> summarize -> sensitivity -> chi-squared -> report.
    An empty `scenarios` skips the sensitivity refits.
    """
    priors = priors or SCENARIOS["informative"]
    sampler = sampler or SamplerConfig.from_settings()
    out_dir = Path(out_dir or settings.REPORT_DIR)
    out_dir.mkdir(parents=True, exist_ok=True)

    raw = resolve_dataset(data_path)
    df = prepare_dishes(raw)
    counts = category_counts(df)
    logger.info(f"Observed vegetarian share per flavor:\n{counts}")

    # implied P(vegetarian | sweet) under the chosen priors
    sweet_probs = simulate_prior_predictive(
        priors.for_coef(SWEET_COEF), priors.for_coef(INTERCEPT), n=settings.PRIOR_PREDICTIVE_DRAWS, seed=sampler.seed
    )
    prior_plot = plot_prior_predictive(
        sweet_probs,
        out_dir / "prior_predictive_sweet.png",
        title=f"Prior predictive, {SWEET_COEF} ~ {priors.for_coef(SWEET_COEF)}",
    )

    with _tracking_run():
        fit = fit_logistic_model(df, priors, sampler)
        draws = extract_draws(fit)
        probs = category_probabilities(draws)
        coef_summary = summarize_draws(draws)
        prob_summary = summarize_draws(probs)
        odds_summary = summarize_draws(odds_ratios(draws))
        prob_plot = plot_category_probabilities(probs, out_dir / "category_probabilities.png")

        ppc, ppc_plot = None, None
        if posterior_predictive:
            ppc_plot = out_dir / "posterior_predictive.png"
            ppc = posterior_predictive_check(fit, df, ppc_plot)

        sensitivity, sensitivity_plot = None, None
        if scenarios:
            results = run_sensitivity(df, scenarios, sampler)
            sensitivity = compare_scenarios(results)
            sensitivity_plot = plot_posterior_densities(
                {name: r.fit for name, r in results.items()}, SWEET_COEF, out_dir / "sensitivity_sweet.png"
            )
            logger.info(f"Sensitivity of {SWEET_COEF}:\n{sensitivity}")

        chi2 = chi_squared_test(df)
        if not chi2.assumptions_met:
            logger.warning(
                f"Chi-squared assumptions violated: {chi2.zero_cells} zero cells, "
                f"{chi2.small_expected_cells} expected counts < 5"
            )

        context = {
            "n_raw": len(raw),
            "n_model": len(df),
            "counts": counts,
            "priors": ", ".join(f"{k} ~ {v}" for k, v in priors.as_dict(fit.coef_names).items()),
            "default_prior": str(DEFAULT_PRIOR),
            "prior_predictive_plot": prior_plot,
            "coef_summary": coef_summary,
            "odds_summary": odds_summary,
            "prob_summary": prob_summary,
            "probabilities_plot": prob_plot,
            "diagnostics": fit.diagnostics.as_dict(),
            "ppc": ppc,
            "ppc_plot": ppc_plot,
            "sensitivity": sensitivity,
            "sensitivity_plot": sensitivity_plot,
            "chi2": chi2,
        }
        report_path = render_report(context, out_dir / "report.md")

        if settings.MLFLOW_TRACKING_URI:
            mlflow.log_params({f"prior.{k}": v for k, v in priors.as_dict(fit.coef_names).items()})
            mlflow.log_metrics({f"p_{k}_mean": float(v) for k, v in prob_summary["mean"].items()})
            mlflow.log_metric("chi2_p_value", chi2.p_value)
            mlflow.log_artifacts(str(out_dir), artifact_path="report")

    return {
        "report_path": report_path,
        "coef_summary": coef_summary,
        "prob_summary": prob_summary,
        "sensitivity": sensitivity,
        "chi2": chi2,
        "diagnostics": fit.diagnostics,
    }
