from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from loguru import logger


def _image(path: Path | None, out_dir: Path, alt: str) -> str:
    if path is None:
        return ""
    try:
        rel = Path(path).resolve().relative_to(out_dir.resolve())
    except ValueError:
        rel = Path(path).resolve()
    return f"![{alt}]({rel.as_posix()})\n"


def render_report(context: dict[str, Any], out_path: Path) -> Path:
    """
    Write the Markdown report.
    `context` holds the tables and plot paths produced by the report pipeline.
    """
    out_dir = out_path.parent
    counts: pd.DataFrame = context["counts"]
    separated = [str(i) for i in counts.index[counts["separated"]]]
    diagnostics: dict[str, float] = context["diagnostics"]
    chi2 = context["chi2"]

    lines = [
        "# Flavor profile and vegetarian dishes",
        "",
        "## Data",
        "",
        f"{context['n_raw']} dishes loaded, {context['n_model']} kept after dropping missing "
        "flavor profiles and the single sour dish.",
        "",
        counts.to_markdown(floatfmt=".3f"),
        "",
    ]
    if separated:
        lines += [
            f"Every dish in {', '.join(separated)} shares the same diet, so the data alone cannot bound "
            "those coefficients (quasi-complete separation). Their posteriors are driven by the prior.",
            "",
        ]

    lines += [
        "## Prior",
        "",
        f"Priors (logit scale): {context['priors']}.",
        "",
    ]
    if context.get("default_prior"):
        lines += [
            f"Coefficients without an explicit prior get {context['default_prior']}. It is not rescaled by the "
            "predictor's standard deviation as rstanarm does, which would widen it to about N(0, 5) for the "
            "sweet indicator.",
            "",
        ]
    lines += [
        _image(context.get("prior_predictive_plot"), out_dir, "prior predictive"),
        "## Posterior",
        "",
        "Coefficients:",
        "",
        context["coef_summary"].to_markdown(floatfmt=".3f"),
        "",
        "Odds ratios against bitter dishes:",
        "",
        context["odds_summary"].to_markdown(floatfmt=".3f"),
        "",
        "P(vegetarian | flavor), mean and 95% credible interval:",
        "",
        context["prob_summary"].to_markdown(floatfmt=".3f"),
        "",
        _image(context.get("probabilities_plot"), out_dir, "category probabilities"),
        "Sampler diagnostics: " + ", ".join(f"{k}={v:g}" for k, v in diagnostics.items()) + ".",
        "",
    ]
    if diagnostics.get("divergences") or diagnostics.get("treedepth_hits"):
        lines += ["The sampler reports a pathological posterior geometry, expected under separation.", ""]

    if context.get("ppc") is not None:
        lines += [
            "Posterior predictive check (share of vegetarian dishes):",
            "",
            context["ppc"].to_markdown(floatfmt=".3f"),
            "",
            _image(context.get("ppc_plot"), out_dir, "posterior predictive check"),
        ]

    if context.get("sensitivity") is not None:
        lines += [
            "## Sensitivity to the prior",
            "",
            context["sensitivity"].to_markdown(floatfmt=".3f"),
            "",
            "The sweet coefficient's posterior stays close to whichever prior it is given.",
            "",
            _image(context.get("sensitivity_plot"), out_dir, "posterior by prior"),
        ]

    verdict = "hold" if chi2.assumptions_met else "do not hold"
    lines += [
        "## Chi-squared test of independence",
        "",
        "Observed counts:",
        "",
        chi2.observed.to_markdown(floatfmt=".3f"),
        "",
        "Expected counts:",
        "",
        chi2.expected.to_markdown(floatfmt=".3f"),
        "",
        f"chi2={chi2.statistic:.3f}, dof={chi2.dof}, p={chi2.p_value:.4g}. "
        f"{chi2.zero_cells} observed cell(s) are zero and {chi2.small_expected_cells} expected count(s) "
        f"are below 5, so the test's assumptions {verdict}.",
        "",
    ]

    out_path.write_text("\n".join(lines), encoding="utf-8")
    logger.success("Wrote report -> {}", out_path)
    return out_path
