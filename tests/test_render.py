import re

import pandas as pd
import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def report_context(tmp_path, df_dishes, coef_draws):
    from application.dataset import category_counts
    from model import category_probabilities, chi_squared_test, odds_ratios, summarize_draws

    return {
        "n_raw": 167,
        "n_model": len(df_dishes),
        "counts": category_counts(df_dishes),
        "priors": "flavor_profile[sweet] ~ N(1.75, 0.5)",
        "default_prior": "N(0, 2.5)",
        "coef_summary": summarize_draws(coef_draws),
        "odds_summary": summarize_draws(odds_ratios(coef_draws)),
        "prob_summary": summarize_draws(category_probabilities(coef_draws)),
        "diagnostics": {"divergences": 3, "treedepth_hits": 0, "max_r_hat": 1.0, "min_ess_bulk": 800.0},
        "ppc": None,
        "sensitivity": pd.DataFrame(
            {"prior_mu": [1.75], "post_mean": [1.8]}, index=pd.Index(["informative"], name="scenario")
        ),
        "sensitivity_plot": tmp_path / "sensitivity_sweet.png",
        "chi2": chi_squared_test(df_dishes),
    }


def test_render_report_without_sampling(tmp_path, report_context):
    from application.reporting import render_report

    out = render_report(report_context, tmp_path / "report.md")
    text = out.read_text(encoding="utf-8")

    assert text.startswith("# Flavor profile and vegetarian dishes")
    assert "bitter, sweet" in text
    assert "pathological posterior geometry" in text
    assert re.search(r"^\|\s*informative\s*\|\s*1\.750\s*\|\s*1\.800\s*\|$", text, flags=re.MULTILINE)
    assert "![posterior by prior](sensitivity_sweet.png)" in text
    assert "do not hold" in text


def test_render_report_writes_pipe_tables(tmp_path, report_context):
    from application.reporting import render_report

    text = render_report(report_context, tmp_path / "report.md").read_text(encoding="utf-8")

    # header rule of the sensitivity table, with tabulate's alignment markers
    assert re.search(r"^\|:-+\|-+:\|-+:\|$", text, flags=re.MULTILINE)
    header = next(line for line in text.splitlines() if "prior_mu" in line)
    assert [cell.strip() for cell in header.strip("|").split("|")] == ["scenario", "prior_mu", "post_mean"]


def test_render_report_states_default_prior_is_not_rescaled(tmp_path, report_context):
    from application.reporting import render_report

    text = render_report(report_context, tmp_path / "report.md").read_text(encoding="utf-8")
    assert "Coefficients without an explicit prior get N(0, 2.5)" in text
    assert "not rescaled" in text

    del report_context["default_prior"]
    text = render_report(report_context, tmp_path / "report_no_default.md").read_text(encoding="utf-8")
    assert "not rescaled" not in text
