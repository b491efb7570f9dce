import numpy as np
import pytest

pytestmark = pytest.mark.slow


@pytest.fixture(scope="module")
def informative_fit():
    import pandas as pd

    from application.dataset import prepare_dishes
    from model import SCENARIOS, SamplerConfig, fit_logistic_model

    rows = (
        [{"flavor_profile": "sweet", "diet": "vegetarian"}] * 20
        + [{"flavor_profile": "spicy", "diet": "vegetarian"}] * 110
        + [{"flavor_profile": "spicy", "diet": "non vegetarian"}] * 23
        + [{"flavor_profile": "bitter", "diet": "vegetarian"}] * 8
    )
    df = prepare_dishes(pd.DataFrame(rows))
    sampler = SamplerConfig(draws=500, tune=500, chains=2, max_treedepth=10, seed=33)
    return df, fit_logistic_model(df, SCENARIOS["informative"], sampler)


def test_extract_draws_one_row_per_chain_draw(informative_fit):
    from model import extract_draws

    _, fit = informative_fit
    draws = extract_draws(fit)
    assert draws.columns.tolist() == ["Intercept", "flavor_profile[spicy]", "flavor_profile[sweet]"]
    assert len(draws) == 2 * 500
    assert np.isfinite(draws.to_numpy()).all()


def test_diagnostics_are_reported(informative_fit):
    _, fit = informative_fit
    diag = fit.diagnostics.as_dict()
    assert set(diag) == {"divergences", "treedepth_hits", "max_r_hat", "min_ess_bulk"}
    assert diag["divergences"] >= 0 and diag["min_ess_bulk"] > 0


def test_informative_prior_category_probabilities(informative_fit):
    from model import category_probabilities, extract_draws, summarize_draws

    _, fit = informative_fit
    probs = category_probabilities(extract_draws(fit))
    assert ((probs.to_numpy() > 0) & (probs.to_numpy() < 1)).all()

    summary = summarize_draws(probs)
    assert (summary["lower"] <= summary["mean"]).all() and (summary["mean"] <= summary["upper"]).all()

    assert summary.loc["bitter", "mean"] > 0.85
    assert summary.loc["spicy", "mean"] < summary.loc["bitter", "mean"]
    assert summary.loc["spicy", "upper"] < 0.95
    assert summary.loc["spicy", "mean"] == pytest.approx(110 / 133, abs=0.05)


def test_posterior_predictive_check_matches_observed_shares(informative_fit, tmp_path):
    from model import posterior_predictive_check

    df, fit = informative_fit
    ppc = posterior_predictive_check(fit, df, tmp_path / "ppc.png")
    assert ppc.index.tolist() == ["bitter", "spicy", "sweet"]
    assert ppc.loc["spicy", "observed"] == pytest.approx(110 / 133)
    assert ppc.loc["spicy", "predicted_lower"] <= ppc.loc["spicy", "observed"] <= ppc.loc["spicy", "predicted_upper"]
    assert (tmp_path / "ppc.png").exists()


def test_unknown_prior_coefficient_fails_before_sampling(df_dishes):
    from core.exceptions import PriorSpecificationError
    from model import NormalPrior, PriorSpec, fit_logistic_model

    with pytest.raises(PriorSpecificationError):
        fit_logistic_model(df_dishes, PriorSpec({"flavor_profile[sour]": NormalPrior(0, 1)}))
