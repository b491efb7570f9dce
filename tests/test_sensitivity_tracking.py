import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def fake_result(coef_draws):
    from model import SCENARIOS, SamplerConfig, category_probabilities, summarize_draws
    from model.inference import Diagnostics, FitResult
    from model.sensitivity import SensitivityResult

    fit = FitResult(
        idata=None,
        model=None,
        coef_names=["flavor_profile[spicy]", "flavor_profile[sweet]"],
        priors=SCENARIOS["informative"],
        sampler=SamplerConfig(),
        diagnostics=Diagnostics(divergences=2, treedepth_hits=0, max_r_hat=1.0, min_ess_bulk=900.0),
    )
    return SensitivityResult(
        scenario="informative",
        fit=fit,
        coef_summary=summarize_draws(coef_draws),
        prob_summary=summarize_draws(category_probabilities(coef_draws)),
    )


def test_run_sensitivity_logs_summary_into_missing_artifact_dir(tmp_path, monkeypatch, df_dishes, fake_result):
    from mlflow.tracking import MlflowClient

    import model.sensitivity as sensitivity
    from core.settings import settings

    tracking_uri = (tmp_path / "mlruns").as_uri()
    artifact_dir = tmp_path / "fresh" / "artifacts"
    monkeypatch.setattr(settings, "MLFLOW_TRACKING_URI", tracking_uri)
    monkeypatch.setattr(settings, "ARTIFACT_DIR", str(artifact_dir))
    monkeypatch.setattr(sensitivity, "run_scenario", lambda df, scenario, sampler=None: fake_result)

    results = sensitivity.run_sensitivity(df_dishes, ["informative"])

    assert list(results) == ["informative"]
    assert (artifact_dir / "summary_informative.csv").exists()

    client = MlflowClient(tracking_uri=tracking_uri)
    runs = client.search_runs(experiment_ids=["0"])
    assert [r.data.tags["scenario"] for r in runs] == ["informative"]
    run = runs[0]
    assert run.data.params["prior_mu"] == "1.75"
    assert run.data.metrics["divergences"] == 2.0
    artifacts = [a.path for a in client.list_artifacts(run.info.run_id, "tables")]
    assert artifacts == ["tables/summary_informative.csv"]


def test_run_sensitivity_skips_tracking_without_uri(tmp_path, monkeypatch, df_dishes, fake_result):
    import model.sensitivity as sensitivity
    from core.settings import settings

    monkeypatch.setattr(settings, "MLFLOW_TRACKING_URI", None)
    monkeypatch.setattr(settings, "ARTIFACT_DIR", str(tmp_path / "artifacts"))
    monkeypatch.setattr(sensitivity, "run_scenario", lambda df, scenario, sampler=None: fake_result)
    monkeypatch.setattr(sensitivity, "_log_scenario", lambda *a, **k: pytest.fail("tracking should be off"))

    assert list(sensitivity.run_sensitivity(df_dishes, ["informative"])) == ["informative"]
    assert not (tmp_path / "artifacts").exists()
