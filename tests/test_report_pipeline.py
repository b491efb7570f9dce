import pytest

pytestmark = pytest.mark.slow


def test_report_pipeline_writes_markdown_report(dishes_csv, fast_sampler, tmp_path, monkeypatch):
    from core.settings import settings
    from pipelines import report_pipeline

    monkeypatch.setattr(settings, "MLFLOW_TRACKING_URI", None)
    monkeypatch.setattr(settings, "PRIOR_PREDICTIVE_DRAWS", 500)

    out_dir = tmp_path / "report"
    result = report_pipeline(data_path=dishes_csv, scenarios=["tight"], sampler=fast_sampler, out_dir=out_dir)

    report = result["report_path"].read_text(encoding="utf-8")
    assert "## Sensitivity to the prior" in report
    assert "## Chi-squared test of independence" in report
    assert "do not hold" in report
    assert "quasi-complete separation" in report
    pngs = (
        "prior_predictive_sweet.png",
        "category_probabilities.png",
        "posterior_predictive.png",
        "sensitivity_sweet.png",
    )
    for png in pngs:
        assert (out_dir / png).exists()

    assert result["sensitivity"].loc["tight", "post_mean"] == pytest.approx(5.0, abs=0.01)
    assert not result["chi2"].assumptions_met
