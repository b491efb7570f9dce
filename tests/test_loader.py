import pandas as pd
import pytest

pytestmark = pytest.mark.unit


def test_load_dishes_keeps_sentinel_as_string(tmp_path):
    from application.dataset.io.loader import load_dishes

    p = tmp_path / "sample.csv"
    pd.DataFrame({"name": ["a", "b"], "flavor_profile": ["-1", "sweet"], "diet": ["vegetarian", " vegetarian"]}).to_csv(
        p, index=False
    )

    out = load_dishes(p)
    assert out.loc[0, "flavor_profile"] == "-1"
    assert out.loc[1, "diet"] == "vegetarian"  # skipinitialspace


def test_load_dishes_missing_file_raises(tmp_path):
    from application.dataset.io.loader import load_dishes

    with pytest.raises(FileNotFoundError):
        load_dishes(tmp_path / "nope.csv")


def test_resolve_dataset_prefers_explicit_path(dishes_csv, monkeypatch):
    import application.dataset.io.loader as loader_mod

    def boom(*a, **k):
        raise AssertionError("kaggle should not be used when a path is given")

    monkeypatch.setattr(loader_mod, "load_kaggle_dataset", boom)
    out = loader_mod.resolve_dataset(dishes_csv)
    assert {"flavor_profile", "diet"}.issubset(out.columns)


def test_resolve_dataset_falls_back_to_kaggle(monkeypatch, df_dishes_raw):
    import application.dataset.io.loader as loader_mod

    calls = []

    def fake_loader(handle, path, pandas_kwargs=None):
        calls.append((handle, path))
        return df_dishes_raw

    monkeypatch.setattr(loader_mod.settings, "DATASET_PATH", None)
    monkeypatch.setattr(loader_mod, "load_kaggle_dataset", fake_loader)

    out = loader_mod.resolve_dataset()
    assert len(out) == len(df_dishes_raw)
    assert calls == [(loader_mod.settings.KAGGLE_DATASET, loader_mod.settings.KAGGLE_FILE)]
