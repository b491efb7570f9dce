import pandas as pd
import pytest

from model import SamplerConfig


def _dishes(flavor: str, n_veg: int, n_non_veg: int = 0) -> list[dict]:
    rows = [{"name": f"{flavor}-veg-{i}", "flavor_profile": flavor, "diet": "vegetarian"} for i in range(n_veg)]
    rows += [
        {"name": f"{flavor}-nonveg-{i}", "flavor_profile": flavor, "diet": "non vegetarian"} for i in range(n_non_veg)
    ]
    return rows


@pytest.fixture
def df_dishes_raw():
    """
    Shaped like the Indian food table: every sweet and bitter dish is vegetarian,
    spicy dishes are mixed, plus one sour dish and a few "-1" flavors.
    """
    rows = (
        _dishes("sweet", 20)
        + _dishes("spicy", 110, 23)
        + _dishes("bitter", 8)
        + _dishes("sour", 1)
        + _dishes("-1", 3, 2)
    )
    df = pd.DataFrame(rows)
    df["course"] = "main course"
    return df


@pytest.fixture
def df_dishes(df_dishes_raw):
    from application.dataset import prepare_dishes

    return prepare_dishes(df_dishes_raw)


@pytest.fixture
def dishes_csv(tmp_path, df_dishes_raw):
    p = tmp_path / "indian_food.csv"
    df_dishes_raw.to_csv(p, index=False)
    return str(p)


@pytest.fixture
def fast_sampler():
    # small but enough for stable means on this model
    return SamplerConfig(draws=500, tune=500, chains=2, max_treedepth=10, target_accept=0.9, seed=33, cores=1)


@pytest.fixture
def coef_draws():
    """Hand-made coefficient draws, no sampling involved."""
    return pd.DataFrame(
        {
            "Intercept": [2.0, 2.5, 3.0, 1.5, 2.2],
            "flavor_profile[spicy]": [-0.5, -1.0, -1.5, 0.0, -0.8],
            "flavor_profile[sweet]": [1.75, 1.5, 2.0, 1.2, 1.9],
        }
    )
