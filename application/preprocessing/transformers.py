import numpy as np
import pandas as pd
from sklearn.preprocessing import OneHotEncoder

from .schema import FLAVOR_COL, FLAVOR_LEVELS, coef_name


def build_flavor_encoder() -> OneHotEncoder:
    # drop="first" removes the reference level (bitter) so the intercept stays identifiable
    return OneHotEncoder(
        categories=[list(FLAVOR_LEVELS)],
        drop="first",
        sparse_output=False,
        dtype=np.float64,
    )


def build_design_matrix(df: pd.DataFrame) -> tuple[np.ndarray, list[str]]:
    """Treatment-code the flavor profile; returns the matrix and its coefficient names."""
    encoder = build_flavor_encoder()
    X = encoder.fit_transform(df[[FLAVOR_COL]])
    names = [coef_name(level) for level in FLAVOR_LEVELS[1:]]
    return X, names
