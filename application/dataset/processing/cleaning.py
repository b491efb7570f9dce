from __future__ import annotations

import pandas as pd
from loguru import logger

from application.preprocessing.schema import (
    DIET_COL,
    DIET_LEVELS,
    FLAVOR_COL,
    FLAVOR_LEVELS,
    MISSING_SENTINEL,
    RARE_FLAVORS,
    REQUIRED_COLS,
    RESPONSE_COL,
    VEGETARIAN_LABEL,
)
from core.exceptions import DatasetSchemaError


def validate_columns(df: pd.DataFrame) -> None:
    missing = [c for c in REQUIRED_COLS if c not in df.columns]
    if missing:
        raise DatasetSchemaError(f"Missing required column(s): {missing}. Available columns: {list(df.columns)}")


def _normalize(series: pd.Series) -> pd.Series:
    return series.astype("string").str.strip().str.lower()


def filter_dishes(df: pd.DataFrame) -> pd.DataFrame:
    """
    Drop dishes with a missing/sentinel flavor or a rare flavor.
    Any flavor or diet label outside the known levels is an error, never imputed.
    """
    validate_columns(df)
    out = df.copy()
    out[FLAVOR_COL] = _normalize(out[FLAVOR_COL])
    out[DIET_COL] = _normalize(out[DIET_COL])

    n0 = len(out)
    out = out[out[FLAVOR_COL].notna() & out[FLAVOR_COL].ne(MISSING_SENTINEL)]
    n_missing = n0 - len(out)

    out = out[~out[FLAVOR_COL].isin(RARE_FLAVORS)]
    n_rare = n0 - n_missing - len(out)
    logger.info("Dropped {} dishes with missing flavor and {} with rare flavors {}", n_missing, n_rare, RARE_FLAVORS)

    unexpected = sorted(set(out[FLAVOR_COL]) - set(FLAVOR_LEVELS))
    if unexpected:
        raise DatasetSchemaError(f"Unexpected {FLAVOR_COL} value(s): {unexpected}")

    bad_diet = out[DIET_COL].isna() | ~out[DIET_COL].isin(DIET_LEVELS)
    if bad_diet.any():
        labels = sorted(out.loc[bad_diet, DIET_COL].fillna("<NA>").unique())
        raise DatasetSchemaError(f"Unexpected {DIET_COL} value(s): {labels}")

    return out.reset_index(drop=True)


def derive_response(df: pd.DataFrame) -> pd.DataFrame:
    out = df.copy()
    out[RESPONSE_COL] = out[DIET_COL].eq(VEGETARIAN_LABEL).astype(int)
    return out


def prepare_dishes(df: pd.DataFrame) -> pd.DataFrame:
    """validate -> filter -> derive the binary vegetarian response."""
    validate_columns(df)
    out = derive_response(filter_dishes(df))
    logger.info(
        "Prepared {} of {} dishes ({} vegetarian)",
        len(out),
        len(df),
        int(out[RESPONSE_COL].sum()),
    )
    return out


def category_counts(df: pd.DataFrame) -> pd.DataFrame:
    """
    Observed dishes and vegetarian share per flavor.
    `separated` marks flavors whose share is exactly 0 or 1.
    """
    grouped = df.groupby(FLAVOR_COL, observed=True)[RESPONSE_COL]
    counts = (
        pd.DataFrame({"n": grouped.size(), "vegetarian": grouped.sum()})
        .reindex(list(FLAVOR_LEVELS), fill_value=0)
        .astype(int)
    )
    counts["proportion"] = counts["vegetarian"] / counts["n"].where(counts["n"] > 0)
    counts["separated"] = counts["proportion"].isin([0.0, 1.0])
    counts.index.name = FLAVOR_COL
    return counts
