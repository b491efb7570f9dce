from __future__ import annotations

from pathlib import Path

import kagglehub
import pandas as pd
from kagglehub import KaggleDatasetAdapter
from loguru import logger

from application.preprocessing.schema import DIET_COL, FLAVOR_COL
from core.settings import settings

# keep categorical columns as strings so the "-1" sentinel is not parsed as a number
_STRING_COLS = {FLAVOR_COL: str, DIET_COL: str}


def load_kaggle_dataset(handle: str, path: str, pandas_kwargs: dict | None = None) -> pd.DataFrame:
    """Load a single file of a Kaggle dataset into a DataFrame."""
    logger.info("Fetching {} from kaggle dataset {}", path, handle)
    return kagglehub.dataset_load(
        KaggleDatasetAdapter.PANDAS,
        handle,
        path,
        pandas_kwargs=pandas_kwargs or {},
    )


def load_dishes(path: str | Path) -> pd.DataFrame:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Dataset not found: {path}")
    df = pd.read_csv(path, skipinitialspace=True, dtype=_STRING_COLS)
    logger.info("Loaded {} dishes from {}", len(df), path)
    return df


def resolve_dataset(data_path: str | Path | None = None) -> pd.DataFrame:
    """
    Load the dishes table from the first available source:
    explicit path -> settings.DATASET_PATH -> kaggle.
    """
    path = data_path or settings.DATASET_PATH
    if path:
        return load_dishes(path)
    return load_kaggle_dataset(
        settings.KAGGLE_DATASET,
        settings.KAGGLE_FILE,
        pandas_kwargs={"skipinitialspace": True, "dtype": _STRING_COLS},
    )
