from .io import load_dishes, load_kaggle_dataset, resolve_dataset
from .processing import category_counts, derive_response, filter_dishes, prepare_dishes, validate_columns

__all__ = [
    "load_dishes",
    "load_kaggle_dataset",
    "resolve_dataset",
    "validate_columns",
    "filter_dishes",
    "derive_response",
    "prepare_dishes",
    "category_counts",
]
