from .loader import load_dishes, load_kaggle_dataset, resolve_dataset

__all__ = ["load_dishes", "load_kaggle_dataset", "resolve_dataset"]
