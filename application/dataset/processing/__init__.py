from .cleaning import category_counts, derive_response, filter_dishes, prepare_dishes, validate_columns

__all__ = ["validate_columns", "filter_dishes", "derive_response", "prepare_dishes", "category_counts"]
