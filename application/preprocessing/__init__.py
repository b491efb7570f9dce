from .schema import (
    DIET_COL,
    FLAVOR_COL,
    FLAVOR_LEVELS,
    INTERCEPT,
    MISSING_SENTINEL,
    RARE_FLAVORS,
    REFERENCE_FLAVOR,
    RESPONSE_COL,
    SPICY_COEF,
    SWEET_COEF,
    VEGETARIAN_LABEL,
    coef_name,
)
from .transformers import build_design_matrix

__all__ = [
    "build_design_matrix",
    "coef_name",
    "FLAVOR_COL",
    "DIET_COL",
    "RESPONSE_COL",
    "FLAVOR_LEVELS",
    "REFERENCE_FLAVOR",
    "MISSING_SENTINEL",
    "RARE_FLAVORS",
    "VEGETARIAN_LABEL",
    "INTERCEPT",
    "SWEET_COEF",
    "SPICY_COEF",
]
