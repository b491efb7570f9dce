FLAVOR_COL = "flavor_profile"
DIET_COL = "diet"
RESPONSE_COL = "vegetarian"  # derived binary target, 1 = vegetarian
REQUIRED_COLS = (FLAVOR_COL, DIET_COL)

MISSING_SENTINEL = "-1"  # the raw file marks unknown values with -1
RARE_FLAVORS = ("sour",)  # single record, dropped before modeling

# bitter sorts first, so it is the reference level absorbed by the intercept
FLAVOR_LEVELS = ("bitter", "spicy", "sweet")
REFERENCE_FLAVOR = FLAVOR_LEVELS[0]

VEGETARIAN_LABEL = "vegetarian"
DIET_LEVELS = ("vegetarian", "non vegetarian")

INTERCEPT = "Intercept"


def coef_name(flavor: str) -> str:
    return f"{FLAVOR_COL}[{flavor}]"


SWEET_COEF = coef_name("sweet")
SPICY_COEF = coef_name("spicy")
