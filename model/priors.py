from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from application.preprocessing.schema import FLAVOR_LEVELS, INTERCEPT, SWEET_COEF, coef_name
from core.exceptions import PriorSpecificationError


@dataclass(frozen=True)
class NormalPrior:
    mu: float
    sigma: float

    def __post_init__(self):
        if not self.sigma > 0:
            raise PriorSpecificationError(f"Prior sigma must be positive, got {self.sigma}")

    def __str__(self) -> str:
        return f"N({self.mu:g}, {self.sigma:g})"


# weakly informative default on the logit scale, used for every coefficient without an override.
# Unlike rstanarm it is not rescaled by 1/sd(x), which would give about N(0, 5) for the sweet indicator.
DEFAULT_PRIOR = NormalPrior(0.0, 2.5)


@dataclass(frozen=True)
class PriorSpec:
    """Independent normal priors keyed by coefficient name."""

    priors: Mapping[str, NormalPrior] = field(default_factory=dict)
    default: NormalPrior = DEFAULT_PRIOR

    def for_coef(self, name: str) -> NormalPrior:
        return self.priors.get(name, self.default)

    def validate(self, coef_names: Iterable[str]) -> None:
        unknown = sorted(set(self.priors) - set(coef_names))
        if unknown:
            raise PriorSpecificationError(f"Prior given for unknown coefficient(s): {unknown}")

    def as_dict(self, coef_names: Iterable[str]) -> dict[str, str]:
        return {name: str(self.for_coef(name)) for name in coef_names}


# Prior scenarios on the sweet offset for the sensitivity analysis.
# "informative" was tuned by inspecting the prior predictive P(vegetarian | sweet).
SCENARIOS: dict[str, PriorSpec] = {
    "informative": PriorSpec({SWEET_COEF: NormalPrior(1.75, 0.5)}),
    "default": PriorSpec(),
    "reversed": PriorSpec({SWEET_COEF: NormalPrior(-1.75, 0.5)}),
    "tight": PriorSpec({SWEET_COEF: NormalPrior(5.0, 0.001)}),
}
SENSITIVITY_SCENARIOS = ("informative", "default", "reversed")


def model_coef_names() -> list[str]:
    return [INTERCEPT] + [coef_name(level) for level in FLAVOR_LEVELS[1:]]


def _resolve_coef(key: str) -> str:
    key = key.strip()
    if key == INTERCEPT or key.lower() == "intercept":
        return INTERCEPT
    if key in FLAVOR_LEVELS:
        return coef_name(key)
    return key


def parse_prior(text: str) -> PriorSpec:
    """
    Parse overrides such as "sweet=1.75,0.5;spicy=0,1".
    Keys may be a flavor level, a full coefficient name or "Intercept".
    """
    priors: dict[str, NormalPrior] = {}
    for part in filter(None, (p.strip() for p in text.split(";"))):
        try:
            key, params = part.split("=", 1)
            mu, sigma = (float(v) for v in params.split(","))
        except ValueError as e:
            raise PriorSpecificationError(f"Cannot parse prior '{part}', expected name=mu,sigma") from e
        priors[_resolve_coef(key)] = NormalPrior(mu, sigma)
    spec = PriorSpec(priors)
    spec.validate(model_coef_names())
    return spec
