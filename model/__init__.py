from .evaluation import plot_category_probabilities, plot_posterior_densities, posterior_predictive_check
from .frequentist import ChiSquaredResult, chi_squared_test, contingency_table
from .inference import Diagnostics, FitResult, SamplerConfig, extract_draws, fit_logistic_model
from .prior_predictive import plot_prior_predictive, simulate_prior_predictive
from .priors import DEFAULT_PRIOR, SCENARIOS, SENSITIVITY_SCENARIOS, NormalPrior, PriorSpec, parse_prior
from .sensitivity import SensitivityResult, compare_scenarios, run_scenario, run_sensitivity
from .summary import category_probabilities, inv_logit, odds_ratios, summarize_draws

__all__ = [
    "NormalPrior",
    "PriorSpec",
    "DEFAULT_PRIOR",
    "SCENARIOS",
    "SENSITIVITY_SCENARIOS",
    "parse_prior",
    "SamplerConfig",
    "FitResult",
    "Diagnostics",
    "fit_logistic_model",
    "extract_draws",
    "inv_logit",
    "category_probabilities",
    "odds_ratios",
    "summarize_draws",
    "simulate_prior_predictive",
    "plot_prior_predictive",
    "posterior_predictive_check",
    "plot_posterior_densities",
    "plot_category_probabilities",
    "SensitivityResult",
    "run_scenario",
    "run_sensitivity",
    "compare_scenarios",
    "ChiSquaredResult",
    "contingency_table",
    "chi_squared_test",
]
