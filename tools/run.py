from __future__ import annotations

from pathlib import Path

import click
import numpy as np
from loguru import logger

from application.config import apply_global_settings
from application.dataset import prepare_dishes, resolve_dataset
from application.preprocessing import SWEET_COEF
from core import __version__, settings
from core.exceptions import PriorSpecificationError
from model import SCENARIOS, SENSITIVITY_SCENARIOS, NormalPrior, SamplerConfig, chi_squared_test, parse_prior
from model.prior_predictive import plot_prior_predictive, simulate_prior_predictive
from model.priors import model_coef_names
from pipelines import report_pipeline

HELP_TEXT = f"""
    Flavor vs. Diet Bayesian Report CLI v{__version__}.

    Main entry point for the report.
    Fits a Bayesian logistic regression of vegetarian dishes on flavor profile,
    studies its sensitivity to the prior on the sweet coefficient and contrasts
    it with a chi-squared test.

    \b
    load -> filter -> fit -> summarize -> sensitivity -> chi-squared -> report.
    """


def _validate_scenarios(_: click.Context, __: click.Option, value: str | None) -> list[str]:
    """
    click callback to validate the `--scenarios` input.
    `value` is a comma-separated string (or None).
    """
    if value is None:
        return list(SENSITIVITY_SCENARIOS)
    if value.strip().lower() == "none":
        return []

    parts = [s.strip() for s in value.split(",") if s.strip()]
    invalid = [s for s in parts if s not in SCENARIOS]
    if invalid:
        valid = ", ".join(sorted(SCENARIOS))
        raise click.BadParameter(f"Invalid scenario name(s): {invalid}. Valid scenarios are: {valid}")
    return parts


def _validate_prior(_: click.Context, __: click.Option, value: str | None):
    if not value:
        return None
    try:
        return parse_prior(value)
    except PriorSpecificationError as e:
        raise click.BadParameter(str(e)) from e


def _print_plan(data_path, priors, scenarios, sampler, out_dir):
    click.echo(
        "Plan:\n"
        f"  Data path: {data_path or '<settings default>'}\n"
        f"  Priors: {priors.as_dict(model_coef_names())}\n"
        f"  Sensitivity scenarios: {scenarios}\n"
        f"  Sampler: draws={sampler.draws}, tune={sampler.tune}, chains={sampler.chains}, "
        f"max_treedepth={sampler.max_treedepth}\n"
        f"  Output dir: {out_dir}\n"
    )


@click.group(
    help=HELP_TEXT,
    invoke_without_command=True,
    context_settings={"help_option_names": ["-h", "--help"]},
    epilog=(
        "EXAMPLES:\n\n"
        "python -m tools.run  # full report with the informative prior\n\n"
        "python -m tools.run --list-scenarios  # list prior scenarios\n\n"
        "python -m tools.run --dry-run  # show the plan without running\n\n"
        "python -m tools.run --prior 'sweet=1.75,0.5' --scenarios informative,reversed --draws 1000\n\n"
        "python -m tools.run prior-predictive --mu 1.75 --sigma 0.5\n\n"
        "python -m tools.run chi2 --data-path data/indian_food.csv\n\n"
    ),
)
@click.version_option(version=__version__, message="Flavor Diet Report CLI v%(version)s", prog_name="Flavor Diet CLI")
@click.option(
    "--data-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=str),
    default=None,
    envvar="DATA_PATH",
    help="Path to the dishes CSV (can also be set via DATA_PATH). Falls back to settings, then Kaggle.",
)
@click.option(
    "--prior",
    "priors",
    callback=_validate_prior,
    default=None,
    help="Prior overrides for the main fit, e.g. 'sweet=1.75,0.5;spicy=0,1'. Defaults to the informative prior.",
)
@click.option(
    "--scenarios",
    callback=_validate_scenarios,
    default=None,
    help=(
        "Comma-separated prior scenarios for the sensitivity analysis, or 'none'. "
        "\n\nValid values: " + ", ".join(sorted(SCENARIOS))
    ),
)
@click.option("--draws", type=int, envvar="DRAWS", help="Post-warmup draws per chain.")
@click.option("--tune", type=int, envvar="TUNE", help="Warmup iterations per chain.")
@click.option("--chains", type=int, envvar="CHAINS", help="Number of independent chains.")
@click.option("--max-treedepth", type=int, envvar="MAX_TREEDEPTH", help="NUTS maximum tree depth.")
@click.option(
    "--out-dir",
    type=click.Path(file_okay=False, path_type=str),
    default=None,
    help="Directory for report.md and plots (defaults to REPORT_DIR).",
)
@click.option("--skip-ppc", is_flag=True, help="Skip the posterior predictive check.")
@click.option("--list-scenarios", is_flag=True, help="List prior scenarios and exit.")
@click.option("--dry-run", is_flag=True, help="Print the resolved plan and exit without sampling.")
@click.pass_context
def cli(
    ctx: click.Context,
    data_path: str | None,
    priors,
    scenarios: list[str],
    draws: int | None,
    tune: int | None,
    chains: int | None,
    max_treedepth: int | None,
    out_dir: str | None,
    skip_ppc: bool,
    list_scenarios: bool,
    dry_run: bool,
) -> None:
    if ctx.invoked_subcommand is not None:
        return

    if list_scenarios:
        click.echo(
            "Available scenarios:\n  "
            + "\n  ".join(f"{name}: sweet ~ {spec.for_coef(SWEET_COEF)}" for name, spec in SCENARIOS.items())
        )
        raise SystemExit(0)

    priors = priors or SCENARIOS["informative"]
    sampler = SamplerConfig.from_settings(draws=draws, tune=tune, chains=chains, max_treedepth=max_treedepth)
    out_dir = out_dir or settings.REPORT_DIR

    if dry_run:
        _print_plan(data_path, priors, scenarios, sampler, out_dir)
        raise SystemExit(0)

    # apply global settings (seed, matplotlib, warnings)
    apply_global_settings()

    try:
        _print_plan(data_path, priors, scenarios, sampler, out_dir)
        result = report_pipeline(
            data_path=data_path,
            priors=priors,
            scenarios=scenarios,
            sampler=sampler,
            out_dir=out_dir,
            posterior_predictive=not skip_ppc,
        )
        logger.info(f"Report written to {result['report_path']}")
    except Exception as e:
        # error and non-zero exit
        raise click.ClickException(str(e)) from e


@cli.command("prior-predictive")
@click.option("--mu", type=float, default=1.75, show_default=True, help="Prior mean of the sweet offset.")
@click.option("--sigma", type=float, default=0.5, show_default=True, help="Prior sd of the sweet offset.")
@click.option("--n", "n_draws", type=int, default=None, help="Number of prior draws.")
@click.option("--out", type=click.Path(dir_okay=False, path_type=str), default=None, help="Output PNG path.")
def prior_predictive(mu: float, sigma: float, n_draws: int | None, out: str | None) -> None:
    """Plot the P(vegetarian | sweet) implied by a N(mu, sigma) prior."""
    try:
        prior = NormalPrior(mu, sigma)
    except PriorSpecificationError as e:
        raise click.BadParameter(str(e), param_hint="--sigma") from e

    apply_global_settings()
    probs = simulate_prior_predictive(prior, n=n_draws or settings.PRIOR_PREDICTIVE_DRAWS)
    out_path = Path(out or Path(settings.ARTIFACT_DIR, f"prior_predictive_{mu:g}_{sigma:g}.png"))
    out_path.parent.mkdir(parents=True, exist_ok=True)
    plot_prior_predictive(probs, out_path, title=f"Prior predictive, sweet ~ {prior}")
    lower, upper = np.quantile(probs, [0.025, 0.975])
    click.echo(f"P(vegetarian | sweet): mean={probs.mean():.3f}, 95% interval=({lower:.3f}, {upper:.3f})")
    click.echo(f"Saved {out_path}")


@cli.command("chi2")
@click.option(
    "--data-path",
    type=click.Path(exists=True, file_okay=True, dir_okay=False, readable=True, path_type=str),
    default=None,
    envvar="DATA_PATH",
    help="Path to the dishes CSV.",
)
def chi2(data_path: str | None) -> None:
    """Chi-squared test of flavor profile vs. vegetarian, with its assumption check."""
    try:
        result = chi_squared_test(prepare_dishes(resolve_dataset(data_path)))
    except Exception as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Observed:\n{result.observed}\n")
    click.echo(f"Expected:\n{result.expected.round(2)}\n")
    click.echo(f"chi2={result.statistic:.3f}, dof={result.dof}, p={result.p_value:.4g}")
    if result.assumptions_met:
        click.echo("Assumptions met.")
    else:
        click.secho(
            f"Assumptions violated: {result.zero_cells} zero cell(s), "
            f"{result.small_expected_cells} expected count(s) below 5.",
            fg="yellow",
        )


main = cli


if __name__ == "__main__":
    cli()
