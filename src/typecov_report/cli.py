"""typecov-report CLI — top-level command group."""

from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path
from typing import TypedDict, Unpack

import click
from rich.logging import RichHandler

from typecov_report import __version__
from typecov_report.config import TypecovConfig, load_config, validate_config
from typecov_report.errors import ConfigurationError, DatasetError, WriteError
from typecov_report.models.coverage import load_dataset
from typecov_report.reporters.html import generate_report, install_assets
from typecov_report.reporters.terminal import console, reporter

logger = logging.getLogger(__name__)


class _HtmlKwargs(TypedDict):
    """Keyword arguments for the html CLI command."""

    dataset: str
    path: str
    output_dir: str | None
    threshold: float | None
    concurrency: int | None
    no_assets: bool


def _configure_logging(*, verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_validated_config(path: str, *, threshold: float | None = None) -> TypecovConfig:
    """Load ``.typecov.yml``, apply a threshold override and validate.

    Raises:
        click.Abort: If the configuration is invalid.
    """
    try:
        config = load_config(path)
    except ConfigurationError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    if threshold is not None:
        config.report = replace(config.report, threshold=threshold)

    errors = validate_config(config)
    if errors:
        for error in errors:
            reporter.print_error(error)
        raise click.Abort

    return config


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging.")
@click.version_option(version=__version__, prog_name="typecov-report")
@click.pass_context
def cli(ctx: click.Context, *, verbose: bool) -> None:
    """typecov-report — static HTML reports for TypeScript type coverage."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    _configure_logging(verbose=verbose)


@cli.command()
@click.argument("dataset", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root: holds .typecov.yml and the source files.",
)
@click.option(
    "--output-dir",
    default=None,
    help="Directory for the HTML report (default: coverage-ts).",
)
@click.option(
    "--threshold",
    default=None,
    type=click.FloatRange(0, 100),
    help="Coverage percentage styled as passing (default: 80).",
)
@click.option(
    "--concurrency",
    default=None,
    type=click.IntRange(min=1),
    help="Number of detail pages generated at a time (default: 1).",
)
@click.option(
    "--no-assets",
    is_flag=True,
    help="Do not copy source-file.css/source-file.js into the report.",
)
def html(**kwargs: Unpack[_HtmlKwargs]) -> None:
    """Generate the HTML report from a coverage dataset (JSON).

    Examples:
        typecov-report html coverage.json
        typecov-report html coverage.json --output-dir report --threshold 90
    """
    path = kwargs["path"]
    config = _load_validated_config(path, threshold=kwargs["threshold"])

    if kwargs["output_dir"]:
        config.report = replace(config.report, output_dir=kwargs["output_dir"])
    concurrency = kwargs["concurrency"] or config.report.max_concurrency
    copy_assets = config.report.copy_assets and not kwargs["no_assets"]

    try:
        dataset = load_dataset(kwargs["dataset"])
    except DatasetError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    options = config.report_options()
    logger.debug(
        "Writing report to %s (threshold=%s, concurrency=%d)",
        options.output_dir,
        options.threshold,
        concurrency,
    )
    reporter.print_header("typecov-report html")

    try:
        result = generate_report(
            dataset,
            options,
            source_root=Path(path),
            max_concurrency=concurrency,
            title=config.report.title or None,
        )
        if copy_assets:
            install_assets(options.output_dir)
    except (ConfigurationError, WriteError) as e:
        reporter.print_error(f"Failed to generate report: {e}")
        raise click.Abort from e

    reporter.print_success(f"Generated {len(result.pages)} detail page(s)")
    reporter.print_failures(result.failures)
    reporter.print_info(f"View generated HTML Report at {result.index_path}")

    if not result.success:
        raise SystemExit(1)


@cli.command()
@click.argument("dataset", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root holding .typecov.yml.",
)
@click.option(
    "--threshold",
    default=None,
    type=click.FloatRange(0, 100),
    help="Coverage percentage styled as passing (default: 80).",
)
def summary(dataset: str, path: str, threshold: float | None) -> None:
    """Print the coverage summary table without writing any files."""
    config = _load_validated_config(path, threshold=threshold)

    try:
        data = load_dataset(dataset)
    except DatasetError as e:
        reporter.print_error(str(e))
        raise click.Abort from e

    reporter.print_coverage_summary(data, config.report.threshold)


@cli.group("config")
def config_group() -> None:
    """Inspect the .typecov.yml configuration."""


@config_group.command("validate")
@click.option(
    "--path",
    default=".",
    type=click.Path(exists=True, file_okay=False, resolve_path=True),
    help="Project root holding .typecov.yml.",
)
def config_validate(path: str) -> None:
    """Validate .typecov.yml and report any problems."""
    config = _load_validated_config(path)
    reporter.print_success(
        f"Configuration is valid (output_dir={config.report.output_dir}, "
        f"threshold={config.report.threshold:g})"
    )


def main() -> None:
    """Console script entry point."""
    cli(obj={})
