"""Configuration parsing from ``.typecov.yml``."""

from __future__ import annotations

import logging
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from typecov_report.errors import ConfigurationError
from typecov_report.models.coverage import ReportOptions

logger = logging.getLogger(__name__)

CONFIG_FILENAME = ".typecov.yml"

_ENV_VAR_RE = re.compile(r"\$\{(\w+)\}")

_DEFAULT_OUTPUT_DIR = "coverage-ts"
_DEFAULT_THRESHOLD = 80.0


def _resolve_env_vars(value: str) -> str:
    """Replace ``${VAR_NAME}`` placeholders with environment variable values."""

    def _replace(match: re.Match[str]) -> str:
        var = match.group(1)
        resolved = os.environ.get(var)
        if resolved is None:
            logger.warning("Environment variable %s is not set (referenced in config)", var)
            return ""
        return resolved

    return _ENV_VAR_RE.sub(_replace, value)


def _resolve_dict(data: dict[str, Any]) -> dict[str, Any]:
    """Recursively resolve environment variables in a dictionary."""
    result: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, str):
            result[key] = _resolve_env_vars(value)
        elif isinstance(value, dict):
            result[key] = _resolve_dict(value)
        elif isinstance(value, list):
            result[key] = [
                _resolve_env_vars(item) if isinstance(item, str) else item for item in value
            ]
        else:
            result[key] = value
    return result


@dataclass
class ReportConfig:
    """HTML report configuration."""

    output_dir: str = _DEFAULT_OUTPUT_DIR
    """Directory the report is written to, relative to the project root."""

    threshold: float = _DEFAULT_THRESHOLD
    """Percentage below which coverage is styled as failing (0-100)."""

    title: str = ""
    """Summary page title (empty = default title)."""

    max_concurrency: int = 1
    """Number of detail pages generated at a time."""

    copy_assets: bool = True
    """Copy the bundled ``source-file.css``/``source-file.js`` into the report."""


@dataclass
class TypecovConfig:
    """Complete configuration from ``.typecov.yml``."""

    root: str
    """Project root directory."""

    report: ReportConfig = field(default_factory=ReportConfig)
    """Report configuration."""

    raw: dict[str, Any] = field(default_factory=dict)
    """Raw parsed YAML for extension/debugging."""

    def report_options(self) -> ReportOptions:
        """Build ``ReportOptions`` with the output directory resolved against the root."""
        output_dir = Path(self.report.output_dir)
        if not output_dir.is_absolute():
            output_dir = Path(self.root) / output_dir
        return ReportOptions(output_dir=output_dir, threshold=self.report.threshold)


def _parse_report_config(raw: dict[str, Any]) -> ReportConfig:
    """Parse report configuration from raw YAML."""
    report_raw = raw.get("report", {})
    if not isinstance(report_raw, dict):
        report_raw = {}

    try:
        return ReportConfig(
            output_dir=str(
                report_raw.get(
                    "output_dir", os.environ.get("TYPECOV_OUTPUT_DIR", _DEFAULT_OUTPUT_DIR)
                )
            ),
            threshold=float(
                report_raw.get(
                    "threshold", os.environ.get("TYPECOV_THRESHOLD", _DEFAULT_THRESHOLD)
                )
            ),
            title=str(report_raw.get("title", "") or ""),
            max_concurrency=int(report_raw.get("max_concurrency", 1)),
            copy_assets=bool(report_raw.get("copy_assets", True)),
        )
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid report configuration: {exc}") from exc


def load_config(root: str | Path) -> TypecovConfig:
    """Load and parse ``.typecov.yml`` from ``root``.

    Falls back to defaults and environment variables when the file is
    missing or incomplete.

    Raises:
        ConfigurationError: If the file is not valid YAML or a value has the wrong type.
    """
    root_path = Path(root).resolve()
    config_path = root_path / CONFIG_FILENAME

    raw: dict[str, Any] = {}
    if config_path.is_file():
        text = config_path.read_text(encoding="utf-8")
        try:
            parsed = yaml.safe_load(text)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if isinstance(parsed, dict):
            raw = _resolve_dict(parsed)
        logger.debug("Loaded configuration from %s", config_path)

    return TypecovConfig(root=str(root_path), report=_parse_report_config(raw), raw=raw)


def _validate_report_config(report: ReportConfig) -> list[str]:
    """Validate report settings."""
    max_percentage = 100.0
    errors: list[str] = []

    if not report.output_dir.strip():
        errors.append("report.output_dir must not be empty")

    if not 0.0 <= report.threshold <= max_percentage:
        errors.append(f"report.threshold must be between 0 and 100 (got: {report.threshold})")

    if report.max_concurrency < 1:
        errors.append(f"report.max_concurrency must be at least 1 (got: {report.max_concurrency})")

    return errors


def validate_config(config: TypecovConfig) -> list[str]:
    """Validate the configuration and return a list of error messages.

    Returns an empty list if the configuration is valid.
    """
    errors: list[str] = []

    if not config.root:
        errors.append("root is required")

    errors.extend(_validate_report_config(config.report))
    return errors
