"""Reporters for type coverage results."""

from __future__ import annotations

from typecov_report.reporters.html import HTMLReportWriter, generate_report
from typecov_report.reporters.terminal import reporter

__all__ = [
    "HTMLReportWriter",
    "generate_report",
    "reporter",
]
