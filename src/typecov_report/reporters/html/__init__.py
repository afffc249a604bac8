"""Static HTML report: a summary page plus one detail page per source file."""

from __future__ import annotations

from typecov_report.reporters.html.assets import include_asset, include_assets
from typecov_report.reporters.html.detail import DetailPayload, build_detail_payload
from typecov_report.reporters.html.page import PageTemplate, RenderOptions, render_page
from typecov_report.reporters.html.summary import SummaryPayload, build_summary_payload
from typecov_report.reporters.html.writer import (
    HTMLReportWriter,
    PageFailure,
    ReportResult,
    generate_report,
    install_assets,
)

__all__ = [
    "DetailPayload",
    "HTMLReportWriter",
    "PageFailure",
    "PageTemplate",
    "RenderOptions",
    "ReportResult",
    "SummaryPayload",
    "build_detail_payload",
    "build_summary_payload",
    "generate_report",
    "include_asset",
    "include_assets",
    "install_assets",
    "render_page",
]
