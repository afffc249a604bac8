"""Data models for typecov-report."""

from typecov_report.models.coverage import (
    Annotation,
    CoverageDataset,
    FileCounts,
    FileCoverageEntry,
    ReportOptions,
    coverage_percentage,
    load_dataset,
    passes_threshold,
)

__all__ = [
    "Annotation",
    "CoverageDataset",
    "FileCounts",
    "FileCoverageEntry",
    "ReportOptions",
    "coverage_percentage",
    "load_dataset",
    "passes_threshold",
]
