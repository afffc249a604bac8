"""Summary page payload — aggregate totals and the per-file table."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from typecov_report.errors import ConfigurationError
from typecov_report.models.coverage import passes_threshold
from typecov_report.reporters.html.paths import detail_page_href, detail_page_path

if TYPE_CHECKING:
    from collections.abc import Iterable
    from pathlib import PurePosixPath

    from typecov_report.models.coverage import CoverageDataset


@dataclass(frozen=True)
class FileRow:
    """One row of the summary table."""

    path: str
    href: str
    total_count: int
    correct_count: int
    percentage: float
    passed: bool

    @property
    def uncovered_count(self) -> int:
        """Return the number of ``any`` expressions in the file."""
        return self.total_count - self.correct_count


@dataclass(frozen=True)
class SummaryPayload:
    """Data rendered by the summary template."""

    percentage: float
    total: int
    covered: int
    uncovered: int
    threshold: float
    passed: bool
    rows: list[FileRow] = field(default_factory=list)


def _check_unique_pages(file_paths: Iterable[str]) -> None:
    seen: dict[PurePosixPath, str] = {}
    for file_path in file_paths:
        page = detail_page_path(file_path)
        if page in seen:
            raise ConfigurationError(
                f"File paths {seen[page]!r} and {file_path!r} both map to {page}"
            )
        seen[page] = file_path


def build_summary_payload(dataset: CoverageDataset, threshold: float) -> SummaryPayload:
    """Build the summary payload.

    Every file in ``dataset.file_counts`` gets exactly one row, in enumeration
    order.  The threshold only affects the ``passed`` flags.

    Raises:
        ConfigurationError: If two file keys map to the same detail page.
    """
    _check_unique_pages(dataset.file_counts)

    rows = [
        FileRow(
            path=entry.path,
            href=detail_page_href(entry.path),
            total_count=entry.total_count,
            correct_count=entry.correct_count,
            percentage=entry.percentage,
            passed=passes_threshold(entry.percentage, threshold),
        )
        for entry in dataset.entries()
    ]

    return SummaryPayload(
        percentage=dataset.percentage,
        total=dataset.total,
        covered=dataset.covered,
        uncovered=dataset.uncovered,
        threshold=threshold,
        passed=passes_threshold(dataset.percentage, threshold),
        rows=rows,
    )
