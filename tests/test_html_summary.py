"""Tests for the summary page payload."""

from __future__ import annotations

import pytest

from typecov_report.errors import ConfigurationError
from typecov_report.models.coverage import CoverageDataset, FileCounts
from typecov_report.reporters.html.summary import build_summary_payload


def test_totals_and_threshold(sample_dataset: CoverageDataset) -> None:
    payload = build_summary_payload(sample_dataset, 80.0)
    assert payload.percentage == 75.0
    assert (payload.total, payload.covered, payload.uncovered) == (4, 3, 1)
    assert payload.threshold == 80.0
    assert payload.passed is False


def test_one_row_per_file_in_order(sample_dataset: CoverageDataset) -> None:
    payload = build_summary_payload(sample_dataset, 80.0)
    assert [row.path for row in payload.rows] == ["src/a.ts", "src/b.ts"]
    a, b = payload.rows
    assert (a.percentage, a.passed, a.href) == (100.0, True, "files/src/a.ts.html")
    assert (b.percentage, b.passed, b.href) == (50.0, False, "files/src/b.ts.html")
    assert b.uncovered_count == 1


def test_threshold_only_changes_flags(sample_dataset: CoverageDataset) -> None:
    strict = build_summary_payload(sample_dataset, 100.0)
    lenient = build_summary_payload(sample_dataset, 0.0)
    assert [r.path for r in strict.rows] == [r.path for r in lenient.rows]
    assert [(r.total_count, r.correct_count) for r in strict.rows] == [
        (r.total_count, r.correct_count) for r in lenient.rows
    ]
    assert [r.passed for r in strict.rows] == [True, False]
    assert [r.passed for r in lenient.rows] == [True, True]
    assert lenient.passed is True


def test_empty_file_without_expressions_passes() -> None:
    dataset = CoverageDataset(
        percentage=100.0,
        total=0,
        covered=0,
        uncovered=0,
        file_counts={"types.d.ts": FileCounts(total_count=0, correct_count=0)},
    )
    (row,) = build_summary_payload(dataset, 100.0).rows
    assert row.percentage == 100.0
    assert row.passed is True
    assert row.href == "files/types.d.ts.html"


def _dataset(*paths: str) -> CoverageDataset:
    return CoverageDataset(
        percentage=100.0,
        total=len(paths),
        covered=len(paths),
        uncovered=0,
        file_counts={path: FileCounts(total_count=1, correct_count=1) for path in paths},
    )


def test_href_is_percent_encoded() -> None:
    (row,) = build_summary_payload(_dataset("src/100%#1.ts"), 80.0).rows
    assert row.path == "src/100%#1.ts"
    assert row.href == "files/src/100%25%231.ts.html"


@pytest.mark.parametrize(
    ("first", "second"),
    [
        ("src/a.ts", "./src/a.ts"),
        ("../a.ts", "__/a.ts"),
    ],
)
def test_colliding_pages_rejected(first: str, second: str) -> None:
    with pytest.raises(ConfigurationError, match="both map to files/"):
        build_summary_payload(_dataset(first, second), 80.0)
