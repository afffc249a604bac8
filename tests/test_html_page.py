"""Tests for the HTML page renderer."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from tests.conftest import FIXED_TIME
from typecov_report.models.coverage import CoverageDataset, FileCounts
from typecov_report.reporters.html.assets import BASELINE_STYLESHEET
from typecov_report.reporters.html.detail import build_detail_payload
from typecov_report.reporters.html.page import (
    DEFAULT_TITLE,
    PageTemplate,
    RenderOptions,
    format_timestamp,
    render_page,
)
from typecov_report.reporters.html.summary import build_summary_payload


def _summary_html(dataset: CoverageDataset, options: RenderOptions | None = None) -> str:
    payload = build_summary_payload(dataset, 80.0)
    return render_page(PageTemplate.SUMMARY, payload, generated_at=FIXED_TIME, options=options)


def test_format_timestamp_rfc1123() -> None:
    assert format_timestamp(FIXED_TIME) == "Sun, 18 Oct 2026 12:00:00 GMT"


def test_format_timestamp_converts_to_utc() -> None:
    moment = datetime(2026, 10, 18, 14, 0, 0, tzinfo=timezone(timedelta(hours=2)))
    assert format_timestamp(moment) == "Sun, 18 Oct 2026 12:00:00 GMT"


def test_document_structure(sample_dataset: CoverageDataset) -> None:
    html = _summary_html(sample_dataset)
    assert html.startswith("<!DOCTYPE html>")
    assert html.rstrip().endswith("</html>")
    assert f"<title>{DEFAULT_TITLE}</title>" in html
    assert BASELINE_STYLESHEET in html
    assert 'class="footer-text"' in html
    assert "at Sun, 18 Oct 2026 12:00:00 GMT</p>" in html


def test_custom_title_and_assets(sample_dataset: CoverageDataset) -> None:
    html = _summary_html(
        sample_dataset,
        options=RenderOptions(title="My <project>", extra_assets_markup='<script src="x.js"></script>'),
    )
    assert "<title>My &lt;project&gt;</title>" in html
    assert '<script src="x.js"></script>' in html


def test_rendering_is_pure(sample_dataset: CoverageDataset) -> None:
    assert _summary_html(sample_dataset) == _summary_html(sample_dataset)


def test_only_footer_changes_with_time(sample_dataset: CoverageDataset) -> None:
    payload = build_summary_payload(sample_dataset, 80.0)
    first = render_page(PageTemplate.SUMMARY, payload, generated_at=FIXED_TIME)
    second = render_page(
        PageTemplate.SUMMARY, payload, generated_at=FIXED_TIME + timedelta(days=1)
    )
    diff = [
        (a, b) for a, b in zip(first.splitlines(), second.splitlines(), strict=True) if a != b
    ]
    assert len(diff) == 1
    assert 'class="footer-text"' in diff[0][0]


def test_detail_source_is_escaped() -> None:
    payload = build_detail_payload(
        "src/x.tsx",
        "const el = <div>{value}</div>;\n",
        FileCounts(total_count=1, correct_count=1),
        80.0,
        [],
    )
    html = render_page(
        PageTemplate.DETAIL,
        payload,
        generated_at=FIXED_TIME,
        options=RenderOptions(title=payload.title),
    )
    assert "<title>x.tsx</title>" in html
    assert "&lt;div&gt;{value}&lt;/div&gt;" in html
    assert "<div>{value}</div>" not in html



def test_threshold_without_trailing_zero(sample_dataset: CoverageDataset) -> None:
    html = _summary_html(sample_dataset)
    assert "<td>80%</td>" in html
    assert "80.0%" not in html


def test_summary_links_are_url_encoded() -> None:
    dataset = CoverageDataset(
        percentage=100.0,
        total=1,
        covered=1,
        uncovered=0,
        file_counts={"src/100%#1.ts": FileCounts(total_count=1, correct_count=1)},
    )
    html = _summary_html(dataset)
    assert 'href="files/src/100%25%231.ts.html"' in html
    assert ">src/100%#1.ts</a>" in html
