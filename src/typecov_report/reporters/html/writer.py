"""HTML report writer — renders the summary and detail pages into an output tree.

Layout of the generated report::

    <output_dir>/index.html
    <output_dir>/files/<source path>.html
    <output_dir>/assets/source-file.{css,js}   (copied by ``install_assets``)
"""

from __future__ import annotations

import asyncio
import logging
import shutil
from dataclasses import dataclass, field
from datetime import UTC, datetime
from pathlib import Path
from typing import TYPE_CHECKING

from typecov_report.errors import ConfigurationError, ReportError, SourceReadError, WriteError
from typecov_report.reporters.html.assets import (
    LOCAL_ASSET_FILES,
    SUMMARY_ASSETS,
    detail_assets,
    include_assets,
)
from typecov_report.reporters.html.detail import build_detail_payload
from typecov_report.reporters.html.page import PageTemplate, RenderOptions, render_page
from typecov_report.reporters.html.paths import (
    ASSETS_DIR,
    INDEX_FILE,
    assets_folder,
    detail_page_path,
)
from typecov_report.reporters.html.summary import build_summary_payload

if TYPE_CHECKING:
    from collections.abc import Callable

    from typecov_report.models.coverage import (
        Annotation,
        CoverageDataset,
        FileCounts,
        ReportOptions,
    )

logger = logging.getLogger(__name__)

_STATIC_DIR = Path(__file__).parent / "static"


@dataclass(frozen=True)
class PageFailure:
    """A detail page that could not be produced."""

    file_path: str
    error: ReportError

    @property
    def message(self) -> str:
        """Return a human-readable description of the failure."""
        return str(self.error)


@dataclass
class ReportResult:
    """Outcome of a report run."""

    index_path: Path
    """Absolute path of the generated ``index.html``."""

    pages: list[Path] = field(default_factory=list)
    """Detail pages written, in dataset order."""

    failures: list[PageFailure] = field(default_factory=list)
    """Files whose detail page could not be produced, in dataset order."""

    @property
    def success(self) -> bool:
        """Return True if every page was written."""
        return not self.failures


def _utc_now() -> datetime:
    return datetime.now(UTC)


def _make_dirs(directory: Path) -> None:
    try:
        directory.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise WriteError(directory, exc.strerror or str(exc)) from exc


def _write_text(path: Path, content: str) -> None:
    try:
        path.write_text(content, encoding="utf-8")
    except OSError as exc:
        raise WriteError(path, exc.strerror or str(exc)) from exc


def _read_source(path: Path, file_path: str) -> str:
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise SourceReadError(file_path, exc.strerror or str(exc)) from exc


class HTMLReportWriter:
    """Write a browsable HTML report for a coverage dataset.

    The summary page is written first; a failure there is fatal.  Detail pages
    are produced independently and their failures are collected into the
    returned ``ReportResult`` instead of aborting the run.
    """

    def __init__(
        self,
        options: ReportOptions,
        *,
        source_root: Path | None = None,
        clock: Callable[[], datetime] | None = None,
        max_concurrency: int = 1,
        title: str | None = None,
    ) -> None:
        """Initialize the writer.

        Args:
            options: Output directory and threshold.
            source_root: Directory that relative file keys are read from
                (default: the current working directory).
            clock: Returns the timestamp printed in page footers.  Read once
                per run so every page of a run carries the same value.
            max_concurrency: Number of detail pages processed at a time.
            title: Title of the summary page.
        """
        if max_concurrency < 1:
            raise ConfigurationError(f"max_concurrency must be at least 1 (got: {max_concurrency})")

        self._output_dir = Path(options.output_dir)
        self._threshold = options.threshold
        self._source_root = source_root
        self._clock = clock or _utc_now
        self._max_concurrency = max_concurrency
        self._title = title or None

    async def generate(self, dataset: CoverageDataset) -> ReportResult:
        """Write ``index.html`` and one detail page per file in ``dataset``.

        Raises:
            ConfigurationError: If the output path exists and is not a directory,
                or two file keys map to the same detail page.
            WriteError: If the output root or ``index.html`` cannot be written.
        """
        generated_at = self._clock()
        output_dir = self._ensure_output_dir()

        index_path = await self._write_index(dataset, output_dir, generated_at)

        annotations = dataset.annotations_by_file()
        semaphore = asyncio.Semaphore(self._max_concurrency)

        async def _guarded(file_path: str, counts: FileCounts) -> Path | PageFailure:
            async with semaphore:
                try:
                    return await self._write_detail(
                        output_dir,
                        file_path,
                        counts,
                        annotations.get(file_path, []),
                        generated_at,
                    )
                except ReportError as exc:
                    logger.warning("Skipping detail page for %s: %s", file_path, exc)
                    return PageFailure(file_path=file_path, error=exc)

        outcomes = await asyncio.gather(
            *(_guarded(file_path, counts) for file_path, counts in dataset.file_counts.items())
        )

        result = ReportResult(index_path=index_path.resolve())
        for outcome in outcomes:
            if isinstance(outcome, PageFailure):
                result.failures.append(outcome)
            else:
                result.pages.append(outcome)

        if result.failures:
            logger.warning(
                "%d of %d detail pages could not be generated",
                len(result.failures),
                len(outcomes),
            )

        logger.info("View generated HTML Report at %s", result.index_path)
        return result

    def _ensure_output_dir(self) -> Path:
        if self._output_dir.exists() and not self._output_dir.is_dir():
            raise ConfigurationError(f"Output path {self._output_dir} exists and is not a directory")
        _make_dirs(self._output_dir)
        return self._output_dir

    async def _write_index(
        self,
        dataset: CoverageDataset,
        output_dir: Path,
        generated_at: datetime,
    ) -> Path:
        payload = build_summary_payload(dataset, self._threshold)
        html = render_page(
            PageTemplate.SUMMARY,
            payload,
            generated_at=generated_at,
            options=RenderOptions(
                title=self._title,
                extra_assets_markup=include_assets(SUMMARY_ASSETS),
            ),
        )

        index_path = output_dir / INDEX_FILE
        await asyncio.to_thread(_write_text, index_path, html)
        logger.info("Summary page written: %d files, %.2f%%", len(payload.rows), payload.percentage)
        return index_path

    async def _write_detail(
        self,
        output_dir: Path,
        file_path: str,
        counts: FileCounts,
        annotations: list[Annotation],
        generated_at: datetime,
    ) -> Path:
        page_path = output_dir / detail_page_path(file_path)
        await asyncio.to_thread(_make_dirs, page_path.parent)

        source_path = Path(file_path)
        if self._source_root is not None:
            source_path = self._source_root / source_path
        source_code = await asyncio.to_thread(_read_source, source_path, file_path)

        payload = build_detail_payload(file_path, source_code, counts, self._threshold, annotations)
        html = render_page(
            PageTemplate.DETAIL,
            payload,
            generated_at=generated_at,
            options=RenderOptions(
                title=payload.title,
                extra_assets_markup=include_assets(detail_assets(assets_folder(file_path))),
            ),
        )

        await asyncio.to_thread(_write_text, page_path, html)
        logger.debug("Detail page written: %s", page_path)
        return page_path


def generate_report(
    dataset: CoverageDataset,
    options: ReportOptions,
    *,
    source_root: Path | None = None,
    clock: Callable[[], datetime] | None = None,
    max_concurrency: int = 1,
    title: str | None = None,
) -> ReportResult:
    """Synchronous entry point around ``HTMLReportWriter.generate``."""
    writer = HTMLReportWriter(
        options,
        source_root=source_root,
        clock=clock,
        max_concurrency=max_concurrency,
        title=title,
    )
    return asyncio.run(writer.generate(dataset))


def install_assets(output_dir: Path) -> list[Path]:
    """Copy the bundled ``source-file.css``/``source-file.js`` into ``output_dir/assets``.

    Raises:
        WriteError: If the assets folder or a file cannot be written.
    """
    target_dir = Path(output_dir) / ASSETS_DIR
    _make_dirs(target_dir)

    copied: list[Path] = []
    for name in LOCAL_ASSET_FILES:
        target = target_dir / name
        try:
            shutil.copyfile(_STATIC_DIR / name, target)
        except OSError as exc:
            raise WriteError(target, exc.strerror or str(exc)) from exc
        copied.append(target)

    logger.info("Copied %d assets to %s", len(copied), target_dir)
    return copied
