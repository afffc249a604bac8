"""Type coverage data models.

A ``CoverageDataset`` is the finished output of a type-coverage run: aggregate
counts, per-file counts and the located "any" expressions.  It is produced
upstream and only read by the reporters.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from typecov_report.errors import DatasetError

logger = logging.getLogger(__name__)

_FULL_COVERAGE = 100.0


def coverage_percentage(total_count: int, correct_count: int) -> float:
    """Return the typed percentage (0.0-100.0).

    A file without any typed expressions is vacuously fully covered.
    """
    if total_count == 0:
        return _FULL_COVERAGE
    return (correct_count / total_count) * 100.0


def passes_threshold(percentage: float, threshold: float) -> bool:
    """Return True if ``percentage`` meets the configured threshold."""
    return percentage >= threshold


@dataclass(frozen=True)
class Annotation:
    """A single expression whose type could not be determined statically.

    ``line`` and ``character`` are zero-based, as reported by the compiler.
    """

    file: str
    line: int
    character: int
    text: str

    @property
    def display_line(self) -> int:
        """Return the one-based line number shown to readers."""
        return self.line + 1


@dataclass(frozen=True)
class FileCounts:
    """Typed vs. total expression counts for one file."""

    total_count: int
    correct_count: int

    @property
    def percentage(self) -> float:
        """Return the typed percentage for this file."""
        return coverage_percentage(self.total_count, self.correct_count)


@dataclass(frozen=True)
class FileCoverageEntry:
    """A file path together with its counts."""

    path: str
    total_count: int
    correct_count: int

    @property
    def percentage(self) -> float:
        """Return the typed percentage for this file."""
        return coverage_percentage(self.total_count, self.correct_count)


@dataclass(frozen=True)
class CoverageDataset:
    """Complete type coverage statistics for a project."""

    percentage: float
    total: int
    covered: int
    uncovered: int
    file_counts: dict[str, FileCounts] = field(default_factory=dict)
    """Per-file counts. Insertion order is the report order."""

    anys: tuple[Annotation, ...] = ()
    """Located ``any`` expressions, in the order they were reported."""

    def entries(self) -> list[FileCoverageEntry]:
        """Return one entry per file, in enumeration order."""
        return [
            FileCoverageEntry(
                path=path,
                total_count=counts.total_count,
                correct_count=counts.correct_count,
            )
            for path, counts in self.file_counts.items()
        ]

    def annotations_by_file(self) -> dict[str, list[Annotation]]:
        """Group annotations by file, keeping their relative order."""
        grouped: dict[str, list[Annotation]] = {}
        for annotation in self.anys:
            grouped.setdefault(annotation.file, []).append(annotation)
        return grouped

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CoverageDataset:
        """Build a dataset from the JSON document emitted by the coverage run.

        Raises:
            DatasetError: If a required key is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise DatasetError("Coverage dataset must be a JSON object")

        try:
            file_counts_raw = data.get("fileCounts", {})
            if not isinstance(file_counts_raw, dict):
                raise DatasetError("fileCounts must be an object keyed by file path")

            file_counts = {
                str(path): FileCounts(
                    total_count=int(counts["totalCount"]),
                    correct_count=int(counts["correctCount"]),
                )
                for path, counts in file_counts_raw.items()
            }

            anys_raw = data.get("anys", [])
            if not isinstance(anys_raw, list):
                raise DatasetError("anys must be a list")

            anys = tuple(
                Annotation(
                    file=str(item["file"]),
                    line=int(item["line"]),
                    character=int(item["character"]),
                    text=str(item["text"]),
                )
                for item in anys_raw
            )

            total = int(data["total"])
            covered = int(data["covered"])
            uncovered = int(data.get("uncovered", total - covered))
            percentage = float(data.get("percentage", coverage_percentage(total, covered)))
        except DatasetError:
            raise
        except (KeyError, TypeError, ValueError) as exc:
            raise DatasetError(f"Malformed coverage dataset: {exc!r}") from exc

        return cls(
            percentage=percentage,
            total=total,
            covered=covered,
            uncovered=uncovered,
            file_counts=file_counts,
            anys=anys,
        )


@dataclass(frozen=True)
class ReportOptions:
    """Where to write the report and which threshold to style against."""

    output_dir: Path
    threshold: float = 80.0


def load_dataset(path: str | Path) -> CoverageDataset:
    """Load a coverage dataset from a JSON file.

    Raises:
        DatasetError: If the file cannot be read or parsed.
    """
    dataset_path = Path(path)
    try:
        raw = json.loads(dataset_path.read_text(encoding="utf-8"))
    except OSError as exc:
        raise DatasetError(f"Cannot read coverage dataset {dataset_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise DatasetError(f"Invalid JSON in {dataset_path}: {exc}") from exc

    dataset = CoverageDataset.from_dict(raw)
    logger.debug(
        "Loaded dataset from %s: %d files, %d anys",
        dataset_path,
        len(dataset.file_counts),
        len(dataset.anys),
    )
    return dataset
