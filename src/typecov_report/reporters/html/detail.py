"""Detail page payload — one source file with its ``any`` expressions marked inline."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field
from pathlib import PurePath
from typing import TYPE_CHECKING, Any

from typecov_report.models.coverage import passes_threshold
from typecov_report.reporters.html.paths import INDEX_FILE, root_prefix

if TYPE_CHECKING:
    from collections.abc import Sequence

    from typecov_report.models.coverage import Annotation, FileCounts

logger = logging.getLogger(__name__)

# Line terminators recognised by the TypeScript scanner
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n|\u2028|\u2029")

# Compiler offsets count UTF-16 code units; characters above this take two
_BMP_MAX = 0xFFFF


@dataclass(frozen=True)
class Segment:
    """A run of source text, either plain or inside an ``any`` expression."""

    text: str
    uncovered: bool = False
    title: str = ""


@dataclass(frozen=True)
class SourceLine:
    """One rendered source line."""

    number: int
    """One-based line number."""

    segments: list[Segment] = field(default_factory=list)

    @property
    def uncovered(self) -> bool:
        """Return True if any part of the line is marked."""
        return any(segment.uncovered for segment in self.segments)


@dataclass(frozen=True)
class DetailPayload:
    """Data rendered by the detail template."""

    filename: str
    title: str
    source_code: str
    total_count: int
    correct_count: int
    percentage: float
    threshold: float
    passed: bool
    index_href: str
    annotations: list[Annotation] = field(default_factory=list)
    lines: list[SourceLine] = field(default_factory=list)

    @property
    def uncovered_count(self) -> int:
        """Return the number of ``any`` expressions in the file."""
        return self.total_count - self.correct_count

    @property
    def annotation_data(self) -> list[dict[str, Any]]:
        """Return the annotations as plain dicts for the client-side editor."""
        return [
            {"line": a.line, "character": a.character, "text": a.text} for a in self.annotations
        ]


def split_lines(source_code: str) -> list[str]:
    """Split source text into lines the way the compiler counts them."""
    if not source_code:
        return []
    lines = _LINE_BREAK_RE.split(source_code)
    if lines and lines[-1] == "":
        lines.pop()
    return lines


def _utf16_length(text: str) -> int:
    return sum(2 if ord(char) > _BMP_MAX else 1 for char in text)


def _code_point_index(line_text: str, offset: int) -> int:
    """Convert a UTF-16 code unit offset into an index into ``line_text``.

    Offsets past the end of the line clip to its length.
    """
    units = 0
    for index, char in enumerate(line_text):
        if units >= offset:
            return index
        units += 2 if ord(char) > _BMP_MAX else 1
    return len(line_text)


def _merge_spans(spans: list[tuple[int, int, str]]) -> list[tuple[int, int, list[str]]]:
    """Merge overlapping ``(start, end, text)`` spans on one line."""
    merged: list[tuple[int, int, list[str]]] = []
    for start, end, text in sorted(spans, key=lambda span: (span[0], span[1])):
        if merged and start < merged[-1][1]:
            prev_start, prev_end, texts = merged[-1]
            merged[-1] = (prev_start, max(prev_end, end), [*texts, text])
        else:
            merged.append((start, end, [text]))
    return merged


def _segments(line_text: str, spans: list[tuple[int, int, str]]) -> list[Segment]:
    segments: list[Segment] = []
    cursor = 0
    for start, end, texts in _merge_spans(spans):
        if start > cursor:
            segments.append(Segment(text=line_text[cursor:start]))
        segments.append(Segment(text=line_text[start:end], uncovered=True, title="\n".join(texts)))
        cursor = end
    if cursor < len(line_text) or not segments:
        segments.append(Segment(text=line_text[cursor:]))
    return segments


def build_source_lines(source_code: str, annotations: Sequence[Annotation]) -> list[SourceLine]:
    """Split ``source_code`` into lines with the annotated spans marked.

    A span runs from the annotation's character for the length of its text and
    is clipped to the end of its line.  Both are measured in UTF-16 code units,
    as the compiler reports them.  Annotations outside the source are not
    marked.
    """
    lines = split_lines(source_code)
    spans_by_line: dict[int, list[tuple[int, int, str]]] = {}

    for annotation in annotations:
        if not 0 <= annotation.line < len(lines):
            logger.debug(
                "Annotation at %s:%d is outside the source (%d lines)",
                annotation.file,
                annotation.line,
                len(lines),
            )
            continue
        line_text = lines[annotation.line]
        first_unit = max(annotation.character, 0)
        start = _code_point_index(line_text, first_unit)
        end = _code_point_index(line_text, first_unit + _utf16_length(annotation.text))
        if end > start:
            spans_by_line.setdefault(annotation.line, []).append((start, end, annotation.text))

    return [
        SourceLine(number=index + 1, segments=_segments(text, spans_by_line.get(index, [])))
        for index, text in enumerate(lines)
    ]


def build_detail_payload(
    file_path: str,
    source_code: str,
    counts: FileCounts,
    threshold: float,
    annotations: Sequence[Annotation],
) -> DetailPayload:
    """Build the detail payload for one file.

    Args:
        file_path: The file key from the coverage dataset.
        source_code: Full text of the file.
        counts: The file's typed/total counts.
        threshold: Pass/fail cutoff used for styling.
        annotations: Annotations for this file, in dataset order.
    """
    own = [annotation for annotation in annotations if annotation.file == file_path]
    percentage = counts.percentage

    return DetailPayload(
        filename=file_path,
        title=PurePath(file_path).name or file_path,
        source_code=source_code,
        total_count=counts.total_count,
        correct_count=counts.correct_count,
        percentage=percentage,
        threshold=threshold,
        passed=passes_threshold(percentage, threshold),
        index_href=root_prefix(file_path) + INDEX_FILE,
        annotations=own,
        lines=build_source_lines(source_code, own),
    )
