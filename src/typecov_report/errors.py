"""Exceptions raised while loading coverage data and writing reports."""

from __future__ import annotations

from pathlib import Path


class ReportError(Exception):
    """Base class for report generation errors."""


class ConfigurationError(ReportError):
    """Raised when the report configuration or output location is unusable."""


class DatasetError(ReportError, ValueError):
    """Raised when a coverage dataset document is malformed."""


class SourceReadError(ReportError):
    """Raised when a source file listed in the dataset cannot be read."""

    def __init__(self, file_path: str, reason: str) -> None:
        super().__init__(f"Cannot read source file {file_path}: {reason}")
        self.file_path = file_path
        self.reason = reason


class WriteError(ReportError):
    """Raised when a report file or directory cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        super().__init__(f"Cannot write {path}: {reason}")
        self.path = path
        self.reason = reason
