"""Terminal reporter with rich output formatting."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

if TYPE_CHECKING:
    from typecov_report.models.coverage import CoverageDataset
    from typecov_report.reporters.html.writer import PageFailure

console = Console()

# Display limits for truncation
_MAX_FILE_PATH_LENGTH = 60
_MAX_FAILURES_DISPLAY = 20


class CLIReporter:
    """Rich terminal output for report generation."""

    def __init__(self) -> None:
        """Initialize the CLI reporter."""
        self.console = console

    def print_header(self, title: str) -> None:
        """Print a bold header."""
        self.console.print(f"\n[bold cyan]{title}[/bold cyan]\n")

    def print_success(self, message: str) -> None:
        """Print a success message."""
        self.console.print(f"[green]✓[/green] {message}")

    def print_error(self, message: str) -> None:
        """Print an error message."""
        self.console.print(f"[red]✗[/red] {message}")

    def print_warning(self, message: str) -> None:
        """Print a warning message."""
        self.console.print(f"[yellow]⚠[/yellow] {message}")

    def print_info(self, message: str) -> None:
        """Print an info message."""
        self.console.print(f"[dim]{message}[/dim]")

    def print_coverage_summary(self, dataset: CoverageDataset, threshold: float) -> None:
        """Print per-file and overall type coverage as a table."""
        table = Table(title="Type Coverage Summary", title_style="bold cyan")
        table.add_column("Filename", style="bold")
        table.add_column("Percent", justify="right")
        table.add_column("Total", justify="right")
        table.add_column("Covered", justify="right")
        table.add_column("Uncovered", justify="right")

        for entry in dataset.entries():
            color = self._get_coverage_color(entry.percentage, threshold)
            table.add_row(
                self._shorten(self._strip_workdir(entry.path)),
                f"[{color}]{entry.percentage:.2f}%[/{color}]",
                str(entry.total_count),
                str(entry.correct_count),
                str(entry.total_count - entry.correct_count),
            )

        color = self._get_coverage_color(dataset.percentage, threshold)
        table.add_section()
        table.add_row(
            "[bold]Overall[/bold]",
            f"[bold {color}]{dataset.percentage:.2f}%[/bold {color}]",
            str(dataset.total),
            str(dataset.covered),
            str(dataset.uncovered),
        )

        self.console.print(table)
        self.console.print(f"[dim]Threshold: {threshold:g}%[/dim]")

    def print_failures(self, failures: list[PageFailure]) -> None:
        """Print the files whose detail page could not be generated."""
        if not failures:
            return

        self.print_warning(f"{len(failures)} detail page(s) could not be generated:")
        for failure in failures[:_MAX_FAILURES_DISPLAY]:
            self.console.print(f"  [red]•[/red] {failure.message}")
        if len(failures) > _MAX_FAILURES_DISPLAY:
            self.console.print(f"  [dim]... and {len(failures) - _MAX_FAILURES_DISPLAY} more[/dim]")

    def _get_coverage_color(self, percentage: float, threshold: float) -> str:
        """Get a color for a percentage relative to the threshold."""
        warning_margin = 10.0

        if percentage >= threshold:
            return "green"
        if percentage >= threshold - warning_margin:
            return "yellow"
        return "red"

    def _shorten(self, file_path: str) -> str:
        if len(file_path) > _MAX_FILE_PATH_LENGTH:
            return "..." + file_path[-(_MAX_FILE_PATH_LENGTH - 3) :]
        return file_path

    def _strip_workdir(self, file_path: str) -> str:
        """Strip the current working directory from file path for cleaner display.

        Args:
            file_path: Full or relative file path.

        Returns:
            Path relative to current working directory.
        """
        cwd = Path.cwd()
        try:
            return str(Path(file_path).relative_to(cwd))
        except ValueError:
            return file_path


# Singleton instance for easy import
reporter = CLIReporter()
