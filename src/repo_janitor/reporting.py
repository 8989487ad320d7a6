"""Console rendering of cleanup progress and results."""

from typing import List

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from repo_janitor.models.cleanup import BatchReport, CleanupResult

DONE_MARKER = "[DONE]"
ERROR_MARKER = "[ERROR]"


class ConsoleReporter:
    """
    Prints cleanup progress and the final report.

    Progress lines are single lines and may be printed as repositories
    finish. Failure diagnostics span many lines, so they are only printed
    by print_report once every repository is done.
    """

    def __init__(self, console: Console):
        self.console = console

    def print_progress(self, result: CleanupResult) -> None:
        """Print the one-line marker for a finished repository."""
        path = escape(str(result.repository_path))

        if result.succeeded:
            self.console.print(f"[green]{escape(DONE_MARKER)}[/green] {path}", highlight=False, soft_wrap=True)
        else:
            self.console.print(f"[red]{escape(ERROR_MARKER)}[/red] {path}", highlight=False, soft_wrap=True)

    def print_repositories(self, paths: List) -> None:
        """Print discovered repositories, one per line."""
        for path in paths:
            self.console.print(escape(str(path)), highlight=False, soft_wrap=True)

    def print_failures(self, report: BatchReport) -> None:
        """Print the buffered diagnostics of every failed repository."""
        for result in report.failures:
            self.console.print()
            self.console.print(
                f"[bold red]{escape(ERROR_MARKER)}[/bold red] {escape(str(result.repository_path))}",
                highlight=False,
                soft_wrap=True,
            )

            if result.failed_step:
                self.console.print(f"[bold]Step:[/bold]  {result.failed_step.value}")

            self.console.print(f"[bold]Error:[/bold] {escape(result.error or '')}", highlight=False, soft_wrap=True)

            if result.output:
                output = result.output if result.output.endswith("\n") else result.output + "\n"
                self.console.out(output, highlight=False, end="")

    def print_summary(self, report: BatchReport) -> None:
        """Print a summary table of the run."""
        table = Table(title="Repository Cleanup")
        table.add_column("Repository", style="cyan")
        table.add_column("Status")
        table.add_column("Branch")
        table.add_column("Deleted", justify="right")

        for result in report.results:
            status = "[green]done[/green]" if result.succeeded else "[red]error[/red]"
            table.add_row(
                escape(str(result.repository_path)),
                status,
                result.primary_branch or "-",
                str(len(result.deleted_branches)),
            )

        self.console.print()
        self.console.print(table)

    def print_report(self, report: BatchReport, verbose: bool = False) -> None:
        """Print failure diagnostics, then the summary."""
        self.print_failures(report)

        if verbose:
            self.print_summary(report)

        self.console.print()
        self.console.print(
            f"{report.repositories_found} repositories, "
            f"{report.successful} cleaned, {report.failed} failed",
            highlight=False,
        )
