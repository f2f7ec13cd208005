"""Console output for the CLI.

Wraps rich so every command formats results the same way.
"""

from typing import Any

from rich.console import Console as RichConsole
from rich.table import Table

from contentmod.domain.moderation.model.value import ModerationResult, ModerationRun


class Console:
    """CLI output manager wrapping rich."""

    def __init__(self, *, force_terminal: bool | None = None, quiet: bool = False) -> None:
        self._console = RichConsole(force_terminal=force_terminal, stderr=False)
        self._err_console = RichConsole(force_terminal=force_terminal, stderr=True)
        self._quiet = quiet

    def success(self, message: str) -> None:
        self._console.print(f"[green]✓[/green] {message}")

    def error(self, message: str, *, hint: str | None = None) -> None:
        """Print an error message to stderr."""
        self._err_console.print(f"[red]✗[/red] {message}")
        if hint:
            self._err_console.print(f"  [dim]{hint}[/dim]")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]⚠[/yellow] {message}")

    def info(self, message: str) -> None:
        """Print an info message (suppressed in quiet mode)."""
        if not self._quiet:
            self._console.print(f"[dim]{message}[/dim]")

    def print(self, *args: Any, **kwargs: Any) -> None:
        self._console.print(*args, **kwargs)

    def moderation_result(self, result: ModerationResult, *, title: str | None = None) -> None:
        """Print a result as a per-category table followed by the verdict."""
        table = Table(title=title, show_header=True, header_style="bold")
        table.add_column("Category")
        table.add_column("Hit")
        table.add_column("Score", justify="right")

        for category in sorted(set(result.categories) | set(result.category_scores)):
            hit = result.categories.get(category, False)
            score = result.category_scores.get(category, 0.0)
            table.add_row(category, "[red]yes[/red]" if hit else "no", f"{score:.3f}")

        self._console.print(table)

        verdict = "[red]flagged[/red]" if result.flagged else "[green]approved[/green]"
        self._console.print(
            f"{verdict}  score={result.score:.3f}  provider={result.provider}"
            + (f"  reason={result.reason}" if result.reason else "")
        )

    def moderation_run(self, run: ModerationRun) -> None:
        if run.status is None:
            self.info(f"{run.path}: already processed, skipped")
            return
        if run.result is None:
            self.warning(f"{run.path}: {run.status.value}")
            return
        self.moderation_result(run.result, title=run.path)
        if run.outcome is not None:
            self.success(f"Action applied: {run.outcome.action.value}")
