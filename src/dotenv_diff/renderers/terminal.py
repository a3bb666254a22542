"""Terminal renderer for dotenv-diff reports."""

from __future__ import annotations

import io
from typing import Any

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from dotenv_diff.renderers.base import BaseRenderer, OutputFormat, RenderContext

SEVERITY_STYLES = {"high": "bold red", "medium": "yellow", "low": "dim"}


def _score_style(score: int) -> str:
    if score >= 90:
        return "green"
    if score >= 70:
        return "yellow"
    return "red"


class TerminalRenderer(BaseRenderer):
    """Renderer for rich terminal output.

    Example:
        renderer = TerminalRenderer()
        renderer.render(report, context)
    """

    def __init__(self, console: Console | None = None) -> None:
        """Initialize the terminal renderer.

        Args:
            console: Rich console to use. Creates a new one if None.
        """
        self._console = console or Console()

    @property
    def format(self) -> OutputFormat:
        """The output format this renderer produces."""
        return OutputFormat.TERMINAL

    def render(self, data: Any, context: RenderContext) -> str:
        """Render data to the terminal.

        Note: This method prints to the console and returns an empty string.
        For capturing output, use Console.capture().

        Args:
            data: The data to render
            context: Rendering context

        Returns:
            Empty string (output is printed to console)
        """
        class_name = data.__class__.__name__
        if class_name == "CompareReport":
            self._render_compare_report(data, context)
        elif class_name == "ScanReport":
            self._render_scan_report(data, context)
        else:
            self._render_generic(data, context)
        return ""

    def render_to_file(self, data: Any, context: RenderContext) -> None:
        """Render data to a file.

        Captures terminal output and writes it as plain text.

        Args:
            data: The data to render
            context: Rendering context
        """
        if context.output_path is None:
            raise ValueError("output_path must be set in context for file rendering")

        file_console = Console(record=True, file=io.StringIO(), force_terminal=False, width=120)
        original_console = self._console
        self._console = file_console

        try:
            self.render(data, context)
            context.output_path.write_text(file_console.export_text(), encoding="utf-8")
        finally:
            self._console = original_console

    def _print_list(self, title: str, style: str, items: list[str]) -> None:
        if not items:
            return
        self._console.print()
        self._console.print(f"[bold {style}]{title}[/bold {style}]")
        for item in items:
            self._console.print(f"  [{style}]-[/{style}] {escape(item)}")

    def _render_health(self, score: int) -> None:
        style = _score_style(score)
        self._console.print()
        self._console.print(f"[bold]Health score:[/bold] [{style}]{score}/100[/{style}]")

    def _render_shared_warnings(self, report: Any) -> None:
        """Sections that compare and scan reports have in common."""
        if report.duplicates_env or report.duplicates_example:
            self._console.print()
            table = Table(title="Duplicate keys")
            table.add_column("File")
            table.add_column("Key", style="bold")
            table.add_column("Count", justify="right")
            env_label = getattr(report, "env", None) or getattr(report, "comparison_file", None) or "env"
            example_label = getattr(report, "example", None) or "example"
            for d in report.duplicates_env:
                table.add_row(escape(env_label), escape(d.key), str(d.count))
            for d in report.duplicates_example:
                table.add_row(escape(example_label), escape(d.key), str(d.count))
            self._console.print(table)

        if report.example_warnings:
            self._console.print()
            self._console.print("[bold red]Potential real secrets in example file[/bold red]")
            for w in report.example_warnings:
                style = SEVERITY_STYLES[w.severity.value]
                self._console.print(f"  [{style}]{w.severity.value}[/{style}] {escape(w.key)}: {escape(w.reason)}")

        if report.expire_warnings:
            self._console.print()
            self._console.print("[bold yellow]Expiring variables[/bold yellow]")
            for w in report.expire_warnings:
                if w.days_left < 0:
                    note = f"[red]expired {-w.days_left} day(s) ago[/red]"
                elif w.days_left == 0:
                    note = "[red]expires today[/red]"
                else:
                    note = f"expires in {w.days_left} day(s)"
                self._console.print(f"  [yellow]![/yellow] {escape(w.key)} ({w.date}): {note}")

        if report.inconsistent_naming_warnings:
            self._console.print()
            self._console.print("[bold yellow]Inconsistent naming[/bold yellow]")
            for w in report.inconsistent_naming_warnings:
                self._console.print(f"  [yellow]![/yellow] {escape(w.key1)} / {escape(w.key2)}: {escape(w.suggestion)}")

    def _render_compare_report(self, report: Any, context: RenderContext) -> None:
        """Render an env/example comparison."""
        self._console.print()
        self._console.print(
            Panel(
                f"[bold]Env:[/bold] {escape(report.env)}\n"
                f"[bold]Example:[/bold] {escape(report.example)}",
                title="dotenv-diff compare",
            )
        )

        if report.ok and not (
            report.example_warnings or report.expire_warnings or report.inconsistent_naming_warnings
        ):
            self._console.print()
            self._console.print("[green]All keys match.[/green]")

        self._print_list("Missing keys", "red", report.missing)
        self._print_list("Extra keys", "yellow", report.extra)
        self._print_list("Empty values", "yellow", report.empty)

        if report.value_mismatches:
            self._console.print()
            table = Table(title="Value mismatches")
            table.add_column("Key", style="bold")
            table.add_column("Expected", max_width=40)
            table.add_column("Actual", max_width=40)
            for m in report.value_mismatches:
                table.add_row(escape(m.key), escape(m.expected), escape(m.actual))
            self._console.print(table)

        self._render_shared_warnings(report)

        if report.stats and context.verbose:
            self._console.print()
            table = Table(title="Stats", show_header=False)
            table.add_column("Metric", style="bold")
            table.add_column("Count", justify="right")
            table.add_row("Keys in env", str(report.stats.env_count))
            table.add_row("Keys in example", str(report.stats.example_count))
            table.add_row("Shared keys", str(report.stats.shared_count))
            table.add_row("Duplicate lines", str(report.stats.duplicate_count))
            table.add_row("Value mismatches", str(report.stats.value_mismatch_count))
            self._console.print(table)

        self._render_health(report.health_score)

    def _render_scan_report(self, report: Any, context: RenderContext) -> None:
        """Render a codebase scan."""
        self._console.print()
        compared = escape(report.comparison_file) if report.comparison_file else "[dim]no env file[/dim]"
        self._console.print(
            Panel(
                f"[bold]Compared with:[/bold] {compared}\n"
                f"[bold]Framework:[/bold] {report.framework.value}\n"
                f"[bold]Files scanned:[/bold] {report.stats.files_scanned}",
                title="dotenv-diff scan",
            )
        )

        self._print_list("Missing in env file", "red", report.missing)
        if context.show_unused:
            self._print_list("Unused variables", "yellow", report.unused)

        if report.secrets:
            self._console.print()
            table = Table(title="Potential secrets")
            table.add_column("Severity")
            table.add_column("Location")
            table.add_column("Finding")
            table.add_column("Snippet", max_width=50, style="dim")
            for s in report.secrets:
                style = SEVERITY_STYLES[s.severity.value]
                table.add_row(
                    f"[{style}]{s.severity.value}[/{style}]",
                    escape(f"{s.file}:{s.line}"),
                    escape(s.message),
                    escape(s.snippet),
                )
            self._console.print(table)

        if report.logged:
            self._console.print()
            self._console.print("[bold red]Variables written to console[/bold red]")
            for u in report.logged:
                self._console.print(f"  [red]![/red] {escape(u.variable)} at {escape(u.file)}:{u.line}")

        self._print_list(
            "Keys not in UPPER_SNAKE_CASE",
            "yellow",
            [f"{w.key} -> {w.suggestion}" for w in report.uppercase_warnings],
        )

        warnings = [*report.framework_warnings, *report.t3env_warnings]
        if warnings:
            self._console.print()
            table = Table(title="Framework warnings")
            table.add_column("Variable", style="bold")
            table.add_column("Location")
            table.add_column("Reason")
            for w in warnings:
                table.add_row(escape(w.variable), escape(f"{w.file}:{w.line}"), escape(w.reason))
            self._console.print(table)

        self._render_shared_warnings(report)

        if not report.has_csp and report.stats.files_scanned:
            self._console.print()
            self._console.print("[dim]No Content-Security-Policy found in scanned files.[/dim]")

        if context.verbose:
            self._console.print()
            table = Table(title="Usages")
            table.add_column("Variable", style="bold")
            table.add_column("Location")
            table.add_column("Pattern", style="dim")
            for u in report.used:
                table.add_row(u.variable, escape(f"{u.file}:{u.line}:{u.column}"), u.pattern.value)
            self._console.print(table)

            self._console.print()
            self._console.print(
                f"[dim]{report.stats.total_usages} usages of "
                f"{report.stats.unique_variables} variables, "
                f"{report.stats.warnings_count} warnings in "
                f"{report.stats.duration:.2f}s[/dim]"
            )

        self._render_health(report.health_score)

    def _render_generic(self, data: Any, context: RenderContext) -> None:
        """Render generic data."""
        import json

        from pydantic import BaseModel

        if isinstance(data, BaseModel):
            dict_data = data.model_dump(mode="json")
        elif isinstance(data, dict):
            dict_data = data
        else:
            self._console.print(str(data))
            return

        json_str = json.dumps(dict_data, indent=2, default=str)
        self._console.print(json_str)
