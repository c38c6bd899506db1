"""Rich output formatting helpers for the stackguard CLI.

Text output follows the familiar "stylish" lint layout: one header line
per file with problems, one indented line per diagnostic, and a summary.

Severity Color Mapping:
    ERROR = bold red, WARNING = yellow
"""

from __future__ import annotations

from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from stackguard.core.models import Diagnostic, FileResult, LintReport, Severity
from stackguard.rules.registry import RuleRegistry

_SEVERITY_STYLES: dict[Severity, str] = {
    Severity.ERROR: "bold red",
    Severity.WARNING: "yellow",
}

_SEVERITY_LABELS: dict[Severity, str] = {
    Severity.ERROR: "error",
    Severity.WARNING: "warning",
}

console = Console()


def severity_style(severity: Severity) -> str:
    """Return the Rich style string for a given severity level."""
    return _SEVERITY_STYLES.get(severity, "white")


def _location(diagnostic: Diagnostic) -> str:
    if diagnostic.line is None:
        return "-"
    return f"{diagnostic.line}:{diagnostic.column or 0}"


def _print_file(result: FileResult) -> None:
    console.print(Text(str(result.path), style="underline"), soft_wrap=True)
    if result.error is not None:
        console.print(
            Text.assemble(("  ", ""), ("load error", "bold red"), ("  ", ""), result.error),
            soft_wrap=True,
        )
    for diagnostic in result.diagnostics:
        label = _SEVERITY_LABELS[diagnostic.severity]
        line = Text.assemble(
            ("  ", ""),
            (f"{_location(diagnostic):<8}", "dim"),
            (f"{label:<9}", severity_style(diagnostic.severity)),
            diagnostic.message,
            ("  ", ""),
            (diagnostic.rule_id, "dim"),
        )
        console.print(line, soft_wrap=True)
    console.print("")


def print_report(report: LintReport) -> None:
    """Print every file with problems, then a one-line summary.

    Args:
        report: The linter's report.
    """
    for result in report.files:
        if result.diagnostics or result.error is not None:
            _print_file(result)
    _print_summary(report)


def _print_summary(report: LintReport) -> None:
    """Print a one-line summary after the per-file listing."""
    errors = report.error_count
    warnings = report.warning_count
    parts = [f"[bold]{len(report.files)}[/bold] file(s) linted"]
    if errors == 0 and warnings == 0:
        parts.append("[green]no problems[/green]")
    if errors:
        parts.append(f"[red]{errors} error(s)[/red]")
    if warnings:
        parts.append(f"[yellow]{warnings} warning(s)[/yellow]")
    failed = len(report.failed_files)
    if failed:
        parts.append(f"[red]{failed} file(s) failed to load[/red]")
    console.print(" | ".join(parts), soft_wrap=True)


def report_to_json(report: LintReport) -> list[dict[str, Any]]:
    """Convert a lint report to JSON-serializable dicts, one per file."""
    return [
        {
            "path": str(result.path),
            "error": result.error,
            "error_count": result.error_count,
            "warning_count": result.warning_count,
            "diagnostics": [d.as_dict() for d in result.diagnostics],
        }
        for result in report.files
    ]


def print_rules(registry: RuleRegistry) -> None:
    """Print a table of registered rules.

    Args:
        registry: The rules to list.
    """
    table = Table(title="stackguard rules", show_header=True, header_style="bold")
    table.add_column("Rule", style="bold", no_wrap=True)
    table.add_column("Type", no_wrap=True)
    table.add_column("Recommended", justify="center")
    table.add_column("Description")
    for rule in registry:
        meta = rule.meta
        table.add_row(
            meta.rule_id,
            meta.type,
            Text("yes", style="green") if meta.recommended else Text("no", style="dim"),
            meta.description,
        )
    console.print(table)
