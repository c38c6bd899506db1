"""Data models for the linter: Severity, Diagnostic, FileResult, LintReport.

These are the core data types produced by rules and the linter. They are
intentionally decoupled from the rule implementations so that downstream
modules (CLI formatters, the rule tester) can import them without pulling
in any matching logic.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import IntEnum
from pathlib import Path
from typing import Any

from stackguard.estree.nodes import SyntaxNode


# ---------------------------------------------------------------------------
# Severity: Ordered diagnostic levels
# ---------------------------------------------------------------------------


class Severity(IntEnum):
    """Diagnostic severity.

    The integer encoding matches the numeric rule levels accepted in
    configuration (1 = warn, 2 = error) and enables direct comparison:
    WARNING < ERROR.
    """

    WARNING = 1
    ERROR = 2


# ---------------------------------------------------------------------------
# Diagnostic: A single rule violation
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Diagnostic:
    """A single violation reported by a rule.

    Attributes:
        node: The node the violation is reported on.
        message_id: Key into the reporting rule's message table
            (e.g. "missingTerminationProtection").
        data: Placeholder values interpolated into the message template.
        rule_id: Identifier of the reporting rule.
        message: The interpolated, user-facing message.
        severity: ERROR by default; configuration may downgrade to WARNING.
    """

    node: SyntaxNode
    message_id: str
    data: dict[str, str] = field(default_factory=dict)
    rule_id: str = ""
    message: str = ""
    severity: Severity = Severity.ERROR

    @property
    def line(self) -> int | None:
        """1-based line of the reported node, if the tree carried locations."""
        return self.node.loc.line if self.node.loc else None

    @property
    def column(self) -> int | None:
        """0-based column of the reported node, if the tree carried locations."""
        return self.node.loc.column if self.node.loc else None

    def with_severity(self, severity: Severity) -> Diagnostic:
        """Return a copy of this diagnostic at a different severity."""
        return replace(self, severity=severity)

    def as_dict(self) -> dict[str, Any]:
        """JSON-serializable view, without the syntax node itself."""
        return {
            "rule_id": self.rule_id,
            "message_id": self.message_id,
            "message": self.message,
            "data": dict(self.data),
            "severity": self.severity.name.lower(),
            "line": self.line,
            "column": self.column,
        }


# ---------------------------------------------------------------------------
# FileResult / LintReport: Output of a linter run
# ---------------------------------------------------------------------------


@dataclass
class FileResult:
    """The result of linting one input file.

    Attributes:
        path: The linted file.
        diagnostics: Diagnostics in source order (may be empty).
        error: Load failure description, or None if the file was linted.
    """

    path: Path
    diagnostics: list[Diagnostic] = field(default_factory=list)
    error: str | None = None

    @property
    def error_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.severity == Severity.WARNING)


@dataclass
class LintReport:
    """Aggregate result of linting a set of files, in input order."""

    files: list[FileResult] = field(default_factory=list)

    @property
    def error_count(self) -> int:
        return sum(f.error_count for f in self.files)

    @property
    def warning_count(self) -> int:
        return sum(f.warning_count for f in self.files)

    @property
    def has_errors(self) -> bool:
        """True if any file has an error-severity diagnostic."""
        return self.error_count > 0

    @property
    def failed_files(self) -> list[FileResult]:
        """Files that could not be loaded as ESTree programs."""
        return [f for f in self.files if f.error is not None]

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return [d for f in self.files for d in f.diagnostics]
