"""Linter: the host driver that feeds class declarations to rules.

The rules never walk a file themselves. The ``Linter`` loads each ESTree
program, enumerates its class declarations in source order, hands each
one to every enabled rule in registration order, and applies the
configured severity to whatever the rules report.

A file that cannot be loaded is recorded on its ``FileResult`` and
logged; linting continues with the next file.

The linter holds no per-file state. Each ``lint_*`` call is independent,
so separate files can be linted concurrently without coordination.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from stackguard.config import LintConfig
from stackguard.core.models import Diagnostic, FileResult, LintReport
from stackguard.estree.loader import iter_class_declarations, load_program
from stackguard.exceptions import TreeLoadError
from stackguard.rules.registry import RuleRegistry, default_registry

logger = logging.getLogger(__name__)

TREE_SUFFIX = ".json"


class Linter:
    """Runs registered rules over ESTree programs.

    Usage::

        linter = Linter()
        report = linter.lint_paths([Path("build/ast")])
        for diagnostic in report.diagnostics:
            print(f"{diagnostic.line}: {diagnostic.message}")
    """

    def __init__(
        self,
        registry: RuleRegistry | None = None,
        config: LintConfig | None = None,
    ) -> None:
        self.registry = registry if registry is not None else default_registry()
        self.config = config if config is not None else LintConfig()

    def lint_tree(self, program: dict[str, Any]) -> list[Diagnostic]:
        """Lint one raw ESTree program.

        Args:
            program: A decoded ESTree ``Program`` dictionary.

        Returns:
            Diagnostics in class source order, then rule registration order.
        """
        enabled = []
        for rule in self.registry:
            level = self.config.level_for(rule.meta.rule_id, rule.meta.recommended)
            if level is not None:
                enabled.append((rule, level))

        diagnostics: list[Diagnostic] = []
        if not enabled:
            return diagnostics

        for class_node in iter_class_declarations(program):
            for rule, level in enabled:
                diagnostic = rule.check(class_node)
                if diagnostic is not None:
                    diagnostics.append(diagnostic.with_severity(level))
        return diagnostics

    def lint_file(self, path: Path) -> FileResult:
        """Load and lint one file.

        Load failures are captured on the result instead of raised.

        Args:
            path: A JSON file holding an ESTree ``Program``.

        Returns:
            The ``FileResult`` for ``path``.
        """
        try:
            program = load_program(path)
        except TreeLoadError as exc:
            logger.warning("Skipping %s: %s", path, exc)
            return FileResult(path=path, error=str(exc))

        diagnostics = self.lint_tree(program)
        logger.debug("Linted %s: %d diagnostic(s)", path, len(diagnostics))
        return FileResult(path=path, diagnostics=diagnostics)

    def collect_files(self, paths: Iterable[Path]) -> list[Path]:
        """Expand input paths into the list of files to lint.

        Directories are searched recursively for ``*.json`` files (sorted
        for a stable order). Explicit file arguments are kept regardless
        of suffix. Both are filtered through the configured ignores.

        Args:
            paths: Files and/or directories.

        Returns:
            Files to lint, de-duplicated, in input order.
        """
        files: list[Path] = []
        seen: set[Path] = set()
        for path in paths:
            if path.is_dir():
                candidates = sorted(
                    p for p in path.rglob(f"*{TREE_SUFFIX}") if p.is_file()
                )
            else:
                candidates = [path]
            for candidate in candidates:
                relative = _relative_to(candidate, path) if path.is_dir() else candidate
                if self.config.is_ignored(relative):
                    logger.debug("Ignoring %s", candidate)
                    continue
                if candidate not in seen:
                    seen.add(candidate)
                    files.append(candidate)
        return files

    def lint_paths(self, paths: Iterable[Path]) -> LintReport:
        """Lint every file found under ``paths``.

        Args:
            paths: Files and/or directories.

        Returns:
            A ``LintReport`` with one ``FileResult`` per file, in order.
        """
        report = LintReport()
        for path in self.collect_files(paths):
            report.files.append(self.lint_file(path))
        return report


def _relative_to(path: Path, root: Path) -> Path:
    """Path of ``path`` below ``root``, so ignores match inside the tree only."""
    try:
        return path.relative_to(root)
    except ValueError:
        return path
