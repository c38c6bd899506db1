"""Tests for the Linter host driver.

Verifies:
    - ``lint_tree`` emits diagnostics in class source order.
    - Configured levels: ``off`` suppresses, ``warn`` downgrades.
    - Load failures are isolated per file.
    - File collection: recursion, sorting, ignores, de-duplication.
    - Repeated runs give identical results.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest

from stackguard.config import LintConfig
from stackguard.core.engine import Linter
from stackguard.core.models import Severity
from stackguard.rules.registry import RuleRegistry
from tests.estree_builders import (
    call,
    class_decl,
    constructor,
    export_named,
    expr_stmt,
    ident,
    member,
    obj,
    program,
    protection_prop,
    stack_class,
    super_forward,
    this_protection,
)

RULE_ID = "cdk-stack-termination-protection"


def _write(path: Path, data: object) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data))
    return path


@pytest.fixture
def unprotected() -> dict:
    return program(export_named(stack_class(name="AppStack", line=3)))


@pytest.fixture
def protected() -> dict:
    return program(
        stack_class(name="DataStack", ctor_body=[super_forward(obj(protection_prop()))])
    )


class TestLintTree:
    """Tests for linting a single in-memory program."""

    def test_reports_unprotected_stack(self, unprotected: dict) -> None:
        diagnostics = Linter().lint_tree(unprotected)
        assert len(diagnostics) == 1
        assert diagnostics[0].data == {"className": "AppStack"}
        assert diagnostics[0].rule_id == RULE_ID
        assert diagnostics[0].line == 3

    def test_protected_stack_clean(self, protected: dict) -> None:
        assert Linter().lint_tree(protected) == []

    def test_source_order(self) -> None:
        raw = program(
            stack_class(name="First", line=1),
            class_decl("Helper", None, [constructor([])], line=10),
            stack_class(name="Second", line=20),
        )
        names = [d.data["className"] for d in Linter().lint_tree(raw)]
        assert names == ["First", "Second"]

    def test_rule_off(self, unprotected: dict) -> None:
        config = LintConfig(rule_levels={RULE_ID: None})
        assert Linter(config=config).lint_tree(unprotected) == []

    def test_rule_warn(self, unprotected: dict) -> None:
        config = LintConfig(rule_levels={RULE_ID: Severity.WARNING})
        diagnostics = Linter(config=config).lint_tree(unprotected)
        assert [d.severity for d in diagnostics] == [Severity.WARNING]

    def test_empty_registry(self, unprotected: dict) -> None:
        assert Linter(registry=RuleRegistry()).lint_tree(unprotected) == []

    def test_idempotent(self, unprotected: dict) -> None:
        linter = Linter()
        assert linter.lint_tree(unprotected) == linter.lint_tree(unprotected)

    def test_typescript_noise_tolerated(self) -> None:
        decorated = stack_class(name="Decorated")
        decorated["decorators"] = [
            {"type": "Decorator", "expression": ident("sealed")}
        ]
        decorated["typeParameters"] = {"type": "TSTypeParameterDeclaration", "params": []}
        decorated["abstract"] = True
        diagnostics = Linter().lint_tree(program(decorated))
        assert [d.data["className"] for d in diagnostics] == ["Decorated"]


class TestLintFile:
    """Tests for linting one file from disk."""

    def test_lint_file(self, tmp_path: Path, unprotected: dict) -> None:
        path = _write(tmp_path / "app.json", unprotected)
        result = Linter().lint_file(path)
        assert result.error is None
        assert result.error_count == 1
        assert result.path == path

    def test_load_failure_captured(
        self, tmp_path: Path, caplog: pytest.LogCaptureFixture
    ) -> None:
        path = tmp_path / "broken.json"
        path.write_text("{")
        with caplog.at_level(logging.WARNING, logger="stackguard.core.engine"):
            result = Linter().lint_file(path)
        assert result.error is not None
        assert result.diagnostics == []
        assert "Skipping" in caplog.text


class TestLintPaths:
    """Tests for multi-file runs."""

    def test_bad_file_does_not_stop_others(
        self, tmp_path: Path, unprotected: dict, protected: dict
    ) -> None:
        _write(tmp_path / "a_app.json", unprotected)
        (tmp_path / "b_broken.json").write_text("not json")
        _write(tmp_path / "c_data.json", protected)

        report = Linter().lint_paths([tmp_path])
        assert [f.path.name for f in report.files] == [
            "a_app.json",
            "b_broken.json",
            "c_data.json",
        ]
        assert report.error_count == 1
        assert report.has_errors
        assert [f.path.name for f in report.failed_files] == ["b_broken.json"]

    def test_empty_directory(self, tmp_path: Path) -> None:
        report = Linter().lint_paths([tmp_path])
        assert report.files == []
        assert not report.has_errors


class TestDeepTrees:
    """Deeply nested but valid trees are isolated to their own file."""

    def test_deep_json_is_load_failure(
        self, tmp_path: Path, unprotected: dict
    ) -> None:
        depth = 3000
        nested = '{"type": "BinaryExpression", "left": ' * depth + "null" + "}" * depth
        (tmp_path / "a_deep.json").write_text(
            '{"type": "Program", "body": [{"type": "ExpressionStatement", '
            '"expression": ' + nested + "}]}"
        )
        _write(tmp_path / "b_app.json", unprotected)

        report = Linter().lint_paths([tmp_path])
        assert [f.path.name for f in report.files] == ["a_deep.json", "b_app.json"]
        assert report.files[0].diagnostics == []
        assert report.error_count == 1

    def test_long_call_chain_in_constructor(self) -> None:
        """``builder.m0().m1()...m1999();`` inside a stack constructor."""
        chain: dict = ident("builder")
        for index in range(2000):
            chain = call(member(chain, ident(f"m{index}")))
        raw = program(
            stack_class(
                name="ChainStack",
                ctor_body=[super_forward(ident("props")), expr_stmt(chain)],
            )
        )

        diagnostics = Linter().lint_tree(raw)
        assert [d.data["className"] for d in diagnostics] == ["ChainStack"]

    def test_long_chain_before_protection(self) -> None:
        chain: dict = ident("builder")
        for index in range(2000):
            chain = call(member(chain, ident(f"m{index}")))
        raw = program(
            stack_class(ctor_body=[expr_stmt(chain), this_protection()])
        )
        assert Linter().lint_tree(raw) == []


class TestCollectFiles:
    """Tests for input expansion."""

    def test_recursive_and_sorted(self, tmp_path: Path) -> None:
        _write(tmp_path / "lib" / "stack" / "b.json", program())
        _write(tmp_path / "lib" / "a.json", program())
        (tmp_path / "lib" / "notes.txt").write_text("x")
        files = Linter().collect_files([tmp_path])
        assert [f.relative_to(tmp_path).as_posix() for f in files] == [
            "lib/a.json",
            "lib/stack/b.json",
        ]

    def test_default_ignores(self, tmp_path: Path) -> None:
        _write(tmp_path / "node_modules" / "dep.json", program())
        _write(tmp_path / "cdk.out" / "tree.json", program())
        _write(tmp_path / "app.json", program())
        files = Linter().collect_files([tmp_path])
        assert [f.name for f in files] == ["app.json"]

    def test_project_config_files_ignored(self, tmp_path: Path) -> None:
        for name in ("package.json", "tsconfig.json", "tsconfig.lib.json", "cdk.json"):
            _write(tmp_path / name, {"name": "infra"})
        _write(tmp_path / "lib" / "package.json", {"name": "nested"})
        _write(tmp_path / "app.json", program())
        files = Linter().collect_files([tmp_path])
        assert [f.relative_to(tmp_path).as_posix() for f in files] == ["app.json"]

    def test_ignore_matches_below_root_only(self, tmp_path: Path) -> None:
        """A root directory that happens to be named like an ignore still lints."""
        root = tmp_path / "dist"
        _write(root / "app.json", program())
        files = Linter().collect_files([root])
        assert [f.name for f in files] == ["app.json"]

    def test_glob_ignore(self, tmp_path: Path) -> None:
        _write(tmp_path / "app.json", program())
        _write(tmp_path / "app.d.json", program())
        config = LintConfig(ignores=["*.d.json"])
        files = Linter(config=config).collect_files([tmp_path])
        assert [f.name for f in files] == ["app.json"]

    def test_explicit_file_kept(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "tree.estree", program())
        assert Linter().collect_files([path]) == [path]

    def test_duplicates_removed(self, tmp_path: Path) -> None:
        path = _write(tmp_path / "app.json", program())
        files = Linter().collect_files([path, tmp_path, path])
        assert files == [path]
