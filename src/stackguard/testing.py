"""Valid/invalid case harness for stackguard rules.

``RuleTester`` runs a single rule over ESTree programs and checks the
outcome: each *valid* program must produce no diagnostics, and each
*invalid* program must produce exactly the listed errors, in order::

    tester = RuleTester(TerminationProtectionRule())
    tester.run(
        valid=[compliant_program],
        invalid=[
            InvalidCase(
                program=bare_super_program,
                errors=[{
                    "message_id": "missingTerminationProtection",
                    "data": {"className": "MyStack"},
                }],
            ),
        ],
    )

Error expectations only compare the keys they set. Recognized keys are
``message_id``, ``data``, ``message``, ``line`` and ``column``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from stackguard.core.models import Diagnostic
from stackguard.estree.loader import iter_class_declarations
from stackguard.rules.base import Rule

_EXPECTATION_KEYS = frozenset({"message_id", "data", "message", "line", "column"})


@dataclass
class InvalidCase:
    """A program that must produce exactly ``errors``."""

    program: dict[str, Any]
    errors: list[dict[str, Any]] = field(default_factory=list)
    name: str = ""


class RuleTester:
    """Checks a rule against valid and invalid programs."""

    def __init__(self, rule: Rule) -> None:
        self.rule = rule

    def diagnostics_for(self, program: dict[str, Any]) -> list[Diagnostic]:
        """Run the rule over every class declaration in ``program``."""
        found: list[Diagnostic] = []
        for class_node in iter_class_declarations(program):
            diagnostic = self.rule.check(class_node)
            if diagnostic is not None:
                found.append(diagnostic)
        return found

    def run(
        self,
        valid: Sequence[dict[str, Any]] = (),
        invalid: Sequence[InvalidCase] = (),
    ) -> None:
        """Check all cases.

        Raises:
            AssertionError: On the first case whose outcome differs from
                the expectation. The message names the case.
        """
        rule_id = self.rule.meta.rule_id
        for index, program in enumerate(valid):
            found = self.diagnostics_for(program)
            if found:
                raise AssertionError(
                    f"{rule_id}: valid case #{index} produced "
                    f"{len(found)} diagnostic(s): {[d.message for d in found]}"
                )

        for index, case in enumerate(invalid):
            label = f"{rule_id}: invalid case #{index}"
            if case.name:
                label = f"{label} ({case.name})"
            found = self.diagnostics_for(case.program)
            if len(found) != len(case.errors):
                raise AssertionError(
                    f"{label} expected {len(case.errors)} diagnostic(s), "
                    f"got {len(found)}"
                )
            for position, (diagnostic, expected) in enumerate(zip(found, case.errors)):
                _check_expectation(f"{label} error #{position}", diagnostic, expected)


def _check_expectation(
    label: str, diagnostic: Diagnostic, expected: dict[str, Any]
) -> None:
    unknown = set(expected) - _EXPECTATION_KEYS
    if unknown:
        raise AssertionError(f"{label}: unknown expectation keys {sorted(unknown)}")

    actual = {
        "message_id": diagnostic.message_id,
        "data": diagnostic.data,
        "message": diagnostic.message,
        "line": diagnostic.line,
        "column": diagnostic.column,
    }
    for key, value in expected.items():
        if actual[key] != value:
            raise AssertionError(
                f"{label}: expected {key}={value!r}, got {actual[key]!r}"
            )
