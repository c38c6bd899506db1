"""Base interface and metadata for stackguard rules.

Every rule implements the ``Rule`` abstract base class. A rule judges one
``ClassDeclaration`` at a time and returns zero or one ``Diagnostic``;
finding the class declarations in a file is the linter's job, not the
rule's.

``RuleMeta`` mirrors the metadata block of an ESLint rule: a stable id, a
category type ("problem", "suggestion", "layout"), docs, a message table
keyed by message id, and an options schema. A rule whose schema is empty
accepts no options.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from stackguard.core.models import Diagnostic
from stackguard.estree.nodes import ClassDeclaration, SyntaxNode

_PLACEHOLDER = re.compile(r"\{\{\s*(\w+)\s*\}\}")


def format_message(template: str, data: dict[str, str]) -> str:
    """Interpolate ``{{name}}`` placeholders in a message template.

    Unknown placeholders are left in place.
    """
    return _PLACEHOLDER.sub(
        lambda m: data.get(m.group(1), m.group(0)), template
    )


@dataclass(frozen=True)
class RuleMeta:
    """Static description of a rule.

    Attributes:
        rule_id: Stable identifier used in configuration and output.
        type: "problem" for correctness rules, "suggestion" or "layout"
            otherwise. Problem rules report at error severity by default.
        description: One-line summary for ``stackguard rules``.
        category: Documentation grouping.
        recommended: Whether the rule is enabled by default.
        messages: Message templates keyed by message id.
        schema: Option schema entries; empty means the rule takes no options.
    """

    rule_id: str
    type: str
    description: str
    category: str = "Best Practices"
    recommended: bool = True
    messages: dict[str, str] = field(default_factory=dict)
    schema: tuple = ()


class Rule(ABC):
    """Abstract base class for class-declaration rules.

    Subclasses set ``meta`` and implement ``check()``. Rules must be
    stateless: the same node always yields the same result, and no state
    is carried between calls or files.
    """

    meta: RuleMeta

    @abstractmethod
    def check(self, node: ClassDeclaration) -> Diagnostic | None:
        """Judge one class declaration.

        Must not raise on unexpected tree shapes; anything unrecognized
        is treated as absent.

        Args:
            node: The class declaration to judge.

        Returns:
            A ``Diagnostic`` if the class violates the rule, else None.
        """

    def report(
        self, node: SyntaxNode, message_id: str, data: dict[str, str]
    ) -> Diagnostic:
        """Build a diagnostic for ``node`` from this rule's message table."""
        template = self.meta.messages[message_id]
        return Diagnostic(
            node=node,
            message_id=message_id,
            data=data,
            rule_id=self.meta.rule_id,
            message=format_message(template, data),
        )
