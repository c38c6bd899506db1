"""Rule: CDK stack classes must enable termination protection.

A class that extends ``Stack`` or ``cdk.Stack`` and declares a
constructor must enable termination protection in that constructor,
in one of two recognized forms:

1. **Field assignment**::

       this.terminationProtection = true;

2. **Constructor forwarding** with an inline props object::

       super(scope, id, { ...props, terminationProtection: true });

Only top-level constructor statements are inspected. Classes without a
constructor are never reported.

Detection is shallow and syntax-only. ``super(scope, id, props)`` is
reported even when ``props`` carries the flag at runtime, and a props
object wrapped in a cast or conditional is not looked into.
"""

from __future__ import annotations

from dataclasses import dataclass

from stackguard.core.models import Diagnostic
from stackguard.estree.nodes import ClassDeclaration, MethodDefinition
from stackguard.rules.base import Rule, RuleMeta
from stackguard.rules.helpers import (
    find_constructor,
    is_base_infrastructure_superclass,
    is_super_call_with_termination_protection,
    is_termination_protection_assignment,
)

RULE_ID = "cdk-stack-termination-protection"
MISSING_TERMINATION_PROTECTION = "missingTerminationProtection"
UNKNOWN_CLASS_NAME = "Unknown"


@dataclass(frozen=True)
class ClassCandidate:
    """A stack subclass under judgement: its name and constructor, if any."""

    name: str
    constructor: MethodDefinition | None


def class_candidate(node: ClassDeclaration) -> ClassCandidate | None:
    """Build the candidate view of ``node``, or None if it is not a stack class."""
    if node.superclass is None or not is_base_infrastructure_superclass(
        node.superclass
    ):
        return None
    name = node.id.name if node.id is not None and node.id.name else UNKNOWN_CLASS_NAME
    return ClassCandidate(name=name, constructor=find_constructor(node))


def has_termination_protection(constructor: MethodDefinition) -> bool:
    """Return True if any top-level constructor statement enables the safeguard.

    A constructor without a body (an overload or declare-only signature)
    has no statements and so never enables it.
    """
    for statement in constructor.body or ():
        if is_termination_protection_assignment(statement):
            return True
        if is_super_call_with_termination_protection(statement):
            return True
    return False


class TerminationProtectionRule(Rule):
    """Reports stack classes whose constructor leaves termination protection off.

    Usage::

        rule = TerminationProtectionRule()
        for class_node in iter_class_declarations(program):
            diagnostic = rule.check(class_node)
            if diagnostic is not None:
                print(diagnostic.message)
    """

    meta = RuleMeta(
        rule_id=RULE_ID,
        type="problem",
        description="Ensure CDK Stack classes have termination protection enabled",
        category="Best Practices",
        recommended=True,
        messages={
            MISSING_TERMINATION_PROTECTION: (
                'CDK Stack "{{className}}" should have termination protection '
                'enabled. Add "terminationProtection: true" to the stack props '
                'or set "this.terminationProtection = true" in the constructor.'
            ),
        },
        schema=(),
    )

    def check(self, node: ClassDeclaration) -> Diagnostic | None:
        candidate = class_candidate(node)
        if candidate is None or candidate.constructor is None:
            return None
        if has_termination_protection(candidate.constructor):
            return None
        # Reported on the class, not the constructor.
        return self.report(
            node,
            MISSING_TERMINATION_PROTECTION,
            {"className": candidate.name},
        )
