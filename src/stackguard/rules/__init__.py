"""Lint rules over ESTree class declarations.

Submodules
----------
- ``base``: The ``Rule`` interface, ``RuleMeta`` and message interpolation.
- ``helpers``: Tree query predicates for termination-protection detection.
- ``termination_protection``: The ``cdk-stack-termination-protection`` rule.
- ``registry``: The ordered rule registry and ``default_registry()``.

Usage::

    from stackguard.rules import TerminationProtectionRule

    diagnostic = TerminationProtectionRule().check(class_node)
"""

from stackguard.rules.base import Rule, RuleMeta, format_message
from stackguard.rules.registry import RuleRegistry, default_registry
from stackguard.rules.termination_protection import TerminationProtectionRule

__all__ = [
    "Rule",
    "RuleMeta",
    "RuleRegistry",
    "TerminationProtectionRule",
    "default_registry",
    "format_message",
]
