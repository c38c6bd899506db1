"""Rule registry.

The ``RuleRegistry`` keeps an ordered set of ``Rule`` instances keyed by
rule id. The linter runs rules in registration order, so diagnostics for
one class are always emitted in the same order.

``default_registry()`` is the functional factory that pre-registers all
built-in rules. Custom rules can be added via ``register()``.
"""

from __future__ import annotations

from collections.abc import Iterator

from stackguard.exceptions import RuleRegistryError
from stackguard.rules.base import Rule
from stackguard.rules.termination_protection import TerminationProtectionRule


class RuleRegistry:
    """Ordered registry of rules.

    Attributes:
        rules: Registered rule instances, in registration order.
    """

    def __init__(self) -> None:
        self.rules: list[Rule] = []

    def register(self, rule: Rule) -> None:
        """Add a rule to the registry.

        Args:
            rule: A ``Rule`` instance.

        Raises:
            RuleRegistryError: If a rule with the same id is already registered.
        """
        rule_id = rule.meta.rule_id
        if rule_id in self:
            raise RuleRegistryError(f"Rule already registered: {rule_id}")
        self.rules.append(rule)

    def get(self, rule_id: str) -> Rule:
        """Look up a rule by id.

        Raises:
            RuleRegistryError: If no rule has that id.
        """
        for rule in self.rules:
            if rule.meta.rule_id == rule_id:
                return rule
        raise RuleRegistryError(f"Unknown rule: {rule_id}")

    def ids(self) -> list[str]:
        return [rule.meta.rule_id for rule in self.rules]

    def __contains__(self, rule_id: object) -> bool:
        return any(rule.meta.rule_id == rule_id for rule in self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


def default_registry() -> RuleRegistry:
    """Create a RuleRegistry pre-loaded with all built-in rules.

    Returns:
        A RuleRegistry containing ``cdk-stack-termination-protection``.
    """
    registry = RuleRegistry()
    registry.register(TerminationProtectionRule())
    return registry
