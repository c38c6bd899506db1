"""Tree query helpers for the termination-protection rule.

Stateless predicates over single syntax nodes. None of them traverse a
subtree beyond the fixed shape they test, and none resolve identifiers,
expand spreads, or evaluate expressions: ``terminationProtection: enabled``
is not recognized even if ``enabled`` is ``true`` at runtime.
"""

from __future__ import annotations

from stackguard.estree.nodes import (
    AssignmentExpression,
    CallExpression,
    ClassDeclaration,
    ExpressionStatement,
    Identifier,
    Literal,
    MemberExpression,
    MethodDefinition,
    ObjectExpression,
    Property,
    Super,
    SyntaxNode,
    ThisExpression,
)

STACK_CLASS_NAME = "Stack"
CDK_NAMESPACE = "cdk"
TERMINATION_PROTECTION = "terminationProtection"

# Position of the props object in ``super(scope, id, props)``.
_PROPS_ARGUMENT_INDEX = 2


# ── Node predicates ────────────────────────────────────────────────────────

def _is_identifier_named(node: SyntaxNode | None, name: str) -> bool:
    return isinstance(node, Identifier) and node.name == name


def _is_static_member(node: SyntaxNode | None, obj: type, prop_name: str) -> bool:
    """Check for a non-computed ``<obj>.<prop_name>`` member access."""
    return (
        isinstance(node, MemberExpression)
        and not node.computed
        and isinstance(node.object, obj)
        and _is_identifier_named(node.property, prop_name)
    )


def is_base_infrastructure_superclass(superclass: SyntaxNode | None) -> bool:
    """Return True if ``superclass`` is ``Stack`` or ``cdk.Stack``.

    Only these two spellings are recognized. Other namespaces
    (``core.Stack``), computed access (``cdk['Stack']``) and call
    expressions (``mixin(Stack)``) are not.
    """
    if _is_identifier_named(superclass, STACK_CLASS_NAME):
        return True
    return (
        _is_static_member(superclass, Identifier, STACK_CLASS_NAME)
        and _is_identifier_named(superclass.object, CDK_NAMESPACE)
    )


def is_literal_true(node: SyntaxNode | None) -> bool:
    """Return True only for the boolean literal ``true``.

    Compared by identity, so ``1`` does not match. ``false``, ``null``,
    strings, and identifiers such as ``undefined`` are rejected.
    """
    return isinstance(node, Literal) and node.value is True


def object_has_termination_protection_true_property(obj: SyntaxNode | None) -> bool:
    """Check an inline object literal for ``terminationProtection: true``.

    Only direct properties with non-computed identifier keys count.
    Spread elements are skipped, never expanded.
    """
    if not isinstance(obj, ObjectExpression):
        return False
    for prop in obj.properties:
        if (
            isinstance(prop, Property)
            and not prop.computed
            and _is_identifier_named(prop.key, TERMINATION_PROTECTION)
            and is_literal_true(prop.value)
        ):
            return True
    return False


# ── Statement classifiers ──────────────────────────────────────────────────

def is_termination_protection_assignment(statement: SyntaxNode) -> bool:
    """Check for ``this.terminationProtection = true;``.

    The assignment operator is not inspected, so ``||=`` and ``??=`` with a
    literal ``true`` also count.
    """
    if not isinstance(statement, ExpressionStatement):
        return False
    expr = statement.expression
    return (
        isinstance(expr, AssignmentExpression)
        and _is_static_member(expr.left, ThisExpression, TERMINATION_PROTECTION)
        and is_literal_true(expr.right)
    )


def is_super_call_with_termination_protection(statement: SyntaxNode) -> bool:
    """Check for ``super(scope, id, { ..., terminationProtection: true });``.

    The third argument must be an inline object literal. A missing third
    argument, a variable, a cast, or a conditional expression does not
    satisfy the check.
    """
    if not isinstance(statement, ExpressionStatement):
        return False
    call = statement.expression
    if not isinstance(call, CallExpression) or not isinstance(call.callee, Super):
        return False
    if len(call.arguments) <= _PROPS_ARGUMENT_INDEX:
        return False
    return object_has_termination_protection_true_property(
        call.arguments[_PROPS_ARGUMENT_INDEX]
    )


def find_constructor(node: ClassDeclaration) -> MethodDefinition | None:
    """Return the first ``constructor`` among the class's direct members."""
    for member in node.body:
        if isinstance(member, MethodDefinition) and member.kind == "constructor":
            return member
    return None
