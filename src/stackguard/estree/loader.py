"""ESTree JSON loading, conversion and class-declaration traversal.

Input trees are the JSON form of an ESTree ``Program`` as emitted by
``@typescript-eslint/typescript-estree``, ``espree``, ``acorn`` or
``esprima``. Parsing the original TypeScript/JavaScript source is the
job of those upstream tools; this module only consumes their output.

Conversion is lenient by construction: missing or malformed children
become ``None`` or ``OpaqueNode`` instead of raising, so a rule that is
handed an odd tree sees "nothing recognizable" rather than crashing the
traversal for the rest of the file.
"""

from __future__ import annotations

import json
from collections.abc import Iterator
from pathlib import Path
from typing import Any

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
    OpaqueNode,
    Property,
    SourceLocation,
    SpreadElement,
    Super,
    SyntaxNode,
    ThisExpression,
)
from stackguard.exceptions import TreeLoadError

# Keys that hold metadata or back-references rather than child nodes.
_NON_CHILD_KEYS = frozenset({"loc", "range", "parent", "tokens", "comments"})

# Nodes nested deeper than this below the converted root become opaque.
MAX_CONVERSION_DEPTH = 48


# ── File loading ───────────────────────────────────────────────────────────

def load_program(path: Path) -> dict[str, Any]:
    """Read an ESTree ``Program`` from a JSON file.

    Args:
        path: Path to a UTF-8 JSON file.

    Returns:
        The raw root node dictionary.

    Raises:
        TreeLoadError: If the file cannot be read, is not valid JSON, or
            its root is not a ``Program`` node.
    """
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise TreeLoadError(f"Cannot read {path}: {exc}") from exc

    try:
        raw = json.loads(text)
    except json.JSONDecodeError as exc:
        raise TreeLoadError(f"Invalid JSON in {path}: {exc}") from exc
    except RecursionError as exc:
        raise TreeLoadError(f"JSON nesting too deep in {path}") from exc

    if not isinstance(raw, dict) or raw.get("type") != "Program":
        raise TreeLoadError(f"{path} does not contain an ESTree Program")
    return raw


# ── Conversion ─────────────────────────────────────────────────────────────

def _loc(raw: dict[str, Any]) -> SourceLocation | None:
    """Extract ``loc.start`` as a SourceLocation, if present and well-formed."""
    loc = raw.get("loc")
    if not isinstance(loc, dict):
        return None
    start = loc.get("start")
    if not isinstance(start, dict):
        return None
    line = start.get("line")
    column = start.get("column")
    if not isinstance(line, int) or not isinstance(column, int):
        return None
    return SourceLocation(line=line, column=column)


def _child(raw: dict[str, Any], key: str, depth: int) -> SyntaxNode | None:
    value = raw.get(key)
    if isinstance(value, dict):
        return from_estree(value, depth + 1)
    return None


def _required_child(raw: dict[str, Any], key: str, depth: int) -> SyntaxNode:
    """Convert a child that the ESTree grammar says is always present.

    A missing child becomes an ``OpaqueNode`` tagged ``Missing`` so the
    containing node can still be built.
    """
    node = _child(raw, key, depth)
    if node is None:
        return OpaqueNode(raw_type="Missing", loc=_loc(raw))
    return node


def _children(raw: dict[str, Any], key: str, depth: int) -> tuple[SyntaxNode, ...]:
    value = raw.get(key)
    if not isinstance(value, list):
        return ()
    # Array holes (``[a, , b]``) serialize as null.
    return tuple(
        from_estree(item, depth + 1) for item in value if isinstance(item, dict)
    )


def _method_body(raw: dict[str, Any], depth: int) -> tuple[SyntaxNode, ...] | None:
    """Return the top-level statements of a method's function body.

    TypeScript overloads and ``declare`` members have a
    ``TSEmptyBodyFunctionExpression`` value whose ``body`` is null.
    """
    value = raw.get("value")
    if not isinstance(value, dict):
        return None
    body = value.get("body")
    if not isinstance(body, dict) or body.get("type") != "BlockStatement":
        return None
    return _children(body, "body", depth)


def _class_members(raw: dict[str, Any], depth: int) -> tuple[SyntaxNode, ...]:
    body = raw.get("body")
    if not isinstance(body, dict):
        return ()
    return _children(body, "body", depth)


def _identifier_or_none(raw: dict[str, Any], key: str, depth: int) -> Identifier | None:
    node = _child(raw, key, depth)
    return node if isinstance(node, Identifier) else None


def from_estree(raw: dict[str, Any], depth: int = 0) -> SyntaxNode:
    """Convert one raw ESTree node (and its relevant children) to the typed model.

    Only the recognized kinds are converted structurally. Everything else
    becomes an ``OpaqueNode`` whose children are not visited, as does any
    node nested more than ``MAX_CONVERSION_DEPTH`` levels below ``raw``.

    Args:
        raw: A decoded ESTree node dictionary.
        depth: Nesting level of ``raw`` in the current conversion.

    Returns:
        The typed node.
    """
    node_type = raw.get("type")
    loc = _loc(raw)

    if depth > MAX_CONVERSION_DEPTH:
        return OpaqueNode(
            raw_type=node_type if isinstance(node_type, str) else "Unknown",
            loc=loc,
        )

    if node_type == "Identifier":
        name = raw.get("name")
        return Identifier(name=name if isinstance(name, str) else "", loc=loc)

    if node_type == "Literal":
        raw_text = raw.get("raw")
        return Literal(
            value=raw.get("value"),
            raw=raw_text if isinstance(raw_text, str) else None,
            loc=loc,
        )

    if node_type == "Super":
        return Super(loc=loc)

    if node_type == "ThisExpression":
        return ThisExpression(loc=loc)

    if node_type == "MemberExpression":
        return MemberExpression(
            object=_required_child(raw, "object", depth),
            property=_required_child(raw, "property", depth),
            computed=bool(raw.get("computed", False)),
            loc=loc,
        )

    if node_type == "CallExpression":
        return CallExpression(
            callee=_required_child(raw, "callee", depth),
            arguments=_children(raw, "arguments", depth),
            loc=loc,
        )

    if node_type == "AssignmentExpression":
        operator = raw.get("operator")
        return AssignmentExpression(
            operator=operator if isinstance(operator, str) else "",
            left=_required_child(raw, "left", depth),
            right=_required_child(raw, "right", depth),
            loc=loc,
        )

    if node_type == "SpreadElement":
        return SpreadElement(argument=_required_child(raw, "argument", depth), loc=loc)

    if node_type == "Property":
        return Property(
            key=_required_child(raw, "key", depth),
            value=_required_child(raw, "value", depth),
            computed=bool(raw.get("computed", False)),
            shorthand=bool(raw.get("shorthand", False)),
            loc=loc,
        )

    if node_type == "ObjectExpression":
        return ObjectExpression(properties=_children(raw, "properties", depth), loc=loc)

    if node_type == "ExpressionStatement":
        return ExpressionStatement(
            expression=_required_child(raw, "expression", depth), loc=loc
        )

    if node_type == "MethodDefinition":
        kind = raw.get("kind")
        return MethodDefinition(
            kind=kind if isinstance(kind, str) else "",
            key=_required_child(raw, "key", depth),
            body=_method_body(raw, depth),
            computed=bool(raw.get("computed", False)),
            static=bool(raw.get("static", False)),
            loc=loc,
        )

    if node_type == "ClassDeclaration":
        return ClassDeclaration(
            id=_identifier_or_none(raw, "id", depth),
            superclass=_child(raw, "superClass", depth),
            body=_class_members(raw, depth),
            loc=loc,
        )

    return OpaqueNode(
        raw_type=node_type if isinstance(node_type, str) else "Unknown",
        loc=loc,
    )


# ── Traversal ──────────────────────────────────────────────────────────────

def _walk(raw: Any) -> Iterator[dict[str, Any]]:
    """Pre-order walk over every node dictionary in a raw ESTree tree."""
    stack: list[Any] = [raw]
    while stack:
        current = stack.pop()
        if isinstance(current, list):
            stack.extend(reversed(current))
            continue
        if not isinstance(current, dict):
            continue
        if "type" in current:
            yield current
        children = [
            value
            for key, value in current.items()
            if key not in _NON_CHILD_KEYS and isinstance(value, (dict, list))
        ]
        stack.extend(reversed(children))


def iter_class_declarations(program: dict[str, Any]) -> Iterator[ClassDeclaration]:
    """Yield every ``ClassDeclaration`` in a raw program, in source order.

    Nested declarations (inside functions, namespaces or other classes)
    and exported declarations are included. Class *expressions* are not
    declarations and are skipped.

    Args:
        program: A raw ESTree ``Program`` dictionary.

    Yields:
        Typed ``ClassDeclaration`` nodes.
    """
    for raw in _walk(program):
        if raw.get("type") == "ClassDeclaration":
            node = from_estree(raw)
            if isinstance(node, ClassDeclaration):
                yield node
