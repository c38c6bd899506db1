"""Typed syntax tree model for the ESTree node kinds stackguard inspects.

The model is a closed set of frozen dataclasses, one per recognized node
kind. Every other ESTree kind (type annotations, decorators, conditional
expressions, TypeScript casts, ...) is represented by ``OpaqueNode`` so
that rules can tolerate it structurally without ever matching it.

Nodes are immutable and carry an optional ``SourceLocation``. A tree is
built once per file by ``stackguard.estree.loader`` and discarded after
that file has been linted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, ClassVar, Union


@dataclass(frozen=True)
class SourceLocation:
    """Start position of a node in the original source.

    Attributes:
        line: 1-based line number.
        column: 0-based column offset.
    """

    line: int
    column: int


# ---------------------------------------------------------------------------
# Leaf and expression nodes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Identifier:
    name: str
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "Identifier"


@dataclass(frozen=True)
class Literal:
    """A literal value. ``value`` is the JSON-decoded ESTree value.

    ``null`` decodes to ``None``; regular expression and bigint literals
    also carry ``None`` in serialized ESTree, with their text in ``raw``.
    """

    value: Any
    raw: str | None = None
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "Literal"


@dataclass(frozen=True)
class Super:
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "Super"


@dataclass(frozen=True)
class ThisExpression:
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "ThisExpression"


@dataclass(frozen=True)
class MemberExpression:
    object: SyntaxNode
    property: SyntaxNode
    computed: bool = False
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "MemberExpression"


@dataclass(frozen=True)
class CallExpression:
    callee: SyntaxNode
    arguments: tuple[SyntaxNode, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "CallExpression"


@dataclass(frozen=True)
class AssignmentExpression:
    operator: str
    left: SyntaxNode
    right: SyntaxNode
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "AssignmentExpression"


@dataclass(frozen=True)
class SpreadElement:
    argument: SyntaxNode
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "SpreadElement"


@dataclass(frozen=True)
class Property:
    key: SyntaxNode
    value: SyntaxNode
    computed: bool = False
    shorthand: bool = False
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "Property"


@dataclass(frozen=True)
class ObjectExpression:
    """An inline object literal. ``properties`` holds ``Property`` and
    ``SpreadElement`` entries in source order."""

    properties: tuple[SyntaxNode, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "ObjectExpression"


# ---------------------------------------------------------------------------
# Statements and declarations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ExpressionStatement:
    expression: SyntaxNode
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "ExpressionStatement"


@dataclass(frozen=True)
class MethodDefinition:
    """A class member method.

    Attributes:
        kind: ESTree method kind: "constructor", "method", "get" or "set".
        key: The method name node.
        body: Top-level statements of the method body, or None when the
            method has no body (TypeScript overload and declare-only
            signatures).
        computed: True for ``[expr]() {}`` keys.
        static: True for static methods.
    """

    kind: str
    key: SyntaxNode
    body: tuple[SyntaxNode, ...] | None = None
    computed: bool = False
    static: bool = False
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "MethodDefinition"


@dataclass(frozen=True)
class ClassDeclaration:
    """A class declaration.

    Attributes:
        id: The declared name, or None for ``export default class ...``.
        superclass: The ``extends`` expression, or None.
        body: Direct class members in source order.
    """

    id: Identifier | None
    superclass: SyntaxNode | None
    body: tuple[SyntaxNode, ...] = ()
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "ClassDeclaration"


@dataclass(frozen=True)
class OpaqueNode:
    """Any ESTree node kind outside the recognized set.

    ``raw_type`` keeps the raw ESTree ``type`` for diagnostics and
    debugging. No predicate ever matches an opaque node.
    """

    raw_type: str
    loc: SourceLocation | None = field(default=None, compare=False)

    type: ClassVar[str] = "Opaque"


SyntaxNode = Union[
    ClassDeclaration,
    MethodDefinition,
    ExpressionStatement,
    AssignmentExpression,
    CallExpression,
    MemberExpression,
    Identifier,
    ObjectExpression,
    Property,
    Literal,
    SpreadElement,
    Super,
    ThisExpression,
    OpaqueNode,
]
