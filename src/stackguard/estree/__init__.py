"""Typed ESTree syntax tree model and JSON loader.

Submodules
----------
- ``nodes``: The closed set of recognized node kinds (frozen dataclasses).
- ``loader``: JSON loading, raw-to-typed conversion, class traversal.

Usage::

    from stackguard.estree import iter_class_declarations, load_program

    program = load_program(Path("stack.estree.json"))
    for class_node in iter_class_declarations(program):
        print(class_node.id.name if class_node.id else "<anonymous>")
"""

from stackguard.estree.loader import from_estree, iter_class_declarations, load_program
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

__all__ = [
    "AssignmentExpression",
    "CallExpression",
    "ClassDeclaration",
    "ExpressionStatement",
    "Identifier",
    "Literal",
    "MemberExpression",
    "MethodDefinition",
    "ObjectExpression",
    "OpaqueNode",
    "Property",
    "SourceLocation",
    "SpreadElement",
    "Super",
    "SyntaxNode",
    "ThisExpression",
    "from_estree",
    "iter_class_declarations",
    "load_program",
]
