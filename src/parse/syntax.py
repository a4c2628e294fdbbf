"""Generic syntax tree consumed by the dependency extractor.

Front ends translate parser-specific trees into ``SyntaxNode`` values whose
shapes follow a small contract:

- ``const``: ``(scope, name)`` where ``scope`` is a nested ``const`` or None
- ``send``: ``(receiver, method_name, *arguments)``
- ``class``: ``(name_const, superclass, *body)``
- ``module``: ``(name_const, *body)``

Any other tag is visited generically through its children.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

PRIMITIVE_TYPES = (str, bytes, int, float, bool)

CONST = "const"
SEND = "send"
CLASS = "class"
MODULE = "module"
SUPERCLASS = "superclass"
BLOCK = "block"
PROGRAM = "program"

# Tags the extractor gives meaning to; front ends must not emit them generically.
RESERVED_TYPES = frozenset({CONST, SEND, CLASS, MODULE, SUPERCLASS, BLOCK, PROGRAM})


class InvalidInputError(Exception):
    """Raised when a node does not honour the ``type``/``children`` contract."""


@dataclass(frozen=True)
class SyntaxNode:
    """A typed node with ordered children."""

    type: str
    children: tuple[Any, ...] = ()


def is_primitive(node: object) -> bool:
    """Return True for atomic leaf values (names, literals)."""
    return isinstance(node, PRIMITIVE_TYPES)


def node_type(node: object) -> str:
    node_tag = getattr(node, "type", None)
    if node_tag is None:
        msg = f"Syntax node {node!r} does not expose a type tag"
        raise InvalidInputError(msg)
    return str(node_tag)


def node_children(node: object) -> tuple[Any, ...]:
    """Return a node's children, failing fast on a non-sequence."""
    children = getattr(node, "children", None)
    if not isinstance(children, (list, tuple)):
        msg = (
            f"Syntax node of type {getattr(node, 'type', '?')!r} has "
            f"non-sequence children: {type(children).__name__}"
        )
        raise InvalidInputError(msg)
    return tuple(children)


def child_at(node: object, index: int) -> Any:
    children = node_children(node)
    if index >= len(children):
        return None
    return children[index]


def has_type(node: object, expected: str) -> bool:
    if node is None or is_primitive(node):
        return False
    return getattr(node, "type", None) == expected


def constant_name(node: object) -> str:
    """Return the full ``::``-joined name of a (possibly nested) const node.

    Examples:
        >>> constant_name(SyntaxNode("const", (None, "User")))
        'User'
        >>> constant_name(
        ...     SyntaxNode("const", (SyntaxNode("const", (None, "Admin")), "User"))
        ... )
        'Admin::User'
    """
    parts: list[str] = []
    current = node
    while has_type(current, CONST):
        name = child_at(current, 1)
        if name is None:
            break
        parts.append(str(name))
        current = child_at(current, 0)
    parts.reverse()
    return "::".join(parts)


def const(name: str, scope: SyntaxNode | None = None) -> SyntaxNode:
    return SyntaxNode(CONST, (scope, name))


def send(receiver: Any, method: str, *arguments: Any) -> SyntaxNode:
    return SyntaxNode(SEND, (receiver, method, *arguments))


def generic_type(tag: str) -> str:
    """Return a tag safe for a parser node without a recognised shape."""
    if tag in RESERVED_TYPES:
        return f"{tag}_node"
    return tag


__all__ = [
    "BLOCK",
    "CLASS",
    "CONST",
    "MODULE",
    "PROGRAM",
    "RESERVED_TYPES",
    "SEND",
    "SUPERCLASS",
    "InvalidInputError",
    "SyntaxNode",
    "child_at",
    "const",
    "constant_name",
    "generic_type",
    "has_type",
    "is_primitive",
    "node_children",
    "node_type",
    "send",
]
