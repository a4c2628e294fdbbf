"""Tree-sitter based syntax tree front end for Python sources.

Python has no constant syntax, so CapWords identifiers stand in for class and
constant references. Attribute reads and method calls map onto ``send`` nodes
and instantiation ``Foo(...)`` maps onto ``send(Foo, "__init__")``.
"""

from __future__ import annotations

import logging
from typing import Any

from tree_sitter import Language, Node, Parser
from tree_sitter_python import language as get_python_language

from parse.syntax import (
    CLASS,
    CONST,
    PROGRAM,
    SUPERCLASS,
    SyntaxNode,
    const,
    generic_type,
    has_type,
    send,
)

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None

CONSTRUCTOR_NAME = "__init__"


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Python language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_python_language())
        _PARSER = Parser(lang)

    return _PARSER


def _node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="ignore")


def _is_constant_name(name: str) -> bool:
    return name[:1].isupper()


def _convert_children(node: Node | None) -> tuple[Any, ...]:
    if node is None:
        return ()
    return tuple(
        _convert(child) for child in node.named_children if child.type != "comment"
    )


def _convert_attribute(node: Node) -> Any:
    target = _convert(node.child_by_field_name("object"))
    attribute = _node_text(node.child_by_field_name("attribute"))
    if has_type(target, CONST) and _is_constant_name(attribute):
        return const(attribute, target)
    return send(target, attribute)


def _convert_call(node: Node) -> SyntaxNode:
    function_node = node.child_by_field_name("function")
    arguments = _convert_children(node.child_by_field_name("arguments"))

    if function_node is not None and function_node.type == "attribute":
        receiver = _convert(function_node.child_by_field_name("object"))
        method = _node_text(function_node.child_by_field_name("attribute"))
        return send(receiver, method, *arguments)

    if function_node is not None and function_node.type == "identifier":
        name = _node_text(function_node)
        if _is_constant_name(name):
            return send(const(name), CONSTRUCTOR_NAME, *arguments)
        return send(None, name, *arguments)

    return send(_convert(function_node), "__call__", *arguments)


def _convert_class(node: Node) -> SyntaxNode:
    name = const(_node_text(node.child_by_field_name("name")))
    bases_node = node.child_by_field_name("superclasses")
    superclass = (
        SyntaxNode(SUPERCLASS, _convert_children(bases_node))
        if bases_node is not None
        else None
    )
    body = _convert_children(node.child_by_field_name("body"))
    return SyntaxNode(CLASS, (name, superclass, *body))


def _convert(node: Node | None) -> Any:
    """Translate a Tree-sitter Python node into the generic syntax tree."""
    if node is None:
        return None
    if node.type == "class_definition":
        return _convert_class(node)
    if node.type == "call":
        return _convert_call(node)
    if node.type == "attribute":
        return _convert_attribute(node)
    if node.type == "identifier":
        name = _node_text(node)
        return const(name) if _is_constant_name(name) else name

    if node.named_child_count == 0:
        return _node_text(node)
    return SyntaxNode(generic_type(node.type), _convert_children(node))


def parse_python(source: bytes) -> SyntaxNode | None:
    """Parse Python source into a generic syntax tree.

    Returns None when Tree-sitter reports a syntax error.
    """
    tree = _get_parser().parse(source)
    root_node = tree.root_node
    if root_node.has_error:
        logger.debug("Python source contains syntax errors; skipping")
        return None
    return SyntaxNode(PROGRAM, _convert_children(root_node))


__all__ = ["CONSTRUCTOR_NAME", "parse_python"]
