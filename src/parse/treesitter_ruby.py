"""Tree-sitter based syntax tree front end for Ruby sources."""

from __future__ import annotations

import logging
from typing import Any

from tree_sitter import Language, Node, Parser
from tree_sitter_ruby import language as get_ruby_language

from parse.syntax import (
    BLOCK,
    CLASS,
    MODULE,
    PROGRAM,
    SUPERCLASS,
    SyntaxNode,
    const,
    generic_type,
    send,
)

logger = logging.getLogger(__name__)

_PARSER: Parser | None = None


def _get_parser() -> Parser:
    """Initialize and return the Tree-sitter parser with Ruby language."""
    global _PARSER
    if _PARSER is None:
        lang = Language(get_ruby_language())
        _PARSER = Parser(lang)

    return _PARSER


def _node_text(node: Node | None) -> str:
    if node is None or node.text is None:
        return ""
    return node.text.decode("utf8", errors="ignore")


def _convert_children(node: Node, skip: tuple[Node | None, ...] = ()) -> tuple[Any, ...]:
    children: list[Any] = []
    for child in node.named_children:
        if child.type == "comment" or any(
            child == skipped for skipped in skip if skipped is not None
        ):
            continue
        children.append(_convert(child))
    return tuple(children)


def _convert_scope_resolution(node: Node) -> Any:
    scope_node = node.child_by_field_name("scope")
    name_node = node.child_by_field_name("name")
    scope = _convert(scope_node) if scope_node is not None else None
    name = _node_text(name_node)

    if name_node is not None and name_node.type == "constant":
        return const(name, scope)
    # Foo::bar is a method call spelled with ::
    return send(scope, name)


def _convert_call(node: Node) -> SyntaxNode:
    receiver_node = node.child_by_field_name("receiver")
    method_node = node.child_by_field_name("method")
    arguments_node = node.child_by_field_name("arguments")
    block_node = node.child_by_field_name("block")

    receiver = _convert(receiver_node) if receiver_node is not None else None
    arguments = (
        _convert_children(arguments_node) if arguments_node is not None else ()
    )
    call = send(receiver, _node_text(method_node), *arguments)
    if block_node is None:
        return call
    # block(send, body) keeps the body out of the call's arguments
    return SyntaxNode(BLOCK, (call, _convert(block_node)))


def _convert_class(node: Node) -> SyntaxNode:
    name_node = node.child_by_field_name("name")
    superclass_node = node.child_by_field_name("superclass")

    superclass = None
    if superclass_node is not None:
        superclass = SyntaxNode(SUPERCLASS, _convert_children(superclass_node))

    name = _convert(name_node) if name_node is not None else None
    body = _convert_children(node, skip=(name_node, superclass_node))
    return SyntaxNode(CLASS, (name, superclass, *body))


def _convert_module(node: Node) -> SyntaxNode:
    name_node = node.child_by_field_name("name")
    name = _convert(name_node) if name_node is not None else None
    body = _convert_children(node, skip=(name_node,))
    return SyntaxNode(MODULE, (name, *body))


def _convert(node: Node) -> Any:
    """Translate a Tree-sitter Ruby node into the generic syntax tree."""
    if node.type == "constant":
        return const(_node_text(node))
    if node.type == "scope_resolution":
        return _convert_scope_resolution(node)
    if node.type == "call":
        return _convert_call(node)
    if node.type == "class":
        return _convert_class(node)
    if node.type == "module":
        return _convert_module(node)

    if node.named_child_count == 0:
        return _node_text(node)
    return SyntaxNode(generic_type(node.type), _convert_children(node))


def parse_ruby(source: bytes) -> SyntaxNode | None:
    """Parse Ruby source into a generic syntax tree.

    Returns None when Tree-sitter reports a syntax error.
    """
    tree = _get_parser().parse(source)
    root_node = tree.root_node
    if root_node.has_error:
        logger.debug("Ruby source contains syntax errors; skipping")
        return None
    return SyntaxNode(PROGRAM, _convert_children(root_node))


__all__ = ["parse_ruby"]
