"""Dependency extraction over generic syntax trees."""

from __future__ import annotations

import logging
from typing import Any

from parse.accumulator import (
    DependencyAccumulator,
    DependencyFact,
    DependencyMap,
    Reference,
)
from parse.dispatch import NodeDispatcher, flatten_fragments
from parse.syntax import (
    CLASS,
    CONST,
    MODULE,
    SEND,
    child_at,
    constant_name,
    has_type,
    node_children,
)

logger = logging.getLogger(__name__)

SCOPE_SEPARATOR = "::"


def _visit_const(node: Any) -> Reference | list[Any]:
    scope = child_at(node, 0)
    name = child_at(node, 1)
    if name is None:
        return []
    scope_name = constant_name(scope)
    if scope_name:
        # Outer::INNER is a member access on Outer
        return Reference(scope_name, str(name))
    return Reference(str(name))


def _is_direct_constant_call(receiver: Any) -> bool:
    return has_type(receiver, CONST)


def _is_chained_constant_call(receiver: Any) -> bool:
    return has_type(receiver, SEND) and has_type(child_at(receiver, 0), CONST)


class _ExtractionWalk:
    """State for one extraction: dispatcher, scope stack and accumulator."""

    def __init__(self) -> None:
        self.accumulator = DependencyAccumulator()
        self.scope_stack: list[str] = []
        self.dispatcher = NodeDispatcher()
        self.dispatcher.register(CONST, _visit_const)
        self.dispatcher.register(SEND, self._visit_send)
        self.dispatcher.register(CLASS, self._visit_definition)
        self.dispatcher.register(MODULE, self._visit_definition)

    def _visit_send(self, node: Any) -> Any:
        receiver = child_at(node, 0)
        method_name = child_at(node, 1)

        if _is_direct_constant_call(receiver):
            target = constant_name(receiver)
            if target and method_name is not None:
                return Reference(target, str(method_name))

        if _is_chained_constant_call(receiver):
            # Const.first.second records only the first link of the chain.
            target = constant_name(child_at(receiver, 0))
            first_link = child_at(receiver, 1)
            if target and first_link is not None:
                return Reference(target, str(first_link))

        return self.dispatcher.visit_children(node)

    def _visit_definition(self, node: Any) -> list[Any]:
        name_node = child_at(node, 0)
        name = constant_name(name_node)
        body = node_children(node)[1:]

        if not name:
            # no owner to attribute to: the enclosing scope collects everything
            fragments: list[Any] = []
            for child in node_children(node):
                fragments.extend(flatten_fragments(self.dispatcher.dispatch(child)))
            return fragments

        self.scope_stack.append(name)
        owner = SCOPE_SEPARATOR.join(self.scope_stack)
        self.accumulator.ensure_owner(owner)
        try:
            for child in body:
                for fragment in flatten_fragments(self.dispatcher.dispatch(child)):
                    if isinstance(fragment, Reference):
                        self.accumulator.add(
                            DependencyFact(owner, fragment.target, fragment.member)
                        )
        finally:
            self.scope_stack.pop()

        # Facts are attributed here; nothing bubbles up to enclosing scopes.
        return []


def extract_dependencies(tree: Any) -> DependencyMap:
    """Extract the DependencyMap of every class/module defined in ``tree``.

    References made outside any class or module body have no owner and are
    dropped. An absent tree yields an empty map.

    Raises:
        InvalidInputError: If a node exposes non-sequence children.
    """
    if tree is None:
        return {}

    walk = _ExtractionWalk()
    orphaned = flatten_fragments(walk.dispatcher.dispatch(tree))
    if orphaned:
        logger.debug("Discarded %d top-level references without owner", len(orphaned))
    return walk.accumulator.finalize()


__all__ = ["SCOPE_SEPARATOR", "extract_dependencies"]
