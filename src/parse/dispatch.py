"""Node-type dispatch for syntax tree walks."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from parse.syntax import is_primitive, node_children, node_type

if TYPE_CHECKING:
    from collections.abc import Callable

    Handler = Callable[[Any], Any]


def flatten_fragments(result: Any) -> list[Any]:
    """Flatten a handler result (scalar, None or nested sequence) into a list."""
    if result is None:
        return []
    if isinstance(result, list):
        flat: list[Any] = []
        for item in result:
            flat.extend(flatten_fragments(item))
        return flat
    return [result]


class NodeDispatcher:
    """Map node type tags to handlers, falling back to visiting children."""

    def __init__(self) -> None:
        self._handlers: dict[str, Handler] = {}

    def register(self, type_tag: str, handler: Handler) -> None:
        self._handlers[type_tag] = handler

    def registered(self, type_tag: str) -> bool:
        return type_tag in self._handlers

    def dispatch(self, node: Any) -> Any:
        """Return the fragments extracted from ``node``.

        Absent nodes and primitive leaves yield an empty list. A registered
        handler's result is returned as-is; callers flatten it.
        """
        if node is None or is_primitive(node):
            return []

        handler = self._handlers.get(node_type(node))
        if handler is not None:
            return handler(node)
        return self.visit_children(node)

    def visit_children(self, node: Any) -> list[Any]:
        fragments: list[Any] = []
        for child in node_children(node):
            fragments.extend(flatten_fragments(self.dispatch(child)))
        return fragments


__all__ = ["NodeDispatcher", "flatten_fragments"]
