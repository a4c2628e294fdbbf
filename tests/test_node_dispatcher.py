from __future__ import annotations

from typing import Any

import pytest

from parse.dispatch import NodeDispatcher, flatten_fragments
from parse.syntax import InvalidInputError, SyntaxNode


def test_dispatch_absent_and_primitive_nodes_yield_nothing() -> None:
    dispatcher = NodeDispatcher()

    assert dispatcher.dispatch(None) == []
    assert dispatcher.dispatch("name") == []
    assert dispatcher.dispatch(42) == []
    assert dispatcher.dispatch(b"raw") == []


def test_registered_handler_result_returned_as_is() -> None:
    dispatcher = NodeDispatcher()
    marker = object()
    dispatcher.register("lvar", lambda node: marker)

    assert dispatcher.registered("lvar")
    assert not dispatcher.registered("ivar")
    assert dispatcher.dispatch(SyntaxNode("lvar", ("x",))) is marker


def test_unregistered_type_visits_children_in_order() -> None:
    dispatcher = NodeDispatcher()
    dispatcher.register("leaf", lambda node: node.children[0])

    tree = SyntaxNode(
        "begin",
        (
            SyntaxNode("leaf", ("a",)),
            None,
            "ignored",
            SyntaxNode("wrapper", (SyntaxNode("leaf", ("b",)),)),
            SyntaxNode("leaf", ("c",)),
        ),
    )

    assert dispatcher.dispatch(tree) == ["a", "b", "c"]


def test_each_handler_invoked_once_per_node() -> None:
    dispatcher = NodeDispatcher()
    seen: list[Any] = []

    def _record(node: Any) -> list[Any]:
        seen.append(node)
        return dispatcher.visit_children(node)

    dispatcher.register("item", _record)
    inner = SyntaxNode("item", ())
    outer = SyntaxNode("item", (inner,))

    dispatcher.dispatch(SyntaxNode("root", (outer,)))

    assert seen == [outer, inner]


def test_non_sequence_children_fail_fast() -> None:
    dispatcher = NodeDispatcher()

    with pytest.raises(InvalidInputError):
        dispatcher.dispatch(SyntaxNode("begin", "not-a-tuple"))  # type: ignore[arg-type]


def test_object_without_type_tag_rejected() -> None:
    dispatcher = NodeDispatcher()

    with pytest.raises(InvalidInputError):
        dispatcher.dispatch(object())


def test_flatten_fragments_shapes() -> None:
    assert flatten_fragments(None) == []
    assert flatten_fragments("x") == ["x"]
    assert flatten_fragments(["a", ["b", [None, "c"]], []]) == ["a", "b", "c"]
    # tuples are single fragments, not sequences to flatten
    assert flatten_fragments([("Logger", "info")]) == [("Logger", "info")]
