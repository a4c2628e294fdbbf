from __future__ import annotations

from typing import TYPE_CHECKING

from artifacts.models.artifacts.dependencies import DependencyGraph
from graph.algos import adjacency, build_graph, dependency_depths, find_cycles

if TYPE_CHECKING:
    from parse.accumulator import DependencyMap


def _graph(edges: list[tuple[str, str]]) -> DependencyGraph:
    nodes: dict[str, None] = {}
    for source, target in edges:
        nodes.setdefault(source, None)
        nodes.setdefault(target, None)
    return DependencyGraph(nodes=list(nodes), edges=edges)


def _assert_closed_walks(graph: DependencyGraph, cycles: list[list[str]]) -> None:
    edges = set(graph.edges)
    for cycle in cycles:
        assert cycle[0] == cycle[-1]
        for source, target in zip(cycle, cycle[1:]):
            assert (source, target) in edges


def test_player_enemy_round_trip() -> None:
    graph = build_graph({"Player": [{"Enemy": ["health"]}]})

    assert graph.nodes == ["Player", "Enemy"]
    assert graph.edges == [("Player", "Enemy")]


def test_nodes_cover_every_owner_and_target() -> None:
    dependency_map: DependencyMap = {
        "Game": [{"Player": ["new"]}, {"Logger": ["info"]}],
        "Player": [{"Enemy": []}, {"Logger": ["warn"]}],
        "Enemy": [{"Player": ["position"]}],
    }

    graph = build_graph(dependency_map)

    expected = {"Game", "Player", "Logger", "Enemy"}
    assert expected <= set(graph.nodes)
    assert graph.nodes == ["Game", "Player", "Logger", "Enemy"]
    assert graph.edges == [
        ("Game", "Player"),
        ("Game", "Logger"),
        ("Player", "Enemy"),
        ("Player", "Logger"),
        ("Enemy", "Player"),
    ]


def test_duplicate_targets_produce_one_edge() -> None:
    graph = build_graph({"A": [{"B": ["x"]}, {"B": ["y"]}]})

    assert graph.edges == [("A", "B")]


def test_owner_without_groups_is_not_a_node() -> None:
    graph = build_graph({"Lonely": [], "A": [{"B": []}]})

    assert graph.nodes == ["A", "B"]


def test_malformed_entries_are_skipped() -> None:
    dependency_map = {
        "A": "oops",
        "B": ["not-a-group", {"C": []}],
        "D": [{"E": None}],
    }

    graph = build_graph(dependency_map)  # type: ignore[arg-type]

    assert graph.nodes == ["B", "C", "D", "E"]
    assert graph.edges == [("B", "C"), ("D", "E")]


def test_adjacency_keeps_first_seen_order() -> None:
    graph = _graph([("A", "C"), ("A", "B"), ("B", "C")])

    assert adjacency(graph) == {"A": ["C", "B"], "C": [], "B": ["C"]}


def test_two_node_cycle_found_once() -> None:
    graph = build_graph({"A": [{"B": ["x"]}], "B": [{"A": ["y"]}]})

    cycles = find_cycles(graph)

    assert cycles == [["A", "B", "A"]]
    _assert_closed_walks(graph, cycles)


def test_acyclic_graph_has_no_cycles() -> None:
    graph = _graph([("A", "B"), ("B", "C"), ("A", "C")])

    assert find_cycles(graph) == []


def test_self_loop_is_a_cycle() -> None:
    graph = build_graph({"Node": [{"Node": ["next"]}]})

    assert find_cycles(graph) == [["Node", "Node"]]


def test_cycles_are_closed_walks_over_graph_edges() -> None:
    graph = _graph(
        [
            ("A", "B"),
            ("B", "C"),
            ("C", "A"),
            ("C", "D"),
            ("D", "B"),
            ("E", "E"),
        ]
    )

    cycles = find_cycles(graph)

    assert cycles == [["A", "B", "C", "A"], ["B", "C", "D", "B"], ["E", "E"]]
    _assert_closed_walks(graph, cycles)


def test_find_cycles_empty_graph() -> None:
    assert find_cycles(DependencyGraph()) == []


def test_depth_of_chain() -> None:
    graph = _graph([("A", "B"), ("B", "C")])

    assert dependency_depths(graph) == {"A": 2, "B": 1, "C": 0}


def test_depth_takes_longest_branch() -> None:
    graph = _graph([("A", "D"), ("A", "B"), ("B", "C"), ("C", "D")])

    assert dependency_depths(graph) == {"A": 3, "D": 0, "B": 2, "C": 1}


def test_depth_terminates_on_cycles() -> None:
    graph = build_graph({"A": [{"B": []}], "B": [{"A": []}]})

    assert dependency_depths(graph) == {"A": 1, "B": 0}


def test_depth_of_isolated_leaf_is_zero() -> None:
    graph = build_graph({"Player": [{"Enemy": ["health"]}]})

    assert dependency_depths(graph) == {"Player": 1, "Enemy": 0}


def _chain(length: int) -> list[tuple[str, str]]:
    return [(f"C{index}", f"C{index + 1}") for index in range(length)]


def test_long_chain_has_no_cycles() -> None:
    graph = _graph(_chain(1500))

    assert find_cycles(graph) == []


def test_long_cycle_is_found() -> None:
    edges = [*_chain(1499), ("C1499", "C0")]
    graph = _graph(edges)

    cycles = find_cycles(graph)

    assert cycles == [[f"C{index}" for index in range(1500)] + ["C0"]]
    _assert_closed_walks(graph, cycles)


def test_depth_of_long_chain() -> None:
    depths = dependency_depths(_graph(_chain(1500)))

    assert depths["C0"] == 1500
    assert depths["C750"] == 750
    assert depths["C1500"] == 0


def test_depth_of_long_cycle_terminates() -> None:
    edges = [*_chain(1499), ("C1499", "C0")]

    depths = dependency_depths(_graph(edges))

    assert depths["C0"] == 1499
    assert depths["C1"] == 1498
