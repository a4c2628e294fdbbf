"""Graph algorithms for class dependency analysis."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from artifacts.models.artifacts.dependencies import DependencyGraph

if TYPE_CHECKING:
    from collections.abc import Iterator

    from parse.accumulator import DependencyMap

WHITE = 0
GRAY = 1
BLACK = 2


def build_graph(dependency_map: DependencyMap) -> DependencyGraph:
    """Reduce a DependencyMap to a directed graph.

    Args:
        dependency_map: Mapping of owner class to its per-target groups

    Returns:
        DependencyGraph whose nodes are every owner with at least one group plus
        every referenced target, and whose edges are the distinct
        ``(owner, target)`` pairs, both in first-seen order. Entries that are
        not ``{target: members}`` groups are skipped.
    """
    nodes: dict[str, None] = {}
    edges: dict[tuple[str, str], None] = {}

    for owner, groups in dependency_map.items():
        if not isinstance(owner, str) or not isinstance(groups, list):
            continue
        for group in groups:
            if not isinstance(group, dict):
                continue
            for target in group:
                if not isinstance(target, str):
                    continue
                nodes.setdefault(owner, None)
                nodes.setdefault(target, None)
                edges.setdefault((owner, target), None)

    return DependencyGraph(nodes=list(nodes), edges=list(edges))


def adjacency(graph: DependencyGraph) -> dict[str, list[str]]:
    """Return ordered neighbour lists for every node of the graph."""
    neighbours: dict[str, list[str]] = {node: [] for node in graph.nodes}
    for source, target in graph.edges:
        neighbours.setdefault(source, []).append(target)
        neighbours.setdefault(target, [])
    return neighbours


class _DfsState:
    """Mutable state container for one cycle search."""

    def __init__(self, graph: DependencyGraph) -> None:
        self.neighbours = adjacency(graph)
        self.color: dict[str, int] = dict.fromkeys(self.neighbours, WHITE)
        self.path: list[str] = []
        self.cycles: list[list[str]] = []

    def record_cycle(self, neighbour: str) -> None:
        start = self.path.index(neighbour)
        cycle = [*self.path[start:], neighbour]
        if cycle not in self.cycles:
            self.cycles.append(cycle)


def _visit(start: str, state: _DfsState) -> None:
    # explicit frame stack so long dependency chains do not exhaust recursion
    state.color[start] = GRAY
    state.path.append(start)
    frames: list[Iterator[str]] = [iter(state.neighbours[start])]

    while frames:
        for neighbour in frames[-1]:
            color = state.color[neighbour]
            if color == WHITE:
                state.color[neighbour] = GRAY
                state.path.append(neighbour)
                frames.append(iter(state.neighbours[neighbour]))
                break
            if color == GRAY:
                state.record_cycle(neighbour)
        else:
            frames.pop()
            state.color[state.path.pop()] = BLACK


def find_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Find elementary cycles reachable by depth-first search.

    Each cycle is closed (first node repeated at the end). Cycles are
    reported in detection order and deduplicated by exact sequence; rotations
    of the same cycle are not merged.
    """
    state = _DfsState(graph)

    for node in state.neighbours:
        if state.color[node] == WHITE:
            _visit(node, state)

    return state.cycles


class _DepthState:
    """Memo and active-path tracking for depth computation."""

    def __init__(self, graph: DependencyGraph) -> None:
        self.neighbours = adjacency(graph)
        self.memo: dict[str, int] = {}
        self.active: set[str] = set()


def _node_depth(node: str, state: _DepthState) -> int:
    if node in state.memo:
        return state.memo[node]

    state.active.add(node)
    # frame: [node, pending neighbours, best depth so far]
    frames: list[list[Any]] = [[node, iter(state.neighbours[node]), 0]]

    while frames:
        frame = frames[-1]
        for neighbour in frame[1]:
            # back edge: the path would stop being simple
            if neighbour in state.active:
                continue
            if neighbour in state.memo:
                frame[2] = max(frame[2], 1 + state.memo[neighbour])
                continue
            state.active.add(neighbour)
            frames.append([neighbour, iter(state.neighbours[neighbour]), 0])
            break
        else:
            current, _, depth = frames.pop()
            state.active.discard(current)
            state.memo[current] = depth
            if frames:
                frames[-1][2] = max(frames[-1][2], 1 + depth)

    return state.memo[node]


def dependency_depths(graph: DependencyGraph) -> dict[str, int]:
    """Compute the longest outgoing dependency path length for every node.

    Nodes without outgoing edges have depth 0. Nodes on a cycle get the depth
    found on their first expansion.
    """
    state = _DepthState(graph)
    return {node: _node_depth(node, state) for node in state.neighbours}


__all__ = [
    "_DepthState",
    "_DfsState",
    "adjacency",
    "build_graph",
    "dependency_depths",
    "find_cycles",
]
