"""File-level dependency graph: construction, cycle detection, and chain depth.

The graph maps a file stem to the stems it imports, in import order. Import
strings are resolved by permissive substring matching against the sampled
files, so third-party imports usually drop out and a few spurious edges get
in. Downstream banding was tuned with that behavior, so keep it.
"""

import os
from collections.abc import Iterator

from repo_readiness.collector import SourceFile

DependencyGraph = dict[str, list[str]]


# ---------------------------------------------------------------------------
# Construction
# ---------------------------------------------------------------------------


def resolve_import(target: str, files: list[SourceFile]) -> SourceFile | None:
    """Return the first file the import string refers to, or None.

    A file matches when its stem contains the target, or when its path
    relative to the repository root contains the target with module
    separators turned into path separators.
    """
    as_path = target.replace(".", os.sep).replace("/", os.sep)
    for candidate in files:
        if target in candidate.stem or as_path in candidate.rel_path:
            return candidate
    return None


def build_dependency_graph(
    files: list[SourceFile], import_targets: list[list[str]]
) -> DependencyGraph:
    """Build the stem graph from files and their parallel lists of import targets.

    Every file gets a node, even one whose text could not be read (pass an
    empty target list). A later file with the same stem replaces the earlier
    node's edges.
    """
    graph: DependencyGraph = {}
    for source, targets in zip(files, import_targets):
        edges: list[str] = []
        for target in targets:
            referenced = resolve_import(target, files)
            if referenced is not None:
                edges.append(referenced.stem)
        graph[source.stem] = edges
    return graph


# ---------------------------------------------------------------------------
# Cycle detection
# ---------------------------------------------------------------------------


def detect_cycles(graph: DependencyGraph) -> list[list[str]]:
    """Enumerate cycles found by a depth-first walk from each unvisited node.

    Whenever a neighbor is still on the walk's stack, the path from that
    neighbor to the current node is recorded. The same underlying cycle can
    be reported more than once when reached from different edges.
    """
    cycles: list[list[str]] = []
    visited: set[str] = set()
    on_stack: set[str] = set()
    path: list[str] = []

    def _enter(node: str) -> tuple[str, Iterator[str]]:
        visited.add(node)
        on_stack.add(node)
        path.append(node)
        return node, iter(graph.get(node, []))

    for start in graph:
        if start in visited:
            continue
        work = [_enter(start)]
        while work:
            node, neighbors = work[-1]
            descended = False
            for neighbor in neighbors:
                if neighbor not in visited:
                    work.append(_enter(neighbor))
                    descended = True
                    break
                if neighbor in on_stack:
                    cycles.append(path[path.index(neighbor):])
            if descended:
                continue
            work.pop()
            path.pop()
            on_stack.discard(node)

    return cycles


# ---------------------------------------------------------------------------
# Dependency depth
# ---------------------------------------------------------------------------


def strongly_connected_components(graph: DependencyGraph) -> list[list[str]]:
    """Tarjan's algorithm, iterative. Components come out sinks first."""
    counter = 0
    indices: dict[str, int] = {}
    lowlinks: dict[str, int] = {}
    stack: list[str] = []
    on_stack: set[str] = set()
    components: list[list[str]] = []

    def _enter(node: str) -> tuple[str, Iterator[str]]:
        nonlocal counter
        indices[node] = counter
        lowlinks[node] = counter
        counter += 1
        stack.append(node)
        on_stack.add(node)
        return node, iter(graph.get(node, []))

    for root in graph:
        if root in indices:
            continue
        work = [_enter(root)]
        while work:
            node, neighbors = work[-1]
            descended = False
            for neighbor in neighbors:
                if neighbor not in indices:
                    work.append(_enter(neighbor))
                    descended = True
                    break
                if neighbor in on_stack:
                    lowlinks[node] = min(lowlinks[node], indices[neighbor])
            if descended:
                continue

            work.pop()
            if work:
                parent = work[-1][0]
                lowlinks[parent] = min(lowlinks[parent], lowlinks[node])

            if lowlinks[node] == indices[node]:
                component = []
                while True:
                    member = stack.pop()
                    on_stack.discard(member)
                    component.append(member)
                    if member == node:
                        break
                components.append(component)

    return components


def _longest_simple_path(
    start: str,
    members: set[str],
    graph: DependencyGraph,
    depths: dict[str, int],
) -> int:
    """Longest simple path from start, walking freely inside its component.

    Leaving the component through an edge to an outside node is worth
    1 + that node's settled depth; a path that leaves can never come back.
    """
    best = 0
    on_path = {start}
    work = [(start, 0, iter(graph.get(start, [])))]
    while work:
        node, length, neighbors = work[-1]
        descended = False
        for neighbor in neighbors:
            if neighbor not in members:
                best = max(best, length + 1 + depths[neighbor])
            elif neighbor not in on_path:
                on_path.add(neighbor)
                work.append((neighbor, length + 1, iter(graph.get(neighbor, []))))
                descended = True
                break
        if descended:
            continue
        best = max(best, length)
        work.pop()
        on_path.discard(node)
    return best


def compute_depths(graph: DependencyGraph) -> dict[str, int]:
    """Return the longest simple import chain (in edges) starting at each node.

    Components are settled sinks first, so every edge leaving a component
    already points at a known depth. Only paths inside one strongly connected
    component are enumerated, which is linear on acyclic graphs.
    """
    depths: dict[str, int] = {}
    for component in strongly_connected_components(graph):
        members = set(component)
        settled = {
            node: _longest_simple_path(node, members, graph, depths) for node in component
        }
        depths.update(settled)
    return {node: depths[node] for node in graph}
