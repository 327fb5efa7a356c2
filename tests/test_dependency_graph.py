"""Tests for dependency graph construction, cycle detection, and depth analysis."""

import os

from repo_readiness.collector import SourceFile
from repo_readiness.dependency_graph import (
    build_dependency_graph,
    compute_depths,
    detect_cycles,
    resolve_import,
    strongly_connected_components,
)


def _file(rel_path, language="python"):
    rel_path = rel_path.replace("/", os.sep)
    name = os.path.basename(rel_path)
    return SourceFile(
        path=os.path.join(os.sep, "repo", rel_path),
        rel_path=rel_path,
        language=language,
        stem=os.path.splitext(name)[0],
    )


# ---------------------------------------------------------------------------
# resolve_import / build_dependency_graph
# ---------------------------------------------------------------------------


def test_mutual_imports_produce_both_edges():
    files = [_file("a.py"), _file("b.py")]
    graph = build_dependency_graph(files, [["b"], ["a"]])
    assert graph == {"a": ["b"], "b": ["a"]}


def test_unresolved_import_leaves_empty_edge_list():
    files = [_file("main.py")]
    assert build_dependency_graph(files, [["requests"]]) == {"main": []}


def test_file_without_imports_contributes_no_edges():
    files = [_file("a.py"), _file("b.py")]
    assert build_dependency_graph(files, [[], []]) == {"a": [], "b": []}


def test_dotted_import_matches_path_fragment():
    files = [_file("app.py"), _file("pkg/models/user.py")]
    graph = build_dependency_graph(files, [["pkg.models.user"], []])
    assert graph["app"] == ["user"]


def test_slash_import_matches_path_fragment():
    files = [_file("index.js", "javascript"), _file("lib/db.js", "javascript")]
    graph = build_dependency_graph(files, [["lib/db"], []])
    assert graph["index"] == ["db"]


def test_stem_substring_match_is_permissive():
    """A file whose stem merely contains the import string still matches."""
    files = [_file("Program.cs", "csharp"), _file("Testing.cs", "csharp")]
    graph = build_dependency_graph(files, [["Test"], []])
    assert graph["Program"] == ["Testing"]


def test_first_matching_file_wins():
    files = [_file("user_model.py"), _file("user_view.py"), _file("app.py")]
    assert resolve_import("user", files).stem == "user_model"


def test_edges_keep_import_order():
    files = [_file("app.py"), _file("zeta.py"), _file("alpha.py")]
    graph = build_dependency_graph(files, [["zeta", "alpha"], [], []])
    assert graph["app"] == ["zeta", "alpha"]


def test_later_file_with_same_stem_replaces_edges():
    files = [_file("a/util.py"), _file("b/util.py"), _file("helpers.py")]
    graph = build_dependency_graph(files, [["helpers"], [], []])
    assert graph["util"] == []


# ---------------------------------------------------------------------------
# detect_cycles
# ---------------------------------------------------------------------------


def test_two_node_cycle_reported_once():
    cycles = detect_cycles({"a": ["b"], "b": ["a"]})
    assert cycles == [["a", "b"]]


def test_chain_has_no_cycles():
    assert detect_cycles({"a": ["b"], "b": ["c"], "c": []}) == []


def test_graph_without_edges_has_no_cycles():
    assert detect_cycles({"a": [], "b": [], "c": []}) == []


def test_self_import_is_a_cycle():
    assert detect_cycles({"a": ["a"]}) == [["a"]]


def test_three_node_cycle_path():
    assert detect_cycles({"a": ["b"], "b": ["c"], "c": ["a"]}) == [["a", "b", "c"]]


def test_cycle_slice_starts_at_reentered_node():
    cycles = detect_cycles({"root": ["a"], "a": ["b"], "b": ["a"]})
    assert cycles == [["a", "b"]]


def test_repeated_edges_are_not_deduplicated():
    cycles = detect_cycles({"a": ["b"], "b": ["a", "a"]})
    assert cycles == [["a", "b"], ["a", "b"]]


def test_long_cycle_does_not_hit_recursion_limit():
    n = 3000
    graph = {f"n{i}": [f"n{(i + 1) % n}"] for i in range(n)}
    cycles = detect_cycles(graph)
    assert len(cycles) == 1
    assert len(cycles[0]) == n


# ---------------------------------------------------------------------------
# strongly_connected_components
# ---------------------------------------------------------------------------


def test_components_group_cycles_and_come_out_sinks_first():
    graph = {"a": ["b"], "b": ["a", "c"], "c": []}
    components = strongly_connected_components(graph)
    assert [sorted(c) for c in components] == [["c"], ["a", "b"]]


# ---------------------------------------------------------------------------
# compute_depths
# ---------------------------------------------------------------------------


def test_chain_depths_count_edges():
    graph = {"a": ["b"], "b": ["c"], "c": ["d"], "d": []}
    assert compute_depths(graph) == {"a": 3, "b": 2, "c": 1, "d": 0}


def test_graph_without_edges_has_zero_depth():
    assert compute_depths({"a": [], "b": []}) == {"a": 0, "b": 0}


def test_diamond_takes_longest_branch():
    graph = {"a": ["b", "c"], "b": ["d"], "c": ["e"], "e": ["d"], "d": []}
    depths = compute_depths(graph)
    assert depths["a"] == 3
    assert depths["b"] == 1
    assert depths["c"] == 2


def test_two_node_cycle_depth():
    assert compute_depths({"a": ["b"], "b": ["a"]}) == {"a": 1, "b": 1}


def test_cycle_with_exit_chain():
    graph = {"a": ["b"], "b": ["c"], "c": ["a", "d"], "d": []}
    assert compute_depths(graph) == {"a": 3, "b": 2, "c": 2, "d": 0}


def test_star_component_uses_longest_simple_path():
    leaves = ["a", "b", "c", "d", "e"]
    graph = {"hub": list(leaves)}
    graph.update({leaf: ["hub"] for leaf in leaves})
    depths = compute_depths(graph)
    assert depths["hub"] == 1
    assert all(depths[leaf] == 2 for leaf in leaves)


def test_exit_depth_depends_on_the_node_left_through():
    # b -> x is a short exit; c -> y -> z is the long one
    graph = {"a": ["b", "c"], "b": ["a", "x"], "c": ["a", "y"], "x": [], "y": ["z"], "z": []}
    depths = compute_depths(graph)
    assert depths["b"] == 4
    assert depths["c"] == 3
    assert depths["a"] == 3


def test_self_import_adds_no_depth():
    assert compute_depths({"a": ["a", "b"], "b": []}) == {"a": 1, "b": 0}


def test_long_chain_depth_without_recursion():
    n = 3000
    graph = {f"n{i}": [f"n{i + 1}"] for i in range(n - 1)}
    graph[f"n{n - 1}"] = []
    depths = compute_depths(graph)
    assert depths["n0"] == n - 1
    assert depths[f"n{n - 1}"] == 0
