import pytest

from concept_graphs.graph_model import GraphModel
from concept_graphs.models import ConceptGraph
from concept_graphs.traversal import TraversalEngine

from factories import make_edge, make_node


@pytest.fixture
def engine(ml_model: GraphModel) -> TraversalEngine:
    return TraversalEngine(ml_model)


def _shortcut_graph() -> ConceptGraph:
    # A-B-C-D with a shortcut A-C: D is two hops away via C.
    return ConceptGraph(
        nodes=[make_node(n) for n in "ABCD"],
        edges=[
            make_edge("ab", "A", "B"),
            make_edge("bc", "B", "C"),
            make_edge("cd", "C", "D"),
            make_edge("ac", "A", "C"),
        ],
    )


def test_bfs_follows_edges_in_both_directions(engine: TraversalEngine) -> None:
    order = engine.bfs("ml-3")
    assert order[0] == "ml-3"
    assert set(order) == {f"ml-{i}" for i in range(1, 8)}
    # ml-2 is reached through an incoming edge.
    assert order.index("ml-2") < order.index("ml-1")


def test_bfs_respects_max_depth(engine: TraversalEngine) -> None:
    assert engine.bfs("ml-1", max_depth=0) == ["ml-1"]
    assert set(engine.bfs("ml-1", max_depth=1)) == {"ml-1", "ml-2", "ml-6", "ml-7"}


def test_unknown_start_returns_empty(engine: TraversalEngine) -> None:
    assert engine.bfs("nope") == []
    assert engine.dfs("nope") == []


def test_dfs_goes_deep_first(engine: TraversalEngine) -> None:
    order = engine.dfs("ml-1")
    assert order[:3] == ["ml-1", "ml-2", "ml-3"]


@pytest.mark.parametrize("start", ["A", "B", "C", "D"])
@pytest.mark.parametrize("depth", [0, 1, 2, 3])
def test_bfs_and_dfs_reach_the_same_set(start: str, depth: int) -> None:
    engine = TraversalEngine(GraphModel.from_graph(_shortcut_graph()))
    assert set(engine.bfs(start, depth)) == set(engine.dfs(start, depth))


def test_dfs_depth_counts_hops_not_walk_length() -> None:
    engine = TraversalEngine(GraphModel.from_graph(_shortcut_graph()))
    assert set(engine.dfs("A", max_depth=2)) == {"A", "B", "C", "D"}


def test_dfs_is_cycle_safe(two_component_graph: ConceptGraph) -> None:
    engine = TraversalEngine(GraphModel.from_graph(two_component_graph))
    order = engine.dfs("A")
    assert sorted(order) == ["A", "B", "C"]
    assert len(order) == len(set(order))


def test_shortest_path_self(engine: TraversalEngine) -> None:
    result = engine.shortest_path("ml-4", "ml-4")
    assert result.found
    assert result.distance == 0
    assert result.path == ["ml-4"]


def test_shortest_path_multi_hop(engine: TraversalEngine) -> None:
    result = engine.shortest_path("ml-7", "ml-5")
    assert result.found
    assert result.path == ["ml-7", "ml-1", "ml-2", "ml-3", "ml-5"]
    assert result.distance == 4


def test_shortest_path_is_symmetric(engine: TraversalEngine, ml_model: GraphModel) -> None:
    ids = ml_model.node_ids()
    for a in ids:
        for b in ids:
            assert engine.shortest_path(a, b).distance == engine.shortest_path(b, a).distance


def test_shortest_path_not_found(two_component_graph: ConceptGraph) -> None:
    engine = TraversalEngine(GraphModel.from_graph(two_component_graph))

    for a, b in [("A", "D"), ("A", "missing"), ("missing", "A")]:
        result = engine.shortest_path(a, b)
        assert not result.found
        assert result.distance == -1
        assert result.path == []


def test_all_paths_enumerates_simple_paths() -> None:
    engine = TraversalEngine(GraphModel.from_graph(_shortcut_graph()))
    paths = sorted(tuple(p.path) for p in engine.all_paths("A", "D"))

    assert paths == [("A", "B", "C", "D"), ("A", "C", "D")]
    for p in engine.all_paths("A", "D"):
        assert p.found
        assert p.distance == len(p.path) - 1


def test_all_paths_depth_bound() -> None:
    engine = TraversalEngine(GraphModel.from_graph(_shortcut_graph()))
    paths = engine.all_paths("A", "D", max_depth=2)
    assert [p.path for p in paths] == [["A", "C", "D"]]


def test_all_paths_unknown_ids(engine: TraversalEngine) -> None:
    assert engine.all_paths("ml-1", "missing") == []


def test_connected_nodes_flags(engine: TraversalEngine) -> None:
    assert engine.connected_nodes("ml-3", include_incoming=False) == ["ml-4", "ml-5"]
    assert engine.connected_nodes("ml-3", include_outgoing=False) == ["ml-2"]
    assert set(engine.connected_nodes("ml-3")) == {"ml-2", "ml-4", "ml-5"}
    assert engine.connected_nodes("ml-3", False, False) == []


def test_empty_graph_queries(empty_graph: ConceptGraph) -> None:
    engine = TraversalEngine(GraphModel.from_graph(empty_graph))
    assert engine.bfs("x") == []
    assert engine.dfs("x") == []
    assert not engine.shortest_path("x", "y").found
    assert engine.all_paths("x", "y") == []
