import math

import pytest

import concept_graphs as cg
from concept_graphs.engine import normalise_strategy
from concept_graphs.models import ConceptGraph

from factories import make_node


@pytest.mark.parametrize(
    "name, expected",
    [
        ("ForceDirected", "force-directed"),
        ("force_directed", "force-directed"),
        ("radial", "radial"),
        ("IntelligentRadial", "intelligent-radial"),
        ("linear-hierarchy", "linear-hierarchy"),
        ("hierarchical", "linear-hierarchy"),
    ],
)
def test_normalise_strategy(name: str, expected: str) -> None:
    assert normalise_strategy(name) == expected


def test_unknown_strategy_rejected(ml_graph: ConceptGraph) -> None:
    with pytest.raises(ValueError):
        cg.apply_layout(ml_graph, "spiral")


@pytest.mark.parametrize("strategy", ["radial", "intelligent-radial"])
def test_rooted_strategies_need_a_root(ml_graph: ConceptGraph, strategy: str) -> None:
    with pytest.raises(cg.RootRequiredError):
        cg.apply_layout(ml_graph, strategy)


def test_default_root_to_first(ml_graph: ConceptGraph) -> None:
    out = cg.apply_layout(ml_graph, "radial", default_root_to_first=True)
    assert out.nodes[0].position == (400.0, 300.0)


def test_apply_layout_returns_new_graph(chain_graph: ConceptGraph) -> None:
    out = cg.apply_layout(chain_graph, "radial", root_id="A")

    assert out is not chain_graph
    assert out.node_ids() == chain_graph.node_ids()
    assert [e.id for e in out.edges] == ["ab", "bc"]
    assert out.nodes[0].position == (400.0, 300.0)
    assert math.dist(out.nodes[2].position, (400, 300)) == pytest.approx(320.0)
    assert all(n.position is None for n in chain_graph.nodes)


def test_apply_layout_accepts_camel_case_config(ml_graph: ConceptGraph) -> None:
    out = cg.apply_layout(ml_graph, "force-directed", {"seed": 1, "boundaryPadding": 80}, resolve=False)
    for node in out.nodes:
        x, y = node.position
        assert 80.0 <= x <= 720.0
        assert 80.0 <= y <= 520.0


def _crowded_pair() -> ConceptGraph:
    return ConceptGraph(
        nodes=[make_node("a", position=(400, 300)), make_node("b", position=(410, 300))],
        edges=[],
    )


def test_apply_layout_resolves_overlaps() -> None:
    graph = _crowded_pair()
    out = cg.apply_layout(graph, "force-directed", {"iterations": 0})
    assert math.dist(out.nodes[0].position, out.nodes[1].position) >= 60.0 - 1e-9

    raw = cg.apply_layout(graph, "force-directed", {"iterations": 0}, resolve=False)
    assert [n.position for n in raw.nodes] == [(400.0, 300.0), (410.0, 300.0)]


@pytest.mark.parametrize("strategy", ["radial", "intelligent-radial", "linear-hierarchy"])
def test_unknown_root_leaves_positions_unchanged(strategy: str) -> None:
    graph = _crowded_pair()
    out = cg.apply_layout(graph, strategy, root_id="missing")

    assert [n.position for n in out.nodes] == [(400.0, 300.0), (410.0, 300.0)]
    assert out.nodes[0] is not graph.nodes[0]


def test_unknown_root_centres_unpositioned_nodes() -> None:
    graph = ConceptGraph(nodes=[make_node("a", position=(10, 20)), make_node("b")], edges=[])
    out = cg.apply_layout(graph, "linear-hierarchy", root_id="missing")
    assert [n.position for n in out.nodes] == [(10.0, 20.0), (400.0, 300.0)]


def test_empty_graph_layout(empty_graph: ConceptGraph) -> None:
    for strategy in ("force-directed", "radial", "intelligent-radial", "linear-hierarchy"):
        assert cg.apply_layout(empty_graph, strategy).nodes == []


def test_apply_layout_emits_events(chain_graph: ConceptGraph) -> None:
    events = []
    cg.apply_layout(chain_graph, "linear-hierarchy", emit=lambda kind, payload: events.append(payload))

    assert events[-1]["strategy"] == "linear-hierarchy"
    assert events[-1]["n_nodes"] == 4
    assert any("n_levels" in p for p in events)


def test_strategy_helpers(ml_graph: ConceptGraph) -> None:
    assert cg.apply_radial_layout(ml_graph, "ml-1").nodes[0].position == (400.0, 300.0)
    assert cg.apply_intelligent_radial_layout(ml_graph, "ml-1", {"seed": 2}).nodes[0].position == (400.0, 300.0)
    assert cg.apply_hierarchy_layout(ml_graph).nodes[0].position == (400.0, 120.0)
    assert all(n.position is not None for n in cg.apply_force_directed_layout(ml_graph, {"seed": 2}).nodes)
    assert cg.apply_linear_layout(ml_graph.nodes[:1], 800, 600)[0].position == (400.0, 300.0)


def test_auto_layout_focus(ml_graph: ConceptGraph) -> None:
    out = cg.auto_layout(ml_graph, "focus", 1200, 400)
    ys = {n.position[1] for n in out.nodes}
    xs = [n.position[0] for n in out.nodes]

    assert ys == {200.0}
    assert [b - a for a, b in zip(xs, xs[1:])] == [150.0] * 6


def test_auto_layout_exploration(ml_graph: ConceptGraph) -> None:
    rooted = cg.auto_layout(ml_graph, "exploration", 800, 600, root_id="ml-1")
    assert rooted.nodes[0].position == (400.0, 300.0)

    free = cg.auto_layout(ml_graph, "exploration", 800, 600, root_id="missing")
    assert len(free.nodes) == 7
    assert all(n.position is not None for n in free.nodes)


def test_auto_layout_rejects_unknown_mode(ml_graph: ConceptGraph) -> None:
    with pytest.raises(ValueError):
        cg.auto_layout(ml_graph, "gallery", 800, 600)


def test_query_entry_points(ml_graph: ConceptGraph) -> None:
    model = cg.build_model(ml_graph)

    assert cg.traverse(model, "ml-1", "BFS", max_depth=1)[0] == "ml-1"
    assert set(cg.traverse(model, "ml-1", "dfs")) == set(ml_graph.node_ids())
    with pytest.raises(ValueError):
        cg.traverse(model, "ml-1", "random-walk")

    assert cg.shortest_path(model, "ml-1", "ml-4").distance == 3
    assert len(cg.all_paths(model, "ml-1", "ml-4")) == 1
    assert cg.identify_clusters(model)[0].centroid in {"ml-1", "ml-3"}
    assert cg.graph_statistics(model).n_edges == 6
    assert cg.find_similar_nodes(model, "ml-1", threshold=0.0)
