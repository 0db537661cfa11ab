from datetime import datetime, timezone

import pytest

from concept_graphs.config import EngineConfig, LayoutConfig, QueryConfig, load_config
from concept_graphs.errors import ConceptGraphError, RootRequiredError
from concept_graphs.models import ConceptGraph, ConceptNode, PathResult

from factories import make_node


SNAPSHOT = {
    "nodes": [
        {
            "id": "n1",
            "title": "Graphs",
            "keywords": ["vertices", "edges"],
            "explanation": "Structures of nodes and links",
            "conceptType": "Theory",
            "difficulty": "Beginner",
            "position": {"x": 10, "y": 20},
            "createdAt": "2024-02-01T12:00:00Z",
            "updatedAt": "2024-02-02T12:00:00+00:00",
            "imageUrl": "https://example.org/g.png",
        },
        {"id": "n2", "title": "Trees"},
    ],
    "edges": [
        {"id": "e1", "source": "n1", "target": "n2", "label": "generalises"},
        {"id": "e2", "source": "n2", "target": "n1"},
    ],
}


def test_graph_from_camel_case_snapshot() -> None:
    graph = ConceptGraph.from_dict(SNAPSHOT)
    first = graph.nodes[0]

    assert graph.node_ids() == ["n1", "n2"]
    assert first.concept_type == "Theory"
    assert first.position == (10.0, 20.0)
    assert first.created_at == datetime(2024, 2, 1, 12, tzinfo=timezone.utc)
    assert first.image_url == "https://example.org/g.png"
    assert graph.nodes[1].position is None
    assert graph.nodes[1].keywords == []
    assert graph.edges[1].label is None


def test_graph_to_dict_uses_camel_case() -> None:
    out = ConceptGraph.from_dict(SNAPSHOT).to_dict()
    first = out["nodes"][0]

    assert first["conceptType"] == "Theory"
    assert first["position"] == {"x": 10.0, "y": 20.0}
    assert "position" not in out["nodes"][1]
    assert out["edges"][0]["label"] == "generalises"
    assert "label" not in out["edges"][1]


def test_with_positions_copies_nodes() -> None:
    graph = ConceptGraph(nodes=[make_node("a", position=(1, 2)), make_node("b")], edges=[])
    moved = graph.with_positions({"b": (5, 6)})

    assert moved.positions() == {"a": (1.0, 2.0), "b": (5.0, 6.0)}
    assert graph.nodes[1].position is None
    assert moved.nodes[0] is not graph.nodes[0]


def test_with_position_does_not_share_lists() -> None:
    node = make_node("a", keywords=["x"])
    copy = node.with_position((0, 0))
    copy.keywords.append("y")
    assert node.keywords == ["x"]


def test_node_parses_snake_case_keys() -> None:
    node = ConceptNode.from_dict({"id": 7, "title": "T", "concept_type": "Tool", "position": [1, 2]})
    assert node.id == "7"
    assert node.concept_type == "Tool"
    assert node.position == (1.0, 2.0)


def test_path_result_not_found() -> None:
    result = PathResult.not_found()
    assert result.path == []
    assert result.distance == -1
    assert not result.found


def test_layout_config_defaults() -> None:
    cfg = LayoutConfig()
    assert (cfg.width, cfg.height) == (800.0, 600.0)
    assert cfg.node_spacing == 100.0
    assert cfg.iterations == 50
    assert cfg.radius == 200.0
    assert cfg.center == (400.0, 300.0)


def test_layout_config_from_camel_case() -> None:
    cfg = LayoutConfig.from_dict({"nodeSpacing": 150, "forceStrength": 0.2, "bogus": 1}, width=1000)
    assert cfg.node_spacing == 150
    assert cfg.force_strength == 0.2
    assert cfg.width == 1000
    assert cfg.to_dict()["height"] == 600.0


def test_query_config_from_camel_case() -> None:
    cfg = QueryConfig.from_dict({"maxDepth": 3, "caseSensitive": True})
    assert cfg.max_depth == 3
    assert cfg.case_sensitive
    assert cfg.similarity_threshold == 0.7


def test_engine_config_derives_call_configs() -> None:
    engine = EngineConfig(max_depth=4, similarity_threshold=0.5, seed=11)
    assert engine.query_config().max_depth == 4
    assert engine.query_config(max_depth=2).max_depth == 2
    assert engine.layout_config().seed == 11
    assert engine.layout_config(width=300).width == 300


def test_load_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "CONCEPT_GRAPHS_ENABLE_LOGGING",
        "CONCEPT_GRAPHS_LOG_LEVEL",
        "CONCEPT_GRAPHS_MAX_DEPTH",
        "CONCEPT_GRAPHS_SIMILARITY_THRESHOLD",
        "CONCEPT_GRAPHS_SEED",
    ):
        monkeypatch.delenv(name, raising=False)

    assert load_config() == EngineConfig()


def test_load_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CONCEPT_GRAPHS_ENABLE_LOGGING", "yes")
    monkeypatch.setenv("CONCEPT_GRAPHS_LOG_LEVEL", "debug")
    monkeypatch.setenv("CONCEPT_GRAPHS_MAX_DEPTH", "4")
    monkeypatch.setenv("CONCEPT_GRAPHS_SIMILARITY_THRESHOLD", "0.25")
    monkeypatch.setenv("CONCEPT_GRAPHS_SEED", "42")

    cfg = load_config()
    assert cfg.enable_logging
    assert cfg.log_level == "DEBUG"
    assert cfg.max_depth == 4
    assert cfg.similarity_threshold == 0.25
    assert cfg.seed == 42


def test_root_required_error_hierarchy() -> None:
    err = RootRequiredError("radial")
    assert isinstance(err, ConceptGraphError)
    assert isinstance(err, ValueError)
    assert "radial" in str(err)
