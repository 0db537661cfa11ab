"""Pytest configuration and fixtures."""

import pytest

from concept_graphs.graph_model import GraphModel
from concept_graphs.models import ConceptGraph

from factories import make_edge, make_node


@pytest.fixture
def ml_graph() -> ConceptGraph:
    """Small machine-learning concept map rooted at ml-1."""
    nodes = [
        make_node("ml-1", "Machine Learning", "Field", ["AI", "algorithms", "data"]),
        make_node("ml-2", "Supervised Learning", "Theory", ["training", "labels", "prediction"]),
        make_node("ml-3", "Neural Networks", "Algorithm", ["deep learning", "neurons", "backprop"]),
        make_node("ml-4", "TensorFlow", "Tool", ["framework", "Google", "deep learning"]),
        make_node("ml-5", "Geoffrey Hinton", "Person", ["researcher", "deep learning", "pioneer"]),
        make_node("ml-6", "Unsupervised Learning", "Theory", ["clustering", "patterns", "unlabeled"]),
        make_node("ml-7", "Linear Algebra", "Field", ["math", "vectors", "matrices"]),
    ]
    edges = [
        make_edge("e1-2", "ml-1", "ml-2", "includes"),
        make_edge("e1-6", "ml-1", "ml-6", "includes"),
        make_edge("e2-3", "ml-2", "ml-3", "uses"),
        make_edge("e3-4", "ml-3", "ml-4", "implemented in"),
        make_edge("e3-5", "ml-3", "ml-5", "pioneered by"),
        make_edge("e1-7", "ml-1", "ml-7", "requires"),
    ]
    return ConceptGraph(nodes=nodes, edges=edges)


@pytest.fixture
def ml_model(ml_graph: ConceptGraph) -> GraphModel:
    return GraphModel.from_graph(ml_graph)


@pytest.fixture
def chain_graph() -> ConceptGraph:
    """A - B - C plus an isolated D."""
    nodes = [make_node("A"), make_node("B"), make_node("C"), make_node("D")]
    edges = [make_edge("ab", "A", "B"), make_edge("bc", "B", "C")]
    return ConceptGraph(nodes=nodes, edges=edges)


@pytest.fixture
def two_component_graph() -> ConceptGraph:
    """Triangle A-B-C, pair D-E, isolated F, and one dangling edge."""
    nodes = [make_node(n) for n in "ABCDEF"]
    edges = [
        make_edge("ab", "A", "B"),
        make_edge("bc", "B", "C"),
        make_edge("ca", "C", "A"),
        make_edge("de", "D", "E"),
        make_edge("dx", "D", "missing"),
    ]
    return ConceptGraph(nodes=nodes, edges=edges)


@pytest.fixture
def empty_graph() -> ConceptGraph:
    return ConceptGraph(nodes=[], edges=[])
