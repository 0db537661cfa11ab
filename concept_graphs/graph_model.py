"""Adjacency index over a concept graph snapshot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

import networkx as nx

from .models import ConceptEdge, ConceptGraph, ConceptNode

logger = logging.getLogger(__name__)

DIRECTIONS = ("out", "in", "both")


@dataclass
class GraphModel:
    """
    Node/edge lookup tables plus forward and reverse adjacency.

    Built fresh from a snapshot for every query or layout call; nothing is
    cached between calls.
    """

    nodes: Dict[str, ConceptNode] = field(default_factory=dict)
    edges: Dict[str, ConceptEdge] = field(default_factory=dict)
    adjacency: Dict[str, List[str]] = field(default_factory=dict)  # source -> targets
    reverse_adjacency: Dict[str, List[str]] = field(default_factory=dict)  # target -> sources

    @classmethod
    def from_graph(cls, graph: ConceptGraph) -> "GraphModel":
        """Build the index in O(V + E), skipping edges with unknown endpoints."""
        model = cls()

        for node in graph.nodes:
            model.nodes[node.id] = node
            model.adjacency[node.id] = []
            model.reverse_adjacency[node.id] = []

        dangling = 0
        for edge in graph.edges:
            if edge.source not in model.nodes or edge.target not in model.nodes:
                dangling += 1
                continue
            model.edges[edge.id] = edge
            model.adjacency[edge.source].append(edge.target)
            model.reverse_adjacency[edge.target].append(edge.source)

        if dangling:
            logger.debug("Skipped %d dangling edge(s) while indexing graph", dangling)

        return model

    # ------------------------------------------------------------------ #
    # Lookups
    # ------------------------------------------------------------------ #

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __len__(self) -> int:
        return len(self.nodes)

    def node_ids(self) -> List[str]:
        return list(self.nodes.keys())

    def neighbors(self, node_id: str, direction: str = "both") -> List[str]:
        """
        Direct neighbours of ``node_id``, deduplicated, outgoing first.

        ``direction`` is one of "out", "in" or "both".
        """
        if direction not in DIRECTIONS:
            raise ValueError(f"Unknown direction {direction!r}; expected one of {DIRECTIONS}")

        seen = set()
        out: List[str] = []
        sources = []
        if direction in ("out", "both"):
            sources.append(self.adjacency.get(node_id, []))
        if direction in ("in", "both"):
            sources.append(self.reverse_adjacency.get(node_id, []))
        for ids in sources:
            for nid in ids:
                if nid not in seen:
                    seen.add(nid)
                    out.append(nid)
        return out

    def degree(self, node_id: str) -> int:
        """Number of distinct neighbours over the combined adjacency."""
        return len(self.neighbors(node_id, "both"))

    def max_degree(self) -> int:
        if not self.nodes:
            return 0
        return max(self.degree(nid) for nid in self.nodes)

    def edges_between(self, a: str, b: str) -> List[ConceptEdge]:
        """Indexed edges joining ``a`` and ``b`` in either direction."""
        return [
            e for e in self.edges.values()
            if (e.source == a and e.target == b) or (e.source == b and e.target == a)
        ]

    # ------------------------------------------------------------------ #
    # Export
    # ------------------------------------------------------------------ #

    def to_networkx(self, directed: bool = False) -> nx.Graph:
        """Export to NetworkX; node attributes carry title and concept type."""
        G = nx.DiGraph() if directed else nx.Graph()
        for nid, node in self.nodes.items():
            G.add_node(nid, title=node.title, concept_type=node.concept_type)
        for edge in self.edges.values():
            G.add_edge(edge.source, edge.target, id=edge.id, label=edge.label)
        return G


def build_model(graph: ConceptGraph) -> GraphModel:
    return GraphModel.from_graph(graph)
