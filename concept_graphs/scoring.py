"""
Relationship scoring relative to a root concept.

Five signals are combined into one ranking score (lower = closer to the
centre):

    combined = 0.3 * directness          (raw hop count, not normalised)
             + 0.2 * concept_type_weight
             + 0.2 * keyword_similarity
             + 0.2 * edge_strength
             + 0.1 * importance

Because directness is a hop count, it dominates for anything beyond one
or two hops; levels therefore separate strongly by distance.
"""

from __future__ import annotations

from typing import Dict, Optional

from .graph_model import GraphModel
from .models import RelationshipScore, UNREACHABLE
from .similarity import keyword_similarity
from .traversal import TraversalEngine


MAX_LEVEL = 4

WEIGHTS = {
    "directness": 0.3,
    "concept_type": 0.2,
    "keywords": 0.2,
    "edge_strength": 0.2,
    "importance": 0.1,
}

LABELED_EDGE_STRENGTH = 0.9
UNLABELED_EDGE_STRENGTH = 0.6
NO_EDGE_STRENGTH = 0.1

DEFAULT_TYPE_WEIGHT = 0.5


def _symmetric(upper: Dict[tuple, float]) -> Dict[tuple, float]:
    table = dict(upper)
    for (a, b), w in upper.items():
        table[(b, a)] = w
    return table


CONCEPT_TYPE_COMPATIBILITY: Dict[tuple, float] = _symmetric({
    ("Field", "Field"): 0.9,
    ("Field", "Theory"): 0.8,
    ("Field", "Algorithm"): 0.6,
    ("Field", "Tool"): 0.5,
    ("Field", "Person"): 0.4,
    ("Theory", "Theory"): 0.9,
    ("Theory", "Algorithm"): 0.7,
    ("Theory", "Tool"): 0.6,
    ("Theory", "Person"): 0.5,
    ("Algorithm", "Algorithm"): 0.9,
    ("Algorithm", "Tool"): 0.8,
    ("Algorithm", "Person"): 0.6,
    ("Tool", "Tool"): 0.9,
    ("Tool", "Person"): 0.7,
    ("Person", "Person"): 0.9,
})


def concept_type_weight(type_a: Optional[str], type_b: Optional[str]) -> float:
    if not type_a or not type_b:
        return DEFAULT_TYPE_WEIGHT
    return CONCEPT_TYPE_COMPATIBILITY.get((type_a, type_b), DEFAULT_TYPE_WEIGHT)


class RelationshipScorer:
    def __init__(self, model: GraphModel, traversal: Optional[TraversalEngine] = None):
        self.model = model
        self.traversal = traversal or TraversalEngine(model)
        self._max_degree = model.max_degree()

    def edge_strength(self, root_id: str, target_id: str) -> float:
        edges = self.model.edges_between(root_id, target_id)
        if not edges:
            return NO_EDGE_STRENGTH
        if any(e.label for e in edges):
            return LABELED_EDGE_STRENGTH
        return UNLABELED_EDGE_STRENGTH

    def importance(self, node_id: str) -> float:
        """Degree centrality normalised by the graph's maximum degree."""
        if self._max_degree == 0:
            return 0.5
        return self.model.degree(node_id) / self._max_degree

    def root_score(self) -> RelationshipScore:
        return RelationshipScore(
            directness=0,
            importance=1.0,
            concept_type_weight=1.0,
            keyword_similarity=1.0,
            edge_strength=1.0,
            combined_score=0.0,
            level=0,
        )

    def score(
        self,
        root_id: str,
        target_id: str,
        distance: Optional[int] = None,
    ) -> Optional[RelationshipScore]:
        """
        Score ``target_id`` relative to ``root_id``; None if either id is unknown.

        ``distance`` may be supplied when the caller has already computed hop
        distances from the root.
        """
        if root_id not in self.model or target_id not in self.model:
            return None
        if target_id == root_id:
            return self.root_score()

        root = self.model.nodes[root_id]
        target = self.model.nodes[target_id]

        if distance is None:
            path = self.traversal.shortest_path(root_id, target_id)
            distance = path.distance if path.found else UNREACHABLE

        type_w = concept_type_weight(root.concept_type, target.concept_type)
        kw = keyword_similarity(root.keywords, target.keywords, both_empty=0.5, one_empty=0.1)
        strength = self.edge_strength(root_id, target_id)
        importance = self.importance(target_id)

        combined = (
            WEIGHTS["directness"] * distance
            + WEIGHTS["concept_type"] * type_w
            + WEIGHTS["keywords"] * kw
            + WEIGHTS["edge_strength"] * strength
            + WEIGHTS["importance"] * importance
        )

        return RelationshipScore(
            directness=distance,
            importance=importance,
            concept_type_weight=type_w,
            keyword_similarity=kw,
            edge_strength=strength,
            combined_score=combined,
            level=min(MAX_LEVEL, distance),
        )

    def score_all(self, root_id: str) -> Dict[str, RelationshipScore]:
        """Scores for every node (the root included) in node order."""
        if root_id not in self.model:
            return {}
        distances = self.traversal.hop_distances(root_id)
        return {
            nid: self.score(root_id, nid, distances.get(nid, UNREACHABLE))
            for nid in self.model.nodes
        }
