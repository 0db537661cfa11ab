"""
Text similarity for near-duplicate detection and relationship scoring.

  - string_similarity: normalised Levenshtein similarity in [0, 1]
  - keyword_similarity: Jaccard index over lower-cased keyword sets
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from .config import QueryConfig
from .graph_model import GraphModel

TITLE_WEIGHT = 0.6
KEYWORD_WEIGHT = 0.4


def levenshtein(a: str, b: str) -> int:
    """Edit distance (insert / delete / substitute, unit costs)."""
    if len(a) < len(b):
        a, b = b, a
    if not b:
        return len(a)

    previous = list(range(len(b) + 1))
    for i, ca in enumerate(a, start=1):
        current = [i]
        for j, cb in enumerate(b, start=1):
            cost = 0 if ca == cb else 1
            current.append(min(
                previous[j] + 1,         # deletion
                current[j - 1] + 1,      # insertion
                previous[j - 1] + cost,  # substitution
            ))
        previous = current
    return previous[-1]


def string_similarity(a: str, b: str) -> float:
    """``1 - levenshtein(a, b) / max(len(a), len(b))``; two empty strings score 1.0."""
    longest = max(len(a), len(b))
    if longest == 0:
        return 1.0
    return 1.0 - levenshtein(a, b) / longest


def keyword_similarity(
    keywords_a: Iterable[str],
    keywords_b: Iterable[str],
    *,
    both_empty: float = 0.5,
    one_empty: float = 0.0,
) -> float:
    """Jaccard index over lower-cased keyword sets, with explicit empty-set fallbacks."""
    set_a = {k.lower() for k in keywords_a}
    set_b = {k.lower() for k in keywords_b}
    if not set_a and not set_b:
        return both_empty
    if not set_a or not set_b:
        return one_empty
    return len(set_a & set_b) / len(set_a | set_b)


class SimilarityEngine:
    def __init__(self, model: GraphModel, config: Optional[QueryConfig] = None):
        self.model = model
        self.config = config or QueryConfig()

    def node_similarity(self, a_id: str, b_id: str) -> float:
        a = self.model.nodes[a_id]
        b = self.model.nodes[b_id]
        title = string_similarity(a.title.lower(), b.title.lower())
        keywords = keyword_similarity(a.keywords, b.keywords)
        return TITLE_WEIGHT * title + KEYWORD_WEIGHT * keywords

    def find_similar_nodes(
        self,
        target_id: str,
        threshold: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        """
        Nodes whose combined title/keyword similarity to ``target_id`` is at
        least ``threshold``, best first (ties keep node order).

        Returns a list of ``{"node": ConceptNode, "similarity": float}``.
        """
        if target_id not in self.model:
            return []

        limit = self.config.similarity_threshold if threshold is None else threshold
        results = []
        for nid, node in self.model.nodes.items():
            if nid == target_id:
                continue
            score = self.node_similarity(target_id, nid)
            if score >= limit:
                results.append({"node": node, "similarity": score})

        # sorted() is stable, so equal scores keep their original order
        return sorted(results, key=lambda r: r["similarity"], reverse=True)
