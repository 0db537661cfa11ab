"""
Node filtering and text search over a graph snapshot.

Criteria and options are plain dataclasses so that a UI layer can build
them from form state or JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, List, Optional

from .config import QueryConfig
from .models import ConceptGraph, ConceptNode


@dataclass
class NodeFilterCriteria:
    """All set fields must match; empty lists and None mean "no filter"."""

    concept_types: List[str] = field(default_factory=list)
    difficulties: List[str] = field(default_factory=list)
    keywords: List[str] = field(default_factory=list)  # any-match, substring
    created_after: Optional[datetime] = None
    created_before: Optional[datetime] = None
    updated_after: Optional[datetime] = None
    updated_before: Optional[datetime] = None
    has_resources: Optional[bool] = None
    has_image: Optional[bool] = None


@dataclass
class SearchOptions:
    case_sensitive: bool = False
    include_partial_matches: bool = True

    @classmethod
    def from_query_config(cls, config: QueryConfig) -> "SearchOptions":
        return cls(
            case_sensitive=config.case_sensitive,
            include_partial_matches=config.include_partial_matches,
        )


def _as_utc(value: datetime) -> datetime:
    # Naive datetimes are taken to be UTC so they compare with aware ones.
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def _keyword_match(node: ConceptNode, wanted: List[str], case_sensitive: bool) -> bool:
    for keyword in wanted:
        for node_kw in node.keywords:
            if case_sensitive:
                if keyword in node_kw:
                    return True
            elif keyword.lower() in node_kw.lower():
                return True
    return False


def _matches(node: ConceptNode, criteria: NodeFilterCriteria, case_sensitive: bool) -> bool:
    if criteria.concept_types and node.concept_type not in criteria.concept_types:
        return False
    if criteria.difficulties and node.difficulty not in criteria.difficulties:
        return False
    if criteria.keywords and not _keyword_match(node, criteria.keywords, case_sensitive):
        return False

    created = _as_utc(node.created_at)
    updated = _as_utc(node.updated_at)
    if criteria.created_after and created < _as_utc(criteria.created_after):
        return False
    if criteria.created_before and created > _as_utc(criteria.created_before):
        return False
    if criteria.updated_after and updated < _as_utc(criteria.updated_after):
        return False
    if criteria.updated_before and updated > _as_utc(criteria.updated_before):
        return False

    if criteria.has_resources is not None and criteria.has_resources != bool(node.resources):
        return False
    if criteria.has_image is not None and criteria.has_image != bool(node.image_url):
        return False
    return True


def filter_nodes(
    graph: ConceptGraph,
    criteria: NodeFilterCriteria,
    config: Optional[QueryConfig] = None,
) -> List[ConceptNode]:
    case_sensitive = (config or QueryConfig()).case_sensitive
    return [n for n in graph.nodes if _matches(n, criteria, case_sensitive)]


def search_nodes(
    graph: ConceptGraph,
    query: str,
    options: Optional[SearchOptions] = None,
) -> List[ConceptNode]:
    """Nodes whose title, explanation or any keyword matches ``query``."""
    opts = options or SearchOptions()

    def norm(text: str) -> str:
        return text if opts.case_sensitive else text.lower()

    term = norm(query)

    def hit(text: str) -> bool:
        text = norm(text)
        return term in text if opts.include_partial_matches else text == term

    return [
        node for node in graph.nodes
        if hit(node.title) or hit(node.explanation) or any(hit(k) for k in node.keywords)
    ]


# --------------------------------------------------------------------------- #
# Convenience finders
# --------------------------------------------------------------------------- #

def quick_search(graph: ConceptGraph, query: str, case_sensitive: bool = False) -> List[ConceptNode]:
    return search_nodes(graph, query, SearchOptions(case_sensitive=case_sensitive))


def find_nodes_by_property(graph: ConceptGraph, prop: str, value: Any) -> List[ConceptNode]:
    return [n for n in graph.nodes if getattr(n, prop, None) == value]


def get_nodes_by_type(graph: ConceptGraph, types: List[str]) -> List[ConceptNode]:
    return [n for n in graph.nodes if n.concept_type and n.concept_type in types]


def get_nodes_by_difficulty(graph: ConceptGraph, difficulties: List[str]) -> List[ConceptNode]:
    return [n for n in graph.nodes if n.difficulty and n.difficulty in difficulties]


def get_nodes_in_date_range(
    graph: ConceptGraph,
    start: datetime,
    end: datetime,
    use_update_date: bool = False,
) -> List[ConceptNode]:
    lo, hi = _as_utc(start), _as_utc(end)
    out = []
    for node in graph.nodes:
        stamp = _as_utc(node.updated_at if use_update_date else node.created_at)
        if lo <= stamp <= hi:
            out.append(node)
    return out


def get_nodes_with_resources(graph: ConceptGraph) -> List[ConceptNode]:
    return [n for n in graph.nodes if n.resources]


def get_nodes_with_images(graph: ConceptGraph) -> List[ConceptNode]:
    return [n for n in graph.nodes if n.image_url]
