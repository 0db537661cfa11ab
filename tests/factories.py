"""Builders for test graphs."""

from datetime import datetime, timezone
from typing import List, Optional

from concept_graphs.models import ConceptEdge, ConceptNode


def make_node(
    node_id: str,
    title: Optional[str] = None,
    concept_type: Optional[str] = None,
    keywords: Optional[List[str]] = None,
    position=None,
    **kwargs,
) -> ConceptNode:
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    return ConceptNode(
        id=node_id,
        title=title if title is not None else f"Node {node_id}",
        keywords=keywords if keywords is not None else [],
        explanation=kwargs.pop("explanation", f"Explanation for {node_id}"),
        concept_type=concept_type,
        position=position,
        created_at=kwargs.pop("created_at", stamp),
        updated_at=kwargs.pop("updated_at", stamp),
        **kwargs,
    )


def make_edge(edge_id: str, source: str, target: str, label: Optional[str] = None) -> ConceptEdge:
    return ConceptEdge(id=edge_id, source=source, target=target, label=label)
