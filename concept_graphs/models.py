"""
Core data model for concept graphs.

Nodes and edges are plain dataclasses. The engine reads them and, for
``position``, produces *new* node values; caller-owned objects are never
mutated in place.

Snapshot conversion (``from_dict`` / ``to_dict``) accepts the camelCase
keys used by the UI layer, so a JSON graph can be fed straight in.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple


Position = Tuple[float, float]

CONCEPT_TYPES: Tuple[str, ...] = ("Field", "Theory", "Algorithm", "Tool", "Person")
DIFFICULTIES: Tuple[str, ...] = ("Beginner", "Intermediate", "Advanced")

# Hop-count sentinel for unreachable nodes.
UNREACHABLE = 999


# =========================================================================== #
# Conversion helpers
# =========================================================================== #

def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _parse_datetime(value: Any) -> datetime:
    if isinstance(value, datetime):
        return value
    if isinstance(value, str) and value:
        # fromisoformat() does not take a trailing "Z" before 3.11
        text = value[:-1] + "+00:00" if value.endswith("Z") else value
        return datetime.fromisoformat(text)
    return _utcnow()


def _parse_position(value: Any) -> Optional[Position]:
    if value is None:
        return None
    if isinstance(value, dict):
        return (float(value.get("x", 0.0)), float(value.get("y", 0.0)))
    x, y = value
    return (float(x), float(y))


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


# =========================================================================== #
# Nodes / edges / graph
# =========================================================================== #

@dataclass
class ConceptNode:
    """A unit of knowledge content placed on the canvas."""

    id: str
    title: str
    keywords: List[str] = field(default_factory=list)
    explanation: str = ""
    concept_type: Optional[str] = None
    difficulty: Optional[str] = None
    position: Optional[Position] = None
    created_at: datetime = field(default_factory=_utcnow)
    updated_at: datetime = field(default_factory=_utcnow)
    resources: List[str] = field(default_factory=list)
    image_url: Optional[str] = None

    def with_position(self, position: Optional[Position]) -> "ConceptNode":
        """Return a copy of this node carrying ``position``."""
        return replace(
            self,
            position=None if position is None else (float(position[0]), float(position[1])),
            keywords=list(self.keywords),
            resources=list(self.resources),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptNode":
        return cls(
            id=str(data["id"]),
            title=str(_pick(data, "title", default="")),
            keywords=[str(k) for k in _pick(data, "keywords", default=[])],
            explanation=str(_pick(data, "explanation", default="")),
            concept_type=_pick(data, "conceptType", "concept_type"),
            difficulty=_pick(data, "difficulty"),
            position=_parse_position(_pick(data, "position")),
            created_at=_parse_datetime(_pick(data, "createdAt", "created_at")),
            updated_at=_parse_datetime(_pick(data, "updatedAt", "updated_at")),
            resources=[str(r) for r in _pick(data, "resources", default=[])],
            image_url=_pick(data, "imageUrl", "image_url"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {
            "id": self.id,
            "title": self.title,
            "keywords": list(self.keywords),
            "explanation": self.explanation,
            "createdAt": self.created_at.isoformat(),
            "updatedAt": self.updated_at.isoformat(),
            "resources": list(self.resources),
        }
        if self.concept_type is not None:
            out["conceptType"] = self.concept_type
        if self.difficulty is not None:
            out["difficulty"] = self.difficulty
        if self.position is not None:
            out["position"] = {"x": self.position[0], "y": self.position[1]}
        if self.image_url:
            out["imageUrl"] = self.image_url
        return out


@dataclass
class ConceptEdge:
    """Connection between two concept nodes (source -> target)."""

    id: str
    source: str
    target: str
    label: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptEdge":
        return cls(
            id=str(data["id"]),
            source=str(data["source"]),
            target=str(data["target"]),
            label=data.get("label"),
        )

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"id": self.id, "source": self.source, "target": self.target}
        if self.label is not None:
            out["label"] = self.label
        return out


@dataclass
class ConceptGraph:
    """
    Snapshot of a concept graph.

    Node ids are expected to be unique; edges may reference ids that are
    not present (they are ignored when the adjacency index is built).
    """

    nodes: List[ConceptNode] = field(default_factory=list)
    edges: List[ConceptEdge] = field(default_factory=list)

    def node_ids(self) -> List[str]:
        return [n.id for n in self.nodes]

    def positions(self) -> Dict[str, Position]:
        return {n.id: n.position for n in self.nodes if n.position is not None}

    def with_positions(self, pos: Dict[str, Position]) -> "ConceptGraph":
        """
        Return a new graph whose nodes are copies carrying ``pos``.

        Nodes missing from ``pos`` keep their current position.
        """
        nodes = [n.with_position(pos.get(n.id, n.position)) for n in self.nodes]
        return ConceptGraph(nodes=nodes, edges=list(self.edges))

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ConceptGraph":
        return cls(
            nodes=[ConceptNode.from_dict(n) for n in data.get("nodes", [])],
            edges=[ConceptEdge.from_dict(e) for e in data.get("edges", [])],
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
        }


# =========================================================================== #
# Derived results
# =========================================================================== #

@dataclass
class PathResult:
    path: List[str]
    distance: int
    found: bool

    @classmethod
    def not_found(cls) -> "PathResult":
        return cls(path=[], distance=-1, found=False)


@dataclass
class ClusterResult:
    id: str
    node_ids: List[str]
    centroid: Optional[str]
    cohesion: float


@dataclass
class RelationshipScore:
    """
    How closely a node relates to a chosen root.

    ``combined_score`` is lower for nodes that belong nearer the centre.
    """

    directness: int
    importance: float
    concept_type_weight: float
    keyword_similarity: float
    edge_strength: float
    combined_score: float
    level: int
