"""
Analytic layers: connected clusters and degree statistics.

  - ClusterAnalyzer: connected components with cohesion and centroid
  - compute_graph_stats: node/edge counts, degree distribution, density,
    transitivity
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional

import networkx as nx
import numpy as np

from .events import EmitFn, get_emit, log_event
from .graph_model import GraphModel
from .models import ClusterResult

logger = logging.getLogger(__name__)


# =========================================================================== #
# Data classes
# =========================================================================== #

@dataclass
class GraphStats:
    n_nodes: int
    n_edges: int
    density: float
    avg_degree: float
    max_degree: int
    min_degree: int
    transitivity: float
    degrees: List[int] = field(default_factory=list)


# =========================================================================== #
# Clusters
# =========================================================================== #

class ClusterAnalyzer:
    def __init__(self, model: GraphModel, emit: Optional[EmitFn] = None):
        self.model = model
        self.emit = emit

    def _components(self) -> List[List[str]]:
        """Connected components via an explicit stack (no recursion)."""
        visited = set()
        components: List[List[str]] = []

        for start in self.model.nodes:
            if start in visited:
                continue
            members: List[str] = []
            stack = [start]
            while stack:
                current = stack.pop()
                if current in visited:
                    continue
                visited.add(current)
                members.append(current)
                for nid in self.model.neighbors(current, "both"):
                    if nid not in visited:
                        stack.append(nid)
            components.append(members)

        return components

    def identify_clusters(self, min_size: int = 2) -> List[ClusterResult]:
        """
        Connected components with at least ``min_size`` members, sorted by
        cohesion (highest first).

        cohesion = intra-cluster neighbour links / (n * (n - 1))
        centroid = member with the most intra-cluster neighbours (first wins)
        """
        clusters: List[ClusterResult] = []

        for members in self._components():
            if len(members) < min_size:
                continue

            member_set = set(members)
            total = 0
            centroid = members[0]
            best = 0
            for nid in members:
                links = sum(1 for m in self.model.neighbors(nid, "both") if m in member_set)
                total += links
                if links > best:
                    best = links
                    centroid = nid

            n = len(members)
            cohesion = total / (n * (n - 1)) if n > 1 else 1.0

            clusters.append(
                ClusterResult(
                    id=f"cluster-{len(clusters)}",
                    node_ids=members,
                    centroid=centroid,
                    cohesion=float(cohesion),
                )
            )

        clusters.sort(key=lambda c: c.cohesion, reverse=True)

        log_event(
            f"[analytics] Identified {len(clusters)} cluster(s) (min_size={min_size})",
            self.emit,
            log=logger,
            n_clusters=len(clusters),
            sizes=[len(c.node_ids) for c in clusters],
        )
        return clusters


# =========================================================================== #
# Graph statistics
# =========================================================================== #

def compute_graph_stats(model: GraphModel) -> GraphStats:
    if len(model) == 0:
        return GraphStats(0, 0, 0.0, 0.0, 0, 0, 0.0, [])

    degrees = [model.degree(nid) for nid in model.nodes]
    arr = np.asarray(degrees, dtype=float)

    G = model.to_networkx()
    n = G.number_of_nodes()
    density = float(nx.density(G)) if n > 1 else 0.0
    try:
        transitivity = float(nx.transitivity(G)) if n > 2 else 0.0
    except ZeroDivisionError:
        transitivity = 0.0

    return GraphStats(
        n_nodes=n,
        n_edges=len(model.edges),
        density=density,
        avg_degree=float(arr.mean()),
        max_degree=int(arr.max()),
        min_degree=int(arr.min()),
        transitivity=transitivity,
        degrees=degrees,
    )


def identify_clusters(model: GraphModel, min_size: int = 2, emit: Optional[EmitFn] = None) -> List[ClusterResult]:
    return ClusterAnalyzer(model, emit=get_emit(emit)).identify_clusters(min_size)
