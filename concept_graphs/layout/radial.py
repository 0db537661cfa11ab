"""
Root-centred radial layouts.

  - RadialLayout: rings by BFS hop distance from the root
  - IntelligentRadialLayout: rings by relationship score, so that closely
    related concepts sit nearer the root than loosely related ones
"""

from __future__ import annotations

import logging
import math
from typing import Dict, List, Optional

import numpy as np

from ..config import LayoutConfig
from ..events import log_event
from ..graph_model import GraphModel
from ..models import ConceptGraph, UNREACHABLE
from ..scoring import RelationshipScorer
from ..traversal import TraversalEngine
from .base import LayoutEngine, Pos, clamp_array, current_positions

logger = logging.getLogger(__name__)

RING_FACTOR = 0.8

MAX_LEVELS = 5
BASE_RADIUS_FRACTION = 0.15
MAX_RADIUS_FRACTION = 0.40
JITTER_FRACTION = 0.05


# ============================================================================ #
# BFS radial layout
# ============================================================================ #

class RadialLayout(LayoutEngine):
    """
    Concentric rings around the root; ring ``d`` has radius
    ``d * radius * 0.8``. Unreachable nodes share the outermost ring.
    """

    name = "radial"

    def __init__(self, root_id: str, emit=None):
        super().__init__(emit=emit)
        self.root_id = root_id

    def distances(self, model: GraphModel) -> Dict[str, int]:
        dist = TraversalEngine(model).hop_distances(self.root_id)
        for nid in model.nodes:
            if nid not in dist:
                dist[nid] = UNREACHABLE
        return dist

    def layout(self, graph: ConceptGraph, config: Optional[LayoutConfig] = None) -> Pos:
        cfg = config or LayoutConfig()
        if not graph.nodes:
            return {}

        model = GraphModel.from_graph(graph)
        if self.root_id not in model:
            logger.debug("Radial root %r not in graph; keeping positions", self.root_id)
            return current_positions(graph, cfg)

        groups: Dict[int, List[str]] = {}
        for nid, d in self.distances(model).items():
            groups.setdefault(d, []).append(nid)

        cx, cy = cfg.center
        pos: Pos = {}
        for d, members in groups.items():
            if d == 0:
                for nid in members:
                    pos[nid] = (cx, cy)
                continue
            r = d * cfg.radius * RING_FACTOR
            step = 2 * math.pi / len(members)
            for i, nid in enumerate(members):
                a = i * step
                pos[nid] = (cx + r * math.cos(a), cy + r * math.sin(a))

        log_event(
            f"[layout] Radial layout around {self.root_id}: {len(groups)} ring(s)",
            self.emit,
            log=logger,
            n_nodes=len(pos),
            n_rings=len(groups),
        )
        return pos


# ============================================================================ #
# Relationship-weighted radial layout
# ============================================================================ #

class IntelligentRadialLayout(LayoutEngine):
    """
    Radial layout whose rings come from relationship scores.

    Non-root nodes are sorted by ascending combined score and cut into
    ``min(5, ceil(sqrt(n)) + 1) - 1`` equal slices, one slice per ring.
    Ring radii run linearly from 15% to 40% of the smaller canvas side.
    """

    name = "intelligent-radial"

    def __init__(self, root_id: str, emit=None):
        super().__init__(emit=emit)
        self.root_id = root_id

    @staticmethod
    def level_count(remaining: int) -> int:
        """Number of levels including the root level."""
        if remaining <= 0:
            return 1
        return min(MAX_LEVELS, math.ceil(math.sqrt(remaining)) + 1)

    def assign_levels(self, model: GraphModel, scorer: Optional[RelationshipScorer] = None) -> Dict[str, int]:
        """Map each node id to its ring (0 = root)."""
        if self.root_id not in model:
            return {}
        scorer = scorer or RelationshipScorer(model)
        scores = scorer.score_all(self.root_id)

        others = [nid for nid in model.nodes if nid != self.root_id]
        others.sort(key=lambda nid: scores[nid].combined_score)

        levels = {self.root_id: 0}
        rings = self.level_count(len(others)) - 1
        if rings == 0:
            return levels

        per_ring = math.ceil(len(others) / rings)
        for i, nid in enumerate(others):
            levels[nid] = i // per_ring + 1
        return levels

    @staticmethod
    def ring_radius(level: int, rings: int, config: LayoutConfig) -> float:
        side = min(config.width, config.height)
        base = BASE_RADIUS_FRACTION * side
        top = MAX_RADIUS_FRACTION * side
        frac = (level - 1) / (rings - 1) if rings > 1 else 0.0
        return base + (top - base) * frac

    def layout(self, graph: ConceptGraph, config: Optional[LayoutConfig] = None) -> Pos:
        cfg = config or LayoutConfig()
        if not graph.nodes:
            return {}

        model = GraphModel.from_graph(graph)
        if self.root_id not in model:
            logger.debug("Intelligent radial root %r not in graph; keeping positions", self.root_id)
            return current_positions(graph, cfg)

        scorer = RelationshipScorer(model)
        levels = self.assign_levels(model, scorer)

        by_level: Dict[int, List[str]] = {}
        for nid, lvl in levels.items():
            if lvl > 0:
                by_level.setdefault(lvl, []).append(nid)
        rings = max(by_level) if by_level else 0

        cx, cy = cfg.center
        rng = np.random.default_rng(cfg.seed)
        ids: List[str] = []
        coords: List[tuple] = []

        for lvl in sorted(by_level):
            members = sorted(by_level[lvl], key=scorer.importance, reverse=True)
            r = self.ring_radius(lvl, rings, cfg)
            step = 2 * math.pi / len(members)
            # Half-step offset on every other ring keeps spokes from lining up.
            offset = step / 2 if lvl % 2 == 0 else 0.0
            for i, nid in enumerate(members):
                a = i * step + offset
                jitter = rng.uniform(0.0, JITTER_FRACTION * r)
                ja = rng.uniform(0.0, 2 * math.pi)
                ids.append(nid)
                coords.append((
                    cx + r * math.cos(a) + jitter * math.cos(ja),
                    cy + r * math.sin(a) + jitter * math.sin(ja),
                ))

        pos: Pos = {self.root_id: (cx, cy)}
        if coords:
            xy = clamp_array(np.asarray(coords, dtype=float), cfg)
            for i, nid in enumerate(ids):
                pos[nid] = (float(xy[i, 0]), float(xy[i, 1]))

        log_event(
            f"[layout] Intelligent radial layout around {self.root_id}: {rings} ring(s)",
            self.emit,
            log=logger,
            n_nodes=len(pos),
            n_rings=rings,
            ring_sizes={lvl: len(m) for lvl, m in by_level.items()},
        )
        return pos
