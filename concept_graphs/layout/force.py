"""
Force-directed layout (simplified Fruchterman-Reingold).

Per iteration:
  - pairwise repulsion  ~ node_spacing^2 / distance
  - edge attraction     ~ distance
  - per-node force clamped to ``max_force``
  - positions clamped into the padded canvas

Repulsion is O(V^2) per iteration, vectorised with NumPy; fine for the
low hundreds of nodes a concept map holds.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from ..config import LayoutConfig
from ..events import log_event
from ..graph_model import GraphModel
from ..models import ConceptGraph
from .base import LayoutEngine, Pos, clamp_array

logger = logging.getLogger(__name__)


class ForceDirectedLayout(LayoutEngine):
    name = "force-directed"

    def _seed_positions(self, graph: ConceptGraph, config: LayoutConfig, rng) -> np.ndarray:
        xy = np.empty((len(graph.nodes), 2), dtype=float)
        for i, node in enumerate(graph.nodes):
            if node.position is not None:
                xy[i] = node.position
            else:
                xy[i] = (rng.uniform(0.0, config.width), rng.uniform(0.0, config.height))
        return xy

    @staticmethod
    def _repulsive_forces(xy: np.ndarray, config: LayoutConfig) -> np.ndarray:
        diff = xy[:, None, :] - xy[None, :, :]              # (n, n, 2), i - j
        dist = np.sqrt((diff ** 2).sum(axis=-1))
        dist[dist == 0] = 1.0
        force = (config.node_spacing ** 2) / dist * config.force_strength
        return (diff / dist[..., None] * force[..., None]).sum(axis=1)

    @staticmethod
    def _attractive_forces(xy: np.ndarray, src: np.ndarray, tgt: np.ndarray, config: LayoutConfig) -> np.ndarray:
        forces = np.zeros_like(xy)
        if src.size == 0:
            return forces
        delta = xy[tgt] - xy[src]
        dist = np.sqrt((delta ** 2).sum(axis=-1))
        dist[dist == 0] = 1.0
        magnitude = dist * config.force_strength * 0.5
        f = delta / dist[:, None] * magnitude[:, None]
        np.add.at(forces, src, f)
        np.add.at(forces, tgt, -f)
        return forces

    @staticmethod
    def _clamp_forces(forces: np.ndarray, max_force: float) -> np.ndarray:
        mag = np.sqrt((forces ** 2).sum(axis=-1))
        scale = np.ones_like(mag)
        over = mag > max_force
        scale[over] = max_force / mag[over]
        return forces * scale[:, None]

    def layout(self, graph: ConceptGraph, config: Optional[LayoutConfig] = None) -> Pos:
        cfg = config or LayoutConfig()
        if not graph.nodes:
            return {}

        model = GraphModel.from_graph(graph)
        ids = [n.id for n in graph.nodes]
        index = {nid: i for i, nid in enumerate(ids)}

        src = np.array([index[e.source] for e in model.edges.values()], dtype=int)
        tgt = np.array([index[e.target] for e in model.edges.values()], dtype=int)

        rng = np.random.default_rng(cfg.seed)
        xy = self._seed_positions(graph, cfg, rng)

        for _ in range(cfg.iterations):
            forces = self._repulsive_forces(xy, cfg)
            forces += self._attractive_forces(xy, src, tgt, cfg)
            xy = clamp_array(xy + self._clamp_forces(forces, cfg.max_force), cfg)

        log_event(
            f"[layout] Force-directed layout: {len(ids)} nodes, {cfg.iterations} iterations",
            self.emit,
            log=logger,
            n_nodes=len(ids),
            n_edges=int(src.size),
            iterations=cfg.iterations,
        )

        return {nid: (float(xy[i, 0]), float(xy[i, 1])) for i, nid in enumerate(ids)}
