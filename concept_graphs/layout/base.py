"""
Shared helpers for the 2D layout engines.

Every engine exposes ``layout(graph, config) -> Dict[node_id, (x, y)]``
covering every node of ``graph``. Engines never touch the input nodes;
``ConceptGraph.with_positions`` turns the result into a new graph.
"""

from __future__ import annotations

from typing import Dict, Optional, Tuple

import numpy as np

from ..config import LayoutConfig
from ..events import EmitFn
from ..models import ConceptGraph


Pos = Dict[str, Tuple[float, float]]


class LayoutEngine:
    """Base class: subclasses implement ``layout``."""

    name = "base"

    def __init__(self, emit: Optional[EmitFn] = None):
        self.emit = emit

    def layout(self, graph: ConceptGraph, config: Optional[LayoutConfig] = None) -> Pos:
        raise NotImplementedError


def clamp_array(xy: np.ndarray, config: LayoutConfig) -> np.ndarray:
    """
    Clamp an (n, 2) array into the padded canvas.

    Written as max(lo, min(hi, v)) so that a canvas narrower than twice the
    padding pins nodes to ``lo`` rather than raising.
    """
    pad = config.boundary_padding
    out = np.empty_like(xy, dtype=float)
    out[:, 0] = np.maximum(pad, np.minimum(config.width - pad, xy[:, 0]))
    out[:, 1] = np.maximum(pad, np.minimum(config.height - pad, xy[:, 1]))
    return out


def current_positions(graph: ConceptGraph, config: LayoutConfig) -> Pos:
    """
    Existing positions, with the canvas centre for nodes that have none.

    Used when a root-centred layout is asked for a root that is not in the
    graph: the layout is left as it was.
    """
    cx, cy = config.center
    return {
        n.id: (float(n.position[0]), float(n.position[1])) if n.position is not None else (cx, cy)
        for n in graph.nodes
    }
