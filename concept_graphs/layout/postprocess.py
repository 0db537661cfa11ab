"""
Post-layout utilities: overlap handling, viewport fitting, spacing.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..events import EmitFn, log_event
from ..models import ConceptNode

logger = logging.getLogger(__name__)

DEFAULT_NODE_RADIUS = 30.0
MAX_OVERLAP_ITERATIONS = 10
VIEW_PADDING = 100.0
MAX_ZOOM = 2.0
MIN_ZOOM = 0.1


@dataclass
class ViewState:
    zoom: float
    pan: Tuple[float, float]


# --------------------------------------------------------------------------- #
# Overlaps
# --------------------------------------------------------------------------- #

def get_node_overlap(a: ConceptNode, b: ConceptNode, node_radius: float = DEFAULT_NODE_RADIUS) -> float:
    """How far two nodes intrude into each other; 0 if either is unpositioned."""
    if a.position is None or b.position is None:
        return 0.0
    dist = math.hypot(a.position[0] - b.position[0], a.position[1] - b.position[1])
    return max(0.0, 2 * node_radius - dist)


def resolve_overlaps(
    nodes: List[ConceptNode],
    node_radius: float = DEFAULT_NODE_RADIUS,
    max_iterations: int = MAX_OVERLAP_ITERATIONS,
    emit: Optional[EmitFn] = None,
) -> List[ConceptNode]:
    """
    Push overlapping nodes apart, half the overlap each, along the line
    joining their centres. Stops after a clean pass or ``max_iterations``.

    Returns copies; unpositioned nodes are passed through untouched.
    Exactly coincident nodes are separated along the x axis.
    """
    placed = [i for i, n in enumerate(nodes) if n.position is not None]
    xy = np.array([nodes[i].position for i in placed], dtype=float).reshape(-1, 2)
    min_dist = 2 * node_radius

    passes = 0
    for _ in range(max_iterations):
        passes += 1
        moved = False
        for i in range(len(xy)):
            for j in range(i + 1, len(xy)):
                dx, dy = xy[i] - xy[j]
                dist = math.hypot(dx, dy)
                overlap = min_dist - dist
                if overlap <= 0:
                    continue
                moved = True
                if dist == 0:
                    ux, uy = 1.0, 0.0
                else:
                    ux, uy = dx / dist, dy / dist
                shift = np.array((ux, uy)) * (overlap / 2)
                xy[i] += shift
                xy[j] -= shift
        if not moved:
            break

    out = list(nodes)
    for k, i in enumerate(placed):
        out[i] = nodes[i].with_position((float(xy[k, 0]), float(xy[k, 1])))

    log_event(
        f"[layout] Overlap resolution finished after {passes} pass(es)",
        emit,
        log=logger,
        passes=passes,
        n_nodes=len(placed),
    )
    return out


# --------------------------------------------------------------------------- #
# Viewport
# --------------------------------------------------------------------------- #

def calculate_optimal_view(nodes: List[ConceptNode], canvas_width: float, canvas_height: float) -> ViewState:
    """Zoom and pan that fit every positioned node on the canvas."""
    pts = np.array([n.position for n in nodes if n.position is not None], dtype=float)
    if pts.size == 0:
        return ViewState(zoom=1.0, pan=(0.0, 0.0))

    min_x, min_y = pts.min(axis=0)
    max_x, max_y = pts.max(axis=0)
    graph_w = float(max_x - min_x) or 1.0
    graph_h = float(max_y - min_y) or 1.0
    centre_x = float(min_x + max_x) / 2
    centre_y = float(min_y + max_y) / 2

    zoom_x = (canvas_width - VIEW_PADDING * 2) / graph_w
    zoom_y = (canvas_height - VIEW_PADDING * 2) / graph_h
    zoom = min(zoom_x, zoom_y, MAX_ZOOM)

    pan = (canvas_width / 2 - centre_x * zoom, canvas_height / 2 - centre_y * zoom)
    return ViewState(zoom=max(MIN_ZOOM, zoom), pan=pan)


def calculate_optimal_spacing(node_count: int, canvas_width: float, canvas_height: float) -> float:
    """Spacing from the canvas area available per node, clamped to [60, 200]."""
    if node_count <= 0:
        return 200.0
    spacing = math.sqrt(canvas_width * canvas_height / node_count) * 0.8
    return max(60.0, min(200.0, spacing))
