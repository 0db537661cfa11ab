# concept_graphs/layout/__init__.py

"""
Layout subpackage for concept graphs.

Provides:
  - force-directed, BFS radial, relationship-weighted radial and
    hierarchy layouts
  - overlap resolution and viewport fitting
  - animated transitions between layouts
"""

from __future__ import annotations

from .base import LayoutEngine
from .force import ForceDirectedLayout
from .radial import RadialLayout, IntelligentRadialLayout
from .hierarchy import LinearHierarchyLayout, create_linear_layout
from .postprocess import (
    ViewState,
    get_node_overlap,
    resolve_overlaps,
    calculate_optimal_view,
    calculate_optimal_spacing,
)
from .animation import (
    AnimationHandle,
    TransitionAnimation,
    animate_to_positions,
    ease_out_cubic,
)

__all__ = [
    "LayoutEngine",
    "ForceDirectedLayout",
    "RadialLayout",
    "IntelligentRadialLayout",
    "LinearHierarchyLayout",
    "create_linear_layout",
    "ViewState",
    "get_node_overlap",
    "resolve_overlaps",
    "calculate_optimal_view",
    "calculate_optimal_spacing",
    "AnimationHandle",
    "TransitionAnimation",
    "animate_to_positions",
    "ease_out_cubic",
]
