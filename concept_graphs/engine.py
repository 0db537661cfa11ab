"""
High-level entry points for the concept graph engine.

These are the calls a UI store or service layer makes: each one takes a
plain graph snapshot (or a GraphModel built from one) plus configuration
and returns new data. Nothing here keeps state between calls.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional, Union

from .analytics import ClusterAnalyzer, GraphStats, compute_graph_stats
from .config import LayoutConfig, QueryConfig
from .errors import RootRequiredError
from .events import EmitFn, log_event
from .graph_model import GraphModel, build_model
from .layout.base import LayoutEngine, current_positions
from .layout.force import ForceDirectedLayout
from .layout.hierarchy import LinearHierarchyLayout, create_linear_layout
from .layout.postprocess import calculate_optimal_spacing, resolve_overlaps
from .layout.radial import IntelligentRadialLayout, RadialLayout
from .models import ClusterResult, ConceptGraph, ConceptNode, PathResult
from .similarity import SimilarityEngine
from .traversal import TraversalEngine

logger = logging.getLogger(__name__)


FORCE_DIRECTED = "force-directed"
RADIAL = "radial"
INTELLIGENT_RADIAL = "intelligent-radial"
LINEAR_HIERARCHY = "linear-hierarchy"

STRATEGIES = (FORCE_DIRECTED, RADIAL, INTELLIGENT_RADIAL, LINEAR_HIERARCHY)

_STRATEGY_ALIASES = {
    "forcedirected": FORCE_DIRECTED,
    "force": FORCE_DIRECTED,
    "radial": RADIAL,
    "intelligentradial": INTELLIGENT_RADIAL,
    "intelligent": INTELLIGENT_RADIAL,
    "linearhierarchy": LINEAR_HIERARCHY,
    "hierarchy": LINEAR_HIERARCHY,
    "hierarchical": LINEAR_HIERARCHY,
}

ROOTED_STRATEGIES = (RADIAL, INTELLIGENT_RADIAL)

ConfigLike = Union[LayoutConfig, Dict[str, Any], None]


def normalise_strategy(strategy: str) -> str:
    """Map "ForceDirected", "force_directed", "radial", ... to a canonical name."""
    key = strategy.replace("-", "").replace("_", "").replace(" ", "").lower()
    try:
        return _STRATEGY_ALIASES[key]
    except KeyError:
        raise ValueError(f"Unknown layout strategy {strategy!r}; expected one of {STRATEGIES}") from None


def _layout_config(config: ConfigLike) -> LayoutConfig:
    if isinstance(config, LayoutConfig):
        return config
    return LayoutConfig.from_dict(config or {})


# ====================================================================== #
# Queries
# ====================================================================== #

def traverse(
    model: GraphModel,
    start_id: str,
    mode: str = "bfs",
    max_depth: Optional[int] = None,
    config: Optional[QueryConfig] = None,
) -> List[str]:
    engine = TraversalEngine(model, config)
    mode = mode.lower()
    if mode == "bfs":
        return engine.bfs(start_id, max_depth)
    if mode == "dfs":
        return engine.dfs(start_id, max_depth)
    raise ValueError(f"Unknown traversal mode {mode!r}; expected 'bfs' or 'dfs'")


def shortest_path(model: GraphModel, source_id: str, target_id: str) -> PathResult:
    return TraversalEngine(model).shortest_path(source_id, target_id)


def all_paths(model: GraphModel, source_id: str, target_id: str, max_depth: int = 10) -> List[PathResult]:
    return TraversalEngine(model).all_paths(source_id, target_id, max_depth)


def connected_nodes(
    model: GraphModel,
    node_id: str,
    include_incoming: bool = True,
    include_outgoing: bool = True,
) -> List[str]:
    return TraversalEngine(model).connected_nodes(node_id, include_incoming, include_outgoing)


def find_similar_nodes(
    model: GraphModel,
    node_id: str,
    threshold: Optional[float] = None,
    config: Optional[QueryConfig] = None,
) -> List[Dict[str, Any]]:
    return SimilarityEngine(model, config).find_similar_nodes(node_id, threshold)


def identify_clusters(model: GraphModel, min_size: int = 2, emit: Optional[EmitFn] = None) -> List[ClusterResult]:
    return ClusterAnalyzer(model, emit=emit).identify_clusters(min_size)


def graph_statistics(model: GraphModel) -> GraphStats:
    return compute_graph_stats(model)


# ====================================================================== #
# Layout
# ====================================================================== #

def make_layout_engine(strategy: str, root_id: Optional[str] = None, emit: Optional[EmitFn] = None) -> LayoutEngine:
    name = normalise_strategy(strategy)
    if name == FORCE_DIRECTED:
        return ForceDirectedLayout(emit=emit)
    if name == RADIAL:
        return RadialLayout(root_id, emit=emit)
    if name == INTELLIGENT_RADIAL:
        return IntelligentRadialLayout(root_id, emit=emit)
    return LinearHierarchyLayout(root_id, emit=emit)


def apply_layout(
    graph: ConceptGraph,
    strategy: str,
    config: ConfigLike = None,
    root_id: Optional[str] = None,
    *,
    default_root_to_first: bool = False,
    resolve: bool = True,
    emit: Optional[EmitFn] = None,
) -> ConceptGraph:
    """
    Run one layout strategy and return a new graph with updated positions.

    Radial strategies need ``root_id``; without one they raise
    RootRequiredError unless ``default_root_to_first`` picks the first node.
    A ``root_id`` that is not in the graph leaves positions as they were.
    Residual overlaps are resolved afterwards unless ``resolve`` is False.
    """
    name = normalise_strategy(strategy)
    cfg = _layout_config(config)

    if not graph.nodes:
        return ConceptGraph(nodes=[], edges=list(graph.edges))

    if name in ROOTED_STRATEGIES and root_id is None:
        if not default_root_to_first:
            raise RootRequiredError(name)
        root_id = graph.nodes[0].id

    if name != FORCE_DIRECTED and root_id is not None and root_id not in graph.node_ids():
        log_event(
            f"[engine] Root {root_id!r} not in graph; {name} layout left positions unchanged",
            emit,
            log=logger,
            strategy=name,
            n_nodes=len(graph.nodes),
            root_id=root_id,
        )
        return graph.with_positions(current_positions(graph, cfg))

    engine = make_layout_engine(name, root_id, emit=emit)
    laid_out = graph.with_positions(engine.layout(graph, cfg))

    nodes = laid_out.nodes
    if resolve:
        nodes = resolve_overlaps(nodes, node_radius=cfg.node_radius, emit=emit)

    log_event(
        f"[engine] Applied {name} layout to {len(nodes)} node(s)",
        emit,
        log=logger,
        strategy=name,
        n_nodes=len(nodes),
        root_id=root_id,
    )
    return ConceptGraph(nodes=nodes, edges=list(graph.edges))


def apply_force_directed_layout(graph: ConceptGraph, config: ConfigLike = None) -> ConceptGraph:
    return apply_layout(graph, FORCE_DIRECTED, config)


def apply_radial_layout(graph: ConceptGraph, root_id: str, config: ConfigLike = None) -> ConceptGraph:
    return apply_layout(graph, RADIAL, config, root_id)


def apply_intelligent_radial_layout(graph: ConceptGraph, root_id: str, config: ConfigLike = None) -> ConceptGraph:
    return apply_layout(graph, INTELLIGENT_RADIAL, config, root_id)


def apply_hierarchy_layout(
    graph: ConceptGraph,
    root_id: Optional[str] = None,
    config: ConfigLike = None,
) -> ConceptGraph:
    return apply_layout(graph, LINEAR_HIERARCHY, config, root_id)


def apply_linear_layout(
    nodes: List[ConceptNode],
    canvas_width: float,
    canvas_height: float,
    spacing: float = 150.0,
) -> List[ConceptNode]:
    return create_linear_layout(nodes, canvas_width, canvas_height, spacing)


def auto_layout(
    graph: ConceptGraph,
    mode: str,
    canvas_width: float,
    canvas_height: float,
    root_id: Optional[str] = None,
    emit: Optional[EmitFn] = None,
) -> ConceptGraph:
    """
    Pick a layout for a view mode.

    "focus" lays nodes out on one line; "exploration" uses the intelligent
    radial layout around ``root_id`` when it exists, force-directed otherwise.
    """
    if mode == "focus":
        nodes = create_linear_layout(graph.nodes, canvas_width, canvas_height)
        return ConceptGraph(nodes=nodes, edges=list(graph.edges))
    if mode != "exploration":
        raise ValueError(f"Unknown view mode {mode!r}; expected 'focus' or 'exploration'")

    cfg = LayoutConfig(
        width=canvas_width,
        height=canvas_height,
        node_spacing=calculate_optimal_spacing(len(graph.nodes), canvas_width, canvas_height),
    )
    if root_id is not None and any(n.id == root_id for n in graph.nodes):
        return apply_layout(graph, INTELLIGENT_RADIAL, cfg, root_id, emit=emit)
    return apply_layout(graph, FORCE_DIRECTED, cfg, emit=emit)
