"""
Concept graph analysis and layout engine.

Adjacency indexing, traversal and path queries, similarity search,
cluster analytics, relationship scoring and 2D layout strategies for
concept maps.
"""

# ---------------------------------------------------------------------------
# Data model
# ---------------------------------------------------------------------------
from .models import (
    ConceptNode,
    ConceptEdge,
    ConceptGraph,
    PathResult,
    ClusterResult,
    RelationshipScore,
    CONCEPT_TYPES,
    DIFFICULTIES,
    UNREACHABLE,
)

# ---------------------------------------------------------------------------
# Configuration, errors, logging
# ---------------------------------------------------------------------------
from .config import (
    LayoutConfig,
    QueryConfig,
    EngineConfig,
    load_config,
)
from .errors import ConceptGraphError, RootRequiredError
from .events import configure_logging

# ---------------------------------------------------------------------------
# Analysis components
# ---------------------------------------------------------------------------
from .graph_model import GraphModel
from .traversal import TraversalEngine
from .similarity import (
    SimilarityEngine,
    string_similarity,
    keyword_similarity,
)
from .analytics import (
    ClusterAnalyzer,
    GraphStats,
    compute_graph_stats,
)
from .scoring import RelationshipScorer, CONCEPT_TYPE_COMPATIBILITY
from .query import (
    NodeFilterCriteria,
    SearchOptions,
    filter_nodes,
    search_nodes,
    quick_search,
)

# ---------------------------------------------------------------------------
# Layout engines
# ---------------------------------------------------------------------------
from .layout import (
    ForceDirectedLayout,
    RadialLayout,
    IntelligentRadialLayout,
    LinearHierarchyLayout,
    ViewState,
    AnimationHandle,
    resolve_overlaps,
    calculate_optimal_view,
    calculate_optimal_spacing,
    animate_to_positions,
)

# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------
from .engine import (
    build_model,
    traverse,
    shortest_path,
    all_paths,
    find_similar_nodes,
    identify_clusters,
    graph_statistics,
    apply_layout,
    apply_force_directed_layout,
    apply_radial_layout,
    apply_intelligent_radial_layout,
    apply_hierarchy_layout,
    apply_linear_layout,
    auto_layout,
)

# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------
__all__ = [
    # Model
    "ConceptNode",
    "ConceptEdge",
    "ConceptGraph",
    "PathResult",
    "ClusterResult",
    "RelationshipScore",
    "CONCEPT_TYPES",
    "DIFFICULTIES",
    "UNREACHABLE",

    # Config / errors / logging
    "LayoutConfig",
    "QueryConfig",
    "EngineConfig",
    "load_config",
    "ConceptGraphError",
    "RootRequiredError",
    "configure_logging",

    # Analysis
    "GraphModel",
    "TraversalEngine",
    "SimilarityEngine",
    "string_similarity",
    "keyword_similarity",
    "ClusterAnalyzer",
    "GraphStats",
    "compute_graph_stats",
    "RelationshipScorer",
    "CONCEPT_TYPE_COMPATIBILITY",
    "NodeFilterCriteria",
    "SearchOptions",
    "filter_nodes",
    "search_nodes",
    "quick_search",

    # Layouts
    "ForceDirectedLayout",
    "RadialLayout",
    "IntelligentRadialLayout",
    "LinearHierarchyLayout",
    "ViewState",
    "AnimationHandle",
    "resolve_overlaps",
    "calculate_optimal_view",
    "calculate_optimal_spacing",
    "animate_to_positions",

    # Entry points
    "build_model",
    "traverse",
    "shortest_path",
    "all_paths",
    "find_similar_nodes",
    "identify_clusters",
    "graph_statistics",
    "apply_layout",
    "apply_force_directed_layout",
    "apply_radial_layout",
    "apply_intelligent_radial_layout",
    "apply_hierarchy_layout",
    "apply_linear_layout",
    "auto_layout",
]
