"""
Configuration for the concept graph engine.

This module centralizes configuration for:

    - layout computation (canvas size, spacing, physics constants)
    - graph queries (traversal depth, similarity threshold, text matching)
    - engine-wide flags (logging, default seed)

It provides:
    LayoutConfig   – per-call layout parameters
    QueryConfig    – per-call query parameters
    EngineConfig   – process-level settings
    load_config()  – load EngineConfig from environment variables or defaults
"""

from __future__ import annotations

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Optional


# Keys accepted from UI-layer (camelCase) configuration objects.
_LAYOUT_ALIASES = {
    "nodeSpacing": "node_spacing",
    "forceStrength": "force_strength",
    "maxForce": "max_force",
    "boundaryPadding": "boundary_padding",
    "nodeRadius": "node_radius",
    "estimatedNodeWidth": "estimated_node_width",
    "levelSpacing": "level_spacing",
}

_QUERY_ALIASES = {
    "maxDepth": "max_depth",
    "caseSensitive": "case_sensitive",
    "similarityThreshold": "similarity_threshold",
    "includePartialMatches": "include_partial_matches",
}


def _normalise_keys(data: Dict[str, Any], aliases: Dict[str, str], cls) -> Dict[str, Any]:
    known = {f.name for f in fields(cls)}
    out: Dict[str, Any] = {}
    for key, value in data.items():
        name = aliases.get(key, key)
        if name in known and value is not None:
            out[name] = value
    return out


# --------------------------------------------------------------------------- #
# Layout
# --------------------------------------------------------------------------- #

@dataclass
class LayoutConfig:
    """
    Parameters shared by all layout strategies.

    Attributes
    ----------
    width, height:
        Canvas size in pixels.

    node_spacing:
        Target distance between nodes; drives force-directed repulsion and
        sibling spacing in the hierarchy layout.

    iterations, force_strength, max_force:
        Force-directed simulation controls.

    radius:
        Ring spacing for the BFS radial layout (ring d sits at d * radius * 0.8).

    boundary_padding:
        Margin kept free on every canvas side by the clamping layouts.

    node_radius:
        Radius used by overlap resolution.

    estimated_node_width, level_spacing:
        Hierarchy layout geometry.

    seed:
        Seed for the random parts of the layouts; None draws fresh entropy.
    """

    width: float = 800.0
    height: float = 600.0
    node_spacing: float = 100.0
    iterations: int = 50
    force_strength: float = 0.1
    radius: float = 200.0
    max_force: float = 10.0
    boundary_padding: float = 50.0
    node_radius: float = 30.0
    estimated_node_width: float = 200.0
    level_spacing: float = 120.0
    seed: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None, **overrides: Any) -> "LayoutConfig":
        """Build a config from a partial (snake_case or camelCase) mapping."""
        merged = dict(data or {})
        merged.update(overrides)
        return cls(**_normalise_keys(merged, _LAYOUT_ALIASES, cls))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @property
    def center(self):
        return (self.width / 2.0, self.height / 2.0)


# --------------------------------------------------------------------------- #
# Queries
# --------------------------------------------------------------------------- #

@dataclass
class QueryConfig:
    max_depth: int = 10
    case_sensitive: bool = False
    similarity_threshold: float = 0.7
    include_partial_matches: bool = True

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]] = None, **overrides: Any) -> "QueryConfig":
        merged = dict(data or {})
        merged.update(overrides)
        return cls(**_normalise_keys(merged, _QUERY_ALIASES, cls))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# --------------------------------------------------------------------------- #
# Engine
# --------------------------------------------------------------------------- #

@dataclass
class EngineConfig:
    """
    Process-level settings.

    Attributes
    ----------
    enable_logging:
        Whether configure_logging() should install a basic log handler.

    log_level:
        Level name used when logging is enabled.

    max_depth, similarity_threshold:
        Defaults for derived QueryConfig objects.

    seed:
        Default seed for derived LayoutConfig objects.
    """

    enable_logging: bool = False
    log_level: str = "INFO"
    max_depth: int = 10
    similarity_threshold: float = 0.7
    seed: Optional[int] = None

    def query_config(self, **overrides: Any) -> QueryConfig:
        return QueryConfig.from_dict(
            {"max_depth": self.max_depth, "similarity_threshold": self.similarity_threshold},
            **overrides,
        )

    def layout_config(self, **overrides: Any) -> LayoutConfig:
        return LayoutConfig.from_dict({"seed": self.seed}, **overrides)


def load_config() -> EngineConfig:
    """
    Load EngineConfig from environment variables, falling back to defaults.

    Recognized variables:
        CONCEPT_GRAPHS_ENABLE_LOGGING         ("true" / "false" / "1" / "0")
        CONCEPT_GRAPHS_LOG_LEVEL              (DEBUG|INFO|WARNING|ERROR)
        CONCEPT_GRAPHS_MAX_DEPTH              (int)
        CONCEPT_GRAPHS_SIMILARITY_THRESHOLD   (float in [0, 1])
        CONCEPT_GRAPHS_SEED                   (int)

    Returns
    -------
    EngineConfig
    """

    def _env_flag(name: str, default: bool) -> bool:
        val = os.getenv(name)
        if val is None:
            return default
        return val.strip().lower() in ("1", "true", "yes", "on")

    seed = os.getenv("CONCEPT_GRAPHS_SEED")

    return EngineConfig(
        enable_logging=_env_flag("CONCEPT_GRAPHS_ENABLE_LOGGING", default=False),
        log_level=os.getenv("CONCEPT_GRAPHS_LOG_LEVEL", "INFO").upper(),
        max_depth=int(os.getenv("CONCEPT_GRAPHS_MAX_DEPTH", "10")),
        similarity_threshold=float(
            os.getenv("CONCEPT_GRAPHS_SIMILARITY_THRESHOLD", "0.7")
        ),
        seed=int(seed) if seed not in (None, "") else None,
    )
