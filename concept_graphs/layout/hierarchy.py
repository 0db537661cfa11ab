"""
Left-to-right / top-down hierarchy layouts.

  - LinearHierarchyLayout: tree levels from edge direction (source = parent),
    children centred as a group under their parent
  - create_linear_layout: a single centred horizontal line (focus mode)
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Dict, List, Optional

from ..config import LayoutConfig
from ..events import log_event
from ..graph_model import GraphModel
from ..models import ConceptGraph, ConceptNode
from .base import LayoutEngine, Pos, current_positions

logger = logging.getLogger(__name__)


class LinearHierarchyLayout(LayoutEngine):
    """
    Levels come from a BFS over parent -> children links starting at the
    root (or every parentless node, or the first node as a last resort).
    Nodes the BFS never reaches go on one extra level at the bottom.

    Sibling groups sit centred under their parent unless that would overlap
    the group to their left, in which case they shift right. Nodes without a
    placed parent follow the rightmost group on their level. An explicit
    ``root_id`` that is not in the graph leaves positions unchanged.
    """

    name = "linear-hierarchy"

    def __init__(self, root_id: Optional[str] = None, emit=None):
        super().__init__(emit=emit)
        self.root_id = root_id

    def roots(self, model: GraphModel) -> List[str]:
        if self.root_id is not None:
            return [self.root_id] if self.root_id in model else []
        parentless = [nid for nid in model.nodes if not model.reverse_adjacency[nid]]
        if parentless:
            return parentless
        return model.node_ids()[:1]

    def assign_levels(self, model: GraphModel):
        """
        Return ``(levels, parents)``: level per node id and the parent that
        discovered each non-root node during the BFS.
        """
        levels: Dict[str, int] = {}
        parents: Dict[str, str] = {}
        queue = deque()
        for rid in self.roots(model):
            levels[rid] = 0
            queue.append(rid)

        while queue:
            current = queue.popleft()
            for child in model.neighbors(current, "out"):
                if child in levels:
                    continue
                levels[child] = levels[current] + 1
                parents[child] = current
                queue.append(child)

        unreached = [nid for nid in model.nodes if nid not in levels]
        if unreached:
            bottom = max(levels.values()) + 1 if levels else 0
            for nid in unreached:
                levels[nid] = bottom

        return levels, parents

    def layout(self, graph: ConceptGraph, config: Optional[LayoutConfig] = None) -> Pos:
        cfg = config or LayoutConfig()
        if not graph.nodes:
            return {}

        model = GraphModel.from_graph(graph)
        if self.root_id is not None and self.root_id not in model:
            logger.debug("Hierarchy root %r not in graph; keeping positions", self.root_id)
            return current_positions(graph, cfg)

        levels, parents = self.assign_levels(model)

        by_level: Dict[int, List[str]] = {}
        for nid in model.nodes:
            by_level.setdefault(levels[nid], []).append(nid)

        step = cfg.node_spacing + cfg.estimated_node_width
        depth = max(by_level)
        top = cfg.height / 2 - depth * cfg.level_spacing / 2
        pos: Pos = {}

        def centred_row(members: List[str], centre_x: float, y: float) -> None:
            start = centre_x - (len(members) - 1) * step / 2
            for i, nid in enumerate(members):
                pos[nid] = (start + i * step, y)

        for lvl in sorted(by_level):
            members = by_level[lvl]
            y = top + lvl * cfg.level_spacing

            if lvl == 0:
                centred_row(members, cfg.width / 2, y)
                continue

            groups: Dict[str, List[str]] = {}
            orphans: List[str] = []
            for nid in members:
                parent = parents.get(nid)
                if parent is not None and parent in pos:
                    groups.setdefault(parent, []).append(nid)
                else:
                    orphans.append(nid)

            if not groups:
                centred_row(orphans, cfg.width / 2, y)
                continue

            # Left-to-right by parent x; a group never starts before the previous one ends.
            cursor = None
            for parent in sorted(groups, key=lambda p: pos[p][0]):
                children = groups[parent]
                start = pos[parent][0] - (len(children) - 1) * step / 2
                if cursor is not None and start < cursor:
                    start = cursor
                for i, nid in enumerate(children):
                    pos[nid] = (start + i * step, y)
                cursor = start + len(children) * step

            for i, nid in enumerate(orphans):
                pos[nid] = (cursor + i * step, y)

        log_event(
            f"[layout] Hierarchy layout: {depth + 1} level(s)",
            self.emit,
            log=logger,
            n_nodes=len(pos),
            n_levels=depth + 1,
        )
        return pos


def create_linear_layout(
    nodes: List[ConceptNode],
    canvas_width: float,
    canvas_height: float,
    spacing: float = 150.0,
) -> List[ConceptNode]:
    """Copies of ``nodes`` on one horizontal line, centred on the canvas."""
    y = canvas_height / 2
    start = (canvas_width - (len(nodes) - 1) * spacing) / 2
    return [n.with_position((start + i * spacing, y)) for i, n in enumerate(nodes)]
