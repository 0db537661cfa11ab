"""
Traversal and path queries over a GraphModel.

All traversals treat edges as undirected (incoming + outgoing adjacency).
Unknown ids never raise: they yield empty / not-found results.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, List, Optional

from .config import QueryConfig
from .graph_model import GraphModel
from .models import PathResult


class TraversalEngine:
    def __init__(self, model: GraphModel, config: Optional[QueryConfig] = None):
        self.model = model
        self.config = config or QueryConfig()

    def _depth(self, max_depth: Optional[int]) -> int:
        return self.config.max_depth if max_depth is None else max_depth

    # ------------------------------------------------------------------ #
    # Distances
    # ------------------------------------------------------------------ #

    def hop_distances(self, start_id: str, max_depth: Optional[int] = None) -> Dict[str, int]:
        """
        Hop distance from ``start_id`` to every node reachable from it.

        Keys are in BFS discovery order. With ``max_depth`` set, nodes
        further away than that are left out.
        """
        if start_id not in self.model:
            return {}

        dist: Dict[str, int] = {start_id: 0}
        queue = deque([start_id])
        while queue:
            current = queue.popleft()
            d = dist[current]
            if max_depth is not None and d >= max_depth:
                continue
            for nid in self.model.neighbors(current, "both"):
                if nid not in dist:
                    dist[nid] = d + 1
                    queue.append(nid)
        return dist

    # ------------------------------------------------------------------ #
    # Traversal
    # ------------------------------------------------------------------ #

    def bfs(self, start_id: str, max_depth: Optional[int] = None) -> List[str]:
        """Breadth-first visit order from ``start_id``, ``max_depth`` hops inclusive."""
        return list(self.hop_distances(start_id, self._depth(max_depth)).keys())

    def dfs(self, start_id: str, max_depth: Optional[int] = None) -> List[str]:
        """
        Depth-first visit order from ``start_id``.

        The walk is confined to nodes within ``max_depth`` hops of the start
        (hop distance, not DFS path length), so it reaches exactly the set
        bfs() reaches. Visited nodes are never expanded again.
        """
        within = self.hop_distances(start_id, self._depth(max_depth))
        if not within:
            return []

        visited = set()
        result: List[str] = []
        stack = [start_id]
        while stack:
            current = stack.pop()
            if current in visited:
                continue
            visited.add(current)
            result.append(current)
            # Reverse so the first neighbour is expanded first.
            for nid in reversed(self.model.neighbors(current, "both")):
                if nid in within and nid not in visited:
                    stack.append(nid)
        return result

    def connected_nodes(
        self,
        node_id: str,
        include_incoming: bool = True,
        include_outgoing: bool = True,
    ) -> List[str]:
        if include_incoming and include_outgoing:
            return self.model.neighbors(node_id, "both")
        if include_outgoing:
            return self.model.neighbors(node_id, "out")
        if include_incoming:
            return self.model.neighbors(node_id, "in")
        return []

    # ------------------------------------------------------------------ #
    # Paths
    # ------------------------------------------------------------------ #

    def shortest_path(self, source_id: str, target_id: str) -> PathResult:
        """Unweighted shortest path; the first path BFS discovers wins ties."""
        if source_id not in self.model or target_id not in self.model:
            return PathResult.not_found()
        if source_id == target_id:
            return PathResult(path=[source_id], distance=0, found=True)

        parents: Dict[str, Optional[str]] = {source_id: None}
        queue = deque([source_id])
        while queue:
            current = queue.popleft()
            for nid in self.model.neighbors(current, "both"):
                if nid in parents:
                    continue
                parents[nid] = current
                if nid == target_id:
                    path = [nid]
                    step = current
                    while step is not None:
                        path.append(step)
                        step = parents[step]
                    path.reverse()
                    return PathResult(path=path, distance=len(path) - 1, found=True)
                queue.append(nid)

        return PathResult.not_found()

    def all_paths(
        self,
        source_id: str,
        target_id: str,
        max_depth: Optional[int] = None,
    ) -> List[PathResult]:
        """
        Every simple path from source to target of at most ``max_depth`` hops.

        Exponential on dense graphs; keep ``max_depth`` small.
        """
        if source_id not in self.model or target_id not in self.model:
            return []

        depth = self._depth(max_depth)
        paths: List[PathResult] = []
        path = [source_id]
        on_path = {source_id}

        def _walk(current: str) -> None:
            if current == target_id:
                paths.append(PathResult(path=list(path), distance=len(path) - 1, found=True))
                return
            if len(path) - 1 >= depth:
                return
            for nid in self.model.neighbors(current, "both"):
                if nid in on_path:
                    continue
                path.append(nid)
                on_path.add(nid)
                _walk(nid)
                on_path.discard(nid)
                path.pop()

        _walk(source_id)
        return paths
