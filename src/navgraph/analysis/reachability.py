"""
Reachability analysis over a finalized navigation graph.

Traversal follows local transitions out of the current window and every
global transition, since a global transition can fire from anywhere. Results
are recomputed on each call; nothing is cached between graph rebuilds.
"""

import logging
from collections import deque
from typing import Dict, Optional, Set

from ..core.errors import GraphNotFinalizedError
from ..core.graph import NavigationGraph

logger = logging.getLogger(__name__)


class ReachabilityAnalyzer:
    """
    Breadth-first reachability from a start window.

    When no start is given the graph's configured start is used, and when
    that is unset too, the first window in the graph.
    """

    def __init__(self, graph: NavigationGraph):
        if not graph.is_finalized:
            raise GraphNotFinalizedError("Reachability requires a finalized graph")
        self._graph = graph

    def resolve_start(self, start: Optional[str] = None) -> Optional[str]:
        return start or self._graph.start_node_id or self._graph.first_window_id()

    def depths(self, start: Optional[str] = None) -> Dict[str, Optional[int]]:
        """
        BFS distance of every window from the start.

        Unreachable windows map to None. Useful for laying out a graph view
        in columns.
        """
        graph = self._graph
        result: Dict[str, Optional[int]] = {wid: None for wid in graph.window_ids()}

        start_id = self.resolve_start(start)
        if start_id is None:
            return result
        if not graph.has_window(start_id):
            logger.warning(f"Start window '{start_id}' not in graph; nothing is reachable")
            return result

        global_targets = graph.global_target_ids()
        result[start_id] = 0
        queue = deque([start_id])

        while queue:
            current = queue.popleft()
            next_depth = result[current] + 1

            for target in (*graph.successor_ids(current), *global_targets):
                if result[target] is None:
                    result[target] = next_depth
                    queue.append(target)

        return result

    def reachability(self, start: Optional[str] = None) -> Dict[str, bool]:
        """Map every window id to whether it can be reached from the start."""
        return {wid: depth is not None for wid, depth in self.depths(start).items()}

    def reachable_ids(self, start: Optional[str] = None) -> Set[str]:
        return {wid for wid, depth in self.depths(start).items() if depth is not None}

    def unreachable_ids(self, start: Optional[str] = None) -> Set[str]:
        return {wid for wid, depth in self.depths(start).items() if depth is None}

    def is_reachable(self, target: str, start: Optional[str] = None) -> bool:
        return self.depths(start).get(target) is not None
