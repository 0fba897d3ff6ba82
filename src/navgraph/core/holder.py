"""
Ownership of the current navigation graph.

Consumers read `holder.current`. A rebuild never touches that graph: a new
one is built off to the side and the reference is swapped in one assignment.
"""

import logging
from typing import List, Optional, Sequence

from .builder import BuildResult, GraphBuilder
from .findings import Finding
from .graph import NavigationGraph
from ..registry.base import RegistryProvider, TransitionProvider

logger = logging.getLogger(__name__)


class GraphHolder:
    def __init__(self, graph: Optional[NavigationGraph] = None):
        self._current = graph
        self._findings: List[Finding] = []

    @property
    def current(self) -> Optional[NavigationGraph]:
        return self._current

    @property
    def findings(self) -> List[Finding]:
        return list(self._findings)

    def swap(self, result: BuildResult) -> Optional[NavigationGraph]:
        """Install a newly built graph and return the one it replaces."""
        if not result.graph.is_finalized:
            result.graph.finalize()
        previous = self._current
        self._current = result.graph
        self._findings = list(result.findings)
        return previous

    def rebuild(
        self,
        builder: GraphBuilder,
        registry: RegistryProvider,
        providers: Sequence[TransitionProvider] = (),
    ) -> BuildResult:
        """
        Build a replacement graph and swap it in.

        The current start window carries over when it still exists.
        """
        start = self._current.start_node_id if self._current is not None else None
        result = builder.build(registry, providers, start_node_id=start)
        self.swap(result)
        logger.debug(f"Swapped in graph with {result.graph.window_count} windows")
        return result
