"""
Graph Builder for navgraph.

Turns registry descriptors plus any number of supplementary transition
providers into one finalized NavigationGraph. Every problem becomes a Finding;
a single bad descriptor never stops the rest of the registry from building.

Merge phases:
    1. Registry windows (duplicates rejected, first declaration wins)
    2. Registry transitions (no override, targets must exist)
    3. Supplementary transitions (override allowed, targets must exist,
       providers may never create windows)
"""

import logging
import time
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional, Sequence, Union

from .errors import DanglingTargetError
from .findings import Finding, FindingCode
from .graph import NavigationGraph
from .result import Err, Ok, Result, map_ok
from .types import EdgeIdentity, TransitionDescriptor, TransitionEdge, WindowDescriptor, WindowNode
from ..registry.base import RegistryProvider, TransitionProvider

logger = logging.getLogger(__name__)

PRIMARY_SOURCE = "registry"


@dataclass
class BuildStats:
    windows: int = 0
    local_transitions: int = 0
    global_transitions: int = 0
    windows_with_content: int = 0
    duplicate_windows: int = 0
    conflicting_transitions: int = 0
    dropped_transitions: int = 0
    supplementary_applied: int = 0
    supplementary_skipped: int = 0
    build_time_ms: float = 0.0
    built_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


@dataclass
class BuildResult:
    """A finalized graph together with everything that went wrong building it."""
    graph: NavigationGraph
    findings: List[Finding] = field(default_factory=list)
    stats: BuildStats = field(default_factory=BuildStats)

    @property
    def has_errors(self) -> bool:
        return any(f.is_error for f in self.findings)


class GraphBuilder:
    """
    Central orchestrator for graph construction.

    `build()` runs a whole pass. The lower-level `add_window`,
    `add_transition` and `finalize` can be driven directly by callers that
    register windows by hand; each records findings the same way.
    """

    def __init__(self, start_node_id: Optional[str] = None):
        self._default_start = start_node_id
        self._reset()

    def _reset(self) -> None:
        self._graph = NavigationGraph()
        self._findings: List[Finding] = []
        self._stats = BuildStats()
        # identity -> provider that last wrote it, for collision logging
        self._supplementary_owners: Dict[EdgeIdentity, str] = {}

    @property
    def graph(self) -> NavigationGraph:
        return self._graph

    @property
    def findings(self) -> List[Finding]:
        return list(self._findings)

    @property
    def stats(self) -> BuildStats:
        return self._stats

    # =========================================================================
    # Registration
    # =========================================================================

    def add_window(self, window: Union[WindowDescriptor, WindowNode]) -> bool:
        """Register a window; a duplicate id is recorded as an error and dropped."""
        result = self._graph.add_window(window)
        if isinstance(result, Err):
            self._stats.duplicate_windows += 1
            self._findings.append(Finding.error(
                FindingCode.DUPLICATE_ID,
                str(result.error),
                subject=window.id,
            ))
            logger.warning(f"Dropped duplicate declaration of window '{window.id}'")
            return False
        return True

    def add_transition(
        self,
        edge: Union[TransitionDescriptor, TransitionEdge],
        allow_override: bool = False,
    ) -> Result[TransitionEdge, Exception]:
        """Register a transition; an identity conflict is recorded as a warning."""
        result = self._graph.add_transition(edge, allow_override=allow_override)
        if isinstance(result, Err):
            self._stats.conflicting_transitions += 1
            self._findings.append(Finding.warning(
                FindingCode.TRANSITION_CONFLICT,
                str(result.error),
                subject=edge.to_id,
            ))
            logger.warning(f"Ignored conflicting transition: {result.error.description}")
        return result

    def finalize(self, start_node_id: Optional[str] = None) -> BuildResult:
        """
        Freeze the graph and resolve the start window.

        The requested start is kept only if it names a window in this graph;
        otherwise the start stays unset.
        """
        self._graph.finalize()

        requested = start_node_id or self._default_start
        if requested and self._graph.has_window(requested):
            self._graph.start_node_id = requested
        else:
            if requested:
                logger.warning(f"Start window '{requested}' not found; start left unset")
            self._graph.start_node_id = None

        self._stats.windows = self._graph.window_count
        self._stats.local_transitions = len(self._graph.local_transitions())
        self._stats.global_transitions = len(self._graph.global_transitions())
        self._stats.windows_with_content = sum(1 for n in self._graph.iter_windows() if n.has_content)

        return BuildResult(graph=self._graph, findings=list(self._findings), stats=self._stats)

    # =========================================================================
    # Full build pass
    # =========================================================================

    def build(
        self,
        registry: RegistryProvider,
        providers: Sequence[TransitionProvider] = (),
        start_node_id: Optional[str] = None,
    ) -> BuildResult:
        """
        Build a fresh graph from a registry and supplementary providers.

        Always starts from an empty graph, so nothing from an earlier build
        can leak into this one.
        """
        self._reset()
        start_time = time.perf_counter()

        windows = self._collect(PRIMARY_SOURCE, registry.windows)
        for window in windows:
            self.add_window(window)

        for descriptor in self._collect(PRIMARY_SOURCE, registry.transitions):
            self._add_registry_transition(descriptor)

        for provider in providers:
            self._apply_provider(provider)

        result = self.finalize(start_node_id)
        self._stats.build_time_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            f"Rebuilt: {self._stats.windows} windows, "
            f"{self._stats.local_transitions + self._stats.global_transitions} transitions, "
            f"{self._stats.windows_with_content} with content, "
            f"{len(result.findings)} findings"
        )
        return result

    def _check_target(
        self, descriptor: TransitionDescriptor, source: str
    ) -> Result[TransitionDescriptor, DanglingTargetError]:
        if self._graph.has_window(descriptor.to_id):
            return Ok(descriptor)
        return Err(DanglingTargetError(descriptor.to_id, source))

    def _add_registry_transition(self, descriptor: TransitionDescriptor) -> None:
        checked = self._check_target(descriptor, PRIMARY_SOURCE)
        if isinstance(checked, Err):
            self._stats.dropped_transitions += 1
            self._findings.append(Finding.error(
                FindingCode.DANGLING_TARGET,
                f"Transition '{descriptor.trigger}' targets unknown window '{descriptor.to_id}'",
                subject=descriptor.to_id,
            ))
            logger.warning(f"Dropped transition: {checked.error}")
            return
        self.add_transition(descriptor, allow_override=False)

    def _apply_provider(self, provider: TransitionProvider) -> None:
        name = provider.name
        for descriptor in self._collect(name, provider.transitions):
            checked = map_ok(self._check_target(descriptor, name), TransitionDescriptor.to_edge)
            if isinstance(checked, Err):
                self._stats.supplementary_skipped += 1
                self._findings.append(Finding.warning(
                    FindingCode.DANGLING_TARGET,
                    f"Transition from provider '{name}' references unknown window '{descriptor.to_id}'",
                    subject=descriptor.to_id,
                ))
                logger.warning(f"Skipped supplementary transition: {checked.error}")
                continue

            edge = checked.value
            previous_owner = self._supplementary_owners.get(edge.identity)
            if previous_owner is not None and previous_owner != name:
                logger.info(
                    f"Provider '{name}' overrides '{previous_owner}' for {edge.describe()}"
                )
            self.add_transition(edge, allow_override=True)
            self._supplementary_owners[edge.identity] = name
            self._stats.supplementary_applied += 1

        logger.debug(f"Applied provider '{name}'")

    def _collect(self, source: str, produce) -> List:
        """Materialize a provider's output; a provider that raises contributes nothing."""
        try:
            return list(produce())
        except Exception as e:
            self._findings.append(Finding.error(
                FindingCode.PROVIDER_FAILED,
                f"Provider '{source}' failed: {type(e).__name__}: {e}",
                subject=None,
            ))
            logger.error(f"Provider '{source}' failed: {type(e).__name__}: {e}")
            return []


def build_graph(
    registry: RegistryProvider,
    providers: Iterable[TransitionProvider] = (),
    start_node_id: Optional[str] = None,
) -> BuildResult:
    """Convenience wrapper for a one-off build."""
    return GraphBuilder().build(registry, list(providers), start_node_id=start_node_id)
