"""
Navigation graph backed by rustworkx.

The graph goes through two phases:
- Building: windows and transitions are added (and removed) freely. Every
  registration returns a Result so the caller can collect conflicts.
- Finalized: structure is frozen and lookup indices are built. Only
  presentation fields (editor positions) and the start window may change.

Nodes and edges are immutable models. Overrides and editor moves swap in a
copy rather than assigning to the stored object.

Global transitions are kept in their own list and are never copied onto
individual windows; `transitions_from` returns local edges only.
"""

import logging
from collections import defaultdict
from typing import Any, Dict, Iterator, List, Optional, Union

import rustworkx as rx

from .errors import ConflictError, DuplicateIdError, GraphFinalizedError, GraphNotFinalizedError
from .result import Err, Ok, Result
from .types import EdgeIdentity, TransitionDescriptor, TransitionEdge, WindowDescriptor, WindowNode

logger = logging.getLogger(__name__)


class NavigationGraph:
    """
    Windows, local transitions, global transitions and a start window.

    Features:
    - O(1) window lookup and edge-identity conflict detection
    - Outgoing-edge map and rustworkx index built once at finalize
    - Override of a transition's animation at its original position
    """

    def __init__(self):
        self._nodes: Dict[str, WindowNode] = {}
        self._local_edges: List[TransitionEdge] = []
        self._global_edges: List[TransitionEdge] = []
        self._edges_by_identity: Dict[EdgeIdentity, TransitionEdge] = {}
        self._start_node_id: Optional[str] = None
        self._finalized = False

        # Built by finalize()
        self._outgoing: Dict[str, List[TransitionEdge]] = {}
        self._index: Optional[rx.PyDiGraph] = None
        self._id_to_idx: Dict[str, int] = {}
        self._idx_to_id: Dict[int, str] = {}

    # =========================================================================
    # Mutation (building phase)
    # =========================================================================

    def add_window(
        self, window: Union[WindowDescriptor, WindowNode]
    ) -> Result[WindowNode, DuplicateIdError]:
        """
        Insert a window keyed by its id.

        The first registration of an id wins; later ones are rejected with
        DuplicateIdError and leave the graph untouched.
        """
        self._ensure_mutable("add_window")

        if window.id in self._nodes:
            return Err(DuplicateIdError(window.id))

        node = window.to_node() if isinstance(window, WindowDescriptor) else window
        self._nodes[node.id] = node
        logger.debug(f"Added window: {node.id}")
        return Ok(node)

    def add_transition(
        self,
        edge: Union[TransitionDescriptor, TransitionEdge],
        allow_override: bool = False,
    ) -> Result[TransitionEdge, ConflictError]:
        """
        Register a transition.

        Local edges are identified by (from, to, trigger), global edges by
        (to, trigger). When the identity is already taken:
        - allow_override=False: the existing edge wins, Err(ConflictError).
        - allow_override=True: the existing edge is replaced at the same
          position by a copy carrying the new animation.

        Target existence is not checked here.
        """
        self._ensure_mutable("add_transition")

        new_edge = edge.to_edge() if isinstance(edge, TransitionDescriptor) else edge
        existing = self._edges_by_identity.get(new_edge.identity)

        if existing is not None:
            if not allow_override:
                return Err(ConflictError(new_edge.describe()))
            if existing.animation == new_edge.animation:
                return Ok(existing)
            logger.info(
                f"Override: {existing.describe()} animation "
                f"{existing.animation.value} -> {new_edge.animation.value}"
            )
            updated = existing.model_copy(update={"animation": new_edge.animation})
            edges = self._global_edges if existing.is_global else self._local_edges
            edges[edges.index(existing)] = updated
            self._edges_by_identity[updated.identity] = updated
            return Ok(updated)

        if new_edge.is_global:
            self._global_edges.append(new_edge)
        else:
            self._local_edges.append(new_edge)
        self._edges_by_identity[new_edge.identity] = new_edge
        logger.debug(f"Added transition: {new_edge.describe()}")
        return Ok(new_edge)

    def remove_window(self, window_id: str) -> bool:
        """Remove a window and every transition leaving or entering it."""
        self._ensure_mutable("remove_window")

        if window_id not in self._nodes:
            return False

        del self._nodes[window_id]

        def touches(e: TransitionEdge) -> bool:
            return e.from_id == window_id or e.to_id == window_id

        for e in [e for e in self._local_edges + self._global_edges if touches(e)]:
            del self._edges_by_identity[e.identity]
        self._local_edges = [e for e in self._local_edges if not touches(e)]
        self._global_edges = [e for e in self._global_edges if not touches(e)]

        if self._start_node_id == window_id:
            self._start_node_id = None
        return True

    def remove_transition(self, edge: Union[TransitionDescriptor, TransitionEdge]) -> bool:
        """Remove the transition sharing `edge`'s identity."""
        self._ensure_mutable("remove_transition")

        identity = edge.to_edge().identity if isinstance(edge, TransitionDescriptor) else edge.identity
        existing = self._edges_by_identity.pop(identity, None)
        if existing is None:
            return False

        if existing.is_global:
            self._global_edges.remove(existing)
        else:
            self._local_edges.remove(existing)
        return True

    def finalize(self) -> None:
        """
        Freeze structure and build lookup indices.

        Does not validate anything. Calling it again is a no-op.
        """
        if self._finalized:
            return

        outgoing: Dict[str, List[TransitionEdge]] = defaultdict(list)
        for edge in self._local_edges:
            outgoing[edge.from_id].append(edge)
        self._outgoing = dict(outgoing)

        index = rx.PyDiGraph(multigraph=True)
        for window_id in self._nodes:
            idx = index.add_node(window_id)
            self._id_to_idx[window_id] = idx
            self._idx_to_id[idx] = window_id

        # Edges with an unknown endpoint stay out of the index; the validator reports them.
        for edge in self._local_edges:
            u = self._id_to_idx.get(edge.from_id)
            v = self._id_to_idx.get(edge.to_id)
            if u is not None and v is not None:
                index.add_edge(u, v, edge)

        self._index = index
        self._finalized = True
        logger.debug(
            f"Finalized graph: {self.window_count} windows, "
            f"{len(self._local_edges)} local and {len(self._global_edges)} global transitions"
        )

    # =========================================================================
    # Presentation state (allowed at any time)
    # =========================================================================

    @property
    def start_node_id(self) -> Optional[str]:
        return self._start_node_id

    @start_node_id.setter
    def start_node_id(self, window_id: Optional[str]) -> None:
        self._start_node_id = window_id or None

    def set_editor_position(self, window_id: str, x: float, y: float) -> bool:
        node = self._nodes.get(window_id)
        if node is None:
            return False
        self._nodes[window_id] = node.model_copy(update={"editor_position": (float(x), float(y))})
        return True

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def is_finalized(self) -> bool:
        return self._finalized

    def get_window(self, window_id: str) -> Optional[WindowNode]:
        return self._nodes.get(window_id)

    def has_window(self, window_id: str) -> bool:
        return window_id in self._nodes

    def iter_windows(self) -> Iterator[WindowNode]:
        return iter(self._nodes.values())

    def window_ids(self) -> List[str]:
        return list(self._nodes)

    def first_window_id(self) -> Optional[str]:
        return next(iter(self._nodes), None)

    def transitions_from(self, window_id: str) -> Iterator[TransitionEdge]:
        """
        Local transitions leaving `window_id`, in insertion order.

        Global transitions are never included; see `global_transitions`.
        """
        if self._finalized:
            return iter(self._outgoing.get(window_id, []))
        return (e for e in self._local_edges if e.from_id == window_id)

    def local_transitions(self) -> List[TransitionEdge]:
        return list(self._local_edges)

    def global_transitions(self) -> List[TransitionEdge]:
        return list(self._global_edges)

    def iter_transitions(self) -> Iterator[TransitionEdge]:
        """All transitions, local first, then global."""
        yield from self._local_edges
        yield from self._global_edges

    def available_transitions(self, window_id: str) -> List[TransitionEdge]:
        """Everything usable while `window_id` is active: its local edges, then all global ones."""
        return list(self.transitions_from(window_id)) + list(self._global_edges)

    def find_transition(self, from_id: str, trigger: str) -> Optional[TransitionEdge]:
        """
        Resolve a trigger fired while `from_id` is active.

        Local transitions take precedence over global ones.
        """
        for edge in self.transitions_from(from_id):
            if edge.trigger == trigger:
                return edge
        for edge in self._global_edges:
            if edge.trigger == trigger:
                return edge
        return None

    def successor_ids(self, window_id: str) -> List[str]:
        """Windows directly reachable from `window_id` over local edges that resolve."""
        self._ensure_finalized("successor_ids")
        idx = self._id_to_idx.get(window_id)
        if idx is None:
            return []
        return [self._idx_to_id[v] for v in self._index.successor_indices(idx)]

    def global_target_ids(self) -> List[str]:
        """Targets of global edges that resolve to a window, without repeats."""
        seen: Dict[str, None] = {}
        for edge in self._global_edges:
            if edge.to_id in self._nodes:
                seen.setdefault(edge.to_id, None)
        return list(seen)

    @property
    def window_count(self) -> int:
        return len(self._nodes)

    @property
    def transition_count(self) -> int:
        return len(self._local_edges) + len(self._global_edges)

    def get_stats(self) -> Dict[str, Any]:
        by_kind: Dict[str, int] = defaultdict(int)
        by_layer: Dict[str, int] = defaultdict(int)
        for node in self._nodes.values():
            by_kind[node.kind.value] += 1
            by_layer[node.layer.value] += 1

        return {
            "windows": self.window_count,
            "local_transitions": len(self._local_edges),
            "global_transitions": len(self._global_edges),
            "windows_by_kind": dict(by_kind),
            "windows_by_layer": dict(by_layer),
            "start_window": self._start_node_id,
            "finalized": self._finalized,
        }

    # =========================================================================
    # Guards
    # =========================================================================

    def _ensure_mutable(self, operation: str) -> None:
        if self._finalized:
            raise GraphFinalizedError(f"Cannot {operation}: graph is finalized")

    def _ensure_finalized(self, operation: str) -> None:
        if not self._finalized:
            raise GraphNotFinalizedError(f"Cannot {operation}: graph is not finalized")
