"""
Persisted graph snapshot.

A snapshot carries exactly what is needed to rebuild an equivalent graph
without consulting the registry again. Loading keeps everything as written,
including problems; run the validator to find them.

The builder drops duplicate windows and dangling registry edges before the
graph is finalized, so the findings it recorded are persisted alongside the
graph. Without them a reloaded graph would validate clean.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, List, Optional

from pydantic import BaseModel, Field, ValidationError

from .errors import SnapshotError
from .findings import Finding
from .graph import NavigationGraph
from .types import TransitionEdge, WindowNode

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


class GraphSnapshot(BaseModel):
    version: int = SNAPSHOT_VERSION
    built_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    start_node_id: Optional[str] = None
    nodes: List[WindowNode] = Field(default_factory=list)
    local_edges: List[TransitionEdge] = Field(default_factory=list)
    global_edges: List[TransitionEdge] = Field(default_factory=list)
    build_findings: List[Finding] = Field(default_factory=list)

    @classmethod
    def from_graph(cls, graph: NavigationGraph, build_findings: Iterable[Finding] = ()) -> "GraphSnapshot":
        return cls(
            start_node_id=graph.start_node_id,
            nodes=list(graph.iter_windows()),
            local_edges=graph.local_transitions(),
            global_edges=graph.global_transitions(),
            build_findings=list(build_findings),
        )

    def to_graph(self) -> NavigationGraph:
        """Rebuild a finalized graph with the same nodes, edge order and start window."""
        graph = NavigationGraph()
        for node in self.nodes:
            result = graph.add_window(node)
            if result.is_err():
                logger.warning(f"Snapshot lists window '{node.id}' more than once; keeping the first")
        for edge in [*self.local_edges, *self.global_edges]:
            result = graph.add_transition(edge)
            if result.is_err():
                logger.warning(f"Snapshot repeats transition {edge.describe()}; keeping the first")
        graph.finalize()
        graph.start_node_id = self.start_node_id
        return graph

    def to_json(self, indent: int | None = 2) -> str:
        return self.model_dump_json(indent=indent)

    @classmethod
    def from_json(cls, text: str) -> "GraphSnapshot":
        try:
            snapshot = cls.model_validate_json(text)
        except ValidationError as e:
            raise SnapshotError(f"Invalid snapshot: {e}") from e
        if snapshot.version > SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Snapshot version {snapshot.version} is newer than supported ({SNAPSHOT_VERSION})"
            )
        return snapshot

    def save(self, path: str | Path) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        return path

    @classmethod
    def load(cls, path: str | Path) -> "GraphSnapshot":
        path = Path(path)
        if not path.exists():
            raise SnapshotError(f"Snapshot not found: {path}")
        return cls.from_json(path.read_text(encoding="utf-8"))


def save_graph(graph: NavigationGraph, path: str | Path, build_findings: Iterable[Finding] = ()) -> Path:
    return GraphSnapshot.from_graph(graph, build_findings).save(path)


def load_graph(path: str | Path) -> NavigationGraph:
    return GraphSnapshot.load(path).to_graph()
