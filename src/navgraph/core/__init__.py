"""
navgraph Core Module.

Core Types & Graph:
    - WindowDescriptor, TransitionDescriptor: Registry input
    - WindowNode, TransitionEdge: Graph records
    - NavigationGraph: Windows, transitions, start window, finalize
    - Ok, Err, Result: Registration outcomes
    - Finding: Classified build/validation problems

Construction (import from the submodules):
    - builder.GraphBuilder: Two-phase merge of registry and providers
    - holder.GraphHolder: Rebuild-then-swap ownership
    - snapshot.GraphSnapshot: Persisted graph shape
"""

from .errors import (
    ConfigError,
    ConflictError,
    DanglingTargetError,
    DuplicateIdError,
    GraphFinalizedError,
    GraphNotFinalizedError,
    NavGraphError,
    RegistryLoadError,
    SnapshotError,
)
from .findings import Finding, FindingCode, Severity
from .graph import NavigationGraph
from .result import Err, Ok, Result
from .types import (
    CursorMode,
    TransitionAnimation,
    TransitionDescriptor,
    TransitionEdge,
    WindowDescriptor,
    WindowKind,
    WindowLayer,
    WindowNode,
)
