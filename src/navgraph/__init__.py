"""
navgraph: navigation graph for screen and window management.

Models every window as a node and every move between windows as a labeled
transition, builds the graph from registries, and answers reachability and
validation questions for a navigation controller.
"""

from .analysis import GraphValidator, ReachabilityAnalyzer, ValidationReport
from .core import (
    Finding,
    FindingCode,
    NavigationGraph,
    Severity,
    TransitionAnimation,
    TransitionDescriptor,
    TransitionEdge,
    WindowDescriptor,
    WindowKind,
    WindowLayer,
    WindowNode,
)
from .core.builder import BuildResult, BuildStats, GraphBuilder, build_graph
from .core.holder import GraphHolder
from .core.snapshot import GraphSnapshot
from .registry import FileRegistry, FileTransitionProvider, StaticRegistry, StaticTransitionProvider

__version__ = "0.1.0"
