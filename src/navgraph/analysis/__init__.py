from .reachability import ReachabilityAnalyzer
from .validator import GraphValidator, ValidationReport, validate_graph

__all__ = ["GraphValidator", "ReachabilityAnalyzer", "ValidationReport", "validate_graph"]
