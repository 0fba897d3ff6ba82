"""
Structural validation of a finalized navigation graph.

The validator runs a fixed battery of checks and returns findings in a stable
order. It never mutates the graph, so running it twice gives the same answer.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, Optional

from ..core.errors import GraphNotFinalizedError
from ..core.findings import Finding, FindingCode, errors_in, warnings_in
from ..core.graph import NavigationGraph
from .reachability import ReachabilityAnalyzer


@dataclass
class ValidationReport:
    findings: List[Finding] = field(default_factory=list)

    @property
    def errors(self) -> List[Finding]:
        return errors_in(self.findings)

    @property
    def warnings(self) -> List[Finding]:
        return warnings_in(self.findings)

    @property
    def has_errors(self) -> bool:
        return bool(self.errors)

    @property
    def ok(self) -> bool:
        return not self.findings

    def to_dict(self) -> Dict:
        return {
            "ok": self.ok,
            "error_count": len(self.errors),
            "warning_count": len(self.warnings),
            "findings": [f.to_dict() for f in self.findings],
        }


class GraphValidator:
    """Classifies structural problems as errors and suspicious shapes as warnings."""

    def validate(
        self,
        graph: NavigationGraph,
        reachability: Optional[Mapping[str, bool]] = None,
        build_findings: Iterable[Finding] = (),
    ) -> List[Finding]:
        """
        Check a finalized graph.

        Args:
            graph: The graph to check.
            reachability: Precomputed window -> reachable map. Computed from
                the configured start (or the first window) when omitted.
            build_findings: Findings recorded while building; they lead the output.

        Returns:
            Ordered list of findings. Empty means the graph is clean.
        """
        if not graph.is_finalized:
            raise GraphNotFinalizedError("Validation requires a finalized graph")

        findings: List[Finding] = list(build_findings)
        findings.extend(self._check_ids(graph))
        findings.extend(self._check_transitions(graph))
        findings.extend(self._check_start(graph))
        findings.extend(self._check_content(graph))

        if reachability is None:
            reachability = ReachabilityAnalyzer(graph).reachability()
        findings.extend(self._check_reachability(graph, reachability))
        return findings

    def report(
        self,
        graph: NavigationGraph,
        reachability: Optional[Mapping[str, bool]] = None,
        build_findings: Iterable[Finding] = (),
    ) -> ValidationReport:
        return ValidationReport(self.validate(graph, reachability, build_findings))

    def _check_ids(self, graph: NavigationGraph) -> List[Finding]:
        return [
            Finding.error(FindingCode.EMPTY_ID, "Window with empty ID found")
            for node in graph.iter_windows()
            if not node.id or not node.id.strip()
        ]

    def _check_transitions(self, graph: NavigationGraph) -> List[Finding]:
        dangling: List[Finding] = []
        empty_triggers: List[Finding] = []
        unknown_sources: List[Finding] = []

        for edge in graph.iter_transitions():
            if not edge.to_id:
                dangling.append(Finding.error(
                    FindingCode.DANGLING_TARGET,
                    f"Transition '{edge.trigger}' has no target",
                ))
            elif not graph.has_window(edge.to_id):
                dangling.append(Finding.error(
                    FindingCode.DANGLING_TARGET,
                    f"Transition target '{edge.to_id}' not found ({edge.describe()})",
                    subject=edge.to_id,
                ))

            if not edge.trigger:
                empty_triggers.append(Finding.error(
                    FindingCode.EMPTY_TRIGGER,
                    f"Transition {edge.describe()} has an empty trigger",
                    subject=edge.to_id,
                ))

            if not edge.is_global and not graph.has_window(edge.from_id):
                unknown_sources.append(Finding.warning(
                    FindingCode.UNKNOWN_SOURCE,
                    f"Transition source '{edge.from_id}' is not a declared window ({edge.describe()})",
                    subject=edge.from_id,
                ))

        return dangling + empty_triggers + unknown_sources

    def _check_start(self, graph: NavigationGraph) -> List[Finding]:
        start = graph.start_node_id
        if not start:
            return [Finding.warning(FindingCode.START_UNRESOLVED, "Start window ID is not set")]
        if not graph.has_window(start):
            return [Finding.warning(
                FindingCode.START_UNRESOLVED,
                f"Start window '{start}' not found",
                subject=start,
            )]
        return []

    def _check_content(self, graph: NavigationGraph) -> List[Finding]:
        return [
            Finding.warning(
                FindingCode.MISSING_CONTENT,
                f"Window '{node.id}' has no content handle",
                subject=node.id,
            )
            for node in graph.iter_windows()
            if not node.has_content
        ]

    def _check_reachability(
        self, graph: NavigationGraph, reachability: Mapping[str, bool]
    ) -> List[Finding]:
        return [
            Finding.warning(
                FindingCode.UNREACHABLE,
                f"Window '{node.id}' is unreachable from the start window",
                subject=node.id,
            )
            for node in graph.iter_windows()
            if not reachability.get(node.id, False)
        ]


def validate_graph(
    graph: NavigationGraph,
    build_findings: Iterable[Finding] = (),
) -> ValidationReport:
    return GraphValidator().report(graph, build_findings=build_findings)
