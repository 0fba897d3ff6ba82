"""Unit tests for the graph validator."""

import pytest

from navgraph.analysis.validator import GraphValidator, validate_graph
from navgraph.core.builder import GraphBuilder
from navgraph.core.errors import GraphNotFinalizedError
from navgraph.core.findings import FindingCode, Severity
from navgraph.core.graph import NavigationGraph
from navgraph.core.types import TransitionEdge, WindowDescriptor, WindowNode
from navgraph.registry.static import StaticRegistry


def codes(findings):
    return [f.code for f in findings]


@pytest.fixture
def validator():
    return GraphValidator()


@pytest.fixture
def clean_graph():
    g = NavigationGraph()
    g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
    g.add_window(WindowDescriptor(id="B", content_handle="ui/b"))
    g.add_transition(TransitionEdge(from_id="A", to_id="B", trigger="next"))
    g.finalize()
    g.start_node_id = "A"
    return g


class TestGraphValidator:
    def test_clean_graph(self, validator, clean_graph):
        assert validator.validate(clean_graph) == []
        assert validate_graph(clean_graph).ok

    def test_unreachable_window(self, validator):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
        g.add_window(WindowDescriptor(id="B", content_handle="ui/b"))
        g.finalize()
        g.start_node_id = "A"

        findings = validator.validate(g)

        assert len(findings) == 1
        assert findings[0].code == FindingCode.UNREACHABLE
        assert findings[0].severity == Severity.WARNING
        assert findings[0].subject == "B"

    def test_dangling_target_is_error(self, validator, clean_graph):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
        g.add_transition(TransitionEdge(to_id="Ghost", trigger="go"))
        g.add_transition(TransitionEdge(from_id="A", to_id="Void", trigger="go"))
        g.finalize()
        g.start_node_id = "A"

        findings = validator.validate(g)

        dangling = [f for f in findings if f.code == FindingCode.DANGLING_TARGET]
        assert [f.subject for f in dangling] == ["Void", "Ghost"]
        assert all(f.severity == Severity.ERROR for f in dangling)

    def test_empty_trigger_is_error(self, validator):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
        g.add_transition(TransitionEdge(from_id="A", to_id="A", trigger=""))
        g.finalize()
        g.start_node_id = "A"

        assert codes(validator.validate(g)) == [FindingCode.EMPTY_TRIGGER]

    def test_empty_id_is_error(self, validator):
        g = NavigationGraph()
        g.add_window(WindowNode(id="", content_handle="ui/x"))
        g.finalize()
        g.start_node_id = "ghost-start"

        findings = validator.validate(g, reachability={"": True})
        assert codes(findings) == [FindingCode.EMPTY_ID, FindingCode.START_UNRESOLVED]
        assert findings[0].severity == Severity.ERROR

    def test_unknown_source_is_warning(self, validator, clean_graph):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
        g.add_transition(TransitionEdge(from_id="Lobby", to_id="A", trigger="go"))
        g.finalize()
        g.start_node_id = "A"

        findings = validator.validate(g)
        assert codes(findings) == [FindingCode.UNKNOWN_SOURCE]
        assert findings[0].subject == "Lobby"

    def test_start_not_set(self, validator):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A", content_handle="ui/a"))
        g.finalize()

        findings = validator.validate(g)
        assert codes(findings) == [FindingCode.START_UNRESOLVED]
        assert findings[0].severity == Severity.WARNING

    def test_start_not_found(self, validator, clean_graph):
        clean_graph.start_node_id = "Gone"
        findings = validator.validate(clean_graph)
        start = [f for f in findings if f.code == FindingCode.START_UNRESOLVED]
        assert len(start) == 1
        assert start[0].subject == "Gone"

    def test_missing_content(self, validator):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A"))
        g.finalize()
        g.start_node_id = "A"

        findings = validator.validate(g)
        assert codes(findings) == [FindingCode.MISSING_CONTENT]
        assert findings[0].severity == Severity.WARNING

    def test_precomputed_reachability_is_used(self, validator, clean_graph):
        findings = validator.validate(clean_graph, reachability={"A": True, "B": False})
        assert codes(findings) == [FindingCode.UNREACHABLE]

    def test_idempotent(self, validator):
        g = NavigationGraph()
        g.add_window(WindowDescriptor(id="A"))
        g.add_window(WindowDescriptor(id="B"))
        g.add_transition(TransitionEdge(to_id="Ghost", trigger=""))
        g.finalize()

        first = validator.validate(g)
        second = validator.validate(g)
        assert first == second
        assert first

    def test_requires_finalized(self, validator):
        with pytest.raises(GraphNotFinalizedError):
            validator.validate(NavigationGraph())

    def test_build_findings_lead(self, validator):
        reg = StaticRegistry()
        reg.register_window(id="Menu", content_handle="ui/menu")
        reg.register_window(id="Menu", content_handle="ui/other")
        reg.register_transition("Menu", "go", "Ghost")
        result = GraphBuilder(start_node_id="Menu").build(reg)

        report = validator.report(result.graph, build_findings=result.findings)

        assert codes(report.findings) == [FindingCode.DUPLICATE_ID, FindingCode.DANGLING_TARGET]
        assert report.has_errors
        assert len(report.errors) == 2
        assert report.findings[1].subject == "Ghost"

    def test_report_to_dict(self, validator, clean_graph):
        clean_graph.start_node_id = None
        data = validator.report(clean_graph).to_dict()
        assert data["ok"] is False
        assert data["error_count"] == 0
        assert data["warning_count"] == 1
        assert data["findings"][0]["code"] == "start_unresolved"
