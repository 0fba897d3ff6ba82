"""Unit tests for graph snapshots."""

import json

import pytest

from navgraph.analysis.reachability import ReachabilityAnalyzer
from navgraph.analysis.validator import validate_graph
from navgraph.core.builder import GraphBuilder
from navgraph.core.errors import SnapshotError
from navgraph.core.findings import FindingCode, Severity
from navgraph.core.graph import NavigationGraph
from navgraph.core.snapshot import GraphSnapshot, load_graph, save_graph
from navgraph.core.types import (
    CursorMode,
    TransitionAnimation,
    TransitionEdge,
    WindowDescriptor,
    WindowKind,
    WindowLayer,
)
from navgraph.registry.static import StaticRegistry


@pytest.fixture
def graph():
    g = NavigationGraph()
    g.add_window(WindowDescriptor(id="MainMenu", content_handle="ui/main"))
    g.add_window(WindowDescriptor(
        id="Pause",
        kind=WindowKind.MODAL,
        layer=WindowLayer.MODALS,
        level=3,
        pause_host=True,
        hide_below=False,
        cursor_mode=CursorMode.CONFINED,
        type_name="game.ui.PauseWindow",
    ))
    g.add_window(WindowDescriptor(id="Game"))
    g.add_transition(TransitionEdge(from_id="MainMenu", to_id="Game", trigger="play"))
    g.add_transition(TransitionEdge(from_id="Game", to_id="Pause", trigger="pause",
                                    animation=TransitionAnimation.SCALE))
    g.add_transition(TransitionEdge(to_id="MainMenu", trigger="quit"))
    g.finalize()
    g.start_node_id = "MainMenu"
    g.set_editor_position("Pause", 300, 80)
    return g


class TestGraphSnapshot:
    def test_round_trip_preserves_queries(self, graph, tmp_path):
        path = save_graph(graph, tmp_path / "nested" / "graph.json")
        loaded = load_graph(path)

        assert loaded.is_finalized
        assert loaded.start_node_id == "MainMenu"
        assert loaded.window_ids() == graph.window_ids()
        for wid in graph.window_ids():
            assert loaded.get_window(wid) == graph.get_window(wid)
            assert list(loaded.transitions_from(wid)) == list(graph.transitions_from(wid))
        assert loaded.global_transitions() == graph.global_transitions()
        assert ReachabilityAnalyzer(loaded).reachability() == ReachabilityAnalyzer(graph).reachability()

    def test_window_fields_survive(self, graph):
        loaded = GraphSnapshot.from_json(GraphSnapshot.from_graph(graph).to_json()).to_graph()
        pause = loaded.get_window("Pause")

        assert pause.kind == WindowKind.MODAL
        assert pause.layer == WindowLayer.MODALS
        assert pause.pause_host is True
        assert pause.cursor_mode == CursorMode.CONFINED
        assert pause.editor_position == (300.0, 80.0)

    def test_json_shape(self, graph):
        data = json.loads(GraphSnapshot.from_graph(graph).to_json())
        assert set(data) == {
            "version", "built_at", "start_node_id", "nodes", "local_edges", "global_edges", "build_findings",
        }
        assert data["global_edges"][0]["from_id"] is None

    def test_empty_graph_round_trip(self):
        g = NavigationGraph()
        g.finalize()
        loaded = GraphSnapshot.from_json(GraphSnapshot.from_graph(g).to_json()).to_graph()
        assert loaded.window_count == 0
        assert loaded.start_node_id is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(SnapshotError):
            GraphSnapshot.load(tmp_path / "missing.json")

    def test_invalid_json(self):
        with pytest.raises(SnapshotError):
            GraphSnapshot.from_json("{not json")

    def test_newer_version_rejected(self):
        with pytest.raises(SnapshotError):
            GraphSnapshot.from_json(json.dumps({"version": 99}))

    def test_dangling_edges_are_kept_for_validation(self):
        snap = GraphSnapshot(
            nodes=[],
            local_edges=[],
            global_edges=[TransitionEdge(to_id="Ghost", trigger="go")],
        )
        loaded = snap.to_graph()
        assert loaded.global_transitions()[0].to_id == "Ghost"

    def test_build_findings_survive_round_trip(self, tmp_path):
        reg = StaticRegistry()
        reg.register_window(id="Menu", content_handle="ui/menu")
        reg.register_window(id="Menu", content_handle="ui/other")
        reg.register_transition("Menu", "go", "Ghost")
        result = GraphBuilder(start_node_id="Menu").build(reg)

        path = save_graph(result.graph, tmp_path / "graph.json", result.findings)
        snapshot = GraphSnapshot.load(path)

        assert snapshot.build_findings == result.findings
        assert [f.code for f in snapshot.build_findings] == [FindingCode.DUPLICATE_ID, FindingCode.DANGLING_TARGET]
        assert snapshot.build_findings[0].severity is Severity.ERROR

        report = validate_graph(snapshot.to_graph(), build_findings=snapshot.build_findings)
        assert report.has_errors
        assert [f.subject for f in report.errors] == ["Menu", "Ghost"]

    def test_snapshot_without_findings_loads(self, graph):
        data = json.loads(GraphSnapshot.from_graph(graph).to_json())
        del data["build_findings"]
        assert GraphSnapshot.from_json(json.dumps(data)).build_findings == []
