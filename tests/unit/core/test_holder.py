"""Unit tests for GraphHolder rebuild-and-swap."""

from navgraph.core.builder import GraphBuilder
from navgraph.core.holder import GraphHolder
from navgraph.registry.static import StaticRegistry


def make_registry(*window_ids: str) -> StaticRegistry:
    reg = StaticRegistry()
    for wid in window_ids:
        reg.register_window(id=wid, content_handle=f"ui/{wid}")
    return reg


class TestGraphHolder:
    def test_starts_empty(self):
        holder = GraphHolder()
        assert holder.current is None
        assert holder.findings == []

    def test_rebuild_swaps_reference(self):
        holder = GraphHolder()
        builder = GraphBuilder()

        holder.rebuild(builder, make_registry("A", "B"))
        old = holder.current
        holder.rebuild(builder, make_registry("A", "C"))

        assert holder.current is not old
        assert old.window_ids() == ["A", "B"]
        assert holder.current.window_ids() == ["A", "C"]

    def test_start_carries_over_when_present(self):
        holder = GraphHolder()
        builder = GraphBuilder()
        holder.rebuild(builder, make_registry("A", "B"))
        holder.current.start_node_id = "B"

        holder.rebuild(builder, make_registry("B", "C"))
        assert holder.current.start_node_id == "B"

        holder.rebuild(builder, make_registry("C"))
        assert holder.current.start_node_id is None

    def test_swap_returns_previous_and_keeps_findings(self):
        reg = make_registry("A", "A")
        holder = GraphHolder()
        first = GraphBuilder().build(make_registry("X"))
        second = GraphBuilder().build(reg)

        assert holder.swap(first) is None
        assert holder.swap(second) is first.graph
        assert len(holder.findings) == 1
