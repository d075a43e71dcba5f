import pytest
from networkx.algorithms.flow import preflow_push

from paircut.lib.algorithms.base import Segment
from paircut.lib.graph import SINK_NODE, SOURCE_NODE, CutGraph


@pytest.fixture
def pair_graph():
    # Terminal capacities (cap_source, cap_sink):
    #   0: (5, 0)   1: (0, 3)
    #
    #        [1]
    #   0 ───────► 1
    #
    # Best cut: 0 on the source side, 1 on the sink side, value 1.
    g = CutGraph()
    g.add_nodes(2)
    g.add_tweights(0, 5, 0)
    g.add_tweights(1, 0, 3)
    g.add_pair_edge(0, 1, 1, 0)
    return g


class TestCutGraphTopology:
    def test_new_graph_holds_only_terminals(self):
        g = CutGraph(node_budget=4, edge_budget=3)
        assert set(g.nodes) == {SOURCE_NODE, SINK_NODE}
        assert g.num_vars == 0
        assert g.node_budget == 4
        assert g.edge_budget == 3

    def test_add_nodes_returns_first_index(self):
        g = CutGraph()
        assert g.add_nodes(3) == 0
        assert g.add_nodes(2) == 3
        assert g.num_vars == 5
        assert all(n in g for n in range(5))

    def test_add_nodes_negative(self):
        with pytest.raises(ValueError, match="negative"):
            CutGraph().add_nodes(-1)

    def test_tweights_are_additive(self):
        g = CutGraph()
        g.add_nodes(1)
        g.add_tweights(0, 2, 1)
        g.add_tweights(0, 3, 0)
        assert g.get_tweights(0) == (5, 1)

    def test_zero_capacity_creates_no_edge(self):
        g = CutGraph()
        g.add_nodes(2)
        g.add_tweights(0, 0, 0)
        g.add_pair_edge(0, 1, 0, 0)
        assert g.number_of_edges() == 0
        assert g.get_tweights(0) == (0, 0)

    def test_pair_edges_are_additive(self):
        g = CutGraph()
        g.add_nodes(2)
        g.add_pair_edge(0, 1, 2, 1)
        g.add_pair_edge(0, 1, 3, 0)
        assert g[0][1]["capacity"] == 5
        assert g[1][0]["capacity"] == 1
        assert g.num_pair_edges == 2

    def test_unknown_node(self):
        g = CutGraph()
        g.add_nodes(1)
        with pytest.raises(ValueError, match="does not exist"):
            g.add_tweights(1, 1, 1)
        with pytest.raises(ValueError, match="does not exist"):
            g.add_pair_edge(0, 3, 1, 1)

    def test_self_edge(self):
        g = CutGraph()
        g.add_nodes(1)
        with pytest.raises(ValueError, match="itself"):
            g.add_pair_edge(0, 0, 1, 1)

    def test_negative_capacity(self):
        g = CutGraph()
        g.add_nodes(2)
        with pytest.raises(ValueError, match="Negative capacity"):
            g.add_tweights(0, -1, 0)
        with pytest.raises(ValueError, match="Negative capacity"):
            g.add_pair_edge(0, 1, 1, -0.5)


class TestCutGraphFlow:
    def test_maxflow_and_segments(self, pair_graph):
        assert pair_graph.maxflow() == 1
        assert pair_graph.what_segment(0) == Segment.SOURCE
        assert pair_graph.what_segment(1) == Segment.SINK

    def test_preflow_push_agrees(self, pair_graph):
        pair_graph.flow_func = preflow_push
        assert pair_graph.maxflow() == 1
        assert pair_graph.what_segment(1) == Segment.SINK

    def test_isolated_node_stays_on_source_side(self):
        # Only nodes that can still reach the sink in the residual graph are SINK.
        g = CutGraph()
        g.add_nodes(1)
        assert g.maxflow() == 0
        assert g.what_segment(0) == Segment.SOURCE

    def test_segment_requires_maxflow(self, pair_graph):
        with pytest.raises(RuntimeError, match="maxflow"):
            pair_graph.what_segment(0)

    def test_capacity_change_invalidates_cut(self, pair_graph):
        pair_graph.maxflow()
        pair_graph.add_tweights(1, 0, 1)
        with pytest.raises(RuntimeError):
            pair_graph.what_segment(1)

    def test_reset_flows_keeps_topology(self, pair_graph):
        pair_graph.maxflow()
        pair_graph.reset_flows()
        with pytest.raises(RuntimeError):
            pair_graph.what_segment(0)
        assert pair_graph.get_tweights(0) == (5, 0)
        assert pair_graph.maxflow() == 1

    def test_reset_drops_everything(self, pair_graph):
        pair_graph.maxflow()
        pair_graph.reset()
        assert pair_graph.num_vars == 0
        assert pair_graph.num_pair_edges == 0
        assert set(pair_graph.nodes) == {SOURCE_NODE, SINK_NODE}
        assert pair_graph.number_of_edges() == 0
        pair_graph.add_nodes(1)
        assert pair_graph.maxflow() == 0
