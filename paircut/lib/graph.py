from __future__ import annotations

from typing import Callable, Hashable, Optional, Set

import networkx as nx

from paircut.lib.algorithms.base import Cost, Segment
from paircut.logging import get_logger

logger = get_logger(__name__)

#: Node IDs of the two terminals. Variable nodes are the integers ``0..n-1``.
SOURCE_NODE: Hashable = "__source__"
SINK_NODE: Hashable = "__sink__"

FlowFunc = Callable[..., nx.DiGraph]


class CutGraph(nx.DiGraph):
    """
    A two-terminal capacity graph for binary min-cut energy minimization.

    Variable nodes are consecutive integers starting at 0. Every variable node
    may carry an edge from the source terminal and an edge to the sink
    terminal; pairs of variable nodes may carry one edge in each direction.

    This class enforces:
      - Variable nodes are allocated explicitly via add_nodes() and are
        never created implicitly by capacity updates.
      - Capacities are non-negative and additive: repeated updates of the
        same edge accumulate.
      - Cut membership is only available after maxflow() and is cleared by
        any topology or capacity change.

    Inherits from:
        networkx.DiGraph
    """

    def __init__(
        self,
        node_budget: int = 0,
        edge_budget: int = 0,
        flow_func: Optional[FlowFunc] = None,
        *args,
        **kwargs,
    ) -> None:
        """
        Initialize a CutGraph holding only the two terminal nodes.

        Args:
            node_budget: Expected number of variable nodes. Informational only.
            edge_budget: Expected number of pairwise edges. Informational only.
            flow_func: networkx flow function used by maxflow(). Defaults to
                boykov_kolmogorov.
            *args: Positional arguments forwarded to the DiGraph constructor.
            **kwargs: Keyword arguments forwarded to the DiGraph constructor.
        """
        super().__init__(*args, **kwargs)
        self.node_budget = node_budget
        self.edge_budget = edge_budget
        self.flow_func = flow_func or nx.algorithms.flow.boykov_kolmogorov
        self._num_vars = 0
        self._num_pair_edges = 0
        self._source_side: Optional[Set[Hashable]] = None
        self._add_terminals()

    def _add_terminals(self) -> None:
        super().add_node(SOURCE_NODE)
        super().add_node(SINK_NODE)

    @property
    def num_vars(self) -> int:
        """Number of allocated variable nodes."""
        return self._num_vars

    @property
    def num_pair_edges(self) -> int:
        """Number of distinct directed edges between variable nodes."""
        return self._num_pair_edges

    #
    # Topology
    #
    def add_nodes(self, count: int) -> int:
        """
        Allocate ``count`` new variable nodes.

        Args:
            count: Number of nodes to add.

        Returns:
            int: Index of the first node added.

        Raises:
            ValueError: If count is negative.
        """
        if count < 0:
            raise ValueError(f"Cannot allocate a negative number of nodes ({count}).")
        first = self._num_vars
        self.add_nodes_from(range(first, first + count))
        self._num_vars += count
        self._source_side = None
        if self.node_budget and self._num_vars > self.node_budget:
            logger.debug(
                "Allocated %d nodes, above the budget of %d",
                self._num_vars,
                self.node_budget,
            )
        return first

    def _check_var(self, node: int) -> None:
        if not 0 <= node < self._num_vars:
            raise ValueError(f"Node '{node}' does not exist.")

    def _add_capacity(self, u: Hashable, v: Hashable, cap: Cost) -> None:
        if cap < 0:
            raise ValueError(f"Negative capacity {cap} on edge {u}->{v}.")
        if cap == 0:
            return
        if self.has_edge(u, v):
            self[u][v]["capacity"] += cap
        else:
            if u != SOURCE_NODE and v != SINK_NODE:
                self._num_pair_edges += 1
            super().add_edge(u, v, capacity=cap)

    def add_tweights(self, node: int, cap_source: Cost, cap_sink: Cost) -> None:
        """
        Add terminal capacities to a variable node.

        ``cap_source`` is paid when the node ends on the sink side, and
        ``cap_sink`` when it ends on the source side.

        Args:
            node: Variable node index.
            cap_source: Capacity added to the edge source -> node.
            cap_sink: Capacity added to the edge node -> sink.

        Raises:
            ValueError: If the node does not exist or a capacity is negative.
        """
        self._check_var(node)
        self._add_capacity(SOURCE_NODE, node, cap_source)
        self._add_capacity(node, SINK_NODE, cap_sink)
        self._source_side = None

    def add_pair_edge(self, p: int, q: int, cap: Cost, rev_cap: Cost) -> None:
        """
        Add capacities between two variable nodes.

        Args:
            p: First node, paid ``cap`` when p is on the source side and q is not.
            q: Second node, paid ``rev_cap`` in the opposite case.
            cap: Capacity added to p -> q.
            rev_cap: Capacity added to q -> p.

        Raises:
            ValueError: If a node does not exist, p == q, or a capacity is negative.
        """
        self._check_var(p)
        self._check_var(q)
        if p == q:
            raise ValueError(f"Cannot add an edge from node '{p}' to itself.")
        self._add_capacity(p, q, cap)
        self._add_capacity(q, p, rev_cap)
        self._source_side = None

    def get_tweights(self, node: int) -> tuple[Cost, Cost]:
        """Return the accumulated ``(cap_source, cap_sink)`` of a variable node."""
        self._check_var(node)
        cap_source = self.get_edge_data(SOURCE_NODE, node, {}).get("capacity", 0)
        cap_sink = self.get_edge_data(node, SINK_NODE, {}).get("capacity", 0)
        return cap_source, cap_sink

    #
    # Flow
    #
    def maxflow(self) -> Cost:
        """
        Compute the minimum cut between the terminals.

        Returns:
            Cost: The cut value, equal to the maximum flow.
        """
        cut_value, (source_side, _) = nx.minimum_cut(
            self, SOURCE_NODE, SINK_NODE, capacity="capacity", flow_func=self.flow_func
        )
        self._source_side = source_side
        return cut_value

    def what_segment(self, node: int) -> Segment:
        """
        Return the side of the last computed cut that a node belongs to.

        Raises:
            ValueError: If the node does not exist.
            RuntimeError: If no cut is available.
        """
        self._check_var(node)
        if self._source_side is None:
            raise RuntimeError("No cut available; call maxflow() first.")
        return Segment.SOURCE if node in self._source_side else Segment.SINK

    def reset_flows(self) -> None:
        """Forget the last computed cut, keeping nodes and capacities."""
        self._source_side = None

    def reset(self) -> None:
        """Remove all variable nodes, capacities and cut state."""
        self.clear()
        self._num_vars = 0
        self._num_pair_edges = 0
        self._source_side = None
        self._add_terminals()
