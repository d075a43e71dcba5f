"""Binary pairwise energy model compiled into a two-terminal cut graph.

Labels follow one convention throughout: label 0 is the source side of the
cut and label 1 the sink side. A node's ``cost1`` is stored as capacity from
the source (paid when the node is cut away to the sink side) and ``cost0``
as capacity to the sink.

Typical use::

    model = EnergyModel()
    model.create(n_nodes=3, n_edges=2)
    model.setup(3)
    model.add_unary_term(0, 0, 5)
    model.add_pairwise_term(0, 1, 0, 2, 2, 0)
    model.add_pairwise_term(1, 2, 0, 2, 2, 0)
    model.finalize()
    flow = model.solve()
    labels = model.labeling()
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from paircut.config import GraphCutConfig
from paircut.lib.algorithms.base import Cost, RepairPolicy, Segment, is_submodular
from paircut.lib.algorithms.decompose import decompose_submodular
from paircut.lib.algorithms.repair import linearize_aux, truncate
from paircut.lib.algorithms.types import AuxPenalty, Decomposition, SolveResult
from paircut.lib.graph import CutGraph
from paircut.logging import get_logger
from paircut.merge import MergeBuffer
from paircut.solver import solve_aux_biased, solve_direct

logger = get_logger(__name__)


class EnergyModel:
    """
    Owns per-node costs, auxiliary penalties and the cut graph of one energy.

    Lifecycle: create() -> setup() -> add_* / store_* -> finalize() ->
    solve() -> get_label(). reset() returns the model to the state right
    after create() so that setup() can be called again.

    Attributes:
        config: Repair policy, tolerance and flow function in use.
        graph: The owned cut graph, or None before create().
        unaries: Per-node ``[cost0, cost1]``. Normalized by finalize().
        aux_penalties: Linearized non-submodular residuals.
        merge_buffer: Pairwise terms waiting for merge_parallel_edges_aux().
        baseline_score: Energy of the all-zero labeling relative to
            ``energy_offset``; only set when auxiliary penalties exist.
        energy_offset: Constant removed from the energy while building the
            graph. An absolute energy is ``flow + energy_offset``.
        last_result: Result of the last solve(), or None.
    """

    def __init__(self, config: Optional[GraphCutConfig] = None) -> None:
        self.config = config or GraphCutConfig()
        self.graph: Optional[CutGraph] = None
        self.n_nodes = 0
        self.n_edges = 0
        self.unaries: List[List[Cost]] = []
        self.aux_penalties: List[AuxPenalty] = []
        self.merge_buffer = MergeBuffer()
        self.baseline_score: Cost = 0
        self.energy_offset: Cost = 0
        self.last_result: Optional[SolveResult] = None
        self._non_subs = 0
        self._num_edges = 0
        self._finalized = False

    #
    # Lifecycle
    #
    def create(self, n_nodes: int, n_edges: int) -> None:
        """Replace the owned graph with an empty one sized for the given budget."""
        self.n_nodes = n_nodes
        self.n_edges = n_edges
        self.graph = CutGraph(
            node_budget=n_nodes,
            edge_budget=n_edges,
            flow_func=self.config.resolve_flow_func(),
        )
        self._clear_terms()
        logger.debug("Created cut graph for %d nodes, %d edges", n_nodes, n_edges)

    def setup(self, n: int) -> None:
        """
        Allocate ``n`` variable nodes and clear all accumulated terms.

        Raises:
            RuntimeError: If create() was not called, or the graph already
                holds nodes (call reset() first).
        """
        graph = self._require_graph()
        if graph.num_vars:
            raise RuntimeError(
                f"Graph already holds {graph.num_vars} nodes; call reset() first."
            )
        graph.add_nodes(n)
        self._clear_terms()
        self.unaries = [[0, 0] for _ in range(n)]

    def reset(self) -> None:
        """Drop graph topology, flow state, terms and diagnostic counters."""
        self._require_graph().reset()
        self._clear_terms()
        self._non_subs = 0
        self._num_edges = 0

    def _clear_terms(self) -> None:
        self.unaries = []
        self.aux_penalties = []
        self.merge_buffer.clear()
        self.baseline_score = 0
        self.energy_offset = 0
        self.last_result = None
        self._finalized = False

    def _require_graph(self) -> CutGraph:
        if self.graph is None:
            raise RuntimeError("No graph allocated; call create() first.")
        return self.graph

    def _check_open(self, *nodes: int) -> None:
        if self._finalized:
            raise RuntimeError("Model is finalized; no further terms can be added.")
        for node in nodes:
            if not 0 <= node < len(self.unaries):
                raise ValueError(f"Node '{node}' does not exist.")

    #
    # Diagnostics
    #
    @property
    def non_subs(self) -> int:
        """Number of terms the auxiliary policy found non-submodular."""
        return self._non_subs

    @property
    def num_edges(self) -> int:
        """Number of terms submitted through the auxiliary policy."""
        return self._num_edges

    #
    # Terms
    #
    def add_unary_term(self, node: int, cost0: Cost, cost1: Cost) -> None:
        """Add ``cost0``/``cost1`` to the cost of labeling ``node`` 0/1."""
        self._check_open(node)
        self.unaries[node][0] += cost0
        self.unaries[node][1] += cost1

    def _apply(self, p: int, q: int, decomposition: Decomposition) -> None:
        self.unaries[p][0] += decomposition.p0
        self.unaries[p][1] += decomposition.p1
        self.unaries[q][0] += decomposition.q0
        self.unaries[q][1] += decomposition.q1
        self.energy_offset += decomposition.dropped
        if decomposition.is_auxiliary:
            self.aux_penalties.append(AuxPenalty(p, q, decomposition.aux_score))
        else:
            self.graph.add_pair_edge(
                p, q, decomposition.forward, decomposition.backward
            )

    def _check_pair(self, p: int, q: int) -> None:
        self._check_open(p, q)
        if p == q:
            raise ValueError(f"Pairwise term needs two distinct nodes, got {p} twice.")

    def add_pairwise_term(
        self, p: int, q: int, f00: Cost, f01: Cost, f10: Cost, f11: Cost
    ) -> None:
        """
        Add a submodular pairwise term as unary pushes plus one edge.

        The caller guarantees ``f00 + f11 <= f01 + f10``; this is not checked.
        """
        self._check_pair(p, q)
        self._apply(p, q, decompose_submodular((f00, f01, f10, f11)))

    def add_pairwise_term_trunc(
        self, p: int, q: int, f00: Cost, f01: Cost, f10: Cost, f11: Cost
    ) -> None:
        """Add a pairwise term, truncating it first if it is not submodular."""
        self._check_pair(p, q)
        self._apply(p, q, decompose_submodular(truncate((f00, f01, f10, f11))))

    def add_pairwise_term_lsa_aux(
        self, p: int, q: int, f00: Cost, f01: Cost, f10: Cost, f11: Cost
    ) -> None:
        """
        Add a pairwise term, linearizing it into an auxiliary penalty if it is
        not submodular within the configured tolerance.

        With ``RepairPolicy.TRUNCATION`` configured, non-submodular terms are
        truncated instead. Either way the term is counted in ``num_edges``.

        Raises:
            DecompositionError: If the linearization post-condition fails.
        """
        self._check_pair(p, q)
        matrix = (f00, f01, f10, f11)
        self._num_edges += 1
        if self.config.policy == RepairPolicy.TRUNCATION:
            self._apply(p, q, decompose_submodular(truncate(matrix)))
            return
        if is_submodular(matrix, self.config.submodular_tolerance):
            self._apply(p, q, decompose_submodular(matrix))
            return
        self._non_subs += 1
        self._apply(p, q, linearize_aux(matrix))

    def store_pairwise_term(self, p: int, q: int, matrix: Sequence[Cost]) -> None:
        """Buffer a pairwise term; repeated pairs are summed until merged."""
        self._check_pair(p, q)
        self.merge_buffer.store(p, q, tuple(matrix))

    def merge_parallel_edges_aux(self) -> int:
        """
        Submit every buffered pair once through add_pairwise_term_lsa_aux().

        Each summed matrix is lowered by its smallest entry first. The buffer
        is empty afterwards.

        Returns:
            int: Number of distinct pairs replayed.
        """
        self._check_open()
        count = 0
        for (p, q), matrix in self.merge_buffer.drain():
            lowest = min(matrix)
            self.energy_offset += lowest
            f00, f01, f10, f11 = (value - lowest for value in matrix)
            self.add_pairwise_term_lsa_aux(p, q, f00, f01, f10, f11)
            count += 1
        logger.debug("Merged %d buffered pairs", count)
        return count

    #
    # Solve
    #
    def finalize(self) -> None:
        """
        Normalize unary costs and write them as terminal capacities.

        Per node the smaller of the two costs is moved into ``energy_offset``.
        When auxiliary penalties exist, ``baseline_score`` becomes the energy
        of the all-zero labeling.
        """
        graph = self._require_graph()
        self._check_open()
        if len(self.merge_buffer):
            logger.warning(
                "%d buffered pairs were never merged and are ignored",
                len(self.merge_buffer),
            )

        track_baseline = bool(self.aux_penalties)
        baseline = 0
        for node, (cost0, cost1) in enumerate(self.unaries):
            lowest = min(cost0, cost1)
            cost0 -= lowest
            cost1 -= lowest
            self.unaries[node] = [cost0, cost1]
            self.energy_offset += lowest
            if track_baseline:
                baseline += cost0
            graph.add_tweights(node, cost1, cost0)

        self.baseline_score = baseline
        self._finalized = True
        logger.debug(
            "Finalized %d nodes, %d pair edges, %d auxiliary penalties",
            len(self.unaries),
            graph.num_pair_edges,
            len(self.aux_penalties),
        )

    def solve(self) -> Cost:
        """
        Compute the minimum cut.

        Without auxiliary penalties the returned flow is the exact minimum
        energy minus ``energy_offset``. With penalties the graph is biased
        once by half of every penalty score and the flow is an upper bound;
        ``baseline_score`` is lowered to ``min(flow, baseline_score)``.
        Repeated calls return the cached flow.

        Returns:
            Cost: The cut value.

        Raises:
            RuntimeError: If finalize() was not called.
        """
        if not self._finalized:
            raise RuntimeError("Call finalize() before solve().")
        if self.last_result is not None:
            return self.last_result.flow

        if self.aux_penalties:
            result = solve_aux_biased(
                self.graph, self.aux_penalties, self.baseline_score
            )
            self.baseline_score = result.bound
        else:
            result = solve_direct(self.graph)
        self.last_result = result
        return result.flow

    def get_label(self, node: int) -> int:
        """
        Return 0 if ``node`` lies on the source side of the cut, else 1.

        Raises:
            RuntimeError: If solve() was not called.
        """
        if self.last_result is None:
            raise RuntimeError("Call solve() before reading labels.")
        return int(self.graph.what_segment(node) != Segment.SOURCE)

    def labeling(self) -> List[int]:
        """Return the labels of all nodes in index order."""
        return [self.get_label(node) for node in range(len(self.unaries))]
