"""Min-cut solve strategies for a finalized energy graph."""

from __future__ import annotations

from typing import Iterable

from paircut.lib.algorithms.base import Cost, SolveMode
from paircut.lib.algorithms.types import AuxPenalty, SolveResult
from paircut.lib.graph import CutGraph
from paircut.logging import get_logger

logger = get_logger(__name__)


def solve_direct(graph: CutGraph) -> SolveResult:
    """Run one min cut on the graph as built.

    The flow is the exact minimum energy relative to the constants removed
    while building the graph.
    """
    flow = graph.maxflow()
    logger.debug("Direct solve: flow=%s", flow)
    return SolveResult(mode=SolveMode.DIRECT, flow=flow, bound=flow)


def solve_aux_biased(
    graph: CutGraph, penalties: Iterable[AuxPenalty], baseline: Cost
) -> SolveResult:
    """Run one min cut after spreading each auxiliary penalty over its nodes.

    Half of every penalty score is added to the source-side terminal capacity
    of both of its nodes, so each node pays ``score / 2`` for taking label 1.
    This over-estimates a penalty whenever exactly one of its nodes is 1 and
    is exact otherwise. The all-zero labeling is priced at ``baseline`` in
    both the unbiased and the biased energy, so a flow above ``baseline``
    points to a defect in graph construction. It is logged, not raised.

    Args:
        graph: Finalized graph. Terminal capacities are modified in place.
        penalties: Auxiliary penalties recorded while adding terms.
        baseline: Energy of the all-zero labeling relative to the offset.

    Returns:
        SolveResult: ``bound`` is ``min(flow, baseline)``.
    """
    count = 0
    for penalty in penalties:
        half = penalty.score / 2
        graph.add_tweights(penalty.p, half, 0)
        graph.add_tweights(penalty.q, half, 0)
        count += 1

    flow = graph.maxflow()
    anomaly = flow > baseline
    if anomaly:
        logger.warning(
            "Energy increased: flow %s exceeds the all-zero baseline %s", flow, baseline
        )
    logger.debug(
        "Auxiliary-biased solve over %d penalties: flow=%s baseline=%s",
        count,
        flow,
        baseline,
    )
    return SolveResult(
        mode=SolveMode.AUX_BIASED,
        flow=flow,
        bound=min(flow, baseline),
        baseline=baseline,
        anomaly=anomaly,
    )
