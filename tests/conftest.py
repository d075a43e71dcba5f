"""Shared fixtures: small energies with known minima."""

from __future__ import annotations

import pytest

from paircut import EnergyModel


@pytest.fixture
def chain3():
    # Unaries (cost0, cost1):
    #   0: (0, 5)   1: (1, 2)   2: (4, 0)
    #
    # Potts pairs [0, 2, 2, 0]:
    #   0 ──── 1 ──── 2
    #
    # Unique minimum: labels [0, 0, 1], energy 3.
    unaries = [(0, 5), (1, 2), (4, 0)]
    pairwise = [
        (0, 1, (0, 2, 2, 0)),
        (1, 2, (0, 2, 2, 0)),
    ]
    return unaries, pairwise


@pytest.fixture
def nonsub_pair():
    # Unaries (cost0, cost1):
    #   0: (2, 0)   1: (2, 0)
    #
    # Non-submodular pair (0, 1, 1, 3): f00 + f11 = 3 > 2 = f01 + f10.
    #
    # Raw energies: 00 -> 4, 01 -> 3, 10 -> 3, 11 -> 3.
    unaries = [(2, 0), (2, 0)]
    pairwise = [(0, 1, (0, 1, 1, 3))]
    return unaries, pairwise


@pytest.fixture
def grid2x3():
    # Node layout:
    #   0 ─ 1 ─ 2
    #   │   │   │
    #   3 ─ 4 ─ 5
    #
    # Mixed unaries and asymmetric submodular pairs.
    unaries = [(0, 4), (3, 1), (2, 2), (5, 0), (1, 3), (0, 6)]
    pairwise = [
        (0, 1, (0, 3, 1, 0)),
        (1, 2, (1, 2, 4, 0)),
        (3, 4, (0, 2, 2, 1)),
        (4, 5, (2, 5, 1, 3)),
        (0, 3, (0, 1, 1, 0)),
        (1, 4, (0, 4, 2, 1)),
        (2, 5, (3, 3, 3, 3)),
    ]
    return unaries, pairwise


def _build_model(unaries, pairwise, method="add_pairwise_term", config=None):
    """Create, set up and fill an EnergyModel; not finalized."""
    model = EnergyModel(config=config)
    model.create(len(unaries), len(pairwise))
    model.setup(len(unaries))
    for node, (cost0, cost1) in enumerate(unaries):
        model.add_unary_term(node, cost0, cost1)
    add = getattr(model, method)
    for p, q, matrix in pairwise:
        add(p, q, *matrix)
    return model


@pytest.fixture
def build_model():
    return _build_model
