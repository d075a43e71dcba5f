from itertools import product

import pytest

from paircut.lib.algorithms.base import is_submodular
from paircut.lib.algorithms.decompose import decompose_submodular

LABELS = [(0, 0), (0, 1), (1, 0), (1, 1)]


class TestDecomposeSubmodular:
    def test_potts_matrix_is_all_edge(self):
        d = decompose_submodular((0, 2, 2, 0))
        assert (d.p0, d.p1, d.q0, d.q1) == (0, 0, 0, 0)
        assert (d.forward, d.backward) == (2, 2)
        assert not d.is_auxiliary
        assert d.dropped == 0

    def test_extraction_order(self):
        """
        (3, 5, 4, 9):
          row p=0: min(3, 5)=3 -> (0, 2, 4, 9)
          row p=1: min(4, 9)=4 -> (0, 2, 0, 5)
          col q=0: min(0, 0)=0
          col q=1: min(2, 5)=2 -> (0, 0, 0, 3)
        Not submodular (12 > 9): the diagonal residual 3 is lost.
        """
        d = decompose_submodular((3, 5, 4, 9))
        assert (d.p0, d.p1, d.q0, d.q1) == (3, 4, 0, 2)
        assert (d.forward, d.backward) == (0, 0)

    def test_asymmetric_edge(self):
        d = decompose_submodular((1, 6, 2, 0))
        # row p=0: 1 -> (0, 5, 2, 0); row p=1: 0; col q=0: 0; col q=1: 0
        assert (d.p0, d.p1, d.q0, d.q1) == (1, 0, 0, 0)
        assert (d.forward, d.backward) == (5, 2)

    def test_reproduces_every_submodular_matrix(self):
        values = range(-2, 4)
        checked = 0
        for matrix in product(values, repeat=4):
            if not is_submodular(matrix):
                continue
            d = decompose_submodular(matrix)
            assert d.forward >= 0 and d.backward >= 0
            for index, (a, b) in enumerate(LABELS):
                assert d.energy(a, b) == matrix[index], (matrix, a, b)
            checked += 1
        assert checked > 0

    def test_capacities_non_negative_for_any_input(self):
        for matrix in product(range(-3, 4, 2), repeat=4):
            d = decompose_submodular(matrix)
            assert d.forward >= 0
            assert d.backward >= 0

    def test_float_matrix(self):
        d = decompose_submodular((0.5, 1.5, 2.0, 0.25))
        for index, (a, b) in enumerate(LABELS):
            assert d.energy(a, b) == pytest.approx((0.5, 1.5, 2.0, 0.25)[index])
