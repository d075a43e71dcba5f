import pytest

from paircut.lib.util import brute_force_minimum, evaluate_energy


def test_evaluate_energy(chain3):
    unaries, pairwise = chain3
    assert evaluate_energy(unaries, pairwise, [0, 0, 0]) == 5
    assert evaluate_energy(unaries, pairwise, [0, 0, 1]) == 3
    assert evaluate_energy(unaries, pairwise, [1, 0, 1]) == 5 + 1 + 0 + 2 + 2


def test_evaluate_energy_uses_pair_order():
    unaries = [(0, 0), (0, 0)]
    assert evaluate_energy(unaries, [(0, 1, (0, 7, 0, 0))], [0, 1]) == 7
    assert evaluate_energy(unaries, [(1, 0, (0, 7, 0, 0))], [0, 1]) == 0


def test_evaluate_energy_label_count():
    with pytest.raises(ValueError, match="Expected 2 labels"):
        evaluate_energy([(0, 0), (0, 0)], [], [0])


def test_brute_force_minimum(chain3, nonsub_pair):
    assert brute_force_minimum(*chain3) == (3, [0, 0, 1])
    best, labels = brute_force_minimum(*nonsub_pair)
    assert best == 3
    assert labels == [0, 1]


def test_brute_force_empty():
    assert brute_force_minimum([], []) == (0, [])
