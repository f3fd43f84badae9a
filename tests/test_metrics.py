import numpy as np
import pytest

from metrics import chord_deviations, max_deviation, project


def test_project():
    points = project([0, 10, 20], [0, 5, 7], 0.1)
    np.testing.assert_allclose(points, [[0, 0], [1, 5], [2, 7]])


def test_chord_deviations():
    points = np.array([[0, 0], [3, 1], [1, -2], [5, 0]], dtype=float)
    np.testing.assert_allclose(chord_deviations(points, 0, 3), [1, 2])


def test_chord_deviations_backwards_chord():
    points = np.array([[5, 0], [3, 1], [0, 0]], dtype=float)
    np.testing.assert_allclose(chord_deviations(points, 0, 2), [1])


def test_chord_deviations_uses_infinite_line():
    # The foot of the perpendicular lies beyond the end of the chord.
    points = np.array([[0, 0], [10, 1], [5, 0]], dtype=float)
    np.testing.assert_allclose(chord_deviations(points, 0, 2), [1])


def test_chord_deviations_independent_of_position():
    points = project(np.arange(7.0), [0, 3, 4, 4, 4, 7, 8], 1)
    assert max_deviation(points, 0, 2) == (1, pytest.approx(np.sqrt(0.2)))
    assert max_deviation(points, 0, 2)[1] == max_deviation(points, 4, 6)[1]
    assert max_deviation(points, 4, 6)[0] == 5


def test_chord_deviations_diagonal():
    points = np.array([[0, 0], [1, 3], [2, 1]], dtype=float)
    assert chord_deviations(points, 0, 2)[0] == pytest.approx(np.sqrt(5))


def test_chord_deviations_degenerate_chord():
    points = np.array([[0, 0], [3, 4], [0, 0]], dtype=float)
    np.testing.assert_allclose(chord_deviations(points, 0, 2), [5])


def test_chord_deviations_no_interior():
    points = np.array([[0, 0], [1, 1]], dtype=float)
    assert len(chord_deviations(points, 0, 1)) == 0


def test_max_deviation():
    points = np.array([[0, 0], [1, 0.5], [2, 3], [3, 1], [4, 0]], dtype=float)
    idx, d = max_deviation(points, 0, 4)
    assert idx == 2
    assert d == pytest.approx(3)


def test_max_deviation_sub_interval():
    points = np.array([[0, 0], [1, 0.5], [2, 3], [3, 1], [4, 0]], dtype=float)
    idx, _ = max_deviation(points, 2, 4)
    assert idx == 3


def test_max_deviation_ties_go_to_lowest_index():
    points = np.array([[0, 0], [1, 1], [2, 1], [3, 0]], dtype=float)
    assert max_deviation(points, 0, 3) == (1, pytest.approx(1))


def test_max_deviation_no_interior():
    points = np.array([[0, 0], [1, 1]], dtype=float)
    assert max_deviation(points, 0, 1) == (-1, 0.0)
