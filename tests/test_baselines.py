"""Tests for the reference algorithms."""

import math

import numpy as np
import pytest

from pathstep.baselines import bellman_ford, dijkstra_reference, floyd_warshall, floyd_warshall_from
from pathstep.exceptions import NotFoundError
from pathstep.graph import Graph


def test_reference_algorithms_agree(five_vertex):
    G, source = five_vertex
    expected = {1: 0, 2: 4, 3: 6, 4: 3, 5: 2}
    assert dijkstra_reference(G, source).distances == expected
    assert bellman_ford(G, source).distances == expected
    assert floyd_warshall_from(G, source) == expected


def test_floyd_warshall_matrix(chain):
    ids, D = floyd_warshall(chain)
    assert ids == [1, 2, 3]
    assert D.shape == (3, 3)
    assert np.array_equal(np.diag(D), np.zeros(3))
    assert D[0, 2] == 4.0
    assert np.isinf(D[2, 0])


def test_unreachable(disconnected):
    G, source = disconnected
    assert math.isinf(dijkstra_reference(G, source).distances[4])
    assert math.isinf(floyd_warshall_from(G, source)[4])


def test_bellman_ford_iteration_cap():
    G = Graph.from_edges([(1, 2, 1), (2, 3, 1), (3, 4, 1)])
    capped = bellman_ford(G, 1, max_iters=1).distances
    # edges are scanned in insertion order, so one pass already reaches 4
    assert capped[4] == 3
    reversed_G = Graph.from_edges([(3, 4, 1), (2, 3, 1), (1, 2, 1)])
    assert math.isinf(bellman_ford(reversed_G, 1, max_iters=1).distances[4])


def test_unknown_source(chain):
    with pytest.raises(NotFoundError):
        dijkstra_reference(chain, 7)
    with pytest.raises(NotFoundError):
        floyd_warshall_from(chain, 7)
