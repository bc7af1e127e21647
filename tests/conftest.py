import random
from typing import List, Tuple

import pytest

from dijkstrax.graph import Graph

SCENARIO_EDGES = [(0, 1, 2), (0, 2, 5), (1, 2, 1), (1, 3, 4), (2, 3, 1)]


@pytest.fixture
def scenario() -> Graph:
    """Four-vertex graph whose shortest-path tree is 0 -> 1 -> 2 -> 3."""
    return Graph.from_edges(4, SCENARIO_EDGES)


@pytest.fixture
def two_components() -> Graph:
    """Components {0, 1, 2} and {3, 4} plus an isolated vertex 5."""
    return Graph.from_edges(6, [(0, 1, 1.0), (1, 2, 1.0), (3, 4, 2.0)])


def random_edges(n: int, m: int, seed: int, integral: bool = False) -> List[Tuple[int, int, float]]:
    rnd = random.Random(seed)
    edges = []
    for _ in range(m):
        u = rnd.randrange(n)
        v = rnd.randrange(n)
        w = rnd.randint(0, 9) if integral else rnd.random() * 10.0
        edges.append((u, v, w))
    return edges
