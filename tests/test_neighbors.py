import h3
import pytest

from hexgrid.common import InternalError
from hexgrid.h3 import H3NeighborDiscovery, get_cell_neighbors

from .conftest import KNOWN_CELL


@pytest.fixture
def discovery():
    return H3NeighborDiscovery(max_k=10)


def test_k_zero_is_just_the_origin(discovery):
    assert discovery.get_k_ring_neighbors(KNOWN_CELL, 0) == [KNOWN_CELL]


def test_k_one_on_hexagon_has_seven_cells(discovery):
    ring = discovery.get_k_ring_neighbors(KNOWN_CELL, 1)

    assert len(ring) == 7
    assert len(set(ring)) == 7
    assert KNOWN_CELL in ring
    assert all(h3.grid_distance(KNOWN_CELL, cell) <= 1 for cell in ring)


def test_k_one_on_pentagon_has_six_cells(discovery):
    pentagon = sorted(h3.get_pentagons(4))[0]
    assert len(discovery.get_k_ring_neighbors(pentagon, 1)) == 6


def test_ring_size_grows_with_k(discovery):
    # 1 + 3k(k+1) cells around a hexagon away from pentagons
    assert len(discovery.get_k_ring_neighbors(KNOWN_CELL, 2)) == 19
    assert len(discovery.get_k_ring_neighbors(KNOWN_CELL, 10)) == 331


def test_k_above_limit_is_rejected():
    with pytest.raises(ValueError):
        H3NeighborDiscovery(max_k=3).get_k_ring_neighbors(KNOWN_CELL, 4)


def test_invalid_cell_raises_internal_error(discovery):
    with pytest.raises(InternalError):
        discovery.get_k_ring_neighbors("not-a-cell", 1)


def test_get_neighbors_result(discovery):
    result = discovery.get_neighbors(KNOWN_CELL, 1)
    assert result.center == KNOWN_CELL
    assert result.k == 1
    assert result.count == 7


def test_convenience_function_uses_default_k():
    assert len(get_cell_neighbors(KNOWN_CELL)) == 7
