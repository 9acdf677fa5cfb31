import numpy as np
import pytest

from sandpendulum.model.errors import CapacityExceeded, IndexOutOfRange
from sandpendulum.model.trajectory import Point, TrajectoryStore


def test_new_store_is_empty():
    store = TrajectoryStore(10)
    assert len(store) == 0
    assert store.is_empty()
    assert not store.is_full()
    assert store.capacity == 10


def test_reset_seeds_index_zero():
    store = TrajectoryStore(10)
    store.append(Point(0.9, 0.9))
    store.append(Point(0.8, 0.8))

    store.reset(Point(0.25, -0.5))

    assert store.length() == 1
    assert store.at(0) == Point(0.25, -0.5)


def test_append_returns_new_index():
    store = TrajectoryStore(10)
    store.reset(Point(0.0, 0.0))
    assert store.append(Point(0.1, 0.2)) == 1
    assert store.append(Point(0.3, 0.4)) == 2
    assert store[2] == Point(0.3, 0.4)
    assert store.last() == Point(0.3, 0.4)


def test_capacity_boundary():
    store = TrajectoryStore(3)
    store.reset(Point(0.0, 0.0))
    store.append(Point(0.1, 0.0))
    assert not store.is_full()

    # capacity - 1 -> capacity succeeds
    assert store.append(Point(0.2, 0.0)) == 2
    assert store.is_full()

    with pytest.raises(CapacityExceeded):
        store.append(Point(0.3, 0.0))
    assert len(store) == 3


def test_reset_after_full_accepts_points_again():
    store = TrajectoryStore(2)
    store.reset(Point(0.0, 0.0))
    store.append(Point(0.1, 0.0))
    assert store.is_full()

    store.reset(Point(0.5, 0.5))
    assert not store.is_full()
    store.append(Point(0.4, 0.5))
    assert store.is_full()


@pytest.mark.parametrize("index", [-1, 2, 100])
def test_at_out_of_range(index):
    store = TrajectoryStore(10)
    store.reset(Point(0.0, 0.0))
    store.append(Point(0.1, 0.1))
    with pytest.raises(IndexOutOfRange):
        store.at(index)


def test_index_out_of_range_is_an_index_error():
    store = TrajectoryStore(10)
    with pytest.raises(IndexError):
        store.at(0)


def test_points_view_is_read_only():
    store = TrajectoryStore(10)
    store.reset(Point(0.0, 0.0))
    store.append(Point(0.1, 0.2))

    pts = store.points()
    assert pts.shape == (2, 2)
    np.testing.assert_array_equal(pts[1], [0.1, 0.2])
    with pytest.raises(ValueError):
        pts[0, 0] = 1.0


def test_tail_returns_last_points():
    store = TrajectoryStore(10)
    store.reset(Point(0.0, 0.0))
    for i in range(1, 5):
        store.append(Point(i / 10, 0.0))

    np.testing.assert_allclose(store.tail(2)[:, 0], [0.3, 0.4])
    assert store.tail(50).shape == (5, 2)


def test_iteration_yields_points_in_order():
    store = TrajectoryStore(5)
    store.reset(Point(0.0, 0.0))
    store.append(Point(0.1, 0.1))
    assert list(store) == [Point(0.0, 0.0), Point(0.1, 0.1)]


def test_invalid_capacity():
    with pytest.raises(ValueError):
        TrajectoryStore(0)
