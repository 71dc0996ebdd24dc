from __future__ import annotations

import pytest

from routequest.core.errors import OutOfRange
from routequest.core.types import Waypoint
from routequest.mission.progress_store import RouteProgressStore


def make_store(n: int) -> RouteProgressStore:
    return RouteProgressStore([Waypoint(name=f"stop {i}") for i in range(n)])


def test_reset_starts_empty():
    store = make_store(4)
    store.complete(0)
    store.complete(2)
    store.reset([Waypoint(name="a"), Waypoint(name="b")])
    assert store.progress_percent() == 0
    assert store.current_index == 0
    assert store.completed_waypoints() == []
    assert store.next_waypoint().name == "a"


def test_complete_current_advances_by_one():
    store = make_store(3)
    assert store.complete(0) is True
    assert store.current_index == 1
    assert store.complete(1) is True
    assert store.current_index == 2


def test_complete_last_never_advances():
    store = make_store(2)
    store.complete(0)
    assert store.current_index == 1
    assert store.complete(1) is False
    assert store.current_index == 1
    assert store.is_finished()


def test_complete_out_of_order_keeps_cursor():
    store = make_store(4)
    assert store.complete(2) is False
    assert store.current_index == 0
    assert store.is_completed(2)
    assert store.next_waypoint().name == "stop 0"


def test_complete_is_idempotent():
    store = make_store(3)
    store.complete(2)
    store.complete(2)
    assert store.completed_count() == 1
    assert store.current_index == 0


def test_uncomplete_restores_set_but_not_cursor():
    store = make_store(3)
    store.complete(0)
    store.uncomplete(0)
    assert store.completed_count() == 0
    assert store.current_index == 1
    store.uncomplete(0)  # absent, no-op
    assert store.completed_count() == 0


@pytest.mark.parametrize("bad", [-1, 3, 10, True, 1.0, "1"])
def test_out_of_range_indices(bad):
    store = make_store(3)
    with pytest.raises(OutOfRange):
        store.complete(bad)
    with pytest.raises(OutOfRange):
        store.uncomplete(bad)
    assert store.completed_count() == 0


def test_out_of_range_is_an_index_error():
    with pytest.raises(IndexError):
        make_store(0).complete(0)


def test_progress_percent_rounds_half_up():
    store = make_store(8)
    store.complete(3)
    assert store.progress_percent() == 13  # 12.5
    store = make_store(3)
    store.complete(1)
    assert store.progress_percent() == 33
    store.complete(0)
    assert store.progress_percent() == 67
    store.complete(2)
    assert store.progress_percent() == 100


def test_completed_waypoints_in_route_order():
    store = make_store(4)
    store.complete(3)
    store.complete(1)
    store.complete(0)
    assert [wp.name for wp in store.completed_waypoints()] == ["stop 0", "stop 1", "stop 3"]


def test_empty_route_degrades():
    store = make_store(0)
    assert store.progress_percent() == 0
    assert store.next_waypoint() is None
    assert store.completed_waypoints() == []
    assert store.remaining() == 0
    assert not store.is_finished()
