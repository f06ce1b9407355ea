import pytest

from vennsearch.edges import CurveLink, CurveTracker, Edge
from vennsearch.engine import Trail
from vennsearch.failure import Failures, SearchFailure


def make_curve(k, closed=True, color=0):
    forward = [Edge(color, 1 << color) for _ in range(k)]
    backward = [Edge(color, 0) for _ in range(k)]
    for f, r in zip(forward, backward):
        f.reversed = r
        r.reversed = f
    links = range(k) if closed else range(k - 1)
    for i in links:
        forward[i].to = CurveLink(next=forward[(i + 1) % k])
        backward[(i + 1) % k].to = CurveLink(next=backward[i])
    return forward, backward


def make_tracker(max_crossings=3):
    trail = Trail()
    failures = Failures()
    return CurveTracker(3, trail, failures, max_crossings), trail, failures


def test_follow_forwards_unknown_end():
    edge = Edge(0, 1)
    assert edge.follow_forwards() is None


def test_follow_forwards_and_backwards():
    forward, _ = make_curve(4)
    assert forward[1].follow_forwards() is forward[2]
    assert forward[3].follow_forwards() is forward[0]
    assert forward[2].follow_backwards() is forward[1]
    assert forward[0].follow_backwards() is forward[3]


def test_backwards_at_open_end():
    forward, _ = make_curve(4, closed=False)
    assert forward[0].follow_backwards() is None
    assert forward[3].follow_forwards() is None


def test_is_clockwise():
    forward, backward = make_curve(2, color=1)
    assert forward[0].is_clockwise is True
    assert backward[0].is_clockwise is False


def test_path_to_and_length():
    forward, _ = make_curve(4)
    assert forward[0].path_to(forward[2]) == [forward[0], forward[1], forward[2]]
    assert forward[3].path_to(forward[1]) == [forward[3], forward[0], forward[1]]
    assert forward[0].path_length(forward[2]) == 3


def test_path_to_self():
    forward, _ = make_curve(4)
    assert forward[1].path_to(forward[1]) == [forward[1]]
    assert forward[1].path_length(forward[1]) == 1


def test_path_broken_raises():
    forward, _ = make_curve(4, closed=False)
    with pytest.raises(ValueError):
        forward[2].path_to(forward[0])


def test_path_unreachable_target_raises():
    forward, _ = make_curve(3)
    other = Edge(1, 2)
    with pytest.raises(ValueError):
        forward[0].path_to(other)


def test_crossing_limit():
    tracker, trail, failures = make_tracker(max_crossings=2)
    tracker.check_crossing_limit(0, 1, 0)
    tracker.check_crossing_limit(0, 1, 0)
    assert tracker.crossings[0][1] == 2
    assert tracker.crossings[1][0] == 0
    with pytest.raises(SearchFailure) as info:
        tracker.check_crossing_limit(0, 1, 4)
    assert info.value.failure is failures.crossing_limit_failure
    assert failures.crossing_limit_failure.counts[4] == 1
    assert tracker.crossings[0][1] == 2


def test_crossings_undone_by_trail():
    tracker, trail, _ = make_tracker()
    point = trail.mark()
    tracker.check_crossing_limit(1, 2, 0)
    assert tracker.crossings[1][2] == 1
    trail.rewind_to(point)
    assert tracker.crossings[1][2] == 0


def test_count_edge_by_direction():
    tracker, trail, _ = make_tracker()
    forward, backward = make_curve(3)
    for edge in forward:
        tracker.count_edge(edge)
    tracker.count_edge(backward[0])
    assert tracker.edge_counts[1][0] == len(forward)
    assert tracker.edge_counts[0][0] == 1
    trail.rewind_to(0)
    assert tracker.edge_counts == ([0, 0, 0], [0, 0, 0])


def test_closed_curve_completes():
    tracker, trail, _ = make_tracker()
    forward, _ = make_curve(4)
    point = trail.mark()
    for edge in forward:
        tracker.count_edge(edge)
    tracker.curve_checks(forward[2], 0)
    assert tracker.curves_complete[0] is True
    assert tracker.color_completed & 1
    trail.rewind_to(point)
    assert tracker.curves_complete[0] is False


def test_closed_curve_with_missing_edges_fails():
    tracker, _, failures = make_tracker()
    forward, _ = make_curve(4)
    for edge in forward + forward[:1]:
        tracker.count_edge(edge)
    with pytest.raises(SearchFailure) as info:
        tracker.curve_checks(forward[1], 3)
    assert info.value.failure is failures.disconnected_curve_failure
    assert failures.disconnected_curve_failure.counts[3] == 1
    assert tracker.curves_complete[0] is False


def test_open_curve_is_not_checked():
    tracker, _, _ = make_tracker()
    forward, _ = make_curve(4, closed=False)
    tracker.count_edge(forward[0])
    tracker.curve_checks(forward[2], 0)
    assert tracker.curves_complete == [False, False, False]
    assert tracker.color_completed == 0