import pytest

from pacesplits.geo.distance import HaversineDistance
from pacesplits.io.models import TrackPoint
from pacesplits.splits.segment_filter import SegmentFilter
from pacesplits.track_fixtures import BASE_EPOCH, FixedDistances, equator_track


def _points(times):
    return [TrackPoint(0.0, 0.0, BASE_EPOCH + t) for t in times]


@pytest.mark.parametrize("distance,dt,expected", [
    (10.0, 5.0, True),
    (0.0, 5.0, True),           # standing still is fine
    (75.0, 5.0, True),          # exactly max speed
    (75.1, 5.0, False),         # just over 15 m/s
    (1.0, 0.1, False),          # at the minimum time difference
    (1.0, 0.0, False),          # duplicate timestamp
    (1.0, -3.0, False),         # clock went backwards
    (1.0, 0.11, True),
])
def test_accepts(distance, dt, expected):
    f = SegmentFilter(HaversineDistance())
    assert f.accepts(distance, dt) is expected


def test_thresholds_are_configurable():
    f = SegmentFilter(HaversineDistance(), max_speed=12.5, min_time_difference=1.0)
    assert not f.accepts(65.0, 5.0)
    assert not f.accepts(0.5, 1.0)
    assert f.accepts(62.5, 5.0)


def test_segments_cover_every_pair():
    points = equator_track(5)
    segs = SegmentFilter(HaversineDistance()).segments(points)
    assert [s.index for s in segs] == [1, 2, 3, 4]
    assert all(s.time_delta_s == pytest.approx(10.0) for s in segs)
    assert [s.start_time for s in segs] == [p.timestamp for p in points[:-1]]


def test_partition_is_complete_and_disjoint():
    points = _points([0, 5, 5, 10, 9, 20, 30])
    distances = [20.0, 3.0, 10.0, 1.0, 500.0, 40.0]
    f = SegmentFilter(FixedDistances(distances))
    accepted, rejected = f.partition(points)
    assert sorted(s.index for s in accepted + rejected) == list(range(1, len(points)))
    assert [s.index for s in accepted] == [1, 3, 6]
    assert [s.index for s in rejected] == [2, 4, 5]


def test_identical_timestamps_contribute_nothing():
    points = _points([0, 10, 10, 20])
    f = SegmentFilter(FixedDistances([50.0, 5.0, 50.0]))
    valid = f.valid_segments(points)
    assert [s.index for s in valid] == [1, 3]
    assert sum(s.distance_m for s in valid) == pytest.approx(100.0)


def test_decision_depends_only_on_distance_and_time():
    # Same (distance, dt) pairs at different positions give the same verdicts
    f = SegmentFilter(FixedDistances([30.0, 200.0, 30.0, 200.0]))
    accepted, rejected = f.partition(_points([0, 10, 20, 30, 40]))
    assert [s.index for s in accepted] == [1, 3]
    assert [s.index for s in rejected] == [2, 4]


def test_fewer_than_two_points_has_no_segments():
    f = SegmentFilter(HaversineDistance())
    assert f.segments([]) == []
    assert f.segments(_points([0])) == []
