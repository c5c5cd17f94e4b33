import pytest

from pacesplits.io.models import ClockTime, Split, TrackPoint
from pacesplits.metrics.compute_metrics import compute_split_metrics, pace, summarize_track, to_minutes_seconds
from pacesplits.splits.segment_filter import Segment


def test_pace_of_nothing_is_zero():
    assert pace(0, 0) == ClockTime(0, 0.0)
    assert pace(120.0, 0) == ClockTime(0, 0.0)


def test_pace_per_kilometre():
    assert pace(300.0, 1000.0) == ClockTime(5, 0.0)
    p = pace(62.5, 200.0)  # 312.5 s/km
    assert p.minutes == 5
    assert p.seconds == pytest.approx(12.5)


def test_to_minutes_seconds():
    t = to_minutes_seconds(125.5)
    assert t.minutes == 2
    assert t.seconds == pytest.approx(5.5)
    assert to_minutes_seconds(59.99).minutes == 0


def test_whole_seconds_truncates():
    assert to_minutes_seconds(125.9, whole_seconds=True) == ClockTime(2, 5.0)
    assert pace(62.5, 200.0, whole_seconds=True) == ClockTime(5, 12.0)


def test_clock_time_formatting():
    assert str(ClockTime(4, 5.5)) == "4'05.50''"
    assert str(ClockTime(12, 30.0)) == "12'30.00''"
    assert ClockTime(4, 5.5).total_seconds == pytest.approx(245.5)


def test_split_metrics():
    splits = [Split(1000.0, 300.0), Split(2000.0, 330.0), Split(2437.0, 140.0)]
    metrics = compute_split_metrics(splits)

    assert [m.segment_distance for m in metrics] == [1000.0, 1000.0, 437.0]
    assert metrics[0].split_pace == ClockTime(5, 0.0)
    assert metrics[1].split_pace == ClockTime(5, 30.0)
    assert metrics[2].split_pace.total_seconds == pytest.approx(140.0 / 0.437)

    assert [m.cumulative_time_s for m in metrics] == pytest.approx([300.0, 630.0, 770.0])
    assert metrics[1].cumulative_time == ClockTime(10, 30.0)
    assert metrics[1].cumulative_pace == ClockTime(5, 15.0)
    assert metrics[2].cumulative_pace.total_seconds == pytest.approx(770.0 / 2.437)
    assert metrics[2].split_time.total_seconds == pytest.approx(140.0)


def test_last_cumulative_time_is_sum_of_elapsed():
    splits = [Split(100.0 * (i + 1), 20.0 + i * 0.37) for i in range(25)]
    metrics = compute_split_metrics(splits)
    assert metrics[-1].cumulative_time_s == pytest.approx(sum(s.elapsed_time for s in splits))
    assert metrics[-1].cumulative_time.total_seconds == pytest.approx(metrics[-1].cumulative_time_s)


def test_no_splits_no_metrics():
    assert compute_split_metrics([]) == []


def test_summarize_track():
    points = [TrackPoint(0.0, 0.0, 100.0), TrackPoint(0.0, 0.0, 400.0), TrackPoint(0.0, 0.0, 700.0)]
    valid = [Segment(1, 1000.0, 300.0, 100.0), Segment(2, 1000.0, 300.0, 400.0)]
    summary = summarize_track(points, valid)
    assert summary.total_distance == pytest.approx(2000.0)
    assert summary.total_time_s == pytest.approx(600.0)
    assert summary.total_time == ClockTime(10, 0.0)
    assert summary.average_pace == ClockTime(5, 0.0)


def test_summary_without_valid_distance_has_zero_pace():
    points = [TrackPoint(0.0, 0.0, 0.0), TrackPoint(0.0, 0.0, 0.0)]
    assert summarize_track(points, []).average_pace == ClockTime(0, 0.0)
