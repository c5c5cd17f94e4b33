from __future__ import annotations
import math
from typing import List, Sequence

from pacesplits.io.models import ClockTime, Split, SplitMetrics, TrackPoint, TrackSummary
from pacesplits.splits.segment_filter import Segment


def to_minutes_seconds(total_seconds: float, whole_seconds: bool = False) -> ClockTime:
    '''
    Split a duration into minutes and remaining seconds.
    whole_seconds truncates the fractional part first
    '''
    if whole_seconds:
        total_seconds = float(math.trunc(total_seconds))
    minutes = int(total_seconds / 60)
    return ClockTime(minutes=minutes, seconds=total_seconds - minutes * 60.0)


def pace(total_time: float, total_distance: float, whole_seconds: bool = False) -> ClockTime:
    '''
    Time per kilometre. Zero distance gives 0'00 rather than a division error
    '''
    if total_distance == 0:
        return ClockTime(0, 0.0)
    return to_minutes_seconds(total_time / (total_distance / 1000.0), whole_seconds=whole_seconds)


def compute_split_metrics(splits: Sequence[Split], whole_seconds: bool = False) -> List[SplitMetrics]:
    '''
    Per-split pace plus running totals, in one pass over the splits
    '''
    out: List[SplitMetrics] = []
    cumulative_time_s = 0.0
    prev_marker = 0.0
    for s in splits:
        cumulative_time_s += s.elapsed_time
        segment_distance = s.distance_marker - prev_marker
        prev_marker = s.distance_marker

        out.append(
            SplitMetrics(
                segment_distance=segment_distance,
                split_time=to_minutes_seconds(s.elapsed_time, whole_seconds),
                split_pace=pace(s.elapsed_time, segment_distance, whole_seconds),
                cumulative_time_s=cumulative_time_s,
                cumulative_time=to_minutes_seconds(cumulative_time_s, whole_seconds),
                cumulative_pace=pace(cumulative_time_s, s.distance_marker, whole_seconds),
            )
        )
    return out


def summarize_track(
    points: Sequence[TrackPoint], valid_segments: Sequence[Segment], whole_seconds: bool = False
) -> TrackSummary:
    # Distance counts valid segments only; time is wall clock from first to last fix
    total_distance = sum(seg.distance_m for seg in valid_segments)
    total_time_s = points[-1].timestamp - points[0].timestamp if points else 0.0

    return TrackSummary(
        total_distance=total_distance,
        total_time_s=total_time_s,
        total_time=to_minutes_seconds(total_time_s, whole_seconds),
        average_pace=pace(total_time_s, total_distance, whole_seconds),
    )
