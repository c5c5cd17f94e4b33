from __future__ import annotations
import logging
import math
from typing import List, Optional, Sequence

from pacesplits.errors import InsufficientData, InvalidParameter, NoValidSplits
from pacesplits.io.models import Split, TrackPoint
from pacesplits.splits.segment_filter import Segment, SegmentFilter

logger = logging.getLogger(__name__)


class SplitSegmenter:
    """
    Cuts a stream of valid (distance, time) segments into fixed-distance splits.

    Boundary times are interpolated linearly inside the segment that crosses
    the boundary, and one segment may cross several boundaries. Whatever
    distance is left after the last full split becomes a final partial split
    whose marker is the rounded total distance; a remainder that rounds to
    0 m is not emitted so markers stay strictly increasing.
    """

    def __init__(self, split_distance: int):
        if isinstance(split_distance, bool) or not isinstance(split_distance, int):
            raise InvalidParameter(f"split_distance must be an integer, got {split_distance!r}")
        if split_distance <= 0:
            raise InvalidParameter(f"split_distance must be positive, got {split_distance}")
        self.split_distance = split_distance

    def segment(self, points: Sequence[TrackPoint], segments: Sequence[Segment]) -> List[Split]:
        if len(points) < 2:
            raise InsufficientData(len(points))
        if not segments:
            raise NoValidSplits("No valid segments in track; every point pair was filtered out")

        split_distance = float(self.split_distance)
        splits: List[Split] = []
        accumulated = 0.0
        split_start_time = points[0].timestamp

        for seg in segments:
            remaining_distance = seg.distance_m
            remaining_time = seg.time_delta_s
            seg_start = seg.start_time

            while remaining_distance > 0:
                needed = split_distance - accumulated
                if remaining_distance >= needed:
                    fraction = needed / remaining_distance
                    boundary_time = seg_start + fraction * remaining_time
                    splits.append(
                        Split(
                            distance_marker=(len(splits) + 1) * split_distance,
                            elapsed_time=boundary_time - split_start_time,
                        )
                    )
                    split_start_time = boundary_time
                    accumulated = 0.0
                    remaining_distance -= needed
                    remaining_time *= 1 - fraction
                    seg_start = boundary_time
                else:
                    accumulated += remaining_distance
                    remaining_distance = 0.0

        # half away from zero; round() would send 0.5 to 0
        leftover = math.floor(accumulated + 0.5)
        if leftover > 0:
            splits.append(
                Split(
                    distance_marker=len(splits) * split_distance + leftover,
                    elapsed_time=points[-1].timestamp - split_start_time,
                )
            )
        elif accumulated > 0:
            logger.debug("Dropping %.3fm remainder after the last split", accumulated)

        if not splits:
            raise NoValidSplits("Valid segments cover no distance; no split could be formed")
        return splits


def compute_splits(
    points: Sequence[TrackPoint],
    split_distance: int,
    segment_filter: SegmentFilter,
    segments: Optional[Sequence[Segment]] = None,
) -> List[Split]:
    '''
    Filter the track's point pairs and cut the valid ones into splits.
    Pass precomputed valid segments to skip the filter.
    '''
    segmenter = SplitSegmenter(split_distance)
    if len(points) < 2:
        raise InsufficientData(len(points))
    if segments is None:
        segments = segment_filter.valid_segments(list(points))
    return segmenter.segment(points, segments)
