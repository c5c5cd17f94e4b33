from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import List, Tuple

from pacesplits.config import MAX_SPEED, MIN_TIME_DIFFERENCE
from pacesplits.geo.distance import DistanceModel
from pacesplits.io.models import TrackPoint

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Segment:
    index: int            # index of the segment's end point
    distance_m: float
    time_delta_s: float
    start_time: float     # timestamp of the segment's start point


class SegmentFilter:
    '''
    Drops consecutive point pairs that cannot be real running:
        - time delta at or below min_time_difference (duplicates, clock going backwards)
        - implied speed above max_speed (GPS jumps)
    Dropped pairs contribute neither distance nor time to anything downstream.
    '''

    def __init__(
        self,
        distance_model: DistanceModel,
        max_speed: float = MAX_SPEED,
        min_time_difference: float = MIN_TIME_DIFFERENCE,
    ):
        self.distance_model = distance_model
        self.max_speed = max_speed
        self.min_time_difference = min_time_difference

    def accepts(self, distance_m: float, time_delta_s: float) -> bool:
        if time_delta_s <= self.min_time_difference:
            return False
        if time_delta_s > 0 and distance_m / time_delta_s > self.max_speed:
            return False
        return True

    def segments(self, points: List[TrackPoint]) -> List[Segment]:
        """Every consecutive pair as a Segment, valid or not, in document order."""
        if len(points) < 2:
            return []
        distances = self.distance_model.pairwise(
            [p.latitude for p in points], [p.longitude for p in points]
        )
        out: List[Segment] = []
        for i in range(1, len(points)):
            out.append(
                Segment(
                    index=i,
                    distance_m=float(distances[i - 1]),
                    time_delta_s=points[i].timestamp - points[i - 1].timestamp,
                    start_time=points[i - 1].timestamp,
                )
            )
        return out

    def partition(self, points: List[TrackPoint]) -> Tuple[List[Segment], List[Segment]]:
        accepted: List[Segment] = []
        rejected: List[Segment] = []
        for seg in self.segments(points):
            if self.accepts(seg.distance_m, seg.time_delta_s):
                accepted.append(seg)
            else:
                rejected.append(seg)
                logger.debug(
                    "Dropping segment %d: %.2fm in %.2fs", seg.index, seg.distance_m, seg.time_delta_s
                )
        return accepted, rejected

    def valid_segments(self, points: List[TrackPoint]) -> List[Segment]:
        accepted, _ = self.partition(points)
        return accepted
