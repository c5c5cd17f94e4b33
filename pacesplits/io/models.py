from __future__ import annotations
from dataclasses import dataclass
from typing import List


@dataclass(frozen=True)
class TrackPoint:
    latitude: float
    longitude: float
    timestamp: float  # seconds since epoch, UTC


@dataclass(frozen=True)
class Split:
    distance_marker: float  # meters from the start
    elapsed_time: float     # seconds since the previous split boundary


@dataclass(frozen=True)
class ClockTime:
    minutes: int
    seconds: float

    @property
    def total_seconds(self) -> float:
        return self.minutes * 60.0 + self.seconds

    def __str__(self) -> str:
        return f"{self.minutes}'{self.seconds:05.2f}''"


@dataclass(frozen=True)
class SplitMetrics:
    segment_distance: float
    split_time: ClockTime
    split_pace: ClockTime
    cumulative_time_s: float
    cumulative_time: ClockTime
    cumulative_pace: ClockTime


@dataclass(frozen=True)
class TrackSummary:
    total_distance: float  # meters, valid segments only
    total_time_s: float
    total_time: ClockTime
    average_pace: ClockTime


@dataclass(frozen=True)
class SplitReport:
    split_distance: int
    points: List[TrackPoint]
    splits: List[Split]
    metrics: List[SplitMetrics]
    summary: TrackSummary
