from __future__ import annotations
import logging
from pathlib import Path
from typing import BinaryIO, List, Optional, Union

from pacesplits.config import SplitConfig
from pacesplits.errors import InsufficientData
from pacesplits.geo.distance import DistanceModel, make_distance_model
from pacesplits.io.gpx_parser import decode_track, load_track
from pacesplits.io.models import SplitReport, TrackPoint
from pacesplits.metrics.compute_metrics import compute_split_metrics, summarize_track
from pacesplits.splits.segment_filter import SegmentFilter
from pacesplits.splits.segmenter import SplitSegmenter

logger = logging.getLogger(__name__)


def analyze_points(
    points: List[TrackPoint],
    config: SplitConfig,
    distance_model: Optional[DistanceModel] = None,
) -> SplitReport:
    """
    Run filter, segmenter and metrics over an already decoded track.

    The distance model is built once here unless the caller passes one in.
    """
    config.validate()
    segmenter = SplitSegmenter(config.split_distance)
    if len(points) < 2:
        raise InsufficientData(len(points))

    model = distance_model or make_distance_model(config.distance_model)
    segment_filter = SegmentFilter(
        model, max_speed=config.max_speed, min_time_difference=config.min_time_difference
    )

    accepted, rejected = segment_filter.partition(points)
    logger.info(
        "Segments: %d accepted, %d rejected (%s model)", len(accepted), len(rejected), model.name
    )

    splits = segmenter.segment(points, accepted)
    metrics = compute_split_metrics(splits, whole_seconds=config.whole_seconds)
    summary = summarize_track(points, accepted, whole_seconds=config.whole_seconds)
    logger.info("Computed %d splits over %.0fm", len(splits), summary.total_distance)

    return SplitReport(
        split_distance=config.split_distance,
        points=points,
        splits=splits,
        metrics=metrics,
        summary=summary,
    )


def analyze_track(source: Union[str, Path, BinaryIO], config: SplitConfig) -> SplitReport:
    '''
    Decode a GPX file (path or binary stream) and compute its splits
    '''
    config.validate()
    if isinstance(source, (str, Path)):
        points = load_track(source, timestamp_mode=config.timestamp_mode, max_points=config.max_points)
    else:
        points = decode_track(source, timestamp_mode=config.timestamp_mode, max_points=config.max_points)
    logger.info("Decoded %d track points", len(points))
    return analyze_points(points, config)
