from __future__ import annotations
from datetime import datetime, timezone
from typing import List, Optional, Sequence, Tuple

import numpy as np

from pacesplits.geo.distance import DistanceModel
from pacesplits.io.models import TrackPoint

# 0.0009 degrees of longitude on the equator, about 100 m
LON_STEP_100M = 0.0009

BASE_EPOCH = 1700000000.0  # 2023-11-14T22:13:20Z


def iso(seconds: float) -> str:
    return datetime.fromtimestamp(seconds, tz=timezone.utc).strftime('%Y-%m-%dT%H:%M:%SZ')


def build_gpx(points: Sequence[Tuple[float, float, Optional[str]]], prefix: str = "") -> bytes:
    '''
    Minimal GPX 1.1 document. prefix="gpx:" writes prefixed tags with a matching xmlns declaration
    '''
    p = prefix
    ns_attr = f' xmlns:{p[:-1]}="http://www.topografix.com/GPX/1/1"' if p else ' xmlns="http://www.topografix.com/GPX/1/1"'
    lines = [
        '<?xml version="1.0" encoding="UTF-8"?>',
        f'<{p}gpx version="1.1" creator="tests"{ns_attr}>',
        f'  <{p}metadata><{p}time>2020-01-01T00:00:00Z</{p}time></{p}metadata>',
        f'  <{p}trk><{p}name>run</{p}name><{p}trkseg>',
    ]
    for lat, lon, t in points:
        lines.append(f'    <{p}trkpt lat="{lat}" lon="{lon}">')
        lines.append(f'      <{p}ele>10.0</{p}ele>')
        if t is not None:
            lines.append(f'      <{p}time>{t}</{p}time>')
        lines.append(f'    </{p}trkpt>')
    lines.append(f'  </{p}trkseg></{p}trk>')
    lines.append(f'</{p}gpx>')
    return '\n'.join(lines).encode('utf-8')


def equator_track(n_points: int, step_s: float = 10.0, lon_step: float = LON_STEP_100M) -> List[TrackPoint]:
    return [TrackPoint(0.0, i * lon_step, BASE_EPOCH + i * step_s) for i in range(n_points)]


class FixedDistances(DistanceModel):
    '''Distance model returning preset pair distances, for filter/segmenter tests'''

    name = "fixed"

    def __init__(self, distances: Sequence[float]):
        self.distances = list(distances)

    def distance(self, lat1, lon1, lat2, lon2) -> float:
        raise NotImplementedError

    def pairwise(self, latitudes, longitudes) -> np.ndarray:
        assert len(latitudes) == len(self.distances) + 1
        return np.asarray(self.distances, dtype=float)
