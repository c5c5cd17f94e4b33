from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Dict, List, Sequence, Union

from pacesplits.io.models import TrackPoint
from pacesplits.io.timestamps import format_timestamp


def trackpoints_to_records(points: Sequence[TrackPoint]) -> List[Dict[str, Any]]:
    return [
        {
            'lat': round(p.latitude, 8),
            'lon': round(p.longitude, 8),
            'time': format_timestamp(p.timestamp),
        }
        for p in points
    ]


def write_trackpoints_json(file_path: Union[str, Path], points: Sequence[TrackPoint]) -> None:
    Path(file_path).write_text(json.dumps(trackpoints_to_records(points), indent=2) + "\n", encoding="utf-8")
