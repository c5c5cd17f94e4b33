from __future__ import annotations
import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from pacesplits.errors import InvalidParameter

# Segment filter thresholds
MAX_SPEED = 15.0            # m/s, faster pairs are GPS teleports
MIN_TIME_DIFFERENCE = 0.1   # s

DEFAULT_SPLIT_DISTANCE = 1000  # m
DEFAULT_DISTANCE_MODEL = "geodesic"
DISTANCE_MODELS = ("geodesic", "haversine")
TIMESTAMP_MODES = ("strict", "lenient")

READ_CHUNK_SIZE = 64 * 1024

# Storage for uploads handled by the API
DATA_DIR = Path(os.getenv("PACESPLITS_DATA_DIR", "data"))
UPLOADS_DIR = DATA_DIR / "uploads"
PROCESSED_DIR = DATA_DIR / "processed"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
LOG_DATEFMT = "%H:%M:%S"


def setup_logging(level: Optional[str] = None) -> None:
    level_name = (level or os.getenv("PACESPLITS_LOG_LEVEL", "INFO")).upper()
    logging.basicConfig(level=getattr(logging, level_name, logging.INFO), format=LOG_FORMAT, datefmt=LOG_DATEFMT)


@dataclass(frozen=True)
class SplitConfig:
    split_distance: int = DEFAULT_SPLIT_DISTANCE
    max_speed: float = MAX_SPEED
    min_time_difference: float = MIN_TIME_DIFFERENCE
    distance_model: str = DEFAULT_DISTANCE_MODEL
    timestamp_mode: str = "strict"
    whole_seconds: bool = False
    max_points: Optional[int] = None

    def validate(self) -> "SplitConfig":
        # bool is an int subclass; reject it explicitly
        if isinstance(self.split_distance, bool) or not isinstance(self.split_distance, int):
            raise InvalidParameter(f"split_distance must be an integer number of meters, got {self.split_distance!r}")
        if self.split_distance <= 0:
            raise InvalidParameter(f"split_distance must be positive, got {self.split_distance}")
        if self.max_speed <= 0:
            raise InvalidParameter(f"max_speed must be positive, got {self.max_speed}")
        if self.min_time_difference < 0:
            raise InvalidParameter(f"min_time_difference must not be negative, got {self.min_time_difference}")
        if self.distance_model not in DISTANCE_MODELS:
            raise InvalidParameter(f"Unknown distance model {self.distance_model!r}; expected one of {DISTANCE_MODELS}")
        if self.timestamp_mode not in TIMESTAMP_MODES:
            raise InvalidParameter(f"Unknown timestamp mode {self.timestamp_mode!r}; expected one of {TIMESTAMP_MODES}")
        if self.max_points is not None and self.max_points < 2:
            raise InvalidParameter(f"max_points must be at least 2, got {self.max_points}")
        return self

    @classmethod
    def from_env(cls, **overrides: Any) -> "SplitConfig":
        '''
        Build a config from PACESPLITS_* environment variables.
        Explicit keyword overrides win over the environment; None overrides are ignored.
        '''
        values: dict = {}
        for f in fields(cls):
            raw = os.getenv(f"PACESPLITS_{f.name.upper()}")
            if raw is None or raw == "":
                continue
            values[f.name] = _coerce(f.name, raw)
        values.update({k: v for k, v in overrides.items() if v is not None})
        return replace(cls(), **values)


def _coerce(name: str, raw: str) -> Any:
    try:
        if name in ("split_distance", "max_points"):
            return int(raw)
        if name in ("max_speed", "min_time_difference"):
            return float(raw)
    except ValueError:
        raise InvalidParameter(f"PACESPLITS_{name.upper()} is not a number: {raw!r}")
    if name == "whole_seconds":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    return raw.strip().lower()
