# HTTP surface for pacesplits: upload a GPX track, get pace splits back
import io
import logging
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import pandas as pd
from fastapi import FastAPI, File, HTTPException, Query, UploadFile
from fastapi.responses import PlainTextResponse

from pacesplits.config import DEFAULT_SPLIT_DISTANCE, PROCESSED_DIR, UPLOADS_DIR, SplitConfig, setup_logging
from pacesplits.errors import InvalidParameter, PaceSplitsError, ResourceExhaustion
from pacesplits.io.gpx_parser import decode_track
from pacesplits.io.json_export import trackpoints_to_records
from pacesplits.io.models import SplitReport
from pacesplits.pipeline import analyze_points
from pacesplits.report.render_markdown import render_markdown

setup_logging()
logger = logging.getLogger(__name__)

# Define FastAPI instance
app = FastAPI(title="pacesplits")

# Schema: one row per split of each uploaded run
split_columns = [
    "run_id", "split_number", "distance_marker_m", "elapsed_s",
    "split_pace_s_per_km", "cumulative_time_s", "cumulative_pace_s_per_km",
]


def _http_error(exc: PaceSplitsError) -> HTTPException:
    if isinstance(exc, InvalidParameter):
        return HTTPException(status_code=422, detail=str(exc))
    if isinstance(exc, ResourceExhaustion):
        return HTTPException(status_code=413, detail=str(exc))
    return HTTPException(status_code=400, detail=f"{type(exc).__name__}: {exc}")


def _config(split_distance: int, distance_model: Optional[str], timestamp_mode: Optional[str],
            max_speed: Optional[float]) -> SplitConfig:
    return SplitConfig.from_env(
        split_distance=split_distance,
        distance_model=distance_model,
        timestamp_mode=timestamp_mode,
        max_speed=max_speed,
    )


def _analyze(contents: bytes, config: SplitConfig) -> SplitReport:
    try:
        config.validate()
        points = decode_track(io.BytesIO(contents), timestamp_mode=config.timestamp_mode,
                              max_points=config.max_points)
        return analyze_points(points, config)
    except PaceSplitsError as exc:
        logger.warning("Rejected upload: %s", exc)
        raise _http_error(exc) from exc


def _report_to_dict(run_id: str, report: SplitReport) -> Dict[str, Any]:
    splits = []
    for i, (s, m) in enumerate(zip(report.splits, report.metrics), start=1):
        splits.append({
            "split": i,
            "distance_marker": s.distance_marker,
            "elapsed_time": s.elapsed_time,
            "split_time": str(m.split_time),
            "split_pace": str(m.split_pace),
            "cumulative_time": str(m.cumulative_time),
            "cumulative_pace": str(m.cumulative_pace),
        })
    summary = report.summary
    return {
        "run_id": run_id,
        "split_distance": report.split_distance,
        "point_count": len(report.points),
        "splits": splits,
        "summary": {
            "total_distance": summary.total_distance,
            "total_time_s": summary.total_time_s,
            "total_time": str(summary.total_time),
            "average_pace": str(summary.average_pace),
        },
    }


def _save_splits(run_id: str, report: SplitReport) -> None:
    PROCESSED_DIR.mkdir(parents=True, exist_ok=True)
    df_splits = pd.DataFrame([
        {
            "run_id": run_id,
            "split_number": i,
            "distance_marker_m": s.distance_marker,
            "elapsed_s": s.elapsed_time,
            "split_pace_s_per_km": m.split_pace.total_seconds,
            "cumulative_time_s": m.cumulative_time_s,
            "cumulative_pace_s_per_km": m.cumulative_pace.total_seconds,
        }
        for i, (s, m) in enumerate(zip(report.splits, report.metrics), start=1)
    ], columns=split_columns)

    out_path = PROCESSED_DIR / "splits.parquet"
    if out_path.exists():
        df_splits = pd.concat([pd.read_parquet(out_path), df_splits], ignore_index=True)
    df_splits.to_parquet(out_path, index=False)


@app.get("/")
def root():
    return {"message": "pacesplits backend online"}


@app.post("/splits")
async def upload_splits(
    file: UploadFile = File(...),
    split_distance: int = Query(DEFAULT_SPLIT_DISTANCE),
    distance_model: Optional[str] = None,
    timestamp_mode: Optional[str] = None,
    max_speed: Optional[float] = None,
):
    """
    Accept a .gpx upload, compute fixed-distance splits, keep a copy of the
    original file and append the splits to the Parquet table.
    """
    contents = await file.read()
    report = _analyze(contents, _config(split_distance, distance_model, timestamp_mode, max_speed))

    run_id = f"{datetime.now(timezone.utc):%Y%m%dT%H%M%S}_{uuid.uuid4().hex[:8]}"
    UPLOADS_DIR.mkdir(parents=True, exist_ok=True)
    (UPLOADS_DIR / f"{run_id}_{Path(file.filename or 'track.gpx').name}").write_bytes(contents)
    _save_splits(run_id, report)

    logger.info("Stored run %s with %d splits", run_id, len(report.splits))
    return _report_to_dict(run_id, report)


@app.post("/splits/report", response_class=PlainTextResponse)
async def split_report(
    file: UploadFile = File(...),
    split_distance: int = Query(DEFAULT_SPLIT_DISTANCE),
    distance_model: Optional[str] = None,
    timestamp_mode: Optional[str] = None,
    max_speed: Optional[float] = None,
):
    contents = await file.read()
    report = _analyze(contents, _config(split_distance, distance_model, timestamp_mode, max_speed))
    return render_markdown(report, title=f"Split report: {file.filename or 'track'}")


@app.post("/points")
async def track_points(file: UploadFile = File(...), timestamp_mode: Optional[str] = None):
    contents = await file.read()
    try:
        config = SplitConfig.from_env(timestamp_mode=timestamp_mode).validate()
        points = decode_track(io.BytesIO(contents), timestamp_mode=config.timestamp_mode,
                              max_points=config.max_points)
    except PaceSplitsError as exc:
        raise _http_error(exc) from exc
    return trackpoints_to_records(points)
