from __future__ import annotations
import logging
from pathlib import Path
from typing import BinaryIO, Dict, List, Optional, Union
from xml.parsers import expat

from pacesplits.config import READ_CHUNK_SIZE
from pacesplits.errors import ParseError, ResourceExhaustion
from pacesplits.io.models import TrackPoint
from pacesplits.io.timestamps import parse_timestamp

logger = logging.getLogger(__name__)

POINT_TAG = "trkpt"
TIME_TAG = "time"


def _local_name(tag: str) -> str:
    # "gpx:trkpt" and "trkpt" are the same element
    return tag.rsplit(":", 1)[-1]


def _coordinate(attrs: Dict[str, str], name: str, line: int) -> float:
    raw = attrs.get(name)
    if raw is None:
        raise ParseError(f"<{POINT_TAG}> is missing the '{name}' attribute", line=line)
    try:
        return float(raw)
    except ValueError:
        raise ParseError(f"<{POINT_TAG}> has a non-numeric '{name}' attribute: {raw!r}", line=line) from None


class _TrackDecoder:
    '''
    Expat callbacks for one decode. Holds the "inside point" / "inside time"
    state and the text buffer for the time element being read.
    '''

    def __init__(self, parser, timestamp_mode: str, max_points: Optional[int]):
        self.parser = parser
        self.timestamp_mode = timestamp_mode
        self.max_points = max_points
        self.points: List[TrackPoint] = []

        self.in_point = False
        self.in_time = False
        self.buffer: List[str] = []
        self.lat = 0.0
        self.lon = 0.0
        self.timestamp: Optional[float] = None

    def start_element(self, tag: str, attrs: Dict[str, str]) -> None:
        name = _local_name(tag)
        if name == POINT_TAG:
            line = self.parser.CurrentLineNumber
            self.lat = _coordinate(attrs, "lat", line)
            self.lon = _coordinate(attrs, "lon", line)
            self.timestamp = None
            self.in_point = True
        elif self.in_point and name == TIME_TAG:
            self.in_time = True
            self.buffer = []

    def end_element(self, tag: str) -> None:
        name = _local_name(tag)
        if self.in_time and name == TIME_TAG:
            self.timestamp = parse_timestamp(
                "".join(self.buffer), mode=self.timestamp_mode, line=self.parser.CurrentLineNumber
            )
            self.in_time = False
        elif self.in_point and name == POINT_TAG:
            if self.timestamp is None:
                raise ParseError(f"<{POINT_TAG}> has no <{TIME_TAG}> element", line=self.parser.CurrentLineNumber)
            if self.max_points is not None and len(self.points) >= self.max_points:
                raise ResourceExhaustion(f"Track has more than {self.max_points} points")
            self.points.append(TrackPoint(self.lat, self.lon, self.timestamp))
            self.in_point = False

    def char_data(self, content: str) -> None:
        if self.in_time:
            self.buffer.append(content)


def decode_track(
    stream: BinaryIO,
    timestamp_mode: str = "strict",
    max_points: Optional[int] = None,
    chunk_size: int = READ_CHUNK_SIZE,
) -> List[TrackPoint]:
    """
    Stream-decode a GPX document into its track points, in document order.

    Either the whole track is returned or an exception is raised:
      - ParseError for malformed XML or incomplete <trkpt> elements
      - UnparseableTimestamp for a <time> value in an unsupported format
      - ResourceExhaustion when max_points is exceeded or memory runs out
    """
    parser = expat.ParserCreate()
    decoder = _TrackDecoder(parser, timestamp_mode, max_points)
    parser.StartElementHandler = decoder.start_element
    parser.EndElementHandler = decoder.end_element
    parser.CharacterDataHandler = decoder.char_data

    try:
        while True:
            chunk = stream.read(chunk_size)
            if not chunk:
                parser.Parse(b"", True)
                break
            parser.Parse(chunk, False)
    except expat.ExpatError as exc:
        logger.warning("GPX parse error at line %s: %s", exc.lineno, expat.ErrorString(exc.code))
        raise ParseError(expat.ErrorString(exc.code), line=exc.lineno) from exc
    except MemoryError as exc:
        raise ResourceExhaustion("Out of memory while decoding track") from exc

    logger.debug("Decoded %d track points", len(decoder.points))
    return decoder.points


def load_track(
    file_path: Union[str, Path],
    timestamp_mode: str = "strict",
    max_points: Optional[int] = None,
) -> List[TrackPoint]:
    with Path(file_path).open("rb") as f:
        return decode_track(f, timestamp_mode=timestamp_mode, max_points=max_points)
