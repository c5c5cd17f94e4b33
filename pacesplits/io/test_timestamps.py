import time

import pytest

from pacesplits.errors import UnparseableTimestamp
from pacesplits.io.timestamps import format_timestamp, parse_timestamp


def test_whole_seconds_utc():
    assert parse_timestamp("1970-01-01T00:00:00Z") == 0.0
    assert parse_timestamp("2023-11-14T22:13:20Z") == 1700000000.0


def test_fractional_seconds():
    assert parse_timestamp("2023-11-14T22:13:20.250Z") == pytest.approx(1700000000.25)
    # a single digit is tenths, not milliseconds
    assert parse_timestamp("2023-11-14T22:13:20.5Z") == pytest.approx(1700000000.5)


def test_surrounding_whitespace_is_ignored():
    assert parse_timestamp("\n   2023-11-14T22:13:20Z  \n") == 1700000000.0


@pytest.mark.parametrize("text", [
    "",
    "not a time",
    "2023-11-14 22:13:20Z",
    "2023-11-14T22:13:20",
    "2023-11-14T22:13:20+01:00",
    "2023-13-14T22:13:20Z",
    "2023-11-14T22:13Z",
    "2023-11-14T22:13:20.Z",
])
def test_strict_rejects_other_formats(text):
    with pytest.raises(UnparseableTimestamp) as info:
        parse_timestamp(text)
    assert info.value.value == text


def test_error_carries_line_number():
    with pytest.raises(UnparseableTimestamp) as info:
        parse_timestamp("yesterday", line=42)
    assert info.value.line == 42
    assert "line 42" in str(info.value)


def test_lenient_accepts_offsets_and_naive_values():
    assert parse_timestamp("2023-11-14T23:13:20+01:00", mode="lenient") == 1700000000.0
    assert parse_timestamp("2023-11-14T22:13:20", mode="lenient") == 1700000000.0
    assert parse_timestamp("2023-11-14T22:13:20.5Z", mode="lenient") == pytest.approx(1700000000.5)


def test_lenient_still_fails_loudly():
    with pytest.raises(UnparseableTimestamp):
        parse_timestamp("garbage", mode="lenient")


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="tzset not available")
def test_result_does_not_depend_on_host_timezone(monkeypatch):
    monkeypatch.setenv("TZ", "America/New_York")
    time.tzset()
    try:
        assert parse_timestamp("2023-11-14T22:13:20Z") == 1700000000.0
    finally:
        monkeypatch.undo()
        time.tzset()


def test_format_timestamp():
    assert format_timestamp(1700000000.75) == "2023-11-14T22:13:20Z"
