from __future__ import annotations
from typing import Optional


class PaceSplitsError(Exception):
    '''
    Base class for every failure the split pipeline surfaces to its caller
    '''


class ParseError(PaceSplitsError):
    def __init__(self, message: str, line: Optional[int] = None):
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)


class UnparseableTimestamp(PaceSplitsError, ValueError):
    def __init__(self, value: str, line: Optional[int] = None):
        self.value = value
        self.line = line
        msg = f"Unrecognized time format: {value!r}"
        if line is not None:
            msg = f"line {line}: {msg}"
        super().__init__(msg)


class InsufficientData(PaceSplitsError):
    def __init__(self, count: int):
        self.count = count
        super().__init__(f"Insufficient data. Found {count} track point(s), need at least 2.")


class InvalidParameter(PaceSplitsError, ValueError):
    pass


class NoValidSplits(PaceSplitsError):
    pass


class ResourceExhaustion(PaceSplitsError):
    pass
