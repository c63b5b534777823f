"""
Error types for hfprop

Every failure a caller can see derives from HFPropError, so a front-end
can catch one type and still tell the kinds apart.
"""

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..ingestion.measurement import MeasurementSeries


class HFPropError(Exception):
    """Base class for all hfprop errors"""


class RequestBuildError(HFPropError):
    """The DIDBase request could not be constructed (bad base URL)"""

    def __init__(self, url: str, reason: str):
        super().__init__(f"invalid request URL {url!r}: {reason}")
        self.url = url
        self.reason = reason


class TransportError(HFPropError):
    """Network failure, timeout or non-2xx HTTP status"""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class ServiceReportedError(HFPropError):
    """The service answered with an ``ERROR:`` line"""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedResponseError(HFPropError):
    """
    A data line could not be parsed

    ``partial`` holds the measurements decoded before the bad line,
    already ordered most-recent-first. Callers may use it or drop it.
    """

    def __init__(
        self,
        message: str,
        partial: 'MeasurementSeries',
        line_number: int,
        line: str
    ):
        super().__init__(f"line {line_number}: {message}")
        self.partial = partial
        self.line_number = line_number
        self.line = line


class NoDataError(HFPropError):
    """The requested window holds no samples"""

    def __init__(self, characteristic: str, station: str):
        super().__init__(f"unable to get latest {characteristic} from {station}")
        self.characteristic = characteristic
        self.station = station


class InvalidValueError(HFPropError):
    """The latest sample fails the physical sanity check"""

    def __init__(self, characteristic: str, station: str, value: float):
        super().__init__(
            f"unable to get a valid {characteristic} value from {station} (got {value})"
        )
        self.characteristic = characteristic
        self.station = station
        self.value = value
