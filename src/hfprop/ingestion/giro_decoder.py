"""
GIRO DIDBase Response Decoder

Turns the line-oriented text returned by DIDBGetValues into a typed
MeasurementSeries.

Wire format:
    # comment / header lines            -> ignored
    <blank>                             -> ignored
    ERROR: <message>                    -> service-reported error
    <timestamp> <cs> <value> [...]      -> data line

    timestamp is YYYY-MM-DDThh:mm:ss.sssZ (UTC, millisecond precision).
    Field 1 (autoscaling confidence score) and any trailing fields are
    not used. Lines arrive oldest first; the decoder returns them newest
    first.

Outcomes:
    - DecodeResult with status OK and a (possibly empty) series
    - DecodeResult with status SERVICE_ERROR; any data lines decoded
      before the ERROR line are discarded
    - MalformedResponseError raised on an unparseable timestamp or
      value, carrying the measurements decoded so far
"""

import re
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union

from ..common.constants import (
    GIRO_COMMENT_PREFIX,
    GIRO_ERROR_TOKEN,
    GIRO_TIME_FORMAT_OUT,
)
from ..common.errors import MalformedResponseError
from ..common.logging_config import ServiceLogger
from .measurement import Measurement, MeasurementSeries

logger = ServiceLogger("hfprop", "giro_decoder")

_TIMESTAMP_RE = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$')
_DECIMAL_RE = re.compile(r'^[+-]?(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?$')

ResponseBody = Union[str, bytes, Iterable[str]]


class DecodeStatus(Enum):
    """Outcome tag of a decode pass."""
    OK = "ok"
    SERVICE_ERROR = "service_error"


@dataclass(frozen=True)
class DecodeResult:
    """
    Tagged decode outcome.

    ``series`` is only usable when ``status`` is OK; for SERVICE_ERROR it
    is an empty series and ``error_message`` holds the service's text.
    """
    status: DecodeStatus
    series: MeasurementSeries
    error_message: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status is DecodeStatus.OK

    @classmethod
    def success(cls, series: MeasurementSeries) -> 'DecodeResult':
        return cls(DecodeStatus.OK, series)

    @classmethod
    def service_error(cls, characteristic: str, message: str) -> 'DecodeResult':
        return cls(DecodeStatus.SERVICE_ERROR, MeasurementSeries(characteristic), message)


def parse_giro_timestamp(text: str) -> datetime:
    """
    Parse a DIDBase timestamp such as ``2024-03-01T12:07:30.000Z``

    Raises:
        ValueError: if the text is not in the exact millisecond UTC format
    """
    if not _TIMESTAMP_RE.match(text):
        raise ValueError(f"invalid timestamp {text!r}")
    return datetime.strptime(text, GIRO_TIME_FORMAT_OUT).replace(tzinfo=timezone.utc)


def parse_value(text: str) -> float:
    """
    Parse a decimal value field

    Raises:
        ValueError: for anything that is not a plain decimal number
    """
    if not _DECIMAL_RE.match(text):
        raise ValueError(f"invalid value {text!r}")
    return float(text)


def _iter_lines(body: ResponseBody) -> Iterator[str]:
    if isinstance(body, bytes):
        body = body.decode('utf-8', errors='replace')
    if isinstance(body, str):
        yield from body.splitlines()
        return
    for line in body:
        if isinstance(line, bytes):
            line = line.decode('utf-8', errors='replace')
        yield line.rstrip('\r\n')


def decode_response(body: ResponseBody, characteristic: str) -> DecodeResult:
    """
    Decode a DIDBGetValues response body

    Args:
        body: Response text, raw bytes, or an iterable of lines
        characteristic: Characteristic name that was requested; stamped
            on every Measurement

    Returns:
        DecodeResult (OK with a most-recent-first series, or SERVICE_ERROR)

    Raises:
        MalformedResponseError: timestamp or value field failed to parse
    """
    measurements: List[Measurement] = []

    for line_number, raw_line in enumerate(_iter_lines(body), start=1):
        line = raw_line.strip()
        if not line or line.startswith(GIRO_COMMENT_PREFIX):
            continue

        fields = line.split()

        if fields[0] == GIRO_ERROR_TOKEN:
            message = line[len(GIRO_ERROR_TOKEN):].strip()
            logger.debug(f"Service reported error on line {line_number}: {message}")
            return DecodeResult.service_error(characteristic, message)

        if len(fields) < 3:
            logger.debug(f"Skipping short line {line_number}: {line!r}")
            continue

        try:
            timestamp = parse_giro_timestamp(fields[0])
            value = parse_value(fields[2])
        except ValueError as e:
            measurements.reverse()
            partial = MeasurementSeries(characteristic, tuple(measurements))
            raise MalformedResponseError(str(e), partial, line_number, raw_line) from e

        measurements.append(Measurement(timestamp, characteristic, value))

    # Wire order is chronological; callers want newest first
    measurements.reverse()
    return DecodeResult.success(MeasurementSeries(characteristic, tuple(measurements)))
