"""
GIRO DIDBase Client

Fetches scaled ionospheric characteristics (foF2, hmF2, MUFD, ...) for one
ionosonde station and UTC time window from the Lowell GIRO Data Center
DIDBGetValues service, and decodes the response into a MeasurementSeries.

Data Sources:
    - GIRO DIDBase: https://giro.uml.edu/didbase/scaled.php
    - DIDBGetValues: https://lgdc.uml.edu/common/DIDBGetValues

Each request is one GET with a bounded timeout and no retry. Transport
failures surface as TransportError and the decoder is never run on them.
"""

import asyncio
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Callable, Dict, Optional, Protocol, Tuple

import aiohttp
from yarl import URL

from ..common.config import GIROConfig, get_config
from ..common.constants import (
    GIRO_KEY_URSI_CODE,
    GIRO_KEY_CHAR_NAME,
    GIRO_KEY_DMUF,
    GIRO_KEY_FROM_DATE,
    GIRO_KEY_TO_DATE,
    GIRO_TIME_FORMAT_IN,
)
from ..common.errors import (
    NoDataError,
    RequestBuildError,
    ServiceReportedError,
    TransportError,
)
from ..common.logging_config import ServiceLogger
from .giro_decoder import decode_response
from .measurement import Measurement, MeasurementSeries


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def to_utc(moment: datetime) -> datetime:
    """Normalize to an aware UTC datetime (naive input is taken as UTC)."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def format_giro_time(moment: datetime) -> str:
    """Format a window bound as DIDBase expects: ``YYYY-MM-DD HH:MM:SS`` UTC."""
    return to_utc(moment).strftime(GIRO_TIME_FORMAT_IN)


class HTTPTransport(Protocol):
    """Minimal transport the client needs: one GET returning the body text."""

    async def get_text(
        self,
        url: str,
        params: Dict[str, str],
        timeout: float,
        verify_tls: bool
    ) -> str:
        ...


class AiohttpTransport:
    """HTTPTransport backed by an aiohttp session per request."""

    async def get_text(
        self,
        url: str,
        params: Dict[str, str],
        timeout: float,
        verify_tls: bool
    ) -> str:
        """
        Issue a GET and return the body

        Raises:
            TransportError: on connection failure, timeout or non-2xx status
        """
        client_timeout = aiohttp.ClientTimeout(total=timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.get(url, params=params, ssl=verify_tls) as response:
                    if not 200 <= response.status < 300:
                        raise TransportError(
                            f"HTTP {response.status} from {url}",
                            status=response.status
                        )
                    # Header lines may carry non-UTF-8 station names
                    return await response.text(errors='replace')

        except asyncio.TimeoutError as e:
            raise TransportError(f"Timeout after {timeout:g}s fetching {url}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"HTTP error fetching {url}: {e}") from e


class GIROClient:
    """
    Client for the GIRO DIDBGetValues service

    Configuration is held per instance; the setters only affect this
    client.
    """

    def __init__(
        self,
        config: Optional[GIROConfig] = None,
        transport: Optional[HTTPTransport] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize GIRO client

        Args:
            config: GIRO section of the configuration (copied)
            transport: HTTP transport (aiohttp by default)
            clock: Source of "now" for the default trailing window
        """
        if config is None:
            config = get_config().giro

        self.config = replace(config)
        self.transport = transport or AiohttpTransport()
        self.clock = clock

        self.logger = ServiceLogger("hfprop", "giro_client")

        # Statistics
        self._requests_made = 0
        self._request_errors = 0

    def set_default_station(self, station: str) -> None:
        """Station used when a call does not name one."""
        self.config.default_station = station

    def set_distance_for_muf(self, km: float) -> None:
        """Reference distance (km) for the MUFD characteristic."""
        self.config.muf_distance_km = float(km)

    def set_verify_tls(self, verify: bool) -> None:
        """Enable or disable TLS certificate verification."""
        if not verify:
            self.logger.warning("TLS certificate verification disabled")
        self.config.verify_tls = bool(verify)

    def resolve_station(self, station: Optional[str] = None) -> str:
        return station or self.config.default_station

    def default_window(self) -> Tuple[datetime, datetime]:
        """Trailing window ending now, ``window_hours`` long."""
        end = self.clock()
        return end - timedelta(hours=self.config.window_hours), end

    def build_url(self) -> str:
        """
        Validate the configured base URL

        Raises:
            RequestBuildError: if it is not an absolute http(s) URL
        """
        base_url = self.config.base_url
        try:
            url = URL(base_url)
        except (TypeError, ValueError) as e:
            raise RequestBuildError(str(base_url), str(e)) from e

        if url.scheme not in ('http', 'https') or not url.host:
            raise RequestBuildError(base_url, "expected an absolute http(s) URL")

        return str(url)

    def build_query(
        self,
        characteristic: str,
        station: str,
        start: datetime,
        end: datetime
    ) -> Dict[str, str]:
        """
        Build the DIDBGetValues query parameters

        DMUF is always sent; the service only uses it for MUFD.
        """
        return {
            GIRO_KEY_URSI_CODE: station,
            GIRO_KEY_CHAR_NAME: characteristic,
            GIRO_KEY_DMUF: self.config.dmuf,
            GIRO_KEY_FROM_DATE: format_giro_time(start),
            GIRO_KEY_TO_DATE: format_giro_time(end),
        }

    def request_url(
        self,
        characteristic: str,
        station: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> str:
        """Full request URL including the query, for display and logging."""
        start, end = self._window(start, end)
        query = self.build_query(characteristic, self.resolve_station(station), start, end)
        return str(URL(self.build_url()).with_query(query))

    def _window(
        self,
        start: Optional[datetime],
        end: Optional[datetime]
    ) -> Tuple[datetime, datetime]:
        default_start, default_end = self.default_window()
        return start or default_start, end or default_end

    async def fetch_body_async(
        self,
        characteristic: str,
        station: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> str:
        """
        Fetch the raw response body for one characteristic/station/window

        Raises:
            RequestBuildError: invalid base URL
            TransportError: network failure, timeout or non-2xx status
        """
        station = self.resolve_station(station)
        start, end = self._window(start, end)

        url = self.build_url()
        params = self.build_query(characteristic, station, start, end)

        self.logger.debug(
            f"Requesting {characteristic} from {station}",
            extra={'url': url, 'params': params}
        )

        self._requests_made += 1
        try:
            return await self.transport.get_text(
                url,
                params,
                timeout=self.config.timeout_sec,
                verify_tls=self.config.verify_tls
            )
        except TransportError as e:
            self._request_errors += 1
            self.logger.error(
                f"Failed to fetch {characteristic} from {station}: {e}",
                extra={'status_code': e.status}
            )
            raise

    async def fetch_series_async(
        self,
        characteristic: str,
        station: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> MeasurementSeries:
        """
        Fetch and decode one characteristic for a station and window

        Args:
            characteristic: DIDBase characteristic name (e.g. 'foF2')
            station: URSI station code (default: configured station)
            start: Window start (default: now - window_hours)
            end: Window end (default: now)

        Returns:
            MeasurementSeries, most recent first (may be empty)

        Raises:
            RequestBuildError, TransportError, ServiceReportedError,
            MalformedResponseError
        """
        station = self.resolve_station(station)
        body = await self.fetch_body_async(characteristic, station, start, end)

        result = decode_response(body, characteristic)
        if not result.ok:
            self.logger.warning(
                f"DIDBase reported error for {characteristic}@{station}: {result.error_message}"
            )
            raise ServiceReportedError(result.error_message)

        series = result.series.with_station(station)
        self.logger.debug(f"Decoded {len(series)} {characteristic} samples from {station}")
        return series

    def fetch_series(
        self,
        characteristic: str,
        station: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None
    ) -> MeasurementSeries:
        """Synchronous form of fetch_series_async."""
        return asyncio.run(self.fetch_series_async(characteristic, station, start, end))

    def fetch_latest(
        self,
        characteristic: str,
        station: Optional[str] = None
    ) -> Measurement:
        """
        Most recent sample of a characteristic in the trailing window

        Raises:
            NoDataError: if the window holds no samples
        """
        station = self.resolve_station(station)
        series = self.fetch_series(characteristic, station)
        if series.is_empty:
            raise NoDataError(characteristic, station)
        return series.latest

    def get_statistics(self) -> Dict[str, int]:
        return {
            'requests_made': self._requests_made,
            'request_errors': self._request_errors,
        }
