"""
Propagation Service - Latest-hmF2 Single-Hop Geometry

Answers "what take-off angle reaches D km" and "how far does an angle of
A degrees reach" using the most recent hmF2 sounding from a GIRO station.

Flow:
    GIROClient.fetch_series('hmF2', station, [now - 1h, now])
    -> most recent sample, sanity checked (> 10 km)
    -> geometry.take_off_angle / geometry.distance_for_take_off_angle
"""

from datetime import datetime
from typing import Callable, Optional

from ..common.config import GIROConfig
from ..common.constants import HMF2
from ..common.errors import InvalidValueError, NoDataError
from ..common.logging_config import ServiceLogger
from ..ingestion.giro_client import GIROClient, utc_now
from ..ingestion.measurement import Measurement
from .geometry import distance_for_take_off_angle, take_off_angle


class PropagationService:
    """
    Single-hop propagation geometry driven by live ionosonde data.
    """

    def __init__(
        self,
        client: Optional[GIROClient] = None,
        config: Optional[GIROConfig] = None,
        clock: Callable[[], datetime] = utc_now
    ):
        """
        Initialize propagation service.

        Args:
            client: GIRO client to fetch soundings with
            config: Used to build a client when none is given
            clock: Source of "now" for a client built here
        """
        self.client = client or GIROClient(config=config, clock=clock)
        self.logger = ServiceLogger("hfprop", "propagation")

    def latest_measurement(
        self,
        characteristic: str,
        station: Optional[str] = None
    ) -> Measurement:
        """
        Most recent sample of any characteristic in the trailing window

        Raises:
            NoDataError: empty window
        """
        station = self.client.resolve_station(station)
        series = self.client.fetch_series(characteristic, station)

        if series.is_empty:
            raise NoDataError(characteristic, station)

        return series.latest

    def latest_hmf2(self, station: Optional[str] = None) -> float:
        """
        Latest physically valid hmF2 (km) for a station

        Raises:
            NoDataError: no hmF2 in the trailing window
            InvalidValueError: latest hmF2 is at or below the sanity floor
        """
        station = self.client.resolve_station(station)
        latest = self.latest_measurement(HMF2, station)

        if latest.value <= self.client.config.min_valid_hmf2_km:
            self.logger.warning(
                f"Rejecting hmF2={latest.value} km from {station} at {latest.timestamp.isoformat()}"
            )
            raise InvalidValueError(HMF2, station, latest.value)

        self.logger.debug(f"Using hmF2={latest.value} km from {station}")
        return latest.value

    def distance_by_toa(self, toa_deg: float, station: Optional[str] = None) -> float:
        """
        Predict ground distance (km) for a single-hop take-off angle

        Args:
            toa_deg: Take-off angle in degrees above the horizon
            station: URSI code of the ionosonde (default: configured station)

        Returns:
            Distance in kilometers
        """
        hmf2 = self.latest_hmf2(station)
        return distance_for_take_off_angle(toa_deg, hmf2)

    def toa_by_distance(self, distance_km: float, station: Optional[str] = None) -> float:
        """
        Predict the single-hop take-off angle (degrees) to reach distance_km

        Args:
            distance_km: Ground distance in kilometers
            station: URSI code of the ionosonde (default: configured station)

        Returns:
            Degrees above the horizon
        """
        hmf2 = self.latest_hmf2(station)
        return take_off_angle(distance_km, hmf2)
