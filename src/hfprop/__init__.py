"""
hfprop - HF Propagation Geometry from GIRO Ionosonde Data

Retrieves scaled ionospheric characteristics (foF2, hmF2, MUFD, ...) from
the GIRO Digital Ionogram Database and derives single-hop take-off angle /
ground distance geometry from the latest hmF2 sounding.

Key Components:
    - ingestion.giro_client: DIDBGetValues client
    - ingestion.giro_decoder: line protocol decoder
    - propagation.geometry: take-off angle <-> distance
    - propagation.propagation_service: latest-hmF2 orchestration
"""

__version__ = "0.1.0"

from .common.errors import (
    HFPropError,
    RequestBuildError,
    TransportError,
    ServiceReportedError,
    MalformedResponseError,
    NoDataError,
    InvalidValueError,
)
from .ingestion.measurement import Measurement, MeasurementSeries
from .ingestion.giro_decoder import DecodeResult, DecodeStatus, decode_response
from .ingestion.giro_client import GIROClient, AiohttpTransport
from .propagation.geometry import take_off_angle, distance_for_take_off_angle
from .propagation.propagation_service import PropagationService

__all__ = [
    "HFPropError",
    "RequestBuildError",
    "TransportError",
    "ServiceReportedError",
    "MalformedResponseError",
    "NoDataError",
    "InvalidValueError",
    "Measurement",
    "MeasurementSeries",
    "DecodeResult",
    "DecodeStatus",
    "decode_response",
    "GIROClient",
    "AiohttpTransport",
    "take_off_angle",
    "distance_for_take_off_angle",
    "PropagationService",
    "__version__",
]
