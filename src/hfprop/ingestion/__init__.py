"""
hfprop Data Ingestion

Key Components:
    - giro_client: GIRO DIDBGetValues client
    - giro_decoder: DIDBase text response decoder
    - measurement: Measurement / MeasurementSeries types
"""

from .measurement import Measurement, MeasurementSeries
from .giro_decoder import DecodeResult, DecodeStatus, decode_response
from .giro_client import GIROClient, AiohttpTransport, HTTPTransport
