"""
Ionosonde Measurement Types

A Measurement is one scaled characteristic value from a GIRO station at
one instant. A MeasurementSeries is the answer to one characteristic /
station / window request, ordered most-recent-first.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, Optional, Tuple

import numpy as np


@dataclass(frozen=True)
class Measurement:
    """Single scaled ionospheric characteristic sample."""
    timestamp: datetime  # UTC
    characteristic: str  # e.g. 'hmF2', 'foF2'
    value: float


@dataclass(frozen=True)
class MeasurementSeries:
    """
    Immutable series of measurements, index 0 is the most recent.

    An empty series is valid and means the window held no data.
    """
    characteristic: str
    measurements: Tuple[Measurement, ...] = ()
    station: Optional[str] = None

    def __len__(self) -> int:
        return len(self.measurements)

    def __iter__(self) -> Iterator[Measurement]:
        return iter(self.measurements)

    def __getitem__(self, index):
        return self.measurements[index]

    @property
    def is_empty(self) -> bool:
        return not self.measurements

    @property
    def latest(self) -> Optional[Measurement]:
        """Most recent measurement, or None for an empty series."""
        return self.measurements[0] if self.measurements else None

    def values(self) -> np.ndarray:
        """Values in series order (most recent first)."""
        return np.array([m.value for m in self.measurements], dtype=np.float64)

    def with_station(self, station: str) -> 'MeasurementSeries':
        return MeasurementSeries(self.characteristic, self.measurements, station)
