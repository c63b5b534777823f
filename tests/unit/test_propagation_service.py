"""
Unit Tests for Propagation Service

Tests cover:
- Latest hmF2 selection from a most-recent-first series
- No-data and invalid-value failures
- Take-off angle / distance answers against the geometry module
- Station defaulting and error propagation
"""

import pytest
from datetime import datetime, timedelta, timezone
from unittest.mock import MagicMock

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from hfprop.common.config import GIROConfig
from hfprop.common.errors import (
    InvalidValueError,
    NoDataError,
    ServiceReportedError,
    TransportError,
)
from hfprop.ingestion.measurement import Measurement, MeasurementSeries
from hfprop.propagation.geometry import distance_for_take_off_angle, take_off_angle
from hfprop.propagation.propagation_service import PropagationService

T0 = datetime(2024, 3, 1, 12, 0, tzinfo=timezone.utc)


def hmf2_series(*values, station="JR055"):
    """Series with values[0] as the most recent sample"""
    measurements = tuple(
        Measurement(T0 - timedelta(minutes=5 * i), "hmF2", v)
        for i, v in enumerate(values)
    )
    return MeasurementSeries("hmF2", measurements, station)


@pytest.fixture
def client():
    """GIRO client double returning a fixed hmF2 series"""
    mock = MagicMock()
    mock.config = GIROConfig()
    mock.resolve_station.side_effect = lambda station=None: station or mock.config.default_station
    mock.fetch_series.return_value = hmf2_series(267.4, 250.0, 240.0)
    return mock


@pytest.fixture
def service(client):
    return PropagationService(client=client)


class TestLatestHmF2:
    """Selecting and validating the latest sounding"""

    def test_uses_most_recent(self, service, client):
        assert service.latest_hmf2() == 267.4
        client.fetch_series.assert_called_once_with("hmF2", "JR055")

    def test_explicit_station(self, service, client):
        service.latest_hmf2("DB049")
        client.fetch_series.assert_called_once_with("hmF2", "DB049")

    def test_empty_series_is_no_data(self, service, client):
        client.fetch_series.return_value = hmf2_series()

        with pytest.raises(NoDataError) as excinfo:
            service.latest_hmf2()
        assert excinfo.value.station == "JR055"
        assert excinfo.value.characteristic == "hmF2"

    @pytest.mark.parametrize("value", [10.0, 9.99, 0.0, -1.0])
    def test_at_or_below_floor_is_invalid(self, service, client, value):
        client.fetch_series.return_value = hmf2_series(value, 267.4)

        with pytest.raises(InvalidValueError) as excinfo:
            service.latest_hmf2()
        assert excinfo.value.value == value

    def test_just_above_floor_is_valid(self, service, client):
        client.fetch_series.return_value = hmf2_series(10.01)
        assert service.latest_hmf2() == 10.01

    def test_only_latest_is_checked(self, service, client):
        """An invalid older sample does not matter"""
        client.fetch_series.return_value = hmf2_series(300.0, 0.0)
        assert service.latest_hmf2() == 300.0

    def test_latest_measurement_any_characteristic(self, service, client):
        client.fetch_series.return_value = MeasurementSeries(
            "foF2", (Measurement(T0, "foF2", 7.1),), "JR055"
        )
        latest = service.latest_measurement("foF2")
        assert latest.value == 7.1
        client.fetch_series.assert_called_once_with("foF2", "JR055")


class TestGeometryAnswers:
    """distance_by_toa / toa_by_distance"""

    def test_toa_by_distance(self, service):
        assert service.toa_by_distance(1200.0) == take_off_angle(1200.0, 267.4)

    def test_distance_by_toa(self, service):
        assert service.distance_by_toa(30.0) == distance_for_take_off_angle(30.0, 267.4)

    def test_round_trip(self, service):
        toa = service.toa_by_distance(800.0)
        assert abs(service.distance_by_toa(toa) - 800.0) <= 1

    @pytest.mark.parametrize("call,arg", [
        ("distance_by_toa", 30.0),
        ("toa_by_distance", 1200.0),
    ])
    def test_no_data(self, service, client, call, arg):
        client.fetch_series.return_value = hmf2_series()
        with pytest.raises(NoDataError):
            getattr(service, call)(arg)

    @pytest.mark.parametrize("call,arg", [
        ("distance_by_toa", 30.0),
        ("toa_by_distance", 1200.0),
    ])
    def test_invalid_value(self, service, client, call, arg):
        client.fetch_series.return_value = hmf2_series(5.0)
        with pytest.raises(InvalidValueError):
            getattr(service, call)(arg)

    @pytest.mark.parametrize("error", [
        TransportError("timeout"),
        ServiceReportedError("station not found"),
    ])
    def test_fetch_errors_propagate(self, service, client, error):
        client.fetch_series.side_effect = error
        with pytest.raises(type(error)):
            service.toa_by_distance(1200.0)

    def test_custom_floor(self, client):
        client.config = GIROConfig(min_valid_hmf2_km=100.0)
        client.fetch_series.return_value = hmf2_series(90.0)

        with pytest.raises(InvalidValueError):
            PropagationService(client=client).toa_by_distance(500.0)


class TestConstruction:
    """Service-built clients"""

    def test_clock_passed_to_built_client(self):
        clock = lambda: T0
        service = PropagationService(config=GIROConfig(), clock=clock)

        assert service.client.clock is clock
        assert service.client.default_window() == (T0 - timedelta(hours=1), T0)

    def test_config_passed_to_built_client(self):
        service = PropagationService(config=GIROConfig(default_station="DB049"))
        assert service.client.resolve_station() == "DB049"
