"""
Unit Tests for Single-Hop Take-Off Angle Geometry

Tests cover:
- Closed-form take-off angle values and monotonicity
- Inverse search against a plain linear scan
- Search bound ("close enough") behaviour
- Vectorized evaluation
"""

import pytest
import numpy as np

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / 'src'))

from hfprop.common.constants import MAX_SCAN_DISTANCE_KM, EARTH_RADIUS_KM
from hfprop.propagation.geometry import (
    take_off_angle,
    distance_for_take_off_angle,
    take_off_angle_profile,
)

HMF2 = 267.4


def linear_scan_distance(toa, hmf2):
    """Reference inverse: walk 1 km at a time until the angle undershoots"""
    distance = 1
    while distance < MAX_SCAN_DISTANCE_KM:
        if take_off_angle(distance, hmf2) < toa:
            return float(distance - 1)
        distance += 1
    return float(distance)


class TestTakeOffAngle:
    """Closed-form direction"""

    def test_max_scan_distance(self):
        assert MAX_SCAN_DISTANCE_KM == 6366
        assert abs(EARTH_RADIUS_KM - 6366.1977) < 1e-3

    def test_known_value(self):
        """100 km with hmF2 267.4 km is a steep, near-NVIS angle"""
        assert abs(take_off_angle(100, HMF2) - 78.9665) < 0.01

    def test_returns_float_for_scalar(self):
        assert isinstance(take_off_angle(100.0, HMF2), float)

    def test_monotone_samples(self):
        assert take_off_angle(50, HMF2) >= take_off_angle(150, HMF2) >= take_off_angle(300, HMF2)

    def test_monotone_over_scan_range(self):
        angles = take_off_angle_profile(np.arange(1, MAX_SCAN_DISTANCE_KM), HMF2)
        assert np.all(np.diff(angles) <= 0)

    def test_zero_distance_is_vertical(self):
        assert take_off_angle(0, HMF2) == pytest.approx(90.0)

    def test_higher_layer_steeper_angle(self):
        assert take_off_angle(1000, 350.0) > take_off_angle(1000, 250.0)

    def test_long_paths_go_below_horizon(self):
        """Beyond the single-hop horizon the required angle is negative"""
        assert take_off_angle(5000, HMF2) < 0

    def test_array_input(self):
        distances = np.array([50.0, 150.0, 300.0])
        angles = take_off_angle(distances, HMF2)

        assert isinstance(angles, np.ndarray)
        assert angles.shape == (3,)
        for d, a in zip(distances, angles):
            assert a == pytest.approx(take_off_angle(float(d), HMF2))

    def test_profile_scalar_input(self):
        profile = take_off_angle_profile(100.0, HMF2)
        assert profile.shape == (1,)


class TestDistanceForTakeOffAngle:
    """Inverse direction"""

    def test_known_value(self):
        toa = take_off_angle(100, HMF2)
        assert abs(distance_for_take_off_angle(toa, HMF2) - 100) <= 1
        assert abs(distance_for_take_off_angle(78.97, HMF2) - 100) <= 1

    @pytest.mark.parametrize("distance", [2, 10, 100, 750, 1500, 3000, 4500, 6000, 6365])
    def test_round_trip(self, distance):
        toa = take_off_angle(distance, HMF2)
        assert abs(distance_for_take_off_angle(toa, HMF2) - distance) <= 1

    @pytest.mark.parametrize("toa", [89.99, 85.0, 60.0, 30.0, 10.0, 1.0, 0.0, -5.0, -20.0])
    @pytest.mark.parametrize("hmf2", [150.0, HMF2, 400.0])
    def test_matches_linear_scan(self, toa, hmf2):
        """Bisection returns exactly what a 1 km linear scan returns"""
        assert distance_for_take_off_angle(toa, hmf2) == linear_scan_distance(toa, hmf2)

    def test_angle_steeper_than_one_km(self):
        """If even 1 km undershoots the target the answer is 0"""
        assert distance_for_take_off_angle(90.0, HMF2) == 0.0

    def test_bound_returned_when_never_undershot(self):
        """Angles below anything reachable in range return the bound"""
        assert distance_for_take_off_angle(-80.0, HMF2) == float(MAX_SCAN_DISTANCE_KM)

    def test_nan_angle_returns_bound(self):
        assert distance_for_take_off_angle(float('nan'), HMF2) == float(MAX_SCAN_DISTANCE_KM)

    def test_result_is_whole_km(self):
        d = distance_for_take_off_angle(42.0, HMF2)
        assert d == int(d)

    def test_lower_angle_reaches_further(self):
        assert distance_for_take_off_angle(20.0, HMF2) > distance_for_take_off_angle(40.0, HMF2)
