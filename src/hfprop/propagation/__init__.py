"""Single-hop propagation geometry and the latest-hmF2 service."""

from .geometry import take_off_angle, distance_for_take_off_angle, take_off_angle_profile
from .propagation_service import PropagationService
