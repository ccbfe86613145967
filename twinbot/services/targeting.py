"""
Targeting Controller - radar lock, linear lead, fire decision.

Radar: sweep until something is seen, then re-centre on the last bearing
with a gain slightly under 2. The overshoot keeps the beam sliding across a
moving target instead of falling behind it.

Gun: linear targeting. Assume the opponent keeps heading and velocity for
the bullet's flight time and solve

    lead = head_on + asin(v / bullet_speed * sin(opp_heading - head_on))

Fire power feeds both the bullet speed in that solve and the fire request,
so the two always agree.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from ..config import Settings, get_settings
from .geometry import normal_relative_angle

logger = logging.getLogger(__name__)


def bullet_speed(power: float) -> float:
    """Projectile speed for a given fire power."""
    return 20.0 - 3.0 * power


@dataclass(frozen=True)
class AimSolution:
    """Turret and radar commands for one sighting."""
    radar_turn: float
    gun_turn: float
    lead_bearing: float
    fire_power: Optional[float] = None  # None: hold fire


class TargetingController:
    """Radar lock and linear targeting."""

    IDLE_RADAR_TURN = math.inf

    def __init__(self, settings: Optional[Settings] = None):
        settings = settings or get_settings()
        self.fire_power = settings.fire_power
        self.fire_range = settings.fire_range
        self.radar_lock_gain = settings.radar_lock_gain

    def sweep(self) -> float:
        """Radar turn while nothing is locked."""
        return self.IDLE_RADAR_TURN

    def radar_turn(self, heading: float, bearing: float, radar_heading: float) -> float:
        return self.radar_lock_gain * normal_relative_angle(heading + bearing - radar_heading)

    def lead_bearing(
        self,
        heading: float,
        bearing: float,
        opponent_heading: float,
        opponent_velocity: float
    ) -> float:
        """Absolute gun bearing that intercepts a linearly moving opponent."""
        head_on = heading + bearing
        ratio = opponent_velocity / bullet_speed(self.fire_power) * math.sin(opponent_heading - head_on)
        # Only reachable with a velocity above bullet speed
        ratio = max(-1.0, min(1.0, ratio))
        return head_on + math.asin(ratio)

    def should_fire(self, distance: float, gun_heat: float) -> bool:
        return distance < self.fire_range and gun_heat == 0

    def aim(
        self,
        heading: float,
        gun_heading: float,
        radar_heading: float,
        gun_heat: float,
        bearing: float,
        distance: float,
        opponent_heading: float,
        opponent_velocity: float
    ) -> AimSolution:
        lead = self.lead_bearing(heading, bearing, opponent_heading, opponent_velocity)
        fire = self.should_fire(distance, gun_heat)
        if fire:
            logger.debug(f"Firing power {self.fire_power} at distance {distance:.1f}")
        return AimSolution(
            radar_turn=self.radar_turn(heading, bearing, radar_heading),
            gun_turn=normal_relative_angle(lead - gun_heading),
            lead_bearing=lead,
            fire_power=self.fire_power if fire else None,
        )
