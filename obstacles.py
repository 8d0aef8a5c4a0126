# obstacles.py - Obstacle Pool
"""
Fixed-capacity obstacle storage (Object Pool pattern).
Slots are created once and recycled; only `active` decides whether a slot
is visible or can collide.
"""

import logging
import random
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from config import (
    OBSTACLE_POOL_SIZE,
    OBSTACLE_SCALES,
    OBSTACLE_SIZE,
    OBSTACLE_WEIGHTS,
    WINDOW_HEIGHT,
    LANE_COUNT,
)
from lanes import is_valid_lane

logger = logging.getLogger(__name__)


class ObstacleType(Enum):
    NORMAL = "normal"  # Lane change to avoid
    HIGH = "high"  # Slide under
    LOW = "low"  # Jump over

    @property
    def scale(self) -> float:
        """Height multiplier applied to OBSTACLE_SIZE."""
        return OBSTACLE_SCALES[self.value]


OBSTACLE_TYPES = tuple(ObstacleType)
OBSTACLE_TYPE_WEIGHTS = tuple(OBSTACLE_WEIGHTS[t.value] for t in OBSTACLE_TYPES)


@dataclass
class Obstacle:
    """One pool slot. position/lane/type are stale while inactive."""

    position: float = 0.0
    lane: int = 0
    active: bool = False
    type: ObstacleType = ObstacleType.NORMAL


class ObstacleView(NamedTuple):
    """Read-only copy of a slot handed to the presentation layer."""

    position: float
    lane: int
    active: bool
    type: ObstacleType


class ObstaclePool:
    """Pre-allocated obstacle slots with first-fit reuse."""

    def __init__(self, capacity: int = OBSTACLE_POOL_SIZE,
                 obstacle_size: float = OBSTACLE_SIZE,
                 screen_height: float = WINDOW_HEIGHT) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be positive")
        self.obstacle_size = obstacle_size
        self.screen_height = screen_height
        self.slots: list[Obstacle] = [Obstacle() for _ in range(capacity)]

    def __len__(self) -> int:
        return len(self.slots)

    @property
    def capacity(self) -> int:
        return len(self.slots)

    @property
    def expire_line(self) -> float:
        """Positions beyond this are fully below the visible area."""
        return self.screen_height + self.obstacle_size

    def band(self, obs: Obstacle) -> tuple[float, float]:
        """Vertical extent (top, bottom) of a slot, scaled by its type."""
        return obs.position, obs.position + self.obstacle_size * obs.type.scale

    def active_obstacles(self) -> list[Obstacle]:
        return [obs for obs in self.slots if obs.active]

    def reset(self) -> None:
        """Return every slot to the pool."""
        for obs in self.slots:
            obs.active = False

    def free_slot(self) -> int | None:
        """Index of the first inactive slot, or None if the pool is full."""
        for i, obs in enumerate(self.slots):
            if not obs.active:
                return i
        return None

    def place(self, lane: int, position: float,
              obstacle_type: ObstacleType = ObstacleType.NORMAL) -> Obstacle | None:
        """
        Activate the first free slot at the given lane/position.

        Returns:
            Obstacle | None: the activated slot, or None when every slot is in use.
        """
        if not is_valid_lane(lane):
            raise ValueError(f"lane out of range: {lane}")
        idx = self.free_slot()
        if idx is None:
            return None
        obs = self.slots[idx]
        obs.position = position
        obs.lane = lane
        obs.type = obstacle_type
        obs.active = True
        return obs

    def spawn(self, rng: random.Random) -> Obstacle | None:
        """Spawn a random obstacle just above the screen. No-op if full."""
        if self.free_slot() is None:
            logger.debug("spawn skipped: all %d slots active", self.capacity)
            return None
        lane = rng.randrange(LANE_COUNT)
        obstacle_type = rng.choices(OBSTACLE_TYPES, weights=OBSTACLE_TYPE_WEIGHTS)[0]
        obs = self.place(lane, -self.obstacle_size, obstacle_type)
        logger.debug("spawned %s obstacle in lane %d", obstacle_type.value, lane)
        return obs

    def advance(self, speed: float, dt: float) -> int:
        """
        Scroll active obstacles down by speed * dt and expire the ones past
        the bottom of the screen.

        Returns:
            int: number of slots reclaimed this call
        """
        distance = speed * dt
        expired = 0
        for obs in self.slots:
            if not obs.active:
                continue
            obs.position += distance
            if obs.position > self.expire_line:
                obs.active = False  # Back to pool
                expired += 1
        if expired:
            logger.debug("expired %d obstacle(s)", expired)
        return expired

    def views(self) -> tuple[ObstacleView, ...]:
        return tuple(ObstacleView(o.position, o.lane, o.active, o.type) for o in self.slots)
