# player.py - Player and its vertical state machine
"""
Player lane plus a Grounded / Jumping / Sliding state machine.
All times are game-time milliseconds supplied by the simulation.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from config import (
    JUMP_DURATION,
    JUMP_HEIGHT,
    LANE_COUNT,
    SLIDE_DURATION,
    SLIDE_SCALE,
    START_LANE,
)

logger = logging.getLogger(__name__)


class VerticalState(Enum):
    GROUNDED = "grounded"
    JUMPING = "jumping"
    SLIDING = "sliding"


@dataclass(frozen=True)
class PlayerView:
    """Read-only render state of the player."""

    lane: int
    vertical_state: VerticalState
    vertical_offset: float  # Pixels upward
    vertical_scale: float


class Player:
    """Authoritative lane and vertical state used for collisions."""

    def __init__(self, jump_duration: float = JUMP_DURATION,
                 slide_duration: float = SLIDE_DURATION,
                 jump_height: float = JUMP_HEIGHT,
                 slide_scale: float = SLIDE_SCALE) -> None:
        if jump_duration <= 0 or slide_duration <= 0:
            raise ValueError("action durations must be positive")
        self.jump_duration = jump_duration
        self.slide_duration = slide_duration
        self.jump_height = jump_height
        self.slide_scale = slide_scale
        self.reset()

    def reset(self) -> None:
        """Back to the middle lane, on the ground."""
        self.lane = START_LANE
        self.vertical_state = VerticalState.GROUNDED
        self.action_start_time = 0.0  # Only meaningful while not grounded

    @property
    def grounded(self) -> bool:
        return self.vertical_state is VerticalState.GROUNDED

    # --------- Lane changes --------- #
    def move(self, direction: int) -> bool:
        """Shift one lane left (-1) or right (+1). False at the edge lanes."""
        target = self.lane + direction
        if not 0 <= target < LANE_COUNT:
            return False
        self.lane = target
        return True

    # --------- Vertical actions --------- #
    def _begin(self, state: VerticalState, now: float) -> bool:
        if not self.grounded:
            logger.debug("%s ignored while %s", state.value, self.vertical_state.value)
            return False
        self.vertical_state = state
        self.action_start_time = now
        return True

    def jump(self, now: float) -> bool:
        """Start a jump if grounded. Input while airborne/sliding is dropped."""
        return self._begin(VerticalState.JUMPING, now)

    def slide(self, now: float) -> bool:
        """Start a slide if grounded."""
        return self._begin(VerticalState.SLIDING, now)

    def _duration(self) -> float:
        if self.vertical_state is VerticalState.JUMPING:
            return self.jump_duration
        return self.slide_duration

    def update(self, now: float) -> None:
        """Land / stand up once the current action has run its course."""
        if self.grounded:
            return
        if now - self.action_start_time >= self._duration():
            self.vertical_state = VerticalState.GROUNDED

    # --------- Visuals --------- #
    def vertical_offset(self, now: float) -> float:
        """Parabolic jump arc: 4h * t * (1 - t), zero when not jumping."""
        if self.vertical_state is not VerticalState.JUMPING:
            return 0.0
        t = (now - self.action_start_time) / self.jump_duration
        t = min(max(t, 0.0), 1.0)
        return 4 * self.jump_height * t * (1 - t)

    def vertical_scale(self) -> float:
        if self.vertical_state is VerticalState.SLIDING:
            return self.slide_scale
        return 1.0

    def view(self, now: float) -> PlayerView:
        return PlayerView(self.lane, self.vertical_state,
                          self.vertical_offset(now), self.vertical_scale())
