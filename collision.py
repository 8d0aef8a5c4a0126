# collision.py - Collision Detector
"""
Per-tick scan of active obstacles against the player's lane and hitbox band,
with type-based immunity (jump over Low, slide under High).
"""

from config import HITBOX_PADDING, PLAYER_BOTTOM, PLAYER_SIZE, WINDOW_HEIGHT
from obstacles import Obstacle, ObstaclePool, ObstacleType
from player import Player, VerticalState

# Vertical state that lets the player pass each obstacle type
IMMUNITY = {
    ObstacleType.LOW: VerticalState.JUMPING,
    ObstacleType.HIGH: VerticalState.SLIDING,
}


def player_hitbox(screen_height: float = WINDOW_HEIGHT,
                  player_size: float = PLAYER_SIZE,
                  player_bottom: float = PLAYER_BOTTOM,
                  padding: float = HITBOX_PADDING) -> tuple[float, float]:
    """(top, bottom) of the player's fixed screen band, shrunk by padding."""
    bottom = screen_height - player_bottom
    top = bottom - player_size
    return top + padding, bottom - padding


class CollisionDetector:
    """Finds the first obstacle that ends the run, if any."""

    def __init__(self, hitbox: tuple[float, float] | None = None) -> None:
        self.hitbox_top, self.hitbox_bottom = hitbox or player_hitbox()

    def overlaps(self, top: float, bottom: float) -> bool:
        return bottom > self.hitbox_top and top < self.hitbox_bottom

    @staticmethod
    def is_immune(obstacle_type: ObstacleType, state: VerticalState) -> bool:
        """Normal obstacles have no immunity."""
        return IMMUNITY.get(obstacle_type) is state

    def check(self, pool: ObstaclePool, player: Player) -> Obstacle | None:
        """Return the first colliding obstacle in slot order, or None."""
        for obs in pool.slots:
            if not obs.active or obs.lane != player.lane:
                continue
            if not self.overlaps(*pool.band(obs)):
                continue
            if self.is_immune(obs.type, player.vertical_state):
                continue
            return obs
        return None
