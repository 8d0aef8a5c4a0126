# simulation.py - Simulation Step and Game State Machine
"""
Per-frame game-state update for Rail Surfers.

The host drives the core with:
    tick(dt)          elapsed seconds since the previous frame
    swipe(dx, dy)     decoded gesture vector (screen coords, y grows downward)
    start(), restart()

and reads back (score, state) through subscribe() plus read-only views of the
player and the obstacle pool for rendering. All state is owned and mutated
here; one tick is fully processed before the next.
"""

import logging
import math
import random
from enum import Enum
from typing import Callable

from collision import CollisionDetector, player_hitbox
from config import (
    OBSTACLE_POOL_SIZE,
    OBSTACLE_SIZE,
    SCORE_UNIT,
    SWIPE_THRESHOLD_X,
    SWIPE_THRESHOLD_Y,
    WINDOW_HEIGHT,
)
from difficulty import DifficultyCurve
from obstacles import ObstaclePool, ObstacleView
from player import Player, PlayerView

logger = logging.getLogger(__name__)


class GameState(Enum):
    IDLE = "idle"
    PLAYING = "playing"
    GAME_OVER = "game_over"


Listener = Callable[[int, GameState], None]


class Simulation:
    """Single active run: obstacle pool, player and run state."""

    def __init__(self, difficulty: str = "Normal", *,
                 seed: int | None = None,
                 rng: random.Random | None = None,
                 base_speed: float | None = None,
                 max_speed: float | None = None,
                 base_interval: float | None = None,
                 min_interval: float | None = None,
                 ramp_duration: float | None = None,
                 capacity: int = OBSTACLE_POOL_SIZE,
                 obstacle_size: float = OBSTACLE_SIZE,
                 screen_height: float = WINDOW_HEIGHT,
                 hitbox: tuple[float, float] | None = None,
                 swipe_threshold_x: float = SWIPE_THRESHOLD_X,
                 swipe_threshold_y: float = SWIPE_THRESHOLD_Y,
                 **player_options) -> None:
        self.rng = rng if rng is not None else random.Random(seed)
        self.curve = DifficultyCurve.from_preset(
            difficulty,
            base_speed=base_speed,
            max_speed=max_speed,
            base_interval=base_interval,
            min_interval=min_interval,
            ramp_duration=ramp_duration,
        )
        self.pool = ObstaclePool(capacity, obstacle_size, screen_height)
        self.player = Player(**player_options)
        self.detector = CollisionDetector(hitbox or player_hitbox(screen_height))
        self.swipe_threshold_x = swipe_threshold_x
        self.swipe_threshold_y = swipe_threshold_y

        self._listeners: list[Listener] = []
        self.state = GameState.IDLE
        self._reset_run()

    # ------------------------------------------------------------------ #
    # RUN STATE
    # ------------------------------------------------------------------ #
    def _reset_run(self) -> None:
        """Zero the run state, empty the pool, put the player back in lane 1."""
        self.elapsed_time = 0.0  # ms of game time
        self.last_spawn_time = 0.0
        self.rail_offset = 0.0
        self.difficulty = 0.0
        self.speed = self.curve.speed(0.0)
        self.spawn_interval = self.curve.spawn_interval(0.0)
        self.pool.reset()
        self.player.reset()

    @property
    def score(self) -> int:
        """Derived from elapsed time, never stored."""
        return math.floor(self.elapsed_time / SCORE_UNIT)

    @property
    def playing(self) -> bool:
        return self.state is GameState.PLAYING

    # ------------------------------------------------------------------ #
    # PUBLISH CHANNEL
    # ------------------------------------------------------------------ #
    def subscribe(self, listener: Listener) -> None:
        """Register listener(score, state), called after every processed tick."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self) -> None:
        score, state = self.score, self.state
        for listener in list(self._listeners):
            listener(score, state)

    # ------------------------------------------------------------------ #
    # LIFECYCLE COMMANDS
    # ------------------------------------------------------------------ #
    def start(self) -> bool:
        """Idle -> Playing. Ignored in any other state."""
        if self.state is not GameState.IDLE:
            logger.debug("start ignored in state %s", self.state.value)
            return False
        return self._begin_run("started")

    def restart(self) -> bool:
        """GameOver -> Playing with a fresh run. Ignored in any other state."""
        if self.state is not GameState.GAME_OVER:
            logger.debug("restart ignored in state %s", self.state.value)
            return False
        return self._begin_run("restarted")

    def set_difficulty(self, name: str) -> bool:
        """Swap in a DIFFICULTIES preset. Only allowed between runs."""
        if self.playing:
            return False
        self.curve = DifficultyCurve.from_preset(name)
        return True

    def _begin_run(self, verb: str) -> bool:
        self._reset_run()
        self.state = GameState.PLAYING
        logger.info("run %s", verb)
        self._publish()
        return True

    # ------------------------------------------------------------------ #
    # INPUT
    # ------------------------------------------------------------------ #
    def swipe(self, dx: float, dy: float) -> bool:
        """
        Apply a decoded swipe. The larger axis wins; horizontal drives lane
        changes, vertical drives jump (up) / slide (down).

        Returns:
            bool: True if the swipe changed the player's state.
        """
        if not self.playing:
            return False
        if abs(dx) >= abs(dy):
            if dx > self.swipe_threshold_x:
                return self.player.move(1)
            if dx < -self.swipe_threshold_x:
                return self.player.move(-1)
            return False
        if dy < -self.swipe_threshold_y:
            return self.player.jump(self.elapsed_time)
        if dy > self.swipe_threshold_y:
            return self.player.slide(self.elapsed_time)
        return False

    # ------------------------------------------------------------------ #
    # SIMULATION STEP
    # ------------------------------------------------------------------ #
    def tick(self, dt: float) -> None:
        """Advance the run by dt seconds. Does nothing unless Playing."""
        if not self.playing:
            return
        dt = max(dt, 0.0)

        # 1. Time (score follows from it)
        self.elapsed_time += dt * 1000

        # 2. Jump / slide may finish this tick
        self.player.update(self.elapsed_time)

        # 3. Difficulty ramp
        self.difficulty = self.curve.factor(self.elapsed_time)
        self.speed = self.curve.speed(self.difficulty)
        self.spawn_interval = self.curve.spawn_interval(self.difficulty)

        # 4. Spawn, then move everything
        if self.elapsed_time - self.last_spawn_time >= self.spawn_interval:
            if self.pool.spawn(self.rng) is not None:
                self.last_spawn_time = self.elapsed_time
        self.pool.advance(self.speed, dt)
        self.rail_offset += self.speed * dt

        # 5-6. Collisions end the run; the pool is left frozen as it was hit
        hit = self.detector.check(self.pool, self.player)
        if hit is not None:
            self.state = GameState.GAME_OVER
            logger.info("game over: %s obstacle in lane %d, score %d",
                        hit.type.value, hit.lane, self.score)

        # 7. Publish
        self._publish()

    # ------------------------------------------------------------------ #
    # READ-ONLY VIEWS
    # ------------------------------------------------------------------ #
    def obstacle_views(self) -> tuple[ObstacleView, ...]:
        return self.pool.views()

    def player_view(self) -> PlayerView:
        return self.player.view(self.elapsed_time)
