# difficulty.py - Difficulty Model
"""Linear speed / spawn-rate ramp over elapsed game time."""

from dataclasses import dataclass

from config import DIFFICULTIES, DIFFICULTY_RAMP_DURATION


@dataclass(frozen=True)
class DifficultyCurve:
    """Endpoints of the ramp (speeds in px/s, intervals in ms)."""

    base_speed: float
    max_speed: float
    base_interval: float
    min_interval: float
    ramp_duration: float = DIFFICULTY_RAMP_DURATION

    def __post_init__(self) -> None:
        if self.ramp_duration <= 0:
            raise ValueError("ramp_duration must be positive")

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "DifficultyCurve":
        """Build from a DIFFICULTIES entry, unknown names fall back to Normal."""
        settings = dict(DIFFICULTIES.get(name, DIFFICULTIES["Normal"]))
        settings.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**settings)

    def factor(self, elapsed_ms: float) -> float:
        """Difficulty in 0..1, saturating once the ramp is complete."""
        return min(max(elapsed_ms / self.ramp_duration, 0.0), 1.0)

    def speed(self, difficulty: float) -> float:
        return self.base_speed + (self.max_speed - self.base_speed) * difficulty

    def spawn_interval(self, difficulty: float) -> float:
        return self.base_interval - (self.base_interval - self.min_interval) * difficulty
