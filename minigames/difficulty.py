"""
Difficulty ramps.

A ramp maps elapsed play time to the current entity speed and spawn
interval. It is a pure function of elapsed time: the loop recomputes the
level every tick and never stores it, so the value after 10 seconds is
the same whether it was reached in 100 small frames or 10 large ones.
"""
import math
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RampMode(str, Enum):
    """How a curve moves from its initial value to its limit."""
    LINEAR = "linear"  # initial +/- rate * elapsed
    STEP = "step"      # initial * rate ** floor(elapsed / step_seconds)


class RampCurve(BaseModel):
    """One ramped parameter.

    The ramp direction is inferred from ``limit`` vs ``initial``: a
    larger limit ramps up (speeds), a smaller one ramps down (spawn
    intervals). The value saturates at ``limit``.

    For LINEAR, ``rate`` is units per second. For STEP, ``rate`` is the
    multiplier applied every ``step_seconds`` and must move the value
    toward the limit (> 1 ramping up, < 1 ramping down).
    """
    model_config = ConfigDict(frozen=True)

    initial: float
    limit: float
    rate: float = Field(default=0.0, ge=0)
    mode: RampMode = RampMode.LINEAR
    step_seconds: float = Field(default=1.0, gt=0)

    @model_validator(mode='after')
    def check_step_factor(self) -> 'RampCurve':
        if self.mode is RampMode.STEP:
            if self.initial <= 0 or self.limit <= 0:
                raise ValueError('Step ramps need positive initial and limit values')
            if self.rate == 0:
                raise ValueError('Step ramp factor must be positive')
            if self.limit > self.initial and self.rate < 1:
                raise ValueError(f'Step factor {self.rate} would never reach limit {self.limit}')
            if self.limit < self.initial and self.rate > 1:
                raise ValueError(f'Step factor {self.rate} would never reach limit {self.limit}')
        return self

    @property
    def increasing(self) -> bool:
        return self.limit >= self.initial

    @classmethod
    def constant(cls, value: float) -> 'RampCurve':
        """A curve that never changes."""
        return cls(initial=value, limit=value)

    def value_at(self, elapsed: float) -> float:
        """Value after ``elapsed`` seconds of play (negative treated as 0)."""
        elapsed = max(0.0, elapsed)
        if self.initial == self.limit:
            return self.initial

        if self.mode is RampMode.LINEAR:
            if self.increasing:
                return min(self.limit, self.initial + self.rate * elapsed)
            return max(self.limit, self.initial - self.rate * elapsed)

        if self.rate == 1:
            return self.initial
        steps = math.floor(elapsed / self.step_seconds)
        # Steps needed to hit the limit; beyond this the pow could overflow
        saturate = math.ceil(math.log(self.limit / self.initial) / math.log(self.rate))
        if steps >= saturate:
            return self.limit
        value = self.initial * self.rate ** steps
        if self.increasing:
            return min(self.limit, value)
        return max(self.limit, value)


class DifficultyLevel(BaseModel):
    """Difficulty at one instant. Derived, never stored between ticks."""
    model_config = ConfigDict(frozen=True)

    elapsed: float
    speed: float
    spawn_interval: float


class DifficultyRamp(BaseModel):
    """Speed and spawn interval as functions of elapsed play time."""
    model_config = ConfigDict(frozen=True)

    speed: RampCurve
    spawn_interval: RampCurve

    @model_validator(mode='after')
    def check_directions(self) -> 'DifficultyRamp':
        if self.speed.limit < self.speed.initial:
            raise ValueError('Speed must not decrease over time')
        if self.spawn_interval.limit > self.spawn_interval.initial:
            raise ValueError('Spawn interval must not increase over time')
        if self.spawn_interval.limit <= 0:
            raise ValueError('Spawn interval must stay positive')
        return self

    @classmethod
    def constant(cls, speed: float, spawn_interval: float) -> 'DifficultyRamp':
        """A ramp with fixed parameters."""
        return cls(speed=RampCurve.constant(speed),
                   spawn_interval=RampCurve.constant(spawn_interval))

    def at(self, elapsed: float) -> DifficultyLevel:
        """Difficulty after ``elapsed`` seconds of play."""
        elapsed = max(0.0, elapsed)
        return DifficultyLevel(
            elapsed=elapsed,
            speed=self.speed.value_at(elapsed),
            spawn_interval=self.spawn_interval.value_at(elapsed),
        )
