"""
Game configuration.

All tunables of a session live here. Timing values are in seconds and are
measured against the session clock, never by the simulation itself.
"""

from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from typing import Any, Mapping


@dataclass
class GameConfig:
    """
    Configuration for a single game session.
    """
    # Platform size
    width: int = 7
    height: int = 7

    # Tiles marked for destruction at the start of every turn
    unstable_tiles_per_turn: int = 2

    # Timed windows owned by the host loop
    move_duration: float = 1.0
    collision_duration: float = 1.0

    # Safety limit for cascading collisions within one turn
    max_collision_passes: int = 16

    # None means "one bot per free spawn position"
    num_bots: int | None = None

    # Random seed for deterministic replay
    seed: int | None = None

    def validate(self) -> GameConfig:
        """Raise ValueError if the configuration cannot produce a game."""
        if self.width < 1 or self.height < 1:
            raise ValueError(
                f"Platform must be at least 1x1, got {self.width}x{self.height}"
            )
        if self.unstable_tiles_per_turn < 0:
            raise ValueError("unstable_tiles_per_turn cannot be negative")
        if self.move_duration < 0 or self.collision_duration < 0:
            raise ValueError("Durations cannot be negative")
        if self.max_collision_passes < 1:
            raise ValueError("max_collision_passes must be at least 1")
        if self.num_bots is not None and self.num_bots < 0:
            raise ValueError("num_bots cannot be negative")
        return self

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> GameConfig:
        """Build a config from a mapping, ignoring unknown and None values."""
        known = {f.name for f in fields(cls)}
        values = {k: v for k, v in data.items() if k in known and v is not None}
        return cls(**values).validate()

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
