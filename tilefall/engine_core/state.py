"""
Game State - Tiles, actors, moves and phases.

Design principles:
- Moves are a sum type: Moving(to) or Staying, never a nullable position
- Actors are owned by the ActorRegistry; collaborators read snapshots
- Elimination is terminal and one-way
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Union

from .grid import GridPosition


HUMAN_ID = "human"


class TileStability(Enum):
    """Tile lifecycle states."""
    STABLE = "stable"
    UNSTABLE = "unstable"  # One-turn warning before removal
    DESTROYED = "destroyed"


class TurnPhase(Enum):
    """Turn state machine phases."""
    TURN_INIT = "turn_init"
    MOVE_SELECTION = "move_selection"
    MOVE_EXECUTION = "move_execution"
    COLLISION_RESOLUTION = "collision_resolution"
    GAME_OVER = "game_over"


class Outcome(Enum):
    """Result of a finished game, from the human's point of view."""
    WIN = "win"
    LOSS = "loss"


@dataclass
class Tile:
    """A single grid cell's supporting surface."""
    position: GridPosition
    stability: TileStability = TileStability.STABLE


@dataclass(frozen=True)
class Moving:
    """A declared single-step move to `to`."""
    to: GridPosition

    def destination(self, current: GridPosition) -> GridPosition:
        return self.to


@dataclass(frozen=True)
class Staying:
    """No move this turn."""

    def destination(self, current: GridPosition) -> GridPosition:
        return current


STAY = Staying()

Move = Union[Moving, Staying]


@dataclass
class Actor:
    """
    A player-controlled or bot-controlled entity on the platform.

    `pending_move` is set during move selection and cleared once the
    move has been committed by collision resolution.
    """
    actor_id: str
    position: GridPosition
    is_bot: bool = True
    pending_move: Move = STAY
    eliminated: bool = False

    @property
    def is_moving(self) -> bool:
        return isinstance(self.pending_move, Moving)

    @property
    def destination(self) -> GridPosition:
        """Effective destination: the pending move, or the current cell."""
        return self.pending_move.destination(self.position)

    def commit_move(self):
        """Move onto the pending destination and clear the pending move."""
        self.position = self.destination
        self.pending_move = STAY


class ActorRegistry:
    """
    Tracks every actor of a session.

    Bots keep their spawn order; processing order everywhere is
    live bots first, then the human.
    """

    def __init__(self, human: Actor, bots: Iterable[Actor] = ()):
        self.human = human
        self._bots: list[Actor] = list(bots)
        self._live_bot_ids: set[str] = {b.actor_id for b in self._bots if not b.eliminated}

    @property
    def bots(self) -> list[Actor]:
        """All bots, including eliminated ones."""
        return list(self._bots)

    @property
    def live_bots(self) -> list[Actor]:
        return [b for b in self._bots if b.actor_id in self._live_bot_ids]

    def live_actors(self) -> list[Actor]:
        """Live bots in spawn order, then the human if not eliminated."""
        actors = self.live_bots
        if not self.human.eliminated:
            actors.append(self.human)
        return actors

    def all_actors(self) -> list[Actor]:
        return self._bots + [self.human]

    def get(self, actor_id: str) -> Actor | None:
        """Get actor by ID."""
        for actor in self.all_actors():
            if actor.actor_id == actor_id:
                return actor
        return None

    def occupied_positions(self, exclude: Actor | None = None) -> set[GridPosition]:
        """Current positions of live actors, optionally ignoring one."""
        return {
            a.position for a in self.live_actors()
            if exclude is None or a.actor_id != exclude.actor_id
        }

    def eliminate(self, actor: Actor):
        """Set the terminal eliminated flag and drop bots from the live set."""
        actor.eliminated = True
        actor.pending_move = STAY
        self._live_bot_ids.discard(actor.actor_id)
