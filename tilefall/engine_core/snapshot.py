"""
Snapshots - Serializable, read-only views of the board.

Collaborators outside the engine only ever see these models. A snapshot
can also be restored into a fresh PlatformGraph and actor list, which
reproduces the same legal moves as the original board.
"""

from __future__ import annotations
import random
from typing import Optional

from pydantic import BaseModel, Field

from .grid import GridPosition
from .platform import PlatformGraph
from .state import Actor, ActorRegistry, Moving, STAY, Tile, TileStability, TurnPhase


class PositionModel(BaseModel):
    """Grid position as exchanged with collaborators."""
    x: int
    y: int

    model_config = {"frozen": True}

    @classmethod
    def of(cls, position: GridPosition) -> PositionModel:
        return cls(x=position.x, y=position.y)

    def to_position(self) -> GridPosition:
        return GridPosition(self.x, self.y)


class TileSnapshot(BaseModel):
    position: PositionModel
    stability: TileStability

    @classmethod
    def from_tile(cls, tile: Tile) -> TileSnapshot:
        return cls(position=PositionModel.of(tile.position), stability=tile.stability)

    def to_tile(self) -> Tile:
        return Tile(position=self.position.to_position(), stability=self.stability)


class ActorSnapshot(BaseModel):
    actor_id: str
    position: PositionModel
    pending_move: Optional[PositionModel] = Field(None, description="None means staying")
    eliminated: bool = False
    is_bot: bool = True

    @classmethod
    def from_actor(cls, actor: Actor) -> ActorSnapshot:
        pending = None
        if isinstance(actor.pending_move, Moving):
            pending = PositionModel.of(actor.pending_move.to)
        return cls(
            actor_id=actor.actor_id,
            position=PositionModel.of(actor.position),
            pending_move=pending,
            eliminated=actor.eliminated,
            is_bot=actor.is_bot,
        )

    def to_actor(self) -> Actor:
        return Actor(
            actor_id=self.actor_id,
            position=self.position.to_position(),
            is_bot=self.is_bot,
            pending_move=Moving(self.pending_move.to_position()) if self.pending_move else STAY,
            eliminated=self.eliminated,
        )


class BoardSnapshot(BaseModel):
    """Complete board view at a point in time."""
    width: int
    height: int
    phase: Optional[TurnPhase] = None
    turn_counter: int = 0
    tiles: list[TileSnapshot] = Field(default_factory=list)
    actors: list[ActorSnapshot] = Field(default_factory=list)

    @classmethod
    def from_board(
        cls,
        platform: PlatformGraph,
        registry: ActorRegistry,
        phase: TurnPhase | None = None,
        turn_counter: int = 0,
    ) -> BoardSnapshot:
        return cls(
            width=platform.width,
            height=platform.height,
            phase=phase,
            turn_counter=turn_counter,
            tiles=[TileSnapshot.from_tile(t) for t in platform.tiles()],
            actors=[ActorSnapshot.from_actor(a) for a in registry.all_actors()],
        )

    def to_platform(self, rng: random.Random | None = None) -> PlatformGraph:
        return PlatformGraph(
            width=self.width,
            height=self.height,
            rng=rng,
            tiles=[t.to_tile() for t in self.tiles],
        )

    def to_registry(self) -> ActorRegistry:
        actors = [a.to_actor() for a in self.actors]
        humans = [a for a in actors if not a.is_bot]
        if len(humans) != 1:
            raise ValueError(f"Snapshot must contain exactly one human, found {len(humans)}")
        return ActorRegistry(human=humans[0], bots=[a for a in actors if a.is_bot])
