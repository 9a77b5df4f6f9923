"""
Engine Core - Platform simulation and collision resolution.

The engine core is the part of the game that knows the rules:
1. Which tiles support an actor
2. Which tiles crumble next without splitting the platform
3. Where each actor may move
4. How simultaneous moves resolve into collisions
"""

from .grid import GridPosition, Direction
from .state import (
    Tile, TileStability, Actor, ActorRegistry, Move, Moving, Staying, STAY,
    TurnPhase, Outcome, HUMAN_ID,
)
from .results import ErrorCode, SubmissionResult, MarkResult
from .platform import PlatformGraph
from .collision import CollisionResolver, Collision, ResolutionPass
from .snapshot import BoardSnapshot, TileSnapshot, ActorSnapshot, PositionModel

__all__ = [
    "GridPosition",
    "Direction",
    "Tile",
    "TileStability",
    "Actor",
    "ActorRegistry",
    "Move",
    "Moving",
    "Staying",
    "STAY",
    "TurnPhase",
    "Outcome",
    "HUMAN_ID",
    "ErrorCode",
    "SubmissionResult",
    "MarkResult",
    "PlatformGraph",
    "CollisionResolver",
    "Collision",
    "ResolutionPass",
    "BoardSnapshot",
    "TileSnapshot",
    "ActorSnapshot",
    "PositionModel",
]
