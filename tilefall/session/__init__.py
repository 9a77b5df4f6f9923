"""
Session module - Turn orchestration and the host-facing API.

Provides:
- GameSession: Owns the board and exposes the narrow API
- TurnStateMachine: TURN_INIT -> MOVE_SELECTION -> MOVE_EXECUTION ->
  COLLISION_RESOLUTION -> TURN_INIT | GAME_OVER
- Events: Typed notifications drained by presentation code
- High score stores
"""

from .events import (
    EventQueue,
    GameEvent,
    PhaseChanged,
    TilesDestroyed,
    CollisionOccurred,
    ActorEliminated,
    GameOver,
)
from .highscore import HighScoreStore, InMemoryHighScoreStore, FileHighScoreStore
from .turn_machine import TurnStateMachine, game_over_text
from .game_session import GameSession, spawn_actors

__all__ = [
    "EventQueue",
    "GameEvent",
    "PhaseChanged",
    "TilesDestroyed",
    "CollisionOccurred",
    "ActorEliminated",
    "GameOver",
    "HighScoreStore",
    "InMemoryHighScoreStore",
    "FileHighScoreStore",
    "TurnStateMachine",
    "game_over_text",
    "GameSession",
    "spawn_actors",
]
