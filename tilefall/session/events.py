"""
Events - Typed notifications from the simulation to presentation.

The state machine never calls presentation code directly. It enqueues
event values; the host drains the queue whenever it wants to react
(render, play audio, spawn particles). Listeners registered with
`subscribe` are invoked during `drain`, not during simulation.
"""

from __future__ import annotations
import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable

from ..engine_core.grid import GridPosition
from ..engine_core.state import Outcome, TurnPhase


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameEvent:
    """Base class for notifications."""
    turn_counter: int


@dataclass(frozen=True)
class PhaseChanged(GameEvent):
    phase: TurnPhase


@dataclass(frozen=True)
class TilesDestroyed(GameEvent):
    positions: tuple[GridPosition, ...] = ()


@dataclass(frozen=True)
class CollisionOccurred(GameEvent):
    """Fired at most once per turn, for the first pass with collisions."""
    actor_ids: tuple[str, ...] = ()
    positions: tuple[GridPosition, ...] = ()


@dataclass(frozen=True)
class ActorEliminated(GameEvent):
    actor_id: str
    position: GridPosition
    is_bot: bool = True


@dataclass(frozen=True)
class GameOver(GameEvent):
    outcome: Outcome
    is_new_high_score: bool = False
    high_score: int = 0
    title: str = ""
    flavor_text: str = ""


Listener = Callable[[GameEvent], None]


@dataclass
class EventQueue:
    """
    FIFO of pending notifications.

    Order matters for presentation, not for simulation correctness.
    """
    _events: deque = field(default_factory=deque)
    _listeners: list[Listener] = field(default_factory=list)

    def emit(self, event: GameEvent):
        logger.debug("Event: %s", event)
        self._events.append(event)

    def subscribe(self, listener: Listener):
        """Register a listener called for each drained event."""
        self._listeners.append(listener)

    def unsubscribe(self, listener: Listener):
        if listener in self._listeners:
            self._listeners.remove(listener)

    def drain(self) -> list[GameEvent]:
        """Remove and return all pending events, notifying listeners."""
        events = list(self._events)
        self._events.clear()
        for event in events:
            for listener in list(self._listeners):
                listener(event)
        return events

    def __len__(self) -> int:
        return len(self._events)
