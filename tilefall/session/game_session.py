"""
Game Session - The only API surface presentation code talks to.

LIFECYCLE:
1. Host builds a GameSession from a GameConfig (no global instance)
2. Host calls advance() to start the first turn
3. During MOVE_SELECTION the host submits the human move, then advances
4. Timed phases advance through tick() from the host loop
5. Host drains events and reacts (render, audio, particles)
6. GAME_OVER is terminal; a new game is a new session

Collaborators never get mutable handles: queries return copies,
positions or snapshots.
"""

from __future__ import annotations
import logging
import random
import time
from typing import Callable

from ..bots.policy import BotPolicy, RandomMovePolicy
from ..config import GameConfig
from ..engine_core.grid import GridPosition
from ..engine_core.platform import PlatformGraph
from ..engine_core.results import SubmissionResult
from ..engine_core.snapshot import BoardSnapshot
from ..engine_core.state import Actor, ActorRegistry, HUMAN_ID, Move, Outcome, STAY, TurnPhase
from .events import EventQueue, GameEvent, Listener
from .highscore import HighScoreStore, InMemoryHighScoreStore
from .turn_machine import TurnStateMachine


logger = logging.getLogger(__name__)


class GameSession:
    """
    Owns the platform, the actors and the turn state machine.

    Those collaborators are private. Presentation code reads state only
    through the query methods, which hand out copies, positions, frozen
    moves or snapshots.

    Args:
        config: Game configuration (validated on construction)
        bot_policy: Policy for every bot; defaults to RandomMovePolicy
            sharing the session's seeded random source
        high_scores: Best-score store; defaults to in-memory
        clock: Time source for timed phases
        platform, registry: Pre-built board (used when restoring)
    """

    def __init__(
        self,
        config: GameConfig | None = None,
        bot_policy: BotPolicy | None = None,
        high_scores: HighScoreStore | None = None,
        clock: Callable[[], float] = time.monotonic,
        platform: PlatformGraph | None = None,
        registry: ActorRegistry | None = None,
        turn_counter: int = 0,
    ):
        self.config = (config or GameConfig()).validate()
        self._rng = random.Random(self.config.seed)
        self._platform = platform or PlatformGraph(
            width=self.config.width, height=self.config.height, rng=self._rng,
        )
        self._registry = registry or spawn_actors(self._platform, self._rng, self.config.num_bots)
        self._high_scores = high_scores or InMemoryHighScoreStore()
        self._events = EventQueue()

        self._machine = TurnStateMachine(
            config=self.config,
            platform=self._platform,
            registry=self._registry,
            bot_policy=bot_policy or RandomMovePolicy(rng=self._rng),
            events=self._events,
            high_scores=self._high_scores,
            clock=clock,
            turn_counter=turn_counter,
        )

        logger.info(
            "New %dx%d game with %d bots (best: %d turns)",
            self._platform.width, self._platform.height,
            len(self._registry.live_bots), self._high_scores.get(),
        )

    @classmethod
    def from_snapshot(
        cls,
        snapshot: BoardSnapshot,
        config: GameConfig | None = None,
        **kwargs,
    ) -> GameSession:
        """
        Restore a board. The session restarts at TURN_INIT of the next turn;
        partial turns are not resumed.
        """
        config = config or GameConfig(width=snapshot.width, height=snapshot.height)
        registry = snapshot.to_registry()
        for actor in registry.all_actors():
            actor.pending_move = STAY
        return cls(
            config=config,
            platform=snapshot.to_platform(rng=random.Random(config.seed)),
            registry=registry,
            turn_counter=snapshot.turn_counter,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def submit_human_move(self, position: GridPosition | None) -> SubmissionResult:
        """Submit (or replace) the human move; None means staying."""
        return self._machine.submit_human_move(position)

    def advance(self, force: bool = False) -> bool:
        """Advance the state machine; see TurnStateMachine.advance."""
        return self._machine.advance(force=force)

    def tick(self) -> bool:
        return self._machine.tick()

    def run_turn(self, human_move: GridPosition | None = None) -> bool:
        """
        Play the current turn to completion without waiting on timers.

        Starts the game if needed. Returns False if the game is over.
        """
        if self.is_game_over:
            return False
        if self.current_phase == TurnPhase.TURN_INIT:
            self.advance()

        turn = self.turn_counter
        self.submit_human_move(human_move)
        while not self.is_game_over:
            self.advance(force=True)
            if self.current_phase == TurnPhase.MOVE_SELECTION and self.turn_counter > turn:
                break
        return not self.is_game_over

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    @property
    def current_phase(self) -> TurnPhase:
        return self._machine.phase

    @property
    def turn_counter(self) -> int:
        return self._machine.turn_counter

    @property
    def is_game_over(self) -> bool:
        return self._machine.phase == TurnPhase.GAME_OVER

    @property
    def outcome(self) -> Outcome | None:
        return self._machine.outcome

    @property
    def high_score(self) -> int:
        return self._high_scores.get()

    def legal_moves_for_human(self) -> list[GridPosition]:
        """Published legal moves; empty outside MOVE_SELECTION."""
        if self.current_phase != TurnPhase.MOVE_SELECTION:
            return []
        return list(self._machine.human_legal_moves)

    def human_position(self) -> GridPosition:
        return self._registry.human.position

    def live_bot_positions(self) -> dict[str, GridPosition]:
        return {b.actor_id: b.position for b in self._registry.live_bots}

    def is_tile_unstable(self, position: GridPosition) -> bool:
        return self._platform.is_unstable(position)

    def has_support(self, position: GridPosition) -> bool:
        return self._platform.has_support(position)

    def unstable_positions(self) -> set[GridPosition]:
        """Tiles marked this turn; they crumble when the turn ends."""
        return self._platform.unstable_positions()

    def pending_move(self, actor_id: str) -> Move | None:
        """Declared move of a live actor, or None for unknown and eliminated ids."""
        actor = self._registry.get(actor_id)
        if actor is None or actor.eliminated:
            return None
        return actor.pending_move

    @property
    def has_human_submission(self) -> bool:
        return self._machine.has_human_submission

    def snapshot(self) -> BoardSnapshot:
        return BoardSnapshot.from_board(
            self._platform, self._registry, phase=self.current_phase, turn_counter=self.turn_counter,
        )

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def drain_events(self) -> list[GameEvent]:
        return self._events.drain()

    def subscribe(self, listener: Listener):
        self._events.subscribe(listener)

    def unsubscribe(self, listener: Listener):
        self._events.unsubscribe(listener)


def spawn_actors(
    platform: PlatformGraph,
    rng: random.Random,
    num_bots: int | None = None,
) -> ActorRegistry:
    """
    Place the human on a random spawn cell and bots on the rest.

    Bots take the remaining spawn cells in random order, up to `num_bots`.
    """
    spawns = platform.spawn_positions()
    if not spawns:
        raise ValueError("Platform has no spawn positions")

    human = Actor(actor_id=HUMAN_ID, position=spawns.pop(rng.randrange(len(spawns))), is_bot=False)

    bots = []
    while spawns and (num_bots is None or len(bots) < num_bots):
        position = spawns.pop(rng.randrange(len(spawns)))
        bots.append(Actor(actor_id=f"bot_{len(bots) + 1}", position=position))

    return ActorRegistry(human=human, bots=bots)
