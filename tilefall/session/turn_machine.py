"""
Turn State Machine - Drives one turn through its phases.

The cycle:
1. TURN_INIT: count the turn, mark tiles unstable, pick bot moves,
   publish the human's legal moves
2. MOVE_SELECTION: wait for the human move (or a forced advance)
3. MOVE_EXECUTION: wait for the move animation window, then resolve
4. COLLISION_RESOLUTION: run cascading bump passes, one per window, up to
   max_collision_passes (leftover bumps are then settled directly), then
   commit, destroy marked tiles and eliminate unsupported actors
5. Back to TURN_INIT, or GAME_OVER

The machine is quiescent between advance() calls. Timed windows are
measured with the injected clock; the machine never sleeps.
"""

from __future__ import annotations
import logging
import time
from typing import Callable, TYPE_CHECKING

from ..engine_core.collision import CollisionResolver, ResolutionPass, settle_pending
from ..engine_core.grid import GridPosition
from ..engine_core.results import ErrorCode, SubmissionResult
from ..engine_core.state import Moving, Outcome, STAY, TurnPhase
from .events import (
    ActorEliminated, CollisionOccurred, EventQueue, GameOver, PhaseChanged, TilesDestroyed,
)

if TYPE_CHECKING:
    from ..bots.policy import BotPolicy
    from ..config import GameConfig
    from ..engine_core.platform import PlatformGraph
    from ..engine_core.state import ActorRegistry
    from .highscore import HighScoreStore


logger = logging.getLogger(__name__)


class TurnStateMachine:
    """
    Orchestrates PlatformGraph, BotPolicy and CollisionResolver.

    Usage:
        machine = TurnStateMachine(config, platform, registry, policy, events, store)
        machine.advance()                     # TURN_INIT -> MOVE_SELECTION
        machine.submit_human_move(target)
        machine.advance()                     # -> MOVE_EXECUTION
        ...
    """

    def __init__(
        self,
        config: GameConfig,
        platform: PlatformGraph,
        registry: ActorRegistry,
        bot_policy: BotPolicy,
        events: EventQueue,
        high_scores: HighScoreStore,
        clock: Callable[[], float] = time.monotonic,
        resolver: CollisionResolver | None = None,
        turn_counter: int = 0,
    ):
        self.config = config
        self.platform = platform
        self.registry = registry
        self.bot_policy = bot_policy
        self.events = events
        self.high_scores = high_scores
        self.clock = clock
        self.resolver = resolver or CollisionResolver()

        self.phase = TurnPhase.TURN_INIT
        self.turn_counter = turn_counter
        self.outcome: Outcome | None = None

        self.human_legal_moves: list[GridPosition] = []
        self.resolution_passes: list[ResolutionPass] = []

        self._human_submitted = False
        self._phase_started_at = clock()
        self._bumps_pending = False
        self._collision_reported = False

    # ------------------------------------------------------------------
    # Driver API
    # ------------------------------------------------------------------

    def advance(self, force: bool = False) -> bool:
        """
        Drive the machine one step.

        Returns False (and changes nothing) when the current phase is still
        waiting: MOVE_SELECTION without a submission, or a timed window that
        has not elapsed. `force` skips both waits.
        """
        if self.phase == TurnPhase.TURN_INIT:
            self._begin_turn()
            return True
        if self.phase == TurnPhase.MOVE_SELECTION:
            return self._end_move_selection(force)
        if self.phase == TurnPhase.MOVE_EXECUTION:
            return self._end_move_execution(force)
        if self.phase == TurnPhase.COLLISION_RESOLUTION:
            return self._step_collision_resolution(force)
        return False

    def tick(self) -> bool:
        """Host-loop hook: advance phases that do not need human input."""
        if self.phase == TurnPhase.MOVE_SELECTION or self.phase == TurnPhase.GAME_OVER:
            return False
        return self.advance()

    def submit_human_move(self, position: GridPosition | None) -> SubmissionResult:
        """
        Declare the human move for this turn. None means staying.

        Replaces any earlier submission. Rejected outside MOVE_SELECTION
        or for positions outside the published legal moves.
        """
        if self.phase == TurnPhase.GAME_OVER:
            return SubmissionResult.failure("Game is over", ErrorCode.GAME_OVER)
        if self.phase != TurnPhase.MOVE_SELECTION:
            logger.warning("Ignoring move submitted during %s", self.phase.value)
            return SubmissionResult.failure(
                f"Moves can only be submitted during move selection, not {self.phase.value}"
            )
        if position is not None and position not in self.human_legal_moves:
            logger.warning("Ignoring illegal move to %s", position)
            return SubmissionResult.failure(f"{position} is not a legal move")

        human = self.registry.human
        human.pending_move = Moving(position) if position is not None else STAY
        self._human_submitted = True
        return SubmissionResult.accepted(position)

    @property
    def has_human_submission(self) -> bool:
        return self._human_submitted

    # ------------------------------------------------------------------
    # Phase handlers
    # ------------------------------------------------------------------

    def _set_phase(self, phase: TurnPhase):
        self.phase = phase
        self._phase_started_at = self.clock()
        self.events.emit(PhaseChanged(turn_counter=self.turn_counter, phase=phase))

    def _elapsed(self, duration: float) -> bool:
        return self.clock() - self._phase_started_at >= duration

    def _begin_turn(self):
        self.turn_counter += 1
        self.platform.mark_unstable(self.config.unstable_tiles_per_turn)

        for bot in self.registry.live_bots:
            decision = self.bot_policy.select_move(
                bot, self.platform, self.registry.occupied_positions(exclude=bot),
            )
            bot.pending_move = decision.move
            logger.debug("%s at %s: %s", bot.actor_id, bot.position, decision.explanation)

        human = self.registry.human
        human.pending_move = STAY
        self._human_submitted = False
        self.human_legal_moves = self.platform.legal_moves(
            human.position, include_unstable=True, include_occupied=True,
        )

        self.resolution_passes = []
        self._bumps_pending = False
        self._collision_reported = False
        self._set_phase(TurnPhase.MOVE_SELECTION)

    def _end_move_selection(self, force: bool) -> bool:
        if not self._human_submitted and not force:
            return False
        self._set_phase(TurnPhase.MOVE_EXECUTION)
        return True

    def _end_move_execution(self, force: bool) -> bool:
        if not force and not self._elapsed(self.config.move_duration):
            return False
        self._run_resolution_pass()
        self._set_phase(TurnPhase.COLLISION_RESOLUTION)
        return True

    def _step_collision_resolution(self, force: bool) -> bool:
        if not self._bumps_pending:
            self._end_turn()
            return True
        if not force and not self._elapsed(self.config.collision_duration):
            return False
        self._run_resolution_pass()
        self._phase_started_at = self.clock()
        return True

    def _run_resolution_pass(self):
        actors = self.registry.live_actors()
        result = self.resolver.resolve(actors)
        self.resolution_passes.append(result)

        if result.any_collision and not self._collision_reported:
            self._collision_reported = True
            self.events.emit(CollisionOccurred(
                turn_counter=self.turn_counter,
                actor_ids=tuple(c.actor_id for c in result.collisions),
                positions=tuple(c.landing for c in result.collisions),
            ))

        self._bumps_pending = result.any_collision
        if self._bumps_pending and len(self.resolution_passes) >= self.config.max_collision_passes:
            logger.warning(
                "Collision cascade stopped after %d passes on turn %d",
                len(self.resolution_passes), self.turn_counter,
            )
            settle_pending(actors)
            self._bumps_pending = False

    def _end_turn(self):
        for actor in self.registry.live_actors():
            actor.commit_move()

        destroyed = self.platform.destroy_marked()
        if destroyed:
            self.events.emit(TilesDestroyed(turn_counter=self.turn_counter, positions=tuple(destroyed)))

        for actor in self.registry.live_actors():
            if not self.platform.has_support(actor.position):
                self.registry.eliminate(actor)
                logger.info("%s eliminated at %s on turn %d", actor.actor_id, actor.position, self.turn_counter)
                self.events.emit(ActorEliminated(
                    turn_counter=self.turn_counter,
                    actor_id=actor.actor_id,
                    position=actor.position,
                    is_bot=actor.is_bot,
                ))

        if self.registry.human.eliminated:
            self._finish(Outcome.LOSS)
        elif not self.registry.live_bots:
            self._finish(Outcome.WIN)
        else:
            self._set_phase(TurnPhase.TURN_INIT)
            self._begin_turn()

    def _finish(self, outcome: Outcome):
        self.outcome = outcome
        is_new_record = False
        previous_best = 0
        if outcome == Outcome.WIN:
            previous_best = self.high_scores.get()
            is_new_record = self.high_scores.record_win(self.turn_counter)
        title, flavor = game_over_text(outcome, self.turn_counter, is_new_record, previous_best)

        self._set_phase(TurnPhase.GAME_OVER)
        self.events.emit(GameOver(
            turn_counter=self.turn_counter,
            outcome=outcome,
            is_new_high_score=is_new_record,
            high_score=self.high_scores.get(),
            title=title,
            flavor_text=flavor,
        ))
        logger.info("Game over after %d turns: %s", self.turn_counter, outcome.value)


def game_over_text(outcome: Outcome, turns: int, is_new_record: bool, previous_best: int) -> tuple[str, str]:
    """Title and flavor text for the game-over screen."""
    if outcome == Outcome.WIN:
        flavor = f"You won in {turns} turns!"
        if is_new_record:
            flavor += " This is your new record!"
        else:
            flavor += f" Your best time is {previous_best} turns!"
        return "You Won!", flavor
    return "Game Over", f"You made it {turns} turns! Give it another try!"
