"""
Bot Policy - Interface for bot move selection.

A BotPolicy looks at the board and returns a decision for one bot.
Candidate destinations follow the same rules for every policy:
1. Safe moves: stable, unoccupied neighbours
2. If none and the bot stands on an unstable tile: unstable, unoccupied
   neighbours (a doomed bot always tries to escape)
3. If still none: unstable neighbours even if occupied
4. Otherwise the bot stays
"""

from __future__ import annotations
import random
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

from ..engine_core.state import Move, Moving, STAY

if TYPE_CHECKING:
    from ..engine_core.grid import GridPosition
    from ..engine_core.platform import PlatformGraph
    from ..engine_core.state import Actor


@dataclass
class BotDecision:
    """
    A decision made by a bot.

    Contains:
    - The move to declare
    - Explanation (for logs/debugging)
    - The candidates the move was chosen from
    """
    move: Move
    explanation: str = ""
    candidates: list[GridPosition] = field(default_factory=list)


def candidate_moves(
    actor: Actor,
    platform: PlatformGraph,
    occupied: Iterable[GridPosition],
) -> tuple[list[GridPosition], str]:
    """
    Candidate destinations for a bot, with a label for the rule used.
    """
    occupied = set(occupied)
    moves = platform.legal_moves(actor.position, include_unstable=False, occupied=occupied)
    if moves:
        return moves, "safe"

    if not platform.is_unstable(actor.position):
        return [], "none"

    moves = platform.legal_moves(actor.position, include_unstable=True, occupied=occupied)
    if moves:
        return moves, "escape"

    moves = platform.legal_moves(actor.position, include_unstable=True, include_occupied=True)
    if moves:
        return moves, "escape_occupied"

    return [], "none"


class BotPolicy(ABC):
    """
    Abstract base class for bot policies.
    """

    @abstractmethod
    def select_move(
        self,
        actor: Actor,
        platform: PlatformGraph,
        occupied: Iterable[GridPosition],
    ) -> BotDecision:
        """
        Select a move for `actor`.

        Args:
            actor: The bot to move
            platform: Current platform
            occupied: Positions of the other live actors

        Returns:
            BotDecision; the move is STAY when nothing is legal
        """
        pass

    def get_name(self) -> str:
        """Get the bot's name/identifier."""
        return self.__class__.__name__


class RandomMovePolicy(BotPolicy):
    """
    Random policy - picks uniformly among the candidate moves.

    This is the standard opponent.
    """

    def __init__(self, rng: random.Random | None = None, seed: int | None = None):
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        actor: Actor,
        platform: PlatformGraph,
        occupied: Iterable[GridPosition],
    ) -> BotDecision:
        moves, rule = candidate_moves(actor, platform, occupied)
        if not moves:
            return BotDecision(move=STAY, explanation="No legal move", candidates=[])

        target = moves[self.rng.randrange(len(moves))]
        return BotDecision(
            move=Moving(target),
            explanation=f"Random {rule} move",
            candidates=moves,
        )


class FirstLegalMovePolicy(BotPolicy):
    """
    First-legal policy - always takes the first candidate (N/E/S/W order).

    Used for:
    - Deterministic testing
    - Baseline comparison
    """

    def select_move(
        self,
        actor: Actor,
        platform: PlatformGraph,
        occupied: Iterable[GridPosition],
    ) -> BotDecision:
        moves, rule = candidate_moves(actor, platform, occupied)
        if not moves:
            return BotDecision(move=STAY, explanation="No legal move", candidates=[])

        return BotDecision(
            move=Moving(moves[0]),
            explanation=f"First {rule} move",
            candidates=moves,
        )


class StayPolicy(BotPolicy):
    """Never moves. Useful for scripted scenarios."""

    def select_move(
        self,
        actor: Actor,
        platform: PlatformGraph,
        occupied: Iterable[GridPosition],
    ) -> BotDecision:
        return BotDecision(move=STAY, explanation="Staying")
