"""
Bots module - Automated opponents.

Provides:
- BotPolicy: Interface for bot move selection
- RandomMovePolicy: Standard opponent, uniform over candidate moves
- FirstLegalMovePolicy: Deterministic baseline
- StayPolicy: Never moves
"""

from .policy import (
    BotPolicy,
    BotDecision,
    RandomMovePolicy,
    FirstLegalMovePolicy,
    StayPolicy,
    candidate_moves,
)

__all__ = [
    "BotPolicy",
    "BotDecision",
    "RandomMovePolicy",
    "FirstLegalMovePolicy",
    "StayPolicy",
    "candidate_moves",
]
