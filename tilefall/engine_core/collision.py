"""
Collision Resolver - Turns simultaneous moves into non-overlapping positions.

A collision happens when two actors end up targeting the same cell and
at least one of them is actually moving there. The outcome is directional:
- P1 (the earlier actor in processing order) lands on the contested cell
- P1 is then bumped one cell further along P2's direction of travel
- P2 completes its move

Each actor takes part in at most one collision per pass. Bumps are new
pending moves, so the next pass may produce further collisions (cascade).
"""

from __future__ import annotations
import logging
from dataclasses import dataclass, field
from typing import Sequence

from .grid import Direction, GridPosition
from .state import Actor, Moving, STAY


logger = logging.getLogger(__name__)


@dataclass
class Collision:
    """
    A recorded collision.

    `actor_id` is the bumped actor, `other_id` the actor whose travel
    direction decided the bump.
    """
    actor_id: str
    other_id: str
    landing: GridPosition
    bump: GridPosition
    direction: Direction


@dataclass
class ResolutionPass:
    """Result of one resolution sub-step."""
    collisions: list[Collision] = field(default_factory=list)
    moved: list[str] = field(default_factory=list)  # Actors that committed a move

    @property
    def any_collision(self) -> bool:
        return bool(self.collisions)

    @property
    def pending(self) -> list[str]:
        """Actors left with a bump move for the next pass."""
        return [c.actor_id for c in self.collisions]


class CollisionResolver:
    """
    Resolves pending moves of live actors.

    Stateless; operates on the actors it is given, in the given order.
    """

    def find_collisions(self, actors: Sequence[Actor]) -> list[Collision]:
        """Compute collisions for the current pending moves without applying them."""
        collisions: list[Collision] = []
        used: set[str] = set()
        # Contested cell -> actor completing its move into it
        claimed: dict[GridPosition, Actor] = {}

        for p1 in actors:
            if p1.actor_id in used:
                continue

            # A cell already won by a mover pushes every further arrival
            mover = claimed.get(p1.destination)
            if mover is not None:
                collision = self._collide(p1, mover)
                if collision:
                    collisions.append(collision)
                    used.add(p1.actor_id)
                continue

            for p2 in actors:
                if p2 is p1 or p2.actor_id in used or not p2.is_moving:
                    continue
                if p1.destination != p2.destination:
                    continue

                collision = self._collide(p1, p2)
                if collision is None:
                    continue
                collisions.append(collision)
                used.update((p1.actor_id, p2.actor_id))
                claimed[p2.destination] = p2
                break

        return collisions

    def resolve(self, actors: Sequence[Actor]) -> ResolutionPass:
        """
        Run one pass: record collisions, move bumped actors onto the
        contested cell with their bump as the new pending move, and commit
        everyone else's move.
        """
        result = ResolutionPass(collisions=self.find_collisions(actors))
        bumped = {c.actor_id: c for c in result.collisions}

        for actor in actors:
            collision = bumped.get(actor.actor_id)
            if collision is not None:
                actor.position = collision.landing
                actor.pending_move = Moving(collision.bump)
            elif actor.is_moving:
                actor.commit_move()
                result.moved.append(actor.actor_id)

        for c in result.collisions:
            logger.debug(
                "Collision at %s: %s bumped %s to %s",
                c.landing, c.other_id, c.actor_id, c.bump,
            )
        return result

    def resolve_all(self, actors: Sequence[Actor], max_passes: int = 16) -> list[ResolutionPass]:
        """
        Resolve passes back to back until no bump is pending.

        Untimed form of the cascade for headless callers; TurnStateMachine
        runs the same passes one per collision window. Both stop at the
        pass limit through settle_pending().
        """
        passes = []
        for _ in range(max_passes):
            result = self.resolve(actors)
            passes.append(result)
            if not result.any_collision:
                return passes

        settle_pending(actors)
        logger.warning("Collision cascade stopped after %d passes", max_passes)
        return passes

    @staticmethod
    def _collide(p1: Actor, p2: Actor) -> Collision | None:
        direction = p2.position.direction_to(p2.destination)
        if direction is None:
            # Only single-step moves have a direction of travel
            return None
        landing = p1.destination
        return Collision(
            actor_id=p1.actor_id,
            other_id=p2.actor_id,
            landing=landing,
            bump=landing.step(direction),
            direction=direction,
        )


def settle_pending(actors: Sequence[Actor]) -> list[str]:
    """
    Commit outstanding bumps without looking for further collisions.

    A bump into a cell held by another actor is dropped and that actor
    stays on its landing cell. Returns the ids of actors that moved.
    """
    moved = []
    for actor in actors:
        if not actor.is_moving:
            continue
        target = actor.destination
        if any(other is not actor and other.position == target for other in actors):
            actor.pending_move = STAY
            continue
        actor.commit_move()
        moved.append(actor.actor_id)
    return moved
