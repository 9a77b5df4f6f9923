"""
Tests for collision resolution.

Tests:
- Head-on collisions and the directional bump
- Pushing stationary actors
- Cascades over several passes
- Pass limit and settling leftover bumps
"""

from ..engine_core.collision import CollisionResolver, settle_pending
from ..engine_core.grid import Direction, GridPosition
from ..engine_core.state import Actor, Moving, STAY


P = GridPosition


def actor(actor_id, position, move=None):
    return Actor(
        actor_id=actor_id,
        position=P(*position),
        pending_move=Moving(P(*move)) if move else STAY,
    )


class TestSingleCollision:

    def test_head_on_collision(self):
        """B is processed first, gets bumped back along A's travel."""
        a = actor("a", (0, 0), (1, 0))
        b = actor("b", (2, 0), (1, 0))
        resolver = CollisionResolver()

        first = resolver.resolve([b, a])

        assert len(first.collisions) == 1
        collision = first.collisions[0]
        assert collision.actor_id == "b"
        assert collision.other_id == "a"
        assert collision.landing == P(1, 0)
        assert collision.bump == P(2, 0)
        assert collision.direction == Direction.EAST
        assert first.pending == ["b"]

        # A completed its move, B sits on the collision cell with a bump pending
        assert a.position == P(1, 0)
        assert not a.is_moving
        assert b.position == P(1, 0)
        assert b.pending_move == Moving(P(2, 0))

        second = resolver.resolve([b, a])
        assert not second.any_collision
        assert a.position == P(1, 0)
        assert b.position == P(2, 0)
        assert not b.is_moving

    def test_processing_order_decides_who_is_bumped(self):
        a = actor("a", (0, 0), (1, 0))
        b = actor("b", (2, 0), (1, 0))

        passes = CollisionResolver().resolve_all([a, b])

        assert sum(len(p.collisions) for p in passes) == 1
        assert a.position == P(0, 0)
        assert b.position == P(1, 0)

    def test_find_collisions_does_not_mutate(self):
        a = actor("a", (0, 0), (1, 0))
        b = actor("b", (2, 0), (1, 0))

        collisions = CollisionResolver().find_collisions([b, a])

        assert len(collisions) == 1
        assert a.position == P(0, 0)
        assert b.pending_move == Moving(P(1, 0))


class TestNoCollision:

    def test_independent_moves_commit(self):
        a = actor("a", (0, 0), (0, 1))
        b = actor("b", (3, 3), (3, 2))
        c = actor("c", (5, 5))

        result = CollisionResolver().resolve([a, b, c])

        assert not result.any_collision
        assert result.moved == ["a", "b"]
        assert a.position == P(0, 1)
        assert b.position == P(3, 2)
        assert c.position == P(5, 5)
        assert not a.is_moving and not b.is_moving

    def test_swapping_actors_pass_through(self):
        a = actor("a", (0, 0), (1, 0))
        b = actor("b", (1, 0), (0, 0))

        result = CollisionResolver().resolve([a, b])

        assert not result.any_collision
        assert a.position == P(1, 0)
        assert b.position == P(0, 0)

    def test_two_stationary_actors_never_collide(self):
        a = actor("a", (0, 0))
        b = actor("b", (0, 0))
        assert CollisionResolver().find_collisions([a, b]) == []


class TestPushAndCascade:

    def test_stationary_actor_is_pushed(self):
        mover = actor("mover", (0, 0), (1, 0))
        sitter = actor("sitter", (1, 0))

        passes = CollisionResolver().resolve_all([mover, sitter])

        assert passes[0].collisions[0].actor_id == "sitter"
        assert mover.position == P(1, 0)
        assert sitter.position == P(2, 0)

    def test_push_is_order_independent_for_stationary_target(self):
        mover = actor("mover", (0, 0), (1, 0))
        sitter = actor("sitter", (1, 0))

        CollisionResolver().resolve_all([sitter, mover])

        assert mover.position == P(1, 0)
        assert sitter.position == P(2, 0)

    def test_push_cascades_down_a_line(self):
        a = actor("a", (0, 0), (1, 0))
        c = actor("c", (1, 0))
        d = actor("d", (2, 0))

        passes = CollisionResolver().resolve_all([c, d, a])

        assert len(passes) == 3
        assert [len(p.collisions) for p in passes] == [1, 1, 0]
        assert a.position == P(1, 0)
        assert c.position == P(2, 0)
        assert d.position == P(3, 0)

    def test_three_way_collision_ends_on_distinct_cells(self):
        a = actor("a", (0, 1), (1, 1))
        b = actor("b", (2, 1), (1, 1))
        c = actor("c", (1, 2), (1, 1))

        CollisionResolver().resolve_all([a, b, c])

        assert b.position == P(1, 1)
        positions = [a.position, b.position, c.position]
        assert len(set(positions)) == 3
        assert not any(x.is_moving for x in (a, b, c))

    def test_pass_limit_commits_pending_bump(self):
        a = actor("a", (0, 0), (1, 0))
        b = actor("b", (2, 0), (1, 0))

        passes = CollisionResolver().resolve_all([b, a], max_passes=1)

        assert len(passes) == 1
        assert passes[0].pending == ["b"]
        assert a.position == P(1, 0)
        assert b.position == P(2, 0)
        assert not b.is_moving


class TestSettlePending:
    """Tests for committing bumps once the pass limit is reached."""

    def test_free_target_is_entered(self):
        bumped = actor("bumped", (1, 0), (2, 0))
        other = actor("other", (1, 0))

        assert settle_pending([bumped, other]) == ["bumped"]
        assert bumped.position == P(2, 0)
        assert other.position == P(1, 0)

    def test_blocked_target_keeps_landing_cell(self):
        bumped = actor("bumped", (1, 0), (2, 0))
        blocker = actor("blocker", (2, 0))

        assert settle_pending([bumped, blocker]) == []
        assert bumped.position == P(1, 0)
        assert bumped.pending_move == STAY
        assert blocker.position == P(2, 0)
