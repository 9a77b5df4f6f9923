"""
Tests for board snapshots.

Tests:
- Restored boards reproduce legal moves
- JSON payload validation
- Restoring a session at the next turn boundary
"""

import pytest
from pydantic import ValidationError

from ..config import GameConfig
from ..engine_core.grid import GridPosition
from ..engine_core.snapshot import ActorSnapshot, BoardSnapshot, TileSnapshot
from ..engine_core.state import Actor, HUMAN_ID, Moving, STAY, TileStability, TurnPhase
from ..session import GameSession


P = GridPosition


def all_legal_moves(platform, registry):
    """Legal moves of every actor under every inclusion flag combination."""
    result = {}
    occupied = registry.occupied_positions()
    for actor in registry.all_actors():
        for include_unstable in (False, True):
            for include_occupied in (False, True):
                key = (actor.actor_id, include_unstable, include_occupied)
                result[key] = platform.legal_moves(
                    actor.position, include_unstable, include_occupied, occupied,
                )
    return result


class TestSnapshotRoundTrip:

    def test_restored_board_has_same_legal_moves(self, seeded_session):
        session = seeded_session
        session.advance()

        snapshot = session.snapshot()
        restored = BoardSnapshot.model_validate_json(snapshot.model_dump_json())
        platform = restored.to_platform()
        registry = restored.to_registry()

        assert all_legal_moves(platform, registry) == all_legal_moves(snapshot.to_platform(), snapshot.to_registry())
        assert platform.unstable_positions() == session.unstable_positions()
        assert registry.human.position == session.human_position()
        assert {b.actor_id: b.position for b in registry.live_bots} == session.live_bot_positions()
        assert platform.legal_moves(
            registry.human.position, include_unstable=True, include_occupied=True,
        ) == session.legal_moves_for_human()
        assert restored.turn_counter == session.turn_counter
        assert restored.phase == TurnPhase.MOVE_SELECTION

    def test_actor_fields_survive(self):
        actor = Actor(actor_id="bot_3", position=P(2, 4), pending_move=Moving(P(2, 5)), eliminated=True)
        restored = ActorSnapshot.model_validate_json(
            ActorSnapshot.from_actor(actor).model_dump_json()
        ).to_actor()
        assert restored == actor

    def test_tile_stability_serialized_by_value(self):
        snapshot = TileSnapshot.model_validate({"position": {"x": 1, "y": 2}, "stability": "unstable"})
        tile = snapshot.to_tile()
        assert tile.position == P(1, 2)
        assert tile.stability == TileStability.UNSTABLE

    def test_invalid_stability_rejected(self):
        with pytest.raises(ValidationError):
            TileSnapshot.model_validate({"position": {"x": 0, "y": 0}, "stability": "wobbly"})

    def test_snapshot_requires_one_human(self, seeded_session):
        snapshot = seeded_session.snapshot()
        snapshot.actors = [a for a in snapshot.actors if a.is_bot]
        with pytest.raises(ValueError):
            snapshot.to_registry()


class TestSessionRestore:

    def test_restore_resumes_at_next_turn(self, seeded_session):
        seeded_session.advance()
        snapshot = seeded_session.snapshot()

        restored = GameSession.from_snapshot(snapshot, GameConfig(seed=1))

        assert restored.current_phase == TurnPhase.TURN_INIT
        assert restored.turn_counter == seeded_session.turn_counter
        assert restored.live_bot_positions() == seeded_session.live_bot_positions()
        assert restored.pending_move(HUMAN_ID) == STAY
        assert all(restored.pending_move(bot_id) == STAY for bot_id in restored.live_bot_positions())

        restored.advance()
        assert restored.turn_counter == seeded_session.turn_counter + 1
        assert restored.current_phase == TurnPhase.MOVE_SELECTION
