"""
Tests for game setup.

Tests:
- Draw pool composition
- Queue / bag split
- Seed determinism
- Config overrides
"""

from collections import Counter

import pytest

from ..engine_core.state import EMPTY, GameConfig, InProgress, NextIds, Player
from ..game.setup import POOL_COMPOSITION, build_ordered_pool, new_game


class TestDrawPool:

    def test_pool_composition(self):
        pool = build_ordered_pool()

        assert len(pool) == 36
        assert Counter(pool) == {1: 8, 2: 10, 3: 10, 4: 8}
        assert sum(POOL_COMPOSITION.values()) == 36

    def test_queue_and_bag_partition_pool(self):
        state = new_game(seed=42)

        assert len(state.queue) == 8
        assert len(state.bag) == 28
        assert Counter(state.queue + state.bag) == Counter(build_ordered_pool())


class TestNewGame:

    def test_initial_state(self):
        state = new_game(seed=7)

        assert state.version == 0
        assert state.turn == 1
        assert state.seed == 7
        assert state.active_player == Player.BLUE
        assert state.scores == {Player.BLUE: 0, Player.RED: 0}
        assert state.next_ids == NextIds(tile=1, wall=1)
        assert state.last_placement_by is None
        assert state.status == InProgress()
        assert state.cards.enabled
        assert len(state.board) == 6
        assert all(cell == EMPTY for row in state.board for cell in row)

    def test_starting_player(self):
        assert new_game(seed=1, starting_player=Player.RED).active_player == Player.RED

    def test_same_seed_same_game(self):
        assert new_game(seed=123) == new_game(seed=123)

    def test_different_seeds_differ(self):
        assert new_game(seed=1).queue + new_game(seed=1).bag != new_game(seed=2).queue + new_game(seed=2).bag


class TestConfig:

    def test_overrides_merge_with_defaults(self):
        state = new_game(seed=1, config={"board_size": 4, "cards_enabled": False})

        assert state.config == GameConfig(board_size=4, cards_enabled=False)
        assert len(state.board) == 4
        assert all(len(row) == 4 for row in state.board)
        assert not state.cards.enabled

    def test_overrides_not_mutated(self):
        overrides = {"queue_size": 3}

        state = new_game(seed=1, config=overrides)

        assert overrides == {"queue_size": 3}
        assert len(state.queue) == 3
        assert len(state.bag) == 33

    def test_queue_size_capped_by_pool(self):
        state = new_game(seed=1, config={"queue_size": 50})

        assert len(state.queue) == 36
        assert state.bag == ()

    def test_full_config_used_as_is(self):
        config = GameConfig(mercy_lead=3)
        assert new_game(seed=1, config=config).config is config

    def test_unknown_override_rejected(self):
        with pytest.raises(ValueError, match="board_sise"):
            new_game(seed=1, config={"board_sise": 8})
