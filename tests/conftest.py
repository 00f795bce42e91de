from __future__ import annotations

import pytest

from falling_blocks.game import FallingBlocksGame, GameConfig


@pytest.fixture
def game() -> FallingBlocksGame:
    return FallingBlocksGame(GameConfig(random_seed=1234))


@pytest.fixture
def empty_game(game: FallingBlocksGame) -> FallingBlocksGame:
    """A seeded game whose board is empty and has no stamped active piece."""
    game.grid.reset()
    return game
