"""Game module for Falling Blocks.

Exports the tick-driven engine and supporting classes:
- GameGrid: Board cells, placement and row operations
- Piece: Immutable tetromino value with SRS orientations
- PieceKind: Enum of the seven tetrominoes
- ScoringRules: Lock/row points and level/speed progression
- FallingBlocksGame: Gravity, locking, line clears and piece supply
- KeyRepeatFilter: Held keys to per-tick commands
"""

from .grid import GameGrid, EMPTY, SHADOW, cell_kind
from .pieces import Piece, PieceKind, shape_offsets, box_size
from .rules import ScoringRules
from .core import (
    Command,
    EngineStatus,
    FallingBlocksGame,
    GameConfig,
    GameSnapshot,
    Phase,
    VIEW_COMMANDS,
)
from .controls import KeyRepeatFilter

__all__ = [
    "GameGrid",
    "EMPTY",
    "SHADOW",
    "cell_kind",
    "Piece",
    "PieceKind",
    "shape_offsets",
    "box_size",
    "ScoringRules",
    "Command",
    "EngineStatus",
    "FallingBlocksGame",
    "GameConfig",
    "GameSnapshot",
    "Phase",
    "VIEW_COMMANDS",
    "KeyRepeatFilter",
]
