from __future__ import annotations

import random
from collections import deque
from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Deque, Iterable, Optional, Tuple

import numpy as np

from .grid import GameGrid
from .pieces import Piece, PieceKind, box_size
from .rules import ScoringRules


class Command(IntEnum):
    NONE = 0
    MOVE_LEFT = 1
    MOVE_RIGHT = 2
    ROTATE_CW = 3
    SOFT_DROP = 4
    SHIFT_VIEW_LEFT = 5
    SHIFT_VIEW_RIGHT = 6
    SHIFT_VIEW_UP = 7
    SHIFT_VIEW_DOWN = 8


VIEW_COMMANDS = frozenset(
    {
        Command.SHIFT_VIEW_LEFT,
        Command.SHIFT_VIEW_RIGHT,
        Command.SHIFT_VIEW_UP,
        Command.SHIFT_VIEW_DOWN,
    }
)


class EngineStatus(Enum):
    RUNNING = "running"
    GAME_OVER = "game_over"


class Phase(Enum):
    FALLING = "falling"
    LOCKING = "locking"
    CLEARING = "clearing"
    GAME_OVER = "game_over"


@dataclass
class GameConfig:
    width: int = 10
    height: int = 20
    queue_length: int = 3
    random_seed: Optional[int] = None

    def __post_init__(self) -> None:
        if self.width < 4 or self.height < 4:
            raise ValueError(f"grid must be at least 4x4, got {self.width}x{self.height}")
        if self.queue_length < 1:
            raise ValueError(f"queue_length must be >= 1, got {self.queue_length}")


@dataclass(frozen=True)
class GameSnapshot:
    """Read-only view of the engine handed to renderers."""

    width: int
    height: int
    cells: np.ndarray
    score: int
    lines_cleared: int
    level: int
    next_kinds: Tuple[PieceKind, ...]
    status: EngineStatus

    @property
    def game_over(self) -> bool:
        return self.status is EngineStatus.GAME_OVER


class FallingBlocksGame:
    """Tick-driven falling block engine.

    One call to :meth:`handle_commands` and one call to :meth:`update` are
    expected per tick. The active piece is the source of truth for the
    falling shape; it is stamped onto the grid fresh every tick together
    with its shadow.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        rules: Optional[ScoringRules] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.config = config or GameConfig()
        self.rules = rules or ScoringRules()
        self.rng = rng or random.Random(self.config.random_seed)
        self.grid = GameGrid(self.config.width, self.config.height)
        self.next_kinds: Deque[PieceKind] = deque()
        self.current_piece: Optional[Piece] = None
        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.pieces_locked = 0
        self.ticks = 0
        self.soft_drop = False
        self.status = EngineStatus.RUNNING
        self.phase = Phase.FALLING
        self.reset()

    def reset(self, seed: Optional[int] = None) -> None:
        if seed is not None:
            self.rng.seed(seed)
        self.grid.reset()
        self.score = 0
        self.lines_cleared = 0
        self.level = 1
        self.pieces_locked = 0
        self.ticks = 0
        self.soft_drop = False
        self.status = EngineStatus.RUNNING
        self.current_piece = None
        self.next_kinds = deque(self._random_kind() for _ in range(self.config.queue_length))
        self.pick_current_piece()

    @property
    def game_over(self) -> bool:
        return self.status is EngineStatus.GAME_OVER

    # ------------------------------------------------------------------
    # piece supply

    def _random_kind(self) -> PieceKind:
        return self.rng.choice(list(PieceKind))

    def spawn_position(self, kind: PieceKind) -> Piece:
        piece = Piece(kind)
        x = (self.grid.width - box_size(kind)) // 2
        return piece.at(x, -piece.top_offset())

    def pick_current_piece(self) -> bool:
        """Dequeue the next kind and spawn it at the top of the board.

        Returns False and ends the game when the spawn cells are taken.
        """
        kind = self.next_kinds.popleft()
        self.next_kinds.append(self._random_kind())
        piece = self.spawn_position(kind)
        self.current_piece = piece
        self.soft_drop = False
        if not self.grid.spawn_is_free(piece):
            self.status = EngineStatus.GAME_OVER
            self.phase = Phase.GAME_OVER
            return False
        self.grid.place(piece)
        self.phase = Phase.FALLING
        return True

    # ------------------------------------------------------------------
    # movement

    def _require_piece(self) -> Piece:
        if self.current_piece is None:
            raise RuntimeError("no active piece")
        return self.current_piece

    def _try_replace(self, candidate: Piece) -> bool:
        piece = self._require_piece()
        self.grid.remove(piece)
        accepted = self.grid.can_place(candidate.cells())
        if accepted:
            self.current_piece = candidate
        self.grid.place(self.current_piece)
        return accepted

    def move_piece(self, dx: int, dy: int) -> bool:
        piece = self._require_piece()
        return self._try_replace(piece.moved(dx, dy))

    def rotate_piece(self, delta: int = 1) -> bool:
        # No wall kicks: a blocked rotation is simply rejected.
        piece = self._require_piece()
        return self._try_replace(piece.rotated(delta))

    def shadow_piece(self) -> Piece:
        """Project the active piece straight down to where it would land."""
        piece = self._require_piece()
        self.grid.remove(piece)
        shadow = piece
        while self.grid.can_place(shadow.moved(0, 1).cells()):
            shadow = shadow.moved(0, 1)
        self.grid.place(piece)
        return shadow

    def apply(self, command: Command) -> bool:
        if self.game_over or self.current_piece is None:
            return False
        if command == Command.MOVE_LEFT:
            return self.move_piece(-1, 0)
        if command == Command.MOVE_RIGHT:
            return self.move_piece(1, 0)
        if command == Command.ROTATE_CW:
            return self.rotate_piece(1)
        if command == Command.SOFT_DROP:
            self.soft_drop = True
            return True
        # View panning and NONE do not touch the board
        return False

    def handle_commands(self, commands: Iterable[Command]) -> None:
        for command in commands:
            self.apply(command)

    # ------------------------------------------------------------------
    # tick

    def step_delay(self) -> int:
        return self.rules.step_delay(self.level, self.soft_drop)

    def update(self, tick: Optional[int] = None) -> None:
        if self.game_over:
            return
        if tick is None:
            tick = self.ticks
        self.ticks = tick + 1
        self._require_piece()

        self.grid.clear_shadows()
        falling = True
        # tick 0 never moves, so a fresh session does not drop immediately
        if tick != 0 and tick % self.step_delay() == 0:
            falling = self.move_piece(0, 1)

        if falling:
            self.phase = Phase.FALLING
            shadow = self.shadow_piece()
            self.grid.remove(self.current_piece)
            self.grid.place(shadow, as_shadow=True)
            self.grid.place(self.current_piece)
        else:
            self.lock_piece()
            self.clear_full_rows()
            self.pick_current_piece()

        self.level = self.rules.level_for_score(self.score)

    def lock_piece(self) -> None:
        """Write the active piece permanently into the grid and award the lock points."""
        piece = self._require_piece()
        self.phase = Phase.LOCKING
        self.grid.place(piece)
        self.score += self.rules.lock_points
        self.pieces_locked += 1
        self.current_piece = None

    def clear_full_rows(self) -> int:
        """Remove every full row, shifting the rows above it down by one.

        Rows are scanned top to bottom; each removal copies rows upward of
        the full row down one at a time and empties row 0.
        """
        self.phase = Phase.CLEARING
        cleared = 0
        for y in range(self.grid.height):
            if not self.grid.is_row_full(y):
                continue
            self.score += self.rules.points_for_row(self.grid.width)
            self.lines_cleared += 1
            cleared += 1
            for y2 in range(y - 1, -1, -1):
                self.grid.copy_row_down(y2)
            self.grid.clear_row(0)
        return cleared

    # ------------------------------------------------------------------
    # views

    def snapshot(self) -> GameSnapshot:
        cells = self.grid.clone_state()
        cells.setflags(write=False)
        return GameSnapshot(
            width=self.grid.width,
            height=self.grid.height,
            cells=cells,
            score=self.score,
            lines_cleared=self.lines_cleared,
            level=self.level,
            next_kinds=tuple(self.next_kinds),
            status=self.status,
        )

    def locked_board(self) -> GameGrid:
        """Copy of the grid holding only locked cells (no falling piece, no shadow)."""
        board = self.grid.copy()
        board.clear_shadows()
        # a blocked spawn is never stamped, so there is nothing to lift off
        if self.current_piece is not None and not self.game_over:
            board.remove(self.current_piece)
        return board

    def get_stats(self) -> dict:
        board = self.locked_board()
        return {
            "score": self.score,
            "lines_cleared": self.lines_cleared,
            "level": self.level,
            "pieces_locked": self.pieces_locked,
            "ticks": self.ticks,
            "max_height": board.get_max_height(),
            "holes": board.count_holes(),
            "game_over": self.game_over,
        }
