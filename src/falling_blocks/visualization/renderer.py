from __future__ import annotations

from typing import Tuple

import pygame

from falling_blocks.game import Command, GameSnapshot, Piece, PieceKind, SHADOW


def color_for_value(v: int) -> Tuple[int, int, int]:
    palette = {
        0: (20, 20, 26),
        SHADOW: (70, 70, 80),
        PieceKind.I: (0, 240, 240),
        PieceKind.J: (0, 0, 240),
        PieceKind.L: (255, 135, 0),
        PieceKind.O: (240, 240, 0),
        PieceKind.S: (0, 240, 0),
        PieceKind.T: (200, 0, 200),
        PieceKind.Z: (240, 0, 0),
    }
    return palette.get(int(v), (200, 200, 200))


class Viewport:
    """Pixel offset of the board inside the window, panned by view commands."""

    def __init__(self, window_size: Tuple[int, int], content_size: Tuple[int, int], step: int) -> None:
        self.window_w, self.window_h = window_size
        self.content_w, self.content_h = content_size
        self.step = step
        self.x = max(0, (self.window_w - self.content_w) // 2)
        self.y = max(0, (self.window_h - self.content_h) // 2)

    def shift(self, command: Command) -> None:
        dx, dy = {
            Command.SHIFT_VIEW_LEFT: (-self.step, 0),
            Command.SHIFT_VIEW_RIGHT: (self.step, 0),
            Command.SHIFT_VIEW_UP: (0, -self.step),
            Command.SHIFT_VIEW_DOWN: (0, self.step),
        }.get(command, (0, 0))
        self.x = min(max(0, self.x + dx), max(0, self.window_w - self.content_w))
        self.y = min(max(0, self.y + dy), max(0, self.window_h - self.content_h))

    @property
    def origin(self) -> Tuple[int, int]:
        return self.x, self.y


class Renderer:
    def __init__(self, cell_size: int = 30, panel_cells: int = 7) -> None:
        self.cell_size = cell_size
        self.panel_cells = panel_cells
        self._font = None

    def content_size(self, width: int, height: int) -> Tuple[int, int]:
        return (width + self.panel_cells + 1) * self.cell_size, (height + 1) * self.cell_size

    def _font_obj(self) -> pygame.font.Font:
        if self._font is None:
            self._font = pygame.font.SysFont(None, max(18, self.cell_size - 6))
        return self._font

    def _grid_surface(self, snapshot: GameSnapshot) -> pygame.Surface:
        h, w = snapshot.cells.shape
        surf = pygame.Surface((w * self.cell_size, h * self.cell_size))
        surf.fill((30, 30, 36))
        for y in range(h):
            for x in range(w):
                v = int(snapshot.cells[y, x])
                rect = pygame.Rect(
                    x * self.cell_size,
                    y * self.cell_size,
                    self.cell_size - 1,
                    self.cell_size - 1,
                )
                pygame.draw.rect(surf, color_for_value(v), rect)
        return surf

    def _draw_panel(self, screen: pygame.Surface, snapshot: GameSnapshot, x0: int, y0: int) -> None:
        font = self._font_obj()
        line_h = font.get_linesize()
        y = y0
        for text in (
            f"lines: {snapshot.lines_cleared}",
            f"score: {snapshot.score}",
            f"level: {snapshot.level}",
            "next pieces:",
        ):
            screen.blit(font.render(text, True, (230, 230, 230)), (x0, y))
            y += line_h + 4
        cell = self.cell_size // 2
        for kind in snapshot.next_kinds:
            piece = Piece(kind)
            top = piece.top_offset()
            for dx, dy in piece.offsets():
                rect = pygame.Rect(x0 + dx * cell, y + (dy - top) * cell, cell - 1, cell - 1)
                pygame.draw.rect(screen, color_for_value(kind), rect)
            y += (piece.bottom_offset() - top + 2) * cell

    def draw(self, screen: pygame.Surface, snapshot: GameSnapshot, viewport: Viewport) -> None:
        ox, oy = viewport.origin
        screen.fill((10, 10, 14))
        grid_surf = self._grid_surface(snapshot)
        screen.blit(grid_surf, (ox, oy))
        border = pygame.Rect(ox - 2, oy - 2, grid_surf.get_width() + 4, grid_surf.get_height() + 4)
        pygame.draw.rect(screen, (230, 230, 230), border, 1)
        self._draw_panel(screen, snapshot, ox + grid_surf.get_width() + self.cell_size, oy)
        if snapshot.game_over:
            font = self._font_obj()
            text = font.render("Game Over - R to restart, ESC to quit", True, (255, 255, 255))
            rect = text.get_rect(center=(ox + grid_surf.get_width() // 2, oy + grid_surf.get_height() // 2))
            screen.blit(text, rect)
        pygame.display.flip()
