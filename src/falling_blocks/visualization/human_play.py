from __future__ import annotations

import argparse
from typing import List, Optional

import pygame

from falling_blocks.game import VIEW_COMMANDS, FallingBlocksGame, GameConfig, KeyRepeatFilter
from .renderer import Renderer, Viewport


WATCHED_KEYS = (
    pygame.K_LEFT,
    pygame.K_RIGHT,
    pygame.K_UP,
    pygame.K_DOWN,
    pygame.K_SPACE,
    pygame.K_RETURN,
    pygame.K_a,
    pygame.K_d,
    pygame.K_w,
    pygame.K_s,
)


def held_keys() -> List[str]:
    pressed = pygame.key.get_pressed()
    return [pygame.key.name(k) for k in WATCHED_KEYS if pressed[k]]


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play Falling Blocks with the keyboard")
    p.add_argument("--fps", type=int, default=20)
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--cell-size", type=int, default=28)
    return p


def run(fps: int = 20, seed: Optional[int] = None, cell_size: int = 28) -> None:
    pygame.init()
    try:
        clock = pygame.time.Clock()
        game = FallingBlocksGame(GameConfig(random_seed=seed))
        keys = KeyRepeatFilter()
        renderer = Renderer(cell_size=cell_size)

        content = renderer.content_size(game.grid.width, game.grid.height)
        window = (content[0] + cell_size * 4, content[1] + cell_size * 2)
        screen = pygame.display.set_mode(window)
        pygame.display.set_caption("Falling Blocks")
        viewport = Viewport(window, content, step=cell_size)

        tick = 0
        running = True
        while running:
            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    if event.key in (pygame.K_ESCAPE, pygame.K_q):
                        running = False
                    elif event.key == pygame.K_r and game.game_over:
                        game.reset()
                        keys.reset()
                        tick = 0

            commands = keys.commands(held_keys())
            for command in commands:
                if command in VIEW_COMMANDS:
                    viewport.shift(command)
            game.handle_commands(commands)
            game.update(tick)
            renderer.draw(screen, game.snapshot(), viewport)

            tick += 1
            clock.tick(fps)
    finally:
        pygame.quit()
    print(f"Final score: {game.score}  lines: {game.lines_cleared}  level: {game.level}")


def main() -> None:
    args = build_parser().parse_args()
    run(fps=args.fps, seed=args.seed, cell_size=args.cell_size)


if __name__ == "__main__":  # pragma: no cover
    main()
