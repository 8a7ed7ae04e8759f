from __future__ import annotations

import argparse
import logging
from typing import Dict, List, Optional

import pygame

from polyfall.game import Action, DropTimer, GameConfig, GameState, HostConfig
from .renderer import Renderer

logger = logging.getLogger(__name__)

KEY_TO_ACTION: Dict[int, Action] = {
    pygame.K_UP: Action.ROTATE_CCW,
    pygame.K_DOWN: Action.ROTATE_CW,
    pygame.K_LEFT: Action.LEFT,
    pygame.K_RIGHT: Action.RIGHT,
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Play PolyFall with the keyboard")
    p.add_argument("--width", type=int, default=8, help="Board width in cells")
    p.add_argument("--height", type=int, default=24, help="Board height in cells")
    p.add_argument("--cell-size", type=int, default=32, help="Cell side length in pixels")
    p.add_argument("--seed", type=int, default=None)
    p.add_argument("--log-level", type=str, default="INFO")
    return p


def setup_logger(level: str = "INFO") -> None:
    log_format = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
    logging.basicConfig(level=level.upper(), format=log_format)


def first_action(events: List[pygame.event.Event]) -> Optional[Action]:
    """Only one rotate/shift input is applied per frame."""
    for event in events:
        if event.type == pygame.KEYDOWN and event.key in KEY_TO_ACTION:
            return KEY_TO_ACTION[event.key]
    return None


def run(config: Optional[GameConfig] = None, host: Optional[HostConfig] = None) -> None:
    config = config or GameConfig()
    host = host or HostConfig()
    pygame.init()
    try:
        game = GameState.from_config(config)
        renderer = Renderer(cell_size=host.cell_size_px, guide_every=host.guide_every)
        timer = DropTimer.from_config(host)

        screen = pygame.display.set_mode(renderer.board_size(game))
        pygame.display.set_caption("PolyFall")
        score_font = pygame.font.SysFont(None, host.cell_size_px * 2)
        banner_font = pygame.font.SysFont(None, 48)
        button_font = pygame.font.SysFont(None, 24)
        clock = pygame.time.Clock()

        running = True
        while running:
            events = pygame.event.get()
            for event in events:
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                    running = False

            if not game.alive:
                restart, quit_ = renderer.draw_game_over(screen, game, score_font, banner_font, button_font)
                for event in events:
                    if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                        if restart.collidepoint(event.pos):
                            game.reset()
                            timer.relax()
                        elif quit_.collidepoint(event.pos):
                            running = False
                pygame.display.flip()
                clock.tick(host.fps)
                continue

            # Input
            for event in events:
                if event.type == pygame.KEYDOWN and event.key == pygame.K_SPACE:
                    timer.hasten()
                elif event.type == pygame.KEYUP and event.key == pygame.K_SPACE:
                    timer.relax()
            action = first_action(events)
            if action is not None:
                game.apply(action)

            # Gravity
            if timer.tick() and not game.try_drop():
                # Something landed or spawned; slow down so the player can see it.
                timer.relax()

            renderer.draw(screen, game, score_font)
            pygame.display.flip()
            clock.tick(host.fps)
        logger.info("session ended with %d cleared row(s)", game.rows_cleared)
    finally:
        pygame.quit()


def main() -> None:
    args = build_parser().parse_args()
    setup_logger(args.log_level)
    config = GameConfig(width=args.width, height=args.height, random_seed=args.seed)
    host = HostConfig(cell_size_px=args.cell_size)
    run(config, host)


if __name__ == "__main__":  # pragma: no cover
    main()
