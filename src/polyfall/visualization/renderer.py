from __future__ import annotations

from typing import Optional, Tuple

import pygame

from polyfall.game import GameState

GAME_OVER = "GAME OVER"

BACKGROUND = (0, 0, 0)
GUIDE = (80, 80, 80)
SCORE = (80, 80, 80)
BANNER = (230, 41, 55)
BUTTON = (80, 80, 80)
BUTTON_TEXT = (200, 200, 200)


def hsl_color(hue: float, saturation: float, lightness: float) -> pygame.Color:
    color = pygame.Color(0, 0, 0)
    color.hsla = (hue * 360.0 % 360.0, saturation * 100.0, lightness * 100.0, 100.0)
    return color


class Renderer:
    def __init__(self, cell_size: int = 32, guide_every: int = 4) -> None:
        self.cell_size = cell_size
        self.guide_every = guide_every

    def board_size(self, game: GameState) -> Tuple[int, int]:
        return game.width * self.cell_size, game.height * self.cell_size

    def _draw_guides(self, screen: pygame.Surface, game: GameState) -> None:
        _, height = self.board_size(game)
        for column in range(self.guide_every, game.width, self.guide_every):
            x = column * self.cell_size
            pygame.draw.line(screen, GUIDE, (x, 0), (x, height), 1)

    def _draw_cell(self, screen: pygame.Surface, x: int, y: int, color: pygame.Color) -> None:
        rect = pygame.Rect(x * self.cell_size, y * self.cell_size, self.cell_size, self.cell_size)
        pygame.draw.rect(screen, color, rect)

    def draw_score(self, screen: pygame.Surface, game: GameState, font: pygame.font.Font) -> None:
        img = font.render(str(game.rows_cleared), True, SCORE)
        rect = img.get_rect(center=(screen.get_width() // 2, screen.get_height() // 2))
        screen.blit(img, rect)

    def draw(self, screen: pygame.Surface, game: GameState, font: Optional[pygame.font.Font] = None) -> None:
        screen.fill(BACKGROUND)
        self._draw_guides(screen, game)
        if font is not None:
            self.draw_score(screen, game, font)
        for cell, x, y in game.cells():
            self._draw_cell(screen, x, y, hsl_color(cell.hue, 0.5, 0.3))
        if game.active_piece is None:
            return
        for cell, x, y in game.active_cells():
            self._draw_cell(screen, x, y, hsl_color(cell.hue, 1.0, 0.5))
        # anchor marker
        cx = int((game.anchor[0] + 0.5) * self.cell_size)
        cy = int((game.anchor[1] + 0.5) * self.cell_size)
        pygame.draw.circle(screen, (0, 0, 0), (cx, cy), 8)
        pygame.draw.circle(screen, (255, 255, 255), (cx, cy), 4)

    def draw_game_over(self, screen: pygame.Surface, game: GameState, score_font: pygame.font.Font,
                       banner_font: pygame.font.Font,
                       button_font: pygame.font.Font) -> Tuple[pygame.Rect, pygame.Rect]:
        """Draw the counter, the banner and the Restart/Quit buttons on a blank screen.

        Returns the button rects.
        """
        screen.fill(BACKGROUND)
        self.draw_score(screen, game, score_font)
        width = screen.get_width()
        banner = banner_font.render(GAME_OVER, True, BANNER)
        screen.blit(banner, banner.get_rect(midtop=(width // 2, 0)))

        padding = 4
        bar_top = banner.get_height()
        bar_height = banner_font.get_height()
        button_w = width // 2 - padding * 2
        button_h = bar_height - padding * 2
        restart = pygame.Rect(padding, bar_top + padding, button_w, button_h)
        quit_ = pygame.Rect(width // 2 + padding, bar_top + padding, button_w, button_h)
        for rect, label in ((restart, "Restart"), (quit_, "Quit")):
            pygame.draw.rect(screen, BUTTON, rect)
            img = button_font.render(label, True, BUTTON_TEXT)
            screen.blit(img, img.get_rect(center=rect.center))
        return restart, quit_
