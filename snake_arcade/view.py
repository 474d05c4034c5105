"""
view.py — View layer.

Draws a Frame (see frames.py) onto a pygame surface. Everything is
redrawn every frame; nothing is retained between calls except fonts,
the pre-rendered grid, and the button rectangles of the last menu
drawn (used by the controller for pointer hit-testing).

Public API:
    GameView(screen)     — bind to a pygame surface
    view.render(frame)   — draw one frame
    view.item_at(pos)    — index of the menu button under pos, or None
"""

from typing import Optional

import pygame

from .config import (
    WIDTH, HEIGHT, BLOCK,
    HEAD_COL, SEG_COL, FOOD_COL, BONUS_COL,
    BUTTON_COL, BUTTON_HOT, WHITE, HINT_COL, OVER_TITLE_COL, DIM_COL,
    PAUSE_SHADE, PAUSE_CARD, EMPTY_LEADERBOARD,
    STATE_MENU, STATE_SETTINGS, STATE_LEADERBOARD, STATE_PAUSED,
)
from .frames import Frame, GameOverFrame, MenuFrame, PlayfieldFrame

# (first button centre y, spacing, width, height) per menu-like mode
_BUTTON_LAYOUT = {
    STATE_MENU:        (230, 70, 280, 50),
    STATE_SETTINGS:    (220, 60, 360, 46),
    STATE_LEADERBOARD: (520, 0,  240, 50),
    STATE_PAUSED:      (HEIGHT // 2 - 20, 60, 260, 44),
}
_TITLE_Y = {
    STATE_MENU: 120, STATE_SETTINGS: 120, STATE_LEADERBOARD: 100, STATE_PAUSED: HEIGHT // 2 - 100,
}


def _with_alpha(color: tuple, alpha: int) -> tuple:
    return (*color[:3], max(0, min(255, alpha)))


# ─────────────────────────── GameView ────────────────────────────
class GameView:
    """Renders a Frame snapshot."""

    def __init__(self, screen: pygame.Surface):
        self.screen = screen
        self._buttons: list[pygame.Rect] = []
        self._init_fonts()
        self._build_static_surfaces()

    # ── Main entry ───────────────────────────────────────────────
    def render(self, frame: Frame) -> None:
        self.screen.fill(frame.background)
        self._buttons = []

        if frame.playfield is not None:
            self._draw_playfield(frame.playfield)
        if frame.mode == STATE_PAUSED:
            self._draw_pause_card()
        if frame.lines:
            self._draw_lines(frame.lines)
        if frame.menu is not None:
            self._draw_menu(frame.mode, frame.menu)
        if frame.game_over is not None:
            self._draw_game_over(frame.game_over)

        pygame.display.flip()

    def item_at(self, pos: tuple[int, int]) -> Optional[int]:
        for i, rect in enumerate(self._buttons):
            if rect.collidepoint(pos):
                return i
        return None

    # ── Static surface pre-builds ─────────────────────────────────
    def _build_static_surfaces(self) -> None:
        self._grid_surf = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        for x in range(0, WIDTH + 1, BLOCK):
            pygame.draw.line(self._grid_surf, (255, 255, 255, 10), (x, 0), (x, HEIGHT))
        for y in range(0, HEIGHT + 1, BLOCK):
            pygame.draw.line(self._grid_surf, (255, 255, 255, 10), (0, y), (WIDTH, y))

        self._shade_surf = pygame.Surface((WIDTH, HEIGHT), pygame.SRCALPHA)
        self._shade_surf.fill(PAUSE_SHADE)

    # ── Playfield ────────────────────────────────────────────────
    def _draw_playfield(self, pf: PlayfieldFrame) -> None:
        self.screen.blit(self._grid_surf, (0, 0))
        self._draw_item(pf.food, FOOD_COL)
        if pf.bonus is not None:
            self._draw_item(pf.bonus, BONUS_COL)
        for x, y in pf.segments:
            pygame.draw.rect(self.screen, SEG_COL, (x, y, BLOCK, BLOCK))
        hx, hy = pf.head
        pygame.draw.rect(self.screen, HEAD_COL, (hx, hy, BLOCK, BLOCK))

        self.screen.blit(
            self.font_med.render(f"Score: {pf.score}  High: {pf.high_score}", True, WHITE),
            (10, 10),
        )
        self.screen.blit(self.font_small.render(pf.hint, True, HINT_COL), (WIDTH - 230, 10))

    def _draw_item(self, pos: tuple[int, int], color: tuple) -> None:
        x, y = pos
        pygame.draw.circle(self.screen, color, (x + BLOCK // 2, y + BLOCK // 2), BLOCK * 3 // 8)

    # ── Menus ────────────────────────────────────────────────────
    def _draw_pause_card(self) -> None:
        self.screen.blit(self._shade_surf, (0, 0))
        card = pygame.Rect(0, 0, 420, 300)
        card.center = (WIDTH // 2, HEIGHT // 2)
        pygame.draw.rect(self.screen, PAUSE_CARD, card)
        pygame.draw.rect(self.screen, _with_alpha(WHITE, 40), card, 1)

    def _draw_menu(self, mode: str, menu: MenuFrame) -> None:
        self._draw_text_center(menu.title, _TITLE_Y[mode], self.font_title, WHITE)
        first_y, spacing, w, h = _BUTTON_LAYOUT[mode]
        for i, label in enumerate(menu.items):
            rect = pygame.Rect(0, 0, w, h)
            rect.center = (WIDTH // 2, first_y + i * spacing)
            self._draw_button(rect, label, i == menu.selected)
            self._buttons.append(rect)

    def _draw_button(self, rect: pygame.Rect, label: str, hot: bool) -> None:
        pygame.draw.rect(self.screen, BUTTON_HOT if hot else BUTTON_COL, rect)
        pygame.draw.rect(self.screen, (90, 96, 140), rect, 1)
        txt = self.font_med.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    def _draw_lines(self, lines: tuple[str, ...]) -> None:
        if lines == (EMPTY_LEADERBOARD,):
            self._draw_text_center(EMPTY_LEADERBOARD, 180, self.font_med, HINT_COL)
            return
        for i, line in enumerate(lines):
            self._draw_text_center(line, 170 + i * 48, self.font_med, WHITE)

    # ── Game over ────────────────────────────────────────────────
    def _draw_game_over(self, go: GameOverFrame) -> None:
        self._draw_text_center(go.title, 140, self.font_title, OVER_TITLE_COL)
        self._draw_text_center(f"Final Score: {go.score}", 200, self.font_big, WHITE)
        self._draw_text_center(f"High Score: {go.high_score}", 240, self.font_med, HINT_COL)

        box = pygame.Rect(0, 0, 300, 50)
        box.center = (WIDTH // 2, 320)
        pygame.draw.rect(self.screen, (51, 51, 85), box)
        pygame.draw.rect(self.screen, (110, 110, 130), box, 1)
        self._draw_text_center(go.name or go.placeholder, 320, self.font_med, WHITE)
        self._draw_text_center("Press Enter to submit", 400, self.font_small, DIM_COL)

    # ── Text helpers ─────────────────────────────────────────────
    def _draw_text_center(self, text: str, cy: int, font: pygame.font.Font, color: tuple) -> None:
        surf = font.render(text, True, color)
        self.screen.blit(surf, surf.get_rect(center=(WIDTH // 2, cy)))

    def _init_fonts(self) -> None:
        specs = [
            ("font_title", "jetbrainsmono,couriernew,courier", 44, True),
            ("font_big",   "jetbrainsmono,couriernew,courier", 22, True),
            ("font_med",   "jetbrainsmono,couriernew,courier", 18, False),
            ("font_small", "jetbrainsmono,couriernew,courier", 16, False),
        ]
        for attr, name, size, bold in specs:
            try:
                setattr(self, attr, pygame.font.SysFont(name, size, bold=bold))
            except Exception:
                setattr(self, attr, pygame.font.SysFont(None, size))
