"""
frames.py — What the core produces each frame.

describe(session) builds a plain, immutable description of the screen
for the current mode. The view redraws it from scratch; nothing here
knows about pygame.
"""

from dataclasses import dataclass
from typing import Optional

from .config import (
    MENU_BG, SETTINGS_BG, LEADERBOARD_BG, GAME_BG, OVER_BG,
    MENU_ITEMS, LEADERBOARD_ITEMS, PAUSE_ITEMS,
    TITLE_MENU, TITLE_SETTINGS, TITLE_LEADERBOARD, TITLE_PAUSED, TITLE_OVER,
    PAUSE_HINT, NAME_PLACEHOLDER, EMPTY_LEADERBOARD,
)
from .model import GameSimulation, Point
from .session import (
    GameOver, LeaderboardView, MainMenu, Paused, Playing, Session, SettingsMenu,
)
from .storage import LeaderboardEntry, Settings


@dataclass(frozen=True)
class MenuFrame:
    title: str
    items: tuple[str, ...]
    selected: int


@dataclass(frozen=True)
class PlayfieldFrame:
    head: Point
    segments: tuple[Point, ...]      # body without the head
    food: Point
    bonus: Optional[Point]
    score: int
    high_score: int
    hint: str = PAUSE_HINT


@dataclass(frozen=True)
class GameOverFrame:
    title: str
    score: int
    high_score: int
    name: str
    placeholder: str = NAME_PLACEHOLDER


@dataclass(frozen=True)
class Frame:
    mode: str
    background: tuple
    menu: Optional[MenuFrame] = None
    playfield: Optional[PlayfieldFrame] = None
    game_over: Optional[GameOverFrame] = None
    lines: tuple[str, ...] = ()      # leaderboard rows


def settings_labels(s: Settings) -> tuple[str, ...]:
    return (
        f"Difficulty: {s.difficulty}",
        f"Volume: {round(s.volume * 100)}%",
        f"Wall Wrap: {'ON' if s.wrap else 'OFF'}",
        "Back",
    )


def leaderboard_lines(entries: list[LeaderboardEntry]) -> tuple[str, ...]:
    if not entries:
        return (EMPTY_LEADERBOARD,)
    return tuple(
        f"{i}. {e.name} — {e.score} ({e.time})"
        for i, e in enumerate(entries, start=1)
    )


def _playfield(sim: GameSimulation, high_score: int) -> PlayfieldFrame:
    body = tuple(sim.snake.body)
    return PlayfieldFrame(
        head=body[0],
        segments=body[1:],
        food=sim.food,
        bonus=sim.bonus,
        score=sim.score,
        high_score=high_score,
    )


def describe(session: Session) -> Frame:
    mode = session.mode
    if isinstance(mode, MainMenu):
        return Frame(mode.name, MENU_BG,
                     menu=MenuFrame(TITLE_MENU, MENU_ITEMS, mode.selected))
    if isinstance(mode, SettingsMenu):
        return Frame(mode.name, SETTINGS_BG,
                     menu=MenuFrame(TITLE_SETTINGS, settings_labels(mode.settings), mode.selected))
    if isinstance(mode, LeaderboardView):
        return Frame(mode.name, LEADERBOARD_BG,
                     menu=MenuFrame(TITLE_LEADERBOARD, LEADERBOARD_ITEMS, mode.selected),
                     lines=leaderboard_lines(mode.entries))
    if isinstance(mode, Playing):
        return Frame(mode.name, GAME_BG, playfield=_playfield(mode.sim, mode.high_score))
    if isinstance(mode, Paused):
        return Frame(mode.name, GAME_BG,
                     playfield=_playfield(mode.sim, mode.high_score),
                     menu=MenuFrame(TITLE_PAUSED, PAUSE_ITEMS, mode.selected))
    if isinstance(mode, GameOver):
        return Frame(mode.name, OVER_BG,
                     game_over=GameOverFrame(TITLE_OVER, mode.score, mode.high_score, mode.player_name))
    raise TypeError(f"No frame for mode {mode!r}")
