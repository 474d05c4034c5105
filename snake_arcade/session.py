"""
session.py — Session state machine.

Six modes (main menu, settings, leaderboard, playing, paused, game over),
each a small record of the data that mode owns.  Session.handle() takes
one InputSample per frame, routes every event to the handler of the
current mode, and replaces the mode with whatever the handler returns.
The simulation only ever advances inside Playing.

Persistence happens at three points only: leaving Settings, a run
ending with a beaten high score, and submitting a leaderboard name.
"""

import logging
import random
from dataclasses import dataclass, field
from typing import Optional

from .config import (
    DIFFICULTY_ORDER, VOLUME_STEP, MAX_NAME_LEN,
    MENU_ITEMS, SETTINGS_ROWS, LEADERBOARD_ITEMS, PAUSE_ITEMS,
    STATE_MENU, STATE_SETTINGS, STATE_LEADERBOARD,
    STATE_PLAYING, STATE_PAUSED, STATE_OVER,
)
from .inputs import (
    INTENT_DIRECTIONS, InputEvent, InputSample, Intent,
    PointerConfirm, PointerHover, TextInput,
)
from .model import GameSimulation, RunEnded
from .storage import LeaderboardEntry, PersistenceStore, Settings

logger = logging.getLogger(__name__)


# ──────────────────────────── Modes ──────────────────────────────
@dataclass
class MainMenu:
    selected: int = 0
    name = STATE_MENU


@dataclass
class SettingsMenu:
    settings: Settings
    selected: int = 0
    name = STATE_SETTINGS


@dataclass
class LeaderboardView:
    entries: list[LeaderboardEntry] = field(default_factory=list)
    selected: int = 0
    name = STATE_LEADERBOARD


@dataclass
class Playing:
    sim: GameSimulation
    high_score: int
    name = STATE_PLAYING


@dataclass
class Paused:
    sim: GameSimulation
    high_score: int
    selected: int = 0
    name = STATE_PAUSED


@dataclass
class GameOver:
    score: int
    high_score: int
    player_name: str = ""
    name = STATE_OVER


def navigate(mode, count: int, event: InputEvent) -> Optional[int]:
    """
    Shared selection handling for menu-like modes.
    Moves mode.selected in place; returns the index to activate, if any.
    """
    if event is Intent.DOWN:
        mode.selected = (mode.selected + 1) % count
    elif event is Intent.UP:
        mode.selected = (mode.selected - 1 + count) % count
    elif event is Intent.CONFIRM:
        return mode.selected
    elif isinstance(event, PointerHover):
        if 0 <= event.index < count:
            mode.selected = event.index
    elif isinstance(event, PointerConfirm):
        if 0 <= event.index < count:
            mode.selected = event.index
            return event.index
    return None


# ─────────────────────────── Session ─────────────────────────────
class Session:
    """Owns the current mode. Driven by the controller, never by callbacks."""

    def __init__(self, store: PersistenceStore, rng: Optional[random.Random] = None):
        self.store = store
        self.rng = rng
        self.mode = MainMenu()
        self.quit_requested: bool = False
        self._volume: float = store.load_settings().volume
        self._handlers = {
            MainMenu:        self._on_menu,
            SettingsMenu:    self._on_settings,
            LeaderboardView: self._on_leaderboard,
            Playing:         self._on_playing,
            Paused:          self._on_paused,
            GameOver:        self._on_over,
        }

    # ── Public API ───────────────────────────────────────────────
    @property
    def state(self) -> str:
        return self.mode.name

    @property
    def volume(self) -> float:
        """Volume to apply now, including unsaved edits on the settings screen."""
        if isinstance(self.mode, SettingsMenu):
            return self.mode.settings.volume
        return self._volume

    def handle(self, sample: InputSample, dt_ms: float = 0.0) -> None:
        """Process one frame: dispatch events in order, then tick a live run."""
        frame_mode = self.mode
        for event in sample.events:
            if self.quit_requested:
                return
            self.dispatch(event)

        if isinstance(self.mode, Playing) and self.mode is frame_mode:
            ended = self.mode.sim.update(dt_ms, sample.held)
            if ended is not None:
                self._end_run(ended)

    def dispatch(self, event: InputEvent) -> None:
        handler = self._handlers[type(self.mode)]
        self._set_mode(handler(self.mode, event))

    # ── Per-mode handlers ────────────────────────────────────────
    def _on_menu(self, mode: MainMenu, event: InputEvent):
        choice = navigate(mode, len(MENU_ITEMS), event)
        if choice == 0:
            return self._start_run()
        if choice == 1:
            return SettingsMenu(self.store.load_settings())
        if choice == 2:
            return LeaderboardView(self.store.load_leaderboard())
        if choice == 3:
            self._quit()
        return mode

    def _on_settings(self, mode: SettingsMenu, event: InputEvent):
        if event is Intent.BACK:
            return self._leave_settings(mode)
        choice = navigate(mode, SETTINGS_ROWS, event)
        s = mode.settings
        if choice == 0:
            idx = DIFFICULTY_ORDER.index(s.difficulty)
            s.difficulty = DIFFICULTY_ORDER[(idx + 1) % len(DIFFICULTY_ORDER)]
        elif choice == 1:
            s.volume = round(max(0.0, min(1.0, s.volume + VOLUME_STEP)), 2)
        elif choice == 2:
            s.wrap = not s.wrap
        elif choice == 3:
            return self._leave_settings(mode)
        return mode

    def _on_leaderboard(self, mode: LeaderboardView, event: InputEvent):
        if event is Intent.BACK:
            return MainMenu()
        if navigate(mode, len(LEADERBOARD_ITEMS), event) is not None:
            return MainMenu()
        return mode

    def _on_playing(self, mode: Playing, event: InputEvent):
        if event in (Intent.PAUSE, Intent.BACK):
            return Paused(mode.sim, mode.high_score)
        if event in INTENT_DIRECTIONS:
            mode.sim.request_direction(INTENT_DIRECTIONS[event])
        return mode

    def _on_paused(self, mode: Paused, event: InputEvent):
        if event in (Intent.PAUSE, Intent.BACK):
            return Playing(mode.sim, mode.high_score)
        choice = navigate(mode, len(PAUSE_ITEMS), event)
        if choice == 0:
            return Playing(mode.sim, mode.high_score)
        if choice == 1:
            logger.info("Run abandoned at score %d", mode.sim.score)
            return MainMenu()
        if choice == 2:
            self._quit()
        return mode

    def _on_over(self, mode: GameOver, event: InputEvent):
        if event is Intent.BACKSPACE:
            mode.player_name = mode.player_name[:-1]
        elif event is Intent.CONFIRM:
            name = mode.player_name.strip()
            if name:
                self.store.submit_score(name, mode.score)
                return MainMenu()
        elif isinstance(event, TextInput):
            for ch in event.char:
                if ch.isprintable() and len(mode.player_name) < MAX_NAME_LEN:
                    mode.player_name += ch
        return mode

    # ── Transitions with side effects ────────────────────────────
    def _start_run(self) -> Playing:
        settings = self.store.load_settings()
        sim = GameSimulation.from_settings(settings, rng=self.rng)
        logger.info("Run started: difficulty=%s wrap=%s", settings.difficulty, settings.wrap)
        return Playing(sim, self.store.load_high_score())

    def _end_run(self, ended: RunEnded) -> None:
        high = self.mode.high_score
        logger.info("Run ended (%s) with score %d", ended.reason, ended.score)
        if ended.score > high:
            high = ended.score
            self.store.save_high_score(high)
            logger.info("New high score: %d", high)
        self._set_mode(GameOver(ended.score, high))

    def _leave_settings(self, mode: SettingsMenu) -> MainMenu:
        self.store.save_settings(mode.settings)
        self._volume = mode.settings.volume
        return MainMenu()

    def _quit(self) -> None:
        logger.info("Quit requested")
        self.quit_requested = True

    def _set_mode(self, mode) -> None:
        if mode is not self.mode:
            logger.debug("Session: %s -> %s", self.mode.name, mode.name)
        self.mode = mode
