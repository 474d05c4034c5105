"""
controller.py — Controller layer.

Responsibilities:
  - Own the pygame event loop.
  - Sample pygame once per frame into a single InputSample.
  - Drive the Session with that sample and the elapsed frame time.
  - Apply the current volume setting to background music.
  - Hand the frame description to the View.

Music notes:
  - song.mp3 is optional and lives next to this file (snake_arcade/song.mp3).
  - If the file or the audio device is missing the game runs silently
    and logs a warning.

The controller is the only layer that reads pygame events.
"""

import logging
import os
import sys
from typing import Callable, Iterable, Optional

import pygame

from .config import WIDTH, HEIGHT, FPS, SAVE_PATH, STATE_OVER, TITLE_MENU
from .frames import describe
from .inputs import InputSample, Intent, PointerConfirm, PointerHover, TextInput
from .model import Direction
from .session import Session
from .storage import JsonFileStore, PersistenceStore
from .view import GameView

logger = logging.getLogger(__name__)

_MUSIC_PATH = os.path.join(os.path.dirname(__file__), "song.mp3")

KEY_INTENTS = {
    pygame.K_UP:        Intent.UP,
    pygame.K_w:         Intent.UP,
    pygame.K_DOWN:      Intent.DOWN,
    pygame.K_s:         Intent.DOWN,
    pygame.K_LEFT:      Intent.LEFT,
    pygame.K_a:         Intent.LEFT,
    pygame.K_RIGHT:     Intent.RIGHT,
    pygame.K_d:         Intent.RIGHT,
    pygame.K_RETURN:    Intent.CONFIRM,
    pygame.K_KP_ENTER:  Intent.CONFIRM,
    pygame.K_SPACE:     Intent.CONFIRM,
    pygame.K_ESCAPE:    Intent.BACK,
    pygame.K_p:         Intent.PAUSE,
    pygame.K_BACKSPACE: Intent.BACKSPACE,
}

# Keys that are plain characters while a name is being typed
TEXT_KEYS = {pygame.K_SPACE, pygame.K_p}

HELD_KEYS = {
    Direction.LEFT:  (pygame.K_LEFT,  pygame.K_a),
    Direction.RIGHT: (pygame.K_RIGHT, pygame.K_d),
    Direction.UP:    (pygame.K_UP,    pygame.K_w),
    Direction.DOWN:  (pygame.K_DOWN,  pygame.K_s),
}


def held_directions(pressed) -> frozenset:
    """Directions whose key is down; `pressed` is indexable by key code."""
    return frozenset(d for d, keys in HELD_KEYS.items() if any(pressed[k] for k in keys))


def translate_events(
    events: Iterable[pygame.event.Event],
    pressed,
    text_mode: bool = False,
    item_at: Callable[[tuple[int, int]], Optional[int]] = lambda pos: None,
) -> InputSample:
    """Turn one frame's pygame events into an InputSample."""
    out = []
    for event in events:
        if event.type == pygame.KEYDOWN:
            if text_mode and event.key in TEXT_KEYS:
                continue
            intent = KEY_INTENTS.get(event.key)
            if intent is not None:
                out.append(intent)
        elif event.type == pygame.TEXTINPUT:
            if text_mode:
                out.append(TextInput(event.text))
        elif event.type == pygame.MOUSEMOTION:
            idx = item_at(event.pos)
            if idx is not None:
                out.append(PointerHover(idx))
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            idx = item_at(event.pos)
            if idx is not None:
                out.append(PointerConfirm(idx))
    return InputSample(held=held_directions(pressed), events=tuple(out))


class GameController:
    """
    Owns the main loop.
    Glues Session <-> View without them knowing about each other.
    Also owns the pygame mixer so music lifecycle stays in one place.
    """

    def __init__(self, store: Optional[PersistenceStore] = None):
        pygame.init()
        self.screen  = pygame.display.set_mode((WIDTH, HEIGHT))
        pygame.display.set_caption(TITLE_MENU.title())
        self.clock   = pygame.time.Clock()
        self.store   = store or PersistenceStore(JsonFileStore(SAVE_PATH))
        self.session = Session(self.store)
        self.view    = GameView(self.screen)
        self._music_ok = self._load_music()
        self._applied_volume: Optional[float] = None

    # ── Public entry point ────────────────────────────────────────
    def run(self) -> None:
        """Start and run the game loop until the player quits."""
        self._play_music()
        while True:
            dt_ms = self.clock.tick(FPS)
            events = pygame.event.get()
            if any(e.type == pygame.QUIT for e in events):
                self._quit()
            sample = translate_events(
                events,
                pygame.key.get_pressed(),
                text_mode=self.session.state == STATE_OVER,
                item_at=self.view.item_at,
            )
            self.session.handle(sample, dt_ms)
            if self.session.quit_requested:
                self._quit()
            self._sync_volume()
            self.view.render(describe(self.session))

    # ── Music helpers ─────────────────────────────────────────────
    def _load_music(self) -> bool:
        """Load song.mp3. Returns True on success, False on any failure."""
        if not os.path.isfile(_MUSIC_PATH):
            logger.warning("song.mp3 not found at '%s'; running without music", _MUSIC_PATH)
            return False
        try:
            pygame.mixer.init()
            pygame.mixer.music.load(_MUSIC_PATH)
            return True
        except pygame.error as exc:
            logger.warning("Could not load song.mp3: %s", exc)
            return False

    def _play_music(self) -> None:
        if self._music_ok:
            pygame.mixer.music.play(loops=-1)   # -1 = loop forever

    def _sync_volume(self) -> None:
        volume = self.session.volume
        if self._music_ok and volume != self._applied_volume:
            pygame.mixer.music.set_volume(volume)
            self._applied_volume = volume

    # ── Utilities ─────────────────────────────────────────────────
    def _quit(self) -> None:
        if self._music_ok:
            pygame.mixer.music.stop()
        pygame.quit()
        sys.exit()
