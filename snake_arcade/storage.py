"""
storage.py — Persistence layer.

Settings, high score and the top-5 leaderboard live in three string
records of a key-value backend, the same way a browser keeps them in
local storage.  Every read is total: whatever bytes are stored, the
caller gets a usable value back and the damage is only logged.

Classes:
    Settings          — difficulty / volume / wrap, mutable
    LeaderboardEntry  — one submitted score
    MemoryStore       — in-process backend (tests)
    JsonFileStore     — backend persisted as one JSON object on disk
    PersistenceStore  — typed load/save operations over a backend
"""

import json
import logging
from collections.abc import MutableMapping
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Callable, Iterator, Optional

from .config import (
    DEFAULT_DIFFICULTY, DEFAULT_VOLUME, DEFAULT_WRAP, DIFFICULTIES,
    KEY_HIGH, KEY_LEADERBOARD, KEY_SETTINGS,
    LEADERBOARD_SIZE, MAX_NAME_LEN,
)

logger = logging.getLogger(__name__)

TIME_FORMAT = "%Y-%m-%d %H:%M:%S"


# ─────────────────────────── Records ─────────────────────────────
@dataclass
class Settings:
    difficulty: str = DEFAULT_DIFFICULTY
    volume: float = DEFAULT_VOLUME
    wrap: bool = DEFAULT_WRAP


@dataclass(frozen=True)
class LeaderboardEntry:
    name: str
    score: int
    time: str


# ─────────────────────────── Backends ────────────────────────────
class MemoryStore(dict):
    """Plain dict backend; nothing survives the process."""


class JsonFileStore(MutableMapping):
    """
    String key-value store kept as a single JSON object in `path`.
    A missing or unreadable file reads as an empty store.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._data: dict[str, str] = self._read()

    def _read(self) -> dict[str, str]:
        try:
            raw = self.path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Could not read save file %s: %s", self.path, exc)
            return {}
        try:
            data = json.loads(raw)
        except (ValueError, RecursionError):
            logger.warning("Save file %s is not valid JSON; starting fresh", self.path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Save file %s has unexpected layout; starting fresh", self.path)
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _flush(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(self._data, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.error("Failed to write save file %s: %s", self.path, exc, exc_info=True)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value
        self._flush()

    def __delitem__(self, key: str) -> None:
        del self._data[key]
        self._flush()

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)


# ─────────────────────── Validation helpers ──────────────────────
def _decode_json(raw: Optional[str], key: str):
    if raw is None:
        return None
    try:
        return json.loads(raw)
    except (TypeError, ValueError, RecursionError):
        logger.warning("Stored record %r is corrupt; using defaults", key)
        return None


def _settings_from(data) -> Settings:
    settings = Settings()
    if not isinstance(data, dict):
        if data is not None:
            logger.warning("Stored settings are not an object; using defaults")
        return settings

    difficulty = data.get("difficulty", settings.difficulty)
    if isinstance(difficulty, str) and difficulty in DIFFICULTIES:
        settings.difficulty = difficulty
    else:
        logger.warning("Ignoring stored difficulty %r", difficulty)

    volume = data.get("volume", settings.volume)
    if isinstance(volume, (int, float)) and not isinstance(volume, bool) and volume == volume:
        settings.volume = max(0.0, min(1.0, float(volume)))
    else:
        logger.warning("Ignoring stored volume %r", volume)

    wrap = data.get("wrap", settings.wrap)
    if isinstance(wrap, bool):
        settings.wrap = wrap
    else:
        logger.warning("Ignoring stored wrap flag %r", wrap)
    return settings


def _entry_from(item) -> Optional[LeaderboardEntry]:
    if not isinstance(item, dict):
        return None
    name, score, time = item.get("name"), item.get("score"), item.get("time", "")
    if not isinstance(name, str) or not isinstance(time, str):
        return None
    if not isinstance(score, int) or isinstance(score, bool):
        return None
    return LeaderboardEntry(name=name[:MAX_NAME_LEN], score=score, time=time)


def _rank(entries: list[LeaderboardEntry]) -> list[LeaderboardEntry]:
    # sorted() is stable: on equal scores the earlier submission stays ahead
    return sorted(entries, key=lambda e: e.score, reverse=True)[:LEADERBOARD_SIZE]


# ─────────────────────── PersistenceStore ────────────────────────
class PersistenceStore:
    """
    Typed access to the three persisted records.
    The session is the only caller; reads never raise.
    """

    def __init__(
        self,
        backend: MutableMapping,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.backend = backend
        self._clock = clock

    # ── Settings ─────────────────────────────────────────────────
    def load_settings(self) -> Settings:
        return _settings_from(_decode_json(self.backend.get(KEY_SETTINGS), KEY_SETTINGS))

    def save_settings(self, settings: Settings) -> None:
        self.backend[KEY_SETTINGS] = json.dumps(asdict(settings))
        logger.debug("Saved settings %s", settings)

    # ── High score ───────────────────────────────────────────────
    def load_high_score(self) -> int:
        raw = self.backend.get(KEY_HIGH)
        if raw is None:
            return 0
        try:
            value = int(str(raw).strip())
        except ValueError:
            logger.warning("Stored high score %r is corrupt; using 0", raw)
            return 0
        return max(0, value)

    def save_high_score(self, value: int) -> None:
        self.backend[KEY_HIGH] = str(max(0, int(value)))

    # ── Leaderboard ──────────────────────────────────────────────
    def load_leaderboard(self) -> list[LeaderboardEntry]:
        data = _decode_json(self.backend.get(KEY_LEADERBOARD), KEY_LEADERBOARD)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Stored leaderboard is not a list; using an empty one")
            return []
        entries = [e for e in map(_entry_from, data) if e is not None]
        if len(entries) != len(data):
            logger.warning("Dropped %d malformed leaderboard entries", len(data) - len(entries))
        return _rank(entries)

    def submit_score(self, name: str, score: int) -> list[LeaderboardEntry]:
        """Record a finished run; returns the leaderboard as persisted."""
        entries = self.load_leaderboard()
        entries.append(LeaderboardEntry(
            name=name[:MAX_NAME_LEN],
            score=int(score),
            time=self._clock().strftime(TIME_FORMAT),
        ))
        entries = _rank(entries)
        self.backend[KEY_LEADERBOARD] = json.dumps([asdict(e) for e in entries])
        logger.info("Leaderboard submission: %r scored %d", name, score)
        return entries
