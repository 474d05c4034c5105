"""
config.py — Shared constants for the entire application.
No logic beyond reading the environment, no imports from internal modules.
"""

import os
from pathlib import Path

# ── Window & Grid ─────────────────────────────────────────────────
WIDTH, HEIGHT   = 800, 600
BLOCK           = 20
COLS            = WIDTH // BLOCK
ROWS            = HEIGHT // BLOCK
FPS             = 60
ORIGIN          = (100, 100)     # pixel position of the first segment

# ── Colors ────────────────────────────────────────────────────────
MENU_BG         = (20,  26,  51)
SETTINGS_BG     = (15,  26,  47)
LEADERBOARD_BG  = (26,  20,  48)
GAME_BG         = (30,  42,  72)
OVER_BG         = (32,  12,  20)
HEAD_COL        = (42,  245, 152)
SEG_COL         = (0,   170, 85)
FOOD_COL        = (255, 59,  71)
BONUS_COL       = (255, 213, 74)
BUTTON_COL      = (60,  68,  120)
BUTTON_HOT      = (115, 129, 255)
WHITE           = (255, 255, 255)
HINT_COL        = (203, 209, 255)
OVER_TITLE_COL  = (255, 80,  80)
DIM_COL         = (170, 170, 170)
PAUSE_SHADE     = (0,   0,   0,   115)
PAUSE_CARD      = (13,  18,  48)

# ── Gameplay ──────────────────────────────────────────────────────
MIN_STEP_MS     = 50
FOOD_POINTS     = 1
BONUS_POINTS    = 10
BONUS_ODDS      = 12             # one bonus per BONUS_ODDS foods, on average
BONUS_HIT       = 5              # the draw in [1, BONUS_ODDS] that spawns a bonus
MAX_NAME_LEN    = 12
LEADERBOARD_SIZE = 5
VOLUME_STEP     = 0.1

DIFFICULTIES = {
    "Easy":   {"speed": 7,  "multiplier": 1},
    "Normal": {"speed": 10, "multiplier": 1},
    "Hard":   {"speed": 13, "multiplier": 2},
}
DIFFICULTY_ORDER = ("Easy", "Normal", "Hard")

# ── Persistence ───────────────────────────────────────────────────
KEY_SETTINGS    = "snake_settings_v1"
KEY_HIGH        = "snake_highscore_v1"
KEY_LEADERBOARD = "snake_leaderboard_v1"

DEFAULT_DIFFICULTY = "Normal"
DEFAULT_VOLUME     = 0.7
DEFAULT_WRAP       = False

SAVE_PATH = Path(
    os.environ.get("SNAKE_ARCADE_SAVE", Path.home() / ".snake_arcade" / "save.json")
).expanduser()
LOG_LEVEL = os.environ.get("SNAKE_ARCADE_LOG_LEVEL", "INFO").upper()

# ── Session States ────────────────────────────────────────────────
STATE_MENU        = "menu"
STATE_SETTINGS    = "settings"
STATE_LEADERBOARD = "leaderboard"
STATE_PLAYING     = "playing"
STATE_PAUSED      = "paused"
STATE_OVER        = "over"

# ── Menu Items ────────────────────────────────────────────────────
MENU_ITEMS        = ("Start Game", "Settings", "Leaderboard", "Quit")
SETTINGS_ROWS     = 4            # difficulty, volume, wrap, back
LEADERBOARD_ITEMS = ("Back",)
PAUSE_ITEMS       = ("Resume", "Main Menu", "Quit")

TITLE_MENU        = "SNAKE ARCADE"
TITLE_SETTINGS    = "SETTINGS"
TITLE_LEADERBOARD = "LEADERBOARD (Top 5)"
TITLE_PAUSED      = "PAUSED"
TITLE_OVER        = "GAME OVER"
PAUSE_HINT        = "Press ESC to pause"
NAME_PLACEHOLDER  = "Enter your name..."
EMPTY_LEADERBOARD = "No scores yet."
