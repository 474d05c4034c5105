"""
main.py — Entry point.

Run with:
    python main.py

Requires:
    pip install pygame

Environment:
    SNAKE_ARCADE_SAVE       path of the save file (default ~/.snake_arcade/save.json)
    SNAKE_ARCADE_LOG_LEVEL  logging level (default INFO)
"""

import logging

from snake_arcade.config import LOG_LEVEL
from snake_arcade.controller import GameController


def main() -> None:
    logging.basicConfig(
        level=getattr(logging, LOG_LEVEL, logging.INFO),
        format="%(levelname)s:%(name)s:%(message)s",
    )
    GameController().run()


if __name__ == "__main__":
    main()
