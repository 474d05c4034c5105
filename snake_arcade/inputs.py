"""
inputs.py — What the core consumes each frame.

The controller samples pygame once per frame and hands the session a
single InputSample: the directional keys currently held (for steering)
plus the discrete events that happened since the last frame, in order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from .model import Direction


class Intent(Enum):
    UP        = "up"
    DOWN      = "down"
    LEFT      = "left"
    RIGHT     = "right"
    CONFIRM   = "confirm"
    BACK      = "back"
    PAUSE     = "pause"
    BACKSPACE = "backspace"


@dataclass(frozen=True)
class TextInput:
    char: str


@dataclass(frozen=True)
class PointerHover:
    index: int


@dataclass(frozen=True)
class PointerConfirm:
    index: int


InputEvent = Union[Intent, TextInput, PointerHover, PointerConfirm]


@dataclass(frozen=True)
class InputSample:
    held: frozenset = frozenset()                    # Directions held down
    events: tuple[InputEvent, ...] = field(default_factory=tuple)

    @classmethod
    def of(cls, *events: InputEvent, held=()) -> "InputSample":
        return cls(held=frozenset(held), events=tuple(events))


INTENT_DIRECTIONS = {
    Intent.UP:    Direction.UP,
    Intent.DOWN:  Direction.DOWN,
    Intent.LEFT:  Direction.LEFT,
    Intent.RIGHT: Direction.RIGHT,
}
