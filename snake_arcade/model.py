"""
model.py — Simulation layer.

Owns the grid state of a single run and its rules. Zero rendering,
zero input handling, zero persistence: the session feeds it settings
and elapsed time, and reads the outcome back.

Classes:
    Direction       — immutable (dx, dy) value object
    Snake           — head-first body of pixel positions
    RunEnded        — terminal event carrying the final score
    GameSimulation  — snake, food, bonus, score; advanced step by step
"""

import random
from collections import deque
from dataclasses import dataclass
from typing import Iterable, Optional

from .config import (
    WIDTH, HEIGHT, BLOCK, ORIGIN,
    DIFFICULTIES, MIN_STEP_MS,
    FOOD_POINTS, BONUS_POINTS, BONUS_ODDS, BONUS_HIT,
)

Point = tuple[int, int]


# ─────────────────────────── Direction ───────────────────────────
class Direction:
    """Immutable 2-D unit direction."""
    LEFT  = None  # filled below after class definition
    RIGHT = None
    UP    = None
    DOWN  = None

    def __init__(self, name: str, x: int, y: int):
        self.name = name
        self.x = x
        self.y = y

    def is_opposite(self, other: "Direction") -> bool:
        return self.x == -other.x and self.y == -other.y

    def __eq__(self, other):
        return isinstance(other, Direction) and self.x == other.x and self.y == other.y

    def __hash__(self):
        return hash((self.x, self.y))

    def __repr__(self):
        return f"Direction.{self.name}"


Direction.LEFT  = Direction("LEFT",  -1,  0)
Direction.RIGHT = Direction("RIGHT",  1,  0)
Direction.UP    = Direction("UP",     0, -1)
Direction.DOWN  = Direction("DOWN",   0,  1)

# First held key in this order wins when several are down at once
STEER_ORDER = (Direction.LEFT, Direction.RIGHT, Direction.UP, Direction.DOWN)


def resolve_direction(current: Direction, held: Iterable[Direction]) -> Optional[Direction]:
    """Pick the steering direction from the held keys, never the reverse of `current`."""
    held = set(held)
    for d in STEER_ORDER:
        if d in held and not d.is_opposite(current):
            return d
    return None


# ──────────────────────────── Snake ──────────────────────────────
class Snake:
    """
    Pure body data. Index 0 is the head; the rest trails behind it
    as the history of earlier head positions.
    """

    def __init__(self, start: Point):
        self.body: deque[Point] = deque([start])

    @property
    def head(self) -> Point:
        return self.body[0]

    def __len__(self) -> int:
        return len(self.body)

    def push_head(self, pos: Point) -> None:
        self.body.appendleft(pos)

    def pop_tail(self) -> Point:
        return self.body.pop()

    def occupies(self, pos: Point) -> bool:
        return pos in self.body

    def hits_itself(self) -> bool:
        head = self.head
        return any(seg == head for i, seg in enumerate(self.body) if i > 0)


# ────────────────────────── Run outcome ──────────────────────────
@dataclass(frozen=True)
class RunEnded:
    score: int
    reason: str          # "wall" or "self"


# ───────────────────────── GameSimulation ────────────────────────
class GameSimulation:
    """
    One run of the game. The session calls update() once per frame
    while playing; a discrete step happens each time the accumulated
    time reaches step_ms.  After the run ends the object is inert.
    """

    def __init__(
        self,
        difficulty: str = "Normal",
        wrap: bool = False,
        rng: Optional[random.Random] = None,
        width: int = WIDTH,
        height: int = HEIGHT,
        block: int = BLOCK,
        origin: Point = ORIGIN,
    ):
        if difficulty not in DIFFICULTIES:
            raise ValueError(f"Unknown difficulty: {difficulty!r}")
        tuning = DIFFICULTIES[difficulty]
        self.difficulty = difficulty
        self.wrap = wrap
        self.multiplier: int = tuning["multiplier"]
        self.step_ms: float = max(MIN_STEP_MS, 1000 / tuning["speed"])
        self.rng = rng or random.Random()
        self.width = width
        self.height = height
        self.block = block

        self.snake = Snake(origin)
        self.direction: Direction = Direction.RIGHT
        self.score: int = 0
        self.elapsed_ms: float = 0.0
        self.bonus: Optional[Point] = None
        self.food: Point = self._spawn()
        self.ended: Optional[RunEnded] = None
        self._pending: Optional[Direction] = None
        self._held: frozenset = frozenset()

    @classmethod
    def from_settings(cls, settings, rng: Optional[random.Random] = None) -> "GameSimulation":
        return cls(difficulty=settings.difficulty, wrap=settings.wrap, rng=rng)

    # ── Public API ───────────────────────────────────────────────
    @property
    def running(self) -> bool:
        return self.ended is None

    def request_direction(self, new_dir: Direction) -> None:
        """Queue a turn for the next step (dropped there if it would reverse the snake)."""
        self._pending = new_dir

    def update(self, dt_ms: float, held: Iterable[Direction] = ()) -> Optional[RunEnded]:
        """
        Advance by dt_ms of real time. `held` is the set of directional
        keys down this frame. Returns the RunEnded event on the step
        that ends the run, otherwise None.
        """
        if not self.running:
            return None
        self._held = frozenset(held)
        self.elapsed_ms += dt_ms
        if self.elapsed_ms < self.step_ms:
            return None
        self.elapsed_ms = 0.0   # excess is dropped, not carried
        return self.step()

    def step(self) -> Optional[RunEnded]:
        """One discrete grid step."""
        if not self.running:
            return None

        self.direction = self._next_direction()
        hx, hy = self.snake.head
        nx = hx + self.direction.x * self.block
        ny = hy + self.direction.y * self.block
        if self.wrap:
            nx, ny = nx % self.width, ny % self.height
        head = (nx, ny)
        self.snake.push_head(head)

        if head == self.food:
            self.score += FOOD_POINTS * self.multiplier
            self.food = self._spawn()
            if self.rng.randint(1, BONUS_ODDS) == BONUS_HIT:
                self.bonus = self._spawn(avoid=(self.food,))
        elif head == self.bonus:
            # the old tail stays in place as the extra segment
            self.score += BONUS_POINTS * self.multiplier
            self.bonus = None
        else:
            self.snake.pop_tail()

        if not self.wrap and not self.in_bounds(head):
            self.ended = RunEnded(self.score, "wall")
        elif self.snake.hits_itself():
            self.ended = RunEnded(self.score, "self")
        return self.ended

    def in_bounds(self, pos: Point) -> bool:
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def snapshot(self) -> tuple:
        """Hashable copy of everything a step reads or writes."""
        return (
            tuple(self.snake.body), self.food, self.bonus,
            self.score, self.direction, self.elapsed_ms, self.ended,
        )

    # ── Private helpers ──────────────────────────────────────────
    def _next_direction(self) -> Direction:
        held = resolve_direction(self.direction, self._held)
        pending, self._pending = self._pending, None
        if held is not None:
            return held
        if pending is not None and not pending.is_opposite(self.direction):
            return pending
        return self.direction

    def _spawn(self, avoid: Iterable[Point] = ()) -> Point:
        cols, rows = self.width // self.block, self.height // self.block
        avoid = set(avoid)
        occupied = set(self.snake.body) | avoid
        free = cols * rows - sum(1 for p in occupied if self.in_bounds(p))
        if free <= 0:
            raise RuntimeError("No free cell left to spawn on")
        while True:
            pos = (self.rng.randrange(cols) * self.block, self.rng.randrange(rows) * self.block)
            if not self.snake.occupies(pos) and pos not in avoid:
                return pos
