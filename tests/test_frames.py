"""Tests for the per-frame render descriptions."""

from snake_arcade.frames import describe, leaderboard_lines, settings_labels
from snake_arcade.inputs import InputSample, Intent, PointerConfirm, TextInput
from snake_arcade.storage import LeaderboardEntry, Settings


def press(session, *events, dt_ms=0.0):
    session.handle(InputSample.of(*events), dt_ms)


class TestMenuFrames:
    """Menu-like modes describe their items and selection."""

    def test_main_menu(self, session):
        press(session, Intent.DOWN)
        frame = describe(session)
        assert frame.mode == "menu"
        assert frame.menu.items == ("Start Game", "Settings", "Leaderboard", "Quit")
        assert frame.menu.selected == 1
        assert frame.playfield is None

    def test_settings_labels(self):
        assert settings_labels(Settings("Hard", 0.3, True)) == (
            "Difficulty: Hard", "Volume: 30%", "Wall Wrap: ON", "Back",
        )

    def test_settings_frame_tracks_edits(self, session):
        press(session, PointerConfirm(1), PointerConfirm(2))
        frame = describe(session)
        assert frame.menu.items[2] == "Wall Wrap: ON"
        assert frame.menu.selected == 2

    def test_empty_leaderboard(self):
        assert leaderboard_lines([]) == ("No scores yet.",)

    def test_leaderboard_rows(self, session, store):
        store.submit_score("ann", 9)
        store.submit_score("bo", 12)
        press(session, PointerConfirm(2))
        frame = describe(session)
        assert frame.lines == (
            "1. bo — 12 (2024-03-09 14:05:30)",
            "2. ann — 9 (2024-03-09 14:05:30)",
        )
        assert frame.menu.items == ("Back",)

    def test_leaderboard_lines_numbering(self):
        rows = leaderboard_lines([LeaderboardEntry("x", 1, "t")])
        assert rows == ("1. x — 1 (t)",)


class TestPlayFrames:
    """Playfield, pause overlay and game over."""

    def test_playfield(self, session, store):
        store.save_high_score(21)
        press(session, PointerConfirm(0))
        sim = session.mode.sim
        sim.snake.body.extend([(80, 100), (60, 100)])
        sim.bonus = (300, 300)
        sim.score = 4
        pf = describe(session).playfield
        assert pf.head == (100, 100)
        assert pf.segments == ((80, 100), (60, 100))
        assert pf.food == sim.food
        assert pf.bonus == (300, 300)
        assert (pf.score, pf.high_score) == (4, 21)
        assert pf.hint == "Press ESC to pause"

    def test_paused_has_playfield_and_menu(self, session):
        press(session, PointerConfirm(0), Intent.PAUSE)
        frame = describe(session)
        assert frame.mode == "paused"
        assert frame.playfield is not None
        assert frame.menu.items == ("Resume", "Main Menu", "Quit")

    def test_game_over(self, session):
        press(session, PointerConfirm(0))
        sim = session.mode.sim
        sim.snake.body[0] = (780, 100)
        sim.food = (0, 0)
        press(session, dt_ms=sim.step_ms)
        frame = describe(session)
        assert frame.mode == "over"
        assert frame.game_over.name == ""
        assert frame.game_over.placeholder == "Enter your name..."
        press(session, TextInput("ed"))
        assert describe(session).game_over.name == "ed"
