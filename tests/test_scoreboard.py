"""
Tests for scoreboard.py and the driver's game-over wiring.
"""

from datetime import datetime, timezone

import pytest

from snakegame.config import EngineConfig
from snakegame.scoreboard import GameRecord, ScoreBoard


class TestScoreBoard:

    def test_unknown_player_defaults(self):
        board = ScoreBoard()
        assert board.high_score("nobody") == 0
        assert board.total_games("nobody") == 0
        assert board.game_history("nobody") == []

    def test_record_updates_high_score_and_count(self):
        board = ScoreBoard()
        board.record_game("alice", 30, 12)
        board.record_game("alice", 10, 4)
        assert board.high_score("alice") == 30
        assert board.total_games("alice") == 2

    def test_history_newest_first_with_limit(self):
        board = ScoreBoard()
        for score in range(0, 80, 10):
            board.record_game("alice", score, 1)
        history = board.game_history("alice")
        assert [r.score for r in history] == [70, 60, 50, 40, 30]
        assert len(board.game_history("alice", limit=100)) == 8

    def test_history_capped(self):
        board = ScoreBoard(history_limit=3)
        for score in range(5):
            board.record_game("bob", score, 1)
        assert [r.score for r in board.game_history("bob", limit=10)] == [4, 3, 2]
        assert board.total_games("bob") == 5

    def test_played_at(self):
        board = ScoreBoard()
        when = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)
        record = board.record_game("alice", 20, 7, played_at=when)
        assert record == GameRecord(score=20, duration_s=7, played_at=when)
        assert board.record_game("alice", 0, 0).played_at.tzinfo is not None

    def test_guest_records_nothing(self):
        board = ScoreBoard()
        assert board.record_game(None, 500, 60) is None
        assert board.high_score(None) == 0
        assert board.game_history(None) == []

    def test_players_are_separate(self):
        board = ScoreBoard()
        board.record_game("alice", 30, 1)
        board.record_game("bob", 50, 1)
        assert board.high_score("alice") == 30
        assert board.high_score("bob") == 50

    def test_invalid_limit(self):
        with pytest.raises(ValueError):
            ScoreBoard(history_limit=0)


class TestAppGameOver:
    """The pygame driver records finished games and shows the result."""

    def test_records_named_player(self):
        from snakegame.main import App
        app = App(EngineConfig(), 20, "alice")
        app.on_game_over(40, 9)
        assert app.scores.high_score("alice") == 40
        assert app.overlay[0] == "Game over"
        assert "40" in app.overlay[1]

    def test_guest_not_recorded(self):
        from snakegame.main import App
        app = App(EngineConfig(), 20, None)
        app.on_game_over(40, 9)
        assert app.scores.high_score(None) == 0
        assert app.overlay[0] == "Game over"

    def test_history_lines_list_recent_games(self):
        from snakegame.main import App
        app = App(EngineConfig(), 20, "alice")
        assert app.history_lines() == []
        for score, duration in [(10, 3), (40, 9), (20, 5)]:
            app.on_game_over(score, duration)
        lines = app.history_lines()
        assert lines[0] == "Recent games:"
        assert [line.split("  ")[0] for line in lines[1:]] == [
            "20 pts in 5s", "40 pts in 9s", "10 pts in 3s",
        ]

    def test_history_lines_show_five_newest(self):
        from snakegame.main import App
        app = App(EngineConfig(), 20, "alice")
        for score in range(0, 80, 10):
            app.on_game_over(score, 1)
        lines = app.history_lines()
        assert len(lines) == 6
        assert lines[1].startswith("70 pts")

    def test_guest_has_no_history_lines(self):
        from snakegame.main import App
        app = App(EngineConfig(), 20, None)
        app.on_game_over(40, 9)
        assert app.history_lines() == []
