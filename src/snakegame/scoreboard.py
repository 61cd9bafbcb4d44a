# scoreboard.py
"""
Session scoreboard: high scores and a short history of finished games,
kept per player for the lifetime of the process.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 20


@dataclass(frozen=True)
class GameRecord:
    score: int
    duration_s: int
    played_at: datetime


@dataclass
class PlayerScores:
    high_score: int = 0
    total_games: int = 0
    history: List[GameRecord] = field(default_factory=list)  # newest first


class ScoreBoard:
    """
    Per-player high score, game count and recent games.

    A player of None is a guest: guests can play, but nothing is recorded
    and their high score always reads 0.
    """

    def __init__(self, history_limit: int = HISTORY_LIMIT):
        if history_limit < 1:
            raise ValueError("history_limit must be at least 1")
        self.history_limit = history_limit
        self._players: Dict[str, PlayerScores] = {}

    def record_game(
        self,
        player: Optional[str],
        score: int,
        duration_s: int,
        played_at: Optional[datetime] = None,
    ) -> Optional[GameRecord]:
        if player is None:
            return None

        entry = self._players.setdefault(player, PlayerScores())
        record = GameRecord(
            score=score,
            duration_s=duration_s,
            played_at=played_at or datetime.now(timezone.utc),
        )

        if score > entry.high_score:
            logger.info("New high score for %s: %d (was %d)", player, score, entry.high_score)
            entry.high_score = score
        entry.total_games += 1
        entry.history.insert(0, record)
        del entry.history[self.history_limit:]
        return record

    def high_score(self, player: Optional[str]) -> int:
        if player is None or player not in self._players:
            return 0
        return self._players[player].high_score

    def total_games(self, player: Optional[str]) -> int:
        if player is None or player not in self._players:
            return 0
        return self._players[player].total_games

    def game_history(self, player: Optional[str], limit: int = 5) -> List[GameRecord]:
        if player is None or player not in self._players:
            return []
        return self._players[player].history[:limit]
