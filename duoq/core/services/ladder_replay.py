"""Ladder replay - re-score a duo's history in chronological order.

Streaks are threaded from one game to the next, so games must be applied
oldest first. Short-circuited games (remakes, < 5 min) award zero points
and leave streaks, wins and losses untouched.
"""

from collections.abc import Iterable
from datetime import datetime

import structlog
from pydantic import Field

from duoq.contracts.common import BaseContract
from duoq.contracts.game import GameData
from duoq.core.scoring.engine import compute_game_score
from duoq.core.scoring.models import ScoreBreakdown
from duoq.core.scoring.streaks import next_streak

logger = structlog.get_logger(__name__)


class StreakRecord(BaseContract):
    """Signed current streak plus the longest runs seen."""

    current: int = 0
    longest_win: int = Field(0, ge=0)
    longest_loss: int = Field(0, ge=0)

    def advance(self, win: bool) -> "StreakRecord":
        current = next_streak(win, self.current)
        return StreakRecord(
            current=current,
            longest_win=max(self.longest_win, current),
            longest_loss=max(self.longest_loss, -current),
        )


class LadderStanding(BaseContract):
    """Cumulative ladder state for one duo."""

    total_points: int = 0
    noob_points: int = 0
    carry_points: int = 0
    games_played: int = 0
    wins: int = 0
    losses: int = 0
    noob_streak: StreakRecord = StreakRecord()
    carry_streak: StreakRecord = StreakRecord()
    last_game_at: datetime | None = None


class ScoredGame(BaseContract):
    game: GameData
    breakdown: ScoreBreakdown


class ReplayResult(BaseContract):
    games: tuple[ScoredGame, ...] = ()
    standing: LadderStanding = LadderStanding()


def apply_score(standing: LadderStanding, game: GameData, breakdown: ScoreBreakdown) -> LadderStanding:
    """Fold one scored game into a standing and return the new standing."""
    update: dict[str, object] = {
        "total_points": standing.total_points + breakdown.total,
        "noob_points": standing.noob_points + breakdown.noob.final,
        "carry_points": standing.carry_points + breakdown.carry.final,
        "games_played": standing.games_played + 1,
        "last_game_at": game.started_at or standing.last_game_at,
    }

    if not breakdown.is_remake_or_early_game:
        update.update(
            wins=standing.wins + int(game.win),
            losses=standing.losses + int(not game.win),
            noob_streak=standing.noob_streak.advance(game.win),
            carry_streak=standing.carry_streak.advance(game.win),
        )

    return standing.model_copy(update=update)


def replay_games(games: Iterable[GameData], start: LadderStanding | None = None) -> ReplayResult:
    """Score ``games`` oldest first, threading streaks through every call.

    Games without ``started_at`` keep their relative input order and are
    applied after dated ones.
    """
    indexed = list(enumerate(games))
    indexed.sort(key=lambda item: (item[1].started_at is None, item[1].started_at or datetime.min, item[0]))

    standing = start or LadderStanding()
    scored: list[ScoredGame] = []

    for _, game in indexed:
        breakdown = compute_game_score(game, standing.noob_streak.current, standing.carry_streak.current)
        standing = apply_score(standing, game, breakdown)
        scored.append(ScoredGame(game=game, breakdown=breakdown))

    logger.info(
        "ladder_replayed",
        games=len(scored),
        total_points=standing.total_points,
        wins=standing.wins,
        losses=standing.losses,
    )
    return ReplayResult(games=tuple(scored), standing=standing)
