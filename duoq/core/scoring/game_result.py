"""Game result scoring.

Priority (first match wins): remake > surrender loss > fast win > win > loss.
A surrendered *win* falls through to the win rules; that combination only
comes from malformed upstream data and is kept as-is here.
"""

from typing import Final

from duoq.core.scoring.models import GameOutcome, GameResultScore

FAST_WIN_SECONDS: Final[int] = 1200  # 20:00

RESULT_POINTS: Final[dict[GameOutcome, int]] = {
    GameOutcome.REMAKE: 0,
    GameOutcome.SURRENDER_LOSS: -30,
    GameOutcome.FAST_WIN: 25,
    GameOutcome.WIN: 20,
    GameOutcome.LOSS: -20,
}


def classify_outcome(win: bool, duration: int, surrender: bool, remake: bool) -> GameOutcome:
    if remake:
        return GameOutcome.REMAKE
    if surrender and not win:
        return GameOutcome.SURRENDER_LOSS
    if win and duration < FAST_WIN_SECONDS:
        return GameOutcome.FAST_WIN
    if win:
        return GameOutcome.WIN
    return GameOutcome.LOSS


def calculate_game_result(
    win: bool, duration: int, surrender: bool = False, remake: bool = False
) -> GameResultScore:
    """Points for the game outcome. Streak bonuses are computed separately."""
    outcome = classify_outcome(win, duration, surrender, remake)
    return GameResultScore(outcome=outcome, final=RESULT_POINTS[outcome])
