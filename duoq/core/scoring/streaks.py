"""Win/loss streak bonuses.

Streaks are signed: positive = consecutive wins, negative = consecutive
losses. The caller owns the counter; this module only maps
(pre-game streak, outcome) to points and the post-game streak.

Progressive bonus (every game once |streak| >= 2):
- wins:   +2 .. +7 (capped at 7)
- losses: -2 .. -5 (capped at 5)

Milestones (only on the game that reaches the threshold):
- wins:   3 -> +10, 5 -> +20, 7 -> +30
- losses: 3 -> -10, 5 -> -25
"""

from typing import Final

from duoq.core.scoring.models import StreakBonus

PROGRESSIVE_MIN_STREAK: Final[int] = 2
WIN_PROGRESSIVE_CAP: Final[int] = 7
LOSS_PROGRESSIVE_CAP: Final[int] = 5

WIN_MILESTONES: Final[dict[int, int]] = {3: 10, 5: 20, 7: 30}
LOSS_MILESTONES: Final[dict[int, int]] = {3: -10, 5: -25}


def next_streak(win: bool, current_streak: int) -> int:
    """Streak after this game; an outcome against the current direction resets to 1."""
    if win:
        return current_streak + 1 if current_streak >= 0 else 1
    return current_streak - 1 if current_streak <= 0 else -1


def calculate_streak_bonus(win: bool, current_streak: int) -> StreakBonus:
    """Compute the streak bonus/malus for this game.

    Args:
        win: Outcome of the game for the duo
        current_streak: Streak BEFORE this game

    Returns:
        StreakBonus with progressive and milestone parts and the new streak
    """
    new_streak = next_streak(win, current_streak)
    magnitude = abs(new_streak)

    progressive = 0
    if magnitude >= PROGRESSIVE_MIN_STREAK:
        if win:
            progressive = min(magnitude, WIN_PROGRESSIVE_CAP)
        else:
            progressive = -min(magnitude, LOSS_PROGRESSIVE_CAP)

    milestones = WIN_MILESTONES if win else LOSS_MILESTONES
    milestone = milestones.get(magnitude, 0)

    return StreakBonus(
        progressive=progressive,
        milestone=milestone,
        total=progressive + milestone,
        new_streak=new_streak,
    )
