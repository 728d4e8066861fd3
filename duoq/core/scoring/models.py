"""Scoring breakdown models.

Data structures only: each scoring step returns one of these and the engine
assembles them into a ScoreBreakdown.
"""

from enum import Enum

from pydantic import Field

from duoq.contracts.common import BaseContract, Role


class KdaScore(BaseContract):
    """Role-adjusted linear KDA score."""

    base: float  # K + 0.5*A - D
    role_adjustment: float  # noob bonus or carry malus
    final: float


class GameOutcome(str, Enum):
    """Which result rule produced the result points."""

    REMAKE = "remake"
    SURRENDER_LOSS = "surrender_loss"
    FAST_WIN = "fast_win"
    WIN = "win"
    LOSS = "loss"


class GameResultScore(BaseContract):
    """Base points for the game outcome (streaks are scored separately)."""

    outcome: GameOutcome
    final: int


class StreakBonus(BaseContract):
    """Streak contribution for one game plus the streak to persist afterwards."""

    progressive: int
    milestone: int
    total: int
    new_streak: int


class SpecialBonus(BaseContract):
    """Individual action bonuses."""

    multikill: int = 0  # penta, quadra or triple tier, never more than one
    first_blood: int = 0
    killing_spree: int = 0
    total: int = 0


class RiskBonus(BaseContract):
    """Duo bonus for playing off-role/off-champion."""

    conditions_met: int = Field(0, ge=0, le=4)
    off_role_count: int = Field(0, ge=0, le=2)
    off_champion_count: int = Field(0, ge=0, le=2)
    final: int = 0


class PeakMultiplierInfo(BaseContract):
    """Peak-rank adjustment applied to a capped player subtotal."""

    peak_elo: str | None = None
    tier_diff: int = 0  # positive = below peak, negative = above peak
    multiplier: float = 1.0


class PlayerBreakdown(BaseContract):
    """Itemized score for one player."""

    role: Role
    kda: KdaScore
    result: GameResultScore
    streak: StreakBonus
    special_bonuses: SpecialBonus
    subtotal: float
    capped: float = Field(..., ge=-40, le=60)
    peak: PeakMultiplierInfo
    after_multiplier: float
    final: int


class DuoBreakdown(BaseContract):
    """Itemized duo-level score."""

    sum: int  # noob final + carry final
    risk_bonus: RiskBonus
    no_death_bonus: int
    subtotal: int
    capped: float = Field(..., ge=-70, le=120)
    final: int


class AlertType(str, Enum):
    PENTAKILL = "pentakill"
    NO_DEATH = "no_death"
    SURRENDER_LOSS = "surrender_loss"


class Alert(BaseContract):
    """Human-readable annotation on a scored game. Carries no points."""

    type: AlertType
    role: Role | None = None
    message: str


class ScoreBreakdown(BaseContract):
    """Complete, immutable record of one game's scoring.

    A short-circuited game (remake or under five minutes) zeroes every point
    field but keeps `streak.new_streak` equal to the pre-game streak and
    `peak.multiplier` at the neutral 1.0.
    """

    noob: PlayerBreakdown
    carry: PlayerBreakdown
    duo: DuoBreakdown
    alerts: tuple[Alert, ...] = ()
    is_remake_or_early_game: bool = False

    @property
    def total(self) -> int:
        """Points awarded to the duo for this game."""
        return self.duo.final

    @property
    def noob_new_streak(self) -> int:
        return self.noob.streak.new_streak

    @property
    def carry_new_streak(self) -> int:
        return self.carry.streak.new_streak
