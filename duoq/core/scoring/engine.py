"""Scoring engine - orchestrates every scoring module in strict order.

Per player:
  1. KDA  2. game result  3. streak  4. special bonuses
  5. subtotal  6. player cap  7. peak multiplier  8. round
Per duo:
  9. sum of player finals  10. risk bonus  11. no-death bonus
  12. subtotal  13. duo cap  14. round

Remakes and games shorter than five minutes short-circuit to an all-zero
breakdown before any of the steps above run. The engine holds no state:
streaks come in as the pre-game values and leave as ``new_streak``.
"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Final

import structlog

from duoq.contracts.common import Role
from duoq.contracts.game import GameData, PlayerGameStats
from duoq.core.observability import trace_scoring
from duoq.core.scoring.bonuses import (
    calculate_no_death_bonus,
    calculate_risk_bonus,
    calculate_special_bonus,
)
from duoq.core.scoring.caps import apply_duo_cap, apply_player_cap
from duoq.core.scoring.game_result import calculate_game_result
from duoq.core.scoring.kda import calculate_kda
from duoq.core.scoring.models import (
    Alert,
    AlertType,
    DuoBreakdown,
    GameOutcome,
    GameResultScore,
    KdaScore,
    PeakMultiplierInfo,
    PlayerBreakdown,
    RiskBonus,
    ScoreBreakdown,
    SpecialBonus,
    StreakBonus,
)
from duoq.core.scoring.peak_multiplier import calculate_peak_multiplier
from duoq.core.scoring.streaks import calculate_streak_bonus

logger = structlog.get_logger(__name__)

EARLY_GAME_SECONDS: Final[int] = 300  # 5:00


def round_half_away_from_zero(value: float) -> int:
    """Round to the nearest integer, ties away from zero (2.5 -> 3, -2.5 -> -3)."""
    return int(Decimal(repr(value)).quantize(Decimal(1), rounding=ROUND_HALF_UP))


def is_remake_or_early_game(game: GameData) -> bool:
    return game.remake or game.duration < EARLY_GAME_SECONDS


def _score_player(game: GameData, stats: PlayerGameStats, role: Role, pre_streak: int) -> PlayerBreakdown:
    kda = calculate_kda(stats.kills, stats.deaths, stats.assists, role)
    result = calculate_game_result(game.win, game.duration, game.surrender, game.remake)
    streak = calculate_streak_bonus(game.win, pre_streak)
    special = calculate_special_bonus(stats)

    subtotal = kda.final + result.final + streak.total + special.total
    capped = apply_player_cap(subtotal)

    peak = calculate_peak_multiplier(stats.peak_elo, stats.new_rank)
    after_multiplier = capped * peak.multiplier

    return PlayerBreakdown(
        role=role,
        kda=kda,
        result=result,
        streak=streak,
        special_bonuses=special,
        subtotal=subtotal,
        capped=capped,
        peak=peak,
        after_multiplier=after_multiplier,
        final=round_half_away_from_zero(after_multiplier),
    )


def _zero_player(role: Role, pre_streak: int) -> PlayerBreakdown:
    return PlayerBreakdown(
        role=role,
        kda=KdaScore(base=0.0, role_adjustment=0.0, final=0.0),
        result=GameResultScore(outcome=GameOutcome.REMAKE, final=0),
        # Short-circuited games never advance the streak
        streak=StreakBonus(progressive=0, milestone=0, total=0, new_streak=pre_streak),
        special_bonuses=SpecialBonus(),
        subtotal=0.0,
        capped=0.0,
        peak=PeakMultiplierInfo(),
        after_multiplier=0.0,
        final=0,
    )


def _zero_breakdown(noob_pre_streak: int, carry_pre_streak: int) -> ScoreBreakdown:
    return ScoreBreakdown(
        noob=_zero_player(Role.NOOB, noob_pre_streak),
        carry=_zero_player(Role.CARRY, carry_pre_streak),
        duo=DuoBreakdown(
            sum=0,
            risk_bonus=RiskBonus(),
            no_death_bonus=0,
            subtotal=0,
            capped=0.0,
            final=0,
        ),
        alerts=(),
        is_remake_or_early_game=True,
    )


def build_alerts(game: GameData, duo: DuoBreakdown) -> tuple[Alert, ...]:
    """Derive display annotations from already computed values."""
    alerts: list[Alert] = []

    for role, stats in ((Role.NOOB, game.noob_stats), (Role.CARRY, game.carry_stats)):
        if stats.penta_kills > 0:
            count = "" if stats.penta_kills == 1 else f" x{stats.penta_kills}"
            alerts.append(
                Alert(
                    type=AlertType.PENTAKILL,
                    role=role,
                    message=f"PENTAKILL{count} for the {role.value}!",
                )
            )

    if duo.no_death_bonus > 0:
        alerts.append(
            Alert(
                type=AlertType.NO_DEATH,
                message=f"Flawless duo: nobody died (+{duo.no_death_bonus})",
            )
        )

    if game.surrender and not game.win:
        alerts.append(Alert(type=AlertType.SURRENDER_LOSS, message="Surrendered loss"))

    return tuple(alerts)


def _summarize(breakdown: ScoreBreakdown) -> dict[str, int | bool]:
    return {
        "noob": breakdown.noob.final,
        "carry": breakdown.carry.final,
        "total": breakdown.total,
        "short_circuited": breakdown.is_remake_or_early_game,
    }


@trace_scoring(capture_args=False, summarize_result=_summarize)
def compute_game_score(game: GameData, noob_pre_streak: int, carry_pre_streak: int) -> ScoreBreakdown:
    """Score one game for a duo.

    Args:
        game: Stats of both players and the match outcome
        noob_pre_streak: Noob's signed streak BEFORE this game
        carry_pre_streak: Carry's signed streak BEFORE this game

    Returns:
        ScoreBreakdown with every intermediate value, the duo total and the
        streaks to persist

    Raises:
        MalformedGameStats: negative counters or duration
        InvalidRankString: unparsable peak elo
    """
    game.check_well_formed()

    if is_remake_or_early_game(game):
        logger.info(
            "game_short_circuited",
            match_id=game.match_id,
            remake=game.remake,
            duration=game.duration,
        )
        return _zero_breakdown(noob_pre_streak, carry_pre_streak)

    noob = _score_player(game, game.noob_stats, Role.NOOB, noob_pre_streak)
    carry = _score_player(game, game.carry_stats, Role.CARRY, carry_pre_streak)

    duo_sum = noob.final + carry.final
    risk = calculate_risk_bonus(
        game.noob_stats.is_off_role,
        game.noob_stats.is_off_champion,
        game.carry_stats.is_off_role,
        game.carry_stats.is_off_champion,
    )
    no_death = calculate_no_death_bonus(game.noob_stats.deaths, game.carry_stats.deaths)

    duo_subtotal = duo_sum + risk.final + no_death
    duo_capped = apply_duo_cap(duo_subtotal)

    duo = DuoBreakdown(
        sum=duo_sum,
        risk_bonus=risk,
        no_death_bonus=no_death,
        subtotal=duo_subtotal,
        capped=duo_capped,
        final=round_half_away_from_zero(duo_capped),
    )

    breakdown = ScoreBreakdown(
        noob=noob,
        carry=carry,
        duo=duo,
        alerts=build_alerts(game, duo),
    )

    logger.info(
        "game_scored",
        match_id=game.match_id,
        win=game.win,
        noob_final=noob.final,
        carry_final=carry.final,
        total=breakdown.total,
        alerts=[alert.type.value for alert in breakdown.alerts],
    )
    return breakdown
