"""Special bonuses.

Individual (per player):
- Pentakill: +30 each, else Quadrakill: +15 each, else Triple kill: +5 each
- First Blood: +5
- Killing Spree (largest spree >= 7): +10

Duo:
- Risk: H = off-role/off-champion conditions across both players;
  H == 4 -> +15, H == 3 -> +10, H <= 2 -> 0
- No Death: +20 when both players finish with exactly 0 deaths
"""

from typing import Final

from duoq.contracts.game import PlayerGameStats
from duoq.core.scoring.models import RiskBonus, SpecialBonus

PENTAKILL_POINTS: Final[int] = 30
QUADRAKILL_POINTS: Final[int] = 15
TRIPLEKILL_POINTS: Final[int] = 5
FIRST_BLOOD_POINTS: Final[int] = 5
KILLING_SPREE_POINTS: Final[int] = 10
KILLING_SPREE_THRESHOLD: Final[int] = 7

RISK_POINTS: Final[dict[int, int]] = {4: 15, 3: 10}

NO_DEATH_POINTS: Final[int] = 20


def calculate_multikill_bonus(penta_kills: int, quadra_kills: int, triple_kills: int) -> int:
    """Only the highest multikill tier reached is rewarded, scaled by its count."""
    if penta_kills > 0:
        return PENTAKILL_POINTS * penta_kills
    if quadra_kills > 0:
        return QUADRAKILL_POINTS * quadra_kills
    if triple_kills > 0:
        return TRIPLEKILL_POINTS * triple_kills
    return 0


def calculate_special_bonus(stats: PlayerGameStats) -> SpecialBonus:
    multikill = calculate_multikill_bonus(stats.penta_kills, stats.quadra_kills, stats.triple_kills)
    first_blood = FIRST_BLOOD_POINTS if stats.first_blood_kill else 0
    killing_spree = (
        KILLING_SPREE_POINTS if stats.largest_killing_spree >= KILLING_SPREE_THRESHOLD else 0
    )
    return SpecialBonus(
        multikill=multikill,
        first_blood=first_blood,
        killing_spree=killing_spree,
        total=multikill + first_blood + killing_spree,
    )


def calculate_risk_bonus(
    noob_off_role: bool,
    noob_off_champion: bool,
    carry_off_role: bool,
    carry_off_champion: bool,
) -> RiskBonus:
    conditions_met = sum(
        bool(flag) for flag in (noob_off_role, noob_off_champion, carry_off_role, carry_off_champion)
    )
    return RiskBonus(
        conditions_met=conditions_met,
        off_role_count=int(bool(noob_off_role)) + int(bool(carry_off_role)),
        off_champion_count=int(bool(noob_off_champion)) + int(bool(carry_off_champion)),
        final=RISK_POINTS.get(conditions_met, 0),
    )


def calculate_no_death_bonus(noob_deaths: int, carry_deaths: int) -> int:
    # Negative counts are malformed and never qualify
    if noob_deaths == 0 and carry_deaths == 0:
        return NO_DEATH_POINTS
    return 0
