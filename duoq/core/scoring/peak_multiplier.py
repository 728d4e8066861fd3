"""Peak elo multiplier.

Hybrid anti-smurf / progression adjustment from the whole-tier gap between
a player's historical peak and their current rank:

- Above peak:  1 tier x1.05, 2 tiers x1.10, 3+ tiers x1.15
- Tolerance:   0-1 tier below x1.00 (decay, meta shifts)
- Below peak:  2 tiers x0.95, 3 tiers x0.875, 4 tiers x0.80, 5+ tiers x0.75

The multiplier scales the already capped player subtotal.
"""

from typing import Final

from duoq.contracts.rank import RankInfo
from duoq.core.scoring.models import PeakMultiplierInfo
from duoq.core.scoring.rank_scale import (
    DIVISIONS_PER_TIER,
    ensure_rank_value,
    parse_compact,
    to_value,
)

ABOVE_PEAK_MULTIPLIERS: Final[dict[int, float]] = {1: 1.05, 2: 1.10, 3: 1.15}
BELOW_PEAK_MULTIPLIERS: Final[dict[int, float]] = {2: 0.95, 3: 0.875, 4: 0.80, 5: 0.75}
TOLERANCE_TIERS: Final[int] = 1


def peak_tier_gap(peak_value: int, current_value: int) -> int:
    """Whole tiers between peak and current rank, floored (positive = below peak)."""
    ensure_rank_value(peak_value)
    ensure_rank_value(current_value)
    return (peak_value - current_value) // DIVISIONS_PER_TIER


def multiplier_for_gap(tier_diff: int) -> float:
    if tier_diff < 0:
        return ABOVE_PEAK_MULTIPLIERS[min(-tier_diff, max(ABOVE_PEAK_MULTIPLIERS))]
    if tier_diff <= TOLERANCE_TIERS:
        return 1.0
    return BELOW_PEAK_MULTIPLIERS[min(tier_diff, max(BELOW_PEAK_MULTIPLIERS))]


def calculate_peak_multiplier(peak_elo: str | None, current_rank: RankInfo) -> PeakMultiplierInfo:
    """Compute the multiplier for a player.

    Args:
        peak_elo: Compact peak rank (e.g. "D4"); None or empty means no signal
        current_rank: Rank after the game

    Raises:
        InvalidRankString: the peak string does not parse
    """
    if not peak_elo:
        return PeakMultiplierInfo()

    tier_diff = peak_tier_gap(to_value(parse_compact(peak_elo)), to_value(current_rank))
    return PeakMultiplierInfo(
        peak_elo=peak_elo,
        tier_diff=tier_diff,
        multiplier=multiplier_for_gap(tier_diff),
    )
