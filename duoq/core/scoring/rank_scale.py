"""Rank <-> ordinal conversion and compact rank strings.

Every tier below Master spans four consecutive values (IV=+0 ... I=+3) and
each apex tier spans exactly one, giving a comparable scale from
IRON IV = 0 to CHALLENGER = 36. RankInfo objects are never compared
directly; callers compare rank values.
"""

import re
from typing import Final

from duoq.contracts.common import Division, Tier
from duoq.contracts.rank import RankInfo
from duoq.core.errors import InvalidRankString, InvalidRankValue

MIN_RANK_VALUE: Final[int] = 0
MAX_RANK_VALUE: Final[int] = 36
DIVISIONS_PER_TIER: Final[int] = 4

TIER_VALUES: Final[dict[Tier, int]] = {
    Tier.IRON: 0,
    Tier.BRONZE: 4,
    Tier.SILVER: 8,
    Tier.GOLD: 12,
    Tier.PLATINUM: 16,
    Tier.EMERALD: 20,
    Tier.DIAMOND: 24,
    Tier.MASTER: 28,
    Tier.GRANDMASTER: 32,
    Tier.CHALLENGER: 36,
}

DIVISION_OFFSETS: Final[dict[Division, int]] = {
    Division.DIV_IV: 0,
    Division.DIV_III: 1,
    Division.DIV_II: 2,
    Division.DIV_I: 3,
}

TIER_LETTERS: Final[dict[str, Tier]] = {
    "I": Tier.IRON,
    "B": Tier.BRONZE,
    "S": Tier.SILVER,
    "G": Tier.GOLD,
    "P": Tier.PLATINUM,
    "E": Tier.EMERALD,
    "D": Tier.DIAMOND,
    "M": Tier.MASTER,
    "GM": Tier.GRANDMASTER,
    "C": Tier.CHALLENGER,
}
_LETTERS_BY_TIER: Final[dict[Tier, str]] = {tier: letters for letters, tier in TIER_LETTERS.items()}

DIVISION_DIGITS: Final[dict[str, Division]] = {
    "4": Division.DIV_IV,
    "3": Division.DIV_III,
    "2": Division.DIV_II,
    "1": Division.DIV_I,
}
_DIGITS_BY_DIVISION: Final[dict[Division, str]] = {div: d for d, div in DIVISION_DIGITS.items()}

_COMPACT_RE = re.compile(r"^([A-Z]+)(\d*)$")

# Highest tier whose base value does not exceed the ordinal wins
_TIERS_DESCENDING: Final[list[tuple[Tier, int]]] = sorted(
    TIER_VALUES.items(), key=lambda item: item[1], reverse=True
)
_OFFSET_DIVISIONS: Final[dict[int, Division]] = {off: div for div, off in DIVISION_OFFSETS.items()}


def to_value(rank: RankInfo) -> int:
    """Convert a rank to its ordinal (GOLD IV = 12, GOLD I = 15, MASTER = 28)."""
    tier_value = TIER_VALUES[rank.tier]
    if rank.tier.is_apex or rank.division is None:
        return tier_value
    return tier_value + DIVISION_OFFSETS[rank.division]


def from_value(value: int) -> RankInfo:
    """Convert an ordinal back to a rank, clamping it into [0, 36] first."""
    value = max(MIN_RANK_VALUE, min(MAX_RANK_VALUE, int(value)))

    for tier, tier_value in _TIERS_DESCENDING:
        if value >= tier_value:
            if tier.is_apex:
                return RankInfo(tier=tier)
            return RankInfo(tier=tier, division=_OFFSET_DIVISIONS[value - tier_value])

    # Unreachable: IRON covers 0
    raise InvalidRankValue(value)


def ensure_rank_value(value: int) -> int:
    """Return ``value`` unchanged if it is a valid ordinal, else raise InvalidRankValue."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRankValue(value)
    if not MIN_RANK_VALUE <= value <= MAX_RANK_VALUE:
        raise InvalidRankValue(value)
    return value


def parse_compact(rank_str: str) -> RankInfo:
    """Parse a compact rank string such as "G4", "D1", "M", "GM" or "C".

    A divisible tier without a digit is read as division IV.

    Raises:
        InvalidRankString: unknown tier letters, a digit outside 1..4, or a
            division digit on an apex tier.
    """
    if not isinstance(rank_str, str):
        raise InvalidRankString(repr(rank_str), "expected a string")

    normalized = rank_str.strip().upper()
    match = _COMPACT_RE.match(normalized)
    if match is None:
        raise InvalidRankString(rank_str, "expected tier letters followed by an optional digit")

    letters, digits = match.groups()
    tier = TIER_LETTERS.get(letters)
    if tier is None:
        raise InvalidRankString(rank_str, f"unrecognized tier {letters!r}")

    if tier.is_apex:
        if digits:
            raise InvalidRankString(rank_str, f"{tier.value} has no divisions")
        return RankInfo(tier=tier)

    if not digits:
        return RankInfo(tier=tier, division=Division.DIV_IV)

    division = DIVISION_DIGITS.get(digits)
    if division is None:
        raise InvalidRankString(rank_str, f"division must be 1-4, got {digits!r}")
    return RankInfo(tier=tier, division=division)


def format_compact(rank: RankInfo) -> str:
    """Format a rank as a compact string (GOLD II -> "G2", GRANDMASTER -> "GM")."""
    letters = _LETTERS_BY_TIER[rank.tier]
    if rank.division is None:
        return letters
    return f"{letters}{_DIGITS_BY_DIVISION[rank.division]}"


def rank_from_parts(tier: str, division: str | None = None, league_points: int = 0) -> RankInfo:
    """Build a rank from league-entry strings (e.g. "GOLD", "II", 57).

    Apex tiers ignore the division the ladder API reports for them ("I").

    Raises:
        InvalidRankString: unknown tier or division names.
    """
    try:
        tier_enum = Tier(str(tier).strip().upper())
    except ValueError:
        raise InvalidRankString(str(tier), "unrecognized tier name") from None

    if tier_enum.is_apex:
        return RankInfo(tier=tier_enum, league_points=league_points)

    if division is None:
        raise InvalidRankString(tier_enum.value, "missing division")
    try:
        division_enum = Division(str(division).strip().upper())
    except ValueError:
        raise InvalidRankString(str(division), "unrecognized division") from None

    return RankInfo(tier=tier_enum, division=division_enum, league_points=league_points)
