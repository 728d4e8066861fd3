"""
Common data types and base models for the duo ladder.
All models use Pydantic V2 and are immutable once built.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Tier(str, Enum):
    """Ranked tiers, lowest first."""

    IRON = "IRON"
    BRONZE = "BRONZE"
    SILVER = "SILVER"
    GOLD = "GOLD"
    PLATINUM = "PLATINUM"
    EMERALD = "EMERALD"
    DIAMOND = "DIAMOND"
    MASTER = "MASTER"
    GRANDMASTER = "GRANDMASTER"
    CHALLENGER = "CHALLENGER"

    @property
    def is_apex(self) -> bool:
        """Apex tiers have a single ladder slot and no divisions."""
        return self in APEX_TIERS


APEX_TIERS: frozenset[Tier] = frozenset({Tier.MASTER, Tier.GRANDMASTER, Tier.CHALLENGER})


class Division(str, Enum):
    """Ranked divisions."""

    DIV_IV = "IV"
    DIV_III = "III"
    DIV_II = "II"
    DIV_I = "I"


class Role(str, Enum):
    """Duo role: the weaker player is the noob, the stronger the carry."""

    NOOB = "noob"
    CARRY = "carry"


class BaseContract(BaseModel):
    """Base model for all value objects flowing through the scoring core."""

    model_config = ConfigDict(
        # Value objects are never mutated after construction
        frozen=True,
        # Forbid extra fields to ensure data integrity
        extra="forbid",
    )
