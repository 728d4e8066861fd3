"""
Rank data contracts.
"""

from pydantic import Field, model_validator

from .common import BaseContract, Division, Tier


class RankInfo(BaseContract):
    """A ladder position: tier, division (non-apex only) and league points."""

    tier: Tier = Field(..., description="Tier (IRON to CHALLENGER)")
    division: Division | None = Field(None, description="Division, absent for apex tiers")
    league_points: int = Field(0, ge=0, description="League points inside the tier/division")

    @model_validator(mode="after")
    def _division_matches_tier(self) -> "RankInfo":
        if self.tier.is_apex and self.division is not None:
            raise ValueError(f"{self.tier.value} has no divisions")
        if not self.tier.is_apex and self.division is None:
            raise ValueError(f"{self.tier.value} requires a division")
        return self

    @property
    def full_rank(self) -> str:
        """Human readable rank (e.g. 'GOLD II', 'MASTER')."""
        if self.division is None:
            return self.tier.value
        return f"{self.tier.value} {self.division.value}"
