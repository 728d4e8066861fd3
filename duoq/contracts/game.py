"""
Per-game input contracts for the scoring engine.

Numeric stats are deliberately unconstrained at the model level: impossible
values are reported as MalformedGameStats by check_well_formed() so that
callers can tell bad upstream data apart from a structurally broken payload.
"""

from datetime import datetime

from pydantic import Field

from duoq.core.errors import MalformedGameStats

from .common import BaseContract
from .rank import RankInfo

_NON_NEGATIVE_STATS = (
    "kills",
    "deaths",
    "assists",
    "triple_kills",
    "quadra_kills",
    "penta_kills",
    "largest_killing_spree",
)


class PlayerGameStats(BaseContract):
    """Raw per-game facts for one player of the duo."""

    # KDA
    kills: int
    deaths: int
    assists: int

    # Multikills and special actions
    triple_kills: int = 0
    quadra_kills: int = 0
    penta_kills: int = 0
    first_blood_kill: bool = False
    largest_killing_spree: int = 0

    # Risk detection
    is_off_role: bool = False
    is_off_champion: bool = False

    # Rank
    peak_elo: str | None = Field(None, description="Compact peak rank (e.g. 'D4'), None if unknown")
    new_rank: RankInfo = Field(..., description="Rank after the game")

    # Identity metadata (display only)
    puuid: str | None = None
    champion_name: str | None = None
    team_position: str | None = None

    def check_well_formed(self, prefix: str = "") -> None:
        """Raise MalformedGameStats on the first negative counter."""
        for name in _NON_NEGATIVE_STATS:
            value = getattr(self, name)
            if value < 0:
                raise MalformedGameStats(f"{prefix}{name}", value)

    @property
    def kda_display(self) -> str:
        return f"{self.kills}/{self.deaths}/{self.assists}"


class GameData(BaseContract):
    """One ranked match played by the duo."""

    noob_stats: PlayerGameStats
    carry_stats: PlayerGameStats
    win: bool
    duration: int = Field(..., description="Game duration in seconds")
    surrender: bool = False
    remake: bool = False

    # Match metadata (ordering and display only)
    match_id: str | None = None
    started_at: datetime | None = None

    def check_well_formed(self) -> None:
        """Raise MalformedGameStats if any stat or the duration is negative."""
        if self.duration < 0:
            raise MalformedGameStats("duration", self.duration)
        self.noob_stats.check_well_formed("noob_stats.")
        self.carry_stats.check_well_formed("carry_stats.")
