"""Pydantic models for the Riot Match-V5 fields the ladder consumes.

Only the subset needed to build GameData is modelled; everything else in the
payload is ignored.
"""

from pydantic import BaseModel, ConfigDict, Field


class _MatchModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class MatchMetadata(_MatchModel):
    """Metadata for a match."""

    match_id: str = Field(..., alias="matchId")
    participants: list[str] = Field(default_factory=list)  # List of PUUIDs


class ParticipantDTO(_MatchModel):
    """Participant data from a match."""

    # Identity
    puuid: str
    team_id: int = Field(..., alias="teamId")

    # Champion and position
    champion_name: str = Field(..., alias="championName")
    team_position: str = Field("", alias="teamPosition")

    # Performance metrics
    kills: int
    deaths: int
    assists: int

    # Multikills and special actions
    triple_kills: int = Field(0, alias="tripleKills")
    quadra_kills: int = Field(0, alias="quadraKills")
    penta_kills: int = Field(0, alias="pentaKills")
    first_blood_kill: bool = Field(False, alias="firstBloodKill")
    largest_killing_spree: int = Field(0, alias="largestKillingSpree")

    # Game outcome
    win: bool
    game_ended_in_early_surrender: bool = Field(False, alias="gameEndedInEarlySurrender")
    game_ended_in_surrender: bool = Field(False, alias="gameEndedInSurrender")


class MatchInfoDTO(_MatchModel):
    """Detailed match information."""

    game_id: int = Field(..., alias="gameId")
    game_duration: int = Field(..., alias="gameDuration")
    game_start_timestamp: int = Field(..., alias="gameStartTimestamp")
    game_end_timestamp: int | None = Field(None, alias="gameEndTimestamp")
    queue_id: int = Field(..., alias="queueId")

    participants: list[ParticipantDTO]

    def find_participant(self, puuid: str) -> ParticipantDTO | None:
        return next((p for p in self.participants if p.puuid == puuid), None)


class MatchPayload(_MatchModel):
    """Complete match data from Match-V5 API."""

    metadata: MatchMetadata
    info: MatchInfoDTO
