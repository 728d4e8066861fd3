"""Contract models for data validation."""

from .common import APEX_TIERS, BaseContract, Division, Role, Tier
from .game import GameData, PlayerGameStats
from .match import MatchInfoDTO, MatchMetadata, MatchPayload, ParticipantDTO
from .rank import RankInfo

__all__ = [
    "APEX_TIERS",
    "BaseContract",
    "Division",
    "Role",
    "Tier",
    "RankInfo",
    "PlayerGameStats",
    "GameData",
    "MatchMetadata",
    "MatchInfoDTO",
    "MatchPayload",
    "ParticipantDTO",
]
