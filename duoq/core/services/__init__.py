"""Pure services around the scoring engine.

Ingestion turns an already fetched Match-V5 payload into GameData; replay
re-scores a duo's history in chronological order. Neither performs I/O.
"""

from duoq.core.services.ladder_replay import (
    LadderStanding,
    ReplayResult,
    StreakRecord,
    apply_score,
    replay_games,
)
from duoq.core.services.match_ingestion import (
    PlayerRegistration,
    build_game_data,
    build_player_stats,
    find_duo_participants,
    is_match_recent,
    is_off_champion,
    is_off_role,
    is_ranked_solo,
    should_score_match,
)

__all__ = [
    "LadderStanding",
    "ReplayResult",
    "StreakRecord",
    "apply_score",
    "replay_games",
    "PlayerRegistration",
    "build_game_data",
    "build_player_stats",
    "find_duo_participants",
    "is_match_recent",
    "is_off_champion",
    "is_off_role",
    "is_ranked_solo",
    "should_score_match",
]
