"""Match ingestion - Match-V5 payload -> GameData.

This is where upstream data is validated before it can reach the scoring
engine: a player's stored peak elo must parse, counters must be
non-negative, and both duo members must have played on the same team.
Fetching the payload is the caller's job.
"""

from datetime import UTC, datetime, timedelta
from typing import Final

import structlog
from pydantic import Field

from duoq.config.settings import Settings
from duoq.contracts.common import BaseContract, Role
from duoq.contracts.game import GameData, PlayerGameStats
from duoq.contracts.match import MatchPayload, ParticipantDTO
from duoq.contracts.rank import RankInfo
from duoq.core.scoring.rank_scale import parse_compact

logger = structlog.get_logger(__name__)

# Registration role names -> Match-V5 teamPosition
ROLE_TO_LANE: Final[dict[str, str]] = {
    "TOP": "TOP",
    "JUNGLE": "JUNGLE",
    "JGL": "JUNGLE",
    "MID": "MIDDLE",
    "MIDDLE": "MIDDLE",
    "ADC": "BOTTOM",
    "BOT": "BOTTOM",
    "BOTTOM": "BOTTOM",
    "SUPPORT": "UTILITY",
    "SUP": "UTILITY",
    "UTILITY": "UTILITY",
}


class PlayerRegistration(BaseContract):
    """What the ladder knows about a player independently of any match."""

    puuid: str = Field(..., min_length=1)
    role: Role
    main_role: str | None = Field(None, description="Declared main role (TOP, JUNGLE, MID, ADC, SUPPORT)")
    main_champion: str | None = Field(None, description="Declared main champion name")
    peak_elo: str | None = Field(None, description="Compact peak rank, e.g. 'D4'")


def is_off_role(main_role: str | None, team_position: str | None) -> bool:
    """True when the player did not play their declared main role.

    No declared role means no risk can be claimed.
    """
    if not main_role:
        return False
    lane = ROLE_TO_LANE.get(main_role.strip().upper(), main_role.strip().upper())
    return lane != (team_position or "").strip().upper()


def is_off_champion(main_champion: str | None, champion_name: str | None) -> bool:
    if not main_champion:
        return False
    return main_champion.strip().casefold() != (champion_name or "").strip().casefold()


def is_ranked_solo(match: MatchPayload, queue_id: int) -> bool:
    return match.info.queue_id == queue_id


def is_match_recent(match: MatchPayload, max_age_hours: int, now: datetime | None = None) -> bool:
    """True if the match ended less than ``max_age_hours`` ago."""
    end_ms = match.info.game_end_timestamp
    if end_ms is None:
        end_ms = match.info.game_start_timestamp + match.info.game_duration * 1000
    ended_at = datetime.fromtimestamp(end_ms / 1000, tz=UTC)
    now = now or datetime.now(UTC)
    return now - ended_at < timedelta(hours=max_age_hours)


def should_score_match(match: MatchPayload, settings: Settings, now: datetime | None = None) -> bool:
    """True if the match is in the configured queue and recent enough to score.

    Args:
        match: Parsed match payload
        settings: Supplies ``ranked_queue_id`` and ``match_max_age_hours``
        now: Reference time, defaults to the current UTC time
    """
    if not is_ranked_solo(match, settings.ranked_queue_id):
        logger.info(
            "match_skipped",
            match_id=match.metadata.match_id,
            reason="queue",
            queue_id=match.info.queue_id,
        )
        return False

    if not is_match_recent(match, settings.match_max_age_hours, now=now):
        logger.info("match_skipped", match_id=match.metadata.match_id, reason="too_old")
        return False

    return True


def find_duo_participants(
    match: MatchPayload, noob_puuid: str, carry_puuid: str
) -> tuple[ParticipantDTO, ParticipantDTO] | None:
    """Return (noob, carry) participants, or None if they did not duo together."""
    noob = match.info.find_participant(noob_puuid)
    carry = match.info.find_participant(carry_puuid)

    if noob is None or carry is None:
        return None

    # 100 = blue, 200 = red; opposite teams means a coincidental soloQ game
    if noob.team_id != carry.team_id:
        return None

    return noob, carry


def build_player_stats(
    participant: ParticipantDTO, registration: PlayerRegistration, new_rank: RankInfo
) -> PlayerGameStats:
    """Build PlayerGameStats from a participant.

    Raises:
        InvalidRankString: the registered peak elo does not parse
        MalformedGameStats: a counter in the payload is negative
    """
    if registration.peak_elo:
        # Fail at ingestion rather than mid-scoring
        parse_compact(registration.peak_elo)

    stats = PlayerGameStats(
        kills=participant.kills,
        deaths=participant.deaths,
        assists=participant.assists,
        triple_kills=participant.triple_kills,
        quadra_kills=participant.quadra_kills,
        penta_kills=participant.penta_kills,
        first_blood_kill=participant.first_blood_kill,
        largest_killing_spree=participant.largest_killing_spree,
        is_off_role=is_off_role(registration.main_role, participant.team_position),
        is_off_champion=is_off_champion(registration.main_champion, participant.champion_name),
        peak_elo=registration.peak_elo or None,
        new_rank=new_rank,
        puuid=participant.puuid,
        champion_name=participant.champion_name,
        team_position=participant.team_position or None,
    )
    stats.check_well_formed(f"{registration.role.value}_stats.")
    return stats


def build_game_data(
    match: MatchPayload,
    noob: PlayerRegistration,
    carry: PlayerRegistration,
    noob_rank: RankInfo,
    carry_rank: RankInfo,
) -> GameData | None:
    """Convert a Match-V5 payload into GameData for the duo.

    Args:
        match: Parsed match payload
        noob: Noob registration
        carry: Carry registration
        noob_rank: Noob's rank after the game
        carry_rank: Carry's rank after the game

    Returns:
        GameData, or None when the duo did not play this match together
    """
    participants = find_duo_participants(match, noob.puuid, carry.puuid)
    if participants is None:
        logger.info("duo_not_in_match", match_id=match.metadata.match_id)
        return None

    noob_participant, carry_participant = participants

    game = GameData(
        noob_stats=build_player_stats(noob_participant, noob, noob_rank),
        carry_stats=build_player_stats(carry_participant, carry, carry_rank),
        win=noob_participant.win,
        duration=match.info.game_duration,
        surrender=noob_participant.game_ended_in_surrender,
        remake=noob_participant.game_ended_in_early_surrender,
        match_id=match.metadata.match_id,
        started_at=datetime.fromtimestamp(match.info.game_start_timestamp / 1000, tz=UTC),
    )
    game.check_well_formed()

    if game.surrender and game.win:
        # Riot sets the surrender flag for both teams; scored with win priority
        logger.info("surrendered_win", match_id=game.match_id)

    return game
