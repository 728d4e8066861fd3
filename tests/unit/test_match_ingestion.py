"""Tests for Match-V5 payload ingestion."""

from datetime import UTC, datetime, timedelta
from typing import Any

import pytest
from structlog.testing import capture_logs

from duoq.config.settings import Settings
from duoq.contracts.common import Division, Role, Tier
from duoq.contracts.match import MatchPayload
from duoq.contracts.rank import RankInfo
from duoq.core.errors import InvalidRankString, MalformedGameStats
from duoq.core.scoring import compute_game_score
from duoq.core.services.match_ingestion import (
    PlayerRegistration,
    build_game_data,
    find_duo_participants,
    is_match_recent,
    is_off_champion,
    is_off_role,
    is_ranked_solo,
    should_score_match,
)

START_MS = 1_700_000_000_000
NOOB_PUUID = "noob-puuid"
CARRY_PUUID = "carry-puuid"

SILVER_I = RankInfo(tier=Tier.SILVER, division=Division.DIV_I, league_points=12)
EMERALD_III = RankInfo(tier=Tier.EMERALD, division=Division.DIV_III, league_points=55)


def _participant(puuid: str, team_id: int = 100, **overrides: Any) -> dict[str, Any]:
    participant = {
        "puuid": puuid,
        "teamId": team_id,
        "championName": "Ahri",
        "teamPosition": "MIDDLE",
        "kills": 5,
        "deaths": 3,
        "assists": 8,
        "tripleKills": 0,
        "quadraKills": 0,
        "pentaKills": 0,
        "firstBloodKill": False,
        "largestKillingSpree": 2,
        "win": True,
        "gameEndedInEarlySurrender": False,
        "gameEndedInSurrender": False,
        # Fields the ladder does not read
        "goldEarned": 11000,
        "visionScore": 22,
    }
    participant.update(overrides)
    return participant


def _payload(participants: list[dict[str, Any]], **info_overrides: Any) -> MatchPayload:
    info = {
        "gameId": 6543210,
        "gameDuration": 1650,
        "gameStartTimestamp": START_MS,
        "gameEndTimestamp": START_MS + 1650 * 1000,
        "queueId": 420,
        "gameMode": "CLASSIC",
        "participants": participants,
    }
    info.update(info_overrides)
    return MatchPayload.model_validate(
        {
            "metadata": {"matchId": "EUW1_6543210", "participants": [p["puuid"] for p in participants]},
            "info": info,
        }
    )


@pytest.fixture
def noob() -> PlayerRegistration:
    return PlayerRegistration(
        puuid=NOOB_PUUID, role=Role.NOOB, main_role="SUPPORT", main_champion="Lulu", peak_elo="G2"
    )


@pytest.fixture
def carry() -> PlayerRegistration:
    return PlayerRegistration(puuid=CARRY_PUUID, role=Role.CARRY, main_role="MID", main_champion="Ahri")


@pytest.fixture
def payload() -> MatchPayload:
    return _payload(
        [
            _participant(NOOB_PUUID, championName="Lulu", teamPosition="UTILITY", kills=1, deaths=2, assists=17),
            _participant(CARRY_PUUID, kills=11, deaths=4, assists=6, tripleKills=1, firstBloodKill=True),
            _participant("enemy-1", team_id=200, win=False),
        ]
    )


class TestRoleAndChampion:
    @pytest.mark.parametrize(
        ("main_role", "position", "expected"),
        [
            ("MID", "MIDDLE", False),
            ("adc", "BOTTOM", False),
            ("SUPPORT", "UTILITY", False),
            ("JUNGLE", "TOP", True),
            ("TOP", "", True),
            (None, "TOP", False),
            ("", "BOTTOM", False),
        ],
    )
    def test_off_role(self, main_role: str | None, position: str, expected: bool) -> None:
        assert is_off_role(main_role, position) is expected

    @pytest.mark.parametrize(
        ("main", "played", "expected"),
        [("Ahri", "Ahri", False), ("ahri ", "Ahri", False), ("Ahri", "Zed", True), (None, "Zed", False)],
    )
    def test_off_champion(self, main: str | None, played: str, expected: bool) -> None:
        assert is_off_champion(main, played) is expected


class TestMatchFilters:
    def test_ranked_solo(self, payload: MatchPayload) -> None:
        assert is_ranked_solo(payload, 420)
        assert not is_ranked_solo(payload, 440)

    def test_recent_match(self, payload: MatchPayload) -> None:
        ended = datetime.fromtimestamp((START_MS + 1650 * 1000) / 1000, tz=UTC)
        assert is_match_recent(payload, 4, now=ended + timedelta(hours=3, minutes=59))
        assert not is_match_recent(payload, 4, now=ended + timedelta(hours=4))
        assert is_match_recent(payload, 6, now=ended + timedelta(hours=5))

    def test_recent_without_end_timestamp(self) -> None:
        match = _payload([_participant(NOOB_PUUID)], gameEndTimestamp=None)
        ended = datetime.fromtimestamp(START_MS / 1000, tz=UTC) + timedelta(seconds=1650)
        assert not is_match_recent(match, 4, now=ended + timedelta(hours=4, seconds=1))
        assert is_match_recent(match, 4, now=ended + timedelta(hours=1))


class TestShouldScoreMatch:
    @pytest.fixture
    def ended(self) -> datetime:
        return datetime.fromtimestamp((START_MS + 1650 * 1000) / 1000, tz=UTC)

    def test_default_settings_accept_fresh_solo_queue_game(
        self, payload: MatchPayload, ended: datetime
    ) -> None:
        assert should_score_match(payload, Settings(), now=ended + timedelta(hours=1))

    def test_configured_queue_is_used(self, payload: MatchPayload, ended: datetime) -> None:
        flex_only = Settings(RANKED_QUEUE_ID=440)
        with capture_logs() as logs:
            assert not should_score_match(payload, flex_only, now=ended + timedelta(hours=1))
        assert logs[0]["event"] == "match_skipped"
        assert logs[0]["reason"] == "queue"

        flex_match = _payload([_participant(NOOB_PUUID)], queueId=440)
        assert should_score_match(flex_match, flex_only, now=ended + timedelta(hours=1))

    def test_configured_max_age_is_used(self, payload: MatchPayload, ended: datetime) -> None:
        six_hours_later = ended + timedelta(hours=6)
        with capture_logs() as logs:
            assert not should_score_match(payload, Settings(), now=six_hours_later)
        assert logs[0]["reason"] == "too_old"

        assert should_score_match(payload, Settings(MATCH_MAX_AGE_HOURS=24), now=six_hours_later)


class TestFindDuo:
    def test_same_team(self, payload: MatchPayload) -> None:
        found = find_duo_participants(payload, NOOB_PUUID, CARRY_PUUID)
        assert found is not None
        assert [p.puuid for p in found] == [NOOB_PUUID, CARRY_PUUID]

    def test_missing_player(self, payload: MatchPayload) -> None:
        assert find_duo_participants(payload, NOOB_PUUID, "stranger") is None

    def test_opposite_teams(self) -> None:
        match = _payload([_participant(NOOB_PUUID), _participant(CARRY_PUUID, team_id=200, win=False)])
        assert find_duo_participants(match, NOOB_PUUID, CARRY_PUUID) is None


class TestBuildGameData:
    def test_maps_participants(
        self, payload: MatchPayload, noob: PlayerRegistration, carry: PlayerRegistration
    ) -> None:
        game = build_game_data(payload, noob, carry, SILVER_I, EMERALD_III)

        assert game is not None
        assert game.match_id == "EUW1_6543210"
        assert game.duration == 1650
        assert game.win is True
        assert game.started_at == datetime.fromtimestamp(START_MS / 1000, tz=UTC)

        assert game.noob_stats.kda_display == "1/2/17"
        assert game.noob_stats.peak_elo == "G2"
        assert game.noob_stats.new_rank == SILVER_I
        assert game.noob_stats.is_off_role is False
        assert game.noob_stats.is_off_champion is False

        assert game.carry_stats.triple_kills == 1
        assert game.carry_stats.first_blood_kill is True
        assert game.carry_stats.peak_elo is None
        assert game.carry_stats.new_rank == EMERALD_III

    def test_result_is_scorable(
        self, payload: MatchPayload, noob: PlayerRegistration, carry: PlayerRegistration
    ) -> None:
        game = build_game_data(payload, noob, carry, SILVER_I, EMERALD_III)
        assert game is not None
        breakdown = compute_game_score(game, 0, 0)
        assert not breakdown.is_remake_or_early_game

    def test_off_role_and_champion_flags(self, noob: PlayerRegistration, carry: PlayerRegistration) -> None:
        match = _payload(
            [
                _participant(NOOB_PUUID, championName="Garen", teamPosition="TOP"),
                _participant(CARRY_PUUID, championName="Zed"),
            ]
        )
        game = build_game_data(match, noob, carry, SILVER_I, EMERALD_III)
        assert game is not None
        assert game.noob_stats.is_off_role and game.noob_stats.is_off_champion
        assert not game.carry_stats.is_off_role
        assert game.carry_stats.is_off_champion

    def test_early_surrender_is_a_remake(self, noob: PlayerRegistration, carry: PlayerRegistration) -> None:
        match = _payload(
            [
                _participant(NOOB_PUUID, win=False, gameEndedInEarlySurrender=True),
                _participant(CARRY_PUUID, win=False, gameEndedInEarlySurrender=True),
            ],
            gameDuration=210,
        )
        game = build_game_data(match, noob, carry, SILVER_I, EMERALD_III)
        assert game is not None
        assert game.remake is True
        assert game.surrender is False

    def test_duo_not_together(self, noob: PlayerRegistration, carry: PlayerRegistration) -> None:
        match = _payload([_participant(NOOB_PUUID)])
        with capture_logs() as logs:
            assert build_game_data(match, noob, carry, SILVER_I, EMERALD_III) is None
        assert logs[0]["event"] == "duo_not_in_match"
        assert logs[0]["match_id"] == "EUW1_6543210"

    def test_surrendered_win_is_logged(self, noob: PlayerRegistration, carry: PlayerRegistration) -> None:
        match = _payload(
            [
                _participant(NOOB_PUUID, gameEndedInSurrender=True),
                _participant(CARRY_PUUID, gameEndedInSurrender=True),
            ]
        )
        with capture_logs() as logs:
            game = build_game_data(match, noob, carry, SILVER_I, EMERALD_III)
        assert game is not None
        assert game.surrender and game.win
        assert [entry["event"] for entry in logs] == ["surrendered_win"]

    def test_bad_peak_elo_fails_fast(self, payload: MatchPayload, carry: PlayerRegistration) -> None:
        noob = PlayerRegistration(puuid=NOOB_PUUID, role=Role.NOOB, peak_elo="Gold 2")
        with pytest.raises(InvalidRankString):
            build_game_data(payload, noob, carry, SILVER_I, EMERALD_III)

    def test_negative_counter_fails_fast(self, noob: PlayerRegistration, carry: PlayerRegistration) -> None:
        match = _payload([_participant(NOOB_PUUID), _participant(CARRY_PUUID, assists=-3)])
        with pytest.raises(MalformedGameStats) as exc_info:
            build_game_data(match, noob, carry, SILVER_I, EMERALD_III)
        assert exc_info.value.field == "carry_stats.assists"
