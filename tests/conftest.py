"""Pytest configuration and shared factories for duoq tests."""

from collections.abc import Callable
from typing import Any

import pytest
import structlog

from duoq.contracts.common import Division, Tier
from duoq.contracts.game import GameData, PlayerGameStats
from duoq.contracts.rank import RankInfo


@pytest.fixture(autouse=True)
def _reset_structlog() -> Any:
    """Undo any logging configuration a test applied."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def gold_iv() -> RankInfo:
    return RankInfo(tier=Tier.GOLD, division=Division.DIV_IV, league_points=40)


@pytest.fixture
def make_stats(gold_iv: RankInfo) -> Callable[..., PlayerGameStats]:
    """Factory for PlayerGameStats with quiet defaults (no bonuses, no peak)."""

    def _make(kills: int = 0, deaths: int = 0, assists: int = 0, **overrides: Any) -> PlayerGameStats:
        fields: dict[str, Any] = {
            "kills": kills,
            "deaths": deaths,
            "assists": assists,
            "new_rank": gold_iv,
        }
        fields.update(overrides)
        return PlayerGameStats(**fields)

    return _make


@pytest.fixture
def make_game(make_stats: Callable[..., PlayerGameStats]) -> Callable[..., GameData]:
    """Factory for GameData: a 25 minute win unless told otherwise."""

    def _make(
        noob: PlayerGameStats | None = None,
        carry: PlayerGameStats | None = None,
        **overrides: Any,
    ) -> GameData:
        fields: dict[str, Any] = {
            "noob_stats": noob or make_stats(5, 5, 5),
            "carry_stats": carry or make_stats(5, 5, 5),
            "win": True,
            "duration": 1500,
            "surrender": False,
            "remake": False,
        }
        fields.update(overrides)
        return GameData(**fields)

    return _make
