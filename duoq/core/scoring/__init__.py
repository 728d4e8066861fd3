"""Duo ladder scoring - per-game point computation.

Pure domain logic (zero I/O). Pipeline order per player:
KDA -> game result -> streak -> special bonuses -> player cap ->
peak multiplier -> round; then per duo: sum -> risk bonus -> no-death
bonus -> duo cap -> round.
"""

from duoq.core.scoring.engine import compute_game_score
from duoq.core.scoring.models import Alert, AlertType, ScoreBreakdown
from duoq.core.scoring.rank_scale import format_compact, from_value, parse_compact, to_value

__all__ = [
    "compute_game_score",
    "ScoreBreakdown",
    "Alert",
    "AlertType",
    "to_value",
    "from_value",
    "parse_compact",
    "format_compact",
]
