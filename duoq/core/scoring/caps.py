"""Score caps.

Per player / game: [-40, +60]
Per duo / game:    [-70, +120]

Clamping never rounds; rounding happens after the peak multiplier (player)
and after the duo clamp (duo).
"""

from typing import Final

PLAYER_MIN: Final[int] = -40
PLAYER_MAX: Final[int] = 60

DUO_MIN: Final[int] = -70
DUO_MAX: Final[int] = 120


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def apply_player_cap(score: float) -> float:
    return _clamp(score, PLAYER_MIN, PLAYER_MAX)


def apply_duo_cap(score: float) -> float:
    return _clamp(score, DUO_MIN, DUO_MAX)
