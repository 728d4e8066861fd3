"""KDA scoring.

P_base = 1.0*K + 0.5*A - 1.0*D
- Noob (bonus):  P_KDA = P_base + 0.5*K + 0.25*A
- Carry (malus): P_KDA = P_base - 0.5*D

No clamping here; values stay unbounded until the caps run.
"""

from duoq.contracts.common import Role
from duoq.core.scoring.models import KdaScore


def calculate_kda(kills: int, deaths: int, assists: int, role: Role) -> KdaScore:
    """Compute the role-adjusted KDA score for one player."""
    base = 1.0 * kills + 0.5 * assists - 1.0 * deaths

    if role is Role.NOOB:
        role_adjustment = 0.5 * kills + 0.25 * assists
    else:
        role_adjustment = -0.5 * deaths

    return KdaScore(base=base, role_adjustment=role_adjustment, final=base + role_adjustment)
