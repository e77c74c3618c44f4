"""Player matching and score formatting.

Pure helpers used by the lookup service; nothing here touches the network
or Discord.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, localcontext
from typing import Iterable, List, Optional, Tuple

from tracker_api import Number, Player

_ONE_DECIMAL = Decimal("0.1")


def normalize_query(raw: Optional[str]) -> str:
    """Trim and lowercase user input before matching."""
    return (raw or "").strip().lower()


def _lower(value: Optional[str]) -> Optional[str]:
    return value.lower() if value is not None else None


def matches(player: Player, query: str) -> bool:
    """Exact or substring match on real name or in-game name.

    ``query`` must already be lowercased. Missing names never match.
    """
    real = _lower(player.real_name)
    ign = _lower(player.in_game_name)
    return (
        real == query
        or ign == query
        or (real is not None and query in real)
        or (ign is not None and query in ign)
    )


def find_player(players: Iterable[Player], query: str) -> Optional[Player]:
    """Return the first player in roster order that matches ``query``.

    Exact and substring hits are one predicate: an exact match further down
    the roster does not beat a substring match listed earlier.
    """
    if not query:
        return None
    for player in players:
        if matches(player, query):
            return player
    return None


def list_players(players: Iterable[Player]) -> List[Tuple[Player, bool]]:
    """Roster as received, each entry paired with its online flag."""
    return [(p, p.is_online) for p in players]


def format_score(score: Number) -> str:
    """1000 and up collapse to thousands with one decimal ("1.5K")."""
    if isinstance(score, float) and not math.isfinite(score):
        # JSON parsers may hand back inf/nan; show them as text
        if math.isnan(score):
            return "NaN"
        return "Infinity" if score > 0 else "-Infinity"
    if score >= 1000:
        exact = Decimal(str(score))
        # room for every integer digit plus the one decimal
        with localcontext() as ctx:
            ctx.prec = max(ctx.prec, exact.adjusted() + 3)
            thousands = (exact / 1000).quantize(_ONE_DECIMAL, rounding=ROUND_HALF_UP)
        return f"{thousands}K"
    if isinstance(score, float) and score.is_integer():
        return str(int(score))
    return str(score)
