import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Union

import aiohttp

logger = logging.getLogger(__name__)

# How much of a non-JSON body is kept for diagnostics
BODY_SNIPPET_LIMIT = 200

Number = Union[int, float]


class TrackerError(Exception):
    """Base class for failures talking to the player tracker."""


class TransportError(TrackerError):
    """The tracker could not be reached (DNS, refused connection, timeout...)."""


class ParseError(TrackerError):
    """The tracker answered with something that is not JSON."""

    def __init__(self, snippet: str):
        self.snippet = snippet
        super().__init__(f"Bad JSON: {snippet}")


def _text_or_none(value: Any) -> Optional[str]:
    return value if isinstance(value, str) else None


def _score(value: Any) -> Number:
    # bool is an int subclass; a stray true/false is not a score
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return value
    return 0


@dataclass(frozen=True)
class Player:
    """One roster entry as reported by the tracker."""

    real_name: Optional[str] = None
    in_game_name: Optional[str] = None
    server_name: Optional[str] = None
    team_name: Optional[str] = None
    score: Number = 0
    status: str = "offline"

    @property
    def is_online(self) -> bool:
        return self.status == "online"

    @classmethod
    def from_payload(cls, data: dict) -> "Player":
        return cls(
            real_name=_text_or_none(data.get("realName")),
            in_game_name=_text_or_none(data.get("inGameName")),
            server_name=_text_or_none(data.get("serverName")),
            team_name=_text_or_none(data.get("teamName")),
            score=_score(data.get("score")),
            status=data.get("status") if isinstance(data.get("status"), str) else "offline",
        )


@dataclass(frozen=True)
class RosterResponse:
    """Parsed ``?action=list`` body. ``players`` is None when the key is absent."""

    success: bool
    players: Optional[List[Player]] = field(default=None)

    @classmethod
    def from_payload(cls, payload: Any) -> "RosterResponse":
        if not isinstance(payload, dict):
            return cls(success=False)

        raw_players = payload.get("players")
        players = None
        if isinstance(raw_players, list):
            players = [Player.from_payload(p) for p in raw_players if isinstance(p, dict)]

        return cls(success=bool(payload.get("success")), players=players)


def build_roster_url(base_url: str) -> str:
    """Return ``<base_url>/?action=list`` without doubling the slash."""
    return f"{base_url.rstrip('/')}/?action=list"


class TrackerClient:
    """Thin client for the player tracker worker.

    The session is owned by whoever created it (the bot lifecycle); this
    class never opens or closes it.
    """

    def __init__(self, session: aiohttp.ClientSession, base_url: str, timeout: float = 15.0):
        self.session = session
        self.base_url = base_url
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    @property
    def roster_url(self) -> str:
        return build_roster_url(self.base_url)

    async def fetch_roster(self) -> RosterResponse:
        """Fetch the current roster. One attempt, no retries."""
        url = self.roster_url
        try:
            async with self.session.get(url, timeout=self.timeout) as resp:
                body = await resp.text(errors="replace")
                if resp.status != 200:
                    logger.warning("tracker returned HTTP %s for %s", resp.status, url)
        except asyncio.TimeoutError as e:
            raise TransportError(f"timed out after {self.timeout.total}s reaching {url}") from e
        except aiohttp.ClientError as e:
            raise TransportError(f"could not reach {url}: {e}") from e

        try:
            payload = json.loads(body)
        except ValueError as e:
            raise ParseError(body[:BODY_SNIPPET_LIMIT]) from e

        roster = RosterResponse.from_payload(payload)
        logger.debug(
            "roster fetched: success=%s players=%s",
            roster.success,
            len(roster.players) if roster.players is not None else None,
        )
        return roster
