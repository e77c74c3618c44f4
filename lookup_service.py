"""Command handlers for player lookups.

Every error path ends here as a reply; nothing raised while serving one
command escapes to the Discord layer.
"""

import logging
from typing import Awaitable, Callable, Dict, Optional

from player_lookup import find_player, normalize_query
from roster_embeds import Reply, player_embed, roster_embeds
from tracker_api import ParseError, RosterResponse, TrackerClient, TransportError

logger = logging.getLogger(__name__)

TRACKER_UNREACHABLE = "Could not reach the player tracker."
NO_PLAYERS_ONLINE = "No players online right now."
NOT_FOUND_TEMPLATE = "No player found matching {query}. They may be offline."
FETCH_ERROR_PREFIX = "Error fetching player data: "


def not_found_message(query: str) -> str:
    return NOT_FOUND_TEMPLATE.format(query=query)


class PlayerLookupService:
    """Fetch-match-format pipeline behind the /info and /list commands."""

    def __init__(self, tracker: TrackerClient):
        self.tracker = tracker
        self.handlers: Dict[str, Callable[..., Awaitable[Reply]]] = {
            "info": self.info,
            "list": self.list_roster,
        }

    async def dispatch(self, command: str, **options) -> Reply:
        try:
            handler = self.handlers[command]
        except KeyError:
            raise KeyError(f"no handler registered for command {command!r}") from None
        return await handler(**options)

    async def info(self, name: str) -> Reply:
        shown = (name or "").strip()
        query = normalize_query(name)
        try:
            roster = await self.tracker.fetch_roster()
            early = self._check_roster(roster)
            if early is not None:
                return early

            player = find_player(roster.players, query)
            if player is None:
                logger.info("info: no match for %r among %d players", query, len(roster.players))
                return Reply.text(not_found_message(shown))

            logger.info("info: %r matched %s", query, player.real_name or player.in_game_name)
            return Reply(embeds=[player_embed(player)])
        except Exception as e:
            return self._error_reply("info", e)

    async def list_roster(self) -> Reply:
        try:
            roster = await self.tracker.fetch_roster()
            early = self._check_roster(roster)
            if early is not None:
                return early
            logger.info("list: rendering %d players", len(roster.players))
            return Reply(embeds=roster_embeds(roster.players))
        except Exception as e:
            return self._error_reply("list", e)

    @staticmethod
    def _check_roster(roster: RosterResponse) -> Optional[Reply]:
        """Reply for a roster that cannot be used, or None when it is fine."""
        if not roster.success:
            logger.warning("tracker reported success=false")
            return Reply.text(TRACKER_UNREACHABLE)
        if not roster.players:
            return Reply.text(NO_PLAYERS_ONLINE)
        return None

    @staticmethod
    def _error_reply(command: str, error: Exception) -> Reply:
        if isinstance(error, TransportError):
            logger.error("%s: tracker unreachable: %s", command, error)
            return Reply.text(TRACKER_UNREACHABLE)
        if isinstance(error, ParseError):
            logger.error("%s: tracker sent malformed JSON: %r", command, error.snippet)
        else:
            logger.exception("%s: unexpected error while looking up players", command)
        return Reply.text(FETCH_ERROR_PREFIX + str(error))
