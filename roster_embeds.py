"""Discord replies for player lookups.

Colours and status dots mirror what the tracker site uses: green for
online, red for offline (and for the not-found context).
"""

from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import discord

from player_lookup import format_score, list_players
from tracker_api import Player

ONLINE_COLOR = 0x00C853
OFFLINE_COLOR = 0xFF1744

ONLINE_DOT = "🟢"
OFFLINE_DOT = "🔴"

# Discord limits, minus headroom for title, footer and the "more" line
PAGE_LIMIT = 2000
MESSAGE_BUDGET = 5600
EMBEDS_PER_MESSAGE = 10


@dataclass
class Reply:
    """What a command sends back: plain text, embeds, or both."""

    content: Optional[str] = None
    embeds: List[discord.Embed] = field(default_factory=list)

    @classmethod
    def text(cls, content: str) -> "Reply":
        return cls(content=content)

    def send_kwargs(self) -> dict:
        kwargs = {}
        if self.content is not None:
            kwargs["content"] = self.content
        if self.embeds:
            kwargs["embeds"] = self.embeds
        return kwargs


def status_dot(online: bool) -> str:
    return ONLINE_DOT if online else OFFLINE_DOT


def status_text(online: bool) -> str:
    return "Online" if online else "Offline"


def status_color(online: bool) -> int:
    return ONLINE_COLOR if online else OFFLINE_COLOR


def _field(value: Optional[str]) -> str:
    return value if value is not None else "Unknown"


def player_line(player: Player) -> str:
    return (
        f"{status_dot(player.is_online)} Player: {_field(player.real_name)}"
        f" | Server: {_field(player.server_name)}"
        f" | Username: {_field(player.in_game_name)}"
        f" | Team: {_field(player.team_name)}"
        f" | Score: {format_score(player.score)}"
    )


def player_embed(player: Player) -> discord.Embed:
    online = player.is_online
    embed = discord.Embed(color=status_color(online), description=player_line(player))
    embed.set_footer(text=f"Status: {status_text(online)}")
    embed.timestamp = discord.utils.utcnow()
    return embed


def player_paragraph(player: Player, online: bool) -> str:
    name = _field(player.real_name)
    return (
        f"{status_dot(online)} **{name}** ({_field(player.in_game_name)})\n"
        f"Server: {_field(player.server_name)} | Team: {_field(player.team_name)}"
        f" | Score: {format_score(player.score)}"
    )


def _pack_pages(paragraphs: Sequence[str], limit: int) -> List[List[str]]:
    """Group paragraphs so each page joined by blank lines fits ``limit``."""
    pages: List[List[str]] = []
    current: List[str] = []
    size = 0
    for para in paragraphs:
        para = para[:limit]
        extra = len(para) + (2 if current else 0)
        if current and size + extra > limit:
            pages.append(current)
            current, size = [], 0
            extra = len(para)
        current.append(para)
        size += extra
    if current:
        pages.append(current)
    return pages


def roster_embeds(players: Sequence[Player]) -> List[discord.Embed]:
    """Render the full roster, in received order, as one or more embeds.

    Paragraphs are packed into pages; pages are kept while the message stays
    inside Discord's per-embed and per-message limits, and whatever does not
    fit is summarised on the last page.
    """
    entries = list_players(players)
    online_count = sum(1 for _, online in entries if online)
    offline_count = len(entries) - online_count

    paragraphs = [player_paragraph(p, online) for p, online in entries]
    pages = _pack_pages(paragraphs, PAGE_LIMIT)

    kept: List[List[str]] = []
    used = 0
    for page in pages:
        size = len("\n\n".join(page))
        if len(kept) >= EMBEDS_PER_MESSAGE or used + size > MESSAGE_BUDGET:
            break
        kept.append(page)
        used += size
    hidden = len(paragraphs) - sum(len(page) for page in kept)

    color = ONLINE_COLOR if online_count else OFFLINE_COLOR
    embeds = []
    for index, page in enumerate(kept):
        description = "\n\n".join(page)
        if hidden and index == len(kept) - 1:
            description += f"\n\n…and {hidden} more"
        embed = discord.Embed(color=color, description=description)
        if index == 0:
            embed.title = f"Players ({len(entries)})"
        embeds.append(embed)

    if embeds:
        embeds[-1].set_footer(text=f"{online_count} online · {offline_count} offline")
        embeds[-1].timestamp = discord.utils.utcnow()
    return embeds
