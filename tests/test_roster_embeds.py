"""Tests for reply rendering."""

from roster_embeds import (
    EMBEDS_PER_MESSAGE,
    MESSAGE_BUDGET,
    OFFLINE_COLOR,
    ONLINE_COLOR,
    Reply,
    player_embed,
    player_line,
    roster_embeds,
)
from tracker_api import Player


TRINITY = Player("Trinity", "Tri", "S1", "Red", 1500, "online")
NEO = Player("Neo", "TheOne", "S2", "Blue", 999, "offline")


def test_player_line_online():
    line = player_line(TRINITY)
    assert line == "🟢 Player: Trinity | Server: S1 | Username: Tri | Team: Red | Score: 1.5K"


def test_player_line_offline():
    assert player_line(NEO).startswith("🔴 Player: Neo")
    assert player_line(NEO).endswith("Score: 999")


def test_player_line_missing_fields():
    line = player_line(Player(real_name="Solo", status="online"))
    assert "Server: Unknown" in line
    assert "Username: Unknown" in line


def test_player_embed_online():
    embed = player_embed(TRINITY)
    assert embed.color.value == ONLINE_COLOR
    assert embed.description == player_line(TRINITY)
    assert embed.footer.text == "Status: Online"
    assert embed.timestamp is not None


def test_player_embed_offline():
    embed = player_embed(NEO)
    assert embed.color.value == OFFLINE_COLOR
    assert embed.footer.text == "Status: Offline"


def test_roster_embed_header_and_paragraphs():
    embeds = roster_embeds([NEO, TRINITY])

    assert len(embeds) == 1
    embed = embeds[0]
    assert embed.title == "Players (2)"
    paragraphs = embed.description.split("\n\n")
    assert len(paragraphs) == 2
    assert paragraphs[0].startswith("🔴 **Neo**")
    assert paragraphs[1].startswith("🟢 **Trinity**")
    assert embed.footer.text == "1 online · 1 offline"
    assert embed.color.value == ONLINE_COLOR


def test_roster_all_offline_is_red():
    embeds = roster_embeds([NEO])
    assert embeds[0].color.value == OFFLINE_COLOR


def test_large_roster_respects_discord_limits():
    players = [
        Player(f"Player{i:04d}", f"ign{i}", "Server", "Team", i, "online")
        for i in range(1000)
    ]

    embeds = roster_embeds(players)

    assert 1 <= len(embeds) <= EMBEDS_PER_MESSAGE
    assert embeds[0].title == "Players (1000)"
    assert all(len(e.description) <= 4096 for e in embeds)
    assert sum(len(e.description) for e in embeds) <= MESSAGE_BUDGET + 64
    assert "more" in embeds[-1].description.rsplit("\n\n", 1)[-1]
    # entries stay in roster order across pages
    assert embeds[0].description.split("\n\n")[0].startswith("🟢 **Player0000**")


def test_reply_send_kwargs():
    assert Reply.text("hi").send_kwargs() == {"content": "hi"}
    embed = player_embed(TRINITY)
    assert Reply(embeds=[embed]).send_kwargs() == {"embeds": [embed]}
