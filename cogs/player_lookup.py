"""/info and /list slash commands.

Both commands defer first (the tracker round-trip can exceed Discord's
three-second acknowledgement window) and then send exactly one followup
built by `PlayerLookupService`.
"""

import logging

import discord
from discord import app_commands
from discord.ext import commands

from lookup_service import FETCH_ERROR_PREFIX, PlayerLookupService
from roster_embeds import Reply

logger = logging.getLogger(__name__)


class PlayerLookupCog(commands.Cog):
    """Player tracker lookups."""

    def __init__(self, bot: commands.Bot, service: PlayerLookupService):
        self.bot = bot
        self.service = service

    @app_commands.command(name="info", description="Look up a player")
    @app_commands.describe(name="Real name or in-game name")
    async def info(self, interaction: discord.Interaction, name: str):
        logger.info("/info name=%r from user=%s", name, getattr(interaction.user, "id", "unknown"))
        await self._run(interaction, "info", name=name)

    @app_commands.command(name="list", description="List all tracked players")
    async def list_players(self, interaction: discord.Interaction):
        logger.info("/list from user=%s", getattr(interaction.user, "id", "unknown"))
        await self._run(interaction, "list")

    async def _run(self, interaction: discord.Interaction, command: str, **options):
        try:
            await interaction.response.defer(thinking=True)
        except discord.errors.NotFound as e:
            # token expired before we could acknowledge; nothing can be sent
            logger.warning("/%s interaction expired before defer: %s", command, e)
            return

        try:
            reply = await self.service.dispatch(command, **options)
        except Exception as e:
            logger.exception("/%s failed", command)
            reply = Reply.text(FETCH_ERROR_PREFIX + str(e))

        try:
            # the not-found text echoes user input; never let it ping anyone
            await interaction.followup.send(
                **reply.send_kwargs(),
                allowed_mentions=discord.AllowedMentions.none(),
            )
        except discord.HTTPException as e:
            logger.error("/%s could not send reply: %s", command, e)


async def setup(bot: commands.Bot):
    """Extension entry point; expects the bot to carry a ``lookup_service``."""
    await bot.add_cog(PlayerLookupCog(bot, bot.lookup_service))
