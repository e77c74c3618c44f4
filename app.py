import io
import logging
import sys
from datetime import datetime
from typing import Optional

import aiohttp
import colorama
import discord
from discord.ext import commands
from dotenv import load_dotenv

from bot_config import ConfigError, Settings
from health_server import start_health_server
from lookup_service import PlayerLookupService
from tracker_api import TrackerClient

logger = logging.getLogger(__name__)

EXTENSIONS = [
    "cogs.player_lookup",
]

def setup_logging(level: str = 'INFO'):
    """Configure a compact, emoji-based console logger and reduce noise.

    Returns a module logger (logging.getLogger(__name__)).
    """
    RESET = colorama.Style.RESET_ALL
    COLORS = {
        'DEBUG': colorama.Fore.CYAN,
        'INFO': colorama.Fore.GREEN,
        'WARNING': colorama.Fore.YELLOW,
        'ERROR': colorama.Fore.RED,
        'CRITICAL': colorama.Fore.MAGENTA,
    }
    LEVEL_EMOJI = {
        'DEBUG': '🔎',
        'INFO': 'ℹ️',
        'WARNING': '⚠️',
        'ERROR': '❌',
        'CRITICAL': '💥',
    }

    class CleanFormatter(logging.Formatter):
        def format(self, record: logging.LogRecord) -> str:
            ts = datetime.now().strftime('%H:%M:%S')
            lvl = record.levelname
            name = record.name
            # shorten common long logger names for readability
            if name.startswith('discord'):
                name = 'discord'
            if name == '__main__' or name == __name__:
                name = 'main'
            message = super().format(record)
            return f"{COLORS.get(lvl, '')}{LEVEL_EMOJI.get(lvl, '')} {ts} [{lvl}] {name}: {message}{RESET}"

    # remove any pre-configured handlers (avoids duplicate lines)
    root = logging.getLogger()
    for h in list(root.handlers):
        root.removeHandler(h)

    # Windows consoles often default to cp1252, which can't encode the emojis
    if isinstance(sys.stdout, io.TextIOWrapper):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    # Windows consoles need colorama to translate the escape codes
    colorama.init()
    sh = logging.StreamHandler(stream=sys.stdout)
    sh.setFormatter(CleanFormatter('%(message)s'))
    root.addHandler(sh)
    root.setLevel(getattr(logging, level.upper(), logging.INFO))

    for noisy in ('discord.http', 'discord.gateway', 'aiohttp.access', 'asyncio'):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    return logging.getLogger(__name__)

class PlayerTrackerBot(commands.Bot):
    """Bot process owning the HTTP session and the lookup service."""

    def __init__(self, settings: Settings):
        intents = discord.Intents.default()
        super().__init__(
            command_prefix=commands.when_mentioned,
            intents=intents,
            application_id=settings.client_id,
        )
        self.settings = settings
        self.http_session: Optional[aiohttp.ClientSession] = None
        self.lookup_service: Optional[PlayerLookupService] = None
        self.health_runner = None

    async def setup_hook(self):
        """Open the tracker session and load cogs before connecting."""
        self.http_session = aiohttp.ClientSession()
        tracker = TrackerClient(
            self.http_session,
            self.settings.worker_url,
            timeout=self.settings.tracker_timeout,
        )
        self.lookup_service = PlayerLookupService(tracker)

        loaded_count = 0
        for ext in EXTENSIONS:
            await self.load_extension(ext)
            logger.info("✅ Loaded %s", ext)
            loaded_count += 1
        logger.info("📦 Cog loading complete: %d loaded", loaded_count)

        if self.settings.health_server_enabled:
            self.health_runner = await start_health_server(self, self.settings.port)

    async def sync_commands(self):
        """Register slash commands; guild-scoped when DEV_GUILD_ID is set.

        Syncing replaces the remote command set, so repeating it is harmless.
        """
        if self.settings.dev_guild_id:
            guild = discord.Object(id=self.settings.dev_guild_id)
            self.tree.copy_global_to(guild=guild)
            synced = await self.tree.sync(guild=guild)
            logger.info("✅ Synced %d commands to guild %s", len(synced), self.settings.dev_guild_id)
        else:
            synced = await self.tree.sync()
            logger.info("✅ Synced %d commands globally", len(synced))
        return synced

    async def on_ready(self):
        logger.info("🤖 Logged in as %s (ID: %s)", self.user, self.user.id)
        logger.info("📊 Connected to %d guild(s)", len(self.guilds))
        try:
            await self.sync_commands()
        except discord.HTTPException as e:
            logger.error("❌ Failed to sync commands: %s", e)

    async def close(self):
        try:
            if self.health_runner is not None:
                await self.health_runner.cleanup()
        finally:
            self.health_runner = None
            try:
                if self.http_session is not None and not self.http_session.closed:
                    await self.http_session.close()
            finally:
                await super().close()

def main() -> int:
    load_dotenv()
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        setup_logging()
        logger.error("❌ Invalid configuration: %s", e)
        return 1

    setup_logging(settings.log_level)
    bot = PlayerTrackerBot(settings)
    # our own handlers are already installed
    bot.run(settings.discord_token, log_handler=None)
    return 0

if __name__ == "__main__":
    sys.exit(main())
