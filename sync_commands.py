"""
Register the /info and /list slash commands and exit.

The bot also syncs on every start; use this after changing command
definitions when you don't want to restart the running bot.

Usage: python sync_commands.py [--guild GUILD_ID]
"""

import argparse
import sys
from dataclasses import replace

from dotenv import load_dotenv

from app import PlayerTrackerBot, setup_logging
from bot_config import ConfigError, Settings


class SyncOnlyBot(PlayerTrackerBot):
    """Loads the cogs, syncs once, then disconnects."""

    async def on_ready(self):
        print(f"✅ Logged in as {self.user}")
        print(f"📋 {len(self.tree.get_commands())} commands in tree")
        try:
            synced = await self.sync_commands()
            print(f"\n✅ SUCCESS! Synced {len(synced)} commands:")
            for cmd in sorted(synced, key=lambda c: c.name):
                print(f"   /{cmd.name}")
            if not self.settings.dev_guild_id:
                print("(May take up to 1 hour to propagate globally)")
        except Exception as e:
            print(f"❌ Sync failed: {e}")
        await self.close()


def sync_settings(settings: Settings, guild_id=None) -> Settings:
    """Settings for a one-shot sync: no health server, optional guild override."""
    settings = replace(settings, health_server_enabled=False)
    if guild_id:
        settings = replace(settings, dev_guild_id=guild_id)
    return settings


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Sync player tracker slash commands")
    parser.add_argument("--guild", type=int, default=None, help="sync to this guild only")
    args = parser.parse_args(argv)

    load_dotenv()
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"❌ Error: {e}")
        return 1

    settings = sync_settings(settings, args.guild)
    setup_logging(settings.log_level)
    bot = SyncOnlyBot(settings)
    bot.run(settings.discord_token, log_handler=None)
    return 0


if __name__ == "__main__":
    print("=" * 50)
    print("🤖 Discord Command Sync")
    print("=" * 50)
    sys.exit(main())
