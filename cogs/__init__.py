"""
Package initializer for the cogs package.

Makes `cogs` an explicit package so `bot.load_extension("cogs.player_lookup")`
resolves the same way from the repo root, an installed checkout, or tests.
"""

__all__ = [
    "player_lookup",
]
