"""ChefBot: Twitch chat bot with tiered commands and an AI chef persona."""

__version__ = "1.0.0"
