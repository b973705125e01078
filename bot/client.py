"""Discord bot client setup."""

import discord
from discord.ext import commands

from data.word_lists import WordData


def create_bot(word_data: WordData) -> commands.Bot:
    """Create and configure Discord bot."""
    # Set up intents
    intents = discord.Intents.default()
    intents.message_content = True  # answers are read from plain messages
    intents.guilds = True
    intents.members = True

    # Create bot (command_prefix is required even if we only use slash commands)
    bot = commands.Bot(command_prefix='!', intents=intents)

    # Shared read-only word data for the game cog
    bot.word_data = word_data

    return bot
