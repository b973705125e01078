"""Main entry point for Bomb Party Bot."""

import asyncio
import logging
import os
import sys

from dotenv import load_dotenv

from bot.client import create_bot
from bot.events import setup_events
from data.word_lists import WordDataError, load_word_data
from utils.logging import setup_logging

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


async def main():
    """Main function to start the bot."""
    setup_logging()

    # Objectives and answers are meaningless without word data
    try:
        word_data = load_word_data()
    except WordDataError:
        logger.exception("Could not load word data")
        sys.exit(1)
    logger.info(
        "Loaded %d words, %d bigrams, %d trigrams, %d quadgrams",
        len(word_data.words),
        len(word_data.bigrams),
        len(word_data.trigrams),
        len(word_data.quadgrams)
    )

    # Create bot
    bot = create_bot(word_data)

    # Setup events
    setup_events(bot)

    # Load cogs
    await bot.load_extension('cogs.game_commands')

    # Get token
    token = os.getenv("DISCORD_TOKEN")
    if not token:
        logger.error("DISCORD_TOKEN not found in environment variables!")
        logger.error("Please create a .env file with your Discord bot token.")
        return

    # Start bot
    logger.info("Starting bot...")
    async with bot:
        await bot.start(token)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Bot stopped by user.")
