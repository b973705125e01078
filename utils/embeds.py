"""Discord embed builders for bot responses."""

import discord

from game.session import GameState
from utils.formatters import format_list, format_points, format_seconds
import config

AUTHOR_NAME = "💣 Bomb Party"


def create_session_created_embed(player_mention: str) -> discord.Embed:
    """Create embed for a newly created session."""
    embed = discord.Embed(
        title="💣 A new game has been created!",
        description=f"Created by {player_mention}",
        color=discord.Color.green()
    )
    embed.set_author(name=AUTHOR_NAME)
    embed.add_field(
        name="Available Commands",
        value=(
            "• `/bomb_join` - Join the game\n"
            "• `/bomb_target` - Points needed to win\n"
            "• `/bomb_timeout` - Seconds per turn\n"
            "• `/bomb_weights` - Bigram / trigram / quadgram mix\n"
            "• `/bomb_info` - Show the configuration\n"
            "• `/bomb_start` - Start the game (there's no going back!)"
        ),
        inline=False
    )
    return embed


def create_turn_embed(
    player_name: str,
    objective: str,
    health: int,
    points: int,
    target: int
) -> discord.Embed:
    """Create embed announcing a player's turn."""
    embed = discord.Embed(
        title=f"{player_name}'s turn",
        color=discord.Color.orange()
    )
    embed.set_author(name=AUTHOR_NAME)
    embed.add_field(
        name="Objective",
        value=f"**{objective.upper()}**",
        inline=False
    )
    embed.add_field(name="Health", value="❤️" * health or "0", inline=True)
    embed.add_field(name="Points", value=format_points(points), inline=True)
    embed.add_field(name="Target", value=format_points(target), inline=True)
    return embed


def create_config_embed(game: GameState, player_names: list) -> discord.Embed:
    """Create embed showing a session's configuration."""
    distribution = "\n".join(
        f"{name}: {weight}"
        for name, weight in zip(config.POOL_NAMES, game.weights)
    )

    embed = discord.Embed(
        title="Game configuration",
        color=discord.Color.blue()
    )
    embed.set_author(name=AUTHOR_NAME)
    embed.add_field(name="Distribution", value=distribution, inline=True)
    embed.add_field(name="Target", value=format_points(game.target), inline=True)
    embed.add_field(name="Health", value=str(config.DEFAULT_HEALTH), inline=True)
    embed.add_field(name="Timeout", value=format_seconds(game.timeout), inline=True)
    embed.add_field(
        name=f"Players ({len(player_names)})",
        value=format_list(player_names) or "Nobody yet",
        inline=False
    )
    if game.running:
        embed.set_footer(text="This game is already running.")
    return embed


def create_winner_embed(player_mention: str, points: int) -> discord.Embed:
    """Create embed for the end of a won game."""
    embed = discord.Embed(
        title="🏆 We have a winner! 🏆",
        description=f"Congrats, {player_mention}! You won with {format_points(points)}!",
        color=discord.Color.gold()
    )
    embed.set_author(name=AUTHOR_NAME)
    return embed


def create_everyone_eliminated_embed() -> discord.Embed:
    """Create embed for a game where nobody survived."""
    embed = discord.Embed(
        title="💥 Everybody died!",
        description="Nobody wins this time. You all lose!",
        color=discord.Color.red()
    )
    embed.set_author(name=AUTHOR_NAME)
    embed.set_footer(text="Use /bomb_new to try again!")
    return embed
