"""Game commands for bomb party bot."""

import asyncio
import logging
from typing import Callable, Optional, Set

import discord
from discord import app_commands
from discord.ext import commands

from data.word_lists import WordData
from game.engine import TurnEngine
from game.events import (
    ConfigUpdated,
    GameEvent,
    GameLost,
    GameWon,
    NoSessionError,
    PlayerAlreadyJoined,
    PlayerEliminated,
    PlayerJoined,
    SessionAlreadyExists,
    SessionAlreadyRunning,
    SessionCreated,
    SessionEnded,
    TurnAnnouncement,
    TurnFailed,
    TurnSucceeded,
)
from game.objectives import ObjectiveGenerator
from game.session import Player, SessionKey
from game.session_manager import SessionRegistry, SessionStatus, session_registry
from utils.embeds import (
    create_config_embed,
    create_everyone_eliminated_embed,
    create_session_created_embed,
    create_turn_embed,
    create_winner_embed,
)
from utils.formatters import format_points, format_seconds
import config

logger = logging.getLogger(__name__)


def mention(user_id: int) -> str:
    return f"<@{user_id}>"


def event_text(event: GameEvent) -> str:
    """Plain-text rendering of events that don't get an embed."""
    if isinstance(event, SessionCreated):
        return f"💣 {mention(event.user_id)} created a new game!"
    if isinstance(event, SessionAlreadyExists):
        return "❌ There's already a game going on in this channel!"
    if isinstance(event, PlayerJoined):
        return f"✅ {mention(event.user_id)} has joined the game!"
    if isinstance(event, PlayerAlreadyJoined):
        return "❌ You have already joined this game!"
    if isinstance(event, NoSessionError):
        return "❌ No game is going on in this channel! Use `/bomb_new` to create a new game."
    if isinstance(event, SessionAlreadyRunning):
        return "❌ The game in this channel is already running!"
    if isinstance(event, ConfigUpdated):
        if event.setting == 'weights':
            return "⚙️ Distribution set to " + ", ".join(
                f"{name}: {weight}" for name, weight in zip(config.POOL_NAMES, event.value)
            )
        return f"⚙️ {event.setting.capitalize()} has been set to {event.value}!"
    if isinstance(event, TurnAnnouncement):
        return (
            f"{mention(event.user_id)}, it's your turn! Write a word that contains "
            f"**{event.objective.upper()}**. You have {format_seconds(event.timeout)}."
        )
    if isinstance(event, TurnSucceeded):
        return f"✅ Correct! You get {format_points(event.points_awarded)}."
    if isinstance(event, TurnFailed):
        return f"💥 Too bad! -1 health ({event.health} left)"
    if isinstance(event, PlayerEliminated):
        return f"☠️ {mention(event.user_id)} has been eliminated!"
    if isinstance(event, SessionEnded):
        return "The game is over. Use `/bomb_new` to play again!"
    return ""


class ChannelTransport:
    """Sends session events to a text channel and collects answers from it."""

    def __init__(self, bot: commands.Bot, channel: discord.abc.Messageable):
        self.bot = bot
        self.channel = channel

    def display_name(self, user_id: int) -> str:
        guild = getattr(self.channel, 'guild', None)
        member = guild.get_member(user_id) if guild else None
        if member:
            return member.display_name
        user = self.bot.get_user(user_id)
        return user.name if user else str(user_id)

    async def publish(self, event: GameEvent) -> None:
        if isinstance(event, TurnAnnouncement):
            embed = create_turn_embed(
                self.display_name(event.user_id),
                event.objective,
                event.health,
                event.points,
                event.target
            )
            await self.channel.send(event_text(event), embed=embed)
        elif isinstance(event, GameWon):
            await self.channel.send(embed=create_winner_embed(mention(event.user_id), event.points))
        elif isinstance(event, GameLost):
            await self.channel.send(embed=create_everyone_eliminated_embed())
        else:
            await self.channel.send(event_text(event))

    async def wait_for_answer(
        self,
        user_id: int,
        predicate: Callable[[str], bool],
        timeout: float
    ) -> Optional[str]:
        def check(message: discord.Message) -> bool:
            return (
                message.author.id == user_id
                and message.channel.id == self.channel.id
                and predicate(message.content)
            )

        try:
            message = await self.bot.wait_for('message', check=check, timeout=timeout)
        except asyncio.TimeoutError:
            return None
        return message.content


class GameCommands(commands.Cog):
    """Commands to create, configure and start bomb party games."""

    def __init__(
        self,
        bot: commands.Bot,
        word_data: WordData,
        registry: SessionRegistry = session_registry
    ):
        self.bot = bot
        self.word_data = word_data
        self.registry = registry
        self.generator = ObjectiveGenerator(
            word_data.bigrams,
            word_data.trigrams,
            word_data.quadgrams
        )
        self.session_tasks: Set[asyncio.Task] = set()

    @staticmethod
    def session_key(interaction: discord.Interaction) -> SessionKey:
        return SessionKey(interaction.guild_id, interaction.channel_id)

    async def _reply(self, interaction: discord.Interaction, event: GameEvent, ephemeral: bool = True):
        await interaction.response.send_message(event_text(event), ephemeral=ephemeral)

    async def _reply_config(self, interaction: discord.Interaction, status: SessionStatus, event: ConfigUpdated):
        if status == SessionStatus.CONFIG_UPDATED:
            await self._reply(interaction, event, ephemeral=False)
        elif status == SessionStatus.NO_SESSION:
            await self._reply(interaction, NoSessionError())
        elif status == SessionStatus.ALREADY_RUNNING:
            await self._reply(interaction, SessionAlreadyRunning())
        elif status == SessionStatus.TIMEOUT_TOO_LONG:
            await interaction.response.send_message(
                f"❌ Timeout must be at most {config.MAX_TIMEOUT} seconds!",
                ephemeral=True
            )
        elif status == SessionStatus.INVALID_WEIGHTS:
            await interaction.response.send_message(
                "❌ At least one weight must be greater than 0!",
                ephemeral=True
            )

    @app_commands.command(name="bomb_new", description="Create a new bomb party game in this channel")
    @app_commands.guild_only()
    async def new(self, interaction: discord.Interaction):
        """Create a new game."""
        status = await self.registry.create(self.session_key(interaction), Player(interaction.user.id))

        if status == SessionStatus.CREATED:
            logger.info("Game created in %s by %s", self.session_key(interaction), interaction.user.id)
            await interaction.response.send_message(
                event_text(SessionCreated(interaction.user.id)),
                embed=create_session_created_embed(interaction.user.mention)
            )
        else:
            await self._reply(interaction, SessionAlreadyExists())

    @app_commands.command(name="bomb_join", description="Join the game before it starts")
    @app_commands.guild_only()
    async def join(self, interaction: discord.Interaction):
        """Join a game before it starts."""
        user_id = interaction.user.id
        status = await self.registry.join(self.session_key(interaction), Player(user_id))

        if status == SessionStatus.JOINED:
            await self._reply(interaction, PlayerJoined(user_id), ephemeral=False)
        elif status == SessionStatus.ALREADY_JOINED:
            await self._reply(interaction, PlayerAlreadyJoined(user_id))
        elif status == SessionStatus.ALREADY_RUNNING:
            await self._reply(interaction, SessionAlreadyRunning())
        else:
            await self._reply(interaction, NoSessionError())

    @app_commands.command(name="bomb_target", description="Set the points needed to win")
    @app_commands.describe(points="Points needed to win")
    @app_commands.guild_only()
    async def target(
        self,
        interaction: discord.Interaction,
        points: app_commands.Range[int, 1, config.MAX_TARGET]
    ):
        """Set the target point for a game before it starts."""
        status = await self.registry.set_target(self.session_key(interaction), points)
        await self._reply_config(interaction, status, ConfigUpdated('target', points))

    @app_commands.command(name="bomb_timeout", description="Set the seconds each player gets per turn")
    @app_commands.describe(seconds=f"Seconds per turn (at most {config.MAX_TIMEOUT})")
    @app_commands.guild_only()
    async def timeout(
        self,
        interaction: discord.Interaction,
        seconds: app_commands.Range[int, 1]
    ):
        """Set the timeout for a game before it starts."""
        status = await self.registry.set_timeout(self.session_key(interaction), seconds)
        await self._reply_config(interaction, status, ConfigUpdated('timeout', seconds))

    @app_commands.command(name="bomb_weights", description="Set how often 2, 3 and 4 letter objectives come up")
    @app_commands.describe(
        bigrams="Weight of 2-letter objectives",
        trigrams="Weight of 3-letter objectives",
        quadgrams="Weight of 4-letter objectives"
    )
    @app_commands.guild_only()
    async def weights(
        self,
        interaction: discord.Interaction,
        bigrams: app_commands.Range[int, 0],
        trigrams: app_commands.Range[int, 0],
        quadgrams: app_commands.Range[int, 0]
    ):
        """Set the objective distribution for a game before it starts."""
        weights = (bigrams, trigrams, quadgrams)
        status = await self.registry.set_weights(self.session_key(interaction), weights)
        await self._reply_config(interaction, status, ConfigUpdated('weights', weights))

    @app_commands.command(name="bomb_info", description="Show the configuration of the game in this channel")
    @app_commands.guild_only()
    async def info(self, interaction: discord.Interaction):
        """Show the game configuration."""
        status, state = await self.registry.get_info(self.session_key(interaction))
        if status == SessionStatus.NO_SESSION:
            await self._reply(interaction, NoSessionError())
            return

        transport = ChannelTransport(self.bot, interaction.channel)
        names = [transport.display_name(p.user_id) for p in state.players]
        await interaction.response.send_message(embed=create_config_embed(state, names))

    @app_commands.command(name="bomb_start", description="Start the game. There's no going back!")
    @app_commands.guild_only()
    async def start(self, interaction: discord.Interaction):
        """Start the game in this channel."""
        key = self.session_key(interaction)
        status, state = await self.registry.try_start(key)

        if status == SessionStatus.NO_SESSION:
            await self._reply(interaction, NoSessionError())
            return
        if status == SessionStatus.ALREADY_RUNNING:
            await self._reply(interaction, SessionAlreadyRunning())
            return

        engine = TurnEngine(
            key,
            state,
            self.registry,
            self.generator,
            self.word_data.words,
            ChannelTransport(self.bot, interaction.channel)
        )
        try:
            await interaction.response.send_message(
                f"💣 Starting the game with {len(state.players)} player(s)! "
                f"First to {format_points(state.target)} wins."
            )
        except Exception:
            # No engine will ever free this channel, so do it here
            await self.registry.remove(key)
            raise

        task = asyncio.create_task(engine.run(), name=f"bomb-party-{key.guild_id}-{key.channel_id}")
        self.session_tasks.add(task)
        task.add_done_callback(self._session_done)

    def _session_done(self, task: asyncio.Task):
        self.session_tasks.discard(task)
        if task.cancelled():
            logger.warning("Session task %s was cancelled", task.get_name())
            return
        error = task.exception()
        if error is not None:
            logger.error("Session task %s failed", task.get_name(), exc_info=error)
        else:
            logger.info("Session task %s finished: %s", task.get_name(), task.result().value)

    async def cog_unload(self):
        for task in list(self.session_tasks):
            task.cancel()


async def setup(bot: commands.Bot):
    """Load the cog."""
    await bot.add_cog(GameCommands(bot, bot.word_data))
