"""Turn loop for a running bomb party session."""

import logging
from enum import Enum
from typing import AbstractSet, List

from game.events import (
    GameLost,
    GameTransport,
    GameWon,
    PlayerEliminated,
    SessionEnded,
    TurnAnnouncement,
    TurnFailed,
    TurnSucceeded,
)
from game.objectives import ObjectiveGenerator
from game.scoring import calculate_score, is_valid_answer
from game.session import GameState, Player, SessionKey
from game.session_manager import SessionRegistry

logger = logging.getLogger(__name__)


class GameOutcome(Enum):
    WON = "won"
    EVERYONE_ELIMINATED = "everyone_eliminated"


class TurnEngine:
    """Drives one started session until someone wins or everyone is out.

    The engine owns ``state`` from the moment ``try_start`` handed it over;
    the registry entry is removed when the game ends, whatever the path.
    """

    def __init__(
        self,
        key: SessionKey,
        state: GameState,
        registry: SessionRegistry,
        generator: ObjectiveGenerator,
        dictionary: AbstractSet[str],
        transport: GameTransport
    ):
        self.key = key
        self.state = state
        self.registry = registry
        self.generator = generator
        self.dictionary = dictionary
        self.transport = transport
        self.winner = None
        self.rounds = 0

    async def run(self) -> GameOutcome:
        """Play rounds until the game resolves."""
        logger.info("Session %s running with %d player(s)", self.key, len(self.state.players))
        try:
            outcome = await self._play()
            logger.info("Session %s ended after %d round(s): %s", self.key, self.rounds, outcome.value)
            return outcome
        finally:
            self.state.running = False
            await self.registry.remove(self.key)
            try:
                await self.transport.publish(SessionEnded())
            except Exception:
                # Keep whatever ended the game as the task's error
                logger.exception("Could not announce end of session %s", self.key)

    async def _play(self) -> GameOutcome:
        while True:
            if not self.state.players:
                await self.transport.publish(GameLost())
                return GameOutcome.EVERYONE_ELIMINATED

            self.rounds += 1
            for player in self.state.players:
                if await self.play_turn(player) and player.points >= self.state.target:
                    self.winner = player
                    await self.transport.publish(GameWon(player.user_id, player.points))
                    return GameOutcome.WON

            self.state.players = await self._remove_eliminated()
            logger.debug(
                "Session %s after round %d: %s",
                self.key,
                self.rounds,
                [(p.user_id, p.health, p.points) for p in self.state.players]
            )

    async def play_turn(self, player: Player) -> bool:
        """Give a player one timed turn. Returns True if they answered correctly."""
        objective = self.generator.pick(self.state.weights)
        await self.transport.publish(TurnAnnouncement(
            user_id=player.user_id,
            objective=objective,
            health=player.health,
            points=player.points,
            target=self.state.target,
            timeout=self.state.timeout
        ))

        answer = await self.transport.wait_for_answer(
            player.user_id,
            lambda content: is_valid_answer(content, objective, self.dictionary),
            self.state.timeout
        )

        if answer is None:
            player.lose_health()
            await self.transport.publish(TurnFailed(player.user_id, player.health))
            return False

        points = calculate_score(answer, objective)
        player.points += points
        await self.transport.publish(TurnSucceeded(player.user_id, answer, points))
        return True

    async def _remove_eliminated(self) -> List[Player]:
        remaining = []
        for player in self.state.players:
            if player.alive:
                remaining.append(player)
            else:
                await self.transport.publish(PlayerEliminated(player.user_id))
        return remaining
