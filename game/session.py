"""Game session data structures."""

from dataclasses import dataclass, field
from typing import List, NamedTuple, Tuple

import config


class SessionKey(NamedTuple):
    """Identifies the one session a guild channel can host."""
    guild_id: int
    channel_id: int


@dataclass(eq=False)
class Player:
    """A player in a bomb party session.

    Equality only looks at ``user_id`` so membership checks keep working
    while health and points change.
    """
    user_id: int
    health: int = config.DEFAULT_HEALTH
    points: int = 0

    def __eq__(self, other):
        if not isinstance(other, Player):
            return NotImplemented
        return self.user_id == other.user_id

    def __hash__(self):
        return hash(self.user_id)

    @property
    def alive(self) -> bool:
        return self.health > 0

    def lose_health(self) -> None:
        """Take one health away, never going below zero."""
        self.health = max(0, self.health - 1)


@dataclass
class GameState:
    """Represents a bomb party session in a channel."""
    players: List[Player] = field(default_factory=list)

    # False while the session accepts joins and configuration
    running: bool = False

    target: int = config.DEFAULT_TARGET
    timeout: int = config.DEFAULT_TIMEOUT
    weights: Tuple[int, int, int] = config.DEFAULT_WEIGHTS

    def has_player(self, user_id: int) -> bool:
        return any(p.user_id == user_id for p in self.players)
