"""Events emitted by a bomb party session and the transport they go through."""

from dataclasses import dataclass
from typing import Callable, Optional, Protocol, Tuple, Union


@dataclass(frozen=True)
class SessionCreated:
    user_id: int


@dataclass(frozen=True)
class SessionAlreadyExists:
    pass


@dataclass(frozen=True)
class PlayerJoined:
    user_id: int


@dataclass(frozen=True)
class PlayerAlreadyJoined:
    user_id: int


@dataclass(frozen=True)
class NoSessionError:
    pass


@dataclass(frozen=True)
class ConfigUpdated:
    setting: str
    value: Union[int, Tuple[int, ...]]


@dataclass(frozen=True)
class SessionAlreadyRunning:
    pass


@dataclass(frozen=True)
class TurnAnnouncement:
    user_id: int
    objective: str
    health: int
    points: int
    target: int
    timeout: int


@dataclass(frozen=True)
class TurnSucceeded:
    user_id: int
    answer: str
    points_awarded: int


@dataclass(frozen=True)
class TurnFailed:
    user_id: int
    health: int


@dataclass(frozen=True)
class PlayerEliminated:
    user_id: int


@dataclass(frozen=True)
class GameWon:
    user_id: int
    points: int


@dataclass(frozen=True)
class GameLost:
    """Everyone ran out of health."""


@dataclass(frozen=True)
class SessionEnded:
    pass


GameEvent = Union[
    SessionCreated,
    SessionAlreadyExists,
    PlayerJoined,
    PlayerAlreadyJoined,
    NoSessionError,
    ConfigUpdated,
    SessionAlreadyRunning,
    TurnAnnouncement,
    TurnSucceeded,
    TurnFailed,
    PlayerEliminated,
    GameWon,
    GameLost,
    SessionEnded,
]


class GameTransport(Protocol):
    """Where a running session sends its events and reads answers from."""

    async def publish(self, event: GameEvent) -> None:
        ...

    async def wait_for_answer(
        self,
        user_id: int,
        predicate: Callable[[str], bool],
        timeout: float
    ) -> Optional[str]:
        """Return the first message from ``user_id`` accepted by ``predicate``.

        Returns None once ``timeout`` seconds have passed without one. The
        deadline is not extended by rejected messages.
        """
        ...
