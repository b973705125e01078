"""Shared fixtures for bomb party tests."""

import asyncio
import random
from types import SimpleNamespace
from typing import Callable, Dict, List, Optional

import pytest

from game.objectives import ObjectiveGenerator
from game.session_manager import SessionRegistry
from game.session import SessionKey

DICTIONARY = frozenset({"banana", "bandana", "ant", "xylophone", "station"})


class FakeTransport:
    """Records published events and replays scripted answers.

    ``scripts`` maps a user id to one list of messages per turn; a turn with
    no accepted message counts as a timeout.
    """

    def __init__(self, scripts: Optional[Dict[int, List[List[str]]]] = None):
        self.scripts = {user_id: list(turns) for user_id, turns in (scripts or {}).items()}
        self.events = []
        self.waits = []

    async def publish(self, event) -> None:
        self.events.append(event)

    async def wait_for_answer(self, user_id: int, predicate: Callable[[str], bool], timeout: float):
        self.waits.append((user_id, timeout))
        turns = self.scripts.get(user_id)
        messages = turns.pop(0) if turns else []
        for content in messages:
            if predicate(content):
                return content
        return None

    def of_type(self, event_type):
        return [e for e in self.events if isinstance(e, event_type)]


@pytest.fixture
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture
def key() -> SessionKey:
    return SessionKey(guild_id=1234, channel_id=5678)


@pytest.fixture
def generator() -> ObjectiveGenerator:
    return ObjectiveGenerator(("an",), ("xyz",), ("tion",), rng=random.Random(7))


def message(author_id: int, channel_id: int, content: str):
    return SimpleNamespace(
        author=SimpleNamespace(id=author_id),
        channel=SimpleNamespace(id=channel_id),
        content=content
    )


class FakeBot:
    """Replays queued messages through ``wait_for`` checks."""

    def __init__(self, messages=()):
        self.messages = list(messages)
        self.timeouts = []

    async def wait_for(self, event, check, timeout):
        assert event == 'message'
        self.timeouts.append(timeout)
        for msg in self.messages:
            if check(msg):
                return msg
        raise asyncio.TimeoutError()

    def get_user(self, user_id):
        return None


class FakeChannel:
    def __init__(self, channel_id: int = 10):
        self.id = channel_id
        self.guild = None
        self.sent = []

    async def send(self, content=None, embed=None):
        self.sent.append((content, embed))
