"""Tests for the session registry."""

import asyncio

import pytest

from game.session import GameState, Player, SessionKey
from game.session_manager import SessionRegistry, SessionStatus
import config


class TestPlayer:
    def test_equality_by_identity(self) -> None:
        assert Player(1, health=2, points=10) == Player(1)
        assert Player(1) != Player(2)

    def test_health_never_negative(self) -> None:
        player = Player(1, health=1)
        player.lose_health()
        player.lose_health()
        assert player.health == 0
        assert not player.alive

    def test_defaults(self) -> None:
        state = GameState()
        assert state.target == 30
        assert state.timeout == 15
        assert state.weights == (15, 70, 15)
        assert Player(1).health == 5
        assert Player(1).points == 0


@pytest.mark.asyncio
class TestSessionRegistry:
    async def test_create(self, registry: SessionRegistry, key: SessionKey) -> None:
        assert await registry.create(key, Player(1)) == SessionStatus.CREATED
        status, state = await registry.get_info(key)
        assert status == SessionStatus.INFO
        assert state.players == [Player(1)]
        assert state.running is False

    async def test_create_existing_leaves_entry_untouched(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        await registry.set_target(key, 50)

        assert await registry.create(key, Player(2)) == SessionStatus.ALREADY_EXISTS
        _, state = await registry.get_info(key)
        assert state.players == [Player(1)]
        assert state.target == 50

    async def test_keys_are_independent(self, registry: SessionRegistry, key: SessionKey) -> None:
        other = SessionKey(key.guild_id, key.channel_id + 1)
        assert await registry.create(key, Player(1)) == SessionStatus.CREATED
        assert await registry.create(other, Player(1)) == SessionStatus.CREATED
        assert len(registry) == 2

    async def test_join(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        assert await registry.join(key, Player(2)) == SessionStatus.JOINED
        assert await registry.join(key, Player(2)) == SessionStatus.ALREADY_JOINED
        assert await registry.join(key, Player(1)) == SessionStatus.ALREADY_JOINED

        _, state = await registry.get_info(key)
        assert [p.user_id for p in state.players] == [1, 2]

    async def test_join_without_session(self, registry: SessionRegistry, key: SessionKey) -> None:
        assert await registry.join(key, Player(1)) == SessionStatus.NO_SESSION

    async def test_configuration(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        assert await registry.set_target(key, 10) == SessionStatus.CONFIG_UPDATED
        assert await registry.set_timeout(key, 20) == SessionStatus.CONFIG_UPDATED
        assert await registry.set_weights(key, [1, 2, 3]) == SessionStatus.CONFIG_UPDATED

        _, state = await registry.get_info(key)
        assert (state.target, state.timeout, state.weights) == (10, 20, (1, 2, 3))

    async def test_configuration_without_session(self, registry: SessionRegistry, key: SessionKey) -> None:
        assert await registry.set_target(key, 10) == SessionStatus.NO_SESSION
        assert await registry.set_timeout(key, 10) == SessionStatus.NO_SESSION
        assert await registry.set_weights(key, (1, 1, 1)) == SessionStatus.NO_SESSION

    async def test_timeout_bound(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        assert await registry.set_timeout(key, config.MAX_TIMEOUT + 1) == SessionStatus.TIMEOUT_TOO_LONG
        assert await registry.set_timeout(key, config.MAX_TIMEOUT) == SessionStatus.CONFIG_UPDATED

    async def test_invalid_weights(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        assert await registry.set_weights(key, (0, 0, 0)) == SessionStatus.INVALID_WEIGHTS
        assert await registry.set_weights(key, (1, -1, 0)) == SessionStatus.INVALID_WEIGHTS
        _, state = await registry.get_info(key)
        assert state.weights == config.DEFAULT_WEIGHTS

    async def test_try_start_hands_over_state(self, registry: SessionRegistry, key: SessionKey) -> None:
        assert await registry.try_start(key) == (SessionStatus.NO_SESSION, None)

        await registry.create(key, Player(1))
        status, state = await registry.try_start(key)
        assert status == SessionStatus.STARTED
        assert state.running is True
        assert await registry.try_start(key) == (SessionStatus.ALREADY_RUNNING, None)

    async def test_running_session_rejects_changes(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        _, state = await registry.try_start(key)

        assert await registry.join(key, Player(2)) == SessionStatus.ALREADY_RUNNING
        assert await registry.set_target(key, 1) == SessionStatus.ALREADY_RUNNING
        assert await registry.set_timeout(key, 1) == SessionStatus.ALREADY_RUNNING
        assert await registry.set_weights(key, (1, 0, 0)) == SessionStatus.ALREADY_RUNNING
        assert await registry.create(key, Player(2)) == SessionStatus.ALREADY_EXISTS
        assert state.players == [Player(1)]
        assert state.target == config.DEFAULT_TARGET

    async def test_concurrent_start_only_one_wins(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        results = await asyncio.gather(*(registry.try_start(key) for _ in range(10)))
        statuses = [status for status, _ in results]
        assert statuses.count(SessionStatus.STARTED) == 1
        assert statuses.count(SessionStatus.ALREADY_RUNNING) == 9

    async def test_concurrent_create_only_one_wins(self, registry: SessionRegistry, key: SessionKey) -> None:
        results = await asyncio.gather(*(registry.create(key, Player(i)) for i in range(10)))
        assert results.count(SessionStatus.CREATED) == 1
        assert len(registry) == 1

    async def test_remove_allows_new_session(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        await registry.try_start(key)
        removed = await registry.remove(key)

        assert removed.players == [Player(1)]
        assert not await registry.exists(key)
        assert await registry.create(key, Player(2)) == SessionStatus.CREATED

    async def test_remove_missing_key(self, registry: SessionRegistry, key: SessionKey) -> None:
        assert await registry.remove(key) is None

    async def test_info_is_a_snapshot(self, registry: SessionRegistry, key: SessionKey) -> None:
        await registry.create(key, Player(1))
        _, snapshot = await registry.get_info(key)
        snapshot.players.append(Player(2))
        snapshot.players[0].points = 99

        _, state = await registry.get_info(key)
        assert state.players == [Player(1)]
        assert state.players[0].points == 0
