"""Shared fakes and fixtures for the ChefBot tests."""

from __future__ import annotations

import asyncio
import random
from datetime import datetime
from types import SimpleNamespace

import pytest

from chefbot.core.ai import AIDelegate
from chefbot.core.config import ChefBotSettings
from chefbot.core.models import Caller
from chefbot.core.runtime import BotRuntime


class FakeTransport:
    def __init__(self) -> None:
        self.sent: list[tuple[str, str]] = []
        self.fail = False

    async def send(self, channel: str, text: str) -> None:
        if self.fail:
            raise ConnectionError("transport down")
        self.sent.append((channel, text))

    @property
    def texts(self) -> list[str]:
        return [text for _, text in self.sent]


class FakeClock:
    def __init__(self, start_ms: int = 1_000_000) -> None:
        self.ms = start_ms
        self.wall = datetime(2024, 5, 1, 15, 4, 5)

    def millis(self) -> int:
        return self.ms

    def now(self) -> datetime:
        return self.wall

    def advance(self, ms: int) -> None:
        self.ms += ms


class StubCompletions:
    def __init__(
        self, response=None, error: Exception | None = None, delay: float = 0.0
    ) -> None:
        self.response = response
        self.error = error
        self.delay = delay
        self.calls: list[dict] = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.response


def make_completion(content: str | None):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def make_client(completions: StubCompletions):
    return SimpleNamespace(chat=SimpleNamespace(completions=completions))


def make_settings(**overrides) -> ChefBotSettings:
    values = {
        "client_id": "client-id",
        "client_secret": "client-secret",
        "bot_id": "999",
        "channel_name": "chefchannel",
        "authorized_users": "bob, Carol",
        "discord_invite": "https://discord.gg/chef",
        "twitter_handle": "@chef",
        "youtube_channel": "youtube.com/@chef",
        "groq_api_key": "",
        "autopost_interval": 600.0,
        "shutdown_grace_seconds": 0.0,
    }
    values.update(overrides)
    return ChefBotSettings(_env_file=None, **values)  # type: ignore[call-arg]


ALICE = Caller("alice")
MOD = Caller("mallory", is_moderator=True)
STREAMER = Caller("chefchannel", is_broadcaster=True)
ADMIN = Caller("bob")


@pytest.fixture
def settings() -> ChefBotSettings:
    return make_settings()


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def completions() -> StubCompletions:
    return StubCompletions(response=make_completion("Season the pan first."))


@pytest.fixture
def terminations() -> list[bool]:
    return []


@pytest.fixture
def runtime(settings, transport, clock, completions, terminations) -> BotRuntime:
    ai = AIDelegate(
        "test-key", "test-model", settings.channel_name, client=make_client(completions)
    )

    async def terminate() -> None:
        terminations.append(True)

    rt = BotRuntime(
        settings,
        transport,
        clock=clock,
        rng=random.Random(1234),
        ai=ai,
        terminate=terminate,
    )
    rt.load_components()
    return rt
