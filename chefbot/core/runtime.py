"""Runtime context: owns every piece of mutable bot state."""

from __future__ import annotations

import asyncio
import importlib
import logging
import random
from collections.abc import Awaitable, Callable
from typing import Protocol

from .ai import AIDelegate
from .autopost import AutoPoster
from .clock import Clock, SystemClock
from .config import COMPONENT_MODULES, ChefBotSettings
from .dispatcher import Dispatcher
from .guards import CooldownTracker, PermissionEvaluator
from .registry import CommandRegistry

LOGGER: logging.Logger = logging.getLogger("Runtime")

DISCORD_COOLDOWN_MS = 30_000
AI_COOLDOWN_MS = 10_000

EXIT_SHUTDOWN = 0
EXIT_RESTART = 1


class Transport(Protocol):
    async def send(self, channel: str, text: str) -> None: ...


def format_socials(settings: ChefBotSettings) -> str:
    parts = []
    if settings.discord_invite:
        parts.append(f"Discord: {settings.discord_invite}")
    if settings.twitter_handle:
        parts.append(f"Twitter: {settings.twitter_handle}")
    parts.append("Follow the stream! 🎯")
    if settings.youtube_channel:
        parts.append(f"Youtube: {settings.youtube_channel}")
    return "🔗 Follow us! " + " | ".join(parts)


class BotRuntime:
    """Constructed once at startup, torn down by request_termination()."""

    def __init__(
        self,
        settings: ChefBotSettings,
        transport: Transport,
        *,
        clock: Clock | None = None,
        rng: random.Random | None = None,
        ai: AIDelegate | None = None,
        terminate: Callable[[], Awaitable[None]] | None = None,
    ) -> None:
        self.settings = settings
        self.transport = transport
        self.clock: Clock = clock or SystemClock()
        self.random = rng or random.Random()
        self.started_at_ms = self.clock.millis()

        self.permissions = PermissionEvaluator(settings.admin_users)
        self.registry = CommandRegistry()
        self.dispatcher = Dispatcher(self.registry, self.permissions, self.send)

        self.discord_cooldown = CooldownTracker(DISCORD_COOLDOWN_MS)
        self.ai_cooldown = CooldownTracker(AI_COOLDOWN_MS)

        self.ai_enabled = True
        self.ai = ai or AIDelegate(
            settings.groq_api_key,
            settings.groq_model,
            settings.channel_name,
            base_url=settings.groq_base_url,
            timeout=settings.ai_timeout,
        )

        self.autoposter = AutoPoster(
            self.send,
            lambda: format_socials(self.settings),
            interval=settings.autopost_interval,
        )

        self._terminate = terminate
        self._termination_task: asyncio.Task | None = None
        self.exit_code: int | None = None

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def load_components(self, modules: list[str] | None = None) -> None:
        for module_name in modules or COMPONENT_MODULES:
            try:
                module = importlib.import_module(module_name)
                module.setup(self)
            except Exception as e:
                LOGGER.exception(f"Failed to load component {module_name}: {e}")

    # ------------------------------------------------------------------
    # Outbound
    # ------------------------------------------------------------------

    async def send(self, channel: str, text: str) -> None:
        """Send through the transport. Failures are logged, never retried."""
        try:
            await self.transport.send(channel, text)
        except Exception as e:
            LOGGER.error(f"Failed to send message to #{channel}: {type(e).__name__}: {e}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def uptime_ms(self) -> int:
        return self.clock.millis() - self.started_at_ms

    def request_termination(self, exit_code: int) -> None:
        """Stop background work and terminate after the grace period.

        Call only after the farewell message has been sent.
        """
        if self._termination_task is not None and not self._termination_task.done():
            LOGGER.info(f"Termination already pending (exit code {self.exit_code})")
            return

        self.exit_code = exit_code
        self.autoposter.stop()
        self._termination_task = asyncio.create_task(self._delayed_terminate())

    async def _delayed_terminate(self) -> None:
        await asyncio.sleep(self.settings.shutdown_grace_seconds)
        if self._terminate is None:
            LOGGER.warning("No terminate callback configured; ignoring shutdown request")
            return
        LOGGER.info(f"Terminating with exit code {self.exit_code}")
        await self._terminate()
