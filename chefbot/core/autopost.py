"""Background poster: periodically sends the socials message while enabled."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

LOGGER = logging.getLogger("AutoPoster")


class AutoPoster:
    """Single recurring task, toggled by the admin !autopost command.

    The first post happens one interval after start(), never immediately.
    start() always cancels the previous task first, so at most one task runs.
    """

    def __init__(
        self,
        send: Callable[[str, str], Awaitable[None]],
        message_factory: Callable[[], str],
        interval: float = 600.0,
    ) -> None:
        self._send = send
        self._message_factory = message_factory
        self.interval = interval
        self.enabled = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, channel: str) -> None:
        self._cancel()
        self.enabled = True
        self._task = asyncio.create_task(self._post_loop(channel))
        LOGGER.info(f"Auto-posting socials enabled (every {self.interval / 60:g} minutes)")

    def stop(self) -> None:
        self._cancel()
        self.enabled = False
        LOGGER.info("Auto-posting socials disabled")

    def _cancel(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None

    async def _post_loop(self, channel: str) -> None:
        while True:
            await asyncio.sleep(self.interval)
            if not self.enabled:
                continue
            await self._send(channel, self._message_factory())
            LOGGER.info(f"Auto-posted socials message to #{channel}")
