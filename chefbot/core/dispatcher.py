"""Dispatcher: turns a raw chat line into at most one reply."""

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from .guards import PermissionEvaluator, PermissionTier
from .models import Caller, Outcome
from .registry import CommandRegistry

LOGGER: logging.Logger = logging.getLogger("Dispatcher")

SendFunc = Callable[[str, str], Awaitable[None]]


def parse_message(raw: str) -> tuple[str, list[str]] | None:
    """Split a chat line into (lowercased token, args). None for blank lines."""
    parts = raw.split()
    if not parts:
        return None
    return parts[0].lower(), parts[1:]


class Dispatcher:
    def __init__(
        self,
        registry: CommandRegistry,
        permissions: PermissionEvaluator,
        send: SendFunc,
    ) -> None:
        self.registry = registry
        self.permissions = permissions
        self._send = send

    async def handle(
        self, channel: str, caller: Caller, raw: str, *, is_self: bool = False
    ) -> None:
        # Never respond to the bot's own messages
        if is_self:
            return

        parsed = parse_message(raw)
        if parsed is None:
            return
        token, args = parsed

        cmd = self.registry.resolve(token)
        if cmd is None:
            return

        if not self.permissions.allows(caller, cmd.tier):
            LOGGER.info(
                f"[DENY] {caller.username} lacks {cmd.tier.label} privileges for {token}"
            )
            await self._send(
                channel, f"❌ @{caller.username}, {cmd.tier.label} privileges required for {token}"
            )
            return

        try:
            result = cmd.handler(channel, caller, args)
            outcome: Outcome = await result if inspect.isawaitable(result) else result
        except Exception as e:
            LOGGER.exception(f"Error executing command {token} for {caller.username}: {e}")
            await self._send(
                channel, f"❌ Sorry @{caller.username}, something went wrong with that command."
            )
            return

        if cmd.tier > PermissionTier.EVERYONE:
            LOGGER.info(
                f"{cmd.tier.label.capitalize()} command {token} executed by: {caller.username}"
            )
        else:
            LOGGER.debug(f"Command {token} executed by: {caller.username}")

        if outcome is not None:
            await self._send(channel, outcome.text)
