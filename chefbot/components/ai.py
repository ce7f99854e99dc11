"""Chef AI commands: !chefbot for chatters, toggle/status for admins."""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING

from chefbot.core.guards import PermissionTier
from chefbot.core.models import Caller, Outcome, Reply
from chefbot.core.registry import Component, command

if TYPE_CHECKING:
    from chefbot.core.runtime import BotRuntime

LOGGER: logging.Logger = logging.getLogger("AIComponent")

_ON = {"on", "enable"}
_OFF = {"off", "disable"}


class AIComponent(Component):
    tier = PermissionTier.EVERYONE

    @command("chefbot")
    async def chefbot(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Ask Lil Chef a question.

        Usage:
            !chefbot <question>
        """
        user = caller.username
        if not self.runtime.ai_enabled:
            return Reply(
                "🤖 Chef AI chat is currently disabled. Admins can enable it with !ai-toggle"
            )

        if not args:
            return Reply(
                f"👨🏻‍🍳 @{user}, ask me something, LET ME COOK! Usage: !chefbot <your question>"
            )

        now = self.runtime.clock.millis()
        remaining = self.runtime.ai_cooldown.try_acquire(user, now)
        if remaining:
            seconds = math.ceil(remaining / 1000)
            return Reply(f"⏱️ @{user}, please wait {seconds} seconds before asking again.")

        question = " ".join(args)
        LOGGER.info(f"AI request from {user}: {question}")
        return Reply(await self.runtime.ai.ask(question, user))

    @command("ai-toggle", tier=PermissionTier.ADMIN)
    def ai_toggle(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Flip the AI feature, or set it with !ai-toggle on|off."""
        action = args[0].lower() if args else ""
        if action in _ON:
            self.runtime.ai_enabled = True
        elif action in _OFF:
            self.runtime.ai_enabled = False
        else:
            self.runtime.ai_enabled = not self.runtime.ai_enabled

        enabled = self.runtime.ai_enabled
        LOGGER.info(f"AI chat {'enabled' if enabled else 'disabled'} by: {caller.username}")
        if enabled:
            return Reply("👨🏻‍🍳 Chef AI chat enabled! Chatters can now use !chefbot <question>")
        return Reply(
            "👨🏻‍🍳 Chef AI chat disabled! Chef AI commands are now disabled and no longer cooking."
        )

    @command("ai-status", tier=PermissionTier.ADMIN)
    def ai_status(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        api_status = "✅ API key configured" if self.runtime.ai.configured else "❌ No API key"
        state = "Enabled" if self.runtime.ai_enabled else "Disabled"
        return Reply(f"👨🏻‍🍳 Chef AI Status: {state} | {api_status}")


def setup(runtime: BotRuntime) -> None:
    runtime.registry.add_component(AIComponent(runtime))
