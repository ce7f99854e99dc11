"""Admin-only commands for bot management.

Usage:
    !shutdown                 Stop the bot (exit code 0)
    !restart                  Stop the bot with exit code 1 so a supervisor restarts it
    !autopost [on|off]        Toggle the socials auto-poster; no argument shows status
    !autopost-status          Show auto-poster status
    !adminhelp                List admin commands
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chefbot.core.guards import PermissionTier
from chefbot.core.models import Caller, Outcome, Reply
from chefbot.core.registry import Component, command
from chefbot.core.runtime import EXIT_RESTART, EXIT_SHUTDOWN

if TYPE_CHECKING:
    from chefbot.core.runtime import BotRuntime

LOGGER = logging.getLogger("AdminCommands")

_ON = {"on", "enable"}
_OFF = {"off", "disable"}


class AdminCommands(Component):
    tier = PermissionTier.ADMIN

    def _interval_minutes(self) -> str:
        return f"{self.runtime.autoposter.interval / 60:g}"

    @command("shutdown")
    async def shutdown(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        """Gracefully shutdown the bot."""
        LOGGER.info(f"Bot shutdown initiated by: {caller.username}")
        await self.runtime.send(channel, f"🔧 Bot shutting down by admin @{caller.username}...")
        self.runtime.request_termination(EXIT_SHUTDOWN)
        return None

    @command("restart")
    async def restart(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        LOGGER.info(f"Bot restart initiated by: {caller.username}")
        await self.runtime.send(channel, f"🔄 Bot restarting by admin @{caller.username}...")
        self.runtime.request_termination(EXIT_RESTART)
        return None

    @command("autopost")
    def autopost(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        poster = self.runtime.autoposter
        if not args:
            state = "enabled" if poster.enabled else "disabled"
            return Reply(f"🔧 Auto-posting is currently {state}. Use !autopost on/off")

        action = args[0].lower()
        if action in _ON:
            poster.start(channel)
            return Reply(
                f"✅ Auto-posting socials enabled! Will post every {self._interval_minutes()} "
                "minutes."
            )
        if action in _OFF:
            poster.stop()
            return Reply("❌ Auto-posting socials disabled.")
        return Reply("❓ Usage: !autopost on/off")

    @command("autopost-status")
    def autopost_status(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        if self.runtime.autoposter.enabled:
            status = f"✅ Enabled (every {self._interval_minutes()} minutes)"
        else:
            status = "❌ Disabled"
        return Reply(f"📊 Auto-posting status: {status}")

    @command("adminhelp")
    def adminhelp(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        tokens = self.runtime.registry.tokens(PermissionTier.ADMIN)
        return Reply(f"🔧 Admin commands: {', '.join(tokens)}")


def setup(runtime: BotRuntime) -> None:
    """Entry point for the module."""
    runtime.registry.add_component(AdminCommands(runtime))
