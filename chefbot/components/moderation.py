"""Moderator commands.

These only build directive strings; Twitch carries out the action.

Usage:
    !timeout <user> [seconds]   Timeout (default 60s)
    !ban <user> [reason]        Ban
    !unban <user>               Unban
    !clear                      Clear chat
    !modhelp                    List moderator commands
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from chefbot.core.guards import PermissionTier
from chefbot.core.models import Caller, Directive, Outcome, Reply
from chefbot.core.registry import Component, command

if TYPE_CHECKING:
    from chefbot.core.runtime import BotRuntime

LOGGER = logging.getLogger("ModerationCommands")

DEFAULT_TIMEOUT_SECONDS = 60


def _target(args: list[str]) -> str:
    return args[0].replace("@", "") if args else ""


class ModerationCommands(Component):
    tier = PermissionTier.MODERATOR

    @command("timeout")
    def timeout(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        target = _target(args)
        if not target:
            return Reply(f"❌ @{caller.username}, usage: !timeout <username> [seconds]")

        seconds = DEFAULT_TIMEOUT_SECONDS
        if len(args) > 1:
            try:
                requested = int(args[1])
            except ValueError:
                requested = 0
            if requested > 0:
                seconds = requested

        LOGGER.info(f"Timeout ({seconds}s) issued by {caller.username} on {target}")
        return Directive.timeout(target, seconds)

    @command("clear")
    def clear(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        LOGGER.info(f"Chat clear issued by {caller.username}")
        return Directive.clear()

    @command("ban")
    def ban(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        target = _target(args)
        if not target:
            return Reply(f"❌ @{caller.username}, usage: !ban <username> [reason]")

        reason = " ".join(args[1:]) or "No reason provided"
        LOGGER.info(f"Ban executed by {caller.username} on {target}. Reason: {reason}")
        return Directive.ban(target, reason)

    @command("unban")
    def unban(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        target = _target(args)
        if not target:
            return Reply(f"❌ @{caller.username}, usage: !unban <username>")

        LOGGER.info(f"Unban executed by {caller.username} on {target}")
        return Directive.unban(target)

    @command("modhelp")
    def modhelp(self, channel: str, caller: Caller, args: list[str]) -> Outcome:
        tokens = self.runtime.registry.tokens(PermissionTier.MODERATOR)
        return Reply(f"🛡️ Mod commands: {', '.join(tokens)}")


def setup(runtime: BotRuntime) -> None:
    runtime.registry.add_component(ModerationCommands(runtime))
